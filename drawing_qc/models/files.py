from __future__ import annotations

from dataclasses import dataclass, field

"""File presence models: register entries, files found on disk and the
reconciliation result between the two."""

__all__ = [
    "ExpectedFileEntry",
    "ActualFileEntry",
    "MissingFileResult",
    "MissingFilesValidationSummary",
    "file_extension",
]


def file_extension(name: str) -> str:
    """Lower-cased extension without the dot; ``""`` when there is none."""
    dot = name.rfind(".")
    return "" if dot == -1 else name[dot + 1:].lower()


@dataclass(frozen=True)
class ExpectedFileEntry:
    """A file listed in the register.

    ``register_row`` is the 1-based entry position plus one for the header.
    """
    expected_file: str
    register_row: int


@dataclass(frozen=True)
class ActualFileEntry:
    """A file physically present in the deliverables folder."""
    name: str
    path: str
    extension: str = ""

    @classmethod
    def create(cls, name: str, path: str | None = None) -> ActualFileEntry:
        return cls(name=name, path=path if path is not None else name, extension=file_extension(name))

    @property
    def folder_path(self) -> str:
        """Containing folder of ``path`` (``""`` for files at the root)."""
        slash = self.path.rfind("/")
        return "" if slash == -1 else self.path[:slash]


@dataclass(frozen=True)
class MissingFileResult:
    expected_file: str
    found: bool
    register_row: int
    actual_path: str | None = None


@dataclass(frozen=True)
class MissingFilesValidationSummary:
    total_expected: int
    total_found: int
    missing_count: int
    missing_percentage: float
    missing_files: list[MissingFileResult] = field(default_factory=list)
    extra_files: list[ActualFileEntry] = field(default_factory=list)

    @property
    def presence_compliance(self) -> float:
        """Missing percentage expressed on the 0-100 "good" scale."""
        return 100 - self.missing_percentage
