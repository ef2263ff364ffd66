from __future__ import annotations

import math
import re
import unicodedata
import warnings
from datetime import date, datetime
from typing import Any

import pandas as pd

from ..models.tabular import cell_text, is_blank

"""Text, date and file-name normalization shared by all validators.

Every function here is pure. ``normalize_for_comparison`` is the only key used
to match file names between the register, the deliverables folder and the
title-block export; use it on both sides of every comparison.
"""

__all__ = [
    "normalize_text",
    "normalize_date",
    "strip_extension",
    "normalize_for_comparison",
    "round_half_up",
    "percentage",
    "MONTH_ABBREVIATIONS",
]

MONTH_ABBREVIATIONS = {
    "JAN": 1, "FEB": 2, "MAR": 3, "APR": 4, "MAY": 5, "JUN": 6,
    "JUL": 7, "AUG": 8, "SEP": 9, "OCT": 10, "NOV": 11, "DEC": 12,
}

# dd.mm.yyyy, dd/mm/yyyy, dd.MON.yyyy, dd/mm/yy
_KNOWN_DATE_PATTERNS = (
    re.compile(r"^(\d{2})\.(\d{2})\.(\d{4})$"),
    re.compile(r"^(\d{2})/(\d{2})/(\d{4})$"),
    re.compile(r"^(\d{2})\.(\w{3})\.(\d{4})$"),
    re.compile(r"^(\d{2})/(\d{2})/(\d{2})$"),
)

_WHITESPACE = re.compile(r"\s+")


def _format_date(value: date) -> str:
    return f"{value.day:02d}/{value.month:02d}/{value.year:04d}"


def normalize_text(value: Any) -> str:
    """Trim, collapse whitespace runs and upper-case string values.

    Blank cells give ``""``; other non-string values are stringified as-is.
    """
    if isinstance(value, str):
        return _WHITESPACE.sub(" ", value.strip()).upper()
    return cell_text(value)


def _parse_known_format(text: str) -> str | None:
    for pattern in _KNOWN_DATE_PATTERNS:
        m = pattern.match(text)
        if m is None:
            continue
        day_s, month_s, year_s = m.groups()
        if month_s.isdigit():
            month = int(month_s)
        else:
            month = MONTH_ABBREVIATIONS.get(month_s.upper())
            if month is None:
                return None
        if len(year_s) == 2:
            # same pivot as strptime's %y
            year = datetime.strptime(year_s, "%y").year
        else:
            year = int(year_s)
        try:
            return _format_date(date(year, month, int(day_s)))
        except ValueError:
            return None
    return None


def _parse_generic(text: str) -> str | None:
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        try:
            parsed = pd.to_datetime(text, dayfirst=True, errors="coerce")
        except (ValueError, OverflowError, TypeError):
            return None
    if parsed is None or pd.isna(parsed):
        return None
    # dateutil fills a missing year with 1
    if parsed.year < 1000:
        return None
    return _format_date(parsed)


def normalize_date(value: Any) -> str:
    """Canonicalize a date cell to ``dd/mm/yyyy``.

    Known literal formats are parsed explicitly; anything else goes through
    pandas' day-first parser. Unparseable values come back trimmed but
    otherwise unchanged, so this never raises.
    """
    if isinstance(value, (datetime, date)):
        if pd.isna(value):  # NaT
            return ""
        return _format_date(value)
    if not isinstance(value, str):
        return cell_text(value)

    text = value.strip()
    if not text:
        return ""

    known = _parse_known_format(text)
    if known is not None:
        return known
    generic = _parse_generic(text)
    if generic is not None:
        return generic
    return text


def strip_extension(name: str) -> str:
    """Drop everything from the last ``.`` onwards (no-op without a dot)."""
    dot = name.rfind(".")
    if dot == -1:
        return name
    return name[:dot]


def normalize_for_comparison(name: Any) -> str:
    """Matching key for file names.

    extension stripped -> lower-case -> NFC -> whitespace collapsed -> trimmed
    """
    text = name if isinstance(name, str) else cell_text(name)
    text = strip_extension(text).lower()
    text = unicodedata.normalize("NFC", text)
    return _WHITESPACE.sub(" ", text).strip()


def round_half_up(value: float, digits: int = 2) -> float:
    """Round like JavaScript's ``Math.round(v * 10**d) / 10**d``."""
    if is_blank(value) or math.isinf(value):
        return 0.0
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def percentage(part: int, total: int) -> float:
    """``part / total * 100`` rounded to 2 decimals; 0 when ``total`` is 0."""
    if total <= 0:
        return 0.0
    return round_half_up(part / total * 100, 2)
