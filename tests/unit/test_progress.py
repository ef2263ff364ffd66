from __future__ import annotations

from unittest.mock import Mock, patch

from drawing_qc.services.progress import ProgressTracker, is_tty_enabled


def test_is_tty_enabled_returns_stdout_isatty():
    """Test that is_tty_enabled returns sys.stdout.isatty()."""
    with patch('sys.stdout.isatty', return_value=True):
        assert is_tty_enabled() is True

    with patch('sys.stdout.isatty', return_value=False):
        assert is_tty_enabled() is False


class TestProgressTracker:
    """Test cases for ProgressTracker class."""

    def test_init_with_tty_enabled(self):
        with patch('drawing_qc.services.progress.is_tty_enabled', return_value=True), \
             patch('drawing_qc.services.progress.tqdm') as mock_tqdm:

            tracker = ProgressTracker(5, description="Checking names")

            assert tracker.total == 5
            assert tracker.current == 0
            assert tracker.enabled is True
            mock_tqdm.assert_called_once_with(
                total=5,
                desc="Checking names",
                unit="file",
                disable=False,
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )

    def test_init_with_tty_disabled(self):
        with patch('drawing_qc.services.progress.is_tty_enabled', return_value=False):
            tracker = ProgressTracker(5)

            assert tracker.enabled is False
            assert tracker.pbar is None

    def test_advance_with_tty_enabled(self):
        mock_pbar = Mock()

        with patch('drawing_qc.services.progress.is_tty_enabled', return_value=True), \
             patch('drawing_qc.services.progress.tqdm', return_value=mock_pbar):

            tracker = ProgressTracker(3, description="Checking names")
            tracker.advance("ABC-DEF-001.pdf")

            assert tracker.current == 1
            mock_pbar.set_description.assert_called_once_with("Checking names (ABC-DEF-001.pdf)")
            mock_pbar.update.assert_called_once_with(1)

    def test_advance_with_tty_disabled(self):
        with patch('drawing_qc.services.progress.is_tty_enabled', return_value=False):
            tracker = ProgressTracker(3)
            tracker.advance("x.pdf")
            tracker.advance()

            assert tracker.current == 2

    def test_set_postfix_with_tty_enabled(self):
        mock_pbar = Mock()

        with patch('drawing_qc.services.progress.is_tty_enabled', return_value=True), \
             patch('drawing_qc.services.progress.tqdm', return_value=mock_pbar):

            tracker = ProgressTracker(3)
            tracker.set_postfix(invalid=1)

            mock_pbar.set_postfix.assert_called_once_with(invalid=1)

    def test_context_manager_closes_bar(self):
        mock_pbar = Mock()

        with patch('drawing_qc.services.progress.is_tty_enabled', return_value=True), \
             patch('drawing_qc.services.progress.tqdm', return_value=mock_pbar):

            with ProgressTracker(1) as tracker:
                tracker.advance()

            mock_pbar.close.assert_called_once()
            assert tracker.pbar is None
