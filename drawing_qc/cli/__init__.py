"""Command-line interface (``python -m drawing_qc.cli``)."""
