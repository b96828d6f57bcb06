"""Allow running as python -m batch_resize."""

from batch_resize.cli import app

app()
