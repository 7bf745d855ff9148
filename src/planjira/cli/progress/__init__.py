"""CLI progress displays."""

from planjira.cli.progress.rich import RichImportProgress

__all__ = ["RichImportProgress"]
