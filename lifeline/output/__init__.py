"""Output formatting for the command-line interface."""

from .formatter import format_snapshot, format_validation_result

__all__ = ["format_snapshot", "format_validation_result"]
