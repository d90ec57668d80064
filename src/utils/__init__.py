"""Presentation helpers."""

from src.utils.formatting import format_currency, format_percent

__all__ = ["format_currency", "format_percent"]
