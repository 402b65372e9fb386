"""Terminal output for check results."""

from .report import render_report

__all__ = ["render_report"]
