"""Kernel config verification framework."""

from .runner import Kcheck, KcheckBuilder, perform_check, summarize
from .types import CheckResult, CheckStatus

__all__ = [
    "CheckResult",
    "CheckStatus",
    "Kcheck",
    "KcheckBuilder",
    "perform_check",
    "summarize",
]
