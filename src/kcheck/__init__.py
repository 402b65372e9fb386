"""Check a kernel's configuration against required option states."""

from .config import KcheckConfig, KcheckConfigBuilder, KcheckConfigFragment
from .errors import KcheckError
from .kconfig import KconfigOption, KconfigState, StateKind
from .kernel import KernelConfig, KernelConfigBuilder
from .verify import CheckResult, CheckStatus, Kcheck, KcheckBuilder, perform_check

__all__ = [
    "CheckResult",
    "CheckStatus",
    "Kcheck",
    "KcheckBuilder",
    "KcheckConfig",
    "KcheckConfigBuilder",
    "KcheckConfigFragment",
    "KcheckError",
    "KconfigOption",
    "KconfigState",
    "KernelConfig",
    "KernelConfigBuilder",
    "perform_check",
    "StateKind",
]
