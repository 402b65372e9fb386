"""Verification check types."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from kcheck.kconfig import KconfigState


class CheckStatus(Enum):
    """Outcome of a kernel option check."""

    PASS = "pass"
    FAIL = "fail"

    @classmethod
    def from_bool(cls, passed: bool) -> "CheckStatus":
        return cls.PASS if passed else cls.FAIL


@dataclass(frozen=True)
class CheckResult:
    """Result of checking one kernel option against its desired state."""

    name: str
    desired: KconfigState
    observed: KconfigState
    status: CheckStatus

    @property
    def passed(self) -> bool:
        return self.status == CheckStatus.PASS

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "desired": self.desired.to_raw(),
            "observed": self.observed.to_raw(),
            "status": self.status.value,
        }
