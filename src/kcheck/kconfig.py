"""Kernel config option states and the rules for comparing them.

``KconfigState`` extends the kernel's tristate (``y``/``m``/``n``) with
presence information and two virtual states, ``Enabled`` and ``Disabled``,
which only make sense as a *desired* state: a requirement can say that an
option must be built in some form without caring whether it is built in or
built as a module.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

U64_MAX = 2**64 - 1


class StateKind(Enum):
    """Variant tag of a kernel config state."""

    NOT_FOUND = "NotFound"
    NOT_SET = "NotSet"
    OFF = "Off"
    DISABLED = "Disabled"
    ON = "On"
    MODULE = "Module"
    ENABLED = "Enabled"
    VALUE = "Value"
    TEXT = "Text"


PAYLOAD_KINDS = frozenset({StateKind.VALUE, StateKind.TEXT})
VIRTUAL_KINDS = frozenset({StateKind.DISABLED, StateKind.ENABLED})

# Observed kinds satisfying each desired kind when plain equality is not enough
_SATISFIED_BY: dict[StateKind, frozenset[StateKind]] = {
    StateKind.DISABLED: frozenset(
        {StateKind.NOT_FOUND, StateKind.NOT_SET, StateKind.OFF}
    ),
    StateKind.ENABLED: frozenset({StateKind.ON, StateKind.MODULE}),
    # "# CONFIG_FOO is not set" is how the kernel itself writes `n`
    StateKind.OFF: frozenset({StateKind.OFF, StateKind.NOT_SET}),
}

_LABELS = {
    StateKind.DISABLED: "Disabled (NotFound, NotSet, or Off)",
    StateKind.ENABLED: "Enabled (On or Module)",
}


@dataclass(frozen=True)
class KconfigState:
    """State or value of a kernel config option."""

    kind: StateKind
    payload: int | str | None = None

    NOT_FOUND: ClassVar["KconfigState"]
    NOT_SET: ClassVar["KconfigState"]
    OFF: ClassVar["KconfigState"]
    DISABLED: ClassVar["KconfigState"]
    ON: ClassVar["KconfigState"]
    MODULE: ClassVar["KconfigState"]
    ENABLED: ClassVar["KconfigState"]

    def __post_init__(self) -> None:
        if self.kind == StateKind.VALUE:
            if (
                not isinstance(self.payload, int)
                or isinstance(self.payload, bool)
                or not 0 <= self.payload <= U64_MAX
            ):
                raise ValueError(
                    f"Value state needs an unsigned 64-bit int: {self.payload!r}"
                )
        elif self.kind == StateKind.TEXT:
            if not isinstance(self.payload, str):
                raise ValueError(f"Text state needs a string: {self.payload!r}")
        elif self.payload is not None:
            raise ValueError(f"{self.kind.value} state takes no payload")

    @classmethod
    def number(cls, value: int) -> "KconfigState":
        return cls(StateKind.VALUE, value)

    @classmethod
    def text(cls, value: str) -> "KconfigState":
        return cls(StateKind.TEXT, value)

    @property
    def is_virtual(self) -> bool:
        """True for states that can only be desired, never observed."""
        return self.kind in VIRTUAL_KINDS

    def check(self, observed: "KconfigState") -> bool:
        """Return True if ``observed`` satisfies this desired state."""
        allowed = _SATISFIED_BY.get(self.kind)
        if allowed is not None:
            return observed.kind in allowed
        return self == observed

    @classmethod
    def from_raw(cls, raw: Any) -> "KconfigState":
        """Build a state from its document form.

        Unit states are plain strings (``"On"``); payload states are a
        single-key mapping (``{"Text": "foo"}``, ``{"Value": 42}``).
        """
        if isinstance(raw, str):
            try:
                kind = StateKind(raw)
            except ValueError:
                raise ValueError(f"unknown variant `{raw}`") from None
            if kind in PAYLOAD_KINDS:
                raise ValueError(f"variant `{raw}` requires a value")
            return cls(kind)

        if isinstance(raw, dict) and len(raw) == 1:
            ((tag, value),) = raw.items()
            if tag == StateKind.TEXT.value and isinstance(value, str):
                return cls.text(value)
            if tag == StateKind.VALUE.value and isinstance(value, int):
                return cls.number(value)
            raise ValueError(f"invalid state: {raw!r}")

        raise ValueError(f"invalid state: {raw!r}")

    def to_raw(self) -> str | dict[str, int | str]:
        if self.kind in PAYLOAD_KINDS:
            assert self.payload is not None
            return {self.kind.value: self.payload}
        return self.kind.value

    def __str__(self) -> str:
        if self.kind in PAYLOAD_KINDS:
            return str(self.payload)
        return _LABELS.get(self.kind, self.kind.value)


KconfigState.NOT_FOUND = KconfigState(StateKind.NOT_FOUND)
KconfigState.NOT_SET = KconfigState(StateKind.NOT_SET)
KconfigState.OFF = KconfigState(StateKind.OFF)
KconfigState.DISABLED = KconfigState(StateKind.DISABLED)
KconfigState.ON = KconfigState(StateKind.ON)
KconfigState.MODULE = KconfigState(StateKind.MODULE)
KconfigState.ENABLED = KconfigState(StateKind.ENABLED)


@dataclass(frozen=True)
class KconfigOption:
    """A kernel config option name paired with its desired state."""

    name: str
    state: KconfigState = KconfigState.NOT_FOUND

    @classmethod
    def from_raw(cls, raw: Any) -> "KconfigOption":
        if not isinstance(raw, dict):
            raise ValueError(f"invalid kernel option: {raw!r}")
        name = raw.get("name")
        if not isinstance(name, str):
            raise ValueError(f"kernel option is missing a name: {raw!r}")
        if "state" not in raw:
            raise ValueError(f"missing field `state` for {name}")
        return cls(name=name, state=KconfigState.from_raw(raw["state"]))

    def to_raw(self) -> dict[str, Any]:
        return {"name": self.name, "state": self.state.to_raw()}

    def __str__(self) -> str:
        return f"{self.name}: {self.state}"
