"""Requirement documents: desired kernel option states, grouped into fragments."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from kcheck.kconfig import KconfigOption, KconfigState


def _optional_str(raw: dict[str, Any], key: str) -> str | None:
    value = raw.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"`{key}` must be a string, got {value!r}")
    return value


def _option_list(raw: Any, where: str) -> list[KconfigOption]:
    if not isinstance(raw, list):
        raise ValueError(f"`{where}` must be a list of kernel options")
    return [KconfigOption.from_raw(item) for item in raw]


@dataclass
class KcheckConfigFragment:
    """A named group of related kernel options and the reason they are needed."""

    name: str | None = None
    reason: str | None = None
    options: list[KconfigOption] = field(default_factory=list)

    def is_empty(self) -> bool:
        return self.name is None and self.reason is None and not self.options

    @classmethod
    def from_raw(cls, raw: Any) -> "KcheckConfigFragment":
        if not isinstance(raw, dict):
            raise ValueError(f"invalid fragment: {raw!r}")
        if "kernel" not in raw:
            raise ValueError("missing field `kernel` in fragment")
        return cls(
            name=_optional_str(raw, "name"),
            reason=_optional_str(raw, "reason"),
            options=_option_list(raw["kernel"], "fragment.kernel"),
        )

    def to_raw(self) -> dict[str, Any]:
        raw: dict[str, Any] = {"kernel": [o.to_raw() for o in self.options]}
        if self.name is not None:
            raw["name"] = self.name
        if self.reason is not None:
            raw["reason"] = self.reason
        return raw


@dataclass
class KcheckConfig:
    """Desired kernel configuration.

    ``options`` holds options that are not part of any fragment. Checking
    visits ``options`` first and then every fragment's options, each in
    stored order; fragments only group options, they never reorder them.
    """

    name: str | None = None
    options: list[KconfigOption] | None = None
    fragments: list[KcheckConfigFragment] | None = None

    @classmethod
    def from_raw(cls, raw: Any) -> "KcheckConfig":
        """Build from a decoded document (``name``, ``kernel``, ``fragment`` keys)."""
        if not isinstance(raw, dict):
            raise ValueError("document must be a table/object")
        options = None
        if raw.get("kernel") is not None:
            options = _option_list(raw["kernel"], "kernel")
        fragments = None
        if raw.get("fragment") is not None:
            if not isinstance(raw["fragment"], list):
                raise ValueError("`fragment` must be a list of fragments")
            fragments = [KcheckConfigFragment.from_raw(f) for f in raw["fragment"]]
        return cls(name=_optional_str(raw, "name"), options=options, fragments=fragments)

    def to_raw(self) -> dict[str, Any]:
        raw: dict[str, Any] = {}
        if self.name is not None:
            raw["name"] = self.name
        if self.options is not None:
            raw["kernel"] = [o.to_raw() for o in self.options]
        if self.fragments is not None:
            raw["fragment"] = [f.to_raw() for f in self.fragments]
        return raw

    def append(self, other: "KcheckConfig") -> None:
        """Move options and fragments of ``other`` into ``self``; keep own name."""
        if other.options is not None:
            self.options = (self.options or []) + other.options
        if other.fragments is not None:
            self.fragments = (self.fragments or []) + other.fragments

    def add_fragment(self, fragment: KcheckConfigFragment) -> None:
        if self.fragments is None:
            self.fragments = []
        self.fragments.append(fragment)

    def is_empty(self) -> bool:
        return self.name is None and not self.options and not self.fragments

    def into_check_list(self) -> list[tuple[str, KconfigState]]:
        """Flatten into ordered ``(symbol, desired state)`` pairs."""
        options = list(self.options or [])
        for fragment in self.fragments or []:
            options.extend(fragment.options)
        return [(option.name, option.state) for option in options]

    def __iter__(self) -> Iterator[tuple[str, KconfigState]]:
        return iter(self.into_check_list())
