"""In-memory representation of one kernel configuration."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TextIO

from kcheck.errors import KcheckError, KernelConfigBuildError
from kcheck.kconfig import KconfigOption, KconfigState

from .detect import find_system_config, read_config_text
from .scanner import lookup, render_option

logger = logging.getLogger(__name__)


class SourceKind(Enum):
    """Where a kernel config came from."""

    TEXT = "text"
    FILE = "file"
    SYSTEM = "system"
    STDIN = "stdin"


@dataclass(frozen=True)
class KernelSource:
    """Provenance of a kernel config. Used for diagnostics only."""

    kind: SourceKind
    paths: tuple[Path, ...] = ()

    def __str__(self) -> str:
        if self.paths:
            joined = ", ".join(str(p) for p in self.paths)
            return f"{self.kind.value}: {joined}"
        return self.kind.value


@dataclass(frozen=True)
class KernelConfig:
    """Lines of a kernel config plus where they came from."""

    source: KernelSource = KernelSource(SourceKind.TEXT)
    lines: tuple[str, ...] = ()

    @classmethod
    def from_text(cls, text: str) -> "KernelConfig":
        return cls(KernelSource(SourceKind.TEXT), tuple(text.splitlines()))

    @classmethod
    def from_file(cls, path: Path | str) -> "KernelConfig":
        """Load a kernel config that is not the running system's."""
        path = Path(path)
        return cls(KernelSource(SourceKind.FILE, (path,)), _read_lines(path))

    @classmethod
    def from_files(cls, paths: list[Path]) -> "KernelConfig":
        lines: list[str] = []
        for path in paths:
            lines.extend(_read_lines(path))
        return cls(KernelSource(SourceKind.FILE, tuple(paths)), tuple(lines))

    @classmethod
    def from_stdin(cls, stream: TextIO) -> "KernelConfig":
        return cls(KernelSource(SourceKind.STDIN), tuple(stream.read().splitlines()))

    @classmethod
    def from_system(cls) -> "KernelConfig":
        """Load the running kernel's config.

        Looks in ``/proc/config.gz``, ``/boot/config`` and
        ``/boot/config-$(uname -r)``, in that order.
        """
        path = find_system_config()
        return cls(KernelSource(SourceKind.SYSTEM, (path,)), _read_lines(path))

    def option(self, symbol: str) -> KconfigState:
        """Observed state of ``symbol``. Raises on malformed or duplicate lines."""
        return lookup(self.lines, symbol)

    def check_option(self, symbol: str, desired: KconfigState) -> bool:
        """True if ``symbol`` is in the ``desired`` state.

        Lookup errors count as a mismatch.
        """
        try:
            observed = self.option(symbol)
        except KcheckError as err:
            logger.debug("%s: treating lookup error as mismatch: %s", symbol, err)
            return False
        return desired.check(observed)


def _read_lines(path: Path) -> tuple[str, ...]:
    return tuple(read_config_text(path).splitlines())


@dataclass
class KernelConfigBuilder:
    """Collects kernel config sources and validates them before building.

    In-memory sources (``text``, ``push_option``) exist for synthetic
    configs and cannot be combined with a file or the system config; a file
    and the system config cannot be combined either.
    """

    use_system: bool = False
    files: list[Path] = field(default_factory=list)
    manual_lines: list[str] = field(default_factory=list)
    has_manual: bool = False

    def system(self) -> "KernelConfigBuilder":
        self.use_system = True
        return self

    def user(self, path: Path | str) -> "KernelConfigBuilder":
        self.files.append(Path(path))
        return self

    def text(self, text: str) -> "KernelConfigBuilder":
        self.has_manual = True
        self.manual_lines.extend(text.splitlines())
        return self

    def push_option(self, symbol: str, state: KconfigState) -> "KernelConfigBuilder":
        self.has_manual = True
        line = render_option(symbol, state)
        if line is not None:
            self.manual_lines.append(line)
        return self

    def options(self, options: list[KconfigOption]) -> "KernelConfigBuilder":
        for option in options:
            self.push_option(option.name, option.state)
        return self

    def validate(self) -> None:
        if self.has_manual and (self.use_system or self.files):
            raise KernelConfigBuildError(
                "manual options cannot be combined with a file or system config"
            )
        if self.use_system and self.files:
            raise KernelConfigBuildError(
                "a user kernel config cannot be combined with the system config"
            )
        if not (self.has_manual or self.use_system or self.files):
            raise KernelConfigBuildError("no kernel config source given")

    def build(self) -> KernelConfig:
        self.validate()
        if self.use_system:
            return KernelConfig.from_system()
        if self.files:
            return KernelConfig.from_files(self.files)
        return KernelConfig(KernelSource(SourceKind.TEXT), tuple(self.manual_lines))
