"""Check runner: evaluate a requirement config against a kernel config."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from kcheck.config import KcheckConfig, KcheckConfigBuilder
from kcheck.kernel import KernelConfig, KernelConfigBuilder

from .types import CheckResult, CheckStatus

logger = logging.getLogger(__name__)


def perform_check(config: KcheckConfig, kernel: KernelConfig) -> list[CheckResult]:
    """Check every requirement in ``config`` against ``kernel``.

    Results follow the order of ``config.into_check_list()``. A lookup
    error for any option (malformed line, unknown value, duplicate
    definition) aborts the whole run.
    """
    results: list[CheckResult] = []
    for name, desired in config.into_check_list():
        observed = kernel.option(name)
        passed = desired.check(observed)
        logger.debug("%s: desired %s, observed %s -> %s", name, desired, observed, passed)
        results.append(
            CheckResult(
                name=name,
                desired=desired,
                observed=observed,
                status=CheckStatus.from_bool(passed),
            )
        )
    return results


def summarize(results: list[CheckResult]) -> tuple[int, int]:
    """Return ``(passed, failed)`` counts."""
    passed = sum(1 for r in results if r.status == CheckStatus.PASS)
    return passed, len(results) - passed


@dataclass
class Kcheck:
    """A requirement config paired with the kernel config it is checked against."""

    config: KcheckConfig
    kernel: KernelConfig

    def perform_check(self) -> list[CheckResult]:
        return perform_check(self.config, self.kernel)


@dataclass
class KcheckBuilder:
    """Collect kernel and requirement sources, then build a ``Kcheck``."""

    use_system_kernel: bool = False
    user_kernel_files: list[Path] = field(default_factory=list)
    use_system_config: bool = False
    user_config_files: list[Path] = field(default_factory=list)

    def system_kernel(self) -> "KcheckBuilder":
        """Check the running system's kernel config."""
        self.use_system_kernel = True
        return self

    def kernel_fragments(self, files: Iterable[Path | str]) -> "KcheckBuilder":
        """Check user-provided kernel config files."""
        self.user_kernel_files.extend(Path(f) for f in files)
        return self

    def system_config(self) -> "KcheckBuilder":
        """Include the requirement files stored in ``/etc``."""
        self.use_system_config = True
        return self

    def config_fragments(self, files: Iterable[Path | str]) -> "KcheckBuilder":
        """Include user-provided requirement files."""
        self.user_config_files.extend(Path(f) for f in files)
        return self

    def build(self) -> Kcheck:
        kernel_builder = KernelConfigBuilder()
        if self.use_system_kernel:
            kernel_builder.system()
        for path in self.user_kernel_files:
            kernel_builder.user(path)
        kernel = kernel_builder.build()

        config_builder = KcheckConfigBuilder()
        if self.use_system_config:
            config_builder.system()
        config = config_builder.config_files(self.user_config_files).build()

        return Kcheck(config=config, kernel=kernel)
