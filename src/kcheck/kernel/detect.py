"""Kernel config discovery on the running system."""

import gzip
import logging
import platform
from pathlib import Path

from kcheck.errors import FileDoesNotExistError, KcheckIOError, KernelConfigNotFoundError

logger = logging.getLogger(__name__)

PROC_CONFIG_GZ = Path("/proc/config.gz")
BOOT_CONFIG = Path("/boot/config")


def _kernel_release() -> str:
    """Running kernel release, as printed by ``uname -r``."""
    return platform.release()


def system_config_paths() -> list[Path]:
    """Default kernel config locations, in lookup order."""
    return [
        PROC_CONFIG_GZ,
        BOOT_CONFIG,
        Path(f"/boot/config-{_kernel_release()}"),
    ]


def find_system_config(paths: list[Path] | None = None) -> Path:
    """Return the first existing kernel config location."""
    for path in paths if paths is not None else system_config_paths():
        if path.exists():
            logger.debug("Using system kernel config %s", path)
            return path
        logger.debug("No kernel config at %s", path)
    raise KernelConfigNotFoundError()


def read_config_text(path: Path) -> str:
    """Read a kernel config file, decompressing ``.gz`` files."""
    if not path.exists():
        raise FileDoesNotExistError(str(path))
    try:
        if path.suffix == ".gz":
            with gzip.open(path, mode="rt", encoding="utf8") as fh:
                return fh.read()
        return path.read_text(encoding="utf8")
    except (OSError, EOFError, UnicodeDecodeError) as err:
        raise KcheckIOError(f"{path}: {err}") from err
