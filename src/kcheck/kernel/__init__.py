"""Kernel config loading and option lookup."""

from .config import KernelConfig, KernelConfigBuilder, KernelSource, SourceKind
from .detect import find_system_config, system_config_paths
from .scanner import lookup, render_option

__all__ = [
    "find_system_config",
    "KernelConfig",
    "KernelConfigBuilder",
    "KernelSource",
    "lookup",
    "render_option",
    "SourceKind",
    "system_config_paths",
]
