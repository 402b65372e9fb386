"""Requirement documents describing the desired kernel configuration."""

from .loader import (
    ETC_KCHECK_JSON,
    ETC_KCHECK_TOML,
    KcheckConfigBuilder,
    generate,
    load_document,
)
from .types import KcheckConfig, KcheckConfigFragment

__all__ = [
    "ETC_KCHECK_JSON",
    "ETC_KCHECK_TOML",
    "generate",
    "KcheckConfig",
    "KcheckConfigBuilder",
    "KcheckConfigFragment",
    "load_document",
]
