"""Load requirement documents and merge them into one ``KcheckConfig``."""

import json
import logging
import tomllib
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from kcheck.errors import (
    FileDoesNotExistError,
    JsonParseError,
    KcheckIOError,
    MissingFileExtensionError,
    NoConfigError,
    TomlParseError,
    UnknownFileTypeError,
)
from kcheck.kconfig import KconfigOption

from .types import KcheckConfig, KcheckConfigFragment

logger = logging.getLogger(__name__)

ETC_KCHECK_TOML = Path("/etc/kcheck.toml")
ETC_KCHECK_JSON = Path("/etc/kcheck.json")

# Optional system-wide requirement documents, loaded first when present
SYSTEM_CONFIG_FILES: list[Path] = [ETC_KCHECK_TOML, ETC_KCHECK_JSON]


def load_document(path: Path | str) -> KcheckConfig:
    """Read one requirement document; the format comes from the file extension."""
    path = Path(path)
    if not path.exists():
        raise FileDoesNotExistError(str(path))
    if not path.suffix:
        raise MissingFileExtensionError(str(path))

    extension = path.suffix[1:]
    if extension not in ("toml", "json"):
        raise UnknownFileTypeError(extension)

    try:
        contents = path.read_text(encoding="utf8")
    except (OSError, UnicodeDecodeError) as err:
        raise KcheckIOError(f"{path}: {err}") from err

    if extension == "toml":
        try:
            return KcheckConfig.from_raw(tomllib.loads(contents))
        except (tomllib.TOMLDecodeError, ValueError) as err:
            raise TomlParseError(f"{path}: {err}") from err

    try:
        return KcheckConfig.from_raw(json.loads(contents))
    except (json.JSONDecodeError, ValueError) as err:
        raise JsonParseError(f"{path}: {err}") from err


def generate(
    paths: Iterable[Path | str] = (),
    *,
    system: bool = False,
    documents: Iterable[KcheckConfig] = (),
) -> KcheckConfig:
    """Merge requirement documents into a single ``KcheckConfig``.

    Documents are taken in this order: the system-wide files (only when
    ``system`` is set; missing ones are skipped), the user ``paths`` (which
    must exist), then the in-memory ``documents``. The merged config keeps
    the first document's name and concatenates options and fragments in
    document order.
    """
    user_paths = [Path(p) for p in paths]
    for path in user_paths:
        if not path.exists():
            raise FileDoesNotExistError(str(path))

    collection: list[KcheckConfig] = []
    if system:
        for path in SYSTEM_CONFIG_FILES:
            try:
                collection.append(load_document(path))
            except FileDoesNotExistError:
                logger.debug("Skipping missing system config %s", path)
                continue
            logger.debug("Loaded system config %s", path)

    for path in user_paths:
        collection.append(load_document(path))
        logger.debug("Loaded config %s", path)

    collection.extend(documents)

    if not collection:
        raise NoConfigError()

    combined = KcheckConfig(name=collection[0].name)
    for item in collection:
        combined.append(item)
    return combined


@dataclass
class KcheckConfigBuilder:
    """Assemble a ``KcheckConfig`` from files and in-memory options."""

    use_system: bool = False
    files: list[Path] = field(default_factory=list)
    document: KcheckConfig = field(default_factory=KcheckConfig)
    has_document: bool = False

    def system(self) -> "KcheckConfigBuilder":
        """Also load ``/etc/kcheck.toml`` and ``/etc/kcheck.json`` if present."""
        self.use_system = True
        return self

    def config_files(self, paths: Iterable[Path | str]) -> "KcheckConfigBuilder":
        self.files.extend(Path(p) for p in paths)
        return self

    def name(self, name: str) -> "KcheckConfigBuilder":
        self.has_document = True
        self.document.name = name
        return self

    def options(self, options: Iterable[KconfigOption]) -> "KcheckConfigBuilder":
        self.has_document = True
        self.document.append(KcheckConfig(options=list(options)))
        return self

    def fragment(self, fragment: KcheckConfigFragment) -> "KcheckConfigBuilder":
        self.has_document = True
        self.document.add_fragment(fragment)
        return self

    def build(self) -> KcheckConfig:
        documents = [self.document] if self.has_document else []
        return generate(self.files, system=self.use_system, documents=documents)
