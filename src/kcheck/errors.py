"""Error types raised by kcheck."""


class KcheckError(Exception):
    """Base class for all kcheck errors."""


class FileDoesNotExistError(KcheckError):
    def __init__(self, path: str):
        self.path = str(path)
        super().__init__(f"File does not exist: {self.path}")


class MissingFileExtensionError(KcheckError):
    def __init__(self, path: str):
        self.path = str(path)
        super().__init__(f"No file extension found: {self.path}")


class UnknownFileTypeError(KcheckError):
    def __init__(self, extension: str):
        self.extension = extension
        super().__init__(f"Unknown file type: {extension}")


class TomlParseError(KcheckError):
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Error parsing toml file: {detail}")


class JsonParseError(KcheckError):
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Error parsing json file: {detail}")


class KcheckIOError(KcheckError):
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"IO Error: {detail}")


class KernelConfigNotFoundError(KcheckError):
    def __init__(self):
        super().__init__("Kernel config not found")


class KernelConfigParseError(KcheckError):
    def __init__(self, line: str):
        self.line = line
        super().__init__(f"Kernel config parse error: {line!r}")


class UnknownKernelConfigOptionError(KcheckError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Unknown kernel config option: {value}")


class DuplicateConfigError(KcheckError):
    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"Duplicate config found: {symbol}")


class NoConfigError(KcheckError):
    def __init__(self):
        super().__init__("Could not find a config file")


class KernelConfigBuildError(KcheckError):
    """Invalid combination of sources given to a builder."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Error building KernelConfig: {detail}")


class EmptySymbolError(KcheckError):
    def __init__(self):
        super().__init__("Kernel config symbol must not be empty")
