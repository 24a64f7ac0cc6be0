from pathlib import Path
from typing import Union


class ClientForgeError(Exception):
    """Base class for every error raised by ClientForge."""


class ClientAlreadyExistsError(ClientForgeError):
    def __init__(self, client_name: str, path: Union[str, Path]):
        super().__init__(f'Client "{client_name}" already exists at {path}.')
        self.client_name = client_name
        self.path = Path(path)


class ClientNotFoundError(ClientForgeError):
    def __init__(self, client_name: str, path: Union[str, Path]):
        super().__init__(f'Client "{client_name}" does not exist at {path}.')
        self.client_name = client_name
        self.path = Path(path)


class AssetNotFoundError(ClientForgeError):
    def __init__(self, path: Union[str, Path]):
        super().__init__(f"File not found at path: {path}")
        self.path = Path(path)


class SourceNotAFileError(ClientForgeError):
    def __init__(self, path: Union[str, Path]):
        super().__init__(f"Source is not a file: {path}")
        self.path = Path(path)


class SourceNotADirectoryError(ClientForgeError):
    def __init__(self, path: Union[str, Path]):
        super().__init__(f"Source is not a directory: {path}")
        self.path = Path(path)


class DestinationExistsError(ClientForgeError):
    def __init__(self, path: Union[str, Path]):
        super().__init__(f"Destination already exists: {path}")
        self.path = Path(path)


class ConversionFailedError(ClientForgeError):
    """Raised when the SVG could not be rasterized or composed."""


class ConfigReadError(ClientForgeError):
    """Raised when the configuration file is missing, unparsable or invalid."""


class AccessDeniedError(ClientForgeError):
    def __init__(self, path: Union[str, Path], root: Union[str, Path]):
        super().__init__(f"Access denied: {path} is outside of {root}")
        self.path = Path(path)
        self.root = Path(root)
