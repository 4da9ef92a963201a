from __future__ import annotations


class PreviewError(Exception):
    pass


class ConfigurationMissing(PreviewError):
    """The project build configuration or its output directory is unavailable."""


class BackendError(PreviewError):
    """The project build backend reported build errors."""


class BackendBusy(PreviewError):
    """The project build backend has not finished building yet."""


class ReadFailure(PreviewError):
    def __init__(self, path, cause: BaseException):
        super().__init__(f"Cannot read preview page {path}: {cause}")
        self.path = path
        self.cause = cause


class ConversionError(Exception):
    pass
