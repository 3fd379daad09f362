"""Exceptions raised while building an asset tree.

Filesystem failures are not wrapped: they surface as the builtin
``OSError`` raised by the failing call.
"""


class MincerError(Exception):
    """Base class for all asset-mincer errors."""


class NoInputFilesError(MincerError):
    """No input file matched the configured glob patterns."""


class InvalidEngineError(MincerError, ValueError):
    """An engine name in the configuration is not registered."""

    def __init__(self, name: str, available: list[str] | None = None):
        self.name = name
        message = f"Invalid mincer engine {name}"
        if available is not None:
            message += f". Available engines: {', '.join(available) or 'none'}"
        super().__init__(message)


class AssetNotFoundError(MincerError, LookupError):
    """The environment could not resolve a path to a compiled asset."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Asset not found: {path}")


class OutputCollisionError(MincerError):
    """Two input files compile to the same output path."""

    def __init__(self, output_path: str, first: str, second: str):
        self.output_path = output_path
        super().__init__(f"Output path '{output_path}' of {second} is already written by {first}")
