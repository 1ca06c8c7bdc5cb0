"""Exception types raised across npoconnect."""


class NpoConnectError(Exception):
    """Base class for npoconnect errors."""


class ConfigurationError(NpoConnectError):
    """A required setting (usually the Gemini API key) is missing."""


class GenerationFailed(NpoConnectError):
    """A document generation call did not produce usable text."""

    def __init__(self, cause: str):
        super().__init__(cause)
        self.cause = cause


class StreamError(NpoConnectError):
    """A chat response stream failed before or while delivering chunks."""


class ExportFailure(NpoConnectError):
    """Rendering or writing an exported document failed."""


class PersistenceWarning(UserWarning):
    """The local task store could not be read or written."""
