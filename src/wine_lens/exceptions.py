"""Custom exceptions for wine-lens."""


class WineLensError(Exception):
    """Base exception for wine-lens."""

    pass


class InvalidImage(WineLensError):
    """Raised when an image has an unsupported media type or is too large."""

    pass


class ProviderError(WineLensError):
    """Base exception for analysis provider failures."""

    pass


class ProviderConfigInvalid(ProviderError):
    """Raised when a provider is missing its credential or endpoint."""

    pass


class ProviderUnavailable(ProviderError):
    """Raised on network, HTTP or timeout failures talking to a provider."""

    pass


class ProviderResponseInvalid(ProviderError):
    """Raised when a provider reply has no parseable structured payload."""

    pass


class NoStructuredPayloadFound(ProviderResponseInvalid):
    """Raised when no parsing strategy recovers a single populated field."""

    def __init__(self, message: str, raw_text: str = ""):
        super().__init__(message)
        self.raw_text = raw_text
