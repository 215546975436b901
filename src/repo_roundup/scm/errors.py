"""Error taxonomy for SCM discovery."""


class ScmError(Exception):
    """Base exception for repository discovery errors."""


class AuthConfigurationError(ScmError):
    """Raised when the access token is missing or malformed."""


class EndpointConfigurationError(ScmError):
    """Raised when a base URL override cannot be parsed."""


class UpstreamAPIError(ScmError):
    """Raised when a platform request fails during enumeration.

    The underlying transport or API error is chained as ``__cause__``.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class UnknownProviderKind(ScmError):
    """Raised when the registry has no provider for a kind."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"No SCM provider registered for kind '{kind}'")


class MalformedUpstreamURL(ScmError):
    """Raised when a platform reports a clone URL that cannot be used."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        super().__init__(f"Malformed clone URL {url!r}: {reason}")
