"""Access token validation and header construction."""

import logging
import re

from repo_roundup.scm.errors import AuthConfigurationError

logger = logging.getLogger(__name__)

WHITESPACE_PATTERN = re.compile(r"\s")


class TokenAuth:
    """Validated access token for one SCM provider.

    Every token must be non-empty and free of whitespace. Providers with a
    well-known token shape pass ``pattern`` to reject anything else early,
    before a request is made with a credential that can never work.
    """

    def __init__(
        self,
        token: str | None,
        *,
        header: str = "Authorization",
        scheme: str | None = "token",
        pattern: re.Pattern[str] | None = None,
        provider: str = "scm",
    ) -> None:
        """Initialize token authentication.

        Args:
            token: Access token.
            header: HTTP header carrying the token.
            scheme: Prefix placed before the token in the header value.
            pattern: Optional pattern the token must fully match.
            provider: Provider kind, used in error messages.

        Raises:
            AuthConfigurationError: If the token is missing or malformed.
        """
        if not token:
            raise AuthConfigurationError(
                f"{provider} access token not found. Set it in the config file "
                "or in the environment variable named by provider.token_env."
            )
        if WHITESPACE_PATTERN.search(token):
            raise AuthConfigurationError(f"{provider} access token contains whitespace")
        if pattern is not None and not pattern.fullmatch(token):
            raise AuthConfigurationError(f"Invalid {provider} access token format")

        self._token = token
        self._header = header
        self._scheme = scheme

    @property
    def token(self) -> str:
        """Get the validated token."""
        return self._token

    def get_authorization_header(self) -> dict[str, str]:
        """Get the header used to authenticate API requests.

        Returns:
            Dictionary with a single authentication header.
        """
        value = f"{self._scheme} {self._token}" if self._scheme else self._token
        return {self._header: value}
