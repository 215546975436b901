"""Logging configuration with secret redaction.

Tokens reach log output in two ways: as recognizable provider token shapes
and as userinfo spliced into HTTPS clone URLs. Both are masked, along with
any literal secret registered at runtime (Bitbucket and Gitea tokens have no
distinctive shape).
"""

import logging
import re
from collections.abc import Iterable
from typing import ClassVar

TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
JSON_FORMAT = (
    '{"time": "%(asctime)s", "level": "%(levelname)s", '
    '"name": "%(name)s", "message": "%(message)s"}'
)
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

QUIET_LOGGERS = ("httpx", "httpcore")


class SecretRedactingFilter(logging.Filter):
    """Filter that masks credentials in log messages and arguments."""

    SECRET_PATTERNS: ClassVar[list[tuple[re.Pattern[str], str]]] = [
        # https://<userinfo>@host, as produced for HTTPS clone targets
        (re.compile(r"(https?://)[^\s/@]+@"), r"\1[REDACTED]@"),
        (re.compile(r"gh[pousr]_[a-zA-Z0-9]{20,}"), "[REDACTED_GH_TOKEN]"),
        (re.compile(r"github_pat_[a-zA-Z0-9_]+"), "[REDACTED_GH_PAT]"),
        (re.compile(r"glpat-[a-zA-Z0-9_\-]{20,}"), "[REDACTED_GL_TOKEN]"),
        (re.compile(r"Bearer\s+[a-zA-Z0-9_\-\.]+"), "Bearer [REDACTED]"),
        (re.compile(r"(Authorization:\s*)[^\s,\]]+", re.IGNORECASE), r"\1[REDACTED]"),
        (re.compile(r"(PRIVATE-TOKEN:\s*)[^\s,\]]+", re.IGNORECASE), r"\1[REDACTED]"),
        (re.compile(r"(token[=:]\s*)[^\s,\]]+", re.IGNORECASE), r"\1[REDACTED]"),
    ]

    def __init__(self, secrets: Iterable[str] = ()) -> None:
        super().__init__()
        self._secrets: set[str] = set()
        for secret in secrets:
            self.add_secret(secret)

    def add_secret(self, secret: str | None) -> None:
        """Mask every later occurrence of a literal value."""
        if secret:
            self._secrets.add(secret)

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = self._redact(str(record.msg))
        if record.args:
            record.args = tuple(
                self._redact(arg) if isinstance(arg, str) else arg for arg in record.args
            )
        return True

    def _redact(self, text: str) -> str:
        # Longest first so a secret containing another is masked whole
        for secret in sorted(self._secrets, key=len, reverse=True):
            text = text.replace(secret, "[REDACTED]")
        for pattern, replacement in self.SECRET_PATTERNS:
            text = pattern.sub(replacement, text)
        return text


def setup_logging(verbose: bool = False, json_format: bool = False) -> SecretRedactingFilter:
    """Configure root logging and install secret redaction.

    Args:
        verbose: Enable debug level logging.
        json_format: Emit one JSON object per log line.

    Returns:
        The redaction filter attached to every root handler, so callers can
        register the access token once it is known.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=JSON_FORMAT if json_format else TEXT_FORMAT,
        datefmt=DATE_FORMAT,
    )

    redaction_filter = SecretRedactingFilter()
    for handler in logging.getLogger().handlers:
        handler.addFilter(redaction_filter)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return redaction_filter
