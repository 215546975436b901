"""Configuration loading and validation."""

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_TOKEN_ENVS = {
    "github": "GITHUB_TOKEN",
    "gitlab": "GITLAB_TOKEN",
    "bitbucket": "BITBUCKET_TOKEN",
    "gitea": "GITEA_TOKEN",
}


class ProviderConfig(BaseModel):
    """SCM provider and credentials."""

    kind: str = "github"
    token: str | None = None
    token_env: str | None = None
    base_url: str | None = None
    page_size: int = Field(default=100, ge=1)
    timeout: float = Field(default=30.0, gt=0)

    @model_validator(mode="after")
    def default_token_env(self) -> "ProviderConfig":
        """Pick the token variable for the provider kind when none is given."""
        if not self.token_env:
            kind = self.kind.lower()
            self.token_env = DEFAULT_TOKEN_ENVS.get(kind, f"{kind.upper()}_TOKEN")
        return self

    def resolve_token(self) -> str | None:
        """Get the access token.

        Returns:
            The explicit token, else the value of the ``token_env``
            environment variable, else None.
        """
        if self.token:
            return self.token
        return os.environ.get(self.token_env or "")


class TargetConfig(BaseModel):
    """Organization or user to enumerate."""

    mode: str = Field(pattern=r"^(org|user)$")
    name: str = Field(min_length=1)


class FilterConfig(BaseModel):
    """Repository filter policy."""

    skip_archived: bool = False
    skip_forks: bool = False
    topics: list[str] = Field(default_factory=list)
    match_regex: list[str] = Field(default_factory=list)
    exclude_regex: list[str] = Field(default_factory=list)

    @field_validator("match_regex", "exclude_regex")
    @classmethod
    def validate_regex_patterns(cls, v: list[str]) -> list[str]:
        """Validate that regex patterns are valid."""
        for pattern in v:
            try:
                re.compile(pattern)
            except re.error as e:
                msg = f"Invalid regex pattern '{pattern}': {e}"
                raise ValueError(msg) from e
        return v

    @field_validator("topics")
    @classmethod
    def strip_topics(cls, v: list[str]) -> list[str]:
        """Drop blank topic entries."""
        return [topic.strip() for topic in v if topic.strip()]


class CloneConfig(BaseModel):
    """How clone targets are built."""

    protocol: str = Field(default="https", pattern=r"^(https|ssh)$")
    branch: str | None = None
    wiki: bool = False


class Config(BaseModel):
    """Root configuration model."""

    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    target: TargetConfig
    filters: FilterConfig = Field(default_factory=FilterConfig)
    clone: CloneConfig = Field(default_factory=CloneConfig)


def load_config(path: Path) -> Config:
    """Load and validate configuration from YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Validated Config object.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ValidationError: If the config is invalid.
    """
    if not path.exists():
        msg = f"Config file not found: {path}"
        raise FileNotFoundError(msg)

    with path.open() as f:
        raw_config: dict[str, Any] = yaml.safe_load(f) or {}

    return Config.model_validate(raw_config)
