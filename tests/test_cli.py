"""Tests for CLI commands."""

import json
from pathlib import Path

import httpx
import pytest
import respx
from click.testing import CliRunner
from payloads import TEST_TOKEN, github_repo

from repo_roundup.cli import main


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temporary config file with the token in the environment."""
    monkeypatch.setenv("ROUNDUP_TEST_TOKEN", TEST_TOKEN)
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        """provider:
  kind: github
  token_env: ROUNDUP_TEST_TOKEN
target:
  mode: org
  name: acme
filters:
  skip_forks: true
clone:
  protocol: https
  wiki: true
"""
    )
    return config_path


class TestProvidersCommand:
    """Tests for the providers command."""

    def test_lists_builtin_providers(self, runner: CliRunner) -> None:
        """Test every built-in kind is listed."""
        result = runner.invoke(main, ["providers"])

        assert result.exit_code == 0
        assert result.output.split() == ["bitbucket", "gitea", "github", "gitlab"]


class TestDiscoverCommand:
    """Tests for the discover command."""

    @respx.mock
    def test_json_output(self, runner: CliRunner, config_file: Path) -> None:
        """Test JSON lines output omits credential-bearing clone URLs."""
        respx.get("https://api.github.com/orgs/acme/repos").mock(
            return_value=httpx.Response(
                200,
                json=[
                    github_repo("api", has_wiki=True),
                    github_repo("fork", fork=True),
                ],
            )
        )

        result = runner.invoke(main, ["discover", "--config", str(config_file), "--json"])

        assert result.exit_code == 0, result.output
        records = [json.loads(line) for line in result.stdout.splitlines() if line.startswith("{")]
        assert records == [
            {
                "name": "api",
                "url": "https://github.com/acme/api.git",
                "clone_branch": "main",
                "is_wiki": False,
            },
            {
                "name": "",
                "url": "https://github.com/acme/api.wiki.git",
                "clone_branch": "master",
                "is_wiki": True,
            },
        ]
        assert TEST_TOKEN not in result.stdout

    @respx.mock
    def test_table_output(self, runner: CliRunner, config_file: Path) -> None:
        """Test the default table output."""
        respx.get("https://api.github.com/orgs/acme/repos").mock(
            return_value=httpx.Response(200, json=[github_repo("api")])
        )

        result = runner.invoke(main, ["discover", "--config", str(config_file)])

        assert result.exit_code == 0, result.output
        assert "Clone targets for acme" in result.output
        assert "1 clone targets" in result.output

    @respx.mock
    def test_upstream_error(self, runner: CliRunner, config_file: Path) -> None:
        """Test upstream failures abort with an error message."""
        respx.get("https://api.github.com/orgs/acme/repos").mock(
            return_value=httpx.Response(404, json={"message": "Not Found"})
        )

        result = runner.invoke(main, ["discover", "--config", str(config_file)])

        assert result.exit_code == 1
        assert "UpstreamAPIError" in result.output

    def test_unknown_provider(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test an unregistered provider kind aborts."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text(
            "provider:\n  kind: svn\n  token: abc\ntarget:\n  mode: org\n  name: acme\n"
        )

        result = runner.invoke(main, ["discover", "--config", str(config_path)])

        assert result.exit_code == 1
        assert "UnknownProviderKind" in result.output

    def test_missing_token(
        self, runner: CliRunner, config_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test a missing token aborts before any request."""
        monkeypatch.delenv("ROUNDUP_TEST_TOKEN")

        result = runner.invoke(main, ["discover", "--config", str(config_file)])

        assert result.exit_code == 1
        assert "AuthConfigurationError" in result.output

    def test_invalid_config(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test validation errors abort with the config path."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("target:\n  mode: team\n  name: acme\n")

        result = runner.invoke(main, ["discover", "--config", str(config_path)])

        assert result.exit_code == 1
        assert "Invalid config" in result.output
