"""CLI entry point for repo-roundup.

Commands:
- discover: List clone targets for the configured organization or user
- providers: List supported SCM providers
"""

import asyncio
import json
from dataclasses import asdict
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from repo_roundup import __version__
from repo_roundup.config import Config, load_config
from repo_roundup.discovery import discover_repos
from repo_roundup.logging import setup_logging
from repo_roundup.scm import ClientRegistry, Repo, ScmError, default_registry

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="repo-roundup")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable verbose output")
@click.option("--log-json", is_flag=True, default=False, help="Write log lines as JSON")
@click.pass_context
def main(ctx: click.Context, verbose: bool, log_json: bool) -> None:
    """Enumerate every repository of an org or user for bulk cloning.

    \b
    Quick Start:
        1. Write config.yaml with provider, target, filters and clone settings
        2. Export the token: export GITHUB_TOKEN=...
        3. repo-roundup discover --config config.yaml
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["registry"] = default_registry()
    ctx.obj["redactor"] = setup_logging(verbose=verbose, json_format=log_json)


async def _run_discovery(cfg: Config, registry: ClientRegistry) -> list[Repo]:
    client = registry.construct_client(cfg.provider.kind, cfg.provider)
    async with client:
        return await discover_repos(cfg, client)


@main.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Path to config.yaml file",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print one JSON object per clone target instead of a table",
)
@click.pass_context
def discover(ctx: click.Context, config: Path, as_json: bool) -> None:
    """List clone targets for the configured organization or user.

    Clone URLs carry credentials and are never printed; the credential-free
    URL is shown instead.
    """
    try:
        cfg = load_config(config)
    except ValidationError as e:
        console.print(f"[bold red]Error:[/bold red] Invalid config {config}:\n{e}")
        raise click.Abort() from e

    ctx.obj["redactor"].add_secret(cfg.provider.resolve_token())

    try:
        repos = asyncio.run(_run_discovery(cfg, ctx.obj["registry"]))
    except ScmError as e:
        console.print(f"[bold red]Error:[/bold red] {type(e).__name__}: {e}")
        raise click.Abort() from e

    if as_json:
        for repo in repos:
            record = asdict(repo)
            del record["clone_url"]
            click.echo(json.dumps(record))
        return

    table = Table(title=f"Clone targets for {cfg.target.name}")
    table.add_column("Name")
    table.add_column("Branch")
    table.add_column("Wiki")
    table.add_column("URL", overflow="fold")
    for repo in repos:
        table.add_row(repo.name, repo.clone_branch, "yes" if repo.is_wiki else "", repo.url)

    console.print(table)
    console.print(f"[bold green]{len(repos)} clone targets[/bold green]")


@main.command()
@click.pass_context
def providers(ctx: click.Context) -> None:
    """List supported SCM providers."""
    for kind in ctx.obj["registry"].kinds():
        click.echo(kind)


if __name__ == "__main__":
    main()
