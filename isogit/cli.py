"""Click-based CLI for isogit - credential-isolated git access."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

import click
import yaml
from pydantic import ValidationError
from rich.markup import escape

from isogit import __version__
from isogit.config import (
    IsogitConfig,
    ensure_config_exists,
    get_config_path,
    load_config,
    validate_config_file,
)
from isogit.exceptions import IsogitError
from isogit.git import GitEndpoint, ReadonlyRepository, Repository, checkout
from isogit.output import Console, create_console


class Session:
    """Configuration and consoles shared by one CLI invocation."""

    def __init__(self, config: IsogitConfig):
        self.config = config
        self.console = create_console(verbose=config.output.verbose, colored=config.output.colored)
        # Command echo goes to stderr so command output stays pipeable
        self.trace = create_console(verbose=config.output.verbose, colored=config.output.colored, stderr=True)
        self._proxy: Optional[Path] = None

    @property
    def proxy(self) -> Path:
        if self._proxy is None:
            self._proxy = self.config.resolve_proxy()
        return self._proxy

    def endpoint(self, url: str, revision: Optional[str] = None) -> GitEndpoint:
        return self.config.build_endpoint(url, revision)

    def reader(self, url: str) -> ReadonlyRepository:
        return ReadonlyRepository.from_endpoint(self.endpoint(url), self.proxy, console=self.trace)

    def repository_options(self) -> dict:
        return {
            "temp_root": self.config.temp_root,
            "clone_timeout": self.config.clone.clone_timeout,
            "fetch_timeout": self.config.clone.command_timeout,
            "console": self.trace,
        }


def _load_session(ctx: click.Context) -> Session:
    """Load configuration and apply command line overrides."""
    opts = ctx.obj
    try:
        config = load_config(opts.get("config_path"))
    except (ValidationError, yaml.YAMLError, OSError) as e:
        create_console().print_error(f"Invalid configuration: {e}")
        sys.exit(1)

    ssh_overrides = {
        key: str(opts[key])
        for key in ("identity_file", "known_hosts_file", "home")
        if opts.get(key) is not None
    }
    if ssh_overrides:
        config = config.model_copy(update={"ssh": config.ssh.model_copy(update=ssh_overrides)})
    if opts.get("verbose"):
        config = config.model_copy(update={"output": config.output.model_copy(update={"verbose": True})})

    return Session(config)


@contextmanager
def _handle_errors(console: Console) -> Iterator[None]:
    """Turn library errors into a console message and exit code 1."""
    try:
        yield
    except IsogitError as e:
        console.print_error(e.message)
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="isogit")
@click.option("--config", "config_path", type=click.Path(path_type=Path), help="Configuration file")
@click.option("--verbose", "-v", is_flag=True, help="Echo git commands")
@click.option("--identity", "-i", "identity_file", type=click.Path(path_type=Path), help="Private key for SSH")
@click.option("--known-hosts", "known_hosts_file", type=click.Path(path_type=Path), help="Known hosts file for SSH")
@click.option("--home", type=click.Path(path_type=Path), help="HOME directory for git commands")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[Path],
    verbose: bool,
    identity_file: Optional[Path],
    known_hosts_file: Optional[Path],
    home: Optional[Path],
) -> None:
    """isogit - credential-isolated access to remote git repositories.

    Every git command runs with its own SSH identity and known_hosts file,
    passed to the SSH proxy script through the environment.

    \b
    Examples:
        isogit tags git@example.com:org/app.git
        isogit resolve git@example.com:org/app.git main
        isogit show git@example.com:org/app.git composer.json -r v1.2.3
    """
    ctx.ensure_object(dict)
    ctx.obj.update(
        config_path=config_path,
        verbose=verbose,
        identity_file=identity_file,
        known_hosts_file=known_hosts_file,
        home=home,
    )


@cli.command()
@click.argument("url")
@click.pass_context
def tags(ctx: click.Context, url: str) -> None:
    """List the tags of a remote repository."""
    session = _load_session(ctx)
    with _handle_errors(session.console):
        session.console.print_tags(url, session.reader(url).get_tags())


@cli.command()
@click.argument("url")
@click.argument("ref")
@click.pass_context
def resolve(ctx: click.Context, url: str, ref: str) -> None:
    """Resolve a branch or tag to a commit sha."""
    session = _load_session(ctx)
    with _handle_errors(session.console):
        sha = session.reader(url).resolve_git_reference(ref)
    session.console.print_reference(ref, sha)
    if sha is None:
        sys.exit(1)


@cli.command()
@click.argument("url")
@click.argument("path")
@click.option("--revision", "-r", default=None, help="Revision to read (default: master)")
@click.option("--local-path", type=click.Path(file_okay=False, path_type=Path), help="Reuse or keep a clone here")
@click.pass_context
def show(ctx: click.Context, url: str, path: str, revision: Optional[str], local_path: Optional[Path]) -> None:
    """Print a file from a revision of a remote repository."""
    session = _load_session(ctx)
    with _handle_errors(session.console):
        endpoint = session.endpoint(url, revision)
        with checkout(endpoint, session.proxy, local_path=local_path, **session.repository_options()) as repo:
            content = repo.get_file_content(path, revision)
    session.console.print_raw(content)


@cli.command()
@click.argument("url")
@click.argument("value")
@click.option("--revision", "-r", default=None, help="Revision to check out (default: master)")
@click.option("--local-path", type=click.Path(file_okay=False, path_type=Path), help="Reuse or keep a clone here")
@click.pass_context
def describe(ctx: click.Context, url: str, value: str, revision: Optional[str], local_path: Optional[Path]) -> None:
    """Describe a commit by its nearest tag."""
    session = _load_session(ctx)
    with _handle_errors(session.console):
        endpoint = session.endpoint(url, revision)
        with checkout(endpoint, session.proxy, local_path=local_path, **session.repository_options()) as repo:
            tag = repo.resolve_tag_reference(value)
    session.console.print_reference(value, tag)


@cli.command("clone")
@click.argument("url")
@click.argument("dest", type=click.Path(file_okay=False, path_type=Path))
@click.option("--revision", "-r", default=None, help="Revision to check out (default: master)")
@click.pass_context
def clone_command(ctx: click.Context, url: str, dest: Path, revision: Optional[str]) -> None:
    """Clone a repository into DEST, or fetch if DEST already exists.

    The clone is kept after the command finishes.
    """
    session = _load_session(ctx)
    existed = dest.exists()
    with _handle_errors(session.console):
        repo = Repository(session.endpoint(url, revision), session.proxy, local_path=dest, **session.repository_options())
    if existed:
        session.console.print_success(f"Fetched {repo.url} into {repo.local_path}")
    else:
        session.console.print_success(f"Cloned {repo.url} at {repo.revision} into {repo.local_path}")


# ============================================================================
# Configuration Commands
# ============================================================================


@cli.group()
def config() -> None:
    """Configuration file commands."""
    pass


@config.command("init")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing configuration file")
@click.pass_context
def config_init(ctx: click.Context, force: bool) -> None:
    """Create a default configuration file."""
    console = create_console()
    path, created = ensure_config_exists(ctx.obj.get("config_path"), force=force)
    if created:
        console.print_success(f"Created configuration: {path}")
    else:
        console.print_info(f"Configuration already exists: {path}")


@config.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show the effective configuration."""
    session = _load_session(ctx)
    path = ctx.obj.get("config_path") or get_config_path()
    suffix = "" if path.exists() else " [dim](defaults)[/dim]"
    session.console.print(f"[bold]Configuration:[/bold] {escape(str(path))}{suffix}")
    for section, values in session.config.model_dump(mode="json").items():
        session.console.print(f"\n[bold]{section}[/bold]")
        for key, value in values.items():
            shown = escape(str(value)) if value is not None else "[dim]-[/dim]"
            session.console.print(f"  {key}: {shown}")


@config.command("validate")
@click.argument("file", required=False, type=click.Path(path_type=Path))
@click.pass_context
def config_validate(ctx: click.Context, file: Optional[Path]) -> None:
    """Validate a configuration file."""
    console = create_console()
    path = file or ctx.obj.get("config_path") or get_config_path()
    valid, errors = validate_config_file(path)
    if valid:
        console.print_success(f"Configuration is valid: {path}")
        return
    console.print_error(f"Configuration is invalid: {path}")
    for error in errors:
        console.print(f"  • {escape(error)}")
    sys.exit(1)


if __name__ == "__main__":
    cli()
