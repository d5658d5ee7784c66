"""
Command-line interface for composectl

Forwards commands to docker compose with the compose files selected by the
project's environment file, and reports the containers those files define.
"""

import sys
from typing import Optional, Tuple

import click

from . import __author__, __version__
from .config import ComposectlConfig, load_config
from .environment import EnvResolver
from .exceptions import ComposectlError
from .filesystem import LocalFileSystem
from .forwarder import CommandForwarder
from .inventory import InventoryExtractor, inventory_to_json
from .logging_config import setup_logging


def _fail(message: str) -> None:
    click.echo(f"❌ {message}", err=True)
    sys.exit(1)


@click.group()
@click.option(
    "--root",
    "-r",
    type=click.Path(file_okay=False),
    default=None,
    help="Project root directory (default: current directory)",
)
@click.option(
    "--env-file",
    "-e",
    default=None,
    help="Environment file relative to the project root (default: .env)",
)
@click.option(
    "--compose",
    "compose_binary",
    default=None,
    help="Orchestration binary (default: 'docker compose')",
)
@click.option(
    "--dry-run",
    "-n",
    is_flag=True,
    help="Print commands instead of executing them",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Set logging level",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory for log files",
)
@click.version_option(version=__version__)
@click.pass_context
def cli(
    ctx: click.Context,
    root: Optional[str],
    env_file: Optional[str],
    compose_binary: Optional[str],
    dry_run: bool,
    log_level: Optional[str],
    verbose: bool,
    log_dir: Optional[str],
) -> None:
    """
    composectl: docker compose dispatcher

    Runs compose commands against the files listed in COMPOSE_FILES of the
    project's environment file, and lists the containers they define.
    """
    try:
        config = load_config(
            cli_overrides={
                "root": root,
                "env_file": env_file,
                "compose_binary": compose_binary,
                "dry_run": dry_run or None,
                "log_level": log_level.upper() if log_level else None,
                "verbose": verbose or None,
                "log_dir": log_dir,
            },
        )
    except ValueError as e:
        _fail(f"Invalid configuration: {e}")

    setup_logging(
        log_dir=config.log_dir,
        verbose=config.verbose,
        log_level="DEBUG" if config.verbose else config.log_level,
    )

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj.setdefault("filesystem", LocalFileSystem())
    ctx.obj.setdefault("runner", None)


@cli.command(
    "exec",
    context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False},
)
@click.argument("command", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def exec_command(ctx: click.Context, command: Tuple[str, ...]) -> None:
    """Run a docker compose command with the project's compose files.

    COMMAND: compose sub-command and its arguments, e.g. 'up -d'
    """
    config: ComposectlConfig = ctx.obj["config"]
    forwarder = CommandForwarder(
        filesystem=ctx.obj["filesystem"],
        runner=ctx.obj["runner"],
        default_compose_file=config.default_compose_file,
        echo=click.echo,
        echo_error=lambda message: click.echo(f"❌ {message}", err=True),
    )

    try:
        command_line = forwarder.build(
            config.env_file,
            config.project_root,
            config.compose_binary,
            forwarder.join_arguments(command),
        )
    except ComposectlError as e:
        _fail(str(e))

    result = forwarder.run(command_line, config.project_root, dry_run=config.dry_run)
    if result is None:
        sys.exit(1)


@cli.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """Print the containers defined by the project's compose files as JSON."""
    config: ComposectlConfig = ctx.obj["config"]
    filesystem = ctx.obj["filesystem"]

    try:
        resolver = EnvResolver(filesystem, config.default_compose_file)
        files = resolver.resolve(config.env_file_path)

        if config.dry_run or config.verbose:
            click.echo(f"Root: {config.root}", err=True)
            click.echo(f"Env-file: {config.env_file}", err=True)
            click.echo(f"Files: {', '.join(files)}", err=True)

        containers = InventoryExtractor(filesystem).extract_all(files, config.project_root)
    except ComposectlError as e:
        _fail(str(e))

    click.echo(inventory_to_json(containers))


@cli.command()
@click.pass_context
def files(ctx: click.Context) -> None:
    """List the compose files selected by the environment file."""
    config: ComposectlConfig = ctx.obj["config"]

    try:
        resolver = EnvResolver(ctx.obj["filesystem"], config.default_compose_file)
        compose_files = resolver.resolve(config.env_file_path)
    except ComposectlError as e:
        _fail(str(e))

    for compose_file in compose_files:
        click.echo(compose_file)


@cli.command("env-files")
@click.pass_context
def env_files(ctx: click.Context) -> None:
    """List environment files (.env*) in the project root."""
    config: ComposectlConfig = ctx.obj["config"]
    filesystem = ctx.obj["filesystem"]

    if not filesystem.is_directory(config.project_root):
        _fail(f"Project root not found: {config.root}")

    candidates = [
        path for path in filesystem.get_files(config.project_root)
        if path.name.startswith(".env")
    ]
    if not candidates:
        click.echo("No environment files found")
        return

    for path in candidates:
        marker = "*" if path.name == config.env_file else " "
        click.echo(f"  {marker} {path.name}")


@cli.command("config-show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show the current configuration."""
    config: ComposectlConfig = ctx.obj["config"]

    click.echo("Current composectl Configuration")
    click.echo("=" * 40)
    click.echo(f"Root: {config.root}")
    click.echo(f"Env File: {config.env_file}")
    click.echo(f"Compose Binary: {config.compose_binary}")
    click.echo(f"Default Compose File: {config.default_compose_file}")
    click.echo(f"Dry Run: {config.dry_run}")
    click.echo(f"Log Level: {config.log_level}")
    click.echo(f"Log Dir: {config.log_dir or '(disabled)'}")
    click.echo(f"Verbose: {config.verbose}")


@cli.command()
def version() -> None:
    """Show version information."""
    click.echo(f"composectl version {__version__}")
    click.echo(f"Author: {__author__}")


def main() -> None:
    """Console script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
