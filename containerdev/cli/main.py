"""Main CLI entry point for containerdev."""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from .. import __version__
from ..core.constants import (
    CONFIG_ENV_VAR,
    DEFAULT_RUNTIME,
    DEFAULT_SHELL,
    RUNTIME_ENV_VAR,
)
from ..core.container_runner import ContainerRunner
from ..core.resolver import ProfileResolver
from ..core.supervisor import Supervisor
from ..models.config import Config
from ..utils.config_manager import ConfigManager, default_config_path


def setup_logging(verbose: bool) -> None:
    """Configure logging to stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s: %(message)s',
        stream=sys.stderr,
    )


def print_profiles(config: Config) -> None:
    """Print the configured container profiles as a table."""
    console = Console()

    if not config.containers:
        console.print("[yellow]No containers configured[/yellow]")
        return

    table = Table(title="Containers")
    table.add_column("Name", style="cyan")
    table.add_column("Image")
    table.add_column("Command")
    table.add_column("Flags", style="dim")

    for profile in config.containers:
        flags = [
            flag for flag, enabled in (
                ('stdin', profile.stdin),
                ('as_user', profile.as_user),
                ('mount_workdir', profile.mount_workdir),
            ) if enabled
        ]
        table.add_row(
            profile.name,
            profile.image,
            ' '.join(profile.cmd) or '-',
            ', '.join(flags) or '-',
        )

    console.print(table)


@click.command(context_settings=dict(help_option_names=['-h', '--help']))
@click.argument('name', required=False)
@click.option('--config', 'config_file', envvar=CONFIG_ENV_VAR,
              type=click.Path(dir_okay=False, path_type=Path),
              help='Path to the config file (default: $XDG_CONFIG_HOME/containerdev.yaml)')
@click.option('--runtime', default=DEFAULT_RUNTIME, envvar=RUNTIME_ENV_VAR, show_default=True,
              help='Container runtime binary')
@click.option('--shell', is_flag=True, help=f'Open an interactive {DEFAULT_SHELL} (stdin attached) instead of the container command')
@click.option('--dry-run', is_flag=True, help='Print the runtime command instead of running it')
@click.option('--list', 'list_profiles', is_flag=True, help='List configured containers and exit')
@click.option('-v', '--verbose', is_flag=True, help='Enable debug logging')
@click.version_option(__version__, prog_name='containerdev')
@click.pass_context
def cli(ctx, name, config_file, runtime, shell, dry_run, list_profiles, verbose):
    """containerdev - Run developer tools in throwaway containers.

    NAME is the container to run, as configured in the config file.

    Examples:
        containerdev node
        containerdev --shell alpine
        containerdev --dry-run node
    """
    setup_logging(verbose)

    if not name and not list_profiles:
        raise click.UsageError("Missing argument 'NAME'.")

    config_manager = ConfigManager(config_file or default_config_path())

    def operation(token):
        config = config_manager.load()

        if list_profiles:
            print_profiles(config)
            return

        resolver = ProfileResolver(shell_entrypoint=DEFAULT_SHELL if shell else None)
        options = resolver.resolve(config, name)
        runner = ContainerRunner(runtime)

        if dry_run:
            click.echo(runner.format_command(options))
            return

        runner.run(options, token)

    ctx.exit(Supervisor().run(operation))


if __name__ == '__main__':
    cli()
