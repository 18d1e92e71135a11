"""Command-line interface for stamp: build time stamping and copyright years."""

import sys

import click
from colorama import init, Fore, Style

from stamp_cli.version import get_version
from stamp_cli.copyright import ConfigurationError, CopyrightYearConfig, CopyrightYearRewriter
from stamp_cli.commands.build_time import build_time
from stamp_cli.utils.console import _rich_error, _rich_info, _rich_warning, _get_console

init(autoreset=True)

TITLE = f"{Fore.CYAN}{Style.BRIGHT}"
ERROR = f"{Fore.RED}{Style.BRIGHT}"
RESET = Style.RESET_ALL


def print_version(ctx, param, value):
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return

    console = _get_console()
    if console:
        from rich.text import Text
        from rich.panel import Panel
        version_text = Text()
        version_text.append("stamp CLI", style="bold cyan")
        version_text.append(f" version {get_version()}", style="white")
        console.print(Panel(version_text, border_style="cyan", padding=(0, 1)))
    else:
        click.echo(f"{TITLE}stamp CLI{RESET} version {get_version()}")

    ctx.exit()


@click.group(help="stamp: build time stamping and copyright year substitution")
@click.option('--version', is_flag=True, callback=print_version,
              expose_value=False, is_eager=True, help="Show version and exit.")
def cli():
    """Main entry point for the stamp CLI."""
    pass


cli.add_command(build_time)


@cli.command(name="copyright-year", help="Replace the {YEAR} token in a copyright property and/or assembly info file")
@click.option('--project-dir', required=True, type=click.Path(file_okay=False),
              help="Project directory; relative paths resolve against it")
@click.option('--copyright', 'copyright_input', help="Copyright property value")
@click.option('--assembly-info-input', help="Assembly info source file containing the copyright")
@click.option('--assembly-info-output', help="Where to write the rewritten assembly info file")
@click.option('--year', type=int, help="Year to substitute (defaults to the current UTC year)")
def copyright_year(project_dir, copyright_input, assembly_info_input, assembly_info_output, year):
    """Apply the copyright year for a build.

    Values not given on the command line are read from the copyright_year
    section of stamp.yml in the project directory. On success the outputs are
    printed as Copyright=<value> and AssemblyInfo=<path> lines.
    """
    _rich_info("Applying Copyright Year", symbol="gear")

    try:
        config = CopyrightYearConfig.from_stamp_yml(
            project_dir,
            copyright_input=copyright_input,
            assembly_info_input=assembly_info_input,
            assembly_info_output=assembly_info_output
        )
        result = CopyrightYearRewriter().rewrite(config, year=year)
    except ConfigurationError as e:
        _rich_error(f"Invalid configuration: {e}")
        sys.exit(1)
    except (ValueError, OSError) as e:
        _rich_error(f"Failed to apply copyright year: {e}")
        sys.exit(1)

    for warning in result.warnings:
        _rich_warning(warning, symbol="warning")

    if result.copyright is not None:
        click.echo(f"Copyright={result.copyright}")
    if result.assembly_info is not None:
        click.echo(f"AssemblyInfo={result.assembly_info}")


def main():
    """Main entry point for the CLI."""
    try:
        cli()
    except Exception as e:
        click.echo(f"{ERROR}Error: {e}{RESET}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
