"""CLI interface for cliutil using Typer framework."""

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console

from cliutil import __description__, __version__
from cliutil.errors import ErrorList, ErrorReporter, fault
from cliutil.options import ProgramOptions, load_options
from cliutil.version import version_string

REQUIRED_KEYS = ("program-name", "program-version", "program-timestamp")

app = typer.Typer(
    name="cliutil",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()


def _own_options() -> ProgramOptions:
    return ProgramOptions(program_name="cliutil", program_version=__version__)


def _print_banner(opts: ProgramOptions) -> None:
    console.print(version_string(opts), markup=False, highlight=False, soft_wrap=True)


def _report(reporter: ErrorReporter, err: BaseException, *prefix: object) -> None:
    """Print an error and end the line, which trace output leaves open."""
    reporter.print(err, *prefix)
    if reporter.include_trace:
        typer.echo(err=True)


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        _print_banner(_own_options())
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version", "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit"
        )
    ] = False,
) -> None:
    """cliutil - Error reporting and version banners for command-line programs."""


@app.command("version")
def version_command(
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="JSON options file describing the program")
    ] = None,
) -> None:
    """Print the version banner of a program.

    Without --config the banner describes cliutil itself.
    """
    opts = _own_options()
    if config is not None:
        try:
            opts = load_options(config)
        except (FileNotFoundError, ValueError) as e:
            fault(e, "Failed to load options from ", str(config))

    _print_banner(opts)


@app.command()
def check(
    path: Annotated[Path, typer.Argument(help="JSON options file to check")],
    trace: Annotated[
        bool,
        typer.Option("--trace", help="Print error origins along with messages")
    ] = False,
) -> None:
    """Check that an options file defines the program name, version and timestamp."""
    reporter = ErrorReporter(include_trace=trace)

    try:
        opts = load_options(path)
    except (FileNotFoundError, ValueError) as e:
        _report(reporter, reporter.annotate(e, "loading ", path))
        raise typer.Exit(1)

    problems = ErrorList("invalid options file")
    for key in REQUIRED_KEYS:
        if not opts.is_set(key):
            problems.append(reporter.new("missing required key '%s'", key))

    if not problems.is_empty():
        reporter.print_list(problems)
        raise typer.Exit(1)

    console.print(f"[green]OK[/green] {path}")
