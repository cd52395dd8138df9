"""
smfkit - Inspect, validate and copy Standard MIDI Files.

A CLI for looking inside .mid files at the chunk, header and event level.
"""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from cli.commands.chunks import chunks
from cli.commands.copy import copy
from cli.commands.dump import dump
from cli.commands.events import events
from cli.commands.info import info
from cli.commands.validate import validate
from smfkit import __version__

console = Console()

# Marks the handler installed by --verbose so repeated calls do not stack
_HANDLER_TAG = "_smfkit_cli_handler"

# Main app
app = typer.Typer(
    name="smfkit",
    help="Inspect, validate and copy Standard MIDI Files.",
    add_completion=False,
    rich_markup_mode="rich",
)

app.command(name="info")(info)
app.command(name="chunks")(chunks)
app.command(name="events")(events)
app.command(name="dump")(dump)
app.command(name="validate")(validate)
app.command(name="copy")(copy)


def configure_logging(verbose: bool) -> None:
    """Route smfkit log records to a RichHandler at DEBUG when verbose."""
    logger = logging.getLogger("smfkit")

    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_TAG, False):
            logger.removeHandler(handler)

    if not verbose:
        logger.setLevel(logging.WARNING)
        return

    handler = RichHandler(show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    setattr(handler, _HANDLER_TAG, True)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]smfkit[/bold] version {__version__}")
    console.print("[dim]Reader and writer for Standard MIDI Files[/dim]")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: bool = typer.Option(False, "--version", "-V", help="Show version"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """
    smfkit - Look inside Standard MIDI Files.

    [bold]Quick Start:[/bold]

        smfkit info song.mid            # Header, tracks and tempo map
        smfkit events song.mid -t 1     # Events of track 1

    [bold]Structure Commands:[/bold]

        smfkit chunks song.mid          # Raw chunk layout
        smfkit dump song.mid            # Annotated hex dump

    [bold]Utility Commands:[/bold]

        smfkit validate song.mid        # Check framing and structure
        smfkit copy in.mid out.mid      # Decode and re-encode

    Use --help with any command for more details.
    """
    configure_logging(verbose)

    if version_flag:
        version()
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
