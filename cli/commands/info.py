"""
Info command - display file, track and timing information.
"""

from pathlib import Path

import typer
from rich.console import Console

from cli.display.tables import display_smf_info
from smfkit.analysis.smf_analyzer import SMFAnalyzer

console = Console()
app = typer.Typer()


@app.command()
def info(
    file: Path = typer.Argument(..., help="MIDI file to analyze"),
    strict: bool = typer.Option(
        False, "--strict", "-s", help="Reject system messages inside tracks"
    ),
) -> None:
    """
    Show header, track and tempo information of a MIDI file.

    Examples:

        smfkit info song.mid

        smfkit info song.mid --strict
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    analysis = SMFAnalyzer(strict=strict).analyze_file(file)
    display_smf_info(analysis)


if __name__ == "__main__":
    app()
