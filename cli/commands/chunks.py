"""
Chunks command - list the raw chunk layout of a file.
"""

from pathlib import Path

import typer
from rich.console import Console

from cli.display.tables import display_chunk_table
from smfkit.analysis.smf_analyzer import scan_chunks
from smfkit.models.chunk import CHUNK_HEADER_SIZE

console = Console()
app = typer.Typer()


@app.command()
def chunks(
    file: Path = typer.Argument(..., help="MIDI file to inspect"),
) -> None:
    """
    List every chunk with its offset, tag and declared length.

    Payloads are not decoded, so this also works on damaged files.

    Examples:

        smfkit chunks song.mid
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    data = file.read_bytes()
    found = scan_chunks(data)
    trailing = len(data) - sum(CHUNK_HEADER_SIZE + c.available for c in found)

    display_chunk_table(found, trailing)


if __name__ == "__main__":
    app()
