"""
Events command - list decoded track events.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from cli.display.tables import display_event_table
from smfkit.errors import SMFError
from smfkit.formats.smf.reader import SMFReader

console = Console()
app = typer.Typer()


@app.command()
def events(
    file: Path = typer.Argument(..., help="MIDI file to read"),
    track: Optional[int] = typer.Option(None, "--track", "-t", help="Only this track (0-based)"),
    limit: int = typer.Option(0, "--limit", "-n", help="Events per track (0=all)"),
    strict: bool = typer.Option(
        False, "--strict", "-s", help="Reject system messages inside tracks"
    ),
) -> None:
    """
    Show the events of each track with absolute tick times.

    Tracks that fail to decode are skipped and reported.

    Examples:

        smfkit events song.mid

        smfkit events song.mid --track 1 --limit 50
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    try:
        midi_file = SMFReader.read(file, strict=strict, resync=True)
    except SMFError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        raise typer.Exit(1)

    tracks = midi_file.tracks
    if track is not None and not 0 <= track < len(tracks):
        console.print(f"[red]Error: Track {track} out of range (file has {len(tracks)})[/red]")
        raise typer.Exit(1)

    for index, chunk in enumerate(tracks):
        if track is not None and index != track:
            continue
        display_event_table(index, chunk, limit or None)

    for error in midi_file.errors:
        console.print(f"[yellow]Skipped {escape(str(error))}[/yellow]")


if __name__ == "__main__":
    app()
