"""
Copy command - decode a file and encode it again.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from smfkit.errors import SMFError
from smfkit.formats.smf.events import RunningStatus
from smfkit.formats.smf.reader import SMFReader
from smfkit.formats.smf.writer import SMFWriter

console = Console()
app = typer.Typer()


@app.command()
def copy(
    source: Path = typer.Argument(..., help="Input MIDI file"),
    output: Path = typer.Argument(..., help="Output MIDI file"),
    running_status: RunningStatus = typer.Option(
        RunningStatus.PRESERVE,
        "--running-status",
        "-r",
        help="Status byte policy: explicit, compact or preserve",
        case_sensitive=False,
    ),
    strict: bool = typer.Option(
        False, "--strict", "-s", help="Reject system messages inside tracks"
    ),
) -> None:
    """
    Decode a MIDI file and write it back out.

    With the default [cyan]preserve[/cyan] policy a well-formed file is
    reproduced byte for byte. [cyan]compact[/cyan] omits every repeated
    status byte, [cyan]explicit[/cyan] writes all of them.

    Examples:

        smfkit copy song.mid copy.mid

        smfkit copy song.mid small.mid --running-status compact
    """
    if not source.exists():
        console.print(f"[red]Error: File not found: {source}[/red]")
        raise typer.Exit(1)

    original = source.read_bytes()

    try:
        midi_file = SMFReader(strict=strict).parse_bytes(original)
    except SMFError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        raise typer.Exit(1)

    data = SMFWriter(running_status).to_bytes(midi_file)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(data)

    if data == original:
        result = "[green]Byte-identical[/green]"
    else:
        delta = len(data) - len(original)
        result = f"[yellow]Differs[/yellow] ({delta:+d} bytes)"

    console.print(
        Panel(
            f"[bold]Source:[/bold] {source} ({len(original)} bytes)\n"
            f"[bold]Output:[/bold] {output} ({len(data)} bytes)\n"
            f"[bold]Running status:[/bold] {running_status.value}\n"
            f"[bold]Result:[/bold] {result}",
            title="[bold]Copy[/bold]",
            border_style="green",
            expand=False,
        )
    )


if __name__ == "__main__":
    app()
