"""
Dump command - annotated hex dump of a MIDI file.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from cli.display.hex_view import build_regions, create_legend, format_hex_line
from smfkit.analysis.smf_analyzer import scan_chunks
from smfkit.models.chunk import CHUNK_HEADER_SIZE

console = Console()
app = typer.Typer()


def parse_offset(value: str) -> int:
    """Parse a decimal or 0x-prefixed offset."""
    try:
        return int(value, 0)
    except ValueError:
        raise typer.BadParameter(f"Not a number: {value}") from None


@app.command()
def dump(
    file: Path = typer.Argument(..., help="MIDI file to dump"),
    start: str = typer.Option("0", "--start", "-s", help="Start offset (hex or decimal)"),
    length: str = typer.Option("0", "--length", "-l", help="Number of bytes (0=all)"),
    width: int = typer.Option(16, "--width", "-w", help="Bytes per line"),
    chunk: Optional[int] = typer.Option(None, "--chunk", "-c", help="Only this chunk (0-based)"),
    no_legend: bool = typer.Option(False, "--no-legend", help="Hide the legend"),
) -> None:
    """
    Annotated hex dump of a MIDI file.

    Bytes are colored by the chunk they belong to, with chunk headers
    (tag + length) set apart from payloads.

    Examples:

        smfkit dump song.mid

        smfkit dump song.mid --chunk 1

        smfkit dump song.mid --start 0x16 --length 64
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    if width <= 0:
        console.print(f"[red]Error: Width must be positive, got {width}[/red]")
        raise typer.Exit(1)

    data = file.read_bytes()
    found = scan_chunks(data)
    regions = build_regions(found, len(data))

    first = parse_offset(start)
    count = parse_offset(length)

    if chunk is not None:
        if not 0 <= chunk < len(found):
            console.print(f"[red]Error: Chunk {chunk} out of range (file has {len(found)})[/red]")
            raise typer.Exit(1)
        selected = found[chunk]
        first = selected.offset
        count = CHUNK_HEADER_SIZE + selected.available

    if not 0 <= first < len(data):
        console.print(f"[red]Error: Start {start} outside file ({len(data)} bytes)[/red]")
        raise typer.Exit(1)

    if count < 0:
        console.print(f"[red]Error: Length must not be negative, got {count}[/red]")
        raise typer.Exit(1)

    if count == 0:
        count = len(data) - first

    end = min(first + count, len(data))

    if not no_legend:
        console.print(create_legend(regions))
        console.print()

    console.print(
        Panel(
            f"[bold]File:[/bold] {file}\n"
            f"[bold]Size:[/bold] {len(data)} bytes, {len(found)} chunks\n"
            f"[bold]Showing:[/bold] 0x{first:X} - 0x{max(first, end - 1):X} ({max(0, end - first)} bytes)",
            title="[bold]MIDI Hex Dump[/bold]",
            border_style="blue",
        )
    )

    header = Text()
    header.append("OFFSET   ", style="dim")
    header.append(f"{'REGION':12s} ", style="dim")
    header.append(" ".join(f"{i:02X}" for i in range(width)), style="dim")
    header.append("  ASCII", style="dim")
    console.print(header)

    lines_shown = 0
    for offset in range(first, end, width):
        console.print(format_hex_line(data[offset : min(offset + width, end)], offset, regions, width))
        lines_shown += 1

    console.print()
    console.print(f"[dim]Total: {lines_shown} lines displayed[/dim]")


if __name__ == "__main__":
    app()
