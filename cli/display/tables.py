"""
Rich table displays for Standard MIDI File information.
"""

from typing import List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from cli.display.formatters import describe_message
from smfkit.analysis.smf_analyzer import ChunkInfo, SMFAnalysis
from smfkit.models.track import TrackChunk

console = Console()

FORMAT_NAMES = {
    0: "0 (single track)",
    1: "1 (multi-track, synchronous)",
    2: "2 (multi-track, independent)",
}


def display_smf_info(analysis: SMFAnalysis) -> None:
    """Display complete SMF analysis with Rich formatting."""

    status = "[green]Valid[/green]" if analysis.valid else "[red]Invalid[/red]"
    fmt = FORMAT_NAMES.get(analysis.format, "-")

    header_content = f"""[bold]File:[/bold] {analysis.filepath}
[bold]Status:[/bold] {status}
[bold]File Size:[/bold] {analysis.filesize} bytes
[bold]Format:[/bold] {fmt}
[bold]Division:[/bold] {analysis.division_text}
[bold]Tracks:[/bold] {analysis.actual_tracks} (header declares {analysis.declared_tracks})
[bold]Unknown Chunks:[/bold] {analysis.unknown_chunks}"""

    console.print(
        Panel(
            header_content,
            title="[bold blue]MIDI File Info[/bold blue]",
            border_style="blue",
            expand=False,
        )
    )

    if analysis.tracks:
        track_table = Table(
            title="Tracks", box=box.ROUNDED, show_header=True, header_style="bold magenta"
        )
        track_table.add_column("#", style="dim", width=3)
        track_table.add_column("Name", style="cyan", width=20)
        track_table.add_column("Events", justify="right", width=7)
        track_table.add_column("Channels", width=12)
        track_table.add_column("Notes", justify="right", width=6)
        track_table.add_column("Range", width=9)
        track_table.add_column("Ticks", justify="right", width=8)
        track_table.add_column("RS", justify="right", width=5)
        track_table.add_column("EOT", width=4)

        for track in analysis.tracks:
            channels = ", ".join(str(c + 1) for c in track.channels) or "-"
            eot = "[green]yes[/green]" if track.has_end_of_track else "[red]no[/red]"
            track_table.add_row(
                str(track.index),
                escape(track.name) or "[dim]-[/dim]",
                str(track.event_count),
                channels,
                str(track.note_count),
                track.note_range_names,
                str(track.length_ticks),
                str(track.running_status_events),
                eot,
            )

        console.print(track_table)

    if analysis.tempo_map or analysis.time_signatures:
        timing_table = Table(title="Timing", box=box.SIMPLE, show_header=True, header_style="dim")
        timing_table.add_column("Tick", justify="right", width=8)
        timing_table.add_column("Event", style="cyan", width=16)
        timing_table.add_column("Value", width=16)

        for tick, bpm in analysis.tempo_map:
            timing_table.add_row(str(tick), "Tempo", f"{bpm:.2f} BPM")
        for tick, signature in analysis.time_signatures:
            timing_table.add_row(str(tick), "Time Signature", signature)

        console.print(timing_table)

    if analysis.errors:
        console.print()
        for error in analysis.errors:
            console.print(f"[red]•[/red] {escape(error)}")


def display_chunk_table(chunks: List[ChunkInfo], trailing_bytes: int = 0) -> None:
    """Display the raw chunk layout."""
    table = Table(title="Chunks", box=box.ROUNDED, show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=3)
    table.add_column("Offset", style="dim", width=10)
    table.add_column("Tag", style="cyan", width=8)
    table.add_column("Length", justify="right", width=10)
    table.add_column("Kind", width=10)
    table.add_column("Status", width=16)

    for chunk in chunks:
        if chunk.truncated:
            status = f"[red]truncated ({chunk.available})[/red]"
        else:
            status = "[green]complete[/green]"
        table.add_row(
            str(chunk.index),
            f"0x{chunk.offset:06X}",
            escape(chunk.name),
            str(chunk.length),
            chunk.kind,
            status,
        )

    console.print(table)

    if trailing_bytes:
        console.print(f"[yellow]{trailing_bytes} trailing byte(s) after the last chunk[/yellow]")


def display_event_table(index: int, track: TrackChunk, limit: Optional[int] = None) -> None:
    """Display the events of one track with absolute times."""
    title = f"Track {index}"
    if track.name:
        title += f": {escape(track.name)}"

    table = Table(title=title, box=box.SIMPLE, show_header=True, header_style="bold magenta")
    table.add_column("Tick", justify="right", width=8)
    table.add_column("Delta", justify="right", style="dim", width=6)
    table.add_column("Type", style="cyan", width=22)
    table.add_column("Ch", justify="right", width=3)
    table.add_column("Details", width=44)

    events = track.with_absolute_times()
    shown = events if limit is None else events[:limit]

    for tick, event in shown:
        name, channel, details = describe_message(event.message)
        table.add_row(str(tick), str(event.delta_time), name, channel, details)

    console.print(table)

    if len(shown) < len(events):
        console.print(f"[dim]... {len(events) - len(shown)} more events ...[/dim]")
