"""
Validate command - check MIDI file framing and structure.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from smfkit.analysis.smf_analyzer import ChunkInfo, scan_chunks
from smfkit.errors import InvalidMetaEvent, SMFError
from smfkit.formats.smf.reader import SMFReader
from smfkit.models.chunk import CHUNK_HEADER_SIZE, UnknownChunk, tag_to_str
from smfkit.models.event import ChannelMessage, SystemMessage
from smfkit.models.header import Format, HeaderChunk
from smfkit.models.meta import MetaMessage
from smfkit.models.midi_file import MidiFile
from smfkit.models.track import TrackChunk

console = Console()
app = typer.Typer()


@dataclass
class ValidationIssue:
    """A single validation issue."""

    severity: str  # "error", "warning", "info"
    area: str
    offset: int
    message: str


@dataclass
class ValidationResult:
    """Result of validating a MIDI file."""

    filepath: str
    valid: bool
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)
    info: List[ValidationIssue] = field(default_factory=list)

    @property
    def total_issues(self) -> int:
        return len(self.errors) + len(self.warnings) + len(self.info)


class SMFValidator:
    """Validate Standard MIDI File framing, header and tracks."""

    # MThd header (8) + payload (6)
    MIN_FILE_SIZE = 14

    def __init__(self, data: bytes, filepath: str, strict: bool = False):
        self.data = data
        self.filepath = filepath
        self.strict = strict
        self.issues: List[ValidationIssue] = []

    def validate(self) -> ValidationResult:
        """Perform full validation and return result."""
        self.issues = []

        chunks = self._validate_framing()
        midi_file = self._decode()
        if midi_file is not None:
            decoded = self._decoded_chunk_infos(chunks, midi_file)
            self._validate_header(midi_file)
            for info, parsed in zip(decoded, midi_file.chunks):
                if isinstance(parsed, TrackChunk):
                    self._validate_track(info, parsed)
                elif isinstance(parsed, UnknownChunk):
                    self._add_issue(
                        "info", "Chunks", info.offset, f"Unknown chunk {parsed.name} kept as-is"
                    )

        errors = [i for i in self.issues if i.severity == "error"]
        warnings = [i for i in self.issues if i.severity == "warning"]
        info = [i for i in self.issues if i.severity == "info"]

        valid = not errors and not (self.strict and warnings)

        return ValidationResult(
            filepath=self.filepath,
            valid=valid,
            errors=errors,
            warnings=warnings,
            info=info,
        )

    def _add_issue(self, severity: str, area: str, offset: int, message: str) -> None:
        self.issues.append(ValidationIssue(severity, area, offset, message))

    def _validate_framing(self) -> List[ChunkInfo]:
        if len(self.data) < self.MIN_FILE_SIZE:
            self._add_issue(
                "error",
                "File Size",
                0,
                f"File too short for a header chunk ({len(self.data)} bytes)",
            )

        chunks = scan_chunks(self.data)
        for chunk in chunks:
            if chunk.truncated:
                self._add_issue(
                    "error",
                    "Framing",
                    chunk.offset,
                    f"{chunk.name} declares {chunk.length} bytes, only {chunk.available} present",
                )

        used = sum(CHUNK_HEADER_SIZE + c.available for c in chunks)
        if used < len(self.data):
            self._add_issue(
                "error",
                "Framing",
                used,
                f"{len(self.data) - used} trailing byte(s) after the last chunk",
            )

        if chunks and not any(c.truncated for c in chunks):
            self._add_issue("info", "Framing", 0, f"{len(chunks)} chunks framed correctly")

        return chunks

    def _decode(self) -> Optional[MidiFile]:
        reader = SMFReader(strict=self.strict, resync=True)
        try:
            midi_file = reader.parse_bytes(self.data)
        except SMFError as exc:
            # Framing errors were already reported by the scan
            if not any(i.area == "Framing" and i.severity == "error" for i in self.issues):
                self._add_issue("error", "Framing", exc.offset or 0, str(exc))
            return None

        for error in midi_file.errors:
            area = f"{tag_to_str(error.tag)}#{error.index}"
            self._add_issue("error", area, error.offset, str(error.error))
        return midi_file

    def _decoded_chunk_infos(self, chunks: List[ChunkInfo], midi_file: MidiFile) -> List[ChunkInfo]:
        skipped = {e.index for e in midi_file.errors}
        return [c for c in chunks if c.index not in skipped]

    def _validate_header(self, midi_file: MidiFile) -> None:
        chunks = midi_file.chunks
        if not chunks or not isinstance(chunks[0], HeaderChunk):
            self._add_issue("error", "Header", 0, "File does not start with an MThd chunk")

        headers = [c for c in chunks if isinstance(c, HeaderChunk)]
        if len(headers) > 1:
            self._add_issue("error", "Header", 0, f"File has {len(headers)} MThd chunks")

        header = midi_file.header
        if header is None:
            return

        tracks = len(midi_file.tracks)
        if header.track_count != tracks:
            self._add_issue(
                "error",
                "Header",
                0,
                f"Header declares {header.track_count} tracks, file has {tracks}",
            )
        elif header.format == Format.SINGLE_TRACK and tracks != 1:
            self._add_issue("error", "Header", 0, f"Format 0 file has {tracks} tracks")
        else:
            self._add_issue(
                "info", "Header", 0, f"Format {int(header.format)} with {tracks} track(s)"
            )

    def _validate_track(self, info: ChunkInfo, track: TrackChunk) -> None:
        area = f"{info.name}#{info.index}"

        if not track.has_end_of_track:
            self._add_issue("warning", area, info.offset, "Track does not end with End of Track")

        ends = sum(1 for m in track.messages if isinstance(m, MetaMessage) and m.is_end_of_track)
        if ends > 1:
            self._add_issue("warning", area, info.offset, f"{ends} End of Track events")

        system = sum(1 for m in track.messages if isinstance(m, SystemMessage))
        if system:
            self._add_issue(
                "warning", area, info.offset, f"{system} system message(s) inside the track"
            )

        for message in track.messages:
            if isinstance(message, MetaMessage):
                try:
                    _ = message.value
                except InvalidMetaEvent as exc:
                    self._add_issue("warning", area, info.offset, str(exc))

        running = sum(
            1 for m in track.messages if isinstance(m, ChannelMessage) and m.implicit_status
        )
        self._add_issue(
            "info",
            area,
            info.offset,
            f"{len(track)} events decoded ({running} with running status)",
        )


def display_validation(result: ValidationResult) -> None:
    """Display validation result with Rich formatting."""
    if result.valid:
        status = "[green]VALID[/green]"
        border = "green"
    else:
        status = "[red]INVALID[/red]"
        border = "red"

    console.print(
        Panel(
            f"[bold]File:[/bold] {result.filepath}\n"
            f"[bold]Status:[/bold] {status}\n\n"
            f"Errors: [red]{len(result.errors)}[/red]  "
            f"Warnings: [yellow]{len(result.warnings)}[/yellow]  "
            f"Info: [blue]{len(result.info)}[/blue]",
            title="[bold]Validation Result[/bold]",
            border_style=border,
        )
    )

    if result.errors or result.warnings:
        table = Table(title="Issues", box=box.ROUNDED, show_header=True, header_style="bold cyan")
        table.add_column("Severity", width=10)
        table.add_column("Area", style="cyan", width=12)
        table.add_column("Offset", style="dim", width=10)
        table.add_column("Message", width=50)

        for issue in result.errors:
            table.add_row(
                "[red]ERROR[/red]", escape(issue.area), f"0x{issue.offset:X}", escape(issue.message)
            )

        for issue in result.warnings:
            table.add_row(
                "[yellow]WARN[/yellow]", escape(issue.area), f"0x{issue.offset:X}", escape(issue.message)
            )

        console.print(table)

    if result.info and not result.errors and not result.warnings:
        info_table = Table(title="Validation Checks", box=box.SIMPLE, show_header=False)
        info_table.add_column("", width=70)

        for issue in result.info:
            info_table.add_row(f"[green]OK[/green] {escape(issue.area)}: {escape(issue.message)}")

        console.print(info_table)


@app.command()
def validate(
    file: Path = typer.Argument(..., help="MIDI file to validate"),
    strict: bool = typer.Option(
        False,
        "--strict",
        "-s",
        help="Reject system messages inside tracks and treat warnings as errors",
    ),
) -> None:
    """
    Validate a MIDI file's chunk framing, header and tracks.

    Checks for:

    - Complete chunk framing and no trailing bytes
    - A single MThd header matching the number of tracks
    - Decodable track events ending with End of Track
    - Well-formed meta event payloads

    Examples:

        smfkit validate song.mid

        smfkit validate song.mid --strict
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    data = file.read_bytes()

    validator = SMFValidator(data, str(file), strict=strict)
    result = validator.validate()

    display_validation(result)

    if not result.valid:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
