"""
Hex dump display utilities.

Regions are derived from the chunk framing of the file being dumped: each
chunk contributes an 8-byte header region and a payload region.
"""

from typing import List, Optional, Tuple

from rich import box
from rich.table import Table
from rich.text import Text

from smfkit.analysis.smf_analyzer import ChunkInfo

# (start, end, label, description, color)
Region = Tuple[int, int, str, str, str]

KIND_COLORS = {
    "header": "bright_blue",
    "track": "green",
    "unknown": "magenta",
}


def build_regions(chunks: List[ChunkInfo], filesize: int) -> List[Region]:
    """
    Build dump regions from a chunk scan.

    Returns:
        Regions in file order; bytes after the last complete chunk header
        form a final TRAILING region.
    """
    regions: List[Region] = []
    end = 0

    for chunk in chunks:
        color = KIND_COLORS[chunk.kind]
        header_end = chunk.payload_offset
        label = f"{chunk.name}#{chunk.index}"
        regions.append((chunk.offset, header_end, label, "Chunk tag + length", f"bold {color}"))
        end = header_end + chunk.available
        if chunk.available:
            desc = f"{chunk.kind.title()} payload ({chunk.length} bytes declared)"
            if chunk.truncated:
                desc += ", truncated"
            regions.append((header_end, end, f"{chunk.kind.upper()}#{chunk.index}", desc, color))

    if end < filesize:
        regions.append((end, filesize, "TRAILING", "Bytes that do not form a chunk", "red"))

    return regions


def get_region_for_offset(regions: List[Region], offset: int) -> Optional[Region]:
    for region in regions:
        if region[0] <= offset < region[1]:
            return region
    return None


def format_hex_line(data: bytes, offset: int, regions: List[Region], width: int = 16) -> Text:
    """
    Format one dump line, coloring each byte by the region it falls in.

    Returns Rich Text object with colored output.
    """
    first = get_region_for_offset(regions, offset)
    label = first[2] if first else "?"

    text = Text()
    text.append(f"0x{offset:06X} ", style="dim")
    text.append(f"[{label[:10]:10s}] ", style=first[4] if first else "white")

    for i, byte in enumerate(data):
        region = get_region_for_offset(regions, offset + i)
        style = region[4] if region else "white"
        if byte == 0x00:
            style = "dim"
        text.append(f"{byte:02X}", style=style)
        text.append(" ")

    if len(data) < width:
        text.append("   " * (width - len(data)))

    text.append(" ", style="dim")
    for byte in data:
        if 32 <= byte < 127:
            text.append(chr(byte), style="green")
        else:
            text.append(".", style="dim")

    return text


def create_legend(regions: List[Region]) -> Table:
    """Create a legend for the hex dump colors."""
    table = Table(title="Legend", box=box.SIMPLE, show_header=False, expand=False)
    table.add_column("Region", width=14)
    table.add_column("Description", width=50)

    for start, end, label, desc, color in regions:
        table.add_row(
            Text(label, style=color),
            f"{desc} ({end - start} bytes, 0x{start:X}-0x{end - 1:X})",
        )

    return table
