"""
CLI display modules.
"""

from cli.display.tables import (
    display_chunk_table,
    display_event_table,
    display_smf_info,
)
from cli.display.hex_view import build_regions, create_legend, format_hex_line

__all__ = [
    "display_chunk_table",
    "display_event_table",
    "display_smf_info",
    "build_regions",
    "create_legend",
    "format_hex_line",
]
