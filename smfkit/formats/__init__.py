"""Format handlers."""

from smfkit.formats.smf import SMFReader, SMFWriter

__all__ = ["SMFReader", "SMFWriter"]
