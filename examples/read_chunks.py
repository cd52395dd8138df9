#!/usr/bin/env python3
"""
Example: Walk the chunks of a MIDI file

Shows how to use decode_chunk to read a file one chunk at a time.
"""

import sys

sys.path.insert(0, "..")

from smfkit import FileSource, HeaderChunk, TrackChunk, UnknownChunk, decode_chunk
from smfkit.analysis import describe_division


def main():
    path = sys.argv[1] if len(sys.argv) > 1 else "song.mid"

    with FileSource.open(path) as source:
        index = 0
        while True:
            chunk = decode_chunk(source)
            if chunk is None:
                break

            if isinstance(chunk, HeaderChunk):
                print(f"[{index}] MThd: format {int(chunk.format)}, {chunk.track_count} tracks")
                print(f"      division: {describe_division(chunk.division)}")
            elif isinstance(chunk, TrackChunk):
                name = chunk.name or "(unnamed)"
                print(f"[{index}] MTrk: {name}, {len(chunk)} events, {chunk.duration_ticks} ticks")
                for event in chunk.events[:5]:
                    print(f"      +{event.delta_time:<5} {event.message}")
                if len(chunk) > 5:
                    print(f"      ... {len(chunk) - 5} more")
            elif isinstance(chunk, UnknownChunk):
                print(f"[{index}] {chunk.name}: {len(chunk.data)} bytes (kept as-is)")

            index += 1


if __name__ == "__main__":
    main()
