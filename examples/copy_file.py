#!/usr/bin/env python3
"""
Example: Decode and re-encode a MIDI file

Shows the three running status policies and how each one changes the
output size.
"""

import sys

sys.path.insert(0, "..")

from smfkit import RunningStatus, SMFReader, SMFWriter


def main():
    path = sys.argv[1] if len(sys.argv) > 1 else "song.mid"

    with open(path, "rb") as f:
        original = f.read()

    midi = SMFReader().parse_bytes(original)
    print(f"{path}: {len(original)} bytes, {midi!r}")

    for policy in RunningStatus:
        data = SMFWriter(policy).to_bytes(midi)
        same = "identical" if data == original else "different"
        print(f"  {policy.value:<9} {len(data):6d} bytes ({same})")

    SMFWriter.write(midi, "copy.mid", running_status=RunningStatus.PRESERVE)
    print("Wrote copy.mid")


if __name__ == "__main__":
    main()
