"""
Track chunk data model.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Sequence, Tuple

from smfkit.models.event import ChannelMessage, MidiMessage, TrackEvent
from smfkit.models.meta import MetaMessage, MetaType


@dataclass(frozen=True)
class TrackChunk:
    """
    Decoded MTrk chunk: an ordered sequence of delta-timed events.

    Attributes:
        events: Events in playback order
    """

    events: Tuple[TrackEvent, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not isinstance(self.events, tuple):
            object.__setattr__(self, "events", tuple(self.events))

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self) -> Iterator[TrackEvent]:
        return iter(self.events)

    @property
    def tag(self) -> bytes:
        return b"MTrk"

    @property
    def messages(self) -> List[MidiMessage]:
        return [e.message for e in self.events]

    @property
    def duration_ticks(self) -> int:
        """Absolute time of the last event."""
        return sum(e.delta_time for e in self.events)

    @property
    def has_end_of_track(self) -> bool:
        return bool(self.events) and (
            isinstance(self.events[-1].message, MetaMessage)
            and self.events[-1].message.is_end_of_track
        )

    @property
    def name(self) -> str:
        """First track name meta event, or empty string."""
        for message in self.messages:
            if isinstance(message, MetaMessage) and message.meta_type == MetaType.TRACK_NAME:
                return message.value
        return ""

    def with_absolute_times(self) -> List[Tuple[int, TrackEvent]]:
        """Pair each event with its absolute tick position."""
        result = []
        now = 0
        for event in self.events:
            now += event.delta_time
            result.append((now, event))
        return result

    def channel_messages(self) -> List[ChannelMessage]:
        return [m for m in self.messages if isinstance(m, ChannelMessage)]

    def to_dict(self) -> Dict[str, Any]:
        return {"chunk": "track", "events": [e.to_dict() for e in self.events]}

    @classmethod
    def from_messages(
        cls, messages: Sequence[Tuple[int, MidiMessage]], end_of_track: bool = True
    ) -> "TrackChunk":
        """
        Build a track from (delta_time, message) pairs.

        Args:
            messages: Delta-timed messages
            end_of_track: Append an End of Track event if missing
        """
        events = [TrackEvent(delta, message) for delta, message in messages]
        track = cls(tuple(events))
        if end_of_track and not track.has_end_of_track:
            events.append(TrackEvent(0, MetaMessage.end_of_track()))
            track = cls(tuple(events))
        return track
