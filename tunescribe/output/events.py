"""Absolute-time event scheduling shared by the binary encoders.

Encoders collect events at absolute positions (MIDI ticks, sample indices),
then consume them in time order as relative deltas. Ties keep insertion order.
"""

from dataclasses import dataclass
from typing import Generic, Iterator, List, Tuple, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class TimedEvent(Generic[T]):
    """An event at an absolute integer position."""

    time: int
    payload: T


class EventSchedule(Generic[T]):
    """Collects timed events and replays them as (delta, payload) pairs."""

    def __init__(self) -> None:
        self._events: List[TimedEvent[T]] = []

    def __len__(self) -> int:
        return len(self._events)

    def add(self, time: int, payload: T) -> None:
        """Schedule a payload at an absolute position (must be >= 0)."""
        if time < 0:
            raise ValueError(f"Event time must be non-negative, got {time}")
        self._events.append(TimedEvent(time, payload))

    def sorted(self) -> List[TimedEvent[T]]:
        """Events by ascending time; sorted() is stable, so ties keep insertion order."""
        return sorted(self._events, key=lambda event: event.time)

    def deltas(self) -> Iterator[Tuple[int, T]]:
        """Yield (time since previous event, payload) in time order."""
        previous = 0
        for event in self.sorted():
            yield max(0, event.time - previous), event.payload
            previous = event.time
