"""Event token entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class EventToken:
    """A stemmed word taken from one event's type label."""

    event_id: int
    stem: str

    def __str__(self) -> str:
        return f"{self.event_id}:{self.stem}"
