"""Storm event entity."""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class StormEvent:
    """Represents one row of the storm events database."""

    event_id: int
    event_type: str  # free-text label, e.g. 'TSTM WIND/HAIL'
    property_damage: float = 0.0  # in dollars, already scaled
    crop_damage: float = 0.0  # in dollars, already scaled
    fatalities: int = 0
    injuries: int = 0
    begin_date: Optional[date] = None

    @property
    def total_damage(self) -> float:
        """Property plus crop damage."""
        return self.property_damage + self.crop_damage

    @property
    def casualties(self) -> int:
        """Fatalities plus injuries."""
        return self.fatalities + self.injuries

    def __str__(self) -> str:
        return f"{self.event_id}_{self.event_type}"
