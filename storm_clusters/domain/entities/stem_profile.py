"""Stem profile entity."""

from dataclasses import dataclass
from typing import Tuple

PROFILE_FIELDS = ("property_damage", "crop_damage", "fatalities", "injuries")


@dataclass(frozen=True)
class StemProfile:
    """Log-transformed mean damage and casualties for one stem."""

    stem: str
    support: int  # number of (event, stem) pairs behind the means
    property_damage: float
    crop_damage: float
    fatalities: float
    injuries: float

    @property
    def vector(self) -> Tuple[float, float, float, float]:
        """Profile as a point in the clustering space."""
        return tuple(getattr(self, name) for name in PROFILE_FIELDS)

    def __str__(self) -> str:
        return self.stem
