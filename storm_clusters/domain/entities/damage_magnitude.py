"""Damage magnitude enumeration."""

from enum import Enum
from typing import Any


class DamageMagnitude(str, Enum):
    """Magnitude codes used alongside damage amounts."""

    THOUSANDS = "K"
    MILLIONS = "M"
    BILLIONS = "B"

    @property
    def multiplier(self) -> float:
        """Factor the raw amount is scaled by."""
        mapping = {
            DamageMagnitude.THOUSANDS: 1e3,
            DamageMagnitude.MILLIONS: 1e6,
            DamageMagnitude.BILLIONS: 1e9,
        }
        return mapping[self]

    @classmethod
    def multiplier_for(cls, code: Any) -> float:
        """
        Decode a raw magnitude code into a multiplier.

        Codes are matched case-insensitively. Anything that is not K, M or B
        (blank, missing, digits, '+', 'H', ...) decodes to 0.
        """
        if not isinstance(code, str):
            return 0.0
        try:
            return cls(code.strip().upper()).multiplier
        except ValueError:
            return 0.0
