"""Storm event repository interface."""

from abc import ABC, abstractmethod
from typing import List
from ..entities.storm_event import StormEvent


class StormEventRepository(ABC):
    """Abstract repository for storm event data access."""

    @abstractmethod
    def get_events(self) -> List[StormEvent]:
        """
        Retrieve all storm events.

        Returns:
            List of StormEvent entities with damage amounts already scaled

        Raises:
            SchemaError: If the source is missing required fields
        """
        pass
