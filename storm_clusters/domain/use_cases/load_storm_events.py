"""Use case for loading storm events."""

import logging
from typing import List
from ..entities.storm_event import StormEvent
from ..repositories.storm_event_repository import StormEventRepository

logger = logging.getLogger(__name__)


class LoadStormEventsUseCase:
    """Use case to load storm events from a repository."""

    def __init__(self, repository: StormEventRepository):
        """
        Initialize use case.

        Args:
            repository: Repository for storm event data access
        """
        self.repository = repository

    def execute(self) -> List[StormEvent]:
        """
        Execute the use case.

        Returns:
            List of StormEvent entities
        """
        logger.info(f"Loading storm events via {type(self.repository).__name__}")
        events = self.repository.get_events()
        logger.info(f"Loaded {len(events)} storm events")
        return events
