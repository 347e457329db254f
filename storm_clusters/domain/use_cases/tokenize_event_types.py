"""Use case for turning event type labels into stemmed tokens."""

import logging
from typing import Dict, List

from nltk.stem.snowball import SnowballStemmer

from ..entities.event_token import EventToken
from ..entities.storm_event import StormEvent
from .normalize_event_label import normalize_label

logger = logging.getLogger(__name__)


class EventTypeStemmer:
    """
    English Snowball stemmer that always returns a fixed point.

    A single Snowball pass is not idempotent for every word
    ('agreed' -> 'agre' -> 'agr'), so the algorithm is re-applied until the
    output stops changing.
    """

    MAX_PASSES = 10

    def __init__(self, language: str = "english"):
        self.language = language
        self._stemmer = SnowballStemmer(language)
        self._cache: Dict[str, str] = {}

    def stem(self, word: str) -> str:
        cached = self._cache.get(word)
        if cached is not None:
            return cached

        current = word
        for _ in range(self.MAX_PASSES):
            stemmed = self._stemmer.stem(current)
            if stemmed == current:
                self._cache[current] = current
                break
            current = stemmed
        else:
            logger.warning(f"Stemming '{word}' did not settle after {self.MAX_PASSES} passes")

        self._cache[word] = current
        return current


class TokenizeEventTypesUseCase:
    """Use case to normalize and stem every event's type label."""

    def __init__(self, stemmer: EventTypeStemmer = None):
        """
        Initialize use case.

        Args:
            stemmer: Stemmer to use (default: English Snowball)
        """
        self.stemmer = stemmer or EventTypeStemmer()

    def tokenize(self, label: str) -> List[str]:
        """Distinct stems of one label, in order of first occurrence."""
        stems: List[str] = []
        for word in normalize_label(label):
            stem = self.stemmer.stem(word)
            if stem and stem not in stems:
                stems.append(stem)
        return stems

    def execute(self, events: List[StormEvent]) -> List[EventToken]:
        """
        Execute tokenization.

        Args:
            events: List of StormEvent entities

        Returns:
            List of EventToken entities, at most one per (event, stem)
        """
        logger.info(f"Tokenizing event types of {len(events)} events")

        label_cache: Dict[str, List[str]] = {}
        tokens: List[EventToken] = []
        n_empty = 0

        for event in events:
            label = event.event_type
            stems = label_cache.get(label)
            if stems is None:
                stems = self.tokenize(label)
                label_cache[label] = stems

            if not stems:
                n_empty += 1
                continue
            tokens.extend(EventToken(event_id=event.event_id, stem=stem) for stem in stems)

        if n_empty:
            logger.info(f"{n_empty} events have no usable words in their label")
        logger.info(
            f"Produced {len(tokens)} tokens from {len(label_cache)} distinct labels"
        )
        return tokens
