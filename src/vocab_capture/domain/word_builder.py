"""Core business logic for turning a spoken request into a word entry."""

import re
from collections.abc import Callable
from datetime import datetime, timedelta

from vocab_capture.domain.clock import utcnow
from vocab_capture.domain.models import Difficulty, WordDefinition, WordEntry
from vocab_capture.exceptions import CacheServiceError, LLMServiceError, WordParseError
from vocab_capture.infrastructure.interfaces import CacheService, LLMService
from vocab_capture.logging import setup_logging

logger = setup_logging()

_SAVE_WORD = re.compile(r"save (?:this )?word:?\s*(.+)", re.IGNORECASE)
_EDGE_PUNCTUATION = " \t\n.,!?;:\"'"

FIRST_REVIEW_DELAY = timedelta(days=1)


class WordBuilder:
    """Extracts the target word and attaches a definition to it."""

    def __init__(
        self,
        llm_service: LLMService,
        cache_service: CacheService | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._llm = llm_service
        self._cache = cache_service
        self._clock = clock

    def extract_word(self, transcribed_text: str) -> str:
        """
        Finds the word in phrases like "save this word: serendipity".

        Raises:
            WordParseError: If the phrase is missing or names no word.
        """
        match = _SAVE_WORD.search(transcribed_text or "")
        word = match.group(1).strip(_EDGE_PUNCTUATION).lower() if match else ""
        if not word:
            raise WordParseError(transcribed_text)
        return word

    def define(self, word: str) -> WordDefinition:
        """
        Returns a complete definition, using the cache when available.

        LLM failures degrade to a placeholder definition; cache failures are
        logged and bypassed.
        """
        cached = self._cache_get(word)
        if cached is not None:
            logger.info("Definition retrieved from cache", extra={"word": word})
            return cached

        try:
            generated = self._llm.define(word)
        except LLMServiceError:
            logger.warning("Using fallback definition", extra={"word": word})
            return WordDefinition(
                word=word,
                meaning="Definition to be added",
                usage_example=f"I need to learn more about the word {word}.",
                difficulty=Difficulty.INTERMEDIATE,
            )

        definition = WordDefinition(
            word=word,
            meaning=generated.meaning or "Definition not available",
            usage_example=generated.usage_example
            or f"Example with {word} not available",
            pronunciation=generated.pronunciation or None,
            difficulty=generated.difficulty or Difficulty.INTERMEDIATE,
            category=generated.category or "other",
        )
        self._cache_set(definition)
        return definition

    def build_entry(self, transcribed_text: str, user_id: str) -> WordEntry:
        """Creates a new entry, due for its first review one day from now."""
        word = self.extract_word(transcribed_text)
        definition = self.define(word)
        now = self._clock()
        return WordEntry(
            word=word,
            meaning=definition.meaning,
            usage_example=definition.usage_example,
            pronunciation=definition.pronunciation,
            difficulty=definition.difficulty,
            category=definition.category,
            next_review_date=now + FIRST_REVIEW_DELAY,
            created_at=now,
            user_id=user_id,
        )

    def _cache_get(self, word: str) -> WordDefinition | None:
        if self._cache is None:
            return None
        try:
            return self._cache.get_definition(word)
        except CacheServiceError:
            logger.warning("Cache unavailable, skipping lookup", extra={"word": word})
            return None

    def _cache_set(self, definition: WordDefinition) -> None:
        if self._cache is None:
            return
        try:
            self._cache.save_definition(definition)
        except CacheServiceError:
            logger.warning(
                "Cache unavailable, definition not cached",
                extra={"word": definition.word},
            )
