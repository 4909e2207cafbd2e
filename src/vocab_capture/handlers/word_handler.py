"""Handler for saving spoken words and recording their reviews."""

from collections.abc import Callable
from datetime import datetime
from uuid import UUID

from vocab_capture.domain.clock import utcnow
from vocab_capture.domain.models import WordEntry
from vocab_capture.domain.review_scheduler import apply_review
from vocab_capture.domain.word_builder import WordBuilder
from vocab_capture.logging import setup_logging
from vocab_capture.repositories.word_repository import WordRepository

logger = setup_logging()


class WordHandler:
    """Coordinates word extraction, definition lookup and persistence."""

    def __init__(
        self,
        builder: WordBuilder,
        repository: WordRepository,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._builder = builder
        self._repository = repository
        self._clock = clock

    def capture(self, transcribed_text: str, user_id: str) -> WordEntry:
        """
        Saves the word named in a transcript like "save this word: ubiquitous".

        Raises:
            WordParseError: If the transcript names no word.
            WordPersistenceError: If the entry cannot be stored.
        """
        entry = self._builder.build_entry(transcribed_text, user_id)
        saved = self._repository.create(entry)
        logger.info(
            "Word captured",
            extra={"word_id": str(saved.id), "word": saved.word, "user_id": user_id},
        )
        return saved

    def record_review(self, user_id: str, word_id: UUID, was_correct: bool) -> WordEntry:
        """
        Counts a review and moves the entry's next review date.

        Raises:
            WordNotFoundError: If the user has no such word.
        """
        entry = self._repository.get(user_id, word_id)
        reviewed = apply_review(entry, was_correct, self._clock())
        saved = self._repository.save_review(reviewed)
        logger.info(
            "Word reviewed",
            extra={
                "word_id": str(word_id),
                "was_correct": was_correct,
                "next_review_date": saved.next_review_date.isoformat(),
            },
        )
        return saved

    def list_words(self, user_id: str) -> list[WordEntry]:
        return self._repository.list_for_user(user_id)

    def list_due(self, user_id: str) -> list[WordEntry]:
        return self._repository.list_due(user_id, self._clock())
