"""Repository for vocabulary word persistence."""

from datetime import datetime, timezone
from uuid import UUID

from sqlmodel import select

from vocab_capture.db_models import WordRecord
from vocab_capture.domain.models import Difficulty, WordEntry
from vocab_capture.exceptions import WordNotFoundError, WordPersistenceError
from vocab_capture.logging import setup_logging

logger = setup_logging()


class WordRepository:
    """
    Handles database operations for word entries.

    Encapsulates SQL queries and transaction management, and converts rows
    to domain entries, keeping handlers and routes free of database concerns.
    """

    def __init__(self, session_factory):
        """
        Initializes the repository.

        Args:
            session_factory: Callable that returns a SQLModel Session context manager.
        """
        self._session_factory = session_factory

    def create(self, entry: WordEntry) -> WordEntry:
        """
        Persists a new word entry.

        Raises:
            WordPersistenceError: If the insert fails.
        """
        try:
            with self._session_factory() as db_session:
                record = WordRecord(
                    id=entry.id,
                    user_id=entry.user_id,
                    word=entry.word,
                    meaning=entry.meaning,
                    usage_example=entry.usage_example,
                    pronunciation=entry.pronunciation,
                    difficulty=entry.difficulty.value if entry.difficulty else None,
                    category=entry.category,
                    next_review_date=entry.next_review_date,
                    review_count=entry.review_count,
                    correct_count=entry.correct_count,
                    created_at=entry.created_at,
                )
                db_session.add(record)
                db_session.commit()
                db_session.refresh(record)
                logger.info(
                    "Word entry persisted",
                    extra={"word_id": str(record.id), "user_id": entry.user_id},
                )
                return _to_entry(record)
        except Exception as e:
            logger.exception("Failed to persist word", extra={"user_id": entry.user_id})
            raise WordPersistenceError("create", cause=e) from e

    def list_for_user(self, user_id: str) -> list[WordEntry]:
        """Returns the user's words, newest first."""
        statement = (
            select(WordRecord)
            .where(WordRecord.user_id == user_id)
            .order_by(WordRecord.created_at.desc())
        )
        return self._list(statement, "list")

    def list_due(self, user_id: str, now: datetime) -> list[WordEntry]:
        """Returns the user's words whose review date has passed, soonest first."""
        statement = (
            select(WordRecord)
            .where(WordRecord.user_id == user_id, WordRecord.next_review_date <= now)
            .order_by(WordRecord.next_review_date)
        )
        return self._list(statement, "list_due")

    def get(self, user_id: str, word_id: UUID) -> WordEntry:
        """
        Raises:
            WordNotFoundError: If the user owns no word with this id.
        """
        try:
            with self._session_factory() as db_session:
                record = db_session.get(WordRecord, word_id)
        except Exception as e:
            logger.exception("Failed to load word", extra={"word_id": str(word_id)})
            raise WordPersistenceError("get", cause=e) from e

        if record is None or record.user_id != user_id:
            raise WordNotFoundError(str(word_id))
        return _to_entry(record)

    def save_review(self, entry: WordEntry) -> WordEntry:
        """Stores the review counters and next review date of an entry."""
        try:
            with self._session_factory() as db_session:
                record = db_session.get(WordRecord, entry.id)
                if record is None:
                    raise WordNotFoundError(str(entry.id))
                record.review_count = entry.review_count
                record.correct_count = entry.correct_count
                record.next_review_date = entry.next_review_date
                db_session.add(record)
                db_session.commit()
                db_session.refresh(record)
                logger.info(
                    "Word review persisted",
                    extra={"word_id": str(entry.id), "review_count": entry.review_count},
                )
                return _to_entry(record)
        except WordNotFoundError:
            raise
        except Exception as e:
            logger.exception("Failed to persist review", extra={"word_id": str(entry.id)})
            raise WordPersistenceError("save_review", cause=e) from e

    def _list(self, statement, operation: str) -> list[WordEntry]:
        try:
            with self._session_factory() as db_session:
                records = db_session.exec(statement).all()
                return [_to_entry(r) for r in records]
        except Exception as e:
            logger.exception("Failed to list words", extra={"operation": operation})
            raise WordPersistenceError(operation, cause=e) from e


def _to_entry(record: WordRecord) -> WordEntry:
    return WordEntry(
        id=record.id,
        word=record.word,
        meaning=record.meaning,
        usage_example=record.usage_example,
        pronunciation=record.pronunciation,
        difficulty=Difficulty(record.difficulty) if record.difficulty else None,
        category=record.category,
        next_review_date=_as_utc(record.next_review_date),
        review_count=record.review_count,
        correct_count=record.correct_count,
        created_at=_as_utc(record.created_at),
        user_id=record.user_id,
    )


def _as_utc(value: datetime) -> datetime:
    """SQLite drops the offset on read; stored values are always UTC."""
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value
