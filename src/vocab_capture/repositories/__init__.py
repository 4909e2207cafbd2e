"""Repository exports."""

from vocab_capture.repositories.word_repository import WordRepository

__all__ = ["WordRepository"]
