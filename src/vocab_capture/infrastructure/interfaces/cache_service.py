"""Abstract interface for the word definition cache."""

from abc import ABC, abstractmethod

from vocab_capture.domain.models import WordDefinition


class CacheService(ABC):
    """
    Remembers generated definitions by normalized word.

    Entries may expire; a miss only means the definition has to be
    generated again.
    """

    @abstractmethod
    def get_definition(self, word: str) -> WordDefinition | None:
        """
        Returns the cached definition of ``word``, or None on a miss.

        Raises:
            CacheServiceError: If the backend fails or the entry is unreadable.
        """

    @abstractmethod
    def save_definition(self, definition: WordDefinition) -> None:
        """
        Caches a definition under its ``word``.

        Raises:
            CacheServiceError: If the backend fails.
        """
