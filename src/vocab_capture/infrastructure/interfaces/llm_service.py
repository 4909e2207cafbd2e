"""Abstract interface for LLM service operations."""

from abc import ABC, abstractmethod

from vocab_capture.domain.models import WordDefinition


class LLMService(ABC):
    """Abstract base class for LLM backends."""

    @abstractmethod
    def define(self, word: str) -> WordDefinition:
        """
        Generates a definition and usage example for an English word.

        Args:
            word: The normalized word to define.

        Returns:
            WordDefinition as produced by the model; optional fields may be empty.

        Raises:
            LLMServiceError: If the LLM call fails.
        """
        pass
