"""Gemini LLM service implementation."""

from google import genai

from vocab_capture.domain.models import WordDefinition
from vocab_capture.exceptions import LLMServiceError
from vocab_capture.infrastructure.interfaces import LLMService
from vocab_capture.logging import setup_logging

logger = setup_logging()


class GeminiLLMService(LLMService):
    """LLM service implementation using Google Gemini structured output."""

    def __init__(self, client: genai.Client, model_name: str, system_prompt: str):
        self._client = client
        self._model_name = model_name
        self._system_prompt = system_prompt

    def define(self, word: str) -> WordDefinition:
        """
        Asks Gemini for a JSON definition of the word.

        Raises:
            LLMServiceError: If the Gemini API call fails or returns nothing.
        """
        try:
            response = self._client.models.generate_content(
                model=self._model_name,
                contents=f'Provide information about the English word "{word}".',
                config={
                    "response_mime_type": "application/json",
                    "response_schema": WordDefinition,
                    "system_instruction": self._system_prompt,
                },
            )
            if not response.text:
                raise LLMServiceError("Gemini returned empty response")
            logger.info("Word definition generated", extra={"word": word})
            return WordDefinition.model_validate_json(response.text)
        except Exception as e:
            logger.exception("Gemini API call failed", extra={"word": word})
            raise LLMServiceError(f"Gemini definition failed: {e}", cause=e) from e
