"""Infrastructure interface exports."""

from vocab_capture.infrastructure.interfaces.cache_service import CacheService
from vocab_capture.infrastructure.interfaces.llm_service import LLMService
from vocab_capture.infrastructure.interfaces.storage import StorageClient
from vocab_capture.infrastructure.interfaces.transcription_service import (
    TranscriptionService,
)

__all__ = [
    "CacheService",
    "LLMService",
    "StorageClient",
    "TranscriptionService",
]
