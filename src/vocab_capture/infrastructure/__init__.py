"""Infrastructure layer exports."""

from vocab_capture.infrastructure.assemblyai_transcriber import (
    AssemblyAITranscriptionService,
)
from vocab_capture.infrastructure.gateway_transcriber import (
    GatewayTranscriptionService,
)
from vocab_capture.infrastructure.gemini_llm import GeminiLLMService
from vocab_capture.infrastructure.minio_storage import MinioStorageClient
from vocab_capture.infrastructure.redis_cache import RedisCacheService

__all__ = [
    "AssemblyAITranscriptionService",
    "GatewayTranscriptionService",
    "GeminiLLMService",
    "MinioStorageClient",
    "RedisCacheService",
]
