"""Application configuration loaded from environment variables."""

import os
from typing import Literal

from pydantic import BaseModel, computed_field

DEFAULT_SYSTEM_PROMPT = (
    "You are an English vocabulary tutor. For the given English word return "
    "a clear definition, a practical sentence using the word, its phonetic "
    "pronunciation if available, a difficulty of BEGINNER, INTERMEDIATE or "
    "ADVANCED, and its category (noun, verb, adjective, adverb or other)."
)


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class MinioConfig(BaseModel, frozen=True):
    """MinIO connection configuration."""

    endpoint: str
    user: str
    password: str
    bucket_name: str = "vocabulary-app"
    secure: bool = False


class TranscriptionConfig(BaseModel, frozen=True):
    """Transcription pipeline defaults."""

    backend: Literal["assemblyai", "gateway"] = "assemblyai"
    default_language_code: str = "en-US"
    max_attempts: int = 15
    polling_interval_seconds: float = 2.0
    visibility_delay_seconds: float = 2.0
    speaker_labels: bool = True
    max_speakers: int = 2
    max_alternatives: int = 3
    audio_extension: str = "m4a"
    audio_content_type: str = "audio/m4a"
    cleanup_audio_on_success: bool = True
    audit_to_storage: bool = True


class AssemblyAIConfig(BaseModel, frozen=True):
    """AssemblyAI API configuration."""

    api_key: str
    presigned_url_ttl_seconds: int = 3600


class GatewayConfig(BaseModel, frozen=True):
    """Transcription HTTP gateway configuration."""

    endpoint: str
    timeout_seconds: float = 30.0


class GeminiConfig(BaseModel, frozen=True):
    """Gemini LLM configuration."""

    api_key: str
    model_name: str = "gemini-2.5-flash-lite"
    system_prompt: str = DEFAULT_SYSTEM_PROMPT


class RedisConfig(BaseModel, frozen=True):
    """Redis connection configuration."""

    host: str
    cache_ttl_seconds: int = 604800  # 7 days


class PostgresConfig(BaseModel, frozen=True):
    """PostgreSQL connection configuration."""

    host: str
    port: str
    user: str
    password: str
    database: str

    @computed_field
    @property
    def url(self) -> str:
        """Returns the full PostgreSQL connection URL."""
        return (
            f"postgresql+psycopg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.database}"
        )


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    minio: MinioConfig
    transcription: TranscriptionConfig
    assemblyai: AssemblyAIConfig
    gateway: GatewayConfig
    gemini: GeminiConfig
    redis: RedisConfig
    postgres: PostgresConfig


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    return AppConfig(
        minio=MinioConfig(
            endpoint=os.getenv("MINIO_ENDPOINT", "minio:9000"),
            user=os.getenv("MINIO_USER", ""),
            password=os.getenv("MINIO_PASSWORD", ""),
            bucket_name=os.getenv("MINIO_BUCKET", "vocabulary-app"),
            secure=_env_bool("MINIO_SECURE", False),
        ),
        transcription=TranscriptionConfig(
            backend=os.getenv("TRANSCRIPTION_BACKEND", "assemblyai"),
            default_language_code=os.getenv("TRANSCRIPTION_LANGUAGE", "en-US"),
            max_attempts=int(os.getenv("TRANSCRIPTION_MAX_ATTEMPTS", "15")),
            polling_interval_seconds=float(
                os.getenv("TRANSCRIPTION_POLL_INTERVAL_SECONDS", "2.0")
            ),
            visibility_delay_seconds=float(
                os.getenv("TRANSCRIPTION_VISIBILITY_DELAY_SECONDS", "2.0")
            ),
            speaker_labels=_env_bool("TRANSCRIPTION_SPEAKER_LABELS", True),
            max_speakers=int(os.getenv("TRANSCRIPTION_MAX_SPEAKERS", "2")),
            cleanup_audio_on_success=_env_bool("TRANSCRIPTION_CLEANUP_AUDIO", True),
            audit_to_storage=_env_bool("TRANSCRIPTION_AUDIT_TO_STORAGE", True),
        ),
        assemblyai=AssemblyAIConfig(
            api_key=os.getenv("ASSEMBLYAI_API_KEY", ""),
        ),
        gateway=GatewayConfig(
            endpoint=os.getenv("TRANSCRIPTION_GATEWAY_URL", "http://localhost:8080"),
            timeout_seconds=float(os.getenv("TRANSCRIPTION_GATEWAY_TIMEOUT", "30")),
        ),
        gemini=GeminiConfig(
            api_key=os.getenv("GEMINI_API_KEY", ""),
        ),
        redis=RedisConfig(
            host=os.getenv("REDIS_HOST", "redis"),
            cache_ttl_seconds=int(os.getenv("REDIS_CACHE_TTL_SECONDS", "604800")),
        ),
        postgres=PostgresConfig(
            host=os.getenv("POSTGRES_HOST", "postgres"),
            port=os.getenv("POSTGRES_PORT", "5432"),
            user=os.getenv("POSTGRES_USER", ""),
            password=os.getenv("POSTGRES_PASSWORD", ""),
            database=os.getenv("POSTGRES_DB", "vocabulary"),
        ),
    )
