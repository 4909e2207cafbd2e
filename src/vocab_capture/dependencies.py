"""Dependency injection configuration for the vocab-capture API."""

from contextlib import contextmanager
from datetime import timedelta
from functools import lru_cache
from typing import Annotated

import assemblyai as aai
import httpx
import redis
from fastapi import Header
from google import genai
from minio import Minio
from sqlmodel import Session, SQLModel, create_engine

from vocab_capture.config import AppConfig, load_config
from vocab_capture.domain.audio_uploader import AudioUploader
from vocab_capture.domain.audit_log import TranscriptionAuditLog
from vocab_capture.domain.job_poller import JobPoller
from vocab_capture.domain.job_submitter import ANONYMOUS_USER, JobSubmitter
from vocab_capture.domain.models import TranscriptionSettings
from vocab_capture.domain.transcript_processor import TranscriptProcessor
from vocab_capture.domain.transcript_resolver import TranscriptResolver
from vocab_capture.domain.word_builder import WordBuilder
from vocab_capture.handlers.transcription_handler import TranscriptionHandler
from vocab_capture.handlers.word_handler import WordHandler
from vocab_capture.infrastructure import (
    AssemblyAITranscriptionService,
    GatewayTranscriptionService,
    GeminiLLMService,
    MinioStorageClient,
    RedisCacheService,
)
from vocab_capture.infrastructure.interfaces import (
    CacheService,
    StorageClient,
    TranscriptionService,
)
from vocab_capture.logging import setup_logging
from vocab_capture.repositories.word_repository import WordRepository

logger = setup_logging()

# Clients are built on first use so that importing the API does not
# open connections.


@lru_cache
def get_config() -> AppConfig:
    return load_config()


@lru_cache
def get_storage() -> StorageClient:
    """Returns the MinIO storage client, creating the bucket if needed."""
    config = get_config().minio
    client = Minio(
        endpoint=config.endpoint,
        access_key=config.user,
        secret_key=config.password,
        secure=config.secure,
    )
    storage = MinioStorageClient(client)
    storage.ensure_bucket_exists(config.bucket_name)
    return storage


@lru_cache
def get_transcription_service() -> TranscriptionService:
    """Returns the configured transcription backend."""
    config = get_config()
    if config.transcription.backend == "gateway":
        client = httpx.Client(
            base_url=config.gateway.endpoint,
            timeout=config.gateway.timeout_seconds,
        )
        logger.info(
            "Using transcription gateway",
            extra={"endpoint": config.gateway.endpoint},
        )
        return GatewayTranscriptionService(client)

    aai.settings.api_key = config.assemblyai.api_key
    logger.info("Using AssemblyAI transcription")
    return AssemblyAITranscriptionService(
        aai.Transcriber(),
        get_storage(),
        config.minio.bucket_name,
        presigned_url_ttl=timedelta(seconds=config.assemblyai.presigned_url_ttl_seconds),
    )


@lru_cache
def get_transcription_handler() -> TranscriptionHandler:
    """Returns the pipeline orchestrator wired with all stages."""
    config = get_config()
    transcription = config.transcription
    bucket_name = config.minio.bucket_name
    storage = get_storage()
    service = get_transcription_service()

    audit_log = TranscriptionAuditLog(
        storage if transcription.audit_to_storage else None, bucket_name
    )
    settings = TranscriptionSettings(
        speaker_labels=transcription.speaker_labels,
        max_speakers=transcription.max_speakers,
        max_alternatives=transcription.max_alternatives,
    )
    return TranscriptionHandler(
        storage=storage,
        bucket_name=bucket_name,
        uploader=AudioUploader(
            storage,
            bucket_name,
            extension=transcription.audio_extension,
            content_type=transcription.audio_content_type,
            visibility_delay_seconds=transcription.visibility_delay_seconds,
        ),
        submitter=JobSubmitter(
            service,
            bucket_name,
            audit_log,
            settings=settings,
            default_language_code=transcription.default_language_code,
        ),
        poller=JobPoller(
            service,
            audit_log,
            max_attempts=transcription.max_attempts,
            interval_seconds=transcription.polling_interval_seconds,
        ),
        resolver=TranscriptResolver(storage),
        processor=TranscriptProcessor(),
        audit_log=audit_log,
        cleanup_audio_on_success=transcription.cleanup_audio_on_success,
    )


@lru_cache
def get_cache() -> CacheService:
    config = get_config().redis
    client = redis.Redis(host=config.host, decode_responses=True)
    return RedisCacheService(client, config.cache_ttl_seconds)


@lru_cache
def get_word_repository() -> WordRepository:
    """Returns the word repository, creating tables on first use."""
    config = get_config().postgres
    engine = create_engine(config.url)
    SQLModel.metadata.create_all(engine)
    logger.info("Database initialized", extra={"host": config.host})

    @contextmanager
    def session_factory():
        with Session(engine) as session:
            yield session

    return WordRepository(session_factory)


@lru_cache
def get_word_handler() -> WordHandler:
    config = get_config().gemini
    llm = GeminiLLMService(
        genai.Client(api_key=config.api_key), config.model_name, config.system_prompt
    )
    return WordHandler(WordBuilder(llm, get_cache()), get_word_repository())


def get_user_id(x_user_id: Annotated[str | None, Header()] = None) -> str:
    """Reads the caller identity from ``X-User-Id``."""
    return x_user_id or ANONYMOUS_USER
