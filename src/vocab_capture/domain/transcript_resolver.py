"""Reads completed transcription results from object storage."""

from urllib.parse import unquote, urlparse

from pydantic import ValidationError

from vocab_capture.domain.models import (
    TranscriptArtifact,
    TranscriptionJob,
    TranscriptionResult,
)
from vocab_capture.exceptions import ResolutionError, StorageDownloadError
from vocab_capture.infrastructure.interfaces import StorageClient
from vocab_capture.logging import setup_logging

logger = setup_logging()


class TranscriptResolver:
    """
    Turns a result artifact URI into transcript text and speaker segments.

    Resolution failures are not fatal: the job itself succeeded, so an
    unreadable artifact yields an empty result instead of an error.
    """

    def __init__(self, storage: StorageClient):
        self._storage = storage

    def resolve(self, uri: str) -> TranscriptionResult:
        try:
            bucket_name, object_name = self.parse_uri(uri)
            return self._fetch(uri, bucket_name, object_name)
        except ResolutionError as e:
            logger.warning(
                "Transcript could not be resolved",
                extra={"uri": uri, "reason": e.reason},
            )
            return TranscriptionResult()

    def resolve_job(self, job: TranscriptionJob) -> TranscriptionResult:
        """Resolves the job's artifact, falling back to inline transcript data."""
        if job.transcript_uri:
            result = self.resolve(job.transcript_uri)
            if result.transcript or not job.transcript_text:
                return result
        return TranscriptionResult(
            transcript=job.transcript_text or "",
            speaker_segments=job.speaker_labels,
        )

    @staticmethod
    def parse_uri(uri: str) -> tuple[str, str]:
        """
        Splits ``s3://bucket/key`` or path-style ``https://host/bucket/key``
        into ``(bucket, key)``.

        Raises:
            ResolutionError: If the URI has neither form.
        """
        parsed = urlparse(uri or "")
        if parsed.scheme == "s3":
            bucket_name, object_name = parsed.netloc, parsed.path.lstrip("/")
        elif parsed.scheme in ("http", "https"):
            bucket_name, _, object_name = parsed.path.lstrip("/").partition("/")
        else:
            raise ResolutionError(uri, "unsupported URI scheme")

        if not bucket_name or not object_name:
            raise ResolutionError(uri, "URI does not name a bucket and key")
        return bucket_name, unquote(object_name)

    def _fetch(self, uri: str, bucket_name: str, object_name: str) -> TranscriptionResult:
        try:
            data = self._storage.download(bucket_name, object_name)
        except StorageDownloadError as e:
            raise ResolutionError(uri, "download failed", cause=e) from e

        try:
            artifact = TranscriptArtifact.model_validate_json(data)
        except ValidationError as e:
            raise ResolutionError(uri, "malformed result document", cause=e) from e

        result = artifact.to_result()
        logger.info(
            "Transcript resolved",
            extra={
                "uri": uri,
                "transcript_length": len(result.transcript),
                "segment_count": len(result.speaker_segments),
            },
        )
        return result
