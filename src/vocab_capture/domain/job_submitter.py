"""Starts asynchronous transcription jobs."""

from collections.abc import Callable
from datetime import datetime

from vocab_capture.domain.audit_log import TranscriptionAuditLog
from vocab_capture.domain.clock import utcnow
from vocab_capture.domain.languages import DEFAULT_LANGUAGE_CODE, resolve_language_code
from vocab_capture.domain.models import (
    StartJobRequest,
    TranscriptionJob,
    TranscriptionSettings,
)
from vocab_capture.domain.storage_keys import (
    epoch_millis,
    storage_uri,
    transcript_output_key,
)
from vocab_capture.exceptions import JobSubmissionError
from vocab_capture.infrastructure.interfaces import TranscriptionService
from vocab_capture.logging import setup_logging

logger = setup_logging()

ANONYMOUS_USER = "anonymous"


class JobSubmitter:
    """Submits a stored recording to the transcription service."""

    def __init__(
        self,
        service: TranscriptionService,
        bucket_name: str,
        audit_log: TranscriptionAuditLog,
        settings: TranscriptionSettings = TranscriptionSettings(),
        default_language_code: str = DEFAULT_LANGUAGE_CODE,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._service = service
        self._bucket_name = bucket_name
        self._audit_log = audit_log
        self._settings = settings
        self._default_language_code = default_language_code
        self._clock = clock

    def new_job_name(self, hint: str | None = None, user_id: str | None = None) -> str:
        """Builds ``<hint>-<epoch ms>-<user>``, unique per user at ms granularity."""
        return (
            f"{hint or 'transcription'}-{epoch_millis(self._clock())}-"
            f"{user_id or ANONYMOUS_USER}"
        )

    def start(
        self,
        storage_key: str,
        language_code: str | None = None,
        job_name_hint: str | None = None,
        user_id: str | None = None,
    ) -> TranscriptionJob:
        """
        Starts a job for the recording and returns without waiting for it.

        Unsupported language codes are replaced by the default; the returned
        job's ``language_code`` is the one actually sent.

        Args:
            storage_key: Key of the uploaded recording.
            language_code: Requested BCP-47 language code.
            job_name_hint: Prefix for the generated job name.
            user_id: Caller identity used to tag the job.

        Returns:
            The started job; ``job_name`` is the identifier to poll with.

        Raises:
            JobSubmissionError: If the key is missing or the service call fails.
                The error carries the job name that was requested.
        """
        user = user_id or ANONYMOUS_USER
        job_name = self.new_job_name(job_name_hint, user)
        if not storage_key:
            raise JobSubmissionError(job_name, "storage key is required")

        language = resolve_language_code(
            language_code or self._default_language_code, self._default_language_code
        )
        request = StartJobRequest(
            job_name=job_name,
            audio_key=storage_key,
            media_uri=storage_uri(self._bucket_name, storage_key),
            output_bucket=self._bucket_name,
            output_key=transcript_output_key(job_name),
            language_code=language,
            settings=self._settings,
            user_id=user,
        )

        try:
            job = self._service.start_job(request)
        except Exception as e:
            logger.exception(
                "Job submission failed",
                extra={"job_name": job_name, "audio_key": storage_key},
            )
            self._audit_log.record(
                "job_start_failed",
                {
                    "jobName": job_name,
                    "userId": user,
                    "audioFileKey": storage_key,
                    "error": str(e),
                },
            )
            raise JobSubmissionError(job_name, str(e), cause=e) from e

        if not job.job_name:
            raise JobSubmissionError(job_name, "service returned no job name")

        self._audit_log.record(
            "job_started",
            {
                "jobName": job.job_name,
                "userId": user,
                "audioFileKey": storage_key,
                "languageCode": language,
            },
        )
        return TranscriptionJob(
            job_name=job.job_name,
            status=job.status,
            audio_key=storage_key,
            language_code=language,
            creation_time=job.creation_time or self._clock(),
        )
