"""Handler orchestrating one audio-to-transcript pipeline run."""

import io
import threading
from collections.abc import Callable
from datetime import datetime

from vocab_capture.domain.audio_uploader import AudioSource, AudioUploader
from vocab_capture.domain.audit_log import TranscriptionAuditLog
from vocab_capture.domain.clock import utcnow
from vocab_capture.domain.job_poller import JobPoller
from vocab_capture.domain.job_submitter import ANONYMOUS_USER, JobSubmitter
from vocab_capture.domain.models import (
    PipelineResult,
    ProcessedTranscript,
    ProcessedTranscriptArtifact,
    TranscriptionOptions,
)
from vocab_capture.domain.storage_keys import (
    processed_transcript_key,
    transcript_output_key,
)
from vocab_capture.domain.transcript_processor import TranscriptProcessor
from vocab_capture.domain.transcript_resolver import TranscriptResolver
from vocab_capture.exceptions import StorageUploadError, TranscriptionPipelineError
from vocab_capture.infrastructure.interfaces import StorageClient
from vocab_capture.logging import setup_logging

logger = setup_logging()


class TranscriptionHandler:
    """
    Sequences upload, submission, polling, resolution and post-processing.

    A handler holds only shared, stateless collaborators, so one instance
    serves concurrent runs. Each run owns its recording and job.
    """

    def __init__(
        self,
        storage: StorageClient,
        bucket_name: str,
        uploader: AudioUploader,
        submitter: JobSubmitter,
        poller: JobPoller,
        resolver: TranscriptResolver,
        processor: TranscriptProcessor,
        audit_log: TranscriptionAuditLog,
        cleanup_audio_on_success: bool = True,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._storage = storage
        self._bucket_name = bucket_name
        self._uploader = uploader
        self._submitter = submitter
        self._poller = poller
        self._resolver = resolver
        self._processor = processor
        self._audit_log = audit_log
        self._cleanup_audio_on_success = cleanup_audio_on_success
        self._clock = clock

    def run(
        self,
        audio: AudioSource,
        options: TranscriptionOptions | None = None,
        cancel_event: threading.Event | None = None,
    ) -> PipelineResult:
        """
        Transcribes a recording end to end.

        Args:
            audio: Path to the local recording, or its bytes.
            options: Per-run overrides of language, polling budget and naming.
            cancel_event: When set, polling stops and clean-up runs.

        Returns:
            PipelineResult with the cleaned text, job name and audio key.
            A completed job whose transcript cannot be read yields empty text.

        Raises:
            UploadError: The recording was not stored; nothing to clean up.
            JobSubmissionError, JobFailedError, JobTimeoutError,
            JobCancelledError: Raised after best-effort clean-up of the
                recording and the job output.
            TranscriptionPipelineError: Any other failure, wrapped.
        """
        options = options or TranscriptionOptions()
        user_id = options.user_id or ANONYMOUS_USER

        audio_key = self._uploader.upload(audio)

        job_name: str | None = None
        succeeded = False
        try:
            job = self._submitter.start(
                audio_key,
                language_code=options.language_code,
                job_name_hint=options.job_name_hint,
                user_id=user_id,
            )
            job_name = job.job_name

            completed = self._poller.poll(
                job_name,
                max_attempts=options.max_attempts,
                interval_seconds=options.polling_interval_seconds,
                cancel_event=cancel_event,
            )
            transcript = self._resolver.resolve_job(completed)
            processed = self._processor.process(
                transcript.transcript,
                transcript.speaker_segments,
                processing_date=self._clock(),
            )
            self._save_processed(job_name, user_id, processed)

            result = PipelineResult(
                text=processed.cleaned_text,
                job_name=job_name,
                audio_file_name=audio_key,
                language_code=job.language_code or "",
                speaker_segments=processed.speaker_segments,
                word_count=processed.word_count,
                speaker_count=processed.speaker_count,
            )
            succeeded = True
            logger.info(
                "Transcription pipeline completed",
                extra={
                    "job_name": job_name,
                    "audio_key": audio_key,
                    "word_count": processed.word_count,
                },
            )
            return result

        except TranscriptionPipelineError as e:
            job_name = job_name or getattr(e, "job_name", None)
            logger.exception(
                "Transcription pipeline failed",
                extra={"stage": e.stage, "job_name": job_name, "audio_key": audio_key},
            )
            raise
        except Exception as e:
            logger.exception(
                "Transcription pipeline failed unexpectedly",
                extra={"job_name": job_name, "audio_key": audio_key},
            )
            raise TranscriptionPipelineError("Transcription failed", cause=e) from e
        finally:
            self._cleanup(audio_key, job_name, succeeded)

    def _save_processed(
        self, job_name: str, user_id: str, processed: ProcessedTranscript
    ) -> None:
        """Stores the processed transcript next to the raw result; failure is not fatal."""
        artifact = ProcessedTranscriptArtifact(
            **processed.model_dump(),
            job_name=job_name,
            user_id=user_id,
            saved_at=self._clock(),
        )
        object_name = processed_transcript_key(job_name)
        payload = artifact.model_dump_json(by_alias=True, indent=2).encode("utf-8")
        try:
            self._storage.upload(
                bucket_name=self._bucket_name,
                object_name=object_name,
                data=io.BytesIO(payload),
                size=len(payload),
                content_type="application/json",
            )
        except StorageUploadError:
            logger.warning(
                "Processed transcript not saved",
                extra={"job_name": job_name, "object_name": object_name},
            )

        self._audit_log.record(
            "processing_completed",
            {
                "jobName": job_name,
                "userId": user_id,
                "wordCount": processed.word_count,
                "speakerCount": processed.speaker_count,
            },
        )

    def _cleanup(self, audio_key: str, job_name: str | None, succeeded: bool) -> None:
        """
        Best-effort removal of transient objects, once per run.

        Failed runs drop the recording and the job's output; successful runs
        drop only the recording, and only when configured to.
        """
        if succeeded:
            if self._cleanup_audio_on_success:
                self._delete_quietly(audio_key)
            return

        self._delete_quietly(audio_key)
        if job_name:
            self._delete_quietly(transcript_output_key(job_name))
        else:
            logger.warning(
                "No job name known, output clean-up skipped",
                extra={"audio_key": audio_key},
            )

    def _delete_quietly(self, object_name: str) -> None:
        try:
            self._storage.delete(self._bucket_name, object_name)
        except Exception:
            logger.warning(
                "Clean-up delete failed",
                extra={"bucket_name": self._bucket_name, "object_name": object_name},
                exc_info=True,
            )
