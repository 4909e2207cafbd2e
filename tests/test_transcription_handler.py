"""Tests for TranscriptionHandler."""

import json
from unittest.mock import MagicMock

import pytest

from vocab_capture.domain.audio_uploader import AudioUploader
from vocab_capture.domain.audit_log import TranscriptionAuditLog
from vocab_capture.domain.job_poller import JobPoller
from vocab_capture.domain.job_submitter import JobSubmitter
from vocab_capture.domain.models import (
    JobStatus,
    ProcessedTranscriptArtifact,
    StartJobRequest,
    TranscriptionJob,
    TranscriptionOptions,
    TranscriptionResult,
)
from vocab_capture.domain.transcript_processor import TranscriptProcessor
from vocab_capture.domain.transcript_resolver import TranscriptResolver
from vocab_capture.exceptions import (
    JobFailedError,
    JobSubmissionError,
    JobTimeoutError,
    TranscriptionPipelineError,
    UploadError,
)
from vocab_capture.handlers.transcription_handler import TranscriptionHandler
from vocab_capture.infrastructure.interfaces import TranscriptionService

from conftest import BUCKET, FIXED_MILLIS, FIXED_NOW

AUDIO_KEY = "audio-files/audio-1.m4a"


def _handler(storage, **overrides):
    uploader = MagicMock()
    uploader.upload.return_value = AUDIO_KEY
    submitter = MagicMock()
    submitter.start.return_value = TranscriptionJob(
        job_name="job-1", status=JobStatus.IN_PROGRESS, language_code="en-US"
    )
    poller = MagicMock()
    poller.poll.return_value = TranscriptionJob(
        job_name="job-1",
        status=JobStatus.COMPLETED,
        transcript_uri=f"s3://{BUCKET}/transcriptions/job-1.json",
    )
    resolver = MagicMock()
    resolver.resolve_job.return_value = TranscriptionResult(
        transcript="save this word.serendipity",
        speaker_segments=[{"speaker_label": "spk_0", "start_time": "0", "end_time": "2"}],
    )
    parts = dict(
        storage=storage,
        bucket_name=BUCKET,
        uploader=uploader,
        submitter=submitter,
        poller=poller,
        resolver=resolver,
        processor=TranscriptProcessor(),
        audit_log=MagicMock(),
    )
    parts.update(overrides)
    return TranscriptionHandler(**parts), parts


class TestRunSuccess:
    """Tests for successful runs."""

    def test_returns_processed_result(self):
        """Should return cleaned text, job name and audio key."""
        storage = MagicMock()
        handler, _ = _handler(storage)

        result = handler.run(b"audio")

        assert result.text == "save this word. serendipity"
        assert result.job_name == "job-1"
        assert result.audio_file_name == AUDIO_KEY
        assert result.language_code == "en-US"
        assert result.word_count == 4
        assert result.speaker_count == 1

    def test_saves_processed_artifact_and_deletes_audio(self):
        """Should persist the processed transcript and drop only the recording."""
        storage = MagicMock()
        handler, parts = _handler(storage)

        handler.run(b"audio", TranscriptionOptions(user_id="u1"))

        upload = storage.upload.call_args.kwargs
        assert upload["object_name"] == "processed-transcriptions/job-1-processed.json"
        artifact = json.loads(upload["data"].read())
        assert artifact["cleanedText"] == "save this word. serendipity"
        assert artifact["userId"] == "u1"
        storage.delete.assert_called_once_with(BUCKET, AUDIO_KEY)
        parts["audit_log"].record.assert_called_once()
        assert parts["audit_log"].record.call_args.args[0] == "processing_completed"

    def test_processing_date_comes_from_clock(self, clock):
        """Should stamp the processed transcript with the injected clock."""
        storage = MagicMock()
        handler, _ = _handler(storage, clock=clock)

        handler.run(b"audio")

        payload = storage.upload.call_args.kwargs["data"].read()
        artifact = ProcessedTranscriptArtifact.model_validate_json(payload)
        assert artifact.processing_date == FIXED_NOW
        assert artifact.saved_at == FIXED_NOW

    def test_keeps_audio_when_configured(self):
        """Should not delete anything on success when cleanup is off."""
        storage = MagicMock()
        handler, _ = _handler(storage, cleanup_audio_on_success=False)

        handler.run(b"audio")

        storage.delete.assert_not_called()

    def test_passes_options_through(self):
        """Should forward per-run overrides to the stages."""
        storage = MagicMock()
        handler, parts = _handler(storage)

        handler.run(
            b"audio",
            TranscriptionOptions(
                language_code="de-DE", max_attempts=3, polling_interval_seconds=0.5
            ),
        )

        assert parts["submitter"].start.call_args.kwargs["language_code"] == "de-DE"
        poll_kwargs = parts["poller"].poll.call_args.kwargs
        assert poll_kwargs["max_attempts"] == 3
        assert poll_kwargs["interval_seconds"] == 0.5

    def test_processed_artifact_failure_is_not_fatal(self):
        """Should still succeed when the processed transcript cannot be stored."""
        from vocab_capture.exceptions import StorageUploadError

        storage = MagicMock()
        storage.upload.side_effect = StorageUploadError("processed")
        handler, _ = _handler(storage)

        assert handler.run(b"audio").job_name == "job-1"


class TestRunFailureCleanup:
    """Tests for clean-up after failed runs."""

    def test_unexpected_service_error_on_start_is_a_submission_failure(self, clock):
        """Should report stage submit and clean up the requested job output."""
        storage = MagicMock()
        service = MagicMock()
        service.start_job.side_effect = AttributeError("malformed response")
        audit_log = MagicMock()
        submitter = JobSubmitter(service, BUCKET, audit_log, clock=clock)
        handler, _ = _handler(storage, submitter=submitter)

        with pytest.raises(JobSubmissionError) as exc_info:
            handler.run(b"audio")

        assert exc_info.value.stage == "submit"
        assert isinstance(exc_info.value.cause, AttributeError)
        assert audit_log.record.call_args.args[0] == "job_start_failed"
        deleted = [c.args for c in storage.delete.call_args_list]
        assert deleted == [
            (BUCKET, AUDIO_KEY),
            (BUCKET, f"transcriptions/transcription-{FIXED_MILLIS}-anonymous.json"),
        ]

    def test_timeout_deletes_audio_and_output_once(self):
        """Should try each delete exactly once, even when deletes fail."""
        storage = MagicMock()
        storage.delete.side_effect = RuntimeError("storage down")
        poller = MagicMock()
        poller.poll.side_effect = JobTimeoutError("job-1", 15)
        handler, _ = _handler(storage, poller=poller)

        with pytest.raises(JobTimeoutError):
            handler.run(b"audio")

        deleted = [c.args for c in storage.delete.call_args_list]
        assert deleted == [(BUCKET, AUDIO_KEY), (BUCKET, "transcriptions/job-1.json")]

    def test_failed_job_is_propagated(self):
        """Should re-raise JobFailedError after clean-up."""
        storage = MagicMock()
        poller = MagicMock()
        poller.poll.side_effect = JobFailedError("job-1", "unsupported media")
        handler, _ = _handler(storage, poller=poller)

        with pytest.raises(JobFailedError, match="unsupported media"):
            handler.run(b"audio")

        assert storage.delete.call_count == 2

    def test_submission_failure_uses_requested_name(self):
        """Should clean up the output of the job name that was requested."""
        storage = MagicMock()
        submitter = MagicMock()
        submitter.start.side_effect = JobSubmissionError("requested-1", "rejected")
        handler, parts = _handler(storage, submitter=submitter)

        with pytest.raises(JobSubmissionError):
            handler.run(b"audio")

        deleted = [c.args for c in storage.delete.call_args_list]
        assert deleted == [(BUCKET, AUDIO_KEY), (BUCKET, "transcriptions/requested-1.json")]
        parts["poller"].poll.assert_not_called()

    def test_upload_failure_skips_everything(self):
        """Should not submit or clean up when nothing was stored."""
        storage = MagicMock()
        uploader = MagicMock()
        uploader.upload.side_effect = UploadError("<bytes>")
        handler, parts = _handler(storage, uploader=uploader)

        with pytest.raises(UploadError):
            handler.run(b"audio")

        parts["submitter"].start.assert_not_called()
        storage.delete.assert_not_called()

    def test_unexpected_error_is_wrapped(self):
        """Should wrap unknown errors and still clean up."""
        storage = MagicMock()
        resolver = MagicMock()
        resolver.resolve_job.side_effect = KeyError("boom")
        handler, _ = _handler(storage, resolver=resolver)

        with pytest.raises(TranscriptionPipelineError) as exc_info:
            handler.run(b"audio")

        assert isinstance(exc_info.value.cause, KeyError)
        assert storage.delete.call_count == 2


class FakeTranscriptionService(TranscriptionService):
    """Completes each job on its third status query and writes the artifact."""

    def __init__(self, storage):
        self._storage = storage
        self.requests: list[StartJobRequest] = []
        self.queries = 0

    def start_job(self, request: StartJobRequest) -> TranscriptionJob:
        self.requests.append(request)
        return TranscriptionJob(job_name=request.job_name, status=JobStatus.IN_PROGRESS)

    def get_job(self, job_name: str) -> TranscriptionJob:
        self.queries += 1
        if self.queries < 3:
            return TranscriptionJob(job_name=job_name, status=JobStatus.IN_PROGRESS)
        request = self.requests[-1]
        artifact = {
            "results": {
                "transcripts": [{"transcript": "save  this word:\nubiquitous"}],
                "speaker_labels": {
                    "segments": [
                        {"speaker_label": "spk_0", "start_time": "0.0", "end_time": "1.5"}
                    ]
                },
            }
        }
        self._storage.objects[(request.output_bucket, request.output_key)] = json.dumps(
            artifact
        ).encode()
        return TranscriptionJob(
            job_name=job_name,
            status=JobStatus.COMPLETED,
            transcript_uri=f"s3://{request.output_bucket}/{request.output_key}",
        )


class TestEndToEnd:
    """Runs the real stages against in-memory storage."""

    def test_pipeline(self, storage, clock):
        service = FakeTranscriptionService(storage)
        audit_log = TranscriptionAuditLog(storage, BUCKET, clock)
        handler = TranscriptionHandler(
            storage=storage,
            bucket_name=BUCKET,
            uploader=AudioUploader(storage, BUCKET, clock=clock, sleep=lambda _: None),
            submitter=JobSubmitter(service, BUCKET, audit_log, clock=clock),
            poller=JobPoller(service, audit_log, max_attempts=5, interval_seconds=0),
            resolver=TranscriptResolver(storage),
            processor=TranscriptProcessor(),
            audit_log=audit_log,
            clock=clock,
        )

        result = handler.run(b"audio", TranscriptionOptions(user_id="u1"))

        job_name = f"transcription-{FIXED_MILLIS}-u1"
        assert result.text == "save this word: ubiquitous"
        assert result.job_name == job_name
        assert service.queries == 3
        assert storage.keys("audio-files/") == []
        assert storage.keys("transcriptions/") == [f"transcriptions/{job_name}.json"]
        assert storage.keys("processed-transcriptions/") == [
            f"processed-transcriptions/{job_name}-processed.json"
        ]
        assert storage.keys("transcription-logs/")
