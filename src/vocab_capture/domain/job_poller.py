"""Waits for transcription jobs to reach a terminal status."""

import threading

from vocab_capture.domain.audit_log import TranscriptionAuditLog
from vocab_capture.domain.models import JobStatus, TranscriptionJob
from vocab_capture.exceptions import (
    JobCancelledError,
    JobFailedError,
    JobTimeoutError,
    TranscriptionServiceError,
)
from vocab_capture.infrastructure.interfaces import TranscriptionService
from vocab_capture.logging import setup_logging

logger = setup_logging()


class JobPoller:
    """
    Bounded status-polling loop.

    Every attempt issues one status query. ``COMPLETED`` returns the job,
    ``FAILED`` raises immediately, anything else waits ``interval_seconds``
    and tries again. A failed status query uses up an attempt but does not
    stop the loop. Waits happen on the cancel event, so a cancel request
    wakes the loop without finishing the interval.
    """

    def __init__(
        self,
        service: TranscriptionService,
        audit_log: TranscriptionAuditLog,
        max_attempts: int = 15,
        interval_seconds: float = 2.0,
    ):
        self._service = service
        self._audit_log = audit_log
        self._max_attempts = max_attempts
        self._interval_seconds = interval_seconds

    def poll(
        self,
        job_name: str,
        max_attempts: int | None = None,
        interval_seconds: float | None = None,
        cancel_event: threading.Event | None = None,
    ) -> TranscriptionJob:
        """
        Polls until the job completes, fails, or the attempt budget runs out.

        Returns:
            The completed job, carrying the result artifact reference.

        Raises:
            JobFailedError: The service reported the job as failed.
            JobTimeoutError: No terminal status within ``max_attempts``
                queries; ``cause`` is the last query error, if the final
                attempt errored.
            JobCancelledError: ``cancel_event`` was set.
            ValueError: ``max_attempts`` is below 1.
        """
        budget = self._max_attempts if max_attempts is None else max_attempts
        if budget < 1:
            raise ValueError(f"max_attempts must be at least 1, got {budget}")
        interval = self._interval_seconds if interval_seconds is None else interval_seconds
        cancel = cancel_event or threading.Event()
        last_error: TranscriptionServiceError | None = None

        for attempt in range(1, budget + 1):
            if cancel.is_set():
                raise JobCancelledError(job_name, attempt - 1)

            try:
                job = self._service.get_job(job_name)
            except TranscriptionServiceError as e:
                last_error = e
                logger.warning(
                    "Status query failed",
                    extra={"job_name": job_name, "attempt": attempt, "max_attempts": budget},
                )
            else:
                last_error = None
                if job.status is JobStatus.COMPLETED:
                    self._audit_log.record(
                        "job_completed",
                        {
                            "jobName": job_name,
                            "transcriptFileUri": job.transcript_uri,
                            "transcriptionLength": len(job.transcript_text or ""),
                            "attempts": attempt,
                        },
                    )
                    return job
                if job.status is JobStatus.FAILED:
                    self._audit_log.record(
                        "job_failed",
                        {"jobName": job_name, "failureReason": job.failure_reason},
                    )
                    raise JobFailedError(job_name, job.failure_reason)
                logger.info(
                    "Job in progress",
                    extra={"job_name": job_name, "attempt": attempt, "max_attempts": budget},
                )

            if attempt < budget and cancel.wait(interval):
                raise JobCancelledError(job_name, attempt)

        logger.error(
            "Job polling exhausted",
            extra={"job_name": job_name, "max_attempts": budget},
        )
        raise JobTimeoutError(job_name, budget, cause=last_error)
