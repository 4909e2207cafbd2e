"""Abstract interface for job-oriented transcription services."""

from abc import ABC, abstractmethod

from vocab_capture.domain.models import StartJobRequest, TranscriptionJob


class TranscriptionService(ABC):
    """Abstract base class for asynchronous speech-to-text backends."""

    @abstractmethod
    def start_job(self, request: StartJobRequest) -> TranscriptionJob:
        """
        Starts a transcription job without waiting for it to finish.

        Args:
            request: Source media, output location, language and settings.

        Returns:
            The job as acknowledged by the service. Its ``job_name`` is the
            identifier to poll with, which may be server-issued.

        Raises:
            TranscriptionServiceError: If the service rejects the request
                or cannot be reached.
        """

    @abstractmethod
    def get_job(self, job_name: str) -> TranscriptionJob:
        """
        Fetches the current state of a job.

        Returns:
            The job with its status mapped onto ``JobStatus``. Completed jobs
            carry ``transcript_uri`` and/or inline transcript data.

        Raises:
            TranscriptionServiceError: If the status query fails.
        """
