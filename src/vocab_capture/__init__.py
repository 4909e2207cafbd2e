"""Speech-driven vocabulary capture backed by an async transcription pipeline."""

from vocab_capture.exceptions import (
    JobCancelledError,
    JobFailedError,
    JobSubmissionError,
    JobTimeoutError,
    ResolutionError,
    TranscriptionPipelineError,
    UploadError,
)
from vocab_capture.logging import setup_logging

__all__ = [
    "setup_logging",
    "TranscriptionPipelineError",
    "UploadError",
    "JobSubmissionError",
    "JobFailedError",
    "JobTimeoutError",
    "JobCancelledError",
    "ResolutionError",
]
