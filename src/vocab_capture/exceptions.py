"""Custom exceptions for the vocab-capture service."""


class TranscriptionPipelineError(Exception):
    """Base class for failures of a transcription pipeline stage."""

    stage = "pipeline"

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)


class UploadError(TranscriptionPipelineError):
    """Raised when the recording cannot be read or written to storage."""

    stage = "upload"

    def __init__(self, audio_ref: str, cause: Exception | None = None):
        self.audio_ref = audio_ref
        super().__init__(f"Failed to upload audio '{audio_ref}'", cause)


class JobSubmissionError(TranscriptionPipelineError):
    """Raised when a transcription job cannot be started."""

    stage = "submit"

    def __init__(
        self, job_name: str | None, reason: str, cause: Exception | None = None
    ):
        self.job_name = job_name
        self.reason = reason
        super().__init__(
            f"Failed to start transcription job '{job_name}': {reason}", cause
        )


class JobFailedError(TranscriptionPipelineError):
    """Raised when the service reports a transcription job as failed."""

    stage = "poll"

    def __init__(self, job_name: str, failure_reason: str | None = None):
        self.job_name = job_name
        self.failure_reason = failure_reason
        super().__init__(
            f"Transcription job '{job_name}' failed: "
            f"{failure_reason or 'Unknown error'}"
        )


class JobTimeoutError(TranscriptionPipelineError):
    """Raised when a job does not reach a terminal status within the budget."""

    stage = "poll"

    def __init__(self, job_name: str, attempts: int, cause: Exception | None = None):
        self.job_name = job_name
        self.attempts = attempts
        super().__init__(
            f"Transcription job '{job_name}' timed out after {attempts} attempts",
            cause,
        )


class JobCancelledError(TranscriptionPipelineError):
    """Raised when polling is stopped by the caller's cancel signal."""

    stage = "poll"

    def __init__(self, job_name: str, attempts: int):
        self.job_name = job_name
        self.attempts = attempts
        super().__init__(
            f"Polling of transcription job '{job_name}' cancelled "
            f"after {attempts} attempts"
        )


class ResolutionError(TranscriptionPipelineError):
    """Raised when a transcript artifact cannot be located or decoded."""

    stage = "resolve"

    def __init__(self, uri: str, reason: str, cause: Exception | None = None):
        self.uri = uri
        self.reason = reason
        super().__init__(f"Failed to resolve transcript '{uri}': {reason}", cause)


class StorageDownloadError(Exception):
    """Raised when downloading a file from storage fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        self.cause = cause
        super().__init__(f"Failed to download '{object_name}' from storage")


class StorageUploadError(Exception):
    """Raised when uploading a file to storage fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        self.cause = cause
        super().__init__(f"Failed to upload '{object_name}' to storage")


class StorageDeleteError(Exception):
    """Raised when deleting a file from storage fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        self.cause = cause
        super().__init__(f"Failed to delete '{object_name}' from storage")


class TranscriptionServiceError(Exception):
    """Raised when a call to the remote transcription service fails."""

    def __init__(self, operation: str, message: str, cause: Exception | None = None):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Transcription service {operation} failed: {message}")


class LLMServiceError(Exception):
    """Raised when LLM service call fails."""

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)


class CacheServiceError(Exception):
    """Raised when cache operations fail."""

    def __init__(self, key: str, operation: str, cause: Exception | None = None):
        self.key = key
        self.operation = operation
        self.cause = cause
        super().__init__(f"Cache {operation} failed for key '{key}'")


class WordParseError(Exception):
    """Raised when no target word can be found in a transcript."""

    def __init__(self, transcribed_text: str):
        self.transcribed_text = transcribed_text
        super().__init__("Could not parse word from transcribed text")


class WordPersistenceError(Exception):
    """Raised when saving or loading word entries fails."""

    def __init__(self, operation: str, cause: Exception | None = None):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Word store {operation} failed")


class WordNotFoundError(Exception):
    """Raised when a word entry does not exist for the user."""

    def __init__(self, word_id: str):
        self.word_id = word_id
        super().__init__(f"Word {word_id} not found")
