"""Domain models for the transcription pipeline and vocabulary entries."""

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Immutable model serialized with camelCase keys on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class JobStatus(str, Enum):
    """Pipeline view of a remote transcription job's status."""

    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

    @classmethod
    def from_vendor(cls, value: object) -> "JobStatus":
        """Maps a service-specific status onto the three pipeline states."""
        normalized = "" if value is None else str(value).strip().upper()
        if normalized == "COMPLETED":
            return cls.COMPLETED
        if normalized in ("FAILED", "ERROR"):
            return cls.FAILED
        return cls.IN_PROGRESS


class TranscriptionSettings(BaseModel, frozen=True):
    """Optional recognition settings sent with a start-job request."""

    speaker_labels: bool = True
    max_speakers: int = Field(default=2, ge=1)
    max_alternatives: int = Field(default=3, ge=1)


class StartJobRequest(BaseModel, frozen=True):
    """Everything a transcription service needs to start a job."""

    job_name: str
    audio_key: str
    media_uri: str
    output_bucket: str
    output_key: str
    language_code: str
    settings: TranscriptionSettings = TranscriptionSettings()
    user_id: str = "anonymous"


class TranscriptionJob(BaseModel, frozen=True):
    """Snapshot of a remote transcription job as last reported by the service."""

    job_name: str
    status: JobStatus
    audio_key: str | None = None
    language_code: str | None = None
    creation_time: datetime | None = None
    completion_time: datetime | None = None
    transcript_uri: str | None = None
    transcript_text: str | None = None
    speaker_labels: list[dict[str, Any]] = Field(default_factory=list)
    failure_reason: str | None = None


class TranscriptionResult(BaseModel, frozen=True):
    """Transcript text and raw speaker segments read from a result artifact."""

    transcript: str = ""
    speaker_segments: list[dict[str, Any]] = Field(default_factory=list)


class SpeakerSegment(CamelModel):
    """A diarized stretch of audio attributed to one speaker."""

    speaker: str
    start_time: float
    end_time: float
    items: list[dict[str, Any]] = Field(default_factory=list)


class ProcessedTranscript(CamelModel):
    """Cleaned transcript with per-speaker segments and counts."""

    cleaned_text: str
    speaker_segments: list[SpeakerSegment]
    word_count: int
    speaker_count: int
    processing_date: datetime


class ProcessedTranscriptArtifact(ProcessedTranscript):
    """Processed transcript as persisted next to the raw result."""

    job_name: str
    user_id: str
    saved_at: datetime


class TranscriptionOptions(BaseModel, frozen=True):
    """Per-run overrides; unset fields fall back to the configured defaults."""

    language_code: str | None = None
    max_attempts: int | None = Field(default=None, ge=1)
    polling_interval_seconds: float | None = Field(default=None, ge=0)
    job_name_hint: str | None = None
    user_id: str | None = None


class PipelineResult(CamelModel):
    """Outcome of one successful pipeline run."""

    text: str
    job_name: str
    audio_file_name: str
    language_code: str
    speaker_segments: list[SpeakerSegment] = Field(default_factory=list)
    word_count: int = 0
    speaker_count: int = 0


class ArtifactTranscript(BaseModel):
    transcript: str = ""


class ArtifactSpeakerLabels(BaseModel):
    segments: list[dict[str, Any]] = Field(default_factory=list)


class ArtifactResults(BaseModel):
    transcripts: list[ArtifactTranscript] = Field(default_factory=list)
    speaker_labels: ArtifactSpeakerLabels | None = None


class TranscriptArtifact(BaseModel):
    """
    Result document written by the transcription service.

    Shape: ``{"results": {"transcripts": [{"transcript": ...}],
    "speaker_labels": {"segments": [...]}}}``. Missing parts default to
    empty values.
    """

    results: ArtifactResults = Field(default_factory=ArtifactResults)

    def to_result(self) -> TranscriptionResult:
        transcripts = self.results.transcripts
        labels = self.results.speaker_labels
        return TranscriptionResult(
            transcript=transcripts[0].transcript if transcripts else "",
            speaker_segments=labels.segments if labels else [],
        )


class Difficulty(str, Enum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"


class WordDefinition(BaseModel):
    """Definition data returned by the text generation service."""

    word: str
    meaning: str | None = None
    usage_example: str | None = None
    pronunciation: str | None = None
    difficulty: Difficulty | None = None
    category: str | None = None


class WordEntry(CamelModel):
    """A saved vocabulary word with its review schedule."""

    id: UUID = Field(default_factory=uuid4)
    word: str
    meaning: str
    usage_example: str
    pronunciation: str | None = None
    difficulty: Difficulty | None = None
    category: str | None = None
    next_review_date: datetime
    review_count: int = Field(default=0, ge=0)
    correct_count: int = Field(default=0, ge=0)
    created_at: datetime
    user_id: str

    @model_validator(mode="after")
    def _check_counts(self) -> "WordEntry":
        if self.correct_count > self.review_count:
            raise ValueError("correct_count cannot exceed review_count")
        return self
