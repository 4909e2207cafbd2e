"""Domain layer exports."""

from vocab_capture.domain.models import (
    Difficulty,
    JobStatus,
    PipelineResult,
    ProcessedTranscript,
    ProcessedTranscriptArtifact,
    SpeakerSegment,
    StartJobRequest,
    TranscriptionJob,
    TranscriptionOptions,
    TranscriptionResult,
    TranscriptionSettings,
    WordDefinition,
    WordEntry,
)
from vocab_capture.domain.transcript_processor import TranscriptProcessor

__all__ = [
    "Difficulty",
    "JobStatus",
    "PipelineResult",
    "ProcessedTranscript",
    "ProcessedTranscriptArtifact",
    "SpeakerSegment",
    "StartJobRequest",
    "TranscriptionJob",
    "TranscriptionOptions",
    "TranscriptionResult",
    "TranscriptionSettings",
    "WordDefinition",
    "WordEntry",
    "TranscriptProcessor",
]
