"""Core business logic for transcript clean-up."""

import re
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from vocab_capture.domain.clock import utcnow
from vocab_capture.domain.models import ProcessedTranscript, SpeakerSegment

_WHITESPACE = re.compile(r"\s+")
_SENTENCE_BREAK = re.compile(r"([.!?])\s*([a-z])")

UNKNOWN_SPEAKER = "unknown"


class TranscriptProcessor:
    """Normalizes transcript text and types raw speaker segments."""

    def process(
        self,
        raw_text: str,
        segments: Iterable[dict[str, Any]],
        processing_date: datetime | None = None,
    ) -> ProcessedTranscript:
        """
        Builds a processed transcript without I/O or mutation of the inputs.

        Args:
            raw_text: Transcript text as returned by the service.
            segments: Raw speaker segment records (``speaker_label``,
                ``start_time``/``end_time`` as strings, ``items``).
            processing_date: Timestamp to stamp on the result; the current
                time when omitted. Identical inputs give identical output.

        Returns:
            ProcessedTranscript with cleaned text, typed segments and counts.
        """
        raw_segments = list(segments)
        cleaned_text = self.clean_text(raw_text)
        labels = {
            s.get("speaker_label") for s in raw_segments if s.get("speaker_label")
        }
        return ProcessedTranscript(
            cleaned_text=cleaned_text,
            speaker_segments=[self._to_segment(s) for s in raw_segments],
            word_count=len(cleaned_text.split()),
            speaker_count=len(labels),
            processing_date=processing_date or utcnow(),
        )

    def clean_text(self, text: str) -> str:
        """Collapses whitespace and puts one space after . ! ? before a lowercase letter."""
        collapsed = _WHITESPACE.sub(" ", text or "")
        return _SENTENCE_BREAK.sub(r"\1 \2", collapsed).strip()

    def _to_segment(self, segment: dict[str, Any]) -> SpeakerSegment:
        items = segment.get("items")
        return SpeakerSegment(
            speaker=str(segment.get("speaker_label") or UNKNOWN_SPEAKER),
            start_time=_to_seconds(segment.get("start_time")),
            end_time=_to_seconds(segment.get("end_time")),
            items=[i for i in items if isinstance(i, dict)] if isinstance(items, list) else [],
        )


def _to_seconds(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0
