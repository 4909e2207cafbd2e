"""Request and response bodies of the HTTP API."""

from vocab_capture.domain.models import CamelModel


class CaptureWordRequest(CamelModel):
    """Transcript of the user's "save this word" request."""

    transcribed_text: str


class ReviewRequest(CamelModel):
    was_correct: bool
