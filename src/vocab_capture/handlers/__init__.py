"""Handler exports."""

from vocab_capture.handlers.transcription_handler import TranscriptionHandler
from vocab_capture.handlers.word_handler import WordHandler

__all__ = ["TranscriptionHandler", "WordHandler"]
