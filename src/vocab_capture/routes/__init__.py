"""API route exports."""

from vocab_capture.routes.transcriptions import router as transcriptions_router
from vocab_capture.routes.words import router as words_router

__all__ = ["transcriptions_router", "words_router"]
