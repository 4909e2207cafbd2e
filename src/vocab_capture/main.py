"""FastAPI application entry point."""

from ddtrace import patch_all
from fastapi import FastAPI

from vocab_capture.routes import transcriptions_router, words_router

patch_all()

app = FastAPI(title="Vocabulary Capture API")
app.include_router(transcriptions_router)
app.include_router(words_router)
