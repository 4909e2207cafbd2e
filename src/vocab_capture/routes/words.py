"""Vocabulary word API endpoints."""

from typing import Annotated, List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from vocab_capture.dependencies import get_user_id, get_word_handler
from vocab_capture.domain.models import WordEntry
from vocab_capture.exceptions import (
    WordNotFoundError,
    WordParseError,
    WordPersistenceError,
)
from vocab_capture.handlers.word_handler import WordHandler
from vocab_capture.logging import setup_logging
from vocab_capture.response_models import CaptureWordRequest, ReviewRequest

logger = setup_logging()

router = APIRouter(prefix="/words", tags=["words"])

HandlerDep = Annotated[WordHandler, Depends(get_word_handler)]
UserIdDep = Annotated[str, Depends(get_user_id)]


@router.post("", response_model=WordEntry, status_code=201)
def capture_word(body: CaptureWordRequest, handler: HandlerDep, user_id: UserIdDep):
    """Saves the word named in a transcript, with its definition."""
    try:
        return handler.capture(body.transcribed_text, user_id)
    except WordParseError:
        logger.warning("No word in transcribed text", extra={"user_id": user_id})
        raise HTTPException(
            status_code=422, detail="Could not parse word from transcribed text"
        )
    except WordPersistenceError:
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("", response_model=List[WordEntry])
def list_words(handler: HandlerDep, user_id: UserIdDep):
    """Returns the caller's words, newest first."""
    try:
        return handler.list_words(user_id)
    except WordPersistenceError:
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/due", response_model=List[WordEntry])
def list_due_words(handler: HandlerDep, user_id: UserIdDep):
    """Returns the caller's words that are due for review."""
    try:
        return handler.list_due(user_id)
    except WordPersistenceError:
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/{word_id}/reviews", response_model=WordEntry)
def record_review(
    word_id: UUID, body: ReviewRequest, handler: HandlerDep, user_id: UserIdDep
):
    """Records a review outcome and reschedules the word."""
    try:
        return handler.record_review(user_id, word_id, body.was_correct)
    except WordNotFoundError:
        raise HTTPException(status_code=404, detail="Word not found")
    except WordPersistenceError:
        raise HTTPException(status_code=500, detail="Internal server error")
