"""Transcription API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Form, HTTPException, UploadFile

from vocab_capture.dependencies import get_transcription_handler, get_user_id
from vocab_capture.domain.models import PipelineResult, TranscriptionOptions
from vocab_capture.exceptions import (
    JobCancelledError,
    JobFailedError,
    JobSubmissionError,
    JobTimeoutError,
    TranscriptionPipelineError,
    UploadError,
)
from vocab_capture.handlers.transcription_handler import TranscriptionHandler
from vocab_capture.logging import setup_logging

logger = setup_logging()

router = APIRouter(prefix="/transcriptions", tags=["transcriptions"])

HandlerDep = Annotated[TranscriptionHandler, Depends(get_transcription_handler)]
UserIdDep = Annotated[str, Depends(get_user_id)]

_STATUS_BY_ERROR = (
    ((UploadError, JobSubmissionError, JobFailedError), 502),
    ((JobTimeoutError,), 504),
    ((JobCancelledError,), 409),
)


@router.post("", response_model=PipelineResult)
def create_transcription(
    audio: UploadFile,
    handler: HandlerDep,
    user_id: UserIdDep,
    language_code: Annotated[str | None, Form()] = None,
):
    """Uploads a recording and returns its transcript once the job completes."""
    options = TranscriptionOptions(language_code=language_code, user_id=user_id)
    try:
        return handler.run(audio.file.read(), options)
    except TranscriptionPipelineError as e:
        status_code = next(
            (code for errors, code in _STATUS_BY_ERROR if isinstance(e, errors)), 500
        )
        logger.warning(
            "Transcription request failed",
            extra={"user_id": user_id, "stage": e.stage, "status_code": status_code},
        )
        raise HTTPException(
            status_code=status_code, detail=f"Transcription failed at {e.stage}: {e}"
        )
