"""HTTP gateway implementation of the TranscriptionService interface."""

import json
from datetime import datetime
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from vocab_capture.domain.models import JobStatus, StartJobRequest, TranscriptionJob
from vocab_capture.exceptions import TranscriptionServiceError
from vocab_capture.infrastructure.interfaces import TranscriptionService
from vocab_capture.logging import setup_logging

logger = setup_logging()

_datetime_adapter = TypeAdapter(datetime)


class GatewayTranscriptionService(TranscriptionService):
    """
    Talks to the transcription service through an intermediary HTTP gateway.

    Both operations are JSON POSTs to one endpoint, selected by ``action``:
    ``startTranscription`` and ``getTranscriptionStatus``. A response carrying
    ``error`` (or ``success: false``) is treated as a failed call.
    """

    def __init__(self, client: httpx.Client, path: str = "/transcribe"):
        self._client = client
        self._path = path

    def start_job(self, request: StartJobRequest) -> TranscriptionJob:
        body = self._post(
            "start",
            {
                "action": "startTranscription",
                "audioFileKey": request.audio_key,
                "jobName": request.job_name,
                "languageCode": request.language_code,
                "speakerLabels": request.settings.speaker_labels,
                "maxSpeakers": request.settings.max_speakers,
                "maxAlternatives": request.settings.max_alternatives,
                "outputKey": request.output_key,
                "userId": request.user_id,
            },
        )
        job_name = _text(body.get("jobName"))
        if not job_name:
            raise TranscriptionServiceError("start", "response did not include a job name")

        logger.info(
            "Gateway job started",
            extra={"job_name": job_name, "status": body.get("status")},
        )
        return TranscriptionJob(
            job_name=job_name,
            status=JobStatus.from_vendor(body.get("status")),
            audio_key=request.audio_key,
            language_code=request.language_code,
        )

    def get_job(self, job_name: str) -> TranscriptionJob:
        body = self._post(
            "status", {"action": "getTranscriptionStatus", "jobName": job_name}
        )
        labels = body.get("speakerLabels")
        try:
            return TranscriptionJob(
                job_name=_text(body.get("jobName")) or job_name,
                status=JobStatus.from_vendor(body.get("status")),
                creation_time=_parse_time(body.get("creationTime")),
                completion_time=_parse_time(body.get("completionTime")),
                transcript_uri=_text(body.get("transcriptFileUri")),
                transcript_text=_text(body.get("transcriptionText")),
                speaker_labels=(
                    [s for s in labels if isinstance(s, dict)]
                    if isinstance(labels, list)
                    else []
                ),
                failure_reason=_text(body.get("failureReason")),
            )
        except ValidationError as e:
            logger.exception("Malformed gateway status", extra={"job_name": job_name})
            raise TranscriptionServiceError(
                "status", "malformed status response", cause=e
            ) from e

    def _post(self, operation: str, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            response = self._client.post(self._path, json=payload)
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.exception(
                "Gateway request failed",
                extra={"operation": operation, "action": payload.get("action")},
            )
            raise TranscriptionServiceError(operation, str(e), cause=e) from e

        if not isinstance(body, dict):
            raise TranscriptionServiceError(operation, "unexpected response body")
        if body.get("error") or body.get("success") is False:
            raise TranscriptionServiceError(
                operation, str(body.get("error") or "Operation failed")
            )
        return body


def _parse_time(value: Any) -> datetime | None:
    if value is None:
        return None
    try:
        return _datetime_adapter.validate_python(value)
    except ValidationError:
        logger.warning("Unparseable job timestamp", extra={"value": str(value)})
        return None


def _text(value: Any) -> str | None:
    """Reads an optional string field; structured values are kept as JSON."""
    if value is None or value == "":
        return None
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)
