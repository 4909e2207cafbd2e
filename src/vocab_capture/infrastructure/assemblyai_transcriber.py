"""AssemblyAI implementation of the TranscriptionService interface."""

import io
import json
from datetime import datetime, timedelta, timezone
from typing import Any

import assemblyai as aai

from vocab_capture.domain.models import JobStatus, StartJobRequest, TranscriptionJob
from vocab_capture.domain.storage_keys import storage_uri, transcript_output_key
from vocab_capture.exceptions import TranscriptionServiceError
from vocab_capture.infrastructure.interfaces import StorageClient, TranscriptionService
from vocab_capture.logging import setup_logging

logger = setup_logging()

# AssemblyAI names regional English variants explicitly, other languages by base code.
_LANGUAGE_VARIANTS = {"en-US": "en_us", "en-GB": "en_uk", "en-AU": "en_au"}


def to_assemblyai_language(language_code: str) -> str:
    return _LANGUAGE_VARIANTS.get(language_code, language_code.split("-")[0].lower())


class AssemblyAITranscriptionService(TranscriptionService):
    """
    Runs transcription jobs on AssemblyAI.

    The audio is handed over as a presigned URL to the stored recording and
    the AssemblyAI transcript id becomes the job name. AssemblyAI keeps its
    results behind its own API, so on completion the result document is
    written to ``transcriptions/<job>.json`` in the bucket and its URI is
    reported, matching a service that writes its output to the store.
    """

    def __init__(
        self,
        transcriber: aai.Transcriber,
        storage: StorageClient,
        bucket_name: str,
        presigned_url_ttl: timedelta = timedelta(hours=1),
    ):
        self._transcriber = transcriber
        self._storage = storage
        self._bucket_name = bucket_name
        self._presigned_url_ttl = presigned_url_ttl

    def start_job(self, request: StartJobRequest) -> TranscriptionJob:
        try:
            audio_url = self._storage.presigned_url(
                self._bucket_name, request.audio_key, self._presigned_url_ttl
            )
            config = aai.TranscriptionConfig(
                language_code=to_assemblyai_language(request.language_code),
                speaker_labels=request.settings.speaker_labels,
                speakers_expected=(
                    request.settings.max_speakers
                    if request.settings.speaker_labels
                    else None
                ),
            )
            transcript = self._transcriber.submit(audio_url, config=config)
        except Exception as e:
            logger.exception(
                "AssemblyAI job submission failed",
                extra={"job_name": request.job_name, "audio_key": request.audio_key},
            )
            raise TranscriptionServiceError("start", str(e), cause=e) from e

        status = JobStatus.from_vendor(transcript.status.value)
        if status is JobStatus.FAILED:
            raise TranscriptionServiceError("start", transcript.error or "job rejected")

        logger.info(
            "AssemblyAI job submitted",
            extra={"job_name": transcript.id, "requested_name": request.job_name},
        )
        return TranscriptionJob(
            job_name=transcript.id,
            status=status,
            audio_key=request.audio_key,
            language_code=request.language_code,
            creation_time=datetime.now(timezone.utc),
        )

    def get_job(self, job_name: str) -> TranscriptionJob:
        try:
            transcript = aai.Transcript.get_by_id(job_name)
        except Exception as e:
            logger.exception("AssemblyAI status query failed", extra={"job_name": job_name})
            raise TranscriptionServiceError("status", str(e), cause=e) from e

        status = JobStatus.from_vendor(transcript.status.value)
        if status is JobStatus.FAILED:
            return TranscriptionJob(
                job_name=job_name, status=status, failure_reason=transcript.error
            )
        if status is JobStatus.IN_PROGRESS:
            return TranscriptionJob(job_name=job_name, status=status)

        artifact = self._build_artifact(transcript)
        output_key = transcript_output_key(job_name)
        payload = json.dumps(artifact).encode("utf-8")
        try:
            self._storage.upload(
                bucket_name=self._bucket_name,
                object_name=output_key,
                data=io.BytesIO(payload),
                size=len(payload),
                content_type="application/json",
            )
        except Exception as e:
            raise TranscriptionServiceError("status", str(e), cause=e) from e

        return TranscriptionJob(
            job_name=job_name,
            status=status,
            completion_time=datetime.now(timezone.utc),
            transcript_uri=storage_uri(self._bucket_name, output_key),
            transcript_text=transcript.text,
            speaker_labels=artifact["results"]["speaker_labels"]["segments"],
        )

    def _build_artifact(self, transcript: aai.Transcript) -> dict[str, Any]:
        """Converts utterances into the stored result document layout."""
        segments = []
        for utterance in transcript.utterances or []:
            label = f"spk_{utterance.speaker}"
            segments.append(
                {
                    "speaker_label": label,
                    "start_time": _seconds(utterance.start),
                    "end_time": _seconds(utterance.end),
                    "items": [
                        {
                            "speaker_label": label,
                            "start_time": _seconds(word.start),
                            "end_time": _seconds(word.end),
                            "content": word.text,
                        }
                        for word in utterance.words or []
                    ],
                }
            )
        return {
            "jobName": transcript.id,
            "status": JobStatus.COMPLETED.value,
            "results": {
                "transcripts": [{"transcript": transcript.text or ""}],
                "speaker_labels": {
                    "speakers": len({s["speaker_label"] for s in segments}),
                    "segments": segments,
                },
            },
        }


def _seconds(milliseconds: int | None) -> str:
    return f"{(milliseconds or 0) / 1000:.3f}"
