"""Object key conventions shared by the pipeline stages."""

from datetime import datetime

AUDIO_PREFIX = "audio-files/"
TRANSCRIPTIONS_PREFIX = "transcriptions/"
PROCESSED_PREFIX = "processed-transcriptions/"
AUDIT_LOG_PREFIX = "transcription-logs/"


def epoch_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def audio_key(moment: datetime, extension: str) -> str:
    return f"{AUDIO_PREFIX}audio-{epoch_millis(moment)}.{extension.lstrip('.')}"


def transcript_output_key(job_name: str) -> str:
    """Key of the raw result artifact a job writes on completion."""
    return f"{TRANSCRIPTIONS_PREFIX}{job_name}.json"


def processed_transcript_key(job_name: str) -> str:
    return f"{PROCESSED_PREFIX}{job_name}-processed.json"


def audit_log_key(event_type: str, moment: datetime) -> str:
    return (
        f"{AUDIT_LOG_PREFIX}{moment.date().isoformat()}/"
        f"{epoch_millis(moment)}-{event_type}.json"
    )


def storage_uri(bucket_name: str, object_name: str) -> str:
    return f"s3://{bucket_name}/{object_name}"
