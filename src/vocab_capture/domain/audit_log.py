"""Audit trail of transcription job lifecycle events."""

import io
import json
from collections.abc import Callable
from datetime import datetime
from typing import Any

from vocab_capture.domain.clock import utcnow
from vocab_capture.domain.storage_keys import audit_log_key
from vocab_capture.exceptions import StorageUploadError
from vocab_capture.infrastructure.interfaces import StorageClient
from vocab_capture.logging import setup_logging

logger = setup_logging()


class TranscriptionAuditLog:
    """
    Records job events to the log and, when a storage client is given, to
    date-partitioned JSON objects under ``transcription-logs/``.

    Writing an entry never fails the caller.
    """

    def __init__(
        self,
        storage: StorageClient | None,
        bucket_name: str,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._storage = storage
        self._bucket_name = bucket_name
        self._clock = clock

    def record(self, event_type: str, data: dict[str, Any]) -> None:
        now = self._clock()
        entry = {"timestamp": now.isoformat(), "eventType": event_type, "data": data}
        logger.info(
            "Transcription event",
            extra={"event_type": event_type, "event_data": data},
        )

        if self._storage is None:
            return

        object_name = audit_log_key(event_type, now)
        payload = json.dumps(entry, indent=2, default=str).encode("utf-8")
        try:
            self._storage.upload(
                bucket_name=self._bucket_name,
                object_name=object_name,
                data=io.BytesIO(payload),
                size=len(payload),
                content_type="application/json",
            )
        except StorageUploadError:
            logger.warning(
                "Failed to save audit log entry",
                extra={"event_type": event_type, "object_name": object_name},
            )
