"""Pushes local recordings into object storage."""

import io
import time
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from vocab_capture.domain.clock import utcnow
from vocab_capture.domain.storage_keys import audio_key
from vocab_capture.exceptions import StorageUploadError, UploadError
from vocab_capture.infrastructure.interfaces import StorageClient
from vocab_capture.logging import setup_logging

logger = setup_logging()

AudioSource = str | Path | bytes


class AudioUploader:
    """Uploads one recording per call under a timestamp-derived key."""

    def __init__(
        self,
        storage: StorageClient,
        bucket_name: str,
        extension: str = "m4a",
        content_type: str = "audio/m4a",
        visibility_delay_seconds: float = 0.0,
        clock: Callable[[], datetime] = utcnow,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._storage = storage
        self._bucket_name = bucket_name
        self._extension = extension
        self._content_type = content_type
        self._visibility_delay_seconds = visibility_delay_seconds
        self._clock = clock
        self._sleep = sleep

    def upload(self, audio: AudioSource) -> str:
        """
        Reads the recording and stores it as ``audio-files/audio-<ms>.<ext>``.

        Args:
            audio: Path to a local recording, or its raw bytes.

        Returns:
            The storage key of the uploaded object.

        Raises:
            UploadError: If the recording cannot be read or stored.
        """
        audio_ref = "<bytes>" if isinstance(audio, bytes) else str(audio)

        try:
            data = audio if isinstance(audio, bytes) else Path(audio).read_bytes()
        except OSError as e:
            logger.exception("Could not read recording", extra={"audio_ref": audio_ref})
            raise UploadError(audio_ref, e) from e
        if not data:
            raise UploadError(audio_ref, ValueError("recording is empty"))

        object_name = audio_key(self._clock(), self._extension)
        try:
            self._storage.upload(
                bucket_name=self._bucket_name,
                object_name=object_name,
                data=io.BytesIO(data),
                size=len(data),
                content_type=self._content_type,
            )
        except StorageUploadError as e:
            raise UploadError(audio_ref, e) from e

        # Known race: the store may not expose the object to the transcription
        # service immediately. The delay narrows the window, it does not close it.
        if self._visibility_delay_seconds > 0:
            self._sleep(self._visibility_delay_seconds)

        logger.info(
            "Recording uploaded",
            extra={"audio_key": object_name, "size": len(data)},
        )
        return object_name
