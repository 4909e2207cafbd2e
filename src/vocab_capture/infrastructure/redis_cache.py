"""Redis-backed definition cache."""

import redis
from pydantic import ValidationError

from vocab_capture.domain.models import WordDefinition
from vocab_capture.exceptions import CacheServiceError
from vocab_capture.infrastructure.interfaces import CacheService
from vocab_capture.logging import setup_logging

logger = setup_logging()


class RedisCacheService(CacheService):
    """
    Stores definitions as JSON under ``<namespace>:definition:<word>``.

    Entries expire after ``ttl_seconds``. Replies are decoded whether or not
    the client was created with ``decode_responses``.
    """

    def __init__(self, client: redis.Redis, ttl_seconds: int, namespace: str = "vocab"):
        self._client = client
        self._ttl_seconds = ttl_seconds
        self._namespace = namespace

    def get_definition(self, word: str) -> WordDefinition | None:
        key = self._key(word)
        try:
            value = self._client.get(key)
        except redis.RedisError as e:
            logger.exception("Redis get failed", extra={"key": key})
            raise CacheServiceError(key, "get", cause=e) from e

        if value is None:
            logger.info("Cache miss", extra={"key": key})
            return None
        try:
            definition = WordDefinition.model_validate_json(value)
        except ValidationError as e:
            logger.warning("Unreadable cache entry", extra={"key": key})
            raise CacheServiceError(key, "get", cause=e) from e
        logger.info("Cache hit", extra={"key": key})
        return definition

    def save_definition(self, definition: WordDefinition) -> None:
        key = self._key(definition.word)
        try:
            self._client.set(key, definition.model_dump_json(), ex=self._ttl_seconds)
        except redis.RedisError as e:
            logger.exception("Redis set failed", extra={"key": key})
            raise CacheServiceError(key, "set", cause=e) from e
        logger.info("Definition cached", extra={"key": key, "ttl": self._ttl_seconds})

    def _key(self, word: str) -> str:
        return f"{self._namespace}:definition:{word}"
