"""Language codes accepted by the speech-to-text service."""

from vocab_capture.logging import setup_logging

logger = setup_logging()

DEFAULT_LANGUAGE_CODE = "en-US"

SUPPORTED_LANGUAGE_CODES = frozenset(
    {
        "af-ZA", "ar-AE", "ar-SA", "ca-ES", "cs-CZ", "da-DK", "de-CH",
        "de-DE", "el-GR", "en-AB", "en-AU", "en-GB", "en-IE", "en-IN",
        "en-NZ", "en-US", "en-WL", "en-ZA", "es-ES", "es-US", "fa-IR",
        "fi-FI", "fr-CA", "fr-FR", "he-IL", "hi-IN", "hu-HU", "id-ID",
        "it-IT", "ja-JP", "ko-KR", "ms-MY", "nl-NL", "no-NO", "pl-PL",
        "pt-BR", "pt-PT", "ro-RO", "ru-RU", "sv-SE", "ta-IN", "te-IN",
        "th-TH", "tr-TR", "uk-UA", "vi-VN", "zh-CN", "zh-TW",
    }
)


def resolve_language_code(
    requested: str | None, default: str = DEFAULT_LANGUAGE_CODE
) -> str:
    """
    Returns the requested code when supported, otherwise the default.

    An unsupported code is never an error; the downgrade is logged and the
    caller should read the returned value to learn what was honored.
    """
    if requested in SUPPORTED_LANGUAGE_CODES:
        return requested
    logger.warning(
        "Invalid language code, falling back to default",
        extra={"requested_language": requested, "language_code": default},
    )
    return default
