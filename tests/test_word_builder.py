"""Tests for WordBuilder."""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from vocab_capture.domain.models import Difficulty, WordDefinition
from vocab_capture.domain.word_builder import WordBuilder
from vocab_capture.exceptions import CacheServiceError, LLMServiceError, WordParseError

from conftest import FIXED_NOW


@pytest.fixture
def llm():
    llm = MagicMock()
    llm.define.return_value = WordDefinition(
        word="Serendipity",
        meaning="A happy accident",
        usage_example="Finding it was pure serendipity.",
        pronunciation="/ˌser.ənˈdɪp.ə.ti/",
        difficulty=Difficulty.ADVANCED,
        category="noun",
    )
    return llm


@pytest.fixture
def cache():
    cache = MagicMock()
    cache.get_definition.return_value = None
    return cache


@pytest.fixture
def builder(llm, cache, clock):
    return WordBuilder(llm, cache, clock)


class TestExtractWord:
    """Tests for parsing the target word."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Save this word: Serendipity.", "serendipity"),
            ("save word ubiquitous", "ubiquitous"),
            ("please SAVE THIS WORD:ephemeral!", "ephemeral"),
        ],
    )
    def test_parses_word(self, builder, text, expected):
        assert builder.extract_word(text) == expected

    @pytest.mark.parametrize("text", ["", "hello there", "save this word:", "save this word ..."])
    def test_rejects_missing_word(self, builder, text):
        with pytest.raises(WordParseError):
            builder.extract_word(text)


class TestDefine:
    """Tests for definition lookup."""

    def test_generates_and_caches(self, builder, llm, cache):
        """Should ask the LLM on a miss and cache the result."""
        definition = builder.define("serendipity")

        llm.define.assert_called_once_with("serendipity")
        assert definition.word == "serendipity"
        assert definition.meaning == "A happy accident"
        cache.get_definition.assert_called_once_with("serendipity")
        cache.save_definition.assert_called_once_with(definition)

    def test_uses_cached_definition(self, builder, llm, cache):
        """Should not call the LLM on a cache hit."""
        cache.get_definition.return_value = WordDefinition(word="serendipity", meaning="cached")

        assert builder.define("serendipity").meaning == "cached"
        llm.define.assert_not_called()

    def test_fills_missing_fields(self, builder, llm):
        """Should default fields the LLM left empty."""
        llm.define.return_value = WordDefinition(word="quirk")

        definition = builder.define("quirk")

        assert definition.meaning == "Definition not available"
        assert definition.usage_example == "Example with quirk not available"
        assert definition.difficulty is Difficulty.INTERMEDIATE
        assert definition.category == "other"

    def test_llm_failure_uses_fallback(self, builder, llm, cache):
        """Should return a placeholder and not cache it."""
        llm.define.side_effect = LLMServiceError("quota")

        definition = builder.define("quirk")

        assert definition.meaning == "Definition to be added"
        assert definition.usage_example == "I need to learn more about the word quirk."
        assert definition.difficulty is Difficulty.INTERMEDIATE
        cache.save_definition.assert_not_called()

    def test_cache_failures_are_bypassed(self, builder, llm, cache):
        """Should still define the word when the cache is down."""
        cache.get_definition.side_effect = CacheServiceError("vocab:definition:quirk", "get")
        cache.save_definition.side_effect = CacheServiceError("vocab:definition:quirk", "set")

        assert builder.define("quirk").meaning == "A happy accident"
        llm.define.assert_called_once()

    def test_works_without_cache(self, llm, clock):
        assert WordBuilder(llm, None, clock).define("quirk").meaning == "A happy accident"


class TestBuildEntry:
    def test_new_entry_is_due_in_one_day(self, builder):
        """Should start with zero reviews and a review date one day out."""
        entry = builder.build_entry("save this word: serendipity", "u1")

        assert entry.word == "serendipity"
        assert entry.user_id == "u1"
        assert entry.review_count == 0
        assert entry.correct_count == 0
        assert entry.created_at == FIXED_NOW
        assert entry.next_review_date == FIXED_NOW + timedelta(days=1)
        assert entry.difficulty is Difficulty.ADVANCED
