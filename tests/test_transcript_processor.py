"""Tests for TranscriptProcessor."""

from vocab_capture.domain.transcript_processor import TranscriptProcessor

from conftest import FIXED_NOW


class TestCleanText:
    """Tests for transcript text normalization."""

    def test_collapses_whitespace_and_splits_sentences(self):
        """Should collapse runs of whitespace and space out sentence breaks."""
        result = TranscriptProcessor().process("Hello   world.this is", [], FIXED_NOW)

        assert result.cleaned_text == "Hello world. this is"
        assert result.word_count == 4

    def test_spaces_out_lowercase_sentence_start(self):
        assert TranscriptProcessor().clean_text("Hi.there") == "Hi. there"

    def test_leaves_capitalized_sentence_start_alone(self):
        """Should only insert a space before a lowercase letter."""
        assert TranscriptProcessor().clean_text("Hi.There") == "Hi.There"

    def test_handles_question_and_exclamation_marks(self):
        """Should treat ! and ? as sentence terminators."""
        assert TranscriptProcessor().clean_text("Really?yes!sure") == "Really? yes! sure"

    def test_trims_and_handles_newlines(self):
        """Should turn tabs and newlines into single spaces and trim."""
        assert TranscriptProcessor().clean_text("\n  one\t\ttwo \n") == "one two"

    def test_empty_text_has_no_words(self):
        """Should report zero words for empty or blank input."""
        result = TranscriptProcessor().process("   ", [], FIXED_NOW)

        assert result.cleaned_text == ""
        assert result.word_count == 0
        assert result.speaker_count == 0


class TestSpeakerSegments:
    """Tests for speaker segment conversion."""

    def test_converts_times_and_counts_distinct_speakers(self):
        """Should parse string times and count distinct labels."""
        segments = [
            {"speaker_label": "spk_0", "start_time": "0.5", "end_time": "1.25", "items": []},
            {"speaker_label": "spk_1", "start_time": "1.25", "end_time": "2.0"},
            {"speaker_label": "spk_0", "start_time": "2.0", "end_time": "3.5"},
        ]

        result = TranscriptProcessor().process("a b", segments, FIXED_NOW)

        assert result.speaker_count == 2
        assert [s.speaker for s in result.speaker_segments] == ["spk_0", "spk_1", "spk_0"]
        assert result.speaker_segments[0].start_time == 0.5
        assert result.speaker_segments[0].end_time == 1.25
        assert result.speaker_segments[1].items == []

    def test_defaults_missing_speaker_and_bad_times(self):
        """Should use 'unknown' and 0.0 for missing or unparseable values."""
        result = TranscriptProcessor().process(
            "text", [{"start_time": "abc", "items": "not-a-list"}], FIXED_NOW
        )

        segment = result.speaker_segments[0]
        assert segment.speaker == "unknown"
        assert segment.start_time == 0.0
        assert segment.end_time == 0.0
        assert segment.items == []
        assert result.speaker_count == 0

    def test_same_input_gives_same_output(self):
        """Should be deterministic for a fixed processing date."""
        segments = [{"speaker_label": "spk_0", "start_time": "0", "end_time": "1"}]
        processor = TranscriptProcessor()

        first = processor.process("hi.there", segments, FIXED_NOW)
        second = processor.process("hi.there", segments, FIXED_NOW)

        assert first == second
        assert first.processing_date == FIXED_NOW

    def test_does_not_mutate_input(self):
        """Should leave the raw segments untouched."""
        segments = [{"speaker_label": "spk_0", "start_time": "1", "end_time": "2"}]
        TranscriptProcessor().process("x", segments, FIXED_NOW)

        assert segments == [{"speaker_label": "spk_0", "start_time": "1", "end_time": "2"}]
