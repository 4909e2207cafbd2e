"""Simplified spaced-repetition schedule for saved words."""

from datetime import datetime, timedelta

from vocab_capture.domain.models import WordEntry


def calculate_next_review_date(
    current_date: datetime, review_count: int, was_correct: bool
) -> datetime:
    """
    Returns the next review date after a review.

    Intervals (days): 1 for the first review; 6 if the second was correct;
    ``2**(review_count - 1) * 2.5`` for later correct reviews. Any incorrect
    answer resets the interval to 1 day.
    """
    if review_count <= 0:
        interval = 1.0
    elif review_count == 1:
        interval = 6.0 if was_correct else 1.0
    else:
        interval = 2 ** (review_count - 1) * 2.5 if was_correct else 1.0
    return current_date + timedelta(days=round(interval))


def apply_review(entry: WordEntry, was_correct: bool, reviewed_at: datetime) -> WordEntry:
    """Returns a copy of the entry with the review counted and rescheduled."""
    return entry.model_copy(
        update={
            "review_count": entry.review_count + 1,
            "correct_count": entry.correct_count + (1 if was_correct else 0),
            "next_review_date": calculate_next_review_date(
                reviewed_at, entry.review_count, was_correct
            ),
        }
    )
