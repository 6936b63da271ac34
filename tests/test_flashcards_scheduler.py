"""Tests for flashcards/scheduler.py -- SM-2 spaced repetition."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest
from flashcards.card_types import FlashcardType, Rating
from flashcards.clock import DAY_MS
from flashcards.models import Flashcard
from flashcards.scheduler import create_card, review_card, sm2_schedule

NOW = 1_760_000_000_000


# ============================================================================
# TESTS: sm2_schedule
# ============================================================================

def test_rating_5_ease_increases():
    """Perfect recall (rating=5) should increase ease factor by 0.1."""
    result = sm2_schedule(rating=5, repetition=2, ease_factor=2.5, interval=6, now=NOW)
    assert result.ease_factor == pytest.approx(2.6)
    assert result.repetition == 3


def test_rating_4_ease_stable():
    """Good recall (rating=4) leaves ease unchanged."""
    result = sm2_schedule(rating=4, repetition=2, ease_factor=2.5, interval=6, now=NOW)
    assert result.ease_factor == pytest.approx(2.5)
    assert result.repetition == 3


def test_rating_3_ease_decreases():
    """Hard recall (rating=3) lowers ease by 0.14."""
    result = sm2_schedule(rating=3, repetition=2, ease_factor=2.5, interval=6, now=NOW)
    assert result.ease_factor == pytest.approx(2.36)
    assert result.repetition == 3


@pytest.mark.parametrize('rating', [0, 1, 2])
def test_failure_resets_repetition(rating):
    """Ratings below 3 restart the card tomorrow regardless of prior state."""
    result = sm2_schedule(rating=rating, repetition=7, ease_factor=2.1, interval=90, now=NOW)
    assert result.repetition == 0
    assert result.interval == 1
    assert result.ease_factor == pytest.approx(2.1)  # unchanged on failure


def test_first_success_interval_1():
    result = sm2_schedule(rating=Rating.GOOD, repetition=0, ease_factor=2.5, interval=0, now=NOW)
    assert result.interval == 1
    assert result.repetition == 1


def test_second_success_interval_6():
    result = sm2_schedule(rating=Rating.GOOD, repetition=1, ease_factor=2.5, interval=1, now=NOW)
    assert result.interval == 6
    assert result.repetition == 2


@pytest.mark.parametrize('interval,ease', [(6, 2.5), (6, 2.7), (15, 1.3), (40, 2.36), (3, 1.9)])
def test_geometric_growth_after_two_successes(interval, ease):
    """From repetition >= 2: interval = round(prior interval * prior ease)."""
    result = sm2_schedule(rating=5, repetition=2, ease_factor=ease, interval=interval, now=NOW)
    assert result.interval == round(interval * ease)
    assert isinstance(result.interval, int)


def test_ease_floor_holds_for_every_rating():
    """Ease factor never drops below 1.3."""
    for rating in range(6):
        for ease in (1.3, 1.31, 1.45, 2.5):
            for reps in (0, 1, 2, 5):
                result = sm2_schedule(rating=rating, repetition=reps,
                                      ease_factor=ease, interval=10, now=NOW)
                assert result.ease_factor >= 1.3


def test_ease_floor_clamps_at_1_3():
    result = sm2_schedule(rating=3, repetition=4, ease_factor=1.35, interval=10, now=NOW)
    assert result.ease_factor == 1.3


def test_corrupt_input_ease_reclamped():
    """Ease below the floor on input is clamped, even on the failure path."""
    result = sm2_schedule(rating=1, repetition=3, ease_factor=0.9, interval=10, now=NOW)
    assert result.ease_factor == 1.3


def test_next_review_is_now_plus_interval_days():
    result = sm2_schedule(rating=5, repetition=1, ease_factor=2.5, interval=1, now=NOW)
    assert result.next_review == NOW + 6 * DAY_MS


def test_rating_out_of_range_raises():
    """Ratings outside 0-5 are a caller bug and fail fast."""
    with pytest.raises(ValueError):
        sm2_schedule(rating=6, repetition=0, ease_factor=2.5, interval=0, now=NOW)
    with pytest.raises(ValueError):
        sm2_schedule(rating=-1, repetition=0, ease_factor=2.5, interval=0, now=NOW)
    with pytest.raises(ValueError):
        sm2_schedule(rating=3.5, repetition=0, ease_factor=2.5, interval=0, now=NOW)


def test_result_to_dict():
    result = sm2_schedule(rating=5, repetition=0, ease_factor=2.5, interval=0, now=NOW)
    d = result.to_dict()
    assert set(d) == {'interval', 'repetition', 'ease_factor', 'next_review'}


# ============================================================================
# TESTS: create_card / review_card
# ============================================================================

def test_create_card_defaults():
    card = create_card('Q?', 'A.', law_id=11, article_id='11.1', now=NOW)
    assert card.interval == 0
    assert card.repetition == 0
    assert card.ease_factor == 2.5
    assert card.next_review == NOW
    assert card.created_at == NOW
    assert card.last_reviewed is None
    assert card.card_type == FlashcardType.USER.value
    assert card.card_id


def test_create_card_generates_unique_ids():
    a = create_card('Q?', 'A.', now=NOW)
    b = create_card('Q?', 'A.', now=NOW)
    assert a.card_id != b.card_id


def test_create_card_rejects_unknown_type():
    with pytest.raises(ValueError):
        create_card('Q?', 'A.', card_type='robot', now=NOW)


def test_review_card_returns_new_record():
    card = create_card('Q?', 'A.', card_id='c1', now=NOW)
    reviewed = review_card(card, 5, now=NOW + 1000)
    assert reviewed is not card
    assert card.repetition == 0  # original untouched
    assert reviewed.repetition == 1
    assert reviewed.last_reviewed == NOW + 1000
    assert reviewed.next_review == NOW + 1000 + DAY_MS
    assert reviewed.front == 'Q?'
    assert reviewed.created_at == NOW


def test_three_review_scenario():
    """5, 5, 4 on a new card: (1, 1, 2.6) -> (6, 2, 2.7) -> (16, 3, 2.7)."""
    card = create_card('Q?', 'A.', now=NOW)

    card = review_card(card, 5, now=NOW)
    assert (card.interval, card.repetition) == (1, 1)
    assert card.ease_factor == pytest.approx(2.6)

    card = review_card(card, 5, now=NOW)
    assert (card.interval, card.repetition) == (6, 2)
    assert card.ease_factor == pytest.approx(2.7)

    card = review_card(card, 4, now=NOW)
    assert (card.interval, card.repetition) == (16, 3)
    assert card.ease_factor == pytest.approx(2.7)


def test_failure_scenario():
    card = Flashcard(card_id='c1', interval=16, repetition=3, ease_factor=2.7,
                     next_review=NOW, created_at=NOW)
    card = review_card(card, 1, now=NOW)
    assert (card.interval, card.repetition) == (1, 0)
    assert card.ease_factor == pytest.approx(2.7)


def test_successive_good_reviews_grow_interval():
    card = create_card('Q?', 'A.', now=NOW)
    intervals = []
    for _ in range(6):
        card = review_card(card, 4, now=NOW)
        intervals.append(card.interval)
    assert intervals[:2] == [1, 6]
    assert all(b > a for a, b in zip(intervals[1:], intervals[2:]))
