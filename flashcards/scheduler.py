"""SM-2 spaced repetition scheduler."""

import logging
from dataclasses import dataclass, asdict, replace
from typing import Dict, Optional

from flashcards.card_types import FlashcardType, Rating
from flashcards.clock import DAY_MS, now_ms
from flashcards.models import (
    DEFAULT_EASE_FACTOR,
    MIN_EASE_FACTOR,
    Flashcard,
    new_card_id,
)

logger = logging.getLogger("refhub.scheduler")


@dataclass(frozen=True)
class SM2Result:
    """New scheduling state produced by one review."""
    interval: int
    repetition: int
    ease_factor: float
    next_review: int

    def to_dict(self) -> Dict:
        return asdict(self)


def _as_rating(rating) -> Rating:
    if isinstance(rating, bool):
        raise ValueError(f"Rating must be 0-5, got {rating!r}")
    try:
        return Rating(rating)
    except ValueError:
        raise ValueError(f"Rating must be 0-5, got {rating!r}") from None


def sm2_schedule(
    rating: int,
    repetition: int,
    ease_factor: float,
    interval: int,
    now: Optional[int] = None,
) -> SM2Result:
    """
    SM-2 spaced repetition scheduling.

    Args:
        rating:      Recall quality 0-5 (0=blackout, 5=perfect)
        repetition:  Consecutive successful reviews so far
        ease_factor: Current ease factor (>= 1.3)
        interval:    Current interval in days
        now:         Review instant in epoch ms (default: wall clock)

    Returns:
        SM2Result with interval, repetition, ease_factor, next_review

    Raises:
        ValueError if rating is not an integer in 0-5.
    """
    q = _as_rating(rating)
    if now is None:
        now = now_ms()

    if ease_factor < MIN_EASE_FACTOR:
        logger.warning("Ease factor %s below floor, clamping to %s",
                       ease_factor, MIN_EASE_FACTOR)
        ease_factor = MIN_EASE_FACTOR

    if not q.passed:
        # Lapse: start over tomorrow, ease untouched
        new_interval = 1
        new_repetition = 0
        new_ease = ease_factor
    else:
        if repetition == 0:
            new_interval = 1
        elif repetition == 1:
            new_interval = 6
        else:
            new_interval = int(round(interval * ease_factor))

        new_repetition = repetition + 1

        # EF' = EF + (0.1 - (5-q) * (0.08 + (5-q) * 0.02))
        new_ease = ease_factor + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02))
        new_ease = max(MIN_EASE_FACTOR, new_ease)

    return SM2Result(
        interval=new_interval,
        repetition=new_repetition,
        ease_factor=new_ease,
        next_review=now + new_interval * DAY_MS,
    )


def review_card(card: Flashcard, rating: int, now: Optional[int] = None) -> Flashcard:
    """Return a copy of card with the SM-2 result for rating applied."""
    if now is None:
        now = now_ms()
    result = sm2_schedule(
        rating=rating,
        repetition=card.repetition,
        ease_factor=card.ease_factor,
        interval=card.interval,
        now=now,
    )
    logger.debug("Reviewed %s rating=%s -> interval=%sd reps=%s ease=%.2f",
                 card.card_id, int(rating), result.interval,
                 result.repetition, result.ease_factor)
    return replace(
        card,
        interval=result.interval,
        repetition=result.repetition,
        ease_factor=result.ease_factor,
        next_review=result.next_review,
        last_reviewed=now,
    )


def create_card(
    front: str,
    back: str,
    *,
    card_type: str = FlashcardType.USER.value,
    law_id: Optional[int] = None,
    article_id: str = '',
    source_text: Optional[str] = None,
    card_id: Optional[str] = None,
    now: Optional[int] = None,
) -> Flashcard:
    """New card with default SM-2 state, due immediately."""
    if now is None:
        now = now_ms()
    return Flashcard(
        card_id=card_id or new_card_id(),
        front=front,
        back=back,
        card_type=FlashcardType(card_type).value,
        law_id=law_id,
        article_id=article_id,
        source_text=source_text,
        interval=0,
        repetition=0,
        ease_factor=DEFAULT_EASE_FACTOR,
        next_review=now,
        created_at=now,
        last_reviewed=None,
    )
