"""Aggregate deck statistics: status counts, due today, average ease."""

from dataclasses import dataclass, asdict
from datetime import datetime, tzinfo
from typing import Dict, Iterable, Optional

from flashcards.card_types import CardStatus
from flashcards.clock import now_ms
from flashcards.models import DEFAULT_EASE_FACTOR, Flashcard
from flashcards.selector import card_status


@dataclass
class DeckStats:
    total: int = 0
    new: int = 0
    learning: int = 0
    review: int = 0
    mastered: int = 0
    due_today: int = 0
    average_ease: float = DEFAULT_EASE_FACTOR

    def to_dict(self) -> Dict:
        return asdict(self)


def end_of_day_ms(now: Optional[int] = None, tz: Optional[tzinfo] = None) -> int:
    """
    Epoch ms of 23:59:59.999 on the day containing now.

    Uses the machine's local time zone unless tz is given.
    """
    if now is None:
        now = now_ms()
    if tz is None:
        day = datetime.fromtimestamp(now / 1000)
    else:
        day = datetime.fromtimestamp(now / 1000, tz)
    end = day.replace(hour=23, minute=59, second=59, microsecond=999000)
    return int(round(end.timestamp() * 1000))


def compute_stats(
    cards: Iterable[Flashcard],
    now: Optional[int] = None,
    tz: Optional[tzinfo] = None,
) -> DeckStats:
    """
    Compute status counts and review load across a card collection.

    An empty collection reports average_ease = 2.5 (the default ease).
    """
    today_end = end_of_day_ms(now, tz)
    counts = {status: 0 for status in CardStatus}
    total = 0
    due_today = 0
    total_ease = 0.0

    for card in cards:
        total += 1
        counts[card_status(card)] += 1
        if card.next_review <= today_end:
            due_today += 1
        total_ease += card.ease_factor

    return DeckStats(
        total=total,
        new=counts[CardStatus.NEW],
        learning=counts[CardStatus.LEARNING],
        review=counts[CardStatus.REVIEW],
        mastered=counts[CardStatus.MASTERED],
        due_today=due_today,
        average_ease=total_ease / total if total else DEFAULT_EASE_FACTOR,
    )
