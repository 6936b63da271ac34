"""Due-set queries and status classification over card collections."""

from typing import Iterable, List, Optional

from flashcards.card_types import CardStatus
from flashcards.clock import now_ms
from flashcards.models import DEFAULT_EASE_FACTOR, Flashcard

MASTERED_INTERVAL_DAYS = 21


def is_due(card: Flashcard, now: Optional[int] = None) -> bool:
    if now is None:
        now = now_ms()
    return card.next_review <= now


def get_due_cards(cards: Iterable[Flashcard], now: Optional[int] = None) -> List[Flashcard]:
    """
    Cards with next_review <= now, most overdue first.

    now is read once so the whole batch is judged against the same instant.
    """
    if now is None:
        now = now_ms()
    due = [c for c in cards if c.next_review <= now]
    due.sort(key=lambda c: c.next_review)
    return due


def card_status(card: Flashcard) -> CardStatus:
    # Order matters: the predicates overlap.
    if card.repetition == 0:
        return CardStatus.NEW
    if card.interval < MASTERED_INTERVAL_DAYS:
        return CardStatus.LEARNING
    if card.ease_factor >= DEFAULT_EASE_FACTOR:
        return CardStatus.MASTERED
    return CardStatus.REVIEW


def filter_cards(
    cards: Iterable[Flashcard],
    law_id: Optional[int] = None,
    article_id: Optional[str] = None,
    card_type: Optional[str] = None,
) -> List[Flashcard]:
    """Cards matching every given grouping field (None = any)."""
    result = []
    for c in cards:
        if law_id is not None and c.law_id != law_id:
            continue
        if article_id is not None and c.article_id != article_id:
            continue
        if card_type is not None and c.card_type != card_type:
            continue
        result.append(c)
    return result
