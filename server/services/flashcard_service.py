"""Flashcard service wrappers -- all return JSON-serializable dicts."""

import sys
from pathlib import Path
from typing import Dict, Optional

_project_root = str(Path(__file__).resolve().parent.parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from flashcards.models import Flashcard
from flashcards.samples import seed_sample_cards
from flashcards.scheduler import create_card as _new_card
from flashcards.selector import card_status, filter_cards
from flashcards.stats import compute_stats
from flashcards.storage import CardNotFoundError, CardRepository


def _card_to_dict(card: Flashcard) -> Dict:
    """Convert a Flashcard to a JSON-safe dict with its reporting status."""
    d = card.to_dict()
    d['status'] = card_status(card).value
    return d


def create_card(store: CardRepository, fields: Dict) -> Dict:
    """
    Create a card with fresh scheduling state and store it.

    Raises:
        DuplicateCardError if fields['card_id'] is already taken.
    """
    card = _new_card(
        fields['front'],
        fields['back'],
        card_type=fields.get('card_type', 'user'),
        law_id=fields.get('law_id'),
        article_id=fields.get('article_id') or '',
        source_text=fields.get('source_text'),
        card_id=fields.get('card_id'),
    )
    store.add_card(card)
    return _card_to_dict(card)


def list_cards(
    store: CardRepository,
    law_id: Optional[int] = None,
    card_type: Optional[str] = None,
) -> Dict:
    """All cards, optionally narrowed by law and/or provenance."""
    if law_id is not None:
        cards = store.get_cards_by_law(law_id)
    else:
        cards = store.all_cards()
    cards = filter_cards(cards, card_type=card_type)
    return {
        'count': len(cards),
        'cards': [_card_to_dict(c) for c in cards],
    }


def get_card(store: CardRepository, card_id: str) -> Dict:
    """Raises CardNotFoundError if card_id not found."""
    card = store.get_card(card_id)
    if card is None:
        raise CardNotFoundError(card_id)
    return _card_to_dict(card)


def get_due_cards(store: CardRepository) -> Dict:
    """Return all due cards, most overdue first."""
    due = store.get_due_cards()
    return {
        'due_count': len(due),
        'cards': [_card_to_dict(c) for c in due],
    }


def review_card(store: CardRepository, card_id: str, rating: int) -> Dict:
    """
    Apply a 0-5 rating to a stored card and persist the new schedule.

    Returns:
        {card, schedule}

    Raises:
        CardNotFoundError if card_id not found.
    """
    updated = store.update_review(card_id, rating)
    return {
        'card': _card_to_dict(updated),
        'schedule': {
            'interval': updated.interval,
            'repetition': updated.repetition,
            'ease_factor': updated.ease_factor,
            'next_review': updated.next_review,
        },
    }


def delete_card(store: CardRepository, card_id: str) -> None:
    store.delete_card(card_id)


def get_stats(store: CardRepository) -> Dict:
    return compute_stats(store.all_cards()).to_dict()


def seed_samples(store: CardRepository) -> Dict:
    return {'added': seed_sample_cards(store)}
