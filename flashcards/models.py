"""Data model for the flashcard engine: the Flashcard dataclass."""

import uuid
from dataclasses import dataclass, asdict
from typing import Dict, Optional

from flashcards.card_types import FlashcardType

DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3

# camelCase keys written by the browser client's IndexedDB export
_FIELD_ALIASES = {
    'id': 'card_id',
    'type': 'card_type',
    'lawId': 'law_id',
    'articleId': 'article_id',
    'frontAr': 'front',
    'backAr': 'back',
    'sourceText': 'source_text',
    'easeFactor': 'ease_factor',
    'nextReview': 'next_review',
    'createdAt': 'created_at',
    'lastReviewed': 'last_reviewed',
}


@dataclass
class Flashcard:
    """
    A single question/answer card with SM-2 scheduling state.

    law_id / article_id / front / back are opaque to the scheduler.
    All timestamps are epoch milliseconds.
    """
    card_id: str
    front: str = ''
    back: str = ''
    card_type: str = FlashcardType.USER.value
    law_id: Optional[int] = None
    article_id: str = ''
    source_text: Optional[str] = None

    # SM-2 scheduling fields
    interval: int = 0
    repetition: int = 0
    ease_factor: float = DEFAULT_EASE_FACTOR
    next_review: int = 0

    created_at: int = 0
    last_reviewed: Optional[int] = None

    def __post_init__(self):
        if isinstance(self.card_type, FlashcardType):
            self.card_type = self.card_type.value

    def to_dict(self) -> Dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> 'Flashcard':
        data = {_FIELD_ALIASES.get(k, k): v for k, v in data.items()}
        # Filter to known fields only
        known = cls.__dataclass_fields__
        data = {k: v for k, v in data.items() if k in known}
        if data.get('card_type') is not None:
            data['card_type'] = FlashcardType(data['card_type']).value
        return cls(**data)


def new_card_id() -> str:
    """Opaque random card id."""
    return uuid.uuid4().hex
