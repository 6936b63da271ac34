"""Card repositories: the persistence seam injected into sessions, CLI and server."""

import json
import logging
import os
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from flashcards.models import Flashcard
from flashcards.scheduler import review_card
from flashcards.selector import filter_cards, get_due_cards

logger = logging.getLogger("refhub.storage")


class CardNotFoundError(KeyError):
    """No card with the requested id."""


class DuplicateCardError(ValueError):
    """A card with this id already exists."""


class CardRepository(ABC):
    """
    Storage interface for flashcards.

    Subclasses implement the five primitives; the queries below are built on
    them and may be overridden where the backend can do better.
    """

    @abstractmethod
    def get_card(self, card_id: str) -> Optional[Flashcard]:
        ...

    @abstractmethod
    def upsert_card(self, card: Flashcard) -> None:
        """Insert or replace a card by card_id."""

    @abstractmethod
    def delete_card(self, card_id: str) -> None:
        """Remove a card. Raises CardNotFoundError if absent."""

    @abstractmethod
    def all_cards(self) -> List[Flashcard]:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...

    def add_card(self, card: Flashcard) -> None:
        if self.get_card(card.card_id) is not None:
            raise DuplicateCardError(f"Card already exists: {card.card_id}")
        self.upsert_card(card)

    def upsert_cards(self, cards: Iterable[Flashcard]) -> None:
        for card in cards:
            self.upsert_card(card)

    def count(self) -> int:
        return len(self.all_cards())

    def get_due_cards(self, now: Optional[int] = None) -> List[Flashcard]:
        """Cards with next_review <= now, most overdue first."""
        return get_due_cards(self.all_cards(), now)

    def get_cards_by_law(self, law_id: int) -> List[Flashcard]:
        return filter_cards(self.all_cards(), law_id=law_id)

    def get_cards_by_type(self, card_type: str) -> List[Flashcard]:
        return filter_cards(self.all_cards(), card_type=card_type)

    def update_review(self, card_id: str, rating: int, now: Optional[int] = None) -> Flashcard:
        """Apply a review to a stored card, persist and return the new card."""
        card = self.get_card(card_id)
        if card is None:
            raise CardNotFoundError(card_id)
        updated = review_card(card, rating, now)
        self.upsert_card(updated)
        return updated


class InMemoryCardRepository(CardRepository):
    """Dict-backed repository. Mutations (reviews included) are serialized by a lock."""

    def __init__(self, cards: Optional[Iterable[Flashcard]] = None):
        self._cards: Dict[str, Flashcard] = {}
        self._lock = threading.RLock()
        for card in cards or []:
            self._cards[card.card_id] = card

    def _persist(self) -> None:
        pass

    def get_card(self, card_id: str) -> Optional[Flashcard]:
        return self._cards.get(card_id)

    def upsert_card(self, card: Flashcard) -> None:
        with self._lock:
            self._cards[card.card_id] = card
            self._persist()

    def upsert_cards(self, cards: Iterable[Flashcard]) -> None:
        """Batch upsert -- single save at the end."""
        with self._lock:
            for card in cards:
                self._cards[card.card_id] = card
            self._persist()

    def add_card(self, card: Flashcard) -> None:
        with self._lock:
            super().add_card(card)

    def update_review(self, card_id: str, rating: int, now: Optional[int] = None) -> Flashcard:
        with self._lock:
            return super().update_review(card_id, rating, now)

    def delete_card(self, card_id: str) -> None:
        with self._lock:
            if card_id not in self._cards:
                raise CardNotFoundError(card_id)
            del self._cards[card_id]
            self._persist()

    def all_cards(self) -> List[Flashcard]:
        return list(self._cards.values())

    def count(self) -> int:
        return len(self._cards)

    def clear(self) -> None:
        with self._lock:
            self._cards.clear()
            self._persist()


class JsonlCardRepository(InMemoryCardRepository):
    """
    JSONL-backed card storage.

    Loads entire file into memory on init (fine for <10k cards).
    Writes are atomic: the whole file is rewritten to a temp file and renamed.
    """

    def __init__(self, db_path):
        super().__init__()
        self.db_path = Path(db_path)
        self._load()

    def _load(self) -> None:
        if not self.db_path.exists():
            return
        with open(self.db_path, 'r', encoding='utf-8') as f:
            for lineno, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    card = Flashcard.from_dict(json.loads(line))
                except (ValueError, TypeError) as e:
                    logger.warning("Skipping bad card at %s:%d: %s",
                                   self.db_path, lineno, e)
                    continue
                self._cards[card.card_id] = card
        logger.debug("Loaded %d card(s) from %s", len(self._cards), self.db_path)

    def _persist(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.db_path.with_suffix(self.db_path.suffix + '.tmp')
        with open(tmp, 'w', encoding='utf-8') as f:
            for card in self._cards.values():
                f.write(json.dumps(card.to_dict(), ensure_ascii=False) + '\n')
        os.replace(tmp, self.db_path)
