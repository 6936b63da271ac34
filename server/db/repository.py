"""SQLAlchemy-backed CardRepository."""

import logging
from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.orm import sessionmaker

from flashcards.card_types import FlashcardType
from flashcards.clock import now_ms
from flashcards.models import Flashcard
from flashcards.storage import CardNotFoundError, CardRepository
from server.db.models import FlashcardRow

logger = logging.getLogger("refhub.db")

_COLUMNS = tuple(Flashcard.__dataclass_fields__)


def _row_to_card(row: FlashcardRow) -> Flashcard:
    return Flashcard(**{name: getattr(row, name) for name in _COLUMNS})


class SqlCardRepository(CardRepository):
    """
    Cards stored one row per card in the flashcards table.

    Each call runs in its own transaction from the given session factory.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def get_card(self, card_id: str) -> Optional[Flashcard]:
        with self._session_factory() as session:
            row = session.get(FlashcardRow, card_id)
            return _row_to_card(row) if row is not None else None

    def upsert_card(self, card: Flashcard) -> None:
        with self._session_factory.begin() as session:
            session.merge(FlashcardRow(**card.to_dict()))

    def upsert_cards(self, cards) -> None:
        with self._session_factory.begin() as session:
            for card in cards:
                session.merge(FlashcardRow(**card.to_dict()))

    def delete_card(self, card_id: str) -> None:
        with self._session_factory.begin() as session:
            result = session.execute(
                delete(FlashcardRow).where(FlashcardRow.card_id == card_id)
            )
            if result.rowcount == 0:
                raise CardNotFoundError(card_id)

    def all_cards(self) -> List[Flashcard]:
        with self._session_factory() as session:
            rows = session.scalars(select(FlashcardRow).order_by(FlashcardRow.created_at))
            return [_row_to_card(r) for r in rows]

    def count(self) -> int:
        with self._session_factory() as session:
            return session.scalar(select(func.count()).select_from(FlashcardRow))

    def clear(self) -> None:
        with self._session_factory.begin() as session:
            session.execute(delete(FlashcardRow))
        logger.info("Cleared flashcards table")

    def get_due_cards(self, now: Optional[int] = None) -> List[Flashcard]:
        if now is None:
            now = now_ms()
        stmt = (
            select(FlashcardRow)
            .where(FlashcardRow.next_review <= now)
            .order_by(FlashcardRow.next_review)
        )
        with self._session_factory() as session:
            return [_row_to_card(r) for r in session.scalars(stmt)]

    def get_cards_by_law(self, law_id: int) -> List[Flashcard]:
        stmt = select(FlashcardRow).where(FlashcardRow.law_id == law_id)
        with self._session_factory() as session:
            return [_row_to_card(r) for r in session.scalars(stmt)]

    def get_cards_by_type(self, card_type: str) -> List[Flashcard]:
        stmt = select(FlashcardRow).where(FlashcardRow.card_type == FlashcardType(card_type).value)
        with self._session_factory() as session:
            return [_row_to_card(r) for r in session.scalars(stmt)]
