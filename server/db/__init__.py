"""Database layer: SQLAlchemy models, session and card repository."""

from server.db.models import Base, FlashcardRow
from server.db.repository import SqlCardRepository
from server.db.session import init_db

__all__ = [
    "Base",
    "FlashcardRow",
    "SqlCardRepository",
    "init_db",
]
