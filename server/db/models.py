"""SQLAlchemy models for persisted flashcards."""

from sqlalchemy import BigInteger, Float, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class FlashcardRow(Base):
    __tablename__ = "flashcards"

    card_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    card_type: Mapped[str] = mapped_column(String(16), index=True, nullable=False, default="user")
    law_id: Mapped[int | None] = mapped_column(Integer, index=True, nullable=True)
    article_id: Mapped[str] = mapped_column(String(32), index=True, nullable=False, default="")
    front: Mapped[str] = mapped_column(Text, nullable=False, default="")
    back: Mapped[str] = mapped_column(Text, nullable=False, default="")
    source_text: Mapped[str | None] = mapped_column(Text, nullable=True)

    # SM-2 state; timestamps are epoch milliseconds
    interval: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    repetition: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    ease_factor: Mapped[float] = mapped_column(Float, nullable=False, default=2.5)
    next_review: Mapped[int] = mapped_column(BigInteger, index=True, nullable=False)
    created_at: Mapped[int] = mapped_column(BigInteger, index=True, nullable=False)
    last_reviewed: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
