"""Pydantic request/response schemas for the RefHub flashcards API."""

from typing import List, Optional
from pydantic import BaseModel, Field

from flashcards.card_types import FlashcardType


# ---- Cards ----

class CreateCardRequest(BaseModel):
    front: str = Field(..., min_length=1, max_length=5000)
    back: str = Field(..., min_length=1, max_length=5000)
    card_type: FlashcardType = FlashcardType.USER
    law_id: Optional[int] = Field(default=None, ge=1)
    article_id: str = Field(default='', max_length=32)
    source_text: Optional[str] = Field(default=None, max_length=20000)
    card_id: Optional[str] = Field(default=None, min_length=1, max_length=64)


class CardResponse(BaseModel):
    card_id: str
    card_type: str
    law_id: Optional[int]
    article_id: str
    front: str
    back: str
    source_text: Optional[str]
    interval: int
    repetition: int
    ease_factor: float
    next_review: int
    created_at: int
    last_reviewed: Optional[int]
    status: str


class CardListResponse(BaseModel):
    count: int
    cards: List[CardResponse]


class DueCardsResponse(BaseModel):
    due_count: int
    cards: List[CardResponse]


# ---- Review ----

class ReviewRequest(BaseModel):
    rating: int = Field(..., ge=0, le=5)


class ScheduleResponse(BaseModel):
    interval: int
    repetition: int
    ease_factor: float
    next_review: int


class ReviewResponse(BaseModel):
    card: CardResponse
    schedule: ScheduleResponse


# ---- Stats ----

class StatsResponse(BaseModel):
    total: int
    new: int
    learning: int
    review: int
    mastered: int
    due_today: int
    average_ease: float


class SeedResponse(BaseModel):
    added: int
