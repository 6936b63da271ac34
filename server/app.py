"""FastAPI application -- routes for the RefHub flashcards service."""

import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from fastapi import Depends, FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware

from flashcards.card_types import FlashcardType
from flashcards.storage import CardNotFoundError, CardRepository, DuplicateCardError
from server.config import Settings
from server.dependencies import get_card_repository, get_settings
from server.schemas import (
    CardListResponse,
    CardResponse,
    CreateCardRequest,
    DueCardsResponse,
    ReviewRequest,
    ReviewResponse,
    SeedResponse,
    StatsResponse,
)
from server.services import flashcard_service
from server.__version__ import __version__

logger = logging.getLogger("refhub")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan: no heavy work. The card store is opened lazily on first request."""
    ts = datetime.now(timezone.utc).isoformat()
    logger.info("[%s] Startup: begin (card store opened on first request)", ts)
    yield
    ts_end = datetime.now(timezone.utc).isoformat()
    logger.info("[%s] Shutdown: complete", ts_end)


app = FastAPI(title="RefHub Flashcards", version=__version__, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health():
    return {"ok": True}


# ---- Cards ----

@app.post("/flashcards", response_model=CardResponse, status_code=201)
def create_flashcard(body: CreateCardRequest, store: CardRepository = Depends(get_card_repository)):
    fields = body.model_dump()
    fields['card_type'] = body.card_type.value
    try:
        return flashcard_service.create_card(store, fields)
    except DuplicateCardError:
        raise HTTPException(status_code=409, detail=f"Card already exists: {body.card_id}")
    except Exception:
        logger.exception("Card create failed")
        raise HTTPException(status_code=500, detail="Could not save card")


@app.get("/flashcards", response_model=CardListResponse)
def list_flashcards(
    law_id: Optional[int] = None,
    card_type: Optional[FlashcardType] = None,
    store: CardRepository = Depends(get_card_repository),
):
    return flashcard_service.list_cards(
        store,
        law_id=law_id,
        card_type=card_type.value if card_type else None,
    )


# ---- Due Cards ----

@app.get("/flashcards/due", response_model=DueCardsResponse)
def due_flashcards(store: CardRepository = Depends(get_card_repository)):
    return flashcard_service.get_due_cards(store)


# ---- Stats ----

@app.get("/flashcards/stats", response_model=StatsResponse)
def flashcard_stats(store: CardRepository = Depends(get_card_repository)):
    return flashcard_service.get_stats(store)


@app.post("/flashcards/seed", response_model=SeedResponse)
def seed_flashcards(store: CardRepository = Depends(get_card_repository)):
    try:
        result = flashcard_service.seed_samples(store)
    except Exception:
        logger.exception("Seeding sample cards failed")
        raise HTTPException(status_code=500, detail="Could not seed sample cards")
    logger.info("Seeded %d sample card(s)", result['added'])
    return result


@app.get("/flashcards/{card_id}", response_model=CardResponse)
def get_flashcard(card_id: str, store: CardRepository = Depends(get_card_repository)):
    try:
        return flashcard_service.get_card(store, card_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Card not found: {card_id}")


# ---- Review ----

@app.post("/flashcards/{card_id}/review", response_model=ReviewResponse)
def review_flashcard(
    card_id: str,
    body: ReviewRequest,
    store: CardRepository = Depends(get_card_repository),
):
    try:
        return flashcard_service.review_card(store, card_id, body.rating)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Card not found: {card_id}")
    except Exception:
        logger.exception("Review failed for card %s", card_id)
        raise HTTPException(status_code=500, detail="Could not save review")


@app.delete("/flashcards/{card_id}", status_code=204)
def delete_flashcard(card_id: str, store: CardRepository = Depends(get_card_repository)):
    try:
        flashcard_service.delete_card(store, card_id)
    except CardNotFoundError:
        raise HTTPException(status_code=404, detail=f"Card not found: {card_id}")
    except Exception:
        logger.exception("Delete failed for card %s", card_id)
        raise HTTPException(status_code=500, detail="Could not delete card")
    return Response(status_code=204)
