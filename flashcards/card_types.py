"""Closed enumerations for the flashcard engine: ratings, statuses, provenance."""

from enum import Enum, IntEnum


class Rating(IntEnum):
    """Self-assessed recall quality for a single review (SM-2 0-5 scale)."""
    BLACKOUT = 0        # complete blackout, wrong response
    INCORRECT = 1       # wrong, but remembered once the answer was shown
    INCORRECT_EASY = 2  # wrong, but the answer seemed easy to recall
    HARD = 3            # correct with serious difficulty
    GOOD = 4            # correct after hesitation
    PERFECT = 5

    @property
    def passed(self) -> bool:
        return self >= Rating.HARD


class CardStatus(str, Enum):
    """Reporting category of a card. Not used for scheduling."""
    NEW = "new"
    LEARNING = "learning"
    MASTERED = "mastered"
    REVIEW = "review"


class FlashcardType(str, Enum):
    """Who authored the card."""
    USER = "user"
    ADMIN = "admin"
