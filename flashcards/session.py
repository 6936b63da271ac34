"""Interactive review session runner with injectable IO."""

from pathlib import Path
from typing import Callable, Dict, List, Optional

from flashcards.card_types import Rating
from flashcards.clock import Clock, now_ms
from flashcards.models import Flashcard
from flashcards.session_log import log_session
from flashcards.storage import CardRepository

RATING_HELP = ("0=blackout  1=wrong  2=wrong but easy  "
               "3=hard  4=good  5=perfect")


def _ask_rating(
    input_fn: Callable[[str], str],
    output_fn: Callable[[str], None],
) -> Optional[Rating]:
    """Prompt until a 0-5 rating is entered. None means quit."""
    while True:
        raw = input_fn("Rating (0-5): ").strip().lower()
        if raw == 'q':
            return None
        try:
            return Rating(int(raw))
        except ValueError:
            output_fn(f"  Enter a number 0-5 ({RATING_HELP}).")


def run_review_session(
    repository: CardRepository,
    due_cards: List[Flashcard],
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
    log_path: Optional[Path] = None,
    now_fn: Clock = now_ms,
) -> Dict:
    """
    Run an interactive review session over due cards.

    Flow per card:
        1. Show front, wait for the reveal (q quits, s skips)
        2. Show back
        3. Collect a 0-5 rating
        4. Reschedule via SM-2 and persist through the repository

    Returns:
        Summary dict: {reviewed, correct, incorrect, skipped}
    """
    reviewed = 0
    correct = 0
    incorrect = 0
    skipped = 0
    cards_reviewed_log: List[Dict] = []

    output_fn(f"\n{'='*60}")
    output_fn(f"REVIEW SESSION -- {len(due_cards)} card(s) due")
    output_fn(f"{'='*60}")
    output_fn("Press Enter to reveal the answer. 'q' quits, 's' skips.\n")

    quit_early = False
    for idx, card in enumerate(due_cards, 1):
        law = f"Law {card.law_id}" if card.law_id is not None else "General"
        output_fn(f"\n--- Card {idx}/{len(due_cards)} [{law}] ---")
        output_fn(f"  {card.front}")

        try:
            action = input_fn("\n(reveal) ").strip().lower()
            if action == 'q':
                quit_early = True
            elif action == 's':
                skipped += 1
                output_fn("  (skipped)")
                continue
            else:
                output_fn(f"\n  {card.back}")
                output_fn(f"  {RATING_HELP}")
                rating = _ask_rating(input_fn, output_fn)
                quit_early = rating is None
        except (EOFError, KeyboardInterrupt):
            output_fn("\nSession ended.")
            break

        if quit_early:
            output_fn("Ending session early.")
            break

        updated = repository.update_review(card.card_id, rating, now=now_fn())
        output_fn(f"  Next review in {updated.interval} day(s)"
                  f" (ease {updated.ease_factor:.2f})")

        cards_reviewed_log.append({
            'card_id': card.card_id,
            'rating': int(rating),
            'law_id': card.law_id,
            'interval': updated.interval,
        })

        reviewed += 1
        if rating.passed:
            correct += 1
        else:
            incorrect += 1

    summary = {
        'reviewed': reviewed,
        'correct': correct,
        'incorrect': incorrect,
        'skipped': skipped,
    }

    output_fn(f"\n{'='*60}")
    output_fn("SESSION COMPLETE")
    output_fn(f"  Reviewed: {reviewed}  Correct: {correct}  "
              f"Incorrect: {incorrect}  Skipped: {skipped}")
    output_fn(f"{'='*60}")

    if log_path and cards_reviewed_log:
        log_session(log_path, summary, cards_reviewed_log)

    return summary
