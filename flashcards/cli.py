"""
Flashcard study CLI.

Usage:
    python -m flashcards.cli --db cards.jsonl due
    python -m flashcards.cli --db cards.jsonl review
    python -m flashcards.cli --db cards.jsonl stats
    python -m flashcards.cli --db cards.jsonl add --front "Q?" --back "A." [--law 11 --article 11.1]
    python -m flashcards.cli --db cards.jsonl show <card_id>
    python -m flashcards.cli --db cards.jsonl delete <card_id>
    python -m flashcards.cli --db cards.jsonl seed
    python -m flashcards.cli --db cards.jsonl import export.json
"""

import sys
import json
import logging
import argparse
from datetime import datetime
from pathlib import Path

from flashcards.card_types import FlashcardType
from flashcards.clock import now_ms
from flashcards.models import Flashcard
from flashcards.samples import seed_sample_cards
from flashcards.scheduler import create_card
from flashcards.selector import card_status
from flashcards.session import run_review_session
from flashcards.stats import compute_stats
from flashcards.storage import CardNotFoundError, JsonlCardRepository


def _fmt_ts(ts) -> str:
    if ts is None:
        return 'never'
    return datetime.fromtimestamp(ts / 1000).strftime('%Y-%m-%d %H:%M')


def cmd_due(args):
    """Show due cards."""
    store = JsonlCardRepository(args.db)
    due = store.get_due_cards()
    if not due:
        print("No cards due right now.")
        return
    print(f"\n{len(due)} card(s) due for review:\n")
    for i, card in enumerate(due, 1):
        print(f"  {i}. [{card.card_id}] {card.front[:80]}")
        print(f"     due={_fmt_ts(card.next_review)}  ease={card.ease_factor:.2f}  "
              f"reps={card.repetition}  interval={card.interval}d")


def cmd_review(args):
    """Run interactive review session."""
    store = JsonlCardRepository(args.db)
    due = store.get_due_cards()
    if not due:
        print("No cards due right now. Come back later!")
        return
    log_path = Path(args.db).parent / 'session_log.jsonl'
    run_review_session(store, due, input_fn=input, log_path=log_path)


def cmd_stats(args):
    """Show deck statistics."""
    store = JsonlCardRepository(args.db)
    stats = compute_stats(store.all_cards())

    print(f"\nDeck: {args.db}")
    print(f"  Total cards:  {stats.total}")
    print(f"  Due today:    {stats.due_today}")
    print(f"  New:          {stats.new}")
    print(f"  Learning:     {stats.learning}")
    print(f"  Review:       {stats.review}")
    print(f"  Mastered:     {stats.mastered}")
    print(f"  Average ease: {stats.average_ease:.2f}")


def cmd_add(args):
    """Add a learner-authored card."""
    store = JsonlCardRepository(args.db)
    card = create_card(
        args.front, args.back,
        card_type=args.type,
        law_id=args.law,
        article_id=args.article or '',
    )
    store.add_card(card)
    print(f"Added card {card.card_id}")


def cmd_show(args):
    """Show card details."""
    store = JsonlCardRepository(args.db)
    card = store.get_card(args.card_id)
    if card is None:
        print(f"Card not found: {args.card_id}")
        sys.exit(1)

    print(f"\nCard: {card.card_id}  [{card.card_type}]")
    if card.law_id is not None:
        print(f"  Law:      {card.law_id}  article {card.article_id}")
    print(f"  Front:    {card.front}")
    print(f"  Back:     {card.back}")
    if card.source_text:
        print(f"  Source:   {card.source_text}")
    print(f"  Status:   {card_status(card).value}")
    print(f"  Interval: {card.interval}d  Reps: {card.repetition}  "
          f"Ease: {card.ease_factor:.2f}")
    print(f"  Next:     {_fmt_ts(card.next_review)}")
    print(f"  Created:  {_fmt_ts(card.created_at)}")
    print(f"  Reviewed: {_fmt_ts(card.last_reviewed)}")


def cmd_delete(args):
    """Delete a card."""
    store = JsonlCardRepository(args.db)
    try:
        store.delete_card(args.card_id)
    except CardNotFoundError:
        print(f"Card not found: {args.card_id}")
        sys.exit(1)
    print(f"Deleted card {args.card_id}")


def cmd_seed(args):
    """Add the starter deck."""
    store = JsonlCardRepository(args.db)
    added = seed_sample_cards(store)
    print(f"Seeded {added} sample card(s).")


def cmd_import(args):
    """Import cards from a browser export object or a JSON array of cards."""
    src = Path(args.file)
    if not src.exists():
        print(f"Import file not found: {src}")
        sys.exit(1)
    with open(src, 'r', encoding='utf-8') as f:
        data = json.load(f)
    # Browser exports wrap the deck: {"flashcards": [...], "highlights": [...], ...}
    if isinstance(data, dict):
        data = data.get('flashcards')
    if not isinstance(data, list):
        print("Import file must contain a JSON array of cards "
              "or an object with a 'flashcards' array.")
        sys.exit(1)

    now = now_ms()
    cards = []
    for i, item in enumerate(data, 1):
        if not isinstance(item, dict):
            print(f"Bad card at item {i}: expected an object, got {type(item).__name__}")
            sys.exit(1)
        try:
            card = Flashcard.from_dict(item)
        except (ValueError, TypeError) as e:
            print(f"Bad card at item {i}: {e}")
            sys.exit(1)
        if not card.created_at:
            card.created_at = now
        if not card.next_review:
            card.next_review = now
        cards.append(card)

    store = JsonlCardRepository(args.db)
    store.upsert_cards(cards)
    print(f"Imported {len(cards)} card(s).")


def main():
    parser = argparse.ArgumentParser(
        description='Spaced-repetition flashcards for referee training',
    )
    parser.add_argument('--db', default='data/flashcards.jsonl',
                        help='Path to card store (default: data/flashcards.jsonl)')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command')

    subparsers.add_parser('due', help='Show due cards')
    subparsers.add_parser('review', help='Start a review session')
    subparsers.add_parser('stats', help='Show deck statistics')

    add_parser = subparsers.add_parser('add', help='Add a card')
    add_parser.add_argument('--front', required=True, help='Question text')
    add_parser.add_argument('--back', required=True, help='Answer text')
    add_parser.add_argument('--law', type=int, default=None, help='Law number')
    add_parser.add_argument('--article', default=None, help='Article id, e.g. 11.1')
    add_parser.add_argument('--type', default=FlashcardType.USER.value,
                            choices=[t.value for t in FlashcardType],
                            help='Card provenance (default: user)')

    show_parser = subparsers.add_parser('show', help='Show card details')
    show_parser.add_argument('card_id', help='Card ID to display')

    delete_parser = subparsers.add_parser('delete', help='Delete a card')
    delete_parser.add_argument('card_id', help='Card ID to delete')

    subparsers.add_parser('seed', help='Add the sample starter deck')

    import_parser = subparsers.add_parser('import', help='Import cards from JSON')
    import_parser.add_argument('file', help='JSON file with a list of cards')

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format='%(asctime)s %(name)s %(levelname)s %(message)s')

    if args.command == 'due':
        cmd_due(args)
    elif args.command == 'review':
        cmd_review(args)
    elif args.command == 'stats':
        cmd_stats(args)
    elif args.command == 'add':
        cmd_add(args)
    elif args.command == 'show':
        cmd_show(args)
    elif args.command == 'delete':
        cmd_delete(args)
    elif args.command == 'seed':
        cmd_seed(args)
    elif args.command == 'import':
        cmd_import(args)
    else:
        parser.print_help()


if __name__ == '__main__':
    main()
