"""Tests for flashcards/cli.py -- command dispatch against a temp JSONL deck."""

import json
import sys
import tempfile
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest
from flashcards import cli
from flashcards.samples import SAMPLE_CARDS, seed_sample_cards
from flashcards.storage import InMemoryCardRepository, JsonlCardRepository


def _run_cli(monkeypatch, db, *argv):
    monkeypatch.setattr(sys, 'argv', ['flashcards', '--db', str(db), *argv])
    cli.main()


# ============================================================================
# TESTS: samples
# ============================================================================

def test_seed_sample_cards_idempotent():
    store = InMemoryCardRepository()
    assert seed_sample_cards(store, now=1000) == len(SAMPLE_CARDS)
    assert seed_sample_cards(store, now=2000) == 0
    assert store.count() == len(SAMPLE_CARDS)
    card = store.get_card('admin-1')
    assert card.card_type == 'admin'
    assert card.law_id == 11
    assert card.next_review == 1000


# ============================================================================
# TESTS: commands
# ============================================================================

def test_seed_then_stats(monkeypatch, capsys):
    with tempfile.TemporaryDirectory() as tmp:
        db = Path(tmp) / 'cards.jsonl'
        _run_cli(monkeypatch, db, 'seed')
        _run_cli(monkeypatch, db, 'stats')
        out = capsys.readouterr().out
        assert 'Seeded 5 sample card(s).' in out
        assert 'Total cards:  5' in out
        assert 'New:          5' in out


def test_add_show_delete(monkeypatch, capsys):
    with tempfile.TemporaryDirectory() as tmp:
        db = Path(tmp) / 'cards.jsonl'
        _run_cli(monkeypatch, db, 'add', '--front', 'What is a drop ball?',
                 '--back', 'A restart.', '--law', '8', '--article', '8.2')
        card_id = JsonlCardRepository(db).all_cards()[0].card_id

        _run_cli(monkeypatch, db, 'show', card_id)
        out = capsys.readouterr().out
        assert 'What is a drop ball?' in out
        assert 'Status:   new' in out

        _run_cli(monkeypatch, db, 'delete', card_id)
        assert JsonlCardRepository(db).count() == 0


def test_show_missing_exits(monkeypatch, capsys):
    with tempfile.TemporaryDirectory() as tmp:
        with pytest.raises(SystemExit) as exc:
            _run_cli(monkeypatch, Path(tmp) / 'cards.jsonl', 'show', 'ghost')
        assert exc.value.code == 1
        assert 'Card not found' in capsys.readouterr().out


def test_due_lists_new_cards(monkeypatch, capsys):
    with tempfile.TemporaryDirectory() as tmp:
        db = Path(tmp) / 'cards.jsonl'
        _run_cli(monkeypatch, db, 'due')
        assert 'No cards due' in capsys.readouterr().out
        _run_cli(monkeypatch, db, 'seed')
        _run_cli(monkeypatch, db, 'due')
        assert '5 card(s) due for review' in capsys.readouterr().out


def test_import_browser_export(monkeypatch, capsys):
    with tempfile.TemporaryDirectory() as tmp:
        db = Path(tmp) / 'cards.jsonl'
        src = Path(tmp) / 'export.json'
        src.write_text(json.dumps([
            {'id': 'u-1', 'type': 'user', 'lawId': 3, 'articleId': '3.1',
             'frontAr': 'Q1', 'backAr': 'A1', 'interval': 6, 'repetition': 2,
             'easeFactor': 2.6, 'nextReview': 1000, 'createdAt': 500},
            {'id': 'u-2', 'frontAr': 'Q2', 'backAr': 'A2'},
        ]), encoding='utf-8')

        _run_cli(monkeypatch, db, 'import', str(src))
        assert 'Imported 2 card(s).' in capsys.readouterr().out

        store = JsonlCardRepository(db)
        assert store.get_card('u-1').repetition == 2
        u2 = store.get_card('u-2')
        assert u2.ease_factor == 2.5
        assert u2.next_review > 0


def test_review_with_scripted_input(monkeypatch, capsys):
    with tempfile.TemporaryDirectory() as tmp:
        db = Path(tmp) / 'cards.jsonl'
        _run_cli(monkeypatch, db, 'seed')
        answers = iter(['', '5'] * 5)
        monkeypatch.setattr('builtins.input', lambda _: next(answers))
        _run_cli(monkeypatch, db, 'review')

        out = capsys.readouterr().out
        assert 'Reviewed: 5' in out
        assert all(c.repetition == 1 for c in JsonlCardRepository(db).all_cards())
        assert (Path(tmp) / 'session_log.jsonl').exists()


def test_import_wrapped_export_object(monkeypatch, capsys):
    with tempfile.TemporaryDirectory() as tmp:
        db = Path(tmp) / 'cards.jsonl'
        src = Path(tmp) / 'export.json'
        src.write_text(json.dumps({
            'flashcards': [{'id': 'u-1', 'frontAr': 'Q', 'backAr': 'A'}],
            'highlights': [],
            'progress': [],
        }), encoding='utf-8')

        _run_cli(monkeypatch, db, 'import', str(src))
        assert 'Imported 1 card(s).' in capsys.readouterr().out
        assert JsonlCardRepository(db).get_card('u-1').front == 'Q'


@pytest.mark.parametrize('payload', [
    {'highlights': []},
    [{'frontAr': 'Q', 'backAr': 'A'}],
    [{'id': 'u-1', 'type': 'robot', 'frontAr': 'Q', 'backAr': 'A'}],
    ['not a card'],
])
def test_import_bad_input_exits(monkeypatch, capsys, payload):
    with tempfile.TemporaryDirectory() as tmp:
        db = Path(tmp) / 'cards.jsonl'
        src = Path(tmp) / 'export.json'
        src.write_text(json.dumps(payload), encoding='utf-8')

        with pytest.raises(SystemExit) as exc:
            _run_cli(monkeypatch, db, 'import', str(src))
        assert exc.value.code == 1
        assert 'Imported' not in capsys.readouterr().out
        assert not db.exists()
