"""Session logging -- writes a JSONL line after each review session."""

import json
from datetime import datetime
from pathlib import Path
from typing import Dict, List


def log_session(
    log_path: Path,
    summary: Dict,
    cards_reviewed: List[Dict],
) -> Dict:
    """
    Append a session record to the JSONL log file.

    Args:
        log_path:       Path to the session log file
        summary:        Summary dict from run_review_session
        cards_reviewed: List of per-card dicts with card_id, rating, law_id,
                        interval

    Returns:
        The session record dict that was written.
    """
    histogram = {str(r): 0 for r in range(6)}
    laws_touched = set()

    for cr in cards_reviewed:
        r = str(cr.get('rating', 0))
        if r in histogram:
            histogram[r] += 1
        if cr.get('law_id') is not None:
            laws_touched.add(cr['law_id'])

    avg_rating = 0.0
    if cards_reviewed:
        total = sum(cr.get('rating', 0) for cr in cards_reviewed)
        avg_rating = round(total / len(cards_reviewed), 2)

    record = {
        'timestamp': datetime.now().isoformat(),
        'cards_reviewed': summary.get('reviewed', 0),
        'correct': summary.get('correct', 0),
        'incorrect': summary.get('incorrect', 0),
        'skipped': summary.get('skipped', 0),
        'avg_rating': avg_rating,
        'rating_histogram': histogram,
        'laws_touched': sorted(laws_touched),
        'card_details': cards_reviewed,
    }

    log_path = Path(log_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    with open(log_path, 'a', encoding='utf-8') as f:
        f.write(json.dumps(record, ensure_ascii=False) + '\n')

    return record


def read_session_log(log_path: Path) -> List[Dict]:
    """Read all session records from the log file."""
    records = []
    log_path = Path(log_path)
    if not log_path.exists():
        return records
    with open(log_path, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()
            if line:
                records.append(json.loads(line))
    return records
