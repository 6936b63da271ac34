"""Configuration for the RefHub flashcards API server."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

STORE_BACKENDS = ("jsonl", "sql", "memory")


@dataclass
class Settings:
    """
    Paths and switches the server needs.

    Defaults resolve relative to the project root.
    Every field is overridable at construction for testing.
    """
    data_dir: Optional[Path] = None
    flashcards_db_path: Optional[Path] = None
    store_backend: Optional[str] = None
    database_url: Optional[str] = None
    seed_sample_cards: bool = False
    cors_origins: List[str] = field(default_factory=list)

    def __post_init__(self):
        project_root = Path(__file__).resolve().parent.parent

        if self.data_dir is None:
            env_dir = os.environ.get("REFHUB_DATA_DIR")
            self.data_dir = Path(env_dir) if env_dir else project_root / "data"
        self.data_dir = Path(self.data_dir)

        if self.flashcards_db_path is None:
            env_db = os.environ.get("FLASHCARDS_DB_PATH")
            self.flashcards_db_path = Path(env_db) if env_db else self.data_dir / 'flashcards.jsonl'
        self.flashcards_db_path = Path(self.flashcards_db_path)

        if self.store_backend is None:
            self.store_backend = os.environ.get("CARD_STORE_BACKEND", "jsonl").lower()
        if self.store_backend not in STORE_BACKENDS:
            raise ValueError(
                f"store_backend must be one of {STORE_BACKENDS}, got {self.store_backend!r}"
            )

        if self.database_url is None:
            self.database_url = os.environ.get("DATABASE_URL", "sqlite:///./refhub.db")

        if os.environ.get("SEED_SAMPLE_CARDS", "").lower() in ("1", "true", "yes"):
            self.seed_sample_cards = True

        if not self.cors_origins:
            env_origins = os.environ.get("CORS_ORIGINS", "")
            origins = [o.strip() for o in env_origins.split(",") if o.strip()]
            self.cors_origins = origins or ["http://localhost:3000"]
