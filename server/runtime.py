from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from flashcards.samples import seed_sample_cards
from flashcards.storage import (
    CardRepository,
    InMemoryCardRepository,
    JsonlCardRepository,
)

logger = logging.getLogger("refhub.runtime")


@dataclass
class RuntimePaths:
    data_dir: Path
    store_path: Path


class Runtime:
    """
    Process-wide runtime cache for the card repository.

    The repository is built lazily on first use and shared by all requests.
    """

    def __init__(self, paths: RuntimePaths, settings: "Settings"):
        self.paths = paths
        self.settings = settings

        self._store_lock = threading.Lock()
        self._store: Optional[CardRepository] = None

    # ----------------------------
    # Store
    # ----------------------------
    def get_store(self) -> CardRepository:
        if self._store is not None:
            return self._store
        with self._store_lock:
            if self._store is None:
                store = self._build_store()
                if self.settings.seed_sample_cards and store.count() == 0:
                    added = seed_sample_cards(store)
                    logger.info("Seeded %d sample card(s)", added)
                self._store = store
        return self._store

    def _build_store(self) -> CardRepository:
        backend = self.settings.store_backend
        logger.info("Opening %s card store", backend)
        if backend == "memory":
            return InMemoryCardRepository()
        if backend == "sql":
            from server.db.repository import SqlCardRepository
            from server.db.session import get_session_factory, init_db

            init_db(self.settings)
            return SqlCardRepository(get_session_factory(self.settings))
        return JsonlCardRepository(self.paths.store_path)

    def reset_store(self) -> None:
        """Drop the cached repository. Useful for tests."""
        with self._store_lock:
            self._store = None


if TYPE_CHECKING:
    from server.config import Settings


def runtime_from_settings(settings: "Settings") -> Runtime:
    """Build Runtime from Settings. Used by get_runtime dependency."""
    paths = RuntimePaths(
        data_dir=Path(settings.data_dir),
        store_path=Path(settings.flashcards_db_path),
    )
    return Runtime(paths, settings)
