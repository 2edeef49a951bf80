"""
CodeMatch Storage

get_store() returns the process-wide store: PostgreSQL when DATABASE_URL
is set, in-memory otherwise. Routers take it as a FastAPI dependency.
"""

import logging
from threading import Lock
from typing import Optional

from codematch import config

from .base import MatchStore, StoreUnavailableError
from .memory import InMemoryMatchStore
from .postgres import PostgresMatchStore

logger = logging.getLogger(__name__)

_store: Optional[MatchStore] = None
_store_lock = Lock()


def get_store() -> MatchStore:
    global _store
    if _store is None:
        with _store_lock:
            if _store is None:
                if config.DATABASE_URL:
                    _store = PostgresMatchStore(config.DATABASE_URL)
                else:
                    logger.warning("DATABASE_URL not set, using in-memory store")
                    _store = InMemoryMatchStore()
    return _store


__all__ = [
    "MatchStore",
    "StoreUnavailableError",
    "InMemoryMatchStore",
    "PostgresMatchStore",
    "get_store",
]
