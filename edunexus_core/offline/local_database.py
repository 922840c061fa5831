# =============================================================================
# edunexus_core/offline/local_database.py
# Local Durable Store for Offline Operations
# =============================================================================
"""
LocalStore - namespaced, string-keyed store of JSON-encoded collections.

Features:
- One value per collection key, overwritten atomically
- Missing or undecodable values read back as the caller's default
- Write failures raise LocalStoreWriteFailure (nothing sits below this store)
- SQLite file backend plus an in-memory implementation for tests
"""

from __future__ import annotations
import copy
import json
import logging
import sqlite3
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from edunexus_core.errors import LocalStoreCorrupt, LocalStoreWriteFailure, handle_error
from edunexus_core.logging import get_logger

logger = get_logger(__name__)


class LocalStore(ABC):
    """
    Abstract local durable store.

    Single-writer assumption: read-modify-write across two calls is not
    atomic, concurrent writers to one key race and the last write wins.
    """

    def initialize(self) -> None:
        """Prepare the medium. Safe to call more than once."""

    def close(self) -> None:
        """Release the medium."""

    @abstractmethod
    def _load(self, key: str) -> Optional[str]:
        """Return the raw stored text for a key, or None."""

    @abstractmethod
    def _store(self, key: str, text: str) -> None:
        """Persist raw text under a key, replacing any prior value."""

    def contains(self, key: str) -> bool:
        return self._load(key) is not None

    def read(self, key: str, default: List[Any]) -> List[Any]:
        """
        Read a collection.

        Args:
            key: Namespaced collection key
            default: Returned (as a copy) when the key is missing or corrupt

        Returns:
            The stored list, or the default
        """
        text = self._load(key)
        if text is None:
            return copy.deepcopy(default)

        try:
            value = json.loads(text)
        except (TypeError, ValueError) as e:
            handle_error(
                LocalStoreCorrupt(f"Stored value is not valid JSON: {e}", key=key),
                level=logging.WARNING,
                log=logger,
            )
            return copy.deepcopy(default)

        if not isinstance(value, list):
            handle_error(
                LocalStoreCorrupt(
                    f"Stored value is a {type(value).__name__}, expected a list",
                    key=key,
                ),
                level=logging.WARNING,
                log=logger,
            )
            return copy.deepcopy(default)

        return value

    def write(self, key: str, collection: List[Any]) -> None:
        """
        Serialize and persist a collection, replacing the prior value.

        Raises:
            LocalStoreWriteFailure: value not serializable or medium rejected it
        """
        try:
            text = json.dumps(collection)
        except (TypeError, ValueError) as e:
            raise LocalStoreWriteFailure(f"Collection is not JSON-serializable: {e}", key=key) from e
        self._store(key, text)
        logger.debug(f"Wrote {len(collection)} records to {key}")


class SQLiteLocalStore(LocalStore):
    """
    Local store backed by a single SQLite table.

    Each write is one INSERT OR REPLACE inside a transaction, so a collection
    is either fully replaced or left as it was.
    """

    # Default database location
    DEFAULT_DB_PATH = Path("local_data") / "edunexus.db"

    SCHEMA = """
        CREATE TABLE IF NOT EXISTS collections (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
    """

    def __init__(self, db_path: Optional[Union[str, Path]] = None):
        """
        Args:
            db_path: Path to the SQLite file, or ":memory:"
        """
        self.db_path = str(db_path) if db_path is not None else str(self.DEFAULT_DB_PATH)
        self._connection: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()
        self._initialized = False

    def _ensure_directory(self) -> None:
        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        if self._connection is None:
            self._ensure_directory()
            # Calls arrive from asyncio worker threads
            self._connection = sqlite3.connect(self.db_path, check_same_thread=False)
        return self._connection

    @contextmanager
    def transaction(self):
        """Context manager for database transactions."""
        with self._lock:
            conn = self._get_connection()
            try:
                yield conn
                conn.commit()
            except Exception:
                conn.rollback()
                raise

    def initialize(self) -> None:
        """Create the collections table."""
        if self._initialized:
            return

        try:
            with self.transaction() as conn:
                conn.execute(self.SCHEMA)
        except sqlite3.Error as e:
            raise LocalStoreWriteFailure(f"Cannot initialize local store at {self.db_path}: {e}") from e

        self._initialized = True
        logger.info(f"Local store initialized at: {self.db_path}")

    def _load(self, key: str) -> Optional[str]:
        """
        Raises:
            LocalStoreWriteFailure: the file itself is unreadable. A damaged
                database is fatal, unlike a damaged value.
        """
        self.initialize()
        try:
            with self._lock:
                row = self._get_connection().execute(
                    "SELECT value FROM collections WHERE key = ?",
                    [key],
                ).fetchone()
        except sqlite3.Error as e:
            raise LocalStoreWriteFailure(f"Local store at {self.db_path} is unreadable: {e}", key=key) from e
        return row[0] if row else None

    def _store(self, key: str, text: str) -> None:
        self.initialize()
        try:
            with self.transaction() as conn:
                conn.execute(
                    """
                    INSERT OR REPLACE INTO collections (key, value, updated_at)
                    VALUES (?, ?, ?)
                    """,
                    [key, text, datetime.now().isoformat()],
                )
        except sqlite3.Error as e:
            raise LocalStoreWriteFailure(f"Local store rejected write: {e}", key=key) from e

    def close(self) -> None:
        """Close database connection."""
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None
        self._initialized = False


class InMemoryLocalStore(LocalStore):
    """Process-local store holding JSON text in a dict. Drop-in fake for tests."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def _load(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def _store(self, key: str, text: str) -> None:
        self._data[key] = text

