# =============================================================================
# edunexus_core/services/storage_service.py
# Storage Service - single entry point owning the client, store and accessors
# =============================================================================
"""
StorageService - the object callers hold.

Usage:
------
from edunexus_core.services import get_storage_service

storage = get_storage_service()
await storage.initialize()

users = await storage.users.list_all()
await storage.users.record_login("u2")
await storage.quizzes.add(Quiz.create("Optics", questions))
"""

from __future__ import annotations
import threading
from typing import Optional

from edunexus_core.api import RemoteStoreClient, StorageConfig, load_config
from edunexus_core.logging import get_logger
from edunexus_core.models import Message, Quiz, QuizResult, StudyMaterial
from edunexus_core.offline import (
    ALL_COLLECTIONS,
    MATERIALS,
    MESSAGES,
    QUIZZES,
    RESULTS,
    USERS,
    BootstrapReport,
    FailoverRepository,
    LocalStore,
    SQLiteLocalStore,
    bootstrap,
)
from .collection_service import CollectionService, UserService

logger = get_logger(__name__)


class StorageService:
    """
    Owns the remote client and the local store and exposes the five
    collection accessors.

    The store handle is injected rather than global so tests can pass an
    InMemoryLocalStore and a fake client.
    """

    def __init__(
        self,
        config: Optional[StorageConfig] = None,
        remote: Optional[RemoteStoreClient] = None,
        local: Optional[LocalStore] = None,
    ):
        self.config = config or StorageConfig()
        self.remote = remote or RemoteStoreClient(self.config)
        self.local = local or SQLiteLocalStore(self.config.db_path)
        self.bootstrap_report: Optional[BootstrapReport] = None
        self._initialized = False

        self.users = UserService(self._repository(USERS))
        self.quizzes: CollectionService[Quiz] = CollectionService(self._repository(QUIZZES))
        self.results: CollectionService[QuizResult] = CollectionService(self._repository(RESULTS))
        self.materials: CollectionService[StudyMaterial] = CollectionService(self._repository(MATERIALS))
        self.messages: CollectionService[Message] = CollectionService(self._repository(MESSAGES))

    def _repository(self, collection) -> FailoverRepository:
        return FailoverRepository(
            collection,
            remote=self.remote,
            local=self.local,
            key=self.config.storage_key(collection.name),
        )

    @property
    def storage_keys(self) -> dict:
        return {c.name: self.config.storage_key(c.name) for c in ALL_COLLECTIONS}

    async def initialize(self, force: bool = False) -> BootstrapReport:
        """
        Open the local store and run the bootstrap.

        Runs once per instance unless ``force`` is set.
        """
        if self._initialized and not force:
            return self.bootstrap_report

        self.local.initialize()
        self.bootstrap_report = await bootstrap(self.remote, self.local, self.storage_keys)
        self._initialized = True
        logger.info(
            f"StorageService initialized. Backend: {self.config.api_url} "
            f"(init {'ok' if self.bootstrap_report.remote_initialized else 'unavailable'})"
        )
        return self.bootstrap_report

    def close(self) -> None:
        self.remote.close()
        self.local.close()
        self._initialized = False

    async def __aenter__(self) -> StorageService:
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False


# Singleton accessor
_storage_service: Optional[StorageService] = None
_lock = threading.Lock()


def get_storage_service() -> StorageService:
    """
    Get the process-wide StorageService, built from ``load_config()``.

    Callers still await ``initialize()`` before first use.
    """
    global _storage_service
    if _storage_service is None:
        with _lock:
            if _storage_service is None:
                _storage_service = StorageService(load_config())
    return _storage_service


def reset_storage_service() -> None:
    """Close and forget the process-wide instance."""
    global _storage_service
    with _lock:
        if _storage_service is not None:
            _storage_service.close()
        _storage_service = None
