# =============================================================================
# edunexus_core/offline/failover.py
# Failover Orchestrator - remote first, local store on any backend failure
# =============================================================================
"""
FailoverRepository - one generic try-remote-then-local policy for every
collection.

Reads:
    1. GET the collection from the backend.
    2. On success return it as-is (no merge with local state).
    3. On any backend failure return the local collection, or the built-in
       default when the local store has none.

Writes:
    1. POST the record to the backend.
    2. On success return. The local store is NOT updated.
    3. On failure read the local collection, apply a pure merge function and
       write the result back.

Known limitations, kept on purpose:
- The stores diverge once a failover happens and are never reconciled. A
  record written during an outage is invisible after the backend recovers.
- Fallback read-modify-write is not atomic across calls. Two writes falling
  back at the same time to one collection race and the last one wins.
"""

from __future__ import annotations
import asyncio
import functools
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, TypeVar

from edunexus_core.errors import REMOTE_FAILURES, RecordDecodeError, handle_error
from edunexus_core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")
Wire = Dict[str, Any]
Mutation = Callable[[List[Wire]], List[Wire]]


class Source(Enum):
    """Which store answered an operation."""
    REMOTE = "remote"
    LOCAL_FALLBACK = "local_fallback"


# =============================================================================
# MERGE FUNCTIONS
# =============================================================================

def merge_append(current: Sequence[T], incoming: T) -> List[T]:
    """Return a new collection with ``incoming`` appended. ``current`` is untouched."""
    return [*current, incoming]


def merge_login(current: Sequence[Wire], user_id: str, timestamp: str) -> List[Wire]:
    """
    Return a new users collection where only ``user_id`` has a fresh lastLogin.

    Unknown ids leave the collection unchanged.
    """
    updated = []
    for user in current:
        if isinstance(user, dict) and user.get("id") == user_id:
            user = {**user, "lastLogin": timestamp}
        updated.append(user)
    return updated


# =============================================================================
# COLLECTION DESCRIPTION
# =============================================================================

@dataclass(frozen=True)
class CollectionSpec(Generic[T]):
    """
    Everything the orchestrator needs to know about one collection.

    Attributes:
        name: Short collection name, also the local key suffix ("users")
        endpoint: Backend path ("/users")
        decode: Wire dict -> record
        encode: Record -> wire dict
        default: Built-in collection used when the local store has nothing
        merge: Pure fallback merge, (current, incoming) -> new collection
    """
    name: str
    endpoint: str
    decode: Callable[[Wire], T]
    encode: Callable[[T], Wire]
    default: Callable[[], List[Wire]] = list
    merge: Callable[[Sequence[Wire], Wire], List[Wire]] = merge_append


@dataclass
class ReadResult(Generic[T]):
    records: List[T] = field(default_factory=list)
    source: Source = Source.REMOTE


@dataclass
class WriteResult(Generic[T]):
    record: Optional[T] = None
    source: Source = Source.REMOTE


# =============================================================================
# ORCHESTRATOR
# =============================================================================

class FailoverRepository(Generic[T]):
    """
    Remote-first access to one collection with local fallback.

    Backend failures never escape. LocalStoreWriteFailure does, since no
    further fallback exists beneath the local store.
    """

    def __init__(self, collection: CollectionSpec[T], remote, local, key: str):
        """
        Args:
            collection: Description of the collection
            remote: RemoteStoreClient (or anything with async get/post)
            local: LocalStore
            key: Namespaced local store key
        """
        self.collection = collection
        self.remote = remote
        self.local = local
        self.key = key

    # -------------------------------------------------------------------------
    # READ
    # -------------------------------------------------------------------------

    async def fetch(self) -> ReadResult[T]:
        """Read the collection and report which store answered."""
        try:
            payload = await self.remote.get(self.collection.endpoint)
            records = [self.collection.decode(item) for item in payload]
            return ReadResult(records=records, source=Source.REMOTE)
        except REMOTE_FAILURES as e:
            self._log_fallback("read", e)

        stored = await asyncio.to_thread(self.local.read, self.key, self.collection.default())
        return ReadResult(records=self._decode_local(stored), source=Source.LOCAL_FALLBACK)

    async def read(self) -> List[T]:
        return (await self.fetch()).records

    def _decode_local(self, stored: List[Any]) -> List[T]:
        records = []
        for item in stored:
            try:
                records.append(self.collection.decode(item))
            except RecordDecodeError as e:
                handle_error(e, level=logging.WARNING, context=f"Skipping stored {self.collection.name} entry", log=logger)
        return records

    # -------------------------------------------------------------------------
    # WRITE
    # -------------------------------------------------------------------------

    async def write(self, record: T) -> WriteResult[T]:
        """
        Append one record.

        Returns:
            WriteResult carrying the server's canonical record when it sent
            one, otherwise the record as given
        """
        wire = self.collection.encode(record)
        try:
            response = await self.remote.post(self.collection.endpoint, wire)
        except REMOTE_FAILURES as e:
            self._log_fallback("write", e)
            await self._mutate_local(functools.partial(self.collection.merge, incoming=wire))
            return WriteResult(record=record, source=Source.LOCAL_FALLBACK)

        return WriteResult(record=self._canonical(response, record), source=Source.REMOTE)

    async def update(self, endpoint: str, body: Wire, mutation: Mutation) -> Source:
        """
        Field-level update with the same policy as ``write``.

        Args:
            endpoint: Backend path for the update
            body: JSON body sent to the backend
            mutation: Pure function applied to the local collection on fallback
        """
        try:
            await self.remote.post(endpoint, body)
            return Source.REMOTE
        except REMOTE_FAILURES as e:
            self._log_fallback("update", e)

        await self._mutate_local(mutation)
        return Source.LOCAL_FALLBACK

    async def _mutate_local(self, mutation: Mutation) -> None:
        await asyncio.to_thread(self._mutate_local_sync, mutation)

    def _mutate_local_sync(self, mutation: Mutation) -> None:
        current = self.local.read(self.key, self.collection.default())
        self.local.write(self.key, mutation(current))

    def _canonical(self, response: Any, record: T) -> T:
        if not isinstance(response, dict):
            return record
        try:
            return self.collection.decode(response)
        except RecordDecodeError:
            logger.debug(f"Backend reply for {self.collection.name} is not a record; keeping local copy")
            return record

    def _log_fallback(self, operation: str, error: Exception) -> None:
        handle_error(
            error,
            level=logging.WARNING,
            context=f"{self.collection.name} {operation} falling back to local store",
            log=logger,
        )
