# =============================================================================
# edunexus_core/services/collection_service.py
# Collection Accessors - the caller-facing API of the persistence layer
# =============================================================================

from __future__ import annotations
import functools
from typing import Generic, List, Optional, TypeVar

from edunexus_core.models import User, UserRole, utc_now_iso
from edunexus_core.offline.failover import FailoverRepository, Source, merge_login
from .base_service import BaseService

T = TypeVar("T")


class CollectionService(BaseService, Generic[T]):
    """
    Typed list/add access to one collection.

    Both operations always return a value: backend outages degrade to the
    local store. Only LocalStoreWriteFailure is raised.
    """

    def __init__(self, repository: FailoverRepository[T]):
        super().__init__()
        self.repository = repository

    @property
    def name(self) -> str:
        return self.repository.collection.name

    async def list_all(self) -> List[T]:
        result = await self.repository.fetch()
        self.logger.debug(f"Listed {len(result.records)} {self.name} from {result.source.value}")
        return result.records

    async def add(self, record: T) -> T:
        """Append a record and return the stored representation."""
        result = await self.repository.write(record)
        self.logger.debug(f"Added to {self.name} via {result.source.value}")
        return result.record


class UserService(CollectionService[User]):
    """Users, plus login tracking and registration."""

    LOGIN_ENDPOINT = "/users/login"

    async def record_login(self, user_id: str) -> None:
        """
        Stamp ``user_id``'s lastLogin with the current time.

        On the fallback path only that user's record changes locally.
        """
        mutation = functools.partial(merge_login, user_id=user_id, timestamp=utc_now_iso())
        source = await self.repository.update(
            self.LOGIN_ENDPOINT,
            {"userId": user_id},
            mutation,
        )
        if source is Source.LOCAL_FALLBACK:
            self.logger.info(f"Recorded login for {user_id} in local store")

    async def register(
        self,
        name: str,
        role: UserRole = UserRole.STUDENT,
        email: Optional[str] = None,
    ) -> User:
        return await self.add(User.create(name=name, role=role, email=email))

    async def list_students(self) -> List[User]:
        return [user for user in await self.list_all() if user.is_student]
