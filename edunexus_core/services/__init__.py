# =============================================================================
# edunexus_core/services/__init__.py
# Service Layer for EduNexus Core
# =============================================================================
"""
Service Layer for EduNexus Core

Usage Example:
-------------
    from edunexus_core.services import get_storage_service, ProgressService

    storage = get_storage_service()
    await storage.initialize()

    # Backend down? These still return data from the local store.
    quizzes = await storage.quizzes.list_all()
    await storage.messages.add(Message.create(student, "Question about Q2"))

    progress = await ProgressService(storage).student_progress()
"""

from .base_service import BaseService
from .collection_service import CollectionService, UserService
from .storage_service import StorageService, get_storage_service, reset_storage_service
from .progress_service import ProgressService, build_progress_frame, score_band

__all__ = [
    "BaseService",
    "CollectionService",
    "UserService",
    "StorageService",
    "get_storage_service",
    "reset_storage_service",
    "ProgressService",
    "build_progress_frame",
    "score_band",
]
