# =============================================================================
# edunexus_core/offline/seeder.py
# Bootstrap and Seed Data
# =============================================================================
"""
Startup bootstrap for the hybrid store.

1. Ask the backend to initialize itself (POST /init). Failure is absorbed.
2. Whatever happened remotely, seed the local store's Users and Quizzes
   collections with demo content if, and only if, they are absent.

Seeding never overwrites, so running the bootstrap twice changes nothing.
"""

from __future__ import annotations
import asyncio
import copy
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

from edunexus_core.errors import REMOTE_FAILURES, handle_error
from edunexus_core.logging import get_logger, LogContext
from edunexus_core.models import to_iso

logger = get_logger(__name__)

INIT_ENDPOINT = "/init"

# Fixed once per process so the built-in defaults are stable between reads
SEED_TIME = datetime.now(timezone.utc)

SEED_USERS: List[Dict[str, Any]] = [
    {"id": "u1", "name": "Dr. Smith", "role": "TEACHER",
     "lastLogin": to_iso(SEED_TIME)},
    {"id": "u2", "name": "Alice Johnson", "role": "STUDENT",
     "lastLogin": to_iso(SEED_TIME - timedelta(days=1))},
    {"id": "u3", "name": "Bob Williams", "role": "STUDENT",
     "lastLogin": to_iso(SEED_TIME - timedelta(days=2))},
]

SEED_QUIZZES: List[Dict[str, Any]] = [
    {
        "id": "q1",
        "title": "Introduction to Physics",
        "description": "Basic concepts of motion and force.",
        "createdAt": to_iso(SEED_TIME),
        "questions": [
            {
                "id": "qn1",
                "text": "What is the unit of Force?",
                "options": ["Joule", "Newton", "Watt", "Pascal"],
                "correctAnswerIndex": 1,
            },
            {
                "id": "qn2",
                "text": "Speed is a _____ quantity.",
                "options": ["Scalar", "Vector", "Complex", "None"],
                "correctAnswerIndex": 0,
            },
        ],
    }
]


def seed_users() -> List[Dict[str, Any]]:
    return copy.deepcopy(SEED_USERS)


def seed_quizzes() -> List[Dict[str, Any]]:
    return copy.deepcopy(SEED_QUIZZES)


@dataclass
class BootstrapReport:
    """Outcome of one bootstrap run."""
    remote_initialized: bool = False
    seeded: List[str] = field(default_factory=list)


def seed_local(local, keys: Dict[str, str]) -> List[str]:
    """
    Write seed collections for any absent key.

    Args:
        local: LocalStore to seed
        keys: Mapping of collection name ("users", "quizzes") to store key

    Returns:
        Store keys that were written
    """
    seeds = {"users": seed_users, "quizzes": seed_quizzes}
    written = []
    for name, factory in seeds.items():
        key = keys[name]
        if local.contains(key):
            continue
        local.write(key, factory())
        written.append(key)
    return written


async def bootstrap(remote, local, keys: Dict[str, str]) -> BootstrapReport:
    """
    Initialize the backend and make sure the local fallback has demo content.

    Only LocalStoreWriteFailure escapes.
    """
    report = BootstrapReport()

    with LogContext(logger, "Bootstrapping storage", level=logging.DEBUG):
        try:
            await remote.post(INIT_ENDPOINT)
            report.remote_initialized = True
        except REMOTE_FAILURES as e:
            handle_error(e, level=logging.WARNING, context="Backend init skipped", log=logger)

        report.seeded = await asyncio.to_thread(seed_local, local, keys)

    if report.seeded:
        logger.info(f"Seeded local store: {', '.join(report.seeded)}")
    return report
