# =============================================================================
# edunexus_core/offline/__init__.py
# Hybrid (remote-first, local-fallback) persistence for EduNexus
# =============================================================================
"""
Hybrid Persistence Module

Every read and write goes to the backend first. When the backend cannot be
reached, or answers with an error or garbage, the same operation is applied
to a local durable store instead. The app keeps working with no backend at
all (demo mode).

Architecture:
------------
┌─────────────────────────────────────────────────────────────────┐
│                    HYBRID PERSISTENCE LAYER                      │
├─────────────────────────────────────────────────────────────────┤
│                                                                  │
│   ┌──────────────────────────────────────────────────────────┐  │
│   │        Collection accessors (services.StorageService)     │  │
│   └──────────────────────────────────────────────────────────┘  │
│                            │                                     │
│              ┌─────────────▼─────────────┐                      │
│              │    FailoverRepository     │                      │
│              │ (try remote, else local)  │                      │
│              └─────────────┬─────────────┘                      │
│              ┌─────────────┴─────────────┐                      │
│              ▼                           ▼                      │
│   ┌──────────────────┐        ┌──────────────────┐             │
│   │ RemoteStoreClient│        │    LocalStore    │             │
│   │  (JSON / HTTP)   │        │ (SQLite, JSON)   │             │
│   └──────────────────┘        └──────────────────┘             │
│                                                                  │
│   No sync between the two: they diverge after a failover.        │
└─────────────────────────────────────────────────────────────────┘
"""

from edunexus_core.offline.local_database import (
    LocalStore,
    SQLiteLocalStore,
    InMemoryLocalStore,
)

from edunexus_core.offline.failover import (
    CollectionSpec,
    FailoverRepository,
    ReadResult,
    WriteResult,
    Source,
    merge_append,
    merge_login,
)

from edunexus_core.offline.seeder import (
    BootstrapReport,
    bootstrap,
    seed_local,
    seed_users,
    seed_quizzes,
    SEED_TIME,
)

from edunexus_core.offline.collections import (
    USERS,
    QUIZZES,
    RESULTS,
    MATERIALS,
    MESSAGES,
    ALL_COLLECTIONS,
)

__all__ = [
    # Local store
    "LocalStore",
    "SQLiteLocalStore",
    "InMemoryLocalStore",
    # Failover
    "CollectionSpec",
    "FailoverRepository",
    "ReadResult",
    "WriteResult",
    "Source",
    "merge_append",
    "merge_login",
    # Bootstrap
    "BootstrapReport",
    "bootstrap",
    "seed_local",
    "seed_users",
    "seed_quizzes",
    "SEED_TIME",
    # Collections
    "USERS",
    "QUIZZES",
    "RESULTS",
    "MATERIALS",
    "MESSAGES",
    "ALL_COLLECTIONS",
]
