"""
Storage Status
==============

Bootstraps the hybrid store and reports, per collection, how many records
are visible and which store answered.

Usage:
    python scripts/storage_status.py
    python scripts/storage_status.py --api-url http://localhost:5000/api --db-path local_data/edunexus.db
    python scripts/storage_status.py --config .edunexus/config.toml --verbose
"""

import argparse
import asyncio
import logging
import sys
from dataclasses import replace
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from edunexus_core.api import load_config
from edunexus_core.errors import EduNexusError
from edunexus_core.logging import setup_logging
from edunexus_core.services import StorageService


async def report(storage: StorageService) -> None:
    bootstrap = await storage.initialize()
    print(f"Backend: {storage.config.api_url}")
    print(f"  init: {'ok' if bootstrap.remote_initialized else 'unavailable'}")
    if bootstrap.seeded:
        print(f"  seeded locally: {', '.join(bootstrap.seeded)}")
    print()

    accessors = [storage.users, storage.quizzes, storage.results, storage.materials, storage.messages]
    for accessor in accessors:
        result = await accessor.repository.fetch()
        print(f"  {accessor.name:<10} {len(result.records):>5} records  [{result.source.value}]")


def main():
    parser = argparse.ArgumentParser(
        description="Show what the EduNexus hybrid store currently serves"
    )
    parser.add_argument("--config", help="Path to a TOML config file")
    parser.add_argument("--api-url", help="Override the backend base URL")
    parser.add_argument("--db-path", help="Override the local SQLite path")
    parser.add_argument("--verbose", action="store_true", help="Log fallbacks and bootstrap steps")

    args = parser.parse_args()

    setup_logging(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        config = load_config(args.config)
    except EduNexusError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if args.api_url:
        config = replace(config, api_url=args.api_url.rstrip("/"))
    if args.db_path:
        config = replace(config, db_path=args.db_path)

    storage = StorageService(config)
    try:
        asyncio.run(report(storage))
    finally:
        storage.close()


if __name__ == "__main__":
    main()
