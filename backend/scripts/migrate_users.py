#!/usr/bin/env python3
"""Backfill chatUsers from every Firebase Auth account.

Runs the same migration as the admin endpoint, using the service account
from FIREBASE_CREDENTIALS instead of a caller token.

Usage:
    cd backend
    python scripts/migrate_users.py
"""

import asyncio
import json
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import get_settings, setup_logging
from db import FirestoreService
from errors import AdminError
from services.authorization import AdminPolicy
from services.identity import IdentityService
from services.migration import MigrationService


async def migrate_users() -> int:
    """Run the backfill and print the report."""
    settings = get_settings()
    setup_logging(settings.log_level)

    firestore = FirestoreService()
    service = MigrationService(
        firestore,
        IdentityService(),
        AdminPolicy.from_settings(settings),
        page_size=settings.migration_page_size,
    )

    print(f"🔄 Migrating Auth users into artifacts/{settings.app_id}/chatUsers")

    try:
        result = await service.run()
    except AdminError as e:
        print(f"❌ {e.message}")
        return 1

    print(f"✅ {result.message}")
    print(json.dumps(result.to_dict()["details"], indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(migrate_users()))
