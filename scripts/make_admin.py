"""
Admin Promotion Script

Grants the admin role to an existing user by email. The first admin has to
be created this way, since PATCH /users/make-admin requires an admin.
Run from project root: python scripts/make_admin.py someone@example.com

Author: Bistro Boss Team
Version: 1.0.0
"""

import argparse
import asyncio
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.config import get_settings
from app.models import Role
from app.services.store import BaseDocumentStore, get_document_store


async def make_admin(store: BaseDocumentStore, email: str) -> bool:
    """
    Set role=admin on the user with ``email``.

    Returns:
        bool: False when no such user exists
    """
    settings = get_settings()
    user = await store.find_one(settings.user_collection, {"email": email})
    if user is None:
        return False
    await store.update_by_id(settings.user_collection, user["_id"], {"role": Role.ADMIN.value})
    return True


async def main(email: str) -> int:
    store = get_document_store()
    try:
        promoted = await make_admin(store, email)
    finally:
        await store.close()

    if not promoted:
        print(f"❌ No user with email {email}. Sign in once on the site first.")
        return 1

    print(f"✅ {email} is now an admin")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Promote a Bistro Boss user to admin")
    parser.add_argument("email", help="Email of the user to promote")
    args = parser.parse_args()

    sys.exit(asyncio.run(main(args.email)))
