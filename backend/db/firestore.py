"""Firestore service for the chat app's document tree.

All app data lives under ``artifacts/{app_id}``:
- `chatUsers/{uid}/...` - chat profiles with friend and request subcollections
- `peerPosts/{post_id}/comments/...` - community posts
- `conversations/{id}/messages/...` - direct conversations
- `users/{uid}/...` - vocabulary, metadata and profile documents
- `bannedUsers/{uid}` - ban records
"""

import base64
import json
import logging
import os
import time
from datetime import UTC, datetime
from typing import Any

import firebase_admin
from firebase_admin import credentials
from google.cloud.firestore_v1 import (
    AsyncClient,
    AsyncCollectionReference,
    AsyncDocumentReference,
)
from google.oauth2 import service_account

from config import get_settings
from db import collections

logger = logging.getLogger(__name__)

# Firestore caps a batched write at 500 operations
BATCH_LIMIT = 500


def _load_firebase_credentials(creds_value: str) -> dict:
    """Load Firebase credentials from JSON string, file path, or base64."""
    if os.path.isfile(creds_value):
        with open(creds_value) as f:
            return json.load(f)

    try:
        return json.loads(creds_value)
    except json.JSONDecodeError:
        pass

    try:
        decoded = base64.b64decode(creds_value).decode("utf-8")
        return json.loads(decoded)
    except (ValueError, UnicodeDecodeError):
        pass

    raise ValueError("FIREBASE_CREDENTIALS is not valid JSON, file path, or base64")


def initialize_firebase_app(creds_dict: dict) -> firebase_admin.App:
    """Initialize the default Firebase Admin app once per process."""
    if not firebase_admin._apps:
        cred = credentials.Certificate(creds_dict)
        return firebase_admin.initialize_app(cred)
    return firebase_admin.get_app()


class FirestoreService:
    """Service for path-addressed access to the app's Firestore data."""

    _initialized: bool = False
    _db: AsyncClient | None = None

    def __init__(self, client: AsyncClient | None = None, app_id: str | None = None):
        """Initialize Firestore client (singleton pattern).

        Args:
            client: Pre-built client; skips credential loading when given.
            app_id: Namespace under ``artifacts``. Defaults to settings.app_id.
        """
        self.app_id = app_id or get_settings().app_id

        if client is not None:
            self.db = client
            return

        if FirestoreService._initialized:
            self.db = FirestoreService._db
            return

        settings = get_settings()

        try:
            creds_dict = _load_firebase_credentials(settings.firebase_credentials)
            initialize_firebase_app(creds_dict)

            gcp_credentials = service_account.Credentials.from_service_account_info(
                creds_dict
            )

            FirestoreService._db = AsyncClient(
                project=creds_dict.get("project_id"),
                credentials=gcp_credentials,
            )
            self.db = FirestoreService._db

            FirestoreService._initialized = True
            logger.info("Firestore client initialized successfully")
        except Exception as e:
            logger.error("Failed to initialize Firestore: %s", e)
            raise

    # --- Paths ---

    @property
    def root(self) -> AsyncDocumentReference:
        """Document holding every collection of this app."""
        return self.db.collection(collections.ROOT_COLLECTION).document(self.app_id)

    def chat_users(self) -> AsyncCollectionReference:
        return self.root.collection(collections.COLLECTION_CHAT_USERS)

    def chat_user(self, user_id: str) -> AsyncDocumentReference:
        return self.chat_users().document(user_id)

    def posts(self) -> AsyncCollectionReference:
        return self.root.collection(collections.COLLECTION_POSTS)

    def conversations(self) -> AsyncCollectionReference:
        return self.root.collection(collections.COLLECTION_CONVERSATIONS)

    def user_data(self, user_id: str) -> AsyncDocumentReference:
        """Private per-user document holding vocabulary, metadata and profile."""
        return self.root.collection(collections.COLLECTION_USERS).document(user_id)

    def banned_user(self, user_id: str) -> AsyncDocumentReference:
        return self.root.collection(collections.COLLECTION_BANNED_USERS).document(
            user_id
        )

    # --- Bulk helpers ---

    async def delete_documents(self, docs_ref: Any) -> int:
        """Delete every document a collection or query returns.

        Subcollections of the deleted documents are left untouched.

        Returns:
            Number of documents deleted.
        """
        docs = await docs_ref.get()
        deleted_count = 0

        batch = self.db.batch()
        for doc in docs:
            batch.delete(doc.reference)
            deleted_count += 1

            if deleted_count % BATCH_LIMIT == 0:
                await batch.commit()
                batch = self.db.batch()

        if deleted_count % BATCH_LIMIT != 0:
            await batch.commit()

        return deleted_count

    async def count(self, docs_ref: Any) -> int:
        """Count documents server-side with an aggregation query."""
        result = await docs_ref.count().get()
        return result[0][0].value if result else 0

    async def health_check(self) -> dict[str, Any]:
        """Check Firestore connection health."""
        start = time.time()
        try:
            test_ref = self.db.collection(
                collections.HEALTH_CHECK_COLLECTION
            ).document("test")
            await test_ref.set({"timestamp": datetime.now(UTC)})
            await test_ref.get()

            latency = (time.time() - start) * 1000
            return {"status": "healthy", "latency_ms": round(latency, 2)}
        except Exception as e:
            return {"status": "unhealthy", "error": str(e)}


def get_firestore_service() -> FirestoreService:
    """Get Firestore service singleton."""
    return FirestoreService()
