"""Database access layer (Cloud Firestore)."""

from db.firestore import FirestoreService, get_firestore_service

__all__ = ["FirestoreService", "get_firestore_service"]
