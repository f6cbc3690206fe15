"""Firestore-backed repository implementations."""

from guestmenu.infrastructure.firebase.repositories.document_store_firestore import (
    FirestoreDocumentStore,
)

__all__ = ["FirestoreDocumentStore"]
