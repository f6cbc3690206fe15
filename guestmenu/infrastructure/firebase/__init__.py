"""Firebase (Firestore + Auth) integration over REST."""

from guestmenu.infrastructure.firebase.client import (
    FirebaseClients,
    close_firebase,
    get_firebase_clients,
    init_firebase,
)

__all__ = [
    "FirebaseClients",
    "close_firebase",
    "get_firebase_clients",
    "init_firebase",
]
