"""Firestore collection names and paths (schema-in-code).

Firestore has no DDL or migrations. Collections are created automatically
when the browser client first writes a document. These constants are the
single source of truth for the layout the privileged functions touch.

Layout (tenant id == owner uid):
    users/{uid}                       tenant root
    users/{uid}/profile/{doc}         profile; 'data' holds email, name, restaurantName
    users/{uid}/settings/{doc}        settings; 'notifications' holds notificationEmail
    menus/{uid}                       menu root
    menus/{uid}/categories/{id}
    menus/{uid}/items/{id}
    submissions/{uid}                 submissions root
    submissions/{uid}/data/{id}       orders
    subdomains/{subdomain}            registry entry {userId, createdAt}
    publicMenus/{id}                  public projection {userId, ...}
"""

COLLECTION_USERS = "users"
SUBCOLLECTION_PROFILE = "profile"
SUBCOLLECTION_SETTINGS = "settings"

COLLECTION_MENUS = "menus"
SUBCOLLECTION_CATEGORIES = "categories"
SUBCOLLECTION_ITEMS = "items"

COLLECTION_SUBMISSIONS = "submissions"
SUBCOLLECTION_SUBMISSION_DATA = "data"

COLLECTION_SUBDOMAINS = "subdomains"
COLLECTION_PUBLIC_MENUS = "publicMenus"

# Field linking registry and projection docs to their owner.
FIELD_USER_ID = "userId"

PROFILE_DOCUMENT_ID = "data"
NOTIFICATION_SETTINGS_DOCUMENT_ID = "notifications"


def profile_path(uid: str) -> str:
    return f"{COLLECTION_USERS}/{uid}/{SUBCOLLECTION_PROFILE}/{PROFILE_DOCUMENT_ID}"


def notification_settings_path(uid: str) -> str:
    return f"{COLLECTION_USERS}/{uid}/{SUBCOLLECTION_SETTINGS}/{NOTIFICATION_SETTINGS_DOCUMENT_ID}"


def order_path(tenant_id: str, order_id: str) -> str:
    return f"{COLLECTION_SUBMISSIONS}/{tenant_id}/{SUBCOLLECTION_SUBMISSION_DATA}/{order_id}"
