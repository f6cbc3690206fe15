"""Security helpers: Firebase ID token verification."""
