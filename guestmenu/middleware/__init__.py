"""HTTP middleware: request ID.

Applied in main app. Import and use from guestmenu.main.
"""

from guestmenu.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
