"""Set a user's role claims directly, bypassing the HTTP API.

For operators holding the service account: grant the first claimed
superadmin, or repair claims by hand. The same validation as the API
applies, and the bootstrap super-admin still cannot be demoted.

Usage:
    python -m scripts.set_user_role <uid> <guest|host|superadmin> [subdomain]
All imports use guestmenu.*.
"""

import asyncio
import sys

from guestmenu.application.dtos.user import AuthorizationContext
from guestmenu.application.services import AuthorizationGuard, RoleAssignmentService
from guestmenu.core.config import get_settings
from guestmenu.domain.enums import UserRole
from guestmenu.domain.exceptions import GuestMenuException
from guestmenu.infrastructure.firebase import close_firebase, get_firebase_clients, init_firebase
from guestmenu.shared.telemetry.logging import setup_logging


async def main() -> None:
    """Write {role, subdomain} claims for uid."""
    if len(sys.argv) < 3:
        print(
            "Usage: python -m scripts.set_user_role <uid> <guest|host|superadmin> [subdomain]",
            file=sys.stderr,
        )
        sys.exit(1)
    uid = sys.argv[1]
    role = sys.argv[2]
    subdomain = sys.argv[3] if len(sys.argv) > 3 else None

    settings = get_settings()
    setup_logging()
    if not init_firebase():
        print("Firebase not configured; check FIREBASE_SERVICE_ACCOUNT_KEY / _PATH", file=sys.stderr)
        sys.exit(1)
    clients = get_firebase_clients()
    guard = AuthorizationGuard(
        clients.identity,
        bootstrap_uid=settings.bootstrap_superadmin_uid,
        bootstrap_email=settings.bootstrap_superadmin_email,
    )
    # The service account itself is the operator here.
    ctx = AuthorizationContext(uid="service-account", email=None, role=UserRole.SUPERADMIN)
    try:
        result = await RoleAssignmentService(clients.identity, guard).set_role(ctx, uid, role, subdomain)
    except GuestMenuException as e:
        print(f"{e.error_code}: {e.message}", file=sys.stderr)
        sys.exit(1)
    finally:
        await close_firebase()
    print(result.message)


if __name__ == "__main__":
    asyncio.run(main())
