"""Application services: authorization, roles, tenant deletion, subdomains, notifications."""

from guestmenu.application.services.authorization_service import AuthorizationGuard
from guestmenu.application.services.order_notification_service import (
    OrderNotificationService,
)
from guestmenu.application.services.role_service import RoleAssignmentService
from guestmenu.application.services.subdomain_service import (
    SubdomainRegistryService,
    parse_subdomain,
)
from guestmenu.application.services.tenant_deletion_service import (
    DeleteSet,
    TenantDeletionService,
    flatten_delete_sets,
)

__all__ = [
    "AuthorizationGuard",
    "DeleteSet",
    "OrderNotificationService",
    "RoleAssignmentService",
    "SubdomainRegistryService",
    "TenantDeletionService",
    "flatten_delete_sets",
    "parse_subdomain",
]
