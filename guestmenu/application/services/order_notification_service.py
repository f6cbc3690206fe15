"""Order-created side effect: email the tenant owner about a new order.

Fire-and-forget. Every failure is logged and absorbed; the caller only gets
a NotificationOutcome back. There is no retry and no dead letter.
"""

from __future__ import annotations

import logging
from typing import Any

from guestmenu.application.dtos.order import OrderNotification
from guestmenu.application.interfaces.services import (
    IDocumentStore,
    IMailTransport,
    IOrderRenderer,
)
from guestmenu.domain.enums import NotificationOutcome
from guestmenu.infrastructure.firebase.collections import (
    notification_settings_path,
    order_path,
    profile_path,
)

logger = logging.getLogger(__name__)


class OrderNotificationService:
    """Sends the new-order email to the tenant's notification address."""

    def __init__(
        self,
        document_store: IDocumentStore,
        mail_transport: IMailTransport,
        renderer: IOrderRenderer,
    ) -> None:
        self.document_store = document_store
        self.mail_transport = mail_transport
        self.renderer = renderer

    async def resolve_recipient(self, tenant_id: str) -> tuple[str | None, str | None]:
        """Return (recipient email, restaurant name) for the tenant.

        settings/notifications.notificationEmail wins over profile/data.email. An
        unknown tenant has neither document and resolves to (None, None).
        """
        settings = await self.document_store.get(notification_settings_path(tenant_id)) or {}
        profile = await self.document_store.get(profile_path(tenant_id)) or {}
        recipient = settings.get("notificationEmail") or profile.get("email") or None
        restaurant_name = profile.get("restaurantName") or profile.get("name") or None
        return recipient, restaurant_name

    async def handle_order_created(
        self,
        tenant_id: str,
        order_id: str,
        order: dict[str, Any] | None = None,
    ) -> NotificationOutcome:
        """Notify the tenant owner of a new order. Never raises.

        Args:
            tenant_id: Owner uid (the submissions/{tenant_id} parent).
            order_id: Order document id.
            order: Order document data; read from the store when not supplied.
        """
        try:
            if order is None:
                order = await self.document_store.get(order_path(tenant_id, order_id))
                if order is None:
                    logger.info("Order %s/%s not found; no notification sent", tenant_id, order_id)
                    return NotificationOutcome.SKIPPED

            recipient, restaurant_name = await self.resolve_recipient(tenant_id)
            if not recipient:
                logger.info(
                    "No notification email configured for tenant %s; skipping order %s",
                    tenant_id,
                    order_id,
                )
                return NotificationOutcome.SKIPPED

            notification = OrderNotification.from_order(
                tenant_id, order_id, order, restaurant_name=restaurant_name
            )
            subject, html, text = self.renderer.render(notification)
            await self.mail_transport.send(recipient, subject, html, text)
        except Exception:
            logger.exception(
                "Failed to send order notification for %s/%s", tenant_id, order_id
            )
            return NotificationOutcome.FAILED

        logger.info("Order notification for %s/%s sent to %s", tenant_id, order_id, recipient)
        return NotificationOutcome.SENT
