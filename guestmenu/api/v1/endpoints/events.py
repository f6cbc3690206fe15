"""Order-created event receiver.

Firestore triggers cannot run here, so the deployment pushes one signed event
per new order document. Callers must send
X-Event-Signature-256: sha256=<hmac_sha256(ORDER_EVENT_SECRET, body)>.
"""

import hashlib
import hmac
import json
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request
from pydantic import ValidationError

from guestmenu.api.v1.dependencies import get_order_notification_service
from guestmenu.application.services import OrderNotificationService
from guestmenu.core.config import get_settings
from guestmenu.domain.exceptions import InvalidArgumentException
from guestmenu.schemas.order import EventAckResponse, OrderCreatedEvent

router = APIRouter()

SIGNATURE_HEADER = "X-Event-Signature-256"


def _verify_event_signature(body: bytes, signature_header: str | None, secret: str) -> bool:
    """Return True if the signature header matches HMAC-SHA256(secret, body)."""
    if not signature_header or not signature_header.startswith("sha256="):
        return False
    expected = hmac.HMAC(secret.encode(), body, hashlib.sha256).hexdigest()
    return hmac.compare_digest(signature_header[7:].strip(), expected)


async def verified_event_body(request: Request) -> bytes:
    """Return the raw body once its signature checks out.

    Declared ahead of the service dependency so a forged event is refused
    with 401 before any Firebase client is touched.
    """
    body = await request.body()
    settings = get_settings()
    if not settings.order_event_secret:
        raise HTTPException(
            status_code=503,
            detail="Order events are not configured (ORDER_EVENT_SECRET is not set).",
        )
    sig = request.headers.get(SIGNATURE_HEADER)
    secret = settings.order_event_secret.get_secret_value()
    if not _verify_event_signature(body, sig, secret):
        raise HTTPException(status_code=401, detail="Invalid or missing event signature")
    return body


@router.post("/order-created", response_model=EventAckResponse, status_code=202)
async def order_created(
    body: Annotated[bytes, Depends(verified_event_body)],
    background_tasks: BackgroundTasks,
    service: Annotated[OrderNotificationService, Depends(get_order_notification_service)],
):
    """Accept an order-created event and email the tenant owner after responding.

    Notification failures are logged by the service and never change the
    response: any correctly signed event gets 202.
    """
    try:
        event = OrderCreatedEvent.model_validate(json.loads(body or b"null"))
    except (ValueError, ValidationError) as e:
        raise InvalidArgumentException(f"Malformed order event: {e}") from e

    background_tasks.add_task(
        service.handle_order_created, event.tenant_id, event.order_id, event.order
    )
    return EventAckResponse(tenant_id=event.tenant_id, order_id=event.order_id)
