"""Order-created event schemas."""

from typing import Any

from pydantic import BaseModel, Field


class OrderCreatedEvent(BaseModel):
    """Body of POST /events/order-created, pushed when submissions/{tenant_id}/data/{order_id} is created."""

    tenant_id: str = Field(..., min_length=1, description="Owner uid of the submissions tree")
    order_id: str = Field(..., min_length=1)
    order: dict[str, Any] | None = Field(
        default=None,
        description="Order document data; read from Firestore when omitted",
    )


class EventAckResponse(BaseModel):
    """202 acknowledgement; notification runs after the response and never fails the event."""

    accepted: bool = True
    tenant_id: str
    order_id: str
