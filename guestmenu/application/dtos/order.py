"""DTOs for the order notification use case."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from guestmenu.shared.utils.datetime import coerce_timestamp


@dataclass(frozen=True)
class OrderLine:
    """One ordered menu item."""

    name: str
    quantity: int = 1
    description: str | None = None
    price: float | None = None

    @property
    def subtotal(self) -> float | None:
        return None if self.price is None else self.price * self.quantity

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "OrderLine":
        quantity = raw.get("quantity", 1)
        price = raw.get("price")
        return cls(
            name=str(raw.get("name") or "Item"),
            quantity=quantity if isinstance(quantity, int) and quantity > 0 else 1,
            description=raw.get("description") or None,
            price=float(price) if isinstance(price, (int, float)) and not isinstance(price, bool) else None,
        )


@dataclass(frozen=True)
class OrderNotification:
    """Everything the order email shows, read from the order document."""

    tenant_id: str
    order_id: str
    customer_name: str | None = None
    customer_email: str | None = None
    status: str = "pending"
    created_at: datetime | None = None
    lines: list[OrderLine] = field(default_factory=list)
    restaurant_name: str | None = None

    @property
    def total_items(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def total_price(self) -> float | None:
        """Sum of line subtotals; None when any line has no price."""
        subtotals = [line.subtotal for line in self.lines]
        if not subtotals or any(s is None for s in subtotals):
            return None
        return sum(s for s in subtotals if s is not None)

    @classmethod
    def from_order(
        cls,
        tenant_id: str,
        order_id: str,
        order: dict[str, Any],
        restaurant_name: str | None = None,
    ) -> "OrderNotification":
        """Build from raw order document data; unknown or malformed fields are dropped."""
        items = order.get("items") or []
        lines = [OrderLine.from_dict(i) for i in items if isinstance(i, dict)]
        return cls(
            tenant_id=tenant_id,
            order_id=str(order.get("orderId") or order_id),
            customer_name=order.get("customerName") or None,
            customer_email=order.get("customerEmail") or None,
            status=str(order.get("status") or "pending"),
            created_at=coerce_timestamp(order.get("createdAt")),
            lines=lines,
            restaurant_name=restaurant_name or order.get("restaurantName") or None,
        )
