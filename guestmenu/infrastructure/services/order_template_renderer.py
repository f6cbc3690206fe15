"""Order notification templates: subject, HTML body and plain-text body (Jinja)."""

from __future__ import annotations

from jinja2 import Environment, StrictUndefined, Template

from guestmenu.application.dtos.order import OrderNotification

_SUBJECT = "New order {{ order.order_id }}{% if order.restaurant_name %} at {{ order.restaurant_name }}{% endif %}"

_HTML = """\
<h2>New order received</h2>
<table>
  <tr><td>Order ID</td><td>{{ order.order_id }}</td></tr>
  <tr><td>Placed at</td><td>{{ placed_at }}</td></tr>
  <tr><td>Customer</td><td>{{ order.customer_name or "N/A" }}</td></tr>
  <tr><td>Email</td><td>{{ order.customer_email or "N/A" }}</td></tr>
  <tr><td>Status</td><td>{{ order.status }}</td></tr>
</table>
<h3>Items</h3>
{% if order.lines %}
<ul>
{% for line in order.lines %}
  <li>{{ line.quantity }} &times; {{ line.name }}{% if line.subtotal is not none %} ({{ "%.2f"|format(line.subtotal) }}){% endif %}{% if line.description %}<br><small>{{ line.description }}</small>{% endif %}</li>
{% endfor %}
</ul>
{% else %}
<p>No items.</p>
{% endif %}
<p>Total items: {{ order.total_items }}{% if order.total_price is not none %}<br>Total: {{ "%.2f"|format(order.total_price) }}{% endif %}</p>
"""

_TEXT = """\
New order received

Order ID: {{ order.order_id }}
Placed at: {{ placed_at }}
Customer: {{ order.customer_name or "N/A" }}
Email: {{ order.customer_email or "N/A" }}
Status: {{ order.status }}

Items:
{% for line in order.lines %}- {{ line.quantity }} x {{ line.name }}{% if line.subtotal is not none %} ({{ "%.2f"|format(line.subtotal) }}){% endif %}
{% else %}- none
{% endfor %}
Total items: {{ order.total_items }}
{% if order.total_price is not none %}Total: {{ "%.2f"|format(order.total_price) }}
{% endif %}"""


class OrderTemplateRenderer:
    """Renders the order email in both representations."""

    def __init__(self) -> None:
        # HTML escapes customer-supplied text; text and subject are sent as-is.
        self._html_env = Environment(autoescape=True, undefined=StrictUndefined)
        self._text_env = Environment(autoescape=False, undefined=StrictUndefined)
        self._subject: Template = self._text_env.from_string(_SUBJECT)
        self._text: Template = self._text_env.from_string(_TEXT)
        self._html: Template = self._html_env.from_string(_HTML)

    def render(self, order: OrderNotification) -> tuple[str, str, str]:
        """Return (subject, html, text) for the order."""
        placed_at = (
            order.created_at.strftime("%Y-%m-%d %H:%M UTC") if order.created_at else "N/A"
        )
        ctx = {"order": order, "placed_at": placed_at}
        subject = " ".join(self._subject.render(**ctx).split())
        return subject, self._html.render(**ctx), self._text.render(**ctx)
