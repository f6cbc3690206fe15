"""Infrastructure implementations of application service interfaces."""

from guestmenu.infrastructure.services.order_template_renderer import OrderTemplateRenderer

__all__ = ["OrderTemplateRenderer"]
