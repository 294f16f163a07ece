"""
Notifications module.

Outbound email for account lifecycle events (welcome, password reset).

Public API:
- INotifier: Interface for sending notifications
- DeliveryReceipt: Result of a successful send
- EmailDeliveryError: Raised when the mail server fails
"""

from .interfaces import INotifier
from .models import DeliveryReceipt
from .exceptions import EmailDeliveryError, TemplateNotFoundError

__all__ = [
    "INotifier",
    "DeliveryReceipt",
    "EmailDeliveryError",
    "TemplateNotFoundError",
]
