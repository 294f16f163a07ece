"""
Notification module interface.

The auth module sends welcome and password-reset emails through INotifier.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import DeliveryReceipt


@runtime_checkable
class INotifier(Protocol):
    """Outbound notification channel."""

    async def send(
        self,
        to: str,
        subject: str,
        template: Optional[str] = None,
        variables: Optional[dict[str, str]] = None,
        text: Optional[str] = None,
    ) -> DeliveryReceipt:
        """
        Send a message.

        Args:
            to: Recipient address
            subject: Subject line
            template: Template name under templates/ (without .html)
            variables: Values substituted for ``{{name}}`` placeholders
            text: Plain-text body

        Returns:
            DeliveryReceipt for the accepted message

        Raises:
            ExternalServiceError: If the channel is unreachable or rejects the message
        """
        ...
