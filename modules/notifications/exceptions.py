"""
Notification module exceptions.
"""

from shared.exceptions import ExternalServiceError, TodoListError


class EmailDeliveryError(ExternalServiceError):
    """Raised when the SMTP server cannot be reached or refuses the message."""

    def __init__(self, message: str = "Email could not be delivered"):
        super().__init__(message, service="smtp", code="EMAIL_DELIVERY_FAILED")


class TemplateNotFoundError(TodoListError):
    """Raised when an email template name does not resolve to a file."""

    def __init__(self, template: str):
        super().__init__(
            f"Email template not found: {template}",
            code="TEMPLATE_NOT_FOUND",
            details={"template": template},
        )
