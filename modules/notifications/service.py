"""
Email notifier implementation.

Renders HTML templates and sends them over SMTP. smtplib is blocking,
so the actual send runs in the threadpool.
"""

import html
import logging
import re
import smtplib
from email.message import EmailMessage
from email.utils import make_msgid
from pathlib import Path
from typing import Optional

from fastapi.concurrency import run_in_threadpool

from shared.config import Settings, get_settings

from .exceptions import EmailDeliveryError, TemplateNotFoundError
from .interfaces import INotifier
from .models import DeliveryReceipt

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"

_PLACEHOLDER = re.compile(r"{{\s*(\w+)\s*}}")


def render_template(template: str, variables: Optional[dict[str, str]] = None) -> str:
    """
    Load ``templates/<template>.html`` and fill in ``{{key}}`` placeholders.

    Values are HTML-escaped. Unknown placeholders render as empty strings.
    """
    path = TEMPLATES_DIR / f"{template}.html"
    if not path.is_file():
        raise TemplateNotFoundError(template)
    values = variables or {}
    return _PLACEHOLDER.sub(
        lambda m: html.escape(values.get(m.group(1), "")), path.read_text("utf-8")
    )


class EmailNotifier(INotifier):
    """
    Sends email through the configured SMTP server.

    Connection parameters come from the SMTP_* settings.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()

    async def send(
        self,
        to: str,
        subject: str,
        template: Optional[str] = None,
        variables: Optional[dict[str, str]] = None,
        text: Optional[str] = None,
    ) -> DeliveryReceipt:
        message = self._build_message(to, subject, template, variables, text)
        await run_in_threadpool(self._deliver, message)

        message_id = message["Message-ID"]
        logger.info("Sent email '%s' to %s (%s)", subject, to, message_id)

        preview_url = None
        if self._settings.email_preview_url:
            preview_url = f"{self._settings.email_preview_url.rstrip('/')}/{message_id.strip('<>')}"
        return DeliveryReceipt(message_id=message_id, preview_url=preview_url)

    def _build_message(
        self,
        to: str,
        subject: str,
        template: Optional[str],
        variables: Optional[dict[str, str]],
        text: Optional[str],
    ) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self._settings.email_from
        message["To"] = to
        message["Subject"] = subject
        message["Message-ID"] = make_msgid(domain="todolist.com")

        message.set_content(text or "")
        if template:
            message.add_alternative(render_template(template, variables), subtype="html")
        return message

    def _deliver(self, message: EmailMessage) -> None:
        """Blocking SMTP send."""
        settings = self._settings
        try:
            with smtplib.SMTP(
                settings.smtp_host, settings.smtp_port, timeout=settings.smtp_timeout
            ) as server:
                if settings.smtp_use_tls:
                    server.starttls()
                if settings.smtp_username and settings.smtp_password:
                    server.login(settings.smtp_username, settings.smtp_password)
                server.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            raise EmailDeliveryError(
                f"Email could not be delivered: {e.__class__.__name__}"
            ) from e
