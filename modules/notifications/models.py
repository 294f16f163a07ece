"""
Notification module data models.
"""

from typing import Optional
from pydantic import BaseModel, Field


class DeliveryReceipt(BaseModel):
    """Handle returned once a message has been handed to the mail server."""

    message_id: str = Field(..., description="Message-ID header of the sent email")
    preview_url: Optional[str] = Field(
        None, description="Where the message can be viewed (test mail servers only)"
    )
