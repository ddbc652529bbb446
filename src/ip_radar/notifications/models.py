"""
Notification data models.
"""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict


class NotificationSettings(BaseModel):
    """
    Operator-editable email settings.

    Immutable: edits produce a new instance that replaces the old one in
    the shared SettingsCell, so a reader never sees a half-updated record.

    Attributes:
        sender: Sender email address, also the SMTP login
        sender_credential: SMTP password or app key
        recipient: Recipient email address
        relay_host: SMTP server hostname
        relay_port: SMTP server port, kept as entered in the console
    """

    model_config = ConfigDict(frozen=True)

    sender: str = ""
    sender_credential: str = ""
    recipient: str = ""
    relay_host: str = ""
    relay_port: str = ""

    def is_complete(self) -> bool:
        """Check every field is filled in."""
        return all(
            [
                self.sender,
                self.sender_credential,
                self.recipient,
                self.relay_host,
                self.relay_port,
            ]
        )


@dataclass
class EmailMessage:
    """Envelope handed to a mail transport."""
    sender: str
    recipient: str
    subject: str
    html_body: str
    content_type: str = "text/html; charset=UTF-8"
