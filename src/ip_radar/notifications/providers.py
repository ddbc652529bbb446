"""
Mail transports for delivering notifications.
"""

import logging
import smtplib
import ssl
from abc import ABC, abstractmethod
from email.mime.text import MIMEText
from typing import Optional

from ip_radar.notifications.models import EmailMessage, NotificationSettings

logger = logging.getLogger(__name__)

SMTPS_PORT = 465
LOCAL_RELAY_HOSTS = ("localhost", "127.0.0.1", "::1")


class MailTransport(ABC):
    """Base class for mail transports."""

    @abstractmethod
    def send(self, message: EmailMessage, settings: NotificationSettings) -> None:
        """
        Deliver a message.

        Args:
            message: Envelope to deliver
            settings: Relay host, port and credentials

        Raises:
            Exception: Any delivery failure
        """
        pass


def to_mime(message: EmailMessage) -> MIMEText:
    """Convert an envelope to a single-part HTML MIME message."""
    mime = MIMEText(message.html_body, "html", "utf-8")
    mime["Subject"] = message.subject
    mime["From"] = message.sender
    mime["To"] = message.recipient
    return mime


class SmtpTransport(MailTransport):
    """
    SMTP submission with authentication.

    Port 465 uses implicit TLS; any other port connects in plain text and
    upgrades with STARTTLS. A relay without STARTTLS is refused unless it
    is on localhost. Every attempt is bounded by a socket timeout.
    """

    def __init__(self, timeout: float = 30.0, use_ssl: Optional[bool] = None):
        """
        Initialize SMTP transport.

        Args:
            timeout: Socket timeout in seconds for one delivery attempt
            use_ssl: Force implicit TLS on/off (default: decided by port)
        """
        self.timeout = timeout
        self.use_ssl = use_ssl

    def send(self, message: EmailMessage, settings: NotificationSettings) -> None:
        try:
            port = int(settings.relay_port)
        except ValueError:
            raise ValueError(f"Invalid SMTP port: {settings.relay_port!r}") from None

        use_ssl = self.use_ssl if self.use_ssl is not None else port == SMTPS_PORT
        context = ssl.create_default_context()

        if use_ssl:
            server = smtplib.SMTP_SSL(
                settings.relay_host, port, timeout=self.timeout, context=context
            )
        else:
            server = smtplib.SMTP(settings.relay_host, port, timeout=self.timeout)

        with server:
            if not use_ssl:
                server.ehlo()
                if server.has_extn("starttls"):
                    server.starttls(context=context)
                    server.ehlo()
                elif settings.relay_host.lower() not in LOCAL_RELAY_HOSTS:
                    # Credentials only travel in cleartext to a local relay
                    raise smtplib.SMTPNotSupportedError(
                        f"{settings.relay_host}:{port} does not offer STARTTLS"
                    )
            server.login(settings.sender, settings.sender_credential)
            server.send_message(to_mime(message))

        logger.debug(f"Delivered mail via {settings.relay_host}:{port}")
