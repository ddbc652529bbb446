"""
Notification formatters - render newly observed addresses as an HTML report.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ip_radar.core.models import AddressFamily, ObservedAddress
from ip_radar.notifications.models import EmailMessage, NotificationSettings

SUBJECT = "IP Address Change Detected"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

TEMPLATES_DIR = Path(__file__).parent / "templates"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
)


def render_change_report(
    sightings: Sequence[ObservedAddress],
    generated_at: Optional[datetime] = None,
) -> str:
    """
    Render the HTML body listing newly detected addresses.

    Args:
        sightings: New addresses, rendered in the given order
        generated_at: Report timestamp (default: now)

    Returns:
        HTML document
    """
    generated_at = generated_at or datetime.now()
    template = _env.get_template("change_report.html")
    return template.render(
        title=SUBJECT,
        sightings=sightings,
        ipv4=AddressFamily.IPV4,
        detected_at=generated_at.strftime(TIMESTAMP_FORMAT),
    )


def build_change_message(
    sightings: Sequence[ObservedAddress],
    settings: NotificationSettings,
    generated_at: Optional[datetime] = None,
) -> EmailMessage:
    """Build the email envelope for a change report."""
    return EmailMessage(
        sender=settings.sender,
        recipient=settings.recipient,
        subject=SUBJECT,
        html_body=render_change_report(sightings, generated_at),
    )
