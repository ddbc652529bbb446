"""
Notifications module.

Renders change reports and delivers them by email with bounded retry.
"""

from ip_radar.notifications.dispatcher import Notifier, RetryPolicy
from ip_radar.notifications.formatters import (
    SUBJECT,
    build_change_message,
    render_change_report,
)
from ip_radar.notifications.models import EmailMessage, NotificationSettings
from ip_radar.notifications.providers import MailTransport, SmtpTransport

__all__ = [
    "Notifier",
    "RetryPolicy",
    "SUBJECT",
    "build_change_message",
    "render_change_report",
    "EmailMessage",
    "NotificationSettings",
    "MailTransport",
    "SmtpTransport",
]
