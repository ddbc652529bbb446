"""
Notifier - sends change reports with bounded retry.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from ip_radar.core.models import ObservedAddress
from ip_radar.notifications.formatters import build_change_message
from ip_radar.notifications.models import NotificationSettings
from ip_radar.notifications.providers import MailTransport

logger = logging.getLogger(__name__)

SettingsProvider = Callable[[], NotificationSettings]


@dataclass
class RetryPolicy:
    """Delivery retry policy: total attempts and the pause between them."""
    max_attempts: int = 3
    delay_seconds: float = 2.0


class Notifier:
    """
    Best-effort delivery of change reports.

    Settings are read at send time so console edits take effect on the next
    notification. A failed notification is logged and dropped; notify()
    never raises into the poll loop.
    """

    def __init__(
        self,
        transport: MailTransport,
        settings_provider: SettingsProvider,
        retry: Optional[RetryPolicy] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize notifier.

        Args:
            transport: Mail transport used for each attempt
            settings_provider: Returns the current NotificationSettings
            retry: Retry policy (default: 3 attempts, 2 seconds apart)
            sleep: Pause function, replaceable in tests
        """
        self.transport = transport
        self.settings_provider = settings_provider
        self.retry = retry or RetryPolicy()
        self._sleep = sleep

    def notify(self, sightings: Sequence[ObservedAddress]) -> bool:
        """
        Send one report covering every new sighting.

        Args:
            sightings: Newly observed addresses, must not be empty

        Returns:
            True if delivered, False after all attempts failed
        """
        if not sightings:
            logger.warning("Refusing to send an empty change notification")
            return False

        attempts = max(1, self.retry.max_attempts)
        for attempt in range(1, attempts + 1):
            try:
                settings = self.settings_provider()
                message = build_change_message(sightings, settings)
                self.transport.send(message, settings)
            except Exception as e:
                logger.warning(f"Attempt {attempt}: Error sending email: {e}")
                if attempt < attempts:
                    self._sleep(self.retry.delay_seconds)
                continue

            logger.info(
                f"Email sent successfully: {len(sightings)} new address(es) "
                f"reported to {settings.recipient}"
            )
            return True

        logger.error(
            f"Giving up on change notification after {attempts} attempts "
            f"({len(sightings)} address(es) unreported)"
        )
        return False
