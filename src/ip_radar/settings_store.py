"""
Notification settings persistence and the shared in-memory cell.

The settings file keeps the layout operators already know:

    {
      "email": {
        "from": "...", "password": "...", "to": "...",
        "smtpHost": "...", "smtpPort": "..."
      }
    }
"""

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ip_radar.notifications.models import NotificationSettings

logger = logging.getLogger(__name__)


class SettingsError(Exception):
    """Settings file missing, unreadable or malformed."""
    pass


class EmailSection(BaseModel):
    """The "email" object of the settings file."""

    model_config = ConfigDict(populate_by_name=True)

    sender: str = Field(default="", alias="from")
    password: str = ""
    recipient: str = Field(default="", alias="to")
    smtp_host: str = Field(default="", alias="smtpHost")
    smtp_port: str = Field(default="", alias="smtpPort")

    @classmethod
    def from_settings(cls, settings: NotificationSettings) -> "EmailSection":
        return cls(
            sender=settings.sender,
            password=settings.sender_credential,
            recipient=settings.recipient,
            smtp_host=settings.relay_host,
            smtp_port=settings.relay_port,
        )

    def to_settings(self) -> NotificationSettings:
        return NotificationSettings(
            sender=self.sender,
            sender_credential=self.password,
            recipient=self.recipient,
            relay_host=self.smtp_host,
            relay_port=self.smtp_port,
        )


DEFAULT_DOCUMENT: Dict[str, Any] = {
    "email": {
        "from": "Sender's email address",
        "password": "Sender message key",
        "to": "The recipient's email address",
        "smtpHost": "smtp.126.com  Modify it for your mailbox provider",
        "smtpPort": "Modify it for your mailbox provider",
    }
}


class SettingsStore:
    """
    JSON file storage for NotificationSettings.

    Example:
        store = SettingsStore("config.json")
        store.ensure_exists()
        settings = store.load()
    """

    def __init__(self, path: Union[str, Path] = "config.json"):
        """
        Initialize settings store.

        Args:
            path: Path to the JSON settings file
        """
        self.path = Path(path)

    def ensure_exists(self) -> bool:
        """
        Write the placeholder document if the file is missing.

        Returns:
            True if a new file was created

        Raises:
            SettingsError: If the default file cannot be written
        """
        if self.path.exists():
            return False

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(DEFAULT_DOCUMENT, indent=2) + "\n")
        except OSError as e:
            raise SettingsError(f"Error creating default {self.path}: {e}") from e

        logger.info(f"Default {self.path} created")
        return True

    def load(self) -> NotificationSettings:
        """
        Read settings from disk.

        Raises:
            SettingsError: If the file cannot be read or parsed
        """
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise SettingsError(f"Error loading config {self.path}: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("email", {}), dict):
            raise SettingsError(f"Error loading config {self.path}: 'email' must be an object")

        try:
            section = EmailSection.model_validate(data.get("email", {}))
        except ValidationError as e:
            raise SettingsError(f"Error loading config {self.path}: {e}") from e

        return section.to_settings()

    def save(self, settings: NotificationSettings) -> bool:
        """
        Write settings to disk.

        Returns:
            True if saved, False on I/O failure
        """
        document = {"email": EmailSection.from_settings(settings).model_dump(by_alias=True)}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
                f.write("\n")
        except OSError as e:
            logger.error(f"Error saving configuration to {self.path}: {e}")
            return False

        logger.info(f"Saved configuration to {self.path}")
        return True


class SettingsCell:
    """
    Lock-guarded holder of the current NotificationSettings.

    Shared by the console (writer) and the notifier (reader). The held value
    is immutable, so get() hands out a consistent snapshot.
    """

    def __init__(self, initial: Optional[NotificationSettings] = None):
        self._lock = threading.Lock()
        self._settings = initial or NotificationSettings()

    def get(self) -> NotificationSettings:
        with self._lock:
            return self._settings

    def set(self, settings: NotificationSettings) -> None:
        with self._lock:
            self._settings = settings

    def update(self, **changes: Any) -> NotificationSettings:
        """Replace selected fields and return the new snapshot."""
        with self._lock:
            self._settings = self._settings.model_copy(update=changes)
            return self._settings
