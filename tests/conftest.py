"""
Shared test doubles.
"""

from typing import Dict, List

import pytest

from ip_radar.core.models import AddressFamily, ObservedAddress
from ip_radar.notifications.models import NotificationSettings
from ip_radar.scanner.predicates import InterfaceInfo


class FakeInterfaceSource:
    """InterfaceSource serving a synthetic host."""

    def __init__(self, interfaces: List[InterfaceInfo], addresses: Dict[str, List[str]]):
        self._interfaces = interfaces
        self._addresses = addresses

    def interfaces(self) -> List[InterfaceInfo]:
        return list(self._interfaces)

    def addresses(self, name: str) -> List[str]:
        value = self._addresses.get(name, [])
        if isinstance(value, Exception):
            raise value
        return list(value)


class StaticScanner:
    """Scanner returning a scripted sequence of scans."""

    def __init__(self, *scans: List[ObservedAddress]):
        self._scans = list(scans)
        self.calls = 0

    def scan(self) -> List[ObservedAddress]:
        self.calls += 1
        if not self._scans:
            return []
        if len(self._scans) == 1:
            return list(self._scans[0])
        return list(self._scans.pop(0))


class RecordingNotifier:
    """Notifier double remembering each call."""

    def __init__(self):
        self.calls: List[List[ObservedAddress]] = []

    def notify(self, sightings) -> bool:
        self.calls.append(list(sightings))
        return True


class RecordingTransport:
    """MailTransport that fails a set number of times before succeeding."""

    def __init__(self, failures: int = 0):
        self.failures = failures
        self.attempts = 0
        self.sent = []

    def send(self, message, settings) -> None:
        self.attempts += 1
        if self.attempts <= self.failures:
            raise ConnectionRefusedError("relay unreachable")
        self.sent.append((message, settings))


def v4(address: str, interface: str = "eth0") -> ObservedAddress:
    return ObservedAddress(interface_name=interface, address=address, family=AddressFamily.IPV4)


def v6(address: str, interface: str = "eth0") -> ObservedAddress:
    return ObservedAddress(interface_name=interface, address=address, family=AddressFamily.IPV6)


@pytest.fixture
def settings() -> NotificationSettings:
    return NotificationSettings(
        sender="radar@example.com",
        sender_credential="app-key",
        recipient="ops@example.com",
        relay_host="smtp.example.com",
        relay_port="587",
    )
