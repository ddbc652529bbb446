"""
Core data models shared by the scanner, change detector and notifier.
"""

from enum import Enum
from typing import Dict, Iterator, List

from pydantic import BaseModel, ConfigDict


class AddressFamily(str, Enum):
    """IP address family of an observed address."""
    IPV4 = "IPv4"
    IPV6 = "IPv6"


# "<interface>-<address>", the unit of "have we seen this before"
ObservationKey = str


def observation_key(interface_name: str, address: str) -> ObservationKey:
    """Build the dedup key for an (interface, address) pair."""
    return f"{interface_name}-{address}"


class ObservedAddress(BaseModel):
    """
    One reportable address bound to one interface at scan time.

    Only built by the scanner for addresses that passed every filter, so it
    never holds a loopback, link-local or otherwise non-routable address.
    """

    model_config = ConfigDict(frozen=True)

    interface_name: str
    address: str
    family: AddressFamily

    @property
    def key(self) -> ObservationKey:
        """Observation key used for change detection."""
        return observation_key(self.interface_name, self.address)


class KnownAddressSet:
    """
    Every observation key seen since process start, mapped to its family.

    Grows monotonically: there is no way to remove an entry. Not persisted,
    so a restart forgets history and the first scan re-announces everything.
    """

    def __init__(self):
        self._entries: Dict[ObservationKey, AddressFamily] = {}

    def __contains__(self, key: ObservationKey) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ObservationKey]:
        return iter(self._entries)

    def add(self, observation: ObservedAddress) -> None:
        """Record an observation; re-adding a known key is a no-op."""
        self._entries.setdefault(observation.key, observation.family)

    def keys(self) -> List[ObservationKey]:
        return list(self._entries)

    def snapshot(self) -> Dict[ObservationKey, AddressFamily]:
        """Copy of the current key -> family mapping."""
        return dict(self._entries)
