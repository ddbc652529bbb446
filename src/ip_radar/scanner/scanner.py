"""
Host interface scanner.

Enumerates network interfaces with psutil, filters them, and returns the
reportable addresses bound to the survivors.
"""

import logging
import socket
from typing import List, Optional, Protocol, Sequence

import psutil

from ip_radar.core.models import AddressFamily, ObservedAddress
from ip_radar.scanner.predicates import (
    DEFAULT_INTERFACE_PREDICATES,
    InterfaceInfo,
    InterfacePredicate,
    accepts_interface,
    parse_reportable_address,
)

logger = logging.getLogger(__name__)


class InterfaceSource(Protocol):
    """Protocol for enumerating host interfaces and their addresses."""

    def interfaces(self) -> List[InterfaceInfo]:
        """List host interfaces."""
        ...

    def addresses(self, name: str) -> List[str]:
        """List textual IP addresses bound to an interface."""
        ...


class PsutilInterfaceSource:
    """InterfaceSource backed by psutil."""

    def interfaces(self) -> List[InterfaceInfo]:
        stats = psutil.net_if_stats()
        result = []
        for name in sorted(stats):
            st = stats[name]
            # "flags" is a comma separated string, empty on Windows
            flags = set(filter(None, getattr(st, "flags", "").split(",")))
            result.append(
                InterfaceInfo(
                    name=name,
                    is_up=st.isup,
                    is_loopback="loopback" in flags,
                    is_point_to_point="pointopoint" in flags,
                )
            )
        return result

    def addresses(self, name: str) -> List[str]:
        nics = psutil.net_if_addrs().get(name, [])
        return [
            nic.address
            for nic in nics
            if nic.family in (socket.AF_INET, socket.AF_INET6)
        ]


class InterfaceScanner:
    """
    Produces the list of reportable addresses on this host.

    scan() never raises: enumeration failures degrade the result instead.

    Example:
        scanner = InterfaceScanner()
        for observed in scanner.scan():
            print(observed.address, observed.family.value)
    """

    def __init__(
        self,
        source: Optional[InterfaceSource] = None,
        predicates: Sequence[InterfacePredicate] = DEFAULT_INTERFACE_PREDICATES,
    ):
        """
        Initialize scanner.

        Args:
            source: Interface enumeration backend (default: psutil)
            predicates: Interface filters, all of which must accept
        """
        self.source = source or PsutilInterfaceSource()
        self.predicates = tuple(predicates)

    def scan(self) -> List[ObservedAddress]:
        """
        Scan host interfaces.

        Returns:
            Observed addresses in interface order, then address order
        """
        try:
            interfaces = self.source.interfaces()
        except Exception as e:
            logger.warning(f"Error getting network interfaces: {e}")
            return []

        observed: List[ObservedAddress] = []
        for info in interfaces:
            if not accepts_interface(info, self.predicates):
                continue

            try:
                addresses = self.source.addresses(info.name)
            except Exception as e:
                logger.warning(f"Error getting addresses for interface {info.name}: {e}")
                continue

            for text in addresses:
                ip = parse_reportable_address(text)
                if ip is None:
                    continue
                observed.append(
                    ObservedAddress(
                        interface_name=info.name,
                        address=str(ip),
                        family=AddressFamily.IPV4 if ip.version == 4 else AddressFamily.IPV6,
                    )
                )

        logger.debug(f"Scan found {len(observed)} reportable addresses")
        return observed


def scan_interfaces() -> List[ObservedAddress]:
    """Scan the host with the default source and filters."""
    return InterfaceScanner().scan()
