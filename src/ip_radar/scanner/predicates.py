"""
Interface and address filters used by the scanner.

Interface classification is a name heuristic: virtual adapters are denied,
then only names that look like wired or wireless adapters are kept. The
"en" marker also matches some virtual adapters the deny list misses; that
imprecision is accepted.
"""

import ipaddress
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple, Union

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

VIRTUAL_ADAPTER_MARKERS: Tuple[str, ...] = ("vmware", "virtual", "vbox")
PHYSICAL_ADAPTER_MARKERS: Tuple[str, ...] = ("eth", "en", "wlan", "wi-fi", "wireless")

_IPV4_BROADCAST = ipaddress.IPv4Address("255.255.255.255")


@dataclass(frozen=True)
class InterfaceInfo:
    """Metadata of one host network interface."""
    name: str
    is_up: bool = True
    is_loopback: bool = False
    is_point_to_point: bool = False


InterfacePredicate = Callable[[InterfaceInfo], bool]


def _name_contains(name: str, markers: Sequence[str]) -> bool:
    lowered = name.lower()
    return any(marker in lowered for marker in markers)


def is_active(info: InterfaceInfo) -> bool:
    """Reject loopback, point-to-point and down interfaces."""
    return info.is_up and not info.is_loopback and not info.is_point_to_point


def is_not_virtual(
    info: InterfaceInfo, deny: Sequence[str] = VIRTUAL_ADAPTER_MARKERS
) -> bool:
    """Reject VMware/VirtualBox style adapters by name."""
    return not _name_contains(info.name, deny)


def is_physical(
    info: InterfaceInfo, allow: Sequence[str] = PHYSICAL_ADAPTER_MARKERS
) -> bool:
    """Keep only names that look like wired or wireless adapters."""
    return _name_contains(info.name, allow)


DEFAULT_INTERFACE_PREDICATES: Tuple[InterfacePredicate, ...] = (
    is_active,
    is_not_virtual,
    is_physical,
)


def accepts_interface(
    info: InterfaceInfo,
    predicates: Sequence[InterfacePredicate] = DEFAULT_INTERFACE_PREDICATES,
) -> bool:
    """True when every predicate accepts the interface."""
    return all(predicate(info) for predicate in predicates)


def is_global_unicast(ip: IPAddress) -> bool:
    """
    Global unicast in the routing sense: anything but unspecified,
    loopback, multicast, link-local and the IPv4 limited broadcast.

    Private and documentation ranges are deliberately accepted.
    """
    return not (
        ip.is_unspecified
        or ip.is_loopback
        or ip.is_multicast
        or ip.is_link_local
        or ip == _IPV4_BROADCAST
    )


def parse_reportable_address(text: str) -> Optional[IPAddress]:
    """
    Parse an interface address and apply the address filters.

    Args:
        text: Address as reported by the OS, possibly with a "%zone" suffix

    Returns:
        The parsed address (IPv4-mapped IPv6 is unwrapped to IPv4), or None
        if the address must not be reported
    """
    if not text:
        return None

    try:
        ip = ipaddress.ip_address(text.split("%", 1)[0])
    except ValueError:
        return None

    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        ip = ip.ipv4_mapped

    if not is_global_unicast(ip):
        return None

    # Explicit second check for textual IPv6 link-local
    if ip.version == 6 and str(ip).startswith("fe80:"):
        return None

    return ip
