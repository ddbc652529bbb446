"""
Scanner module - host interface enumeration and filtering.
"""

from ip_radar.scanner.predicates import (
    DEFAULT_INTERFACE_PREDICATES,
    PHYSICAL_ADAPTER_MARKERS,
    VIRTUAL_ADAPTER_MARKERS,
    InterfaceInfo,
    InterfacePredicate,
    accepts_interface,
    is_active,
    is_global_unicast,
    is_not_virtual,
    is_physical,
    parse_reportable_address,
)
from ip_radar.scanner.scanner import (
    InterfaceScanner,
    InterfaceSource,
    PsutilInterfaceSource,
    scan_interfaces,
)

__all__ = [
    "DEFAULT_INTERFACE_PREDICATES",
    "PHYSICAL_ADAPTER_MARKERS",
    "VIRTUAL_ADAPTER_MARKERS",
    "InterfaceInfo",
    "InterfacePredicate",
    "accepts_interface",
    "is_active",
    "is_global_unicast",
    "is_not_virtual",
    "is_physical",
    "parse_reportable_address",
    "InterfaceScanner",
    "InterfaceSource",
    "PsutilInterfaceSource",
    "scan_interfaces",
]
