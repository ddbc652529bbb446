"""
Change detection against previously observed addresses.
"""

import logging
from typing import Iterable, List, Optional

from ip_radar.core.models import KnownAddressSet, ObservedAddress

logger = logging.getLogger(__name__)


def detect_new(
    observations: Iterable[ObservedAddress], known: KnownAddressSet
) -> List[ObservedAddress]:
    """
    Return the observations whose key is not yet known, recording them.

    Mutates `known` in place. Result order follows the input order, and a
    key repeated within one scan is reported once.

    Args:
        observations: Fresh scan result
        known: Every key seen so far

    Returns:
        Newly observed addresses
    """
    new_sightings: List[ObservedAddress] = []
    for observed in observations:
        if observed.key in known:
            continue
        logger.info(f"New IP detected: {observed.address} ({observed.interface_name})")
        known.add(observed)
        new_sightings.append(observed)
    return new_sightings


class ChangeDetector:
    """Owns the KnownAddressSet for one poll loop."""

    def __init__(self, known: Optional[KnownAddressSet] = None):
        self._known = known if known is not None else KnownAddressSet()

    @property
    def known(self) -> KnownAddressSet:
        return self._known

    def detect(self, observations: Iterable[ObservedAddress]) -> List[ObservedAddress]:
        return detect_new(observations, self._known)
