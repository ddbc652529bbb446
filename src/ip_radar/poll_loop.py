"""
Poll loop - drives scan -> detect -> notify on a fixed interval.
"""

import logging
import threading
from datetime import datetime
from typing import List, Protocol, Sequence

from ip_radar.change_monitor.detector import ChangeDetector
from ip_radar.core.models import ObservedAddress

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 600


class Scanner(Protocol):
    def scan(self) -> List[ObservedAddress]:
        ...


class ChangeNotifier(Protocol):
    def notify(self, sightings: Sequence[ObservedAddress]) -> bool:
        ...


class PollLoop:
    """
    Single-threaded monitoring loop.

    Runs one cycle immediately, then one per interval. Cycles never
    overlap. stop() is honoured between cycles, and also wakes an idle wait.
    """

    def __init__(
        self,
        scanner: Scanner,
        detector: ChangeDetector,
        notifier: ChangeNotifier,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
    ):
        """
        Initialize poll loop.

        Args:
            scanner: Produces the current address list
            detector: Owns the known-address state
            notifier: Receives non-empty change sets
            interval_seconds: Pause between cycles

        Raises:
            ValueError: If interval_seconds is not positive
        """
        self.scanner = scanner
        self.detector = detector
        self.notifier = notifier
        if interval_seconds <= 0:
            raise ValueError(f"Poll interval must be positive, got {interval_seconds}")
        self.interval_seconds = interval_seconds
        self.iterations = 0
        self._stop_event = threading.Event()
        self._running = False

    @property
    def is_running(self) -> bool:
        """Whether run() is active."""
        return self._running

    def run_cycle(self) -> List[ObservedAddress]:
        """
        Run one scan -> detect -> notify pass.

        Returns:
            Addresses newly detected in this cycle
        """
        self.iterations += 1
        logger.debug(f"Poll cycle {self.iterations} started at {datetime.now()}")

        new_sightings: List[ObservedAddress] = []
        try:
            observed = self.scanner.scan()
            new_sightings = self.detector.detect(observed)
            if new_sightings:
                self.notifier.notify(new_sightings)
        except Exception as e:
            logger.error(f"Poll cycle {self.iterations} failed: {e}", exc_info=True)

        logger.debug(
            f"Poll cycle {self.iterations} complete: {len(new_sightings)} new address(es)"
        )
        return new_sightings

    def run(self) -> None:
        """Run until stop() is called."""
        self._running = True
        logger.info(f"Starting poll loop (interval: {self.interval_seconds}s)")
        try:
            while not self._stop_event.is_set():
                self.run_cycle()
                if self._stop_event.wait(self.interval_seconds):
                    break
        finally:
            self._running = False
            logger.info("Poll loop stopped")

    def stop(self) -> None:
        """Ask the loop to exit before its next cycle."""
        self._stop_event.set()
