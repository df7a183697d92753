"""Fixed-interval cycle scheduler for hostwatch.

Runs one cycle immediately, then one per tick. Ticks are anchored to the
start time (start + k * interval), and cycles never overlap: when a cycle
overruns, the next one starts as soon as it finishes.
"""

import logging
import threading
import time
from typing import Any, Callable, Optional

from hostwatch.monitor.incidents import IncidentTracker

logger = logging.getLogger(__name__)


class Scheduler:
    """Owns the incident tracker and drives cycles against it.

    Attributes:
        interval: Seconds between ticks (must be > 0)
        tracker: The active-incident state, passed into every cycle
        cycles_run: Number of cycles started so far
    """

    def __init__(
        self,
        interval: float,
        cycle: Callable[[IncidentTracker], Any],
        tracker: IncidentTracker,
        clock: Callable[[], float] = time.monotonic,
        wait: Optional[Callable[[float], Any]] = None,
    ):
        if interval <= 0:
            raise ValueError("interval must be greater than 0")
        self.interval = interval
        self.cycle = cycle
        self.tracker = tracker
        self.cycles_run = 0
        self._clock = clock
        self._stop_event = threading.Event()
        self._wait = wait or self._stop_event.wait

    @property
    def is_running(self) -> bool:
        return not self._stop_event.is_set()

    def stop(self) -> None:
        """Stop after the current cycle; wakes a pending wait."""
        self._stop_event.set()

    def run_once(self) -> Any:
        """Run a single cycle. Exceptions are logged, never raised."""
        self.cycles_run += 1
        try:
            return self.cycle(self.tracker)
        except Exception as e:
            logger.error(f"Cycle {self.cycles_run} failed: {e}", exc_info=True)
            return None

    def run(self, max_cycles: Optional[int] = None) -> None:
        """Run until stop() is called or max_cycles cycles have run."""
        self._stop_event.clear()
        start = self._clock()
        tick = 0

        while not self._stop_event.is_set():
            self.run_once()
            if max_cycles is not None and self.cycles_run >= max_cycles:
                break

            tick += 1
            delay = start + tick * self.interval - self._clock()
            if delay > 0:
                self._wait(delay)
            else:
                logger.warning(f"Cycle overran its slot by {-delay:.1f}s, starting next cycle now")
