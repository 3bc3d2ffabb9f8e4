"""
Periodic refresh of meter usage.

A MeterPoller owns a background thread and a cancellation handle, and
publishes one immutable Snapshot per cycle through a callback.
"""

import logging
import threading
from typing import Callable, Optional, Sequence

from .energy_service import EnergyService
from ..models import Snapshot, Window
from ..processing.resolution import StepOverride


class MeterPoller:
    """Poll the query service on a fixed interval."""

    def __init__(
        self,
        service: EnergyService,
        tag_ids: Sequence[int],
        window_factory: Callable[[], Window],
        on_snapshot: Callable[[Snapshot], None],
        interval: float = 1.0,
        step: StepOverride = None,
        max_cycles: Optional[int] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize poller.

        Args:
            service: Energy service used for each cycle
            tag_ids: Meter ids to refresh
            window_factory: Called every cycle to get the latest window
            on_snapshot: Receives each snapshot
            interval: Seconds between cycles
            step: Optional resolution override
            max_cycles: Stop after this many cycles (None runs until stopped)
            logger: Logger instance
        """
        if interval <= 0:
            raise ValueError("Poll interval must be positive")

        self.service = service
        self.tag_ids = tuple(tag_ids)
        self.window_factory = window_factory
        self.on_snapshot = on_snapshot
        self.interval = interval
        self.step = step
        self.max_cycles = max_cycles
        self.logger = logger or logging.getLogger(__name__)

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._sequence = 0

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def cancelled(self) -> bool:
        return self._stop_event.is_set()

    def run_once(self) -> Optional[Snapshot]:
        """
        Run a single cycle and publish its snapshot.

        Returns:
            The published snapshot, or None if the poller was stopped while
            the cycle was in flight (the stale result is discarded)
        """
        self._sequence += 1
        snapshot = self.service.snapshot(
            self.tag_ids,
            self.window_factory(),
            step=self.step,
            sequence=self._sequence,
        )

        if self._stop_event.is_set():
            self.logger.debug(f"Discarding snapshot {snapshot.sequence}: poller stopped")
            return None

        self.on_snapshot(snapshot)
        return snapshot

    def _run(self) -> None:
        cycles = 0
        while not self._stop_event.is_set():
            try:
                self.run_once()
            except Exception as e:
                # A failed cycle must not end the polling thread
                self.logger.error(f"Poll cycle {self._sequence} failed: {e}", exc_info=True)
            cycles += 1
            if self.max_cycles is not None and cycles >= self.max_cycles:
                break
            self._stop_event.wait(self.interval)
        self.logger.debug(f"Poller finished after {cycles} cycles")

    def start(self) -> None:
        """Start polling on a daemon thread."""
        if self.is_running:
            raise RuntimeError("Poller already running")

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run, name="meter-poller", daemon=True
        )
        self._thread.start()
        self.logger.info(
            f"Polling tags {list(self.tag_ids)} every {self.interval:.1f}s"
        )

    def stop(self, timeout: Optional[float] = None) -> None:
        """Cancel polling; a cycle already in flight is not published."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for the polling thread to finish."""
        if self._thread is not None:
            self._thread.join(timeout)
