"""Outage flag: selects which note collection serves reads."""

import logging
import threading

logger = logging.getLogger(__name__)


class OutageFlag:
    """
    Process-wide "primary is down" switch.

    Readers see a single bool attribute read; flips are serialized so two
    concurrent toggles never cancel into a lost update.
    """

    def __init__(self, is_down: bool = False) -> None:
        self._is_down = is_down
        self._lock = threading.Lock()

    @property
    def is_down(self) -> bool:
        return self._is_down

    def toggle(self) -> bool:
        """Flip the flag and return the new state."""
        with self._lock:
            self._is_down = not self._is_down
            new_state = self._is_down
        logger.warning(
            "Outage flag toggled; primary is now %s",
            "DOWN" if new_state else "UP",
            extra={"primary_is_down": new_state},
        )
        return new_state
