"""Rest countdown that survives the app being suspended.

The absolute end time is persisted under the timer key, so the remaining time
is always wall-clock arithmetic and never depends on how regularly tick() ran.
"""
import datetime
import logging

from core.timeutil import now_utc, to_utc_iso, from_iso
from core.units import display_time

logger = logging.getLogger(__name__)

KEY_PREFIX = "timer_"


def storage_key(timer_id):
    return f"{KEY_PREFIX}{timer_id}"


class CountdownTimer:
    """Counts down from a fixed duration and reports completion exactly once.

    `store` is any object with get/set/delete by key (the settings table in the
    app). The host calls tick() once a second, as the Streamlit fragment does.
    """

    def __init__(self, store, clock=now_utc, on_complete=None):
        self.store = store
        self.clock = clock
        self.on_complete = on_complete
        self.total_seconds = 0
        self.seconds_remaining = 0
        self.end_time = None
        self.key = None
        self.is_active = False

    def start(self, duration_seconds, key):
        if self.is_active:
            return
        self.total_seconds = int(duration_seconds)
        self.seconds_remaining = self.total_seconds
        self.key = storage_key(key)

        stored = self.store.get(self.key)
        if stored:
            self.end_time = from_iso(stored)
            logger.debug("Resuming timer %s ending at %s", self.key, stored)
        else:
            self.end_time = self.clock() + datetime.timedelta(seconds=self.total_seconds)
            self.store.set(self.key, to_utc_iso(self.end_time))

        self.is_active = True
        # First update immediately
        self.tick()

    def tick(self):
        if not self.is_active:
            return
        remaining = (self.end_time - self.clock()).total_seconds()
        if remaining > 0:
            self.seconds_remaining = int(remaining)
            return
        self.seconds_remaining = 0
        self.stop()
        logger.info("Timer %s completed", self.key)
        if self.on_complete is not None:
            self.on_complete()

    def stop(self):
        self.is_active = False
        if self.key is not None:
            self.store.delete(self.key)

    def resume(self):
        """Recomputes from the stored end time after the app returns to the foreground."""
        if not self.is_active:
            return
        stored = self.store.get(self.key)
        if stored:
            self.end_time = from_iso(stored)
        self.tick()

    @property
    def progress(self):
        if self.total_seconds <= 0:
            return 0.0
        return 1.0 - (self.seconds_remaining / self.total_seconds)

    @property
    def display(self):
        return display_time(self.seconds_remaining)
