"""In-app stand-in for a local notification centre."""
import datetime
import logging
from dataclasses import dataclass

from core.timeutil import now_utc

logger = logging.getLogger(__name__)


@dataclass
class Reminder:
    identifier: str
    fire_at: datetime.datetime
    title: str
    body: str


class ReminderScheduler:
    """Keeps pending reminders by identifier; the UI collects due ones with due()."""

    def __init__(self, clock=now_utc):
        self.clock = clock
        self.pending = {}

    def schedule(self, identifier, fire_after_seconds, title, body):
        """Schedules a reminder, replacing any pending one with the same identifier."""
        fire_at = self.clock() + datetime.timedelta(seconds=fire_after_seconds)
        self.pending[identifier] = Reminder(identifier, fire_at, title, body)
        logger.info("Scheduled reminder %s in %ss", identifier, fire_after_seconds)
        return self.pending[identifier]

    def cancel(self, identifier):
        if self.pending.pop(identifier, None) is not None:
            logger.debug("Cancelled reminder %s", identifier)

    def cancel_all(self):
        if self.pending:
            logger.debug("Removed %d pending reminders", len(self.pending))
        self.pending.clear()

    def due(self, now=None):
        """Removes and returns reminders whose fire time has passed, oldest first."""
        now = now or self.clock()
        fired = sorted(
            (r for r in self.pending.values() if r.fire_at <= now),
            key=lambda r: r.fire_at,
        )
        for reminder in fired:
            del self.pending[reminder.identifier]
        return fired
