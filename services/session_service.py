"""Started-workout session: drives the sequencer, the rest countdown,
the rest-finished reminder and the countdown surface together.

The position of the running session is saved under ACTIVE_SESSION_KEY in the
timer store, so a new browser session can pick it up with restore() and the
rest countdown continues from its persisted end time.
"""
import datetime
import json
import logging

from core.timeutil import now_utc
from repos.settings_repo import (
    DEFAULTS, DISPLAY_WEIGHT_IN_LBS, SHOW_LAST_SET_REST_TIME, USER_ACCENT_COLOR,
)
from services.countdown_timer import CountdownTimer, KEY_PREFIX, storage_key
from services.live_activity import RestCountdownActivity, RestCountdownContent
from services.reminders import ReminderScheduler
from services.session_sequencer import SessionSequencer

logger = logging.getLogger(__name__)

ACTIVE_SESSION_KEY = "active_session"


class WorkoutSession:

    def __init__(self, timer_store, sequencer=None, reminders=None, activity=None,
                 settings=None, clock=now_utc):
        self.timer_store = timer_store
        self.clock = clock
        self.sequencer = sequencer or SessionSequencer()
        self.reminders = reminders or ReminderScheduler(clock)
        self.activity = activity or RestCountdownActivity()
        self.settings = dict(DEFAULTS)
        self.countdown = None
        self._reminder_id = None
        self._saved_state = None
        self.apply_settings(settings or {})

    def apply_settings(self, settings):
        self.settings.update(settings)
        self.sequencer.show_last_set_rest_time = bool(self.settings[SHOW_LAST_SET_REST_TIME])

    # --- Read-only views ---

    @property
    def workout(self):
        return self.sequencer.workout

    @property
    def is_active(self):
        return self.sequencer.is_active

    @property
    def is_resting(self):
        return self.sequencer.is_resting

    @property
    def is_complete(self):
        return self.sequencer.is_complete

    def current_slot(self):
        return self.sequencer.current_slot()

    def next_slot(self):
        return self.sequencer.next_slot()

    def progress(self):
        """(completed slots, total slots)."""
        total = len(self.sequencer.slots())
        return min(self.sequencer.current_index, total), total

    # --- Lifecycle ---

    def start(self, workout):
        if self.is_active:
            self.stop()
        # Only the running rest may own a timer row
        self._purge_timers()
        self.sequencer.start(workout)
        content = self._content()
        if content is not None:
            self.activity.start(content)
        self._save_state()
        logger.info("Started session for workout %s", workout.id)

    def stop(self):
        self.reminders.cancel_all()
        self.activity.end()
        self._stop_countdown()
        self._purge_timers()
        self.timer_store.delete(ACTIVE_SESSION_KEY)
        self._saved_state = None
        self.sequencer.stop()
        self._reminder_id = None

    def restore(self, load_workout):
        """Picks up the session saved by an earlier browser session.

        `load_workout` maps a workout id to a freshly loaded workout or None.
        Returns True when a session was restored.
        """
        if self.is_active:
            return False
        raw = self.timer_store.get(ACTIVE_SESSION_KEY)
        if not raw:
            return False
        state = json.loads(raw)
        workout = load_workout(state["workout_id"])
        if workout is None:
            logger.info("Dropping saved session for missing workout %s", state["workout_id"])
            self.stop()
            return False

        self.sequencer.restore(
            workout, state["index"], state["is_resting"], state["is_complete"], state["timer_id"]
        )
        keep = storage_key(self.sequencer.timer_id) if self.is_resting else None
        self._purge_timers(keep=keep)
        content = self._content()
        if content is not None:
            self.activity.start(content)
        if self.is_resting:
            self._start_rest(state["rest"])
        else:
            self._save_state()
        logger.info("Restored session for workout %s at slot %s", workout.id, state["index"])
        return True

    def refresh(self, workout):
        """Picks up edits made to the workout while the session runs."""
        self.sequencer.refresh(workout)
        self._push()

    # --- Actions ---

    def done_set(self):
        if not self.is_active or self.is_complete:
            return
        if self.is_resting:
            self._move_to_next()
            return
        rest = self.sequencer.begin_rest()
        if rest > 0:
            self._start_rest(rest)
        else:
            self._move_to_next()

    def skip_rest(self):
        if self.is_resting:
            self._move_to_next()

    def timer_did_complete(self):
        logger.info("Timer %s completed", self.sequencer.timer_id)
        if self.is_resting:
            self._move_to_next()

    def previous_set(self):
        was_resting = self.is_resting
        if self.sequencer.regress():
            if was_resting:
                self._cancel_rest()
            self._push()

    def next_set(self):
        if self.is_resting:
            self._cancel_rest()
        self.sequencer.navigate_next()
        self._push()

    def tick(self):
        """Advances the countdown; returns reminders that became due."""
        delivered = self.reminders.due()
        if self.countdown is not None:
            self.countdown.tick()
        return delivered

    def resume(self):
        """Catches the countdown up with the wall clock when the page runs again."""
        if self.countdown is not None:
            self.countdown.resume()

    # --- Internals ---

    def _start_rest(self, rest):
        self._stop_countdown()
        self.countdown = CountdownTimer(
            self.timer_store, clock=self.clock, on_complete=self.timer_did_complete
        )
        # A restored rest keeps its stored end time and may already be over
        self.countdown.start(rest, self.sequencer.timer_id)
        if self.is_resting:
            self._schedule_rest_finished(self.countdown.seconds_remaining)
            self._push()

    def _purge_timers(self, keep=None):
        for key in self.timer_store.keys_with_prefix(KEY_PREFIX):
            if key != keep:
                self.timer_store.delete(key)

    def _save_state(self):
        if not self.is_active:
            return
        state = json.dumps({
            "workout_id": self.workout.id,
            "index": self.sequencer.current_index,
            "is_resting": self.is_resting,
            "is_complete": self.is_complete,
            "timer_id": self.sequencer.timer_id,
            "rest": self.countdown.total_seconds if self.countdown is not None else 0,
        })
        if state != self._saved_state:
            self.timer_store.set(ACTIVE_SESSION_KEY, state)
            self._saved_state = state

    def _schedule_rest_finished(self, rest):
        # The previous rest's reminder must not fire as well
        if self._reminder_id is not None:
            self.reminders.cancel(self._reminder_id)

        next_slot = self.next_slot()
        if next_slot is not None:
            title = "Rest Time Finished!"
            body = f"Time for {next_slot.exercise_name} (Set {next_slot.set_index + 1})"
        else:
            title = "Last Set Complete!"
            body = "Workout finished. Great job!"
        self._reminder_id = self.sequencer.timer_id
        self.reminders.schedule(self._reminder_id, rest, title, body)

    def _cancel_rest(self):
        if self._reminder_id is not None:
            self.reminders.cancel(self._reminder_id)
            self._reminder_id = None
        self._stop_countdown()

    def _stop_countdown(self):
        if self.countdown is not None:
            countdown, self.countdown = self.countdown, None
            countdown.stop()

    def _move_to_next(self):
        self._cancel_rest()
        self.timer_store.delete(storage_key(self.sequencer.timer_id))
        self.sequencer.advance()
        if self.is_complete:
            logger.info("Workout complete!")
        self._push()

    def _push(self):
        content = self._content()
        if content is not None:
            self.activity.update(content)
        self._save_state()

    def _content(self):
        slot = self.current_slot()
        if slot is None:
            return None
        next_slot = self.next_slot()
        now = self.clock()
        if self.is_resting and self.countdown is not None and self.countdown.end_time is not None:
            end_time = self.countdown.end_time
        else:
            end_time = now + datetime.timedelta(seconds=slot.rest_time)
        return RestCountdownContent(
            display_weight_in_lbs=bool(self.settings[DISPLAY_WEIGHT_IN_LBS]),
            user_accent_color=self.settings[USER_ACCENT_COLOR],
            exercise=slot.exercise_name,
            set=self.sequencer.current_index + 1,
            total_sets=len(self.sequencer.slots()),
            set_for_current_exercise=slot.set_index + 1,
            sets_for_current_exercise=len(slot.exercise.sets),
            reps=slot.set.reps,
            weight=slot.set.weight,
            start_time=now,
            end_time=end_time,
            rest_time=slot.rest_time,
            is_resting=self.is_resting,
            next_exercise=next_slot.exercise_name if next_slot else None,
            next_reps=next_slot.set.reps if next_slot else None,
            next_weight=next_slot.set.weight if next_slot else None,
            set_for_next_exercise=next_slot.set_index + 1 if next_slot else None,
            sets_for_next_exercise=len(next_slot.exercise.sets) if next_slot else None,
        )
