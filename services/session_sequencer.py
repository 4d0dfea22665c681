"""Workout session progression.

A workout is flattened into an ordered list of set slots. Plain exercises
contribute their sets in order; a superset contributes rounds, where round n
visits set n of each exercise in superset order and skips exercises that have
fewer than n + 1 sets.

The sequencer only holds a reference to the workout and recomputes the slot
list on every read, so edits made during a session are picked up immediately.
It performs no I/O and never raises.
"""
import uuid
from dataclasses import dataclass
from typing import List, Optional

from core.models import Exercise, SetEntry, Superset, Workout
from core.types import SessionPhase


@dataclass(eq=False)
class SessionSlot:
    item_index: int
    exercise_index: int
    set_index: int
    exercise: Exercise
    set: SetEntry
    superset: Optional[Superset] = None
    is_final: bool = False

    @property
    def is_superset(self) -> bool:
        return self.superset is not None

    @property
    def exercise_name(self) -> str:
        return self.exercise.name

    @property
    def rest_time(self) -> int:
        """Rest duration that applies to this slot's exercise (before any rules)."""
        if self.superset is not None:
            return self.superset.rest_time
        return self.exercise.rest_time

    @property
    def is_last_set_of_exercise(self) -> bool:
        return self.set_index == len(self.exercise.sets) - 1


def build_slots(workout: Optional[Workout]) -> List[SessionSlot]:
    """Flattens a workout into its ordered set slots; the last one is marked final."""
    slots: List[SessionSlot] = []
    if workout is None:
        return slots

    for item_index, item in enumerate(workout.ordered_items()):
        superset = item.superset
        if superset is None:
            exercise = item.exercise
            for set_index, set_entry in enumerate(exercise.ordered_sets()):
                slots.append(SessionSlot(item_index, 0, set_index, exercise, set_entry))
            continue

        exercises = superset.ordered_exercises()
        sets_by_exercise = [ex.ordered_sets() for ex in exercises]
        rounds = max((len(s) for s in sets_by_exercise), default=0)
        for set_index in range(rounds):
            for exercise_index, exercise in enumerate(exercises):
                ex_sets = sets_by_exercise[exercise_index]
                if set_index >= len(ex_sets):
                    continue
                slots.append(SessionSlot(
                    item_index, exercise_index, set_index, exercise, ex_sets[set_index], superset
                ))

    if slots:
        slots[-1].is_final = True
    return slots


def new_timer_id() -> str:
    return str(uuid.uuid4())


class SessionSequencer:
    """Tracks the position of a started workout.

    NotStarted -> InProgress(resting=False) <-> InProgress(resting=True) -> Complete.
    Complete is terminal until stop().
    """

    def __init__(self, show_last_set_rest_time: bool = True):
        self.show_last_set_rest_time = show_last_set_rest_time
        self.workout: Optional[Workout] = None
        self.current_index = 0
        self.is_resting = False
        self.is_complete = False
        self.timer_id = new_timer_id()

    # --- Lifecycle ---

    def start(self, workout: Workout):
        self.workout = workout
        self.current_index = 0
        self.is_resting = False
        self.is_complete = False
        self.timer_id = new_timer_id()

    def restore(self, workout: Workout, index: int, is_resting: bool = False,
                is_complete: bool = False, timer_id: Optional[str] = None):
        """Continues a saved session at the given position."""
        self.workout = workout
        self.current_index = max(0, int(index))
        self.is_resting = bool(is_resting) and not is_complete
        self.is_complete = bool(is_complete)
        self.timer_id = timer_id or new_timer_id()
        self.slots()

    def stop(self):
        self.workout = None
        self.current_index = 0
        self.is_resting = False
        self.is_complete = False

    def refresh(self, workout: Workout):
        """Swaps in a freshly loaded copy of the workout, keeping progress."""
        if self.workout is None:
            return
        self.workout = workout
        self.slots()

    @property
    def is_active(self) -> bool:
        return self.workout is not None

    @property
    def phase(self) -> SessionPhase:
        if self.workout is None:
            return SessionPhase.NOT_STARTED
        if self.is_complete:
            return SessionPhase.COMPLETE
        if self.is_resting:
            return SessionPhase.RESTING
        return SessionPhase.IN_PROGRESS

    # --- Queries ---

    def slots(self) -> List[SessionSlot]:
        """Rebuilds the slot list and clamps the position if the workout shrank."""
        slots = build_slots(self.workout)
        if not self.is_complete and self.current_index >= len(slots):
            self.current_index = max(0, len(slots) - 1)
        return slots

    def current_slot(self) -> Optional[SessionSlot]:
        if self.workout is None:
            return None
        slots = self.slots()
        if self.current_index < len(slots):
            return slots[self.current_index]
        return None

    def next_slot(self) -> Optional[SessionSlot]:
        if self.workout is None:
            return None
        slots = self.slots()
        if self.current_index + 1 < len(slots):
            return slots[self.current_index + 1]
        return None

    def rest_owed_after(self, slot: Optional[SessionSlot]) -> int:
        """Seconds of rest owed once `slot` is done (0 means move straight on)."""
        if slot is None or slot.is_final:
            return 0
        if slot.superset is not None and not slot.superset.is_last_exercise(slot.exercise):
            # Rest is charged once per round, after its last exercise
            return 0
        rest = max(0, slot.rest_time)
        if rest and slot.is_last_set_of_exercise and not self.show_last_set_rest_time:
            return 0
        return rest

    # --- Transitions ---

    def advance(self):
        """Moves to the next slot; leaving the final slot completes the session."""
        if self.workout is None or self.is_complete:
            return
        slot = self.current_slot()
        if slot is not None and slot.is_final:
            self.is_complete = True
        self.current_index += 1
        self.is_resting = False

    def regress(self) -> bool:
        """Moves back one slot, dropping any rest in progress. Returns True if moved."""
        if self.workout is None or self.is_complete or self.current_index == 0:
            return False
        self.is_resting = False
        self.current_index -= 1
        return True

    def begin_rest(self) -> int:
        """Enters resting for the current slot with a fresh timer id; returns the duration."""
        rest = self.rest_owed_after(self.current_slot())
        if rest <= 0:
            return 0
        self.is_resting = True
        self.timer_id = new_timer_id()
        return rest

    def set_done(self) -> int:
        """Handles "set done". Returns the rest owed (0 when the session advanced)."""
        if self.workout is None or self.is_complete:
            return 0
        if self.is_resting:
            self.advance()
            return 0
        rest = self.begin_rest()
        if rest == 0:
            self.advance()
        return rest

    def skip_rest(self) -> bool:
        if not self.is_resting:
            return False
        self.advance()
        return True

    def navigate_next(self):
        """Leaves a rest early or moves on to the next slot, never past the end."""
        if self.workout is None:
            return
        if self.is_resting or self.current_index < len(self.slots()):
            self.advance()
