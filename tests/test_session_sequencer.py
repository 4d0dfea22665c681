"""Unit tests for workout session progression."""
from core.models import SetEntry
from core.types import SessionPhase
from services.session_sequencer import SessionSequencer, build_slots


def _positions(slots):
    return [(s.item_index, s.exercise_index, s.set_index) for s in slots]


class TestBuildSlots:

    def test_plain_exercises_follow_item_then_set_order(self, make_workout):
        slots = build_slots(make_workout([3, 2]))

        assert len(slots) == 5
        assert _positions(slots) == [(0, 0, 0), (0, 0, 1), (0, 0, 2), (1, 0, 0), (1, 0, 1)]

    def test_superset_rounds_skip_exhausted_exercises(self, make_workout):
        slots = build_slots(make_workout([[3, 2]]))

        assert len(slots) == 5
        assert _positions(slots) == [(0, 0, 0), (0, 1, 0), (0, 0, 1), (0, 1, 1), (0, 0, 2)]
        assert all(s.is_superset for s in slots)

    def test_only_last_slot_is_final(self, make_workout):
        slots = build_slots(make_workout([2, [1, 1]]))

        assert [s.is_final for s in slots] == [False, False, False, True]

    def test_empty_workout(self, make_workout):
        assert build_slots(make_workout([])) == []
        assert build_slots(None) == []

    def test_sets_are_ordered_by_set_order(self, make_workout):
        workout = make_workout([2])
        exercise = workout.items[0].exercise
        exercise.sets.reverse()

        slots = build_slots(workout)

        assert [s.set.order for s in slots] == [0, 1]


class TestRestOwed:

    def test_superset_rest_is_charged_after_last_exercise_of_round(self, make_workout):
        seq = SessionSequencer()
        seq.start(make_workout([[3, 2], 1], superset_rest=90))
        slots = seq.slots()

        assert seq.rest_owed_after(slots[0]) == 0
        assert seq.rest_owed_after(slots[1]) == 90

    def test_final_slot_owes_nothing(self, make_workout):
        seq = SessionSequencer()
        seq.start(make_workout([2]))
        slots = seq.slots()

        assert seq.rest_owed_after(slots[-1]) == 0
        assert seq.rest_owed_after(None) == 0

    def test_plain_exercise_uses_its_rest_time(self, make_workout):
        seq = SessionSequencer()
        seq.start(make_workout([2, 1], exercise_rest=45))

        assert seq.rest_owed_after(seq.slots()[0]) == 45

    def test_last_set_rest_can_be_hidden(self, make_workout):
        seq = SessionSequencer(show_last_set_rest_time=False)
        seq.start(make_workout([2, 1], exercise_rest=60))
        slots = seq.slots()

        assert seq.rest_owed_after(slots[0]) == 60
        assert seq.rest_owed_after(slots[1]) == 0


class TestTransitions:

    def test_phases(self, make_workout):
        seq = SessionSequencer()
        assert seq.phase == SessionPhase.NOT_STARTED

        seq.start(make_workout([2, 1]))
        assert seq.phase == SessionPhase.IN_PROGRESS

        assert seq.set_done() == 120
        assert seq.phase == SessionPhase.RESTING

        assert seq.set_done() == 0
        assert seq.phase == SessionPhase.IN_PROGRESS
        assert seq.current_index == 1

    def test_completing_the_final_slot_finishes_the_session(self, make_workout):
        seq = SessionSequencer()
        seq.start(make_workout([1]))

        assert seq.set_done() == 0
        assert seq.is_complete
        assert seq.phase == SessionPhase.COMPLETE
        assert seq.current_slot() is None

        # Complete is terminal
        seq.set_done()
        seq.navigate_next()
        assert seq.regress() is False
        assert seq.current_index == 1

    def test_begin_rest_uses_a_new_timer_id(self, make_workout):
        seq = SessionSequencer()
        seq.start(make_workout([3]))
        first = seq.timer_id

        seq.begin_rest()

        assert seq.is_resting
        assert seq.timer_id != first

    def test_zero_rest_moves_straight_on(self, make_workout):
        seq = SessionSequencer()
        seq.start(make_workout([2], exercise_rest=0))

        assert seq.set_done() == 0
        assert seq.current_index == 1
        assert not seq.is_resting

    def test_skip_rest(self, make_workout):
        seq = SessionSequencer()
        seq.start(make_workout([2]))

        assert seq.skip_rest() is False
        seq.set_done()
        assert seq.skip_rest() is True
        assert seq.current_index == 1

    def test_regress_drops_rest(self, make_workout):
        seq = SessionSequencer()
        seq.start(make_workout([3]))
        assert seq.regress() is False

        seq.set_done()
        seq.set_done()
        seq.set_done()
        assert seq.is_resting and seq.current_index == 1

        assert seq.regress() is True
        assert seq.current_index == 0
        assert not seq.is_resting

    def test_navigate_next_leaves_rest_and_moves_on(self, make_workout):
        seq = SessionSequencer()
        seq.start(make_workout([3]))
        seq.set_done()

        seq.navigate_next()

        assert seq.current_index == 1
        assert not seq.is_resting

    def test_stop_resets(self, make_workout):
        seq = SessionSequencer()
        seq.start(make_workout([2]))
        seq.set_done()

        seq.stop()

        assert not seq.is_active
        assert seq.current_slot() is None
        assert seq.next_slot() is None
        assert seq.current_index == 0


class TestEditsDuringSession:

    def test_index_is_clamped_when_workout_shrinks(self, make_workout):
        workout = make_workout([5], exercise_rest=0)
        seq = SessionSequencer()
        seq.start(workout)
        for _ in range(4):
            seq.set_done()
        assert seq.current_index == 4

        exercise = workout.items[0].exercise
        exercise.sets = exercise.ordered_sets()[:2]

        assert seq.current_slot().set_index == 1
        assert seq.current_index == 1

    def test_index_is_clamped_when_an_item_is_removed(self, make_workout):
        workout = make_workout([2, 3], exercise_rest=0)
        seq = SessionSequencer()
        seq.start(workout)
        for _ in range(4):
            seq.set_done()
        assert seq.current_index == 4

        workout.items.remove(workout.ordered_items()[1])

        assert len(seq.slots()) == 2
        assert seq.current_index == 1
        assert seq.current_slot().item_index == 0
        assert seq.current_slot().is_final

    def test_added_sets_are_visible_immediately(self, make_workout):
        workout = make_workout([1, 1])
        seq = SessionSequencer()
        seq.start(workout)

        workout.items[0].exercise.add_set(SetEntry(reps=8, weight=60.0))

        assert len(seq.slots()) == 3
        assert seq.next_slot().set.reps == 8

    def test_refresh_keeps_position(self, make_workout):
        seq = SessionSequencer()
        seq.start(make_workout([3]))
        seq.set_done()
        seq.set_done()

        seq.refresh(make_workout([3]))

        assert seq.current_index == 1
        assert seq.current_slot().set_index == 1
