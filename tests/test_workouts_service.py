"""Workout persistence and editing against a temporary database."""
import pytest

from core.timeutil import today_str
from core.types import ItemKind, OwnerType
from repos import settings_repo, workouts_repo
from repos.settings_repo import ALLOW_MULTIPLE_WORKOUTS_PER_DAY
from services import exercises_service, workouts_service
from services.workouts_service import ValidationError, WorkoutError


@pytest.fixture
def bench(db):
    return exercises_service.create_exercise("bench press", "chest")


@pytest.fixture
def row(db):
    return exercises_service.create_exercise("barbell row", "back")


def _items(workout_id):
    return workouts_repo.get_workout(workout_id).ordered_items()


def test_create_and_list_newest_first(db):
    older = workouts_service.create_workout("2025-04-01")
    newer = workouts_service.create_workout("2025-04-03", "  Push  ")

    workouts = workouts_service.get_all_workouts()

    assert [w.id for w in workouts] == [newer, older]
    assert workouts[0].name == "Push"
    assert workouts[1].name is None


def test_one_workout_per_day_unless_enabled(db):
    workouts_service.create_workout("2025-04-03")

    with pytest.raises(WorkoutError):
        workouts_service.create_workout("2025-04-03")

    settings_repo.set_bool(ALLOW_MULTIPLE_WORKOUTS_PER_DAY, True)
    workouts_service.create_workout("2025-04-03")
    assert len(workouts_repo.get_workouts_on("2025-04-03")) == 2


def test_add_exercises_individually_and_as_superset(db, bench, row):
    wid = workouts_service.create_workout("2025-04-03")

    workouts_service.add_exercises(OwnerType.WORKOUT, wid, [bench])
    workouts_service.add_exercises(OwnerType.WORKOUT, wid, [bench, row], as_superset=True)

    items = _items(wid)
    assert [i.kind for i in items] == [ItemKind.EXERCISE, ItemKind.SUPERSET]
    assert items[0].exercise.name == "Bench Press"
    assert items[0].exercise.rest_time == 120
    assert items[0].exercise.sets == []
    superset = items[1].superset
    assert superset.rest_time == 180
    assert [e.name for e in superset.ordered_exercises()] == ["Bench Press", "Barbell Row"]


def test_new_exercise_is_prefilled_from_latest_instance(db, bench):
    first = workouts_service.create_workout("2025-04-01")
    item_id = workouts_service.add_exercises(OwnerType.WORKOUT, first, [bench])[0]
    exercise = _items(first)[0].exercise
    workouts_service.update_exercise(exercise.id, 90)
    workouts_service.add_set(exercise.id, 8, 80.0)
    workouts_service.add_set(exercise.id, 6, 85.0)
    assert item_id == _items(first)[0].id

    second = workouts_service.create_workout("2025-04-03")
    workouts_service.add_exercises(OwnerType.WORKOUT, second, [bench])

    copied = _items(second)[0].exercise
    assert copied.rest_time == 90
    assert [(s.reps, s.weight) for s in copied.ordered_sets()] == [(8, 80.0), (6, 85.0)]


def test_set_validation(db, bench):
    wid = workouts_service.create_workout("2025-04-03")
    workouts_service.add_exercises(OwnerType.WORKOUT, wid, [bench])
    exercise = _items(wid)[0].exercise

    with pytest.raises(ValidationError):
        workouts_service.add_set(exercise.id, 0, 50.0)
    with pytest.raises(ValidationError):
        workouts_service.add_set(exercise.id, 5, -1.0)
    with pytest.raises(ValidationError):
        workouts_service.update_exercise(exercise.id, -10)


def test_delete_set_renumbers(db, bench):
    wid = workouts_service.create_workout("2025-04-03")
    workouts_service.add_exercises(OwnerType.WORKOUT, wid, [bench])
    exercise = _items(wid)[0].exercise
    ids = [workouts_service.add_set(exercise.id, reps, 50.0) for reps in (10, 9, 8)]

    workouts_service.delete_set(ids[0])

    sets = _items(wid)[0].exercise.ordered_sets()
    assert [(s.order, s.reps) for s in sets] == [(0, 9), (1, 8)]


def test_delete_and_reorder_items(db, bench, row):
    wid = workouts_service.create_workout("2025-04-03")
    first, second = workouts_service.add_exercises(OwnerType.WORKOUT, wid, [bench, row])
    third = workouts_service.add_exercises(OwnerType.WORKOUT, wid, [bench, row], as_superset=True)[0]

    workouts_service.move_item(OwnerType.WORKOUT, wid, [first, second, third], 0, 1)
    assert [i.id for i in _items(wid)] == [second, first, third]

    workouts_service.delete_item(first)
    items = _items(wid)
    assert [(i.id, i.order) for i in items] == [(second, 0), (third, 1)]


def test_removing_last_superset_exercise_removes_item(db, bench, row):
    wid = workouts_service.create_workout("2025-04-03")
    workouts_service.add_exercises(OwnerType.WORKOUT, wid, [bench, row], as_superset=True)
    superset = _items(wid)[0].superset
    first, second = superset.ordered_exercises()

    workouts_service.remove_exercise(first.id)
    remaining = _items(wid)[0].superset.ordered_exercises()
    assert [(e.name, e.order_within_superset) for e in remaining] == [("Barbell Row", 0)]

    workouts_service.remove_exercise(second.id)
    assert _items(wid) == []


def test_add_exercise_to_existing_superset(db, bench, row):
    wid = workouts_service.create_workout("2025-04-03")
    workouts_service.add_exercises(OwnerType.WORKOUT, wid, [bench, row], as_superset=True)
    superset = _items(wid)[0].superset
    squat = exercises_service.create_exercise("squat", "legs")

    workouts_service.add_exercise_to_superset(superset.id, squat)

    names = [e.name for e in _items(wid)[0].superset.ordered_exercises()]
    assert names == ["Bench Press", "Barbell Row", "Squat"]


def test_copy_to_today_is_deep(db, bench, row):
    source = workouts_service.create_workout("2025-04-01", "Push")
    workouts_service.add_exercises(OwnerType.WORKOUT, source, [bench])
    workouts_service.add_exercises(OwnerType.WORKOUT, source, [bench, row], as_superset=True)
    exercise = _items(source)[0].exercise
    workouts_service.add_set(exercise.id, 10, 60.0)

    copy_id = workouts_service.copy_workout_to_today(source)

    copy = workouts_repo.get_workout(copy_id)
    assert copy.date == today_str()
    assert copy.name == "Push"
    items = copy.ordered_items()
    assert [i.kind for i in items] == [ItemKind.EXERCISE, ItemKind.SUPERSET]
    assert [(s.reps, s.weight) for s in items[0].exercise.sets] == [(10, 60.0)]
    assert items[0].exercise.id != exercise.id

    with pytest.raises(WorkoutError):
        workouts_service.copy_workout_to_today(source)


def test_delete_workout_removes_graph(db, bench, row):
    wid = workouts_service.create_workout("2025-04-03")
    workouts_service.add_exercises(OwnerType.WORKOUT, wid, [bench, row], as_superset=True)
    exercise = _items(wid)[0].superset.ordered_exercises()[0]
    workouts_service.add_set(exercise.id, 5, 100.0)

    workouts_service.delete_workout(wid)

    assert workouts_service.get_workout(wid) is None
    assert workouts_repo.definition_history(bench) == []
    from db.conn import query_one
    for table in ("items", "supersets", "exercises", "sets"):
        assert query_one(f"SELECT COUNT(*) FROM {table}")[0] == 0


def test_rename(db):
    wid = workouts_service.create_workout("2025-04-03", "Push")

    workouts_service.rename_workout(wid, "  ")

    assert workouts_service.get_workout(wid).name is None
