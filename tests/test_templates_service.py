"""Template management against a temporary database."""
import pytest

from core.timeutil import today_str
from core.types import ItemKind, OwnerType
from repos import workouts_repo
from services import exercises_service, templates_service, workouts_service
from services.templates_service import TemplateError
from services.workouts_service import ValidationError, WorkoutError


@pytest.fixture
def definitions(db):
    return (
        exercises_service.create_exercise("bench press", "chest"),
        exercises_service.create_exercise("barbell row", "back"),
    )


def test_create_requires_name(db):
    with pytest.raises(ValidationError):
        templates_service.create_template("   ")

    tid = templates_service.create_template("  Push Day ", "  heavy ")
    template = templates_service.get_template(tid)
    assert template.name == "Push Day"
    assert template.notes == "heavy"
    assert template.items == []


def test_update_keeps_name_when_empty(db):
    tid = templates_service.create_template("Push Day")

    templates_service.update_template(tid, "", "notes", True)

    template = templates_service.get_template(tid)
    assert template.name == "Push Day"
    assert template.notes == "notes"
    assert template.is_favorite is True

    with pytest.raises(TemplateError):
        templates_service.update_template(9999, "x", None, False)


def test_create_from_workout_copies_items(db, definitions):
    bench, row = definitions
    wid = workouts_service.create_workout("2025-04-03")
    workouts_service.add_exercises(OwnerType.WORKOUT, wid, [bench])
    workouts_service.add_exercises(OwnerType.WORKOUT, wid, [bench, row], as_superset=True)
    exercise = workouts_repo.get_workout(wid).ordered_items()[0].exercise
    workouts_service.add_set(exercise.id, 10, 60.0)

    tid = templates_service.create_template_from_workout(wid, "Push")

    items = templates_service.get_template(tid).ordered_items()
    assert [i.kind for i in items] == [ItemKind.EXERCISE, ItemKind.SUPERSET]
    assert [(s.reps, s.weight) for s in items[0].exercise.sets] == [(10, 60.0)]

    with pytest.raises(TemplateError):
        templates_service.create_template_from_workout(9999, "Missing")


def test_duplicate(db, definitions):
    tid = templates_service.create_template("Pull")
    templates_service.add_exercises(tid, list(definitions), as_superset=True)

    copy_id = templates_service.duplicate_template(tid)

    copy = templates_service.get_template(copy_id)
    assert copy.name == "Pull Copy"
    assert len(copy.items) == 1
    assert len(copy.items[0].superset.exercises) == 2
    assert copy.items[0].id != templates_service.get_template(tid).items[0].id


def test_instantiate_workout(db, definitions):
    tid = templates_service.create_template("Pull")
    templates_service.add_exercises(tid, [definitions[1]])

    wid = templates_service.instantiate_workout(tid)

    workout = workouts_repo.get_workout(wid)
    assert workout.date == today_str()
    assert workout.name == "Pull"
    assert workout.ordered_items()[0].exercise.name == "Barbell Row"

    # The multiple-per-day rule applies to instantiation too
    with pytest.raises(WorkoutError):
        templates_service.instantiate_workout(tid)

    other_day = templates_service.instantiate_workout(tid, "2025-01-01")
    assert workouts_repo.get_workout(other_day).date == "2025-01-01"


def test_list_most_recently_updated_first(db, definitions):
    first = templates_service.create_template("A")
    second = templates_service.create_template("B")
    # ISO timestamps can tie within the same microsecond; force an order
    from db.conn import execute
    execute("UPDATE templates SET updated_at = ? WHERE id = ?", ("2025-01-01T00:00:00", second))
    execute("UPDATE templates SET updated_at = ? WHERE id = ?", ("2025-01-02T00:00:00", first))

    assert [t.id for t in templates_service.get_all_templates()] == [first, second]

    templates_service.add_exercises(second, [definitions[0]])

    assert [t.id for t in templates_service.get_all_templates()] == [second, first]


def test_delete_template_removes_graph(db, definitions):
    tid = templates_service.create_template("Pull")
    templates_service.add_exercises(tid, list(definitions), as_superset=True)

    templates_service.delete_template(tid)

    assert templates_service.get_template(tid) is None
    from db.conn import query_one
    assert query_one("SELECT COUNT(*) FROM items")[0] == 0
    assert query_one("SELECT COUNT(*) FROM exercises")[0] == 0
