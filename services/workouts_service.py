import logging

from core.models import DEFAULT_EXERCISE_REST, DEFAULT_SUPERSET_REST
from core.timeutil import today_str
from core.types import OwnerType
from repos import items_repo, workouts_repo, settings_repo
from repos.settings_repo import ALLOW_MULTIPLE_WORKOUTS_PER_DAY

logger = logging.getLogger(__name__)

class ValidationError(Exception):
    pass

class WorkoutError(Exception):
    pass

def validate_set_data(reps, weight):
    if reps is not None and reps < 1:
        raise ValidationError("Reps must be at least 1.")
    if weight is not None and weight < 0:
        raise ValidationError("Weight cannot be negative.")

def validate_rest_time(rest_time):
    if rest_time is None or rest_time < 0:
        raise ValidationError("Rest time cannot be negative.")

def _check_day_is_free(date_str):
    if settings_repo.get_bool(ALLOW_MULTIPLE_WORKOUTS_PER_DAY):
        return
    if workouts_repo.get_workouts_on(date_str):
        raise WorkoutError(
            "A workout already exists for this day. Enable multiple workouts per day in Settings."
        )

def create_workout(date_str=None, name=None):
    date_str = date_str or today_str()
    _check_day_is_free(date_str)
    name = name.strip() if name and name.strip() else None
    return workouts_repo.create_workout(date_str, name)

def copy_workout_to_today(workout_id):
    """Deep-copies a workout (items, supersets, sets) onto today's date."""
    source = workouts_repo.get_workout(workout_id)
    if not source:
        raise WorkoutError("Workout not found.")
    today = today_str()
    _check_day_is_free(today)
    new_id = workouts_repo.create_workout(today, source.name)
    items_repo.copy_items(source.items, OwnerType.WORKOUT, new_id)
    logger.info("Copied workout %s to today as %s", workout_id, new_id)
    return new_id

def prefill_from_history(definition_id):
    """Rest time and (reps, weight) pairs of the latest logged instance of a definition."""
    previous = workouts_repo.latest_exercise_for_definition(definition_id)
    if previous is None:
        return DEFAULT_EXERCISE_REST, []
    return previous.rest_time, [(s.reps, s.weight) for s in previous.ordered_sets()]

def add_exercises(owner_type, owner_id, definition_ids, as_superset=False,
                  superset_rest=DEFAULT_SUPERSET_REST):
    """Adds definitions as individual exercises, or together as one new superset."""
    if not definition_ids:
        return []
    if as_superset:
        validate_rest_time(superset_rest)
        exercises = []
        for definition_id in definition_ids:
            rest, sets = prefill_from_history(definition_id)
            exercises.append((definition_id, rest, sets))
        item_id, _ = items_repo.add_superset_item(owner_type, owner_id, exercises, rest_time=superset_rest)
        return [item_id]

    item_ids = []
    for definition_id in definition_ids:
        rest, sets = prefill_from_history(definition_id)
        item_ids.append(items_repo.add_exercise_item(owner_type, owner_id, definition_id, rest, sets))
    return item_ids

def add_exercise_to_superset(superset_id, definition_id):
    rest, sets = prefill_from_history(definition_id)
    return items_repo.add_exercise_to_superset(superset_id, definition_id, rest, sets)

def add_set(exercise_id, reps, weight):
    validate_set_data(reps, weight)
    return items_repo.add_set(exercise_id, reps, weight)

def update_set(set_id, reps, weight):
    validate_set_data(reps, weight)
    items_repo.update_set(set_id, reps, weight)

def update_exercise(exercise_id, rest_time, notes=None):
    validate_rest_time(rest_time)
    items_repo.update_exercise(exercise_id, rest_time, notes)

def update_superset(superset_id, rest_time, notes=None):
    validate_rest_time(rest_time)
    items_repo.update_superset(superset_id, rest_time, notes)

def rename_workout(workout_id, name):
    workouts_repo.rename_workout(workout_id, name.strip() if name and name.strip() else None)

# Pass-through methods
def get_workout(workout_id):
    return workouts_repo.get_workout(workout_id)

def get_all_workouts():
    return workouts_repo.get_all_workouts()

def delete_workout(workout_id):
    return workouts_repo.delete_workout(workout_id)

def delete_set(set_id):
    return items_repo.delete_set(set_id)

def delete_item(item_id):
    return items_repo.delete_item(item_id)

def remove_exercise(exercise_id):
    return items_repo.remove_exercise(exercise_id)

def reorder_items(owner_type, owner_id, new_order_ids):
    return items_repo.reorder_items(owner_type, owner_id, new_order_ids)

def move_item(owner_type, owner_id, item_ids, index, offset):
    """Swaps the item at `index` with its neighbour at `index + offset`."""
    target = index + offset
    if not 0 <= target < len(item_ids):
        return
    order = list(item_ids)
    order[index], order[target] = order[target], order[index]
    items_repo.reorder_items(owner_type, owner_id, order)
