import logging

from core.types import MuscleGroup
from core.units import capitalize_words
from repos import exercises_repo
from services.workouts_service import ValidationError

logger = logging.getLogger(__name__)

def _clean_name(name):
    return capitalize_words(name) if name and name.strip() else ""

def _check_muscle_group(muscle_group):
    try:
        return MuscleGroup(muscle_group).value
    except ValueError:
        raise ValidationError(f"Unknown muscle group '{muscle_group}'.")

def create_exercise(name, muscle_group=MuscleGroup.OTHER.value, notes=None):
    """Creates a definition; returns its id, or None when the name is blank."""
    clean = _clean_name(name)
    if not clean:
        return None
    if exercises_repo.get_exercise_by_name(clean):
        raise ValidationError(f"An exercise named '{clean}' already exists.")
    notes = notes.strip() if notes and notes.strip() else None
    definition_id = exercises_repo.create_exercise(clean, _check_muscle_group(muscle_group), notes)
    logger.info("Created exercise definition %s (%s)", definition_id, clean)
    return definition_id

def update_exercise(definition_id, name, muscle_group, notes, favorite):
    current = exercises_repo.get_exercise(definition_id)
    if not current:
        raise ValidationError("Exercise not found.")
    clean = _clean_name(name) or current.name
    existing = exercises_repo.get_exercise_by_name(clean)
    if existing and existing.id != definition_id:
        raise ValidationError(f"An exercise named '{clean}' already exists.")
    notes = notes.strip() if notes and notes.strip() else None
    exercises_repo.update_exercise(
        definition_id, clean, _check_muscle_group(muscle_group), notes, bool(favorite)
    )

def search_exercises(text=None):
    return exercises_repo.get_all_exercises((text or "").strip() or None)

def delete_exercise(definition_id):
    logger.info("Deleting exercise definition %s and its instances", definition_id)
    exercises_repo.delete_exercise_with_instances(definition_id)

# Pass-through methods
def get_exercise(definition_id):
    return exercises_repo.get_exercise(definition_id)
