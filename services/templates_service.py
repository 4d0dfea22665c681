import logging

from core.types import OwnerType
from repos import items_repo, templates_repo, workouts_repo
from services import workouts_service
from services.workouts_service import ValidationError

logger = logging.getLogger(__name__)

class TemplateError(Exception):
    pass

def validate_template_name(name):
    if not name or not name.strip():
        raise ValidationError("Template name cannot be empty.")

def create_template(name, notes=None):
    validate_template_name(name)
    return templates_repo.create_template(name.strip(), _clean_notes(notes))

def create_template_from_workout(workout_id, name, notes=None):
    """Saves a workout's structure (items, supersets, sets) as a new template."""
    validate_template_name(name)
    workout = workouts_repo.get_workout(workout_id)
    if not workout:
        raise TemplateError("Workout not found.")
    template_id = templates_repo.create_template(name.strip(), _clean_notes(notes))
    items_repo.copy_items(workout.items, OwnerType.TEMPLATE, template_id)
    templates_repo.touch_template(template_id)
    return template_id

def update_template(template_id, name, notes, is_favorite):
    """Updates template info; an empty name keeps the current one."""
    template = templates_repo.get_template(template_id)
    if not template:
        raise TemplateError("Template not found.")
    final_name = name.strip() if name and name.strip() else template.name
    templates_repo.update_template(template_id, final_name, _clean_notes(notes), is_favorite)

def duplicate_template(template_id):
    template = templates_repo.get_template(template_id)
    if not template:
        raise TemplateError("Template not found.")
    copy_id = templates_repo.create_template(f"{template.name} Copy", template.notes)
    items_repo.copy_items(template.items, OwnerType.TEMPLATE, copy_id)
    templates_repo.update_template(copy_id, f"{template.name} Copy", template.notes, template.is_favorite)
    return copy_id

def instantiate_workout(template_id, date_str=None):
    """Creates a workout on `date_str` (default today) from a template."""
    template = templates_repo.get_template(template_id)
    if not template:
        raise TemplateError("Template not found.")
    workout_id = workouts_service.create_workout(date_str, template.name)
    items_repo.copy_items(template.items, OwnerType.WORKOUT, workout_id)
    templates_repo.touch_template(template_id)
    logger.info("Started workout %s from template %s", workout_id, template_id)
    return workout_id

def add_exercises(template_id, definition_ids, as_superset=False):
    item_ids = workouts_service.add_exercises(OwnerType.TEMPLATE, template_id, definition_ids, as_superset)
    templates_repo.touch_template(template_id)
    return item_ids

def delete_item(template_id, item_id):
    items_repo.delete_item(item_id)
    templates_repo.touch_template(template_id)

def reorder_items(template_id, new_order_ids):
    items_repo.reorder_items(OwnerType.TEMPLATE, template_id, new_order_ids)
    templates_repo.touch_template(template_id)

def _clean_notes(notes):
    return notes.strip() if notes and notes.strip() else None

# Pass-through methods
def get_all_templates():
    return templates_repo.get_all_templates()

def get_template(template_id):
    return templates_repo.get_template(template_id)

def delete_template(template_id):
    return templates_repo.delete_template(template_id)

def mark_updated(template_id):
    return templates_repo.touch_template(template_id)
