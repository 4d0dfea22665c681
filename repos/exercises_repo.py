from db.conn import execute, insert, batch, query_all, query_one
from core.models import ExerciseDefinition
from core.types import OwnerType
from repos import items_repo

_COLUMNS = "id, name, muscle_group, notes, favorite"

def _row_to_definition(row):
    return ExerciseDefinition(
        id=row[0], name=row[1], muscle_group=row[2], notes=row[3], favorite=bool(row[4])
    )

def get_all_exercises(search=None):
    """Returns exercise definitions ordered by name, optionally filtered by a substring."""
    if search:
        rows = query_all(
            f"SELECT {_COLUMNS} FROM exercise_definitions WHERE LOWER(name) LIKE ? ORDER BY name",
            (f"%{search.lower()}%",),
        )
    else:
        rows = query_all(f"SELECT {_COLUMNS} FROM exercise_definitions ORDER BY name")
    return [_row_to_definition(r) for r in rows]

def get_exercise(definition_id):
    row = query_one(f"SELECT {_COLUMNS} FROM exercise_definitions WHERE id = ?", (definition_id,))
    return _row_to_definition(row) if row else None

def get_exercise_by_name(name):
    row = query_one(
        f"SELECT {_COLUMNS} FROM exercise_definitions WHERE LOWER(name) = LOWER(?)", (name,)
    )
    return _row_to_definition(row) if row else None

def create_exercise(name, muscle_group="other", notes=None):
    """Creates a new exercise definition."""
    return insert(
        "INSERT INTO exercise_definitions (name, muscle_group, notes) VALUES (?, ?, ?)",
        (name, muscle_group, notes),
    )

def update_exercise(definition_id, name, muscle_group, notes, favorite):
    execute("""
        UPDATE exercise_definitions
        SET name = ?, muscle_group = ?, notes = ?, favorite = ?
        WHERE id = ?
    """, (name, muscle_group, notes, favorite, definition_id))

def _owners_using(definition_id):
    rows = query_all("""
        SELECT DISTINCT i.owner_type, i.owner_id
        FROM exercises e
        LEFT JOIN supersets ss ON e.superset_id = ss.id
        JOIN items i ON i.id = COALESCE(e.item_id, ss.item_id)
        WHERE e.definition_id = ?
    """, (definition_id,))
    return [(OwnerType(r[0]), r[1]) for r in rows]

def delete_exercise_with_instances(definition_id):
    """Deletes a definition together with every exercise that uses it.

    Single-exercise items and supersets left empty are removed as well.
    """
    owners = _owners_using(definition_id)
    touched_supersets = [r[0] for r in query_all(
        "SELECT DISTINCT superset_id FROM exercises WHERE definition_id = ? AND superset_id IS NOT NULL",
        (definition_id,),
    )]

    stmts = [
        ("DELETE FROM sets WHERE exercise_id IN (SELECT id FROM exercises WHERE definition_id = ?)",
         (definition_id,)),
        ("DELETE FROM exercises WHERE definition_id = ?", (definition_id,)),
    ]
    stmts += items_repo.cascade_delete_statements("""
        (kind = 'EXERCISE' AND id NOT IN (SELECT item_id FROM exercises WHERE item_id IS NOT NULL))
        OR (kind = 'SUPERSET' AND id NOT IN (
            SELECT ss.item_id FROM supersets ss JOIN exercises e ON e.superset_id = ss.id))
    """, ())
    stmts.append(("DELETE FROM exercise_definitions WHERE id = ?", (definition_id,)))
    batch(stmts)

    for owner_type, owner_id in owners:
        items_repo.renumber_items(owner_type, owner_id)
    for superset_id in touched_supersets:
        items_repo.renumber_superset(superset_id)
