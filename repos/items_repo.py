"""Item graph storage shared by workouts and templates.

An owner (workout or template) has ordered items; each item holds one
exercise or one superset; supersets hold exercises; exercises hold sets.
"""
from db.conn import execute, insert, batch, query_all, query_one, placeholders
from core.models import (
    ExerciseDefinition, SetEntry, Exercise, Superset, WorkoutItem,
    DEFAULT_EXERCISE_REST, DEFAULT_SUPERSET_REST,
)
from core.types import ItemKind, OwnerType


def _owner_value(owner_type):
    return OwnerType(owner_type).value


# --- Loading ---

def load_items(owner_type, owner_id):
    """Returns the ordered WorkoutItem graph for an owner."""
    item_rows = query_all("""
        SELECT id, order_index, kind
        FROM items
        WHERE owner_type = ? AND owner_id = ?
        ORDER BY order_index, id
    """, (_owner_value(owner_type), owner_id))
    if not item_rows:
        return []

    item_ids = [r[0] for r in item_rows]
    superset_rows = query_all(f"""
        SELECT id, item_id, rest_time, notes
        FROM supersets
        WHERE item_id IN ({placeholders(item_ids)})
    """, item_ids)
    superset_ids = [r[0] for r in superset_rows]

    conditions = [f"e.item_id IN ({placeholders(item_ids)})"]
    params = list(item_ids)
    if superset_ids:
        conditions.append(f"e.superset_id IN ({placeholders(superset_ids)})")
        params += superset_ids

    exercise_rows = query_all(f"""
        SELECT e.id, e.item_id, e.superset_id, e.rest_time, e.order_in_superset, e.notes,
               d.id, d.name, d.muscle_group, d.notes, d.favorite
        FROM exercises e
        LEFT JOIN exercise_definitions d ON e.definition_id = d.id
        WHERE {' OR '.join(conditions)}
        ORDER BY e.order_in_superset, e.id
    """, params)

    definitions = {}
    exercises = {}
    direct = {}
    grouped = {}
    for r in exercise_rows:
        definition = None
        if r[6] is not None:
            definition = definitions.get(r[6])
            if definition is None:
                definition = ExerciseDefinition(
                    id=r[6], name=r[7], muscle_group=r[8], notes=r[9], favorite=bool(r[10])
                )
                definitions[r[6]] = definition
        ex = Exercise(
            id=r[0],
            definition=definition,
            rest_time=r[3],
            order_within_superset=r[4],
            notes=r[5],
        )
        exercises[ex.id] = ex
        if r[1] is not None:
            direct[r[1]] = ex
        else:
            grouped.setdefault(r[2], []).append(ex)

    if exercises:
        ex_ids = list(exercises)
        set_rows = query_all(f"""
            SELECT id, exercise_id, order_index, reps, weight
            FROM sets
            WHERE exercise_id IN ({placeholders(ex_ids)})
            ORDER BY order_index, id
        """, ex_ids)
        for s in set_rows:
            exercises[s[1]].sets.append(SetEntry(id=s[0], order=s[2], reps=s[3], weight=s[4]))

    supersets = {}
    for r in superset_rows:
        supersets[r[1]] = Superset(
            id=r[0], rest_time=r[2], notes=r[3], exercises=grouped.get(r[0], [])
        )

    items = []
    for item_id, order, kind in item_rows:
        content = supersets.get(item_id) if kind == ItemKind.SUPERSET.value else direct.get(item_id)
        if content is None:
            continue
        items.append(WorkoutItem(id=item_id, order=order, content=content))
    return items


def get_item_owner(item_id):
    row = query_one("SELECT owner_type, owner_id FROM items WHERE id = ?", (item_id,))
    if row is None:
        return None
    return OwnerType(row[0]), row[1]


# --- Inserting ---

def _next_item_order(owner_type, owner_id):
    row = query_one(
        "SELECT MAX(order_index) FROM items WHERE owner_type = ? AND owner_id = ?",
        (_owner_value(owner_type), owner_id),
    )
    return 0 if row is None or row[0] is None else row[0] + 1


def _insert_item(owner_type, owner_id, kind):
    order = _next_item_order(owner_type, owner_id)
    return insert("""
        INSERT INTO items (owner_type, owner_id, order_index, kind)
        VALUES (?, ?, ?, ?)
    """, (_owner_value(owner_type), owner_id, order, ItemKind(kind).value))


def _insert_exercise(definition_id, rest_time, sets=(), item_id=None, superset_id=None,
                     order_in_superset=0, notes=None):
    exercise_id = insert("""
        INSERT INTO exercises (item_id, superset_id, definition_id, rest_time, order_in_superset, notes)
        VALUES (?, ?, ?, ?, ?, ?)
    """, (item_id, superset_id, definition_id, rest_time, order_in_superset, notes))
    stmts = [
        ("INSERT INTO sets (exercise_id, order_index, reps, weight) VALUES (?, ?, ?, ?)",
         (exercise_id, index, reps, weight))
        for index, (reps, weight) in enumerate(sets)
    ]
    batch(stmts)
    return exercise_id


def add_exercise_item(owner_type, owner_id, definition_id, rest_time=DEFAULT_EXERCISE_REST,
                      sets=(), notes=None):
    """Appends a single-exercise item. `sets` is a sequence of (reps, weight)."""
    item_id = _insert_item(owner_type, owner_id, ItemKind.EXERCISE)
    _insert_exercise(definition_id, rest_time, sets, item_id=item_id, notes=notes)
    return item_id


def add_superset_item(owner_type, owner_id, exercises, rest_time=DEFAULT_SUPERSET_REST, notes=None):
    """Appends a superset item.

    `exercises` is a sequence of (definition_id, rest_time, sets) in superset order.
    Returns (item_id, superset_id).
    """
    item_id = _insert_item(owner_type, owner_id, ItemKind.SUPERSET)
    superset_id = insert(
        "INSERT INTO supersets (item_id, rest_time, notes) VALUES (?, ?, ?)",
        (item_id, rest_time, notes),
    )
    for index, (definition_id, ex_rest, sets) in enumerate(exercises):
        _insert_exercise(definition_id, ex_rest, sets, superset_id=superset_id, order_in_superset=index)
    return item_id, superset_id


def add_exercise_to_superset(superset_id, definition_id, rest_time=DEFAULT_EXERCISE_REST, sets=()):
    row = query_one("SELECT MAX(order_in_superset) FROM exercises WHERE superset_id = ?", (superset_id,))
    next_order = 0 if row is None or row[0] is None else row[0] + 1
    return _insert_exercise(definition_id, rest_time, sets, superset_id=superset_id,
                            order_in_superset=next_order)


def copy_items(items, owner_type, owner_id):
    """Deep-copies an in-memory item list under a new owner, keeping order."""
    for item in sorted(items, key=lambda i: i.order):
        if item.kind == ItemKind.SUPERSET:
            superset = item.superset
            add_superset_item(
                owner_type, owner_id,
                [(_definition_id(ex), ex.rest_time, _set_pairs(ex)) for ex in superset.ordered_exercises()],
                rest_time=superset.rest_time,
                notes=superset.notes,
            )
        else:
            ex = item.exercise
            add_exercise_item(owner_type, owner_id, _definition_id(ex), ex.rest_time,
                              _set_pairs(ex), notes=ex.notes)


def _definition_id(exercise):
    return exercise.definition.id if exercise.definition else None


def _set_pairs(exercise):
    return [(s.reps, s.weight) for s in exercise.ordered_sets()]


# --- Sets ---

def add_set(exercise_id, reps, weight):
    row = query_one("SELECT MAX(order_index) FROM sets WHERE exercise_id = ?", (exercise_id,))
    next_order = 0 if row is None or row[0] is None else row[0] + 1
    return insert(
        "INSERT INTO sets (exercise_id, order_index, reps, weight) VALUES (?, ?, ?, ?)",
        (exercise_id, next_order, reps, weight),
    )


def update_set(set_id, reps, weight):
    execute("UPDATE sets SET reps = ?, weight = ? WHERE id = ?", (reps, weight, set_id))


def delete_set(set_id):
    """Deletes a set and re-normalizes set order."""
    row = query_one("SELECT exercise_id FROM sets WHERE id = ?", (set_id,))
    if not row:
        return
    execute("DELETE FROM sets WHERE id = ?", (set_id,))
    _renumber("sets", "order_index", "exercise_id = ?", (row[0],))


# --- Exercises / supersets ---

def update_exercise(exercise_id, rest_time, notes=None):
    execute("UPDATE exercises SET rest_time = ?, notes = ? WHERE id = ?", (rest_time, notes, exercise_id))


def update_superset(superset_id, rest_time, notes=None):
    execute("UPDATE supersets SET rest_time = ?, notes = ? WHERE id = ?", (rest_time, notes, superset_id))


def remove_exercise(exercise_id):
    """Removes an exercise; its item goes too when nothing is left in it."""
    row = query_one("SELECT item_id, superset_id FROM exercises WHERE id = ?", (exercise_id,))
    if not row:
        return
    item_id, superset_id = row
    if item_id is not None:
        delete_item(item_id)
        return
    batch([
        ("DELETE FROM sets WHERE exercise_id = ?", (exercise_id,)),
        ("DELETE FROM exercises WHERE id = ?", (exercise_id,)),
    ])
    remaining = query_one("SELECT COUNT(*) FROM exercises WHERE superset_id = ?", (superset_id,))
    if remaining[0] == 0:
        ss = query_one("SELECT item_id FROM supersets WHERE id = ?", (superset_id,))
        delete_item(ss[0])
    else:
        renumber_superset(superset_id)


def renumber_superset(superset_id):
    _renumber("exercises", "order_in_superset", "superset_id = ?", (superset_id,))


# --- Items ---

def cascade_delete_statements(where_sql, params):
    """Statements deleting every item matching `where_sql` and everything below it."""
    params = tuple(params)
    item_ids = f"SELECT id FROM items WHERE {where_sql}"
    superset_ids = f"SELECT id FROM supersets WHERE item_id IN ({item_ids})"
    exercise_match = f"item_id IN ({item_ids}) OR superset_id IN ({superset_ids})"
    return [
        (f"DELETE FROM sets WHERE exercise_id IN (SELECT id FROM exercises WHERE {exercise_match})", params * 2),
        (f"DELETE FROM exercises WHERE {exercise_match}", params * 2),
        (f"DELETE FROM supersets WHERE item_id IN ({item_ids})", params),
        (f"DELETE FROM items WHERE {where_sql}", params),
    ]


def delete_item(item_id):
    """Deletes an item with its contents and re-normalizes item order."""
    owner = get_item_owner(item_id)
    if owner is None:
        return
    batch(cascade_delete_statements("id = ?", (item_id,)))
    renumber_items(*owner)


def delete_owner_items(owner_type, owner_id):
    return cascade_delete_statements("owner_type = ? AND owner_id = ?", (_owner_value(owner_type), owner_id))


def renumber_items(owner_type, owner_id):
    _renumber("items", "order_index", "owner_type = ? AND owner_id = ?", (_owner_value(owner_type), owner_id))


def reorder_items(owner_type, owner_id, new_order_ids):
    """Rewrites item order to follow `new_order_ids`."""
    batch([
        ("UPDATE items SET order_index = ? WHERE id = ? AND owner_type = ? AND owner_id = ?",
         (index, item_id, _owner_value(owner_type), owner_id))
        for index, item_id in enumerate(new_order_ids)
    ])


def _renumber(table, column, where_sql, params):
    rows = query_all(f"SELECT id FROM {table} WHERE {where_sql} ORDER BY {column}, id", params)
    batch([
        (f"UPDATE {table} SET {column} = ? WHERE id = ?", (index, r[0]))
        for index, r in enumerate(rows)
    ])
