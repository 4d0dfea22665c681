from db.conn import execute, insert, batch, query_all, query_one
from core.models import Workout, Exercise, SetEntry
from core.types import OwnerType
from repos import items_repo

def _row_to_workout(row):
    return Workout(id=row[0], date=row[1], name=row[2], created_at=row[3])

def create_workout(date_str, name=None):
    """Creates an empty workout and returns its id."""
    return insert("INSERT INTO workouts (date, name) VALUES (?, ?)", (date_str, name))

def get_workout(workout_id):
    """Returns a workout with its full item graph."""
    row = query_one("SELECT id, date, name, created_at FROM workouts WHERE id = ?", (workout_id,))
    if not row:
        return None
    workout = _row_to_workout(row)
    workout.items = items_repo.load_items(OwnerType.WORKOUT, workout_id)
    return workout

def get_all_workouts():
    """Returns workout headers (no items), newest first."""
    rows = query_all("""
        SELECT id, date, name, created_at
        FROM workouts
        ORDER BY date DESC, id DESC
    """)
    return [_row_to_workout(r) for r in rows]

def get_workouts_on(date_str):
    rows = query_all("SELECT id, date, name, created_at FROM workouts WHERE date = ? ORDER BY id", (date_str,))
    return [_row_to_workout(r) for r in rows]

def rename_workout(workout_id, name):
    execute("UPDATE workouts SET name = ? WHERE id = ?", (name, workout_id))

def delete_workout(workout_id):
    """Deletes a workout and its whole item graph."""
    stmts = items_repo.delete_owner_items(OwnerType.WORKOUT, workout_id)
    stmts.append(("DELETE FROM workouts WHERE id = ?", (workout_id,)))
    batch(stmts)

def latest_exercise_for_definition(definition_id):
    """Most recent logged instance of a definition (sets included), or None."""
    row = query_one("""
        SELECT e.id, e.rest_time
        FROM exercises e
        LEFT JOIN supersets ss ON e.superset_id = ss.id
        JOIN items i ON i.id = COALESCE(e.item_id, ss.item_id)
        JOIN workouts w ON i.owner_type = 'WORKOUT' AND i.owner_id = w.id
        WHERE e.definition_id = ?
        ORDER BY w.date DESC, w.id DESC, e.id DESC
        LIMIT 1
    """, (definition_id,))
    if not row:
        return None
    exercise = Exercise(id=row[0], definition=None, rest_time=row[1])
    for s in query_all("""
        SELECT id, order_index, reps, weight FROM sets
        WHERE exercise_id = ? ORDER BY order_index, id
    """, (row[0],)):
        exercise.sets.append(SetEntry(id=s[0], order=s[1], reps=s[2], weight=s[3]))
    return exercise

def definition_history(definition_id, start_date=None, end_date=None):
    """Returns (date, reps, weight) for every logged set of a definition."""
    query = """
        SELECT w.date, s.reps, s.weight
        FROM sets s
        JOIN exercises e ON s.exercise_id = e.id
        LEFT JOIN supersets ss ON e.superset_id = ss.id
        JOIN items i ON i.id = COALESCE(e.item_id, ss.item_id)
        JOIN workouts w ON i.owner_type = 'WORKOUT' AND i.owner_id = w.id
        WHERE e.definition_id = ?
    """
    params = [definition_id]
    if start_date:
        query += " AND w.date >= ?"
        params.append(start_date)
    if end_date:
        query += " AND w.date <= ?"
        params.append(end_date)
    query += " ORDER BY w.date"
    return [(r[0], r[1], r[2]) for r in query_all(query, params)]
