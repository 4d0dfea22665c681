from db.conn import query_all

TABLES = [
    "exercise_definitions",
    "workouts",
    "templates",
    "items",
    "supersets",
    "exercises",
    "sets",
    "settings",
]

def export_data():
    """Fetches all rows of every data table, keyed by table then column name."""
    data = {}
    for table in TABLES:
        rows = query_all(f"SELECT * FROM {table}")
        data[table] = [r.asdict() for r in rows]
    return data
