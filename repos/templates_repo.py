from db.conn import execute, insert, batch, query_all, query_one
from core.models import WorkoutTemplate
from core.types import OwnerType
from core.timeutil import now_iso
from repos import items_repo

def _row_to_template(row):
    return WorkoutTemplate(
        id=row[0], name=row[1], notes=row[2], is_favorite=bool(row[3]), updated_at=row[4]
    )

def create_template(name, notes=None):
    """Creates a new, empty workout template."""
    return insert(
        "INSERT INTO templates (name, notes, updated_at) VALUES (?, ?, ?)",
        (name, notes, now_iso()),
    )

def get_template(template_id):
    """Returns a template with its full item graph."""
    row = query_one(
        "SELECT id, name, notes, is_favorite, updated_at FROM templates WHERE id = ?",
        (template_id,),
    )
    if not row:
        return None
    template = _row_to_template(row)
    template.items = items_repo.load_items(OwnerType.TEMPLATE, template_id)
    return template

def get_all_templates():
    """Returns template headers, most recently updated first."""
    rows = query_all("""
        SELECT id, name, notes, is_favorite, updated_at
        FROM templates
        ORDER BY updated_at DESC, id DESC
    """)
    return [_row_to_template(r) for r in rows]

def update_template(template_id, name, notes, is_favorite):
    execute("""
        UPDATE templates SET name = ?, notes = ?, is_favorite = ?, updated_at = ?
        WHERE id = ?
    """, (name, notes, is_favorite, now_iso(), template_id))

def touch_template(template_id):
    execute("UPDATE templates SET updated_at = ? WHERE id = ?", (now_iso(), template_id))

def delete_template(template_id):
    """Deletes a template and its whole item graph."""
    stmts = items_repo.delete_owner_items(OwnerType.TEMPLATE, template_id)
    stmts.append(("DELETE FROM templates WHERE id = ?", (template_id,)))
    batch(stmts)
