import os
import logging

from libsql_client import LibsqlError

from db.conn import execute, query_one

logger = logging.getLogger(__name__)

SCHEMA_FILE = os.path.join(os.path.dirname(__file__), 'schema.sql')

def _add_column(table, column_sql):
    try:
        execute(f"ALTER TABLE {table} ADD COLUMN {column_sql}")
    except LibsqlError as e:
        # Column might exist if partially applied
        if "duplicate column" not in str(e).lower():
            raise
        logger.info("Column already present on %s: %s", table, column_sql)

def current_version():
    row = query_one("SELECT MAX(version) FROM schema_version")
    return row[0] if row and row[0] is not None else 0

def migrate():
    """Applies database migrations."""
    logger.debug("Checking for migrations...")

    # Ensure schema_version table exists
    execute("""
        CREATE TABLE IF NOT EXISTS schema_version (
            version INTEGER PRIMARY KEY,
            applied_at DATETIME DEFAULT CURRENT_TIMESTAMP
        );
    """)

    version = current_version()
    logger.debug("Current schema version: %s", version)

    if version < 1:
        logger.info("Applying migration v1...")
        with open(SCHEMA_FILE, 'r') as f:
            schema_sql = f.read()

        # One statement per call; drop comment lines first so they don't hide a statement
        lines = [l for l in schema_sql.splitlines() if not l.strip().startswith('--')]
        statements = [s.strip() for s in '\n'.join(lines).split(';') if s.strip()]

        for statement in statements:
            execute(statement)

        execute("INSERT INTO schema_version (version) VALUES (1)")
        logger.info("Migration v1 applied successfully.")

    if version < 2:
        logger.info("Applying migration v2...")
        _add_column("exercise_definitions", "favorite INTEGER NOT NULL DEFAULT 0")
        _add_column("templates", "is_favorite INTEGER NOT NULL DEFAULT 0")
        execute("INSERT INTO schema_version (version) VALUES (2)")
        logger.info("Migration v2 applied successfully.")
    else:
        logger.debug("Database is up to date.")
