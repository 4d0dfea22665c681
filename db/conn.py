import libsql_client
from libsql_client import Statement

from core.config import get_db_url, get_db_auth_token

def get_conn():
    """Creates and returns a new database connection."""
    return libsql_client.create_client_sync(get_db_url(), auth_token=get_db_auth_token())

def execute(query, params=()):
    """Executes a write statement and commits it."""
    # Use batch for robustness against 'result' KeyError on non-SELECTs
    with get_conn() as client:
        client.batch([Statement(query, params)])

def insert(query, params=()):
    """Executes an INSERT and returns the new row id."""
    with get_conn() as client:
        result = client.batch([Statement(query, params)])[0]
        return result.last_insert_rowid

def batch(statements):
    """Executes (query, params) pairs atomically on a single connection."""
    stmts = [Statement(query, params) for query, params in statements]
    if not stmts:
        return []
    with get_conn() as client:
        return client.batch(stmts)

def query_all(query, params=()):
    """Executes a query and returns all rows."""
    with get_conn() as client:
        result = client.execute(query, params)
        return result.rows

def query_one(query, params=()):
    """Executes a query and returns a single row."""
    with get_conn() as client:
        result = client.execute(query, params)
        if result.rows:
            return result.rows[0]
        return None

def placeholders(values):
    return ','.join(['?'] * len(values))
