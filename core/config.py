import streamlit as st
import os

DEFAULT_DB_URL = "file:workout.db"
DEFAULT_TIMEZONE = "America/New_York"

def _from_secrets(key):
    try:
        return st.secrets[key]
    except (FileNotFoundError, KeyError):
        return None

def get_config(key, default=None):
    """Retrieves configuration from environment variables or Streamlit secrets."""
    if key in os.environ:
        return os.environ[key]
    value = _from_secrets(key)
    return default if value is None else value

def get_db_url():
    url = get_config("WORKOUT_DB_URL", DEFAULT_DB_URL)
    if url.startswith("libsql://"):
        url = url.replace("libsql://", "https://")
    return url

def get_db_auth_token():
    return get_config("WORKOUT_DB_AUTH_TOKEN")
