from db.conn import execute, query_one, query_all

DISPLAY_WEIGHT_IN_LBS = "display_weight_in_lbs"
ALLOW_MULTIPLE_WORKOUTS_PER_DAY = "allow_multiple_workouts_per_day"
SHOW_LAST_SET_REST_TIME = "show_last_set_rest_time"
USER_ACCENT_COLOR = "user_accent_color"

DEFAULTS = {
    DISPLAY_WEIGHT_IN_LBS: False,
    ALLOW_MULTIPLE_WORKOUTS_PER_DAY: False,
    SHOW_LAST_SET_REST_TIME: True,
    USER_ACCENT_COLOR: "#FFD60A",
}

def get_setting(key, default=None):
    row = query_one("SELECT value FROM settings WHERE key = ?", (key,))
    if row is None:
        return default
    return row[0]

def set_setting(key, value):
    """Creates or updates a setting."""
    if get_setting(key) is not None:
        execute("UPDATE settings SET value = ? WHERE key = ?", (value, key))
    else:
        execute("INSERT INTO settings (key, value) VALUES (?, ?)", (key, value))

def delete_setting(key):
    execute("DELETE FROM settings WHERE key = ?", (key,))

def get_bool(key):
    value = get_setting(key)
    if value is None:
        return DEFAULTS.get(key, False)
    return value == "1"

def set_bool(key, flag):
    set_setting(key, "1" if flag else "0")

def load_settings():
    """Returns every user preference with defaults filled in."""
    stored = {r[0]: r[1] for r in query_all("SELECT key, value FROM settings")}
    result = {}
    for key, default in DEFAULTS.items():
        if key not in stored:
            result[key] = default
        elif isinstance(default, bool):
            result[key] = stored[key] == "1"
        else:
            result[key] = stored[key]
    return result


class SettingsStore:
    """Key/value store backed by the settings table (used for rest timer end times)."""

    def get(self, key):
        return get_setting(key)

    def set(self, key, value):
        set_setting(key, value)

    def delete(self, key):
        delete_setting(key)

    def keys_with_prefix(self, prefix):
        rows = query_all("SELECT key FROM settings WHERE key LIKE ?", (prefix + "%",))
        return [r[0] for r in rows]
