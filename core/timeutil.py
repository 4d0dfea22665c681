import datetime
import pytz

from core.config import get_config, DEFAULT_TIMEZONE

def get_timezone():
    return pytz.timezone(get_config("WORKOUT_TIMEZONE", DEFAULT_TIMEZONE))

def now_utc():
    """Returns the current aware datetime in UTC."""
    return datetime.datetime.now(pytz.utc)

def now_local():
    """Returns current datetime in the configured timezone."""
    return datetime.datetime.now(get_timezone())

def today_str():
    """Returns current local date as YYYY-MM-DD."""
    return now_local().strftime('%Y-%m-%d')

def now_iso():
    """Returns current datetime in ISO format."""
    return now_local().isoformat()

def parse_date(date_str):
    return datetime.datetime.strptime(date_str, '%Y-%m-%d').date()

def shift_date(date_str, days):
    return (parse_date(date_str) + datetime.timedelta(days=days)).strftime('%Y-%m-%d')

def smart_date_label(date_str, today=None):
    """'Today', 'Yesterday' or a long date such as 'April 3, 2025'."""
    today = today or today_str()
    if date_str == today:
        return "Today"
    if date_str == shift_date(today, -1):
        return "Yesterday"
    d = parse_date(date_str)
    return f"{d.strftime('%B')} {d.day}, {d.year}"

def subtract_months(date_str, months):
    """Same day `months` earlier, clamped to the end of shorter months."""
    d = parse_date(date_str)
    month_index = d.year * 12 + (d.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    # Day 28 exists in every month; walk forward from there
    day = min(d.day, 28)
    candidate = datetime.date(year, month, day)
    while candidate.day < d.day:
        nxt = candidate + datetime.timedelta(days=1)
        if nxt.month != month:
            break
        candidate = nxt
    return candidate.strftime('%Y-%m-%d')

def to_utc_iso(dt):
    return dt.astimezone(pytz.utc).isoformat()

def from_iso(value):
    dt = datetime.datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = pytz.utc.localize(dt)
    return dt
