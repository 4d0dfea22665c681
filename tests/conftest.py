"""
Test fixtures for the workout log.

Pure engine tests build workouts in memory; repository and service tests get
a fresh SQLite file through the `db` fixture.
"""

import datetime
import sys
from pathlib import Path

import pytest
import pytz

# Repo root, so tests can do `import core...`, `import services...`
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.models import ExerciseDefinition, Exercise, SetEntry, Superset, Workout, WorkoutItem


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest.fixture
def db(tmp_path, monkeypatch):
    """Points the app at a temporary database and applies migrations."""
    monkeypatch.setenv("WORKOUT_DB_URL", f"file:{tmp_path / 'test.db'}")
    monkeypatch.setenv("WORKOUT_TIMEZONE", "America/New_York")
    from db.migrations import migrate
    migrate()
    return tmp_path / "test.db"


# ---------------------------------------------------------------------------
# In-memory workouts
# ---------------------------------------------------------------------------


def _exercise(name, set_count, rest_time=120, weight=50.0):
    ex = Exercise(definition=ExerciseDefinition(name=name), rest_time=rest_time)
    for i in range(set_count):
        ex.add_set(SetEntry(reps=10, weight=weight + i))
    return ex


@pytest.fixture
def make_workout():
    """Builds a workout from a layout such as [3, [3, 2], 1].

    An int is a single exercise with that many sets; a list is a superset
    whose exercises have those set counts.
    """
    def _make(layout, exercise_rest=120, superset_rest=180):
        workout = Workout(date="2025-04-03")
        for n, entry in enumerate(layout):
            if isinstance(entry, list):
                superset = Superset(rest_time=superset_rest)
                for m, count in enumerate(entry):
                    superset.add_exercise(_exercise(f"Ex {n}{chr(97 + m)}", count, exercise_rest))
                workout.add_item(WorkoutItem(content=superset))
            else:
                workout.add_item(WorkoutItem(content=_exercise(f"Ex {n}", entry, exercise_rest)))
        return workout
    return _make


class FakeClock:
    """Settable UTC clock."""

    def __init__(self, start=None):
        self.now = start or datetime.datetime(2025, 4, 3, 12, 0, 0, tzinfo=pytz.utc)

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += datetime.timedelta(seconds=seconds)


@pytest.fixture
def clock():
    return FakeClock()


# ---------------------------------------------------------------------------
# Timer store
# ---------------------------------------------------------------------------


class MemoryStore(dict):
    """Dictionary-backed stand-in for the settings-table key/value store."""

    def set(self, key, value):
        self[key] = value

    def delete(self, key):
        self.pop(key, None)

    def keys_with_prefix(self, prefix):
        return [k for k in self if k.startswith(prefix)]


@pytest.fixture
def store():
    return MemoryStore()
