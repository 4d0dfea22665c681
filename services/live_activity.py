"""Rest countdown surface (the sidebar stand-in for a lock-screen widget)."""
import datetime
from dataclasses import dataclass
from typing import Optional


@dataclass
class RestCountdownContent:
    display_weight_in_lbs: bool
    user_accent_color: str
    exercise: str
    set: int
    total_sets: int
    set_for_current_exercise: int
    sets_for_current_exercise: int
    reps: int
    weight: float
    start_time: datetime.datetime
    end_time: datetime.datetime
    rest_time: int
    is_resting: bool
    next_exercise: Optional[str] = None
    next_reps: Optional[int] = None
    next_weight: Optional[float] = None
    set_for_next_exercise: Optional[int] = None
    sets_for_next_exercise: Optional[int] = None


class RestCountdownActivity:
    """Remembers the latest payload pushed by the session."""

    def __init__(self):
        self.content = None
        self.is_running = False
        self.updates = 0

    def start(self, content):
        self.content = content
        self.is_running = True
        self.updates = 0

    def update(self, content):
        if not self.is_running:
            return
        self.content = content
        self.updates += 1

    def end(self):
        self.is_running = False
        self.content = None
