"""Per-exercise progress over a period: best set per workout date."""
from dataclasses import dataclass
from enum import Enum

from core.timeutil import today_str, subtract_months
from core.units import weight_value
from repos import workouts_repo

Y_PADDING = 0.75


class Period(str, Enum):
    MONTH = "Month"
    THREE_MONTHS = "3 Months"
    YEAR = "Year"
    ALL_TIME = "All Time"

    @property
    def months(self):
        return {"Month": 1, "3 Months": 3, "Year": 12}.get(self.value)

    def start_date(self, today=None):
        """First date included in the period, or None for all time."""
        if self.months is None:
            return None
        return subtract_months(today or today_str(), self.months)


@dataclass
class PerformancePoint:
    date: str
    weight: float
    reps: int


def performance_points(definition_id, period=Period.MONTH, today=None):
    """One point per workout date holding that date's heaviest set, oldest first."""
    today = today or today_str()
    history = workouts_repo.definition_history(
        definition_id, start_date=period.start_date(today), end_date=today
    )
    best = {}
    for date, reps, weight in history:
        current = best.get(date)
        if current is None or weight > current.weight:
            best[date] = PerformancePoint(date, weight, reps)
    return [best[d] for d in sorted(best)]

def percent_change(points):
    if not points or points[0].weight == 0:
        return None
    first, last = points[0].weight, points[-1].weight
    return (last - first) / first * 100

def y_domain(points, in_lbs=False):
    """(low, high) chart bounds in the display unit, padded by 75 % of the spread."""
    values = [weight_value(p.weight, in_lbs) for p in points]
    low = min(values, default=0.0)
    # 1 kg (about 2.2 lbs) when there is no data
    high = max(values, default=2.2 if in_lbs else 1.0)
    padding = (high - low) * Y_PADDING
    return max(0.0, low - padding), high + padding
