from enum import Enum

class OwnerType(str, Enum):
    WORKOUT = "WORKOUT"
    TEMPLATE = "TEMPLATE"

class ItemKind(str, Enum):
    EXERCISE = "EXERCISE"
    SUPERSET = "SUPERSET"

class MuscleGroup(str, Enum):
    CHEST = "chest"
    BACK = "back"
    SHOULDERS = "shoulders"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    LEGS = "legs"
    GLUTES = "glutes"
    CORE = "core"
    CARDIO = "cardio"
    FULL_BODY = "full body"
    OTHER = "other"

class SessionPhase(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    RESTING = "RESTING"
    COMPLETE = "COMPLETE"
