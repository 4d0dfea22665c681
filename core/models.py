"""In-memory workout graph.

Containers own their children in ordered lists; nothing points back up the
tree. Graph nodes compare by identity, the way ORM rows do.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Union

from core.types import ItemKind, MuscleGroup

DEFAULT_EXERCISE_REST = 120
DEFAULT_SUPERSET_REST = 180


@dataclass(eq=False)
class ExerciseDefinition:
    name: str
    muscle_group: str = MuscleGroup.OTHER.value
    notes: Optional[str] = None
    favorite: bool = False
    id: Optional[int] = None


@dataclass(eq=False)
class SetEntry:
    reps: int
    weight: float
    order: int = 0
    id: Optional[int] = None


@dataclass(eq=False)
class Exercise:
    definition: Optional[ExerciseDefinition]
    rest_time: int = DEFAULT_EXERCISE_REST
    order_within_superset: int = 0
    notes: Optional[str] = None
    sets: List[SetEntry] = field(default_factory=list)
    id: Optional[int] = None

    @property
    def name(self) -> str:
        return self.definition.name if self.definition else "Unknown Exercise"

    def ordered_sets(self) -> List[SetEntry]:
        return sorted(self.sets, key=lambda s: s.order)

    def add_set(self, set_entry: SetEntry) -> SetEntry:
        set_entry.order = len(self.sets)
        self.sets.append(set_entry)
        return set_entry


@dataclass(eq=False)
class Superset:
    rest_time: int = DEFAULT_SUPERSET_REST
    notes: Optional[str] = None
    exercises: List[Exercise] = field(default_factory=list)
    id: Optional[int] = None

    def ordered_exercises(self) -> List[Exercise]:
        return sorted(self.exercises, key=lambda e: e.order_within_superset)

    def add_exercise(self, exercise: Exercise) -> Exercise:
        exercise.order_within_superset = len(self.exercises)
        self.exercises.append(exercise)
        return exercise

    def is_last_exercise(self, exercise: Exercise) -> bool:
        ordered = self.ordered_exercises()
        return bool(ordered) and ordered[-1] is exercise


@dataclass(eq=False)
class WorkoutItem:
    """A position in a workout or template holding one exercise or one superset."""
    content: Union[Exercise, Superset]
    order: int = 0
    id: Optional[int] = None

    @property
    def kind(self) -> ItemKind:
        if isinstance(self.content, Superset):
            return ItemKind.SUPERSET
        return ItemKind.EXERCISE

    @property
    def exercise(self) -> Optional[Exercise]:
        return self.content if isinstance(self.content, Exercise) else None

    @property
    def superset(self) -> Optional[Superset]:
        return self.content if isinstance(self.content, Superset) else None

    def exercises(self) -> List[Exercise]:
        if isinstance(self.content, Superset):
            return self.content.ordered_exercises()
        return [self.content]


class ItemContainer:
    """Shared behaviour of workouts and templates."""

    items: List[WorkoutItem]

    def ordered_items(self) -> List[WorkoutItem]:
        return sorted(self.items, key=lambda i: i.order)

    def add_item(self, item: WorkoutItem) -> WorkoutItem:
        item.order = len(self.items)
        self.items.append(item)
        return item

    def all_exercises(self) -> List[Exercise]:
        return [ex for item in self.ordered_items() for ex in item.exercises()]

    def superset_containing(self, exercise: Exercise) -> Optional[Superset]:
        for item in self.items:
            superset = item.superset
            if superset is not None and any(e is exercise for e in superset.exercises):
                return superset
        return None

    def item_containing(self, exercise: Exercise) -> Optional[WorkoutItem]:
        for item in self.items:
            if any(e is exercise for e in item.exercises()):
                return item
        return None


@dataclass(eq=False)
class Workout(ItemContainer):
    date: str
    name: Optional[str] = None
    created_at: Optional[str] = None
    items: List[WorkoutItem] = field(default_factory=list)
    id: Optional[int] = None


@dataclass(eq=False)
class WorkoutTemplate(ItemContainer):
    name: str
    notes: Optional[str] = None
    is_favorite: bool = False
    updated_at: Optional[str] = None
    items: List[WorkoutItem] = field(default_factory=list)
    id: Optional[int] = None
