from __future__ import annotations
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional

from models import LibraryExercise

UNKNOWN_EXERCISE = "Exercice inconnu"

# Display order of the weekly volume chart.
MUSCLE_ORDER: List[str] = [
    "Pectoraux",
    "Dos",
    "Quadriceps",
    "Ischios",
    "Fessiers",
    "Jambes",
    "Épaules",
    "Bras",
    "Abdos",
]
TYPE_ORDER: List[str] = ["Polyarticulaire", "Isolation", "Cardio", "Statique"]

PRIMARY_MUSCLES: List[str] = ["Pectoraux", "Dos", "Quadriceps", "Ischios", "Jambes"]

CHEST = "Pectoraux"
BACK = "Dos"
QUADS = "Quadriceps"
HAMSTRINGS = "Ischios"
GLUTES = "Fessiers"
LEGACY_LEGS = "Jambes"
GRANULAR_LEGS = (QUADS, HAMSTRINGS, GLUTES)

BENCH_IDS = (1, 2, 3, 4)
DEADLIFT_IDS = (20, 40)


class EquipmentCategory(str, Enum):
    FREE_WEIGHT_TWO_HANDED = "Lib. 2m."
    FREE_WEIGHT_ONE_HANDED = "Lib. 1m."
    MACHINE = "Machine"
    CABLE = "Poulie"
    BODYWEIGHT = "PDC"
    OTHER = "Divers"


EQUIPMENT_CATEGORIES: Dict[str, EquipmentCategory] = {
    "BB": EquipmentCategory.FREE_WEIGHT_TWO_HANDED,
    "EZ": EquipmentCategory.FREE_WEIGHT_TWO_HANDED,
    "TB": EquipmentCategory.FREE_WEIGHT_TWO_HANDED,
    "DB": EquipmentCategory.FREE_WEIGHT_ONE_HANDED,
    "KB": EquipmentCategory.FREE_WEIGHT_ONE_HANDED,
    "PL": EquipmentCategory.FREE_WEIGHT_ONE_HANDED,
    "EM": EquipmentCategory.MACHINE,
    "SM": EquipmentCategory.MACHINE,
    "CB": EquipmentCategory.CABLE,
    "BW": EquipmentCategory.BODYWEIGHT,
    "RB": EquipmentCategory.OTHER,
    "OT": EquipmentCategory.OTHER,
}


def equipment_category(code: str) -> EquipmentCategory:
    """Return the chart category for an equipment ``code``."""
    return EQUIPMENT_CATEGORIES.get(code, EquipmentCategory.OTHER)


class ExerciseLibrary:
    """Read-only id index over the exercise catalog."""

    def __init__(self, exercises: Iterable[LibraryExercise] = ()) -> None:
        self._items: List[LibraryExercise] = list(exercises)
        self._by_id: Dict[int, LibraryExercise] = {}
        for ex in self._items:
            self._by_id.setdefault(ex.id, ex)

    def __iter__(self) -> Iterator[LibraryExercise]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def find_by_id(self, exercise_id: int) -> Optional[LibraryExercise]:
        return self._by_id.get(exercise_id)

    def name_of(self, exercise_id: int) -> str:
        ex = self.find_by_id(exercise_id)
        return ex.name if ex is not None else UNKNOWN_EXERCISE
