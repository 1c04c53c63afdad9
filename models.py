from __future__ import annotations
import logging
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)


class ExerciseType(str, Enum):
    """Library exercise categories."""

    COMPOUND = "Polyarticulaire"
    ISOLATION = "Isolation"
    CARDIO = "Cardio"
    STATIC = "Statique"
    STRETCH = "Étirement"

    @property
    def is_time_based(self) -> bool:
        return self in (ExerciseType.STATIC, ExerciseType.STRETCH)

    @property
    def is_cardio(self) -> bool:
        return self is ExerciseType.CARDIO

    @property
    def has_tonnage(self) -> bool:
        return not (self.is_cardio or self.is_time_based)


class SessionMode(str, Enum):
    ACTIVE = "active"
    LOG = "log"


class InsightLevel(str, Enum):
    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"
    SUCCESS = "success"


class Period(str, Enum):
    """Analytics time window selector."""

    WEEK = "7d"
    MONTH = "30d"
    QUARTER = "90d"

    @property
    def days(self) -> int:
        return {"7d": 7, "30d": 30, "90d": 90}[self.value]

    @property
    def weeks(self) -> int:
        return {"7d": 1, "30d": 4, "90d": 12}[self.value]

    @classmethod
    def parse(cls, value: "Period | str") -> "Period":
        try:
            return cls(value)
        except ValueError:
            logger.warning("Unknown period %r, using 7d", value)
            return cls.WEEK


class DetailMetric(str, Enum):
    ONE_RM = "1rm"
    MAX = "max"
    VOLUME = "volume"
    TONNAGE = "tonnage"

    @classmethod
    def parse(cls, value: "DetailMetric | str") -> "DetailMetric":
        try:
            return cls(value)
        except ValueError:
            logger.warning("Unknown metric %r, using 1rm", value)
            return cls.ONE_RM


class VolumeMode(str, Enum):
    MUSCLE = "muscle"
    TYPE = "type"

    @classmethod
    def parse(cls, value: "VolumeMode | str") -> "VolumeMode":
        try:
            return cls(value)
        except ValueError:
            logger.warning("Unknown volume mode %r, using muscle", value)
            return cls.MUSCLE


class _Record(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


class SetRecord(_Record):
    """One performed set. ``reps`` holds a duration for timed exercises."""

    weight: str = ""
    reps: str = ""
    rir: Optional[str] = None
    done: bool = False
    is_warmup: bool = False
    notes: Optional[str] = None
    completed_at: Optional[int] = None

    @property
    def counts(self) -> bool:
        """Whether the set contributes to aggregates."""
        return self.done and not self.is_warmup


class ExerciseInstance(_Record):
    exercise_id: int
    target: str = ""
    rest: int = 0
    is_bonus: bool = False
    notes: str = ""
    sets: List[SetRecord] = Field(default_factory=list)
    target_rir: Optional[str] = None

    def working_sets(self) -> List[SetRecord]:
        return [s for s in self.sets if s.counts]


class WorkoutSession(_Record):
    id: int
    program_name: str = ""
    session_name: str = ""
    start_time: int
    end_time: Optional[int] = None
    body_weight: str = ""
    fatigue: str = "3"
    exercises: List[ExerciseInstance] = Field(default_factory=list)
    mode: SessionMode = SessionMode.LOG

    def working_set_count(self) -> int:
        return sum(len(e.working_sets()) for e in self.exercises)

    def find_exercise(self, exercise_id: int) -> Optional[ExerciseInstance]:
        for ex in self.exercises:
            if ex.exercise_id == exercise_id:
                return ex
        return None


class LibraryExercise(_Record):
    id: int
    name: str
    type: ExerciseType
    muscle: str
    equipment: str = ""
    is_favorite: bool = False
    is_archived: bool = False


class Insight(_Record):
    id: str
    title: str
    text: str
    level: InsightLevel
    priority: int


class DayVolume(_Record):
    day: str
    val: int = 0


class DashboardStats(_Record):
    """Cached dashboard snapshot derived from history and library."""

    volume_data: List[DayVolume]
    weekly_sets: int
    insights: List[Insight]
    month_session_count: int
    has_new_pr: bool
    last_updated: int
