from __future__ import annotations
import datetime
import logging
import time
from typing import Callable, Dict, Iterable, List, Optional

from library import (
    LEGACY_LEGS,
    MUSCLE_ORDER,
    TYPE_ORDER,
    ExerciseLibrary,
    equipment_category,
)
from models import (
    DetailMetric,
    ExerciseInstance,
    LibraryExercise,
    Period,
    SetRecord,
    VolumeMode,
    WorkoutSession,
)
from tools import MathTools

logger = logging.getLogger(__name__)

DAY_MS = 24 * 3600 * 1000


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


def date_label(timestamp_ms: int) -> str:
    """Return a ``dd/mm`` label for an epoch-millisecond timestamp."""
    return datetime.datetime.fromtimestamp(timestamp_ms / 1000).strftime("%d/%m")


def set_tonnage(sets: Iterable[SetRecord]) -> float:
    """Sum of weight times reps over ``sets``."""
    return sum(
        MathTools.parse_number(s.weight) * MathTools.parse_number(s.reps)
        for s in sets
    )


class StatisticsService:
    """Compute workout statistics for the analytics views."""

    def __init__(
        self,
        library: ExerciseLibrary,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self.library = library
        self.clock = clock or now_ms

    def _lookup(self, ex: ExerciseInstance) -> Optional[LibraryExercise]:
        return self.library.find_by_id(ex.exercise_id)

    def relevant_history(
        self, history: Iterable[WorkoutSession], period: Period | str = Period.WEEK
    ) -> List[WorkoutSession]:
        """Sessions inside ``period``, oldest first."""
        days = Period.parse(period).days
        cutoff = self.clock() - days * DAY_MS
        sessions = [s for s in history if s.start_time >= cutoff]
        sessions.sort(key=lambda s: s.start_time)
        logger.debug("%d sessions within %d days", len(sessions), days)
        return sessions

    def overview(
        self, history: Iterable[WorkoutSession], period: Period | str = Period.WEEK
    ) -> Dict[str, int]:
        """Return session count, working set count and tonnage in k units."""
        sessions = self.relevant_history(history, period)
        total_sets = 0
        tonnage = 0.0
        for s in sessions:
            for ex in s.exercises:
                sets = ex.working_sets()
                total_sets += len(sets)
                lib = self._lookup(ex)
                if lib is not None and not lib.type.has_tonnage:
                    continue
                tonnage += set_tonnage(sets)
        return {
            "total_sessions": len(sessions),
            "total_sets": total_sets,
            "total_tonnage": MathTools.round_half_up(tonnage / 1000),
        }

    def volume_fatigue(
        self, history: Iterable[WorkoutSession], period: Period | str = Period.WEEK
    ) -> List[Dict[str, object]]:
        """Return set count and fatigue rating per session."""
        result = []
        for s in self.relevant_history(history, period):
            fatigue = int(MathTools.parse_number(s.fatigue)) or 3
            result.append(
                {
                    "date": date_label(s.start_time),
                    "volume": s.working_set_count(),
                    "fatigue": fatigue,
                }
            )
        return result

    def weekly_volume(
        self,
        history: Iterable[WorkoutSession],
        period: Period | str = Period.WEEK,
        mode: VolumeMode | str = VolumeMode.MUSCLE,
    ) -> List[Dict[str, object]]:
        """Return average weekly working sets per muscle or exercise type.

        Canonical rows are always listed, except the legacy ``Jambes`` bucket
        which is hidden while empty. Other keys follow in discovery order.
        """
        period = Period.parse(period)
        mode = VolumeMode.parse(mode)
        by_muscle = mode is VolumeMode.MUSCLE
        order = MUSCLE_ORDER if by_muscle else TYPE_ORDER
        counts: Dict[str, int] = {key: 0 for key in order}
        for s in self.relevant_history(history, period):
            for ex in s.exercises:
                lib = self._lookup(ex)
                if lib is None:
                    continue
                key = lib.muscle if by_muscle else lib.type.value
                counts[key] = counts.get(key, 0) + len(ex.working_sets())

        active = [
            key
            for key, count in counts.items()
            if not (key == LEGACY_LEGS and count == 0)
            and (count > 0 or key in order)
        ]
        active.sort(key=lambda k: order.index(k) if k in order else len(order))
        width = 3 if by_muscle else 4
        return [
            {
                "name": key[:width].upper(),
                "real_name": key,
                "avg_sets": MathTools.round_half_up(counts[key] / period.weeks, 1),
            }
            for key in active
        ]

    def equipment_distribution(
        self, history: Iterable[WorkoutSession], period: Period | str = Period.WEEK
    ) -> List[Dict[str, object]]:
        """Return working sets per equipment category, largest first."""
        counts: Dict[str, int] = {}
        for s in self.relevant_history(history, period):
            for ex in s.exercises:
                lib = self._lookup(ex)
                if lib is None or not lib.equipment:
                    continue
                cat = equipment_category(lib.equipment).value
                counts[cat] = counts.get(cat, 0) + len(ex.working_sets())
        items = [{"name": name, "value": value} for name, value in counts.items()]
        return sorted(items, key=lambda x: x["value"], reverse=True)

    def exercise_series(
        self,
        history: Iterable[WorkoutSession],
        exercise_id: int,
        metric: DetailMetric | str = DetailMetric.ONE_RM,
        period: Period | str = Period.WEEK,
    ) -> List[Dict[str, object]]:
        """Return one metric value per session that trained ``exercise_id``."""
        metric = DetailMetric.parse(metric)
        lib = self.library.find_by_id(exercise_id)
        time_based = lib is not None and lib.type.is_time_based
        cardio = lib is not None and lib.type.is_cardio
        num = MathTools.parse_number
        series = []
        for s in self.relevant_history(history, period):
            ex = s.find_exercise(exercise_id)
            if ex is None:
                continue
            sets = ex.working_sets()
            if not sets:
                continue
            if metric is DetailMetric.VOLUME:
                val = len(sets)
            elif time_based:
                durations = [MathTools.parse_duration(st.reps) for st in sets]
                if metric is DetailMetric.ONE_RM:
                    val = max(num(st.weight) for st in sets)
                elif metric is DetailMetric.MAX:
                    val = max(durations)
                else:
                    val = sum(durations)
            elif cardio:
                if metric is DetailMetric.ONE_RM:
                    val = max(num(st.weight) for st in sets)
                elif metric is DetailMetric.MAX:
                    val = max(num(st.reps) for st in sets)
                else:
                    val = sum(num(st.reps) for st in sets)
            else:
                if metric is DetailMetric.ONE_RM:
                    val = max(MathTools.estimate_1rm(st.weight, st.reps) for st in sets)
                elif metric is DetailMetric.MAX:
                    val = max(num(st.weight) for st in sets)
                else:
                    val = set_tonnage(sets)
            series.append({"date": date_label(s.start_time), "val": val})
        return series
