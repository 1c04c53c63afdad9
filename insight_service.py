from __future__ import annotations
import logging
import unicodedata
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from library import (
    BACK,
    BENCH_IDS,
    CHEST,
    DEADLIFT_IDS,
    GRANULAR_LEGS,
    HAMSTRINGS,
    LEGACY_LEGS,
    PRIMARY_MUSCLES,
    QUADS,
    ExerciseLibrary,
)
from localization import Translator, translator as default_translator
from models import (
    ExerciseType,
    Insight,
    InsightLevel,
    SetRecord,
    WorkoutSession,
)
from stats_service import DAY_MS, now_ms
from tools import MathTools, WeightConverter

logger = logging.getLogger(__name__)

INSIGHT_WINDOW_DAYS = 7
TARGET_WEEKLY_SETS = 10
PUSH_PULL_RATIO = 1.5
QUAD_HAM_RATIO = 2.0
LEGACY_LEGS_DOMINANT = 10
DEFAULT_BODY_WEIGHT = 75.0
SBD_STANDARDS = {"Squat": 2.2, "Bench": 1.7, "Deadlift": 2.8}

PRIORITY_WELCOME = 0
PRIORITY_MISSING = 1
PRIORITY_IMBALANCE = 2
PRIORITY_LOW_VOLUME = 3
PRIORITY_NOTE = 4
PRIORITY_ON_PACE = 5


def _slug(text: str) -> str:
    ascii_text = (
        unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    )
    return ascii_text.lower().replace(" ", "_").replace("-", "_")


class InsightService:
    """Detect personal records and derive training insights from history."""

    def __init__(
        self,
        library: ExerciseLibrary,
        translator: Optional[Translator] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self.library = library
        self.translator = translator or default_translator
        self.clock = clock or now_ms

    def _t(self, key: str, **kwargs: object) -> str:
        text = self.translator.gettext(key)
        return text.format(**kwargs) if kwargs else text

    # ------------------------------------------------------------------
    # Personal records
    # ------------------------------------------------------------------
    @staticmethod
    def _best_performance(sets: Iterable[SetRecord], ex_type: ExerciseType) -> float:
        """Best same-type metric over ``sets`` (distance, hold time or 1RM)."""
        best = 0.0
        for st in sets:
            if ex_type.is_cardio:
                val = MathTools.parse_number(st.reps)
            elif ex_type is ExerciseType.STATIC:
                val = float(MathTools.parse_duration(st.reps))
            else:
                val = MathTools.estimate_1rm(st.weight, st.reps, precise=True)
            if val > best:
                best = val
        return best

    def detect_new_pr(
        self, history: Sequence[WorkoutSession], last_seen_pr: int = 0
    ) -> bool:
        """Return whether the latest session beat an earlier best.

        ``history`` must be ordered most recent first. Only the first exercise
        that qualifies is considered, and an exercise seen for the first time
        never counts.
        """
        if len(history) < 2:
            return False
        latest = history[0]
        previous = history[1:]
        found = False
        for ex in latest.exercises:
            lib = self.library.find_by_id(ex.exercise_id)
            if lib is None or lib.type is ExerciseType.STRETCH:
                continue
            current = self._best_performance(ex.working_sets(), lib.type)
            if current <= 0:
                continue
            prior = 0.0
            for session in previous:
                old = session.find_exercise(ex.exercise_id)
                if old is not None:
                    prior = max(
                        prior, self._best_performance(old.working_sets(), lib.type)
                    )
            if current > prior and prior > 0:
                logger.debug("New record on exercise %s", ex.exercise_id)
                found = True
                break
        if found and last_seen_pr >= latest.start_time:
            return False
        return found

    def exercise_records(
        self, history: Iterable[WorkoutSession], exercise_id: int
    ) -> Dict[str, object]:
        """Return all-time bests and the last performance of an exercise."""
        pr = 0.0
        pr_max = 0.0
        logs: List[WorkoutSession] = []
        for session in history:
            ex = session.find_exercise(exercise_id)
            if ex is None:
                continue
            logs.append(session)
            for st in ex.working_sets():
                pr = max(pr, MathTools.estimate_1rm(st.weight, st.reps))
                pr_max = max(pr_max, MathTools.parse_number(st.weight))

        last_detailed = "-"
        last_e1rm = 0.0
        if logs:
            latest = max(logs, key=lambda s: s.start_time)
            sets = latest.find_exercise(exercise_id).working_sets()
            if sets:
                weights = ",".join(st.weight for st in sets)
                reps = ",".join(st.reps for st in sets)
                rirs = ",".join(st.rir or "-" for st in sets)
                last_detailed = f"{weights} kg x {reps} reps | RIR {rirs}"
                last_e1rm = max(MathTools.estimate_1rm(st.weight, st.reps) for st in sets)
        return {
            "name": self.library.name_of(exercise_id),
            "pr": pr,
            "pr_max": pr_max,
            "last_detailed": last_detailed,
            "last_e1rm": last_e1rm,
        }

    # ------------------------------------------------------------------
    # Relative strength
    # ------------------------------------------------------------------
    @staticmethod
    def _body_weight(history: Iterable[WorkoutSession]) -> float:
        for session in history:
            bw = MathTools.parse_number(session.body_weight)
            if bw > 0:
                return bw
        return DEFAULT_BODY_WEIGHT

    def sbd_radar(self, history: Sequence[WorkoutSession]) -> Dict[str, object]:
        """Score squat, bench and deadlift bests against elite ratios."""
        squat_quad = 0.0
        squat_legs = 0.0
        bench = 0.0
        deadlift = 0.0
        for session in history:
            for ex in session.exercises:
                lib = self.library.find_by_id(ex.exercise_id)
                if lib is None:
                    continue
                sets = ex.working_sets()
                if lib.type is ExerciseType.COMPOUND:
                    for st in sets:
                        est = MathTools.estimate_1rm(st.weight, st.reps, precise=True)
                        if lib.muscle == QUADS:
                            squat_quad = max(squat_quad, est)
                        elif lib.muscle == LEGACY_LEGS:
                            squat_legs = max(squat_legs, est)
                if ex.exercise_id in BENCH_IDS:
                    for st in sets:
                        w = MathTools.parse_number(st.weight)
                        if lib.equipment == "DB":
                            w = WeightConverter.dumbbell_to_barbell(w)
                        bench = max(
                            bench, MathTools.estimate_1rm(w, st.reps, precise=True)
                        )
                elif ex.exercise_id in DEADLIFT_IDS:
                    for st in sets:
                        deadlift = max(
                            deadlift,
                            MathTools.estimate_1rm(st.weight, st.reps, precise=True),
                        )

        squat = squat_quad if squat_quad > 0 else squat_legs
        bw = self._body_weight(history)
        bests = {"Squat": squat, "Bench": bench, "Deadlift": deadlift}
        data = []
        for name, best in bests.items():
            ratio = best / bw
            score = MathTools.round_half_up(ratio / SBD_STANDARDS[name] * 100)
            data.append(
                {
                    "name": name,
                    "value": min(100, score),
                    "display_ratio": MathTools.round_half_up(ratio, 2),
                    "raw": MathTools.round_half_up(best),
                }
            )
        total = sum(d["raw"] for d in data)
        return {
            "data": data,
            "total": total,
            "ratio": MathTools.round_half_up(total / bw, 2),
        }

    # ------------------------------------------------------------------
    # Insights
    # ------------------------------------------------------------------
    def muscle_set_counts(
        self, history: Iterable[WorkoutSession], days: int = INSIGHT_WINDOW_DAYS
    ) -> Dict[str, int]:
        """Working sets per muscle over the trailing ``days``."""
        cutoff = self.clock() - days * DAY_MS
        counts: Dict[str, int] = {}
        for session in history:
            if session.start_time < cutoff:
                continue
            for ex in session.exercises:
                lib = self.library.find_by_id(ex.exercise_id)
                if lib is None:
                    continue
                counts[lib.muscle] = counts.get(lib.muscle, 0) + len(ex.working_sets())
        return counts

    def _insight(
        self, insight_id: str, title: str, text: str, level: InsightLevel, priority: int
    ) -> Insight:
        return Insight(
            id=insight_id, title=title, text=text, level=level, priority=priority
        )

    def build_insights(self, history: Sequence[WorkoutSession]) -> List[Insight]:
        """Return ranked training insights, most urgent first."""
        if not history:
            return [
                self._insight(
                    "welcome",
                    self._t("Bienvenue"),
                    self._t("Commencez votre premier entraînement !"),
                    InsightLevel.INFO,
                    PRIORITY_WELCOME,
                )
            ]

        counts = self.muscle_set_counts(history)
        def vol(muscle: str) -> int:
            return counts.get(muscle, 0)

        insights: List[Insight] = []

        chest, back = vol(CHEST), vol(BACK)
        if back > 0 and chest / back > PUSH_PULL_RATIO:
            insights.append(
                self._insight(
                    "ratio_push_pull",
                    self._t("Déséquilibre"),
                    self._t("Volume Pectoraux > Dos (Ratio > 1.5)."),
                    InsightLevel.WARNING,
                    PRIORITY_IMBALANCE,
                )
            )
        if chest > 0 and back / chest > PUSH_PULL_RATIO:
            insights.append(
                self._insight(
                    "ratio_pull_push",
                    self._t("Déséquilibre"),
                    self._t("Volume Dos > Pectoraux."),
                    InsightLevel.INFO,
                    PRIORITY_NOTE,
                )
            )
        quads, hams = vol(QUADS), vol(HAMSTRINGS)
        if hams > 0 and quads / hams > QUAD_HAM_RATIO:
            insights.append(
                self._insight(
                    "ratio_quad_ham",
                    self._t("Déséquilibre"),
                    self._t("Volume Quadriceps > Ischios (Ratio > 2)."),
                    InsightLevel.WARNING,
                    PRIORITY_IMBALANCE,
                )
            )

        granular = sum(vol(m) for m in GRANULAR_LEGS)
        legacy = vol(LEGACY_LEGS)
        for muscle in PRIMARY_MUSCLES:
            if muscle == LEGACY_LEGS and (granular > 0 or legacy == 0):
                continue
            if muscle in (QUADS, HAMSTRINGS) and legacy > LEGACY_LEGS_DOMINANT:
                continue
            count = vol(muscle)
            if count == 0:
                insights.append(
                    self._insight(
                        f"missing_{_slug(muscle)}",
                        self._t("Muscle Oublié"),
                        self._t("{muscle} : aucune série cette semaine.", muscle=muscle),
                        InsightLevel.DANGER,
                        PRIORITY_MISSING,
                    )
                )
            elif count < TARGET_WEEKLY_SETS:
                insights.append(
                    self._insight(
                        f"low_volume_{_slug(muscle)}",
                        self._t("Volume Faible"),
                        self._t("{muscle} est sous-dosé (< 10 sets/sem).", muscle=muscle),
                        InsightLevel.WARNING,
                        PRIORITY_LOW_VOLUME,
                    )
                )

        if not insights:
            insights.append(
                self._insight(
                    "on_pace",
                    self._t("Bon Rythme"),
                    self._t("Volume d'entraînement équilibré."),
                    InsightLevel.SUCCESS,
                    PRIORITY_ON_PACE,
                )
            )
        insights.sort(key=lambda i: i.priority)
        return insights
