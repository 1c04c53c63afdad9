from typing import List, Optional

from library import ExerciseLibrary
from models import (
    ExerciseInstance,
    ExerciseType,
    LibraryExercise,
    SetRecord,
    WorkoutSession,
)
from stats_service import DAY_MS, now_ms

COMPOUND = ExerciseType.COMPOUND
ISOLATION = ExerciseType.ISOLATION

_CATALOG = [
    (1, "Barbell Bench Press", COMPOUND, "Pectoraux", "BB"),
    (2, "Dumbbell Bench Press", COMPOUND, "Pectoraux", "DB"),
    (3, "Incline Bench Press", COMPOUND, "Pectoraux", "BB"),
    (4, "Incline Dumbbell Press", COMPOUND, "Pectoraux", "DB"),
    (5, "Cable Fly", ISOLATION, "Pectoraux", "CB"),
    (10, "Pull-up", COMPOUND, "Dos", "BW"),
    (11, "Barbell Row", COMPOUND, "Dos", "BB"),
    (12, "Lat Pulldown", COMPOUND, "Dos", "CB"),
    (20, "Deadlift", COMPOUND, "Dos", "BB"),
    (30, "Back Squat", COMPOUND, "Quadriceps", "BB"),
    (31, "Leg Press", COMPOUND, "Quadriceps", "EM"),
    (32, "Romanian Deadlift", COMPOUND, "Ischios", "BB"),
    (33, "Hip Thrust", COMPOUND, "Fessiers", "BB"),
    (34, "Leg Curl", ISOLATION, "Ischios", "EM"),
    (40, "Trap Bar Deadlift", COMPOUND, "Jambes", "TB"),
    (50, "Overhead Press", COMPOUND, "Épaules", "BB"),
    (60, "EZ Curl", ISOLATION, "Bras", "EZ"),
    (70, "Plank", ExerciseType.STATIC, "Abdos", "BW"),
    (80, "Running", ExerciseType.CARDIO, "Cardio", "OT"),
    (90, "Hamstring Stretch", ExerciseType.STRETCH, "Ischios", "BW"),
]

# (exercise id, base weight, reps, working sets)
_TEMPLATES = {
    "Push": [(1, 80.0, "8", 3), (50, 40.0, "10", 3), (5, 15.0, "12", 3)],
    "Pull": [(20, 120.0, "5", 3), (11, 60.0, "10", 3), (10, 0.0, "8", 3)],
    "Legs": [(30, 100.0, "6", 3), (32, 80.0, "10", 3), (70, 0.0, "01:30", 2), (80, 0.0, "5", 1)],
}


def sample_library() -> ExerciseLibrary:
    return ExerciseLibrary(
        LibraryExercise(id=i, name=n, type=t, muscle=m, equipment=e)
        for i, n, t, m, e in _CATALOG
    )


def sample_history(now: Optional[int] = None, weeks: int = 4) -> List[WorkoutSession]:
    """Generate a push/pull/legs history, most recent session first."""
    now = now_ms() if now is None else now
    names = list(_TEMPLATES)
    sessions: List[WorkoutSession] = []
    count = weeks * 7 // 2
    for n in range(count):
        start = now - (count - n) * 2 * DAY_MS
        name = names[n % len(names)]
        step = 2.5 * (n // len(names))
        exercises = []
        for ex_id, base, reps, working in _TEMPLATES[name]:
            weight = f"{base + step:g}" if base else "0"
            sets = [SetRecord(weight=weight, reps=reps, rir="2", done=True) for _ in range(working)]
            if base:
                sets.insert(0, SetRecord(weight=f"{base / 2:g}", reps="10", done=True, is_warmup=True))
            exercises.append(ExerciseInstance(exercise_id=ex_id, rest=120, sets=sets))
        sessions.append(
            WorkoutSession(
                id=start,
                program_name="PPL",
                session_name=name,
                start_time=start,
                end_time=start + 3600 * 1000,
                body_weight=f"{80 - n * 0.1:.1f}",
                fatigue=str(2 + n % 3),
                exercises=exercises,
            )
        )
    sessions.reverse()
    return sessions


if __name__ == "__main__":
    for s in sample_history():
        print(s.session_name, s.start_time, s.working_set_count())
