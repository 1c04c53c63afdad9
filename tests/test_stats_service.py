import os
import sys
import datetime
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from library import ExerciseLibrary
from models import (
    ExerciseInstance,
    ExerciseType,
    LibraryExercise,
    Period,
    SetRecord,
    WorkoutSession,
)
from stats_service import DAY_MS, StatisticsService, date_label

NOW = int(datetime.datetime(2024, 5, 15, 12, 0).timestamp() * 1000)


def working(n: int, weight: str = "100", reps: str = "10") -> list:
    return [SetRecord(weight=weight, reps=reps, done=True) for _ in range(n)]


def session(days_ago: float, *exercises, fatigue: str = "3") -> WorkoutSession:
    start = int(NOW - days_ago * DAY_MS)
    return WorkoutSession(
        id=start,
        start_time=start,
        fatigue=fatigue,
        exercises=[ExerciseInstance(exercise_id=eid, sets=sets) for eid, sets in exercises],
    )


class StatisticsServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.library = ExerciseLibrary(
            [
                LibraryExercise(id=1, name="Bench", type=ExerciseType.COMPOUND, muscle="Pectoraux", equipment="BB"),
                LibraryExercise(id=2, name="DB Bench", type=ExerciseType.COMPOUND, muscle="Pectoraux", equipment="DB"),
                LibraryExercise(id=11, name="Row", type=ExerciseType.COMPOUND, muscle="Dos", equipment="CB"),
                LibraryExercise(id=60, name="Calf Raise", type=ExerciseType.ISOLATION, muscle="Mollets", equipment="XX"),
                LibraryExercise(id=70, name="Plank", type=ExerciseType.STATIC, muscle="Abdos", equipment="BW"),
                LibraryExercise(id=80, name="Run", type=ExerciseType.CARDIO, muscle="Cardio", equipment=""),
                LibraryExercise(id=40, name="Legacy Squat", type=ExerciseType.COMPOUND, muscle="Jambes", equipment="BB"),
            ]
        )
        self.stats = StatisticsService(self.library, clock=lambda: NOW)

    def test_relevant_history_filters_and_sorts(self) -> None:
        history = [session(1, (1, working(1))), session(3, (1, working(1))), session(10, (1, working(1)))]
        week = self.stats.relevant_history(history, "7d")
        self.assertEqual(len(week), 2)
        self.assertLess(week[0].start_time, week[1].start_time)
        self.assertEqual(len(self.stats.relevant_history(history, Period.MONTH)), 3)

    def test_unknown_period_falls_back_to_week(self) -> None:
        history = [session(1, (1, working(1))), session(10, (1, working(1)))]
        self.assertEqual(len(self.stats.relevant_history(history, "bogus")), 1)

    def test_warmup_and_undone_sets_are_ignored(self) -> None:
        sets = [
            SetRecord(weight="100", reps="10", done=True, is_warmup=True),
            SetRecord(weight="100", reps="10", done=False),
        ]
        history = [session(1, (1, sets), (70, list(sets)))]
        overview = self.stats.overview(history, "7d")
        self.assertEqual(overview["total_sets"], 0)
        self.assertEqual(overview["total_tonnage"], 0)
        self.assertTrue(all(row["avg_sets"] == 0 for row in self.stats.weekly_volume(history, "7d")))
        self.assertTrue(all(row["value"] == 0 for row in self.stats.equipment_distribution(history, "7d")))
        self.assertEqual(self.stats.exercise_series(history, 1, "1rm", "7d"), [])
        self.assertEqual(self.stats.volume_fatigue(history, "7d")[0]["volume"], 0)

    def test_overview(self) -> None:
        history = [
            session(1, (1, working(3, "100", "10")), (80, working(2, "10", "5"))),
            session(2, (70, working(2, "20", "60")), (999, working(1, "50", "10"))),
        ]
        overview = self.stats.overview(history, "7d")
        self.assertEqual(overview["total_sessions"], 2)
        self.assertEqual(overview["total_sets"], 8)
        # 3000 from bench plus 500 from the unresolved exercise
        self.assertEqual(overview["total_tonnage"], 4)

    def test_empty_history(self) -> None:
        self.assertEqual(
            self.stats.overview([], "30d"),
            {"total_sessions": 0, "total_sets": 0, "total_tonnage": 0},
        )
        self.assertEqual(self.stats.volume_fatigue([], "30d"), [])
        self.assertEqual(self.stats.equipment_distribution([], "30d"), [])
        self.assertEqual(self.stats.exercise_series([], 1, "max", "30d"), [])

    def test_volume_fatigue(self) -> None:
        first = session(2, (1, working(4)), fatigue="")
        second = session(1, (1, working(2)), fatigue="5")
        data = self.stats.volume_fatigue([second, first], "7d")
        self.assertEqual(
            data,
            [
                {"date": date_label(first.start_time), "volume": 4, "fatigue": 3},
                {"date": date_label(second.start_time), "volume": 2, "fatigue": 5},
            ],
        )

    def test_weekly_volume_averaging(self) -> None:
        history = [
            session(2, (1, working(4))),
            session(9, (1, working(4))),
            session(16, (1, working(3))),
            session(23, (1, working(3))),
        ]
        rows = {r["real_name"]: r for r in self.stats.weekly_volume(history, "30d", "muscle")}
        self.assertEqual(rows["Pectoraux"]["avg_sets"], round(14 / 4 * 10) / 10)
        self.assertEqual(rows["Pectoraux"]["name"], "PEC")

    def test_weekly_volume_order_and_filters(self) -> None:
        history = [session(1, (60, working(2)), (1, working(3)))]
        rows = self.stats.weekly_volume(history, "7d", "muscle")
        names = [r["real_name"] for r in rows]
        self.assertEqual(
            names,
            ["Pectoraux", "Dos", "Quadriceps", "Ischios", "Fessiers", "Épaules", "Bras", "Abdos", "Mollets"],
        )
        self.assertNotIn("Jambes", names)
        self.assertEqual(rows[-1]["avg_sets"], 2)

        history.append(session(2, (40, working(5))))
        names = [r["real_name"] for r in self.stats.weekly_volume(history, "7d", "muscle")]
        self.assertEqual(names.index("Jambes"), 5)

    def test_weekly_volume_by_type(self) -> None:
        history = [session(1, (1, working(3)), (70, working(2)))]
        rows = self.stats.weekly_volume(history, "7d", "type")
        self.assertEqual(
            [r["real_name"] for r in rows],
            ["Polyarticulaire", "Isolation", "Cardio", "Statique"],
        )
        self.assertEqual(rows[0]["name"], "POLY")
        self.assertEqual(rows[0]["avg_sets"], 3)
        self.assertEqual(rows[3]["avg_sets"], 2)

    def test_equipment_distribution(self) -> None:
        history = [
            session(1, (1, working(2)), (2, working(5)), (11, working(3))),
            session(2, (60, working(1)), (80, working(4))),
        ]
        data = self.stats.equipment_distribution(history, "7d")
        self.assertEqual(
            data,
            [
                {"name": "Lib. 1m.", "value": 5},
                {"name": "Poulie", "value": 3},
                {"name": "Lib. 2m.", "value": 2},
                {"name": "Divers", "value": 1},
            ],
        )

    def test_exercise_series_strength(self) -> None:
        older = session(3, (1, working(2, "100", "1")))
        warmup_only = session(2, (1, [SetRecord(weight="60", reps="10", done=True, is_warmup=True)]))
        newer = session(1, (1, working(1, "100", "5") + working(1, "105", "1")))
        history = [newer, warmup_only, older]
        one_rm = self.stats.exercise_series(history, 1, "1rm", "7d")
        self.assertEqual([p["val"] for p in one_rm], [100, 117])
        self.assertEqual(one_rm[0]["date"], date_label(older.start_time))
        self.assertEqual([p["val"] for p in self.stats.exercise_series(history, 1, "max", "7d")], [100, 105])
        self.assertEqual([p["val"] for p in self.stats.exercise_series(history, 1, "volume", "7d")], [2, 2])
        self.assertEqual([p["val"] for p in self.stats.exercise_series(history, 1, "tonnage", "7d")], [200, 605])

    def test_exercise_series_time_based(self) -> None:
        history = [session(1, (70, [
            SetRecord(weight="10", reps="01:30", done=True),
            SetRecord(weight="0", reps="45", done=True),
        ]))]
        self.assertEqual(self.stats.exercise_series(history, 70, "1rm", "7d")[0]["val"], 10)
        self.assertEqual(self.stats.exercise_series(history, 70, "max", "7d")[0]["val"], 90)
        self.assertEqual(self.stats.exercise_series(history, 70, "tonnage", "7d")[0]["val"], 135)

    def test_exercise_series_cardio(self) -> None:
        history = [session(1, (80, [
            SetRecord(weight="8", reps="5", done=True),
            SetRecord(weight="10", reps="3.5", done=True),
        ]))]
        self.assertEqual(self.stats.exercise_series(history, 80, "1rm", "7d")[0]["val"], 10)
        self.assertEqual(self.stats.exercise_series(history, 80, "max", "7d")[0]["val"], 5)
        self.assertEqual(self.stats.exercise_series(history, 80, "tonnage", "7d")[0]["val"], 8.5)


if __name__ == "__main__":
    unittest.main()
