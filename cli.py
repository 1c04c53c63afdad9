import argparse
import json
import logging
from typing import Optional

from config import YamlConfig
from dashboard_indexer import DashboardIndexer
from insight_service import InsightService
from localization import translator
from seed_sample_data import sample_history, sample_library
from stats_service import StatisticsService
from tools import MathTools, WeightConverter


def one_rm(weight: str, reps: str) -> dict:
    est = MathTools.estimate_1rm(weight, reps)
    return {"est_1rm": est, "loads": dict(MathTools.percentage_loads(est))}


def plates(target: str, bar: Optional[str] = None) -> list[float]:
    return MathTools.plate_breakdown(target, bar if bar is not None else MathTools.DEFAULT_BAR)


def convert(weight: float, to: str) -> float:
    if to == "barbell":
        return MathTools.round_half_up(WeightConverter.dumbbell_to_barbell(weight))
    return MathTools.round_half_up(WeightConverter.barbell_to_dumbbell(weight))


def demo_report(period: str = "7d", now: Optional[int] = None) -> dict:
    """Run every analytics view over generated demo data."""
    library = sample_library()
    indexer = DashboardIndexer(library, sample_history(now), clock=(lambda: now) if now is not None else None)
    stats = StatisticsService(library, clock=indexer.clock)
    insights = InsightService(library, clock=indexer.clock)
    history = indexer.history
    return {
        "dashboard": indexer.stats.model_dump(mode="json"),
        "overview": stats.overview(history, period),
        "weekly_volume": stats.weekly_volume(history, period),
        "equipment": stats.equipment_distribution(history, period),
        "sbd": insights.sbd_radar(history),
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Workout analytics utilities")
    parser.add_argument("--settings", default="settings.yaml")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="cmd", required=True)

    rm = sub.add_parser("1rm")
    rm.add_argument("--weight", required=True)
    rm.add_argument("--reps", required=True)

    pl = sub.add_parser("plates")
    pl.add_argument("--target", required=True)
    pl.add_argument("--bar", default=None)

    conv = sub.add_parser("convert")
    conv.add_argument("--weight", type=float, required=True)
    conv.add_argument("--to", choices=["barbell", "dumbbell"], required=True)

    dur = sub.add_parser("duration")
    dur.add_argument("value")

    demo = sub.add_parser("demo")
    demo.add_argument("--period", choices=["7d", "30d", "90d"], default=None)

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    cfg = YamlConfig(args.settings)
    translator.set_language(cfg.get("language"))

    if args.cmd == "1rm":
        print(json.dumps(one_rm(args.weight, args.reps)))
    elif args.cmd == "plates":
        print(json.dumps(plates(args.target, args.bar or str(cfg.get("bar_weight")))))
    elif args.cmd == "convert":
        print(f"{args.weight} -> {convert(args.weight, args.to)} ({args.to})")
    elif args.cmd == "duration":
        seconds = MathTools.parse_duration(args.value)
        print(f"{seconds}s = {MathTools.format_duration(seconds)}")
    elif args.cmd == "demo":
        period = args.period or cfg.get("default_period")
        print(json.dumps(demo_report(period), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
