import math
from typing import List, Sequence, Tuple

import numpy as np


class MathTools:
    """Provides essential mathematical utilities for workout calculations."""

    WATHEN_A: float = 48.8
    WATHEN_B: float = 53.8
    WATHEN_K: float = 0.075
    PLATES: Tuple[float, ...] = (20.0, 10.0, 5.0, 2.5, 1.25)
    DEFAULT_BAR: float = 20.0
    LOAD_PERCENTAGES: Tuple[int, ...] = (90, 80, 70, 60)

    @staticmethod
    def parse_number(value) -> float:
        """Return ``value`` as a float, or 0.0 when it is not numeric."""
        if value is None or isinstance(value, bool):
            return 0.0
        if isinstance(value, (int, float)):
            number = float(value)
        else:
            text = str(value).strip().replace(",", ".")
            try:
                number = float(text)
            except ValueError:
                return 0.0
        if math.isnan(number) or math.isinf(number):
            return 0.0
        return number

    @staticmethod
    def round_half_up(value: float, digits: int = 0) -> float:
        """Round halves upward, the way chart labels are rounded."""
        factor = 10**digits
        rounded = math.floor(value * factor + 0.5) / factor
        return int(rounded) if digits == 0 else rounded

    @classmethod
    def estimate_1rm(cls, weight, reps, precise: bool = False) -> float:
        """Return the estimated one-rep max using the Wathen formula.

        Weight and reps may be raw strings from the log. Anything that does not
        parse to a positive number yields 0. A single rep returns the weight as
        is. The result is rounded to a whole unit unless ``precise`` is set.
        """
        w = cls.parse_number(weight)
        r = cls.parse_number(reps)
        if w <= 0 or r <= 0:
            return 0.0
        if r <= 1:
            return w
        est = w * 100 / (cls.WATHEN_A + cls.WATHEN_B * math.exp(-cls.WATHEN_K * r))
        return est if precise else cls.round_half_up(est)

    @classmethod
    def percentage_loads(
        cls, one_rm, percentages: Sequence[int] = LOAD_PERCENTAGES
    ) -> List[Tuple[int, int]]:
        """Return ``(percent, load)`` pairs for a training max table."""
        base = cls.parse_number(one_rm)
        pct = np.asarray(percentages, dtype=float)
        loads = np.floor(base * pct / 100 + 0.5)
        return [(int(p), int(load)) for p, load in zip(pct, loads)]

    @classmethod
    def parse_duration(cls, value) -> int:
        """Convert ``mm:ss`` or plain seconds to seconds; malformed gives 0."""
        if value is None or isinstance(value, bool):
            return 0
        text = str(value).strip()
        if not text:
            return 0
        if ":" in text:
            parts = text.split(":")
            if len(parts) != 2 or not all(p.strip().isdigit() for p in parts):
                return 0
            minutes, seconds = (int(p) for p in parts)
            return minutes * 60 + seconds
        seconds = cls.parse_number(text)
        return int(seconds) if seconds > 0 else 0

    @classmethod
    def format_duration(cls, seconds) -> str:
        """Format seconds (or a duration string) as ``mm:ss``."""
        if isinstance(seconds, (int, float)) and not isinstance(seconds, bool):
            total = max(0, int(seconds))
        else:
            total = cls.parse_duration(seconds)
        minutes, secs = divmod(total, 60)
        return f"{minutes:02d}:{secs:02d}"

    @classmethod
    def plate_breakdown(cls, target, bar=DEFAULT_BAR) -> List[float]:
        """Return the plates to load on each side of the bar, largest first.

        A remainder smaller than the lightest plate is left unloaded.
        """
        t = cls.parse_number(target)
        b = cls.parse_number(bar)
        if t <= 0 or b <= 0 or t <= b:
            return []
        remainder = (t - b) / 2
        plates: List[float] = []
        for plate in cls.PLATES:
            while remainder >= plate - 1e-9:
                plates.append(plate)
                remainder = round(remainder - plate, 6)
        return plates


class WeightConverter:
    """Convert loads between barbell and dumbbell equivalents."""

    DUMBBELL_EFFICIENCY = 0.8

    @classmethod
    def dumbbell_to_barbell(cls, weight) -> float:
        """Barbell load matching one dumbbell of ``weight``."""
        return MathTools.parse_number(weight) * 2 / cls.DUMBBELL_EFFICIENCY

    @classmethod
    def barbell_to_dumbbell(cls, weight) -> float:
        """Per-hand dumbbell load matching a barbell of ``weight``."""
        return MathTools.parse_number(weight) * cls.DUMBBELL_EFFICIENCY / 2
