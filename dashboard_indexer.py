from __future__ import annotations
import datetime
import logging
from typing import Callable, Iterable, Optional, Sequence, Tuple, Union

from config import YamlConfig
from insight_service import InsightService
from library import ExerciseLibrary
from localization import Translator, translator as default_translator
from models import DashboardStats, DayVolume, LibraryExercise, WorkoutSession
from stats_service import now_ms

logger = logging.getLogger(__name__)

WEEK_DAYS = ("Lun", "Mar", "Mer", "Jeu", "Ven", "Sam", "Dim")

LibraryLike = Union[ExerciseLibrary, Iterable[LibraryExercise]]


def _as_library(library: LibraryLike) -> ExerciseLibrary:
    if isinstance(library, ExerciseLibrary):
        return library
    return ExerciseLibrary(library)


def _week_start_ms(today: datetime.datetime) -> int:
    monday = today - datetime.timedelta(days=today.weekday())
    monday = monday.replace(hour=0, minute=0, second=0, microsecond=0)
    return int(monday.timestamp() * 1000)


def calculate_dashboard_stats(
    history: Sequence[WorkoutSession],
    library: LibraryLike,
    last_seen_pr: int = 0,
    now: Optional[int] = None,
    translator: Optional[Translator] = None,
) -> DashboardStats:
    """Derive the dashboard snapshot from ``history`` (most recent first)."""
    now = now_ms() if now is None else now
    translator = translator or default_translator
    library = _as_library(library)
    today = datetime.datetime.fromtimestamp(now / 1000)
    week_start = _week_start_ms(today)

    volume = [0] * len(WEEK_DAYS)
    weekly_sets = 0
    month_sessions = 0
    for session in history:
        started = datetime.datetime.fromtimestamp(session.start_time / 1000)
        if started.month == today.month and started.year == today.year:
            month_sessions += 1
        if session.start_time >= week_start:
            sets = session.working_set_count()
            volume[started.weekday()] += sets
            weekly_sets += sets

    insights = InsightService(library, translator, clock=lambda: now)
    return DashboardStats(
        volume_data=[
            DayVolume(day=translator.gettext(day), val=val)
            for day, val in zip(WEEK_DAYS, volume)
        ],
        weekly_sets=weekly_sets,
        insights=insights.build_insights(history),
        month_session_count=month_sessions,
        has_new_pr=insights.detect_new_pr(history, last_seen_pr),
        last_updated=now,
    )


class DashboardIndexer:
    """Own the workout history and keep its dashboard snapshot in sync.

    Every writer stores a private copy of the history, ordered most recent
    first, and recomputes the whole snapshot before returning. Readers only
    ever see a complete snapshot.
    """

    def __init__(
        self,
        library: LibraryLike,
        history: Iterable[WorkoutSession] = (),
        config: Optional[YamlConfig] = None,
        clock: Optional[Callable[[], int]] = None,
        translator: Optional[Translator] = None,
    ) -> None:
        self._library = _as_library(library)
        self.config = config
        self.clock = clock or now_ms
        self.translator = translator
        self._last_seen_pr = 0
        self._history: Tuple[WorkoutSession, ...] = ()
        self._stats: Optional[DashboardStats] = None
        self._commit(history)

    @property
    def stats(self) -> DashboardStats:
        return self._stats

    @property
    def history(self) -> Tuple[WorkoutSession, ...]:
        return self._history

    @property
    def library(self) -> ExerciseLibrary:
        return self._library

    @property
    def last_seen_pr(self) -> int:
        if self.config is not None:
            return int(self.config.get("last_seen_pr", 0) or 0)
        return self._last_seen_pr

    def _commit(self, history: Iterable[WorkoutSession]) -> None:
        snapshot = sorted(
            (s.model_copy(deep=True) for s in history),
            key=lambda s: s.start_time,
            reverse=True,
        )
        self._history = tuple(snapshot)
        self._recompute()

    def _recompute(self) -> None:
        self._stats = calculate_dashboard_stats(
            self._history,
            self._library,
            last_seen_pr=self.last_seen_pr,
            now=self.clock(),
            translator=self.translator,
        )
        logger.debug(
            "Dashboard indexed: %d sessions, %d weekly sets",
            len(self._history),
            self._stats.weekly_sets,
        )

    def set_history(self, history: Iterable[WorkoutSession]) -> DashboardStats:
        self._commit(history)
        return self._stats

    def add_session(self, session: WorkoutSession) -> DashboardStats:
        self._commit(self._history + (session,))
        return self._stats

    def replace_session(self, session: WorkoutSession) -> bool:
        """Swap in an edited session with the same id."""
        if not any(s.id == session.id for s in self._history):
            logger.warning("Session %s not found in history", session.id)
            return False
        self._commit(session if s.id == session.id else s for s in self._history)
        return True

    def remove_session(self, session_id: int) -> bool:
        remaining = [s for s in self._history if s.id != session_id]
        if len(remaining) == len(self._history):
            return False
        self._commit(remaining)
        return True

    def set_library(self, library: LibraryLike) -> DashboardStats:
        self._library = _as_library(library)
        self._recompute()
        return self._stats

    def reindex(self) -> DashboardStats:
        """Recompute the snapshot without touching the history."""
        self._recompute()
        return self._stats

    def mark_records_seen(self, timestamp: Optional[int] = None) -> DashboardStats:
        """Acknowledge current records so the new-PR flag clears."""
        seen = self.clock() if timestamp is None else timestamp
        if self.config is not None:
            self.config.update(last_seen_pr=seen)
        self._last_seen_pr = seen
        return self.reindex()
