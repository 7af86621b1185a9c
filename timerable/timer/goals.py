"""Session and daily goal accounting.

Both counters are recomputed from their sources every time they are
asked for; nothing here is cached across ticks.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..database.persistence import PersistenceService
    from ..settings import SettingsStore
    from .engine import SessionEngine


SESSION_GOAL_TITLE = "Session"
DAILY_GOAL_TITLE = "Goal"


@dataclass(frozen=True)
class GoalCounter:
    title: str
    current_count: int
    total_target: int

    @property
    def ratio(self) -> float:
        if self.total_target <= 0:
            return 0.0
        return self.current_count / self.total_target

    @property
    def fraction(self) -> float:
        """Ratio clamped to 0..1 for progress bars."""
        return max(0.0, min(1.0, self.ratio))

    @property
    def is_met(self) -> bool:
        return self.total_target > 0 and self.current_count >= self.total_target

    def __str__(self) -> str:
        return f"{self.current_count} / {self.total_target}"


def session_goal(engine: SessionEngine) -> GoalCounter:
    """Work chunks passed in the current session out of the session's total."""
    return GoalCounter(
        SESSION_GOAL_TITLE, engine.session_count, engine.total_sessions,
    )


def daily_goal(
    persistence: PersistenceService,
    store: SettingsStore,
    day: date | None = None,
) -> GoalCounter:
    """Completed work chunks today against the configured daily target."""
    completed = persistence.fetch_daily_goal(day).sessions_completed
    return GoalCounter(DAILY_GOAL_TITLE, completed, store.get_daily_goal())
