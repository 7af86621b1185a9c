"""UI package."""

from .timer_widget import TimerWidget
from .progress_ring import ProgressRing
from .goal_panel import GoalPanel
from .subject_dialog import SubjectDialog
from .settings_dialog import SettingsDialog
from .intent_presenter import QtIntentPresenter

__all__ = [
    "TimerWidget",
    "ProgressRing",
    "GoalPanel",
    "SubjectDialog",
    "SettingsDialog",
    "QtIntentPresenter",
]
