"""Shared test helpers for Timerable."""

from timerable.controller import IntentDonation
from timerable.timer.engine import SessionEngine
from timerable.timer.session import TimerStatus


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakePresenter:
    """Records what the controller asks the platform layer to do."""

    def __init__(self):
        self.choices: list[list[str]] = []
        self.donations: list[IntentDonation] = []
        self.errors: list[str] = []
        self.on_chosen = None
        self.on_manage = None

    def choose_subject(self, subject_names, on_chosen, on_manage):
        self.choices.append(list(subject_names))
        self.on_chosen = on_chosen
        self.on_manage = on_manage

    def donate(self, donation):
        self.donations.append(donation)

    def show_error(self, message):
        self.errors.append(message)


class FakeNotifications:
    """Stands in for NotificationService without touching audio."""

    def __init__(self):
        self.sounds: list = []
        self.haptics = 0

    def play_notification_sound(self, completed_type=None):
        self.sounds.append(completed_type)

    def play_haptic_feedback(self):
        self.haptics += 1


def finish_chunk(engine: SessionEngine) -> None:
    """Tick the current chunk until it crosses its boundary."""
    index = engine.chunk_index
    while engine.chunk_index == index and engine.status == TimerStatus.TIMING:
        engine.tick()
