"""Widget tests for the timer screen, dialogs, and main window.

Widgets are never shown, so visibility is checked with ``isHidden``.
"""

import pytest
from PyQt6.QtGui import QCloseEvent
from PyQt6.QtWidgets import QMainWindow, QMessageBox

from timerable.app import TimerWindow
from timerable.controller import Intent, IntentDonation, TimerController
from timerable.timer.goals import GoalCounter
from timerable.timer.session import ChunkType, TimeChunk, TimerStatus
from timerable.ui.goal_panel import GoalPanel
from timerable.ui.intent_presenter import QtIntentPresenter
from timerable.ui.settings_dialog import SettingsDialog
from timerable.ui.subject_dialog import SubjectDialog, format_focus_time
from timerable.ui.timer_widget import TimerWidget, format_remaining

from helpers import FakeNotifications, FakePresenter


@pytest.fixture
def controller(short_engine, short_store, persistence):
    return TimerController(
        short_engine, short_store, persistence,
        FakeNotifications(), FakePresenter(),
    )


@pytest.fixture
def widget(controller):
    return TimerWidget(controller)


@pytest.fixture
def window(qapp, store, persistence, tmp_path):
    return TimerWindow(store, persistence, sounds_dir=tmp_path / "sounds")


# ═══════════════════════════════════════════════════════════════════════════
#  FORMATTING
# ═══════════════════════════════════════════════════════════════════════════


class TestFormatting:

    @pytest.mark.parametrize("seconds, text", [
        (1500, "25:00"), (65, "01:05"), (0, "00:00"), (-5, "00:00"),
    ])
    def test_format_remaining(self, seconds, text):
        assert format_remaining(seconds) == text

    @pytest.mark.parametrize("seconds, text", [
        (0, "0m"), (1500, "25m"), (3900, "1h 05m"),
    ])
    def test_format_focus_time(self, seconds, text):
        assert format_focus_time(seconds) == text


# ═══════════════════════════════════════════════════════════════════════════
#  TIMER WIDGET
# ═══════════════════════════════════════════════════════════════════════════


class TestTimerWidget:

    def test_initial(self, widget):
        assert widget.start_stop_button.text() == "Start"
        assert widget.reset_button.isHidden()
        assert widget.ring.time_text == "00:03"
        assert widget.ring.chunk_label == "Work"

    def test_start(self, widget, controller):
        controller.start_session("Math")
        assert widget.start_stop_button.text() == "Pause"
        assert not widget.reset_button.isHidden()

    def test_pause(self, widget, controller):
        controller.start_session("Math")
        controller.start_stop()
        assert widget.start_stop_button.text() == "Resume"

    def test_tick_updates_ring(self, widget, controller):
        controller.start_session("Math")
        controller.engine.tick()
        assert widget.ring.time_text == "00:02"
        assert widget.ring.percent == pytest.approx(1 / 3)

    def test_next_chunk_shown(self, widget, controller):
        controller.start_session("Math")
        controller.skip()
        assert widget.ring.chunk_label == "Short Break"
        assert widget.ring.time_text == "00:02"

    def test_reset_hides_button(self, widget, controller):
        controller.start_session("Math")
        controller.reset()
        assert widget.start_stop_button.text() == "Start"
        assert widget.reset_button.isHidden()

    def test_goals_shown(self, widget, controller):
        controller.refresh_goals()
        assert widget.session_panel.value_text == "0 / 2"
        assert widget.daily_panel.value_text == "0 / 3"

    def test_reset_button_resets(self, widget, controller):
        controller.start_session("Math")
        widget.reset_button.click()
        assert controller.engine.status == TimerStatus.READY


class TestGoalPanel:

    def test_show_goal(self, qapp):
        panel = GoalPanel("Session")
        panel.show_goal(GoalCounter("Session", 2, 4))
        assert panel.value_text == "2 / 4"
        assert panel.bar_value == 500

    def test_over_target_clamped(self, qapp):
        panel = GoalPanel("Goal")
        panel.show_goal(GoalCounter("Goal", 10, 8))
        assert panel.value_text == "10 / 8"
        assert panel.bar_value == 1000

    def test_zero_target(self, qapp):
        panel = GoalPanel("Goal")
        panel.show_goal(GoalCounter("Goal", 0, 0))
        assert panel.bar_value == 0


# ═══════════════════════════════════════════════════════════════════════════
#  DIALOGS
# ═══════════════════════════════════════════════════════════════════════════


class TestSubjectDialog:

    def test_empty(self, qapp, persistence):
        dialog = SubjectDialog(persistence)
        assert dialog.subject_names() == []

    def test_add(self, qapp, persistence):
        dialog = SubjectDialog(persistence)
        assert dialog.add_subject("Math")
        assert dialog.subject_names() == ["Math"]

    def test_duplicate_shows_error(self, qapp, persistence):
        dialog = SubjectDialog(persistence)
        dialog.add_subject("Math")
        assert not dialog.add_subject("Math")
        assert dialog._error_label.text() != ""
        assert dialog.subject_names() == ["Math"]

    def test_rename_and_delete(self, qapp, persistence):
        dialog = SubjectDialog(persistence)
        dialog.add_subject("Math")
        assert dialog.rename_subject("Math", "Algebra")
        assert dialog.subject_names() == ["Algebra"]
        assert dialog.delete_subject("Algebra")
        assert dialog.subject_names() == []

    def test_delete_missing_shows_error(self, qapp, persistence):
        dialog = SubjectDialog(persistence)
        assert not dialog.delete_subject("Math")
        assert dialog._error_label.text() != ""

    def test_focus_time_listed(self, qapp, persistence):
        persistence.add_subject("Math")
        persistence.record_chunk(TimeChunk(ChunkType.WORK, 1500, 1500), "Math")
        dialog = SubjectDialog(persistence)
        assert dialog._list.item(0).text() == "Math\n25m"

    def test_subjects_changed_signal(self, qapp, persistence):
        dialog = SubjectDialog(persistence)
        fired = []
        dialog.subjects_changed.connect(lambda: fired.append(True))
        dialog.add_subject("Math")
        assert fired == [True]


class TestSettingsDialog:

    def test_populated(self, qapp, store):
        dialog = SettingsDialog(store)
        assert dialog.spin("work_duration").value() == 25
        assert dialog.spin("number_of_sessions").value() == 4
        assert dialog.spin("daily_goal").value() == 8

    def test_changes_written_through(self, qapp, store):
        dialog = SettingsDialog(store)
        dialog.spin("work_duration").setValue(30)
        dialog.spin("number_of_sessions").setValue(3)
        dialog._vol_slider.setValue(40)
        dialog._haptics_cb.setChecked(False)
        settings = store.settings
        assert settings.work_duration == 1800
        assert settings.number_of_sessions == 3
        assert settings.sound_volume == 40
        assert settings.haptics_enabled is False


class TestIntentPresenter:

    def test_subject_menu(self, qapp):
        presenter = QtIntentPresenter(QMainWindow())
        chosen = []
        menu = presenter.build_subject_menu(
            ["Math", "Physics"], chosen.append, lambda: None,
        )
        assert menu.title() == "Select Subject for Session"
        texts = [a.text() for a in menu.actions() if not a.isSeparator()]
        assert texts == ["Math", "Physics", "Edit Subjects", "Close"]
        menu.actions()[1].trigger()
        assert chosen == ["Physics"]

    def test_empty_menu_offers_add(self, qapp):
        presenter = QtIntentPresenter(QMainWindow())
        managed = []
        menu = presenter.build_subject_menu(
            [], lambda name: None, lambda: managed.append(True),
        )
        texts = [a.text() for a in menu.actions()]
        assert texts == ["Add Subject", "Close"]
        menu.actions()[0].trigger()
        assert managed == [True]

    def test_donate_shows_status(self, qapp):
        window = QMainWindow()
        presenter = QtIntentPresenter(window)
        presenter.donate(IntentDonation(Intent.START_SESSION, "Math"))
        assert window.statusBar().currentMessage() == "Started Math"

    def test_show_error(self, qapp, monkeypatch):
        shown = []
        monkeypatch.setattr(
            QMessageBox, "warning", lambda parent, title, text: shown.append(text),
        )
        QtIntentPresenter(QMainWindow()).show_error("nothing to skip")
        assert shown == ["nothing to skip"]


# ═══════════════════════════════════════════════════════════════════════════
#  MAIN WINDOW
# ═══════════════════════════════════════════════════════════════════════════


class TestTimerWindow:

    def test_initial(self, window):
        assert window.windowTitle() == "Timer"
        assert not window.skip_action.isEnabled()
        assert window.engine.status == TimerStatus.READY

    def test_session_enables_actions(self, window):
        window.controller.start_session("Math")
        assert window.windowTitle() == "Math"
        assert window.skip_action.isEnabled()
        assert window.timer_widget.start_stop_button.text() == "Pause"

    def test_skip_action(self, window):
        window.controller.start_session("Math")
        window.skip_action.trigger()
        assert window.engine.chunk_index == 1

    def test_close_saves_size(self, window, store):
        window.resize(500, 700)
        window.closeEvent(QCloseEvent())
        settings = store.settings
        assert (settings.window_width, settings.window_height) == (500, 700)


class TestProgressRing:

    def test_position_text(self, widget, controller):
        controller.start_session("Math")
        controller.skip()
        assert widget.ring.position_text == "Chunk 2 of 4"

    def test_completion_pulses(self, widget, controller):
        controller.start_session("Math")
        assert not widget.ring.is_pulsing
        for _ in range(3):
            controller.engine.tick()
        assert widget.ring.is_pulsing


class TestSubjectRenameSignal:

    def test_rename_reports_clean_name(self, qapp, persistence):
        dialog = SubjectDialog(persistence)
        dialog.add_subject("Math")
        renamed = []
        dialog.subject_renamed.connect(lambda old, new: renamed.append((old, new)))
        dialog.rename_subject("Math", "  Maths ")
        assert renamed == [("Math", "Maths")]

    def test_failed_rename_not_reported(self, qapp, persistence):
        dialog = SubjectDialog(persistence)
        renamed = []
        dialog.subject_renamed.connect(lambda old, new: renamed.append((old, new)))
        assert not dialog.rename_subject("Math", "Maths")
        assert renamed == []

    def test_window_session_follows_dialog_rename(self, window, persistence):
        persistence.add_subject("Math")
        window.controller.start_session("Math")
        dialog = SubjectDialog(persistence, window)
        dialog.subject_renamed.connect(window.controller.on_subject_renamed)
        dialog.rename_subject("Math", "Maths")
        assert window.engine.subject == "Maths"
        assert window.windowTitle() == "Maths"
