from __future__ import annotations

import logging
from dataclasses import replace
from datetime import timedelta

from PyQt6.QtCore import QObject, pyqtSignal

from pomotask.core.alarm import Alarm
from pomotask.core.errors import TaskStoreError
from pomotask.core.mode import Mode, Phase, Transitioning
from pomotask.core.session import Session
from pomotask.core.settings import MAX_MINUTES, Settings
from pomotask.core.task import Task
from pomotask.data.storage import Storage


logger = logging.getLogger(__name__)


class AppState(QObject):
    timer_changed = pyqtSignal(str)
    mode_changed = pyqtSignal(str)
    tasks_changed = pyqtSignal()
    state_changed = pyqtSignal()

    def __init__(self) -> None:
        super().__init__()
        self.settings = Settings()
        self.session: Session = self.settings.build_session()
        self.paused = False
        self._storage: Storage | None = None
        self._alarm: Alarm | None = None

    def load_from_storage(self, storage: Storage, alarm: Alarm | None = None) -> None:
        self._storage = storage
        self._alarm = alarm
        self.settings = Settings.load(storage)
        self.session = self.settings.build_session(alarm)
        try:
            self.session.load()
        except TaskStoreError as exc:
            logger.info("Starting with an empty task list: %s", exc)
        self._emit_all()

    # ----- timer -----
    def advance(self) -> None:
        if self.paused:
            return
        before = self.session.get_mode()
        self.session.advance()
        after = self.session.get_mode()
        if after != before:
            self._log_finished(before)
            self.mode_changed.emit(self.session.format_mode())
        self.timer_changed.emit(self.session.format_timer())

    def toggle_pause(self) -> None:
        self.paused = not self.paused
        self.state_changed.emit()

    def skip(self) -> None:
        mode = self.session.get_mode()
        if isinstance(mode, Transitioning):
            return
        period = self.session.period_for(mode)
        self._record(mode, period.configured, period.overrun, skipped=True)
        self.session.next_mode()
        self.mode_changed.emit(self.session.format_mode())
        self.timer_changed.emit(self.session.format_timer())

    def reset_current(self) -> None:
        mode = self.session.get_mode()
        if isinstance(mode, Transitioning):
            return
        self.session.reset_timer(mode)
        self.timer_changed.emit(self.session.format_timer())

    def set_alarm_enabled(self, enabled: bool) -> None:
        # disabling is one-way for the running session; enabling applies from the next launch
        if not enabled:
            self.session.alarm_disable()
        self.save_setting(alarm_enabled=enabled)

    def set_overrun(self, enabled: bool) -> None:
        self.session.set_overrun(enabled)
        self.save_setting(overrun_enabled=enabled)

    def configure(self, focus_minutes: int, rest_minutes: int) -> None:
        if not (1 <= focus_minutes <= MAX_MINUTES and 1 <= rest_minutes <= MAX_MINUTES):
            raise ValueError(f"Durations must be between 1 and {MAX_MINUTES} minutes")
        old = self.session
        self.session = Session(
            focus_time=timedelta(minutes=focus_minutes),
            rest_time=timedelta(minutes=rest_minutes),
            alarm=self._alarm,
            store=old.store,
            sound_alarm_enabled=old.sound_alarm_enabled,
            overrun_enabled=old.overrun_enabled,
            tasks=old.tasks,
        )
        self.save_setting(focus_minutes=focus_minutes, rest_minutes=rest_minutes)
        self._emit_all()

    def save_setting(self, **changes) -> None:
        self.settings = replace(self.settings, **changes)
        if self._storage:
            self.settings.save(self._storage)
        self.state_changed.emit()

    # ----- tasks -----
    def add_task_from_text(self, text: str) -> bool:
        try:
            task = Task.from_line(text)
        except ValueError:
            return False
        if not task.name:
            return False
        self.session.task_add(task)
        self.tasks_changed.emit()
        return True

    def remove_task(self, index: int) -> Task | None:
        try:
            task = self.session.task_remove(index)
        except IndexError:
            return None
        self.tasks_changed.emit()
        return task

    def remove_task_in_view(self, completed: bool, row: int) -> Task | None:
        """Remove the ``row``-th task of the TODO (or DONE) list as displayed."""
        positions = [i for i, task in enumerate(self.session.tasks) if task.completed == completed]
        if not 0 <= row < len(positions):
            return None
        return self.remove_task(positions[row])

    def complete_task(self, index: int) -> None:
        self.session.task_complete(index)
        self.tasks_changed.emit()

    def uncomplete_task(self, index: int) -> None:
        self.session.task_not_complete(index)
        self.tasks_changed.emit()

    def save_tasks(self) -> bool:
        try:
            self.session.save()
        except TaskStoreError as exc:
            logger.error("Tasks were not saved: %s", exc)
            return False
        return True

    # ----- stats -----
    def focus_periods_today(self) -> int:
        if not self._storage:
            return 0
        return self._storage.focus_periods_today()

    def _log_finished(self, before: Mode) -> None:
        # a steady phase only changes on expiry; the Transitioning step has nothing to record
        if isinstance(before, Phase):
            period = self.session.period_for(before)
            self._record(before, period.configured, timedelta(0), skipped=False)

    def _record(self, phase: Phase, planned: timedelta, overrun: timedelta, skipped: bool) -> None:
        if not self._storage:
            return
        self._storage.log_period(
            phase=phase.value,
            planned_sec=int(planned.total_seconds()),
            overrun_sec=int(overrun.total_seconds()),
            skipped=skipped,
        )
        self.state_changed.emit()

    def _emit_all(self) -> None:
        self.mode_changed.emit(self.session.format_mode())
        self.timer_changed.emit(self.session.format_timer())
        self.tasks_changed.emit()
        self.state_changed.emit()
