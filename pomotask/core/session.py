from __future__ import annotations

import logging
from datetime import timedelta

from pomotask.core.alarm import Alarm, NullAlarm
from pomotask.core.errors import InvalidStateError
from pomotask.core.mode import Mode, Phase, Transitioning, steady_phase
from pomotask.core.period import Period
from pomotask.core.task import Task
from pomotask.data.task_store import TaskStore


logger = logging.getLogger(__name__)


class Session:
    """Focus/rest state machine plus the task list checked off during focus.

    The driver calls :meth:`advance` once per elapsed second. A period that
    runs out either flips the mode (through a ``Transitioning`` step when the
    alarm is enabled) or, with overrun enabled, stays open and accrues
    overrun until the user skips it with :meth:`next_mode`.
    """

    def __init__(
        self,
        focus_time: timedelta,
        rest_time: timedelta,
        alarm: Alarm | None = None,
        store: TaskStore | None = None,
        sound_alarm_enabled: bool = True,
        overrun_enabled: bool = False,
        tasks: list[Task] | None = None,
    ) -> None:
        self.focus = Period(focus_time)
        self.rest = Period(rest_time)
        self._mode: Mode = Phase.FOCUS
        self._alarm: Alarm = alarm if alarm is not None else NullAlarm()
        self._store = store if store is not None else TaskStore()
        self._tasks: list[Task] = list(tasks or [])
        self.sound_alarm_enabled = sound_alarm_enabled
        self.overrun_enabled = overrun_enabled

    @property
    def store(self) -> TaskStore:
        return self._store

    # ----- timer -----
    def period_for(self, phase: Phase) -> Period:
        return self.focus if phase is Phase.FOCUS else self.rest

    def get_mode(self) -> Mode:
        return self._mode

    def current_period(self) -> Period:
        return self.period_for(steady_phase(self._mode))

    def advance(self) -> timedelta:
        mode = self._mode
        if isinstance(mode, Transitioning):
            # the alarm belongs to the expiry that entered this state, even if disabled since
            self._mode = mode.next
            logger.info("Transition resolved to %s", mode.next.label)
            self._play_alarm()
            return self.period_for(mode.next).remaining

        period = self.period_for(mode)
        period.tick()
        if period.is_exhausted and not self.overrun_enabled:
            period.reset()
            self._switch_after_expiry(mode)
            return period.remaining
        return period.current()

    def _switch_after_expiry(self, finished: Phase) -> None:
        upcoming = finished.other()
        self._mode = Transitioning(upcoming) if self.sound_alarm_enabled else upcoming
        logger.info("%s period finished, mode is now %s", finished.label, self.format_mode())

    def _play_alarm(self) -> None:
        try:
            self._alarm.play_alarm()
        except Exception:
            logger.exception("Alarm failed to play")

    def next_mode(self) -> None:
        mode = self._mode
        if isinstance(mode, Transitioning):
            raise InvalidStateError("Cannot skip while transitioning")
        active = self.period_for(mode)
        if self.overrun_enabled and active.overrun > timedelta(0):
            active.transfer_overrun_to(self.period_for(mode.other()))
        self.reset_timer(mode)
        self._mode = mode.other()
        logger.info("Skipped %s, mode is now %s", mode.label, self._mode.label)

    def reset_timer(self, mode: Mode) -> None:
        if not isinstance(mode, Phase):
            raise InvalidStateError(f"Cannot reset timer for {mode!r}")
        self.period_for(mode).reset()

    def alarm_disable(self) -> None:
        self.sound_alarm_enabled = False

    def set_overrun(self, enabled: bool) -> None:
        self.overrun_enabled = enabled

    # ----- formatting -----
    def format_timer(self) -> str:
        return self.current_period().format()

    def format_mode(self) -> str:
        return self._mode.label

    def summary(self) -> str:
        return f"{self.format_mode()}: \n\t {self.format_timer()}"

    # ----- tasks -----
    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    def task_add(self, task: Task) -> None:
        self._tasks.append(task)

    def task_remove(self, index: int) -> Task:
        if not 0 <= index < len(self._tasks):
            raise IndexError(f"Task index {index} out of range")
        return self._tasks.pop(index)

    def task_remove_by_value(self, task: Task) -> None:
        if task in self._tasks:
            self._tasks.remove(task)

    def task_complete(self, index: int) -> None:
        self._set_completed(index, completed=True)

    def task_not_complete(self, index: int) -> None:
        self._set_completed(index, completed=False)

    def _set_completed(self, index: int, completed: bool) -> None:
        # index counts only tasks whose flag is still the opposite of `completed`
        candidates = [task for task in self._tasks if task.completed != completed]
        if 0 <= index < len(candidates):
            candidates[index].completed = completed

    def tasks_by_completion(self, completed: bool) -> list[Task]:
        return [Task(t.name, t.description, t.completed) for t in self._tasks if t.completed == completed]

    # ----- persistence -----
    def load(self) -> None:
        self._tasks = self._store.load()

    def save(self) -> None:
        self._store.save(self._tasks)
