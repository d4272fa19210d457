from datetime import timedelta

import pytest

from pomotask.core.errors import InvalidStateError, TaskStoreError
from pomotask.core.mode import Phase, Transitioning
from pomotask.core.session import Session
from pomotask.core.task import Task
from pomotask.data.task_store import TaskStore


class RecordingAlarm:
    def __init__(self) -> None:
        self.calls = 0

    def play_alarm(self) -> None:
        self.calls += 1


class BrokenAlarm:
    def play_alarm(self) -> None:
        raise RuntimeError("no audio device")


def make_session(tmp_path, focus: int = 3, rest: int = 2, **kwargs) -> Session:
    return Session(
        timedelta(seconds=focus),
        timedelta(seconds=rest),
        store=TaskStore(tmp_path / "tasks"),
        **kwargs,
    )


def test_session_starts_in_focus(tmp_path) -> None:
    session = make_session(tmp_path)

    assert session.get_mode() == Phase.FOCUS
    assert session.format_mode() == "Focus"
    assert session.format_timer() == "00:03"


def test_expiry_goes_through_transition_and_plays_alarm(tmp_path) -> None:
    alarm = RecordingAlarm()
    session = make_session(tmp_path, alarm=alarm)

    assert session.advance() == timedelta(seconds=2)
    session.advance()
    session.advance()

    assert session.get_mode() == Transitioning(Phase.REST)
    assert session.format_mode() == "Transitioning(Rest)"
    assert session.focus.remaining == session.focus.configured
    assert alarm.calls == 0

    remaining = session.advance()

    assert session.get_mode() == Phase.REST
    assert session.rest.remaining == session.rest.configured
    assert remaining == timedelta(seconds=2)
    assert alarm.calls == 1


def test_rest_expiry_returns_to_focus(tmp_path) -> None:
    session = make_session(tmp_path, sound_alarm_enabled=False)
    session.next_mode()

    session.advance()
    session.advance()

    assert session.get_mode() == Phase.FOCUS


def test_full_cycle_plays_alarm_once_per_expiry(tmp_path) -> None:
    alarm = RecordingAlarm()
    session = make_session(tmp_path, focus=2, rest=1, alarm=alarm)

    seen = []
    for _ in range(5):
        session.advance()
        seen.append(session.format_mode())

    assert seen == ["Focus", "Transitioning(Rest)", "Rest", "Transitioning(Focus)", "Focus"]
    assert alarm.calls == 2
    assert session.focus.remaining == timedelta(seconds=2)


def test_alarm_disabled_during_transition_still_rings_for_that_expiry(tmp_path) -> None:
    alarm = RecordingAlarm()
    session = make_session(tmp_path, focus=1, rest=1, alarm=alarm)
    session.advance()
    assert session.get_mode() == Transitioning(Phase.REST)

    session.alarm_disable()
    session.advance()

    assert session.get_mode() == Phase.REST
    assert alarm.calls == 1

    session.advance()

    assert session.get_mode() == Phase.FOCUS
    assert alarm.calls == 1


def test_disabled_alarm_switches_directly(tmp_path) -> None:
    alarm = RecordingAlarm()
    session = make_session(tmp_path, alarm=alarm)
    session.alarm_disable()

    seen = []
    for _ in range(3):
        session.advance()
        seen.append(session.get_mode())

    assert seen == [Phase.FOCUS, Phase.FOCUS, Phase.REST]
    assert alarm.calls == 0


def test_alarm_failure_still_completes_transition(tmp_path) -> None:
    session = make_session(tmp_path, alarm=BrokenAlarm())
    for _ in range(3):
        session.advance()

    session.advance()

    assert session.get_mode() == Phase.REST


def test_overrun_keeps_period_open(tmp_path) -> None:
    session = make_session(tmp_path, focus=2, overrun_enabled=True)

    for _ in range(3):
        session.advance()
    last = session.advance()

    assert session.get_mode() == Phase.FOCUS
    assert session.focus.remaining == timedelta(0)
    assert last == timedelta(seconds=2)
    assert session.format_timer() == "00:00 (+00:02)"


def test_turning_overrun_off_lets_open_period_expire(tmp_path) -> None:
    session = make_session(tmp_path, focus=1, overrun_enabled=True, sound_alarm_enabled=False)
    session.advance()
    session.advance()

    session.set_overrun(False)
    session.advance()

    assert session.get_mode() == Phase.REST
    assert session.focus.overrun == timedelta(0)


def test_skip_carries_overrun_into_next_period(tmp_path) -> None:
    session = make_session(tmp_path, focus=60, rest=42, overrun_enabled=True)
    for _ in range(120):
        session.advance()

    session.next_mode()

    assert session.get_mode() == Phase.REST
    assert session.rest.remaining == timedelta(seconds=84)
    assert session.focus.remaining == session.focus.configured
    assert session.focus.overrun == timedelta(0)


def test_next_mode_from_focus_resets_focus(tmp_path) -> None:
    session = make_session(tmp_path)
    session.advance()

    session.next_mode()

    assert session.get_mode() == Phase.REST
    assert session.focus.remaining == timedelta(seconds=3)


def test_next_mode_rejected_while_transitioning(tmp_path) -> None:
    session = make_session(tmp_path)
    for _ in range(3):
        session.advance()

    with pytest.raises(InvalidStateError):
        session.next_mode()
    assert session.get_mode() == Transitioning(Phase.REST)


def test_reset_timer_rejects_transitioning(tmp_path) -> None:
    session = make_session(tmp_path)

    with pytest.raises(InvalidStateError):
        session.reset_timer(Transitioning(Phase.FOCUS))


def test_reset_timer_touches_only_requested_period(tmp_path) -> None:
    session = make_session(tmp_path)
    session.advance()
    session.rest.tick()

    session.reset_timer(Phase.REST)

    assert session.rest.remaining == timedelta(seconds=2)
    assert session.focus.remaining == timedelta(seconds=2)


def test_nested_transitioning_cannot_be_built() -> None:
    with pytest.raises(InvalidStateError):
        Transitioning(Transitioning(Phase.FOCUS))  # type: ignore[arg-type]


def test_summary_lists_mode_and_clock(tmp_path) -> None:
    session = make_session(tmp_path)

    assert session.summary() == "Focus: \n\t 00:03"


def test_task_complete_uses_not_completed_index(tmp_path) -> None:
    session = make_session(tmp_path)
    for name in ("a", "b", "c"):
        session.task_add(Task(name, f"{name} desc"))

    session.task_complete(1)
    session.task_complete(1)

    assert [t.name for t in session.tasks_by_completion(True)] == ["b", "c"]
    assert [t.name for t in session.tasks_by_completion(False)] == ["a"]

    session.task_not_complete(1)

    assert [t.name for t in session.tasks_by_completion(False)] == ["a", "c"]


def test_task_complete_out_of_range_is_noop(tmp_path) -> None:
    session = make_session(tmp_path)
    session.task_add(Task("a", ""))
    session.task_add(Task("b", ""))
    session.task_complete(0)

    session.task_complete(1)
    session.task_not_complete(5)

    assert [t.completed for t in session.tasks] == [True, False]


def test_task_remove_by_index_and_value(tmp_path) -> None:
    session = make_session(tmp_path)
    session.task_add(Task("a", "x"))
    session.task_add(Task("b", "y"))
    session.task_add(Task("a", "x"))

    removed = session.task_remove(1)
    session.task_remove_by_value(Task("a", "x"))
    session.task_remove_by_value(Task("missing", ""))

    assert removed == Task("b", "y")
    assert session.tasks == [Task("a", "x")]

    with pytest.raises(IndexError):
        session.task_remove(3)


def test_tasks_by_completion_returns_copies(tmp_path) -> None:
    session = make_session(tmp_path)
    session.task_add(Task("a", ""))

    snapshot = session.tasks_by_completion(False)
    snapshot[0].completed = True

    assert session.tasks_by_completion(False) == [Task("a", "")]


def test_save_and_load_round_trip(tmp_path) -> None:
    session = make_session(tmp_path)
    session.task_add(Task("Name1", "Description1"))
    session.task_add(Task("Done", "already"))
    session.task_complete(1)
    session.save()

    fresh = make_session(tmp_path)
    fresh.load()

    assert fresh.tasks == [Task("Name1", "Description1", completed=False)]


def test_load_failure_keeps_current_tasks(tmp_path) -> None:
    session = make_session(tmp_path)
    session.task_add(Task("keep", "me"))

    with pytest.raises(TaskStoreError):
        session.load()

    assert session.tasks == [Task("keep", "me")]
