from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields
from datetime import timedelta
from typing import Any

from pomotask.core.alarm import Alarm
from pomotask.core.session import Session
from pomotask.data.storage import Storage
from pomotask.data.task_store import TaskStore


logger = logging.getLogger(__name__)

SETTINGS_KEY = "settings"
MAX_MINUTES = 240


@dataclass
class Settings:
    focus_minutes: int = 25
    rest_minutes: int = 5
    alarm_enabled: bool = True
    overrun_enabled: bool = False
    tasks_path: str = ".data/tasks"

    @classmethod
    def from_dict(cls, raw: Any) -> Settings:
        settings = cls()
        if not isinstance(raw, dict):
            return settings
        for field in fields(cls):
            if field.name not in raw:
                continue
            value = raw[field.name]
            if not _is_valid(field.name, value):
                logger.warning("Ignoring invalid setting %s=%r", field.name, value)
                continue
            setattr(settings, field.name, value)
        return settings

    @classmethod
    def load(cls, storage: Storage) -> Settings:
        return cls.from_dict(storage.get_setting(SETTINGS_KEY, {}))

    def save(self, storage: Storage) -> None:
        storage.set_setting(SETTINGS_KEY, asdict(self))

    def build_session(self, alarm: Alarm | None = None) -> Session:
        return Session(
            focus_time=timedelta(minutes=self.focus_minutes),
            rest_time=timedelta(minutes=self.rest_minutes),
            alarm=alarm,
            store=TaskStore(self.tasks_path),
            sound_alarm_enabled=self.alarm_enabled,
            overrun_enabled=self.overrun_enabled,
        )


def _is_valid(name: str, value: Any) -> bool:
    if name in ("focus_minutes", "rest_minutes"):
        return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= MAX_MINUTES
    if name in ("alarm_enabled", "overrun_enabled"):
        return isinstance(value, bool)
    return isinstance(value, str) and bool(value.strip())
