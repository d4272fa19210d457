from __future__ import annotations

"""Текстовое хранилище незавершенных задач: одна задача на строку `name:description`."""

import logging
from pathlib import Path
from typing import Iterable

from pomotask.core.errors import TaskStoreError
from pomotask.core.task import Task


logger = logging.getLogger(__name__)


def default_tasks_path() -> Path:
    """Возвращает стандартный путь к файлу задач в текущей директории."""
    return Path.cwd() / ".data" / "tasks"


class TaskStore:
    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else default_tasks_path()

    def load(self) -> list[Task]:
        """Читает все непустые строки файла; каждая задача считается незавершенной."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise TaskStoreError(f"Cannot read tasks from {self.path}: {exc}") from exc
        tasks = [Task.from_line(line) for line in raw.splitlines() if line.strip()]
        logger.debug("Loaded %d tasks from %s", len(tasks), self.path)
        return tasks

    def save(self, tasks: Iterable[Task]) -> None:
        """Атомарно перезаписывает файл через временный; завершенные задачи не сохраняются."""
        pending = [task for task in tasks if not task.completed]
        payload = "".join(f"{task.to_line()}\n" for task in pending)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_name(f"{self.path.name}.tmp")
            tmp_path.write_text(payload, encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as exc:
            raise TaskStoreError(f"Cannot write tasks to {self.path}: {exc}") from exc
        logger.debug("Saved %d tasks to %s", len(pending), self.path)
