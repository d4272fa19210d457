from __future__ import annotations

"""Точка входа приложения Pomotask.

Модуль отвечает за инициализацию Qt-приложения, настройку журнала,
подключение хранилища, загрузку настроек и задач и запуск главного окна.
"""

import logging
import logging.handlers
import sys
from pathlib import Path

from platformdirs import user_log_dir
from PyQt6.QtWidgets import QApplication

from pomotask.core.app_state import AppState
from pomotask.core.assets import QtAlarm
from pomotask.data.storage import Storage
from pomotask.ui.main_window import MainWindow
from pomotask.ui.styles import apply_theme


APP_NAME = "pomotask"
LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"


def default_db_path() -> Path:
    """Возвращает стандартный путь к SQLite-файлу в текущей директории."""
    return Path.cwd() / "app.db"


def configure_logging(level: int = logging.INFO, log_dir: Path | None = None) -> logging.Logger:
    """Подключает ротируемый файл журнала к логгеру пакета; повторный вызов только меняет уровень."""
    logger = logging.getLogger(APP_NAME)
    logger.setLevel(level)
    if logger.handlers:
        return logger

    log_dir = log_dir or Path(user_log_dir(APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        log_dir / f"{APP_NAME}.log",
        maxBytes=1024 * 1024,
        backupCount=2,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def main() -> int:
    """Создает зависимости приложения и запускает главный UI-цикл."""
    logger = configure_logging(logging.DEBUG if "--debug" in sys.argv else logging.INFO)
    app = QApplication(sys.argv)
    apply_theme(app)

    storage = Storage(default_db_path())
    storage.init_db()

    app_state = AppState()
    app_state.load_from_storage(storage, alarm=QtAlarm())
    logger.info("Started with %d tasks", len(app_state.session.tasks))

    window = MainWindow(app_state=app_state)

    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
