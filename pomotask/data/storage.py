from __future__ import annotations

"""SQLite-слой хранения настроек и журнала завершенных периодов."""

import json
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterator


SCHEMA_VERSION = 1


@dataclass(frozen=True)
class PeriodRow:
    id: int
    finished_at: str
    phase: str
    planned_sec: int
    overrun_sec: int
    skipped: bool


class Storage:
    """Инкапсулирует подключение к SQLite и транзакционные операции."""
    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            conn.execute("PRAGMA journal_mode = WAL;")
        except sqlite3.DatabaseError:
            pass
        return conn

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        conn = self._connect()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def init_db(self) -> None:
        """Создает таблицы приложения при первом запуске."""
        with self._transaction() as conn:
            conn.execute("CREATE TABLE IF NOT EXISTS schema_version (version INTEGER NOT NULL)")
            row = conn.execute("SELECT version FROM schema_version LIMIT 1").fetchone()
            if not row:
                conn.execute("INSERT INTO schema_version(version) VALUES (?)", (SCHEMA_VERSION,))
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS settings(
                    key TEXT PRIMARY KEY,
                    value TEXT
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS period_log(
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    finished_at TEXT NOT NULL,
                    phase TEXT NOT NULL,
                    planned_sec INTEGER NOT NULL,
                    overrun_sec INTEGER NOT NULL DEFAULT 0,
                    skipped INTEGER NOT NULL DEFAULT 0
                )
                """
            )

    def get_setting(self, key: str, default: Any = None) -> Any:
        with self._connect() as conn:
            row = conn.execute("SELECT value FROM settings WHERE key = ?", (key,)).fetchone()
        if not row:
            return default
        raw = row["value"]
        try:
            return json.loads(raw)
        except (TypeError, json.JSONDecodeError):
            return raw

    def set_setting(self, key: str, value: Any) -> None:
        payload = json.dumps(value)
        with self._transaction() as conn:
            conn.execute(
                "INSERT INTO settings(key, value) VALUES(?, ?) ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                (key, payload),
            )

    def log_period(
        self,
        phase: str,
        planned_sec: int,
        overrun_sec: int = 0,
        skipped: bool = False,
        finished_at: str | None = None,
    ) -> int:
        finished_at = finished_at or datetime.now().isoformat(timespec="seconds")
        with self._transaction() as conn:
            cursor = conn.execute(
                """
                INSERT INTO period_log(finished_at, phase, planned_sec, overrun_sec, skipped)
                VALUES (?, ?, ?, ?, ?)
                """,
                (finished_at, phase, planned_sec, overrun_sec, int(skipped)),
            )
            return int(cursor.lastrowid)

    def list_periods(self, limit: int = 100) -> list[PeriodRow]:
        """Возвращает последние периоды в обратном хронологическом порядке."""
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT id, finished_at, phase, planned_sec, overrun_sec, skipped FROM period_log ORDER BY id DESC LIMIT ?",
                (limit,),
            ).fetchall()
        return [
            PeriodRow(
                id=row["id"],
                finished_at=row["finished_at"],
                phase=row["phase"],
                planned_sec=row["planned_sec"],
                overrun_sec=row["overrun_sec"],
                skipped=bool(row["skipped"]),
            )
            for row in rows
        ]

    def focus_periods_today(self) -> int:
        today = date.today().isoformat()
        with self._connect() as conn:
            row = conn.execute(
                """
                SELECT COUNT(*) AS c
                FROM period_log
                WHERE phase = 'focus' AND skipped = 0 AND date(finished_at) = ?
                """,
                (today,),
            ).fetchone()
        return int(row["c"] if row else 0)
