from __future__ import annotations

"""Загрузка звуковых ресурсов (ассетов) с кэшированием в памяти и Qt-будильник."""

import logging
from pathlib import Path

from PyQt6.QtCore import QUrl
from PyQt6.QtMultimedia import QSoundEffect
from PyQt6.QtWidgets import QApplication


ASSETS_DIR = Path(__file__).resolve().parents[2] / "assets"
ALARM_SOUND = "sounds/alarm.wav"
_SOUND_CACHE: dict[str, QSoundEffect | None] = {}

logger = logging.getLogger(__name__)


def get_asset_path(relative: str) -> Path:
    """Преобразует относительный путь внутри `assets/` в абсолютный."""
    return ASSETS_DIR / relative


def load_sound(relative: str) -> QSoundEffect | None:
    """Загружает `QSoundEffect` с кэшем; возвращает `None`, если файла нет."""
    if relative in _SOUND_CACHE:
        return _SOUND_CACHE[relative]

    path = get_asset_path(relative)
    if not path.exists():
        _SOUND_CACHE[relative] = None
        return None

    effect = QSoundEffect()
    effect.setSource(QUrl.fromLocalFile(str(path)))
    _SOUND_CACHE[relative] = effect
    return effect


class QtAlarm:
    """Плеер будильника: `play()` не блокирует цикл таймера."""

    def __init__(self, relative: str = ALARM_SOUND, volume: float = 0.8) -> None:
        self._effect = load_sound(relative)
        if self._effect is None:
            logger.warning("Alarm sound %s not found, falling back to system beep", relative)
        else:
            self._effect.setVolume(volume)

    def play_alarm(self) -> None:
        if self._effect is None or self._effect.status() == QSoundEffect.Status.Error:
            QApplication.beep()
            return
        self._effect.play()
