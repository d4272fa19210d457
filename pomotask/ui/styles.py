from __future__ import annotations

from PyQt6.QtWidgets import QApplication


THEME_QSS = """
QWidget {
    background: #f7f0ec;
    color: #2f2623;
    font-size: 13px;
}

QLabel, QCheckBox {
    background: transparent;
}

QLabel#ModeLabel {
    font-size: 20px;
    font-weight: 700;
    color: #c0442f;
}

QLabel#ModeLabel[phase="rest"] {
    color: #3f8a5c;
}

QLabel#TimerLabel {
    font-size: 64px;
    font-weight: 700;
    color: #2d2421;
}

QLabel#SubtleTitle {
    font-size: 14px;
    font-weight: 600;
    color: #6f5f58;
}

QLabel#MutedText {
    color: #8a7a72;
}

QPushButton {
    border: none;
    background: #f4e6df;
    border-radius: 16px;
    padding: 8px 14px;
    font-weight: 600;
}

QPushButton:hover {
    background: #eed9cf;
}

QPushButton:pressed {
    background: #e3c9bc;
}

QPushButton#PrimaryButton {
    background: #d9573f;
    color: #ffffff;
    border-radius: 20px;
    padding: 10px 24px;
}

QPushButton#PrimaryButton:hover {
    background: #c94c35;
}

QLineEdit, QSpinBox {
    background: #fff8f4;
    border: none;
    border-radius: 14px;
    padding: 6px 10px;
    min-height: 22px;
}

QListWidget {
    background: #fff8f4;
    border: none;
    border-radius: 12px;
    padding: 6px;
}

QListWidget::item {
    border-radius: 10px;
    padding: 4px;
}

QListWidget::item:selected {
    background: #f4e3da;
    color: #2f2623;
}

QCheckBox {
    spacing: 8px;
}
"""


def apply_theme(app: QApplication) -> None:
    app.setStyleSheet(THEME_QSS)
