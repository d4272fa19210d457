from __future__ import annotations

from PyQt6.QtCore import QTimer, Qt
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QCheckBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSpinBox,
    QSplitter,
    QVBoxLayout,
    QWidget,
)

from pomotask.core.app_state import AppState
from pomotask.core.mode import Transitioning, steady_phase
from pomotask.core.settings import MAX_MINUTES


class MainWindow(QMainWindow):
    def __init__(self, app_state: AppState) -> None:
        super().__init__()
        self.setWindowTitle("Pomotask")
        self.resize(900, 600)

        self.app_state = app_state

        self._build_ui()
        self._connect_signals()
        self._sync_durations()
        self._sync_controls()
        self._refresh_mode(self.app_state.session.format_mode())
        self._refresh_timer(self.app_state.session.format_timer())
        self._refresh_tasks()
        self._refresh_stats()

        self.tick_timer = QTimer(self)
        self.tick_timer.setInterval(1000)
        self.tick_timer.timeout.connect(self.app_state.advance)
        self.tick_timer.start()

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)

        split = QSplitter(Qt.Orientation.Horizontal)
        left = QWidget()
        right = QWidget()
        split.addWidget(left)
        split.addWidget(right)
        split.setStretchFactor(0, 2)
        split.setStretchFactor(1, 3)

        root_layout = QHBoxLayout(central)
        root_layout.addWidget(split)

        left_layout = QVBoxLayout(left)
        self.mode_label = QLabel()
        self.mode_label.setObjectName("ModeLabel")
        self.timer_label = QLabel()
        self.timer_label.setObjectName("TimerLabel")
        self.timer_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        left_layout.addWidget(self.mode_label)
        left_layout.addWidget(self.timer_label, 1)

        controls = QHBoxLayout()
        self.pause_btn = QPushButton("Pause")
        self.pause_btn.setObjectName("PrimaryButton")
        self.skip_btn = QPushButton("Skip")
        self.reset_btn = QPushButton("Reset")
        controls.addWidget(self.pause_btn)
        controls.addWidget(self.skip_btn)
        controls.addWidget(self.reset_btn)
        left_layout.addLayout(controls)

        options = QWidget()
        form = QFormLayout(options)
        self.focus_minutes = QSpinBox()
        self.focus_minutes.setRange(1, MAX_MINUTES)
        self.rest_minutes = QSpinBox()
        self.rest_minutes.setRange(1, MAX_MINUTES)
        self.apply_btn = QPushButton("Apply")
        self.alarm_check = QCheckBox("Alarm between periods")
        self.overrun_check = QCheckBox("Let periods run over")
        form.addRow("Focus min:", self.focus_minutes)
        form.addRow("Rest min:", self.rest_minutes)
        form.addRow("", self.apply_btn)
        form.addRow(self.alarm_check)
        form.addRow(self.overrun_check)
        left_layout.addWidget(options)

        self.stats_label = QLabel()
        self.stats_label.setObjectName("MutedText")
        left_layout.addWidget(self.stats_label)

        right_layout = QVBoxLayout(right)
        todo_title = QLabel("TODO")
        todo_title.setObjectName("SubtleTitle")
        self.todo_list = QListWidget()
        done_title = QLabel("DONE")
        done_title.setObjectName("SubtleTitle")
        self.done_list = QListWidget()
        right_layout.addWidget(todo_title)
        right_layout.addWidget(self.todo_list, 2)
        right_layout.addWidget(done_title)
        right_layout.addWidget(self.done_list, 1)

        add_row = QHBoxLayout()
        self.task_input = QLineEdit()
        self.task_input.setPlaceholderText("name: description")
        self.add_btn = QPushButton("Add")
        self.remove_btn = QPushButton("Remove")
        add_row.addWidget(self.task_input, 1)
        add_row.addWidget(self.add_btn)
        add_row.addWidget(self.remove_btn)
        right_layout.addLayout(add_row)

        space_action = QAction(self)
        space_action.setShortcut(QKeySequence(Qt.Key.Key_Space))
        space_action.setShortcutContext(Qt.ShortcutContext.WindowShortcut)
        space_action.triggered.connect(self._space_toggle)
        self.addAction(space_action)

    def _connect_signals(self) -> None:
        self.pause_btn.clicked.connect(self.app_state.toggle_pause)
        self.skip_btn.clicked.connect(self.app_state.skip)
        self.reset_btn.clicked.connect(self.app_state.reset_current)
        self.apply_btn.clicked.connect(self._apply_durations)
        self.alarm_check.toggled.connect(self.app_state.set_alarm_enabled)
        self.overrun_check.toggled.connect(self.app_state.set_overrun)
        self.add_btn.clicked.connect(self._add_task)
        self.task_input.returnPressed.connect(self._add_task)
        self.remove_btn.clicked.connect(self._remove_task)
        self.todo_list.itemDoubleClicked.connect(
            lambda _item: self.app_state.complete_task(self.todo_list.currentRow())
        )
        self.done_list.itemDoubleClicked.connect(
            lambda _item: self.app_state.uncomplete_task(self.done_list.currentRow())
        )
        self.todo_list.itemPressed.connect(lambda _item: self.done_list.clearSelection())
        self.done_list.itemPressed.connect(lambda _item: self.todo_list.clearSelection())
        self.app_state.timer_changed.connect(self._refresh_timer)
        self.app_state.mode_changed.connect(self._refresh_mode)
        self.app_state.tasks_changed.connect(self._refresh_tasks)
        self.app_state.state_changed.connect(self._sync_controls)
        self.app_state.state_changed.connect(self._refresh_stats)

    def _space_toggle(self) -> None:
        if self.task_input.hasFocus():
            self.task_input.insert(" ")
            return
        self.app_state.toggle_pause()

    def _apply_durations(self) -> None:
        self.app_state.configure(self.focus_minutes.value(), self.rest_minutes.value())

    def _add_task(self) -> None:
        if not self.app_state.add_task_from_text(self.task_input.text()):
            QMessageBox.information(self, "Tasks", "Task name cannot be empty")
            return
        self.task_input.clear()

    def _remove_task(self) -> None:
        for widget, completed in ((self.todo_list, False), (self.done_list, True)):
            if widget.selectedItems():
                self.app_state.remove_task_in_view(completed, widget.currentRow())
                return

    def _sync_durations(self) -> None:
        self.focus_minutes.setValue(self.app_state.settings.focus_minutes)
        self.rest_minutes.setValue(self.app_state.settings.rest_minutes)

    def _sync_controls(self) -> None:
        session = self.app_state.session
        for check, value in (
            (self.alarm_check, self.app_state.settings.alarm_enabled),
            (self.overrun_check, session.overrun_enabled),
        ):
            check.blockSignals(True)
            check.setChecked(value)
            check.blockSignals(False)
        self.pause_btn.setText("Resume" if self.app_state.paused else "Pause")
        in_transition = isinstance(session.get_mode(), Transitioning)
        self.skip_btn.setEnabled(not in_transition)
        self.reset_btn.setEnabled(not in_transition)

    def _refresh_mode(self, text: str) -> None:
        self.mode_label.setText(text)
        self.mode_label.setProperty("phase", steady_phase(self.app_state.session.get_mode()).value)
        self.mode_label.style().unpolish(self.mode_label)
        self.mode_label.style().polish(self.mode_label)
        self._sync_controls()

    def _refresh_timer(self, text: str) -> None:
        self.timer_label.setText(text)

    def _refresh_tasks(self) -> None:
        session = self.app_state.session
        for widget, completed in ((self.todo_list, False), (self.done_list, True)):
            widget.clear()
            for task in session.tasks_by_completion(completed):
                QListWidgetItem(str(task), widget)

    def _refresh_stats(self) -> None:
        self.stats_label.setText(f"Focus periods today: {self.app_state.focus_periods_today()}")

    def closeEvent(self, event) -> None:  # noqa: N802
        if not self.app_state.save_tasks():
            answer = QMessageBox.question(
                self,
                "Exit",
                "Tasks could not be saved. Exit anyway?",
                QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            )
            if answer != QMessageBox.StandardButton.Yes:
                event.ignore()
                return
        event.accept()
