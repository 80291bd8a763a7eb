"""Track-by-day grid with totals."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QPoint, QTimer, Qt
from PySide6.QtGui import QColor, QFont
from PySide6.QtWidgets import (QGridLayout, QGroupBox, QHBoxLayout, QInputDialog,
                               QLabel, QMainWindow, QMessageBox, QPushButton,
                               QTableWidget, QTableWidgetItem, QVBoxLayout,
                               QWidget)

from ..api_client import ApiError
from ..editor import TrackerEditor
from ..models import CellPixels
from .login import LoginDialog

FILLED = "■"
HALF = "◧"
EMPTY = "□"


def render_pixels(pixels: CellPixels) -> str:
    if pixels.total == 0:
        return f"{pixels.filled}" if pixels.has_progress else ""
    text = FILLED * min(pixels.filled, pixels.total)
    if pixels.half and pixels.filled < pixels.total:
        text += HALF
    return text + EMPTY * max(pixels.total - len(text), 0)


class TrackerWindow(QMainWindow):
    """Main window: one row per track, one column per day."""

    def __init__(self, editor: TrackerEditor, *, poll_interval: int = 60,
                 parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.editor = editor
        config = editor.config
        self.days = config.days
        self.setWindowTitle(config.title.replace("*", ""))
        self.resize(1280, 560)

        title_font = QFont()
        title_font.setPointSize(18)
        title_font.setBold(True)
        self.title_label = QLabel(config.title.replace("*", ""))
        self.title_label.setFont(title_font)
        self.subtitle_label = QLabel(config.subtitle)

        self.total_label = QLabel("-")
        self.today_label = QLabel("-")
        self.debt_label = QLabel("-")
        self.status_label = QLabel("")

        self.auth_button = QPushButton()
        self.refresh_button = QPushButton("Refresh")
        self.auth_button.clicked.connect(self._handle_auth)
        self.refresh_button.clicked.connect(self.reload)

        # tracks, then the highlight and misc rows
        self.table = QTableWidget(len(config.tracks) + 2, len(self.days) + 1)
        self.table.setHorizontalHeaderLabels([str(day) for day in self.days] + ["Progress"])
        self.table.setVerticalHeaderLabels(
            [f"{track.icon} {track.name}".strip() for track in config.tracks] + ["Highlight", "Misc"]
        )
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        self.table.setContextMenuPolicy(Qt.CustomContextMenu)
        self.table.cellClicked.connect(self._handle_cell_clicked)
        self.table.cellDoubleClicked.connect(self._handle_cell_double_clicked)
        self.table.customContextMenuRequested.connect(self._handle_context_menu)

        self._build_ui()

        self.timer = QTimer(self)
        self.timer.timeout.connect(self.reload)
        self.timer.start(max(poll_interval * 1000, 5000))

    # ------------------------------------------------------------------
    def _build_ui(self) -> None:
        header = QVBoxLayout()
        header.addWidget(self.title_label)
        header.addWidget(self.subtitle_label)

        summary = QGroupBox("Progress")
        summary_layout = QGridLayout(summary)
        summary_layout.addWidget(QLabel("Total:"), 0, 0)
        summary_layout.addWidget(self.total_label, 0, 1)
        summary_layout.addWidget(QLabel("Today:"), 1, 0)
        summary_layout.addWidget(self.today_label, 1, 1)
        summary_layout.addWidget(QLabel("Avoidance debt:"), 2, 0)
        summary_layout.addWidget(self.debt_label, 2, 1)

        top_row = QHBoxLayout()
        top_row.addLayout(header, stretch=1)
        top_row.addWidget(summary)

        button_row = QHBoxLayout()
        button_row.addWidget(self.status_label)
        button_row.addStretch(1)
        button_row.addWidget(self.refresh_button)
        button_row.addWidget(self.auth_button)

        central_widget = QWidget()
        layout = QVBoxLayout(central_widget)
        layout.addLayout(top_row)
        layout.addWidget(self.table, stretch=1)
        layout.addLayout(button_row)
        self.setCentralWidget(central_widget)

    # ------------------------------------------------------------------
    def reload(self) -> None:
        self.editor.load()
        self.render()

    def render(self) -> None:
        config = self.editor.config
        stats = self.editor.stats
        per_track = {item.track_id: item for item in stats.tracks}

        for row, track in enumerate(config.tracks):
            for column, day in enumerate(self.days):
                item = QTableWidgetItem()
                item.setTextAlignment(Qt.AlignCenter)
                if track.is_editable(day):
                    pixels = self.editor.cell(track.id, day)
                    item.setText(render_pixels(pixels))
                    if pixels.has_progress:
                        item.setForeground(QColor(track.color))
                    note = self.editor.note(track.id, day)
                    if note:
                        item.setToolTip(note)
                else:
                    item.setFlags(Qt.NoItemFlags)
                self.table.setItem(row, column, item)
            track_stats = per_track.get(track.id)
            progress = f"{track_stats.percentage}%" if track_stats and track.hours_per_day > 0 else "-"
            self.table.setItem(row, len(self.days), QTableWidgetItem(progress))

        highlight_row = len(config.tracks)
        misc_row = highlight_row + 1
        for column, day in enumerate(self.days):
            highlight = self.editor.highlight(day)
            highlight_item = QTableWidgetItem("★" if highlight else "")
            highlight_item.setToolTip(highlight)
            self.table.setItem(highlight_row, column, highlight_item)

            entry = self.editor.misc(day)
            misc_item = QTableWidgetItem(entry.time)
            misc_item.setToolTip(entry.comment)
            self.table.setItem(misc_row, column, misc_item)

        self.table.resizeColumnsToContents()

        total = stats.total
        self.total_label.setText(f"{total.total_logged:g} / {total.total_target:g} h ({total.percentage}%)")
        if stats.daily.day is None:
            self.today_label.setText("outside range")
        else:
            self.today_label.setText(f"{stats.daily.logged:g} / {stats.daily.target:g} h")
        self.debt_label.setText(f"{stats.avoidance_debt:g} h" if stats.avoidance_debt > 0 else "none")
        self.auth_button.setText("Lock" if self.editor.edit_mode else "Edit")
        self.status_label.setText(self.editor.last_error or ("Editing" if self.editor.edit_mode else "Read-only"))

    # ------------------------------------------------------------------
    def _track_at(self, row: int):
        tracks = self.editor.config.tracks
        return tracks[row] if 0 <= row < len(tracks) else None

    def _day_at(self, column: int) -> Optional[int]:
        return self.days[column] if 0 <= column < len(self.days) else None

    def _handle_cell_clicked(self, row: int, column: int) -> None:
        track = self._track_at(row)
        day = self._day_at(column)
        if track is None or day is None:
            return
        self.editor.increment_hours(track.id, day)
        self.render()

    def _handle_cell_double_clicked(self, row: int, column: int) -> None:
        day = self._day_at(column)
        if day is None or not self.editor.edit_mode:
            return
        highlight_row = len(self.editor.config.tracks)
        if row == highlight_row:
            text, ok = QInputDialog.getMultiLineText(
                self, f"Highlight for day {day}", "What did you discover today?", self.editor.highlight(day)
            )
            if ok:
                self.editor.set_highlight(day, text)
        elif row == highlight_row + 1:
            entry = self.editor.misc(day)
            time, ok = QInputDialog.getText(self, f"Misc time for day {day}", "Hours", text=entry.time)
            if not ok:
                return
            comment, ok = QInputDialog.getText(self, f"Misc comment for day {day}", "Comment", text=entry.comment)
            if ok:
                self.editor.set_misc(day, time, comment)
        self.render()

    def _handle_context_menu(self, pos: QPoint) -> None:
        index = self.table.indexAt(pos)
        track = self._track_at(index.row())
        day = self._day_at(index.column())
        if track is None or day is None or not self.editor.edit_mode or not track.is_editable(day):
            return
        text, ok = QInputDialog.getMultiLineText(
            self, f"{track.name}, day {day}", "Note", self.editor.note(track.id, day)
        )
        if ok:
            self.editor.set_note(track.id, day, text)
            self.render()

    def _handle_auth(self) -> None:
        try:
            if self.editor.edit_mode:
                self.editor.logout()
            else:
                dialog = LoginDialog(self.editor, parent=self)
                dialog.exec()
        except ApiError as exc:
            QMessageBox.warning(self, "API error", str(exc))
        self.render()


__all__ = ["TrackerWindow", "render_pixels"]
