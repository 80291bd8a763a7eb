"""Password prompt that unlocks edit mode."""

from __future__ import annotations

from typing import Optional

from PySide6.QtWidgets import (QDialog, QDialogButtonBox, QLabel, QLineEdit,
                               QVBoxLayout, QWidget)

from ..editor import TrackerEditor


class LoginDialog(QDialog):
    def __init__(self, editor: TrackerEditor, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.editor = editor
        self.setWindowTitle("Unlock editing")

        self.password_input = QLineEdit()
        self.password_input.setEchoMode(QLineEdit.Password)
        self.error_label = QLabel("")
        self.error_label.setStyleSheet("color: #db4437;")

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self._handle_login)
        buttons.rejected.connect(self.reject)

        layout = QVBoxLayout(self)
        layout.addWidget(QLabel("Password"))
        layout.addWidget(self.password_input)
        layout.addWidget(self.error_label)
        layout.addWidget(buttons)

    def _handle_login(self) -> None:
        if self.editor.login(self.password_input.text()):
            self.password_input.clear()
            self.accept()
            return
        self.error_label.setText(self.editor.last_error or "Invalid password")


__all__ = ["LoginDialog"]
