"""Entry point for the desktop companion."""

from __future__ import annotations

import logging
import sys

from PySide6.QtWidgets import QApplication, QMessageBox

from .api_client import ApiClient, ApiError
from .config import load_config
from .editor import TrackerEditor
from .widgets.grid import TrackerWindow


def main() -> None:
    """Start the Qt application."""

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = QApplication(sys.argv)
    app.setApplicationName("Winter Tracker")
    config = load_config()

    api_client = ApiClient(config.api_base_url)
    try:
        tracker_config = api_client.get_config()
    except ApiError as exc:  # pragma: no cover - UI feedback
        QMessageBox.critical(None, "API error", str(exc))
        sys.exit(1)

    editor = TrackerEditor(tracker_config, api_client)
    editor.load()
    if config.edit_password and not editor.edit_mode:
        try:
            editor.login(config.edit_password)
        except ApiError as exc:  # pragma: no cover - UI feedback
            QMessageBox.warning(None, "Login failed", str(exc))

    window = TrackerWindow(editor, poll_interval=config.polling_interval_seconds)
    window.render()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()


__all__ = ["main"]
