"""Editing intents for the tracker grid.

The editor owns a local copy of the tracker document. Every intent builds a
new document, recomputes the statistics from scratch and uploads the whole
document once. Saves are not queued or retried; whichever upload reaches the
server last wins.
"""

from __future__ import annotations

import copy
import datetime as dt
import logging
import math
from typing import Any, Callable, Optional

from winter_tracker.aggregator import StatsSnapshot, composite_key, logged_hours, recompute_stats
from winter_tracker.store import with_sections
from winter_tracker.tracks import TrackerConfig

from .api_client import ApiClient, ApiError
from .models import CellPixels, MiscEntry

logger = logging.getLogger(__name__)


def cell_pixels(logged: float, hours_per_day: float) -> CellPixels:
    total = int(math.ceil(hours_per_day)) if hours_per_day > 0 else 0
    filled = int(math.floor(logged)) if logged > 0 else 0
    return CellPixels(total=total, filled=filled, half=logged % 1 >= 0.5)


class TrackerEditor:
    """Holds the document, the edit mode and the derived statistics."""

    def __init__(
        self,
        config: TrackerConfig,
        api_client: Optional[ApiClient] = None,
        *,
        document: Optional[dict[str, Any]] = None,
        edit_mode: bool = False,
        today: Callable[[], dt.date] = dt.date.today,
    ) -> None:
        self.config = config
        self.api_client = api_client
        self.document: dict[str, Any] = with_sections(document)
        self.edit_mode = edit_mode
        self._today = today
        self.last_error: Optional[str] = None
        self.stats: StatsSnapshot = self.recompute()

    # ------------------------------------------------------------------
    # Loading and auth
    # ------------------------------------------------------------------
    def load(self) -> None:
        """Fetch auth status and the stored document."""
        if self.api_client is None:
            return
        try:
            self.edit_mode = self.api_client.check_auth()
            self.document = with_sections(self.api_client.get_data())
        except ApiError as exc:
            logger.error("Failed to load: %s", exc)
            self.last_error = str(exc)
        self.recompute()

    def login(self, password: str) -> bool:
        """Unlock edit mode. Transport failures land in ``last_error``."""
        if self.api_client is None:
            return False
        try:
            self.edit_mode = self.api_client.login(password)
        except ApiError as exc:
            logger.error("Failed to log in: %s", exc)
            self.last_error = str(exc)
            self.edit_mode = False
            return False
        self.last_error = None
        return self.edit_mode

    def logout(self) -> None:
        if self.api_client is not None:
            self.api_client.logout()
        self.edit_mode = False

    def recompute(self) -> StatsSnapshot:
        self.stats = recompute_stats(self.config, self.document, self._today())
        return self.stats

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------
    def hours(self, track_id: str, day: int) -> float:
        return logged_hours(self.document, track_id, day)

    def note(self, track_id: str, day: int) -> str:
        return str(self.document["notes"].get(composite_key(track_id, day)) or "")

    def highlight(self, day: int) -> str:
        highlights = self.document["highlights"]
        return str(highlights.get(str(day)) or highlights.get(day) or "")

    def misc(self, day: int) -> MiscEntry:
        misc = self.document["misc"]
        entry = misc.get(str(day)) or misc.get(day) or {}
        if not isinstance(entry, dict):
            return MiscEntry()
        return MiscEntry(time=str(entry.get("time") or ""), comment=str(entry.get("comment") or ""))

    def cell(self, track_id: str, day: int) -> CellPixels:
        track = self.config.track(track_id)
        hours_per_day = track.hours_per_day if track else 0
        return cell_pixels(self.hours(track_id, day), hours_per_day)

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------
    def increment_hours(self, track_id: str, day: int) -> Optional[float]:
        """Add one increment; wraps to zero once the daily target is reached."""
        if not self.edit_mode:
            return None
        track = self.config.track(track_id)
        if track is None or day not in self.config.days or not track.is_editable(day):
            return None
        current = self.hours(track_id, day)
        if current >= track.hours_per_day:
            updated = 0.0
        else:
            updated = current + self.config.features.increment_amount
        document = copy.deepcopy(self.document)
        document["hours"][composite_key(track_id, day)] = updated
        self._commit(document)
        return updated

    def set_note(self, track_id: str, day: int, text: str) -> None:
        if not self.edit_mode:
            return
        document = copy.deepcopy(self.document)
        document["notes"][composite_key(track_id, day)] = text
        self._commit(document)

    def set_highlight(self, day: int, text: str) -> None:
        if not self.edit_mode:
            return
        document = copy.deepcopy(self.document)
        document["highlights"].pop(day, None)
        document["highlights"][str(day)] = text
        self._commit(document)

    def set_misc(self, day: int, time: str, comment: str) -> None:
        if not self.edit_mode:
            return
        document = copy.deepcopy(self.document)
        document["misc"].pop(day, None)
        document["misc"][str(day)] = MiscEntry(time=time.strip(), comment=comment).as_dict()
        self._commit(document)

    # ------------------------------------------------------------------
    def _commit(self, document: dict[str, Any]) -> None:
        self.document = document
        self.recompute()
        self._save()

    def _save(self) -> bool:
        if self.api_client is None:
            return True
        try:
            self.api_client.save_data(self.document)
        except ApiError as exc:
            logger.error("Failed to save: %s", exc)
            self.last_error = str(exc)
            return False
        self.last_error = None
        return True


__all__ = ["TrackerEditor", "cell_pixels"]
