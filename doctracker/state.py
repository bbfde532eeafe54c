"""
Dashboard state.

Toast, modal and theme are small independent state objects; the
DashboardController owns them together with the candidate list and drives
the endpoint calls. Times are plain floats from an injectable clock so the
toast timer can be tested without sleeping.
"""

import time
from dataclasses import replace
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from .client import FetchResult, ReminderResult, fetch_all, send_reminder
from .env import DEFAULT_TIMEOUT, accepts_override, is_configured
from .logger import get_logger
from .rules import Candidate, evaluate_records
from .search import filter_candidates
from .storage import load_theme, save_theme, system_prefers_dark

TOAST_DURATION_SECONDS = 3.0
FETCH_ERROR_TEMPLATE = (
    "Failed to fetch data: {reason}. "
    "Please check your App Script URL and deployment access."
)


class ToastState:
    """Transient status line. Stays up until a final message schedules its dismissal."""

    def __init__(
        self,
        duration: float = TOAST_DURATION_SECONDS,
        listener: Optional[Callable[[str], None]] = None,
    ):
        self.duration = duration
        self.listener = listener
        self.message = ""
        self.shown = False
        self.dismiss_at: Optional[float] = None

    def show(self, message: str) -> None:
        self.message = message
        self.shown = True
        self.dismiss_at = None
        self._notify()

    def finish(self, message: str, now: float) -> None:
        self.message = message
        self.shown = True
        self.dismiss_at = now + self.duration
        self._notify()

    def _notify(self) -> None:
        if self.listener is not None:
            self.listener(self.message)

    def dismiss(self) -> None:
        self.shown = False
        self.dismiss_at = None

    def visible(self, now: float) -> bool:
        if not self.shown:
            return False
        if self.dismiss_at is not None and now >= self.dismiss_at:
            self.dismiss()
            return False
        return True


class ModalState:
    """Detail view listing the documents that did not fit inline."""

    def __init__(self):
        self.show = False
        self.name = ""
        self.docs: Tuple[str, ...] = ()

    def open(self, name: str, docs: Tuple[str, ...]) -> None:
        self.show = True
        self.name = name
        self.docs = tuple(docs)

    def close(self) -> None:
        # contents are kept so a closing view can still render them
        self.show = False


class ThemeState:
    def __init__(self, preferences_file: Optional[Path] = None):
        self.preferences_file = preferences_file
        saved = load_theme(preferences_file) if preferences_file else None
        if saved is None:
            saved = "dark" if system_prefers_dark() else "light"
        self.current = saved

    @property
    def dark(self) -> bool:
        return self.current == "dark"

    def toggle(self) -> str:
        self.current = "light" if self.dark else "dark"
        if self.preferences_file is not None:
            save_theme(self.preferences_file, self.current)
        return self.current


class DashboardController:
    def __init__(
        self,
        api_url: str,
        preferences_file: Optional[Path] = None,
        timeout: float = DEFAULT_TIMEOUT,
        fetch: Callable[..., FetchResult] = fetch_all,
        send: Callable[..., ReminderResult] = send_reminder,
        clock: Callable[[], float] = time.monotonic,
        on_toast: Optional[Callable[[str], None]] = None,
    ):
        self.api_url = api_url
        self.timeout = timeout
        self.candidates: List[Candidate] = []
        self.search_term = ""
        self.loading = False
        self.error = ""
        self.toast = ToastState(listener=on_toast)
        self.modal = ModalState()
        self.theme = ThemeState(preferences_file)
        self._fetch = fetch
        self._send = send
        self._clock = clock

    @property
    def is_configured(self) -> bool:
        return is_configured(self.api_url)

    def start(self) -> None:
        """Load candidates if an endpoint is configured; otherwise wait for one."""
        if self.is_configured:
            self.reload()

    def configure(self, url: str) -> bool:
        """
        Apply a typed-in endpoint. Ignored unless it looks like an Apps Script
        URL; a changed endpoint triggers a reload.
        """
        url = (url or "").strip()
        if not accepts_override(url):
            get_logger().debug("Ignoring endpoint override", url=url)
            return False
        if url != self.api_url:
            self.api_url = url
            self.start()
        return True

    def reload(self) -> bool:
        self.loading = True
        self.error = ""
        try:
            result = self._fetch(self.api_url, timeout=self.timeout)
        finally:
            self.loading = False

        if not result.ok:
            self.error = FETCH_ERROR_TEMPLATE.format(reason=result.error)
            return False
        self.candidates = evaluate_records(result.records)
        return True

    def set_search(self, term: str) -> None:
        self.search_term = term or ""

    def visible_candidates(self) -> List[Candidate]:
        return filter_candidates(self.candidates, self.search_term)

    def send_reminder(self, candidate: Candidate) -> ReminderResult:
        self.toast.show(f"Sending reminder to {candidate.name}...")
        result = self._send(self.api_url, candidate, timeout=self.timeout)

        if result.ok:
            self.toast.finish(f"Reminder sent successfully to {candidate.name}!", self._clock())
            self.candidates = [
                replace(c, last_reminder_sent_at=result.sent_at) if c.email == candidate.email else c
                for c in self.candidates
            ]
        else:
            self.toast.finish(f"Failed to send reminder: {result.error}", self._clock())
        return result

    def toast_visible(self) -> bool:
        return self.toast.visible(self._clock())

    def show_more(self, candidate: Candidate) -> bool:
        """Open the detail view for a candidate with more than the inline docs."""
        if not candidate.overflow_docs:
            return False
        self.modal.open(candidate.name, candidate.overflow_docs)
        return True

    def close_modal(self) -> None:
        self.modal.close()

    def toggle_theme(self) -> str:
        return self.theme.toggle()

    def find_by_email(self, email: str) -> Optional[Candidate]:
        needle = (email or "").strip().lower()
        if not needle:
            return None
        for c in self.candidates:
            if c.email.lower() == needle:
                return c
        return None

    def find_by_row(self, row: int) -> Optional[Candidate]:
        """Look up a candidate by the 1-based row number shown for the current search."""
        visible = self.visible_candidates()
        if 1 <= row <= len(visible):
            return visible[row - 1]
        return None

    def find_by_name(self, name: str) -> Optional[Candidate]:
        needle = (name or "").strip().lower()
        if not needle:
            return None
        for c in self.candidates:
            if c.name.lower() == needle:
                return c
        return None
