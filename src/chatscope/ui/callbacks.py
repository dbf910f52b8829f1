"""Navigation collaborators for code annotations.

Hides how a click on a file chip or a source quote reaches the app:
the decoder only sees the ``CodeNavigation`` interface, and this module
turns those calls into Textual messages and highlight-state updates.
Uses thread-safe posting so a transcript source on a worker thread can
share the same instance.
"""

import threading
from typing import TYPE_CHECKING, Any

from textual.message import Message

from ..annotations.models import LineRange

if TYPE_CHECKING:
    from textual.app import App


class ScrollIndexChanged(Message):
    """The file viewer should scroll to a line range ("<start>_<end>")."""

    def __init__(self, lines: str) -> None:
        super().__init__()
        self.lines = lines


class OpenFileRequested(Message):
    """A source quote asked for its file to be opened."""

    def __init__(
        self,
        path: str,
        start_line: int | None = None,
        highlight_color: str | None = None,
    ) -> None:
        super().__init__()
        self.path = path
        self.start_line = start_line
        self.highlight_color = highlight_color


class TUINavigation:
    """``CodeNavigation`` implementation backed by a Textual app.

    Highlight state lives here; the app reads it when it opens a file.
    """

    def __init__(self, app: "App | None" = None) -> None:
        self.app = app
        self.scroll_index: str | None = None
        self.file_highlights: dict[str, list[LineRange]] = {}
        self.hovered_lines: LineRange | None = None

    def _post(self, message: Message) -> None:
        """Post a message to the app in a thread-safe manner."""
        if self.app is None:
            return
        if self.app._thread_id != threading.get_ident():
            self.app.call_from_thread(self.app.post_message, message)
        else:
            self.app.post_message(message)

    def update_scroll_to_index(self, lines: str) -> None:
        self.scroll_index = lines
        self._post(ScrollIndexChanged(lines))

    def open_file_modal(
        self,
        path: str,
        start_line: int | None = None,
        highlight_color: str | None = None,
    ) -> None:
        self._post(OpenFileRequested(path, start_line, highlight_color))

    def set_file_highlights(self, path: str, ranges: list[LineRange]) -> None:
        existing = self.file_highlights.setdefault(path, [])
        for line_range in ranges:
            if line_range not in existing:
                existing.append(line_range)

    def set_hovered_lines(self, line_range: LineRange | None) -> None:
        self.hovered_lines = line_range

    def highlights_for(self, path: str) -> list[LineRange]:
        """Ranges highlighted so far in ``path``."""
        return list(self.file_highlights.get(path, []))

    def snapshot(self) -> dict[str, Any]:
        """Plain-data view of the navigation state, for the log panel."""
        return {
            "scroll_index": self.scroll_index,
            "hovered": self.hovered_lines.as_tuple() if self.hovered_lines else None,
            "files": {
                path: [r.as_tuple() for r in ranges]
                for path, ranges in self.file_highlights.items()
            },
        }
