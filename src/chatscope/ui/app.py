"""Main Textual TUI application.

Orchestrates the transcript view and wires its collaborators: the
transcript source, the navigation callbacks and the log panel.
"""

import asyncio
from pathlib import Path
from uuid import UUID

from pydantic import ValidationError
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from ..annotations.decoder import AnnotationDecoder
from ..transcript.models import Transcript, load_transcript
from ..transcript.projection import TranscriptContext
from .callbacks import OpenFileRequested, ScrollIndexChanged, TUINavigation
from .config import TRANSCRIPT_POLL_INTERVAL, LogLevel
from .styles import APP_CSS
from .themes import CHATSCOPE_MOCHA
from .widgets import DebugPanel, MessageView, TranscriptView


class TranscriptApp(App):
    """Textual TUI that displays a conversation transcript.

    The transcript comes from a JSON file that an external process may
    rewrite while the app runs; each change is rendered as a new snapshot.
    """

    CSS = APP_CSS
    TITLE = "chatscope"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+r", "reload", "Reload"),
        Binding("ctrl+t", "toggle_hide_code", "Chips/Code"),
        Binding("end", "scroll_bottom", "Bottom"),
        Binding("ctrl+d", "toggle_debug", "Debug"),
    ]

    def __init__(
        self,
        source: Path | None = None,
        transcript: Transcript = (),
        thread_id: str = "",
        repo_ref: str = "",
        repo_name: str = "",
        is_loading: bool = False,
        is_history: bool = False,
        hide_code: bool = False,
        log_level: str | None = None,
        poll_interval: float = TRANSCRIPT_POLL_INTERVAL,
    ) -> None:
        super().__init__()
        self._source = source
        self._initial = transcript
        self._transcript_context = TranscriptContext(
            thread_id=thread_id,
            repo_ref=repo_ref,
            repo_name=repo_name,
            is_loading=is_loading,
            is_history=is_history,
        )
        self._hide_code = hide_code
        self._log_level = log_level
        self._poll_interval = poll_interval
        self._source_mtime: float | None = None
        self.navigation = TUINavigation(self)
        self.decoder = AnnotationDecoder(self.navigation)
        self.edits: list[tuple[UUID, int]] = []

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield TranscriptView(
            self._transcript_context,
            self.decoder,
            on_message_edit=self.on_message_edit,
            hide_code=self._hide_code,
            id="transcript",
        )
        yield DebugPanel(id="debug-panel")
        yield Footer()

    async def on_mount(self) -> None:
        self.register_theme(CHATSCOPE_MOCHA)
        self.theme = "chatscope-mocha"

        log_panel = self.query_one("#debug-panel", DebugPanel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.info("TUI", f"Log panel enabled with level: {self._log_level.upper()}")

        view = self.query_one("#transcript", TranscriptView)
        view.follow.set_debug_callback(log_panel.route)
        self.decoder.set_debug_callback(log_panel.route)

        parts = [self._transcript_context.repo_name or "no repository"]
        if self._transcript_context.thread_id:
            parts.append(f"thread {self._transcript_context.thread_id}")
        parts.append("history" if self._transcript_context.is_history else "live")
        self.sub_title = " | ".join(parts)

        if self._source is not None:
            await self._load_source()
            if self._poll_interval > 0:
                self.set_interval(self._poll_interval, self._poll_source)
        else:
            await view.set_transcript(self._initial)

    async def _load_source(self) -> None:
        """Read the transcript file and render it as a new snapshot."""
        assert self._source is not None
        log_panel = self.query_one("#debug-panel", DebugPanel)
        try:
            self._source_mtime = self._source.stat().st_mtime
            transcript = load_transcript(self._source.read_bytes())
        except (OSError, ValidationError) as e:
            log_panel.error("Source", f"Cannot load {self._source}: {e}")
            self.notify(f"Cannot load transcript: {str(e)[:50]}", severity="error", timeout=5)
            return

        log_panel.debug("Source", f"Loaded {len(transcript)} turns from {self._source}")
        await self.query_one("#transcript", TranscriptView).set_transcript(transcript)

    async def _poll_source(self) -> None:
        if self._source is None:
            return
        try:
            mtime = self._source.stat().st_mtime
        except OSError:
            return
        if mtime != self._source_mtime:
            await self._load_source()

    def on_message_edit(self, query_id: UUID, index: int) -> None:
        """Edit callback handed to the transcript view."""
        self.edits.append((query_id, index))
        self.query_one("#debug-panel", DebugPanel).info(
            "TUI", f"Edit requested for turn {index} (query {query_id})"
        )
        self.notify(f"Editing turn {index + 1}", timeout=2)

    def on_open_file_requested(self, event: OpenFileRequested) -> None:
        log_panel = self.query_one("#debug-panel", DebugPanel)
        line = "" if event.start_line is None else f":{event.start_line + 1}"
        log_panel.info("Nav", f"Open {event.path}{line}")
        self.notify(f"Open {event.path}{line}", timeout=3)

    def on_scroll_index_changed(self, event: ScrollIndexChanged) -> None:
        log_panel = self.query_one("#debug-panel", DebugPanel)
        log_panel.info("Nav", f"Scroll file viewer to {event.lines}")
        log_panel.debug("Nav", str(self.navigation.snapshot()))

    def on_message_view_feedback_given(self, event: MessageView.FeedbackGiven) -> None:
        verdict = "helpful" if event.positive else "not helpful"
        self.query_one("#debug-panel", DebugPanel).info(
            "TUI", f"Feedback for {event.query_id}: {verdict}"
        )
        self.notify("Thanks for the feedback", timeout=2)

    async def action_reload(self) -> None:
        """Re-read the transcript source."""
        if self._source is None:
            self.notify("No transcript file to reload", severity="warning")
            return
        await self._load_source()
        self.notify("Transcript reloaded", timeout=2)

    async def action_toggle_hide_code(self) -> None:
        """Switch quoted code between file chips and full quotes."""
        view = self.query_one("#transcript", TranscriptView)
        await view.set_hide_code(not view.hide_code)
        self.notify("File chips" if view.hide_code else "Source quotes", timeout=2)

    def action_scroll_bottom(self) -> None:
        self.query_one("#transcript", TranscriptView).scroll_to_bottom()

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)


async def run_textual_tui(
    source: Path | None = None,
    transcript: Transcript = (),
    thread_id: str = "",
    repo_ref: str = "",
    repo_name: str = "",
    is_loading: bool = False,
    is_history: bool = False,
    hide_code: bool = False,
    log_level: str | None = None,
    poll_interval: float = TRANSCRIPT_POLL_INTERVAL,
) -> None:
    """Run the Textual TUI.

    Args:
        source: Transcript JSON file, re-read whenever it changes
        transcript: Transcript to show when no source file is given
        thread_id: Conversation thread identifier
        repo_ref: Repository reference the answers are about
        repo_name: Display name of that repository
        is_loading: An answer is still being produced
        is_history: The transcript is a stored conversation
        hide_code: Show quoted code as file chips
        log_level: Log level for panel (debug/info/warning/error), None to hide
        poll_interval: Seconds between checks of the source file; 0 disables
    """
    app = TranscriptApp(
        source=source,
        transcript=transcript,
        thread_id=thread_id,
        repo_ref=repo_ref,
        repo_name=repo_name,
        is_loading=is_loading,
        is_history=is_history,
        hide_code=hide_code,
        log_level=log_level,
        poll_interval=poll_interval,
    )
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
