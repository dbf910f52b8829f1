"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Transcript layout and scroll-follow behaviour
- Per-turn message rendering (header, search steps, body, feedback)
- Leaf renderers for decoded code annotations
- Log rendering with level filtering
"""

from collections.abc import Callable
from datetime import datetime
from uuid import UUID

from rich.syntax import Syntax
from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click, Enter, Leave
from textual.message import Message
from textual.widgets import Button, Collapsible, Markdown, RichLog, Static

from ..annotations.decoder import AnnotationDecoder
from ..annotations.grammar import format_line_range
from ..annotations.models import (
    ColorSwatchStrategy,
    FileChipStrategy,
    PlainCodeStrategy,
    RenderStrategy,
    SourceQuoteStrategy,
    SyntaxBlockStrategy,
)
from ..markdown.segments import CodeSegment, segment_markdown
from ..transcript.follow import ScrollFollowController, ScrollMetrics
from ..transcript.models import ChatMessageAuthor, Transcript
from ..transcript.projection import (
    MessageEditCallback,
    TranscriptContext,
    TurnProps,
    project_transcript,
    server_turn_count,
)
from .config import (
    CHIP_ICON,
    DEFAULT_HIGHLIGHT_COLOR,
    DEFAULT_LANGUAGE,
    LOG_TIMESTAMP_FORMAT,
    MESSAGE_TIMESTAMP_FORMAT,
    SWATCH_GLYPH,
    SYNTAX_THEME,
    LogLevel,
)


def _classes_from(attributes: dict, *extra: str) -> str:
    """CSS classes for a code widget: its own plus any forwarded ``class``."""
    forwarded = attributes.get("class") or attributes.get("className") or ""
    return " ".join(part for part in (*extra, str(forwarded)) if part)


class FileChip(Static):
    """Compact, clickable reference to quoted lines of a file."""

    def __init__(
        self,
        strategy: FileChipStrategy,
        decoder: AnnotationDecoder,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.strategy = strategy
        self._decoder = decoder

    def on_mount(self) -> None:
        label = Text()
        label.append(f"{CHIP_ICON} ", style="bold")
        label.append(self.strategy.file_name or "unknown file")
        if self.strategy.line_range is not None:
            label.append(
                f"  L{format_line_range(self.strategy.line_range)}", style="dim"
            )
        self.update(label)
        self._decoder.highlight(self.strategy)

    def on_click(self, event: Click) -> None:
        event.stop()
        self.strategy.activate()

    def on_enter(self, event: Enter) -> None:
        self._decoder.hover(self.strategy)

    def on_leave(self, event: Leave) -> None:
        self._decoder.hover(None)


class SourceQuote(Vertical):
    """Quoted source with a breadcrumb; clicking opens the file."""

    def __init__(
        self,
        strategy: SourceQuoteStrategy,
        repo_name: str,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.strategy = strategy
        self._repo_name = repo_name

    def compose(self) -> ComposeResult:
        crumbs = [part for part in self.strategy.path.split("/") if part]
        breadcrumb = " › ".join([self._repo_name, *crumbs]) if self._repo_name else " › ".join(crumbs)
        yield Static(Text(breadcrumb or "source"), classes="quote-breadcrumb")
        yield Static(
            Syntax(
                self.strategy.code,
                self.strategy.language or DEFAULT_LANGUAGE,
                theme=SYNTAX_THEME,
                line_numbers=True,
                start_line=(self.strategy.start_line or 0) + 1,
                word_wrap=True,
            ),
            classes="quote-code",
        )

    def on_click(self, event: Click) -> None:
        event.stop()
        self.strategy.open(DEFAULT_HIGHLIGHT_COLOR)


class SyntaxBlock(Static):
    """Highlighted code block without file provenance."""

    def __init__(self, strategy: SyntaxBlockStrategy, *args, **kwargs) -> None:
        super().__init__(
            Syntax(
                strategy.code,
                strategy.language or DEFAULT_LANGUAGE,
                theme=SYNTAX_THEME,
                word_wrap=True,
            ),
            *args,
            **kwargs,
        )
        self.strategy = strategy


class ColorSwatch(Static):
    """Color preview followed by the code span itself."""

    def __init__(self, strategy: ColorSwatchStrategy, *args, **kwargs) -> None:
        preview = Text()
        preview.append(SWATCH_GLYPH, style=strategy.color)
        preview.append(" ")
        preview.append(strategy.element.text, style="bold")
        kwargs.setdefault("classes", _classes_from(strategy.attributes, "color-swatch"))
        super().__init__(preview, *args, **kwargs)
        self.strategy = strategy


class PlainCode(Static):
    """The code element unchanged."""

    def __init__(self, strategy: PlainCodeStrategy, *args, **kwargs) -> None:
        kwargs.setdefault("classes", _classes_from(strategy.attributes, "plain-code"))
        super().__init__(Text(strategy.element.text.rstrip("\n")), *args, **kwargs)
        self.strategy = strategy


def build_code_widget(
    strategy: RenderStrategy,
    decoder: AnnotationDecoder,
    repo_name: str,
) -> Static | Vertical:
    """Pick the leaf widget for a decoded strategy."""
    if isinstance(strategy, FileChipStrategy):
        return FileChip(strategy, decoder, classes="file-chip")
    if isinstance(strategy, SourceQuoteStrategy):
        return SourceQuote(strategy, repo_name, classes="source-quote")
    if isinstance(strategy, SyntaxBlockStrategy):
        return SyntaxBlock(strategy, classes="syntax-block")
    if isinstance(strategy, ColorSwatchStrategy):
        return ColorSwatch(strategy)
    if isinstance(strategy, PlainCodeStrategy):
        return PlainCode(strategy)
    raise TypeError(f"No widget for strategy {type(strategy).__name__}")


class MessageView(Vertical):
    """One turn of the conversation."""

    class FeedbackGiven(Message):
        """User rated the latest answer."""

        def __init__(self, query_id: UUID, positive: bool) -> None:
            super().__init__()
            self.query_id = query_id
            self.positive = positive

    def __init__(
        self,
        props: TurnProps,
        decoder: AnnotationDecoder,
        scroll_to_bottom: Callable[[], None],
        on_message_edit: MessageEditCallback | None = None,
        hide_code: bool = False,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.props = props
        self._decoder = decoder
        self._scroll_to_bottom = scroll_to_bottom
        self._on_message_edit = on_message_edit
        self._hide_code = hide_code

    def _header(self) -> Text:
        if self.props.author == ChatMessageAuthor.USER:
            return Text("> You")
        header = "< Assistant"
        if self.props.response_timestamp is not None:
            header += f" [{self.props.response_timestamp.strftime(MESSAGE_TIMESTAMP_FORMAT)}]"
        if self.props.explained_file:
            header += f"  explaining {self.props.explained_file}"
        return Text(header)

    def _body(self, markdown: str) -> ComposeResult:
        for segment in segment_markdown(markdown):
            if isinstance(segment, CodeSegment):
                strategy = self._decoder.decode(
                    segment.element, inline=False, hide_code=self._hide_code
                )
                yield build_code_widget(strategy, self._decoder, self.props.repo_name)
                continue

            yield Markdown(segment.markdown, classes="message-content")
            swatches = [
                strategy
                for strategy in (
                    self._decoder.decode(element, inline=True)
                    for element in segment.inline_code
                )
                if isinstance(strategy, ColorSwatchStrategy)
            ]
            if swatches:
                with Horizontal(classes="swatch-row"):
                    for strategy in swatches:
                        yield ColorSwatch(strategy)

    def compose(self) -> ComposeResult:
        yield Static(self._header(), classes="message-header")

        if self.props.loading_steps:
            with Collapsible(
                title=f"Searched {len(self.props.loading_steps)} step(s)",
                collapsed=not self.props.is_loading,
                classes="loading-steps",
            ):
                for step in self.props.loading_steps:
                    label = step.display_value or step.content
                    yield Static(Text(f"{step.type.value}: {label}"), classes="loading-step")

        if self.props.is_loading and not self.props.text:
            yield Static("Thinking...", classes="message-loading")
        elif self.props.text:
            yield from self._body(self.props.text)

        if self.props.results and self.props.results != self.props.text:
            yield from self._body(self.props.results)

        if self.props.error:
            yield Static(Text(self.props.error), classes="message-error")

        if self.props.show_inline_feedback:
            with Horizontal(classes="inline-feedback"):
                yield Static("Was this answer helpful?", classes="feedback-prompt")
                yield Button("Yes", id="feedback-up", variant="success")
                yield Button("No", id="feedback-down", variant="error")

        if self.props.author == ChatMessageAuthor.USER and self._on_message_edit is not None:
            yield Button("Edit", id="edit-message", classes="edit-button")

    def on_collapsible_expanded(self, event: Collapsible.Expanded) -> None:
        """Expanded search steps grow the turn; keep the newest content visible."""
        self.call_after_refresh(self._scroll_to_bottom)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if button_id == "edit-message" and self._on_message_edit is not None:
            event.stop()
            self._on_message_edit(self.props.query_id, self.props.index)
        elif button_id in ("feedback-up", "feedback-down"):
            event.stop()
            self.post_message(
                self.FeedbackGiven(self.props.query_id, button_id == "feedback-up")
            )
            self.query_one(".inline-feedback").remove()


class TranscriptView(VerticalScroll):
    """Scrollable transcript that follows new content.

    The view stays pinned to the bottom while the user is there; scrolling
    up pauses following until they scroll back down.
    """

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation"
    ALLOW_MAXIMIZE = True

    def __init__(
        self,
        context: TranscriptContext,
        decoder: AnnotationDecoder,
        on_message_edit: MessageEditCallback | None = None,
        hide_code: bool = False,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self._transcript_context = context
        self._decoder = decoder
        self._on_message_edit = on_message_edit
        self._hide_code = hide_code
        self._transcript: Transcript = ()
        self.follow = ScrollFollowController(self)
        if not context.is_history:
            self.add_class("-live")

    @property
    def transcript(self) -> Transcript:
        return self._transcript

    @property
    def hide_code(self) -> bool:
        return self._hide_code

    # ScrollContainer protocol

    def scroll_metrics(self) -> ScrollMetrics:
        return ScrollMetrics(
            offset=self.scroll_y,
            scroll_height=self.virtual_size.height,
            client_height=self.container_size.height,
        )

    def scroll_to_end(self, smooth: bool = True) -> None:
        self.scroll_end(animate=smooth)

    def scroll_to_bottom(self) -> None:
        """Re-pin to the newest content; passed down to every message."""
        self.follow.scroll_to_bottom()

    def watch_scroll_y(self, old_value: float, new_value: float) -> None:
        super().watch_scroll_y(old_value, new_value)
        self.follow.on_scroll()

    def _message_views(self) -> list[MessageView]:
        return [
            MessageView(
                props,
                self._decoder,
                scroll_to_bottom=self.scroll_to_bottom,
                on_message_edit=self._on_message_edit,
                hide_code=self._hide_code,
                classes=f"chat-message {props.author.value}-message",
            )
            for props in project_transcript(self._transcript, self._transcript_context)
        ]

    async def set_transcript(
        self,
        transcript: Transcript,
        is_loading: bool | None = None,
    ) -> None:
        """Render a new transcript snapshot, replacing the previous one."""
        if is_loading is not None and is_loading != self._transcript_context.is_loading:
            self._transcript_context = TranscriptContext(
                thread_id=self._transcript_context.thread_id,
                repo_ref=self._transcript_context.repo_ref,
                repo_name=self._transcript_context.repo_name,
                is_loading=is_loading,
                is_history=self._transcript_context.is_history,
            )
        self._transcript = transcript
        await self._rerender()

    async def set_hide_code(self, hide_code: bool) -> None:
        """Switch quoted code between full quotes and file chips."""
        self._hide_code = hide_code
        await self._rerender()

    async def _rerender(self) -> None:
        await self.remove_children()
        await self.mount_all(self._message_views())
        self.border_subtitle = (
            f"{len(self._transcript)} turns, {server_turn_count(self._transcript)} answers"
        )
        # Follow only once layout includes the new content.
        self.call_after_refresh(self.follow.commit, self._transcript)


class DebugPanel(RichLog):
    """Log panel for real-time tracing with level filtering.

    Shows timestamped log messages from all components.
    Supports standard log levels: DEBUG < INFO < WARNING < ERROR.
    Hidden by default, shown with --log-level flag or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=False,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def add_entry(
        self,
        component: str,
        message: str,
        level: int = LogLevel.DEBUG
    ) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            component: Component name (TUI, Follow, Decoder, Source, Nav)
            message: Log message
            level: Log level (LogLevel.DEBUG, INFO, WARNING, ERROR)
        """
        if level < self._log_level:
            return

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        level_colors = {
            LogLevel.DEBUG: "dim white",
            LogLevel.INFO: "cyan",
            LogLevel.WARNING: "yellow",
            LogLevel.ERROR: "red",
        }
        component_colors = {
            "TUI": "cyan",
            "Follow": "green",
            "Decoder": "magenta",
            "Source": "yellow",
            "Nav": "bright_blue",
        }
        level_color = level_colors.get(level, "white")
        comp_color = component_colors.get(component, "white")

        self.write(
            f"[dim]{timestamp}[/] "
            f"[{level_color}]{LogLevel.name(level):<5}[/] "
            f"[{comp_color}]\\[{component}][/] {message}"
        )

    def debug(self, component: str, message: str) -> None:
        self.add_entry(component, message, LogLevel.DEBUG)

    def info(self, component: str, message: str) -> None:
        self.add_entry(component, message, LogLevel.INFO)

    def warning(self, component: str, message: str) -> None:
        self.add_entry(component, message, LogLevel.WARNING)

    def error(self, component: str, message: str) -> None:
        self.add_entry(component, message, LogLevel.ERROR)

    def route(self, level: str, component: str, message: str) -> None:
        """Debug callback target: Callable(level, component, message)."""
        self.add_entry(component, message, LogLevel.from_string(level))

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True
