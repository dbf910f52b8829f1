"""Terminal UI module for chatscope.

Provides a Textual-based TUI that displays a conversation transcript.

Module structure (Parnas principle - each module hides a design decision):
- widgets.py: Transcript view, message view, code annotation leaf widgets
- callbacks.py: Navigation collaborators (how clicks reach the app)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- config.py: Constants and log levels
- app.py: Application orchestration (transcript source, bindings)
"""

from .app import TranscriptApp, run_textual_tui
from .callbacks import OpenFileRequested, ScrollIndexChanged, TUINavigation
from .config import LogLevel
from .widgets import (
    ColorSwatch,
    DebugPanel,
    FileChip,
    MessageView,
    PlainCode,
    SourceQuote,
    SyntaxBlock,
    TranscriptView,
    build_code_widget,
)

__all__ = [
    "ColorSwatch",
    "DebugPanel",
    "FileChip",
    "LogLevel",
    "MessageView",
    "OpenFileRequested",
    "PlainCode",
    "ScrollIndexChanged",
    "SourceQuote",
    "SyntaxBlock",
    "TUINavigation",
    "TranscriptApp",
    "TranscriptView",
    "build_code_widget",
    "run_textual_tui",
]
