"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Uses Textual CSS features: nesting, pseudo-classes, variables.
"""

APP_CSS = """
/* ============================================
   CSS Variables - Design Tokens
   ============================================ */
$chip-background: $boost;
$chip-background-hover: $primary 25%;
$quote-breadcrumb: $text-muted;
$quote-border: $border;

/* ============================================
   Main Screen Layout
   ============================================ */
Screen {
    layout: vertical;
    background: $background;
}

/* ============================================
   Transcript Panel
   ============================================ */
#transcript {
    height: 1fr;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus {
        border: round $primary;
    }

    /* Live conversations sit in a compact panel above the input area */
    &.-live {
        max-height: 60;
    }
}

/* ============================================
   Turns
   ============================================ */
.chat-message {
    height: auto;
    margin: 1 0 0 0;
    padding: 0 1;
}

.user-message {
    border-left: thick $secondary;
}

.server-message {
    border-left: thick $primary;
}

.message-header {
    color: $text-muted;
    text-style: bold;
}

.message-content {
    margin: 0;
    padding: 0;
}

.message-loading {
    color: $warning;
    text-style: italic;
}

.message-error {
    color: $error;
}

.loading-steps {
    height: auto;
    border: none;
    padding: 0;
}

.loading-step {
    color: $text-muted;
}

.inline-feedback {
    height: auto;
    margin: 1 0 0 0;

    & .feedback-prompt {
        width: auto;
        padding: 1 1 0 0;
        color: $text-muted;
    }

    & Button {
        min-width: 6;
        margin: 0 1 0 0;
    }
}

.edit-button {
    min-width: 6;
    margin: 0;
}

/* ============================================
   Code Annotations
   ============================================ */
.file-chip {
    width: auto;
    height: 1;
    padding: 0 1;
    background: $chip-background;
    color: $accent;

    &:hover {
        background: $chip-background-hover;
    }
}

.source-quote {
    height: auto;
    border: round $quote-border;
    margin: 1 0;

    &:hover {
        border: round $accent;
    }
}

.quote-breadcrumb {
    color: $quote-breadcrumb;
    padding: 0 1;
}

.syntax-block {
    height: auto;
    margin: 1 0;
}

.swatch-row {
    height: auto;
}

.color-swatch {
    width: auto;
    margin: 0 2 0 0;
}

.plain-code {
    height: auto;
    background: $surface;
    padding: 0 1;
}

/* ============================================
   Log Panel
   ============================================ */
#debug-panel {
    height: 12;
    border: round $border;
    border-title-color: $warning;
    border-subtitle-color: $text-muted;
    background: $surface;
}
"""
