"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, muted text)
- Dark/light mode configuration

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Catppuccin Mocha palette, tuned for long transcripts with code quotes
CHATSCOPE_MOCHA = Theme(
    name="chatscope-mocha",
    primary="#89b4fa",      # Blue - assistant turns, focus
    secondary="#cba6f7",    # Mauve - user turns
    accent="#f9e2af",       # Yellow - highlighted lines, chips
    foreground="#cdd6f4",
    background="#11111b",
    success="#a6e3a1",
    warning="#fab387",
    error="#f38ba8",
    surface="#1e1e2e",
    panel="#181825",
    dark=True,
    variables={
        "border": "#45475a",
        "border-blurred": "#313244",

        "scrollbar": "#313244",
        "scrollbar-hover": "#45475a",
        "scrollbar-active": "#89b4fa",
        "scrollbar-background": "#181825",

        "footer-key-foreground": "#f9e2af",
        "footer-key-background": "#313244",

        "text-muted": "#6c7086",
    },
)
