"""UI configuration constants.

Centralizes magic numbers and configuration values for the UI module.
"""


class LogLevel:
    """Log level constants with numeric values for comparison.

    Standard logging hierarchy: DEBUG < INFO < WARNING < ERROR
    Lower numeric value = more verbose (shows more messages).
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    _names = {
        DEBUG: "DEBUG",
        INFO: "INFO",
        WARNING: "WARNING",
        ERROR: "ERROR",
    }

    _from_string = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
    }

    @classmethod
    def name(cls, level: int) -> str:
        """Get the name for a log level."""
        return cls._names.get(level, "UNKNOWN")

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Convert string to log level. Returns DEBUG if invalid."""
        return cls._from_string.get(level_str.lower(), cls.DEBUG)


# Log panel configuration
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"

# Message header configuration
MESSAGE_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"

# Source quotes and syntax blocks
SYNTAX_THEME = "monokai"
DEFAULT_LANGUAGE = "text"  # Lexer used when a block has no language tag

# Inline color previews
SWATCH_GLYPH = "■"  # Black square, painted in the previewed color

# File chips
CHIP_ICON = "▤"
DEFAULT_HIGHLIGHT_COLOR = "#f9e2af"

# Transcript source polling (seconds); the file is re-read when it changes
TRANSCRIPT_POLL_INTERVAL = 1.0
