"""Tokenizer for the annotation grammar embedded in code class strings.

The markdown pass upstream turns a fence info string such as
``type:Quoted,lang:rust,path:src/main.rs,lines:10-20`` into the class
string ``language-type:Quoted,lang:rust,path:src/main.rs,lines:10-20``.
Four tags are recognized, each by its first match:

- language: ``lang:<word>``, falling back to ``language-<word>``
- type: ``language-type:<word>``
- path: ``path:<value>,`` (the value must be followed by a comma)
- lines: ``lines:<start>`` or ``lines:<start>-<end>``, 1-indexed inclusive

Hidden design decisions:
- Matching is case-sensitive and ``<word>`` is ASCII word characters
- The path value runs up to the last comma on the line
- Line bounds that are not positive integers yield no range at all
"""

import re
from dataclasses import dataclass
from functools import lru_cache

from .models import LineRange

_LANG_TAG = re.compile(r"lang:(\w+)", re.ASCII)
_LANGUAGE_CLASS = re.compile(r"language-(\w+)", re.ASCII)
_TYPE_TAG = re.compile(r"language-type:(\w+)", re.ASCII)
_PATH_TAG = re.compile(r"path:(.+),")
_LINES_TAG = re.compile(r"lines:(.+)")
_HEX_COLOR = re.compile(r"#(?:[0-9A-F]{6}|[0-9A-F]{3})", re.IGNORECASE)

QUOTED_TYPE = "Quoted"


@dataclass(frozen=True)
class ClassTokens:
    """Raw tag values found in one class string."""

    language: str | None = None
    quote_type: str | None = None
    path: str | None = None
    lines: str | None = None

    @property
    def has_block_tag(self) -> bool:
        """A type or language tag marks the element as a fenced block."""
        return bool(self.quote_type or self.language)

    @property
    def is_quoted(self) -> bool:
        return self.quote_type == QUOTED_TYPE

    @property
    def line_range(self) -> LineRange | None:
        return parse_line_range(self.lines)


def _first(pattern: re.Pattern[str], class_name: str) -> str | None:
    match = pattern.search(class_name)
    return match.group(1) if match else None


@lru_cache(maxsize=1024)
def scan_class_string(class_name: str) -> ClassTokens:
    """Extract every recognized tag from a class string in one pass.

    Args:
        class_name: Class string of a code element (may be empty)

    Returns:
        The tags found; missing tags are None
    """
    if not class_name:
        return ClassTokens()
    return ClassTokens(
        language=_first(_LANG_TAG, class_name) or _first(_LANGUAGE_CLASS, class_name),
        quote_type=_first(_TYPE_TAG, class_name),
        path=_first(_PATH_TAG, class_name),
        lines=_first(_LINES_TAG, class_name),
    )


def _parse_bound(value: str) -> int | None:
    value = value.strip()
    if not value.isascii() or not value.isdigit():
        return None
    number = int(value)
    return number if number >= 1 else None


def parse_line_range(value: str | None) -> LineRange | None:
    """Decode a 1-indexed ``start`` or ``start-end`` into a zero-indexed range.

    ``end`` defaults to ``start``. Anything that is not a positive integer
    decodes to None rather than raising.
    """
    if value is None:
        return None
    parts = value.split("-")
    start = _parse_bound(parts[0])
    if start is None:
        return None
    if len(parts) == 1:
        end = start
    else:
        end = _parse_bound(parts[1])
        if end is None:
            return None
    return LineRange(start - 1, end - 1)


def format_line_range(line_range: LineRange) -> str:
    """Encode a range back into the 1-indexed form used by the grammar."""
    if line_range.start == line_range.end:
        return str(line_range.display_start)
    return f"{line_range.display_start}-{line_range.display_end}"


def is_hex_color(text: str) -> bool:
    """True for a bare ``#RGB`` or ``#RRGGBB`` literal, any case."""
    return _HEX_COLOR.fullmatch(text) is not None
