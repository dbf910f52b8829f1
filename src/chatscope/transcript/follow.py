"""Scroll-follow state for a transcript viewport.

Hides the decision of when the viewport tracks newly appended content.
The user "follows" the transcript while the viewport sits at the bottom;
scrolling away pauses following until they scroll back down.
"""

from dataclasses import dataclass
from typing import Any, Protocol

from .models import Transcript


@dataclass(frozen=True)
class ScrollMetrics:
    """Snapshot of a scroll container's geometry."""

    offset: float          # Current scroll offset from the top
    scroll_height: float   # Total scrollable content height
    client_height: float   # Visible height of the container

    @property
    def is_above_bottom(self) -> bool:
        """Strictly above the bottom; exactly at the bottom counts as following."""
        return self.offset < self.scroll_height - self.client_height


class ScrollContainer(Protocol):
    """What the controller needs from the widget that actually scrolls."""

    def scroll_metrics(self) -> ScrollMetrics:
        ...

    def scroll_to_end(self, smooth: bool = True) -> None:
        ...


class ScrollFollowController:
    """Per-mount follow state plus the effect that re-pins the viewport.

    The effect re-runs only when the committed transcript object or the
    follow flag changes, mirroring a dependency-tracked render effect.
    """

    def __init__(self, container: ScrollContainer | None = None) -> None:
        self._container = container
        self._user_scrolled_up = False
        self._committed: Transcript | None = None
        self._effect_transcript: Transcript | None = None
        self._effect_flag: bool | None = None
        self._debug_callback: Any | None = None

    @property
    def user_scrolled_up(self) -> bool:
        """True while the user has scrolled away from the bottom."""
        return self._user_scrolled_up

    def set_debug_callback(self, callback: Any) -> None:
        """Set debug callback for logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Follow", message)

    def attach(self, container: ScrollContainer | None) -> None:
        """Attach (or detach, with None) the scrolling widget."""
        self._container = container

    def on_scroll(self) -> None:
        """Recompute the follow flag from the container's current geometry.

        Called synchronously for every scroll, whether the user or
        ``scroll_to_bottom`` moved the viewport.
        """
        if self._container is None:
            return
        metrics = self._container.scroll_metrics()
        scrolled_up = metrics.is_above_bottom
        if scrolled_up != self._user_scrolled_up:
            self._user_scrolled_up = scrolled_up
            self._debug(
                "debug",
                "Paused following" if scrolled_up else "Resumed following",
            )
            if self._committed is not None:
                self.run_effect(self._committed)

    def scroll_to_bottom(self) -> None:
        """Smoothly scroll to the newest content. Safe to call repeatedly."""
        if self._container is None:
            return
        self._container.scroll_to_end(smooth=True)

    def commit(self, transcript: Transcript) -> None:
        """Record that ``transcript`` has been laid out, then run the effect."""
        self._committed = transcript
        self.run_effect(transcript)

    def run_effect(self, transcript: Transcript) -> bool:
        """Re-pin to the bottom if dependencies changed and the user follows.

        Returns:
            True if a scroll to the bottom was requested
        """
        if (
            self._effect_transcript is transcript
            and self._effect_flag == self._user_scrolled_up
        ):
            return False
        self._effect_transcript = transcript
        self._effect_flag = self._user_scrolled_up
        if self._user_scrolled_up:
            return False
        self.scroll_to_bottom()
        return True
