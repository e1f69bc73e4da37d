"""Matcher engine configuration."""

from __future__ import annotations

from dataclasses import dataclass

from twinarb.exceptions import ConfigError
from twinarb.market.builder import FIRST_SEEN, ORIENTATIONS

SIZING_MAX = "max"
SIZING_MIN = "min"
SIZING_MODES = (SIZING_MAX, SIZING_MIN)


@dataclass(frozen=True, slots=True)
class MatcherConfig:
    """Write-once engine settings.

    threshold:
        Minimum margin a twin must make before it is executed, so fees
        don't eat the returns. The margin is the second leg's fill, so it
        is counted in whichever token that leg returns: quote when base is
        sold first, base otherwise. One threshold therefore applies to raw
        amounts of either token of the pair. Use 0 to execute every cross.
    refresh:
        Seconds between matching cycles.
    sizing:
        ``max`` picks the largest of balance and both order sizes per side,
        ``min`` the smallest.
    orientation:
        How a book's base/quote are chosen, see ``build_books``.
    """

    threshold: int = 30000
    refresh: float = 60.0
    sizing: str = SIZING_MAX
    orientation: str = FIRST_SEEN

    def __post_init__(self) -> None:
        # bool is an int subclass but never a meaningful threshold
        if (not isinstance(self.threshold, int) or isinstance(self.threshold, bool)
                or self.threshold < 0):
            raise ConfigError(f"threshold must be a non-negative integer, got {self.threshold!r}")
        if (not isinstance(self.refresh, (int, float)) or isinstance(self.refresh, bool)
                or self.refresh <= 0):
            raise ConfigError(f"refresh must be positive, got {self.refresh!r}")
        if self.sizing not in SIZING_MODES:
            raise ConfigError(f"sizing must be one of {SIZING_MODES}, got {self.sizing!r}")
        if self.orientation not in ORIENTATIONS:
            raise ConfigError(
                f"orientation must be one of {ORIENTATIONS}, got {self.orientation!r}")

    @classmethod
    def from_settings(cls) -> "MatcherConfig":
        from config.settings import settings
        return cls(
            threshold=settings.MATCHER_THRESHOLD,
            refresh=settings.MATCHER_REFRESH_SECONDS,
            sizing=settings.MATCHER_SIZING,
            orientation=settings.MATCHER_ORIENTATION,
        )
