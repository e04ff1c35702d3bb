"""Interval mapping from the shared driver progress to per-property progress."""
import math
from dataclasses import dataclass

from stagger.animation.types import IntervalConfigError


def local_progress(global_progress: float, start: float, end: float) -> float:
    """
    Re-normalise ``global_progress`` into the sub-range ``[start, end]``.

    Values before the interval map to 0.0, values after it map to 1.0, and
    both bounds are inclusive. Callers are expected to pass a validated,
    non-empty interval (see IntervalSpec).

    Examples:
        >>> local_progress(0.05, 0.0, 0.10)
        0.5
        >>> local_progress(0.0, 0.125, 0.25)
        0.0
        >>> local_progress(1.0, 0.5, 0.75)
        1.0
    """
    if global_progress <= start:
        return 0.0
    if global_progress >= end:
        return 1.0
    return (global_progress - start) / (end - start)


@dataclass(frozen=True)
class IntervalSpec:
    """Sub-range of the global progress during which one property animates."""
    start: float = 0.0
    end: float = 1.0

    def __post_init__(self):
        """Validate bounds; a bad interval is a configuration error."""
        for name, value in (("start", self.start), ("end", self.end)):
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                raise IntervalConfigError(
                    f"Interval {name} must be a number, got {type(value).__name__}"
                )
            if not math.isfinite(value) or not 0.0 <= value <= 1.0:
                raise IntervalConfigError(f"Interval {name} must be within [0, 1], got {value}")
        if self.start > self.end:
            raise IntervalConfigError(
                f"Interval start must not exceed end, got ({self.start}, {self.end})"
            )
        if self.start == self.end:
            raise IntervalConfigError(
                f"Interval must have non-zero length, got ({self.start}, {self.end})"
            )

    @property
    def length(self) -> float:
        return self.end - self.start

    def contains(self, global_progress: float) -> bool:
        """True while ``global_progress`` lies inside the interval (inclusive)."""
        return self.start <= global_progress <= self.end

    def overlaps(self, other: "IntervalSpec") -> bool:
        """True when the open interiors of the two intervals intersect."""
        return self.start < other.end and other.start < self.end

    def transform(self, global_progress: float) -> float:
        return local_progress(global_progress, self.start, self.end)
