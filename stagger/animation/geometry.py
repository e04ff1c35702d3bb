"""
Composite geometric value types animated by the sequencer.

Each type is an immutable dataclass of numeric fields; composite tweens
interpolate every field independently.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class EdgeInsets:
    """Rectangular insets (padding/margins) in logical pixels."""
    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0

    @classmethod
    def all(cls, value: float) -> "EdgeInsets":
        return cls(value, value, value, value)

    @classmethod
    def symmetric(cls, vertical: float = 0.0, horizontal: float = 0.0) -> "EdgeInsets":
        return cls(left=horizontal, top=vertical, right=horizontal, bottom=vertical)

    @classmethod
    def only(cls, left: float = 0.0, top: float = 0.0,
             right: float = 0.0, bottom: float = 0.0) -> "EdgeInsets":
        return cls(left=left, top=top, right=right, bottom=bottom)

    @property
    def horizontal(self) -> float:
        return self.left + self.right

    @property
    def vertical(self) -> float:
        return self.top + self.bottom


@dataclass(frozen=True)
class BorderRadius:
    """Per-corner circular radii."""
    top_left: float = 0.0
    top_right: float = 0.0
    bottom_right: float = 0.0
    bottom_left: float = 0.0

    @classmethod
    def circular(cls, radius: float) -> "BorderRadius":
        return cls(radius, radius, radius, radius)

    @property
    def is_uniform(self) -> bool:
        return self.top_left == self.top_right == self.bottom_right == self.bottom_left
