"""
Value interpolators (tweens).

A tween maps eased local progress to a concrete value between a begin and
an end value. Progress is NOT clamped here: values outside [0, 1] extrapolate
linearly so overshooting easing curves carry through to the output.
Clamping to the active sub-range is the interval mapper's job.
"""
from dataclasses import dataclass, fields, is_dataclass
from typing import Any, Optional

from PySide6.QtGui import QColor

from stagger.animation.geometry import BorderRadius, EdgeInsets
from stagger.utils.color_utils import lerp_rgba, list_to_qcolor, to_rgba, transparent_of


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def lerp_scalar(begin: float, end: float, t: float) -> float:
    """Linear interpolation ``begin + (end - begin) * t``.

    Exact at both ends so t == 0 returns ``begin`` and t == 1 returns ``end``.

    Examples:
        >>> lerp_scalar(50.0, 150.0, 0.5)
        100.0
        >>> lerp_scalar(0.0, 1.0, 1.25)
        1.25
    """
    if t == 0.0:
        return begin
    if t == 1.0:
        return end
    return begin + (end - begin) * t


def lerp_fields(begin: Any, end: Any, t: float) -> Any:
    """Interpolate every field of two instances of the same dataclass."""
    if t == 0.0:
        return begin
    if t == 1.0:
        return end
    values = {
        f.name: lerp_scalar(getattr(begin, f.name), getattr(end, f.name), t)
        for f in fields(begin)
    }
    return type(begin)(**values)


@dataclass(frozen=True)
class Tween:
    """Scalar tween between two numbers."""
    begin: Any
    end: Any

    def __post_init__(self):
        self._validate()

    def _validate(self) -> None:
        if not (_is_number(self.begin) and _is_number(self.end)):
            raise TypeError(
                f"{type(self).__name__} requires numeric values, got "
                f"{type(self.begin).__name__} and {type(self.end).__name__}"
            )

    def lerp(self, t: float) -> Any:
        return lerp_scalar(self.begin, self.end, t)

    def transform(self, t: float) -> Any:
        """Value at eased progress ``t``."""
        return self.lerp(t)

    __call__ = transform

    @staticmethod
    def for_values(begin: Any, end: Any) -> "Tween":
        """
        Build the tween matching the value type.

        Raises:
            TypeError: If the values have no interpolator or mismatch.
        """
        if _is_number(begin) and _is_number(end):
            return Tween(begin, end)
        if _is_color(begin) or _is_color(end):
            return ColorTween(begin, end)
        if isinstance(begin, EdgeInsets) or isinstance(end, EdgeInsets):
            return EdgeInsetsTween(begin, end)
        if isinstance(begin, BorderRadius) or isinstance(end, BorderRadius):
            return BorderRadiusTween(begin, end)
        if is_dataclass(begin) and not isinstance(begin, type):
            return CompositeTween(begin, end)
        raise TypeError(
            f"No interpolator for {type(begin).__name__} -> {type(end).__name__}"
        )


def _is_color(value: Any) -> bool:
    if isinstance(value, QColor):
        return True
    return (
        isinstance(value, (list, tuple))
        and len(value) in (3, 4)
        and all(_is_number(c) for c in value)
    )


@dataclass(frozen=True)
class ColorTween(Tween):
    """
    Colour tween interpolating r, g, b and a channels independently.

    Values may be QColor or RGB(A) sequences. QColor input yields a new
    QColor, sequence input an ``(r, g, b, a)`` tuple, decided by the begin
    value (or the end value when begin is None). A None side
    is treated as the other colour made fully transparent.
    """

    def _validate(self) -> None:
        if self.begin is None and self.end is None:
            raise TypeError("ColorTween requires at least one colour")
        for value in (self.begin, self.end):
            if value is not None and not _is_color(value):
                raise TypeError(f"ColorTween expects colours, got {type(value).__name__}")

    def _endpoints(self):
        begin = to_rgba(self.begin) if self.begin is not None else None
        end = to_rgba(self.end) if self.end is not None else None
        if begin is None:
            begin = transparent_of(end)
        if end is None:
            end = transparent_of(begin)
        return begin, end

    def _wrap(self, rgba) -> Any:
        # Always a new value; the stored endpoints are never handed out.
        template = self.begin if self.begin is not None else self.end
        if isinstance(template, QColor):
            return list_to_qcolor(rgba)
        return tuple(rgba)

    def lerp(self, t: float) -> Any:
        begin, end = self._endpoints()
        return self._wrap(lerp_rgba(begin, end, t))


@dataclass(frozen=True)
class CompositeTween(Tween):
    """Tween for dataclasses of numeric fields, interpolated field by field."""

    value_type: Optional[type] = None

    def _validate(self) -> None:
        expected = self.value_type or type(self.begin)
        for value in (self.begin, self.end):
            if not isinstance(value, expected) or not is_dataclass(value):
                raise TypeError(
                    f"{type(self).__name__} expects {expected.__name__} values, "
                    f"got {type(value).__name__}"
                )
        for f in fields(self.begin):
            if not _is_number(getattr(self.begin, f.name)) or not _is_number(getattr(self.end, f.name)):
                raise TypeError(f"Field {f.name!r} of {expected.__name__} is not numeric")

    def lerp(self, t: float) -> Any:
        return lerp_fields(self.begin, self.end, t)


@dataclass(frozen=True)
class EdgeInsetsTween(CompositeTween):
    """Padding/margin tween."""
    value_type: Optional[type] = EdgeInsets


@dataclass(frozen=True)
class BorderRadiusTween(CompositeTween):
    """Corner radii tween."""
    value_type: Optional[type] = BorderRadius
