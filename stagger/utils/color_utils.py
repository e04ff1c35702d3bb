"""QColor <-> RGBA conversion and channel interpolation helpers.

Colour tweens accept either QColor or plain ``[r, g, b]`` / ``[r, g, b, a]``
sequences; everything funnels through these helpers so channel handling is
identical for both.
"""
from __future__ import annotations

from typing import Any, List, Optional, Tuple

from PySide6.QtGui import QColor

from stagger.logging.logger import get_logger

logger = get_logger(__name__)

Rgba = Tuple[int, int, int, int]


def clamp_channel(value: float) -> int:
    """Round a channel value and clamp it into 0-255."""
    return max(0, min(255, int(round(value))))


def qcolor_to_list(color: Optional[QColor], fallback: Optional[List[int]] = None) -> List[int]:
    """Convert a QColor to an RGBA list [r, g, b, a].

    Args:
        color: QColor to convert (may be None or invalid)
        fallback: Default list if conversion fails. Defaults to [255, 255, 255, 255].

    Returns:
        List of [r, g, b, a] integers.
    """
    if fallback is None:
        fallback = [255, 255, 255, 255]
    if color is None or not color.isValid():
        return list(fallback)
    return [color.red(), color.green(), color.blue(), color.alpha()]


def list_to_qcolor(
    color_data: Any,
    fallback: Optional[QColor] = None,
    opacity_override: Optional[float] = None,
) -> Optional[QColor]:
    """Parse a color list [r, g, b] or [r, g, b, a] into a QColor.

    Args:
        color_data: List/tuple of color components.
        fallback: QColor to return if parsing fails (default: None).
        opacity_override: Optional opacity multiplier (0.0-1.0) applied to alpha.

    Returns:
        QColor or fallback if parsing fails.
    """
    try:
        r, g, b = (clamp_channel(float(c)) for c in color_data[:3])
        a = clamp_channel(float(color_data[3])) if len(color_data) > 3 else 255
        if opacity_override is not None:
            a = int(max(0.0, min(1.0, opacity_override)) * a)
        return QColor(r, g, b, a)
    except (TypeError, ValueError, IndexError, KeyError):
        logger.debug("[COLOR_UTILS] list_to_qcolor failed for %s", color_data, exc_info=True)
        return fallback


def to_rgba(color: Any) -> Rgba:
    """Normalise a QColor or RGB(A) sequence to an ``(r, g, b, a)`` tuple.

    Raises:
        TypeError: If ``color`` is neither a QColor nor a 3/4-item sequence.
    """
    if isinstance(color, QColor):
        r, g, b, a = qcolor_to_list(color, fallback=[0, 0, 0, 0])
        return r, g, b, a
    if isinstance(color, (list, tuple)) and len(color) in (3, 4):
        channels = [clamp_channel(float(c)) for c in color]
        if len(channels) == 3:
            channels.append(255)
        return channels[0], channels[1], channels[2], channels[3]
    raise TypeError(f"Expected QColor or RGB(A) sequence, got {type(color).__name__}")


def transparent_of(rgba: Rgba) -> Rgba:
    """Same colour with alpha 0."""
    return rgba[0], rgba[1], rgba[2], 0


def lerp_rgba(a: Rgba, b: Rgba, t: float) -> Rgba:
    """Per-channel linear interpolation, clamped to 0-255.

    ``t`` is not clamped, so overshooting curves push channels toward the
    0/255 limits instead of wrapping.
    """
    if t == 0.0:
        return a
    if t == 1.0:
        return b
    return (
        clamp_channel(a[0] + (b[0] - a[0]) * t),
        clamp_channel(a[1] + (b[1] - a[1]) * t),
        clamp_channel(a[2] + (b[2] - a[2]) * t),
        clamp_channel(a[3] + (b[3] - a[3]) * t),
    )


def parse_hex(value: str) -> QColor:
    """Parse ``#RRGGBB`` / ``#AARRGGBB`` into a QColor.

    Raises:
        ValueError: If the string is not a valid colour.
    """
    color = QColor(value)
    if not color.isValid():
        raise ValueError(f"Invalid colour string: {value!r}")
    return color
