"""Colour and quad geometry helpers used to place things on screen."""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from dataclasses import dataclass

# Texture coordinates (U, V) of the four strip corners for each rotation:
# left-bottom, left-top, right-bottom, right-top.
_ROTATED_UV: dict[int, tuple[tuple[float, float], ...]] = {
    1: ((0, 0), (1, 0), (0, 1), (1, 1)),  # 90 degrees
    2: ((1, 0), (1, 1), (0, 0), (0, 1)),  # 180 degrees
    3: ((1, 1), (0, 1), (1, 0), (0, 0)),  # 270 degrees
}


@dataclass(frozen=True)
class Color:
    """An RGBA colour with float channels."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 0.0

    def alpha(self, alpha: float) -> Color:
        """Return a copy of this colour with another alpha channel."""
        return dataclasses.replace(self, a=alpha)


def xywh_to_4points(
    x: float, y: float, w: float, h: float, fbh: float
) -> tuple[float, float, float, float, float, float, float, float]:
    """Convert (x, y, width, height) to the four corners of a strip, y flipped."""
    bottom = fbh - (y + h)
    top = fbh - y
    return x, bottom, x, top, x + w, bottom, x + w, top


def rotate_uv(va: Sequence[float], rot: int) -> list[float]:
    """Return the vertex array with its texture coordinates rotated.

    ``rot`` counts quarter turns; values without a rotation leave it as is.
    """
    result = list(va)
    for corner, (u, v) in enumerate(_ROTATED_UV.get(rot, ())):
        result[corner * 4 + 2] = u
        result[corner * 4 + 3] = v
    return result


def vertex_array(
    x: float, y: float, w: float, h: float, scale: float, fb_width: int, fb_height: int
) -> list[float]:
    """Build the X, Y, U, V strip of a rectangle in clip space."""
    fbw = float(fb_width)
    fbh = float(fb_height)
    x1, y1, x2, y2, x3, y3, x4, y4 = xywh_to_4points(x, y, w * scale, h * scale, fbh)
    corners = (
        (x1, y1, 0.0, 1.0),  # left-bottom
        (x2, y2, 0.0, 0.0),  # left-top
        (x3, y3, 1.0, 1.0),  # right-bottom
        (x4, y4, 1.0, 0.0),  # right-top
    )
    return [
        value
        for px, py, u, v in corners
        for value in (px / fbw * 2 - 1, py / fbh * 2 - 1, u, v)
    ]