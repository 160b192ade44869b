"""Glyph atlas built from a TrueType font, with text measuring and quad layout."""

from __future__ import annotations

import io
import os
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import IntEnum
from typing import BinaryIO

from PIL import Image, ImageDraw, ImageFont

from ludo.gfx import Color

ATLAS_SIZE = 1024
_MARGIN = 4
_SUBSTITUTE = "?"

Point = tuple[float, float, float, float]


class Direction(IntEnum):
    """Direction in which strings are laid out."""

    LEFT_TO_RIGHT = 0  # e.g. Latin
    RIGHT_TO_LEFT = 1  # e.g. Arabic
    TOP_TO_BOTTOM = 2  # e.g. Chinese


@dataclass(frozen=True)
class Character:
    """Where a glyph sits in the atlas and how it is placed on a line.

    ``advance`` is expressed in 1/64 of a pixel.
    """

    x: int
    y: int
    width: int
    height: int
    advance: int
    bearing_h: int
    bearing_v: int


@dataclass
class Font:
    """A rasterised range of glyphs packed into a single grayscale atlas."""

    characters: list[Character]
    atlas: Image.Image
    low: int = 32
    direction: Direction = Direction.LEFT_TO_RIGHT
    color: Color = field(default_factory=lambda: Color(1.0, 1.0, 1.0, 1.0))
    atlas_width: float = float(ATLAS_SIZE)
    atlas_height: float = float(ATLAS_SIZE)

    def set_color(self, color: Color) -> None:
        """Set the colour text is drawn with."""
        self.color = color

    def _lookup(self, char: str) -> Character | None:
        index = ord(char) - self.low
        if index < 0 or index >= len(self.characters):
            return None
        return self.characters[index]

    def width(self, scale: float, text: str) -> float:
        """Return the width of ``text`` in pixels; unknown characters are skipped."""
        total = 0.0
        for char in text:
            glyph = self._lookup(char)
            if glyph is not None:
                total += (glyph.advance >> 6) * scale
        return total

    def _glyphs(self, text: str) -> Iterator[Character]:
        for char in text:
            glyph = self._lookup(char)
            if glyph is None:
                glyph = self._lookup(_SUBSTITUTE)
                if glyph is None:
                    raise KeyError(f"no glyph for {char!r} and no substitute")
            yield glyph

    def quads(self, x: float, y: float, scale: float, text: str) -> list[Point]:
        """Lay out ``text`` as triangles: six (X, Y, U, V) points per character.

        Characters outside the font's range are drawn as a question mark.
        """
        points: list[Point] = []
        aw, ah = self.atlas_width, self.atlas_height
        for glyph in self._glyphs(text):
            xpos = x - 1 + glyph.bearing_h * scale
            ypos = y - 2 - (glyph.height - glyph.bearing_v) * scale
            w = (glyph.width + 2) * scale
            h = (glyph.height + 2) * scale
            x1, x2 = xpos, xpos + w
            y1, y2 = ypos, ypos + h
            u1 = (glyph.x - 1) / aw
            u2 = (glyph.x + glyph.width + 1) / aw
            v1 = (glyph.y - 1) / ah
            v2 = (glyph.y + glyph.height + 1) / ah
            points.extend(
                (
                    (x1, y1, u1, v1),
                    (x2, y1, u2, v1),
                    (x1, y2, u1, v2),
                    (x2, y1, u2, v1),
                    (x1, y2, u1, v2),
                    (x2, y2, u2, v2),
                )
            )
            x += (glyph.advance >> 6) * scale
        return points


def _bounds(face: ImageFont.FreeTypeFont, char: str) -> tuple[int, int, int, int]:
    left, top, right, bottom = face.getbbox(char, anchor="ls")
    if right - left == 0 or bottom - top == 0:
        # Glyphs without ink get a minimal cell.
        return 0, -1, 1, 0
    return int(left), int(top), int(right), int(bottom)


def load_true_type_font(
    stream: BinaryIO,
    scale: int,
    low: int,
    high: int,
    direction: Direction = Direction.LEFT_TO_RIGHT,
) -> Font:
    """Rasterise the glyphs ``low`` to ``high`` of a TrueType font into an atlas."""
    if high < low:
        raise ValueError(f"empty glyph range {low}..{high}")
    data = stream.read()
    try:
        face = ImageFont.truetype(io.BytesIO(data), size=int(scale))
    except OSError as exc:
        raise ValueError(f"cannot parse font: {exc}") from exc

    chars = [chr(code) for code in range(low, high + 1)]
    bounds = [_bounds(face, char) for char in chars]
    line_height = max(bottom - top for _, top, _, bottom in bounds)

    atlas = Image.new("L", (ATLAS_SIZE, ATLAS_SIZE), 0)
    characters: list[Character] = []
    x = y = _MARGIN
    for char, (left, top, right, bottom) in zip(chars, bounds):
        gw = right - left
        gh = bottom - top
        characters.append(
            Character(
                x=x,
                y=y,
                width=gw,
                height=gh,
                advance=round(face.getlength(char) * 64),
                bearing_h=left,
                bearing_v=bottom,
            )
        )

        cell = Image.new("L", (gw, gh), 0)
        ImageDraw.Draw(cell).text((-left, -top), char, font=face, fill=255, anchor="ls")
        atlas.paste(cell, (x, y))

        x += gw + _MARGIN
        if x + gw + _MARGIN > ATLAS_SIZE:
            x = 0
            y += line_height + _MARGIN

    return Font(characters=characters, atlas=atlas, low=low, direction=direction)


def load_font(path: str | os.PathLike[str], scale: int) -> Font:
    """Load the printable range of the font file at ``path``."""
    with open(path, "rb") as fd:
        return load_true_type_font(fd, scale, 32, 256, Direction.LEFT_TO_RIGHT)