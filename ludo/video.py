"""Display state of the running game: pixel format, filter, rotation, viewport."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Any

from PIL import Image

from ludo.gfx import rotate_uv, vertex_array

log = logging.getLogger(__name__)


class PixelFormat(IntEnum):
    """Framebuffer pixel formats a core can ask for."""

    ZRGB1555 = 0
    XRGB8888 = 1
    RGB565 = 2


# pixel order, pixel type, bytes per pixel
_LAYOUTS: dict[PixelFormat, tuple[str, str, int]] = {
    PixelFormat.ZRGB1555: ("BGRA", "UNSIGNED_SHORT_5_5_5_1", 2),
    PixelFormat.XRGB8888: ("BGRA", "UNSIGNED_INT_8_8_8_8_REV", 4),
    PixelFormat.RGB565: ("RGB", "UNSIGNED_SHORT_5_6_5", 2),
}

# filter name -> (shader, texture interpolation)
_FILTERS: dict[str, tuple[str, str]] = {
    "Smooth": ("default", "linear"),
    "Pixel Perfect": ("sharp_bilinear", "linear"),
    "CRT": ("zfast_crt", "linear"),
    "LCD": ("zfast_lcd", "linear"),
    "Raw": ("default", "nearest"),
}


@dataclass
class GameGeometry:
    """Dimensions reported by a core for its output."""

    base_width: int = 0
    base_height: int = 0
    max_width: int = 0
    max_height: int = 0
    aspect_ratio: float = 0.0


@dataclass
class Video:
    """What is needed to display the current game frame."""

    geom: GameGeometry = field(default_factory=GameGeometry)
    verbose: bool = False
    pitch: int = 0
    width: int = 0
    height: int = 0
    rot: int = 0
    pixel_format: PixelFormat = PixelFormat.ZRGB1555
    pixel_order: str = "BGRA"
    pixel_type: str = "UNSIGNED_SHORT_5_5_5_1"
    bpp: int = 2
    shader: str = "default"
    interpolation: str = "nearest"
    need_upload: bool = False
    data: Any = None
    vertices: list[float] = field(default_factory=list)

    def set_pixel_format(self, fmt: int) -> bool:
        """Switch to the pixel format a core asks for; False if it is unknown."""
        if self.verbose:
            log.info("[Video]: Set Pixel Format: %s", fmt)
        try:
            try:
                pixel_format = PixelFormat(fmt)
            except ValueError:
                log.warning("Unknown pixel type %s", fmt)
                return False
            self.pixel_format = pixel_format
            self.pixel_order, self.pixel_type, self.bpp = _LAYOUTS[pixel_format]
            return True
        finally:
            self.need_upload = True

    def update_filter(self, name: str) -> None:
        """Select the shader and interpolation of a named filter; unknown means Raw."""
        self.shader, self.interpolation = _FILTERS.get(name, _FILTERS["Raw"])

    def reset_pitch(self) -> None:
        """Forget the pitch so a new game is not drawn with the previous one."""
        self.pitch = 0

    def reset_rot(self) -> None:
        """Forget the rotation so a new game is not drawn with the previous one."""
        self.rot = 0

    def set_rotation(self, rot: int) -> bool:
        """Rotate the image by ``rot`` quarter turns counter-clockwise."""
        self.rot = rot % 4
        if self.verbose:
            log.info("[Video]: Set Rotation: %s", self.rot)
        return True

    def refresh(self, data: Any, width: int, height: int, pitch: int) -> None:
        """Take a new frame from the core."""
        self.need_upload = True
        self.width = width
        self.height = height
        self.pitch = pitch
        self.data = data

    def core_ratio_viewport(
        self, fb_width: int, fb_height: int
    ) -> tuple[float, float, float, float]:
        """Fit the game in the framebuffer, centred, keeping its aspect ratio.

        Returns (x, y, w, h) and stores the matching vertex array.
        """
        fbw = float(fb_width)
        fbh = float(fb_height)
        aspect = float(self.geom.aspect_ratio)
        if aspect == 0:
            if self.geom.base_height == 0:
                raise ValueError("game geometry has no size")
            aspect = self.geom.base_width / self.geom.base_height
        h = fbh
        w = fbh * aspect
        if w > fbw:
            h = fbw / aspect
            w = fbw
        x = (fbw - w) / 2
        y = (fbh - h) / 2
        self.vertices = rotate_uv(vertex_array(x, y, w, h, 1.0, fb_width, fb_height), self.rot)
        return x, y, w, h


def save_screenshot(
    pixels: bytes, width: int, height: int, directory: str | os.PathLike[str], name: str
) -> Path:
    """Write bottom-up RGBA pixels as ``<name>.png`` in ``directory``."""
    data = bytes(pixels)
    if len(data) != width * height * 4:
        raise ValueError(
            f"expected {width * height * 4} bytes for {width}x{height} RGBA, got {len(data)}"
        )
    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / f"{name}.png"
    image = Image.frombytes("RGBA", (width, height), data)
    image.transpose(Image.Transpose.FLIP_TOP_BOTTOM).save(path, format="PNG")
    return path