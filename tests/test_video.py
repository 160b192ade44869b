import pytest
from PIL import Image

from ludo.video import GameGeometry, PixelFormat, Video, save_screenshot


def test_default_pixel_layout():
    v = Video()
    assert (v.pixel_order, v.pixel_type, v.bpp) == ("BGRA", "UNSIGNED_SHORT_5_5_5_1", 2)


def test_set_pixel_format_xrgb8888():
    v = Video()
    assert v.set_pixel_format(PixelFormat.XRGB8888) is True
    assert (v.pixel_order, v.pixel_type, v.bpp) == ("BGRA", "UNSIGNED_INT_8_8_8_8_REV", 4)
    assert v.need_upload is True


def test_set_pixel_format_rgb565():
    v = Video()
    assert v.set_pixel_format(2) is True
    assert (v.pixel_order, v.pixel_type, v.bpp) == ("RGB", "UNSIGNED_SHORT_5_6_5", 2)
    assert v.pixel_format is PixelFormat.RGB565


def test_set_pixel_format_unknown_keeps_layout():
    v = Video()
    v.set_pixel_format(PixelFormat.XRGB8888)
    assert v.set_pixel_format(42) is False
    assert v.bpp == 4
    assert v.need_upload is True


@pytest.mark.parametrize(
    "name,shader,interp",
    [
        ("Smooth", "default", "linear"),
        ("Pixel Perfect", "sharp_bilinear", "linear"),
        ("CRT", "zfast_crt", "linear"),
        ("LCD", "zfast_lcd", "linear"),
        ("Raw", "default", "nearest"),
        ("whatever", "default", "nearest"),
    ],
)
def test_update_filter(name, shader, interp):
    v = Video()
    v.update_filter(name)
    assert (v.shader, v.interpolation) == (shader, interp)


def test_set_rotation_wraps():
    v = Video()
    assert v.set_rotation(5) is True
    assert v.rot == 1
    v.reset_rot()
    assert v.rot == 0


def test_refresh_and_reset_pitch():
    v = Video()
    frame = b"\x00" * 16
    v.refresh(frame, 2, 2, 8)
    assert (v.width, v.height, v.pitch, v.data, v.need_upload) == (2, 2, 8, frame, True)
    v.reset_pitch()
    assert v.pitch == 0


@pytest.mark.parametrize("fbw,fbh", [(800, 600), (1920, 600), (640, 2000)])
def test_viewport_keeps_ratio_and_centres(fbw, fbh):
    v = Video(geom=GameGeometry(base_width=320, base_height=240, aspect_ratio=4 / 3))
    x, y, w, h = v.core_ratio_viewport(fbw, fbh)
    assert w / h == pytest.approx(4 / 3)
    assert w <= fbw + 1e-6 and h <= fbh + 1e-6
    assert 2 * x + w == pytest.approx(fbw)
    assert 2 * y + h == pytest.approx(fbh)
    assert len(v.vertices) == 16


def test_viewport_falls_back_to_base_size():
    v = Video(geom=GameGeometry(base_width=256, base_height=224))
    _, _, w, h = v.core_ratio_viewport(1000, 1000)
    assert w / h == pytest.approx(256 / 224)


def test_viewport_full_fit_gives_default_quad():
    v = Video(geom=GameGeometry(base_width=320, base_height=240, aspect_ratio=4 / 3))
    assert v.core_ratio_viewport(800, 600) == pytest.approx((0, 0, 800, 600))
    assert v.vertices == pytest.approx(
        [-1, -1, 0, 1, -1, 1, 0, 0, 1, -1, 1, 1, 1, 1, 1, 0]
    )


def test_viewport_rotation_changes_uv_only():
    geom = GameGeometry(base_width=320, base_height=240)
    plain = Video(geom=geom)
    plain.core_ratio_viewport(800, 600)
    turned = Video(geom=geom)
    turned.set_rotation(2)
    turned.core_ratio_viewport(800, 600)
    assert turned.vertices[0:2] == plain.vertices[0:2]
    assert turned.vertices[2:4] != plain.vertices[2:4]


def test_viewport_without_geometry_raises():
    with pytest.raises(ValueError):
        Video().core_ratio_viewport(800, 600)


def test_save_screenshot_flips_rows(tmp_path):
    red = bytes([255, 0, 0, 255])
    blue = bytes([0, 0, 255, 255])
    target = tmp_path / "shots"
    path = save_screenshot(red + blue, 1, 2, target, "game")
    assert path == target / "game.png"
    with Image.open(path) as img:
        assert img.size == (1, 2)
        assert img.convert("RGBA").getpixel((0, 0)) == (0, 0, 255, 255)
        assert img.convert("RGBA").getpixel((0, 1)) == (255, 0, 0, 255)


def test_save_screenshot_wrong_size(tmp_path):
    with pytest.raises(ValueError):
        save_screenshot(b"\x00" * 5, 1, 2, tmp_path, "bad")