# ludo

Building blocks for a libretro frontend: user settings stored as TOML, the
runtime state of the app, the geometry that places a game frame in a
framebuffer, PNG screenshots, and text layout from a TrueType glyph atlas.

Install with its test extra to run the tests:

```
pip install ".[test]"
pytest
```

## Settings (`ludo.settings`)

`Settings` is a dataclass holding every option: video (fullscreen, monitor
index, filter, dark mode), audio and menu volumes, hidden files, stick to
D-pad mapping, the default core for each playlist, the directories for
files, cores, assets, database, savestates, savefiles, screenshots, system
files, playlists and thumbnails, and three service switches (SSH, Samba,
Bluetooth). Each field carries metadata with its TOML key, a label, a
display format, a widget kind, when it is hidden, and for services the
service name and flag-file path.

```python
from pathlib import Path
from ludo.settings import (
    default_settings, load, save, core_for_playlist,
    SettingsLoadError, CoreNotSetError,
)

settings = default_settings()
settings.video_filter        # "Pixel Perfect"
settings.audio_volume        # 0.5
settings.menu_audio_volume   # 0.25

config_home = Path("~/.config").expanduser()
try:
    settings = load(config_home, "/etc/ludo.toml")
except SettingsLoadError as exc:
    settings = exc.settings     # what was loaded before the failure

settings.video_fullscreen = True
path = save(settings, config_home)   # <config_home>/ludo/settings.toml

core_for_playlist(settings, "Nintendo - Game Boy")
# "./cores/gambatte_libretro.so" on Linux
```

- `default_settings()` returns fresh defaults. Data directories live under
  the user data directory for `ludo`; the files directory is the home
  directory; cores, assets and database are `./cores`, `./assets` and
  `./database`.
- `load(config_home=None, system_config="/etc/ludo.toml")` starts from the
  defaults, applies the system file if it exists, then the user's
  `ludo/settings.toml` under `config_home` (the platform's user config
  directory when `None`). A missing user file, bad TOML or a value of the
  wrong type raises `SettingsLoadError`. Whatever happens, the result is
  written back to the user file.
- `save(settings, config_home=None)` creates the directory if needed,
  writes the TOML file and returns its path.
- `core_for_playlist(settings, playlist)` joins the cores directory, the
  core name and the platform's library extension; it raises
  `CoreNotSetError` when the playlist has no core.
- `playstation_core(machine=None)` picks `pcsx_rearmed_libretro` on 32-bit
  ARM and `swanstation_libretro` elsewhere.
- `Settings.to_dict()` and `Settings.from_dict(data)` convert to and from
  the TOML key names (`video_fullscreen`, `menu_showhiddenfiles`,
  `core_for_playlist`, `thumbnail_dir`, ...). `from_dict` fills the
  missing keys from the defaults.

## Runtime state (`ludo.state`)

`State` holds the loaded core and its path, the game path, the game
database, and the flags `core_running`, `menu_active`, `verbose`, `ludos`
and `fast_forward`. `State.reset()` sets every field back to its initial
value.

## Geometry and colours (`ludo.gfx`)

```python
from ludo.gfx import Color, xywh_to_4points, rotate_uv, vertex_array

xywh_to_4points(30, 40, 500, 600, 800)
# (30, 160, 30, 760, 530, 160, 530, 760)

faded = Color(1, 1, 1, 1).alpha(0.5)       # Color(r=1, g=1, b=1, a=0.5)

va = vertex_array(0, 0, 320, 240, 1.0, 640, 480)   # X, Y, U, V per corner
va = rotate_uv(va, 1)                              # 90 degrees
```

`vertex_array` returns a four-corner strip (left-bottom, left-top,
right-bottom, right-top) in clip space. `rotate_uv` returns a new list
with the texture coordinates turned by 1, 2 or 3 quarter turns; any other
value leaves them unchanged.

## Video (`ludo.video`)

`Video` keeps the display state of the running game:

- `set_pixel_format(fmt)` accepts a `PixelFormat` (`ZRGB1555`,
  `XRGB8888`, `RGB565`) and records its pixel order, pixel type and bytes
  per pixel; an unknown value returns `False`. Either way the frame is
  marked for upload.
- `update_filter(name)` selects the shader and interpolation for "Raw",
  "Smooth", "Pixel Perfect", "CRT" or "LCD"; any other name means "Raw".
- `set_rotation(rot)` stores `rot % 4`; `reset_rot()` and `reset_pitch()`
  clear rotation and pitch between games.
- `refresh(data, width, height, pitch)` takes a new frame from the core.
- `core_ratio_viewport(fb_width, fb_height)` centres the frame in the
  framebuffer keeping the aspect ratio of its `GameGeometry` (or
  `base_width / base_height` when the ratio is 0), stores the rotated
  vertex array in `vertices` and returns `(x, y, w, h)`. A geometry with
  no size raises `ValueError`.

`save_screenshot(pixels, width, height, directory, name)` flips a
bottom-up RGBA frame, writes it as `<name>.png` in `directory` (created if
needed) and returns the path. A pixel buffer of the wrong size raises
`ValueError`. Names usually come from `ludo.utils.dated_name`.

## Fonts (`ludo.font`)

```python
from ludo.font import load_font
from ludo.gfx import Color

font = load_font("assets/font.ttf", 72)    # characters 32 to 256
font.set_color(Color(1, 0, 0, 1))
font.width(0.5, "Hello")
quads = font.quads(10, 40, 0.5, "Hello")   # six (X, Y, U, V) points per character
```

`load_true_type_font(stream, scale, low, high, direction)` rasterises a
range of glyphs into a 1024x1024 grayscale atlas (`Font.atlas`) and
records each glyph as a `Character`. `Font.quads` lays out the textured
triangles for a line of text, drawing characters outside the atlas as
`?`. `Font.width` measures a line, skipping characters the atlas does not
hold. A font that cannot be parsed, or an empty range, raises
`ValueError`.

## Utilities (`ludo.utils`)

`file_name`, `dated_name`, `index_of_string` (0 when absent),
`all_files_in` (every non-hidden file under a directory, in sorted walk
order), `core_ext` (`.so`, `.dylib`, `.dll` or `""`), `lines_in_file`
(counts newlines in a binary or text stream) and `capture_output` (runs a
function and returns what it logged).

## What this package does not do

It opens no window and talks to no graphics API: `Video` and `Font` only
compute state, vertices and the glyph atlas, and drawing them is left to
the caller. It does not load or run libretro cores, read input, play
audio or show a menu, and it has no command to start.