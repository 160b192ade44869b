"""Settings, runtime state, display geometry, screenshots and font layout for a libretro frontend."""

__version__ = "0.1.0"