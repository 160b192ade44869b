"""Application settings, their defaults and their TOML storage."""

from __future__ import annotations

import dataclasses
import logging
import os
import platform
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import platformdirs
import tomli_w

from ludo.utils import core_ext

log = logging.getLogger(__name__)

SYSTEM_CONFIG = "/etc/ludo.toml"


class SettingsLoadError(Exception):
    """Raised when the settings could not be fully loaded.

    ``settings`` holds what was loaded before the failure.
    """

    def __init__(self, message: str, settings: Settings) -> None:
        super().__init__(message)
        self.settings = settings


class CoreNotSetError(LookupError):
    """Raised when no default core is configured for a playlist."""


def _meta(key: str, label: str = "", fmt: str = "", widget: str = "", hide: str = "",
          service: str = "", path: str = "") -> dict[str, str]:
    return {
        "toml": key,
        "label": label,
        "fmt": fmt,
        "widget": widget,
        "hide": hide,
        "service": service,
        "path": path,
    }


def _dir(key: str, label: str) -> Any:
    return field(default="", metadata=_meta(key, label, "%s", "dir", "ludos"))


@dataclass
class Settings:
    """Every user-configurable option; serialises to TOML."""

    video_fullscreen: bool = field(
        default=False,
        metadata=_meta("video_fullscreen", "Video Fullscreen", "%t", "switch", "ludos"))
    video_monitor_index: int = field(
        default=0, metadata=_meta("video_monitor_index", "Video Monitor Index", "%d"))
    video_filter: str = field(
        default="", metadata=_meta("video_filter", "Video Filter", "<%s>"))
    video_dark_mode: bool = field(
        default=False,
        metadata=_meta("video_dark_mode", "Video Dark Mode", "%t", "switch"))

    audio_volume: float = field(
        default=0.0, metadata=_meta("audio_volume", "Audio Volume", "%.1f", "range"))

    menu_audio_volume: float = field(
        default=0.0,
        metadata=_meta("menu_audio_volume", "Menu Audio Volume", "%.1f", "range"))
    show_hidden_files: bool = field(
        default=False,
        metadata=_meta("menu_showhiddenfiles", "Show Hidden Files", "%t", "switch"))

    map_axis_to_dpad: bool = field(
        default=False,
        metadata=_meta("input_map_axis_to_dpad", "Map Sticks To DPad", "%t", "switch"))

    core_for_playlist: dict[str, str] = field(
        default_factory=dict, metadata=_meta("core_for_playlist", hide="always"))

    file_directory: str = _dir("files_dir", "Files Directory")
    cores_directory: str = _dir("cores_dir", "Cores Directory")
    assets_directory: str = _dir("assets_dir", "Assets Directory")
    database_directory: str = _dir("database_dir", "Database Directory")
    savestates_directory: str = _dir("savestates_dir", "Savestates Directory")
    savefiles_directory: str = _dir("savefiles_dir", "Savefiles Directory")
    screenshots_directory: str = _dir("screenshots_dir", "Screenshots Directory")
    system_directory: str = _dir("system_dir", "System Directory")
    playlists_directory: str = _dir("playlists_dir", "Playlists Directory")
    thumbnails_directory: str = _dir("thumbnail_dir", "Thumbnails Directory")

    ssh_service: bool = field(
        default=False,
        metadata=_meta("ssh_service", "SSH", widget="switch", hide="app",
                       service="sshd.service",
                       path="/storage/.cache/services/sshd.conf"))
    samba_service: bool = field(
        default=False,
        metadata=_meta("samba_service", "Samba", widget="switch", hide="app",
                       service="smbd.service",
                       path="/storage/.cache/services/samba.conf"))
    bluetooth_service: bool = field(
        default=False,
        metadata=_meta("bluetooth_service", "Bluetooth", widget="switch", hide="app",
                       service="bluetooth.service",
                       path="/storage/.cache/services/bluez.conf"))

    def to_dict(self) -> dict[str, Any]:
        """Return the settings keyed by their TOML names."""
        result: dict[str, Any] = {}
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            result[f.metadata["toml"]] = dict(value) if isinstance(value, dict) else value
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Build settings from TOML-keyed data on top of the defaults."""
        return default_settings()._updated(data)

    def _updated(self, data: dict[str, Any]) -> Settings:
        changes: dict[str, Any] = {}
        for f in dataclasses.fields(self):
            key = f.metadata["toml"]
            if key in data:
                changes[f.name] = _coerce(key, f.type, data[key])
        return dataclasses.replace(self, **changes)


def _coerce(key: str, kind: Any, value: Any) -> Any:
    kind = str(kind)
    if kind == "bool":
        if isinstance(value, bool):
            return value
    elif kind == "int":
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    elif kind == "float":
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    elif kind == "str":
        if isinstance(value, str):
            return value
    elif isinstance(value, dict) and all(
        isinstance(k, str) and isinstance(v, str) for k, v in value.items()
    ):
        return dict(value)
    raise TypeError(f"invalid value for {key!r}: {value!r}")


def playstation_core(machine: str | None = None) -> str:
    """Return the PlayStation core suited to the given CPU architecture."""
    machine = (machine if machine is not None else platform.machine()).lower()
    is_32bit_arm = machine.startswith("arm") and machine not in ("arm64", "armv8") \
        and not machine.startswith("aarch64")
    return "pcsx_rearmed_libretro" if is_32bit_arm else "swanstation_libretro"


def default_settings() -> Settings:
    """Return a fresh set of default settings."""
    data_home = Path(platformdirs.user_data_dir("ludo", appauthor=False))
    return Settings(
        video_fullscreen=False,
        video_monitor_index=0,
        video_filter="Pixel Perfect",
        map_axis_to_dpad=False,
        audio_volume=0.5,
        menu_audio_volume=0.25,
        show_hidden_files=False,
        core_for_playlist={
            "Atari - 2600": "stella2014_libretro",
            "Atari - 5200": "atari800_libretro",
            "Atari - 7800": "prosystem_libretro",
            "Atari - Jaguar": "virtualjaguar_libretro",
            "Atari - Lynx": "handy_libretro",
            "Atari - ST": "hatari_libretro",
            "Bandai - WonderSwan Color": "mednafen_wswan_libretro",
            "Bandai - WonderSwan": "mednafen_wswan_libretro",
            "Cave Story": "nxengine_libretro",
            "ChaiLove": "chailove_libretro",
            "Coleco - ColecoVision": "bluemsx_libretro",
            "FBNeo - Arcade Games": "fbneo_libretro",
            "GCE - Vectrex": "vecx_libretro",
            "Magnavox - Odyssey2": "o2em_libretro",
            "Microsoft - MSX": "bluemsx_libretro",
            "Microsoft - MSX2": "bluemsx_libretro",
            "NEC - PC Engine SuperGrafx": "mednafen_pce_libretro",
            "NEC - PC Engine - TurboGrafx 16": "mednafen_pce_libretro",
            "NEC - PC Engine CD - TurboGrafx-CD": "mednafen_pce_libretro",
            "NEC - PC-FX": "mednafen_pcfx_libretro",
            "Nintendo - Family Computer Disk System": "fceumm_libretro",
            "Nintendo - Game Boy Advance": "mgba_libretro",
            "Nintendo - Game Boy Color": "gambatte_libretro",
            "Nintendo - Game Boy": "gambatte_libretro",
            "Nintendo - Nintendo 64": "mupen64plus_next_libretro",
            "Nintendo - Nintendo Entertainment System": "fceumm_libretro",
            "Nintendo - Nintendo DS": "melonds_libretro",
            "Nintendo - Pokemon Mini": "pokemini_libretro",
            "Nintendo - Super Nintendo Entertainment System": "snes9x_libretro",
            "Nintendo - Virtual Boy": "mednafen_vb_libretro",
            "Sega - 32X": "picodrive_libretro",
            "Sega - Game Gear": "genesis_plus_gx_libretro",
            "Sega - Master System - Mark III": "genesis_plus_gx_libretro",
            "Sega - Mega Drive - Genesis": "genesis_plus_gx_libretro",
            "Sega - Mega-CD - Sega CD": "genesis_plus_gx_libretro",
            "Sega - PICO": "picodrive_libretro",
            "Sega - Saturn": "mednafen_saturn_libretro",
            "Sega - SG-1000": "genesis_plus_gx_libretro",
            "SNK - Neo Geo Pocket Color": "mednafen_ngp_libretro",
            "SNK - Neo Geo Pocket": "mednafen_ngp_libretro",
            "Sony - PlayStation": playstation_core(),
        },
        file_directory=str(Path.home()),
        cores_directory="./cores",
        assets_directory="./assets",
        database_directory="./database",
        savestates_directory=str(data_home / "savestates"),
        savefiles_directory=str(data_home / "savefiles"),
        screenshots_directory=str(data_home / "screenshots"),
        system_directory=str(data_home / "system"),
        playlists_directory=str(data_home / "playlists"),
        thumbnails_directory=str(data_home / "thumbnails"),
    )


def _config_home(config_home: str | os.PathLike[str] | None) -> Path:
    return Path(config_home) if config_home is not None else platformdirs.user_config_path()


def _parse(raw: bytes) -> dict[str, Any]:
    return tomllib.loads(raw.decode("utf-8"))


def load(config_home: str | os.PathLike[str] | None = None,
         system_config: str | os.PathLike[str] = SYSTEM_CONFIG) -> Settings:
    """Load settings: defaults, then the system file, then the user file.

    The result is always saved back to the user file, even when loading fails.
    Raises SettingsLoadError, carrying what was loaded, on any failure.
    """
    home = _config_home(config_home)
    current = default_settings()
    try:
        system_path = Path(system_config)
        if system_path.exists():
            try:
                raw = system_path.read_bytes()
            except OSError:
                raw = b""
            current = current._updated(_parse(raw))
        user_raw = (home / "ludo" / "settings.toml").read_bytes()
        current = current._updated(_parse(user_raw))
    except (OSError, ValueError, TypeError) as exc:
        raise SettingsLoadError(str(exc), current) from exc
    finally:
        try:
            save(current, home)
        except OSError as exc:
            log.error("%s", exc)
    return current


def save(settings: Settings, config_home: str | os.PathLike[str] | None = None) -> Path:
    """Write the settings to the user's settings file and return its path."""
    directory = _config_home(config_home) / "ludo"
    directory.mkdir(parents=True, exist_ok=True)
    payload = tomli_w.dumps(settings.to_dict()).encode("utf-8")
    target = directory / "settings.toml"
    with open(target, "wb") as fd:
        fd.write(payload)
        fd.flush()
        os.fsync(fd.fileno())
    return target


def core_for_playlist(settings: Settings, playlist: str) -> str:
    """Return the path of the default libretro core for a playlist."""
    core = settings.core_for_playlist.get(playlist, "")
    if not core:
        raise CoreNotSetError("default core not set")
    return os.path.join(settings.cores_directory, core + core_ext())