# gemview/settings.py
import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from . import command

logger = logging.getLogger("gemview.settings")

APP_NAME = "gemview"
PREFS_FILE_NAME = "prefs.cfg"
HISTORY_FILE_NAME = "history.txt"
HOME_FILE_NAME = "home.gmi"

DEFAULTS = {
    "retain_window_size": True,
    "ui_scale": 1.0,
}

DEFAULT_HOME_PAGE = """# Welcome to gemview

Type a gemini:// or file:// address in the bar above, or drop a file on the window.

=> about:blank Blank page
"""


@dataclass
class Preferences:
    retain_window_size: bool = DEFAULTS["retain_window_size"]
    ui_scale: float = DEFAULTS["ui_scale"]


@dataclass
class Settings:
    data_dir: Path
    prefs: Preferences = field(default_factory=Preferences)

    @property
    def prefs_path(self) -> Path:
        return self.data_dir / PREFS_FILE_NAME

    @property
    def history_path(self) -> Path:
        return self.data_dir / HISTORY_FILE_NAME

    @property
    def home_path(self) -> Path:
        return self.data_dir / HOME_FILE_NAME


def default_data_dir() -> Path:
    override = os.environ.get("GEMVIEW_DATA_DIR")
    if override:
        return Path(override).expanduser()
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME
    if sys.platform == "win32":
        return Path(os.environ.get("APPDATA", Path.home())) / APP_NAME
    base = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(base) / APP_NAME


def load_settings(data_dir: Optional[Path] = None) -> Settings:
    """Locate (and create) the data directory. Preference values are read by load_prefs()."""
    base = Path(data_dir) if data_dir else default_data_dir()
    try:
        base.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning("[Settings] could not create %s: %s", base, e)
    settings = Settings(data_dir=base)
    if not settings.home_path.exists():
        try:
            settings.home_path.write_text(DEFAULT_HOME_PAGE, encoding="utf-8")
        except OSError as e:
            logger.warning("[Settings] could not write %s: %s", settings.home_path, e)
    return settings


def load_prefs(path: Path, post) -> float:
    """
    Read the preferences file. The UI scale is returned so it can be applied
    before any window exists; every other line is handed to `post` as a command.
    A missing or unreadable file means defaults.
    """
    ui_scale = DEFAULTS["ui_scale"]
    try:
        text = Path(path).read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        return ui_scale
    except OSError as e:
        logger.warning("[Settings] could not read %s: %s", path, e)
        return ui_scale
    for line in text.split("\n"):
        line = line.strip()
        if not line:
            continue
        if command.equal_command(line, "uiscale"):
            # Must be handled before the window is created.
            ui_scale = command.arg_float(line, default=ui_scale)
        else:
            post(line)
    return ui_scale


def serialize_prefs(
    prefs: Preferences,
    geometry: Optional[Tuple[int, int, int, int]] = None,
) -> str:
    lines = [f"retainwindow arg:{int(prefs.retain_window_size)}\n"]
    if prefs.retain_window_size and geometry:
        w, h, x, y = geometry
        lines.append(f"restorewindow width:{w} height:{h} coord:{x} {y}\n")
    lines.append(f"uiscale arg:{prefs.ui_scale:f}\n")
    return "".join(lines)


def save_prefs(path: Path, text: str) -> None:
    try:
        Path(path).write_text(text, encoding="utf-8")
    except OSError as e:
        logger.warning("[Settings] could not write %s: %s", path, e)
