"""Constants file."""

import os
import sys
from pathlib import Path

APP_NAME = "ShadowverseEvolveCardTracker"
APP_TITLE = "Shadowverse Evolve Collection Tracker"
HOME_ENV_VAR = "SVE_TRACKER_HOME"


def _default_base_dir() -> Path:
    """Return the writable base directory for saved cards/decks/config/logging."""
    override = os.getenv(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    if sys.platform == "win32" or getattr(sys, "frozen", False):
        appdata = os.getenv("APPDATA") or os.getenv("LOCALAPPDATA")
        if appdata:
            return Path(appdata) / APP_NAME
    return Path.home() / ".sve_collection_tracker"


SUBDUED_TEXT = (185, 191, 202)
DARK_BG = (20, 22, 27)
DARK_PANEL = (34, 39, 46)
DARK_ALT = (40, 46, 54)
DARK_ACCENT = (59, 130, 246)
LIGHT_TEXT = (236, 236, 236)
GOLD_TEXT = (212, 175, 55)

BASE_DATA_DIR = _default_base_dir()
CONFIG_DIR = BASE_DATA_DIR / "config"
CARD_IMAGES_DIR = BASE_DATA_DIR / "CardImages"
LOGS_DIR = BASE_DATA_DIR / "logs"


def ensure_base_dirs() -> None:
    """Ensure base config/image/log directories exist without importing side effects."""
    BASE_DATA_DIR.mkdir(parents=True, exist_ok=True)
    for path in (CONFIG_DIR, CARD_IMAGES_DIR, LOGS_DIR):
        path.mkdir(parents=True, exist_ok=True)


# File names match the ones written by earlier releases so existing saves load as-is
SAVED_CARDS_FILE = BASE_DATA_DIR / "savedCards.json"
SAVED_DECKS_FILE = BASE_DATA_DIR / "savedDecks.json"
SETTINGS_FILE = CONFIG_DIR / "settings.json"

IMAGE_EXTENSIONS = frozenset({".png", ".jpg", ".jpeg", ".bmp", ".gif", ".webp", ".tif", ".tiff"})

__all__ = [
    "APP_NAME",
    "APP_TITLE",
    "SUBDUED_TEXT",
    "DARK_BG",
    "DARK_PANEL",
    "DARK_ALT",
    "DARK_ACCENT",
    "LIGHT_TEXT",
    "GOLD_TEXT",
    "BASE_DATA_DIR",
    "CONFIG_DIR",
    "CARD_IMAGES_DIR",
    "LOGS_DIR",
    "SAVED_CARDS_FILE",
    "SAVED_DECKS_FILE",
    "SETTINGS_FILE",
    "IMAGE_EXTENSIONS",
    "ensure_base_dirs",
]
