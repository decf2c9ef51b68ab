from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from loguru import logger

from utils.constants import SETTINGS_FILE

TAB_NAMES = ("all_cards", "checklist", "set_completion", "deck_builder")

DEFAULT_WINDOW_SIZE = (1400, 900)
MIN_WINDOW_SIZE = (900, 600)
MAX_WINDOW_SIZE = (7680, 4320)


@dataclass
class AppSettings:
    """User preferences restored on start-up."""

    last_csv_folder: str = ""
    last_image_folder: str = ""
    selected_tab: str = TAB_NAMES[0]
    window_width: int = DEFAULT_WINDOW_SIZE[0]
    window_height: int = DEFAULT_WINDOW_SIZE[1]
    all_cards_favorites_only: bool = False
    all_cards_wishlisted_only: bool = False
    checklist_favorites_only: bool = False
    checklist_only_selected_sets: bool = False
    last_deck_id: str = ""

    @property
    def window_size(self) -> tuple[int, int]:
        return self.window_width, self.window_height


class StateService:
    """Loads and persists application state."""

    def __init__(self, settings_path: Path | None = None) -> None:
        self.settings_path = settings_path or SETTINGS_FILE
        self._settings: AppSettings | None = None

    def load(self) -> dict[str, Any]:
        if not self.settings_path.exists():
            return {}
        try:
            with self.settings_path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except json.JSONDecodeError as exc:  # pragma: no cover - defensive logging
            logger.warning(f"Failed to load settings: {exc}")
            return {}
        except OSError as exc:  # pragma: no cover - defensive logging
            logger.warning(f"Unable to read settings: {exc}")
            return {}
        return data if isinstance(data, dict) else {}

    def save(self, data: dict[str, Any]) -> None:
        try:
            self.settings_path.parent.mkdir(parents=True, exist_ok=True)
            with self.settings_path.open("w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2)
        except OSError as exc:  # pragma: no cover - defensive logging
            logger.warning(f"Unable to persist settings: {exc}")

    @staticmethod
    def coerce_bool(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)

    @staticmethod
    def clamp_int(value: Any, *, default: int, minimum: int, maximum: int) -> int:
        try:
            number = int(float(value))
        except (TypeError, ValueError):
            number = default
        return max(minimum, min(number, maximum))

    @staticmethod
    def coerce_str(value: Any) -> str:
        return value if isinstance(value, str) else ""

    def build_settings(self, data: dict[str, Any]) -> AppSettings:
        """Initialize settings from persisted preferences, replacing invalid values with defaults."""
        selected_tab = data.get("selected_tab", TAB_NAMES[0])
        if selected_tab not in TAB_NAMES:
            selected_tab = TAB_NAMES[0]

        settings = AppSettings(
            last_csv_folder=self.coerce_str(data.get("last_csv_folder")),
            last_image_folder=self.coerce_str(data.get("last_image_folder")),
            selected_tab=selected_tab,
            window_width=self.clamp_int(
                data.get("window_width"),
                default=DEFAULT_WINDOW_SIZE[0],
                minimum=MIN_WINDOW_SIZE[0],
                maximum=MAX_WINDOW_SIZE[0],
            ),
            window_height=self.clamp_int(
                data.get("window_height"),
                default=DEFAULT_WINDOW_SIZE[1],
                minimum=MIN_WINDOW_SIZE[1],
                maximum=MAX_WINDOW_SIZE[1],
            ),
            all_cards_favorites_only=self.coerce_bool(data.get("all_cards_favorites_only", False)),
            all_cards_wishlisted_only=self.coerce_bool(data.get("all_cards_wishlisted_only", False)),
            checklist_favorites_only=self.coerce_bool(data.get("checklist_favorites_only", False)),
            checklist_only_selected_sets=self.coerce_bool(data.get("checklist_only_selected_sets", False)),
            last_deck_id=self.coerce_str(data.get("last_deck_id")),
        )
        self._settings = settings
        return settings

    def load_settings(self) -> AppSettings:
        return self.build_settings(self.load())

    def save_settings(self, settings: AppSettings | None = None) -> None:
        settings = settings or self.get_settings()
        self._settings = settings
        self.save(asdict(settings))

    def get_settings(self) -> AppSettings:
        if self._settings is None:
            self._settings = AppSettings()
        return self._settings


__all__ = ["AppSettings", "StateService", "TAB_NAMES"]
