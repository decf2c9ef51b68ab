"""
Card Repository - Data access layer for card information.

This module handles all card-related data access including:
- Importing card metadata from folders of CSV exports
- Loading and saving the collection file (savedCards.json)
"""

import json
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from loguru import logger

from models.card import CardData
from utils.constants import SAVED_CARDS_FILE
from utils.csv_reader import parse_csv_records, read_csv_text

# CSV header -> CardData attribute
CSV_COLUMNS: dict[str, str] = {
    "Name": "name",
    "Card #": "card_number",
    "Rarity": "rarity",
    "Set": "card_set",
    "Format": "format",
    "Class": "card_class",
    "Type": "card_type",
    "Traits": "traits",
    "Cost": "cost",
    "Attack": "attack",
    "Defense": "defense",
    "Text": "text",
}


class CardRepository:
    """Repository for card data access operations."""

    def __init__(self, saved_cards_path: Path | None = None):
        """
        Initialize the card repository.

        Args:
            saved_cards_path: Collection file location. Defaults to SAVED_CARDS_FILE.
        """
        self.saved_cards_path = saved_cards_path or SAVED_CARDS_FILE

    # ============= CSV Import =============

    def load_cards_from_folder(self, folder: str | Path | None) -> list[CardData]:
        """
        Read every CSV file in a folder (recursively) into CardData records.

        Args:
            folder: Folder containing CSV exports

        Returns:
            List of cards with zero owned quantity. Empty if the folder does not exist.

        Raises:
            ValueError: If no folder was provided
        """
        if folder is None or not str(folder).strip():
            raise ValueError("folder must be provided")

        root = Path(folder)
        if not root.is_dir():
            logger.warning(f"CSV folder does not exist: {root}")
            return []

        cards: list[CardData] = []
        file_count = 0
        for csv_path in self._iter_csv_files(root):
            try:
                text = read_csv_text(csv_path)
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning(f"Skipping unreadable CSV {csv_path}: {exc}")
                continue

            file_cards = self.parse_card_csv(text)
            file_count += 1
            logger.debug(f"Read {len(file_cards)} card(s) from {csv_path.name}")
            cards.extend(file_cards)

        logger.info(f"Loaded {len(cards)} card(s) from {file_count} CSV file(s) in {root}")
        return cards

    @staticmethod
    def parse_card_csv(text: str) -> list[CardData]:
        """Map the records of one CSV file to cards; the first record is the header."""
        records = list(parse_csv_records(text))
        if not records:
            return []

        header = [(column or "").strip().lower() for column in records[0]]
        indexes: dict[str, int] = {}
        for column, attr in CSV_COLUMNS.items():
            try:
                indexes[attr] = header.index(column.lower())
            except ValueError:
                continue

        cards: list[CardData] = []
        for row in records[1:]:
            values = {
                attr: row[index] if index < len(row) else "" for attr, index in indexes.items()
            }
            cards.append(CardData(**values))
        return cards

    @staticmethod
    def _iter_csv_files(root: Path) -> Iterator[Path]:
        """Walk the folder tree, skipping directories that cannot be listed."""

        def on_error(exc: OSError) -> None:
            logger.warning(f"Skipping inaccessible folder {exc.filename}: {exc.strerror}")

        for dirpath, _dirnames, filenames in os.walk(root, onerror=on_error):
            for filename in sorted(filenames):
                if filename.lower().endswith(".csv"):
                    yield Path(dirpath) / filename

    # ============= Collection File =============

    def load_saved_cards(self, path: Path | None = None) -> list[CardData]:
        """
        Load the saved collection.

        Args:
            path: Optional override of the collection file

        Returns:
            List of cards (empty if the file is missing or unreadable)
        """
        path = path or self.saved_cards_path
        if not path.exists():
            logger.info(f"No saved cards at {path}")
            return []

        try:
            payload = json.loads(path.read_text(encoding="utf-8-sig"))
        except json.JSONDecodeError as exc:
            logger.warning(f"Invalid JSON in {path}; ignoring saved cards: {exc}")
            return []
        except OSError as exc:
            logger.warning(f"Failed to read {path}: {exc}")
            return []

        if not isinstance(payload, list):
            logger.warning(f"Unexpected saved cards format in {path}")
            return []

        cards = [CardData.from_dict(entry) for entry in payload if isinstance(entry, dict)]
        logger.info(f"Loaded {len(cards)} saved card(s) from {path}")
        return cards

    def save_cards(self, cards: list[CardData], path: Path | None = None) -> None:
        """
        Persist the collection.

        Args:
            cards: Cards to write
            path: Optional override of the collection file

        Raises:
            OSError: If the file cannot be written
        """
        path = path or self.saved_cards_path
        payload: list[dict[str, Any]] = [card.to_dict() for card in cards]
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        logger.debug(f"Saved {len(cards)} card(s) to {path}")


# Global instance
_default_repository = None


def get_card_repository() -> CardRepository:
    """Get the default card repository instance."""
    global _default_repository
    if _default_repository is None:
        _default_repository = CardRepository()
    return _default_repository


def reset_card_repository() -> None:
    """
    Reset the global card repository instance.

    This is primarily useful for testing to ensure test isolation
    and prevent state leakage between tests.
    """
    global _default_repository
    _default_repository = None
