"""
Deck Repository - Data access layer for saved decks.

This module handles deck persistence (savedDecks.json), including:
- Converting decks to and from the JSON layout
- Rehydrating card references against the loaded card list
"""

import json
from pathlib import Path
from typing import Any

from loguru import logger

from models.card import CardData
from models.deck import Deck, DeckEntry, DeckType
from utils.constants import SAVED_DECKS_FILE


class DeckRepository:
    """Repository for deck data access operations."""

    def __init__(self, saved_decks_path: Path | None = None):
        """
        Initialize the deck repository.

        Args:
            saved_decks_path: Deck file location. Defaults to SAVED_DECKS_FILE.
        """
        self.saved_decks_path = saved_decks_path or SAVED_DECKS_FILE

    # ============= File Operations =============

    def load_decks(self, all_cards: list[CardData], path: Path | None = None) -> list[Deck]:
        """
        Load saved decks and point their card references at ``all_cards``.

        Args:
            all_cards: The loaded card list used for rehydration
            path: Optional override of the deck file

        Returns:
            List of decks (empty if the file is missing or unreadable)
        """
        path = path or self.saved_decks_path
        if not path.exists():
            return []

        try:
            payload = json.loads(path.read_text(encoding="utf-8-sig"))
        except json.JSONDecodeError as exc:
            logger.warning(f"Invalid JSON in {path}; ignoring saved decks: {exc}")
            return []
        except OSError as exc:
            logger.warning(f"Failed to read {path}: {exc}")
            return []

        if not isinstance(payload, list):
            logger.warning(f"Unexpected saved decks format in {path}")
            return []

        by_number = self._index_cards(all_cards)
        decks: list[Deck] = []
        for raw in payload:
            if not isinstance(raw, dict):
                continue
            try:
                decks.append(self.deck_from_dict(raw, by_number))
            except ValueError as exc:
                logger.warning(f"Skipping saved deck {raw.get('Name')!r}: {exc}")

        logger.info(f"Loaded {len(decks)} deck(s) from {path}")
        return decks

    def save_decks(self, decks: list[Deck], path: Path | None = None) -> None:
        """
        Persist decks.

        Raises:
            OSError: If the file cannot be written
        """
        path = path or self.saved_decks_path
        payload = [self.deck_to_dict(deck) for deck in decks]
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        logger.debug(f"Saved {len(decks)} deck(s) to {path}")

    # ============= Conversion =============

    @staticmethod
    def deck_to_dict(deck: Deck) -> dict[str, Any]:
        def card_or_none(card: CardData | None) -> dict[str, Any] | None:
            return card.to_dict() if card is not None else None

        def entries(items: list[DeckEntry]) -> list[dict[str, Any]]:
            return [{"Card": entry.card.to_dict(), "Quantity": entry.quantity} for entry in items]

        return {
            "Id": deck.id,
            "Name": deck.name,
            "DeckType": deck.deck_type.value,
            "Class1": deck.class1,
            "Class2": deck.class2,
            "Leader1": card_or_none(deck.leader1),
            "Leader2": card_or_none(deck.leader2),
            "GloryCard": card_or_none(deck.glory_card),
            "MainDeck": entries(deck.main_deck),
            "EvolveDeck": entries(deck.evolve_deck),
            "Tokens": entries(deck.tokens),
        }

    def deck_from_dict(self, data: dict[str, Any], by_number: dict[str, CardData]) -> Deck:
        """
        Build a deck from its saved form.

        Card references are resolved by card number; unknown leaders/glory cards
        become None and unknown entries are dropped.

        Raises:
            ValueError: If the deck type is not recognised
        """
        lowered = {str(k).lower(): v for k, v in data.items()}

        def resolve(raw: Any) -> CardData | None:
            if not isinstance(raw, dict):
                return None
            number = self._card_number_of(raw)
            return by_number.get(number) if number else None

        def resolve_entries(raw_entries: Any) -> list[DeckEntry]:
            resolved: list[DeckEntry] = []
            for raw in raw_entries or []:
                if not isinstance(raw, dict):
                    continue
                entry = {str(k).lower(): v for k, v in raw.items()}
                card = resolve(entry.get("card"))
                if card is None:
                    continue
                try:
                    quantity = int(entry.get("quantity", 1))
                except (TypeError, ValueError):
                    quantity = 1
                if quantity > 0:
                    resolved.append(DeckEntry(card=card, quantity=quantity))
            return resolved

        deck = Deck(
            name=str(lowered.get("name") or "New Deck"),
            deck_type=DeckType.parse(lowered.get("decktype", DeckType.STANDARD.value)),
            class1=str(lowered.get("class1") or ""),
            class2=lowered.get("class2") or None,
            leader1=resolve(lowered.get("leader1")),
            leader2=resolve(lowered.get("leader2")),
            glory_card=resolve(lowered.get("glorycard")),
            main_deck=resolve_entries(lowered.get("maindeck")),
            evolve_deck=resolve_entries(lowered.get("evolvedeck")),
            tokens=resolve_entries(lowered.get("tokens")),
        )
        if lowered.get("id"):
            deck.id = str(lowered["id"])
        return deck

    @staticmethod
    def _card_number_of(raw: dict[str, Any]) -> str:
        for key, value in raw.items():
            if str(key).lower() == "cardnumber":
                return str(value or "")
        return ""

    @staticmethod
    def _index_cards(all_cards: list[CardData]) -> dict[str, CardData]:
        by_number: dict[str, CardData] = {}
        for card in all_cards:
            # First printing wins, matching a linear first-match lookup
            by_number.setdefault(card.card_number, card)
        return by_number


# Global instance
_default_repository = None


def get_deck_repository() -> DeckRepository:
    """Get the default deck repository instance."""
    global _default_repository
    if _default_repository is None:
        _default_repository = DeckRepository()
    return _default_repository


def reset_deck_repository() -> None:
    """
    Reset the global deck repository instance.

    This is primarily useful for testing to ensure test isolation
    and prevent state leakage between tests.
    """
    global _default_repository
    _default_repository = None
