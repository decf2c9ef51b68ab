"""
Collection Service - Business logic for collection/inventory management.

This module contains all the business logic for managing the card collection:
- Holding the master card list (loaded from saves and CSV imports)
- Quantity, favorite and wishlist updates
- Checklist groups (printings combined by name)
- Looking up other printings of a card
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path

from loguru import logger

from models.card import CardData
from models.collection import CombinedCardCount
from repositories.card_repository import CardRepository, get_card_repository


def _same(left: str | None, right: str | None) -> bool:
    return (left or "").lower() == (right or "").lower()


class CollectionService:
    """Service for collection/inventory management logic."""

    def __init__(self, card_repository: CardRepository | None = None):
        """
        Initialize the collection service.

        Args:
            card_repository: CardRepository instance
        """
        self.card_repo = card_repository or get_card_repository()
        self._cards: list[CardData] = []

    # ============= Card List =============

    @property
    def cards(self) -> list[CardData]:
        return self._cards

    def replace_cards(self, cards: Iterable[CardData]) -> None:
        self._cards = list(cards)

    def merge_cards(self, cards: Iterable[CardData]) -> int:
        """
        Append cards that are not already in the collection.

        A card is a duplicate when an existing card has the same name and card
        number (exact match).

        Returns:
            Number of cards added
        """
        existing = {(card.name, card.card_number) for card in self._cards}
        added = 0
        for card in cards:
            key = (card.name, card.card_number)
            if key in existing:
                continue
            existing.add(key)
            self._cards.append(card)
            added += 1
        return added

    # ============= Loading / Saving =============

    def load_saved(self, path: Path | None = None) -> int:
        """Replace the card list with the saved cards; returns how many were loaded."""
        self.replace_cards(self.card_repo.load_saved_cards(path))
        return len(self._cards)

    def save(self, path: Path | None = None) -> None:
        self.card_repo.save_cards(self._cards, path)

    # ============= Quantity / Flags =============

    def apply_quantity_changes(self, deltas: Mapping[str, int]) -> int:
        """
        Apply add/remove deltas keyed by card number.

        New quantities are clamped at zero. Adding copies of a wishlisted card
        lowers its desired quantity by the same amount.

        Args:
            deltas: card number -> change in owned copies

        Returns:
            Number of cards whose quantity changed
        """
        updated = 0
        for card in self._cards:
            delta = deltas.get(card.card_number, 0)
            if not delta:
                continue
            new_quantity = max(0, card.quantity_owned + delta)
            if new_quantity != card.quantity_owned:
                card.quantity_owned = new_quantity
                updated += 1
            if delta > 0 and card.is_wishlisted:
                card.set_wishlist_quantity(card.wishlist_desired_quantity - delta)
        if updated:
            logger.info(f"Updated quantities for {updated} card(s)")
        return updated

    @staticmethod
    def set_quantity(card: CardData, quantity: int) -> None:
        card.quantity_owned = max(0, int(quantity))

    @staticmethod
    def adjust_quantity(card: CardData, delta: int) -> int:
        card.quantity_owned = max(0, card.quantity_owned + delta)
        return card.quantity_owned

    @staticmethod
    def toggle_favorite(card: CardData) -> bool:
        card.is_favorite = not card.is_favorite
        return card.is_favorite

    @staticmethod
    def set_wishlist(card: CardData, wishlisted: bool, quantity: int | None = None) -> None:
        """Wishlist a card, optionally with an explicit desired quantity."""
        if quantity is not None:
            card.set_wishlist_quantity(quantity if wishlisted else 0)
        else:
            card.is_wishlisted = wishlisted

    # ============= Checklist / Versions =============

    def combined_card_counts(self) -> list[CombinedCardCount]:
        """Group printings by (name, evolved) and sort the groups by name."""
        groups: dict[tuple[str, bool], list[CardData]] = {}
        for card in self._cards:
            groups.setdefault((card.name or "", card.is_evolved), []).append(card)
        combined = [CombinedCardCount(cards) for cards in groups.values()]
        combined.sort(key=lambda group: group.name.lower())
        return combined

    def other_versions(self, card: CardData) -> tuple[list[CardData], int]:
        """
        All printings with the same name and type as ``card``.

        Ordered by same set and rarity, same set, same rarity, then card number.

        Returns:
            (versions, index of ``card`` by card number or 0)
        """
        versions = [c for c in self._cards if _same(c.name, card.name) and _same(c.card_type, card.card_type)]
        versions.sort(
            key=lambda c: (
                not (_same(c.card_set, card.card_set) and _same(c.rarity, card.rarity)),
                not _same(c.card_set, card.card_set),
                not _same(c.rarity, card.rarity),
                (c.card_number or "").lower(),
            )
        )
        index = next((i for i, c in enumerate(versions) if _same(c.card_number, card.card_number)), 0)
        return versions, index

    def count_versions(self, card: CardData) -> int:
        return sum(1 for c in self._cards if _same(c.name, card.name) and _same(c.card_type, card.card_type))


# Global instance
_default_service = None


def get_collection_service() -> CollectionService:
    """Get the default collection service instance."""
    global _default_service
    if _default_service is None:
        _default_service = CollectionService()
    return _default_service


def reset_collection_service() -> None:
    """
    Reset the global collection service instance.

    This is primarily useful for testing to ensure test isolation
    and prevent state leakage between tests.
    """
    global _default_service
    _default_service = None
