"""Aggregated views over the card list: checklist groups and set completion rows."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from models.card import CardData
from utils.card_display import quantity_category


class CombinedCardCount:
    """All printings sharing a name and evolved-ness, as listed on the checklist."""

    def __init__(self, cards: Iterable[CardData]):
        self._cards = list(cards)

    @property
    def all_cards(self) -> list[CardData]:
        return list(self._cards)

    @property
    def first(self) -> CardData | None:
        return self._cards[0] if self._cards else None

    @property
    def is_evolved(self) -> bool:
        return any(card.is_evolved for card in self._cards)

    @property
    def name(self) -> str:
        base = self.first.name if self.first else ""
        return f"{base} (Evolved)" if self.is_evolved else base

    @property
    def total_quantity_owned(self) -> int:
        return sum(card.quantity_owned for card in self._cards)

    @property
    def copies_needed_for_playset(self) -> int:
        return self.first.copies_needed_for_playset if self.first else 3

    @property
    def has_favorite(self) -> bool:
        return any(card.is_favorite for card in self._cards)

    @property
    def sets(self) -> list[str]:
        sets: list[str] = []
        for card in self._cards:
            value = (card.card_set or "").strip()
            if value and value not in sets:
                sets.append(value)
        return sets

    @property
    def images(self) -> list[Path]:
        return [card.image_file for card in self._cards if card.quantity_owned > 0]

    @property
    def cards(self) -> list[CardData]:
        """Owned printings, or just the first printing when nothing is owned."""
        if self.total_quantity_owned > 0:
            return [card for card in self._cards if card.quantity_owned > 0]
        return self._cards[:1]

    @property
    def category(self) -> str:
        return quantity_category(self.total_quantity_owned, self.copies_needed_for_playset)

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"CombinedCardCount({self.name!r}, owned={self.total_quantity_owned})"


@dataclass(frozen=True)
class SetCompletionRow:
    """Completion percentages for one set."""

    set_name: str
    one_card_percent: int
    playset_percent: int
    unique_one_card_percent: int
    unique_playset_percent: int
    total_cards: int = 0
    owned_at_least_one: int = 0
    playset_owned: int = 0
    playset_total: int = 0
    total_unique_cards: int = 0
    unique_owned_at_least_one: int = 0
    unique_playset_owned: int = 0


__all__ = ["CombinedCardCount", "SetCompletionRow"]
