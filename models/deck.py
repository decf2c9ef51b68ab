"""Deck records: leader slots, glory card, main deck and evolve deck."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from models.card import CardData


class DeckType(Enum):
    """The three deck construction formats."""

    STANDARD = "Standard"
    GLORYFINDER = "Gloryfinder"
    CROSSCRAFT = "CrossCraft"

    @property
    def label(self) -> str:
        return "Cross Craft" if self is DeckType.CROSSCRAFT else self.value

    @classmethod
    def parse(cls, value: Any) -> DeckType:
        """Accept the enum, its name/value in any case, or the integer ordinal used by old saves."""
        if isinstance(value, DeckType):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            members = list(cls)
            if 0 <= value < len(members):
                return members[value]
            raise ValueError(f"Unknown deck type ordinal: {value}")
        text = str(value or "").replace(" ", "").strip().lower()
        for member in cls:
            if text in (member.value.lower(), member.name.lower()):
                return member
        raise ValueError(f"Unknown deck type: {value!r}")


@dataclass(eq=False)
class DeckEntry:
    card: CardData
    quantity: int = 1


@dataclass(eq=False)
class Deck:
    name: str = "New Deck"
    deck_type: DeckType = DeckType.STANDARD
    class1: str = ""
    class2: str | None = None
    leader1: CardData | None = None
    leader2: CardData | None = None
    glory_card: CardData | None = None
    main_deck: list[DeckEntry] = field(default_factory=list)
    evolve_deck: list[DeckEntry] = field(default_factory=list)
    tokens: list[DeckEntry] = field(default_factory=list)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def main_count(self) -> int:
        return sum(entry.quantity for entry in self.main_deck)

    @property
    def evolve_count(self) -> int:
        return sum(entry.quantity for entry in self.evolve_deck)

    @property
    def leaders(self) -> list[CardData]:
        return [leader for leader in (self.leader1, self.leader2) if leader is not None]

    def find_main_entry(self, card_number: str) -> DeckEntry | None:
        return next((e for e in self.main_deck if e.card.card_number == card_number), None)

    def find_evolve_entry(self, card_number: str) -> DeckEntry | None:
        return next((e for e in self.evolve_deck if e.card.card_number == card_number), None)

    def has_leader(self, card_number: str) -> bool:
        return any(leader.card_number == card_number for leader in self.leaders)

    def is_glory_card(self, card_number: str) -> bool:
        return self.glory_card is not None and self.glory_card.card_number == card_number

    def __repr__(self) -> str:
        return f"Deck({self.name!r}, {self.deck_type.value}, main={self.main_count}, evolve={self.evolve_count})"


__all__ = ["Deck", "DeckEntry", "DeckType"]
