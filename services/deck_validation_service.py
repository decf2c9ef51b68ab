"""
Deck Validation Service - Format legality rules for deck building.

Rules for the three formats:
- Standard: one leader, 40-50 main deck cards, up to 10 evolve cards, 3 copies max,
  cards of the deck class or Neutral
- Gloryfinder: one leader plus a glory card, exactly 50 singleton main deck cards,
  up to 20 singleton evolve cards, any class
- CrossCraft: two leaders of different classes, Standard sizes, cards of either
  class or Neutral with at least one main deck card of each class
"""

from __future__ import annotations

from collections.abc import Iterable

from models.card import CardData
from models.deck import Deck, DeckEntry, DeckType
from utils.game_constants import (
    EVOLVE_DECK_MAX,
    GLORYFINDER_EVOLVE_DECK_MAX,
    GLORYFINDER_MAIN_DECK_SIZE,
    MAIN_DECK_MAX,
    MAIN_DECK_MIN,
    MAX_COPIES_PER_CARD,
    NEUTRAL_CLASS,
)


def _same(left: str | None, right: str | None) -> bool:
    return (left or "").lower() == (right or "").lower()


class DeckValidationService:
    """Answers "can this card go here?" and lists what makes a deck illegal."""

    # ============= Card Type Checks =============

    @staticmethod
    def is_leader_card(card: CardData | None) -> bool:
        return card is not None and card.is_leader

    @staticmethod
    def is_token_card(card: CardData | None) -> bool:
        return card is not None and card.is_token

    @staticmethod
    def is_evolved_card(card: CardData | None) -> bool:
        return card is not None and card.is_evolved

    def is_non_deck_card(self, card: CardData | None) -> bool:
        return self.is_leader_card(card) or self.is_token_card(card)

    # ============= Eligibility =============

    def is_valid_for_deck(self, card: CardData | None, deck: Deck | None) -> bool:
        """Whether the card's class may appear in the deck at all."""
        if card is None or deck is None:
            return False
        if deck.deck_type is DeckType.GLORYFINDER:
            return True
        allowed = [deck.class1, NEUTRAL_CLASS]
        if deck.deck_type is DeckType.CROSSCRAFT:
            allowed.append(deck.class2 or "")
        return any(_same(card.card_class, cls) for cls in allowed if cls)

    def can_add_leader(self, card: CardData | None, deck: Deck | None) -> bool:
        if card is None or deck is None:
            return False
        if deck.deck_type is not DeckType.CROSSCRAFT:
            return deck.leader1 is None
        if deck.leader1 is None:
            return True
        # The second leader must come from the other class
        if deck.leader2 is None:
            return (card.card_class or "").lower() not in (deck.leader1.card_class or "").lower()
        return False

    def can_add_to_main_deck(self, card: CardData | None, deck: Deck | None) -> bool:
        if card is None or deck is None:
            return False

        existing = deck.find_main_entry(card.card_number)
        if deck.deck_type is DeckType.GLORYFINDER:
            if existing is not None:
                return False
            if deck.main_count >= GLORYFINDER_MAIN_DECK_SIZE:
                return False
            return not deck.is_glory_card(card.card_number)

        if existing is not None and existing.quantity >= MAX_COPIES_PER_CARD:
            return False
        return deck.main_count < MAIN_DECK_MAX

    def can_add_to_evolve_deck(self, card: CardData | None, deck: Deck | None) -> bool:
        if card is None or deck is None:
            return False
        if not self.is_evolved_card(card):
            return False

        existing = deck.find_evolve_entry(card.card_number)
        if deck.deck_type is DeckType.GLORYFINDER:
            if existing is not None:
                return False
            return deck.evolve_count < GLORYFINDER_EVOLVE_DECK_MAX

        if existing is not None and existing.quantity >= MAX_COPIES_PER_CARD:
            return False
        return deck.evolve_count < EVOLVE_DECK_MAX

    def can_increase_main_deck_quantity(self, entry: DeckEntry | None, deck: Deck | None) -> bool:
        if entry is None or deck is None:
            return False
        if deck.deck_type is DeckType.GLORYFINDER:
            return False
        return entry.quantity < MAX_COPIES_PER_CARD and deck.main_count < MAIN_DECK_MAX

    def can_increase_evolve_deck_quantity(self, entry: DeckEntry | None, deck: Deck | None) -> bool:
        if entry is None or deck is None:
            return False
        if deck.deck_type is DeckType.GLORYFINDER:
            return False
        return entry.quantity < MAX_COPIES_PER_CARD and deck.evolve_count < EVOLVE_DECK_MAX

    # ============= Whole-deck Validation =============

    def validate_deck(self, deck: Deck | None) -> list[str]:
        """
        Collect every rule the deck currently breaks.

        Args:
            deck: Deck to check

        Returns:
            Human-readable error messages; empty when the deck is legal
        """
        if deck is None:
            return ["No deck selected."]

        if deck.deck_type is DeckType.GLORYFINDER:
            return self._validate_gloryfinder(deck)
        if deck.deck_type is DeckType.CROSSCRAFT:
            return self._validate_crosscraft(deck)
        return self._validate_standard(deck)

    def is_valid(self, deck: Deck | None) -> bool:
        return not self.validate_deck(deck)

    def _validate_standard(self, deck: Deck) -> list[str]:
        errors: list[str] = []
        if deck.leader1 is None:
            errors.append("A leader is required.")
        errors.extend(self._size_errors(deck, EVOLVE_DECK_MAX))
        errors.extend(self._copy_limit_errors(deck.main_deck, "main deck"))
        errors.extend(self._copy_limit_errors(deck.evolve_deck, "evolve deck"))
        errors.extend(self._class_errors(deck))
        return errors

    def _validate_crosscraft(self, deck: Deck) -> list[str]:
        errors: list[str] = []
        if deck.leader1 is None or deck.leader2 is None:
            errors.append("Two leaders are required.")
        errors.extend(self._size_errors(deck, EVOLVE_DECK_MAX))
        errors.extend(self._copy_limit_errors(deck.main_deck, "main deck"))
        errors.extend(self._copy_limit_errors(deck.evolve_deck, "evolve deck"))
        for cls in (deck.class1, deck.class2):
            if not any(_same(entry.card.card_class, cls) for entry in deck.main_deck):
                errors.append(f"The main deck needs at least one {cls or 'second class'} card.")
        errors.extend(self._class_errors(deck))
        return errors

    def _validate_gloryfinder(self, deck: Deck) -> list[str]:
        errors: list[str] = []
        if deck.leader1 is None:
            errors.append("A leader is required.")
        if deck.glory_card is None:
            errors.append("A glory card is required.")

        main_count = deck.main_count
        if main_count != GLORYFINDER_MAIN_DECK_SIZE:
            errors.append(
                f"The main deck must contain exactly {GLORYFINDER_MAIN_DECK_SIZE} cards "
                f"(currently {main_count})."
            )
        errors.extend(self._duplicate_errors(deck.main_deck, "main deck"))

        evolve_count = deck.evolve_count
        if evolve_count > GLORYFINDER_EVOLVE_DECK_MAX:
            errors.append(
                f"The evolve deck cannot exceed {GLORYFINDER_EVOLVE_DECK_MAX} cards "
                f"(currently {evolve_count})."
            )
        errors.extend(self._duplicate_errors(deck.evolve_deck, "evolve deck"))

        if deck.glory_card is not None and deck.find_main_entry(deck.glory_card.card_number):
            errors.append(f"The glory card {deck.glory_card.name} cannot also be in the main deck.")
        return errors

    # ============= Private Validation Helpers =============

    @staticmethod
    def _size_errors(deck: Deck, evolve_max: int) -> list[str]:
        errors: list[str] = []
        main_count = deck.main_count
        if not MAIN_DECK_MIN <= main_count <= MAIN_DECK_MAX:
            errors.append(
                f"The main deck must contain {MAIN_DECK_MIN}-{MAIN_DECK_MAX} cards "
                f"(currently {main_count})."
            )
        evolve_count = deck.evolve_count
        if evolve_count > evolve_max:
            errors.append(
                f"The evolve deck cannot exceed {evolve_max} cards (currently {evolve_count})."
            )
        return errors

    @staticmethod
    def _copy_limit_errors(entries: Iterable[DeckEntry], zone: str) -> list[str]:
        return [
            f"{entry.card.name} has {entry.quantity} copies in the {zone} "
            f"(max {MAX_COPIES_PER_CARD})."
            for entry in entries
            if entry.quantity > MAX_COPIES_PER_CARD
        ]

    @staticmethod
    def _duplicate_errors(entries: Iterable[DeckEntry], zone: str) -> list[str]:
        return [
            f"{entry.card.name} appears {entry.quantity} times in the {zone}; duplicates are not allowed."
            for entry in entries
            if entry.quantity > 1
        ]

    def _class_errors(self, deck: Deck) -> list[str]:
        errors: list[str] = []
        for entry in [*deck.main_deck, *deck.evolve_deck]:
            if not self.is_valid_for_deck(entry.card, deck):
                errors.append(
                    f"{entry.card.name} ({entry.card.card_class or 'no class'}) "
                    f"is not allowed in this deck."
                )
        return errors


# Global instance
_default_service = None


def get_deck_validation_service() -> DeckValidationService:
    """Get the default deck validation service instance."""
    global _default_service
    if _default_service is None:
        _default_service = DeckValidationService()
    return _default_service


def reset_deck_validation_service() -> None:
    """Reset the global deck validation service instance."""
    global _default_service
    _default_service = None
