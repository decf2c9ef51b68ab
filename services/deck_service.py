"""
Deck Service - Business logic for deck operations.

This module contains the deck building operations used by the deck builder tab:
- Adding cards to the right zone (leader slots, main deck, evolve deck)
- Quantity increments/decrements from the grid and the card viewer
- Glory card handling for Gloryfinder decks
- Deck creation wizard state
- Deck summaries and text export
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from models.card import CardData
from models.deck import Deck, DeckEntry, DeckType
from services.deck_validation_service import DeckValidationService, get_deck_validation_service
from utils.game_constants import GLORYFINDER_MAIN_DECK_SIZE


@dataclass(frozen=True)
class DeckSummary:
    """Counts and validity shown above the deck lists."""

    main_count: int
    evolve_count: int
    leader_count: int
    has_glory_card: bool
    errors: tuple[str, ...]

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def validity_text(self) -> str:
        return "Valid" if self.is_valid else f"Invalid ({len(self.errors)})"

    @property
    def tooltip(self) -> str:
        return "Deck is valid." if self.is_valid else "\n".join(self.errors)


class DeckService:
    """Service for deck-related business logic."""

    def __init__(self, validation_service: DeckValidationService | None = None):
        """
        Initialize the deck service.

        Args:
            validation_service: DeckValidationService instance
        """
        self.validator = validation_service or get_deck_validation_service()

    # ============= Adding Cards =============

    def try_add_card(self, card: CardData | None, deck: Deck | None) -> bool:
        """
        Add a card to whichever part of the deck it belongs to.

        Leaders fill a leader slot, tokens are refused, evolved cards go to the
        evolve deck and everything else to the main deck.

        Returns:
            True if the deck changed
        """
        if card is None or deck is None:
            return False
        if not self.validator.is_valid_for_deck(card, deck):
            return False

        if self.validator.is_leader_card(card):
            if not self.validator.can_add_leader(card, deck):
                return False
            self._assign_leader(card, deck)
            return True

        if self.validator.is_token_card(card):
            return False

        if self.validator.is_evolved_card(card):
            if not self.validator.can_add_to_evolve_deck(card, deck):
                return False
            self._add_entry(deck.evolve_deck, card)
            return True

        if not self.validator.can_add_to_main_deck(card, deck):
            return False
        self._add_entry(deck.main_deck, card)
        return True

    def can_add_card(self, card: CardData | None, deck: Deck | None) -> bool:
        """Whether the add button should be enabled for this card."""
        if card is None or deck is None:
            return False
        if not self.validator.is_valid_for_deck(card, deck):
            return False
        if self.validator.is_leader_card(card):
            return self.validator.can_add_leader(card, deck)
        if self.validator.is_token_card(card):
            return False
        if self.validator.is_evolved_card(card):
            return self.validator.can_add_to_evolve_deck(card, deck)
        return self.validator.can_add_to_main_deck(card, deck)

    def can_increase_card(self, card: CardData | None, deck: Deck | None) -> bool:
        """Whether the viewer's "+" button should be enabled for this card."""
        if card is None or deck is None:
            return False
        if not self.validator.is_valid_for_deck(card, deck):
            return False
        if self.validator.is_leader_card(card):
            return self.validator.can_add_leader(card, deck)
        if self.validator.is_non_deck_card(card):
            return False
        if self.validator.is_evolved_card(card):
            existing = deck.find_evolve_entry(card.card_number)
            if existing is not None:
                return self.validator.can_increase_evolve_deck_quantity(existing, deck)
            return self.validator.can_add_to_evolve_deck(card, deck)
        existing = deck.find_main_entry(card.card_number)
        if existing is not None:
            return self.validator.can_increase_main_deck_quantity(existing, deck)
        return self.validator.can_add_to_main_deck(card, deck)

    def _assign_leader(self, card: CardData, deck: Deck) -> None:
        if deck.deck_type is not DeckType.CROSSCRAFT or deck.leader1 is None:
            deck.leader1 = card
        else:
            deck.leader2 = card

    @staticmethod
    def _add_entry(entries: list[DeckEntry], card: CardData) -> None:
        existing = next((e for e in entries if e.card.card_number == card.card_number), None)
        if existing is not None:
            existing.quantity += 1
        else:
            entries.append(DeckEntry(card=card, quantity=1))

    # ============= Quantity Changes =============

    def increase_quantity(self, entry: DeckEntry | None, deck: Deck | None, is_evolve_deck: bool) -> bool:
        if entry is None or deck is None:
            return False
        if is_evolve_deck:
            allowed = self.validator.can_increase_evolve_deck_quantity(entry, deck)
        else:
            allowed = self.validator.can_increase_main_deck_quantity(entry, deck)
        if allowed:
            entry.quantity += 1
        return allowed

    def decrease_quantity(self, entry: DeckEntry | None, deck: Deck | None, is_evolve_deck: bool) -> bool:
        """Drop one copy; the last copy removes the entry."""
        if entry is None or deck is None:
            return False
        if entry.quantity <= 1:
            entries = deck.evolve_deck if is_evolve_deck else deck.main_deck
            if entry in entries:
                entries.remove(entry)
        else:
            entry.quantity -= 1
        return True

    @staticmethod
    def remove_entry(entry: DeckEntry | None, deck: Deck | None, is_evolve_deck: bool) -> bool:
        """Remove an entry with all of its copies."""
        if entry is None or deck is None:
            return False
        entries = deck.evolve_deck if is_evolve_deck else deck.main_deck
        if entry not in entries:
            return False
        entries.remove(entry)
        return True

    def increase_card(self, card: CardData | None, deck: Deck | None) -> bool:
        """The "+" action of the card grid and viewer."""
        if card is None or deck is None:
            return False
        if not self.validator.is_valid_for_deck(card, deck):
            return False

        if self.validator.is_leader_card(card):
            return self.assign_leader_to_open_slot(card, deck)

        if self.validator.is_evolved_card(card):
            existing = deck.find_evolve_entry(card.card_number)
            if existing is not None:
                return self.increase_quantity(existing, deck, True)
            if self.validator.can_add_to_evolve_deck(card, deck):
                self._add_entry(deck.evolve_deck, card)
                return True
            return False

        if self.validator.is_non_deck_card(card):
            return False

        existing = deck.find_main_entry(card.card_number)
        if existing is not None:
            return self.increase_quantity(existing, deck, False)
        if self.validator.can_add_to_main_deck(card, deck):
            self._add_entry(deck.main_deck, card)
            return True
        return False

    def decrease_card(self, card: CardData | None, deck: Deck | None) -> bool:
        """
        The "-" action of the card grid and viewer.

        Clears the glory slot when the card is the glory card, and clears leader
        slots holding the card.
        """
        if card is None or deck is None:
            return False

        if deck.deck_type is DeckType.GLORYFINDER and deck.is_glory_card(card.card_number):
            deck.glory_card = None
            return True

        if self.validator.is_leader_card(card):
            removed = self.clear_leader(card, deck)
            main_entry = deck.find_main_entry(card.card_number)
            if main_entry is not None:
                removed = self.decrease_quantity(main_entry, deck, False) or removed
            evolve_entry = deck.find_evolve_entry(card.card_number)
            if evolve_entry is not None:
                removed = self.decrease_quantity(evolve_entry, deck, True) or removed
            return removed

        if self.validator.is_evolved_card(card):
            return self.decrease_quantity(deck.find_evolve_entry(card.card_number), deck, True)
        if self.validator.is_non_deck_card(card):
            return False
        return self.decrease_quantity(deck.find_main_entry(card.card_number), deck, False)

    # ============= Leaders =============

    def assign_leader_to_open_slot(self, card: CardData, deck: Deck) -> bool:
        if not self.validator.can_add_leader(card, deck):
            return False
        if deck.leader1 is None:
            deck.leader1 = card
            return True
        if deck.deck_type is DeckType.CROSSCRAFT and deck.leader2 is None:
            deck.leader2 = card
            return True
        return False

    @staticmethod
    def clear_leader(card: CardData, deck: Deck) -> bool:
        cleared = False
        if deck.leader1 is not None and deck.leader1.card_number == card.card_number:
            deck.leader1 = None
            cleared = True
        if deck.leader2 is not None and deck.leader2.card_number == card.card_number:
            deck.leader2 = None
            cleared = True
        return cleared

    # ============= Glory Card =============

    def is_valid_glory_candidate(self, card: CardData | None, deck: Deck | None) -> bool:
        """Glory cards are non-leader, non-token, non-evolved cards of the deck's class."""
        if card is None or deck is None or deck.deck_type is not DeckType.GLORYFINDER:
            return False
        if self.validator.is_non_deck_card(card) or self.validator.is_evolved_card(card):
            return False
        return (card.card_class or "").lower() == (deck.class1 or "").lower()

    def can_set_or_move_glory(self, card: CardData | None, deck: Deck | None) -> bool:
        if card is None or deck is None or deck.deck_type is not DeckType.GLORYFINDER:
            return False
        if deck.is_glory_card(card.card_number):
            return self._can_move_glory_to_main(card, deck)
        return self.is_valid_glory_candidate(card, deck) and deck.glory_card is None

    def set_or_move_glory(self, card: CardData | None, deck: Deck | None) -> bool:
        """
        Toggle a card between the glory slot and the main deck.

        The current glory card moves into the main deck when there is room and no
        copy is already there. A valid candidate becomes the glory card and is
        taken out of the main deck.
        """
        if card is None or deck is None or deck.deck_type is not DeckType.GLORYFINDER:
            return False

        if deck.is_glory_card(card.card_number):
            if not self._can_move_glory_to_main(card, deck):
                return False
            deck.main_deck.append(DeckEntry(card=card, quantity=1))
            deck.glory_card = None
            return True

        if not self.is_valid_glory_candidate(card, deck) or deck.glory_card is not None:
            return False

        existing = deck.find_main_entry(card.card_number)
        if existing is not None:
            deck.main_deck.remove(existing)
        deck.glory_card = card
        return True

    @staticmethod
    def _can_move_glory_to_main(card: CardData, deck: Deck) -> bool:
        return deck.main_count < GLORYFINDER_MAIN_DECK_SIZE and deck.find_main_entry(card.card_number) is None

    # ============= Queries =============

    def in_deck_quantity(self, card: CardData, deck: Deck | None) -> int:
        """Copies of this printing in the deck; an assigned leader counts as one."""
        if deck is None:
            return 0
        if self.validator.is_non_deck_card(card):
            return 1 if self.validator.is_leader_card(card) and deck.has_leader(card.card_number) else 0
        entry = (
            deck.find_evolve_entry(card.card_number)
            if self.validator.is_evolved_card(card)
            else deck.find_main_entry(card.card_number)
        )
        return entry.quantity if entry is not None else 0

    def deck_summary(self, deck: Deck | None) -> DeckSummary:
        if deck is None:
            return DeckSummary(0, 0, 0, False, ("No deck selected.",))
        return DeckSummary(
            main_count=deck.main_count,
            evolve_count=deck.evolve_count,
            leader_count=len(deck.leaders),
            has_glory_card=deck.glory_card is not None,
            errors=tuple(self.validator.validate_deck(deck)),
        )

    def deck_to_text(self, deck: Deck) -> str:
        """
        Render a deck list as text.

        Format: leader/glory header lines, then "quantity name (card #)" lines for
        the main deck, then an "Evolve Deck" section.
        """
        lines = [f"{deck.name} [{deck.deck_type.label}]"]
        for index, leader in enumerate(deck.leaders, start=1):
            lines.append(f"Leader {index}: {leader.name} ({leader.card_number})")
        if deck.glory_card is not None:
            lines.append(f"Glory Card: {deck.glory_card.name} ({deck.glory_card.card_number})")

        lines.append("")
        lines.append(f"Main Deck ({deck.main_count})")
        lines.extend(self._entry_lines(deck.main_deck))
        if deck.evolve_deck:
            lines.append("")
            lines.append(f"Evolve Deck ({deck.evolve_count})")
            lines.extend(self._entry_lines(deck.evolve_deck))
        return "\n".join(lines)

    @staticmethod
    def _entry_lines(entries: Iterable[DeckEntry]) -> list[str]:
        ordered = sorted(entries, key=lambda e: (e.card.name.lower(), e.card.card_number))
        return [f"{e.quantity} {e.card.name} ({e.card.card_number})" for e in ordered]

class DeckWizard:
    """State of the three-step "new deck" dialog: format, classes, name."""

    FIRST_STEP = 1
    LAST_STEP = 3

    def __init__(self, all_cards: Iterable[CardData]):
        self.current_step = self.FIRST_STEP
        self._deck_type = DeckType.STANDARD
        self.class1: str | None = None
        self.class2: str | None = None
        self.deck_name = ""
        seen: dict[str, str] = {}
        for card in all_cards:
            cls = (card.card_class or "").strip()
            if cls and cls not in seen:
                seen[cls] = cls
        self.available_classes = sorted(seen, key=str.lower)

    @property
    def deck_type(self) -> DeckType:
        return self._deck_type

    @deck_type.setter
    def deck_type(self, value: DeckType) -> None:
        if value is not self._deck_type:
            self._deck_type = value
            self.class1 = None
            self.class2 = None

    @property
    def needs_two_classes(self) -> bool:
        return self._deck_type is DeckType.CROSSCRAFT

    @property
    def can_go_next(self) -> bool:
        if self.current_step == 1:
            return True
        if self.current_step == 2:
            return self.is_class_selection_valid()
        return False

    @property
    def can_go_back(self) -> bool:
        return self.current_step > self.FIRST_STEP

    @property
    def can_finish(self) -> bool:
        return self.current_step == self.LAST_STEP and bool(self.deck_name.strip())

    def go_next(self) -> None:
        if not self.can_go_next or self.current_step >= self.LAST_STEP:
            return
        self.current_step += 1
        if self.current_step == self.LAST_STEP and not self.deck_name.strip():
            self.deck_name = self.default_deck_name()

    def go_back(self) -> None:
        if self.can_go_back:
            self.current_step -= 1

    def is_class_selection_valid(self) -> bool:
        if not (self.class1 or "").strip():
            return False
        if self.needs_two_classes:
            if not (self.class2 or "").strip():
                return False
            if self.class1.lower() == self.class2.lower():
                return False
        return True

    def default_deck_name(self) -> str:
        type_name = self._deck_type.label
        if self.needs_two_classes and self.class1 and self.class2:
            return f"{self.class1}/{self.class2} {type_name}"
        if self.class1:
            return f"{self.class1} {type_name}"
        return f"New {type_name} Deck"

    def create_deck(self) -> Deck:
        return Deck(
            name=self.deck_name,
            deck_type=self._deck_type,
            class1=self.class1 or "",
            class2=self.class2 if self.needs_two_classes else None,
        )


# Global instance
_default_service = None


def get_deck_service() -> DeckService:
    """Get the default deck service instance."""
    global _default_service
    if _default_service is None:
        _default_service = DeckService()
    return _default_service


def reset_deck_service() -> None:
    """
    Reset the global deck service instance.

    This is primarily useful for testing to ensure test isolation
    and prevent state leakage between tests.
    """
    global _default_service
    _default_service = None
