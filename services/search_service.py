"""
Search Service - Business logic for card search and filtering.

This module contains all the business logic for searching and filtering cards:
- Pattern search on name, card number and text (regex with substring fallback)
- Multi-select filters (rarity, type, traits, class, cost, set, owned, in-deck)
- Favorites / wishlist toggles
- Filter option builders
- Checklist filtering and summary counts
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from loguru import logger

from models.card import CardData
from models.collection import CombinedCardCount
from models.deck import Deck, DeckType
from services.deck_service import DeckService, get_deck_service
from utils.card_display import extract_set_name
from utils.game_constants import (
    CARD_TYPE_OPTIONS,
    CLASS_OPTIONS,
    GLORYFINDER_IN_DECK_OPTIONS,
    IN_DECK_OPTIONS,
    OWNED_LABEL,
    OWNED_OPTIONS,
    RARITY_OPTIONS,
    UNOWNED_LABEL,
)
from utils.search_filters import (
    FilterGroup,
    distinct_case_insensitive,
    matches_pattern,
    sort_costs,
    split_parts,
)


@dataclass
class CardFilters:
    """Filter state of the card grids (All Cards and Deck Builder)."""

    name: str = ""
    card_number: str = ""
    text: str = ""
    favorites_only: bool = False
    wishlisted_only: bool = False
    rarities: FilterGroup = field(default_factory=FilterGroup)
    types: FilterGroup = field(default_factory=FilterGroup)
    traits: FilterGroup = field(default_factory=FilterGroup)
    classes: FilterGroup = field(default_factory=FilterGroup)
    costs: FilterGroup = field(default_factory=FilterGroup)
    sets: FilterGroup = field(default_factory=FilterGroup)
    owned: FilterGroup = field(default_factory=FilterGroup)
    in_deck: FilterGroup = field(default_factory=FilterGroup)

    def groups(self) -> dict[str, FilterGroup]:
        return {
            "Rarity": self.rarities,
            "Type": self.types,
            "Traits": self.traits,
            "Class": self.classes,
            "Cost": self.costs,
            "Set": self.sets,
            "Owned": self.owned,
            "In Deck": self.in_deck,
        }


@dataclass
class ChecklistFilters:
    name: str = ""
    favorites_only: bool = False
    only_selected_sets: bool = False
    sets: FilterGroup = field(default_factory=FilterGroup)
    owned: FilterGroup = field(default_factory=FilterGroup)


@dataclass(frozen=True)
class ChecklistCounts:
    unique_cards: int
    owned_unique: int
    owned_playsets: int

    @property
    def owned_unique_text(self) -> str:
        return percent_string(self.owned_unique, self.unique_cards)

    @property
    def owned_playsets_text(self) -> str:
        return percent_string(self.owned_playsets, self.unique_cards)


def percent_string(part: int, total: int) -> str:
    if total == 0:
        return "Error"
    return f"{part}/{total} ({part / total:.0%})"


class SearchService:
    """Service for card search and filtering logic."""

    def __init__(self, deck_service: DeckService | None = None):
        """
        Initialize the search service.

        Args:
            deck_service: DeckService used for in-deck quantities
        """
        self.deck_service = deck_service or get_deck_service()

    # ============= Filter Options =============

    @staticmethod
    def set_options(cards: Iterable[CardData]) -> list[str]:
        raw_sets = distinct_case_insensitive((card.card_set or "").strip() for card in cards)
        return distinct_case_insensitive(extract_set_name(s) for s in raw_sets)

    @staticmethod
    def cost_options(cards: Iterable[CardData]) -> list[str]:
        return sort_costs(distinct_case_insensitive((card.cost or "").strip() for card in cards))

    @staticmethod
    def trait_options(cards: Iterable[CardData]) -> list[str]:
        return distinct_case_insensitive(part for card in cards for part in split_parts(card.traits))

    @staticmethod
    def in_deck_options(deck: Deck | None) -> list[str]:
        if deck is not None and deck.deck_type is DeckType.GLORYFINDER:
            return list(GLORYFINDER_IN_DECK_OPTIONS)
        return list(IN_DECK_OPTIONS)

    def build_card_filters(self, cards: list[CardData], deck: Deck | None = None) -> CardFilters:
        """
        Create a filter state with every option checked.

        Args:
            cards: Cards the set/cost/traits options are collected from
            deck: Current deck, which decides the in-deck options

        Returns:
            CardFilters with all groups populated
        """
        return CardFilters(
            rarities=FilterGroup.from_names(RARITY_OPTIONS),
            types=FilterGroup.from_names(CARD_TYPE_OPTIONS),
            traits=FilterGroup.from_names(self.trait_options(cards)),
            classes=FilterGroup.from_names(CLASS_OPTIONS),
            costs=FilterGroup.from_names(self.cost_options(cards)),
            sets=FilterGroup.from_names(self.set_options(cards)),
            owned=FilterGroup.from_names(OWNED_OPTIONS),
            in_deck=FilterGroup.from_names(self.in_deck_options(deck)),
        )

    def refresh_card_filters(self, filters: CardFilters, cards: list[CardData], deck: Deck | None = None) -> None:
        """Rebuild card-derived options after an import, keeping existing selections."""
        filters.traits.rebuild(self.trait_options(cards))
        filters.costs.rebuild(self.cost_options(cards))
        filters.sets.rebuild(self.set_options(cards))
        filters.in_deck.rebuild(self.in_deck_options(deck))

    # ============= Card Filtering =============

    def matches_card(self, card: CardData, filters: CardFilters, deck: Deck | None = None) -> bool:
        if filters.favorites_only and not card.is_favorite:
            return False
        if filters.wishlisted_only and not card.is_wishlisted:
            return False
        if not matches_pattern(card.name, filters.name):
            return False
        if not matches_pattern(card.card_number, filters.card_number):
            return False
        if not matches_pattern(card.text, filters.text):
            return False

        if not filters.traits.matches_any_part(card.traits):
            return False
        if not filters.rarities.matches_any_part(card.rarity):
            return False
        if not filters.types.matches_any_part(card.card_type):
            return False
        if not filters.classes.matches_value(card.card_class):
            return False
        if not filters.sets.matches_containing_part(card.card_set):
            return False
        if not filters.costs.matches_value(card.cost):
            return False
        if not filters.owned.matches_value(OWNED_LABEL if card.quantity_owned > 0 else UNOWNED_LABEL):
            return False
        if deck is not None and not filters.in_deck.matches_value(
            str(self.deck_service.in_deck_quantity(card, deck))
        ):
            return False
        return True

    def filter_cards(
        self,
        cards: Iterable[CardData],
        filters: CardFilters,
        deck: Deck | None = None,
    ) -> list[CardData]:
        """
        Filter a list of cards by the current filter state.

        Args:
            cards: Cards to filter
            filters: Filter state
            deck: Deck used by the in-deck filter (ignored when None)

        Returns:
            Cards passing every filter, in input order
        """
        cards = list(cards)
        results = [card for card in cards if self.matches_card(card, filters, deck)]
        logger.debug(f"Filtered {len(cards)} cards down to {len(results)}")
        return results

    def filter_deck_candidates(
        self,
        cards: Iterable[CardData],
        filters: CardFilters,
        deck: Deck | None,
    ) -> list[CardData]:
        """
        Cards the deck builder offers: legal for the deck's classes and passing the filters.

        Nothing is offered while no deck is selected.
        """
        if deck is None:
            return []
        validator = self.deck_service.validator
        eligible = [card for card in cards if validator.is_valid_for_deck(card, deck)]
        return self.filter_cards(eligible, filters, deck)

    # ============= Checklist =============

    @staticmethod
    def build_checklist_filters(groups: Iterable[CombinedCardCount]) -> ChecklistFilters:
        return ChecklistFilters(
            sets=FilterGroup.from_names(SearchService.checklist_set_options(groups)),
            owned=FilterGroup.from_names(OWNED_OPTIONS),
        )

    @staticmethod
    def checklist_set_options(groups: Iterable[CombinedCardCount]) -> list[str]:
        raw_sets = distinct_case_insensitive(s for group in groups for s in group.sets)
        return distinct_case_insensitive(extract_set_name(s) for s in raw_sets)

    @staticmethod
    def matches_checklist(group: CombinedCardCount, filters: ChecklistFilters) -> bool:
        if filters.favorites_only and not group.has_favorite:
            return False
        if not matches_pattern(group.name, filters.name):
            return False
        if not filters.sets.matches_any_value(group.sets):
            return False
        owned = OWNED_LABEL if group.total_quantity_owned > 0 else UNOWNED_LABEL
        return filters.owned.matches_value(owned)

    def filter_checklist(
        self,
        groups: Iterable[CombinedCardCount],
        filters: ChecklistFilters,
    ) -> list[CombinedCardCount]:
        """
        Filter checklist groups.

        With ``only_selected_sets`` each group is first narrowed to its printings
        from the checked sets, so totals only count those printings.
        """
        groups = list(groups)
        if filters.only_selected_sets:
            groups = self._restrict_to_sets(groups, filters.sets.checked_names)
        return [group for group in groups if self.matches_checklist(group, filters)]

    @staticmethod
    def _restrict_to_sets(groups: list[CombinedCardCount], set_names: list[str]) -> list[CombinedCardCount]:
        wanted = [name.lower() for name in set_names]

        def in_selected(value: str) -> bool:
            return any(name in value.lower() for name in wanted)

        restricted: list[CombinedCardCount] = []
        for group in groups:
            if not any(in_selected(s) for s in group.sets):
                continue
            restricted.append(
                CombinedCardCount(c for c in group.all_cards if in_selected((c.card_set or "").strip()))
            )
        return restricted

    @staticmethod
    def checklist_counts(groups: Iterable[CombinedCardCount]) -> ChecklistCounts:
        groups = list(groups)
        return ChecklistCounts(
            unique_cards=len(groups),
            owned_unique=sum(1 for g in groups if g.total_quantity_owned > 0),
            owned_playsets=sum(1 for g in groups if g.total_quantity_owned >= g.copies_needed_for_playset),
        )


# Global instance
_default_service = None


def get_search_service() -> SearchService:
    """Get the default search service instance."""
    global _default_service
    if _default_service is None:
        _default_service = SearchService()
    return _default_service


def reset_search_service() -> None:
    """
    Reset the global search service instance.

    This is primarily useful for testing to ensure test isolation
    and prevent state leakage between tests.
    """
    global _default_service
    _default_service = None
