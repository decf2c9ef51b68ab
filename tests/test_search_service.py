from __future__ import annotations

import pytest
from test_helpers import make_card

from models.collection import CombinedCardCount
from models.deck import Deck, DeckEntry, DeckType
from services.deck_service import DeckService
from services.deck_validation_service import DeckValidationService
from services.search_service import SearchService, percent_string


@pytest.fixture
def service():
    return SearchService(deck_service=DeckService(DeckValidationService()))


@pytest.fixture
def cards():
    return [
        make_card(
            "Forest Archer",
            "BP01-001",
            rarity="Gold / Premium",
            traits="Elf / Archer",
            cost="2",
            quantity_owned=1,
            is_favorite=True,
            text="Fanfare: deal 1 damage.",
        ),
        make_card(
            "Sword Knight",
            "BP01-002",
            rarity="Silver",
            card_class="Swordcraft",
            traits="Officer",
            cost="10",
            card_set='BP02 "Reign of Bahamut"',
        ),
        make_card("Neutral Golem", "BP01-003", card_class="Neutral", card_type="Amulet", cost="1", traits=""),
    ]


def names(result):
    return [card.name for card in result]


def test_filter_options(service, cards):
    assert service.set_options(cards) == ["Advent of Genesis", "Reign of Bahamut"]
    assert service.cost_options(cards) == ["1", "2", "10"]
    assert service.trait_options(cards) == ["Archer", "Elf", "Officer"]


def test_in_deck_options_depend_on_format(service):
    assert service.in_deck_options(None) == ["0", "1", "2", "3"]
    assert service.in_deck_options(Deck(deck_type=DeckType.GLORYFINDER)) == ["0", "1"]


def test_default_filters_match_everything(service, cards):
    filters = service.build_card_filters(cards)
    assert service.filter_cards(cards, filters) == cards


def test_text_patterns(service, cards):
    filters = service.build_card_filters(cards)
    filters.name = "^sword"
    assert names(service.filter_cards(cards, filters)) == ["Sword Knight"]

    filters.name = ""
    filters.text = "damage"
    assert names(service.filter_cards(cards, filters)) == ["Forest Archer"]

    filters.text = ""
    filters.card_number = "003$"
    assert names(service.filter_cards(cards, filters)) == ["Neutral Golem"]


def test_toggles(service, cards):
    filters = service.build_card_filters(cards)
    filters.favorites_only = True
    assert names(service.filter_cards(cards, filters)) == ["Forest Archer"]

    filters.favorites_only = False
    filters.wishlisted_only = True
    cards[2].is_wishlisted = True
    assert names(service.filter_cards(cards, filters)) == ["Neutral Golem"]


def test_rarity_matches_any_part(service, cards):
    filters = service.build_card_filters(cards)
    filters.rarities.clear_all()
    filters.rarities.set_checked("Premium", True)
    assert names(service.filter_cards(cards, filters)) == ["Forest Archer"]


def test_trait_filter_excludes_cards_without_traits(service, cards):
    filters = service.build_card_filters(cards)
    filters.traits.set_checked("Officer", False)
    assert names(service.filter_cards(cards, filters)) == ["Forest Archer"]


def test_cost_filter_is_exact(service, cards):
    filters = service.build_card_filters(cards)
    filters.costs.clear_all()
    filters.costs.set_checked("1", True)
    assert names(service.filter_cards(cards, filters)) == ["Neutral Golem"]


def test_class_and_type_filters(service, cards):
    filters = service.build_card_filters(cards)
    filters.classes.set_checked("Neutral", False)
    filters.types.set_checked("Follower", False)
    assert names(service.filter_cards(cards, filters)) == []


def test_set_filter_uses_extracted_names(service, cards):
    filters = service.build_card_filters(cards)
    filters.sets.set_checked("Advent of Genesis", False)
    assert names(service.filter_cards(cards, filters)) == ["Sword Knight"]


def test_owned_filter(service, cards):
    filters = service.build_card_filters(cards)
    filters.owned.set_checked("Owned", False)
    assert names(service.filter_cards(cards, filters)) == ["Sword Knight", "Neutral Golem"]


def test_in_deck_filter_only_applies_with_deck(service, cards):
    deck = Deck(class1="Forestcraft", main_deck=[DeckEntry(cards[0], 2)])
    filters = service.build_card_filters(cards, deck)
    filters.in_deck.set_checked("0", False)

    assert service.filter_cards(cards, filters) == cards
    assert names(service.filter_cards(cards, filters, deck)) == ["Forest Archer"]


def test_refresh_card_filters_keeps_selection(service, cards):
    filters = service.build_card_filters(cards)
    filters.costs.set_checked("10", False)
    cards.append(make_card("New", "BP03-001", cost="7"))

    service.refresh_card_filters(filters, cards)

    assert filters.costs.names == ["1", "2", "7", "10"]
    assert filters.costs.checked_names == ["1", "2", "7"]


# ============= Checklist =============


def checklist_groups():
    return [
        CombinedCardCount([make_card("Alpha", "BP01-001", quantity_owned=3)]),
        CombinedCardCount(
            [
                make_card("Beta", "BP01-002", quantity_owned=1, is_favorite=True),
                make_card("Beta", "BP02-002", card_set='BP02 "Reign of Bahamut"', quantity_owned=1),
            ]
        ),
        CombinedCardCount([make_card("Gamma", "BP02-003", card_set='BP02 "Reign of Bahamut"')]),
    ]


def test_checklist_filters(service):
    groups = checklist_groups()
    filters = service.build_checklist_filters(groups)
    assert filters.sets.names == ["Advent of Genesis", "Reign of Bahamut"]

    filters.favorites_only = True
    assert [g.name for g in service.filter_checklist(groups, filters)] == ["Beta"]

    filters.favorites_only = False
    filters.owned.set_checked("Unowned", False)
    assert [g.name for g in service.filter_checklist(groups, filters)] == ["Alpha", "Beta"]

    filters.owned.select_all()
    filters.sets.set_checked("Advent of Genesis", False)
    assert [g.name for g in service.filter_checklist(groups, filters)] == ["Beta", "Gamma"]


def test_only_selected_sets_narrows_group_totals(service):
    groups = checklist_groups()
    filters = service.build_checklist_filters(groups)
    filters.only_selected_sets = True
    filters.sets.set_checked("Advent of Genesis", False)

    result = service.filter_checklist(groups, filters)

    assert [g.name for g in result] == ["Beta", "Gamma"]
    assert result[0].total_quantity_owned == 1


def test_checklist_counts(service):
    counts = service.checklist_counts(checklist_groups())
    assert (counts.unique_cards, counts.owned_unique, counts.owned_playsets) == (3, 2, 1)
    assert counts.owned_unique_text == "2/3 (67%)"
    assert counts.owned_playsets_text == "1/3 (33%)"


def test_percent_string_empty_total():
    assert percent_string(0, 0) == "Error"
    assert percent_string(1, 4) == "1/4 (25%)"


def test_deck_candidates_limited_to_deck_classes(service, cards):
    deck = Deck(name="Knights", class1="Swordcraft")
    filters = service.build_card_filters(cards, deck)

    assert names(service.filter_deck_candidates(cards, filters, deck)) == ["Sword Knight", "Neutral Golem"]


def test_deck_candidates_empty_without_deck(service, cards):
    filters = service.build_card_filters(cards)
    assert service.filter_deck_candidates(cards, filters, None) == []


def test_gloryfinder_candidates_include_every_class(service, cards):
    deck = Deck(name="Glory", deck_type=DeckType.GLORYFINDER, class1="Swordcraft")
    filters = service.build_card_filters(cards, deck)
    assert service.filter_deck_candidates(cards, filters, deck) == cards
