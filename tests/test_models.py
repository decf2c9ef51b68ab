from __future__ import annotations

import pytest
from test_helpers import make_card

from models.card import CardData, RelatedCard
from models.collection import CombinedCardCount
from models.deck import Deck, DeckEntry, DeckType


# ============= CardData =============


def test_card_type_checks_are_case_insensitive():
    assert make_card(card_type="leader").is_leader
    assert make_card(card_type="Token / Follower").is_token
    assert make_card(card_type="Evolved").is_evolved
    assert not make_card(card_type="Follower").is_evolved


def test_copies_needed_for_playset():
    assert make_card().copies_needed_for_playset == 3
    assert make_card(card_type="Leader").copies_needed_for_playset == 1
    assert make_card(card_type="Token").copies_needed_for_playset == 1
    assert make_card(format=" Gloryfinder ").copies_needed_for_playset == 1


def test_missing_for_playset_never_negative():
    card = make_card(quantity_owned=5)
    assert card.missing_for_playset == 0
    card.quantity_owned = 1
    assert card.missing_for_playset == 2


def test_wishlist_toggle_uses_missing_copies():
    card = make_card(quantity_owned=1)
    card.is_wishlisted = True
    assert card.wishlist_desired_quantity == 2

    # Already wishlisted: keeps the explicit quantity
    card.set_wishlist_quantity(5)
    card.is_wishlisted = True
    assert card.wishlist_desired_quantity == 5

    card.is_wishlisted = False
    assert card.wishlist_desired_quantity == 0


def test_wishlist_toggle_full_playset_still_wants_one():
    card = make_card(quantity_owned=3)
    card.is_wishlisted = True
    assert card.wishlist_desired_quantity == 1


def test_negative_wishlist_quantity_clamped():
    assert CardData(wishlist_desired_quantity=-4).wishlist_desired_quantity == 0


def test_cards_use_identity_equality():
    assert make_card() != make_card()


def test_card_dict_round_trip_keeps_collection_state():
    card = make_card(
        name="Fairy",
        quantity_owned=2,
        is_favorite=True,
        wishlist_desired_quantity=1,
        related_cards={RelatedCard("Fairy Wisp", "Evolved")},
    )
    data = card.to_dict()
    assert data["Set"] == 'BP01 "Advent of Genesis"'
    assert data["RelatedCards"] == [{"CardName": "Fairy Wisp", "CardType": "Evolved"}]

    restored = CardData.from_dict(data)
    assert restored.name == "Fairy"
    assert restored.quantity_owned == 2
    assert restored.is_favorite
    assert restored.wishlist_desired_quantity == 1
    assert restored.related_cards == {RelatedCard("fairy wisp", "EVOLVED")}


def test_from_dict_tolerates_missing_and_bad_values():
    card = CardData.from_dict({"name": "Alpha", "QuantityOwned": "many"})
    assert card.name == "Alpha"
    assert card.card_number == ""
    assert card.quantity_owned == 0
    assert card.related_cards == set()
    assert card.is_favorite is False


@pytest.mark.parametrize(
    "raw, expected",
    [
        (True, True),
        (False, False),
        ("true", True),
        ("False", False),
        ("false", False),
        ("", False),
        (1, True),
        (0, False),
        (None, False),
    ],
)
def test_from_dict_favorite_flag(raw, expected):
    card = CardData.from_dict({"Name": "Alpha", "IsFavorite": raw})
    assert card.is_favorite is expected


# ============= Deck =============


def test_deck_type_parse():
    assert DeckType.parse("Gloryfinder") is DeckType.GLORYFINDER
    assert DeckType.parse("cross craft") is DeckType.CROSSCRAFT
    assert DeckType.parse(0) is DeckType.STANDARD
    assert DeckType.parse(2) is DeckType.CROSSCRAFT
    with pytest.raises(ValueError):
        DeckType.parse("Sealed")
    with pytest.raises(ValueError):
        DeckType.parse(7)


def test_deck_counts_and_lookups():
    leader = make_card("Leader", "BP01-L01", card_type="Leader")
    follower = make_card("Follower", "BP01-010")
    evolved = make_card("Follower", "BP01-011", card_type="Evolved")
    deck = Deck(
        leader1=leader,
        main_deck=[DeckEntry(follower, 3)],
        evolve_deck=[DeckEntry(evolved, 2)],
    )
    assert deck.main_count == 3
    assert deck.evolve_count == 2
    assert deck.leaders == [leader]
    assert deck.has_leader("BP01-L01")
    assert deck.find_main_entry("BP01-010").quantity == 3
    assert deck.find_evolve_entry("BP01-010") is None
    assert not deck.is_glory_card("BP01-010")


def test_deck_ids_are_unique():
    assert Deck().id != Deck().id


# ============= CombinedCardCount =============


def test_combined_card_count_aggregates_printings():
    first = make_card("Fairy", "BP01-001", quantity_owned=0)
    second = make_card("Fairy", "BP01-P01", card_set='PR "Promo"', quantity_owned=2, is_favorite=True)
    group = CombinedCardCount([first, second])

    assert group.name == "Fairy"
    assert group.total_quantity_owned == 2
    assert group.has_favorite
    assert group.sets == ['BP01 "Advent of Genesis"', 'PR "Promo"']
    assert group.cards == [second]
    assert group.category == "Low"
    assert len(group) == 2


def test_combined_card_count_unowned_shows_first_printing():
    first = make_card("Fairy", "BP01-001")
    second = make_card("Fairy", "BP01-P01")
    group = CombinedCardCount([first, second])
    assert group.cards == [first]
    assert group.images == []
    assert group.category == "None"


def test_combined_card_count_evolved_name():
    group = CombinedCardCount([make_card("Fairy", card_type="Evolved")])
    assert group.name == "Fairy (Evolved)"
