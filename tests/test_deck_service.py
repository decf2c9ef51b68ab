from __future__ import annotations

import pytest
from test_helpers import make_card

from models.deck import Deck, DeckEntry, DeckType
from services.deck_service import DeckService, DeckWizard
from services.deck_validation_service import DeckValidationService


@pytest.fixture
def service():
    return DeckService(DeckValidationService())


@pytest.fixture
def deck():
    return Deck(name="Elves", class1="Forestcraft")


@pytest.fixture
def glory_deck():
    return Deck(name="Glory", deck_type=DeckType.GLORYFINDER, class1="Forestcraft")


def leader(card_class: str = "Forestcraft", number: str = "BP01-L01"):
    return make_card(f"{card_class} Leader", number, card_type="Leader", card_class=card_class)


# ============= Adding Cards =============


def test_try_add_card_routes_by_type(service, deck):
    follower = make_card("Fairy", "BP01-001")
    evolved = make_card("Fairy", "BP01-002", card_type="Evolved")
    token = make_card("Fairy Token", "BP01-T01", card_type="Token")
    lead = leader()

    assert service.try_add_card(follower, deck)
    assert service.try_add_card(follower, deck)
    assert service.try_add_card(evolved, deck)
    assert service.try_add_card(lead, deck)
    assert not service.try_add_card(token, deck)

    assert deck.find_main_entry("BP01-001").quantity == 2
    assert deck.find_evolve_entry("BP01-002").quantity == 1
    assert deck.leader1 is lead


def test_try_add_card_respects_copy_limit(service, deck):
    follower = make_card()
    for _ in range(3):
        assert service.try_add_card(follower, deck)
    assert not service.try_add_card(follower, deck)
    assert deck.main_count == 3


def test_try_add_card_without_deck(service):
    assert not service.try_add_card(make_card(), None)
    assert not service.try_add_card(None, Deck())


def test_crosscraft_second_leader_goes_to_slot_two(service):
    deck = Deck(deck_type=DeckType.CROSSCRAFT, class1="Forestcraft", class2="Swordcraft")
    first = leader()
    second = leader("Swordcraft", "BP01-L02")
    assert service.try_add_card(first, deck)
    assert service.try_add_card(second, deck)
    assert (deck.leader1, deck.leader2) == (first, second)


def test_can_add_card_checks_class(service, deck):
    assert service.can_add_card(make_card(card_class="Neutral"), deck)
    assert not service.can_add_card(make_card(card_class="Swordcraft"), deck)
    assert not service.can_add_card(make_card(card_type="Token"), deck)
    assert not service.can_add_card(make_card(), None)


# ============= Quantity Changes =============


def test_increase_and_decrease_card(service, deck):
    card = make_card()
    assert service.increase_card(card, deck)
    assert service.increase_card(card, deck)
    assert service.in_deck_quantity(card, deck) == 2

    assert service.decrease_card(card, deck)
    assert service.in_deck_quantity(card, deck) == 1
    assert service.decrease_card(card, deck)
    assert deck.main_deck == []
    assert not service.decrease_card(card, deck)


def test_increase_card_for_leader_fills_open_slot(service, deck):
    lead = leader()
    assert service.increase_card(lead, deck)
    assert service.in_deck_quantity(lead, deck) == 1
    assert not service.increase_card(leader(number="BP01-L02"), deck)

    assert service.decrease_card(lead, deck)
    assert deck.leader1 is None


def test_increase_card_refuses_tokens(service, deck):
    token = make_card(card_type="Token")
    assert not service.increase_card(token, deck)
    assert not service.decrease_card(token, deck)


def test_evolved_cards_use_evolve_deck(service, deck):
    evolved = make_card(card_type="Evolved")
    assert service.increase_card(evolved, deck)
    assert service.increase_card(evolved, deck)
    assert deck.evolve_count == 2
    assert deck.main_count == 0
    assert service.decrease_card(evolved, deck)
    assert deck.evolve_count == 1


def test_remove_entry(service, deck):
    entry = DeckEntry(make_card(), 3)
    deck.main_deck.append(entry)
    assert service.remove_entry(entry, deck, False)
    assert not service.remove_entry(entry, deck, False)


def test_gloryfinder_main_deck_is_singleton(service, glory_deck):
    card = make_card()
    assert service.increase_card(card, glory_deck)
    assert not service.increase_card(card, glory_deck)
    assert service.in_deck_quantity(card, glory_deck) == 1


# ============= Glory Card =============


def test_glory_candidate_rules(service, glory_deck, deck):
    assert service.is_valid_glory_candidate(make_card(), glory_deck)
    assert not service.is_valid_glory_candidate(make_card(card_class="Runecraft"), glory_deck)
    assert not service.is_valid_glory_candidate(make_card(card_type="Evolved"), glory_deck)
    assert not service.is_valid_glory_candidate(leader(), glory_deck)
    assert not service.is_valid_glory_candidate(make_card(), deck)


def test_set_glory_takes_card_out_of_main_deck(service, glory_deck):
    card = make_card()
    service.increase_card(card, glory_deck)

    assert service.can_set_or_move_glory(card, glory_deck)
    assert service.set_or_move_glory(card, glory_deck)

    assert glory_deck.glory_card is card
    assert glory_deck.main_deck == []
    assert not service.can_set_or_move_glory(make_card("Other", "BP01-002"), glory_deck)


def test_move_glory_back_to_main_deck(service, glory_deck):
    card = make_card()
    glory_deck.glory_card = card

    assert service.set_or_move_glory(card, glory_deck)

    assert glory_deck.glory_card is None
    assert glory_deck.find_main_entry(card.card_number).quantity == 1


def test_move_glory_blocked_when_main_deck_full(service, glory_deck):
    card = make_card()
    glory_deck.glory_card = card
    glory_deck.main_deck = [DeckEntry(make_card(f"C{i}", f"BP02-{i:03d}"), 1) for i in range(50)]

    assert not service.can_set_or_move_glory(card, glory_deck)
    assert not service.set_or_move_glory(card, glory_deck)
    assert glory_deck.glory_card is card


def test_decrease_glory_card_clears_slot(service, glory_deck):
    card = make_card()
    glory_deck.glory_card = card
    assert service.decrease_card(card, glory_deck)
    assert glory_deck.glory_card is None


# ============= Queries =============


def test_deck_summary(service, deck):
    summary = service.deck_summary(deck)
    assert summary.main_count == 0
    assert not summary.is_valid
    assert summary.validity_text == f"Invalid ({len(summary.errors)})"
    assert "A leader is required." in summary.tooltip

    none_summary = service.deck_summary(None)
    assert none_summary.errors == ("No deck selected.",)


def test_deck_to_text(service):
    deck = Deck(
        name="Elves",
        deck_type=DeckType.GLORYFINDER,
        class1="Forestcraft",
        leader1=make_card("Aria", "BP01-L01", card_type="Leader"),
        glory_card=make_card("Titania", "BP01-050"),
        main_deck=[DeckEntry(make_card("Fairy", "BP01-002"), 1), DeckEntry(make_card("Bell", "BP01-003"), 1)],
        evolve_deck=[DeckEntry(make_card("Fairy", "BP01-102", card_type="Evolved"), 1)],
    )

    assert service.deck_to_text(deck).splitlines() == [
        "Elves [Gloryfinder]",
        "Leader 1: Aria (BP01-L01)",
        "Glory Card: Titania (BP01-050)",
        "",
        "Main Deck (2)",
        "1 Bell (BP01-003)",
        "1 Fairy (BP01-002)",
        "",
        "Evolve Deck (1)",
        "1 Fairy (BP01-102)",
    ]


# ============= Deck Wizard =============


def wizard_cards():
    return [
        make_card(card_class="Swordcraft"),
        make_card(card_class="forestcraft"),
        make_card(card_class=""),
        make_card(card_class="Swordcraft"),
    ]


def test_wizard_available_classes():
    assert DeckWizard(wizard_cards()).available_classes == ["forestcraft", "Swordcraft"]


def test_wizard_standard_flow():
    wizard = DeckWizard(wizard_cards())
    assert not wizard.can_go_back
    wizard.go_next()
    assert wizard.current_step == 2
    assert not wizard.can_go_next

    wizard.class1 = "Swordcraft"
    assert wizard.can_go_next
    wizard.go_next()

    assert wizard.current_step == 3
    assert wizard.deck_name == "Swordcraft Standard"
    assert wizard.can_finish

    deck = wizard.create_deck()
    assert (deck.name, deck.deck_type, deck.class1, deck.class2) == (
        "Swordcraft Standard",
        DeckType.STANDARD,
        "Swordcraft",
        None,
    )


def test_wizard_crosscraft_needs_two_distinct_classes():
    wizard = DeckWizard(wizard_cards())
    wizard.deck_type = DeckType.CROSSCRAFT
    wizard.go_next()
    wizard.class1 = "Swordcraft"
    assert not wizard.can_go_next
    wizard.class2 = "swordcraft"
    assert not wizard.can_go_next
    wizard.class2 = "Forestcraft"
    wizard.go_next()

    assert wizard.deck_name == "Swordcraft/Forestcraft Cross Craft"
    assert wizard.create_deck().class2 == "Forestcraft"


def test_wizard_changing_format_resets_classes():
    wizard = DeckWizard(wizard_cards())
    wizard.class1 = "Swordcraft"
    wizard.deck_type = DeckType.GLORYFINDER
    assert wizard.class1 is None
    assert wizard.default_deck_name() == "New Gloryfinder Deck"


def test_wizard_cannot_finish_with_blank_name():
    wizard = DeckWizard(wizard_cards())
    wizard.class1 = "Swordcraft"
    wizard.go_next()
    wizard.go_next()
    wizard.deck_name = "   "
    assert not wizard.can_finish
    wizard.go_back()
    assert wizard.current_step == 2


# ============= Class Eligibility =============


def test_off_class_cards_are_refused(service):
    deck = Deck(name="Knights", class1="Swordcraft")
    fairy = make_card("Fairy", "BP01-001")
    forest_leader = leader()

    assert not service.try_add_card(fairy, deck)
    assert not service.increase_card(fairy, deck)
    assert not service.increase_card(forest_leader, deck)
    assert not service.can_increase_card(fairy, deck)
    assert deck.main_deck == []
    assert deck.leader1 is None


def test_can_increase_card_follows_deck_limits(service, deck):
    fairy = make_card("Fairy", "BP01-001")
    evolved = make_card("Fairy", "BP01-002", card_type="Evolved")
    token = make_card("Fairy Token", "BP01-T01", card_type="Token")

    assert service.can_increase_card(fairy, deck)
    assert service.can_increase_card(evolved, deck)
    assert service.can_increase_card(leader(), deck)
    assert not service.can_increase_card(token, deck)
    assert not service.can_increase_card(None, deck)
    assert not service.can_increase_card(fairy, None)

    deck.main_deck.append(DeckEntry(card=fairy, quantity=3))
    assert not service.can_increase_card(fairy, deck)

    deck.leader1 = leader()
    assert not service.can_increase_card(leader(number="BP01-L02"), deck)


def test_crosscraft_accepts_both_classes(service):
    deck = Deck(name="Mix", deck_type=DeckType.CROSSCRAFT, class1="Forestcraft", class2="Swordcraft")
    knight = make_card("Knight", "BP01-010", card_class="Swordcraft")
    rune = make_card("Rune", "BP01-020", card_class="Runecraft")

    assert service.increase_card(knight, deck)
    assert not service.increase_card(rune, deck)
    assert [entry.card.name for entry in deck.main_deck] == ["Knight"]
