from __future__ import annotations

from test_helpers import make_card

from models.card import RelatedCard
from services.relations_service import RelationsService, are_cards_related


def test_same_name_different_type_is_related():
    follower = make_card("Fairy", card_type="Follower")
    evolved = make_card("fairy", card_type="Evolved")
    assert are_cards_related(follower, evolved)


def test_same_name_same_type_is_not_related():
    assert not are_cards_related(make_card("Fairy"), make_card("Fairy"))


def test_text_mention_is_related_both_ways():
    summoner = make_card("Fairy Caller", text="Fanfare: put a FAIRY into your hand.")
    fairy = make_card("Fairy", card_type="Token")
    assert are_cards_related(summoner, fairy)
    assert are_cards_related(fairy, summoner)


def test_blank_names_never_related():
    assert not are_cards_related(make_card(" ", text="Fairy"), make_card("Fairy"))


def test_find_card_relations_updates_cards():
    follower = make_card("Fairy", "BP01-001")
    evolved = make_card("Fairy", "BP01-002", card_type="Evolved")
    unrelated = make_card("Dragon", "BP01-003")
    unrelated.related_cards.add(RelatedCard("Stale", "Follower"))

    pairs = RelationsService().find_card_relations([follower, evolved, unrelated])

    assert pairs == 1
    assert follower.related_cards == {RelatedCard("Fairy", "Evolved")}
    assert evolved.related_cards == {RelatedCard("Fairy", "Follower")}
    assert unrelated.related_cards == set()


def test_result_variant_leaves_cards_untouched():
    follower = make_card("Fairy", "BP01-001")
    evolved = make_card("Fairy", "BP01-002", card_type="Evolved")
    service = RelationsService()

    results = service.find_card_relations_result([follower, evolved])

    assert results == [{RelatedCard("Fairy", "Evolved")}, {RelatedCard("Fairy", "Follower")}]
    assert follower.related_cards == set()

    service.apply_relations([follower, evolved], results)
    assert evolved.related_cards == {RelatedCard("Fairy", "Follower")}


def test_related_instances_prefer_matching_set_and_rarity():
    source = make_card("Fairy", "BP01-001", rarity="Bronze")
    source.related_cards = {RelatedCard("Fairy", "Evolved"), RelatedCard("Missing", "Token")}
    promo = make_card("Fairy", "PR-001", card_type="Evolved", card_set='PR "Promo"', rarity="Bronze")
    other_rarity = make_card("Fairy", "BP01-101", card_type="Evolved", rarity="Premium")
    best = make_card("Fairy", "BP01-102", card_type="Evolved", rarity="Bronze")

    result = RelationsService().get_related_card_instances(source, [promo, other_rarity, best])

    assert result == [best]


def test_related_instances_first_candidate_wins_ties():
    source = make_card("Fairy", "BP01-001")
    source.related_cards = {RelatedCard("Fairy", "Evolved")}
    first = make_card("Fairy", "PR-001", card_type="Evolved", card_set="Promo", rarity="Special")
    second = make_card("Fairy", "PR-002", card_type="Evolved", card_set="Promo", rarity="Special")

    assert RelationsService().get_related_card_instances(source, [first, second]) == [first]


def test_related_instances_empty_without_relations():
    assert RelationsService().get_related_card_instances(make_card(), [make_card()]) == []
    assert RelationsService().get_related_card_instances(None, []) == []
