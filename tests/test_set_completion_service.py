from __future__ import annotations

import pytest
from test_helpers import make_card

from services.set_completion_service import SetCompletionService, round_percent

BP01 = 'BP01 "Advent of Genesis"'
BP02 = 'BP02 "Reign of Bahamut"'


@pytest.mark.parametrize(
    "part, total, expected",
    [
        (1, 2, 50),
        (1, 3, 33),
        (2, 3, 67),
        (1, 8, 13),
        (1, 200, 1),
        (1, 201, 0),
        (0, 0, 100),
    ],
)
def test_round_percent(part, total, expected):
    assert round_percent(part, total) == expected


def row_for(rows, set_name):
    return next(row for row in rows if row.set_name == set_name)


def test_rows_sorted_and_blank_sets_skipped():
    cards = [
        make_card("B", "BP02-001", card_set=BP02),
        make_card("A", "BP01-001", card_set=BP01),
        make_card("C", "X-001", card_set="  "),
    ]
    rows = SetCompletionService().completion_rows(cards)
    assert [row.set_name for row in rows] == [BP01, BP02]


def test_printing_percentages():
    cards = [
        make_card("A", "BP01-001", quantity_owned=3),
        make_card("B", "BP01-002", quantity_owned=1),
        make_card("C", "BP01-003"),
        make_card("Leader", "BP01-L01", card_type="Leader", quantity_owned=2),
    ]

    row = SetCompletionService().completion_rows(cards)[0]

    assert (row.total_cards, row.owned_at_least_one) == (4, 3)
    assert row.one_card_percent == 75
    # (3 + 1 + 0 + 1) / (3 + 3 + 3 + 1)
    assert (row.playset_owned, row.playset_total) == (5, 10)
    assert row.playset_percent == 50


def test_unique_percentages_combine_printings_and_skip_leaders():
    cards = [
        make_card("A", "BP01-001"),
        make_card("A", "BP01-101", rarity="Premium"),
        make_card("A", "BP01-201", card_type="Evolved", quantity_owned=1),
        make_card("B", "BP01-002", quantity_owned=1),
        make_card("Leader", "BP01-L01", card_type="Leader"),
        # Another set's printing counts toward the combined total
        make_card("A", "BP02-001", card_set=BP02, quantity_owned=2),
    ]

    row = row_for(SetCompletionService().completion_rows(cards), BP01)

    assert row.total_unique_cards == 3
    assert row.unique_owned_at_least_one == 3
    assert row.unique_one_card_percent == 100
    # A: min(2, 3) + A (Evolved): 1 + B: 1 over 9 copies
    assert row.unique_playset_percent == round_percent(4, 9)
    assert row.unique_playset_owned == 0


def test_set_made_only_of_leaders_is_complete_on_unique_columns():
    cards = [make_card("Leader", "BP01-L01", card_type="Leader")]
    row = SetCompletionService().completion_rows(cards)[0]
    assert row.total_unique_cards == 0
    assert row.unique_one_card_percent == 100
    assert row.unique_playset_percent == 100
    assert row.one_card_percent == 0


def test_no_cards():
    assert SetCompletionService().completion_rows([]) == []
