from __future__ import annotations

from utils.search_filters import (
    FilterGroup,
    distinct_case_insensitive,
    matches_pattern,
    sort_costs,
    split_parts,
)


def test_split_parts_trims_and_skips_blanks():
    assert split_parts(" Gold / Premium /") == ["Gold", "Premium"]
    assert split_parts(None) == []


def test_matches_pattern_regex_and_fallback():
    assert matches_pattern("Forest Archer", "^forest")
    assert not matches_pattern("Forest Archer", "^archer")
    # Unbalanced bracket is not a valid regex; falls back to substring
    assert matches_pattern("Card [A", "[a")
    assert matches_pattern("anything", "")


def test_group_inactive_when_everything_checked():
    group = FilterGroup.from_names(["Gold", "Silver"])
    assert not group.is_active
    assert group.matches_any_part(None)


def test_group_inactive_when_empty():
    assert not FilterGroup().is_active


def test_matches_any_part():
    group = FilterGroup.from_names(["Gold", "Silver", "Premium"])
    group.set_checked("Gold", False)
    assert group.matches_any_part("Gold / Premium")
    assert not group.matches_any_part("Gold")
    assert not group.matches_any_part("")


def test_matches_value_is_exact():
    group = FilterGroup.from_names(["1", "10"])
    group.set_checked("10", False)
    assert group.matches_value(" 1 ")
    assert not group.matches_value("10")


def test_matches_containing_part():
    group = FilterGroup.from_names(["Advent of Genesis", "Reign of Bahamut"])
    group.set_checked("Reign of Bahamut", False)
    assert group.matches_containing_part('BP01 "Advent of Genesis"')
    assert not group.matches_containing_part('BP02 "Reign of Bahamut"')


def test_clear_all_filters_everything():
    group = FilterGroup.from_names(["Owned", "Unowned"])
    group.clear_all()
    assert group.is_active
    assert not group.matches_value("Owned")
    group.select_all()
    assert group.matches_value("Owned")


def test_rebuild_keeps_existing_state():
    group = FilterGroup.from_names(["A", "B"])
    group.set_checked("B", False)
    group.rebuild(["b", "C"])
    assert group.checked_names == ["C"]


def test_sort_costs_numeric_first():
    assert sort_costs(["10", "2", "X", "0"]) == ["0", "2", "10", "X"]


def test_distinct_case_insensitive():
    assert distinct_case_insensitive(["beta", "Alpha", "BETA", ""]) == ["Alpha", "beta"]
