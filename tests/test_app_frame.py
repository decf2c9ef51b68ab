from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

wx = pytest.importorskip("wx")

if not isinstance(wx.Frame, type):
    pytest.skip("wxPython is not installed", allow_module_level=True)

from widgets.app_frame import AppFrame  # noqa: E402


def make_frame(selected: str, stale: set[str]):
    pages = {name: MagicMock() for name in ("all_cards", "checklist", "set_completion", "deck_builder")}
    return SimpleNamespace(
        selected_tab_name=lambda: selected,
        _stale_pages=set(stale),
        pages=pages,
    )


@pytest.mark.parametrize("tab", ["all_cards", "deck_builder"])
def test_stale_card_tabs_reapply_filters(tab):
    frame = make_frame(tab, {tab, "checklist"})

    AppFrame._refresh_stale_page(frame)

    frame.pages[tab].apply_filters.assert_called_once_with()
    frame.pages[tab].refresh_viewer.assert_called_once_with()
    assert frame._stale_pages == {"checklist"}


def test_stale_checklist_reloads_cards():
    frame = make_frame("checklist", {"checklist"})

    AppFrame._refresh_stale_page(frame)

    frame.pages["checklist"].refresh_cards.assert_called_once_with()
    frame.pages["checklist"].apply_filters.assert_not_called()


def test_fresh_tab_is_left_alone():
    frame = make_frame("all_cards", set())

    AppFrame._refresh_stale_page(frame)

    frame.pages["all_cards"].apply_filters.assert_not_called()
