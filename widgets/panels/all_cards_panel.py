from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import wx

from models.card import CardData
from services.search_service import CardFilters
from utils.ui_constants import DARK_BG
from widgets.panels.card_grid_panel import CardGridPanel
from widgets.panels.card_viewer_panel import CardViewerPanel
from widgets.panels.filter_panel import FilterPanel

if TYPE_CHECKING:
    from controllers.app_controller import AppController

CARD_TEXT_FIELDS = [("name", "Name"), ("card_number", "Card #"), ("text", "Card Text")]
CARD_TOGGLES = [("favorites_only", "Favorites only"), ("wishlisted_only", "Wishlisted only")]


def read_card_filters(filter_panel: FilterPanel, filters: CardFilters) -> None:
    """Copy the text fields and toggles of a filter panel into a CardFilters."""
    for key, _label in CARD_TEXT_FIELDS:
        setattr(filters, key, filter_panel.text(key))
    for key, _label in CARD_TOGGLES:
        setattr(filters, key, filter_panel.toggled(key))


class AllCardsPanel(wx.Panel):
    """Filterable grid of every printing, with the card viewer beside it."""

    _FILTER_DEBOUNCE_MS = 250

    def __init__(
        self,
        parent: wx.Window,
        controller: AppController,
        on_collection_edited: Callable[[], None],
    ) -> None:
        super().__init__(parent)
        self.SetBackgroundColour(DARK_BG)
        self.controller = controller
        self._on_collection_edited = on_collection_edited
        self.filters: CardFilters = controller.search_service.build_card_filters(controller.cards)

        self._filter_timer = wx.Timer(self)
        self.Bind(wx.EVT_TIMER, self._on_filter_timer, self._filter_timer)

        self._build_ui()
        settings = controller.settings
        self.filter_panel.set_toggle("favorites_only", settings.all_cards_favorites_only)
        self.filter_panel.set_toggle("wishlisted_only", settings.all_cards_wishlisted_only)

    def _build_ui(self) -> None:
        sizer = wx.BoxSizer(wx.HORIZONTAL)
        self.SetSizer(sizer)

        groups = {title: group for title, group in self.filters.groups().items() if title != "In Deck"}
        self.filter_panel = FilterPanel(
            self,
            on_change=self._schedule_filter,
            text_fields=CARD_TEXT_FIELDS,
            toggles=CARD_TOGGLES,
            groups=groups,
        )
        self.filter_panel.SetMinSize((220, -1))
        sizer.Add(self.filter_panel, 0, wx.EXPAND | wx.ALL, 6)

        self.grid = CardGridPanel(self, on_select=self._on_card_selected)
        sizer.Add(self.grid, 1, wx.EXPAND | wx.ALL, 6)

        self.viewer = CardViewerPanel(
            self,
            on_card_changed=self._on_card_changed,
            request_related=self._show_related,
            request_versions=self._show_versions,
            count_versions=self.controller.count_versions,
        )
        sizer.Add(self.viewer, 0, wx.EXPAND | wx.ALL, 6)

    # ============= Refresh =============

    def refresh_cards(self) -> None:
        """Rebuild filter options from the current collection and re-run the filter."""
        self.controller.search_service.refresh_card_filters(self.filters, self.controller.cards)
        self.filter_panel.refresh_groups()
        self.apply_filters()

    def apply_filters(self) -> None:
        read_card_filters(self.filter_panel, self.filters)
        self.controller.settings.all_cards_favorites_only = self.filters.favorites_only
        self.controller.settings.all_cards_wishlisted_only = self.filters.wishlisted_only
        results = self.controller.search_service.filter_cards(self.controller.cards, self.filters)
        self.grid.set_cards(results)

    def refresh_viewer(self) -> None:
        self.grid.refresh_rows()
        self.viewer.refresh()

    def _schedule_filter(self) -> None:
        if self._filter_timer.IsRunning():
            self._filter_timer.Stop()
        self._filter_timer.StartOnce(self._FILTER_DEBOUNCE_MS)

    def _on_filter_timer(self, _event: wx.TimerEvent) -> None:
        self.apply_filters()

    # ============= Viewer =============

    def _on_card_selected(self, card: CardData | None) -> None:
        self.viewer.set_card(card)

    def _on_card_changed(self, _card: CardData) -> None:
        self.grid.refresh_rows()
        self._on_collection_edited()

    def _show_related(self, card: CardData) -> None:
        related = self.controller.related_cards_for(card)
        if related:
            self.viewer.set_cards(related)

    def _show_versions(self, card: CardData) -> None:
        versions, index = self.controller.other_versions_for(card)
        if versions:
            self.viewer.set_cards(versions, index)


__all__ = ["AllCardsPanel", "CARD_TEXT_FIELDS", "CARD_TOGGLES", "read_card_filters"]
