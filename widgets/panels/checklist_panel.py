"""
Checklist Panel - One row per card name, summed over every printing.

Shows owned totals against the playset size with completion counts above the
list; the viewer cycles through the owned printings of the selected row.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import wx
import wx.dataview as dv

from models.card import CardData
from models.collection import CombinedCardCount
from services.search_service import ChecklistFilters
from utils.stylize import stylize_dataview, stylize_label
from utils.ui_constants import CHECKLIST_COLUMNS, DARK_BG, DARK_PANEL
from widgets.panels.card_viewer_panel import CardViewerPanel
from widgets.panels.filter_panel import FilterPanel

if TYPE_CHECKING:
    from controllers.app_controller import AppController


def checklist_row(group: CombinedCardCount) -> list[str]:
    return [
        group.name,
        f"{group.total_quantity_owned}/{group.copies_needed_for_playset}",
        group.category,
        str(len(group)),
    ]


class ChecklistPanel(wx.Panel):
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
        self.all_groups: list[CombinedCardCount] = []
        self.groups: list[CombinedCardCount] = []
        self.filters: ChecklistFilters = controller.search_service.build_checklist_filters([])

        self._filter_timer = wx.Timer(self)
        self.Bind(wx.EVT_TIMER, lambda _evt: self.apply_filters(), self._filter_timer)

        self._build_ui()
        self.filter_panel.set_toggle("favorites_only", controller.settings.checklist_favorites_only)
        self.filter_panel.set_toggle("only_selected_sets", controller.settings.checklist_only_selected_sets)

    def _build_ui(self) -> None:
        sizer = wx.BoxSizer(wx.HORIZONTAL)
        self.SetSizer(sizer)

        self.filter_panel = FilterPanel(
            self,
            on_change=self._schedule_filter,
            text_fields=[("name", "Name")],
            toggles=[("favorites_only", "Favorites only"), ("only_selected_sets", "Only selected sets")],
            groups={"Set": self.filters.sets, "Owned": self.filters.owned},
        )
        self.filter_panel.SetMinSize((220, -1))
        sizer.Add(self.filter_panel, 0, wx.EXPAND | wx.ALL, 6)

        center = wx.Panel(self)
        center.SetBackgroundColour(DARK_PANEL)
        center_sizer = wx.BoxSizer(wx.VERTICAL)
        center.SetSizer(center_sizer)

        counts = wx.FlexGridSizer(cols=2, hgap=12, vgap=2)
        self.unique_label = self._count_row(center, counts, "Unique cards:")
        self.owned_label = self._count_row(center, counts, "Owned (1+):")
        self.playset_label = self._count_row(center, counts, "Playsets:")
        center_sizer.Add(counts, 0, wx.ALL, 6)

        self.list_ctrl = dv.DataViewListCtrl(center, style=dv.DV_ROW_LINES | dv.DV_SINGLE)
        for title, width in CHECKLIST_COLUMNS:
            self.list_ctrl.AppendTextColumn(title, width=width)
        stylize_dataview(self.list_ctrl)
        self.list_ctrl.Bind(dv.EVT_DATAVIEW_SELECTION_CHANGED, self._on_selection_changed)
        center_sizer.Add(self.list_ctrl, 1, wx.EXPAND | wx.ALL, 6)
        sizer.Add(center, 1, wx.EXPAND | wx.ALL, 6)

        self.viewer = CardViewerPanel(
            self,
            on_card_changed=self._on_card_changed,
            request_related=self._show_related,
            request_versions=self._show_versions,
            count_versions=self.controller.count_versions,
        )
        sizer.Add(self.viewer, 0, wx.EXPAND | wx.ALL, 6)

    @staticmethod
    def _count_row(parent: wx.Window, sizer: wx.FlexGridSizer, caption: str) -> wx.StaticText:
        label = wx.StaticText(parent, label=caption)
        stylize_label(label, subtle=True)
        value = wx.StaticText(parent, label="Error")
        stylize_label(value)
        value.SetBackgroundColour(DARK_PANEL)
        sizer.Add(label, 0)
        sizer.Add(value, 0)
        return value

    # ============= Refresh =============

    def refresh_cards(self) -> None:
        """Regroup the collection and rebuild the set options, keeping selections."""
        self.all_groups = self.controller.combined_card_counts()
        self.filters.sets.rebuild(self.controller.search_service.checklist_set_options(self.all_groups))
        self.filter_panel.refresh_groups()
        self.apply_filters()

    def apply_filters(self) -> None:
        self.filters.name = self.filter_panel.text("name")
        self.filters.favorites_only = self.filter_panel.toggled("favorites_only")
        self.filters.only_selected_sets = self.filter_panel.toggled("only_selected_sets")
        self.controller.settings.checklist_favorites_only = self.filters.favorites_only
        self.controller.settings.checklist_only_selected_sets = self.filters.only_selected_sets

        search = self.controller.search_service
        self.groups = search.filter_checklist(self.all_groups, self.filters)
        self._populate()

        counts = search.checklist_counts(self.groups)
        self.unique_label.SetLabel(str(counts.unique_cards))
        self.owned_label.SetLabel(counts.owned_unique_text)
        self.playset_label.SetLabel(counts.owned_playsets_text)
        self.Layout()

    def refresh_viewer(self) -> None:
        for index, group in enumerate(self.groups):
            for column, value in enumerate(checklist_row(group)):
                self.list_ctrl.SetTextValue(value, index, column)
        self.viewer.refresh()

    def _populate(self) -> None:
        self.list_ctrl.Freeze()
        try:
            self.list_ctrl.DeleteAllItems()
            for group in self.groups:
                self.list_ctrl.AppendItem(checklist_row(group))
        finally:
            self.list_ctrl.Thaw()
        self.viewer.set_card(None)

    def _schedule_filter(self) -> None:
        if self._filter_timer.IsRunning():
            self._filter_timer.Stop()
        self._filter_timer.StartOnce(self._FILTER_DEBOUNCE_MS)

    # ============= Selection / Viewer =============

    def selected_group(self) -> CombinedCardCount | None:
        row = self.list_ctrl.GetSelectedRow()
        if row == wx.NOT_FOUND or not 0 <= row < len(self.groups):
            return None
        return self.groups[row]

    def _on_selection_changed(self, _event: dv.DataViewEvent) -> None:
        group = self.selected_group()
        self.viewer.set_cards(group.cards if group else [])

    def _on_card_changed(self, _card: CardData) -> None:
        self.refresh_viewer()
        self._on_collection_edited()

    def _show_related(self, card: CardData) -> None:
        related = self.controller.related_cards_for(card)
        if related:
            self.viewer.set_cards(related)

    def _show_versions(self, card: CardData) -> None:
        versions, index = self.controller.other_versions_for(card)
        if versions:
            self.viewer.set_cards(versions, index)


__all__ = ["ChecklistPanel", "checklist_row"]
