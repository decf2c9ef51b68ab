"""Dialog for entering owned-quantity changes for many cards at once."""

from __future__ import annotations

import wx
import wx.dataview as dv

from models.card import CardData
from services.search_service import CardFilters, SearchService
from utils.card_display import extract_set_name, rarity_abbreviation
from utils.constants import DARK_BG, LIGHT_TEXT, SUBDUED_TEXT
from utils.stylize import stylize_dataview, stylize_small_button
from widgets.panels.filter_panel import FilterPanel

_COLUMNS = [("Card #", 110), ("Name", 240), ("Rarity", 60), ("Set", 180), ("Owned", 60), ("Change", 70)]
_FILTER_GROUPS = ("Rarity", "Class", "Set", "Owned")


class AddRemoveCardsDialog(wx.Dialog):
    """
    Collects per-card deltas; nothing is applied until the caller reads ``deltas``.

    Deltas are keyed by card number.
    """

    def __init__(self, parent: wx.Window, cards: list[CardData], search_service: SearchService) -> None:
        """
        Initialize the dialog.

        Args:
            parent: Parent window
            cards: Every card in the collection
            search_service: Service used for the filter options and matching
        """
        super().__init__(
            parent,
            title="Add / Remove Cards",
            size=(1000, 680),
            style=wx.DEFAULT_DIALOG_STYLE | wx.RESIZE_BORDER,
        )
        self.all_cards = list(cards)
        self.search_service = search_service
        self.filters: CardFilters = search_service.build_card_filters(self.all_cards)
        self.deltas: dict[str, int] = {}
        self.visible: list[CardData] = []

        main_sizer = wx.BoxSizer(wx.VERTICAL)
        self.SetSizer(main_sizer)

        panel = wx.Panel(self)
        panel.SetBackgroundColour(DARK_BG)
        panel_sizer = wx.BoxSizer(wx.HORIZONTAL)
        panel.SetSizer(panel_sizer)
        main_sizer.Add(panel, 1, wx.EXPAND)

        groups = self.filters.groups()
        self.filter_panel = FilterPanel(
            panel,
            on_change=self.apply_filters,
            text_fields=[("name", "Name"), ("card_number", "Card #")],
            groups={title: groups[title] for title in _FILTER_GROUPS},
        )
        self.filter_panel.SetMinSize((220, -1))
        panel_sizer.Add(self.filter_panel, 0, wx.EXPAND | wx.ALL, 6)

        right = wx.BoxSizer(wx.VERTICAL)
        self.list_ctrl = dv.DataViewListCtrl(panel, style=dv.DV_ROW_LINES | dv.DV_SINGLE)
        for title, width in _COLUMNS:
            self.list_ctrl.AppendTextColumn(title, width=width)
        stylize_dataview(self.list_ctrl)
        self.list_ctrl.Bind(dv.EVT_DATAVIEW_SELECTION_CHANGED, self._on_selection_changed)
        right.Add(self.list_ctrl, 1, wx.EXPAND | wx.ALL, 6)

        edit_row = wx.BoxSizer(wx.HORIZONTAL)
        caption = wx.StaticText(panel, label="Change for selected card:")
        caption.SetForegroundColour(LIGHT_TEXT)
        edit_row.Add(caption, 0, wx.ALIGN_CENTER_VERTICAL | wx.RIGHT, 6)
        minus = wx.Button(panel, label="−", style=wx.BU_EXACTFIT)
        plus = wx.Button(panel, label="+", style=wx.BU_EXACTFIT)
        for btn in (minus, plus):
            stylize_small_button(btn)
        minus.Bind(wx.EVT_BUTTON, lambda _evt: self._step_selected(-1))
        plus.Bind(wx.EVT_BUTTON, lambda _evt: self._step_selected(1))
        self.delta_spin = wx.SpinCtrl(panel, min=-99, max=99, initial=0, size=(80, -1))
        self.delta_spin.Bind(wx.EVT_SPINCTRL, self._on_spin)
        edit_row.Add(minus, 0)
        edit_row.Add(self.delta_spin, 0, wx.LEFT | wx.RIGHT, 4)
        edit_row.Add(plus, 0)
        edit_row.AddStretchSpacer(1)
        self.pending_label = wx.StaticText(panel, label="")
        self.pending_label.SetForegroundColour(SUBDUED_TEXT)
        edit_row.Add(self.pending_label, 0, wx.ALIGN_CENTER_VERTICAL)
        right.Add(edit_row, 0, wx.EXPAND | wx.ALL, 6)

        buttons = self.CreateStdDialogButtonSizer(wx.OK | wx.CANCEL)
        self.FindWindowById(wx.ID_OK).SetLabel("Apply")
        right.Add(buttons, 0, wx.EXPAND | wx.ALL, 6)
        panel_sizer.Add(right, 1, wx.EXPAND)

        self.apply_filters()
        self.CentreOnParent()

    # ============= Filtering =============

    def apply_filters(self) -> None:
        self.filters.name = self.filter_panel.text("name")
        self.filters.card_number = self.filter_panel.text("card_number")
        self.visible = self.search_service.filter_cards(self.all_cards, self.filters)
        self.list_ctrl.Freeze()
        try:
            self.list_ctrl.DeleteAllItems()
            for card in self.visible:
                self.list_ctrl.AppendItem(self._row(card))
        finally:
            self.list_ctrl.Thaw()
        self._update_pending()

    def _row(self, card: CardData) -> list[str]:
        delta = self.deltas.get(card.card_number, 0)
        return [
            card.card_number,
            card.display_name,
            rarity_abbreviation(card.rarity),
            extract_set_name(card.card_set),
            str(card.quantity_owned),
            f"{delta:+d}" if delta else "",
        ]

    # ============= Editing =============

    def selected_card(self) -> CardData | None:
        row = self.list_ctrl.GetSelectedRow()
        if row == wx.NOT_FOUND or not 0 <= row < len(self.visible):
            return None
        return self.visible[row]

    def set_delta(self, card: CardData, delta: int) -> None:
        if delta:
            self.deltas[card.card_number] = delta
        else:
            self.deltas.pop(card.card_number, None)
        # The same card number can appear more than once in the grid
        for index, shown in enumerate(self.visible):
            if shown.card_number == card.card_number:
                self.list_ctrl.SetTextValue(self._row(shown)[-1], index, len(_COLUMNS) - 1)
        self._update_pending()

    def _step_selected(self, step: int) -> None:
        card = self.selected_card()
        if card is None:
            return
        delta = self.deltas.get(card.card_number, 0) + step
        self.delta_spin.SetValue(delta)
        self.set_delta(card, delta)

    def _on_spin(self, _event: wx.SpinEvent) -> None:
        card = self.selected_card()
        if card is not None:
            self.set_delta(card, self.delta_spin.GetValue())

    def _on_selection_changed(self, _event: dv.DataViewEvent) -> None:
        card = self.selected_card()
        self.delta_spin.SetValue(self.deltas.get(card.card_number, 0) if card else 0)

    def _update_pending(self) -> None:
        self.pending_label.SetLabel(f"{len(self.deltas)} pending change(s)")


def show_add_remove_cards_dialog(
    parent: wx.Window, cards: list[CardData], search_service: SearchService
) -> dict[str, int] | None:
    """Show the dialog; returns the deltas when applied, None when cancelled."""
    dialog = AddRemoveCardsDialog(parent, cards, search_service)
    try:
        if dialog.ShowModal() != wx.ID_OK:
            return None
        return dict(dialog.deltas)
    finally:
        dialog.Destroy()


__all__ = ["AddRemoveCardsDialog", "show_add_remove_cards_dialog"]
