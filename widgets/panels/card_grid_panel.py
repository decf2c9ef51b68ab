from collections.abc import Callable

import wx
import wx.dataview as dv

from models.card import CardData
from utils.card_display import extract_set_name, rarity_abbreviation
from utils.stylize import stylize_dataview
from utils.ui_constants import CARD_GRID_COLUMNS, DARK_PANEL, SUBDUED_TEXT


def card_row(card: CardData) -> list[str]:
    return [
        card.card_number,
        card.display_name,
        rarity_abbreviation(card.rarity),
        extract_set_name(card.card_set),
        card.card_class,
        card.card_type,
        card.cost,
        str(card.quantity_owned),
        "★" if card.is_favorite else "",
        str(card.wishlist_desired_quantity) if card.is_wishlisted else "",
    ]


class CardGridPanel(wx.Panel):
    """Tabular list of card printings with a count header."""

    def __init__(
        self,
        parent: wx.Window,
        on_select: Callable[[CardData | None], None],
        on_activate: Callable[[CardData], None] | None = None,
        extra_column: tuple[str, Callable[[CardData], str]] | None = None,
    ) -> None:
        super().__init__(parent)
        self.SetBackgroundColour(DARK_PANEL)
        self._on_select = on_select
        self._on_activate = on_activate
        self._extra_column = extra_column
        self.cards: list[CardData] = []

        outer = wx.BoxSizer(wx.VERTICAL)
        self.SetSizer(outer)

        self.count_label = wx.StaticText(self, label="0 cards")
        self.count_label.SetForegroundColour(SUBDUED_TEXT)
        outer.Add(self.count_label, 0, wx.BOTTOM, 4)

        self.list_ctrl = dv.DataViewListCtrl(self, style=dv.DV_ROW_LINES | dv.DV_SINGLE)
        for title, width in CARD_GRID_COLUMNS:
            self.list_ctrl.AppendTextColumn(title, width=width)
        if extra_column:
            self.list_ctrl.AppendTextColumn(extra_column[0], width=60)
        stylize_dataview(self.list_ctrl)
        self.list_ctrl.Bind(dv.EVT_DATAVIEW_SELECTION_CHANGED, self._on_selection_changed)
        self.list_ctrl.Bind(dv.EVT_DATAVIEW_ITEM_ACTIVATED, self._on_item_activated)
        outer.Add(self.list_ctrl, 1, wx.EXPAND)

    def set_cards(self, cards: list[CardData]) -> None:
        selected = self.selected_card()
        self.list_ctrl.Freeze()
        try:
            self.list_ctrl.DeleteAllItems()
            self.cards = list(cards)
            for card in self.cards:
                row = card_row(card)
                if self._extra_column:
                    row.append(self._extra_column[1](card))
                self.list_ctrl.AppendItem(row)
        finally:
            self.list_ctrl.Thaw()
        self.count_label.SetLabel(f"{len(self.cards)} card{'s' if len(self.cards) != 1 else ''}")
        if selected is not None and selected in self.cards:
            self.list_ctrl.SelectRow(self.cards.index(selected))

    def refresh_rows(self) -> None:
        """Redraw values in place (quantities, flags) without rebuilding the list."""
        for index, card in enumerate(self.cards):
            row = card_row(card)
            if self._extra_column:
                row.append(self._extra_column[1](card))
            for column, value in enumerate(row):
                self.list_ctrl.SetTextValue(value, index, column)

    def selected_card(self) -> CardData | None:
        row = self.list_ctrl.GetSelectedRow()
        if row == wx.NOT_FOUND or not 0 <= row < len(self.cards):
            return None
        return self.cards[row]

    def _on_selection_changed(self, _event: dv.DataViewEvent) -> None:
        self._on_select(self.selected_card())

    def _on_item_activated(self, _event: dv.DataViewEvent) -> None:
        card = self.selected_card()
        if card is not None and self._on_activate:
            self._on_activate(card)


__all__ = ["CardGridPanel", "card_row"]
