from __future__ import annotations

from typing import TYPE_CHECKING

import wx
import wx.dataview as dv

from models.collection import SetCompletionRow
from utils.card_display import extract_set_name
from utils.stylize import stylize_dataview, stylize_label
from utils.ui_constants import DARK_BG, SET_COMPLETION_COLUMNS

if TYPE_CHECKING:
    from controllers.app_controller import AppController


def completion_row(row: SetCompletionRow) -> list[str]:
    return [
        extract_set_name(row.set_name) or row.set_name,
        f"{row.one_card_percent}%",
        f"{row.playset_percent}%",
        f"{row.unique_one_card_percent}%",
        f"{row.unique_playset_percent}%",
        str(row.total_cards),
        str(row.total_unique_cards),
    ]


class SetCompletionPanel(wx.Panel):
    """Per-set completion percentages, recomputed whenever the tab is refreshed."""

    def __init__(self, parent: wx.Window, controller: AppController) -> None:
        super().__init__(parent)
        self.SetBackgroundColour(DARK_BG)
        self.controller = controller
        self.rows: list[SetCompletionRow] = []

        sizer = wx.BoxSizer(wx.VERTICAL)
        self.SetSizer(sizer)

        self.header = wx.StaticText(self, label="Set Completion")
        stylize_label(self.header)
        sizer.Add(self.header, 0, wx.ALL, 8)

        self.list_ctrl = dv.DataViewListCtrl(self, style=dv.DV_ROW_LINES | dv.DV_SINGLE)
        for title, width in SET_COMPLETION_COLUMNS:
            self.list_ctrl.AppendTextColumn(title, width=width)
        stylize_dataview(self.list_ctrl)
        sizer.Add(self.list_ctrl, 1, wx.EXPAND | wx.LEFT | wx.RIGHT | wx.BOTTOM, 8)

    def refresh_cards(self) -> None:
        self.rows = self.controller.set_completion_rows()
        self.list_ctrl.Freeze()
        try:
            self.list_ctrl.DeleteAllItems()
            for row in self.rows:
                self.list_ctrl.AppendItem(completion_row(row))
        finally:
            self.list_ctrl.Thaw()
        self.header.SetLabel(f"Set Completion ({len(self.rows)} set{'s' if len(self.rows) != 1 else ''})")


__all__ = ["SetCompletionPanel", "completion_row"]
