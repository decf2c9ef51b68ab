"""Dark theme helpers for the collection tracker widgets."""

import wx
import wx.dataview as dv

from utils.constants import (
    DARK_ACCENT,
    DARK_ALT,
    DARK_BG,
    DARK_PANEL,
    GOLD_TEXT,
    LIGHT_TEXT,
    SUBDUED_TEXT,
)

# Owned-count buckets from quantity_category()
CATEGORY_COLOURS = {
    "None": SUBDUED_TEXT,
    "Low": (240, 173, 78),
    "High": GOLD_TEXT,
}


def stylize_label(label: wx.StaticText, subtle: bool = False) -> None:
    label.SetForegroundColour(SUBDUED_TEXT if subtle else LIGHT_TEXT)
    label.SetBackgroundColour(DARK_PANEL if subtle else DARK_BG)
    font = label.GetFont()
    if not subtle:
        font.MakeBold()
    label.SetFont(font)


def stylize_owned_label(label: wx.StaticText, category: str) -> None:
    """Colour an owned-count label by how close the card is to a playset."""
    label.SetForegroundColour(CATEGORY_COLOURS.get(category, LIGHT_TEXT))
    font = label.GetFont()
    if category == "High":
        font.MakeBold()
    label.SetFont(font)
    label.Refresh()


def stylize_textctrl(ctrl: wx.TextCtrl, multiline: bool = False) -> None:
    ctrl.SetBackgroundColour(DARK_ALT)
    ctrl.SetForegroundColour(LIGHT_TEXT)
    font = ctrl.GetFont()
    if multiline:
        font.SetPointSize(font.GetPointSize() + 1)
    ctrl.SetFont(font)


def stylize_checklistbox(ctrl: wx.CheckListBox) -> None:
    ctrl.SetBackgroundColour(DARK_ALT)
    ctrl.SetForegroundColour(LIGHT_TEXT)


def stylize_checkbox(ctrl: wx.CheckBox) -> None:
    ctrl.SetForegroundColour(LIGHT_TEXT)


def stylize_dataview(ctrl: dv.DataViewListCtrl) -> None:
    ctrl.SetBackgroundColour(DARK_ALT)
    ctrl.SetForegroundColour(LIGHT_TEXT)


def stylize_button(button: wx.Button) -> None:
    button.SetBackgroundColour(DARK_ACCENT)
    button.SetForegroundColour(wx.Colour(12, 14, 18))
    font = button.GetFont()
    font.MakeBold()
    button.SetFont(font)


def stylize_small_button(button: wx.Button) -> None:
    """Quantity +/- and navigation buttons."""
    button.SetBackgroundColour(DARK_ALT)
    button.SetForegroundColour(LIGHT_TEXT)
