"""UI-specific constants shared across widgets."""

import wx

SUBDUED_TEXT = wx.Colour(185, 191, 202)
DARK_BG = wx.Colour(20, 22, 27)
DARK_PANEL = wx.Colour(34, 39, 46)
DARK_ALT = wx.Colour(40, 46, 54)
DARK_ACCENT = wx.Colour(59, 130, 246)
LIGHT_TEXT = wx.Colour(236, 236, 236)
GOLD_TEXT = wx.Colour(212, 175, 55)

TAB_TITLES = {
    "all_cards": "All Cards",
    "checklist": "Checklist",
    "set_completion": "Set Completion",
    "deck_builder": "Deck Builder",
}

# (title, width) pairs for the card grids
CARD_GRID_COLUMNS = [
    ("Card #", 110),
    ("Name", 220),
    ("Rarity", 60),
    ("Set", 180),
    ("Class", 100),
    ("Type", 110),
    ("Cost", 50),
    ("Owned", 60),
    ("Fav", 40),
    ("Wish", 50),
]

CHECKLIST_COLUMNS = [
    ("Name", 260),
    ("Owned", 70),
    ("Status", 70),
    ("Printings", 80),
]

SET_COMPLETION_COLUMNS = [
    ("Set", 260),
    ("1 Card", 80),
    ("Playset", 80),
    ("Unique 1 Card", 110),
    ("Unique Playset", 110),
    ("Cards", 70),
    ("Unique", 70),
]

DECK_LIST_COLUMNS = [
    ("Qty", 40),
    ("Name", 200),
    ("Card #", 100),
]

CARD_IMAGE_SIZE = (260, 360)

__all__ = [
    "SUBDUED_TEXT",
    "DARK_BG",
    "DARK_PANEL",
    "DARK_ALT",
    "DARK_ACCENT",
    "LIGHT_TEXT",
    "GOLD_TEXT",
    "TAB_TITLES",
    "CARD_GRID_COLUMNS",
    "CHECKLIST_COLUMNS",
    "SET_COMPLETION_COLUMNS",
    "DECK_LIST_COLUMNS",
    "CARD_IMAGE_SIZE",
]
