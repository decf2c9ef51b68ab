"""Tab panels and reusable pieces of the collection tracker window."""

from widgets.panels.all_cards_panel import AllCardsPanel
from widgets.panels.card_grid_panel import CardGridPanel
from widgets.panels.card_viewer_panel import CardViewerPanel, DeckActions
from widgets.panels.checklist_panel import ChecklistPanel
from widgets.panels.deck_builder_panel import DeckBuilderPanel
from widgets.panels.filter_panel import FilterGroupBox, FilterPanel
from widgets.panels.set_completion_panel import SetCompletionPanel

__all__ = [
    "AllCardsPanel",
    "CardGridPanel",
    "CardViewerPanel",
    "ChecklistPanel",
    "DeckActions",
    "DeckBuilderPanel",
    "FilterGroupBox",
    "FilterPanel",
    "SetCompletionPanel",
]
