"""Dialog windows for the collection tracker."""

from widgets.dialogs.add_remove_cards_dialog import AddRemoveCardsDialog, show_add_remove_cards_dialog
from widgets.dialogs.confirm_dialog import confirm, show_error
from widgets.dialogs.create_deck_dialog import CreateDeckDialog

__all__ = [
    "AddRemoveCardsDialog",
    "CreateDeckDialog",
    "confirm",
    "show_add_remove_cards_dialog",
    "show_error",
]
