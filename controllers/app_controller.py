"""
App Controller - Application logic for the collection tracker window.

This controller separates business logic and state management from UI presentation.
It coordinates between services and repositories, runs slow work off the UI thread
and reports progress through a status line.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from loguru import logger

if TYPE_CHECKING:
    import wx

    from widgets.app_frame import AppFrame

from models.card import CardData, RelatedCard
from models.collection import CombinedCardCount, SetCompletionRow
from models.deck import Deck
from repositories.deck_repository import DeckRepository, get_deck_repository
from services.collection_service import CollectionService, get_collection_service
from services.deck_service import DeckService, DeckWizard, get_deck_service
from services.image_service import ImageImportResult, ImageService, get_image_service
from services.relations_service import RelationsService, get_relations_service
from services.search_service import SearchService, get_search_service
from services.set_completion_service import SetCompletionService, get_set_completion_service
from services.state_service import AppSettings, StateService
from utils.background_worker import BackgroundWorker

UiCallback = Callable[..., Any]


class AppController:

    def __init__(
        self,
        *,
        collection_service: CollectionService | None = None,
        deck_repository: DeckRepository | None = None,
        deck_service: DeckService | None = None,
        search_service: SearchService | None = None,
        relations_service: RelationsService | None = None,
        set_completion_service: SetCompletionService | None = None,
        image_service: ImageService | None = None,
        state_service: StateService | None = None,
        worker: BackgroundWorker | None = None,
    ):
        # Services and repositories
        self.collection_service = collection_service or get_collection_service()
        self.deck_repo = deck_repository or get_deck_repository()
        self.deck_service = deck_service or get_deck_service()
        self.search_service = search_service or get_search_service()
        self.relations_service = relations_service or get_relations_service()
        self.set_completion_service = set_completion_service or get_set_completion_service()
        self.image_service = image_service or get_image_service()
        self.state_service = state_service or StateService()
        self.worker = worker or BackgroundWorker()

        # Settings management
        self.settings: AppSettings = self.state_service.load_settings()

        # Application state
        self.decks: list[Deck] = []
        self.current_deck: Deck | None = None
        self.status = "Ready"
        self.finding_relations = False
        self._relations_rescan_pending = False

        self._ui_callbacks: dict[str, UiCallback] = {}
        self.frame: AppFrame | None = None

    # ============= UI Callbacks =============

    def bind_ui_callbacks(self, callbacks: dict[str, UiCallback]) -> None:
        """
        Register UI hooks.

        Known keys: ``on_status(text)``, ``on_cards_changed()``,
        ``on_decks_changed()`` and ``on_relations_found(count)``.
        """
        self._ui_callbacks.update(callbacks)

    def _emit(self, name: str, *args: Any) -> None:
        callback = self._ui_callbacks.get(name)
        if callback:
            callback(*args)

    def set_status(self, text: str) -> None:
        self.status = text
        self._emit("on_status", text)

    @property
    def cards(self) -> list[CardData]:
        return self.collection_service.cards

    # ============= Loading =============

    def load_saved_state(self) -> None:
        """Restore saved cards, then rehydrate saved decks against them."""
        try:
            count = self.collection_service.load_saved()
        except Exception as exc:
            logger.exception("Failed to load saved cards")
            self.set_status(f"Failed to load saved cards: {exc}")
            return

        status = f"Loaded {count} saved card(s)."
        try:
            self.decks = self.deck_repo.load_decks(self.cards)
            status += f" Loaded {len(self.decks)} deck(s)."
        except Exception as exc:
            logger.exception("Failed to load decks")
            self.decks = []
            status += f" Failed to load decks: {exc}"

        if self.settings.last_deck_id:
            self.current_deck = next((d for d in self.decks if d.id == self.settings.last_deck_id), None)

        self.set_status(status)
        self._emit("on_cards_changed")
        self._emit("on_decks_changed")

    def import_csv_folder(self, folder: str | Path | None) -> None:
        """Read CSV files in the background and merge the cards into the collection."""
        if folder is None or not str(folder).strip():
            self.set_status("Folder selection cancelled.")
            return

        self.set_status(f"Loading CSV files from {folder} ...")

        def success_handler(cards: list[CardData]) -> None:
            added = self.collection_service.merge_cards(cards)
            logger.info(f"Merged {added} new card(s) from {folder}")
            self.settings.last_csv_folder = str(folder)
            self.set_status(f"Loaded {len(cards)} card(s) from {folder}")
            self._emit("on_cards_changed")
            self.find_card_relations()

        def error_handler(error: Exception) -> None:
            logger.error(f"Failed to load CSV files from {folder}: {error}")
            self.set_status(f"Error loading CSV files: {error}")

        self.worker.submit(
            self.collection_service.card_repo.load_cards_from_folder,
            folder,
            on_success=success_handler,
            on_error=error_handler,
        )

    def import_images(self, folder: str | Path | None) -> None:
        if folder is None or not str(folder).strip():
            self.set_status("Image folder selection cancelled.")
            return

        self.set_status(f"Searching for images in {folder} ...")

        def success_handler(result: ImageImportResult) -> None:
            self.settings.last_image_folder = str(folder)
            self.set_status(result.status_text)
            self._emit("on_cards_changed")

        def error_handler(error: Exception) -> None:
            logger.error(f"Failed to import images from {folder}: {error}")
            self.set_status(f"Failed to load images: {error}")

        self.worker.submit(
            self.image_service.import_images,
            folder,
            on_success=success_handler,
            on_error=error_handler,
        )

    # ============= Relations / Versions =============

    def find_card_relations(self) -> None:
        """
        Scan for related cards in the background.

        A request made while a scan is running queues one follow-up scan over
        the card list as it is when the running scan ends.
        """
        if self.finding_relations:
            self._relations_rescan_pending = True
            return
        if not self.cards:
            return

        self.finding_relations = True
        self.set_status("Finding card relations...")
        snapshot = list(self.cards)

        def success_handler(results: list[set[RelatedCard]]) -> None:
            self.finding_relations = False
            self.relations_service.apply_relations(snapshot, results)
            total = sum(len(related) for related in results) // 2
            self.set_status(f"Found {total} card relation(s).")
            self._emit("on_relations_found", total)
            self._run_pending_rescan()

        def error_handler(error: Exception) -> None:
            self.finding_relations = False
            logger.error(f"Failed to find card relations: {error}")
            self.set_status(f"Failed to find card relations: {error}")
            self._run_pending_rescan()

        self.worker.submit(
            self.relations_service.find_card_relations_result,
            snapshot,
            on_success=success_handler,
            on_error=error_handler,
        )

    def _run_pending_rescan(self) -> None:
        if self._relations_rescan_pending:
            self._relations_rescan_pending = False
            self.find_card_relations()

    def related_cards_for(self, card: CardData | None) -> list[CardData]:
        if card is None or not card.related_cards:
            return []
        related = self.relations_service.get_related_card_instances(card, self.cards)
        if related:
            self.set_status(f"Showing {len(related)} related card(s) for '{card.name}'.")
        return related

    def other_versions_for(self, card: CardData | None) -> tuple[list[CardData], int]:
        if card is None:
            return [], 0
        versions, index = self.collection_service.other_versions(card)
        if versions:
            self.set_status(f"Showing {len(versions)} version(s) of '{card.name}' ({card.card_type}).")
        return versions, index

    def count_versions(self, card: CardData) -> int:
        return self.collection_service.count_versions(card)

    # ============= Collection =============

    def apply_quantity_changes(self, deltas: dict[str, int]) -> int:
        updated = self.collection_service.apply_quantity_changes(deltas)
        self.set_status(f"Updated quantities for {updated} card(s).")
        self._emit("on_cards_changed")
        return updated

    def combined_card_counts(self) -> list[CombinedCardCount]:
        return self.collection_service.combined_card_counts()

    def set_completion_rows(self) -> list[SetCompletionRow]:
        return self.set_completion_service.completion_rows(self.cards)

    # ============= Saving =============

    def save_all(self) -> bool:
        """
        Save cards, then decks.

        A failed deck save is logged and does not undo the card save.

        Returns:
            True if the cards were saved
        """
        try:
            self.collection_service.save()
        except OSError as exc:
            logger.error(f"Failed to save cards: {exc}")
            self.set_status(f"Failed to save: {exc}")
            return False

        try:
            self.deck_repo.save_decks(self.decks)
        except OSError as exc:
            logger.error(f"Failed to save decks: {exc}")

        self.set_status(f"Saved {len(self.cards)} card(s) and {len(self.decks)} deck(s).")
        return True

    def save_settings(self, window_size: tuple[int, int] | None = None, selected_tab: str | None = None) -> None:
        if window_size:
            self.settings.window_width, self.settings.window_height = window_size
        if selected_tab:
            self.settings.selected_tab = selected_tab
        self.settings.last_deck_id = self.current_deck.id if self.current_deck else ""
        self.state_service.save_settings(self.settings)

    def shutdown(self, window_size: tuple[int, int] | None = None, selected_tab: str | None = None) -> None:
        self.save_all()
        self.save_settings(window_size=window_size, selected_tab=selected_tab)
        self.worker.shutdown(timeout=2.0)

    # ============= Deck Management =============

    def new_deck_wizard(self) -> DeckWizard:
        return DeckWizard(self.cards)

    def create_deck(self, wizard: DeckWizard) -> Deck:
        deck = wizard.create_deck()
        self.decks.append(deck)
        self.current_deck = deck
        logger.info(f"Created {deck.deck_type.value} deck '{deck.name}'")
        self.set_status(f"Created deck '{deck.name}'.")
        self._emit("on_decks_changed")
        return deck

    def select_deck(self, deck: Deck | None) -> None:
        self.current_deck = deck
        self._emit("on_decks_changed")

    def delete_deck(self, deck: Deck | None) -> bool:
        if deck is None or deck not in self.decks:
            return False
        if self.current_deck is deck:
            self.current_deck = None
        self.decks.remove(deck)
        self.set_status(f"Deleted deck '{deck.name}'.")
        self._emit("on_decks_changed")
        return True

    def rename_deck(self, deck: Deck, name: str) -> bool:
        name = name.strip()
        if not name:
            return False
        deck.name = name
        self._emit("on_decks_changed")
        return True

    def deck_text(self) -> str:
        return self.deck_service.deck_to_text(self.current_deck) if self.current_deck else ""

    def apply_deck_change(self, changed: bool) -> bool:
        """Notify listeners after a deck edit that reported a change."""
        if changed:
            self._emit("on_decks_changed")
        return changed

    # ============= Frame Factory =============

    def create_frame(self, parent: wx.Window | None = None) -> AppFrame:
        import wx

        from widgets.app_frame import AppFrame

        # Create the frame
        frame = AppFrame(controller=self, parent=parent)
        self.frame = frame

        # The worker already marshals results onto the UI thread
        self.bind_ui_callbacks(
            {
                "on_status": frame.set_status,
                "on_cards_changed": frame.refresh_cards,
                "on_decks_changed": frame.refresh_decks,
                "on_relations_found": lambda _count: frame.refresh_viewers(),
            }
        )

        # Trigger initial loading after frame is ready
        wx.CallAfter(self.load_saved_state)
        return frame


# Singleton instance
_controller_instance: AppController | None = None


def get_app_controller() -> AppController:
    global _controller_instance
    if _controller_instance is None:
        _controller_instance = AppController()
    return _controller_instance


def reset_app_controller() -> None:
    global _controller_instance
    _controller_instance = None
