from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from test_helpers import make_card

from controllers.app_controller import AppController
from models.deck import DeckType
from repositories.card_repository import CardRepository
from repositories.deck_repository import DeckRepository
from services.collection_service import CollectionService
from services.image_service import ImageService
from services.state_service import StateService
from utils.background_worker import BackgroundWorker

CSV_TEXT = (
    "Name,Card #,Type,Class,Text\n"
    "Fairy,BP01-001,Follower,Forestcraft,\n"
    "Fairy,BP01-002,Evolved,Forestcraft,\n"
    "Fairy Caller,BP01-003,Follower,Forestcraft,Put a Fairy into your hand.\n"
)


@pytest.fixture
def controller(tmp_path):
    ctrl = AppController(
        collection_service=CollectionService(CardRepository(saved_cards_path=tmp_path / "savedCards.json")),
        deck_repository=DeckRepository(saved_decks_path=tmp_path / "savedDecks.json"),
        image_service=ImageService(images_dir=tmp_path / "CardImages"),
        state_service=StateService(settings_path=tmp_path / "settings.json"),
        worker=BackgroundWorker(synchronous=True),
    )
    ctrl.callbacks = {
        "on_status": MagicMock(),
        "on_cards_changed": MagicMock(),
        "on_decks_changed": MagicMock(),
        "on_relations_found": MagicMock(),
    }
    ctrl.bind_ui_callbacks(ctrl.callbacks)
    return ctrl


@pytest.fixture
def csv_folder(tmp_path):
    folder = tmp_path / "csv"
    folder.mkdir()
    (folder / "bp01.csv").write_text(CSV_TEXT, encoding="utf-8")
    return folder


def test_initial_status(controller):
    assert controller.status == "Ready"
    assert controller.current_deck is None


def test_import_csv_folder_merges_and_finds_relations(controller, csv_folder):
    controller.import_csv_folder(csv_folder)

    assert [card.card_number for card in controller.cards] == ["BP01-001", "BP01-002", "BP01-003"]
    assert controller.settings.last_csv_folder == str(csv_folder)
    controller.callbacks["on_cards_changed"].assert_called()
    controller.callbacks["on_relations_found"].assert_called_once_with(3)
    assert controller.status == "Found 3 card relation(s)."
    assert not controller.finding_relations
    assert len(controller.cards[0].related_cards) == 2


def test_import_csv_folder_twice_adds_nothing_new(controller, csv_folder):
    controller.import_csv_folder(csv_folder)
    controller.import_csv_folder(csv_folder)
    assert len(controller.cards) == 3


def test_import_cancelled(controller):
    controller.import_csv_folder(None)
    assert controller.status == "Folder selection cancelled."
    controller.import_images("")
    assert controller.status == "Image folder selection cancelled."


def test_import_csv_error_reports_status(controller, monkeypatch):
    def boom(_folder):
        raise OSError("disk gone")

    monkeypatch.setattr(controller.collection_service.card_repo, "load_cards_from_folder", boom)

    controller.import_csv_folder("/somewhere")

    assert controller.status == "Error loading CSV files: disk gone"
    assert controller.cards == []


def test_import_images(controller, tmp_path):
    source = tmp_path / "images"
    source.mkdir()
    (source / "BP01-001.png").write_bytes(b"png")

    controller.import_images(source)

    assert controller.status == "Images processed. Found 1 files, copied 1, skipped 0."
    assert controller.settings.last_image_folder == str(source)


def test_find_relations_skipped_without_cards(controller):
    controller.find_card_relations()
    controller.callbacks["on_relations_found"].assert_not_called()
    assert controller.status == "Ready"


def test_related_cards_and_versions(controller, csv_folder):
    controller.import_csv_folder(csv_folder)
    fairy = controller.cards[0]

    related = controller.related_cards_for(fairy)
    assert {card.card_number for card in related} == {"BP01-002", "BP01-003"}

    versions, index = controller.other_versions_for(fairy)
    assert versions == [fairy]
    assert index == 0
    assert controller.count_versions(fairy) == 1
    assert controller.related_cards_for(None) == []


def test_apply_quantity_changes(controller, csv_folder):
    controller.import_csv_folder(csv_folder)

    assert controller.apply_quantity_changes({"BP01-001": 2}) == 1

    assert controller.cards[0].quantity_owned == 2
    assert controller.status == "Updated quantities for 1 card(s)."


def test_aggregates(controller, csv_folder):
    controller.import_csv_folder(csv_folder)
    assert [group.name for group in controller.combined_card_counts()] == [
        "Fairy",
        "Fairy (Evolved)",
        "Fairy Caller",
    ]
    # No Set column in the fixture CSV
    assert controller.set_completion_rows() == []


def test_save_and_reload_state(controller, csv_folder, tmp_path):
    controller.import_csv_folder(csv_folder)
    controller.cards[0].quantity_owned = 3
    wizard = controller.new_deck_wizard()
    wizard.class1 = "Forestcraft"
    wizard.go_next()
    wizard.go_next()
    deck = controller.create_deck(wizard)
    controller.deck_service.try_add_card(controller.cards[0], deck)

    controller.shutdown(window_size=(1000, 700), selected_tab="deck_builder")

    reloaded = AppController(
        collection_service=CollectionService(CardRepository(saved_cards_path=tmp_path / "savedCards.json")),
        deck_repository=DeckRepository(saved_decks_path=tmp_path / "savedDecks.json"),
        image_service=ImageService(images_dir=tmp_path / "CardImages"),
        state_service=StateService(settings_path=tmp_path / "settings.json"),
        worker=BackgroundWorker(synchronous=True),
    )
    reloaded.load_saved_state()

    assert reloaded.status == "Loaded 3 saved card(s). Loaded 1 deck(s)."
    assert reloaded.cards[0].quantity_owned == 3
    assert reloaded.settings.window_size == (1000, 700)
    assert reloaded.settings.selected_tab == "deck_builder"
    assert reloaded.current_deck is not None
    assert reloaded.current_deck.id == deck.id
    assert reloaded.current_deck.main_deck[0].card is reloaded.cards[0]


def test_save_failure_reports_status(controller, monkeypatch):
    def fail(*_args, **_kwargs):
        raise OSError("read-only")

    monkeypatch.setattr(controller.collection_service, "save", fail)

    assert controller.save_all() is False
    assert controller.status == "Failed to save: read-only"


def test_deck_management(controller):
    wizard = controller.new_deck_wizard()
    wizard.deck_type = DeckType.GLORYFINDER
    wizard.class1 = "Forestcraft"
    wizard.go_next()
    wizard.go_next()
    deck = controller.create_deck(wizard)

    assert controller.current_deck is deck
    assert controller.status == "Created deck 'Forestcraft Gloryfinder'."
    assert controller.deck_text().startswith("Forestcraft Gloryfinder [Gloryfinder]")

    assert controller.rename_deck(deck, "  Elves ")
    assert deck.name == "Elves"
    assert not controller.rename_deck(deck, "   ")

    assert controller.apply_deck_change(True)
    assert not controller.apply_deck_change(False)

    assert controller.delete_deck(deck)
    assert controller.current_deck is None
    assert controller.decks == []
    assert not controller.delete_deck(deck)
    assert controller.deck_text() == ""


def test_select_deck_notifies(controller):
    controller.select_deck(None)
    controller.callbacks["on_decks_changed"].assert_called_once_with()


class QueuedWorker:
    """Holds submitted tasks until the test runs them, in any order."""

    def __init__(self):
        self.tasks = []

    def submit(self, func, *args, on_success=None, on_error=None, **kwargs):
        self.tasks.append((func, args, kwargs, on_success, on_error))

    def run(self, index=0):
        func, args, kwargs, on_success, on_error = self.tasks.pop(index)
        try:
            result = func(*args, **kwargs)
        except Exception as exc:
            if on_error:
                on_error(exc)
            return
        if on_success:
            on_success(result)

    def run_all(self):
        while self.tasks:
            self.run()

    def shutdown(self, timeout=5.0):
        self.tasks.clear()


@pytest.fixture
def queued_controller(tmp_path):
    worker = QueuedWorker()
    ctrl = AppController(
        collection_service=CollectionService(CardRepository(saved_cards_path=tmp_path / "savedCards.json")),
        deck_repository=DeckRepository(saved_decks_path=tmp_path / "savedDecks.json"),
        image_service=ImageService(images_dir=tmp_path / "CardImages"),
        state_service=StateService(settings_path=tmp_path / "settings.json"),
        worker=worker,
    )
    return ctrl, worker


def test_only_one_relation_scan_runs_at_a_time(queued_controller):
    controller, worker = queued_controller
    controller.collection_service.merge_cards([make_card("Fairy", "BP01-001")])

    controller.find_card_relations()
    controller.find_card_relations()

    assert len(worker.tasks) == 1
    assert controller.finding_relations


def test_import_during_scan_triggers_follow_up_scan(queued_controller, tmp_path):
    controller, worker = queued_controller
    controller.collection_service.merge_cards([make_card("Fairy", "BP01-001")])
    folder = tmp_path / "new_cards"
    folder.mkdir()
    (folder / "bp01.csv").write_text(
        "Name,Card #,Type,Class,Text\nFairy Caller,BP01-003,Follower,Forestcraft,Put a Fairy into your hand.\n",
        encoding="utf-8",
    )

    controller.find_card_relations()
    controller.import_csv_folder(folder)
    # The import finishes before the scan started on the old card list
    worker.run(1)
    worker.run_all()

    caller = next(card for card in controller.cards if card.name == "Fairy Caller")
    assert {card.card_number for card in controller.related_cards_for(caller)} == {"BP01-001"}
    assert not controller.finding_relations


def test_deck_save_failure_keeps_card_save(controller, monkeypatch, tmp_path):
    def fail(*_args, **_kwargs):
        raise OSError("read-only")

    controller.collection_service.merge_cards([make_card("Fairy", "BP01-001")])
    monkeypatch.setattr(controller.deck_repo, "save_decks", fail)

    assert controller.save_all() is True
    assert (tmp_path / "savedCards.json").exists()
    assert controller.status == "Saved 1 card(s) and 0 deck(s)."
