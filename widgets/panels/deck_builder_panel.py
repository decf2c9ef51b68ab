from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import wx
import wx.dataview as dv
from loguru import logger

from models.card import CardData
from models.deck import Deck, DeckEntry
from services.search_service import CardFilters
from utils.stylize import stylize_button, stylize_dataview, stylize_label, stylize_small_button
from utils.ui_constants import DARK_BG, DARK_PANEL, DECK_LIST_COLUMNS, GOLD_TEXT, LIGHT_TEXT, SUBDUED_TEXT
from widgets.dialogs.confirm_dialog import confirm
from widgets.dialogs.create_deck_dialog import CreateDeckDialog
from widgets.panels.all_cards_panel import CARD_TEXT_FIELDS, CARD_TOGGLES, read_card_filters
from widgets.panels.card_grid_panel import CardGridPanel
from widgets.panels.card_viewer_panel import CardViewerPanel, DeckActions
from widgets.panels.filter_panel import FilterPanel

if TYPE_CHECKING:
    from controllers.app_controller import AppController


class DeckEntryList(wx.Panel):
    """Main or evolve deck list with +, - and remove buttons."""

    def __init__(
        self,
        parent: wx.Window,
        title: str,
        on_increase: Callable[[DeckEntry], None],
        on_decrease: Callable[[DeckEntry], None],
        on_remove: Callable[[DeckEntry], None],
        on_select: Callable[[CardData], None],
    ) -> None:
        super().__init__(parent)
        self.SetBackgroundColour(DARK_PANEL)
        self.title = title
        self.entries: list[DeckEntry] = []
        self._on_select = on_select

        sizer = wx.BoxSizer(wx.VERTICAL)
        self.SetSizer(sizer)

        header = wx.BoxSizer(wx.HORIZONTAL)
        self.title_label = wx.StaticText(self, label=title)
        stylize_label(self.title_label, subtle=True)
        header.Add(self.title_label, 1, wx.ALIGN_CENTER_VERTICAL)
        for text, handler in (("+", on_increase), ("−", on_decrease), ("✕", on_remove)):
            btn = wx.Button(self, label=text, style=wx.BU_EXACTFIT)
            stylize_small_button(btn)
            btn.Bind(wx.EVT_BUTTON, lambda _evt, h=handler: self._run(h))
            header.Add(btn, 0, wx.LEFT, 2)
        sizer.Add(header, 0, wx.EXPAND | wx.BOTTOM, 2)

        self.list_ctrl = dv.DataViewListCtrl(self, style=dv.DV_ROW_LINES | dv.DV_SINGLE)
        for column_title, width in DECK_LIST_COLUMNS:
            self.list_ctrl.AppendTextColumn(column_title, width=width)
        stylize_dataview(self.list_ctrl)
        self.list_ctrl.Bind(dv.EVT_DATAVIEW_SELECTION_CHANGED, self._on_selection_changed)
        sizer.Add(self.list_ctrl, 1, wx.EXPAND)

    def set_entries(self, entries: list[DeckEntry], count: int) -> None:
        selected = self.selected_entry()
        self.entries = sorted(entries, key=lambda e: (e.card.name.lower(), e.card.card_number))
        self.list_ctrl.Freeze()
        try:
            self.list_ctrl.DeleteAllItems()
            for entry in self.entries:
                self.list_ctrl.AppendItem([str(entry.quantity), entry.card.display_name, entry.card.card_number])
        finally:
            self.list_ctrl.Thaw()
        self.title_label.SetLabel(f"{self.title} ({count})")
        if selected is not None and selected in self.entries:
            self.list_ctrl.SelectRow(self.entries.index(selected))

    def selected_entry(self) -> DeckEntry | None:
        row = self.list_ctrl.GetSelectedRow()
        if row == wx.NOT_FOUND or not 0 <= row < len(self.entries):
            return None
        return self.entries[row]

    def _run(self, handler: Callable[[DeckEntry], None]) -> None:
        entry = self.selected_entry()
        if entry is not None:
            handler(entry)

    def _on_selection_changed(self, _event: dv.DataViewEvent) -> None:
        entry = self.selected_entry()
        if entry is not None:
            self._on_select(entry.card)


class DeckBuilderPanel(wx.Panel):
    """Deck list management, a filterable card grid and the current deck's contents."""

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
        self.deck_service = controller.deck_service
        self.filters: CardFilters = controller.search_service.build_card_filters(
            controller.cards, controller.current_deck
        )

        self._filter_timer = wx.Timer(self)
        self.Bind(wx.EVT_TIMER, lambda _evt: self.apply_filters(), self._filter_timer)

        self._build_ui()

    @property
    def deck(self) -> Deck | None:
        return self.controller.current_deck

    # ============= Layout =============

    def _build_ui(self) -> None:
        outer = wx.BoxSizer(wx.VERTICAL)
        self.SetSizer(outer)
        outer.Add(self._build_deck_bar(), 0, wx.EXPAND | wx.ALL, 6)

        body = wx.BoxSizer(wx.HORIZONTAL)
        outer.Add(body, 1, wx.EXPAND)

        self.filter_panel = FilterPanel(
            self,
            on_change=self._schedule_filter,
            text_fields=CARD_TEXT_FIELDS,
            toggles=CARD_TOGGLES,
            groups=self.filters.groups(),
        )
        self.filter_panel.SetMinSize((210, -1))
        body.Add(self.filter_panel, 0, wx.EXPAND | wx.ALL, 6)

        self.grid = CardGridPanel(
            self,
            on_select=self._show_card,
            on_activate=self._add_card,
            extra_column=("In Deck", lambda card: str(self.deck_service.in_deck_quantity(card, self.deck))),
        )
        body.Add(self.grid, 1, wx.EXPAND | wx.ALL, 6)

        body.Add(self._build_deck_column(), 0, wx.EXPAND | wx.ALL, 6)

        self.viewer = CardViewerPanel(
            self,
            on_card_changed=self._on_card_changed,
            request_related=self._show_related,
            request_versions=self._show_versions,
            count_versions=self.controller.count_versions,
            deck_actions=DeckActions(
                can_add=lambda card: self.deck_service.can_add_card(card, self.deck),
                add=lambda card: self._deck_changed(self.deck_service.try_add_card(card, self.deck)),
                can_increase=lambda card: self.deck_service.can_increase_card(card, self.deck),
                increase=lambda card: self._deck_changed(self.deck_service.increase_card(card, self.deck)),
                decrease=lambda card: self._deck_changed(self.deck_service.decrease_card(card, self.deck)),
                can_glory=lambda card: self.deck_service.can_set_or_move_glory(card, self.deck),
                glory=lambda card: self._deck_changed(self.deck_service.set_or_move_glory(card, self.deck)),
                in_deck=lambda card: self.deck_service.in_deck_quantity(card, self.deck),
            ),
        )
        body.Add(self.viewer, 0, wx.EXPAND | wx.ALL, 6)

    def _build_deck_bar(self) -> wx.BoxSizer:
        bar = wx.BoxSizer(wx.HORIZONTAL)
        caption = wx.StaticText(self, label="Deck:")
        stylize_label(caption)
        bar.Add(caption, 0, wx.ALIGN_CENTER_VERTICAL | wx.RIGHT, 6)

        self.deck_choice = wx.Choice(self, size=(260, -1))
        self.deck_choice.Bind(wx.EVT_CHOICE, self._on_deck_chosen)
        bar.Add(self.deck_choice, 0, wx.RIGHT, 6)

        for label, handler in (
            ("New Deck", self._on_new_deck),
            ("Rename", self._on_rename_deck),
            ("Delete", self._on_delete_deck),
            ("Copy List", self._on_copy_deck),
        ):
            btn = wx.Button(self, label=label)
            stylize_button(btn)
            btn.Bind(wx.EVT_BUTTON, handler)
            bar.Add(btn, 0, wx.RIGHT, 4)

        bar.AddStretchSpacer(1)
        self.summary_label = wx.StaticText(self, label="")
        self.summary_label.SetForegroundColour(SUBDUED_TEXT)
        bar.Add(self.summary_label, 0, wx.ALIGN_CENTER_VERTICAL)
        return bar

    def _build_deck_column(self) -> wx.Panel:
        column = wx.Panel(self)
        column.SetBackgroundColour(DARK_PANEL)
        column.SetMinSize((320, -1))
        sizer = wx.BoxSizer(wx.VERTICAL)
        column.SetSizer(sizer)

        self.leader_label = wx.StaticText(column, label="")
        self.leader_label.SetForegroundColour(LIGHT_TEXT)
        sizer.Add(self.leader_label, 0, wx.ALL, 4)

        leader_row = wx.BoxSizer(wx.HORIZONTAL)
        self.clear_leader_btn = wx.Button(column, label="Clear Leaders")
        stylize_button(self.clear_leader_btn)
        self.clear_leader_btn.Bind(wx.EVT_BUTTON, self._on_clear_leaders)
        leader_row.Add(self.clear_leader_btn, 0)
        sizer.Add(leader_row, 0, wx.LEFT | wx.BOTTOM, 4)

        self.glory_label = wx.StaticText(column, label="")
        self.glory_label.SetForegroundColour(GOLD_TEXT)
        sizer.Add(self.glory_label, 0, wx.ALL, 4)

        self.main_list = DeckEntryList(
            column,
            "Main Deck",
            on_increase=lambda e: self._deck_changed(self.deck_service.increase_quantity(e, self.deck, False)),
            on_decrease=lambda e: self._deck_changed(self.deck_service.decrease_quantity(e, self.deck, False)),
            on_remove=lambda e: self._deck_changed(self.deck_service.remove_entry(e, self.deck, False)),
            on_select=self._show_card,
        )
        sizer.Add(self.main_list, 2, wx.EXPAND | wx.ALL, 4)

        self.evolve_list = DeckEntryList(
            column,
            "Evolve Deck",
            on_increase=lambda e: self._deck_changed(self.deck_service.increase_quantity(e, self.deck, True)),
            on_decrease=lambda e: self._deck_changed(self.deck_service.decrease_quantity(e, self.deck, True)),
            on_remove=lambda e: self._deck_changed(self.deck_service.remove_entry(e, self.deck, True)),
            on_select=self._show_card,
        )
        sizer.Add(self.evolve_list, 1, wx.EXPAND | wx.ALL, 4)
        return column

    # ============= Refresh =============

    def refresh_cards(self) -> None:
        self.controller.search_service.refresh_card_filters(self.filters, self.controller.cards, self.deck)
        self.filter_panel.refresh_groups()
        self.apply_filters()

    def refresh_decks(self) -> None:
        """Redraw the deck choice, deck contents, summary and in-deck column."""
        decks = self.controller.decks
        self.deck_choice.Set([f"{d.name} [{d.deck_type.label}]" for d in decks])
        if self.deck in decks:
            self.deck_choice.SetSelection(decks.index(self.deck))

        self.filters.in_deck.rebuild(self.controller.search_service.in_deck_options(self.deck))
        self.filter_panel.refresh_groups()
        self._refresh_deck_contents()
        self.grid.refresh_rows()
        self.viewer.refresh()

    def _refresh_deck_contents(self) -> None:
        deck = self.deck
        summary = self.deck_service.deck_summary(deck)
        if deck is None:
            self.leader_label.SetLabel("No deck selected")
            self.glory_label.SetLabel("")
            self.main_list.set_entries([], 0)
            self.evolve_list.set_entries([], 0)
            self.summary_label.SetLabel("")
            self.clear_leader_btn.Enable(False)
            return

        leaders = ", ".join(f"{c.name} ({c.card_number})" for c in deck.leaders) or "none"
        classes = deck.class1 + (f" / {deck.class2}" if deck.class2 else "")
        self.leader_label.SetLabel(f"{classes}  Leader: {leaders}")
        self.clear_leader_btn.Enable(bool(deck.leaders))
        if deck.glory_card is not None:
            self.glory_label.SetLabel(f"Glory Card: {deck.glory_card.name} ({deck.glory_card.card_number})")
        else:
            self.glory_label.SetLabel("")
        self.main_list.set_entries(deck.main_deck, summary.main_count)
        self.evolve_list.set_entries(deck.evolve_deck, summary.evolve_count)

        self.summary_label.SetLabel(
            f"Main {summary.main_count}  Evolve {summary.evolve_count}  {summary.validity_text}"
        )
        self.summary_label.SetForegroundColour(LIGHT_TEXT if summary.is_valid else GOLD_TEXT)
        self.summary_label.SetToolTip(summary.tooltip)
        self.Layout()

    def apply_filters(self) -> None:
        read_card_filters(self.filter_panel, self.filters)
        results = self.controller.search_service.filter_deck_candidates(self.controller.cards, self.filters, self.deck)
        self.grid.set_cards(results)

    def refresh_viewer(self) -> None:
        self.grid.refresh_rows()
        self.viewer.refresh()

    def _schedule_filter(self) -> None:
        if self._filter_timer.IsRunning():
            self._filter_timer.Stop()
        self._filter_timer.StartOnce(self._FILTER_DEBOUNCE_MS)

    # ============= Deck Edits =============

    def _deck_changed(self, changed: bool) -> bool:
        return self.controller.apply_deck_change(changed)

    def _add_card(self, card: CardData) -> None:
        if self.deck is None:
            self.controller.set_status("Create or select a deck first.")
            return
        if not self._deck_changed(self.deck_service.try_add_card(card, self.deck)):
            self.controller.set_status(f"Cannot add '{card.name}' to {self.deck.name}.")

    def _on_clear_leaders(self, _event: wx.CommandEvent) -> None:
        deck = self.deck
        if deck is None:
            return
        changed = False
        for leader in list(deck.leaders):
            changed = self.deck_service.clear_leader(leader, deck) or changed
        self._deck_changed(changed)

    # ============= Deck Management =============

    def _on_deck_chosen(self, _event: wx.CommandEvent) -> None:
        index = self.deck_choice.GetSelection()
        if 0 <= index < len(self.controller.decks):
            self.controller.select_deck(self.controller.decks[index])
            self.apply_filters()

    def _on_new_deck(self, _event: wx.CommandEvent) -> None:
        wizard = self.controller.new_deck_wizard()
        if not wizard.available_classes:
            wx.MessageBox("Load card data before creating a deck.", "New Deck", wx.OK | wx.ICON_INFORMATION)
            return
        dialog = CreateDeckDialog(self, wizard)
        try:
            if dialog.ShowModal() == wx.ID_OK:
                self.controller.create_deck(wizard)
                self.apply_filters()
        finally:
            dialog.Destroy()

    def _on_rename_deck(self, _event: wx.CommandEvent) -> None:
        deck = self.deck
        if deck is None:
            return
        dialog = wx.TextEntryDialog(self, "Deck name:", "Rename Deck", deck.name)
        try:
            if dialog.ShowModal() == wx.ID_OK and not self.controller.rename_deck(deck, dialog.GetValue()):
                self.controller.set_status("Deck name cannot be empty.")
        finally:
            dialog.Destroy()

    def _on_delete_deck(self, _event: wx.CommandEvent) -> None:
        deck = self.deck
        if deck is None:
            return
        if confirm(self, f"Delete deck '{deck.name}'?", "Delete Deck"):
            self.controller.delete_deck(deck)
            self.apply_filters()

    def _on_copy_deck(self, _event: wx.CommandEvent) -> None:
        text = self.controller.deck_text()
        if not text:
            return
        if wx.TheClipboard.Open():
            try:
                wx.TheClipboard.SetData(wx.TextDataObject(text))
            finally:
                wx.TheClipboard.Close()
            self.controller.set_status("Deck list copied to clipboard.")
        else:
            logger.warning("Clipboard unavailable; deck list not copied")

    # ============= Viewer =============

    def _show_card(self, card: CardData | None) -> None:
        self.viewer.set_card(card)

    def _on_card_changed(self, _card: CardData) -> None:
        self.grid.refresh_rows()
        self._on_collection_edited()

    def _show_related(self, card: CardData) -> None:
        related = self.controller.related_cards_for(card)
        if related:
            self.viewer.set_cards(related)

    def _show_versions(self, card: CardData) -> None:
        versions, index = self.controller.other_versions_for(card)
        if versions:
            self.viewer.set_cards(versions, index)


__all__ = ["DeckBuilderPanel", "DeckEntryList"]
