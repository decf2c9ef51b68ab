"""
Card Viewer Panel - Image, details and per-card actions.

Shows one card at a time out of a list (a selection, its related cards or its
other printings) and exposes owned-quantity, favorite and wishlist controls.
When deck actions are supplied the viewer also offers deck add/remove buttons.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import wx

from models.card import CardData
from services.collection_service import CollectionService
from utils.card_display import extract_set_name, quantity_category, rarity_abbreviation
from utils.stylize import (
    stylize_button,
    stylize_checkbox,
    stylize_label,
    stylize_owned_label,
    stylize_small_button,
    stylize_textctrl,
)
from utils.ui_constants import CARD_IMAGE_SIZE, DARK_PANEL, LIGHT_TEXT, SUBDUED_TEXT
from widgets.card_image_display import CardImageDisplay


@dataclass
class DeckActions:
    """Deck-builder hooks for the viewer; every callable receives the current card."""

    can_add: Callable[[CardData], bool]
    add: Callable[[CardData], bool]
    can_increase: Callable[[CardData], bool]
    increase: Callable[[CardData], bool]
    decrease: Callable[[CardData], bool]
    can_glory: Callable[[CardData], bool]
    glory: Callable[[CardData], bool]
    in_deck: Callable[[CardData], int]


class CardViewerPanel(wx.Panel):
    """Panel that shows a card and its collection controls."""

    def __init__(
        self,
        parent: wx.Window,
        on_card_changed: Callable[[CardData], None],
        request_related: Callable[[CardData], None],
        request_versions: Callable[[CardData], None],
        count_versions: Callable[[CardData], int],
        deck_actions: DeckActions | None = None,
    ):
        super().__init__(parent)
        self.SetBackgroundColour(DARK_PANEL)
        self._on_card_changed = on_card_changed
        self._request_related = request_related
        self._request_versions = request_versions
        self._count_versions = count_versions
        self.deck_actions = deck_actions

        self.cards: list[CardData] = []
        self.current_index = 0

        self._build_ui()
        self._update_display()

    # ============= Layout =============

    def _build_ui(self) -> None:
        sizer = wx.BoxSizer(wx.VERTICAL)
        self.SetSizer(sizer)

        self.image_display = CardImageDisplay(self, *CARD_IMAGE_SIZE)
        sizer.Add(self.image_display, 0, wx.ALIGN_CENTER_HORIZONTAL | wx.ALL, 4)

        nav = wx.BoxSizer(wx.HORIZONTAL)
        self.prev_btn = self._small_button("◀", lambda _evt: self.go_previous())
        self.position_label = wx.StaticText(self, label="")
        self.position_label.SetForegroundColour(SUBDUED_TEXT)
        self.next_btn = self._small_button("▶", lambda _evt: self.go_next())
        nav.Add(self.prev_btn, 0)
        nav.Add(self.position_label, 1, wx.ALIGN_CENTER_VERTICAL | wx.LEFT | wx.RIGHT, 6)
        nav.Add(self.next_btn, 0)
        sizer.Add(nav, 0, wx.EXPAND | wx.LEFT | wx.RIGHT, 4)

        self.title_label = wx.StaticText(self, label="")
        stylize_label(self.title_label)
        self.title_label.SetBackgroundColour(DARK_PANEL)
        sizer.Add(self.title_label, 0, wx.ALL, 4)

        self.details = wx.TextCtrl(self, style=wx.TE_MULTILINE | wx.TE_READONLY | wx.TE_WORDWRAP, size=(-1, 140))
        stylize_textctrl(self.details, multiline=True)
        sizer.Add(self.details, 1, wx.EXPAND | wx.ALL, 4)

        owned_row = wx.BoxSizer(wx.HORIZONTAL)
        owned_caption = wx.StaticText(self, label="Owned:")
        owned_caption.SetForegroundColour(LIGHT_TEXT)
        self.owned_minus = self._small_button("−", lambda _evt: self._adjust_owned(-1))
        self.owned_label = wx.StaticText(self, label="0")
        self.owned_label.SetForegroundColour(LIGHT_TEXT)
        self.owned_plus = self._small_button("+", lambda _evt: self._adjust_owned(1))
        self.favorite_box = wx.CheckBox(self, label="Favorite")
        stylize_checkbox(self.favorite_box)
        self.favorite_box.Bind(wx.EVT_CHECKBOX, self._on_favorite_toggled)
        owned_row.Add(owned_caption, 0, wx.ALIGN_CENTER_VERTICAL | wx.RIGHT, 4)
        owned_row.Add(self.owned_minus, 0)
        owned_row.Add(self.owned_label, 0, wx.ALIGN_CENTER_VERTICAL | wx.LEFT | wx.RIGHT, 6)
        owned_row.Add(self.owned_plus, 0)
        owned_row.AddStretchSpacer(1)
        owned_row.Add(self.favorite_box, 0, wx.ALIGN_CENTER_VERTICAL)
        sizer.Add(owned_row, 0, wx.EXPAND | wx.ALL, 4)

        wish_row = wx.BoxSizer(wx.HORIZONTAL)
        self.wishlist_box = wx.CheckBox(self, label="Wishlist")
        stylize_checkbox(self.wishlist_box)
        self.wishlist_box.Bind(wx.EVT_CHECKBOX, self._on_wishlist_toggled)
        self.wishlist_spin = wx.SpinCtrl(self, min=0, max=99, initial=0, size=(70, -1))
        self.wishlist_spin.Bind(wx.EVT_SPINCTRL, self._on_wishlist_quantity)
        wish_row.Add(self.wishlist_box, 0, wx.ALIGN_CENTER_VERTICAL)
        wish_row.Add(self.wishlist_spin, 0, wx.LEFT, 6)
        sizer.Add(wish_row, 0, wx.EXPAND | wx.ALL, 4)

        links = wx.BoxSizer(wx.HORIZONTAL)
        self.related_btn = self._small_button("Related", self._on_related)
        self.versions_btn = self._small_button("Versions", self._on_versions)
        links.Add(self.related_btn, 1, wx.RIGHT, 4)
        links.Add(self.versions_btn, 1)
        sizer.Add(links, 0, wx.EXPAND | wx.ALL, 4)

        if self.deck_actions is not None:
            sizer.Add(self._build_deck_row(), 0, wx.EXPAND | wx.ALL, 4)

    def _build_deck_row(self) -> wx.BoxSizer:
        row = wx.BoxSizer(wx.HORIZONTAL)
        self.add_btn = wx.Button(self, label="Add to Deck")
        stylize_button(self.add_btn)
        self.add_btn.Bind(wx.EVT_BUTTON, lambda _evt: self._run_deck_action(self.deck_actions.add))
        self.deck_minus = self._small_button("−", lambda _evt: self._run_deck_action(self.deck_actions.decrease))
        self.in_deck_label = wx.StaticText(self, label="0")
        self.in_deck_label.SetForegroundColour(LIGHT_TEXT)
        self.deck_plus = self._small_button("+", lambda _evt: self._run_deck_action(self.deck_actions.increase))
        self.glory_btn = self._small_button("Glory", lambda _evt: self._run_deck_action(self.deck_actions.glory))
        row.Add(self.add_btn, 1, wx.RIGHT, 6)
        row.Add(self.deck_minus, 0)
        row.Add(self.in_deck_label, 0, wx.ALIGN_CENTER_VERTICAL | wx.LEFT | wx.RIGHT, 6)
        row.Add(self.deck_plus, 0, wx.RIGHT, 6)
        row.Add(self.glory_btn, 0)
        return row

    def _small_button(self, label: str, handler: Callable[[wx.CommandEvent], None]) -> wx.Button:
        btn = wx.Button(self, label=label, style=wx.BU_EXACTFIT)
        stylize_small_button(btn)
        btn.Bind(wx.EVT_BUTTON, handler)
        return btn

    # ============= Public API =============

    @property
    def current_card(self) -> CardData | None:
        if 0 <= self.current_index < len(self.cards):
            return self.cards[self.current_index]
        return None

    def set_cards(self, cards: list[CardData], index: int = 0) -> None:
        self.cards = list(cards)
        self.current_index = max(0, min(index, len(self.cards) - 1)) if self.cards else 0
        self._update_display()

    def set_card(self, card: CardData | None) -> None:
        self.set_cards([card] if card else [])

    def go_previous(self) -> None:
        if self.cards:
            self.current_index = (self.current_index - 1) % len(self.cards)
            self._update_display()

    def go_next(self) -> None:
        if self.cards:
            self.current_index = (self.current_index + 1) % len(self.cards)
            self._update_display()

    def refresh(self) -> None:
        self._update_display()

    # ============= Display =============

    def _update_display(self) -> None:
        card = self.current_card
        has_card = card is not None
        multiple = len(self.cards) > 1
        self.prev_btn.Enable(multiple)
        self.next_btn.Enable(multiple)
        self.position_label.SetLabel(f"{self.current_index + 1} / {len(self.cards)}" if multiple else "")

        for ctrl in (self.owned_minus, self.owned_plus, self.favorite_box, self.wishlist_box, self.wishlist_spin):
            ctrl.Enable(has_card)

        if not has_card:
            self.image_display.show_placeholder("No card selected")
            self.title_label.SetLabel("")
            self.details.SetValue("")
            self.owned_label.SetLabel("0")
            stylize_owned_label(self.owned_label, "None")
            self.related_btn.Enable(False)
            self.versions_btn.Enable(False)
            self._update_deck_row(None)
            return

        self.image_display.show_image(card.image_file)
        self.title_label.SetLabel(f"{card.display_name}  [{card.card_number}]")
        self.details.SetValue(self._details_text(card))
        self.owned_label.SetLabel(str(card.quantity_owned))
        stylize_owned_label(self.owned_label, quantity_category(card.quantity_owned, card.copies_needed_for_playset))
        self.favorite_box.SetValue(card.is_favorite)
        self.wishlist_box.SetValue(card.is_wishlisted)
        self.wishlist_spin.SetValue(card.wishlist_desired_quantity)

        self.related_btn.SetLabel(f"Related ({len(card.related_cards)})")
        self.related_btn.Enable(bool(card.related_cards))
        versions = self._count_versions(card)
        self.versions_btn.SetLabel(f"Versions ({versions})")
        self.versions_btn.Enable(versions > 1)
        self._update_deck_row(card)
        self.Layout()

    def _update_deck_row(self, card: CardData | None) -> None:
        if self.deck_actions is None:
            return
        if card is None:
            for ctrl in (self.add_btn, self.deck_minus, self.deck_plus, self.glory_btn):
                ctrl.Enable(False)
            self.in_deck_label.SetLabel("0")
            return
        in_deck = self.deck_actions.in_deck(card)
        self.in_deck_label.SetLabel(str(in_deck))
        self.add_btn.Enable(self.deck_actions.can_add(card))
        self.deck_plus.Enable(self.deck_actions.can_increase(card))
        self.deck_minus.Enable(in_deck > 0)
        self.glory_btn.Enable(self.deck_actions.can_glory(card))

    @staticmethod
    def _details_text(card: CardData) -> str:
        lines = [
            f"Set: {extract_set_name(card.card_set)}",
            f"Rarity: {card.rarity} ({rarity_abbreviation(card.rarity)})",
            f"Class: {card.card_class}    Type: {card.card_type}",
        ]
        if card.traits:
            lines.append(f"Traits: {card.traits}")
        stats = [f"Cost {card.cost}" if card.cost else "", f"{card.attack}/{card.defense}" if card.attack else ""]
        stats = [s for s in stats if s]
        if stats:
            lines.append("    ".join(stats))
        if card.format:
            lines.append(f"Format: {card.format}")
        if card.text:
            lines.append("")
            lines.append(card.text)
        return "\n".join(lines)

    # ============= Handlers =============

    def _changed(self, card: CardData) -> None:
        self._update_display()
        self._on_card_changed(card)

    def _adjust_owned(self, delta: int) -> None:
        card = self.current_card
        if card is None:
            return
        CollectionService.adjust_quantity(card, delta)
        self._changed(card)

    def _on_favorite_toggled(self, _event: wx.CommandEvent) -> None:
        card = self.current_card
        if card is not None:
            if card.is_favorite != self.favorite_box.GetValue():
                CollectionService.toggle_favorite(card)
            self._changed(card)

    def _on_wishlist_toggled(self, _event: wx.CommandEvent) -> None:
        card = self.current_card
        if card is not None:
            CollectionService.set_wishlist(card, self.wishlist_box.GetValue())
            self._changed(card)

    def _on_wishlist_quantity(self, _event: wx.SpinEvent) -> None:
        card = self.current_card
        if card is not None:
            quantity = self.wishlist_spin.GetValue()
            CollectionService.set_wishlist(card, quantity > 0, quantity)
            self._changed(card)

    def _on_related(self, _event: wx.CommandEvent) -> None:
        card = self.current_card
        if card is not None:
            self._request_related(card)

    def _on_versions(self, _event: wx.CommandEvent) -> None:
        card = self.current_card
        if card is not None:
            self._request_versions(card)

    def _run_deck_action(self, action: Callable[[CardData], bool]) -> None:
        card = self.current_card
        if card is not None and action(card):
            self._update_display()


__all__ = ["CardViewerPanel", "DeckActions"]
