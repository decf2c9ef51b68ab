"""Three-step dialog for creating a deck: format, classes, then name."""

from __future__ import annotations

import wx

from models.deck import DeckType
from services.deck_service import DeckWizard
from utils.constants import DARK_ALT, DARK_BG, LIGHT_TEXT, SUBDUED_TEXT

_DECK_TYPE_HELP = {
    DeckType.STANDARD: "One class plus Neutral. 40-50 cards, up to 3 copies each.",
    DeckType.GLORYFINDER: "Any class. 50 singleton cards, plus one glory card of the deck's class.",
    DeckType.CROSSCRAFT: "Two different classes plus Neutral, with a leader for each class.",
}


class CreateDeckDialog(wx.Dialog):
    """Wizard dialog that edits a DeckWizard; the caller creates the deck on wx.ID_OK."""

    def __init__(self, parent: wx.Window, wizard: DeckWizard) -> None:
        super().__init__(parent, title="New Deck", size=(460, 360))
        self.wizard = wizard
        self.deck_types = list(DeckType)

        main_sizer = wx.BoxSizer(wx.VERTICAL)
        self.SetSizer(main_sizer)

        panel = wx.Panel(self)
        panel.SetBackgroundColour(DARK_BG)
        panel_sizer = wx.BoxSizer(wx.VERTICAL)
        panel.SetSizer(panel_sizer)
        main_sizer.Add(panel, 1, wx.EXPAND)

        self.step_label = wx.StaticText(panel, label="")
        self.step_label.SetForegroundColour(SUBDUED_TEXT)
        panel_sizer.Add(self.step_label, 0, wx.ALL, 8)

        self.book = wx.Simplebook(panel)
        self.book.SetBackgroundColour(DARK_BG)
        self.book.AddPage(self._build_type_page(self.book), "Format")
        self.book.AddPage(self._build_class_page(self.book), "Classes")
        self.book.AddPage(self._build_name_page(self.book), "Name")
        panel_sizer.Add(self.book, 1, wx.EXPAND | wx.LEFT | wx.RIGHT, 8)

        buttons = wx.BoxSizer(wx.HORIZONTAL)
        self.back_btn = wx.Button(panel, label="< Back")
        self.next_btn = wx.Button(panel, label="Next >")
        self.finish_btn = wx.Button(panel, wx.ID_OK, label="Create")
        cancel_btn = wx.Button(panel, wx.ID_CANCEL, label="Cancel")
        self.back_btn.Bind(wx.EVT_BUTTON, self._on_back)
        self.next_btn.Bind(wx.EVT_BUTTON, self._on_next)
        self.finish_btn.Bind(wx.EVT_BUTTON, self._on_finish)
        buttons.AddStretchSpacer(1)
        for btn in (self.back_btn, self.next_btn, self.finish_btn, cancel_btn):
            buttons.Add(btn, 0, wx.LEFT, 4)
        panel_sizer.Add(buttons, 0, wx.EXPAND | wx.ALL, 8)

        self._sync()
        self.CentreOnParent()

    # ============= Pages =============

    def _build_type_page(self, parent: wx.Window) -> wx.Panel:
        page = wx.Panel(parent)
        page.SetBackgroundColour(DARK_BG)
        sizer = wx.BoxSizer(wx.VERTICAL)
        page.SetSizer(sizer)

        self.type_radio = wx.RadioBox(
            page,
            label="Deck format",
            choices=[t.label for t in self.deck_types],
            majorDimension=1,
            style=wx.RA_SPECIFY_COLS,
        )
        self.type_radio.SetForegroundColour(LIGHT_TEXT)
        self.type_radio.SetSelection(self.deck_types.index(self.wizard.deck_type))
        self.type_radio.Bind(wx.EVT_RADIOBOX, self._on_type_changed)
        sizer.Add(self.type_radio, 0, wx.EXPAND | wx.ALL, 4)

        self.type_help = wx.StaticText(page, label="")
        self.type_help.SetForegroundColour(SUBDUED_TEXT)
        sizer.Add(self.type_help, 0, wx.ALL, 4)
        return page

    def _build_class_page(self, parent: wx.Window) -> wx.Panel:
        page = wx.Panel(parent)
        page.SetBackgroundColour(DARK_BG)
        sizer = wx.FlexGridSizer(cols=2, hgap=8, vgap=8)

        classes = self.wizard.available_classes
        label1 = wx.StaticText(page, label="Class")
        label1.SetForegroundColour(LIGHT_TEXT)
        self.class1_choice = wx.Choice(page, choices=classes)
        self.class1_choice.Bind(wx.EVT_CHOICE, self._on_class_changed)
        self.class2_label = wx.StaticText(page, label="Second class")
        self.class2_label.SetForegroundColour(LIGHT_TEXT)
        self.class2_choice = wx.Choice(page, choices=classes)
        self.class2_choice.Bind(wx.EVT_CHOICE, self._on_class_changed)
        for ctrl in (label1, self.class1_choice, self.class2_label, self.class2_choice):
            sizer.Add(ctrl, 0, wx.ALIGN_CENTER_VERTICAL)

        outer = wx.BoxSizer(wx.VERTICAL)
        outer.Add(sizer, 0, wx.ALL, 8)
        self.class_error = wx.StaticText(page, label="")
        self.class_error.SetForegroundColour(SUBDUED_TEXT)
        outer.Add(self.class_error, 0, wx.ALL, 8)
        page.SetSizer(outer)
        return page

    def _build_name_page(self, parent: wx.Window) -> wx.Panel:
        page = wx.Panel(parent)
        page.SetBackgroundColour(DARK_BG)
        sizer = wx.BoxSizer(wx.VERTICAL)
        page.SetSizer(sizer)

        label = wx.StaticText(page, label="Deck name")
        label.SetForegroundColour(LIGHT_TEXT)
        sizer.Add(label, 0, wx.ALL, 4)
        self.name_ctrl = wx.TextCtrl(page)
        self.name_ctrl.SetBackgroundColour(DARK_ALT)
        self.name_ctrl.SetForegroundColour(LIGHT_TEXT)
        self.name_ctrl.Bind(wx.EVT_TEXT, self._on_name_changed)
        sizer.Add(self.name_ctrl, 0, wx.EXPAND | wx.ALL, 4)
        return page

    # ============= State =============

    def _sync(self) -> None:
        wizard = self.wizard
        self.book.SetSelection(wizard.current_step - 1)
        self.step_label.SetLabel(f"Step {wizard.current_step} of {DeckWizard.LAST_STEP}")
        self.type_help.SetLabel(_DECK_TYPE_HELP[wizard.deck_type])
        self.class2_label.Show(wizard.needs_two_classes)
        self.class2_choice.Show(wizard.needs_two_classes)
        if wizard.current_step == 2 and not wizard.is_class_selection_valid() and wizard.class1:
            self.class_error.SetLabel("Pick two different classes.")
        else:
            self.class_error.SetLabel("")

        self.back_btn.Enable(wizard.can_go_back)
        self.next_btn.Enable(wizard.can_go_next)
        self.finish_btn.Enable(wizard.can_finish)
        self.Layout()

    def _selected_class(self, choice: wx.Choice) -> str | None:
        index = choice.GetSelection()
        return self.wizard.available_classes[index] if index != wx.NOT_FOUND else None

    def _on_type_changed(self, _event: wx.CommandEvent) -> None:
        self.wizard.deck_type = self.deck_types[self.type_radio.GetSelection()]
        self.class1_choice.SetSelection(wx.NOT_FOUND)
        self.class2_choice.SetSelection(wx.NOT_FOUND)
        self._sync()

    def _on_class_changed(self, _event: wx.CommandEvent) -> None:
        self.wizard.class1 = self._selected_class(self.class1_choice)
        self.wizard.class2 = self._selected_class(self.class2_choice)
        self._sync()

    def _on_name_changed(self, _event: wx.CommandEvent) -> None:
        self.wizard.deck_name = self.name_ctrl.GetValue()
        self.finish_btn.Enable(self.wizard.can_finish)

    def _on_next(self, _event: wx.CommandEvent) -> None:
        self.wizard.go_next()
        if self.wizard.current_step == DeckWizard.LAST_STEP:
            self.name_ctrl.ChangeValue(self.wizard.deck_name)
        self._sync()

    def _on_back(self, _event: wx.CommandEvent) -> None:
        self.wizard.go_back()
        self._sync()

    def _on_finish(self, event: wx.CommandEvent) -> None:
        if self.wizard.can_finish:
            event.Skip()


__all__ = ["CreateDeckDialog"]
