"""
Filter Panel - Pattern fields, toggles and multi-select groups for the card grids.

Every change calls ``on_change`` so the owning panel can re-run its filter.
"""

from collections.abc import Callable

import wx

from utils.search_filters import FilterGroup
from utils.stylize import (
    stylize_checkbox,
    stylize_checklistbox,
    stylize_label,
    stylize_small_button,
    stylize_textctrl,
)
from utils.ui_constants import DARK_PANEL


class FilterGroupBox(wx.Panel):
    """A check list bound to a FilterGroup, with All / None buttons."""

    def __init__(self, parent: wx.Window, title: str, group: FilterGroup, on_change: Callable[[], None]):
        super().__init__(parent)
        self.SetBackgroundColour(DARK_PANEL)
        self.group = group
        self._on_change = on_change

        sizer = wx.BoxSizer(wx.VERTICAL)
        self.SetSizer(sizer)

        header = wx.BoxSizer(wx.HORIZONTAL)
        label = wx.StaticText(self, label=title)
        stylize_label(label, subtle=True)
        header.Add(label, 1, wx.ALIGN_CENTER_VERTICAL)
        for text, handler in (("All", self._select_all), ("None", self._clear_all)):
            btn = wx.Button(self, label=text, style=wx.BU_EXACTFIT)
            stylize_small_button(btn)
            btn.Bind(wx.EVT_BUTTON, handler)
            header.Add(btn, 0, wx.LEFT, 2)
        sizer.Add(header, 0, wx.EXPAND | wx.BOTTOM, 2)

        self.check_list = wx.CheckListBox(self, size=(-1, 90))
        stylize_checklistbox(self.check_list)
        self.check_list.Bind(wx.EVT_CHECKLISTBOX, self._on_item_toggled)
        sizer.Add(self.check_list, 1, wx.EXPAND)

        self.refresh()

    def set_group(self, group: FilterGroup) -> None:
        self.group = group
        self.refresh()

    def refresh(self) -> None:
        self.check_list.Set(self.group.names)
        for index, item in enumerate(self.group.items):
            self.check_list.Check(index, item.checked)

    def _on_item_toggled(self, event: wx.CommandEvent) -> None:
        index = event.GetInt()
        if 0 <= index < len(self.group.items):
            self.group.items[index].checked = self.check_list.IsChecked(index)
        self._on_change()

    def _select_all(self, _event: wx.CommandEvent) -> None:
        self.group.select_all()
        self.refresh()
        self._on_change()

    def _clear_all(self, _event: wx.CommandEvent) -> None:
        self.group.clear_all()
        self.refresh()
        self._on_change()


class FilterPanel(wx.ScrolledWindow):
    """Stack of pattern text fields, toggles and filter group boxes."""

    def __init__(
        self,
        parent: wx.Window,
        on_change: Callable[[], None],
        text_fields: list[tuple[str, str]] | None = None,
        toggles: list[tuple[str, str]] | None = None,
        groups: dict[str, FilterGroup] | None = None,
    ):
        """
        Args:
            parent: Parent window
            on_change: Called after any filter edit
            text_fields: (key, label) pairs for pattern fields
            toggles: (key, label) pairs for check boxes
            groups: title -> FilterGroup
        """
        super().__init__(parent, style=wx.VSCROLL)
        self.SetBackgroundColour(DARK_PANEL)
        self.SetScrollRate(0, 8)
        self._on_change = on_change
        self.text_ctrls: dict[str, wx.TextCtrl] = {}
        self.toggle_ctrls: dict[str, wx.CheckBox] = {}
        self.group_boxes: dict[str, FilterGroupBox] = {}

        self._build_ui(text_fields or [], toggles or [], groups or {})

    def _build_ui(
        self,
        text_fields: list[tuple[str, str]],
        toggles: list[tuple[str, str]],
        groups: dict[str, FilterGroup],
    ) -> None:
        sizer = wx.BoxSizer(wx.VERTICAL)
        self.SetSizer(sizer)

        for key, label in text_fields:
            caption = wx.StaticText(self, label=label)
            stylize_label(caption, subtle=True)
            sizer.Add(caption, 0, wx.LEFT | wx.TOP, 4)
            ctrl = wx.TextCtrl(self)
            stylize_textctrl(ctrl)
            ctrl.SetHint("Regex or text")
            ctrl.Bind(wx.EVT_TEXT, lambda _evt: self._on_change())
            sizer.Add(ctrl, 0, wx.EXPAND | wx.ALL, 4)
            self.text_ctrls[key] = ctrl

        for key, label in toggles:
            box = wx.CheckBox(self, label=label)
            stylize_checkbox(box)
            box.Bind(wx.EVT_CHECKBOX, lambda _evt: self._on_change())
            sizer.Add(box, 0, wx.ALL, 4)
            self.toggle_ctrls[key] = box

        for title, group in groups.items():
            box = FilterGroupBox(self, title, group, self._on_change)
            sizer.Add(box, 0, wx.EXPAND | wx.ALL, 4)
            self.group_boxes[title] = box

    def text(self, key: str) -> str:
        ctrl = self.text_ctrls.get(key)
        return ctrl.GetValue() if ctrl else ""

    def toggled(self, key: str) -> bool:
        ctrl = self.toggle_ctrls.get(key)
        return bool(ctrl and ctrl.GetValue())

    def set_toggle(self, key: str, value: bool) -> None:
        ctrl = self.toggle_ctrls.get(key)
        if ctrl:
            ctrl.SetValue(value)

    def set_groups(self, groups: dict[str, FilterGroup]) -> None:
        for title, group in groups.items():
            box = self.group_boxes.get(title)
            if box:
                box.set_group(group)
        self.FitInside()

    def refresh_groups(self) -> None:
        for box in self.group_boxes.values():
            box.refresh()
        self.FitInside()


__all__ = ["FilterGroupBox", "FilterPanel"]
