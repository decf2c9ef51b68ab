from __future__ import annotations

from typing import TYPE_CHECKING

import wx
from loguru import logger

from utils.ui_constants import TAB_TITLES
from widgets.dialogs.add_remove_cards_dialog import show_add_remove_cards_dialog
from widgets.dialogs.confirm_dialog import show_error

if TYPE_CHECKING:
    from widgets.app_frame import AppFrame


class AppEventHandlers:
    """Menu, notebook and window events of the main frame."""

    # ------------------------------------------------------------------ Menu: File ------------------------------------------------------------
    def on_load_csv_folder(self: AppFrame, _event: wx.CommandEvent | None = None) -> None:
        folder = self._choose_folder("Select folder containing card CSV files", self.controller.settings.last_csv_folder)
        self.controller.import_csv_folder(folder)

    def on_load_images(self: AppFrame, _event: wx.CommandEvent | None = None) -> None:
        folder = self._choose_folder("Select folder containing card images", self.controller.settings.last_image_folder)
        self.controller.import_images(folder)

    def on_save(self: AppFrame, _event: wx.CommandEvent | None = None) -> None:
        if not self.controller.save_all():
            show_error(self, self.controller.status, "Save Failed")

    def on_exit(self: AppFrame, _event: wx.CommandEvent | None = None) -> None:
        self.Close()

    def _choose_folder(self: AppFrame, message: str, default_path: str = "") -> str | None:
        dialog = wx.DirDialog(self, message, defaultPath=default_path or "", style=wx.DD_DEFAULT_STYLE | wx.DD_DIR_MUST_EXIST)
        try:
            if dialog.ShowModal() != wx.ID_OK:
                return None
            return dialog.GetPath()
        finally:
            dialog.Destroy()

    # ------------------------------------------------------------------ Menu: Tools -----------------------------------------------------------
    def on_add_remove_cards(self: AppFrame, _event: wx.CommandEvent | None = None) -> None:
        if not self.controller.cards:
            self.set_status("Load card data first.")
            return
        deltas = show_add_remove_cards_dialog(self, self.controller.cards, self.controller.search_service)
        if deltas:
            self.controller.apply_quantity_changes(deltas)

    def on_find_relations(self: AppFrame, _event: wx.CommandEvent | None = None) -> None:
        if self.controller.finding_relations:
            self.set_status("Already finding card relations...")
            return
        self.controller.find_card_relations()

    # ------------------------------------------------------------------ Notebook / window -----------------------------------------------------
    def on_page_changed(self: AppFrame, event: wx.Event) -> None:
        self._refresh_stale_page()
        event.Skip()

    def on_close(self: AppFrame, event: wx.CloseEvent) -> None:
        size = self.GetSize()
        try:
            self.controller.shutdown(window_size=(size.width, size.height), selected_tab=self.selected_tab_name())
        except Exception:
            logger.exception("Error while shutting down")
        event.Skip()

    def on_key_press(self: AppFrame, event: wx.KeyEvent) -> None:
        if event.ControlDown() and event.GetKeyCode() == ord("S"):
            self.on_save()
            return
        event.Skip()

    def selected_tab_name(self: AppFrame) -> str:
        index = self.notebook.GetSelection()
        names = list(TAB_TITLES)
        return names[index] if 0 <= index < len(names) else names[0]


__all__ = ["AppEventHandlers"]
