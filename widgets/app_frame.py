from typing import TYPE_CHECKING

import wx
from wx.lib.agw import flatnotebook as fnb

if TYPE_CHECKING:
    from controllers.app_controller import AppController

from utils.constants import (
    APP_TITLE,
    DARK_ACCENT,
    DARK_BG,
    DARK_PANEL,
    LIGHT_TEXT,
    SUBDUED_TEXT,
)
from utils.ui_constants import TAB_TITLES
from widgets.handlers.app_event_handlers import AppEventHandlers
from widgets.panels.all_cards_panel import AllCardsPanel
from widgets.panels.checklist_panel import ChecklistPanel
from widgets.panels.deck_builder_panel import DeckBuilderPanel
from widgets.panels.set_completion_panel import SetCompletionPanel


class AppFrame(AppEventHandlers, wx.Frame):
    """Main window: menu bar, four tabs and a status line."""

    def __init__(
        self,
        controller: "AppController",
        parent: wx.Window | None = None,
    ):
        settings = controller.settings
        super().__init__(parent, title=APP_TITLE, size=settings.window_size)

        # Store controller reference - ALL state and business logic goes through this
        self.controller: AppController = controller
        # Tabs whose content is out of date after an edit elsewhere
        self._stale_pages: set[str] = set()

        self._build_menu()
        self._build_ui()
        self.SetMinSize((900, 600))
        self.Centre(wx.BOTH)
        self._select_tab(settings.selected_tab)

        self.Bind(wx.EVT_CLOSE, self.on_close)
        self.Bind(wx.EVT_CHAR_HOOK, self.on_key_press)

    # ------------------------------------------------------------------ UI ------------------------------------------------------------------
    def _build_menu(self) -> None:
        menu_bar = wx.MenuBar()

        file_menu = wx.Menu()
        items = [
            (file_menu, "Load &CSV Folder...", self.on_load_csv_folder),
            (file_menu, "Load &Images...", self.on_load_images),
            (file_menu, "&Save\tCtrl+S", self.on_save),
        ]
        tools_menu = wx.Menu()
        items += [
            (tools_menu, "&Add/Remove Cards...", self.on_add_remove_cards),
            (tools_menu, "Find Card &Relations", self.on_find_relations),
        ]
        for menu, label, handler in items:
            item = menu.Append(wx.ID_ANY, label)
            self.Bind(wx.EVT_MENU, handler, item)
        file_menu.AppendSeparator()
        exit_item = file_menu.Append(wx.ID_EXIT, "E&xit")
        self.Bind(wx.EVT_MENU, self.on_exit, exit_item)

        menu_bar.Append(file_menu, "&File")
        menu_bar.Append(tools_menu, "&Tools")
        self.SetMenuBar(menu_bar)

    def _build_ui(self) -> None:
        self.SetBackgroundColour(DARK_BG)
        self._setup_status_bar()

        root_panel = wx.Panel(self)
        root_panel.SetBackgroundColour(DARK_BG)
        root_sizer = wx.BoxSizer(wx.VERTICAL)
        root_panel.SetSizer(root_sizer)

        self.notebook = self._create_notebook(root_panel)
        root_sizer.Add(self.notebook, 1, wx.EXPAND | wx.ALL, 6)

        self.all_cards_panel = AllCardsPanel(self.notebook, self.controller, self._on_collection_edited)
        self.checklist_panel = ChecklistPanel(self.notebook, self.controller, self._on_collection_edited)
        self.set_completion_panel = SetCompletionPanel(self.notebook, self.controller)
        self.deck_builder_panel = DeckBuilderPanel(self.notebook, self.controller, self._on_collection_edited)
        self.pages = {
            "all_cards": self.all_cards_panel,
            "checklist": self.checklist_panel,
            "set_completion": self.set_completion_panel,
            "deck_builder": self.deck_builder_panel,
        }
        for name, page in self.pages.items():
            self.notebook.AddPage(page, TAB_TITLES[name])
        self.notebook.Bind(fnb.EVT_FLATNOTEBOOK_PAGE_CHANGED, self.on_page_changed)

    def _setup_status_bar(self) -> None:
        self.status_bar = self.CreateStatusBar()
        self.status_bar.SetBackgroundColour(DARK_PANEL)
        self.status_bar.SetForegroundColour(LIGHT_TEXT)
        self.set_status(self.controller.status)

    def _create_notebook(self, parent: wx.Window) -> fnb.FlatNotebook:
        notebook = fnb.FlatNotebook(
            parent,
            agwStyle=(
                fnb.FNB_FANCY_TABS
                | fnb.FNB_SMART_TABS
                | fnb.FNB_NO_X_BUTTON
                | fnb.FNB_NO_NAV_BUTTONS
            ),
        )
        notebook.SetTabAreaColour(DARK_PANEL)
        notebook.SetActiveTabColour(DARK_ACCENT)
        notebook.SetNonActiveTabTextColour(SUBDUED_TEXT)
        notebook.SetActiveTabTextColour(wx.Colour(12, 14, 18))
        notebook.SetBackgroundColour(DARK_BG)
        notebook.SetForegroundColour(LIGHT_TEXT)
        return notebook

    def _select_tab(self, name: str) -> None:
        names = list(self.pages)
        if name in names:
            self.notebook.SetSelection(names.index(name))

    # ------------------------------------------------------------------ Controller callbacks ---------------------------------------------------
    def set_status(self, message: str) -> None:
        if self.status_bar:
            self.status_bar.SetStatusText(message)

    def refresh_cards(self) -> None:
        """The card list itself changed: rebuild every tab."""
        for page in self.pages.values():
            page.refresh_cards()
        self.deck_builder_panel.refresh_decks()
        self._stale_pages.clear()

    def refresh_decks(self) -> None:
        self.deck_builder_panel.refresh_decks()

    def refresh_viewers(self) -> None:
        """Relations were recomputed; redraw viewers so their buttons update."""
        self.all_cards_panel.refresh_viewer()
        self.checklist_panel.refresh_viewer()
        self.deck_builder_panel.refresh_viewer()

    # ------------------------------------------------------------------ Stale tabs -------------------------------------------------------------
    def _on_collection_edited(self) -> None:
        """An owned/favorite/wishlist edit on one tab makes the aggregate tabs stale."""
        self._stale_pages.update(("all_cards", "checklist", "set_completion", "deck_builder"))
        self._stale_pages.discard(self.selected_tab_name())

    def _refresh_stale_page(self) -> None:
        name = self.selected_tab_name()
        if name not in self._stale_pages:
            return
        self._stale_pages.discard(name)
        page = self.pages[name]
        if name in ("checklist", "set_completion"):
            page.refresh_cards()
        else:
            # Owned, favorite and wishlist filters depend on the edited values
            page.apply_filters()
            page.refresh_viewer()


__all__ = ["AppFrame"]
