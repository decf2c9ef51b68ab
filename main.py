#!/usr/bin/env python3
"""wxPython entry point for the collection tracker."""

from __future__ import annotations

import sys
import traceback

import wx
from loguru import logger

from controllers.app_controller import get_app_controller
from utils.constants import APP_TITLE, LOGS_DIR, ensure_base_dirs
from utils.logging_config import configure_logging
from widgets.splash_frame import LoadingFrame


class CollectionTrackerApp(wx.App):
    """Bootstrap the main window behind a short splash."""

    def OnInit(self) -> bool:  # noqa: N802 - wx override
        logger.info(f"Starting {APP_TITLE}")
        self.loading_frame = LoadingFrame()
        self.loading_frame.Show()
        wx.CallAfter(self._build_main_window)
        return True

    def _build_main_window(self) -> None:
        controller = get_app_controller()
        self.controller = controller
        frame = controller.create_frame()
        self.SetTopWindow(frame)
        self.loading_frame.set_ready(frame.Show)

    def OnExceptionInMainLoop(self) -> bool:  # noqa: N802 - wx override
        """Handle exceptions in the main event loop."""
        exc_type, exc_value, exc_traceback = sys.exc_info()
        logger.error("=== UNHANDLED EXCEPTION IN MAIN LOOP ===")
        logger.error(f"Exception type: {exc_type.__name__}")
        logger.error(f"Exception value: {exc_value}")
        logger.error("Traceback:")
        for line in traceback.format_tb(exc_traceback):
            logger.error(line.rstrip())
        logger.error("=== END UNHANDLED EXCEPTION ===")

        # Show error dialog to user
        error_msg = f"An unexpected error occurred:\n\n{exc_type.__name__}: {exc_value}\n\nCheck the log file for details."
        wx.MessageBox(error_msg, "Application Error", wx.OK | wx.ICON_ERROR)

        # Return True to continue running, False to exit
        return True


def global_exception_handler(exc_type, exc_value, exc_traceback) -> None:
    logger.error("=== UNCAUGHT EXCEPTION (GLOBAL) ===")
    logger.error(f"Exception type: {exc_type.__name__}")
    logger.error(f"Exception value: {exc_value}")
    logger.error("Traceback:")
    for line in traceback.format_tb(exc_traceback):
        logger.error(line.rstrip())
    logger.error("=== END UNCAUGHT EXCEPTION ===")

    # Call default handler
    sys.__excepthook__(exc_type, exc_value, exc_traceback)


def main() -> None:
    ensure_base_dirs()
    configure_logging(LOGS_DIR)

    # Install global exception handler for exceptions outside of wx mainloop
    sys.excepthook = global_exception_handler

    app = CollectionTrackerApp(False)
    app.MainLoop()


if __name__ == "__main__":
    main()
