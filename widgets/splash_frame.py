from __future__ import annotations

import time
from collections.abc import Callable

import wx

from utils.constants import APP_TITLE, DARK_ACCENT, DARK_BG, DARK_PANEL, LIGHT_TEXT, SUBDUED_TEXT


class LoadingFrame(wx.Frame):
    """Splash shown while saved cards and decks are read from disk."""

    def __init__(self, min_duration: float = 0.6, max_duration: float = 1.5) -> None:
        super().__init__(
            None,
            title=f"Loading {APP_TITLE}",
            style=wx.BORDER_NONE | wx.STAY_ON_TOP,
            size=(440, 150),
        )
        self._start = time.monotonic()
        self._min_duration = min_duration
        self._max_duration = max_duration
        self._ready = False
        self._finished = False
        self._on_ready: Callable[[], None] | None = None

        self.SetBackgroundColour(DARK_BG)
        panel = wx.Panel(self)
        panel.SetBackgroundColour(DARK_PANEL)
        outer = wx.BoxSizer(wx.VERTICAL)
        panel.SetSizer(outer)
        frame_sizer = wx.BoxSizer(wx.VERTICAL)
        frame_sizer.Add(panel, 1, wx.EXPAND | wx.ALL, 12)
        self.SetSizer(frame_sizer)

        title = wx.StaticText(panel, label=f"Loading {APP_TITLE}...")
        title.SetForegroundColour(LIGHT_TEXT)
        font = title.GetFont()
        font.SetPointSize(font.GetPointSize() + 2)
        font.MakeBold()
        title.SetFont(font)
        title.Wrap(360)
        outer.Add(title, 0, wx.ALIGN_CENTER_HORIZONTAL | wx.TOP | wx.LEFT | wx.RIGHT, 16)

        subtitle = wx.StaticText(panel, label="Reading saved cards and decks")
        subtitle.SetForegroundColour(SUBDUED_TEXT)
        outer.Add(subtitle, 0, wx.ALIGN_CENTER_HORIZONTAL | wx.TOP, 4)
        outer.AddStretchSpacer(1)

        self.gauge = wx.Gauge(panel, range=100, style=wx.GA_HORIZONTAL | wx.GA_SMOOTH)
        self.gauge.SetMinSize((-1, 18))
        self.gauge.SetForegroundColour(DARK_ACCENT)
        self.gauge.SetBackgroundColour(DARK_BG)
        outer.Add(self.gauge, 0, wx.EXPAND | wx.LEFT | wx.RIGHT | wx.BOTTOM, 16)

        panel.Layout()
        self.Layout()

        self._timer = wx.Timer(self)
        self.Bind(wx.EVT_TIMER, self._on_tick, self._timer)
        self._timer.Start(40)

        self.Centre(wx.BOTH)

    def set_ready(self, on_ready: Callable[[], None] | None = None) -> None:
        """Mark the splash as ready to close once the minimum display time is met."""
        self._ready = True
        self._on_ready = on_ready
        self._maybe_finish()

    def _on_tick(self, _event: wx.TimerEvent) -> None:
        elapsed = time.monotonic() - self._start
        self.gauge.SetValue(min(100, int((elapsed / self._max_duration) * 100)))
        self._maybe_finish()

    def _maybe_finish(self) -> None:
        if self._finished:
            return
        elapsed = time.monotonic() - self._start
        if self._ready and elapsed >= self._min_duration:
            self._finished = True
            self._timer.Stop()
            callback = self._on_ready
            self.Hide()
            self.Destroy()
            if callback:
                wx.CallAfter(callback)


__all__ = ["LoadingFrame"]
