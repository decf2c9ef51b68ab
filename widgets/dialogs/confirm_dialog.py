import wx


def confirm(parent: wx.Window | None, message: str, title: str = "Confirm") -> bool:
    """Ask a yes/no question; True when the user picks Yes."""
    dialog = wx.MessageDialog(parent, message, title, style=wx.YES_NO | wx.NO_DEFAULT | wx.ICON_QUESTION)
    try:
        return dialog.ShowModal() == wx.ID_YES
    finally:
        dialog.Destroy()


def show_error(parent: wx.Window | None, message: str, title: str = "Error") -> None:
    wx.MessageBox(message, title, wx.OK | wx.ICON_ERROR, parent)


__all__ = ["confirm", "show_error"]
