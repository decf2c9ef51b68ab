"""Card image display widget.

Features:
- Display card images scaled to fit, with rounded corners
- Cycle through several images (e.g. every owned printing of a checklist entry)
- Placeholder text when no image file is available
"""

from __future__ import annotations

from pathlib import Path

import wx
from loguru import logger
from PIL import Image

from services.image_service import ImageService, get_image_service


def pil_to_wx_image(image: Image.Image) -> wx.Image:
    """Convert an RGBA Pillow image into a wx.Image with alpha."""
    width, height = image.size
    rgba = image.convert("RGBA")
    wx_image = wx.Image(width, height)
    wx_image.SetData(rgba.convert("RGB").tobytes())
    wx_image.SetAlpha(rgba.getchannel("A").tobytes())
    return wx_image


class CardImageDisplay(wx.Panel):
    """A panel that displays card images with click-to-cycle navigation."""

    def __init__(
        self,
        parent: wx.Window,
        width: int = 260,
        height: int = 360,
        image_service: ImageService | None = None,
    ):
        """Initialize the card image display.

        Args:
            parent: Parent window
            width: Image display width in pixels
            height: Image display height in pixels
            image_service: Service used to load and scale images
        """
        super().__init__(parent)

        self.image_width = width
        self.image_height = height
        self.corner_radius = 12
        self.image_service = image_service or get_image_service()

        self.image_paths: list[Path] = []
        self.current_index: int = 0

        self.SetMinSize((width, height))
        self._create_ui()
        self.show_placeholder()

    def _create_ui(self) -> None:
        main_sizer = wx.BoxSizer(wx.VERTICAL)
        self.bitmap_ctrl = wx.StaticBitmap(self, size=(self.image_width, self.image_height))
        self.bitmap_ctrl.Bind(wx.EVT_LEFT_UP, self._on_bitmap_left_click)
        main_sizer.Add(self.bitmap_ctrl, 1, wx.EXPAND | wx.ALL, 0)
        self.SetSizer(main_sizer)

    def show_placeholder(self, text: str = "No image") -> None:
        self.image_paths = []
        self.current_index = 0
        self.bitmap_ctrl.SetBitmap(self._create_placeholder_bitmap(text))
        self.Refresh()

    def show_images(self, image_paths: list[Path], start_index: int = 0) -> bool:
        """Display a list of card images.

        Args:
            image_paths: List of paths to image files
            start_index: Index to start at

        Returns:
            True if an image loaded successfully
        """
        valid_paths = [p for p in image_paths if p and p.exists()]
        if not valid_paths:
            self.show_placeholder("Image not found" if image_paths else "No image")
            return False

        self.image_paths = valid_paths
        self.current_index = max(0, min(start_index, len(valid_paths) - 1))
        return self._load_image_at_index(self.current_index)

    def show_image(self, image_path: Path | None) -> bool:
        return self.show_images([image_path] if image_path else [])

    def _load_image_at_index(self, index: int) -> bool:
        if not 0 <= index < len(self.image_paths):
            return False

        image_path = self.image_paths[index]
        image = self.image_service.load_card_image(image_path, (self.image_width, self.image_height))
        if image is None:
            logger.debug(f"Failed to load image: {image_path}")
            self.bitmap_ctrl.SetBitmap(self._create_placeholder_bitmap("Unreadable image"))
            return False

        self.bitmap_ctrl.SetBitmap(self._create_rounded_bitmap(pil_to_wx_image(image)))
        self.Refresh()
        return True

    def _on_bitmap_left_click(self, event: wx.MouseEvent) -> None:
        if len(self.image_paths) <= 1:
            event.Skip()
            return
        self.current_index = (self.current_index + 1) % len(self.image_paths)
        self._load_image_at_index(self.current_index)

    def _create_rounded_bitmap(self, image: wx.Image) -> wx.Bitmap:
        bitmap = wx.Bitmap(self.image_width, self.image_height)
        dc = wx.MemoryDC(bitmap)
        dc.SetBackground(wx.Brush(self.GetParent().GetBackgroundColour()))
        dc.Clear()

        dc.SetPen(wx.Pen(wx.Colour(40, 40, 40), 1))
        dc.SetBrush(wx.Brush(wx.Colour(40, 40, 40)))
        dc.DrawRoundedRectangle(0, 0, self.image_width, self.image_height, self.corner_radius)

        x = (self.image_width - image.GetWidth()) // 2
        y = (self.image_height - image.GetHeight()) // 2
        dc.DrawBitmap(wx.Bitmap(image), x, y, True)

        dc.SetPen(wx.Pen(wx.Colour(60, 60, 60), 1))
        dc.SetBrush(wx.TRANSPARENT_BRUSH)
        dc.DrawRoundedRectangle(0, 0, self.image_width, self.image_height, self.corner_radius)
        dc.SelectObject(wx.NullBitmap)
        return bitmap

    def _create_placeholder_bitmap(self, text: str) -> wx.Bitmap:
        bitmap = wx.Bitmap(self.image_width, self.image_height)
        dc = wx.MemoryDC(bitmap)
        dc.SetBackground(wx.Brush(wx.Colour(30, 30, 30)))
        dc.Clear()

        dc.SetPen(wx.Pen(wx.Colour(60, 60, 60), 2))
        dc.SetBrush(wx.Brush(wx.Colour(40, 40, 40)))
        dc.DrawRoundedRectangle(1, 1, self.image_width - 2, self.image_height - 2, self.corner_radius)

        dc.SetTextForeground(wx.Colour(140, 140, 140))
        font = wx.Font(11, wx.FONTFAMILY_DEFAULT, wx.FONTSTYLE_NORMAL, wx.FONTWEIGHT_NORMAL)
        dc.SetFont(font)
        text_width, text_height = dc.GetTextExtent(text)
        dc.DrawText(text, (self.image_width - text_width) // 2, (self.image_height - text_height) // 2)

        dc.SelectObject(wx.NullBitmap)
        return bitmap


__all__ = ["CardImageDisplay", "pil_to_wx_image"]
