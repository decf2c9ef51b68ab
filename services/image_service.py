"""
Image Service - Card image import and loading.

Card images live in the card images directory, named after the card number
(``<card #>.png``). Importing copies every image found under a folder into that
directory without overwriting files that are already there.
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from loguru import logger
from PIL import Image, UnidentifiedImageError

from utils.constants import CARD_IMAGES_DIR, IMAGE_EXTENSIONS


@dataclass(frozen=True)
class ImageImportResult:
    found: int
    copied: int
    skipped: int

    @property
    def status_text(self) -> str:
        return f"Images processed. Found {self.found} files, copied {self.copied}, skipped {self.skipped}."


class ImageService:
    """Service for card image files."""

    def __init__(self, images_dir: Path | None = None):
        """
        Initialize the image service.

        Args:
            images_dir: Destination of imported images. Defaults to CARD_IMAGES_DIR.
        """
        self.images_dir = images_dir or CARD_IMAGES_DIR

    # ============= Import =============

    def find_image_files(self, folder: str | Path) -> list[Path]:
        return sorted(self._iter_image_files(Path(folder)))

    @staticmethod
    def _iter_image_files(root: Path) -> Iterator[Path]:
        def on_error(exc: OSError) -> None:
            logger.warning(f"Skipping inaccessible folder {exc.filename}: {exc.strerror}")

        for dirpath, _dirnames, filenames in os.walk(root, onerror=on_error):
            for filename in filenames:
                if Path(filename).suffix.lower() in IMAGE_EXTENSIONS:
                    yield Path(dirpath) / filename

    def import_images(self, folder: str | Path) -> ImageImportResult:
        """
        Copy every image under ``folder`` into the card images directory.

        Files whose name already exists at the destination are skipped. A file
        that fails to copy is logged and counted as neither copied nor skipped.

        Args:
            folder: Folder searched recursively

        Returns:
            ImageImportResult with found/copied/skipped counts

        Raises:
            ValueError: If the folder path is blank
        """
        if folder is None or not str(folder).strip():
            raise ValueError("folder must be provided")

        files = self.find_image_files(folder)
        self.images_dir.mkdir(parents=True, exist_ok=True)

        copied = 0
        skipped = 0
        for source in files:
            destination = self.images_dir / source.name
            if destination.exists():
                skipped += 1
                continue
            try:
                shutil.copyfile(source, destination)
                copied += 1
            except OSError as exc:
                logger.warning(f"Failed to copy image {source}: {exc}")

        result = ImageImportResult(found=len(files), copied=copied, skipped=skipped)
        logger.info(f"Image import from {folder}: {result.status_text}")
        return result

    # ============= Loading =============

    def image_path_for(self, card_number: str) -> Path:
        return self.images_dir / f"{card_number}.png"

    @staticmethod
    def load_card_image(path: Path, max_size: tuple[int, int]) -> Image.Image | None:
        """
        Load an image scaled to fit within ``max_size``, keeping its aspect ratio.

        Returns:
            An RGBA image, or None if the file is missing or unreadable
        """
        if not path or not path.exists():
            return None
        try:
            with Image.open(path) as img:
                img = img.convert("RGBA")
                width, height = img.size
                scale = min(max_size[0] / width, max_size[1] / height)
                new_size = (max(1, int(width * scale)), max(1, int(height * scale)))
                return img.resize(new_size, Image.LANCZOS)
        except (OSError, UnidentifiedImageError) as exc:
            logger.debug(f"Failed to load image {path}: {exc}")
            return None


# Global instance
_default_service = None


def get_image_service() -> ImageService:
    """Get the default image service instance."""
    global _default_service
    if _default_service is None:
        _default_service = ImageService()
    return _default_service


def reset_image_service() -> None:
    """Reset the global image service instance."""
    global _default_service
    _default_service = None
