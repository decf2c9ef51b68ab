from __future__ import annotations

import pytest
from PIL import Image

from services.image_service import ImageImportResult, ImageService


@pytest.fixture
def service(tmp_path):
    return ImageService(images_dir=tmp_path / "CardImages")


def write_png(path, size=(40, 80)):
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", size, (200, 30, 30)).save(path)
    return path


def test_import_copies_new_images_and_skips_existing(service, tmp_path):
    source = tmp_path / "source"
    write_png(source / "BP01-001.png")
    write_png(source / "nested" / "BP01-002.PNG")
    (source / "readme.txt").write_text("not an image")
    write_png(service.images_dir / "BP01-001.png", size=(10, 10))

    result = service.import_images(source)

    assert result == ImageImportResult(found=2, copied=1, skipped=1)
    assert (service.images_dir / "BP01-002.PNG").exists()
    # Existing files are never overwritten
    with Image.open(service.images_dir / "BP01-001.png") as img:
        assert img.size == (10, 10)


def test_import_status_text():
    result = ImageImportResult(found=3, copied=2, skipped=1)
    assert result.status_text == "Images processed. Found 3 files, copied 2, skipped 1."


def test_import_blank_folder_raises(service):
    with pytest.raises(ValueError):
        service.import_images(" ")


def test_import_missing_folder_finds_nothing(service, tmp_path):
    assert service.import_images(tmp_path / "missing").found == 0


def test_image_path_for(service):
    assert service.image_path_for("BP01-001") == service.images_dir / "BP01-001.png"


def test_load_card_image_fits_within_bounds(tmp_path):
    path = write_png(tmp_path / "card.png", size=(400, 800))

    image = ImageService.load_card_image(path, (200, 200))

    assert image is not None
    assert image.mode == "RGBA"
    assert image.size == (100, 200)


def test_load_card_image_missing_or_corrupt(tmp_path):
    assert ImageService.load_card_image(tmp_path / "missing.png", (100, 100)) is None
    broken = tmp_path / "broken.png"
    broken.write_bytes(b"not a png")
    assert ImageService.load_card_image(broken, (100, 100)) is None
