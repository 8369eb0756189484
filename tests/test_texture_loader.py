"""Tests for atlas texture loading."""

from PIL import Image

from spritesheet_exporter.geometry import TextureHandle
from spritesheet_exporter.rendering.texture_loader import (
    TextureLoader,
    pixel_buffer_from_image,
)


def _handle(path):
    return TextureHandle(path=path, texture_name=path.name, identifier=path.stem)


def test_loads_texture_as_bgra(tmp_path):
    path = tmp_path / "sheet.png"
    image = Image.new("RGBA", (2, 1))
    image.putpixel((0, 0), (10, 20, 30, 40))
    image.putpixel((1, 0), (50, 60, 70, 80))
    image.save(path)

    loader = TextureLoader("BGRA8")
    buffer = loader.get_base_level_pixels(_handle(path))

    assert (buffer.width, buffer.height, buffer.bytes_per_pixel) == (2, 1, 4)
    assert list(buffer.data) == [30, 20, 10, 40, 70, 60, 50, 80]


def test_rgb_texture_gets_opaque_alpha():
    buffer = pixel_buffer_from_image(Image.new("RGB", (1, 1), (1, 2, 3)), "BGRA8")
    assert list(buffer.data) == [3, 2, 1, 255]


def test_missing_texture_returns_none(tmp_path):
    assert TextureLoader().get_base_level_pixels(_handle(tmp_path / "missing.png")) is None


def test_undecodable_texture_returns_none(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"definitely not a png")

    assert TextureLoader().get_base_level_pixels(_handle(path)) is None


def test_oversized_texture_returns_none(tmp_path, monkeypatch):
    path = tmp_path / "huge.png"
    Image.new("RGBA", (8, 8)).save(path)
    # 64 pixels is more than twice this limit, so Pillow refuses to open it.
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10)

    assert TextureLoader().get_base_level_pixels(_handle(path)) is None
