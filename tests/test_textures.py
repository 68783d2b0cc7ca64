import struct
import zlib

import pytest

from cubdungeon.common import GameError
from cubdungeon.textures import (
    Texture,
    TextureSet,
    load_texture,
    load_texture_set,
    texture_from_rgba,
)


def _png(width, height, rgba):
    raw = b"".join(
        b"\x00" + rgba[y * width * 4:(y + 1) * width * 4] for y in range(height)
    )

    def chunk(tag, data):
        crc = zlib.crc32(tag + data) & 0xFFFFFFFF
        return struct.pack(">I", len(data)) + tag + data + struct.pack(">I", crc)

    header = struct.pack(">IIBBBBB", width, height, 8, 6, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + chunk(b"IHDR", header)
        + chunk(b"IDAT", zlib.compress(raw))
        + chunk(b"IEND", b"")
    )


def _write(path, width, height, rgba):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(_png(width, height, rgba))


def test_texture_from_rgba_packs_big_endian():
    texture = texture_from_rgba(1, 1, bytes([1, 2, 3, 4]))
    assert texture.pixels == (0x01020304,)
    assert (texture.width, texture.height) == (1, 1)


def test_texture_from_rgba_keeps_pixel_order():
    data = bytes([10, 20, 30, 40, 50, 60, 70, 80])
    texture = texture_from_rgba(2, 1, data)
    assert texture.pixels[0] >> 24 == 10
    assert texture.pixels[1] >> 24 == 50
    assert texture.pixels[1] & 0xFF == 80


def test_texture_from_rgba_rejects_wrong_length():
    with pytest.raises(ValueError):
        texture_from_rgba(2, 2, bytes(15))


def test_load_texture_round_trip(tmp_path):
    rgba = bytes([255, 0, 0, 255, 0, 255, 0, 255, 0, 0, 255, 255, 1, 2, 3, 4])
    path = tmp_path / "tile.png"
    _write(path, 2, 2, rgba)
    texture = load_texture(path)
    assert texture == texture_from_rgba(2, 2, rgba)


def test_load_texture_missing_file(tmp_path):
    with pytest.raises(GameError):
        load_texture(tmp_path / "absent.png")


def test_load_texture_set(tmp_path):
    sprites = tmp_path / "sprites"
    for name in ("wall64", "door_dirty64", "door_opened64", "exit64", "chest_3d"):
        _write(sprites / f"{name}.png", 2, 2, bytes([9, 9, 9, 255]) * 4)
    _write(sprites / "floor.png", 1, 1, bytes([7, 7, 7, 255]))
    _write(sprites / "luci" / "luci.png", 1, 1, bytes([0, 0, 0, 255]))
    for frame in range(1, 8):
        _write(sprites / "luci" / f"luci{frame}.png", 1, 1, bytes([frame, 0, 0, 255]))
    textures = load_texture_set(tmp_path)
    assert isinstance(textures, TextureSet)
    assert len(textures.luci) == 8
    assert [t.pixels[0] >> 24 for t in textures.luci] == list(range(8))
    assert textures.wall.width == 2
    assert textures.floor == Texture(1, 1, (0x070707FF,))
    assert textures.luci_frame == 0


def test_load_texture_set_missing_directory(tmp_path):
    with pytest.raises(GameError):
        load_texture_set(tmp_path)