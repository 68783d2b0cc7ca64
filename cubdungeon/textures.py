"""Wall, floor and sprite textures as packed RGBA colour tables."""

import struct
from dataclasses import dataclass
from pathlib import Path

import pygame

from .common import GameError

BYTES_PER_PIXEL = 4
LUCI_FRAMES = 8


@dataclass(frozen=True)
class Texture:
    """A decoded image: one ``0xRRGGBBAA`` integer per pixel, row by row."""

    width: int
    height: int
    pixels: tuple


@dataclass
class TextureSet:
    """Every texture the 3D view needs, plus the enemy's animation frame."""

    wall: Texture
    floor: Texture
    door: Texture
    door_open: Texture
    exit: Texture
    chest: Texture
    luci: tuple
    luci_frame: int = 0


def texture_from_rgba(width, height, data):
    """Pack raw RGBA bytes into a texture."""
    count = width * height
    if width < 0 or height < 0 or len(data) != count * BYTES_PER_PIXEL:
        raise ValueError(
            f"expected {count * BYTES_PER_PIXEL} bytes for a {width}x{height} "
            f"texture, got {len(data)}"
        )
    pixels = struct.unpack(f">{count}I", bytes(data))
    return Texture(width, height, pixels)


def load_texture(path):
    """Decode a PNG file into a texture."""
    try:
        surface = pygame.image.load(str(path))
    except (pygame.error, OSError) as exc:
        raise GameError("can't load image ", str(path)) from exc
    width, height = surface.get_size()
    data = pygame.image.tostring(surface, "RGBA")
    return texture_from_rgba(width, height, data)


def load_texture_set(root):
    """Load the game's textures from the ``sprites`` directory under ``root``."""
    sprites = Path(root) / "sprites"
    luci_dir = sprites / "luci"
    luci = [load_texture(luci_dir / "luci.png")]
    luci.extend(
        load_texture(luci_dir / f"luci{frame}.png")
        for frame in range(1, LUCI_FRAMES)
    )
    return TextureSet(
        wall=load_texture(sprites / "wall64.png"),
        floor=load_texture(sprites / "floor.png"),
        door=load_texture(sprites / "door_dirty64.png"),
        door_open=load_texture(sprites / "door_opened64.png"),
        exit=load_texture(sprites / "exit64.png"),
        chest=load_texture(sprites / "chest_3d.png"),
        luci=tuple(luci),
    )