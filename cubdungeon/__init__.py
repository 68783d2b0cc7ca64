"""A raycasting dungeon crawler with generated maps, loot chests and a pursuing enemy."""

__version__ = "0.1.0"