from __future__ import annotations

"""
RGBA pixel buffer shared by primitives and effects.

Out-of-range reads return transparent black and out-of-range writes are
dropped, so drawing code can walk naive bounding boxes.
"""

import io
from typing import Iterator

import pygame

from spriteforge.core.color import TRANSPARENT, Color
from spriteforge.core.errors import InvalidConfig


class PixelCanvas:
    def __init__(self, width: int, height: int) -> None:
        if int(width) <= 0 or int(height) <= 0:
            raise InvalidConfig(f"canvas size must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self._buf = bytearray(self.width * self.height * 4)

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _offset(self, x: int, y: int) -> int:
        return (y * self.width + x) * 4

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        x = int(x)
        y = int(y)
        if not (0 <= x < self.width and 0 <= y < self.height):
            return
        i = self._offset(x, y)
        self._buf[i:i + 4] = bytes((color.r, color.g, color.b, color.a))

    def get_pixel(self, x: int, y: int) -> Color:
        x = int(x)
        y = int(y)
        if not (0 <= x < self.width and 0 <= y < self.height):
            return TRANSPARENT
        i = self._offset(x, y)
        return Color(self._buf[i], self._buf[i + 1], self._buf[i + 2], self._buf[i + 3])

    def alpha_at(self, x: int, y: int) -> int:
        if not self.in_bounds(int(x), int(y)):
            return 0
        return self._buf[self._offset(int(x), int(y)) + 3]

    def is_opaque(self, x: int, y: int) -> bool:
        """True when the pixel has any coverage at all."""
        return self.alpha_at(x, y) > 0

    def blend_pixel(self, x: int, y: int, color: Color, alpha: float) -> None:
        """Interpolate RGB toward ``color``; alpha only changes when ``alpha >= 1``."""
        x = int(x)
        y = int(y)
        if not (0 <= x < self.width and 0 <= y < self.height):
            return
        if alpha >= 1.0:
            self.set_pixel(x, y, color)
            return
        if alpha <= 0.0:
            return
        cur = self.get_pixel(x, y)
        self.set_pixel(x, y, cur.blend(color, alpha))

    def copy(self) -> "PixelCanvas":
        out = PixelCanvas(self.width, self.height)
        out._buf[:] = self._buf
        return out

    def pixels(self) -> Iterator[tuple[int, int, Color]]:
        for y in range(self.height):
            for x in range(self.width):
                yield x, y, self.get_pixel(x, y)

    def opaque_count(self) -> int:
        return sum(1 for i in range(3, len(self._buf), 4) if self._buf[i])

    def to_bytes(self) -> bytes:
        return bytes(self._buf)

    @classmethod
    def from_bytes(cls, data: bytes, width: int, height: int) -> "PixelCanvas":
        canvas = cls(width, height)
        if len(data) != len(canvas._buf):
            raise InvalidConfig(f"expected {len(canvas._buf)} bytes for {width}x{height}, got {len(data)}")
        canvas._buf[:] = data
        return canvas

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelCanvas):
            return NotImplemented
        return self.size == other.size and self._buf == other._buf

    # --- pygame boundary ---

    def to_surface(self) -> pygame.Surface:
        return pygame.image.frombytes(self.to_bytes(), self.size, "RGBA")

    @classmethod
    def from_surface(cls, surface: pygame.Surface) -> "PixelCanvas":
        w, h = surface.get_size()
        return cls.from_bytes(pygame.image.tobytes(surface, "RGBA"), w, h)

    def to_png_bytes(self) -> bytes:
        out = io.BytesIO()
        pygame.image.save(self.to_surface(), out, "sprite.png")
        return out.getvalue()

    @classmethod
    def from_png_bytes(cls, data: bytes) -> "PixelCanvas":
        surface = pygame.image.load(io.BytesIO(data), "sprite.png")
        return cls.from_surface(surface)
