from __future__ import annotations

from dataclasses import dataclass


def _clamp(v: float) -> int:
    return max(0, min(255, int(v)))


@dataclass(frozen=True)
class Color:
    """8-bit RGBA color value."""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b, self.a):
            if not 0 <= channel <= 255:
                raise ValueError(f"Color channel out of range: {self!r}")

    @classmethod
    def from_hex(cls, value: str | int, alpha: int = 255) -> "Color":
        """Parse ``#RRGGBB``, ``#RRGGBBAA`` or a packed ``0xRRGGBB`` integer."""
        if isinstance(value, int):
            return cls((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF, alpha)
        text = value.strip().lstrip("#")
        if len(text) == 6:
            return cls(int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16), alpha)
        if len(text) == 8:
            return cls(int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16), int(text[6:8], 16))
        raise ValueError(f"Bad hex color: {value!r}")

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)

    def to_hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"

    def with_alpha(self, a: int) -> "Color":
        return Color(self.r, self.g, self.b, _clamp(a))

    def blend(self, other: "Color", weight: float) -> "Color":
        """Move RGB toward ``other`` by ``weight`` in [0, 1]; alpha is kept."""
        w = max(0.0, min(1.0, weight))
        return Color(
            _clamp(self.r + (other.r - self.r) * w),
            _clamp(self.g + (other.g - self.g) * w),
            _clamp(self.b + (other.b - self.b) * w),
            self.a,
        )

    def shade(self, factor: float) -> "Color":
        """Scale brightness: -0.3 darkens by 30%, 0.2 brightens by 20%."""
        k = 1.0 + factor
        return Color(_clamp(self.r * k), _clamp(self.g * k), _clamp(self.b * k), self.a)

    def lighten(self, amount: int) -> "Color":
        """Add ``amount`` to every RGB channel (negative darkens)."""
        return Color(_clamp(self.r + amount), _clamp(self.g + amount), _clamp(self.b + amount), self.a)


TRANSPARENT = Color(0, 0, 0, 0)
BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)


def hex_colors(*values: str) -> tuple[Color, ...]:
    return tuple(Color.from_hex(v) for v in values)
