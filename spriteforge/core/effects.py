from __future__ import annotations

"""
Per-pixel post-processing passes.

Passes read and write the current buffer only. Families apply them in a fixed
order: base shape, material tint, quality overlay, enchantment/aura, aging.
"""

import math
import random
from dataclasses import dataclass
from typing import Literal, Sequence

from spriteforge.core.canvas import PixelCanvas
from spriteforge.core.color import BLACK, Color
from spriteforge.core.primitives import filled_ellipse


@dataclass(frozen=True)
class Region:
    x: int
    y: int
    w: int
    h: int

    @classmethod
    def full(cls, canvas: PixelCanvas) -> "Region":
        return cls(0, 0, canvas.width, canvas.height)

    @classmethod
    def around(cls, cx: float, cy: float, rx: float, ry: float) -> "Region":
        return cls(int(cx - rx), int(cy - ry), max(1, int(rx * 2)), max(1, int(ry * 2)))

    def clip(self, canvas: PixelCanvas) -> "Region":
        x0 = max(0, self.x)
        y0 = max(0, self.y)
        x1 = min(canvas.width, self.x + self.w)
        y1 = min(canvas.height, self.y + self.h)
        return Region(x0, y0, max(0, x1 - x0), max(0, y1 - y0))

    def coords(self) -> list[tuple[int, int]]:
        return [(x, y) for y in range(self.y, self.y + self.h) for x in range(self.x, self.x + self.w)]


def _area(canvas: PixelCanvas, region: Region | None) -> Region:
    return (region or Region.full(canvas)).clip(canvas)


def tint_blend(canvas: PixelCanvas, target: Color, weight: float, region: Region | None = None) -> None:
    """Blend the RGB of every covered pixel toward ``target``. Alpha is untouched."""
    if weight <= 0:
        return
    for x, y in _area(canvas, region).coords():
        cur = canvas.get_pixel(x, y)
        if cur.a == 0:
            continue
        canvas.set_pixel(x, y, cur.blend(target, weight))


def adjust_brightness(
    canvas: PixelCanvas,
    amount: float,
    region: Region | None = None,
    *,
    mode: Literal["scale", "add"] = "scale",
) -> None:
    for x, y in _area(canvas, region).coords():
        cur = canvas.get_pixel(x, y)
        if cur.a == 0:
            continue
        canvas.set_pixel(x, y, cur.shade(amount) if mode == "scale" else cur.lighten(int(amount)))


def radial_glow(
    canvas: PixelCanvas,
    cx: float,
    cy: float,
    inner: float,
    outer: float,
    color: Color,
    max_alpha: int,
) -> None:
    """Fade ``color`` from ``max_alpha`` at ``inner`` to zero at ``outer``.

    Coverage only grows: the resulting alpha is the max of the glow and the
    existing pixel. Covered pixels have their RGB pulled toward the glow color
    by the glow strength.
    """
    inner = abs(inner)
    outer = abs(outer)
    if outer < inner:
        inner, outer = outer, inner
    span = outer - inner
    region = Region(math.floor(cx - outer), math.floor(cy - outer), math.ceil(outer * 2) + 2, math.ceil(outer * 2) + 2)
    for x, y in region.clip(canvas).coords():
        d = math.hypot(x - cx, y - cy)
        if d < inner or d > outer:
            continue
        a = max_alpha if span == 0 else max_alpha * (1.0 - (d - inner) / span)
        a = int(max(0, min(255, a)))
        if a == 0:
            continue
        cur = canvas.get_pixel(x, y)
        if cur.a == 0:
            canvas.set_pixel(x, y, color.with_alpha(a))
        else:
            canvas.set_pixel(x, y, cur.blend(color, a / 255).with_alpha(max(cur.a, a)))


def scatter_noise(
    canvas: PixelCanvas,
    region: Region | None,
    density: float,
    colors: Sequence[Color],
    rng: random.Random,
) -> int:
    """Overwrite a ``density`` fraction of covered pixels with random colors.

    Returns the number of pixels changed.
    """
    area = _area(canvas, region)
    if not colors or area.w == 0 or area.h == 0:
        return 0
    changed = 0
    for _ in range(int(round(area.w * area.h * max(0.0, density)))):
        x = area.x + rng.randrange(area.w)
        y = area.y + rng.randrange(area.h)
        cur = canvas.get_pixel(x, y)
        if cur.a == 0:
            continue
        canvas.set_pixel(x, y, rng.choice(colors).with_alpha(cur.a))
        changed += 1
    return changed


def texture_variation(
    canvas: PixelCanvas,
    region: Region | None,
    rng: random.Random,
    *,
    step: int = 4,
    chance: float = 0.3,
    spread: int = 20,
) -> None:
    """Nudge the brightness of a sparse grid of covered pixels."""
    area = _area(canvas, region)
    for y in range(area.y, area.y + area.h, step):
        for x in range(area.x, area.x + area.w, step):
            if not canvas.is_opaque(x, y) or rng.random() >= chance:
                continue
            canvas.set_pixel(x, y, canvas.get_pixel(x, y).lighten(rng.randint(-spread, spread)))


def age_darken(
    canvas: PixelCanvas,
    factor: float,
    strengths: tuple[float, float, float] = (1.0, 1.0, 1.0),
    region: Region | None = None,
) -> None:
    """Scale RGB down by ``factor * strength`` per channel, never below zero."""
    f = max(0.0, min(1.0, factor))
    if f == 0:
        return
    kr, kg, kb = (max(0.0, 1.0 - f * s) for s in strengths)
    for x, y in _area(canvas, region).coords():
        cur = canvas.get_pixel(x, y)
        if cur.a == 0:
            continue
        canvas.set_pixel(x, y, Color(int(cur.r * kr), int(cur.g * kg), int(cur.b * kb), cur.a))


def particle_scatter(
    canvas: PixelCanvas,
    region: Region,
    count: int,
    colors: Sequence[Color],
    rng: random.Random,
    *,
    radius: tuple[int, int] = (1, 2),
) -> None:
    """Drop small dots anywhere in ``region``, covered or not."""
    area = region.clip(canvas)
    if not colors or area.w == 0 or area.h == 0:
        return
    for _ in range(count):
        r = rng.randint(radius[0], radius[1])
        filled_ellipse(
            canvas,
            area.x + rng.randrange(area.w),
            area.y + rng.randrange(area.h),
            r,
            r,
            rng.choice(colors),
        )


def drop_shadow(canvas: PixelCanvas, cx: float, y: float, width: float, depth: int, max_alpha: int = 50) -> None:
    """Fading strip under a sprite; only fills uncovered pixels."""
    half = abs(width) / 2
    for sy in range(max(1, depth)):
        a = int(max_alpha * (1 - sy / max(1, depth)))
        for x in range(math.floor(cx - half), math.ceil(cx + half)):
            py = int(y) + sy
            if canvas.in_bounds(x, py) and not canvas.is_opaque(x, py):
                canvas.set_pixel(x, py, BLACK.with_alpha(a))
