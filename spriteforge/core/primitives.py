from __future__ import annotations

"""
Geometry rasterizers.

Every primitive writes through ``PixelCanvas.set_pixel`` so anything off the
canvas is clipped silently. Negative radii, sizes and widths are treated as
their absolute value.
"""

import math
import random
from typing import Sequence

from spriteforge.core.canvas import PixelCanvas
from spriteforge.core.color import Color
from spriteforge.core.errors import InvalidGeometry

Point = tuple[float, float]


def _axis_term(d: float, r: float) -> float:
    if r == 0:
        return 0.0 if d == 0 else 2.0
    return (d / r) * (d / r)


def filled_ellipse(canvas: PixelCanvas, cx: float, cy: float, rx: float, ry: float, color: Color) -> None:
    rx = abs(rx)
    ry = abs(ry)
    x0 = max(0, math.floor(cx - rx))
    x1 = min(canvas.width - 1, math.ceil(cx + rx))
    y0 = max(0, math.floor(cy - ry))
    y1 = min(canvas.height - 1, math.ceil(cy + ry))
    for y in range(y0, y1 + 1):
        ty = _axis_term(y - cy, ry)
        if ty > 1:
            continue
        for x in range(x0, x1 + 1):
            if ty + _axis_term(x - cx, rx) <= 1:
                canvas.set_pixel(x, y, color)


def filled_rect(canvas: PixelCanvas, x: float, y: float, w: float, h: float, color: Color) -> None:
    """Fill ``[x, x+w) x [y, y+h)``."""
    w = abs(w)
    h = abs(h)
    xs = max(0, math.ceil(x))
    xe = min(canvas.width, math.ceil(x + w))
    ys = max(0, math.ceil(y))
    ye = min(canvas.height, math.ceil(y + h))
    for py in range(ys, ye):
        for px in range(xs, xe):
            canvas.set_pixel(px, py, color)


def line(
    canvas: PixelCanvas,
    x1: float,
    y1: float,
    x2: float,
    y2: float,
    color: Color,
    width: float = 1,
) -> None:
    width = max(1.0, abs(width))
    dx = x2 - x1
    dy = y2 - y1
    steps = max(1, int(math.ceil(max(abs(dx), abs(dy)))))
    length = math.hypot(dx, dy)
    if length > 0:
        nx, ny = -dy / length, dx / length
    else:
        nx, ny = 0.0, 1.0
    half = (width - 1) / 2
    offsets = [0.0]
    if half > 0:
        n = int(math.ceil(half * 2))
        offsets = [-half + (2 * half) * k / n for k in range(n + 1)]
    for i in range(steps + 1):
        t = i / steps
        px = x1 + dx * t
        py = y1 + dy * t
        for off in offsets:
            canvas.set_pixel(round(px + nx * off), round(py + ny * off), color)


def _triangle_area(x1: float, y1: float, x2: float, y2: float, x3: float, y3: float) -> float:
    return 0.5 * (-y2 * x3 + y1 * (-x2 + x3) + x1 * (y2 - y3) + x2 * y3)


def filled_triangle(
    canvas: PixelCanvas,
    x1: float,
    y1: float,
    x2: float,
    y2: float,
    x3: float,
    y3: float,
    color: Color,
) -> None:
    area = _triangle_area(x1, y1, x2, y2, x3, y3)
    if abs(area) < 1e-9:
        return
    k = 1.0 / (2.0 * area)
    xs = max(0, math.floor(min(x1, x2, x3)))
    xe = min(canvas.width - 1, math.ceil(max(x1, x2, x3)))
    ys = max(0, math.floor(min(y1, y2, y3)))
    ye = min(canvas.height - 1, math.ceil(max(y1, y2, y3)))
    for py in range(ys, ye + 1):
        for px in range(xs, xe + 1):
            s = k * (y1 * x3 - x1 * y3 + (y3 - y1) * px + (x1 - x3) * py)
            if s < 0:
                continue
            t = k * (x1 * y2 - y1 * x2 + (y1 - y2) * px + (x2 - x1) * py)
            if t >= 0 and s + t <= 1:
                canvas.set_pixel(px, py, color)


def scanline_spans(points: Sequence[Point], y: float) -> list[tuple[float, float]]:
    """Even-odd crossing pairs for scanline ``y``.

    An edge crosses the scanline when ``min_y <= y < max_y`` so shared vertices
    are counted once. Self-intersecting outlines fill by parity alone.
    """
    xs: list[float] = []
    n = len(points)
    for i in range(n):
        ax, ay = points[i]
        bx, by = points[(i + 1) % n]
        if (ay <= y < by) or (by <= y < ay):
            xs.append(ax + (y - ay) * (bx - ax) / (by - ay))
    xs.sort()
    return [(xs[i], xs[i + 1]) for i in range(0, len(xs) - 1, 2)]


def filled_polygon(canvas: PixelCanvas, points: Sequence[Point], color: Color) -> None:
    if len(points) < 3:
        raise InvalidGeometry(f"polygon needs at least 3 points, got {len(points)}")
    ys = [p[1] for p in points]
    y_start = max(0, math.ceil(min(ys)))
    y_end = min(canvas.height - 1, math.floor(max(ys)))
    for y in range(y_start, y_end + 1):
        for left, right in scanline_spans(points, y):
            xs = max(0, math.ceil(left))
            xe = min(canvas.width, math.ceil(right))
            for x in range(xs, xe):
                canvas.set_pixel(x, y, color)


def regular_polygon_points(
    cx: float,
    cy: float,
    radius: float,
    sides: int,
    *,
    rotation: float = 0.0,
    jitter: float = 0.0,
    rng: random.Random | None = None,
) -> list[Point]:
    """Vertices around a circle; ``jitter`` scales each radius by ``1 - jitter * rnd``."""
    if sides < 3:
        raise InvalidGeometry(f"polygon needs at least 3 sides, got {sides}")
    pts: list[Point] = []
    for i in range(sides):
        angle = rotation + (i / sides) * math.tau
        r = radius
        if jitter and rng is not None:
            r *= 1.0 - jitter + jitter * rng.random()
        pts.append((cx + math.cos(angle) * r, cy + math.sin(angle) * r))
    return pts


def diamond(canvas: PixelCanvas, cx: float, cy: float, half_w: float, half_h: float, color: Color) -> None:
    """Fill ``|x - cx| / half_w + |y - cy| / half_h <= 1``."""
    half_w = abs(half_w)
    half_h = abs(half_h)
    if half_w == 0 or half_h == 0:
        return
    for y in range(math.floor(cy - half_h), math.ceil(cy + half_h) + 1):
        for x in range(math.floor(cx - half_w), math.ceil(cx + half_w) + 1):
            if abs(x - cx) / half_w + abs(y - cy) / half_h <= 1:
                canvas.set_pixel(x, y, color)
