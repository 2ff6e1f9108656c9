from __future__ import annotations

"""Boulders, crystals, ore deposits and cut gems."""

import math
import random

from spriteforge.core.color import Color, hex_colors
from spriteforge.core.effects import Region, adjust_brightness, radial_glow, texture_variation
from spriteforge.core.primitives import (
    filled_ellipse,
    filled_polygon,
    filled_rect,
    filled_triangle,
    line,
    regular_polygon_points,
)
from spriteforge.family import DrawContext, FamilySpec, template
from spriteforge.resolver import (
    Axis,
    Configuration,
    DependentAxis,
    ResolvedAsset,
    Selection,
    merge_features,
    render_name,
    round_half_up,
)

GEM_SCALE = 2.5

BOULDERS = [
    template("granite", "Granite Boulder", hardness=7, value=2, features=("coarse", "irregular"),
             extras={"colors": ("#696969", "#708090", "#778899", "#2F4F4F"), "texture": "coarse", "size": (48, 96), "shape": "irregular"}),
    template("limestone", "Limestone Boulder", hardness=3, value=1, features=("smooth", "rounded"),
             extras={"colors": ("#F5F5DC", "#FFFACD", "#FAFAD2", "#FFE4B5"), "texture": "smooth", "size": (40, 80), "shape": "rounded"}),
    template("sandstone", "Sandstone Boulder", hardness=4, value=1, features=("layered", "blocky"),
             extras={"colors": ("#DEB887", "#D2B48C", "#BC8F8F", "#F4A460"), "texture": "layered", "size": (52, 88), "shape": "blocky"}),
    template("basalt", "Basalt Boulder", hardness=6, value=2, features=("rough", "angular"),
             extras={"colors": ("#2F2F2F", "#363636", "#1C1C1C", "#404040"), "texture": "rough", "size": (44, 92), "shape": "angular"}),
    template("marble", "Marble Boulder", hardness=4, value=5, features=("veined", "smooth"),
             extras={"colors": ("#FFFFFF", "#F8F8FF", "#F0F8FF", "#E6E6FA"), "texture": "veined", "size": (38, 76), "shape": "smooth"}),
]

CRYSTALS = [
    template("quartz", "Quartz Crystal", hardness=7, value=10, features=("clear", "common_crystal"),
             extras={"colors": ("#FFFFFF", "#F0F8FF", "#E6E6FA", "#DDA0DD"), "facets": 6, "size": (16, 48), "glow": True}),
    template("amethyst", "Amethyst Crystal", hardness=7, value=25, features=("violet", "calming"),
             extras={"colors": ("#9370DB", "#8A2BE2", "#9932CC", "#BA55D3"), "facets": 8, "size": (20, 52), "glow": True}),
    template("ruby", "Ruby Crystal", hardness=9, value=80, features=("fiery", "precious"),
             extras={"colors": ("#DC143C", "#FF0000", "#B22222", "#8B0000"), "facets": 12, "size": (18, 46), "glow": True}),
    template("emerald", "Emerald Crystal", hardness=8, value=70, features=("verdant", "precious"),
             extras={"colors": ("#006400", "#008000", "#228B22", "#32CD32"), "facets": 10, "size": (22, 50), "glow": False}),
    template("sapphire", "Sapphire Crystal", hardness=9, value=75, features=("deep_blue", "precious"),
             extras={"colors": ("#000080", "#0000CD", "#191970", "#00008B"), "facets": 8, "size": (20, 48), "glow": True}),
    template("diamond", "Diamond Crystal", hardness=10, value=150, features=("brilliant", "precious"),
             extras={"colors": ("#F0F8FF", "#E6E6FA", "#FFFFFF", "#F5F5F5"), "facets": 16, "size": (14, 42), "glow": True}),
]

ORES = [
    template("copper", "Copper Ore", hardness=3, value=4, features=("conductive",),
             extras={"base": "#8B4513", "veins": ("#B87333", "#CD853F", "#D2691E"), "intensity": 0.7, "size": (32, 64)}),
    template("iron", "Iron Ore", hardness=4, value=5, features=("magnetic",),
             extras={"base": "#696969", "veins": ("#2F4F4F", "#556B2F", "#8B4513"), "intensity": 0.8, "size": (36, 68)}),
    template("gold", "Gold Ore", hardness=3, value=40, features=("precious", "malleable"),
             extras={"base": "#8B4513", "veins": ("#FFD700", "#FFA500", "#FF6347"), "intensity": 0.9, "size": (28, 56)}),
    template("silver", "Silver Ore", hardness=3, value=20, features=("precious", "reflective"),
             extras={"base": "#696969", "veins": ("#C0C0C0", "#A9A9A9", "#808080"), "intensity": 0.6, "size": (30, 60)}),
    template("mithril", "Mithril Ore", hardness=8, value=120, features=("magical", "lightweight"),
             extras={"base": "#F5F5F5", "veins": ("#E6E6FA", "#DDA0DD", "#DA70D6"), "intensity": 0.5, "size": (24, 52)}),
    template("adamantite", "Adamantite Ore", hardness=10, value=200, features=("magical", "unbreakable"),
             extras={"base": "#2F2F2F", "veins": ("#FF4500", "#DC143C", "#B22222"), "intensity": 1.0, "size": (26, 58)}),
]

GEMS = [
    template("ruby", "Ruby", hardness=9, value=100, features=("red", "brilliant_cut"),
             extras={"colors": ("#DC143C", "#FF0000", "#B22222"), "cut": "brilliant", "size": (8, 24)}),
    template("emerald", "Emerald", hardness=8, value=90, features=("green", "emerald_cut"),
             extras={"colors": ("#006400", "#228B22", "#32CD32"), "cut": "emerald", "size": (10, 26)}),
    template("sapphire", "Sapphire", hardness=9, value=95, features=("blue", "round_cut"),
             extras={"colors": ("#000080", "#0000CD", "#191970"), "cut": "round", "size": (9, 25)}),
    template("diamond", "Diamond", hardness=10, value=200, features=("clear", "princess_cut"),
             extras={"colors": ("#F0F8FF", "#E6E6FA", "#FFFFFF"), "cut": "princess", "size": (6, 20)}),
    template("amethyst", "Amethyst", hardness=7, value=40, features=("violet", "oval_cut"),
             extras={"colors": ("#9370DB", "#8A2BE2", "#9932CC"), "cut": "oval", "size": (11, 27)}),
    template("topaz", "Topaz", hardness=8, value=50, features=("golden", "pear_cut"),
             extras={"colors": ("#FFD700", "#FFA500", "#FF6347"), "cut": "pear", "size": (10, 26)}),
]

TYPE_AXIS = Axis.build(
    "type",
    [template("boulder", "Boulder"), template("crystal", "Crystal"), template("ore", "Ore"), template("gem", "Gem")],
)
VARIANT_AXIS = DependentAxis(
    "variant",
    "type",
    {
        "boulder": Axis.build("variant", BOULDERS, default="granite"),
        "crystal": Axis.build("variant", CRYSTALS, default="quartz"),
        "ore": Axis.build("variant", ORES, default="copper"),
        "gem": Axis.build("variant", GEMS, default="ruby"),
    },
)
AXES = (TYPE_AXIS, VARIANT_AXIS)


def build(config: Configuration, sel: Selection, rng: random.Random) -> ResolvedAsset:
    kind, variant = sel["type"], sel["variant"]
    low, high = variant.extra("size")
    size = int(low + rng.random() * (high - low))
    palette = variant.extra("colors") or (variant.extra("base"),)
    color = rng.choice(palette)
    hardness = variant.modifier("hardness")
    stats: dict[str, int | float] = {
        "size": size,
        "hardness": round_half_up(hardness),
        "value": round_half_up(variant.modifier("value") * size / 10),
    }
    if kind.key == "ore":
        stats["vein_intensity"] = variant.extra("intensity")
    return ResolvedAsset(
        stats=stats,
        features=merge_features([kind.key], variant.features),
        name=render_name("{size} {name}", size="Large" if size >= (low + high) / 2 else "Small", name=variant.name),
        description=f"A {variant.name.lower()} roughly {size} pixels across.",
        selection={axis: t.key for axis, t in sel.items()},
        extras={"color": color, "size": size},
    )


def _rock_color(ctx: DrawContext) -> Color:
    return Color.from_hex(ctx.asset.extras["color"])


def _size(ctx: DrawContext) -> float:
    return ctx.asset.extras["size"] * ctx.scale


def _draw_boulder(ctx: DrawContext) -> None:
    variant = ctx.pick("variant")
    shape = variant.extra("shape")
    sides = 12 if shape == "rounded" else 8 if shape == "blocky" else 16
    cx, cy = ctx.width * 0.5, ctx.height * 0.6
    points = regular_polygon_points(cx, cy, _size(ctx) / 2, sides, jitter=0.3, rng=ctx.rng)
    filled_polygon(ctx.canvas, points, _rock_color(ctx))


def _draw_crystal(ctx: DrawContext) -> None:
    variant = ctx.pick("variant")
    facets = variant.extra("facets")
    colors = hex_colors(*variant.extra("colors"))
    size = _size(ctx)
    cx = ctx.width * 0.5
    base_y = ctx.height - ctx.height * 0.1
    for i in range(facets):
        a0 = i * math.tau / facets
        a1 = (i + 1) * math.tau / facets
        filled_triangle(
            ctx.canvas,
            cx, base_y - size,
            cx + math.cos(a0) * size * 0.5, base_y,
            cx + math.cos(a1) * size * 0.5, base_y,
            colors[i % len(colors)],
        )


def _draw_ore(ctx: DrawContext) -> None:
    variant = ctx.pick("variant")
    size = _size(ctx)
    cx, cy = ctx.width * 0.5, ctx.height * 0.6
    filled_ellipse(ctx.canvas, cx, cy, size * 0.5, size * 0.4, Color.from_hex(variant.extra("base")))


def _gem_cut(ctx: DrawContext, cut: str, cx: float, cy: float, size: float, color: Color) -> None:
    c = ctx.canvas
    if cut == "brilliant":
        facets = [
            ((cx, cy - size * 0.8), (cx - size * 0.4, cy - size * 0.4), (cx + size * 0.4, cy - size * 0.4)),
            ((cx - size * 0.4, cy - size * 0.4), (cx - size * 0.6, cy), (cx, cy - size * 0.8)),
            ((cx + size * 0.4, cy - size * 0.4), (cx + size * 0.6, cy), (cx, cy - size * 0.8)),
            ((cx - size * 0.6, cy), (cx, cy + size * 0.8), (cx - size * 0.3, cy + size * 0.4)),
            ((cx + size * 0.6, cy), (cx, cy + size * 0.8), (cx + size * 0.3, cy + size * 0.4)),
        ]
        # Centre band so the outline reads as one stone.
        filled_polygon(c, [(cx - size * 0.4, cy - size * 0.4), (cx + size * 0.4, cy - size * 0.4),
                           (cx + size * 0.6, cy), (cx, cy + size * 0.8), (cx - size * 0.6, cy)], color.lighten(-20))
        for i, (p1, p2, p3) in enumerate(facets):
            filled_triangle(c, *p1, *p2, *p3, color if i % 2 == 0 else color.lighten(25))
    elif cut == "emerald":
        hw, hh = size * 0.4, size * 0.3
        bevel = size * 0.1
        filled_rect(c, cx - hw, cy - hh, hw * 2, hh * 2, color)
        bright = color.lighten(30)
        filled_triangle(c, cx - hw, cy - hh, cx - hw + bevel, cy - hh, cx - hw, cy - hh + bevel, bright)
        filled_triangle(c, cx + hw, cy - hh, cx + hw - bevel, cy - hh, cx + hw, cy - hh + bevel, bright)
        filled_rect(c, cx - hw + bevel, cy - hh + bevel, hw * 2 - bevel * 2, hh * 2 - bevel * 2, color.lighten(10))
    elif cut == "round":
        filled_ellipse(c, cx, cy, size * 0.4, size * 0.4, color)
        for i in range(16):
            angle = i * math.tau / 16
            line(
                c,
                cx + math.cos(angle) * size * 0.2, cy + math.sin(angle) * size * 0.2,
                cx + math.cos(angle) * size * 0.4, cy + math.sin(angle) * size * 0.4,
                color.lighten(20),
            )
    elif cut == "princess":
        half = size * 0.35
        for i, (tx, ty, sx) in enumerate(((cx, cy - half, -1), (cx, cy - half, 1), (cx, cy + half, -1), (cx, cy + half, 1))):
            filled_triangle(c, tx, ty, cx + sx * half, cy, cx, cy, color if i in (0, 3) else color.lighten(20))
    elif cut == "oval":
        filled_ellipse(c, cx, cy, size * 0.4, size * 0.3, color)
        filled_ellipse(c, cx - size * 0.1, cy - size * 0.08, size * 0.15, size * 0.08, color.lighten(30))
    else:
        filled_polygon(
            c,
            [
                (cx, cy - size * 0.5),
                (cx - size * 0.3, cy - size * 0.2),
                (cx - size * 0.4, cy + size * 0.3),
                (cx, cy + size * 0.5),
                (cx + size * 0.4, cy + size * 0.3),
                (cx + size * 0.3, cy - size * 0.2),
            ],
            color,
        )


def _draw_gem(ctx: DrawContext) -> None:
    variant = ctx.pick("variant")
    _gem_cut(ctx, variant.extra("cut"), ctx.cx, ctx.cy, _size(ctx) * GEM_SCALE, _rock_color(ctx))


_SHAPES = {"boulder": _draw_boulder, "crystal": _draw_crystal, "ore": _draw_ore, "gem": _draw_gem}


def draw_shape(ctx: DrawContext) -> None:
    _SHAPES[ctx.key("type")](ctx)


def _opaque_box(ctx: DrawContext) -> Region:
    xs: list[int] = []
    ys: list[int] = []
    for y in range(ctx.height):
        for x in range(ctx.width):
            if ctx.canvas.is_opaque(x, y):
                xs.append(x)
                ys.append(y)
    if not xs:
        return Region(0, 0, 0, 0)
    return Region(min(xs), min(ys), max(xs) - min(xs) + 1, max(ys) - min(ys) + 1)


def _shift(ctx: DrawContext, x: int, y: int, delta: int) -> None:
    if ctx.canvas.is_opaque(x, y):
        ctx.canvas.set_pixel(x, y, ctx.canvas.get_pixel(x, y).lighten(delta))


def draw_texture(ctx: DrawContext) -> None:
    kind = ctx.key("type")
    rng = ctx.rng
    box = _opaque_box(ctx)
    if box.w == 0:
        return
    if kind == "boulder":
        texture = ctx.pick("variant").extra("texture")
        if texture == "layered":
            band = max(1, box.h // 4)
            for i, delta in enumerate((-15, 0, -8, 8)):
                for x, y in Region(box.x, box.y + i * band, box.w, band).clip(ctx.canvas).coords():
                    if rng.random() < 0.4:
                        _shift(ctx, x, y, delta)
        elif texture == "veined":
            for _ in range(3):
                x, y = box.x + rng.randrange(box.w), box.y + rng.randrange(box.h)
                for _ in range(rng.randint(20, 60)):
                    _shift(ctx, x, y, -30)
                    x += rng.choice((-1, 0, 1))
                    y += rng.choice((0, 1))
        else:
            density, dark_share, dark, light = {
                "coarse": (0.08, 0.6, -40, 20),
                "smooth": (0.03, 0.0, 0, 30),
                "rough": (0.12, 0.7, -50, 25),
            }.get(texture, (0.05, 0.5, -20, 20))
            for x, y in box.coords():
                if rng.random() < density:
                    _shift(ctx, x, y, dark if rng.random() < dark_share else light)
    elif kind == "crystal":
        for _ in range(5):
            _shift(ctx, box.x + rng.randrange(box.w), box.y + rng.randrange(box.h), -20)
    elif kind == "ore":
        variant = ctx.pick("variant")
        veins = hex_colors(*variant.extra("veins"))
        size = _size(ctx)
        cx, cy = ctx.width * 0.5, ctx.height * 0.6
        for _ in range(rng.randint(3, 7)):
            vx = cx + (rng.random() - 0.5) * size * 0.8
            vy = cy + (rng.random() - 0.5) * size * 0.6
            for j in range(int(rng.random() * size * 0.4) + 10):
                x = int(vx + (rng.random() - 0.5) * 4)
                y = int(vy + j)
                if ctx.canvas.is_opaque(x, y):
                    ctx.canvas.set_pixel(x, y, rng.choice(veins))
    else:
        texture_variation(ctx.canvas, box, rng, step=3, chance=0.15, spread=12)


def draw_lighting(ctx: DrawContext) -> None:
    kind = ctx.key("type")
    box = _opaque_box(ctx)
    if box.w == 0:
        return
    rng = ctx.rng
    if kind == "boulder":
        adjust_brightness(ctx.canvas, 15, Region(box.x, box.y, int(box.w * 0.4), int(box.h * 0.4)), mode="add")
        adjust_brightness(ctx.canvas, -10, Region(box.x + int(box.w * 0.6), box.y + int(box.h * 0.6), box.w, box.h), mode="add")
    elif kind == "crystal":
        variant = ctx.pick("variant")
        if variant.extra("glow"):
            size = _size(ctx)
            base_y = ctx.height - ctx.height * 0.1
            radial_glow(ctx.canvas, ctx.width * 0.5, base_y - size * 0.5, size * 0.3, size * 0.6,
                        _rock_color(ctx), int(255 * 0.6))
    elif kind == "ore":
        if ctx.pick("variant").extra("intensity") > 0.7:
            for _ in range(8):
                _shift(ctx, box.x + rng.randrange(box.w), box.y + rng.randrange(box.h), 40)
    else:
        for _ in range(12):
            _shift(ctx, box.x + rng.randrange(box.w), box.y + rng.randrange(box.h), 50)


SPEC = FamilySpec(
    name="rock",
    axes=AXES,
    build=build,
    passes=(("shape", draw_shape), ("texture", draw_texture), ("lighting", draw_lighting)),
    default_size=(96, 96),
    description="Boulders, crystals, ore deposits and cut gems",
)
