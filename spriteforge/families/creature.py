from __future__ import annotations

"""
Mythical creatures: dragons, unicorns, griffins, phoenixes and friends.

Every type is drawn from a handful of body plans (horse, lion, serpent, bird,
cephalopod) scaled by its size multiplier. The ``color`` axis carries the
per-part palette (body, wing, head, tail ...).
"""

import math
import random
from typing import Any

from spriteforge.core.color import BLACK, TRANSPARENT, WHITE, Color, hex_colors
from spriteforge.core.effects import Region, drop_shadow, particle_scatter, radial_glow
from spriteforge.core.primitives import filled_ellipse, filled_polygon, filled_rect, line
from spriteforge.family import DrawContext, FamilySpec, template
from spriteforge.resolver import (
    Axis,
    AxisTemplate,
    Configuration,
    DependentAxis,
    ResolvedAsset,
    Selection,
    compose_stats,
    merge_features,
    render_name,
)

YELLOW = Color.from_hex("#FFFF00")
GOLD = Color.from_hex("#FFD700")
FLAME = Color.from_hex("#FF4500")

EFFECT_COLORS = {
    "fire": ("#FF4500", "#FF6347", "#FFA500", "#FFD700"),
    "ice": ("#87CEEB", "#B0E0E6", "#F0F8FF", "#E6E6FA"),
    "lightning": ("#FFFF00", "#FFA500", "#FFFFFF", "#87CEEB"),
    "ethereal": ("#E6E6FA", "#DDA0DD", "#DA70D6", "#9370DB"),
    "shadow": ("#2F2F2F", "#696969", "#000000", "#1C1C1C"),
    "holy": ("#FFD700", "#FFFF00", "#FFFFFF", "#F0F8FF"),
    "poison": ("#32CD32", "#7CFC00", "#556B2F", "#9ACD32"),
    "acid": ("#ADFF2F", "#7FFF00", "#DFFF00", "#CCFF00"),
    "nature": ("#228B22", "#32CD32", "#98FB98", "#ADFF2F"),
    "water": ("#1E90FF", "#00BFFF", "#87CEFA", "#E0FFFF"),
}

# key: (name, layout width, layout height, frames, rarity, power, health, speed, magic)
CREATURES = {
    "dragon": ("Dragon", 120, 100, 8, 5, 90, 120, 60, 70),
    "unicorn": ("Unicorn", 80, 90, 6, 4, 40, 60, 80, 90),
    "griffin": ("Griffin", 100, 85, 7, 4, 70, 80, 85, 30),
    "phoenix": ("Phoenix", 90, 80, 10, 5, 60, 50, 95, 95),
    "basilisk": ("Basilisk", 100, 60, 5, 4, 65, 70, 40, 50),
    "mermaid": ("Mermaid", 65, 120, 6, 3, 35, 45, 70, 60),
    "centaur": ("Centaur", 85, 140, 8, 3, 55, 75, 75, 25),
    "sphinx": ("Sphinx", 110, 90, 4, 4, 60, 90, 30, 85),
    "kraken": ("Kraken", 140, 100, 9, 5, 95, 150, 35, 40),
    "pegasus": ("Pegasus", 85, 95, 7, 3, 45, 60, 100, 50),
}

TYPE_AXIS = Axis.build(
    "type",
    [
        template(key, name, power=power, health=health, speed=speed, magic=magic,
                 extras={"layout": (w, h), "frames": frames, "rarity": rarity})
        for key, (name, w, h, frames, rarity, power, health, speed, magic) in CREATURES.items()
    ],
    default="dragon",
)


def _variant(key: str, effect: str, **modifiers: float) -> AxisTemplate:
    return template(key, key.replace("_", " ").title(), features=(key,), extras={"effect": effect}, **modifiers)


VARIANT_AXIS = DependentAxis(
    "variant",
    "type",
    {
        "dragon": Axis.build("variant", [
            _variant("fire", "fire"),
            _variant("ice", "ice"),
            _variant("storm", "lightning", speed=1.1),
            _variant("shadow", "shadow", magic=1.2),
            _variant("ancient", "holy", power=1.3, magic=1.3),
            _variant("young", "fire", power=0.8, health=0.8),
        ], default="fire"),
        "unicorn": Axis.build("variant", [
            _variant("celestial", "holy", magic=1.2),
            _variant("forest", "nature"),
            _variant("arctic", "ice"),
            _variant("volcanic", "fire", power=1.1),
            _variant("ethereal", "ethereal", magic=1.3),
        ], default="celestial"),
        "griffin": Axis.build("variant", [
            _variant("noble", "holy"),
            _variant("feral", "nature", power=1.1),
            _variant("storm", "lightning", speed=1.1),
            _variant("flame", "fire", power=1.1),
            _variant("guardian", "holy", health=1.2),
        ], default="noble"),
        "phoenix": Axis.build("variant", [
            _variant("rebirth", "fire", health=1.2),
            _variant("ascension", "holy", magic=1.1),
            _variant("immortal", "fire", health=1.5),
            _variant("cosmic", "ethereal", magic=1.3),
        ], default="immortal"),
        "basilisk": Axis.build("variant", [
            _variant("stone", "shadow"),
            _variant("venom", "poison", power=1.1),
            _variant("hypnotic", "ethereal", magic=1.2),
            _variant("ancient", "shadow", power=1.2, health=1.2),
        ], default="stone"),
        "mermaid": Axis.build("variant", [
            _variant("ocean", "water"),
            _variant("river", "water", speed=1.1),
            _variant("coral", "nature"),
            _variant("deep_sea", "shadow", magic=1.2),
            _variant("freshwater", "water"),
        ], default="ocean"),
        "centaur": Axis.build("variant", [
            _variant("forest", "nature"),
            _variant("mountain", "shadow", health=1.1),
            _variant("desert", "fire"),
            _variant("arctic", "ice"),
            _variant("noble", "holy", power=1.1),
        ], default="forest"),
        "sphinx": Axis.build("variant", [
            _variant("guardian", "holy", health=1.2),
            _variant("riddle", "ethereal", magic=1.2),
            _variant("desert", "fire"),
            _variant("temple", "holy", magic=1.1),
        ], default="guardian"),
        "kraken": Axis.build("variant", [
            _variant("deep_sea", "water"),
            _variant("storm", "lightning", power=1.1),
            _variant("ancient", "shadow", power=1.2, health=1.2),
            _variant("coral", "nature"),
        ], default="deep_sea"),
        "pegasus": Axis.build("variant", [
            _variant("celestial", "holy", magic=1.2),
            _variant("storm", "lightning", speed=1.1),
            _variant("forest", "nature"),
            _variant("arctic", "ice"),
        ], default="celestial"),
    },
)


def _sizes(default: str = "adult", **mults: float) -> Axis:
    return Axis.build(
        "size",
        [
            template(k, k.title(), power=m, health=m, speed=round(1 / math.sqrt(m), 3), extras={"multiplier": m})
            for k, m in mults.items()
        ],
        default=default,
    )


SIZE_AXIS = DependentAxis(
    "size",
    "type",
    {
        "dragon": _sizes(hatchling=0.4, juvenile=0.7, adult=1.0, ancient=1.4, colossal=2.0),
        "unicorn": _sizes(foal=0.5, young=0.8, adult=1.0, elder=1.2),
        "griffin": _sizes(chick=0.4, young=0.7, adult=1.0, elder=1.3),
        "phoenix": _sizes(chick=0.4, young=0.7, adult=1.0, ancient=1.3),
        "basilisk": _sizes(young=0.7, adult=1.0, elder=1.3),
        "sphinx": _sizes(young=0.7, adult=1.0, ancient=1.4),
        "kraken": _sizes(young=0.6, adult=1.0, elder=1.5),
        "pegasus": _sizes(foal=0.5, young=0.8, adult=1.0, elder=1.2),
    },
)


def _palette(key: str, body: str, **parts: str) -> AxisTemplate:
    return template(key, key.replace("_", " ").title(), color=body, extras={"parts": dict(parts)})


COLOR_AXIS = DependentAxis(
    "color",
    "type",
    {
        "dragon": Axis.build("color", [
            _palette("red", "#DC143C", wing="#B22222", head="#8B0000", tail="#DC143C", horn="#FFD700"),
            _palette("blue", "#4169E1", wing="#000080", head="#191970", tail="#4169E1", horn="#87CEEB"),
            _palette("green", "#228B22", wing="#006400", head="#008000", tail="#228B22", horn="#32CD32"),
            _palette("black", "#2F2F2F", wing="#000000", head="#1C1C1C", tail="#2F2F2F", horn="#696969"),
            _palette("white", "#F5F5F5", wing="#FFFFFF", head="#E6E6FA", tail="#F5F5F5", horn="#FFFFFF"),
            _palette("gold", "#FFD700", wing="#FFA500", head="#FF6347", tail="#FFD700", horn="#FFFF00"),
            _palette("purple", "#9370DB", wing="#8A2BE2", head="#9932CC", tail="#9370DB", horn="#DA70D6"),
        ], default="red"),
        "unicorn": Axis.build("color", [
            _palette("white", "#F5F5F5", mane="#E6E6FA"),
            _palette("silver", "#C0C0C0", mane="#F5F5F5"),
            _palette("golden", "#FFD700", mane="#FFFF00"),
            _palette("rainbow", "#FF6347", mane="#4169E1"),
            _palette("crystal", "#E6E6FA", mane="#FFFFFF"),
        ], default="white"),
        "griffin": Axis.build("color", [
            _palette("golden", "#FFD700", wing="#FFA500", head="#FFF8DC", beak="#FF6347", tail="#FFD700"),
            _palette("brown", "#8B4513", wing="#654321", head="#F5F5DC", beak="#2F4F4F", tail="#8B4513"),
            _palette("white", "#F5F5F5", wing="#E6E6FA", head="#FFFFFF", beak="#FFD700", tail="#F5F5F5"),
            _palette("gray", "#696969", wing="#808080", head="#D3D3D3", beak="#C0C0C0", tail="#696969"),
            _palette("red", "#DC143C", wing="#B22222", head="#F5F5DC", beak="#8B0000", tail="#DC143C"),
        ], default="golden"),
        "phoenix": Axis.build("color", [
            _palette("fiery_red", "#DC143C", wing="#FF4500", head="#B22222", tail="#FF6347"),
            _palette("golden", "#FFD700", wing="#FFA500", head="#FF6347", tail="#FFFF00"),
            _palette("white", "#F5F5F5", wing="#E6E6FA", head="#FFFFFF", tail="#F0F8FF"),
            _palette("rainbow", "#FF6347", wing="#9370DB", head="#4169E1", tail="#DA70D6"),
            _palette("cosmic", "#9370DB", wing="#8A2BE2", head="#9932CC", tail="#DA70D6"),
        ], default="fiery_red"),
        "basilisk": Axis.build("color", [
            _palette("green", "#2E8B57", head="#006400", tail="#2E8B57"),
            _palette("brown", "#8B4513", head="#654321", tail="#8B4513"),
            _palette("gray", "#696969", head="#505050", tail="#696969"),
            _palette("black", "#2F2F2F", head="#1C1C1C", tail="#2F2F2F"),
        ], default="green"),
        "mermaid": Axis.build("color", [
            _palette("blue", "#FFDAB9", tail="#1E90FF", hair="#FFD700"),
            _palette("green", "#FFDAB9", tail="#2E8B57", hair="#8B4513"),
            _palette("purple", "#FFDAB9", tail="#8A2BE2", hair="#000000"),
            _palette("silver", "#FFE4E1", tail="#C0C0C0", hair="#F5F5F5"),
            _palette("golden", "#DEB887", tail="#FFD700", hair="#B22222"),
        ], default="blue"),
        "centaur": Axis.build("color", [
            _palette("brown", "#8B4513", torso="#DEB887", hair="#3B2F2F"),
            _palette("black", "#1C1C1C", torso="#D2B48C", hair="#000000"),
            _palette("white", "#F5F5F5", torso="#FFE4C4", hair="#F5DEB3"),
            _palette("chestnut", "#954535", torso="#DEB887", hair="#8B4513"),
            _palette("gray", "#808080", torso="#D2B48C", hair="#696969"),
        ], default="brown"),
        "sphinx": Axis.build("color", [
            _palette("sand", "#C2B280", head="#DEB887", wing="#D2B48C"),
            _palette("golden", "#DAA520", head="#F0E68C", wing="#FFD700"),
            _palette("black", "#2F2F2F", head="#696969", wing="#1C1C1C"),
            _palette("white", "#F5F5F5", head="#FFFFFF", wing="#E6E6FA"),
        ], default="sand"),
        "kraken": Axis.build("color", [
            _palette("deep_blue", "#00008B", tentacle="#191970"),
            _palette("purple", "#4B0082", tentacle="#8A2BE2"),
            _palette("black", "#1C1C1C", tentacle="#2F2F2F"),
            _palette("bioluminescent", "#008B8B", tentacle="#20B2AA"),
        ], default="deep_blue"),
        "pegasus": Axis.build("color", [
            _palette("white", "#F5F5F5", wing="#FFFFFF", mane="#E6E6FA"),
            _palette("gray", "#A9A9A9", wing="#D3D3D3", mane="#696969"),
            _palette("black", "#1C1C1C", wing="#2F2F2F", mane="#000000"),
            _palette("golden", "#FFD700", wing="#FFFACD", mane="#FFA500"),
        ], default="white"),
    },
)


def _poses(*keys: str, default: str | None = None) -> Axis:
    boosts = {
        "flying": {"speed": 1.2},
        "running": {"speed": 1.15},
        "galloping": {"speed": 1.15},
        "roaring": {"power": 1.1},
        "breathing_fire": {"power": 1.2},
        "striking": {"power": 1.1},
        "attacking": {"power": 1.15},
        "hunting": {"power": 1.05, "speed": 1.05},
        "guarding": {"health": 1.1},
        "archery": {"power": 1.1},
        "magical": {"magic": 1.15},
        "magical_glow": {"magic": 1.15},
        "bursting": {"magic": 1.2},
    }
    return Axis.build("pose", [template(k, k.replace("_", " ").title(), **boosts.get(k, {})) for k in keys], default)


POSE_AXIS = DependentAxis(
    "pose",
    "type",
    {
        "dragon": _poses("flying", "standing", "sleeping", "roaring", "breathing_fire", default="standing"),
        "unicorn": _poses("standing", "running", "grazing", "magical_glow"),
        "griffin": _poses("standing", "flying", "guarding", "hunting"),
        "phoenix": _poses("flying", "perched", "rising", "bursting"),
        "basilisk": _poses("coiled", "striking", "glaring", "slithering"),
        "mermaid": _poses("swimming", "singing", "resting", "magical"),
        "centaur": _poses("standing", "running", "archery", "guarding"),
        "sphinx": _poses("sitting", "guarding", "mysterious", "wise"),
        "kraken": _poses("emerging", "tentacles", "submerged", "attacking"),
        "pegasus": _poses("flying", "standing", "galloping", "magical"),
    },
)


def _traits(*keys: str, **modifiers: dict[str, float]) -> Axis:
    return Axis.build(
        "trait",
        [template(k, k.replace("_", " ").title(), features=(k,), **modifiers.get(k, {})) for k in keys],
    )


TRAIT_AXIS = DependentAxis(
    "trait",
    "type",
    {
        "dragon": _traits("fire", "ice", "lightning", "poison", "acid"),
        "unicorn": _traits("spiral", "straight", "curved", "crystal", "flame", crystal={"magic": 1.1}),
        "griffin": _traits("majestic", "battle_torn", "feathered", "leathery", battle_torn={"speed": 0.9}),
        "phoenix": _traits("flames", "sparks", "light_rays", "energy_waves"),
        "basilisk": _traits("petrification", "venom", "hypnosis", "regeneration", regeneration={"health": 1.2}),
        "mermaid": _traits("shell_necklace", "pearl_crown", "trident", "starfish", trident={"power": 1.15}),
        "centaur": _traits("bow", "spear", "sword", "staff", staff={"magic": 1.3}),
        "sphinx": _traits("crown", "necklace", "bracelets"),
        "kraken": _traits("bubbles", "lightning", "ink_cloud", "waves"),
        "pegasus": _traits("majestic", "storm", "ethereal", "battle", ethereal={"magic": 1.1}),
    },
)

AXES = (TYPE_AXIS, VARIANT_AXIS, SIZE_AXIS, COLOR_AXIS, POSE_AXIS, TRAIT_AXIS)

STAT_FIELDS = ("power", "health", "speed", "magic")


def _multiplier(sel: Selection) -> float:
    size = sel.get("size")
    return 1.0 if size is None else size.extra("multiplier", 1.0)


def size_for(config: Configuration, sel: Selection) -> tuple[int, int]:
    w, h = sel["type"].extra("layout")
    m = _multiplier(sel)
    return max(48, math.ceil(w * m * 2.5)), max(48, math.ceil(h * m * 1.8))


def build(config: Configuration, sel: Selection, rng: random.Random) -> ResolvedAsset:
    kind, variant, color = sel["type"], sel["variant"], sel["color"]
    stats: dict[str, int | float] = compose_stats(sel, STAT_FIELDS)
    rarity = kind.extra("rarity")
    if "size" in sel and _multiplier(sel) >= 1.4:
        rarity = min(5, rarity + 1)
    stats["rarity"] = rarity
    size = sel.get("size")
    return ResolvedAsset(
        stats=stats,
        features=merge_features([kind.key], variant.features, sel["trait"].features),
        name=render_name(
            "{size} {color} {variant} {kind}",
            size=size.name if size is not None and size.key != "adult" else "",
            color=color.name,
            variant=variant.name,
            kind=kind.name,
        ),
        description=f"A {sel['pose'].name.lower()} {variant.name.lower()} {kind.key} with {sel['trait'].name.lower()}.",
        selection={axis: t.key for axis, t in sel.items()},
        extras={
            "animation_frames": kind.extra("frames"),
            "effect": variant.extra("effect"),
            "magical_effects": list(EFFECT_COLORS[variant.extra("effect")]),
        },
    )


# -- shared geometry


def _geometry(ctx: DrawContext) -> tuple[float, float, float, float]:
    """Creature box on the canvas: (centre x, top y, width, height)."""
    lw, lh = ctx.pick("type").extra("layout")
    m = _multiplier(ctx.selection)
    s = ctx.scale
    w, h = lw * m * s, lh * m * s
    return ctx.cx, ctx.height - h - 10 * s, w, h


def _part(ctx: DrawContext, part: str) -> Color:
    palette = ctx.pick("color")
    value = palette.extra("parts", {}).get(part)
    if value is None:
        return palette.color or Color.from_hex("#808080")
    return Color.from_hex(value)


def _effect_colors(ctx: DrawContext) -> tuple[Color, ...]:
    return hex_colors(*EFFECT_COLORS[ctx.asset.extras["effect"]])


def _legs(ctx: DrawContext, xs: tuple[float, ...], top: float, length: float, color: Color) -> None:
    s = ctx.scale
    for x, dy in xs:
        filled_rect(ctx.canvas, x - 3 * s, top + dy, 6 * s, length, color)
        filled_ellipse(ctx.canvas, x, top + dy + length, 4 * s, 5 * s, BLACK)


def _wings(ctx: DrawContext, cx: float, y: float, w: float, h: float, color: Color, span: float, spread: bool) -> None:
    """Triangular wings; ``spread`` raises them above the back."""
    for side in (-1, 1):
        if spread:
            pts = [
                (cx + side * w * 0.15, y + h * 0.2),
                (cx + side * w * span * 0.4, y - h * 0.2),
                (cx + side * w * span * 0.2, y + h * 0.1),
            ]
        else:
            pts = [
                (cx + side * w * 0.15, y + h * 0.2),
                (cx + side * w * 0.35, y - h * 0.1),
                (cx + side * w * 0.05, y + h * 0.3),
            ]
        filled_polygon(ctx.canvas, pts, color)


def _segmented_tail(
    ctx: DrawContext,
    start: tuple[float, float],
    count: int,
    step: tuple[float, float],
    radius: float,
    shrink: float,
    color: Color,
    *,
    wave: float = 0.0,
) -> tuple[float, float]:
    x0, y0 = start
    x = y = 0.0
    for i in range(count):
        x = x0 + i * step[0]
        y = y0 + i * step[1] + math.sin(i * 0.5) * wave
        r = max(1.0, radius - i * shrink)
        filled_ellipse(ctx.canvas, x, y, r, r * 0.7, color)
    return x, y


def _eyes(ctx: DrawContext, points: list[tuple[float, float]], rx: float, ry: float, iris: Color) -> None:
    for ex, ey in points:
        filled_ellipse(ctx.canvas, ex, ey, rx, ry, iris)
        filled_ellipse(ctx.canvas, ex, ey, rx * 0.5, ry * 0.6, BLACK)


def _horse(ctx: DrawContext, cx: float, y: float, w: float, h: float, body: Color) -> None:
    filled_ellipse(ctx.canvas, cx, y + h * 0.4, w * 0.4, h * 0.35, body)
    filled_ellipse(ctx.canvas, cx - w * 0.25, y + h * 0.1, w * 0.15, h * 0.2, body)
    legs = ((cx - w * 0.35, h * 0.6), (cx - w * 0.15, h * 0.6), (cx + w * 0.15, h * 0.6), (cx + w * 0.35, h * 0.6))
    if ctx.key("pose") in ("running", "galloping"):
        legs = ((cx - w * 0.42, h * 0.55), (cx - w * 0.1, h * 0.6), (cx + w * 0.1, h * 0.6), (cx + w * 0.42, h * 0.55))
    _legs(ctx, legs, y, h * 0.35, body)
    filled_ellipse(ctx.canvas, cx + w * 0.4, y + h * 0.3, w * 0.08, h * 0.3, body)
    _eyes(ctx, [(cx - w * 0.3, y + h * 0.05)], 2 * ctx.scale, 2 * ctx.scale, Color.from_hex("#4B3621"))


def _mane(ctx: DrawContext, cx: float, y: float, w: float, h: float, color: Color) -> None:
    s = ctx.scale
    for i in range(15):
        filled_ellipse(ctx.canvas, cx - w * 0.2 + math.sin(i * 0.3) * 8 * s, y + h * 0.05 + i * 3 * s * h / 90, 3 * s, 6 * s, color)


def _lion(ctx: DrawContext, cx: float, y: float, w: float, h: float, body: Color) -> None:
    filled_ellipse(ctx.canvas, cx, y + h * 0.4, w * 0.35, h * 0.3, body)
    legs = ((cx - w * 0.25, h * 0.6), (cx - w * 0.1, h * 0.6), (cx + w * 0.1, h * 0.6), (cx + w * 0.25, h * 0.6))
    _legs(ctx, legs, y, h * 0.35, body)


# -- body plans


def _dragon(ctx: DrawContext) -> None:
    cx, y, w, h = _geometry(ctx)
    body, pose = _part(ctx, "body"), ctx.key("pose")
    for i in range(6):
        filled_ellipse(ctx.canvas, cx - w * 0.3 + i * w * 0.1, y + h * 0.3 + i * h * 0.05,
                       w * (0.8 - i * 0.1) * 0.5, h * (0.6 - i * 0.05) * 0.5, body)
    _legs(ctx, ((cx - w * 0.35, h * 0.7), (cx - w * 0.15, h * 0.72), (cx + w * 0.15, h * 0.72), (cx + w * 0.35, h * 0.7)),
          y, h * 0.25, body)
    if pose == "flying" or ctx.key("size") != "hatchling":
        _wings(ctx, cx, y, w, h, _part(ctx, "wing"), 1.5, pose == "flying")

    tail = _part(ctx, "tail")
    tx, ty = _segmented_tail(ctx, (cx + w * 0.4, y + h * 0.5), 8, (w * 0.08, h * 0.05), w * 0.15, w * 0.015, tail)
    for i in range(0, 8, 2):
        r = w * (0.15 - i * 0.015)
        filled_ellipse(ctx.canvas, cx + w * 0.4 + i * w * 0.08, y + h * 0.5 + i * h * 0.05 - r * 0.8, r * 0.3, r * 0.5, tail)
    filled_polygon(ctx.canvas, [(tx, ty - w * 0.06), (tx + w * 0.1, ty), (tx, ty + w * 0.06)], tail)

    head = w * 0.25
    hx, hy = cx - w * 0.35, y + h * 0.15
    filled_ellipse(ctx.canvas, hx, hy, head, head * 0.8, _part(ctx, "head"))
    horn = _part(ctx, "horn")
    filled_ellipse(ctx.canvas, hx - head * 0.4, hy - head * 0.4, head * 0.1, head * 0.3, horn)
    filled_ellipse(ctx.canvas, hx + head * 0.4, hy - head * 0.4, head * 0.1, head * 0.3, horn)
    iris = Color.from_hex("#FF0000") if ctx.key("variant") == "shadow" else YELLOW
    if pose == "sleeping":
        for side in (-1, 1):
            line(ctx.canvas, hx + side * head * 0.4, hy - head * 0.1, hx + side * head * 0.2, hy - head * 0.1, BLACK)
    else:
        _eyes(ctx, [(hx - head * 0.3, hy - head * 0.1), (hx + head * 0.3, hy - head * 0.1)], head * 0.15, head * 0.2, iris)
    filled_ellipse(ctx.canvas, hx - head * 0.15, hy + head * 0.2, head * 0.05, head * 0.08, BLACK)
    filled_ellipse(ctx.canvas, hx + head * 0.15, hy + head * 0.2, head * 0.05, head * 0.08, BLACK)
    if pose in ("roaring", "breathing_fire"):
        for i in range(6):
            filled_rect(ctx.canvas, hx - head * 0.25 + i * head * 0.08, hy + head * 0.35, 2 * ctx.scale, head * 0.15, WHITE)


def _unicorn(ctx: DrawContext) -> None:
    cx, y, w, h = _geometry(ctx)
    _horse(ctx, cx, y, w, h, _part(ctx, "body"))


def _pegasus(ctx: DrawContext) -> None:
    cx, y, w, h = _geometry(ctx)
    flying = ctx.key("pose") in ("flying", "magical")
    _wings(ctx, cx, y + h * 0.15, w, h, _part(ctx, "wing"), 1.4, flying)
    _horse(ctx, cx, y, w, h, _part(ctx, "body"))


def _griffin(ctx: DrawContext) -> None:
    cx, y, w, h = _geometry(ctx)
    body = _part(ctx, "body")
    _wings(ctx, cx, y, w, h, _part(ctx, "wing"), 1.3, ctx.key("pose") == "flying")
    _lion(ctx, cx, y, w, h, body)
    tail = _part(ctx, "tail")
    tx, ty = _segmented_tail(ctx, (cx + w * 0.35, y + h * 0.4), 6, (w * 0.075, 0), w * 0.1, w * 0.01, tail, wave=h * 0.08)
    filled_ellipse(ctx.canvas, tx + w * 0.03, ty, 3 * ctx.scale, 5 * ctx.scale, tail.lighten(-30))
    head = w * 0.2
    hx, hy = cx - w * 0.3, y + h * 0.1
    filled_ellipse(ctx.canvas, hx, hy, head, head * 0.9, _part(ctx, "head"))
    _eyes(ctx, [(hx - head * 0.25, hy - head * 0.1), (hx + head * 0.25, hy - head * 0.1)], head * 0.15, head * 0.2, YELLOW)
    filled_polygon(ctx.canvas, [(hx - head * 0.7, hy), (hx - head * 1.3, hy + head * 0.3), (hx - head * 0.6, hy + head * 0.4)],
                   _part(ctx, "beak"))


def _phoenix(ctx: DrawContext) -> None:
    cx, y, w, h = _geometry(ctx)
    pose = ctx.key("pose")
    _wings(ctx, cx, y, w, h, _part(ctx, "wing"), 1.5, pose in ("flying", "rising", "bursting"))
    body = _part(ctx, "body")
    filled_ellipse(ctx.canvas, cx, y + h * 0.4, w * 0.3, h * 0.35, body)
    if pose == "perched":
        _legs(ctx, ((cx - w * 0.15, h * 0.7), (cx + w * 0.15, h * 0.7)), y, h * 0.25, body)
    tail = _part(ctx, "tail")
    for i in range(6):
        tx = cx + w * 0.25 + i * w * 0.09
        ty = y + h * 0.4 + math.sin(i * 0.5) * h * 0.1
        r = w * (0.12 - i * 0.015)
        filled_ellipse(ctx.canvas, tx, ty, r, r * 0.8, tail)
        if i > 3:
            filled_ellipse(ctx.canvas, tx, ty - r * 0.5, r * 0.8, r * 0.4, FLAME)
    head = w * 0.18
    hx, hy = cx - w * 0.2, y + h * 0.1
    filled_ellipse(ctx.canvas, hx, hy, head, head * 0.9, _part(ctx, "head"))
    iris = Color.from_hex("#9370DB") if ctx.key("variant") == "cosmic" else YELLOW
    _eyes(ctx, [(hx - w * 0.05, hy - h * 0.02), (hx + w * 0.05, hy - h * 0.02)], head * 0.15, head * 0.2, iris)
    filled_ellipse(ctx.canvas, hx - w * 0.1, hy + h * 0.02, head * 0.1, head * 0.15, Color.from_hex("#FFA500"))
    for i in range(8):
        filled_ellipse(ctx.canvas, hx + math.cos(i / 8 * math.pi) * head * 0.8, hy - h * 0.05 - math.sin(i / 8 * math.pi) * head * 0.4,
                       2 * ctx.scale, 4 * ctx.scale, FLAME)


def _basilisk(ctx: DrawContext) -> None:
    cx, y, w, h = _geometry(ctx)
    body = _part(ctx, "body")
    if ctx.key("pose") == "coiled":
        for i in range(5):
            angle = i * math.tau / 5
            filled_ellipse(ctx.canvas, cx + math.cos(angle) * w * 0.2, y + h * 0.5 + math.sin(angle) * h * 0.2,
                           w * (0.15 - i * 0.01), h * (0.12 - i * 0.008), body)
        filled_ellipse(ctx.canvas, cx, y + h * 0.5, w * 0.15, h * 0.15, body)
    else:
        filled_ellipse(ctx.canvas, cx, y + h * 0.5, w * 0.4, h * 0.3, body)
    _segmented_tail(ctx, (cx + w * 0.35, y + h * 0.6), 8, (w * 0.06, h * 0.02), w * 0.1, w * 0.01, _part(ctx, "tail"), wave=h * 0.1)
    head = w * 0.15
    hx = cx - w * 0.4
    hy = y + (h * 0.15 if ctx.key("pose") == "striking" else h * 0.3)
    filled_ellipse(ctx.canvas, hx, hy, head, head * 0.9, _part(ctx, "head"))
    iris = Color.from_hex("#9370DB") if ctx.key("variant") == "hypnotic" else YELLOW
    _eyes(ctx, [(hx - head * 0.3, hy - head * 0.1), (hx + head * 0.3, hy - head * 0.1)], head * 0.15, head * 0.2, iris)
    filled_rect(ctx.canvas, hx - head * 0.1, hy + head * 0.3, 2 * ctx.scale, head * 0.2, WHITE)
    filled_rect(ctx.canvas, hx + head * 0.1, hy + head * 0.3, 2 * ctx.scale, head * 0.2, WHITE)
    for i in range(3):
        filled_ellipse(ctx.canvas, hx - head * 0.4 + i * head * 0.4, hy - head * 0.9, 3 * ctx.scale, 6 * ctx.scale, _part(ctx, "head"))


def _mermaid(ctx: DrawContext) -> None:
    cx, y, w, h = _geometry(ctx)
    tail = _part(ctx, "tail")
    for i in range(8):
        ty = y + h * 0.4 + i * h * 0.06
        filled_ellipse(ctx.canvas, cx + math.sin(i * 0.6) * w * 0.05, ty, w * (0.28 - i * 0.025), h * 0.05, tail)
    fin_y = y + h * 0.9
    filled_polygon(ctx.canvas, [(cx, fin_y - h * 0.05), (cx - w * 0.4, fin_y + h * 0.08), (cx - w * 0.1, fin_y + h * 0.02)], tail)
    filled_polygon(ctx.canvas, [(cx, fin_y - h * 0.05), (cx + w * 0.4, fin_y + h * 0.08), (cx + w * 0.1, fin_y + h * 0.02)], tail)

    skin = _part(ctx, "body")
    filled_ellipse(ctx.canvas, cx, y + h * 0.28, w * 0.3, h * 0.15, skin)
    filled_ellipse(ctx.canvas, cx - w * 0.35, y + h * 0.25, w * 0.08, h * 0.12, skin)
    filled_ellipse(ctx.canvas, cx + w * 0.35, y + h * 0.25, w * 0.08, h * 0.12, skin)
    filled_ellipse(ctx.canvas, cx, y + h * 0.08, w * 0.18, h * 0.08, skin)
    _eyes(ctx, [(cx - w * 0.06, y + h * 0.07), (cx + w * 0.06, y + h * 0.07)], 1.5 * ctx.scale, 1.5 * ctx.scale,
          Color.from_hex("#1E90FF"))


def _centaur(ctx: DrawContext) -> None:
    cx, y, w, h = _geometry(ctx)
    horse = _part(ctx, "body")
    filled_ellipse(ctx.canvas, cx, y + h * 0.55, w * 0.4, h * 0.15, horse)
    _legs(ctx, ((cx - w * 0.3, h * 0.6), (cx - w * 0.12, h * 0.62), (cx + w * 0.12, h * 0.62), (cx + w * 0.3, h * 0.6)),
          y, h * 0.3, horse)
    filled_ellipse(ctx.canvas, cx + w * 0.42, y + h * 0.55, w * 0.06, h * 0.15, _part(ctx, "hair"))

    torso = _part(ctx, "torso")
    tx = cx - w * 0.25
    filled_ellipse(ctx.canvas, tx, y + h * 0.3, w * 0.15, h * 0.16, torso)
    filled_ellipse(ctx.canvas, tx - w * 0.18, y + h * 0.28, w * 0.05, h * 0.11, torso)
    filled_ellipse(ctx.canvas, tx + w * 0.18, y + h * 0.28, w * 0.05, h * 0.11, torso)
    filled_ellipse(ctx.canvas, tx, y + h * 0.08, w * 0.12, h * 0.07, torso)
    hair = _part(ctx, "hair")
    for i in range(8):
        filled_ellipse(ctx.canvas, tx - w * 0.1 + i * w * 0.03, y + h * 0.03, 3 * ctx.scale, 4 * ctx.scale, hair)


def _sphinx(ctx: DrawContext) -> None:
    cx, y, w, h = _geometry(ctx)
    _wings(ctx, cx + w * 0.1, y + h * 0.1, w, h, _part(ctx, "wing"), 1.2, False)
    body = _part(ctx, "body")
    _lion(ctx, cx, y, w, h, body)
    filled_ellipse(ctx.canvas, cx + w * 0.35, y + h * 0.4, w * 0.08, h * 0.2, body)
    head = w * 0.15
    hx, hy = cx - w * 0.3, y + h * 0.15
    headdress = Color.from_hex("#4169E1")
    filled_polygon(ctx.canvas, [(hx - head * 1.2, hy + head), (hx, hy - head * 1.1), (hx + head * 1.2, hy + head)], headdress)
    for i in range(5):
        filled_rect(ctx.canvas, hx - head * 1.1 + i * head * 0.5, hy, head * 0.2, head, GOLD)
    filled_ellipse(ctx.canvas, hx, hy, head * 0.75, head * 0.9, _part(ctx, "head"))
    _eyes(ctx, [(hx - head * 0.3, hy - head * 0.15), (hx + head * 0.3, hy - head * 0.15)], head * 0.15, head * 0.12, BLACK)


def _kraken(ctx: DrawContext) -> None:
    cx, y, w, h = _geometry(ctx)
    body = _part(ctx, "body")
    tentacle = _part(ctx, "tentacle")
    s = ctx.scale
    raised = ctx.key("pose") in ("tentacles", "attacking")
    for t in range(8):
        base_x = cx - w * 0.35 + t * w * 0.1
        base_y = y + h * 0.55
        for i in range(12):
            sway = math.sin(i * 0.5 + t) * w * 0.04
            lift = -i * h * 0.03 if raised and t in (0, 7) else i * h * 0.035
            sx = base_x + (t - 3.5) * i * w * 0.012 + sway
            sy = base_y + lift
            r = max(1.5 * s, w * (0.045 - i * 0.003))
            filled_ellipse(ctx.canvas, sx, sy, r, r * 0.8, tentacle)
            if i % 3 == 1:
                filled_ellipse(ctx.canvas, sx, sy + r * 0.4, max(1.0, s), max(1.0, s), BLACK)
    filled_ellipse(ctx.canvas, cx, y + h * 0.3, w * 0.4 * 0.6, h * 0.4, body)
    _eyes(ctx, [(cx - w * 0.1, y + h * 0.3), (cx + w * 0.1, y + h * 0.3)], w * 0.05, h * 0.07, YELLOW)
    filled_ellipse(ctx.canvas, cx, y + h * 0.45, w * 0.03, h * 0.04, Color.from_hex("#8B4513"))


_BODIES = {
    "dragon": _dragon,
    "unicorn": _unicorn,
    "griffin": _griffin,
    "phoenix": _phoenix,
    "basilisk": _basilisk,
    "mermaid": _mermaid,
    "centaur": _centaur,
    "sphinx": _sphinx,
    "kraken": _kraken,
    "pegasus": _pegasus,
}


def draw_body(ctx: DrawContext) -> None:
    _BODIES[ctx.key("type")](ctx)


# -- type specific details (horns, manes, accessories)


def _horn(ctx: DrawContext, cx: float, y: float, w: float, h: float) -> None:
    hbx, hby = cx - w * 0.25, y + h * 0.0
    color = {
        "celestial": "#FFD700",
        "forest": "#98FB98",
        "arctic": "#E0FFFF",
        "volcanic": "#FF4500",
        "ethereal": "#DDA0DD",
    }[ctx.key("variant")]
    horn = Color.from_hex(color)
    s = ctx.scale
    kind = ctx.key("trait")
    if kind == "spiral":
        for i in range(20):
            angle = i / 20 * math.tau * 2
            r = (1 + i / 20 * 2) * s
            filled_ellipse(ctx.canvas, hbx + math.cos(angle) * r, hby - i / 20 * h * 0.25, 1.5 * s, 1.5 * s, horn)
    elif kind == "straight":
        filled_polygon(ctx.canvas, [(hbx - 2 * s, hby), (hbx, hby - h * 0.28), (hbx + 2 * s, hby)], horn)
    elif kind == "curved":
        for i in range(15):
            t = i / 15
            filled_ellipse(ctx.canvas, hbx - math.sin(t * 1.5) * w * 0.06, hby - t * h * 0.25, 2 * s * (1 - t * 0.6), 2 * s, horn)
    elif kind == "crystal":
        for i in range(15):
            filled_ellipse(ctx.canvas, hbx + math.sin(i * 0.4) * 3 * s, hby - i / 15 * h * 0.25, 2 * s, 2 * s, horn)
        for i in range(6):
            line(ctx.canvas, hbx, hby, hbx + math.cos(i / 6 * math.tau) * 4 * s, hby - h * 0.15, horn.lighten(-30))
    else:
        filled_polygon(ctx.canvas, [(hbx - 3 * s, hby), (hbx, hby - h * 0.3), (hbx + 3 * s, hby)], FLAME)
        filled_polygon(ctx.canvas, [(hbx - 1.5 * s, hby), (hbx, hby - h * 0.18), (hbx + 1.5 * s, hby)], YELLOW)
    radial_glow(ctx.canvas, hbx, hby - h * 0.12, 0, h * 0.12, horn, 100)


def _wing_marks(ctx: DrawContext, cx: float, y: float, w: float, h: float) -> None:
    trait = ctx.key("trait")
    rng = ctx.rng
    wing = _part(ctx, "wing")
    if trait in ("battle_torn", "battle"):
        for _ in range(6):
            px = cx + (rng.random() - 0.5) * w
            py = y + rng.random() * h * 0.3
            if ctx.canvas.is_opaque(int(px), int(py)):
                filled_ellipse(ctx.canvas, px, py, 2 * ctx.scale, 2 * ctx.scale, TRANSPARENT)
    elif trait in ("feathered", "majestic"):
        for _ in range(12):
            px = cx + (rng.random() - 0.5) * w * 1.2
            py = y + rng.random() * h * 0.3
            if ctx.canvas.is_opaque(int(px), int(py)):
                line(ctx.canvas, px, py, px + 3 * ctx.scale, py + 4 * ctx.scale, wing.lighten(-30))
    elif trait == "storm":
        particle_scatter(ctx.canvas, Region.around(cx, y, w * 0.6, h * 0.3), 8, (Color.from_hex("#87CEEB"),), rng, radius=(1, 2))
    elif trait == "ethereal":
        particle_scatter(ctx.canvas, Region.around(cx, y, w * 0.6, h * 0.3), 12, (Color.from_hex("#E6E6FA"),), rng, radius=(1, 1))


def draw_details(ctx: DrawContext) -> None:
    kind = ctx.key("type")
    cx, y, w, h = _geometry(ctx)
    rng = ctx.rng
    s = ctx.scale
    c = ctx.canvas
    trait = ctx.key("trait")
    if kind == "dragon":
        scale = _part(ctx, "body").lighten(-25)
        for _ in range(30):
            px = cx + (rng.random() - 0.5) * w * 0.8
            py = y + h * 0.2 + rng.random() * h * 0.5
            if c.is_opaque(int(px), int(py)):
                filled_ellipse(c, px, py, 1.5 * s, 2 * s, scale)
        for i in range(6):
            sx = cx - w * 0.25 + i * w * 0.1
            sy = y + h * 0.3 + i * h * 0.05 - h * (0.6 - i * 0.05) * 0.5
            filled_polygon(c, [(sx - 3 * s, sy + 2 * s), (sx, sy - 6 * s), (sx + 3 * s, sy + 2 * s)], _part(ctx, "horn"))
        if ctx.key("pose") == "flying":
            wing = _part(ctx, "wing").lighten(-20)
            for side in (-1, 1):
                root = (cx + side * w * 0.15, y + h * 0.2)
                for k in range(3):
                    tip = (cx + side * w * (0.3 + k * 0.12), y - h * 0.2 + k * h * 0.1)
                    line(c, root[0], root[1], tip[0], tip[1], wing)
    elif kind in ("unicorn", "pegasus"):
        _mane(ctx, cx, y, w, h, _part(ctx, "mane"))
        if kind == "unicorn":
            _horn(ctx, cx, y, w, h)
        else:
            _wing_marks(ctx, cx, y + h * 0.15, w, h)
    elif kind == "griffin":
        fur = _part(ctx, "body").lighten(-20)
        for _ in range(20):
            px = cx + (rng.random() - 0.5) * w * 0.6
            py = y + h * 0.2 + rng.random() * h * 0.4
            if c.is_opaque(int(px), int(py)):
                filled_ellipse(c, px, py, 1 * s, 1.5 * s, fur)
        if ctx.key("variant") == "noble":
            filled_ellipse(c, cx - w * 0.3, y, 2 * s, 2 * s, GOLD)
        _wing_marks(ctx, cx, y, w, h)
    elif kind == "phoenix":
        for _ in range(10):
            filled_ellipse(c, cx + (rng.random() - 0.5) * w * 1.2, y + rng.random() * h * 0.4, 1.5 * s, 2.5 * s, FLAME)
    elif kind == "basilisk":
        scale = _part(ctx, "body").lighten(-25)
        for _ in range(25):
            px, py = cx + (rng.random() - 0.5) * w * 0.8, y + h * 0.3 + rng.random() * h * 0.4
            if c.is_opaque(int(px), int(py)):
                filled_ellipse(c, px, py, 1.5 * s, 1 * s, scale)
    elif kind == "mermaid":
        scale = _part(ctx, "tail").lighten(-20)
        for i in range(30):
            px, py = cx + (rng.random() - 0.5) * w * 0.4, y + h * 0.4 + rng.random() * h * 0.45
            if c.is_opaque(int(px), int(py)):
                filled_ellipse(c, px, py, 1.5 * s, 1 * s, scale)
        hair = _part(ctx, "hair")
        for i in range(12):
            hw = max(1.0, 6 - i * 0.4) * s
            filled_ellipse(c, cx + (i % 2 * 2 - 1) * w * 0.12, y + h * 0.04 + i * h * 0.02, hw * 0.5, 3 * s, hair)
        if trait == "shell_necklace":
            for i in range(5):
                filled_ellipse(c, cx - w * 0.16 + i * w * 0.08, y + h * 0.18 + abs(i - 2) * -h * 0.01, 2 * s, 1.5 * s,
                               Color.from_hex("#FFE4B5"))
        elif trait == "pearl_crown":
            for i in range(5):
                filled_ellipse(c, cx - w * 0.12 + i * w * 0.06, y, 1.5 * s, 1.5 * s, Color.from_hex("#F5F5F5"))
        elif trait == "trident":
            tx = cx + w * 0.42
            line(c, tx, y, tx, y + h * 0.5, GOLD, width=2 * s)
            for dx in (-4, 0, 4):
                line(c, tx + dx * s, y - 6 * s, tx + dx * s, y, GOLD)
            line(c, tx - 4 * s, y, tx + 4 * s, y, GOLD)
        else:
            sx, sy = cx - w * 0.3, y + h * 0.15
            pts = []
            for i in range(10):
                r = 4 * s if i % 2 == 0 else 1.8 * s
                a = i * math.tau / 10 - math.pi / 2
                pts.append((sx + math.cos(a) * r, sy + math.sin(a) * r))
            filled_polygon(c, pts, Color.from_hex("#FF7F50"))
    elif kind == "centaur":
        tx = cx - w * 0.25
        brown = Color.from_hex("#8B4513")
        silver = Color.from_hex("#C0C0C0")
        if trait == "bow":
            for i in range(12):
                a = -math.pi / 2 + i * math.pi / 11
                filled_ellipse(c, tx - w * 0.25 + math.cos(a) * w * 0.05, y + h * 0.28 + math.sin(a) * h * 0.12, s, s, brown)
            line(c, tx - w * 0.25, y + h * 0.16, tx - w * 0.25, y + h * 0.4, WHITE)
        elif trait == "spear":
            filled_rect(c, tx - w * 0.25, y, 2 * s, h * 0.45, brown)
            filled_polygon(c, [(tx - w * 0.25 - 3 * s, y), (tx - w * 0.25 + s, y - 8 * s), (tx - w * 0.25 + 5 * s, y)], silver)
        elif trait == "sword":
            line(c, tx - w * 0.23, y + h * 0.3, tx - w * 0.23, y + h * 0.08, silver, width=2 * s)
            line(c, tx - w * 0.28, y + h * 0.3, tx - w * 0.18, y + h * 0.3, GOLD, width=2 * s)
        else:
            filled_rect(c, tx - w * 0.25, y + h * 0.02, 2 * s, h * 0.45, brown)
            filled_ellipse(c, tx - w * 0.25 + s, y, 3 * s, 3 * s, Color.from_hex("#9370DB"))
        marks = Color.from_hex({"forest": "#228B22", "mountain": "#708090", "desert": "#DAA520",
                                "arctic": "#87CEEB", "noble": "#FFD700"}[ctx.key("variant")])
        for i in range(5):
            filled_ellipse(c, tx - w * 0.08 + i * w * 0.04, y + h * 0.3, s, s, marks)
    elif kind == "sphinx":
        hx, hy = cx - w * 0.3, y + h * 0.15
        head = w * 0.15
        if trait == "crown":
            for i in range(5):
                filled_ellipse(c, hx - head * 0.6 + i * head * 0.3, hy - head * 1.0, 1.5 * s, 2 * s, GOLD)
        elif trait == "necklace":
            for i in range(7):
                a = i / 6 * math.pi
                filled_ellipse(c, hx + math.cos(a) * head * 0.8, hy + head + math.sin(a) * head * 0.4, 1 * s, 1 * s,
                               Color.from_hex("#9370DB"))
        else:
            for bx in (cx - w * 0.25, cx - w * 0.1):
                filled_rect(c, bx - 3 * s, y + h * 0.85, 6 * s, 2 * s, GOLD)
    elif kind == "kraken":
        if ctx.key("color") == "bioluminescent":
            for _ in range(12):
                px, py = cx + (rng.random() - 0.5) * w * 0.8, y + h * 0.5 + rng.random() * h * 0.4
                if c.is_opaque(int(px), int(py)):
                    filled_ellipse(c, px, py, 1.5 * s, 1.5 * s, Color.from_hex("#00FFFF"))


# -- effects and shadow


def draw_effects(ctx: DrawContext) -> None:
    kind = ctx.key("type")
    cx, y, w, h = _geometry(ctx)
    colors = _effect_colors(ctx)
    rng = ctx.rng
    s = ctx.scale
    pose = ctx.key("pose")
    trait = ctx.key("trait")

    if kind == "dragon":
        element = hex_colors(*EFFECT_COLORS[trait if trait in EFFECT_COLORS else "fire"])
        particle_scatter(ctx.canvas, Region(int(cx - w * 0.6), int(y), int(w * 1.2), int(h)), 15, element, rng, radius=(1, 2))
        if pose == "breathing_fire":
            hx, hy = cx - w * 0.35, y + h * 0.2
            head = w * 0.25
            filled_polygon(ctx.canvas, [(hx - head * 0.8, hy), (hx - head * 0.8 - w * 0.4, hy - h * 0.15),
                                        (hx - head * 0.8 - w * 0.4, hy + h * 0.2)], element[0])
            filled_polygon(ctx.canvas, [(hx - head * 0.8, hy), (hx - head * 0.8 - w * 0.25, hy - h * 0.06),
                                        (hx - head * 0.8 - w * 0.25, hy + h * 0.1)], element[-1])
    elif kind == "phoenix":
        if trait == "flames":
            for _ in range(15):
                r = rng.uniform(2, 5) * s
                filled_ellipse(ctx.canvas, cx + (rng.random() - 0.5) * w * 1.4, y + rng.random() * h, r, r * 1.5, FLAME)
        elif trait == "sparks":
            particle_scatter(ctx.canvas, Region(int(cx - w * 0.75), int(y - h * 0.2), int(w * 1.5), int(h * 1.2)),
                             25, (YELLOW,), rng, radius=(1, 1))
        elif trait == "light_rays":
            for i in range(12):
                a = i * math.tau / 12
                line(ctx.canvas, cx + math.cos(a) * w * 0.35, y + h * 0.4 + math.sin(a) * h * 0.4,
                     cx + math.cos(a) * w * 0.6, y + h * 0.4 + math.sin(a) * h * 0.65, GOLD)
        else:
            for r in (0.45, 0.55, 0.65):
                radial_glow(ctx.canvas, cx, y + h * 0.4, w * (r - 0.03), w * r, colors[0], 90)
        radial_glow(ctx.canvas, cx, y + h * 0.4, w * 0.3, w * 0.5, colors[0], 60)
    elif kind == "basilisk":
        variant = ctx.key("variant")
        if variant == "stone" or trait == "petrification":
            grey = Color.from_hex("#696969")
            for _ in range(10):
                filled_ellipse(ctx.canvas, cx + (rng.random() - 0.5) * w, y + h + rng.random() * 6 * s - 4 * s, 1.5 * s, 2 * s, grey)
        if variant == "hypnotic" or trait == "hypnosis":
            hx = cx - w * 0.4
            for i in range(8):
                a = i * math.tau / 8
                filled_ellipse(ctx.canvas, hx + math.cos(a) * w * 0.15, y + h * 0.3 + math.sin(a) * w * 0.15, 2 * s, 2 * s,
                               Color.from_hex("#9370DB"))
        particle_scatter(ctx.canvas, Region(int(cx - w * 0.5), int(y), int(w), int(h)), 6, colors, rng, radius=(1, 1))
    elif kind == "kraken":
        if trait == "bubbles":
            for _ in range(15):
                r = rng.uniform(1.5, 4) * s
                bx, by = cx + (rng.random() - 0.5) * w, y + rng.random() * h * 0.5
                filled_ellipse(ctx.canvas, bx, by, r, r, Color.from_hex("#E0FFFF"))
                filled_ellipse(ctx.canvas, bx - r * 0.3, by - r * 0.3, r * 0.3, r * 0.3, WHITE)
        elif trait == "lightning":
            x, yy = cx + (rng.random() - 0.5) * w * 0.5, y - h * 0.2
            for _ in range(6):
                nx, ny = x + (rng.random() - 0.5) * w * 0.15, yy + h * 0.08
                line(ctx.canvas, x, yy, nx, ny, YELLOW, width=2 * s)
                x, yy = nx, ny
        elif trait == "ink_cloud":
            ink = Color.from_hex("#1C1C1C")
            for _ in range(6):
                filled_ellipse(ctx.canvas, cx + (rng.random() - 0.5) * w, y + h * 0.8 + rng.random() * h * 0.15, w * 0.08, h * 0.05, ink)
        else:
            wave = Color.from_hex("#4682B4")
            for i in range(int(w)):
                wx = cx - w / 2 + i
                line(ctx.canvas, wx, y + h * 0.55 + math.sin(i * 0.2) * 3 * s, wx, y + h * 0.58 + math.sin(i * 0.2) * 3 * s, wave)
    else:
        count = {"unicorn": 12, "pegasus": 10, "mermaid": 10, "centaur": 8, "sphinx": 10, "griffin": 8}[kind]
        particle_scatter(ctx.canvas, Region(int(cx - w * 0.5), int(y), int(w), int(h)), count, colors, rng, radius=(1, 2))
        if pose in ("magical", "magical_glow", "mysterious", "singing"):
            radial_glow(ctx.canvas, cx, y + h * 0.4, w * 0.4, w * 0.6, colors[0], 80)


def draw_shadow(ctx: DrawContext) -> None:
    cx, y, w, h = _geometry(ctx)
    if ctx.key("type") in ("phoenix", "pegasus") and ctx.key("pose") == "flying":
        return
    drop_shadow(ctx.canvas, cx, y + h, w, max(2, int(w * 0.03)))


SPEC = FamilySpec(
    name="creature",
    axes=AXES,
    build=build,
    passes=(("body", draw_body), ("details", draw_details), ("effects", draw_effects), ("shadow", draw_shadow)),
    default_size=(300, 180),
    size_for=size_for,
    description="Dragons, unicorns, griffins, phoenixes and other mythical creatures",
)


def creature_types() -> dict[str, Any]:
    """Per type: the values each sub-axis accepts. Handy for UIs and the ``list`` command."""
    out: dict[str, Any] = {}
    for kind in TYPE_AXIS.choices():
        entry = {}
        for axis in AXES[1:]:
            sub = axis.for_parent(kind)
            if sub is not None:
                entry[axis.name] = list(sub.choices())
        out[kind] = entry
    return out
