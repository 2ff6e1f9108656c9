from __future__ import annotations

"""Light sources: torches, braziers, lanterns, candles, chandeliers and orbs."""

import math
import random
from typing import Any, Literal

from spriteforge.assembler import GenerationResult, generate
from spriteforge.core.color import Color
from spriteforge.core.effects import radial_glow
from spriteforge.core.errors import UnknownAxisValue
from spriteforge.core.primitives import filled_ellipse, filled_polygon, filled_rect, line
from spriteforge.family import DrawContext, FamilySpec, template
from spriteforge.resolver import (
    Axis,
    Configuration,
    ResolvedAsset,
    Selection,
    compose_stats,
    merge_features,
    render_name,
    round_half_up,
)

FlameShape = Literal["flickering", "steady", "roaring", "pulsing", "gentle", "multi_flame"]

BRACKET = Color.from_hex("#2F4F4F")
HANDLE = Color.from_hex("#8B4513")
METAL = Color.from_hex("#C0C0C0")
GLASS = Color.from_hex("#E0FFFF", alpha=110)

TYPE_AXIS = Axis.build(
    "type",
    [
        template("wall_torch", "Wall Torch", brightness=15, duration=120, fuel_consumption=2, light_radius=8,
                 features=("wall_mounted", "ambient_light", "flickering"),
                 description="Torch mounted on a wall for ambient lighting",
                 extras={"mount": "wall_bracket", "flame": ("flickering", 4, 12)}),
        template("handheld_torch", "Handheld Torch", brightness=12, duration=90, fuel_consumption=3, light_radius=6,
                 features=("portable", "combat_ready", "exploration"),
                 description="Portable torch for exploration and combat",
                 extras={"mount": "handheld", "flame": ("flickering", 4, 12)}),
        template("standing_torch", "Standing Torch", brightness=18, duration=150, fuel_consumption=2, light_radius=10,
                 features=("floor_mounted", "area_light", "decorative"),
                 description="Floor-mounted torch for area illumination",
                 extras={"mount": "floor_stand", "flame": ("flickering", 4, 12)}),
        template("brazier", "Brazier", brightness=25, duration=200, fuel_consumption=4, light_radius=12,
                 features=("large_flame", "ceremonial", "durable"),
                 description="Large metal bowl for containing flames",
                 extras={"mount": "metal_bowl", "flame": ("roaring", 8, 16)}),
        template("lantern", "Lantern", brightness=10, duration=180, fuel_consumption=1, light_radius=5,
                 features=("protected_flame", "weatherproof", "portable"),
                 description="Protected flame in a glass enclosure",
                 extras={"mount": "glass_enclosure", "flame": ("gentle", 3, 6)}),
        template("candlestick", "Candlestick", brightness=8, duration=240, fuel_consumption=1, light_radius=4,
                 features=("elegant", "refined", "decorative"),
                 description="Elegant candle holder for refined settings",
                 extras={"mount": "candle_holder", "flame": ("steady", 2, 8)}),
        template("chandelier", "Chandelier", brightness=35, duration=300, fuel_consumption=5, light_radius=15,
                 features=("multi_flame", "grand", "ornate"),
                 description="Ceiling fixture carrying a ring of flames",
                 extras={"mount": "ceiling_fixture", "flame": ("multi_flame", 10, 20)}),
        template("magical_orb", "Magical Orb", brightness=20, duration=-1, fuel_consumption=0, light_radius=8,
                 features=("magical", "floating", "eternal"),
                 description="Floating sphere of conjured light",
                 extras={"mount": "magical_field", "flame": ("pulsing", 6, 6)}),
    ],
    default="wall_torch",
)

# key: (name, core, mid, outer, intensity, stability, magical, features)
_FLAMES = [
    ("normal", "Normal Flame", "#FF4500", "#FFA500", "#FFFF00", 1.0, 0.8, False, ("flickering", "warm", "natural")),
    ("magical", "Magical Flame", "#9370DB", "#00FFFF", "#FFFFFF", 1.5, 1.0, True, ("steady", "magical", "bright")),
    ("colored", "Colored Flame", "#FF1493", "#00FF00", "#4169E1", 1.2, 0.9, True, ("colorful", "magical", "vibrant")),
    ("eternal", "Eternal Flame", "#FFD700", "#FFFFFF", "#F0F8FF", 1.8, 1.0, True, ("eternal", "pure", "divine")),
    ("unstable", "Unstable Flame", "#8B0000", "#FF0000", "#FFFF00", 2.0, 0.3, True, ("volatile", "dangerous", "powerful")),
    ("soulfire", "Soulfire", "#2F2F2F", "#8B0000", "#DC143C", 1.3, 0.9, True, ("soul_bound", "dark", "intense")),
]
FLAME_AXIS = Axis.build(
    "flame",
    [
        template(key, name, color=core, features=feats, brightness=intensity,
                 extras={"colors": (core, mid, outer), "intensity": intensity, "stability": stability, "magical": magical})
        for key, name, core, mid, outer, intensity, stability, magical, feats in _FLAMES
    ],
    default="normal",
)

SIZE_AXIS = Axis.build(
    "size",
    [
        template("small", "Small", brightness=0.7, duration=0.8, light_radius=0.6,
                 features=("small", "discreet", "compact"), extras={"multiplier": 0.6, "pixel_size": 16}),
        template("medium", "", brightness=1.0, duration=1.0, light_radius=1.0,
                 features=("medium", "standard", "balanced"), extras={"multiplier": 1.0, "pixel_size": 24}),
        template("large", "Large", brightness=1.3, duration=1.2, light_radius=1.5,
                 features=("large", "prominent", "powerful"), extras={"multiplier": 1.5, "pixel_size": 32}),
        template("extra_large", "Grand", brightness=1.8, duration=1.5, light_radius=2.2,
                 features=("extra_large", "massive", "dominant"), extras={"multiplier": 2.2, "pixel_size": 40}),
    ],
    default="medium",
)

# key: (prefix, stat, brightness, duration, rarity, description, features)
_QUALITIES = [
    ("common", "", 1.0, 1.0, 1.0, 1, "A standard torch", ("common", "standard", "reliable")),
    ("uncommon", "Fine", 1.2, 1.1, 1.3, 2, "A well-crafted torch", ("uncommon", "enhanced", "improved")),
    ("rare", "Ornate", 1.5, 1.3, 1.8, 3, "An ornate torch", ("rare", "exceptional", "superior")),
    ("epic", "Magnificent", 2.0, 1.6, 2.5, 4, "A magnificent torch", ("epic", "masterwork", "elite")),
    ("legendary", "Legendary", 3.0, 2.0, 4.0, 5, "A legendary torch", ("legendary", "artifact")),
    ("mythical", "Mythical", 5.0, 3.0, 8.0, 6, "A mythical torch", ("mythical", "divine", "ultimate")),
]
QUALITY_AXIS = Axis.build(
    "quality",
    [
        template(key, prefix, features=feats, description=desc, brightness=bm, duration=dm,
                 fuel_consumption=stat, light_radius=stat, extras={"rarity": rarity})
        for key, prefix, stat, bm, dm, rarity, desc, feats in _QUALITIES
    ],
    default="common",
)

MATERIAL_AXIS = Axis.build(
    "material",
    [
        template("wood", "Wood", color="#8B4513", features=("flammable", "natural", "flexible"),
                 extras={"durability": 80, "heat_resistance": 20, "weight": 5}),
        template("metal", "Metal", color="#C0C0C0", features=("durable", "conductive", "heavy"),
                 extras={"durability": 200, "heat_resistance": 100, "weight": 15}),
        template("stone", "Stone", color="#808080", features=("very_durable", "heat_resistant", "heavy"),
                 extras={"durability": 300, "heat_resistance": 150, "weight": 25}),
        template("crystal", "Crystal", color="#E6E6FA", features=("pure", "amplifying", "fragile"),
                 extras={"durability": 150, "heat_resistance": 80, "weight": 8}),
        template("magical", "Magical", color="#9370DB", features=("magical", "eternal", "lightweight"),
                 extras={"durability": 500, "heat_resistance": 200, "weight": 3}),
        template("bone", "Bone", color="#F5F5DC", features=("organic", "ritualistic", "lightweight"),
                 extras={"durability": 120, "heat_resistance": 60, "weight": 6}),
    ],
    default="wood",
)

FUEL_AXIS = Axis.build(
    "fuel",
    [
        template("wood", "Wood", brightness=1.0, duration=120 / 60, features=("natural", "smoky", "renewable"),
                 extras={"burn_time": 120, "smoke": 8}),
        template("oil", "Oil", brightness=1.2, duration=180 / 60, features=("clean", "bright", "efficient"),
                 extras={"burn_time": 180, "smoke": 2}),
        template("wax", "Wax", brightness=0.8, duration=240 / 60, features=("clean", "steady", "long_burning"),
                 extras={"burn_time": 240, "smoke": 1}),
        template("magical", "Magical Essence", brightness=1.5, duration=300 / 60, features=("magical", "bright", "smokeless"),
                 extras={"burn_time": 300, "smoke": 0}),
        template("eternal", "Eternal Spark", brightness=1.8, duration=1.0, features=("eternal", "divine", "perfect"),
                 extras={"burn_time": -1, "smoke": 0}),
        template("soul", "Soul Essence", brightness=1.3, duration=600 / 60, features=("soul_bound", "dark", "powerful"),
                 extras={"burn_time": 600, "smoke": 5}),
    ],
    default="wood",
)

AXES = (TYPE_AXIS, FLAME_AXIS, SIZE_AXIS, QUALITY_AXIS, MATERIAL_AXIS, FUEL_AXIS)

ETERNAL = -1


def build(config: Configuration, sel: Selection, rng: random.Random) -> ResolvedAsset:
    kind, flame, size, quality = sel["type"], sel["flame"], sel["size"], sel["quality"]
    material, fuel = sel["material"], sel["fuel"]

    stats = compose_stats(sel, ("brightness", "duration", "fuel_consumption", "light_radius"))
    if kind.modifier("duration") == ETERNAL or fuel.extra("burn_time") == ETERNAL:
        stats["duration"] = ETERNAL
    stats["durability"] = material.extra("durability")
    stats["weight"] = material.extra("weight") * size.extra("multiplier")
    stats["heat_resistance"] = material.extra("heat_resistance")
    stats["stability"] = flame.extra("stability")
    stats["smoke"] = fuel.extra("smoke")
    stats["rarity"] = quality.extra("rarity")

    brightness = stats["brightness"]
    effects: list[dict[str, Any]] = [
        {"type": "light_source", "power": brightness, "duration": stats["duration"], "radius": stats["light_radius"]},
        {"type": "heat_source", "power": round_half_up(brightness * 0.3)},
    ]
    if flame.extra("magical"):
        effects.append({"type": "magical_illumination", "power": round_half_up(brightness * flame.extra("intensity"))})

    name = render_name(
        "{quality} {size} {torch} with {flame}",
        quality=quality.name, size=size.name, torch=kind.name, flame=flame.name,
    )
    return ResolvedAsset(
        stats=stats,
        features=merge_features(*(t.features for t in (kind, flame, size, quality, material, fuel))),
        name=name,
        description=(
            f"{quality.description} made of {material.name.lower()} fueled by {fuel.name.lower()}. "
            f"{kind.description}."
        ),
        selection={axis: t.key for axis, t in sel.items()},
        extras={
            "effects": effects,
            "light_data": {
                "brightness": brightness,
                "radius": stats["light_radius"],
                "color": flame.color.to_hex() if flame.color else None,
                "flicker": flame.extra("stability") < 1.0,
                "magical": flame.extra("magical"),
                "duration": stats["duration"],
                "fuel_consumption": stats["fuel_consumption"],
            },
            "appearance": {
                "primary_color": material.color.to_hex() if material.color else None,
                "secondary_color": "#C0C0C0" if material.key == "metal" else "#8B4513",
                "flame_colors": list(flame.extra("colors")),
            },
            "pulse_phase": rng.random() * math.tau,
        },
    )


def size_for(config: Configuration, sel: Selection) -> tuple[int, int]:
    px = sel["size"].extra("pixel_size")
    return (px * 2, px * 3)


def _scale(ctx: DrawContext) -> float:
    return ctx.pick("size").extra("pixel_size") / 24 * ctx.scale


def _flame_anchor(ctx: DrawContext) -> tuple[float, float]:
    """Where the flame base sits for each mount."""
    s = _scale(ctx)
    cx, cy = ctx.cx, ctx.cy
    mount = ctx.pick("type").extra("mount")
    offsets = {
        "wall_bracket": -8,
        "handheld": -10,
        "floor_stand": -12,
        "metal_bowl": -2,
        "glass_enclosure": 2,
        "candle_holder": -8,
        "ceiling_fixture": -2,
        "magical_field": 3,
    }
    return cx, cy + offsets[mount] * s


def draw_base(ctx: DrawContext) -> None:
    c = ctx.canvas
    s = _scale(ctx)
    cx, cy = ctx.cx, ctx.cy
    mount = ctx.pick("type").extra("mount")
    body = ctx.pick("material").color or HANDLE
    trim = METAL if ctx.key("material") == "metal" else BRACKET
    if mount == "wall_bracket":
        filled_rect(c, cx - 8 * s, cy - 4 * s, 16 * s, 8 * s, BRACKET)
        filled_rect(c, cx - 3 * s, cy - 8 * s, 6 * s, 16 * s, body)
    elif mount == "handheld":
        filled_rect(c, cx - 2 * s, cy - 4 * s, 4 * s, 14 * s, body)
        filled_rect(c, cx - 4 * s, cy - 10 * s, 8 * s, 6 * s, trim)
    elif mount == "floor_stand":
        filled_rect(c, cx - 2 * s, cy - 12 * s, 4 * s, 32 * s, body)
        filled_rect(c, cx - 6 * s, cy + 18 * s, 12 * s, 4 * s, trim)
    elif mount == "metal_bowl":
        bw = 24 * s
        filled_polygon(c, [(cx - bw / 2, cy - 2 * s), (cx + bw / 2, cy - 2 * s), (cx + bw * 0.35, cy + 4 * s), (cx - bw * 0.35, cy + 4 * s)], trim)
        for side in (-1, 1):
            line(c, cx + side * bw * 0.3, cy + 4 * s, cx + side * bw * 0.5, cy + 16 * s, body, width=max(1.0, 2 * s))
    elif mount == "glass_enclosure":
        filled_rect(c, cx - 6 * s, cy - 10 * s, 12 * s, 20 * s, GLASS)
        filled_rect(c, cx - 7 * s, cy - 12 * s, 14 * s, 2 * s, trim)
        filled_rect(c, cx - 7 * s, cy + 10 * s, 14 * s, 2 * s, trim)
        line(c, cx - 6 * s, cy - 12 * s, cx, cy - 16 * s, trim)
        line(c, cx + 6 * s, cy - 12 * s, cx, cy - 16 * s, trim)
    elif mount == "candle_holder":
        filled_rect(c, cx - 6 * s, cy + 14 * s, 12 * s, 3 * s, trim)
        filled_rect(c, cx - 1 * s, cy + 2 * s, 2 * s, 12 * s, trim)
        filled_rect(c, cx - 4 * s, cy, 8 * s, 2 * s, trim)
        filled_rect(c, cx - 2 * s, cy - 8 * s, 4 * s, 8 * s, Color.from_hex("#FFFACD"))
    elif mount == "ceiling_fixture":
        filled_rect(c, cx - 16 * s, cy, 32 * s, 4 * s, trim)
        for dx in (-14, 0, 14):
            line(c, cx + dx * s, cy, cx, cy - 20 * s, trim)
    else:
        filled_ellipse(c, cx, cy + 3 * s, 8 * s, 8 * s, body.with_alpha(200))


def _inside_flame(shape: FlameShape, fx: float, fy: float, pulse: float) -> bool:
    """Shape tests in normalized flame space (fy grows upward from 0 to 1)."""
    if fy < 0 or fy > 1:
        return False
    if shape == "flickering":
        return abs(fx) <= 0.5 - 0.3 * fy + math.sin(fx * 10) * 0.1
    if shape == "steady":
        return abs(fx) <= 0.3 - 0.2 * fy
    if shape == "roaring":
        return abs(fx) <= 0.8 - 0.4 * fy
    if shape == "pulsing":
        return math.hypot(fx, fy - 0.5) <= 0.5 + pulse
    if shape == "gentle":
        return abs(fx) <= 0.2 - 0.1 * fy
    return abs(fx - 0.3) <= 0.1 or abs(fx + 0.3) <= 0.1 or abs(fx) <= 0.05


def draw_flame(ctx: DrawContext) -> None:
    shape, fw, fh = ctx.pick("type").extra("flame")
    core, mid, outer = (Color.from_hex(v) for v in ctx.pick("flame").extra("colors"))
    pulse = 0.1 * math.sin(ctx.asset.extras["pulse_phase"]) if shape == "pulsing" else 0.0
    s = _scale(ctx)
    w, h = fw * s, fh * s
    ax, ay = _flame_anchor(ctx)
    for j in range(int(h) + 1):
        fy = j / h if h else 0.0
        py = int(ay - j)
        for i in range(-int(w), int(w) + 1):
            fx = i / w if w else 0.0
            if not _inside_flame(shape, fx, fy, pulse):
                continue
            color = outer if fy > 0.7 else mid if fy > 0.3 else core
            ctx.canvas.set_pixel(int(ax + i), py, color)


def draw_glow(ctx: DrawContext) -> None:
    flame = ctx.pick("flame")
    _, _, fh = ctx.pick("type").extra("flame")
    s = _scale(ctx)
    ax, ay = _flame_anchor(ctx)
    outer = Color.from_hex(flame.extra("colors")[1])
    reach = fh * s * (1.0 + 0.25 * flame.extra("intensity"))
    radial_glow(ctx.canvas, ax, ay - fh * s / 2, fh * s * 0.3, reach, outer, int(60 * flame.extra("intensity")))


SPEC = FamilySpec(
    name="torch",
    axes=AXES,
    build=build,
    passes=(("base", draw_base), ("flame", draw_flame), ("glow", draw_glow)),
    default_size=(48, 72),
    size_for=size_for,
    description="Torches and other light sources with flame, fuel and lighting data",
)


def maintenance_cost(result: GenerationResult) -> int:
    factor = {"magical": 5, "crystal": 3, "metal": 2}.get(result.asset.selection["material"], 1)
    return round_half_up(result.asset.stats["brightness"] * 0.1 * factor)


def performance_report(result: GenerationResult) -> dict[str, int]:
    """Percent scores capped at 100; eternal torches score full duration."""
    stats = result.asset.stats

    def pct(v: float) -> int:
        return min(100, round_half_up(v * 100))

    report = {
        "brightness": pct(stats["brightness"] / 50),
        "duration": 100 if stats["duration"] == ETERNAL else pct(stats["duration"] / 300),
        "radius": pct(stats["light_radius"] / 20),
        "stability": pct(stats["stability"]),
    }
    report["overall"] = round_half_up(sum(report.values()) / 4)
    return report


def _next(axis: Axis, key: str) -> str | None:
    keys = axis.choices()
    i = keys.index(key)
    return keys[i + 1] if i + 1 < len(keys) else None


def upgrade_options(result: GenerationResult) -> list[dict[str, Any]]:
    sel = result.asset.selection
    brightness = result.asset.stats["brightness"]
    upgrades: list[dict[str, Any]] = []
    quality = _next(QUALITY_AXIS, sel["quality"])
    if quality:
        upgrades.append({
            "type": "quality", "target": quality, "name": f"Upgrade to {quality} quality",
            "cost": round_half_up(brightness * 2), "benefits": ["+30% brightness", "+50% duration", "+1 rarity"],
        })
    size = _next(SIZE_AXIS, sel["size"])
    if size:
        upgrades.append({
            "type": "size", "target": size, "name": f"Upgrade to {size} size",
            "cost": round_half_up(brightness * 1.5), "benefits": ["+25% brightness", "+20% light radius"],
        })
    if sel["flame"] != "eternal":
        upgrades.append({
            "type": "flame", "target": "eternal", "name": "Upgrade to eternal flame",
            "cost": round_half_up(brightness * 5), "benefits": ["Infinite duration", "+50% brightness", "No fuel consumption"],
        })
    return upgrades


# theme: (torch types, flames, material, fuel)
THEMES: dict[str, tuple[tuple[str, ...], tuple[str, ...], str, str]] = {
    "dungeon": (("wall_torch", "standing_torch"), ("normal",), "wood", "wood"),
    "castle": (TYPE_AXIS.choices(), ("normal",), "metal", "oil"),
    "magical": (("magical_orb", "lantern"), ("magical", "eternal"), "magical", "magical"),
    "noble": (("chandelier", "candlestick"), ("normal",), "metal", "wax"),
}


def lighting_set(count: int = 6, theme: str = "mixed", *, seed: int | None = None) -> list[GenerationResult]:
    """Medium, common torches picked to suit a theme; ``mixed`` draws every axis at random."""
    if theme != "mixed" and theme not in THEMES:
        raise UnknownAxisValue("theme", theme, ("mixed", *THEMES))
    rng = random.Random(seed)
    out: list[GenerationResult] = []
    for i in range(count):
        if theme == "mixed":
            cfg = {
                "type": rng.choice(TYPE_AXIS.choices()),
                "flame": rng.choice(FLAME_AXIS.choices()),
                "material": rng.choice(MATERIAL_AXIS.choices()),
                "fuel": rng.choice(FUEL_AXIS.choices()),
            }
        else:
            types, flames, material, fuel = THEMES[theme]
            cfg = {"type": rng.choice(types), "flame": rng.choice(flames), "material": material, "fuel": fuel}
        out.append(generate("torch", cfg, seed=None if seed is None else seed + i))
    return out


def find_by_brightness(minimum: int, maximum: int, *, attempts: int = 50, seed: int | None = None) -> GenerationResult:
    """Random search for a torch in the brightness band, else a plain medium torch."""
    rng = random.Random(seed)
    for i in range(attempts):
        cfg = {axis.name: rng.choice(axis.choices()) for axis in AXES}
        result = generate("torch", cfg, seed=None if seed is None else seed + i)
        if minimum <= result.asset.stats["brightness"] <= maximum:
            return result
    return generate("torch", {"size": "medium", "quality": "common"}, seed=seed)
