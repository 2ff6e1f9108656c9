from __future__ import annotations

"""Armor pieces: helmets, chest armor, boots, gloves, belts and shoulders."""

import random
from collections import Counter
from typing import Any, Mapping, Sequence

from spriteforge.assembler import GenerationResult, generate
from spriteforge.core.color import BLACK, Color
from spriteforge.core.effects import Region, adjust_brightness, particle_scatter, radial_glow, tint_blend
from spriteforge.core.primitives import diamond, filled_ellipse, filled_polygon, filled_rect, filled_triangle, line
from spriteforge.family import DrawContext, FamilySpec, pick_many, template
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
    round_half_up,
)

NEUTRAL = Color.from_hex("#708090")
DARK = Color.from_hex("#2F4F4F")
TINT_WEIGHT = 0.3


def _piece(key: str, name: str, defense: float, weight: float, description: str, *, coverage: float | None = None,
           mobility: float = 0.0, visibility: float = 0.0, capacity: int = 0, features: tuple[str, ...] = ()) -> AxisTemplate:
    extras: dict[str, Any] = {"mobility_penalty": mobility, "visibility_penalty": visibility}
    if coverage is not None:
        extras["coverage"] = coverage
    if capacity:
        extras["capacity"] = capacity
    return template(key, name, defense=defense, weight=weight, features=features, description=description, extras=extras)


SUBTYPES: dict[str, list] = {
    "helmets": [
        _piece("great_helm", "Great Helm", 8, 4, "A large, imposing helmet that covers the entire head",
               coverage=0.95, visibility=0.3, features=("full_coverage", "intimidating", "heavy")),
        _piece("bascinet", "Bascinet", 6, 3, "A medieval helmet with a visor",
               coverage=0.85, visibility=0.2, features=("visor", "ventilation", "balanced")),
        _piece("sallet", "Sallet", 5, 2.5, "A sleek helmet with a pointed top",
               coverage=0.8, visibility=0.15, features=("aerodynamic", "light", "visor")),
        _piece("barbute", "Barbute", 7, 3.5, "A helmet with a T-shaped opening",
               coverage=0.9, visibility=0.25, features=("T_visage", "balanced_protection", "classic")),
        _piece("morion", "Morion", 4, 2, "A crested helmet with a high comb",
               coverage=0.7, visibility=0.1, features=("crested", "ornamental", "light")),
    ],
    "chest_armor": [
        _piece("plate_armor", "Full Plate Armor", 15, 25, "Complete metal armor covering the entire torso",
               coverage=0.98, mobility=0.4, features=("full_coverage", "maximum_protection", "heavy")),
        _piece("chainmail", "Chainmail Shirt", 8, 12, "Flexible armor made of interlocking metal rings",
               coverage=0.85, mobility=0.2, features=("flexible", "balanced", "versatile")),
        _piece("leather_armor", "Leather Armor", 5, 8, "Armor made from hardened leather",
               coverage=0.75, mobility=0.1, features=("light", "quiet", "flexible")),
        _piece("robes", "Magical Robes", 3, 4, "Flowing robes with magical properties",
               coverage=0.6, mobility=0.05, features=("magical", "comfortable", "light")),
        _piece("cloak", "Cloak", 2, 3, "A flowing cloak for protection and style",
               coverage=0.4, mobility=0.02, features=("stylish", "versatile", "light")),
    ],
    "boots": [
        _piece("greaves", "Greaves", 6, 8, "Metal leg armor covering from knee to ankle", coverage=0.8, mobility=0.15),
        _piece("sabatons", "Sabatons", 4, 5, "Metal foot armor with individual toe protection", coverage=0.9, mobility=0.2),
        _piece("leather_boots", "Leather Boots", 2, 2, "Comfortable leather boots for general use", coverage=0.6, mobility=0.05),
        _piece("cloth_shoes", "Cloth Shoes", 1, 1, "Simple cloth shoes for everyday wear", coverage=0.3, mobility=0.02),
    ],
    "gloves": [
        _piece("gauntlets", "Gauntlets", 5, 4, "Heavy metal gloves for maximum hand protection", coverage=0.95, mobility=0.25),
        _piece("bracers", "Bracers", 3, 2, "Arm guards covering the forearms", coverage=0.7, mobility=0.1),
        _piece("leather_gloves", "Leather Gloves", 2, 1, "Flexible leather gloves for dexterity", coverage=0.8, mobility=0.05),
        _piece("cloth_gloves", "Cloth Gloves", 1, 0.5, "Simple cloth gloves for basic protection", coverage=0.6, mobility=0.02),
    ],
    "belts": [
        _piece("leather_belt", "Leather Belt", 1, 1, "A sturdy leather belt for holding equipment", capacity=4),
        _piece("metal_buckle_belt", "Metal Buckle Belt", 2, 1.5, "A belt with a decorative metal buckle", capacity=5),
        _piece("decorative_belt", "Decorative Belt", 1, 1.2, "An ornate belt for ceremonial occasions", capacity=3),
        _piece("utility_belt", "Utility Belt", 1, 2, "A practical belt with multiple pouches", capacity=8),
    ],
    "shoulders": [
        _piece("pauldrons", "Pauldrons", 6, 6, "Large metal shoulder guards", coverage=0.8, mobility=0.15),
        _piece("spaulders", "Spaulders", 5, 4, "Articulated shoulder armor plates", coverage=0.75, mobility=0.1),
        _piece("epaulets", "Epaulets", 2, 1, "Decorative shoulder ornaments", coverage=0.4, mobility=0.02),
        _piece("shoulder_guards", "Shoulder Guards", 3, 2, "Simple shoulder protection pads", coverage=0.6, mobility=0.05),
    ],
}
DEFAULT_SUBTYPES = {
    "helmets": "great_helm",
    "chest_armor": "plate_armor",
    "boots": "greaves",
    "gloves": "gauntlets",
    "belts": "leather_belt",
    "shoulders": "pauldrons",
}

TYPE_AXIS = Axis.build(
    "type",
    [template(k, k.replace("_", " ").title()) for k in SUBTYPES],
    default="chest_armor",
)
SUBTYPE_AXIS = DependentAxis(
    "subtype",
    "type",
    {t: Axis.build("subtype", items, default=DEFAULT_SUBTYPES[t]) for t, items in SUBTYPES.items()},
)

# key: (display name, durability, defense, weight, magic resistance, color, shine, description)
_MATERIALS = [
    ("iron", "Iron", 8, 6, 1.2, 0, "#708090", 0.3, "durable and reliable"),
    ("steel", "Steel", 10, 8, 1.1, 1, "#2F4F4F", 0.5, "strong and resilient"),
    ("mithril", "Mithril", 12, 9, 0.6, 4, "#E6E6FA", 0.8, "light and magical"),
    ("adamant", "Adamant", 15, 12, 1.4, 6, "#696969", 0.2, "unbreakable and powerful"),
    ("dark_metal", "Dark", 13, 10, 1.3, 8, "#2F2F2F", 0.1, "cursed and formidable"),
    ("leather", "Leather", 6, 3, 0.4, 1, "#8B4513", 0.0, "flexible and quiet"),
    ("hard_leather", "Hard Leather", 8, 5, 0.6, 2, "#654321", 0.1, "tough and protective"),
    ("dragon_leather", "Dragon Leather", 14, 11, 0.8, 7, "#8B0000", 0.3, "exotic and fire-resistant"),
    ("cloth", "Cloth", 3, 1, 0.2, 2, "#F5F5DC", 0.0, "comfortable and lightweight"),
    ("silk", "Silk", 4, 2, 0.1, 3, "#FFFACD", 0.2, "elegant and smooth"),
    ("magical_cloth", "Magical", 7, 4, 0.3, 8, "#9370DB", 0.6, "enchanted and mystical"),
    ("gold", "Golden", 5, 3, 1.5, 5, "#FFD700", 0.9, "ornate and valuable"),
    ("silver", "Silver", 6, 4, 1.0, 4, "#C0C0C0", 0.7, "pure and reflective"),
    ("bone", "Bone", 7, 5, 0.7, 3, "#F5F5DC", 0.1, "savage and primal"),
    ("crystal", "Crystal", 9, 6, 0.5, 9, "#87CEEB", 0.8, "radiant and magical"),
    ("wood", "Wooden", 5, 4, 0.8, 1, "#8B4513", 0.0, "natural and sturdy"),
]
MATERIAL_AXIS = Axis.build(
    "material",
    [
        template(
            key, name, color=color, description=desc, extras={"shine": shine},
            durability=dur, defense=df / 10, weight=wt, magic_resistance=mr,
        )
        for key, name, dur, df, wt, mr, color, shine, desc in _MATERIALS
    ],
    default="iron",
)

# key: (prefix, stat, durability, value, rarity, description, glow)
_QUALITIES = [
    ("common", "", 1.0, 1.0, 1.0, 1, "A standard piece of armor", "#FFFFFF"),
    ("uncommon", "Fine ", 1.15, 1.25, 1.8, 2, "A well-crafted piece of armor", "#FFFFFF"),
    ("rare", "Rare ", 1.35, 1.6, 4.0, 3, "A finely made piece of armor", "#FFD700"),
    ("epic", "Epic ", 1.6, 2.2, 12.0, 4, "A masterfully crafted piece of armor", "#FF4500"),
    ("legendary", "Legendary ", 2.0, 3.5, 40.0, 5, "A legendary piece of armor of great power", "#9370DB"),
    ("mythical", "Mythical ", 3.0, 6.0, 150.0, 6, "A mythical piece of armor of unimaginable power", "#FF1493"),
]
QUALITY_AXIS = Axis.build(
    "quality",
    [
        template(
            key, prefix, color=glow, description=desc,
            extras={"value": value, "rarity": rarity},
            defense=stat, magic_resistance=stat, durability=dur,
        )
        for key, prefix, stat, dur, value, rarity, desc, glow in _QUALITIES
    ],
    default="common",
)

SIZE_AXIS = Axis.build(
    "size",
    [
        template("small", "Small", weight=0.7, extras={"draw": 0.7}),
        template("medium", "Medium", weight=1.0, extras={"draw": 1.0}),
        template("large", "Large", weight=1.3, extras={"draw": 1.3}),
        # huge shares the medium factors
        template("huge", "Huge", weight=1.0, extras={"draw": 1.0}),
    ],
    default="medium",
)

AXES = (TYPE_AXIS, SUBTYPE_AXIS, MATERIAL_AXIS, QUALITY_AXIS, SIZE_AXIS)

ENCHANTMENTS = (
    {"type": "fire", "name": "of Flame", "effect": "+Fire Resistance"},
    {"type": "ice", "name": "of Frost", "effect": "+Ice Resistance"},
    {"type": "lightning", "name": "of Thunder", "effect": "+Lightning Resistance"},
    {"type": "holy", "name": "of Light", "effect": "+Holy Resistance"},
    {"type": "protection", "name": "of Protection", "effect": "+Defense"},
    {"type": "durability", "name": "of Durability", "effect": "+Max Durability"},
)
ENCHANT_COLORS: Mapping[str, Color] = {
    "fire": Color.from_hex("#FF4500"),
    "ice": Color.from_hex("#87CEEB"),
    "lightning": Color.from_hex("#FFFF00"),
    "holy": Color.from_hex("#FFD700"),
    "protection": Color.from_hex("#C0C0C0"),
    "durability": Color.from_hex("#8B4513"),
}


def build(config: Configuration, sel: Selection, rng: random.Random) -> ResolvedAsset:
    piece = sel["subtype"]
    material = sel["material"]
    quality = sel["quality"]
    enchanted = config.flag("enchanted")

    stats = compose_stats(sel, ("defense", "durability", "weight", "magic_resistance"))
    stats["value"] = round_half_up(20 * quality.extra("value") * (stats["magic_resistance"] + 1))
    stats["coverage"] = piece.extra("coverage", 0.8)
    stats["mobility_penalty"] = piece.extra("mobility_penalty") * material.modifier("weight")
    stats["visibility_penalty"] = piece.extra("visibility_penalty")
    if piece.extra("capacity"):
        stats["capacity"] = piece.extra("capacity")
    stats["rarity"] = quality.extra("rarity")

    effects: list[str] = []
    if material.key == "crystal":
        effects.append("glowing")
    if quality.key == "legendary":
        effects.append("legendary_aura")
    if enchanted:
        effects.append("magical_glow")

    enchantments = pick_many(rng, ENCHANTMENTS, quality.extra("rarity") // 2) if enchanted else []
    primary = material.color or NEUTRAL
    weight = stats["weight"]
    return ResolvedAsset(
        stats=stats,
        features=merge_features(piece.features, ["enchanted"] if enchanted else []),
        name=render_name("{quality}{material} {piece}", quality=quality.name, material=material.name, piece=piece.name),
        description=f"{quality.description} made of {material.description} material. {piece.description}.",
        selection={axis: t.key for axis, t in sel.items()} | {"enchanted": str(enchanted).lower()},
        extras={
            "appearance": {
                "primary_color": primary.to_hex(),
                "secondary_color": primary.shade(-0.3).to_hex(),
                "glow_color": quality.color.to_hex() if enchanted and quality.color else None,
                "effects": effects,
            },
            "requirements": {"strength": max(1, weight // 3), "level": max(1, weight // 4)},
            "enchantments": [dict(e) for e in enchantments],
        },
    )


# --- drawing ---


def _helmet(ctx: DrawContext, key: str, s: float) -> None:
    c = ctx.canvas
    cx, cy = ctx.cx, ctx.cy
    if key == "great_helm":
        w, h = 25 * s, 30 * s
        diamond(c, cx, cy, w / 2 * 1.2, h / 2 * 1.2, NEUTRAL)
        filled_rect(c, cx - 8 * s, cy - 5 * s, 16 * s, 2 * s, BLACK)
        filled_rect(c, cx - 1 * s, cy - 3 * s, 2 * s, 10 * s, DARK)
    elif key == "bascinet":
        w, h = 22 * s, 28 * s
        diamond(c, cx, cy, w / 2 * 1.1, h / 2 * 1.1, NEUTRAL)
        filled_rect(c, cx - 10 * s, cy - 3 * s, 20 * s, 6 * s, DARK)
        for i in range(4):
            line(c, cx - 8 * s, cy - 2 * s + i * 1.5 * s, cx + 8 * s, cy - 2 * s + i * 1.5 * s, BLACK)
    elif key == "sallet":
        w, h = 20 * s, 25 * s
        filled_ellipse(c, cx, cy + 2 * s, w / 2, h / 2 - 2 * s, NEUTRAL)
        filled_triangle(c, cx - w / 2, cy - 2 * s, cx + w / 2, cy - 2 * s, cx, cy - h / 2 - 4 * s, NEUTRAL)
        filled_rect(c, cx - w / 2, cy, w, 2 * s, BLACK)
        filled_polygon(c, [(cx + w / 2, cy + 6 * s), (cx + w / 2 + 5 * s, cy + 10 * s), (cx + w / 2, cy + 9 * s)], DARK)
    elif key == "barbute":
        w, h = 24 * s, 26 * s
        filled_ellipse(c, cx, cy, w / 2, h / 2, NEUTRAL)
        filled_rect(c, cx - 6 * s, cy - 4 * s, 12 * s, 2 * s, BLACK)
        filled_rect(c, cx - 1 * s, cy - 4 * s, 2 * s, 12 * s, BLACK)
    else:
        w, h = 18 * s, 22 * s
        filled_ellipse(c, cx, cy, w / 2, h / 2, NEUTRAL)
        filled_rect(c, cx - 12 * s, cy + 2 * s, 24 * s, 3 * s, DARK)
        filled_triangle(c, cx - 6 * s, cy - 8 * s, cx + 6 * s, cy - 8 * s, cx, cy - h / 2 - 6 * s, DARK)


def _chest(ctx: DrawContext, key: str, s: float) -> None:
    c = ctx.canvas
    cx, cy = ctx.cx, ctx.cy
    if key == "plate_armor":
        w, h = 30 * s, 40 * s
        filled_rect(c, cx - w / 2, cy - h / 2, w, h, NEUTRAL)
        filled_rect(c, cx - w / 2 - 5 * s, cy - h / 2, 5 * s, h / 2, DARK)
        filled_rect(c, cx + w / 2, cy - h / 2, 5 * s, h / 2, DARK)
        line(c, cx, cy - h / 2, cx, cy + h / 2, DARK, width=max(1.0, s))
        for i in range(1, 4):
            y = cy - h / 2 + i * h / 4
            line(c, cx - w / 2, y, cx + w / 2, y, DARK)
    elif key == "chainmail":
        w, h = 28 * s, 38 * s
        cell = max(1, round(2 * s))
        x0, y0 = int(cx - w / 2), int(cy - h / 2)
        for y in range(y0, int(y0 + h)):
            for x in range(x0, int(x0 + w)):
                checker = ((x - x0) // cell + (y - y0) // cell) % 2 == 0
                c.set_pixel(x, y, NEUTRAL if checker else DARK)
    elif key == "leather_armor":
        w, h = 26 * s, 36 * s
        filled_rect(c, cx - w / 2, cy - h / 2, w, h, NEUTRAL)
        step = max(2, int(4 * s))
        for y in range(int(cy - h / 2) + 1, int(cy + h / 2), step):
            c.set_pixel(int(cx - w / 2) + 1, y, DARK)
            c.set_pixel(int(cx + w / 2) - 2, y, DARK)
    elif key == "robes":
        w, h = 24 * s, 42 * s
        filled_polygon(
            c,
            [(cx - w / 3, cy - h / 2), (cx + w / 3, cy - h / 2), (cx + w / 2 + 4 * s, cy + h / 2), (cx - w / 2 - 4 * s, cy + h / 2)],
            NEUTRAL,
        )
        for i in (-1, 0, 1):
            line(c, cx + i * 5 * s, cy - h / 4, cx + i * 7 * s, cy + h / 2 - 1, DARK)
        filled_rect(c, cx - w / 2, cy - 2 * s, w, 3 * s, DARK)
    else:
        w, h = 32 * s, 45 * s
        top = w * (1 - 0.7)
        filled_polygon(
            c,
            [(cx - top / 2, cy - h / 2 + 6 * s), (cx + top / 2, cy - h / 2 + 6 * s), (cx + w / 2, cy + h / 2), (cx - w / 2, cy + h / 2)],
            NEUTRAL,
        )
        diamond(c, cx, cy - h / 2 + 6 * s, 8 * s, 6 * s, DARK)


def _paired(ctx: DrawContext, gap: float, draw) -> None:
    draw(ctx.cx - gap, ctx.cy)
    draw(ctx.cx + gap, ctx.cy)


def _boots(ctx: DrawContext, key: str, s: float) -> None:
    c = ctx.canvas
    dims = {"greaves": (12, 25), "sabatons": (10, 15), "leather_boots": (8, 18), "cloth_shoes": (6, 12)}
    w, h = (d * s for d in dims[key])

    def one(x: float, y: float) -> None:
        if key == "cloth_shoes":
            filled_ellipse(c, x, y + h / 3, w / 2 + 2 * s, h / 3, NEUTRAL)
            return
        filled_rect(c, x - w / 2, y - h / 2, w, h, NEUTRAL)
        filled_rect(c, x - w / 2, y + h / 2 - 3 * s, w + 4 * s, 3 * s, NEUTRAL)
        if key == "greaves":
            filled_rect(c, x - w / 2, y - h / 2 + 4 * s, w, 3 * s, DARK)
        elif key == "sabatons":
            for t in range(5):
                filled_ellipse(c, x - w / 2 + t * w / 4, y + h / 2, 1.2 * s, 1.2 * s, DARK)
        else:
            filled_rect(c, x - w / 2, y + h / 2 - 1 * s, w + 4 * s, 1 * s, BLACK)

    _paired(ctx, w * 0.9, one)


def _gloves(ctx: DrawContext, key: str, s: float) -> None:
    c = ctx.canvas
    dims = {"gauntlets": (8, 12), "bracers": (6, 15), "leather_gloves": (5, 10), "cloth_gloves": (4, 8)}
    w, h = (d * s * 1.5 for d in dims[key])

    def one(x: float, y: float) -> None:
        if key == "cloth_gloves":
            filled_ellipse(c, x, y, w / 2, h / 2, NEUTRAL)
            return
        filled_rect(c, x - w / 2, y - h / 2, w, h, NEUTRAL)
        if key == "gauntlets":
            for j in range(4):
                line(c, x - w / 2 + (j + 0.5) * w / 4, y - h / 2, x - w / 2 + (j + 0.5) * w / 4, y - h / 4, DARK)
        elif key == "bracers":
            for j in range(3):
                filled_rect(c, x - w / 2, y - h / 2 + j * h / 3, w, max(1.0, s), DARK)
        else:
            filled_ellipse(c, x + w / 2, y, 1.5 * s, 2.5 * s, NEUTRAL)

    _paired(ctx, w, one)


def _belt(ctx: DrawContext, key: str, s: float) -> None:
    c = ctx.canvas
    cx, cy = ctx.cx, ctx.cy
    half = 25 * s
    filled_rect(c, cx - half, cy - 2 * s, half * 2, 4 * s, NEUTRAL)
    filled_rect(c, cx - 3 * s, cy - 3 * s, 6 * s, 6 * s, DARK)
    if key == "metal_buckle_belt":
        diamond(c, cx, cy, 6 * s, 6 * s, DARK)
        diamond(c, cx, cy, 3 * s, 3 * s, NEUTRAL)
    elif key == "decorative_belt":
        step = 5 * s
        x = cx - half + step / 2
        while x < cx + half:
            if abs(x - cx) > 4 * s:
                filled_ellipse(c, x, cy, max(1.0, 0.8 * s), max(1.0, 0.8 * s), DARK)
            x += step
    elif key == "utility_belt":
        for i in range(5):
            px = cx - 2 * 6 * s + i * 6 * s
            if abs(px - cx) < 4 * s:
                px += 12 * s
            filled_rect(c, px - 2 * s, cy + 2 * s, 4 * s, 6 * s, DARK)


def _shoulders(ctx: DrawContext, key: str, s: float) -> None:
    c = ctx.canvas
    dims = {"pauldrons": (15, 12), "spaulders": (12, 10), "epaulets": (8, 6), "shoulder_guards": (10, 8)}
    w, h = (d * s for d in dims[key])

    def one(x: float, y: float) -> None:
        filled_ellipse(c, x, y, w / 2, h / 2, NEUTRAL)
        if key == "pauldrons":
            for r in (0.3, 0.6):
                line(c, x - w / 2, y - h / 2 + r * h, x + w / 2, y - h / 2 + r * h, DARK)
        elif key == "spaulders":
            step = max(2.0, 4 * s)
            yy = y - h / 2 + step
            while yy < y + h / 2:
                line(c, x - w / 2, yy, x + w / 2, yy, DARK)
                yy += step
        elif key == "epaulets":
            for t in range(5):
                tx = x - w / 2 + (t + 0.5) * w / 5
                line(c, tx, y + h / 2, tx, y + h / 2 + 4 * s, DARK)

    _paired(ctx, w * 0.75, one)


_DRAWERS = {
    "helmets": _helmet,
    "chest_armor": _chest,
    "boots": _boots,
    "gloves": _gloves,
    "belts": _belt,
    "shoulders": _shoulders,
}


def draw_base(ctx: DrawContext) -> None:
    s = ctx.scale * ctx.pick("size").extra("draw")
    _DRAWERS[ctx.key("type")](ctx, ctx.key("subtype"), s)


def draw_material(ctx: DrawContext) -> None:
    material = ctx.pick("material")
    if material.color is not None:
        tint_blend(ctx.canvas, material.color, TINT_WEIGHT)
    shine = material.extra("shine", 0.0)
    if shine >= 0.5:
        adjust_brightness(ctx.canvas, shine * 0.15, Region(0, 0, ctx.width, int(ctx.height * 0.45)))


def draw_quality(ctx: DrawContext) -> None:
    quality = ctx.pick("quality")
    rarity = quality.extra("rarity")
    if rarity == 2:
        adjust_brightness(ctx.canvas, 0.1)
    elif rarity >= 3 and quality.color is not None:
        r = min(ctx.width, ctx.height) / 2
        radial_glow(ctx.canvas, ctx.cx, ctx.cy, r * 0.6, r * 0.98, quality.color, 30 + 15 * rarity)


def draw_enchantments(ctx: DrawContext) -> None:
    effects = ctx.asset.extras["appearance"]["effects"]
    r = min(ctx.width, ctx.height) / 2
    if "glowing" in effects:
        radial_glow(ctx.canvas, ctx.cx, ctx.cy, r * 0.2, r * 0.7, Color.from_hex("#87CEEB"), 60)
    region = Region(int(ctx.cx - r * 0.8), int(ctx.cy - r * 0.8), int(r * 1.6), int(r * 1.6))
    for enchant in ctx.asset.extras["enchantments"]:
        color = ENCHANT_COLORS[enchant["type"]]
        particle_scatter(ctx.canvas, region, 6, [color, color.lighten(60)], ctx.rng, radius=(0, 1))
    glow = ctx.asset.extras["appearance"]["glow_color"]
    if glow:
        radial_glow(ctx.canvas, ctx.cx, ctx.cy, r * 0.45, r * 0.9, Color.from_hex(glow), 90)


SPEC = FamilySpec(
    name="armor",
    axes=AXES,
    build=build,
    passes=(
        ("base", draw_base),
        ("material", draw_material),
        ("quality", draw_quality),
        ("enchantment", draw_enchantments),
    ),
    default_size=(64, 64),
    description="Armor pieces with material, quality and enchantment",
)


def generate_armor_set(material: str = "iron", quality: str = "common", size: str = "medium", *, seed: int | None = None) -> list[GenerationResult]:
    """One piece per armor type, sharing material, quality and size."""
    return [
        generate(
            "armor",
            {"type": t, "material": material, "quality": quality, "size": size},
            seed=None if seed is None else seed + i,
        )
        for i, t in enumerate(SUBTYPES)
    ]


def statistics(results: Sequence[GenerationResult]) -> dict[str, Any]:
    """Counts by type, material and quality plus average defense."""
    by_type: Counter[str] = Counter()
    by_material: Counter[str] = Counter()
    by_quality: Counter[str] = Counter()
    defense = 0
    for result in results:
        sel = result.asset.selection
        by_type[sel["type"]] += 1
        by_material[sel["material"]] += 1
        by_quality[sel["quality"]] += 1
        defense += result.asset.stats["defense"]
    return {
        "total": len(results),
        "by_type": dict(by_type),
        "by_material": dict(by_material),
        "by_quality": dict(by_quality),
        "average_defense": round(defense / len(results), 2) if results else 0,
    }
