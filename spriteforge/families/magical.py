from __future__ import annotations

"""
Wands, orbs, runes, spellbooks, amulets, rings, staves and tomes.

Every item type brings its own sub-axes; axes shared by name (``material``,
``size``, ``gem`` ...) hold a different value set per type.
"""

import colorsys
import math
import random

from spriteforge.core.color import TRANSPARENT, Color, hex_colors
from spriteforge.core.effects import Region, particle_scatter, radial_glow, texture_variation
from spriteforge.core.primitives import filled_ellipse, filled_polygon, filled_rect, line, regular_polygon_points
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

CANVAS_SIDE = 128
GOLD = Color.from_hex("#FFD700")

EFFECT_COLORS = {
    "fire": ("#FF4500", "#FF6347", "#FFA500", "#FFD700"),
    "ice": ("#87CEEB", "#B0E0E6", "#F0F8FF", "#E6E6FA"),
    "lightning": ("#FFFF00", "#FFA500", "#FFFFFF", "#87CEEB"),
    "healing": ("#98FB98", "#90EE90", "#00FF7F", "#32CD32"),
    "illusion": ("#9370DB", "#8A2BE2", "#DA70D6", "#DDA0DD"),
    "protection": ("#FFD700", "#FFA500", "#FF6347", "#FFFFFF"),
    "destruction": ("#DC143C", "#B22222", "#8B0000", "#FF0000"),
    "creation": ("#98FB98", "#00FF7F", "#32CD32", "#228B22"),
    "necromancy": ("#2F4F4F", "#556B2F", "#8B0000", "#696969"),
    "strength": ("#DC143C", "#B22222", "#FF6347", "#FFA500"),
    "wisdom": ("#4169E1", "#87CEEB", "#E6E6FA", "#FFFFFF"),
    "luck": ("#32CD32", "#FFD700", "#98FB98", "#FFFFFF"),
    "invisibility": ("#E6E6FA", "#F8F8FF", "#DCDCDC", "#FFFFFF"),
    "earth": ("#8B4513", "#A0522D", "#556B2F", "#DEB887"),
    "wind": ("#F0FFFF", "#E0FFFF", "#B0E0E6", "#FFFFFF"),
    "spirit": ("#E6E6FA", "#D8BFD8", "#FFFFFF", "#9370DB"),
}

GEM_COLORS = {
    "ruby": "#DC143C",
    "sapphire": "#000080",
    "emerald": "#006400",
    "diamond": "#F0F8FF",
    "amethyst": "#9370DB",
    "onyx": "#000000",
    "opal": "#FFE4E1",
}

ANIMATION_FRAMES = {"wand": 6, "orb": 8, "rune": 4, "spellbook": 5, "amulet": 6, "ring": 4, "staff": 7, "tome": 6}


def _effect(key: str, name: str = "", **modifiers: float) -> AxisTemplate:
    return template(key, name or key.replace("_", " ").title(), features=(key,),
                    extras={"colors": EFFECT_COLORS[key]}, **modifiers)


def _gem(key: str, **modifiers: float) -> AxisTemplate:
    return template(key, key.title(), color=GEM_COLORS[key], **modifiers)


def _plain(key: str, **modifiers: float) -> AxisTemplate:
    return template(key, key.replace("_", " ").title(), **modifiers)


def _span(key: str, mult: float) -> AxisTemplate:
    return template(key, key.title(), power=mult, value=mult, extras={"multiplier": mult})


TYPE_AXIS = Axis.build(
    "type",
    [
        template("wand", "Wand", power=20, value=60),
        template("orb", "Orb", power=25, value=75),
        template("rune", "Rune", power=15, value=45),
        template("spellbook", "Spellbook", power=30, value=90),
        template("amulet", "Amulet", power=18, value=54),
        template("ring", "Ring", power=16, value=48),
        template("staff", "Staff", power=35, value=105),
        template("tome", "Tome", power=45, value=135),
    ],
    default="wand",
)

MATERIAL_AXIS = DependentAxis(
    "material",
    "type",
    {
        "wand": Axis.build("material", [
            template("wood", "Wooden", color="#8B4513"),
            template("crystal", "Crystal", color="#E6E6FA", power=1.2, value=1.5),
            template("metal", "Iron", color="#696969", power=1.1, value=1.2),
            template("bone", "Bone", color="#F5F5DC", power=1.15, value=1.1),
            template("precious", "Golden", color="#FFD700", power=1.1, value=3.0),
        ], default="wood"),
        "orb": Axis.build("material", [
            template("crystal", "Crystal", color="#F0F8FF", power=1.2, value=1.5),
            template("glass", "Glass", color="#F0F8FF", power=0.8, value=0.6),
            template("gemstone", "Gemstone", color="#9966CC", power=1.3, value=2.5),
            template("obsidian", "Obsidian", color="#1C1C1C", power=1.25, value=1.4),
            template("quartz", "Quartz", color="#F5F5F5", power=1.0, value=1.0),
        ], default="crystal"),
        "rune": Axis.build("material", [
            template("stone", "Stone", color="#708090"),
            template("metal", "Iron", color="#696969", power=1.1, value=1.2),
            template("crystal", "Crystal", color="#E6E6FA", power=1.3, value=1.6),
            template("wood", "Wooden", color="#8B4513", power=0.9, value=0.8),
            template("bone", "Bone", color="#F5F5DC", power=1.15, value=1.1),
        ], default="stone"),
        "amulet": Axis.build("material", [
            template("gold", "Golden", color="#FFD700", power=1.1, value=3.0),
            template("silver", "Silver", color="#C0C0C0", power=1.05, value=2.0),
            template("crystal", "Crystal", color="#E6E6FA", power=1.2, value=1.5),
            template("bone", "Bone", color="#F5F5DC", power=1.15, value=0.9),
            template("stone", "Stone", color="#708090", value=0.7),
        ], default="gold"),
        "ring": Axis.build("material", [
            template("gold", "Golden", color="#FFD700", power=1.1, value=3.0),
            template("silver", "Silver", color="#C0C0C0", power=1.05, value=2.0),
            template("platinum", "Platinum", color="#E5E4E2", power=1.15, value=4.0),
            template("mithril", "Mithril", color="#DCDCFF", power=1.4, value=6.0),
            template("adamantite", "Adamantite", color="#4B0082", power=1.5, value=8.0),
        ], default="gold"),
        "staff": Axis.build("material", [
            template("oak", "Oak", color="#8B5A2B"),
            template("ebony", "Ebony", color="#3B2F2F", power=1.2, value=1.8),
            template("yew", "Yew", color="#A0522D", power=1.1, value=1.2),
            template("holly", "Holly", color="#F5DEB3", power=1.15, value=1.3),
            template("elder", "Elder", color="#6B4226", power=1.4, value=2.5),
        ], default="oak"),
    },
)

COVER_AXIS = DependentAxis(
    "cover",
    "type",
    {
        "spellbook": Axis.build("cover", [
            template("leather", "Leather", color="#8B4513"),
            template("metal", "Iron-bound", color="#696969", power=1.1, value=1.3),
            template("crystal", "Crystal", color="#E6E6FA", power=1.2, value=1.6),
            template("wood", "Wooden", color="#8B4513", power=0.9, value=0.8),
            template("dragonhide", "Dragonhide", color="#556B2F", power=1.4, value=3.0),
        ], default="leather"),
        "tome": Axis.build("cover", [
            template("dragonhide", "Dragonhide", color="#556B2F"),
            template("demonhide", "Demonhide", color="#8B0000", power=1.2, value=1.5),
            template("angel_feathers", "Angel Feather", color="#FFFAF0", power=1.25, value=2.0),
            template("void_cloth", "Void Cloth", color="#191970", power=1.35, value=2.2),
            template("star_silk", "Star Silk", color="#E6E6FA", power=1.3, value=2.5),
        ], default="dragonhide"),
    },
)

CORE_AXIS = DependentAxis(
    "core",
    "type",
    {
        "wand": Axis.build("core", [
            template("phoenix_feather", "Phoenix Feather", color="#FF4500", power=1.3, value=1.5),
            template("dragon_heartstring", "Dragon Heartstring", color="#DC143C", power=1.4, value=1.6),
            template("unicorn_hair", "Unicorn Hair", color="#9370DB", power=1.1, value=1.3),
            template("veela_hair", "Veela Hair", color="#FF69B4", power=1.15, value=1.2),
            template("thestral_tail", "Thestral Tail", color="#2F4F4F", power=1.35, value=1.4),
        ], default="phoenix_feather"),
    },
)

TIP_AXIS = DependentAxis(
    "tip",
    "type",
    {
        "wand": Axis.build("tip", [
            _plain("simple"),
            _plain("ornate", value=1.3),
            _plain("gemmed", power=1.1, value=1.6),
            _plain("spiked", power=1.05),
            _plain("curved"),
        ], default="simple"),
        "staff": Axis.build("tip", [
            template("crystal", "Crystal", color="#E6E6FA", power=1.2, value=1.4),
            template("orb", "Orb", color="#9370DB", power=1.25, value=1.5),
            template("skull", "Skull", color="#FFFFFF", power=1.1),
            template("talon", "Talon", color="#C0C0C0", power=1.05),
            template("flame", "Flame", color="#FF4500", power=1.15, value=1.2),
        ], default="crystal"),
    },
)

LENGTH_AXIS = DependentAxis(
    "length",
    "type",
    {
        "wand": Axis.build("length", [_span("short", 0.6), _span("medium", 1.0), _span("long", 1.4), _span("staff", 2.0)],
                           default="medium"),
        "staff": Axis.build("length", [_span("short", 0.7), _span("medium", 1.0), _span("long", 1.3), _span("tall", 1.6)],
                            default="long"),
    },
)

SIZE_AXIS = DependentAxis(
    "size",
    "type",
    {
        "orb": Axis.build("size", [_span("small", 0.6), _span("medium", 1.0), _span("large", 1.4), _span("massive", 1.8)],
                          default="medium"),
        "spellbook": Axis.build("size", [
            _span("small", 0.7), _span("medium", 1.0), _span("large", 1.3), _span("tome", 1.6), _span("grimoire", 1.9),
        ], default="medium"),
        "ring": Axis.build("size", [_span("small", 0.8), _span("medium", 1.0), _span("large", 1.2)], default="medium"),
        "tome": Axis.build("size", [_span("small", 0.7), _span("medium", 1.0), _span("large", 1.3), _span("massive", 1.6)],
                           default="large"),
    },
)

SHAPE_AXIS = DependentAxis(
    "shape",
    "type",
    {
        "orb": Axis.build("shape", [_plain(k) for k in ("sphere", "teardrop", "irregular", "faceted", "smooth")]),
        "rune": Axis.build("shape", [_plain(k) for k in ("circular", "rectangular", "triangular", "irregular", "complex")]),
        "amulet": Axis.build("shape", [_plain(k) for k in ("circular", "triangular", "pentagonal", "irregular", "animal")]),
    },
)

ABILITY_AXIS = DependentAxis(
    "ability",
    "type",
    {
        "orb": Axis.build("ability", [
            template("scrying", "Scrying", color="#87CEEB", features=("scrying",)),
            template("teleportation", "Teleportation", color="#9370DB", features=("teleportation",), power=1.2, value=1.4),
            template("mind_reading", "Mind Reading", color="#FF69B4", features=("mind_reading",), power=1.1, value=1.2),
            template("weather_control", "Weather Control", color="#B0C4DE", features=("weather_control",), power=1.3, value=1.5),
            template("time_manipulation", "Time Manipulation", color="#FFD700", features=("time_manipulation",), power=1.5, value=2.0),
        ]),
        "ring": Axis.build("ability", [
            template("invisibility", "Invisibility", color="#E6E6FA", features=("invisibility",), power=1.2, value=1.5),
            template("strength", "Strength", color="#DC143C", features=("strength",), power=1.1, value=1.2),
            template("teleportation", "Teleportation", color="#9370DB", features=("teleportation",), power=1.3, value=1.6),
            template("mind_shield", "Mind Shielding", color="#4169E1", features=("mind_shield",), power=1.1, value=1.3),
            template("elemental_control", "Elemental Control", color="#FF6347", features=("elemental_control",),
                     power=1.4, value=1.8),
        ]),
    },
)

GLOW_AXIS = DependentAxis(
    "glow",
    "type",
    {
        "orb": Axis.build("glow", [
            template("blue", "Blue", color="#87CEEB"),
            template("red", "Red", color="#FF6347"),
            template("green", "Green", color="#32CD32"),
            template("purple", "Purple", color="#9370DB"),
            template("white", "White", color="#FFFFFF"),
            template("rainbow", "Rainbow", color="#FF6347", value=1.5),
        ], default="blue"),
    },
)

SYMBOL_AXIS = DependentAxis(
    "symbol",
    "type",
    {"rune": Axis.build("symbol", [_effect(k) for k in ("protection", "destruction", "creation", "wisdom")]
                        + [_plain("power", power=1.2), _plain("balance", power=1.1)], default="power")},
)

AGE_AXIS = DependentAxis(
    "age",
    "type",
    {"rune": Axis.build("age", [
        template("ancient", "Ancient", power=1.2, value=1.5, extras={"rarity": 3}),
        template("elder", "Elder", power=1.4, value=2.0, extras={"rarity": 4}),
        template("primordial", "Primordial", power=1.7, value=3.0, extras={"rarity": 5}),
        template("eternal", "Eternal", power=2.0, value=4.0, extras={"rarity": 5}),
    ], default="ancient")},
)

RUNE_EFFECT_AXIS = DependentAxis(
    "effect",
    "type",
    {"rune": Axis.build("effect", [
        template("glowing", "Glowing", color="#FFD700", features=("glowing",)),
        template("pulsing", "Pulsing", color="#9370DB", features=("pulsing",), power=1.1),
        template("floating", "Floating", color="#FFFFFF", features=("floating",), power=1.05),
        template("humming", "Humming", color="#87CEEB", features=("humming",)),
        template("warm", "Warm", color="#FF8C00", features=("warm",)),
    ])},
)

BINDING_AXIS = DependentAxis(
    "binding",
    "type",
    {
        "spellbook": Axis.build("binding", [
            _plain("simple"),
            _plain("ornate", value=1.4),
            _plain("magical", power=1.2, value=1.5),
            _plain("cursed", power=1.3, value=0.8),
            _plain("blessed", power=1.2, value=1.6),
        ]),
        "tome": Axis.build("binding", [
            _plain("chains"),
            _plain("tendrils", power=1.1),
            _plain("runes", power=1.2, value=1.3),
            _plain("crystals", power=1.15, value=1.6),
            _plain("void", power=1.3, value=1.4),
        ]),
    },
)

SCHOOL_AXIS = DependentAxis(
    "school",
    "type",
    {"spellbook": Axis.build("school", [
        _effect("fire", power=1.2),
        _effect("ice", power=1.1),
        _effect("lightning", power=1.25),
        _effect("necromancy", power=1.3, value=1.2),
        _effect("illusion", power=1.1),
        _effect("healing", value=1.3),
    ])},
)

CONDITION_AXIS = DependentAxis(
    "condition",
    "type",
    {"spellbook": Axis.build("condition", [
        _plain("pristine", value=1.2),
        _plain("weathered", value=0.8),
        _plain("burnt", power=0.9, value=0.6),
        _plain("frozen", value=0.9),
        _plain("glowing", power=1.15, value=1.3),
    ])},
)

ENCHANTMENT_AXIS = DependentAxis(
    "enchantment",
    "type",
    {
        "wand": Axis.build("enchantment", [
            _effect("fire", power=1.2),
            _effect("ice", power=1.1),
            _effect("lightning", power=1.25),
            _effect("healing", value=1.3),
            _effect("illusion", power=1.1),
        ]),
        "amulet": Axis.build("enchantment", [
            _effect("protection", power=1.1, value=1.2),
            _effect("strength", power=1.2),
            _effect("wisdom", power=1.15, value=1.1),
            _effect("luck", value=1.4),
            _effect("invisibility", power=1.3, value=1.5),
        ]),
    },
)

GEM_AXIS = DependentAxis(
    "gem",
    "type",
    {
        "amulet": Axis.build("gem", [
            _gem("ruby", value=1.5), _gem("sapphire", value=1.5), _gem("emerald", value=1.4),
            _gem("diamond", power=1.1, value=2.0), _gem("amethyst", value=1.2), _gem("onyx", power=1.05),
        ], default="ruby"),
        "ring": Axis.build("gem", [
            _gem("diamond", power=1.1, value=2.0), _gem("ruby", value=1.5), _gem("sapphire", value=1.5),
            _gem("emerald", value=1.4), _gem("amethyst", value=1.2), _gem("onyx", power=1.05), _gem("opal", value=1.3),
        ], default="diamond"),
    },
)

CHAIN_AXIS = DependentAxis(
    "chain",
    "type",
    {"amulet": Axis.build("chain", [
        template("simple", "Simple", color="#C0C0C0"),
        template("ornate", "Ornate", color="#FFD700", value=1.3),
        template("magical", "Magical", color="#9370DB", power=1.1, value=1.3),
        template("cursed", "Cursed", color="#2F4F4F", power=1.2, value=0.8),
        template("blessed", "Blessed", color="#FFFACD", power=1.1, value=1.4),
    ])},
)

SETTING_AXIS = DependentAxis(
    "setting",
    "type",
    {"ring": Axis.build("setting", [
        _plain("simple"), _plain("ornate", value=1.3), _plain("gemmed", value=1.5), _plain("plain", value=0.9),
        _plain("engraved", power=1.05, value=1.2),
    ])},
)

DECORATION_AXIS = DependentAxis(
    "decoration",
    "type",
    {"staff": Axis.build("decoration", [
        _plain("simple"), _plain("ornate", value=1.3), _plain("runic", power=1.15, value=1.3),
        _plain("gemmed", value=1.6), _plain("natural", power=1.05),
    ])},
)

ELEMENT_AXIS = DependentAxis(
    "element",
    "type",
    {"staff": Axis.build("element", [
        _effect("fire", power=1.2), _effect("ice", power=1.1), _effect("lightning", power=1.25),
        _effect("earth", power=1.1), _effect("wind", power=1.05), _effect("spirit", power=1.3, value=1.2),
    ])},
)

CONTENT_AXIS = DependentAxis(
    "content",
    "type",
    {"tome": Axis.build("content", [
        _plain("spells"),
        _plain("prophecies", value=1.4),
        _plain("curses", power=1.2),
        _plain("blessings", power=1.1, value=1.2),
        _plain("forbidden_knowledge", power=1.5, value=2.0),
    ])},
)

AURA_AXIS = DependentAxis(
    "aura",
    "type",
    {"tome": Axis.build("aura", [
        template("holy", "Holy", color="#FFD700", features=("holy",)),
        template("unholy", "Unholy", color="#8B0000", features=("unholy",), power=1.1),
        template("neutral", "Neutral", color="#9370DB", features=("neutral",)),
        template("chaotic", "Chaotic", color="#FF6347", features=("chaotic",), power=1.15),
        template("lawful", "Lawful", color="#4169E1", features=("lawful",)),
    ], default="neutral")},
)

AXES = (
    TYPE_AXIS,
    MATERIAL_AXIS,
    COVER_AXIS,
    CORE_AXIS,
    TIP_AXIS,
    LENGTH_AXIS,
    SIZE_AXIS,
    SHAPE_AXIS,
    ABILITY_AXIS,
    GLOW_AXIS,
    SYMBOL_AXIS,
    AGE_AXIS,
    RUNE_EFFECT_AXIS,
    BINDING_AXIS,
    SCHOOL_AXIS,
    CONDITION_AXIS,
    ENCHANTMENT_AXIS,
    GEM_AXIS,
    CHAIN_AXIS,
    SETTING_AXIS,
    DECORATION_AXIS,
    ELEMENT_AXIS,
    CONTENT_AXIS,
    AURA_AXIS,
)

# Axis whose name reads as "... of <x>" in the display name.
_OF_AXES = ("enchantment", "element", "school", "ability", "symbol", "content")

RARITY_NAMES = ("common", "uncommon", "rare", "epic", "legendary")
RARITY_THRESHOLDS = ((90, 5), (60, 4), (40, 3), (25, 2))


def rarity_for(power: int) -> int:
    """Rarity tier 1 (common) to 5 (legendary) by power."""
    for threshold, tier in RARITY_THRESHOLDS:
        if power >= threshold:
            return tier
    return 1


def _multiplier(sel: Selection, axis: str) -> float:
    tmpl = sel.get(axis)
    return 1.0 if tmpl is None else tmpl.extra("multiplier", 1.0)


def _footprint(sel: Selection) -> tuple[float, float]:
    """Layout-space extent of the item, before the canvas is padded to its minimum side."""
    kind = sel["type"].key
    if kind == "wand":
        return 40, 60 * _multiplier(sel, "length") + 30
    if kind == "staff":
        return 48, 100 * _multiplier(sel, "length") + 40
    if kind == "spellbook":
        m = _multiplier(sel, "size")
        return 60 * m * 1.3 + 16, 80 * m * 1.3 + 24
    if kind == "tome":
        m = _multiplier(sel, "size")
        return 70 * m + 24, 90 * m + 24
    return CANVAS_SIDE, CANVAS_SIDE


def size_for(config: Configuration, sel: Selection) -> tuple[int, int]:
    fw, fh = _footprint(sel)
    return max(CANVAS_SIDE, math.ceil(fw)), max(CANVAS_SIDE, math.ceil(fh))


def build(config: Configuration, sel: Selection, rng: random.Random) -> ResolvedAsset:
    kind = sel["type"]
    stats: dict[str, int | float] = compose_stats(sel, ("power", "value"))
    power = int(stats["power"])
    stats["magic_level"] = min(10, max(1, math.ceil(power / 10)))
    age = sel.get("age")
    stats["rarity"] = age.extra("rarity") if age is not None else rarity_for(power)

    base = sel.get("material") or sel.get("cover")
    of = next((sel[a] for a in _OF_AXES if a in sel), None)
    name = render_name(
        "{material} {kind}{suffix}",
        material=base.name if base is not None else "",
        kind=kind.name,
        suffix=f" of {of.name}" if of is not None else "",
    )
    if "core" in sel:
        description = f"A {kind.key} with a {sel['core'].name.lower()} core."
    else:
        description = f"A {' '.join(t.key.replace('_', ' ') for a, t in sel.items() if a != 'type')} {kind.key}."

    extras: dict[str, object] = {
        "animation_frames": ANIMATION_FRAMES[kind.key],
        "rarity_name": RARITY_NAMES[int(stats["rarity"]) - 1],
    }
    if kind.key in ("wand", "staff"):
        extras["thickness"] = rng.randint(4, 8) if kind.key == "wand" else rng.randint(6, 9)
    elif kind.key == "rune":
        extras["rune_size"] = rng.randint(50, 80)
    elif kind.key == "amulet":
        extras["amulet_size"] = rng.randint(30, 50)
    if of is not None and of.extra("colors"):
        extras["effect_colors"] = list(of.extra("colors"))

    return ResolvedAsset(
        stats=stats,
        features=merge_features([kind.key], *(t.features for t in sel.values())),
        name=name,
        description=description,
        selection={axis: t.key for axis, t in sel.items()},
        extras=extras,
    )


def _color(ctx: DrawContext, axis: str, fallback: str = "#808080") -> Color:
    tmpl = ctx.selection.get(axis)
    if tmpl is None or tmpl.color is None:
        return Color.from_hex(fallback)
    return tmpl.color


def _effect_colors(ctx: DrawContext) -> tuple[Color, ...]:
    return hex_colors(*ctx.asset.extras.get("effect_colors", ()))


def _layout_origin(ctx: DrawContext) -> tuple[float, float, float]:
    """(centre x, bottom y, scale) for the layout footprint on the current canvas."""
    return ctx.cx, ctx.height - 10 * ctx.scale, ctx.scale


def _shaft(ctx: DrawContext, length: float, thickness: float, bend: float, color: Color) -> float:
    cx, bottom, s = _layout_origin(ctx)
    top = bottom - length
    for i in range(int(length)):
        x = cx + math.sin(i * bend) * 2 * s
        filled_rect(ctx.canvas, x - thickness / 2, top + i, thickness, 1, color)
    return top


# -- base shapes


def _base_wand(ctx: DrawContext) -> None:
    s = ctx.scale
    length = 60 * _multiplier(ctx.selection, "length") * s
    thickness = ctx.asset.extras["thickness"] * s
    _shaft(ctx, length, thickness, 0.1, _color(ctx, "material"))


def _base_staff(ctx: DrawContext) -> None:
    s = ctx.scale
    length = 100 * _multiplier(ctx.selection, "length") * s
    thickness = ctx.asset.extras["thickness"] * s
    _shaft(ctx, length, thickness, 0.05, _color(ctx, "material"))


def _orb_geometry(ctx: DrawContext) -> tuple[float, float, float]:
    return ctx.cx, ctx.cy, 40 * _multiplier(ctx.selection, "size") * ctx.scale


def _base_orb(ctx: DrawContext) -> None:
    cx, cy, size = _orb_geometry(ctx)
    color = _color(ctx, "material")
    shape = ctx.key("shape")
    if shape == "teardrop":
        filled_ellipse(ctx.canvas, cx, cy, size * 0.4, size * 0.4, color)
        filled_polygon(ctx.canvas, [(cx, cy - size * 0.8), (cx - size * 0.35, cy - size * 0.2), (cx + size * 0.35, cy - size * 0.2)], color)
    elif shape == "irregular":
        filled_polygon(ctx.canvas, regular_polygon_points(cx, cy, size * 0.6, 8, jitter=1 / 3, rng=ctx.rng), color)
    else:
        filled_ellipse(ctx.canvas, cx, cy, size * 0.5, size * 0.5, color)
        if shape == "faceted":
            edge = color.lighten(-30)
            for i in range(6):
                angle = i * math.tau / 6
                line(ctx.canvas, cx + math.cos(angle) * size * 0.3, cy + math.sin(angle) * size * 0.3,
                     cx + math.cos(angle) * size * 0.5, cy + math.sin(angle) * size * 0.5, edge)


def _rune_geometry(ctx: DrawContext) -> tuple[float, float, float]:
    return ctx.cx, ctx.cy, ctx.asset.extras["rune_size"] * ctx.scale


def _base_rune(ctx: DrawContext) -> None:
    cx, cy, size = _rune_geometry(ctx)
    color = _color(ctx, "material")
    shape = ctx.key("shape")
    if shape == "circular":
        filled_ellipse(ctx.canvas, cx, cy, size * 0.5, size * 0.5, color)
    elif shape == "rectangular":
        filled_rect(ctx.canvas, cx - size * 0.4, cy - size * 0.4, size * 0.8, size * 0.8, color)
    elif shape == "triangular":
        filled_polygon(ctx.canvas, [(cx, cy - size * 0.5), (cx - size * 0.43, cy + size * 0.25), (cx + size * 0.43, cy + size * 0.25)], color)
    else:
        points = []
        corners = 6 if shape == "irregular" else 10
        for i in range(corners):
            angle = i * math.tau / corners
            r = size * (0.3 + ctx.rng.random() * 0.3) if shape == "irregular" else size * (0.5 if i % 2 == 0 else 0.38)
            points.append((cx + math.cos(angle) * r, cy + math.sin(angle) * r))
        filled_polygon(ctx.canvas, points, color)


def _book_geometry(ctx: DrawContext, base_w: float, base_h: float) -> tuple[float, float, float, float]:
    m = _multiplier(ctx.selection, "size")
    s = ctx.scale
    w, h = base_w * m * s, base_h * m * s
    return ctx.cx, ctx.height - h - 10 * s, w, h


def _base_spellbook(ctx: DrawContext) -> None:
    cx, y, w, h = _book_geometry(ctx, 60, 80)
    color = _color(ctx, "cover")
    filled_rect(ctx.canvas, cx - w * 0.45, y + h * 0.05, w * 0.9, h * 0.9, color)
    filled_rect(ctx.canvas, cx - w * 0.05, y, w * 0.1, h, color.lighten(-20))
    filled_rect(ctx.canvas, cx + w * 0.4, y + h * 0.1, w * 0.05, h * 0.8, color)


def _base_tome(ctx: DrawContext) -> None:
    cx, y, w, h = _book_geometry(ctx, 70, 90)
    filled_rect(ctx.canvas, cx - w * 0.45, y, w * 0.9, h, _color(ctx, "cover"))


def _amulet_geometry(ctx: DrawContext) -> tuple[float, float, float]:
    return ctx.cx, ctx.height * 0.55, ctx.asset.extras["amulet_size"] * ctx.scale


def _base_amulet(ctx: DrawContext) -> None:
    cx, y, size = _amulet_geometry(ctx)
    chain = _color(ctx, "chain", "#C0C0C0")
    for i in range(int(size * 2)):
        filled_ellipse(ctx.canvas, cx + math.sin(i * 0.5) * 3 * ctx.scale, y - size * 0.4 - i, 1.5, 1.5, chain)

    color = _color(ctx, "material")
    shape = ctx.key("shape")
    if shape == "circular":
        filled_ellipse(ctx.canvas, cx, y, size * 0.4, size * 0.4, color)
    elif shape == "triangular":
        filled_polygon(ctx.canvas, [(cx, y - size * 0.4), (cx - size * 0.35, y + size * 0.2), (cx + size * 0.35, y + size * 0.2)], color)
    elif shape == "pentagonal":
        points = [
            (cx + math.cos(i * math.tau / 5 - math.pi / 2) * size * 0.4, y + math.sin(i * math.tau / 5 - math.pi / 2) * size * 0.4)
            for i in range(5)
        ]
        filled_polygon(ctx.canvas, points, color)
    elif shape == "animal":
        # Owl-ish silhouette: body, two ear tufts.
        filled_ellipse(ctx.canvas, cx, y, size * 0.3, size * 0.4, color)
        filled_polygon(ctx.canvas, [(cx - size * 0.3, y - size * 0.5), (cx - size * 0.25, y - size * 0.2), (cx - size * 0.1, y - size * 0.3)], color)
        filled_polygon(ctx.canvas, [(cx + size * 0.3, y - size * 0.5), (cx + size * 0.25, y - size * 0.2), (cx + size * 0.1, y - size * 0.3)], color)
    else:
        filled_polygon(ctx.canvas, regular_polygon_points(cx, y, size * 0.45, 7, jitter=1 / 3, rng=ctx.rng), color)


def _ring_geometry(ctx: DrawContext) -> tuple[float, float, float]:
    # Rings read too small at their natural 20-30 px; draw at double size.
    return ctx.cx, ctx.cy, 25 * _multiplier(ctx.selection, "size") * 2 * ctx.scale


def _base_ring(ctx: DrawContext) -> None:
    cx, cy, size = _ring_geometry(ctx)
    filled_ellipse(ctx.canvas, cx, cy, size * 0.4, size * 0.4, _color(ctx, "material"))
    filled_ellipse(ctx.canvas, cx, cy, size * 0.3, size * 0.3, TRANSPARENT)


_BASES = {
    "wand": _base_wand,
    "orb": _base_orb,
    "rune": _base_rune,
    "spellbook": _base_spellbook,
    "amulet": _base_amulet,
    "ring": _base_ring,
    "staff": _base_staff,
    "tome": _base_tome,
}


def draw_base(ctx: DrawContext) -> None:
    _BASES[ctx.key("type")](ctx)


def draw_texture(ctx: DrawContext) -> None:
    texture_variation(ctx.canvas, None, ctx.rng, step=4, chance=0.3, spread=20)


# -- details


def _wand_details(ctx: DrawContext) -> None:
    s = ctx.scale
    length = 60 * _multiplier(ctx.selection, "length") * s
    cx, bottom, _ = _layout_origin(ctx)
    top = bottom - length
    core = _color(ctx, "core")
    # Core shows through the middle of the shaft.
    for i in range(int(length * 0.2), int(length * 0.8)):
        x = int(cx + math.sin(i * 0.1) * 2 * s)
        y = int(top + i)
        if ctx.canvas.is_opaque(x, y):
            ctx.canvas.set_pixel(x, y, ctx.canvas.get_pixel(x, y).blend(core, 0.5))

    tip = ctx.key("tip")
    white = Color.from_hex("#FFFFFF")
    if tip == "simple":
        filled_ellipse(ctx.canvas, cx, top, 3 * s, 3 * s, white)
    elif tip == "ornate":
        filled_ellipse(ctx.canvas, cx, top, 5 * s, 4 * s, GOLD)
        filled_ellipse(ctx.canvas, cx - 3 * s, top - 2 * s, 1.5 * s, 1.5 * s, Color.from_hex("#FF6347"))
        filled_ellipse(ctx.canvas, cx + 3 * s, top - 2 * s, 1.5 * s, 1.5 * s, Color.from_hex("#FF6347"))
    elif tip == "gemmed":
        filled_ellipse(ctx.canvas, cx, top, 5 * s, 5 * s, Color.from_hex("#DC143C"))
        for i in range(4):
            angle = i * math.tau / 4
            filled_ellipse(ctx.canvas, cx + math.cos(angle) * 6 * s, top + math.sin(angle) * 6 * s, 1.5 * s, 1.5 * s,
                           Color.from_hex("#9370DB"))
    elif tip == "spiked":
        filled_ellipse(ctx.canvas, cx, top, 4 * s, 4 * s, Color.from_hex("#C0C0C0"))
        for i in range(6):
            angle = i * math.tau / 6
            line(ctx.canvas, cx, top, cx + math.cos(angle) * 8 * s, top + math.sin(angle) * 8 * s, Color.from_hex("#808080"))
    else:
        filled_ellipse(ctx.canvas, cx + 4 * s, top - 2 * s, 3 * s, 4 * s, white)


def _staff_details(ctx: DrawContext) -> None:
    s = ctx.scale
    length = 100 * _multiplier(ctx.selection, "length") * s
    cx, bottom, _ = _layout_origin(ctx)
    top = bottom - length
    tip_size = ctx.asset.extras["thickness"] * 3 * s
    color = _color(ctx, "tip")
    tip = ctx.key("tip")
    if tip == "crystal":
        filled_ellipse(ctx.canvas, cx, top - tip_size * 0.5, tip_size * 0.5, tip_size * 0.5, color)
    elif tip == "orb":
        filled_ellipse(ctx.canvas, cx, top - tip_size * 0.5, tip_size * 0.4, tip_size * 0.4, color)
    elif tip == "skull":
        filled_ellipse(ctx.canvas, cx, top - tip_size * 0.3, tip_size * 0.3, tip_size * 0.2, color)
        filled_ellipse(ctx.canvas, cx - tip_size * 0.15, top - tip_size * 0.1, tip_size * 0.1, tip_size * 0.15, color)
        filled_ellipse(ctx.canvas, cx + tip_size * 0.15, top - tip_size * 0.1, tip_size * 0.1, tip_size * 0.15, color)
    elif tip == "talon":
        for dx in (-0.3, 0.0, 0.3):
            line(ctx.canvas, cx, top, cx + dx * tip_size, top - tip_size * 0.5, color, width=2 * s)
    else:
        filled_polygon(ctx.canvas, [(cx, top - tip_size * 0.6), (cx - tip_size * 0.2, top - tip_size * 0.2),
                                    (cx, top + tip_size * 0.1), (cx + tip_size * 0.2, top - tip_size * 0.2)], color)

    decoration = ctx.key("decoration")
    if decoration in ("runic", "ornate"):
        for i in range(8):
            ry = top + (i + 1) * (length * 0.8) / 9
            filled_ellipse(ctx.canvas, cx + math.sin(i * 0.8) * 8 * s, ry, 2 * s, 2 * s, GOLD)
    elif decoration == "gemmed":
        for i in range(3):
            filled_ellipse(ctx.canvas, cx, top + (i + 1) * length / 4, 2.5 * s, 2.5 * s, Color.from_hex("#DC143C"))
    elif decoration == "natural":
        leaf = Color.from_hex("#228B22")
        for i in range(4):
            filled_ellipse(ctx.canvas, cx + (4 if i % 2 else -4) * s, top + (i + 1) * length / 6, 3 * s, 1.5 * s, leaf)


def _orb_details(ctx: DrawContext) -> None:
    cx, cy, size = _orb_geometry(ctx)
    ability = ctx.key("ability")
    color = _color(ctx, "ability")
    if ability == "scrying":
        for i in range(5):
            angle = i * math.tau / 5
            filled_ellipse(ctx.canvas, cx + math.cos(angle) * size * 0.2, cy + math.sin(angle) * size * 0.2,
                           size * 0.1, size * 0.1, color)
    elif ability == "teleportation":
        for r in range(1, 4):
            radius = size * 0.3 * r / 3
            steps = max(8, int(radius))
            for k in range(steps):
                angle = k * math.tau / steps
                ctx.canvas.set_pixel(int(cx + math.cos(angle) * radius), int(cy + math.sin(angle) * radius), color)
    elif ability == "mind_reading":
        filled_ellipse(ctx.canvas, cx, cy, size * 0.25, size * 0.15, color)
        filled_ellipse(ctx.canvas, cx, cy, size * 0.08, size * 0.08, Color.from_hex("#000000"))
    elif ability == "weather_control":
        for dx in (-0.12, 0.0, 0.12):
            filled_ellipse(ctx.canvas, cx + dx * size, cy - size * 0.05, size * 0.12, size * 0.08, color)
        line(ctx.canvas, cx, cy + size * 0.05, cx - size * 0.08, cy + size * 0.25, GOLD, width=2)
    else:
        line(ctx.canvas, cx, cy, cx, cy - size * 0.3, color, width=2)
        line(ctx.canvas, cx, cy, cx + size * 0.2, cy, color, width=2)

    if ctx.key("material") in ("crystal", "gemstone"):
        edge = _color(ctx, "material").lighten(-30)
        for i in range(8):
            angle = i * math.tau / 8
            line(ctx.canvas, cx + math.cos(angle) * size * 0.3, cy + math.sin(angle) * size * 0.3,
                 cx + math.cos(angle) * size * 0.5, cy + math.sin(angle) * size * 0.5, edge)


def _rune_details(ctx: DrawContext) -> None:
    cx, cy, size = _rune_geometry(ctx)
    c = ctx.canvas
    symbol = ctx.key("symbol")
    if symbol == "power":
        line(c, cx, cy - size * 0.2, cx, cy + size * 0.2, GOLD)
        line(c, cx, cy - size * 0.2, cx - size * 0.1, cy, GOLD)
        line(c, cx, cy - size * 0.2, cx + size * 0.1, cy, GOLD)
    elif symbol == "protection":
        filled_ellipse(c, cx, cy, size * 0.15, size * 0.2, GOLD)
        line(c, cx - size * 0.15, cy - size * 0.1, cx, cy - size * 0.25, GOLD)
        line(c, cx + size * 0.15, cy - size * 0.1, cx, cy - size * 0.25, GOLD)
    elif symbol == "wisdom":
        filled_ellipse(c, cx, cy, size * 0.2, size * 0.1, GOLD)
        filled_ellipse(c, cx, cy, size * 0.08, size * 0.08, Color.from_hex("#000000"))
    elif symbol == "destruction":
        filled_ellipse(c, cx, cy - size * 0.1, size * 0.15, size * 0.1, GOLD)
        filled_ellipse(c, cx - size * 0.08, cy + size * 0.05, size * 0.05, size * 0.08, GOLD)
        filled_ellipse(c, cx + size * 0.08, cy + size * 0.05, size * 0.05, size * 0.08, GOLD)
    elif symbol == "creation":
        line(c, cx - size * 0.2, cy, cx + size * 0.2, cy, GOLD)
        line(c, cx, cy - size * 0.2, cx, cy + size * 0.2, GOLD)
        filled_ellipse(c, cx, cy, size * 0.06, size * 0.06, GOLD)
    else:
        line(c, cx - size * 0.22, cy, cx + size * 0.22, cy, GOLD)
        filled_ellipse(c, cx - size * 0.15, cy - size * 0.08, size * 0.06, size * 0.06, GOLD)
        filled_ellipse(c, cx + size * 0.15, cy - size * 0.08, size * 0.06, size * 0.06, GOLD)

    age = ctx.key("age")
    rng = ctx.rng
    if age in ("ancient", "elder"):
        for _ in range(10):
            x = cx + int((rng.random() - 0.5) * size * 0.8)
            y = cy + int((rng.random() - 0.5) * size * 0.8)
            for j in range(rng.randint(5, 19)):
                px, py = int(x + (rng.random() - 0.5) * 4), int(y + j)
                if c.is_opaque(px, py):
                    c.set_pixel(px, py, c.get_pixel(px, py).lighten(-50))
    else:
        for i in range(12):
            angle = i * math.tau / 12
            filled_ellipse(c, cx + math.cos(angle) * size * 0.45, cy + math.sin(angle) * size * 0.45, 2, 2, GOLD)


def _spellbook_details(ctx: DrawContext) -> None:
    cx, y, w, h = _book_geometry(ctx, 60, 80)
    c = ctx.canvas
    page = Color.from_hex("#F5F5DC")
    for i in range(5):
        offset = i * 2 * ctx.scale
        filled_rect(c, cx - w * 0.4 + offset, y + h * 0.1, w * 0.35 - offset, h * 0.8, page)
    ink = Color.from_hex("#000000")
    for _ in range(20):
        x = cx - w * 0.35 + ctx.rng.random() * w * 0.3
        yy = y + h * 0.15 + ctx.rng.random() * h * 0.7
        filled_ellipse(c, x, yy, 0.5, 0.5, ink)

    binding = ctx.key("binding")
    metal = Color.from_hex("#696969")
    if binding == "simple":
        for bx, by in ((-0.45, 0.05), (0.4, 0.05), (-0.45, 0.9), (0.4, 0.9)):
            filled_rect(c, cx + w * bx, y + h * by, w * 0.05, h * 0.05, metal)
    elif binding == "ornate":
        for i in range(8):
            filled_ellipse(c, cx - w * 0.47 + i * w * 0.12, y + h * (0.03 if i % 2 == 0 else 0.92), 2, 2, GOLD)
    elif binding == "magical":
        for i in range(6):
            filled_ellipse(c, cx - w * 0.45 + i * w * 0.15, y + h * 0.5, 3, 3, Color.from_hex("#9370DB"))
    elif binding == "cursed":
        line(c, cx - w * 0.45, y + h * 0.05, cx + w * 0.45, y + h * 0.95, Color.from_hex("#2F4F4F"), width=2)
        line(c, cx + w * 0.45, y + h * 0.05, cx - w * 0.45, y + h * 0.95, Color.from_hex("#2F4F4F"), width=2)
    else:
        filled_rect(c, cx - w * 0.45, y + h * 0.45, w * 0.9, h * 0.1, Color.from_hex("#FFFACD"))

    condition = ctx.key("condition")
    rng = ctx.rng
    if condition == "weathered":
        for _ in range(15):
            px = int(cx + (rng.random() - 0.5) * w * 0.8)
            py = int(y + rng.random() * h)
            if c.is_opaque(px, py):
                c.set_pixel(px, py, c.get_pixel(px, py).lighten(-40))
    elif condition == "burnt":
        for _ in range(8):
            filled_ellipse(c, cx + (rng.random() - 0.5) * w * 0.6, y + rng.random() * h * 0.8, 4, 4, Color.from_hex("#2F1B14"))
    elif condition == "frozen":
        frost = Color.from_hex("#E0FFFF")
        for px, py in Region(int(cx - w * 0.45), int(y), int(w * 0.9), int(h * 0.12)).clip(c).coords():
            if c.is_opaque(px, py) and rng.random() < 0.5:
                c.set_pixel(px, py, c.get_pixel(px, py).blend(frost, 0.6))
    elif condition == "glowing":
        radial_glow(c, cx, y + h * 0.5, 0, max(w, h) * 0.3, GOLD, 80)


def _tome_details(ctx: DrawContext) -> None:
    cx, y, w, h = _book_geometry(ctx, 70, 90)
    c = ctx.canvas
    binding = ctx.key("binding")
    if binding == "chains":
        for i in range(6):
            filled_rect(c, cx - w * 0.5, y + (i + 1) * (h * 0.8) / 7, w, 2, Color.from_hex("#696969"))
    elif binding == "runes":
        for i in range(8):
            filled_ellipse(c, cx + math.sin(i * 0.8) * w * 0.4, y + (i + 1) * (h * 0.8) / 9, 3, 3, GOLD)
    elif binding == "tendrils":
        for i in range(4):
            yy = y + (i + 1) * h / 5
            line(c, cx - w * 0.45, yy, cx + w * 0.45, yy + math.sin(i) * 6, Color.from_hex("#2E0854"), width=2)
    elif binding == "crystals":
        for i in range(5):
            filled_ellipse(c, cx - w * 0.4 + i * w * 0.2, y + h * 0.5, 3, 5, Color.from_hex("#E6E6FA"))
    else:
        filled_ellipse(c, cx, y + h * 0.5, w * 0.2, w * 0.2, Color.from_hex("#000000"))

    content = ctx.key("content")
    rng = ctx.rng
    if content in ("curses", "forbidden_knowledge"):
        count, r, color = (15, 2, "#8B0000") if content == "curses" else (12, 3, "#9370DB")
        for _ in range(count):
            filled_ellipse(c, cx + (rng.random() - 0.5) * w * 0.8, y + rng.random() * h * 0.8, r, r, Color.from_hex(color))
    elif content == "prophecies":
        filled_ellipse(c, cx, y + h * 0.3, w * 0.15, w * 0.08, Color.from_hex("#87CEEB"))
        filled_ellipse(c, cx, y + h * 0.3, w * 0.05, w * 0.05, Color.from_hex("#000000"))


def _ring_details(ctx: DrawContext) -> None:
    cx, cy, size = _ring_geometry(ctx)
    if ctx.key("setting") in ("gemmed", "ornate"):
        for i in range(4):
            angle = i * math.tau / 4
            filled_rect(ctx.canvas, cx + math.cos(angle) * size * 0.35 - 1, cy - size * 0.4 + math.sin(angle) * size * 0.1 - 1,
                        2, 2, GOLD)
    elif ctx.key("setting") == "engraved":
        for i in range(12):
            angle = i * math.tau / 12
            ctx.canvas.set_pixel(int(cx + math.cos(angle) * size * 0.35), int(cy + math.sin(angle) * size * 0.35),
                                 _color(ctx, "material").lighten(-60))
    filled_ellipse(ctx.canvas, cx, cy - size * 0.4, size * 0.15, size * 0.15, _color(ctx, "gem"))



def _amulet_details(ctx: DrawContext) -> None:
    cx, y, size = _amulet_geometry(ctx)
    filled_ellipse(ctx.canvas, cx, y, size * 0.2, size * 0.2, _color(ctx, "gem"))


_DETAILS = {
    "wand": _wand_details,
    "orb": _orb_details,
    "rune": _rune_details,
    "spellbook": _spellbook_details,
    "amulet": _amulet_details,
    "ring": _ring_details,
    "staff": _staff_details,
    "tome": _tome_details,
}


def draw_details(ctx: DrawContext) -> None:
    _DETAILS[ctx.key("type")](ctx)


# -- enchantment and glow


def _rainbow_ring(ctx: DrawContext, cx: float, cy: float, inner: float, outer: float, max_alpha: int) -> None:
    span = outer - inner
    for x, y in Region.around(cx, cy, outer + 1, outer + 1).clip(ctx.canvas).coords():
        d = math.hypot(x - cx, y - cy)
        if d <= inner or d > outer or span <= 0:
            continue
        a = int(max_alpha * (1 - (d - inner) / span))
        if a <= 0:
            continue
        hue = (math.atan2(y - cy, x - cx) + math.pi) / math.tau
        r, g, b = colorsys.hls_to_rgb(hue, 0.5, 1.0)
        color = Color(int(r * 255), int(g * 255), int(b * 255))
        cur = ctx.canvas.get_pixel(x, y)
        if cur.a == 0:
            ctx.canvas.set_pixel(x, y, color.with_alpha(a))
        else:
            ctx.canvas.set_pixel(x, y, cur.blend(color, a / 255).with_alpha(max(cur.a, a)))


def draw_enchantment(ctx: DrawContext) -> None:
    kind = ctx.key("type")
    colors = _effect_colors(ctx)
    s = ctx.scale
    if kind in ("wand", "staff"):
        base = 60 if kind == "wand" else 100
        length = base * _multiplier(ctx.selection, "length") * s
        cx, bottom, _ = _layout_origin(ctx)
        region = Region(int(cx - 10 * s), int(bottom - length), max(1, int(20 * s)), max(1, int(length)))
        particle_scatter(ctx.canvas, region, 8 if kind == "wand" else 10, colors, ctx.rng, radius=(1, 2))
        if colors:
            thickness = ctx.asset.extras["thickness"] * s
            radial_glow(ctx.canvas, cx, bottom - length, 0, thickness * 2, colors[0], 100)
    elif kind == "orb":
        cx, cy, size = _orb_geometry(ctx)
        if ctx.key("glow") == "rainbow":
            _rainbow_ring(ctx, cx, cy, size * 0.4, size * 0.6, 150)
        else:
            radial_glow(ctx.canvas, cx, cy, size * 0.4, size * 0.6, _color(ctx, "glow"), 150)
    elif kind == "rune":
        cx, cy, size = _rune_geometry(ctx)
        effect = ctx.key("effect")
        color = _color(ctx, "effect")
        if effect in ("glowing", "warm"):
            radial_glow(ctx.canvas, cx, cy, 0, size * 0.3, color, 100)
        elif effect == "pulsing":
            radial_glow(ctx.canvas, cx, cy, size * 0.4, size * 0.55, color, 120)
        elif effect == "floating":
            particle_scatter(ctx.canvas, Region.around(cx, cy, size * 0.4, size * 0.4), 6, (color,), ctx.rng, radius=(1, 2))
        else:
            for i in range(16):
                angle = i * math.tau / 16
                ctx.canvas.set_pixel(int(cx + math.cos(angle) * size * 0.6), int(cy + math.sin(angle) * size * 0.6), color)
    elif kind == "spellbook":
        cx, y, w, h = _book_geometry(ctx, 60, 80)
        for i in range(12):
            angle = i * math.tau / 12
            if colors:
                filled_ellipse(ctx.canvas, cx + math.cos(angle) * w * 0.6, y + h * 0.5 + math.sin(angle) * h * 0.6,
                               2, 2, ctx.rng.choice(colors))
    elif kind == "amulet":
        cx, y, size = _amulet_geometry(ctx)
        for i in range(8):
            angle = i * math.tau / 8
            if colors:
                filled_ellipse(ctx.canvas, cx + math.cos(angle) * size * 0.6, y + math.sin(angle) * size * 0.6,
                               2, 2, ctx.rng.choice(colors))
    elif kind == "ring":
        cx, cy, size = _ring_geometry(ctx)
        color = _color(ctx, "ability")
        for i in range(6):
            angle = i * math.tau / 6
            filled_ellipse(ctx.canvas, cx + math.cos(angle) * size * 0.5, cy + math.sin(angle) * size * 0.5, 1, 1, color)
    else:
        cx, y, w, h = _book_geometry(ctx, 70, 90)
        radial_glow(ctx.canvas, cx, y + h * 0.5, 0, max(w, h) * 0.55, _color(ctx, "aura"), 120)


SPEC = FamilySpec(
    name="magical",
    axes=AXES,
    build=build,
    passes=(("base", draw_base), ("texture", draw_texture), ("details", draw_details), ("enchantment", draw_enchantment)),
    default_size=(CANVAS_SIDE, CANVAS_SIDE),
    size_for=size_for,
    description="Wands, orbs, runes, spellbooks, amulets, rings, staves and tomes",
)
