from __future__ import annotations

"""Scrolls: spell scrolls, maps and documents, with aging and enchantment."""

import math
import random
from typing import Any

from spriteforge.core.color import BLACK, Color
from spriteforge.core.effects import Region, age_darken, radial_glow, scatter_noise
from spriteforge.core.primitives import diamond, filled_ellipse, filled_rect, line
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
    round_half_up,
)

MAX_AGE = 100

TYPE_AXIS = Axis.build("type", [template("spell", "Spell"), template("map", "Map"), template("document", "Document")])


def _spell(key: str, name: str, description: str, kind: str, mana: int, features: tuple[str, ...], **numbers: int) -> AxisTemplate:
    base = mana or numbers.get("damage") or numbers.get("healing") or 10
    return template(key, name, description=description, features=features, power=base,
                    extras={"spell_type": kind, "mana_cost": mana, **numbers, "lines": 6})


SPELLS = [
    _spell("fireball", "Fireball Scroll", "Scroll containing the fireball spell", "offensive", 25,
           ("fire_damage", "area_effect", "combustion"), damage=50, range=100, cooldown=30),
    _spell("heal", "Healing Scroll", "Scroll containing healing magic", "restorative", 20,
           ("health_restore", "divine_magic", "regeneration"), healing=75, range=50, cooldown=45),
    _spell("teleport", "Teleport Scroll", "Scroll containing teleportation magic", "utility", 40,
           ("instant_movement", "spatial_magic", "escape"), range=200, cooldown=120),
    _spell("summon", "Summon Scroll", "Scroll containing summoning magic", "summoning", 60,
           ("creature_summon", "arcane_magic", "ally"), duration=300, cooldown=180),
    _spell("lightning", "Lightning Scroll", "Scroll containing lightning magic", "offensive", 35,
           ("electric_damage", "chain_effect", "storm"), damage=80, range=150, cooldown=25),
    _spell("shield", "Protection Scroll", "Scroll containing protective magic", "defensive", 30,
           ("damage_reduction", "ward_magic", "defense"), duration=240, cooldown=90),
]

MAPS = [
    template("treasure", "Treasure Map", description="Map showing location of hidden treasure",
             features=("marked_locations", "compass_rose", "landmarks"), power=10,
             extras={"map_type": "treasure", "locations": ("buried_chest", "hidden_cave", "ancient_ruins"),
                     "difficulty": "medium", "lines": 4}),
    template("world", "World Map", description="Detailed map of the known world",
             features=("political_borders", "terrain_types", "trade_routes"), power=10,
             extras={"map_type": "geographical", "locations": ("cities", "mountains", "rivers", "forests"),
                     "scale": "continental", "lines": 4}),
    template("dungeon", "Dungeon Map", description="Map of underground dungeon complex",
             features=("room_layouts", "trap_markers", "secret_doors"), power=10,
             extras={"map_type": "architectural", "locations": ("rooms", "corridors", "traps", "treasure_rooms"),
                     "difficulty": "hard", "lines": 4}),
    template("navigation", "Navigation Chart", description="Sea navigation chart with currents and hazards",
             features=("depth_soundings", "wind_patterns", "safe_routes"), power=10,
             extras={"map_type": "nautical", "locations": ("ports", "reefs", "currents", "islands"),
                     "scale": "regional", "lines": 4}),
]

_LINES = {"short": 4, "medium": 8, "long": 12}


def _document(key: str, name: str, description: str, kind: str, content: str, length: str, features: tuple[str, ...]) -> AxisTemplate:
    return template(key, name, description=description, features=features, power=10,
                    extras={"document_type": kind, "content_type": content, "length": length, "lines": _LINES[length]})


DOCUMENTS = [
    _document("letter", "Personal Letter", "Handwritten letter with personal message", "correspondence", "personal",
              "short", ("handwriting", "seal", "signature")),
    _document("contract", "Legal Contract", "Formal legal agreement document", "legal", "formal",
              "medium", ("legal_language", "signatures", "witnesses")),
    _document("ancient_text", "Ancient Text", "Ancient manuscript with historical significance", "historical", "ancient",
              "long", ("archaic_language", "aged_appearance", "historical_value")),
    _document("recipe", "Recipe Scroll", "Culinary recipe with detailed instructions", "instructional", "practical",
              "medium", ("ingredients_list", "cooking_steps", "measurements")),
    _document("prophecy", "Prophecy Scroll", "Mystical prophecy with cryptic predictions", "mystical", "prophetic",
              "long", ("cryptic_language", "mystical_symbols", "foretelling")),
]

SUBTYPE_AXIS = DependentAxis(
    "subtype",
    "type",
    {
        "spell": Axis.build("subtype", SPELLS, default="fireball"),
        "map": Axis.build("subtype", MAPS, default="treasure"),
        "document": Axis.build("subtype", DOCUMENTS, default="letter"),
    },
)

MATERIAL_AXIS = Axis.build(
    "material",
    [
        template("parchment", "", color="#F5F5DC", description="written on parchment",
                 extras={"durability": 6, "aging_rate": 0.3, "magical_affinity": 0.2}),
        template("paper", "", color="#FFFFFF", description="written on paper",
                 extras={"durability": 4, "aging_rate": 0.5, "magical_affinity": 0.1}),
        template("magical_paper", "(Enchanted)", color="#E6E6FA", description="written on enchanted paper",
                 extras={"durability": 8, "aging_rate": 0.1, "magical_affinity": 0.9, "glow": "#9370DB", "rune_glow": True}),
        template("ancient_parchment", "(Ancient)", color="#DEB887", description="written on ancient parchment",
                 extras={"durability": 3, "aging_rate": 0.8, "magical_affinity": 0.4, "faded": "#D2B48C"}),
        template("crystal_paper", "(Crystal)", color="#F0F8FF", description="written on crystal paper",
                 extras={"durability": 10, "aging_rate": 0.05, "magical_affinity": 1.0, "glow": "#00BFFF"}),
    ],
    default="parchment",
)

# key: (prefix, stat, durability, value, readability, rarity, description, glow boost)
_QUALITIES = [
    ("common", "", 1.0, 1.0, 1.0, 0.8, 1, "A standard scroll", 1.0),
    ("uncommon", "Fine", 1.2, 1.1, 1.8, 0.85, 2, "A well-crafted scroll", 1.0),
    ("rare", "Rare", 1.5, 1.25, 4.0, 0.9, 3, "A finely made scroll", 1.0),
    ("epic", "Epic", 2.0, 1.5, 12.0, 0.95, 4, "A masterfully crafted scroll", 1.3),
    ("legendary", "Legendary", 3.0, 2.0, 40.0, 0.98, 5, "A legendary scroll of great power", 1.6),
    ("mythical", "Mythical", 5.0, 3.0, 150.0, 1.0, 6, "A mythical scroll of unimaginable power", 2.0),
]
QUALITY_AXIS = Axis.build(
    "quality",
    [
        template(key, prefix, description=desc, power=stat, durability=dur, value=value, readability=readability,
                 extras={"rarity": rarity, "glow_boost": boost})
        for key, prefix, stat, dur, value, readability, rarity, desc, boost in _QUALITIES
    ],
    default="common",
)

SIZE_AXIS = Axis.build(
    "size",
    [
        template("small", "Small", power=0.7, value=0.7, weight=0.7, extras={"draw": 0.8}),
        template("medium", "Medium", extras={"draw": 1.0}),
        template("large", "Large", power=1.3, value=1.3, weight=1.3, extras={"draw": 1.15}),
        template("huge", "Huge", power=1.6, value=1.6, weight=1.6, extras={"draw": 1.3}),
    ],
    default="medium",
)

AXES = (TYPE_AXIS, SUBTYPE_AXIS, MATERIAL_AXIS, QUALITY_AXIS, SIZE_AXIS)


def validate(config: Configuration) -> None:
    config.number("age", 0, low=0, high=MAX_AGE)


def age_multiplier(age: float) -> float:
    return max(0.1, 1 - age / 200)


def build(config: Configuration, sel: Selection, rng: random.Random) -> ResolvedAsset:
    kind, sub, material, quality = sel["type"], sel["subtype"], sel["material"], sel["quality"]
    age = config.number("age", 0, low=0, high=MAX_AGE)
    enchanted = config.flag("enchanted")
    aged = age_multiplier(age)

    raw = compose_stats(sel, ("power", "value", "readability", "weight"), fractional=("power", "value", "readability", "weight"))
    stats: dict[str, int | float] = {
        "power": round_half_up(raw["power"] * aged),
        "durability": round_half_up(100 * quality.modifier("durability") * (1 - age / 100)),
        "value": round_half_up(50 * raw["value"]),
        "readability": raw["readability"] * aged,
        "weight": 0.1 * raw["weight"],
        "rarity": quality.extra("rarity"),
    }
    for field in ("mana_cost", "damage", "healing", "range", "cooldown", "duration"):
        if sub.extra(field) is not None:
            stats[field] = sub.extra(field)

    content: dict[str, Any] = {"type": kind.key, "readability": quality.modifier("readability"), "lines": sub.extra("lines")}
    if kind.key == "spell":
        content["spell_data"] = {
            "name": sub.name, "type": sub.extra("spell_type"), "mana_cost": sub.extra("mana_cost"),
            "effects": list(sub.features),
        }
    elif kind.key == "map":
        content["map_data"] = {
            "type": sub.extra("map_type"), "locations": list(sub.extra("locations")),
            "difficulty": sub.extra("difficulty"),
        }
    else:
        content["document_data"] = {
            "type": sub.extra("document_type"), "content_type": sub.extra("content_type"), "length": sub.extra("length"),
        }

    effects: list[dict[str, Any]] = []
    if sub.extra("mana_cost"):
        effects.append({"type": "spell_cast", "power": stats["power"], "duration": 0, "instant": True,
                        "mana_cost": sub.extra("mana_cost")})
    effects.append({"type": "durability", "power": stats["durability"], "duration": -1, "instant": False})
    effects.append({"type": "readability", "power": stats["readability"], "duration": -1, "instant": False})
    if enchanted:
        effects.append({"type": "enchantment", "power": 1, "duration": -1, "instant": False})

    base_color = material.color
    if material.extra("faded") and age > 50:
        base_color = Color.from_hex(material.extra("faded"))
    glow = material.extra("glow") if enchanted else None

    age_desc = " that shows signs of age" if age > 50 else " that is somewhat aged" if age > 25 else ""
    return ResolvedAsset(
        stats=stats,
        features=merge_features(sub.features, ["enchanted"] if enchanted else []),
        name=render_name("{quality} {base} {suffix}", quality=quality.name, base=sub.name, suffix=material.name),
        description=f"{quality.description} {material.description}{age_desc}. {sub.description}.",
        selection={axis: t.key for axis, t in sel.items()} | {"age": f"{age:g}", "enchanted": str(enchanted).lower()},
        extras={
            "content": content,
            "effects": effects,
            "appearance": {
                "base_color": base_color.to_hex() if base_color else None,
                "glow_color": glow,
                "rune_glow": bool(material.extra("rune_glow")) and enchanted,
                "age": age,
            },
            "line_lengths": [20 + rng.random() * 10 for _ in range(min(sub.extra("lines"), 12))],
        },
    )


def _layout(ctx: DrawContext) -> tuple[float, float, float, float, float]:
    s = ctx.scale * ctx.pick("size").extra("draw")
    return ctx.cx, ctx.cy, 40 * s, 60 * s, s


def draw_base(ctx: DrawContext) -> None:
    c = ctx.canvas
    cx, cy, w, h, s = _layout(ctx)
    paper = Color.from_hex(ctx.asset.extras["appearance"]["base_color"])
    rod = paper.shade(-0.35)
    filled_rect(c, cx - w / 2, cy - h / 2, w, h, paper)
    for y in (cy - h / 2, cy + h / 2):
        filled_ellipse(c, cx - w / 2 - 2 * s, y, 3 * s, 3 * s, rod)
        filled_ellipse(c, cx + w / 2 + 2 * s, y, 3 * s, 3 * s, rod)
        filled_rect(c, cx - w / 2 - 2 * s, y - 2 * s, w + 4 * s, 4 * s, rod)
    border = paper.shade(-0.2)
    line(c, cx - w / 2 + 2 * s, cy - h / 2 + 4 * s, cx - w / 2 + 2 * s, cy + h / 2 - 4 * s, border)
    line(c, cx + w / 2 - 2 * s, cy - h / 2 + 4 * s, cx + w / 2 - 2 * s, cy + h / 2 - 4 * s, border)


def draw_content(ctx: DrawContext) -> None:
    c = ctx.canvas
    cx, cy, w, h, s = _layout(ctx)
    kind = ctx.key("type")
    if kind == "spell":
        ink = Color.from_hex("#4B0082")
        for i in range(6):
            diamond(c, cx + (i % 3 - 1) * 8 * s, cy + (i // 3) * 6 * s - 10 * s, 2 * s, 2 * s, ink)
        return
    if kind == "map":
        ink = Color.from_hex("#8B4513")
        marker = Color.from_hex("#B22222")
        for i in range(3):
            x = cx - 10 * s + i * 10 * s
            y = cy - 20 * s
            while y < cy + 20 * s:
                line(c, x, y, x + ctx.rng.uniform(-2, 2) * s, y + 3 * s, ink)
                y += 5 * s
        n = len(ctx.pick("subtype").extra("locations"))
        for i in range(n):
            angle = i / n * math.tau + ctx.rng.random() * 0.5
            mx = cx + math.cos(angle) * 15 * s
            my = cy + math.sin(angle) * 15 * s
            filled_rect(c, mx - 1.5 * s, my - 1.5 * s, 3 * s, 3 * s, marker)
        return
    for row, length in enumerate(ctx.asset.extras["line_lengths"]):
        y = int(cy - 15 * s + row * 3 * s)
        for x in range(int(length * s)):
            if ctx.rng.random() > 0.3:
                c.set_pixel(int(cx - length * s / 2 + x), y, BLACK)


def draw_decorations(ctx: DrawContext) -> None:
    cx, cy, w, h, s = _layout(ctx)
    quality = ctx.pick("quality")
    if ctx.key("type") == "document" or quality.key != "common":
        wax = Color.from_hex("#FFD700") if quality.extra("rarity") >= 5 else Color.from_hex("#8B0000")
        filled_ellipse(ctx.canvas, cx, cy + 25 * s, 4 * s, 4 * s, wax)
        filled_ellipse(ctx.canvas, cx, cy + 25 * s, 2 * s, 2 * s, wax.shade(-0.3))
    ribbon = Color.from_hex("#9370DB") if ctx.key("material") == "magical_paper" else Color.from_hex("#8B0000")
    filled_rect(ctx.canvas, cx - w / 2 - 1, cy - 1 * s, 3 * s, 2 * s, ribbon)


def draw_enchantment(ctx: DrawContext) -> None:
    glow = ctx.asset.extras["appearance"]["glow_color"]
    if not glow:
        return
    cx, cy, w, h, s = _layout(ctx)
    boost = ctx.pick("quality").extra("glow_boost")
    reach = max(w, h) / 2
    radial_glow(ctx.canvas, cx, cy, reach * 0.7, reach * 1.1, Color.from_hex(glow), int(min(255, 70 * boost)))
    if ctx.asset.extras["appearance"]["rune_glow"]:
        radial_glow(ctx.canvas, cx, cy - 7 * s, 0, 14 * s, Color.from_hex(glow), int(min(255, 50 * boost)))


def draw_aging(ctx: DrawContext) -> None:
    age = ctx.asset.extras["appearance"]["age"]
    if age <= 0:
        return
    factor = min(age / 100, 1.0)
    age_darken(ctx.canvas, factor, (0.2, 0.12, 0.08))
    if factor > 0.5:
        cx, cy, w, h, s = _layout(ctx)
        stains = [Color.from_hex("#8B7355"), Color.from_hex("#6B4423"), Color.from_hex("#A0522D")]
        scatter_noise(ctx.canvas, Region(int(cx - w / 2), int(cy - h / 2), int(w), int(h)), 0.05 * factor, stains, ctx.rng)


SPEC = FamilySpec(
    name="scroll",
    axes=AXES,
    build=build,
    passes=(
        ("base", draw_base),
        ("content", draw_content),
        ("decorations", draw_decorations),
        ("enchantment", draw_enchantment),
        ("aging", draw_aging),
    ),
    default_size=(64, 96),
    validate=validate,
    description="Spell scrolls, maps and documents with aging",
)
