from __future__ import annotations

"""Doors, gates, levers, switches and portals in their various states."""

import math
import random

from spriteforge.core.color import BLACK, WHITE, Color
from spriteforge.core.effects import Region, drop_shadow, particle_scatter, radial_glow, texture_variation
from spriteforge.core.primitives import filled_ellipse, filled_rect, filled_triangle, line
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

GOLD = Color.from_hex("#FFD700")
PURPLE = Color.from_hex("#9370DB")
BROWN = Color.from_hex("#8B4513")
RED = Color.from_hex("#FF0000")
SILVER = Color.from_hex("#C0C0C0")

# key: (name, layout width, layout height, durability, security, value)
ELEMENTS = {
    "door": ("Door", 40, 80, 100, 50, 20),
    "gate": ("Gate", 80, 100, 150, 70, 40),
    "lever": ("Lever", 30, 40, 60, 20, 10),
    "switch": ("Switch", 25, 30, 40, 15, 8),
    "portal": ("Portal", 60, 80, 200, 30, 120),
}

TYPE_AXIS = Axis.build(
    "type",
    [
        template(key, name, durability=durability, security=security, value=value, extras={"layout": (w, h)})
        for key, (name, w, h, durability, security, value) in ELEMENTS.items()
    ],
)


def _styles(*keys: str) -> Axis:
    return Axis.build("style", [template(k, k.replace("_", " ").title(), features=(k,)) for k in keys])


STYLE_AXIS = DependentAxis(
    "style",
    "type",
    {
        "door": _styles("wooden_door", "iron_door", "stone_door", "magical_door", "double_door", "secret_door", "barn_door"),
        "gate": _styles("iron_gate", "castle_gate", "portcullis_gate", "wooden_gate", "garden_gate"),
        "lever": _styles("simple_lever", "fancy_lever", "magic_lever", "rusty_lever", "stone_lever"),
        "switch": _styles("toggle_switch", "push_button", "pressure_plate", "pull_chain", "rune_switch"),
        "portal": _styles("magic_portal", "stone_portal", "crystal_portal", "rune_portal", "mirror_portal"),
    },
)


def _material(key: str, durability: float, color: str, texture: str, shine: float, value: float) -> AxisTemplate:
    return template(
        key,
        key.replace("_", " ").title(),
        color=color,
        features=(texture,),
        durability=durability,
        security=durability,
        value=value,
        extras={"texture": texture, "shine": shine},
    )


MATERIALS = {
    m.key: m
    for m in (
        _material("wood", 0.4, "#8B4513", "grainy", 0.2, 1.0),
        _material("iron", 0.8, "#708090", "metallic", 0.6, 1.5),
        _material("stone", 0.9, "#696969", "rough", 0.1, 1.2),
        _material("steel", 0.95, "#2F4F4F", "smooth_metal", 0.7, 2.0),
        _material("brass", 0.7, "#CD853F", "warm_metal", 0.8, 1.8),
        _material("silver", 0.6, "#C0C0C0", "noble", 0.9, 3.0),
        _material("gold", 0.5, "#FFD700", "precious", 1.0, 5.0),
        _material("crystal", 0.3, "#E6E6FA", "transparent", 0.95, 4.0),
        _material("bone", 0.2, "#F5F5DC", "porous", 0.3, 0.8),
        _material("mithril", 0.98, "#E6E6FA", "light_metal", 0.85, 8.0),
        _material("adamant", 1.0, "#2F4F4F", "hard_metal", 0.9, 10.0),
        _material("magical_wood", 0.6, "#9370DB", "ethereal", 0.5, 3.5),
        _material("reinforced_wood", 0.7, "#8B4513", "reinforced", 0.3, 1.4),
        _material("rune_stone", 0.8, "#696969", "engraved", 0.4, 4.5),
        _material("magical_energy", 0.1, "#9370DB", "energy", 0.8, 6.0),
    )
}


def _materials(*keys: str) -> Axis:
    return Axis.build("material", [MATERIALS[k] for k in keys])


MATERIAL_AXIS = DependentAxis(
    "material",
    "type",
    {
        "door": _materials("wood", "iron", "stone", "magical_wood", "reinforced_wood", "brass", "silver", "gold", "bone", "crystal"),
        "gate": _materials("iron", "wood", "steel", "brass", "silver", "gold", "mithril", "adamant", "bone"),
        "lever": _materials("wood", "iron", "steel", "gold", "silver", "crystal", "bone", "mithril", "brass"),
        "switch": _materials("iron", "wood", "stone", "crystal", "gold", "silver", "bone", "mithril", "brass"),
        "portal": _materials("stone", "wood", "crystal", "rune_stone", "magical_energy", "iron", "bone", "mithril"),
    },
)

SIZES = {"small": 0.6, "medium": 1.0, "large": 1.4, "extra_large": 1.8}

SIZE_AXIS = Axis.build(
    "size",
    [template(k, k.replace("_", " ").title(), durability=m, value=m, extras={"multiplier": m}) for k, m in SIZES.items()],
    default="medium",
)

_STATE_MODIFIERS = {
    "opening": {"security": 0.6},
    "closing": {"security": 0.6},
    "open": {"security": 0.2},
    "locked": {"security": 1.8},
    "broken": {"durability": 0.25, "security": 0.1, "value": 0.3},
    "rusty": {"durability": 0.6, "value": 0.7},
    "stuck": {"security": 1.2, "value": 0.8},
    "magical_glow": {"value": 1.5},
    "glowing": {"value": 1.3},
    "active": {"value": 1.2},
    "unstable": {"durability": 0.5, "security": 0.5},
}


def _states(**frames: int) -> Axis:
    return Axis.build(
        "state",
        [
            template(k, k.replace("_", " ").title(), extras={"frames": n}, **_STATE_MODIFIERS.get(k, {}))
            for k, n in frames.items()
        ],
    )


STATE_AXIS = DependentAxis(
    "state",
    "type",
    {
        "door": _states(closed=1, opening=4, open=1, closing=4, locked=1, broken=1),
        "gate": _states(closed=1, opening=6, open=1, closing=6, locked=1, rusty=1, broken=1),
        "lever": _states(off=1, on=1, broken=1, stuck=1, magical_glow=3),
        "switch": _states(off=1, on=1, pressed=1, broken=1, glowing=2),
        "portal": _states(inactive=1, activating=5, active=4, deactivating=3, unstable=3, broken=1),
    },
)

AXES = (TYPE_AXIS, STYLE_AXIS, MATERIAL_AXIS, SIZE_AXIS, STATE_AXIS)

STAT_FIELDS = ("durability", "security", "value")

# States in which something can pass through or be operated.
PASSABLE = {"open", "active"}


def size_for(config: Configuration, sel: Selection) -> tuple[int, int]:
    w, h = sel["type"].extra("layout")
    m = sel["size"].extra("multiplier")
    return max(32, math.ceil(w * m * 1.5)), max(32, math.ceil(h * m * 1.4))


def build(config: Configuration, sel: Selection, rng: random.Random) -> ResolvedAsset:
    kind, style, material, state = sel["type"], sel["style"], sel["material"], sel["state"]
    size = sel["size"]
    return ResolvedAsset(
        stats=compose_stats(sel, STAT_FIELDS),
        features=merge_features(style.features, material.features, [state.key]),
        name=render_name(
            "{size} {material} {style}",
            size=size.name if size.key != "medium" else "",
            material=material.name,
            style=style.name,
        ),
        description=f"A {state.name.lower()} {kind.key} made of {material.name.lower()}.",
        selection={axis: t.key for axis, t in sel.items()},
        extras={
            "animation_frames": state.extra("frames"),
            "texture": material.extra("texture"),
            "shine": material.extra("shine"),
            "passable": state.key in PASSABLE,
        },
    )


def _geometry(ctx: DrawContext) -> tuple[float, float, float, float]:
    """Element box: (centre x, top y, width, height), vertically centred."""
    lw, lh = ctx.pick("type").extra("layout")
    m = ctx.pick("size").extra("multiplier")
    w, h = lw * m * ctx.scale, lh * m * ctx.scale
    return ctx.cx, (ctx.height - h) / 2, w, h


def _base_color(ctx: DrawContext) -> Color:
    return ctx.pick("material").color or Color.from_hex("#808080")


# -- doors


def _door_panel(ctx: DrawContext, x: float, y: float, w: float, h: float, color: Color) -> None:
    style = ctx.key("style")
    c = ctx.canvas
    filled_rect(c, x, y, w, h, color)
    if style in ("wooden_door", "barn_door"):
        for i in range(4):
            filled_rect(c, x + w * 0.06, y + i * h * 0.25 + h * 0.04, w * 0.88, h * 0.17, color.lighten(-10))
        if style == "barn_door":
            brace = color.lighten(-30)
            line(c, x, y + h * 0.1, x + w, y + h * 0.9, brace, width=2 * ctx.scale)
            line(c, x + w, y + h * 0.1, x, y + h * 0.9, brace, width=2 * ctx.scale)
    elif style == "iron_door":
        for i in range(3):
            filled_rect(c, x + w * 0.06, y + i * h * 0.33 + h * 0.04, w * 0.88, h * 0.27, color.lighten(i * 5))
    elif style == "stone_door":
        cols = 3
        for i in range(6):
            for j in range(cols):
                filled_rect(c, x + w * 0.04 + j * w * 0.32, y + i * h * 0.165 + h * 0.01, w * 0.28, h * 0.14,
                            color.lighten((i + j) * 3))
    elif style == "magical_door":
        for _ in range(8):
            filled_ellipse(c, x + w * 0.2 + ctx.rng.random() * w * 0.6, y + ctx.rng.random() * h * 0.8 + h * 0.1,
                           1.5 * ctx.scale, 1.5 * ctx.scale, PURPLE)
    elif style == "secret_door":
        # flush with the wall: only a faint outline gives it away
        edge = color.lighten(-12)
        for x0, y0, x1, y1 in ((x, y, x + w, y), (x, y, x, y + h), (x + w, y, x + w, y + h)):
            line(c, x0, y0, x1, y1, edge)


def _draw_door(ctx: DrawContext) -> None:
    cx, y, w, h = _geometry(ctx)
    color = _base_color(ctx)
    state = ctx.key("state")
    c = ctx.canvas
    left = cx - w * 0.4
    if state in ("open", "opening", "closing"):
        filled_rect(c, left, y, w * 0.8, h, Color.from_hex("#1C1C1C"))
        swing = 0.15 if state == "open" else 0.45
        if ctx.key("style") == "double_door":
            _door_panel(ctx, left, y, w * swing * 0.5, h, color)
            _door_panel(ctx, cx + w * 0.4 - w * swing * 0.5, y, w * swing * 0.5, h, color)
        else:
            _door_panel(ctx, left, y, w * swing, h, color)
        return
    if ctx.key("style") == "double_door":
        _door_panel(ctx, cx - w * 0.45, y, w * 0.4, h, color)
        _door_panel(ctx, cx + w * 0.05, y, w * 0.4, h, color)
    else:
        _door_panel(ctx, left, y, w * 0.8, h, color)
    if state != "broken" and ctx.key("style") != "secret_door":
        filled_ellipse(c, cx + w * 0.25, y + h * 0.5, 2 * ctx.scale, 2 * ctx.scale, GOLD)


# -- gates


def _draw_gate(ctx: DrawContext) -> None:
    cx, y, w, h = _geometry(ctx)
    color = _base_color(ctx)
    style = ctx.key("style")
    state = ctx.key("state")
    c = ctx.canvas
    s = ctx.scale
    # open gates are pulled aside (or raised, for portcullis)
    spread = {"open": 0.3, "opening": 0.65, "closing": 0.65}.get(state, 1.0)
    left = cx - w * 0.4
    span = w * 0.8 * spread
    lift = h * (1 - spread) * 0.8 if style in ("portcullis_gate", "castle_gate") else 0.0
    if lift:
        span = w * 0.8

    if style in ("iron_gate", "garden_gate"):
        bars = 5 if style == "iron_gate" else 7
        thick = (3 if style == "iron_gate" else 2) * s
        for i in range(bars):
            filled_rect(c, left + w * 0.05 + i * span * 0.9 / (bars - 1), y, thick, h, color)
        for i in range(4 if style == "iron_gate" else 2):
            filled_rect(c, left + w * 0.05, y + h * 0.1 + i * h * 0.27, span * 0.9 + thick, thick, color)
        if style == "garden_gate":
            for i in range(bars):
                bx = left + w * 0.05 + i * span * 0.9 / (bars - 1) + thick / 2
                filled_ellipse(c, bx, y, 2 * s, 2 * s, color)
    elif style == "castle_gate":
        filled_rect(c, left, y - lift, span, h - lift if lift else h, color)
        for i in range(3):
            filled_rect(c, left + w * 0.05, y - lift + i * h * 0.3 + h * 0.1, span - w * 0.1, 5 * s, color.lighten(-25))
        for i in range(7):
            sx = left + w * 0.05 + i * w * 0.11
            filled_triangle(c, sx, y - lift, sx + 3 * s, y - lift, sx + 1.5 * s, y - lift - 8 * s, color)
    elif style == "portcullis_gate":
        bottom = y + h - lift
        for i in range(8):
            bx = left + i * w * 0.8 / 7
            filled_rect(c, bx, y, 2 * s, bottom - y, color)
            filled_triangle(c, bx, bottom, bx + 2 * s, bottom, bx + s, bottom + 10 * s * h / 100, color)
        for i in range(3):
            filled_rect(c, left, y + i * (bottom - y) * 0.33 + 2 * s, w * 0.8 + 2 * s, 2 * s, color)
    else:
        for i in range(6):
            px = left + i * span / 6
            filled_rect(c, px, y + h * 0.05, span / 6 - s, h * 0.95, color.lighten(-8 if i % 2 else 0))
            filled_triangle(c, px, y + h * 0.05, px + span / 6 - s, y + h * 0.05, px + span / 12, y - h * 0.03, color)
        for by in (0.25, 0.75):
            filled_rect(c, left, y + h * by, span, 3 * s, color.lighten(-30))


# -- levers and switches


def _draw_lever(ctx: DrawContext) -> None:
    cx, y, w, h = _geometry(ctx)
    color = _base_color(ctx)
    style = ctx.key("style")
    state = ctx.key("state")
    c = ctx.canvas
    s = ctx.scale
    base = Color.from_hex("#696969") if style == "stone_lever" else BROWN
    bw = w * (0.5 if style == "stone_lever" else 0.3)
    filled_rect(c, cx - bw / 2, y + h * 0.8, bw, h * 0.2, base)
    pivot_y = y + h * 0.85
    # "on" tilts the arm left, everything else rests to the right
    angle = math.pi * 0.7 if state == "on" else math.pi * 0.3
    length = h * (0.35 if state == "broken" else 0.7)
    ex = cx + math.cos(angle) * length
    ey = pivot_y - math.sin(angle) * length
    arm = color.lighten(-40) if style == "rusty_lever" else color
    line(c, cx, pivot_y, ex, ey, arm, width=3 * s)
    filled_ellipse(c, cx, pivot_y, 2.5 * s, 2.5 * s, BLACK)
    if state == "broken":
        return
    knob = {"fancy_lever": GOLD, "magic_lever": Color.from_hex("#E6E6FA")}.get(style, arm)
    filled_ellipse(c, ex, ey, 4 * s, 4 * s, knob)
    if style == "fancy_lever":
        filled_ellipse(c, ex, ey, 2 * s, 2 * s, Color.from_hex("#DC143C"))


def _draw_switch(ctx: DrawContext) -> None:
    cx, y, w, h = _geometry(ctx)
    color = _base_color(ctx)
    style = ctx.key("style")
    state = ctx.key("state")
    c = ctx.canvas
    s = ctx.scale
    pushed = state in ("on", "pressed")
    if style == "toggle_switch":
        filled_rect(c, cx - w * 0.3, y, w * 0.6, h * 0.8, color)
        ty = y + (h * 0.15 if pushed else h * 0.5)
        filled_rect(c, cx - w * 0.1, ty, w * 0.2, h * 0.2, GOLD)
    elif style == "push_button":
        filled_ellipse(c, cx, y + h * 0.4, w * 0.3, h * 0.3, color)
        r = 0.15 if pushed else 0.2
        filled_ellipse(c, cx, y + h * 0.4, w * r, h * r, RED if state != "broken" else Color.from_hex("#5A0000"))
    elif style == "pressure_plate":
        top = y + h * (0.68 if pushed else 0.6)
        filled_rect(c, cx - w * 0.4, top, w * 0.8, h * 0.2, color)
        for i in range(3):
            filled_ellipse(c, cx - w * 0.3 + i * w * 0.3, top + h * 0.1, s, s, GOLD)
    elif style == "pull_chain":
        filled_rect(c, cx - w * 0.2, y, w * 0.4, h * 0.3, color)
        links = 5 if pushed else 4
        for i in range(links):
            filled_ellipse(c, cx, y + h * 0.3 + i * h * 0.12, s, 1.5 * s, SILVER)
        filled_ellipse(c, cx, y + h * 0.32 + links * h * 0.12, 3 * s, 3 * s, SILVER)
    else:
        filled_rect(c, cx - w * 0.35, y + h * 0.1, w * 0.7, h * 0.7, color)
        glyph = GOLD if pushed or state == "glowing" else color.lighten(-40)
        line(c, cx - w * 0.2, y + h * 0.2, cx + w * 0.2, y + h * 0.7, glyph)
        line(c, cx + w * 0.2, y + h * 0.2, cx - w * 0.2, y + h * 0.7, glyph)
        line(c, cx, y + h * 0.15, cx, y + h * 0.75, glyph)


# -- portals


def _portal_opening(ctx: DrawContext) -> float:
    """Fraction of the full opening that is lit for the current state."""
    return {"active": 1.0, "unstable": 1.0, "activating": 0.6, "deactivating": 0.4}.get(ctx.key("state"), 0.0)


def _draw_portal(ctx: DrawContext) -> None:
    cx, y, w, h = _geometry(ctx)
    color = _base_color(ctx)
    style = ctx.key("style")
    c = ctx.canvas
    s = ctx.scale
    my = y + h * 0.5
    opening = _portal_opening(ctx)
    if style == "stone_portal":
        for i in range(9):
            a = math.pi + i / 8 * math.pi
            filled_ellipse(c, cx + math.cos(a) * w * 0.38, my + math.sin(a) * h * 0.42, 6 * s, 6 * s, color.lighten(i % 2 * 8))
        for side in (-1, 1):
            filled_rect(c, cx + side * w * 0.38 - 5 * s, my, 10 * s, h * 0.5, color)
        inner = BLACK
    elif style == "crystal_portal":
        for i in range(10):
            a = i / 10 * math.tau
            filled_ellipse(c, cx + math.cos(a) * w * 0.38, my + math.sin(a) * h * 0.42, 5 * s, 7 * s, color)
        inner = Color.from_hex("#E6E6FA")
    elif style == "mirror_portal":
        filled_ellipse(c, cx, my, w * 0.42, h * 0.48, SILVER)
        filled_ellipse(c, cx, my, w * 0.36, h * 0.42, Color.from_hex("#B0C4DE"))
        line(c, cx - w * 0.15, my - h * 0.2, cx - w * 0.05, my - h * 0.3, WHITE)
        inner = Color.from_hex("#4682B4")
    else:
        filled_ellipse(c, cx, my, w * 0.42, h * 0.48, color)
        filled_ellipse(c, cx, my, w * 0.32, h * 0.38, color.lighten(-35))
        inner = PURPLE
    if opening:
        filled_ellipse(c, cx, my, w * 0.3 * opening, h * 0.38 * opening, inner)


_SHAPES = {
    "door": _draw_door,
    "gate": _draw_gate,
    "lever": _draw_lever,
    "switch": _draw_switch,
    "portal": _draw_portal,
}


def draw_base(ctx: DrawContext) -> None:
    _SHAPES[ctx.key("type")](ctx)


def draw_details(ctx: DrawContext) -> None:
    """Material surface: grain, shine, engraving."""
    cx, y, w, h = _geometry(ctx)
    material = ctx.pick("material")
    texture = material.extra("texture")
    color = _base_color(ctx)
    c = ctx.canvas
    rng = ctx.rng
    s = ctx.scale
    box = Region(int(cx - w / 2), int(y), int(w) + 1, int(h) + 1)
    if texture in ("grainy", "reinforced"):
        grain = color.lighten(-15)
        for i in range(6):
            gy = y + h * 0.08 + i * h * 0.15
            for gx in range(int(cx - w * 0.35), int(cx + w * 0.35)):
                if c.is_opaque(gx, int(gy)) and rng.random() < 0.8:
                    c.set_pixel(gx, int(gy), grain)
        if texture == "reinforced":
            for by in (0.2, 0.8):
                for gx in range(int(cx - w * 0.4), int(cx + w * 0.4)):
                    if c.is_opaque(gx, int(y + h * by)):
                        c.set_pixel(gx, int(y + h * by), Color.from_hex("#2F4F4F"))
    elif texture in ("rough", "porous"):
        texture_variation(c, box, rng, step=2, chance=0.4, spread=20)
    elif texture == "engraved":
        for i in range(12):
            a = i / 12 * math.tau
            filled_ellipse(c, cx + math.cos(a) * w * 0.38, y + h * 0.5 + math.sin(a) * h * 0.44, 1.5 * s, 1.5 * s, GOLD)
    elif texture in ("ethereal", "energy"):
        particle_scatter(c, box, 8, (PURPLE, Color.from_hex("#DDA0DD")), rng, radius=(1, 1))
    if ctx.key("type") == "gate" and texture == "metallic":
        rivet = Color.from_hex("#505050")
        for _ in range(8):
            rx, ry = cx + (rng.random() - 0.5) * w * 0.7, y + rng.random() * h
            if c.is_opaque(int(rx), int(ry)):
                filled_ellipse(c, rx, ry, s, s, rivet)
    if ctx.key("style") == "rune_portal":
        for i in range(12):
            a = i / 12 * math.tau
            filled_ellipse(c, cx + math.cos(a) * w * 0.37, y + h * 0.5 + math.sin(a) * h * 0.43, 1.5 * s, 1.5 * s, GOLD)
    # shiny materials pick up a few specular dots
    shine = material.extra("shine")
    if shine > 0.5:
        for _ in range(int(shine * 4)):
            px, py = cx + (rng.random() - 0.5) * w * 0.6, y + rng.random() * h * 0.8
            if c.is_opaque(int(px), int(py)):
                c.set_pixel(int(px), int(py), WHITE)


def draw_state(ctx: DrawContext) -> None:
    cx, y, w, h = _geometry(ctx)
    kind = ctx.key("type")
    state = ctx.key("state")
    c = ctx.canvas
    rng = ctx.rng
    s = ctx.scale
    box = Region(int(cx - w * 0.4), int(y), int(w * 0.8) + 1, int(h) + 1)

    if state == "locked":
        lw, lh = (6, 9) if kind == "door" else (12, 18)
        lx = cx + w * 0.2 if kind == "door" else cx - lw * s / 2
        ly = y + h * 0.42
        filled_rect(c, lx, ly, lw * s, lh * s, GOLD)
        filled_ellipse(c, lx + lw * s / 2, ly + lh * s * 0.45, 1.5 * s, 1.5 * s, BLACK)
    elif state == "broken":
        if kind == "portal":
            for _ in range(6):
                px, py = cx + (rng.random() - 0.5) * w * 0.6, y + rng.random() * h
                line(c, px, py, px + 5 * s, py + 5 * s, BLACK)
        else:
            debris = Color.from_hex("#696969") if kind == "gate" else BROWN
            count = 8 if kind == "gate" else 5
            for _ in range(count):
                filled_ellipse(c, cx + (rng.random() - 0.5) * w * 0.8, y + rng.random() * h, 2 * s, 2 * s, debris)
            for _ in range(3):
                px, py = cx + (rng.random() - 0.5) * w * 0.6, y + rng.random() * h
                if c.is_opaque(int(px), int(py)):
                    line(c, px, py, px + rng.uniform(-4, 4) * s, py + 6 * s, BLACK)
    elif state == "rusty":
        particle_scatter(c, box, 10, (BROWN, Color.from_hex("#A0522D")), rng, radius=(1, 1))
    elif state == "stuck":
        filled_ellipse(c, cx, y + h * 0.85, 3 * s, 3 * s, Color.from_hex("#556B2F"))
    elif state == "magical_glow":
        particle_scatter(c, box, 5, (PURPLE,), rng, radius=(1, 2))
        radial_glow(c, cx, y + h * 0.5, 0, h * 0.6, PURPLE, 90)
    elif state == "glowing":
        particle_scatter(c, Region(box.x, box.y, box.w, int(h * 0.6)), 3, (GOLD,), rng, radius=(1, 2))
        radial_glow(c, cx, y + h * 0.4, 0, h * 0.6, GOLD, 80)

    if kind == "portal":
        opening = _portal_opening(ctx)
        my = y + h * 0.5
        if state == "unstable":
            for _ in range(8):
                filled_ellipse(c, cx + (rng.random() - 0.5) * w * 0.4, my + (rng.random() - 0.5) * h * 0.4, 2 * s, 2 * s, RED)
        if opening:
            swirl = Color.from_hex("#DDA0DD")
            for i in range(24):
                t = i / 24
                a = t * math.tau * 2
                r = (0.05 + t * 0.22) * opening
                filled_ellipse(c, cx + math.cos(a) * w * r, my + math.sin(a) * h * r * 1.3, s, s, swirl)
            radial_glow(c, cx, my, w * 0.3 * opening, w * 0.55, PURPLE, int(120 * opening))


def draw_shadow(ctx: DrawContext) -> None:
    cx, y, w, h = _geometry(ctx)
    drop_shadow(ctx.canvas, cx, y + h, w * 0.8, max(1, int(w * 0.05)), max_alpha=30)


SPEC = FamilySpec(
    name="interactive",
    axes=AXES,
    build=build,
    passes=(("base", draw_base), ("details", draw_details), ("state", draw_state), ("shadow", draw_shadow)),
    default_size=(60, 112),
    size_for=size_for,
    description="Doors, gates, levers, switches and portals",
)
