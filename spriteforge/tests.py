from __future__ import annotations

import json
import logging
import os
import random

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pytest

from spriteforge import cli
from spriteforge.assembler import family_names, generate, generate_many, get_registry
from spriteforge.config import GenerationSettings
from spriteforge.core.canvas import PixelCanvas
from spriteforge.core.color import Color
from spriteforge.core.deadline import Deadline
from spriteforge.core.effects import age_darken, drop_shadow, radial_glow, scatter_noise, tint_blend
from spriteforge.core.errors import (
    EncodingFailure,
    GenerationCancelled,
    InvalidConfig,
    InvalidGeometry,
    SpriteForgeError,
    UnknownAxisValue,
)
from spriteforge.core.primitives import (
    filled_ellipse,
    filled_polygon,
    filled_rect,
    filled_triangle,
    line,
    regular_polygon_points,
)
from spriteforge.export import export_batch, export_result, load_record, load_result_png, slugify
from spriteforge.families import armor, creature, interactive, magical, torch
from spriteforge.log import configure_logging, get_logger
from spriteforge.resolver import Configuration, resolve, round_half_up, select

RED = Color(255, 0, 0)


def _covered(canvas: PixelCanvas) -> set[tuple[int, int]]:
    return {(x, y) for x, y, c in canvas.pixels() if c.a > 0}


# --- geometry ---


def test_square_polygon_matches_rect() -> None:
    a = PixelCanvas(16, 16)
    b = PixelCanvas(16, 16)
    filled_polygon(a, [(2, 2), (10, 2), (10, 8), (2, 8)], RED)
    filled_rect(b, 2, 2, 8, 6, RED)
    assert _covered(a) == _covered(b)
    assert len(_covered(a)) == 48


def test_ellipse_is_symmetric() -> None:
    canvas = PixelCanvas(21, 21)
    filled_ellipse(canvas, 10, 10, 6, 4, RED)
    cells = _covered(canvas)
    assert cells
    for x, y in cells:
        assert (20 - x, y) in cells
        assert (x, 20 - y) in cells
    assert (16, 10) in cells and (17, 10) not in cells


def test_circle_survives_quarter_turn() -> None:
    canvas = PixelCanvas(21, 21)
    filled_ellipse(canvas, 10, 10, 6, 6, RED)
    cells = _covered(canvas)
    # (x, y) -> (20 - y, x) rotates 90 degrees about (10, 10)
    assert {(20 - y, x) for x, y in cells} == cells


def test_zero_area_triangle_draws_nothing() -> None:
    canvas = PixelCanvas(10, 10)
    filled_triangle(canvas, 1, 1, 5, 5, 9, 9, RED)
    assert canvas.opaque_count() == 0


def test_triangle_fill_ignores_winding() -> None:
    ccw = PixelCanvas(10, 10)
    cw = PixelCanvas(10, 10)
    filled_triangle(ccw, 0, 0, 8, 0, 0, 8, RED)
    filled_triangle(cw, 0, 0, 0, 8, 8, 0, RED)
    cells = _covered(ccw)
    assert cells == _covered(cw)
    assert cells == {(x, y) for x in range(9) for y in range(9) if x + y <= 8}
    assert (2, 2) in cells and (6, 6) not in cells


def test_negative_sizes_use_absolute_value() -> None:
    def draw(fn, *args) -> set[tuple[int, int]]:
        canvas = PixelCanvas(24, 24)
        fn(canvas, *args, RED)
        return _covered(canvas)

    assert draw(filled_ellipse, 12, 12, -6, -4) == draw(filled_ellipse, 12, 12, 6, 4)
    assert draw(filled_rect, 3, 4, -8, -6) == draw(filled_rect, 3, 4, 8, 6)
    assert draw(line, 2, 2, 20, 14, -3) == draw(line, 2, 2, 20, 14, 3)


def test_self_intersecting_polygon_uses_parity() -> None:
    outline = regular_polygon_points(20.5, 20.5, 15, 5)
    star = PixelCanvas(41, 41)
    pentagon = PixelCanvas(41, 41)
    filled_polygon(star, [outline[i] for i in (0, 2, 4, 1, 3)], RED)
    filled_polygon(pentagon, outline, RED)
    # the star's inner pentagon is crossed twice, so it stays empty
    assert not star.is_opaque(20, 20)
    assert pentagon.is_opaque(20, 20)
    # tips are crossed once
    assert star.is_opaque(31, 20)
    assert star.opaque_count() < pentagon.opaque_count()


def test_off_canvas_drawing_is_clipped() -> None:
    canvas = PixelCanvas(10, 10)
    filled_rect(canvas, -50, -50, 10, 10, RED)
    filled_ellipse(canvas, 100, 100, 5, 5, RED)
    line(canvas, -20, -20, -5, -5, RED)
    assert canvas.opaque_count() == 0
    filled_rect(canvas, -5, -5, 8, 8, RED)
    assert canvas.opaque_count() == 9


def test_polygon_needs_three_points() -> None:
    with pytest.raises(InvalidGeometry):
        filled_polygon(PixelCanvas(4, 4), [(0, 0), (3, 3)], RED)


def test_concave_polygon_leaves_notch_empty() -> None:
    canvas = PixelCanvas(12, 12)
    # U shape: notch between x=4..8, y=0..6
    filled_polygon(canvas, [(0, 0), (4, 0), (4, 6), (8, 6), (8, 0), (12, 0), (12, 12), (0, 12)], RED)
    assert not canvas.is_opaque(6, 2)
    assert canvas.is_opaque(2, 2)
    assert canvas.is_opaque(6, 8)


# --- compositing ---


def test_tint_weights_and_alpha() -> None:
    canvas = PixelCanvas(2, 1)
    canvas.set_pixel(0, 0, Color(10, 20, 30, 128))
    tint_blend(canvas, Color(200, 100, 50), 0.0)
    assert canvas.get_pixel(0, 0) == Color(10, 20, 30, 128)
    tint_blend(canvas, Color(200, 100, 50), 1.0)
    assert canvas.get_pixel(0, 0) == Color(200, 100, 50, 128)
    # uncovered pixels stay transparent
    assert canvas.get_pixel(1, 0).a == 0


def test_glow_only_adds_coverage() -> None:
    canvas = PixelCanvas(20, 20)
    canvas.set_pixel(10, 10, Color(0, 0, 255))
    radial_glow(canvas, 10, 10, 0, 8, Color(255, 255, 0), 120)
    assert canvas.get_pixel(10, 10).a == 255
    assert canvas.is_opaque(12, 10)
    assert not canvas.is_opaque(0, 0)


def test_shadow_skips_covered_pixels() -> None:
    canvas = PixelCanvas(10, 10)
    canvas.set_pixel(5, 5, RED)
    drop_shadow(canvas, 5, 5, 6, 3)
    assert canvas.get_pixel(5, 5) == RED
    assert canvas.get_pixel(4, 5).a == 50
    assert canvas.get_pixel(4, 7).a < 50


def test_age_darken_clamps_at_black() -> None:
    canvas = PixelCanvas(2, 1)
    canvas.set_pixel(0, 0, Color(10, 200, 255, 180))
    age_darken(canvas, 1.0, strengths=(2.0, 1.0, 0.5))
    assert canvas.get_pixel(0, 0) == Color(0, 0, 127, 180)
    age_darken(canvas, 5.0)
    assert canvas.get_pixel(0, 0) == Color(0, 0, 0, 180)
    assert canvas.get_pixel(1, 0).a == 0


def test_scatter_noise_only_touches_covered_pixels() -> None:
    blue = Color(0, 0, 255)
    canvas = PixelCanvas(10, 10)
    filled_rect(canvas, 0, 0, 5, 10, RED)
    changed = scatter_noise(canvas, None, 1.0, (blue,), random.Random(1))
    assert changed > 0
    assert _covered(canvas) == {(x, y) for x in range(5) for y in range(10)}
    assert {canvas.get_pixel(x, y) for x, y in _covered(canvas)} <= {RED, blue}
    assert sum(1 for x, y in _covered(canvas) if canvas.get_pixel(x, y) == blue) <= changed


def test_color_helpers() -> None:
    c = Color.from_hex("#708090")
    assert c.to_hex() == "#708090"
    assert c.lighten(300) == Color(255, 255, 255)
    assert c.shade(-1.0) == Color(0, 0, 0)
    with pytest.raises(ValueError):
        Color(256, 0, 0)
    assert Color(1, 2, 3).as_tuple() == (1, 2, 3, 255)


def test_blend_pixel_and_copy() -> None:
    canvas = PixelCanvas(3, 1)
    canvas.set_pixel(0, 0, Color(0, 0, 0, 200))
    snapshot = canvas.copy()
    canvas.blend_pixel(0, 0, Color(100, 100, 100), 0.5)
    assert canvas.get_pixel(0, 0) == Color(50, 50, 50, 200)
    canvas.blend_pixel(1, 0, RED, 1.0)
    assert canvas.get_pixel(1, 0) == RED
    canvas.blend_pixel(2, 0, RED, 0.0)
    canvas.blend_pixel(9, 9, RED, 1.0)
    assert not canvas.is_opaque(2, 0)
    assert snapshot.get_pixel(0, 0) == Color(0, 0, 0, 200)
    assert snapshot != canvas


def test_regular_polygon_points() -> None:
    pts = regular_polygon_points(10, 10, 5, 4)
    assert len(pts) == 4
    assert pts[0] == pytest.approx((15, 10))
    with pytest.raises(InvalidGeometry):
        regular_polygon_points(0, 0, 5, 2)


# --- resolution and stats ---


def test_round_half_up() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(19.2) == 19
    assert round_half_up(-0.5) == 0


def test_resolve_composes_in_axis_order() -> None:
    asset = resolve(
        {"type": "chest_armor", "subtype": "plate_armor", "material": "steel", "quality": "epic", "size": "medium"},
        armor.AXES,
        fields=("defense", "weight"),
        fractional=("weight",),
        name_template="{quality}{material} {subtype}",
    )
    assert asset.stats["defense"] == 19
    assert asset.stats["weight"] == pytest.approx(25 * 1.1)
    assert asset.features == ("full_coverage", "maximum_protection", "heavy")
    assert asset.name == "Epic Steel Full Plate Armor"
    assert asset.selection["subtype"] == "plate_armor"


def test_steel_epic_plate_defense() -> None:
    result = generate("armor", {"type": "chest_armor", "subtype": "plate_armor", "material": "steel", "quality": "epic"}, seed=1)
    stats = result.asset.stats
    assert stats["defense"] == 19
    assert stats["durability"] == round_half_up(10 * 1.6)
    assert stats["weight"] == round_half_up(25 * 1.1)
    assert result.asset.name == "Epic Steel Full Plate Armor"


def test_armor_size_factors() -> None:
    plate = {"type": "chest_armor", "subtype": "plate_armor", "material": "steel"}
    weights = {
        size: generate("armor", {**plate, "size": size}, seed=1).asset.stats["weight"]
        for size in ("small", "medium", "large", "huge")
    }
    assert weights == {"small": 19, "medium": 28, "large": 36, "huge": 28}
    # huge draws at the medium scale
    medium = generate("armor", {**plate, "size": "medium"}, seed=2)
    huge = generate("armor", {**plate, "size": "huge"}, seed=2)
    assert huge.canvas == medium.canvas


def test_quality_raises_defense_monotonically() -> None:
    defenses = [
        generate("armor", {"material": "iron", "quality": q}, seed=0).asset.stats["defense"]
        for q in armor.QUALITY_AXIS.choices()
    ]
    assert defenses == sorted(defenses)
    assert defenses[0] < defenses[-1]


def test_dependent_axis_skipped_without_parent_entry() -> None:
    sel = select(Configuration({"type": "mermaid"}), creature.AXES)
    assert "size" not in sel
    assert sel["variant"].key == "ocean"


def test_unknown_values() -> None:
    with pytest.raises(UnknownAxisValue):
        generate("spaceship", seed=1)
    with pytest.raises(UnknownAxisValue) as info:
        generate("armor", {"material": "unobtainium"}, seed=1)
    assert "steel" in str(info.value)
    assert isinstance(info.value, SpriteForgeError)


def test_unknown_config_keys_are_ignored() -> None:
    a = generate("rock", {"type": "gem", "flavour": "mint"}, seed=5)
    b = generate("rock", {"type": "gem"}, seed=5)
    assert a.canvas == b.canvas


def test_same_seed_same_pixels() -> None:
    for family in ("rock", "creature", "interactive"):
        a = generate(family, seed=42)
        b = generate(family, seed=42)
        assert a.canvas == b.canvas
        assert a.asset.stats == b.asset.stats


# --- every family ---


def test_registry_lists_all_families() -> None:
    assert set(family_names()) == {"armor", "torch", "scroll", "magical", "creature", "rock", "interactive"}


def test_default_canvas_sizes() -> None:
    expected = {
        "armor": (64, 64),
        "torch": (48, 72),
        "scroll": (64, 96),
        "magical": (128, 128),
        "creature": (300, 180),
        "rock": (96, 96),
        "interactive": (60, 112),
    }
    for family, size in expected.items():
        result = generate(family, seed=3)
        assert result.canvas.size == size, family
        assert result.canvas.opaque_count() > 0, family


def test_every_family_honours_requested_size() -> None:
    for family in family_names():
        result = generate(family, {"width": 80, "height": 80}, seed=9)
        assert result.canvas.size == (80, 80), family
        assert result.canvas.opaque_count() > 0, family
        assert result.canvas.opaque_count() < 80 * 80, family


def test_bad_dimensions_rejected() -> None:
    with pytest.raises(InvalidConfig):
        generate("armor", {"width": 0}, seed=1)
    with pytest.raises(InvalidConfig):
        generate("armor", {"height": "tall"}, seed=1)


# --- families ---


def test_armor_set_and_statistics() -> None:
    pieces = armor.generate_armor_set("mithril", "rare", seed=4)
    assert len(pieces) == 6
    assert {p.asset.selection["type"] for p in pieces} == set(armor.SUBTYPES)
    stats = armor.statistics(pieces)
    assert stats["total"] == 6
    assert stats["by_material"] == {"mithril": 6}
    assert stats["by_quality"] == {"rare": 6}
    assert armor.statistics([])["average_defense"] == 0


def test_enchanted_armor_picks_distinct_enchantments() -> None:
    result = generate("armor", {"quality": "mythical", "enchanted": "true"}, seed=8)
    picked = [e["type"] for e in result.asset.extras["enchantments"]]
    assert len(picked) == 3
    assert len(set(picked)) == 3
    assert "magical_glow" in result.asset.extras["appearance"]["effects"]


def test_torch_eternal_fuel() -> None:
    result = generate("torch", {"fuel": "eternal"}, seed=1)
    assert result.asset.stats["duration"] == -1
    assert torch.performance_report(result)["duration"] == 100
    assert result.asset.extras["light_data"]["duration"] == -1


def test_torch_helpers() -> None:
    result = generate("torch", {"type": "brazier", "material": "metal", "quality": "rare"}, seed=2)
    assert torch.maintenance_cost(result) >= 1
    kinds = [u["type"] for u in torch.upgrade_options(result)]
    assert kinds == ["quality", "size", "flame"]
    themed = torch.lighting_set(3, "dungeon", seed=1)
    assert all(t.asset.selection["material"] == "wood" for t in themed)
    with pytest.raises(UnknownAxisValue):
        torch.lighting_set(1, "disco")
    found = torch.find_by_brightness(0, 10_000, seed=1)
    assert found.family == "torch"


def test_scroll_age_range() -> None:
    with pytest.raises(InvalidConfig):
        generate("scroll", {"age": 150}, seed=1)
    with pytest.raises(InvalidConfig):
        generate("scroll", {"age": -1}, seed=1)
    fresh = generate("scroll", {"age": 0}, seed=1).asset.stats
    old = generate("scroll", {"age": 80}, seed=1).asset.stats
    assert old["durability"] < fresh["durability"]
    assert old["power"] <= fresh["power"]


def test_magical_rarity_and_canvas() -> None:
    assert magical.rarity_for(95) == 5
    assert magical.rarity_for(60) == 4
    assert magical.rarity_for(10) == 1
    staff = generate("magical", {"type": "staff", "length": "tall"}, seed=1)
    assert staff.canvas.size == (128, 200)
    rune = generate("magical", {"type": "rune", "age": "elder"}, seed=1)
    assert rune.asset.stats["rarity"] == 4
    assert rune.asset.extras["rarity_name"] == "epic"


def test_creature_sizes_and_rarity() -> None:
    hatchling = generate("creature", {"type": "dragon", "size": "hatchling"}, seed=1)
    colossal = generate("creature", {"type": "dragon", "size": "colossal"}, seed=1)
    assert hatchling.asset.stats["power"] < colossal.asset.stats["power"]
    assert colossal.asset.stats["rarity"] == 5
    assert colossal.canvas.size[0] > hatchling.canvas.size[0]
    mermaid = generate("creature", {"type": "mermaid", "trait": "trident"}, seed=1)
    assert mermaid.asset.extras["animation_frames"] == 6
    assert "trident" in mermaid.asset.features
    assert "size" not in creature.creature_types()["centaur"]


def test_interactive_states() -> None:
    closed = generate("interactive", {"type": "door", "state": "closed"}, seed=1).asset
    locked = generate("interactive", {"type": "door", "state": "locked"}, seed=1).asset
    opened = generate("interactive", {"type": "door", "state": "open"}, seed=1).asset
    assert locked.stats["security"] > closed.stats["security"] > opened.stats["security"]
    assert opened.extras["passable"] and not closed.extras["passable"]
    small = generate("interactive", {"type": "gate", "size": "small"}, seed=1).asset
    large = generate("interactive", {"type": "gate", "size": "large"}, seed=1).asset
    assert small.stats["durability"] < large.stats["durability"]
    with pytest.raises(UnknownAxisValue):
        generate("interactive", {"type": "lever", "state": "closed"}, seed=1)
    assert interactive.MATERIALS["adamant"].modifier("durability") == 1.0


# --- batches, cancellation, settings ---


def test_batch_records_failures() -> None:
    good = {"material": "steel"}
    bad = {"material": "unobtainium"}
    batch = generate_many("armor", 5, [good, good, bad, good, bad], seed=10, workers=2)
    assert batch.succeeded == 3
    assert [f.index for f in batch.failures] == [2, 4]
    assert batch.failures[0].kind == "UnknownAxisValue"
    assert not batch.ok


def test_batch_seeds_are_offsets() -> None:
    batch = generate_many("rock", 3, None, seed=100)
    assert [r.seed for r in batch.results] == [100, 101, 102]
    assert batch.results[1].canvas == generate("rock", seed=101).canvas


def test_deadline_cancels_generation() -> None:
    with pytest.raises(GenerationCancelled):
        generate("armor", seed=1, deadline=Deadline(0))
    d = Deadline()
    assert not d.expired and d.remaining() is None
    d.cancel()
    with pytest.raises(GenerationCancelled):
        generate("rock", seed=1, deadline=d)


def test_generation_settings_validation() -> None:
    settings = GenerationSettings.from_dict({"workers": 4, "log_level": "debug"})
    assert settings.log_level == "DEBUG"
    assert GenerationSettings.from_dict(settings.to_dict()) == settings
    with pytest.raises(InvalidConfig):
        GenerationSettings.from_dict({"workers": 0})
    with pytest.raises(InvalidConfig):
        GenerationSettings(log_level="LOUD").validate()


def test_configure_logging_is_idempotent() -> None:
    logger = configure_logging("debug")
    configure_logging("warning")
    assert logger is get_logger()
    assert logger.level == logging.WARNING
    assert sum(1 for h in logger.handlers if getattr(h, "_spriteforge", False)) == 1


# --- export ---


def test_png_round_trip() -> None:
    canvas = PixelCanvas(5, 4)
    canvas.set_pixel(1, 1, Color(10, 20, 30, 40))
    canvas.set_pixel(4, 3, RED)
    assert PixelCanvas.from_png_bytes(canvas.to_png_bytes()) == canvas


def test_export_writes_sibling_json(tmp_path) -> None:
    result = generate("armor", {"material": "gold"}, seed=6)
    png, record = export_result(result, tmp_path)
    assert png.exists() and record.exists()
    assert png.stem == record.stem
    data = json.loads(record.read_text(encoding="utf-8"))
    assert data["width"] == 64 and data["height"] == 64
    assert data["family"] == "armor"
    assert data["seed"] == 6
    assert data["stats"]["defense"] == result.asset.stats["defense"]
    assert load_record(png) == data
    assert load_result_png(png) == result.canvas


def test_export_without_overwrite_counts_up(tmp_path) -> None:
    result = generate("rock", seed=1)
    first, _ = export_result(result, tmp_path, "pebble", overwrite=False)
    second, _ = export_result(result, tmp_path, "pebble", overwrite=False)
    assert first.name == "pebble.png"
    assert second.name == "pebble_2.png"
    assert slugify("Epic Steel: Plate!") == "epic_steel_plate"


def test_export_batch_manifest(tmp_path) -> None:
    batch = generate_many("torch", 3, None, seed=1)
    written = export_batch(batch.results, tmp_path)
    manifest = json.loads((tmp_path / "manifest.json").read_text(encoding="utf-8"))
    assert manifest["count"] == 3 == len(written)
    assert len({entry["png"] for entry in manifest["sprites"]}) == 3


def test_failed_record_write_leaves_no_png(tmp_path) -> None:
    result = generate("rock", seed=1)
    (tmp_path / "pebble.json").mkdir()
    with pytest.raises(EncodingFailure):
        export_result(result, tmp_path, "pebble")
    assert not (tmp_path / "pebble.png").exists()


def test_unserializable_record_writes_nothing(tmp_path) -> None:
    result = generate("rock", seed=1)
    result.asset.extras["handle"] = object()
    with pytest.raises(EncodingFailure):
        export_result(result, tmp_path / "out", "pebble")
    assert not (tmp_path / "out").exists()


def test_load_missing_png_raises(tmp_path) -> None:
    with pytest.raises(SpriteForgeError):
        load_result_png(tmp_path / "nope.png")


# --- cli ---


def test_cli_generate_and_list(tmp_path) -> None:
    out = tmp_path / "out"
    code = cli.main(["generate", "interactive", "--set", "type=portal", "--set", "state=active",
                     "--count", "2", "--seed", "5", "--out", str(out), "--log-level", "warning"])
    assert code == 0
    assert len(list(out.glob("*.png"))) == 2
    assert cli.main(["list"]) == 0
    assert cli.main(["list", "creature"]) == 0


def test_cli_exit_codes(tmp_path) -> None:
    assert cli.main(["generate", "spaceship", "--out", str(tmp_path)]) == 2
    assert cli.main(["generate", "armor", "--set", "material=unobtainium", "--out", str(tmp_path)]) == 1
    with pytest.raises(SystemExit) as info:
        cli.main(["generate"])
    assert info.value.code == 2
    assert get_registry().get("armor").name == "armor"
