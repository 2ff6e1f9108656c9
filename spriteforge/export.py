from __future__ import annotations

"""
Writing results to disk: one PNG plus a sibling JSON stat record per sprite.

    sprites_out/
        steel_plate_armor.png
        steel_plate_armor.json
        manifest.json      (batch exports only)
"""

import json
import logging
import re
import time
from pathlib import Path
from typing import Any, Iterable

import pygame

from spriteforge.assembler import GenerationResult
from spriteforge.config import JSON_INDENT, MANIFEST_FILE, PNG_SUFFIX, STATS_SUFFIX
from spriteforge.core.canvas import PixelCanvas
from spriteforge.core.errors import EncodingFailure

logger = logging.getLogger(__name__)

_SLUG = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    slug = _SLUG.sub("_", text.lower()).strip("_")
    return slug or "sprite"


def _free_stem(directory: Path, stem: str) -> str:
    """``stem``, or ``stem_2``, ``stem_3`` ... if either file already exists."""
    candidate = stem
    counter = 1
    while (directory / f"{candidate}{PNG_SUFFIX}").exists() or (directory / f"{candidate}{STATS_SUFFIX}").exists():
        counter += 1
        candidate = f"{stem}_{counter}"
    return candidate


def _write_json(path: Path, data: Any) -> None:
    path.write_text(json.dumps(data, indent=JSON_INDENT), encoding="utf-8")


def export_result(
    result: GenerationResult,
    directory: str | Path,
    stem: str | None = None,
    *,
    overwrite: bool = True,
) -> tuple[Path, Path]:
    """Write ``<stem>.png`` and ``<stem>.json``; returns both paths."""
    out_dir = Path(directory)
    stem = slugify(stem or f"{result.family}_{result.name}")
    try:
        record = json.dumps(result.to_record(), indent=JSON_INDENT)
    except (TypeError, ValueError) as e:
        raise EncodingFailure(f"stat record for {result.name!r} is not JSON serializable: {e}") from e
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
        if not overwrite:
            stem = _free_stem(out_dir, stem)
        png_path = out_dir / f"{stem}{PNG_SUFFIX}"
        json_path = out_dir / f"{stem}{STATS_SUFFIX}"
        png_path.write_bytes(result.canvas.to_png_bytes())
    except (OSError, pygame.error) as e:
        raise EncodingFailure(f"could not export {result.name!r} to {out_dir}: {e}") from e
    try:
        json_path.write_text(record, encoding="utf-8")
    except OSError as e:
        # never leave a PNG without its record
        png_path.unlink(missing_ok=True)
        raise EncodingFailure(f"could not write {json_path}: {e}") from e
    logger.debug("exported %s", png_path)
    return png_path, json_path


def export_batch(
    results: Iterable[GenerationResult],
    directory: str | Path,
    *,
    overwrite: bool = False,
) -> list[tuple[Path, Path]]:
    """Export every result and write a ``manifest.json`` describing the set."""
    out_dir = Path(directory)
    written: list[tuple[Path, Path]] = []
    entries: list[dict[str, Any]] = []
    for result in results:
        png_path, json_path = export_result(result, out_dir, overwrite=overwrite)
        written.append((png_path, json_path))
        entries.append(
            {
                "name": result.name,
                "family": result.family,
                "seed": result.seed,
                "png": png_path.name,
                "json": json_path.name,
                "width": result.canvas.width,
                "height": result.canvas.height,
            }
        )
    manifest = {"generated_at": time.time(), "count": len(entries), "sprites": entries}
    try:
        _write_json(out_dir / MANIFEST_FILE, manifest)
    except OSError as e:
        raise EncodingFailure(f"could not write manifest in {out_dir}: {e}") from e
    logger.info("exported %d sprites to %s", len(entries), out_dir)
    return written


def load_result_png(path: str | Path) -> PixelCanvas:
    """Decode an exported PNG back into a canvas."""
    try:
        return PixelCanvas.from_png_bytes(Path(path).read_bytes())
    except (OSError, pygame.error) as e:
        raise EncodingFailure(f"could not read {path}: {e}") from e


def load_record(path: str | Path) -> dict[str, Any]:
    """Read the JSON stat record that sits next to an exported PNG."""
    json_path = Path(path).with_suffix(STATS_SUFFIX)
    try:
        with open(json_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        raise EncodingFailure(f"could not read {json_path}: {e}") from e
