from __future__ import annotations

"""
Verify an export folder: every PNG has a JSON record whose width/height match,
and every sprite carries an alpha channel with at least one drawn pixel.

    python tools/verify_sprites.py sprites_out
"""

import json
import os
import sys
from pathlib import Path

import pygame


def _has_alpha(surf: pygame.Surface) -> bool:
    masks = surf.get_masks()
    flags = surf.get_flags()
    return bool(flags & pygame.SRCALPHA) or (len(masks) >= 4 and masks[3] != 0)


def _drawn(surf: pygame.Surface) -> bool:
    w, h = surf.get_size()
    return any(surf.get_at((x, y)).a > 0 for y in range(h) for x in range(w))


def check_folder(folder: Path) -> tuple[int, list[str]]:
    failures: list[str] = []
    pngs = sorted(folder.glob("*.png"))
    for path in pngs:
        record_path = path.with_suffix(".json")
        if not record_path.exists():
            failures.append(f"missing-json: {path}")
            continue
        try:
            record = json.loads(record_path.read_text(encoding="utf-8"))
        except ValueError as e:
            failures.append(f"bad-json: {record_path} ({e})")
            continue
        try:
            surf = pygame.image.load(str(path))
        except pygame.error as e:
            failures.append(f"load-failed: {path} ({e})")
            continue
        w, h = surf.get_size()
        ew, eh = record.get("width"), record.get("height")
        if (w, h) != (ew, eh):
            failures.append(f"size: {path} record says {ew}×{eh}, image is {w}×{h}")
        if not _has_alpha(surf):
            failures.append(f"alpha: {path} has no alpha channel")
        elif not _drawn(surf):
            failures.append(f"empty: {path} is fully transparent")
    for record_path in sorted(folder.glob("*.json")):
        if record_path.name == "manifest.json":
            continue
        if not record_path.with_suffix(".png").exists():
            failures.append(f"missing-png: {record_path}")
    return len(pngs), failures


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    folder = Path(args[0] if args else "sprites_out")
    if not folder.is_dir():
        print(f"not a directory: {folder}")
        return 2

    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    pygame.init()

    checked, failures = check_folder(folder)
    if failures:
        print("SPRITE VERIFICATION FAILED")
        for f in failures:
            print("-", f)
        return 1

    print("SPRITE VERIFICATION OK")
    print(f"Checked {checked} sprites in {folder}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
