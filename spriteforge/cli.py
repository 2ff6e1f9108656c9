from __future__ import annotations

"""
Command line front end.

    python main.py generate armor --set material=steel --set quality=epic --count 4
    python main.py list creature
"""

import argparse
import logging
import sys
from typing import Sequence

from spriteforge.assembler import generate_many, get_registry
from spriteforge.config import DEFAULT_OUTPUT_DIR, LOG_LEVELS, GenerationSettings
from spriteforge.core.errors import EncodingFailure, SpriteForgeError
from spriteforge.export import export_batch
from spriteforge.log import configure_logging
from spriteforge.resolver import DependentAxis

logger = logging.getLogger(__name__)


def _key_value(text: str) -> tuple[str, str]:
    key, sep, value = text.partition("=")
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f"expected key=value, got {text!r}")
    return key.strip(), value.strip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="spriteforge", description="Procedural sprite generator for fantasy game assets")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate sprites and write PNG + JSON pairs")
    gen.add_argument("family", help="Asset family (see 'list')")
    gen.add_argument("--set", dest="values", action="append", type=_key_value, default=[], metavar="KEY=VALUE",
                     help="Axis selection or extra, e.g. material=steel (repeatable)")
    gen.add_argument("--seed", type=int, default=None, help="Base seed; item i uses seed + i")
    gen.add_argument("--count", type=int, default=1, help="Number of sprites")
    gen.add_argument("--out", default=DEFAULT_OUTPUT_DIR, help="Output directory")
    gen.add_argument("--workers", type=int, default=1, help="Worker threads for the batch")
    gen.add_argument("--overwrite", action="store_true", help="Replace files with the same name")
    gen.add_argument("--log-level", default="INFO", choices=LOG_LEVELS, type=str.upper)

    ls = sub.add_parser("list", help="List families, or the axes of one family")
    ls.add_argument("family", nargs="?", default=None)
    return parser


def _cmd_generate(args: argparse.Namespace) -> int:
    settings = GenerationSettings.from_dict(
        {
            "seed": args.seed,
            "output_dir": args.out,
            "workers": args.workers,
            "log_level": args.log_level,
            "overwrite": args.overwrite,
        }
    )
    configure_logging(settings.log_level)
    get_registry().get(args.family)
    config = dict(args.values)
    batch = generate_many(args.family, args.count, config, seed=settings.seed, workers=settings.workers)
    if batch.results:
        try:
            export_batch(batch.results, settings.output_path, overwrite=settings.overwrite)
        except EncodingFailure as e:
            logger.error("export failed: %s", e)
            return 1
    for failure in batch.failures:
        print(f"item {failure.index} failed: {failure.kind}: {failure.message}", file=sys.stderr)
    print(f"{batch.succeeded} generated, {batch.failed} failed -> {settings.output_path}")
    return 0 if batch.ok else 1


def _cmd_list(args: argparse.Namespace) -> int:
    registry = get_registry()
    if args.family is None:
        for name in registry.names():
            print(f"{name:12s} {registry.get(name).description}")
        return 0
    spec = registry.get(args.family)
    for axis in spec.axes:
        if isinstance(axis, DependentAxis):
            print(f"{axis.name} (by {axis.parent}):")
            for parent, sub in axis.by_parent.items():
                print(f"  {parent}: {', '.join(sub.choices())}")
        else:
            print(f"{axis.name}: {', '.join(axis.choices())} (default {axis.default})")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        if args.command == "generate":
            return _cmd_generate(args)
        return _cmd_list(args)
    except SpriteForgeError as e:
        # unknown family, bad settings: usage problems rather than item failures
        print(f"error: {e}", file=sys.stderr)
        return 2
