from __future__ import annotations

"""
Generation orchestration: resolve -> allocate -> draw passes -> result.

Each call owns its canvas and resolved asset; template tables are shared
read-only, so batches fan out over threads without locking.
"""

import logging
import random
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Union

from spriteforge.config import DEFAULT_WORKERS, MAX_CANVAS_SIDE, MAX_WORKERS
from spriteforge.core.canvas import PixelCanvas
from spriteforge.core.deadline import Deadline
from spriteforge.core.errors import InvalidConfig, SpriteForgeError, UnknownAxisValue
from spriteforge.family import DrawContext, FamilySpec
from spriteforge.resolver import Configuration, ResolvedAsset, select

logger = logging.getLogger(__name__)

ConfigLike = Union[Configuration, Mapping[str, Any], None]


@dataclass
class GenerationResult:
    family: str
    canvas: PixelCanvas
    asset: ResolvedAsset
    seed: int
    config: Configuration = field(default_factory=Configuration)

    @property
    def name(self) -> str:
        return self.asset.name

    def to_record(self) -> dict[str, Any]:
        record: dict[str, Any] = {
            "family": self.family,
            "seed": self.seed,
            "width": self.canvas.width,
            "height": self.canvas.height,
            "config": self.config.to_dict(),
        }
        record.update(self.asset.to_dict())
        return record


@dataclass(frozen=True)
class BatchFailure:
    index: int
    config: dict[str, Any]
    kind: str
    message: str


@dataclass
class BatchResult:
    results: list[GenerationResult] = field(default_factory=list)
    failures: list[BatchFailure] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return len(self.results)

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def ok(self) -> bool:
        return not self.failures

    def __len__(self) -> int:
        return len(self.results)


class FamilyRegistry:
    """Lookup table of asset families by name."""

    def __init__(self, specs: Sequence[FamilySpec]) -> None:
        self._specs = {spec.name: spec for spec in specs}

    def get(self, name: str) -> FamilySpec:
        spec = self._specs.get(name)
        if spec is None:
            raise UnknownAxisValue("family", name, self.names())
        return spec

    def names(self) -> tuple[str, ...]:
        return tuple(self._specs)

    def __contains__(self, name: str) -> bool:
        return name in self._specs


_registry: Optional[FamilyRegistry] = None


def get_registry() -> FamilyRegistry:
    global _registry
    if _registry is None:
        from spriteforge.families import ALL_FAMILIES

        _registry = FamilyRegistry(ALL_FAMILIES)
    return _registry


def family_names() -> tuple[str, ...]:
    return get_registry().names()


def _pick_seed(seed: int | None, config: Configuration) -> int:
    if seed is not None:
        return int(seed)
    if config.get("seed") is not None:
        try:
            return int(config.get("seed"))
        except (TypeError, ValueError) as e:
            raise InvalidConfig(f"seed must be an integer, got {config.get('seed')!r}") from e
    return random.SystemRandom().getrandbits(32)


def _dimension(config: Configuration, key: str, default: int) -> int:
    raw = config.get(key)
    if raw is None:
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError) as e:
        raise InvalidConfig(f"{key} must be an integer, got {raw!r}") from e
    if not 1 <= value <= MAX_CANVAS_SIDE:
        raise InvalidConfig(f"{key} must be in 1..{MAX_CANVAS_SIDE}, got {value}")
    return value


def generate(
    family: str,
    config: ConfigLike = None,
    *,
    seed: int | None = None,
    deadline: Deadline | None = None,
) -> GenerationResult:
    """Generate one sprite and its stat record."""
    spec = get_registry().get(family)
    cfg = Configuration.of(config)
    used_seed = _pick_seed(seed, cfg)
    rng = random.Random(used_seed)

    if spec.validate is not None:
        spec.validate(cfg)
    selection = select(cfg, spec.axes)
    asset = spec.build(cfg, selection, rng)

    base_w, base_h = spec.base_size(cfg, selection)
    canvas = PixelCanvas(_dimension(cfg, "width", base_w), _dimension(cfg, "height", base_h))
    ctx = DrawContext(
        canvas=canvas,
        asset=asset,
        selection=selection,
        config=cfg,
        rng=rng,
        base_size=(base_w, base_h),
        deadline=deadline,
    )
    for stage, draw in spec.passes:
        if deadline is not None:
            deadline.check(f"{family}:{stage}")
        draw(ctx)

    logger.debug("generated %s %r (%dx%d, seed=%d)", family, asset.name, canvas.width, canvas.height, used_seed)
    return GenerationResult(family, canvas, asset, used_seed, cfg)


def _expand(count: int, config: ConfigLike | Sequence[ConfigLike]) -> list[Configuration]:
    if count < 0:
        raise InvalidConfig(f"count must be >= 0, got {count}")
    if config is None or isinstance(config, (Configuration, Mapping)):
        return [Configuration.of(config)] * count
    configs = [Configuration.of(c) for c in config]
    if not configs:
        raise InvalidConfig("config sequence is empty")
    return [configs[i % len(configs)] for i in range(count)]


def generate_many(
    family: str,
    count: int,
    config: ConfigLike | Sequence[ConfigLike] = None,
    *,
    seed: int | None = None,
    workers: int = DEFAULT_WORKERS,
    deadline: Deadline | None = None,
) -> BatchResult:
    """Generate ``count`` sprites; per-item failures are recorded, never raised.

    ``config`` may be one mapping (repeated) or a sequence cycled over.
    With a base ``seed``, item ``i`` uses ``seed + i``.
    """
    if not 1 <= workers <= MAX_WORKERS:
        raise InvalidConfig(f"workers must be in 1..{MAX_WORKERS}, got {workers}")
    items = _expand(count, config)

    def run(index: int) -> GenerationResult | BatchFailure:
        cfg = items[index]
        try:
            return generate(family, cfg, seed=None if seed is None else seed + index, deadline=deadline)
        except SpriteForgeError as e:
            logger.warning("item %d of %s batch failed: %s", index, family, e)
            return BatchFailure(index, cfg.to_dict(), type(e).__name__, str(e))

    if workers == 1 or len(items) <= 1:
        outcomes = [run(i) for i in range(len(items))]
    else:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            outcomes = list(pool.map(run, range(len(items))))

    batch = BatchResult()
    for outcome in outcomes:
        if isinstance(outcome, BatchFailure):
            batch.failures.append(outcome)
        else:
            batch.results.append(outcome)
    logger.info("%s batch: %d generated, %d failed", family, batch.succeeded, batch.failed)
    return batch
