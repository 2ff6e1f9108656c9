from __future__ import annotations

"""Building blocks shared by the asset family modules."""

import random
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Sequence

from spriteforge.core.canvas import PixelCanvas
from spriteforge.core.color import Color
from spriteforge.core.deadline import Deadline
from spriteforge.resolver import AxisLike, AxisTemplate, Configuration, ResolvedAsset, Selection


@dataclass(frozen=True)
class DrawContext:
    """Everything one drawing pass may touch. The canvas is the only mutable part."""

    canvas: PixelCanvas
    asset: ResolvedAsset
    selection: Selection
    config: Configuration
    rng: random.Random
    base_size: tuple[int, int]
    deadline: Deadline | None = None

    @property
    def width(self) -> int:
        return self.canvas.width

    @property
    def height(self) -> int:
        return self.canvas.height

    @property
    def cx(self) -> float:
        return self.canvas.width / 2

    @property
    def cy(self) -> float:
        return self.canvas.height / 2

    @property
    def scale(self) -> float:
        """Canvas size relative to the family's layout size."""
        bw, bh = self.base_size
        return min(self.canvas.width / bw, self.canvas.height / bh)

    def pick(self, axis: str) -> AxisTemplate:
        return self.selection[axis]

    def key(self, axis: str) -> str:
        return self.selection[axis].key


Pass = Callable[[DrawContext], None]
Builder = Callable[[Configuration, Selection, random.Random], ResolvedAsset]
SizeFn = Callable[[Configuration, Selection], tuple[int, int]]


@dataclass(frozen=True)
class FamilySpec:
    name: str
    axes: tuple[AxisLike, ...]
    build: Builder
    passes: tuple[tuple[str, Pass], ...]
    default_size: tuple[int, int]
    size_for: SizeFn | None = None
    validate: Callable[[Configuration], None] | None = None
    description: str = ""

    def base_size(self, config: Configuration, selection: Selection) -> tuple[int, int]:
        if self.size_for is None:
            return self.default_size
        return self.size_for(config, selection)


def template(
    key: str,
    name: str = "",
    *,
    color: str | Color | None = None,
    features: Sequence[str] = (),
    description: str = "",
    extras: Mapping[str, Any] | None = None,
    **modifiers: float,
) -> AxisTemplate:
    """Shorthand used by the family tables: keyword numbers become modifiers."""
    if isinstance(color, str):
        color = Color.from_hex(color)
    return AxisTemplate(
        key=key,
        name=name,
        modifiers=modifiers,
        color=color,
        features=tuple(features),
        description=description,
        extras=dict(extras or {}),
    )


def pick_many(rng: random.Random, options: Sequence[Any], count: int) -> list[Any]:
    """Up to ``count`` distinct picks in a stable, seed-dependent order."""
    pool = list(options)
    rng.shuffle(pool)
    return pool[:max(0, count)]

