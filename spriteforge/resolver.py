from __future__ import annotations

"""
Configuration resolution.

A family declares its axes (type, material, quality, ...). Each axis maps a
value to a read-only ``AxisTemplate`` holding multipliers, a color and
feature tags. ``resolve`` looks every axis up, multiplies the modifiers per
stat field in axis order and rounds the result.
"""

import math
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Sequence, Union

from spriteforge.core.color import Color
from spriteforge.core.errors import InvalidConfig, UnknownAxisValue


def _frozen(data: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(data or {}))


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives (19.5 -> 20), unlike ``round``."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class AxisTemplate:
    """Static record for one value of one axis."""

    key: str
    name: str = ""
    modifiers: Mapping[str, float] = field(default_factory=dict)
    color: Color | None = None
    features: tuple[str, ...] = ()
    description: str = ""
    extras: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "modifiers", _frozen(self.modifiers))
        object.__setattr__(self, "extras", _frozen(self.extras))
        object.__setattr__(self, "features", tuple(self.features))

    def modifier(self, stat: str, default: float = 1.0) -> float:
        return float(self.modifiers.get(stat, default))

    def extra(self, key: str, default: Any = None) -> Any:
        return self.extras.get(key, default)


@dataclass(frozen=True)
class Axis:
    name: str
    default: str
    templates: Mapping[str, AxisTemplate]

    def __post_init__(self) -> None:
        object.__setattr__(self, "templates", _frozen(self.templates))
        if self.default not in self.templates:
            raise ValueError(f"axis {self.name}: default {self.default!r} has no template")

    @classmethod
    def build(cls, name: str, templates: Iterable[AxisTemplate], default: str | None = None) -> "Axis":
        items = {t.key: t for t in templates}
        if not items:
            raise ValueError(f"axis {name} has no templates")
        return cls(name, default if default is not None else next(iter(items)), items)

    def choices(self) -> tuple[str, ...]:
        return tuple(self.templates)

    def lookup(self, value: Any) -> AxisTemplate:
        key = str(value)
        tmpl = self.templates.get(key)
        if tmpl is None:
            raise UnknownAxisValue(self.name, value, self.choices())
        return tmpl


@dataclass(frozen=True)
class DependentAxis:
    """An axis whose value set depends on an earlier axis (e.g. armor subtype by type).

    Parents with no entry simply do not have this axis.
    """

    name: str
    parent: str
    by_parent: Mapping[str, Axis]

    def __post_init__(self) -> None:
        object.__setattr__(self, "by_parent", _frozen(self.by_parent))

    def for_parent(self, parent_key: str) -> Axis | None:
        return self.by_parent.get(parent_key)


AxisLike = Union[Axis, DependentAxis]


@dataclass(frozen=True)
class Configuration:
    """Sparse, read-only axis selections plus output extras (width, height, seed)."""

    values: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", _frozen(self.values))

    @classmethod
    def of(cls, data: "Configuration | Mapping[str, Any] | None") -> "Configuration":
        if isinstance(data, Configuration):
            return data
        return cls(dict(data or {}))

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def __contains__(self, key: str) -> bool:
        return key in self.values

    def flag(self, key: str, default: bool = False) -> bool:
        value = self.values.get(key, default)
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes", "on")
        return bool(value)

    def number(self, key: str, default: float, *, low: float | None = None, high: float | None = None) -> float:
        raw = self.values.get(key, default)
        try:
            value = float(raw)
        except (TypeError, ValueError) as e:
            raise InvalidConfig(f"{key} must be a number, got {raw!r}") from e
        if (low is not None and value < low) or (high is not None and value > high):
            raise InvalidConfig(f"{key} must be in [{low}, {high}], got {value:g}")
        return value

    def to_dict(self) -> dict[str, Any]:
        return dict(self.values)


@dataclass(frozen=True)
class ResolvedAsset:
    """Stats, tags and display text for one generation call."""

    stats: dict[str, int | float]
    features: tuple[str, ...]
    name: str
    description: str = ""
    selection: dict[str, str] = field(default_factory=dict)
    extras: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "selection": dict(self.selection),
            "stats": dict(self.stats),
            "features": list(self.features),
            "extras": self.extras,
        }


Selection = dict[str, AxisTemplate]


def select(config: Configuration, axes: Sequence[AxisLike]) -> Selection:
    """Pick one template per applicable axis, falling back to defaults."""
    chosen: Selection = {}
    for axis in axes:
        if isinstance(axis, DependentAxis):
            parent = chosen.get(axis.parent)
            if parent is None:
                raise ValueError(f"axis {axis.name} depends on unresolved axis {axis.parent}")
            resolved = axis.for_parent(parent.key)
            if resolved is None:
                continue
        else:
            resolved = axis
        value = config.get(axis.name)
        chosen[axis.name] = resolved.lookup(resolved.default if value is None else value)
    return chosen


def compose_stats(
    selection: Selection,
    fields: Sequence[str],
    fractional: Iterable[str] = (),
) -> dict[str, int | float]:
    """Multiply each field's modifiers across the selection, in axis order.

    Axes without a modifier for a field contribute 1.
    """
    frac = set(fractional)
    stats: dict[str, int | float] = {}
    for stat in fields:
        value = 1.0
        for tmpl in selection.values():
            value *= tmpl.modifier(stat)
        stats[stat] = value if stat in frac else round_half_up(value)
    return stats


def merge_features(*groups: Iterable[str]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for group in groups:
        for tag in group:
            seen.setdefault(tag, None)
    return tuple(seen)


_SPACES = re.compile(r"\s+")


def render_name(template: str, **parts: str) -> str:
    """Format a display name and collapse the gaps left by empty parts."""
    return _SPACES.sub(" ", template.format(**parts)).strip()


def resolve(
    config: Configuration | Mapping[str, Any] | None,
    axes: Sequence[AxisLike],
    *,
    fields: Sequence[str] = (),
    fractional: Iterable[str] = (),
    name_template: str = "",
    name_parts: Mapping[str, str] | None = None,
) -> ResolvedAsset:
    """Generic resolution: look up, compose, tag and name.

    ``name_parts`` defaults to each selected template's display name keyed by
    axis, so ``"{quality}{material} {type}"`` works out of the box.
    """
    cfg = Configuration.of(config)
    chosen = select(cfg, axes)
    parts = {axis: tmpl.name for axis, tmpl in chosen.items()}
    parts.update(name_parts or {})
    return ResolvedAsset(
        stats=compose_stats(chosen, fields, fractional),
        features=merge_features(*(t.features for t in chosen.values())),
        name=render_name(name_template, **parts) if name_template else "",
        selection={axis: tmpl.key for axis, tmpl in chosen.items()},
    )
