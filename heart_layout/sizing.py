"""Weighted size-class table and the classifier drawing from it."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .types import ConfigurationError, SizeClass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SizeClassSpec:
    """Base edge length (fraction of the container edge) and draw weight of a class."""

    size_class: SizeClass
    base_fraction: float
    weight: float


class SizeTable:
    """Immutable, validated set of size classes.

    Weights are normalized by their total so callers may pass relative weights.
    """

    def __init__(self, entries: Iterable[SizeClassSpec]):
        specs = tuple(entries)
        if not specs:
            raise ConfigurationError("size table needs at least one size class")

        seen = set()
        for spec in specs:
            if spec.size_class in seen:
                raise ConfigurationError(f"size class {spec.size_class} listed twice")
            seen.add(spec.size_class)
            if not math.isfinite(spec.base_fraction) or spec.base_fraction <= 0.0:
                raise ConfigurationError(
                    f"size class {spec.size_class} needs a positive base fraction, got {spec.base_fraction!r}"
                )
            if not math.isfinite(spec.weight) or spec.weight < 0.0:
                raise ConfigurationError(
                    f"size class {spec.size_class} has invalid weight {spec.weight!r}"
                )

        total = float(sum(spec.weight for spec in specs))
        if total <= 0.0:
            raise ConfigurationError(f"size class weights must sum to a positive total, got {total!r}")

        self._specs: Tuple[SizeClassSpec, ...] = specs
        self._by_class: Dict[SizeClass, SizeClassSpec] = {spec.size_class: spec for spec in specs}
        self._weights = tuple(spec.weight / total for spec in specs)
        cumulative = []
        running = 0.0
        for weight in self._weights:
            running += weight
            cumulative.append(running)
        self._cumulative = tuple(cumulative)

    @property
    def classes(self) -> Tuple[SizeClass, ...]:
        return tuple(spec.size_class for spec in self._specs)

    @property
    def weights(self) -> Tuple[float, ...]:
        return self._weights

    @property
    def cumulative(self) -> Tuple[float, ...]:
        return self._cumulative

    def spec(self, size_class: SizeClass) -> SizeClassSpec:
        try:
            return self._by_class[size_class]
        except KeyError as exc:
            raise ConfigurationError(f"size class {size_class} is not in this table") from exc

    def edge_length(self, size_class: SizeClass, container_size: float) -> float:
        return self.spec(size_class).base_fraction * float(container_size)

    def edge_lengths(self, container_size: float) -> Dict[SizeClass, float]:
        return {spec.size_class: spec.base_fraction * float(container_size) for spec in self._specs}

    def nearest(self, fraction: float) -> SizeClass:
        """Return the class whose base fraction is closest to ``fraction``."""

        return min(self._specs, key=lambda spec: abs(spec.base_fraction - fraction)).size_class

    def pick(self, draw: float) -> SizeClass:
        for spec, upper in zip(self._specs, self._cumulative):
            if draw < upper:
                return spec.size_class
        return self._specs[-1].size_class

    def __iter__(self):
        return iter(self._specs)

    def __len__(self) -> int:
        return len(self._specs)


DEFAULT_SIZE_TABLE = SizeTable(
    [
        SizeClassSpec(SizeClass.SMALL, 80.0 / 600.0, 0.40),
        SizeClassSpec(SizeClass.MEDIUM, 120.0 / 600.0, 0.35),
        SizeClassSpec(SizeClass.LARGE, 150.0 / 600.0, 0.25),
    ]
)


class SizeClassifier:
    """Assign size classes to items by weighted random draws."""

    def __init__(self, table: SizeTable = DEFAULT_SIZE_TABLE, rng: Optional[np.random.Generator] = None):
        self.table = table
        self.rng = rng if rng is not None else np.random.default_rng()

    def classify(self, count: int) -> List[SizeClass]:
        if count < 0:
            raise ValueError(f"item count must be non-negative, got {count}")
        if count == 0:
            return []
        draws: Sequence[float] = self.rng.random(count).tolist()
        classes = [self.table.pick(draw) for draw in draws]
        if logger.isEnabledFor(logging.DEBUG):
            tally = {cls.value: classes.count(cls) for cls in self.table.classes}
            logger.debug("Classified %d item(s): %s", count, tally)
        return classes


def classify(count: int, rng: np.random.Generator, table: SizeTable = DEFAULT_SIZE_TABLE) -> List[SizeClass]:
    return SizeClassifier(table, rng).classify(count)


__all__ = [
    "SizeClassSpec",
    "SizeTable",
    "DEFAULT_SIZE_TABLE",
    "SizeClassifier",
    "classify",
]
