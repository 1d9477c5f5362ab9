"""Viewport-driven façade tying boundary, candidates, sizing and packing together."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np

from .boundary import HeartBoundary
from .candidates import TemplateGenerator, make_generator
from .config import LayoutOptions, get_default_options
from .export import css_size_variables
from .packer import pack
from .sizing import DEFAULT_SIZE_TABLE, SizeClassifier, SizeTable
from .types import InvalidScaleError, LayoutResult, PlacedRect

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContainerTier:
    """Viewports up to ``max_viewport`` pixels (``None``: unbounded) use ``container_size``."""

    max_viewport: Optional[float]
    container_size: float


DEFAULT_TIERS = (
    ContainerTier(480, 320.0),
    ContainerTier(768, 400.0),
    ContainerTier(None, 600.0),
)


def container_size_for(viewport_width: float, tiers: Sequence[ContainerTier] = DEFAULT_TIERS) -> float:
    """Map a viewport width onto the discrete container size of its tier."""

    try:
        width = float(viewport_width)
    except (TypeError, ValueError) as exc:
        raise InvalidScaleError(f"viewport width must be a number, got {viewport_width!r}") from exc
    if not math.isfinite(width) or width <= 0.0:
        raise InvalidScaleError(f"viewport width must be positive, got {viewport_width!r}")
    if not tiers:
        raise InvalidScaleError("no container tiers configured")

    chosen = tiers[-1]
    for tier in tiers:
        if tier.max_viewport is None or width <= tier.max_viewport:
            chosen = tier
            break
    if chosen.container_size <= 0.0:
        raise InvalidScaleError(f"container size must be positive, got {chosen.container_size!r}")
    return float(chosen.container_size)


def recompute(
    viewport_width: float,
    requested_count: int,
    *,
    options: Optional[LayoutOptions] = None,
    tiers: Sequence[ContainerTier] = DEFAULT_TIERS,
    size_table: SizeTable = DEFAULT_SIZE_TABLE,
    strategy: Optional[str] = None,
    margin: Optional[float] = None,
    tolerance: Optional[float] = None,
    seed: Optional[int] = None,
) -> LayoutResult:
    """Compute a fresh :class:`LayoutResult` for ``requested_count`` items.

    Explicit keyword overrides win over ``options``; ``options`` defaults to
    :func:`heart_layout.config.get_default_options`.
    """

    opts = (options or get_default_options()).replace(
        strategy=strategy,
        margin=margin,
        tolerance=tolerance,
        random_seed=seed,
    )
    if requested_count < 0:
        raise ValueError(f"requested item count must be non-negative, got {requested_count}")
    if not math.isfinite(opts.margin) or opts.margin < 0.0:
        raise ValueError(f"margin must be a non-negative number, got {opts.margin!r}")

    count = int(requested_count)
    container = container_size_for(viewport_width, tiers)
    boundary = HeartBoundary.scale(container, opts.resolved_shape())
    generator = make_generator(opts.strategy, opts)
    logger.info(
        "Layout pass: viewport=%s container=%g strategy=%s requested=%d",
        viewport_width,
        container,
        opts.strategy,
        count,
    )

    rects: List[PlacedRect] = []
    warnings: List[str] = []
    # The template is an overlapping collage; only the packing paths honour the margin.
    applied_margin = 0.0 if isinstance(generator, TemplateGenerator) else float(opts.margin)
    if count == 0:
        pass
    elif isinstance(generator, TemplateGenerator):
        slots = generator.layout(
            container,
            count,
            size_table,
            center_stack_order=opts.center_stack_order,
            base_stack_order=opts.base_stack_order,
        )
        if len(slots) < count:
            warnings.append(
                f"template holds {generator.capacity} slot(s); {count - len(slots)} item(s) not placed"
            )
        outside = [slot.item_index for slot in slots if not boundary.rect_fully_inside(slot.rect)]
        rects = [slot for slot in slots if slot.item_index not in outside]
        if outside:
            warnings.append(
                f"{len(outside)} template slot(s) fall outside the heart at tolerance "
                f"{boundary.tolerance:g} (indices {', '.join(str(i) for i in outside)})"
            )
    else:
        rng = np.random.default_rng(opts.random_seed)
        candidates = generator.generate(boundary, rng)
        size_classes = SizeClassifier(size_table, rng).classify(count)
        packed = pack(
            size_classes,
            candidates,
            boundary,
            margin=opts.margin,
            size_table=size_table,
            center_stack_order=opts.center_stack_order,
            base_stack_order=opts.base_stack_order,
        )
        rects = packed.rects
        warnings.extend(packed.warnings)

    for warning in warnings:
        logger.warning("Layout shortfall: %s", warning)

    return LayoutResult(
        rects=tuple(rects),
        requested=count,
        container_size=container,
        strategy=opts.strategy,
        margin=applied_margin,
        tolerance=boundary.tolerance,
        seed=opts.random_seed,
        warnings=tuple(warnings),
    )


class LayoutScaler:
    """Re-derives the layout whenever the viewport changes.

    The only state kept between calls is the last published result, which
    every call replaces wholesale.
    """

    def __init__(
        self,
        options: Optional[LayoutOptions] = None,
        tiers: Sequence[ContainerTier] = DEFAULT_TIERS,
        size_table: SizeTable = DEFAULT_SIZE_TABLE,
    ):
        self.options = options or get_default_options()
        self.tiers = tuple(tiers)
        self.size_table = size_table
        self.last_result: Optional[LayoutResult] = None

    @property
    def container_size(self) -> Optional[float]:
        return self.last_result.container_size if self.last_result is not None else None

    def recompute(
        self,
        viewport_width: float,
        requested_count: int,
        *,
        strategy: Optional[str] = None,
        margin: Optional[float] = None,
        tolerance: Optional[float] = None,
        seed: Optional[int] = None,
    ) -> LayoutResult:
        result = recompute(
            viewport_width,
            requested_count,
            options=self.options,
            tiers=self.tiers,
            size_table=self.size_table,
            strategy=strategy,
            margin=margin,
            tolerance=tolerance,
            seed=seed,
        )
        self.last_result = result
        return result

    def position(self, item_index: int) -> Optional[PlacedRect]:
        if self.last_result is None:
            return None
        return self.last_result.get(item_index)

    def css_variables(self) -> Dict[str, str]:
        if self.last_result is None:
            raise RuntimeError("no layout has been computed yet")
        return css_size_variables(self.last_result.container_size, self.size_table)


__all__ = [
    "ContainerTier",
    "DEFAULT_TIERS",
    "container_size_for",
    "recompute",
    "LayoutScaler",
]
