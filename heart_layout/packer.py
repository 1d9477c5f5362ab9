"""Greedy, largest-first placement of size-classified items onto candidates."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .boundary import HeartBoundary
from .logging_utils import apply_debug_logging
from .sizing import DEFAULT_SIZE_TABLE, SizeTable
from .types import Candidate, PlacedRect, Rect, SizeClass

logger = logging.getLogger(__name__)


@dataclass
class PackResult:
    rects: List[PlacedRect]
    dropped: List[int] = field(default_factory=list)
    probes: int = 0

    @property
    def warnings(self) -> List[str]:
        if not self.dropped:
            return []
        return [
            f"no feasible candidate for {len(self.dropped)} item(s) "
            f"(draw indices {', '.join(str(i) for i in self.dropped)})"
        ]


def placement_order(size_classes: Sequence[SizeClass], size_table: SizeTable = DEFAULT_SIZE_TABLE) -> List[int]:
    """Draw indices sorted largest edge first; ties keep draw order."""

    fractions = [size_table.spec(cls).base_fraction for cls in size_classes]
    return sorted(range(len(size_classes)), key=lambda idx: fractions[idx], reverse=True)


def _first_feasible(
    edge: float,
    candidates: Sequence[Candidate],
    boundary: HeartBoundary,
    placed: Sequence[Rect],
    margin: float,
) -> Tuple[Optional[Rect], int]:
    size = boundary.container_size
    probes = 0
    for cand in candidates:
        probes += 1
        rect = Rect.centered(cand.x, cand.y, edge)
        if not rect.within(size, size):
            continue
        if not boundary.rect_fully_inside(rect):
            continue
        if any(rect.overlaps(other, margin) for other in placed):
            continue
        return rect, probes
    return None, probes


def pack(
    size_classes: Sequence[SizeClass],
    candidates: Sequence[Candidate],
    boundary: HeartBoundary,
    *,
    margin: float = 0.0,
    size_table: SizeTable = DEFAULT_SIZE_TABLE,
    center_stack_order: int = 10,
    base_stack_order: int = 1,
) -> PackResult:
    """Place each item on the first candidate that keeps every constraint.

    Items are visited largest first. A rectangle is accepted when it stays in
    the container, passes :meth:`HeartBoundary.rect_fully_inside` and keeps a
    gap of at least ``margin`` to every rectangle already placed. Placements
    are never revisited; items without a feasible candidate are dropped.
    ``item_index`` is the placement order.
    """

    if not math.isfinite(margin) or margin < 0.0:
        raise ValueError(f"margin must be a non-negative number, got {margin!r}")

    result = PackResult(rects=[])
    if not size_classes:
        return result

    placed: List[Rect] = []
    classes: List[SizeClass] = []
    for draw_idx in placement_order(size_classes, size_table):
        size_class = size_classes[draw_idx]
        edge = size_table.edge_length(size_class, boundary.container_size)
        rect, probes = _first_feasible(edge, candidates, boundary, placed, margin)
        result.probes += probes
        if rect is None:
            result.dropped.append(draw_idx)
            continue
        placed.append(rect)
        classes.append(size_class)

    pinned = -1
    if placed:
        cx, cy = boundary.center
        pinned = min(
            range(len(placed)),
            key=lambda idx: math.hypot(placed[idx].center[0] - cx, placed[idx].center[1] - cy),
        )

    result.rects = [
        PlacedRect(
            x=rect.x,
            y=rect.y,
            width=rect.width,
            height=rect.height,
            size_class=size_class,
            item_index=idx,
            stack_order=center_stack_order if idx == pinned else base_stack_order,
        )
        for idx, (rect, size_class) in enumerate(zip(placed, classes))
    ]

    logger.info(
        "Packed %d of %d item(s) using %d candidate(s), margin=%g",
        len(result.rects),
        len(size_classes),
        len(candidates),
        margin,
    )
    if result.dropped:
        logger.warning("Dropped %d item(s) without a feasible candidate", len(result.dropped))
    return result


__all__ = ["PackResult", "placement_order", "pack"]


apply_debug_logging(globals(), logger=logger, skip={"PackResult"})
