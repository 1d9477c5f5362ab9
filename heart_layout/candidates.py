"""Candidate anchor generation strategies."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence, Tuple, Union

import numpy as np
from scipy.stats import qmc

from .boundary import HeartBoundary
from .config import STRATEGIES, LayoutOptions
from .logging_utils import apply_debug_logging
from .sizing import DEFAULT_SIZE_TABLE, SizeTable
from .types import Candidate, ConfigurationError, PlacedRect

logger = logging.getLogger(__name__)


class CandidateGenerator(Protocol):
    """Protocol implemented by the randomized candidate strategies."""

    def generate(self, boundary: HeartBoundary, rng: np.random.Generator) -> List[Candidate]:
        """Return boundary-verified anchors in a randomized order."""


def _filtered_candidates(
    boundary: HeartBoundary,
    xs: np.ndarray,
    ys: np.ndarray,
    rng: np.random.Generator,
) -> List[Candidate]:
    mask = boundary.contains_many(xs, ys)
    kept = np.column_stack((xs[mask], ys[mask]))
    if kept.shape[0] == 0:
        return []
    order = rng.permutation(kept.shape[0])
    return [Candidate(float(x), float(y)) for x, y in kept[order]]


class GridScanGenerator:
    """Scan an R x R grid of cell centers and keep the points inside the heart."""

    def __init__(self, resolution: int = 20):
        if resolution <= 0:
            raise ConfigurationError(f"grid resolution must be positive, got {resolution}")
        self.resolution = int(resolution)

    def grid(self, container_size: float) -> Tuple[np.ndarray, np.ndarray]:
        step = float(container_size) / self.resolution
        axis = (np.arange(self.resolution, dtype=float) + 0.5) * step
        gx, gy = np.meshgrid(axis, axis)
        return gx.ravel(), gy.ravel()

    def generate(self, boundary: HeartBoundary, rng: np.random.Generator) -> List[Candidate]:
        xs, ys = self.grid(boundary.container_size)
        candidates = _filtered_candidates(boundary, xs, ys, rng)
        logger.info(
            "Grid scan %dx%d kept %d of %d point(s)",
            self.resolution,
            self.resolution,
            len(candidates),
            xs.size,
        )
        return candidates


class SobolGenerator:
    """Draw anchors from a Sobol low-discrepancy sequence over the container."""

    def __init__(self, points_log2: int = 9):
        if points_log2 <= 0:
            raise ConfigurationError(f"sobol sample size exponent must be positive, got {points_log2}")
        self.points_log2 = int(points_log2)

    def generate(self, boundary: HeartBoundary, rng: np.random.Generator) -> List[Candidate]:
        engine = qmc.Sobol(d=2, scramble=False)
        unit = engine.random_base2(m=self.points_log2)
        points = unit * boundary.container_size
        candidates = _filtered_candidates(boundary, points[:, 0], points[:, 1], rng)
        logger.info("Sobol sampling kept %d of %d point(s)", len(candidates), points.shape[0])
        return candidates


@dataclass(frozen=True)
class TemplateAnchor:
    """Normalized slot center ``(rx, ry)`` and edge fraction ``rw``."""

    rx: float
    ry: float
    rw: float


HEART_TEMPLATE: Tuple[TemplateAnchor, ...] = (
    TemplateAnchor(0.50, 0.45, 0.22),  # center
    TemplateAnchor(0.30, 0.38, 0.18),  # mid-left inner
    TemplateAnchor(0.70, 0.38, 0.18),  # mid-right inner
    TemplateAnchor(0.35, 0.18, 0.16),  # top-left lobe
    TemplateAnchor(0.65, 0.18, 0.16),  # top-right lobe
    TemplateAnchor(0.50, 0.25, 0.16),  # top center dip
    TemplateAnchor(0.20, 0.28, 0.15),  # far top-left
    TemplateAnchor(0.80, 0.28, 0.15),  # far top-right
    TemplateAnchor(0.15, 0.45, 0.14),  # far left edge
    TemplateAnchor(0.85, 0.45, 0.14),  # far right edge
    TemplateAnchor(0.40, 0.58, 0.18),  # lower-left inner
    TemplateAnchor(0.60, 0.58, 0.18),  # lower-right inner
    TemplateAnchor(0.25, 0.60, 0.15),  # lower-left outer
    TemplateAnchor(0.75, 0.60, 0.15),  # lower-right outer
    TemplateAnchor(0.50, 0.72, 0.18),  # bottom center core
    TemplateAnchor(0.35, 0.75, 0.14),  # bottom-left taper
    TemplateAnchor(0.65, 0.75, 0.14),  # bottom-right taper
    TemplateAnchor(0.43, 0.83, 0.12),  # tip transition left
    TemplateAnchor(0.57, 0.83, 0.12),  # tip transition right
    TemplateAnchor(0.50, 0.90, 0.15),  # bottom tip
)


class TemplateGenerator:
    """Map the hand-authored anchors to pixel rectangles; bypasses the packer."""

    def __init__(self, template: Sequence[TemplateAnchor] = HEART_TEMPLATE):
        self.template = tuple(template)

    @property
    def capacity(self) -> int:
        return len(self.template)

    def layout(
        self,
        container_size: float,
        requested_count: int,
        size_table: SizeTable = DEFAULT_SIZE_TABLE,
        *,
        center_stack_order: int = 10,
        base_stack_order: int = 1,
    ) -> List[PlacedRect]:
        if requested_count < 0:
            raise ValueError(f"item count must be non-negative, got {requested_count}")

        size = float(container_size)
        count = min(requested_count, len(self.template))
        placed: List[PlacedRect] = []
        for idx, anchor in enumerate(self.template[:count]):
            edge = size * anchor.rw
            placed.append(
                PlacedRect(
                    x=anchor.rx * size - edge / 2.0,
                    y=anchor.ry * size - edge / 2.0,
                    width=edge,
                    height=edge,
                    size_class=size_table.nearest(anchor.rw),
                    item_index=idx,
                    # The center photo stays on top of its neighbours.
                    stack_order=center_stack_order if idx == 0 else base_stack_order,
                )
            )
        return placed


Generator = Union[GridScanGenerator, SobolGenerator, TemplateGenerator]


def make_generator(strategy: str, options: Optional[LayoutOptions] = None) -> Generator:
    opts = options or LayoutOptions()
    if strategy == "template":
        return TemplateGenerator()
    if strategy == "grid":
        return GridScanGenerator(opts.grid_resolution)
    if strategy == "sobol":
        return SobolGenerator(opts.sobol_points_log2)
    raise ConfigurationError(
        f"unknown layout strategy {strategy!r}; expected one of {', '.join(STRATEGIES)}"
    )


__all__ = [
    "CandidateGenerator",
    "GridScanGenerator",
    "SobolGenerator",
    "TemplateAnchor",
    "HEART_TEMPLATE",
    "TemplateGenerator",
    "make_generator",
]


apply_debug_logging(globals(), logger=logger, skip={"TemplateAnchor", "CandidateGenerator"})
