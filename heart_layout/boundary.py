"""Implicit heart silhouette and the containment tests built on it."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

import numpy as np

from .types import InvalidScaleError, Point, Rect


@dataclass(frozen=True)
class HeartShape:
    """Tunable parameters of the silhouette, expressed relative to the container edge.

    ``center_*_ratio`` place the normalization origin, ``scale_ratio`` is the
    divisor mapping pixels to the unit heart, ``tolerance`` is the slack added to
    the implicit inequality and ``inset`` is the fraction used for corner sampling.
    """

    center_x_ratio: float = 0.5
    center_y_ratio: float = 0.575
    scale_ratio: float = 0.40
    tolerance: float = 0.1
    inset: float = 0.2


def heart_value(nx, ny):
    """Evaluate ``(x^2 + y^2 - 1)^3 - x^2 y^3`` on scalars or numpy arrays."""

    r2 = nx * nx + ny * ny - 1.0
    return r2 * r2 * r2 - nx * nx * ny * ny * ny


class HeartBoundary:
    """Heart silhouette at a fixed container size.

    A point is inside when the heart inequality, evaluated in normalized
    coordinates, is at most the configured tolerance. The y axis of the
    container points down, the heart's y axis points up.
    """

    def __init__(self, container_size: float, shape: Optional[HeartShape] = None):
        size = float(container_size)
        if not math.isfinite(size) or size <= 0.0:
            raise InvalidScaleError(f"container size must be positive, got {container_size!r}")
        self.shape = shape or HeartShape()
        if self.shape.scale_ratio <= 0.0:
            raise InvalidScaleError(f"shape scale ratio must be positive, got {self.shape.scale_ratio!r}")
        self.container_size = size
        self.cx = self.shape.center_x_ratio * size
        self.cy = self.shape.center_y_ratio * size
        self.divisor = self.shape.scale_ratio * size

    @classmethod
    def scale(
        cls,
        container_size: float,
        shape: Optional[HeartShape] = None,
        *,
        tolerance: Optional[float] = None,
    ) -> "HeartBoundary":
        base = shape or HeartShape()
        if tolerance is not None:
            base = replace(base, tolerance=float(tolerance))
        return cls(container_size, base)

    @property
    def tolerance(self) -> float:
        return self.shape.tolerance

    @property
    def center(self) -> Point:
        return (self.cx, self.cy)

    def normalize(self, point: Point) -> Tuple[float, float]:
        x, y = point
        return ((x - self.cx) / self.divisor, (self.cy - y) / self.divisor)

    def value(self, point: Point) -> float:
        nx, ny = self.normalize(point)
        return float(heart_value(nx, ny))

    def contains(self, point: Point) -> bool:
        return self.value(point) <= self.shape.tolerance

    def contains_many(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """Vectorised :meth:`contains` returning a boolean mask."""

        nx = (np.asarray(xs, dtype=float) - self.cx) / self.divisor
        ny = (self.cy - np.asarray(ys, dtype=float)) / self.divisor
        return heart_value(nx, ny) <= self.shape.tolerance

    def sample_points(self, rect: Rect) -> List[Point]:
        lo = self.shape.inset
        hi = 1.0 - lo
        return [
            (rect.x + rect.width * lo, rect.y + rect.height * lo),
            (rect.x + rect.width * hi, rect.y + rect.height * lo),
            (rect.x + rect.width * lo, rect.y + rect.height * hi),
            (rect.x + rect.width * hi, rect.y + rect.height * hi),
        ]

    def rect_fully_inside(self, rect: Rect) -> bool:
        # Inset corners accept rectangles whose literal corners poke out of a concave lobe.
        return all(self.contains(pt) for pt in self.sample_points(rect))

    def outline(self, num_points: int = 200) -> List[Point]:
        """Trace the tolerance level set by bisection along rays from :attr:`center`."""

        if num_points < 3:
            raise ValueError("outline requires at least three points")

        reach = self.container_size * 2.0
        step = self.container_size / 200.0
        points: List[Point] = []
        for i in range(num_points):
            theta = 2.0 * math.pi * i / num_points
            dx, dy = math.cos(theta), -math.sin(theta)
            inside_r = 0.0
            outside_r = reach
            r = step
            while r < reach:
                if not self.contains((self.cx + dx * r, self.cy + dy * r)):
                    outside_r = r
                    break
                inside_r = r
                r += step
            for _ in range(30):
                mid = 0.5 * (inside_r + outside_r)
                if self.contains((self.cx + dx * mid, self.cy + dy * mid)):
                    inside_r = mid
                else:
                    outside_r = mid
            points.append((self.cx + dx * inside_r, self.cy + dy * inside_r))
        return points

    def __repr__(self) -> str:
        return (
            f"HeartBoundary(container_size={self.container_size:g}, "
            f"tolerance={self.shape.tolerance:g})"
        )


__all__ = ["HeartShape", "HeartBoundary", "heart_value"]
