"""Core data structures shared by the layout pipeline."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple

Point = Tuple[float, float]


class HeartLayoutError(Exception):
    """Base class for errors raised by the layout engine."""


class InvalidScaleError(HeartLayoutError, ValueError):
    """Raised when a viewport or container size is not strictly positive."""


class ConfigurationError(HeartLayoutError, ValueError):
    """Raised when a size table, strategy or generator is misconfigured."""


class SizeClass(enum.Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in container pixels, origin at the top-left."""

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def centered(cls, cx: float, cy: float, width: float, height: Optional[float] = None) -> "Rect":
        h = width if height is None else height
        return cls(cx - width / 2.0, cy - h / 2.0, width, h)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return (self.x + self.width / 2.0, self.y + self.height / 2.0)

    def inflated(self, margin: float) -> "Rect":
        return Rect(
            self.x - margin,
            self.y - margin,
            self.width + 2.0 * margin,
            self.height + 2.0 * margin,
        )

    def intersects(self, other: "Rect") -> bool:
        """Return ``True`` when the two rectangles share a positive area."""

        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.bottom
            and other.y < self.bottom
        )

    def overlaps(self, other: "Rect", margin: float = 0.0) -> bool:
        """Return ``True`` when the gap between the rectangles is below ``margin``."""

        return self.inflated(margin).intersects(other)

    def within(self, width: float, height: float) -> bool:
        return self.x >= 0.0 and self.y >= 0.0 and self.right <= width and self.bottom <= height


@dataclass(frozen=True)
class Candidate:
    """Anchor point known to lie inside the boundary."""

    x: float
    y: float

    def as_tuple(self) -> Point:
        return (self.x, self.y)


@dataclass(frozen=True)
class PlacedRect:
    x: float
    y: float
    width: float
    height: float
    size_class: SizeClass
    item_index: int
    stack_order: int = 1

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    @property
    def center(self) -> Point:
        return self.rect.center


@dataclass(frozen=True)
class LayoutResult:
    """Immutable snapshot produced by one layout pass."""

    rects: Tuple[PlacedRect, ...]
    requested: int
    container_size: float
    strategy: str
    margin: float = 0.0
    tolerance: Optional[float] = None
    seed: Optional[int] = None
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.rects)

    def __iter__(self) -> Iterator[PlacedRect]:
        return iter(self.rects)

    def __getitem__(self, idx: int) -> PlacedRect:
        return self.rects[idx]

    @property
    def shortfall(self) -> int:
        return max(0, self.requested - len(self.rects))

    @property
    def is_complete(self) -> bool:
        return self.shortfall == 0

    def get(self, item_index: int) -> Optional[PlacedRect]:
        """Return the slot addressed by ``item_index`` or ``None`` if it was not placed."""

        for placed in self.rects:
            if placed.item_index == item_index:
                return placed
        return None


__all__ = [
    "Point",
    "HeartLayoutError",
    "InvalidScaleError",
    "ConfigurationError",
    "SizeClass",
    "Rect",
    "Candidate",
    "PlacedRect",
    "LayoutResult",
]
