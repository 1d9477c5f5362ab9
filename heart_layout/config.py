"""Configuration helpers for the layout engine."""

from __future__ import annotations

import copy
import dataclasses
from dataclasses import dataclass, field
from typing import Any, Optional

from .boundary import HeartShape

STRATEGIES = ("template", "grid", "sobol")


@dataclass
class LayoutOptions:
    """Options consumed by :class:`heart_layout.scaler.LayoutScaler`.

    ``tolerance`` of ``None`` keeps the slack configured on ``shape``.
    """

    strategy: str = "template"
    margin: float = 8.0
    tolerance: Optional[float] = None
    random_seed: Optional[int] = None
    grid_resolution: int = 20
    sobol_points_log2: int = 9
    center_stack_order: int = 10
    base_stack_order: int = 1
    shape: HeartShape = field(default_factory=HeartShape)

    def replace(self, **overrides: Any) -> "LayoutOptions":
        """Return a copy with every non-``None`` override applied."""

        changes = {key: value for key, value in overrides.items() if value is not None}
        return dataclasses.replace(self, **changes)

    def resolved_shape(self) -> HeartShape:
        if self.tolerance is None:
            return self.shape
        return dataclasses.replace(self.shape, tolerance=float(self.tolerance))


_DEFAULT_OPTIONS = LayoutOptions()


def get_default_options() -> LayoutOptions:
    return copy.deepcopy(_DEFAULT_OPTIONS)


def set_default_options(options: LayoutOptions) -> None:
    global _DEFAULT_OPTIONS
    _DEFAULT_OPTIONS = copy.deepcopy(options)


__all__ = ["STRATEGIES", "LayoutOptions", "get_default_options", "set_default_options"]
