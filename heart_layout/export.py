"""Serialization and preview rendering of layout results."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union
from xml.sax.saxutils import escape, quoteattr

from .boundary import HeartBoundary, HeartShape
from .sizing import DEFAULT_SIZE_TABLE, SizeTable
from .types import LayoutResult, PlacedRect, SizeClass

logger = logging.getLogger(__name__)

_SLOT_COLORS = {
    SizeClass.SMALL: "#f7a1b5",
    SizeClass.MEDIUM: "#ef6f8e",
    SizeClass.LARGE: "#d63a63",
}


def _fmt(value: float) -> str:
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def layout_to_dicts(result: LayoutResult) -> List[Dict[str, object]]:
    """Position records in the shape the photo wall front end consumes."""

    return [
        {
            "x": placed.x,
            "y": placed.y,
            "width": placed.width,
            "height": placed.height,
            "size": placed.size_class.value,
            "index": placed.item_index,
            "zIndex": placed.stack_order,
        }
        for placed in result
    ]


def layout_to_json(result: LayoutResult, *, indent: Optional[int] = 2) -> str:
    document = {
        "container_size": result.container_size,
        "requested": result.requested,
        "placed": len(result),
        "strategy": result.strategy,
        "margin": result.margin,
        "tolerance": result.tolerance,
        "seed": result.seed,
        "warnings": list(result.warnings),
        "positions": layout_to_dicts(result),
    }
    return json.dumps(document, indent=indent)


def css_size_variables(container_size: float, size_table: SizeTable = DEFAULT_SIZE_TABLE) -> Dict[str, str]:
    variables = {"--heart-size": f"{_fmt(container_size)}px"}
    for size_class, edge in size_table.edge_lengths(container_size).items():
        variables[f"--photo-{size_class.value}"] = f"{_fmt(edge)}px"
    return variables


def _boundary_for(result: LayoutResult, boundary: Optional[HeartBoundary]) -> HeartBoundary:
    if boundary is not None:
        return boundary
    return HeartBoundary.scale(result.container_size, HeartShape(), tolerance=result.tolerance)


def _paint_order(result: LayoutResult) -> List[PlacedRect]:
    return sorted(result, key=lambda placed: (placed.stack_order, placed.item_index))


def generate_svg_document(
    result: LayoutResult,
    boundary: Optional[HeartBoundary] = None,
    *,
    title: Optional[str] = None,
    outline_points: int = 200,
) -> str:
    """Return a standalone SVG preview: heart outline plus one ``<rect>`` per slot."""

    heart = _boundary_for(result, boundary)
    size = _fmt(result.container_size)
    outline = " ".join(f"{_fmt(x)},{_fmt(y)}" for x, y in heart.outline(outline_points))
    caption = title or f"{len(result)} of {result.requested} slot(s), {result.strategy}"

    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        (
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{size}" height="{size}" '
            f'viewBox="0 0 {size} {size}">'
        ),
        f"  <title>{escape(caption)}</title>",
        (
            f'  <polygon class="heart-outline" points="{outline}" '
            'fill="#fff0f4" stroke="#d63a63" stroke-width="2"/>'
        ),
    ]
    for placed in _paint_order(result):
        lines.append(
            f'  <rect class={quoteattr("slot slot-" + placed.size_class.value)} '
            f'data-index="{placed.item_index}" data-stack="{placed.stack_order}" '
            f'x="{_fmt(placed.x)}" y="{_fmt(placed.y)}" '
            f'width="{_fmt(placed.width)}" height="{_fmt(placed.height)}" '
            f'fill="{_SLOT_COLORS.get(placed.size_class, "#ef6f8e")}" fill-opacity="0.85" '
            'stroke="#ffffff" stroke-width="2"/>'
        )
    lines.append("</svg>")
    return "\n".join(lines) + "\n"


def render_layout_plot(
    path: Union[str, Path],
    result: LayoutResult,
    boundary: Optional[HeartBoundary] = None,
    *,
    title: Optional[str] = None,
) -> Path:
    """Save a PNG preview of ``result`` drawn with matplotlib."""

    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    from matplotlib.patches import Polygon, Rectangle

    heart = _boundary_for(result, boundary)
    out = Path(path)
    size = result.container_size

    fig, ax = plt.subplots(figsize=(5, 5))
    ax.add_patch(Polygon(heart.outline(), closed=True, facecolor="#fff0f4", edgecolor="#d63a63", linewidth=1.5))
    for placed in _paint_order(result):
        ax.add_patch(
            Rectangle(
                (placed.x, placed.y),
                placed.width,
                placed.height,
                facecolor=_SLOT_COLORS.get(placed.size_class, "#ef6f8e"),
                edgecolor="white",
                alpha=0.85,
                zorder=2 + placed.stack_order,
            )
        )
        cx, cy = placed.center
        ax.text(cx, cy, str(placed.item_index), ha="center", va="center", fontsize=7, zorder=20)

    ax.set_xlim(0, size)
    ax.set_ylim(size, 0)
    ax.set_aspect("equal", adjustable="box")
    ax.set_title(title or f"{len(result)}/{result.requested} slots ({result.strategy})")
    fig.tight_layout()
    fig.savefig(out)
    plt.close(fig)
    logger.info("Wrote layout plot to %s", out)
    return out


__all__ = [
    "layout_to_dicts",
    "layout_to_json",
    "css_size_variables",
    "generate_svg_document",
    "render_layout_plot",
]
