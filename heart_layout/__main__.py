import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from heart_layout import (
    HeartBoundary,
    HeartLayoutError,
    STRATEGIES,
    css_size_variables,
    generate_svg_document,
    get_default_options,
    layout_to_json,
    recompute,
    render_layout_plot,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _write_text(path_value: str, text: str, label: str) -> Path:
    output_path = Path(path_value)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("Writing %s to %s", label, output_path)
    output_path.write_text(text, encoding="utf-8")
    return output_path


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Lay out photo slots inside a heart silhouette")
    parser.add_argument(
        "--viewport-width",
        type=float,
        default=1024,
        help="Viewport width in pixels used to pick the container size (default: 1024)",
    )
    parser.add_argument(
        "--count",
        type=int,
        default=20,
        help="Number of slots requested (default: 20)",
    )
    parser.add_argument(
        "--strategy",
        choices=list(STRATEGIES),
        default=None,
        help="Layout strategy (default: template)",
    )
    parser.add_argument("--margin", type=float, help="Minimum gap between slots in pixels")
    parser.add_argument("--tolerance", type=float, help="Boundary slack of the heart inequality")
    parser.add_argument("--seed", type=int, help="Random seed for the packing strategies")
    parser.add_argument("--grid-resolution", type=int, help="Grid resolution for the grid strategy")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument("--json-output", help="Write the layout as JSON to the given path")
    parser.add_argument("--svg-output", help="Write an SVG preview to the given path")
    parser.add_argument("--plot-output", help="Write a PNG preview (matplotlib) to the given path")
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    if args.count < 0:
        parser.error("--count must be non-negative")

    options = get_default_options().replace(grid_resolution=args.grid_resolution)
    try:
        result = recompute(
            args.viewport_width,
            args.count,
            options=options,
            strategy=args.strategy,
            margin=args.margin,
            tolerance=args.tolerance,
            seed=args.seed,
        )
    except (HeartLayoutError, ValueError) as exc:
        logger.error("Layout failed: %s", exc)
        raise SystemExit(1) from exc
    boundary = HeartBoundary.scale(
        result.container_size, options.shape, tolerance=result.tolerance
    )

    print(f"Container: {result.container_size:g}px ({result.strategy})")
    print(f"Placed: {len(result)} of {result.requested}")
    print("CSS variables:")
    for name, value in css_size_variables(result.container_size).items():
        print(f"  {name}: {value}")
    print("Slots:")
    for placed in result:
        print(
            f"  [{placed.item_index}] {placed.size_class.value:<6} "
            f"x={placed.x:.2f} y={placed.y:.2f} w={placed.width:.2f} h={placed.height:.2f} "
            f"z={placed.stack_order}"
        )
    if result.warnings:
        print("Warnings:")
        for warning in result.warnings:
            print(f"  - {warning}")

    if args.json_output:
        path = _write_text(args.json_output, layout_to_json(result), "layout JSON")
        print(f"Layout JSON written to {path}")
    if args.svg_output:
        path = _write_text(args.svg_output, generate_svg_document(result, boundary), "SVG preview")
        print(f"SVG preview written to {path}")
    if args.plot_output:
        plot_path = Path(args.plot_output)
        plot_path.parent.mkdir(parents=True, exist_ok=True)
        render_layout_plot(plot_path, result, boundary)
        print(f"Plot written to {plot_path}")


if __name__ == "__main__":
    main(sys.argv[1:])
