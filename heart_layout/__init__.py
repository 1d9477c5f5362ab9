from .types import (
    Candidate,
    ConfigurationError,
    HeartLayoutError,
    InvalidScaleError,
    LayoutResult,
    PlacedRect,
    Rect,
    SizeClass,
)
from .boundary import HeartBoundary, HeartShape
from .sizing import DEFAULT_SIZE_TABLE, SizeClassifier, SizeClassSpec, SizeTable, classify
from .config import STRATEGIES, LayoutOptions, get_default_options, set_default_options
from .candidates import (
    HEART_TEMPLATE,
    GridScanGenerator,
    SobolGenerator,
    TemplateAnchor,
    TemplateGenerator,
    make_generator,
)
from .packer import PackResult, pack, placement_order
from .export import (
    css_size_variables,
    generate_svg_document,
    layout_to_dicts,
    layout_to_json,
    render_layout_plot,
)
from .scaler import DEFAULT_TIERS, ContainerTier, LayoutScaler, container_size_for, recompute

__all__ = [
    'Candidate',
    'ConfigurationError',
    'HeartLayoutError',
    'InvalidScaleError',
    'LayoutResult',
    'PlacedRect',
    'Rect',
    'SizeClass',
    'HeartBoundary',
    'HeartShape',
    'DEFAULT_SIZE_TABLE',
    'SizeClassifier',
    'SizeClassSpec',
    'SizeTable',
    'classify',
    'STRATEGIES',
    'LayoutOptions',
    'get_default_options',
    'set_default_options',
    'HEART_TEMPLATE',
    'GridScanGenerator',
    'SobolGenerator',
    'TemplateAnchor',
    'TemplateGenerator',
    'make_generator',
    'PackResult',
    'pack',
    'placement_order',
    'css_size_variables',
    'generate_svg_document',
    'layout_to_dicts',
    'layout_to_json',
    'render_layout_plot',
    'DEFAULT_TIERS',
    'ContainerTier',
    'LayoutScaler',
    'container_size_for',
    'recompute',
]
