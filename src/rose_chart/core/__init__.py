"""
Core chart engine for the rose chart workbench.

This module resolves a dataset and view selection into slot records,
lays those out as wedge geometry, maps counts and interaction state to
colors, owns the interaction state machine, and composes the legend,
tooltip and detail overlay.
"""

from rose_chart.core.errors import (
    RoseChartError,
    DatasetError,
    MalformedBlockSpan,
    InvalidDayIndex,
    IndexOutOfRange,
    UnknownVariant,
)

from rose_chart.core.dataset import (
    TimeSlotRecord,
    BlockRecord,
    CircularStats,
    DayRecord,
    UniformityTests,
    SymmetryStats,
    Dataset,
    dataset_from_dict,
    load_dataset,
)

from rose_chart.core.view_resolver import (
    ALL_DAYS,
    ViewKind,
    ViewMode,
    ResolvedView,
    resolve,
)

from rose_chart.core.colors import (
    ColorScheme,
    RGBColor,
    WedgeStyle,
    intensity,
    base_color,
    style_for,
)

from rose_chart.core.geometry import (
    Point,
    Role,
    Scene,
    LayoutOptions,
    layout,
    hit_test,
)

from rose_chart.core.state import (
    InteractionState,
    ChartController,
)

from rose_chart.core.overlay import (
    Overlay,
    compose_overlay,
)

from rose_chart.core.settings import (
    Settings,
    ChartSettings,
    get_settings,
    initial_state,
)

from rose_chart.core.chart import (
    Frame,
    render_frame,
)

__all__ = [
    # Errors
    'RoseChartError',
    'DatasetError',
    'MalformedBlockSpan',
    'InvalidDayIndex',
    'IndexOutOfRange',
    'UnknownVariant',
    # Dataset
    'TimeSlotRecord',
    'BlockRecord',
    'CircularStats',
    'DayRecord',
    'UniformityTests',
    'SymmetryStats',
    'Dataset',
    'dataset_from_dict',
    'load_dataset',
    # Views
    'ALL_DAYS',
    'ViewKind',
    'ViewMode',
    'ResolvedView',
    'resolve',
    # Colors
    'ColorScheme',
    'RGBColor',
    'WedgeStyle',
    'intensity',
    'base_color',
    'style_for',
    # Geometry
    'Point',
    'Role',
    'Scene',
    'LayoutOptions',
    'layout',
    'hit_test',
    # State
    'InteractionState',
    'ChartController',
    # Overlay
    'Overlay',
    'compose_overlay',
    # Settings
    'Settings',
    'ChartSettings',
    'get_settings',
    'initial_state',
    # Frames
    'Frame',
    'render_frame',
]
