"""
Per-frame render pipeline.

A frame is a pure function of the dataset, the interaction state and the
chart settings: the view is resolved, laid out and composed with its
overlay. Hosts call render_frame() after every state change and paint
the result.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from rose_chart.core.dataset import Dataset
from rose_chart.core.geometry import LayoutOptions, Scene, layout
from rose_chart.core.overlay import Overlay, compose_overlay
from rose_chart.core.settings import ChartSettings
from rose_chart.core.state import InteractionState
from rose_chart.core.timefmt import format_time_of_day
from rose_chart.core.view_resolver import ResolvedView, resolve

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Frame:
    """Everything a host needs to paint one state of the chart."""
    view: ResolvedView
    scene: Scene
    overlay: Overlay


def layout_options(view: ResolvedView, state: InteractionState,
                   chart: ChartSettings) -> LayoutOptions:
    """Layout options for a resolved view under the given state."""
    mean_hour = view.stats.mean_time_hour if view.shows_mean_direction else None
    return LayoutOptions(
        center=chart.center,
        labels_visible=state.labels_visible,
        selected_index=state.selected_index,
        hovered_index=state.hovered_index,
        color_scheme=state.color_scheme,
        annotate_all=view.view_mode.is_blocks,
        mean_hour=mean_hour,
        mean_label=format_time_of_day(mean_hour) if mean_hour is not None else "",
        hour_step=view.view_mode.hour_step,
    )


def render_frame(dataset: Dataset, state: InteractionState,
                 settings: Optional[ChartSettings] = None) -> Frame:
    """
    Resolve, lay out and annotate the chart for one interaction state.

    Args:
        dataset: Validated dataset
        state: Current interaction state
        settings: Canvas settings (defaults to a 650x650 canvas)

    Returns:
        Frame with the resolved view, scene and overlay

    Raises:
        InvalidDayIndex: If the state selects a day the dataset lacks
    """
    settings = settings or ChartSettings()
    view = resolve(dataset, state.view_mode)
    scene = layout(view.slots, view.wedge_angle, settings.max_radius,
                   layout_options(view, state, settings))
    overlay = compose_overlay(dataset, view, state)
    logger.debug(f"Rendered frame for {state.view_mode} ({len(scene)} primitives)")
    return Frame(view, scene, overlay)


__all__ = ["Frame", "layout_options", "render_frame"]
