"""
Rose Chart - circular visualization of event counts by time of day.

A rose chart engine for 24-hour cyclic data: views over hourly, 4-hour
block and per-day distributions, pure layout into drawable primitives,
an interaction state machine, and the overlay text that accompanies the
chart. A PyQt6 workbench and a rich console report sit on top of it.
"""

__version__ = "0.1.0"

# Re-export main entry point
from rose_chart.main import main

from rose_chart.core.dataset import Dataset, load_dataset, dataset_from_dict
from rose_chart.core.view_resolver import ViewKind, ViewMode, resolve
from rose_chart.core.state import ChartController, InteractionState
from rose_chart.core.chart import Frame, render_frame

__all__ = [
    # Main entry point
    "main",
    "__version__",

    # Data
    "Dataset",
    "load_dataset",
    "dataset_from_dict",

    # Views
    "ViewKind",
    "ViewMode",
    "resolve",

    # Interaction and rendering
    "ChartController",
    "InteractionState",
    "Frame",
    "render_frame",
]
