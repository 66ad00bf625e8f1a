"""
Custom widgets for the rose chart workbench GUI.
"""

from rose_chart.gui.widgets.rose_chart_widget import RoseChartWidget
from rose_chart.gui.widgets.chart_toolbar import ChartToolbar, ViewModeButton
from rose_chart.gui.widgets.detail_panel import DetailPanel

__all__ = [
    "RoseChartWidget",
    "ChartToolbar",
    "ViewModeButton",
    "DetailPanel",
]
