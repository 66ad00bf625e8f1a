"""
Detail panel for the rose chart workbench GUI.

A sidebar that displays the overlay content of the current frame:
- Circular statistics for the current view
- Details of the selected slot
- Per-day breakdown of the selected hour (overall view)
"""

import logging
from typing import Optional

from PyQt6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QFormLayout,
    QLabel,
    QGroupBox,
    QTableWidget,
    QTableWidgetItem,
    QHeaderView,
)
from PyQt6.QtGui import QColor

from rose_chart.core.chart import Frame
from rose_chart.core.overlay import DetailPanel as DetailContent, StatsSummary
from rose_chart.gui.widgets.rose_chart_widget import RoseChartWidget

logger = logging.getLogger(__name__)

COLOR_INACTIVE_DAY = QColor("#f1f5f9")


class DetailPanel(QWidget):
    """
    Sidebar showing statistics and the selected slot's details.

    The panel is passive: it redraws from each Frame the chart widget
    emits and never changes chart state itself.
    """

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setMinimumWidth(260)
        self._setup_ui()
        self.clear_display()

    def _setup_ui(self) -> None:
        """Set up the user interface."""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(6, 6, 6, 6)
        layout.setSpacing(8)

        layout.addWidget(self._create_stats_section())
        layout.addWidget(self._create_selection_section())
        layout.addStretch(1)

    def _create_stats_section(self) -> QGroupBox:
        group = QGroupBox("Circular Statistics")
        form = QFormLayout(group)

        self._mean_label = QLabel()
        self._concentration_label = QLabel()
        self._variance_label = QLabel()
        self._total_label = QLabel()
        self._peak_label = QLabel()
        self._peak_block_label = QLabel()
        self._uniformity_label = QLabel()
        self._uniformity_label.setWordWrap(True)

        form.addRow("Mean time:", self._mean_label)
        form.addRow("Concentration (R):", self._concentration_label)
        form.addRow("Circular variance:", self._variance_label)
        form.addRow("Total:", self._total_label)
        form.addRow("Peak hour:", self._peak_label)
        form.addRow("Peak block:", self._peak_block_label)
        form.addRow("Uniformity:", self._uniformity_label)
        return group

    def _create_selection_section(self) -> QGroupBox:
        self._selection_group = QGroupBox("Selection")
        layout = QVBoxLayout(self._selection_group)

        self._detail_title = QLabel()
        self._detail_title.setStyleSheet("font-weight: bold; font-size: 11pt;")
        self._detail_count = QLabel()
        self._detail_share = QLabel()
        self._breakdown_caption = QLabel("Daily breakdown:")
        self._breakdown_caption.setStyleSheet("font-weight: bold;")

        self._breakdown_table = QTableWidget(0, 2)
        self._breakdown_table.setHorizontalHeaderLabels(["Day", "Occurrences"])
        self._breakdown_table.horizontalHeader().setSectionResizeMode(
            QHeaderView.ResizeMode.Stretch
        )
        self._breakdown_table.verticalHeader().setVisible(False)
        self._breakdown_table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)

        layout.addWidget(self._detail_title)
        layout.addWidget(self._detail_count)
        layout.addWidget(self._detail_share)
        layout.addWidget(self._breakdown_caption)
        layout.addWidget(self._breakdown_table)
        return self._selection_group

    # =========================================================================
    # Public API
    # =========================================================================

    def connect_to_chart(self, chart_widget: RoseChartWidget) -> None:
        chart_widget.frame_changed.connect(self.update_from_frame)

    def update_from_frame(self, frame: Optional[Frame]) -> None:
        if frame is None:
            self.clear_display()
            return
        self._display_stats(frame.overlay.stats)
        self._display_detail(frame.overlay.detail)

    def clear_display(self) -> None:
        for label in (self._mean_label, self._concentration_label, self._variance_label,
                      self._total_label, self._peak_label, self._peak_block_label,
                      self._uniformity_label):
            label.setText("-")
        self._display_detail(None)

    def _display_stats(self, stats: StatsSummary) -> None:
        self._mean_label.setText(stats.mean_time)
        self._concentration_label.setText(stats.concentration)
        self._variance_label.setText(stats.variance)
        self._total_label.setText(stats.total)
        self._peak_label.setText(stats.peak_hour)
        self._peak_block_label.setText(stats.peak_block)
        self._uniformity_label.setText(stats.uniformity)

    def _display_detail(self, detail: Optional[DetailContent]) -> None:
        self._selection_group.setVisible(detail is not None)
        if detail is None:
            self._breakdown_table.setRowCount(0)
            return

        self._detail_title.setText(detail.title)
        self._detail_count.setText(detail.count_text)
        self._detail_share.setText(detail.share_text)

        has_breakdown = bool(detail.day_breakdown)
        self._breakdown_caption.setVisible(has_breakdown)
        self._breakdown_table.setVisible(has_breakdown)
        self._breakdown_table.setRowCount(len(detail.day_breakdown))
        for row, entry in enumerate(detail.day_breakdown):
            day_item = QTableWidgetItem(entry.day_label)
            count_item = QTableWidgetItem(entry.text)
            if not entry.has_activity:
                day_item.setBackground(COLOR_INACTIVE_DAY)
                count_item.setBackground(COLOR_INACTIVE_DAY)
            self._breakdown_table.setItem(row, 0, day_item)
            self._breakdown_table.setItem(row, 1, count_item)
