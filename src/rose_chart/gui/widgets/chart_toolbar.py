"""
Chart toolbar for the rose chart workbench GUI.

Provides controls for the rose chart:
- View mode selector (Overall/Blocks/Daily)
- Day selector for the daily view
- Color scheme selector
- Label visibility toggle
- Export options (PNG, SVG)
"""

import logging
from typing import Optional, Sequence

from PyQt6.QtWidgets import (
    QWidget,
    QHBoxLayout,
    QPushButton,
    QLabel,
    QComboBox,
    QFrame,
    QToolButton,
    QButtonGroup,
    QFileDialog,
    QMessageBox,
)
from PyQt6.QtCore import pyqtSignal

from rose_chart.core.colors import ColorScheme
from rose_chart.core.state import ChartController, InteractionState
from rose_chart.core.view_resolver import ALL_DAYS, ViewKind
from rose_chart.gui.widgets.rose_chart_widget import RoseChartWidget

logger = logging.getLogger(__name__)


BUTTON_STYLE = """
    QToolButton {
        background-color: #f8fafc;
        color: #334155;
        border: 1px solid #cbd5e1;
        border-radius: 3px;
        padding: 2px 8px;
        font-size: 9pt;
    }
    QToolButton:hover {
        background-color: #eef2ff;
        border-color: #667eea;
    }
    QToolButton:checked {
        background-color: #667eea;
        border-color: #667eea;
        color: #ffffff;
    }
    QToolButton:disabled {
        color: #94a3b8;
        background-color: #f1f5f9;
    }
"""

LABEL_STYLE = "color: #334155; font-size: 9pt; font-weight: bold;"


class ViewModeButton(QToolButton):
    """
    A toggle button for view mode selection.
    """

    def __init__(self, text: str, tooltip: str, parent: Optional[QWidget] = None):
        super().__init__(parent)

        self.setText(text)
        self.setToolTip(tooltip)
        self.setCheckable(True)
        self.setMinimumWidth(60)
        self.setStyleSheet(BUTTON_STYLE)


class ChartToolbar(QWidget):
    """
    Toolbar driving a ChartController.

    The toolbar never keeps its own copy of the chart state: user input is
    forwarded to the controller, and controller changes are reflected back
    into the controls with signals blocked.

    Signals:
        export_requested(str): Emitted after a successful export ("png" or "svg")
    """

    # Signals
    export_requested = pyqtSignal(str)

    _VIEW_BUTTON_IDS = {
        ViewKind.HOURLY: 0,
        ViewKind.BLOCKS: 1,
        ViewKind.DAILY: 2,
    }

    def __init__(self, controller: ChartController, parent: Optional[QWidget] = None):
        """
        Initialize chart toolbar.

        Args:
            controller: Interaction state owner
            parent: Parent widget
        """
        super().__init__(parent)

        self._controller = controller
        self._chart_widget: Optional[RoseChartWidget] = None

        self._setup_ui()
        self._sync_from_state(controller.state)
        controller.add_listener(self._sync_from_state)

    def _setup_ui(self) -> None:
        """Set up the user interface."""
        layout = QHBoxLayout(self)
        layout.setContentsMargins(4, 2, 4, 2)
        layout.setSpacing(4)

        self._add_view_mode_section(layout)
        layout.addWidget(self._create_separator())
        self._add_day_section(layout)
        layout.addWidget(self._create_separator())
        self._add_style_section(layout)
        layout.addWidget(self._create_separator())
        self._add_export_section(layout)

        layout.addStretch(1)

    def _create_separator(self) -> QFrame:
        """Create a vertical separator line."""
        separator = QFrame()
        separator.setFrameShape(QFrame.Shape.VLine)
        separator.setFrameShadow(QFrame.Shadow.Plain)
        separator.setStyleSheet("QFrame { color: #cbd5e1; }")
        separator.setFixedWidth(1)
        return separator

    def _add_view_mode_section(self, layout: QHBoxLayout) -> None:
        label = QLabel("View:")
        label.setStyleSheet(LABEL_STYLE)
        layout.addWidget(label)

        self._view_mode_group = QButtonGroup(self)
        self._view_mode_group.setExclusive(True)

        buttons = [
            (ViewKind.HOURLY, "Overall", "Activity by hour across all data"),
            (ViewKind.BLOCKS, "Blocks", "Activity by 4-hour blocks"),
            (ViewKind.DAILY, "Daily", "Activity by hour for one day or all days"),
        ]
        for kind, text, tooltip in buttons:
            button = ViewModeButton(text, tooltip)
            self._view_mode_group.addButton(button, self._VIEW_BUTTON_IDS[kind])
            layout.addWidget(button)

        self._view_mode_group.idClicked.connect(self._on_view_mode_clicked)

    def _add_day_section(self, layout: QHBoxLayout) -> None:
        label = QLabel("Day:")
        label.setStyleSheet(LABEL_STYLE)
        layout.addWidget(label)

        self._day_combo = QComboBox()
        self._day_combo.setMinimumWidth(110)
        self._day_combo.addItem("All Days", ALL_DAYS)
        self._day_combo.currentIndexChanged.connect(self._on_day_changed)
        layout.addWidget(self._day_combo)

    def _add_style_section(self, layout: QHBoxLayout) -> None:
        label = QLabel("Colors:")
        label.setStyleSheet(LABEL_STYLE)
        layout.addWidget(label)

        self._scheme_combo = QComboBox()
        for scheme in ColorScheme:
            self._scheme_combo.addItem(scheme.value.capitalize(), scheme)
        self._scheme_combo.currentIndexChanged.connect(self._on_scheme_changed)
        layout.addWidget(self._scheme_combo)

        self._labels_btn = ViewModeButton("Labels", "Show or hide hour markers and grid values")
        self._labels_btn.toggled.connect(self._on_labels_toggled)
        layout.addWidget(self._labels_btn)

    def _add_export_section(self, layout: QHBoxLayout) -> None:
        label = QLabel("Export:")
        label.setStyleSheet(LABEL_STYLE)
        layout.addWidget(label)

        self._export_png_btn = QPushButton("PNG")
        self._export_png_btn.setToolTip("Export chart as PNG image")
        self._export_png_btn.clicked.connect(self._on_export_png_clicked)
        layout.addWidget(self._export_png_btn)

        self._export_svg_btn = QPushButton("SVG")
        self._export_svg_btn.setToolTip("Export chart as SVG vector")
        self._export_svg_btn.clicked.connect(self._on_export_svg_clicked)
        layout.addWidget(self._export_svg_btn)

    # =========================================================================
    # Public API
    # =========================================================================

    def connect_to_chart(self, chart_widget: RoseChartWidget) -> None:
        """Attach the chart widget used for exports."""
        self._chart_widget = chart_widget

    def set_day_labels(self, labels: Sequence[str]) -> None:
        """Replace the day selector entries with the dataset's day labels."""
        self._day_combo.blockSignals(True)
        self._day_combo.clear()
        self._day_combo.addItem("All Days", ALL_DAYS)
        for index, label in enumerate(labels):
            self._day_combo.addItem(label, index)
        self._day_combo.blockSignals(False)
        self._sync_from_state(self._controller.state)

    # =========================================================================
    # Signal Handlers
    # =========================================================================

    def _on_view_mode_clicked(self, button_id: int) -> None:
        for kind, kind_id in self._VIEW_BUTTON_IDS.items():
            if kind_id == button_id:
                self._controller.set_view_mode(kind)
                return

    def _on_day_changed(self, index: int) -> None:
        if index < 0:
            return
        self._controller.set_day_filter(self._day_combo.itemData(index))

    def _on_scheme_changed(self, index: int) -> None:
        if index < 0:
            return
        self._controller.set_color_scheme(self._scheme_combo.itemData(index))

    def _on_labels_toggled(self, checked: bool) -> None:
        self._controller.set_labels_visible(checked)

    def _export(self, fmt: str) -> None:
        if self._chart_widget is None or self._chart_widget.get_frame() is None:
            return

        suffix = f".{fmt}"
        file_filter = "PNG Images (*.png)" if fmt == "png" else "SVG Files (*.svg)"
        filepath, _ = QFileDialog.getSaveFileName(
            self, f"Export Chart as {fmt.upper()}", f"rose_chart{suffix}", file_filter
        )
        if not filepath:
            return
        if not filepath.lower().endswith(suffix):
            filepath += suffix

        if fmt == "png":
            success = self._chart_widget.export_to_png(filepath)
        else:
            success = self._chart_widget.export_to_svg(filepath)

        if success:
            self.export_requested.emit(fmt)
        else:
            QMessageBox.warning(self, "Export Failed", f"Failed to export chart to {filepath}")

    def _on_export_png_clicked(self) -> None:
        self._export("png")

    def _on_export_svg_clicked(self) -> None:
        self._export("svg")

    def _sync_from_state(self, state: InteractionState) -> None:
        """Reflect the controller state in the controls."""
        view_mode = state.view_mode

        button = self._view_mode_group.button(self._VIEW_BUTTON_IDS[view_mode.kind])
        if button is not None and not button.isChecked():
            button.setChecked(True)

        self._day_combo.blockSignals(True)
        day_index = self._day_combo.findData(view_mode.day_filter)
        if day_index >= 0:
            self._day_combo.setCurrentIndex(day_index)
        self._day_combo.blockSignals(False)
        self._day_combo.setEnabled(view_mode.kind is ViewKind.DAILY)

        self._scheme_combo.blockSignals(True)
        self._scheme_combo.setCurrentIndex(self._scheme_combo.findData(state.color_scheme))
        self._scheme_combo.blockSignals(False)

        self._labels_btn.blockSignals(True)
        self._labels_btn.setChecked(state.labels_visible)
        self._labels_btn.blockSignals(False)
