"""
Main window for the rose chart workbench.

Hosts the chart toolbar, the rose chart widget and the detail panel, and
owns the single ChartController shared by all of them.
"""

import logging
from pathlib import Path
from typing import Optional

from PyQt6.QtWidgets import (
    QMainWindow,
    QWidget,
    QVBoxLayout,
    QSplitter,
    QFileDialog,
    QMessageBox,
)
from PyQt6.QtCore import Qt, QSize
from PyQt6.QtGui import QAction, QKeySequence

from rose_chart import __version__
from rose_chart.core.dataset import Dataset, load_dataset
from rose_chart.core.errors import RoseChartError
from rose_chart.core.settings import Settings, get_settings, initial_state
from rose_chart.core.state import ChartController
from rose_chart.core.view_resolver import ViewKind, ViewMode
from rose_chart.gui.widgets.chart_toolbar import ChartToolbar
from rose_chart.gui.widgets.detail_panel import DetailPanel
from rose_chart.gui.widgets.rose_chart_widget import RoseChartWidget
from rose_chart.utils.logging import log_dataset_info, log_operation

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """
    Main application window for the rose chart workbench.

    Layout:
    - Top: Chart toolbar (view, day, colors, labels, export)
    - Center: Rose chart
    - Right: Statistics and selection details
    """

    APP_TITLE = "Rose Chart"

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize main window."""
        super().__init__()

        self._settings = settings or get_settings()
        self._dataset_path: Optional[Path] = None

        self.setWindowTitle(self.APP_TITLE)
        self.setMinimumSize(QSize(800, 600))

        self._controller = ChartController(initial_state(self._settings.chart))

        self._init_menu_bar()
        self._init_central_widget()
        self._restore_window_geometry()

        self.statusBar().showMessage("No dataset loaded")

    def _init_menu_bar(self) -> None:
        """Initialize the menu bar."""
        menu_bar = self.menuBar()

        # File menu
        file_menu = menu_bar.addMenu("&File")

        self._open_action = QAction("&Open Dataset...", self)
        self._open_action.setShortcut(QKeySequence("Ctrl+O"))
        self._open_action.setStatusTip("Load a circular statistics JSON file")
        self._open_action.triggered.connect(self._on_open_clicked)
        file_menu.addAction(self._open_action)

        file_menu.addSeparator()

        self._exit_action = QAction("E&xit", self)
        self._exit_action.setShortcut(QKeySequence("Ctrl+Q"))
        self._exit_action.setStatusTip("Exit the application")
        self._exit_action.triggered.connect(self.close)
        file_menu.addAction(self._exit_action)

        # View menu
        view_menu = menu_bar.addMenu("&View")

        for text, shortcut, kind in (
            ("&Overall", "Ctrl+1", ViewKind.HOURLY),
            ("&Blocks", "Ctrl+2", ViewKind.BLOCKS),
            ("&Daily", "Ctrl+3", ViewKind.DAILY),
        ):
            action = QAction(text, self)
            action.setShortcut(QKeySequence(shortcut))
            action.triggered.connect(
                lambda checked=False, k=kind: self._controller.set_view_mode(k)
            )
            view_menu.addAction(action)

        view_menu.addSeparator()

        self._toggle_labels_action = QAction("Toggle &Labels", self)
        self._toggle_labels_action.setShortcut(QKeySequence("Ctrl+L"))
        self._toggle_labels_action.triggered.connect(self._controller.toggle_labels)
        view_menu.addAction(self._toggle_labels_action)

        self._clear_selection_action = QAction("&Clear Selection", self)
        self._clear_selection_action.setShortcut(QKeySequence("Esc"))
        self._clear_selection_action.triggered.connect(self._controller.clear_selection)
        view_menu.addAction(self._clear_selection_action)

        # Help menu
        help_menu = menu_bar.addMenu("&Help")

        self._about_action = QAction("&About", self)
        self._about_action.triggered.connect(self._on_about_clicked)
        help_menu.addAction(self._about_action)

    def _init_central_widget(self) -> None:
        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        layout = QVBoxLayout(central_widget)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self._toolbar = ChartToolbar(self._controller)
        layout.addWidget(self._toolbar)

        self._splitter = QSplitter(Qt.Orientation.Horizontal)
        self._splitter.setHandleWidth(3)

        self._chart_widget = RoseChartWidget(self._controller, self._settings.chart)
        self._splitter.addWidget(self._chart_widget)

        self._detail_panel = DetailPanel()
        self._splitter.addWidget(self._detail_panel)

        self._splitter.setCollapsible(0, False)
        self._splitter.setCollapsible(1, True)
        layout.addWidget(self._splitter, 1)

        self._toolbar.connect_to_chart(self._chart_widget)
        self._detail_panel.connect_to_chart(self._chart_widget)
        self._chart_widget.render_failed.connect(self._on_render_failed)
        self._toolbar.export_requested.connect(
            lambda fmt: self.statusBar().showMessage(f"Chart exported as {fmt.upper()}", 5000)
        )

    def _restore_window_geometry(self) -> None:
        window = self._settings.window
        self.setGeometry(window.window_x, window.window_y,
                         window.window_width, window.window_height)
        if window.splitter_sizes:
            self._splitter.setSizes(list(window.splitter_sizes))
        if window.window_maximized:
            self.setWindowState(Qt.WindowState.WindowMaximized)

    # =========================================================================
    # Public API
    # =========================================================================

    def get_controller(self) -> ChartController:
        return self._controller

    def get_chart_widget(self) -> RoseChartWidget:
        return self._chart_widget

    def set_dataset(self, dataset: Dataset, path: Optional[Path] = None) -> None:
        """Show a dataset and reset the view to the overall distribution."""
        self._dataset_path = path
        self._controller.set_view_mode(ViewMode.hourly())
        self._toolbar.set_day_labels(dataset.day_labels)
        self._chart_widget.set_dataset(dataset)

        name = path.name if path is not None else "dataset"
        self.setWindowTitle(f"{self.APP_TITLE} - {name}")
        self.statusBar().showMessage(
            f"{name}: {dataset.summary.total} observations, {dataset.day_count} days"
        )

    def open_dataset(self, path: Path) -> bool:
        """
        Load and show a dataset file.

        Returns:
            True if the dataset was loaded
        """
        try:
            dataset = load_dataset(path)
        except (RoseChartError, OSError) as e:
            logger.error(f"Failed to load dataset {path}: {e}")
            QMessageBox.critical(self, "Cannot Open Dataset", f"{path}\n\n{e}")
            return False

        log_dataset_info(path, dataset)
        self.set_dataset(dataset, Path(path))
        self._settings.set_window_setting("last_directory", str(Path(path).parent))
        return True

    # =========================================================================
    # Signal Handlers
    # =========================================================================

    def _on_open_clicked(self) -> None:
        start_dir = self._settings.window.last_directory or str(Path.home())
        filepath, _ = QFileDialog.getOpenFileName(
            self, "Open Dataset", start_dir, "JSON Files (*.json);;All Files (*)"
        )
        if filepath:
            self.open_dataset(Path(filepath))

    def _on_render_failed(self, message: str) -> None:
        QMessageBox.warning(self, "Cannot Display View", message)
        self._controller.set_day_filter("all")

    def _on_about_clicked(self) -> None:
        QMessageBox.about(
            self,
            f"About {self.APP_TITLE}",
            f"<h3>{self.APP_TITLE} {__version__}</h3>"
            "<p>Circular rose chart of event counts by time of day.</p>",
        )

    # =========================================================================
    # Event Handlers
    # =========================================================================

    def closeEvent(self, event) -> None:
        """Persist window geometry on close."""
        geometry = self.geometry()
        window = self._settings.window
        window.window_maximized = self.isMaximized()
        if not window.window_maximized:
            window.window_x = geometry.x()
            window.window_y = geometry.y()
            window.window_width = geometry.width()
            window.window_height = geometry.height()
        window.splitter_sizes = self._splitter.sizes()
        self._settings.save()
        log_operation("close", "window state saved", logging.DEBUG)
        event.accept()
