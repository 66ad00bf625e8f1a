"""
Rose chart widget for the rose chart workbench GUI.

Paints the Scene and Overlay produced by the core render pipeline with
QPainter and forwards pointer input to the ChartController:
- Hover updates the hovered slot and shows a tooltip
- Click toggles the selected slot
- Leaving the widget clears the hover
- Export to PNG/SVG

The scene is laid out on a fixed canvas (650x650 by default) and scaled
uniformly into the widget, so hit-testing maps widget coordinates back to
scene coordinates before asking the core which wedge is under the pointer.
"""

import logging
import math
from typing import Optional

from PyQt6.QtWidgets import QWidget, QToolTip, QSizePolicy
from PyQt6.QtCore import Qt, QRectF, QPointF, QSize, pyqtSignal
from PyQt6.QtGui import (
    QPainter,
    QPainterPath,
    QColor,
    QPen,
    QBrush,
    QFont,
    QFontMetricsF,
    QImage,
    QTransform,
)
from PyQt6.QtSvg import QSvgGenerator

from rose_chart.core.chart import Frame, render_frame
from rose_chart.core.dataset import Dataset
from rose_chart.core.errors import RoseChartError
from rose_chart.core.geometry import (
    CirclePrimitive,
    LinePrimitive,
    TextPrimitive,
    WedgePrimitive,
    hit_test,
)
from rose_chart.core.overlay import LegendSwatch, Overlay
from rose_chart.core.settings import ChartSettings
from rose_chart.core.state import ChartController, InteractionState

logger = logging.getLogger(__name__)


# Colors not carried by the scene itself
COLOR_BACKGROUND = QColor("#ffffff")
COLOR_TITLE = QColor("#333333")
COLOR_LEGEND_BORDER = QColor("#dddddd")
COLOR_LEGEND_TEXT = QColor("#333333")
COLOR_LEGEND_MUTED = QColor("#666666")
COLOR_PLACEHOLDER = QColor("#999999")


def _qcolor(value: str) -> QColor:
    return QColor(value)


class RoseChartWidget(QWidget):
    """
    Circular rose chart of event counts by time of day.

    The widget holds no chart logic of its own: every repaint renders a
    Frame from the dataset and the controller's current state.

    Signals:
        slot_hovered(int): Emitted when the pointer enters a wedge (-1 when it leaves)
        slot_clicked(int): Emitted when a wedge is clicked
        frame_changed(object): Emitted with the new Frame after each re-render
        render_failed(str): Emitted when the current state cannot be rendered
    """

    # Signals
    slot_hovered = pyqtSignal(int)
    slot_clicked = pyqtSignal(int)
    frame_changed = pyqtSignal(object)
    render_failed = pyqtSignal(str)

    LEGEND_WIDTH = 100
    LEGEND_HEIGHT = 130

    def __init__(self, controller: ChartController,
                 chart_settings: Optional[ChartSettings] = None,
                 parent: Optional[QWidget] = None):
        """
        Initialize rose chart widget.

        Args:
            controller: Interaction state owner
            chart_settings: Canvas size and margins
            parent: Parent widget
        """
        super().__init__(parent)

        self._controller = controller
        self._chart = chart_settings or ChartSettings()
        self._dataset: Optional[Dataset] = None
        self._frame: Optional[Frame] = None

        self.setMouseTracking(True)
        self.setMinimumSize(320, 320)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

        self._controller.add_listener(self._on_state_changed)

    # =========================================================================
    # Public API
    # =========================================================================

    def set_dataset(self, dataset: Optional[Dataset]) -> None:
        """Show a new dataset (or nothing) and re-render."""
        self._dataset = dataset
        self.refresh()

    def get_dataset(self) -> Optional[Dataset]:
        return self._dataset

    def get_frame(self) -> Optional[Frame]:
        return self._frame

    def refresh(self) -> None:
        """Re-render the frame from the current dataset and state."""
        self._frame = None
        if self._dataset is not None:
            try:
                self._frame = render_frame(self._dataset, self._controller.state, self._chart)
            except RoseChartError as e:
                logger.error(f"Cannot render chart: {e}")
                self.render_failed.emit(str(e))
        self.frame_changed.emit(self._frame)
        self.update()

    def sizeHint(self) -> QSize:
        return QSize(self._chart.width, self._chart.height)

    # =========================================================================
    # Coordinate Mapping
    # =========================================================================

    def _scene_transform(self, width: float, height: float) -> QTransform:
        """Uniform scale and centering of the canvas into a target rect."""
        scale = min(width / self._chart.width, height / self._chart.height)
        dx = (width - self._chart.width * scale) / 2
        dy = (height - self._chart.height * scale) / 2
        transform = QTransform()
        transform.translate(dx, dy)
        transform.scale(scale, scale)
        return transform

    def map_to_scene(self, pos: QPointF) -> QPointF:
        """Map a widget position to scene coordinates."""
        inverted, invertible = self._scene_transform(self.width(), self.height()).inverted()
        if not invertible:
            return QPointF(-1, -1)
        return inverted.map(pos)

    def slot_at(self, pos: QPointF) -> Optional[int]:
        """Slot index under a widget position, or None."""
        if self._frame is None:
            return None
        scene_pos = self.map_to_scene(pos)
        return hit_test(self._frame.scene, scene_pos.x(), scene_pos.y())

    # =========================================================================
    # Painting
    # =========================================================================

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        painter.fillRect(self.rect(), COLOR_BACKGROUND)

        if self._frame is None:
            painter.setPen(QPen(COLOR_PLACEHOLDER))
            painter.drawText(self.rect(), Qt.AlignmentFlag.AlignCenter,
                             "Open a dataset to display the chart")
            painter.end()
            return

        painter.setTransform(self._scene_transform(self.width(), self.height()))
        self._paint_frame(painter, self._frame)
        painter.end()

    def _paint_frame(self, painter: QPainter, frame: Frame) -> None:
        """Paint scene primitives in order, then the title and legend."""
        for primitive in frame.scene:
            if isinstance(primitive, WedgePrimitive):
                self._draw_wedge(painter, primitive)
            elif isinstance(primitive, CirclePrimitive):
                self._draw_circle(painter, primitive)
            elif isinstance(primitive, LinePrimitive):
                self._draw_line(painter, primitive)
            elif isinstance(primitive, TextPrimitive):
                self._draw_text(painter, primitive)

        self._draw_title(painter, frame.overlay)
        self._draw_legend(painter, frame.overlay)

    def _draw_wedge(self, painter: QPainter, wedge: WedgePrimitive) -> None:
        if wedge.radius <= 0:
            return

        center = QPointF(wedge.center.x, wedge.center.y)
        start = QPointF(wedge.center.x + math.sin(wedge.start_angle) * wedge.radius,
                        wedge.center.y - math.cos(wedge.start_angle) * wedge.radius)
        rect = QRectF(wedge.center.x - wedge.radius, wedge.center.y - wedge.radius,
                      wedge.radius * 2, wedge.radius * 2)

        # Qt angles start at 3 o'clock and run counter-clockwise
        qt_start = 90.0 - math.degrees(wedge.start_angle)
        qt_sweep = -math.degrees(wedge.span)

        path = QPainterPath()
        path.moveTo(center)
        path.lineTo(start)
        path.arcTo(rect, qt_start, qt_sweep)
        path.closeSubpath()

        style = wedge.style
        fill = QColor(*style.fill)
        fill.setAlphaF(style.opacity)
        painter.setBrush(QBrush(fill))
        painter.setPen(QPen(QColor(*style.stroke), style.stroke_width))
        painter.drawPath(path)

    def _draw_circle(self, painter: QPainter, circle: CirclePrimitive) -> None:
        if circle.stroke:
            pen = QPen(_qcolor(circle.stroke), circle.stroke_width)
            if circle.dashed:
                pen.setDashPattern([4, 4])
            painter.setPen(pen)
        else:
            painter.setPen(Qt.PenStyle.NoPen)
        if circle.fill:
            painter.setBrush(QBrush(_qcolor(circle.fill)))
        else:
            painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawEllipse(QPointF(circle.center.x, circle.center.y),
                            circle.radius, circle.radius)

    def _draw_line(self, painter: QPainter, line: LinePrimitive) -> None:
        pen = QPen(_qcolor(line.stroke), line.stroke_width)
        if line.dashed:
            pen.setDashPattern([3, 3])
        painter.setPen(pen)
        painter.drawLine(QPointF(line.start.x, line.start.y),
                         QPointF(line.end.x, line.end.y))

    def _draw_text(self, painter: QPainter, text: TextPrimitive) -> None:
        font = QFont()
        font.setPixelSize(text.font_size)
        font.setBold(text.bold)
        painter.setFont(font)
        painter.setPen(QPen(_qcolor(text.color)))

        metrics = QFontMetricsF(font)
        if text.anchor == "middle":
            width = metrics.horizontalAdvance(text.text)
            rect = QRectF(text.position.x - width / 2 - 2,
                          text.position.y - metrics.height() / 2,
                          width + 4, metrics.height())
            painter.drawText(rect, Qt.AlignmentFlag.AlignCenter, text.text)
        else:
            painter.drawText(QPointF(text.position.x, text.position.y), text.text)

    def _draw_title(self, painter: QPainter, overlay: Overlay) -> None:
        font = QFont()
        font.setPixelSize(16)
        font.setBold(True)
        painter.setFont(font)
        painter.setPen(QPen(COLOR_TITLE))
        painter.drawText(QRectF(0, 10, self._chart.width, 30),
                         Qt.AlignmentFlag.AlignCenter, overlay.title)

    def _draw_legend(self, painter: QPainter, overlay: Overlay) -> None:
        """Draw the legend box in the bottom right corner of the canvas."""
        x0 = self._chart.width - self.LEGEND_WIDTH - 10
        y0 = self._chart.height - self.LEGEND_HEIGHT - 10

        background = QColor(COLOR_BACKGROUND)
        background.setAlphaF(0.9)
        painter.setBrush(QBrush(background))
        painter.setPen(QPen(COLOR_LEGEND_BORDER))
        painter.drawRoundedRect(QRectF(x0, y0, self.LEGEND_WIDTH, self.LEGEND_HEIGHT), 4, 4)

        font = QFont()
        font.setPixelSize(12)
        font.setBold(True)
        painter.setFont(font)
        painter.setPen(QPen(COLOR_LEGEND_TEXT))
        painter.drawText(QPointF(x0 + 10, y0 + 20), "Legend")

        font.setPixelSize(10)
        font.setBold(False)
        painter.setFont(font)

        y = y0 + 40
        for entry in overlay.legend.entries:
            color = _qcolor(entry.color)
            if entry.swatch is LegendSwatch.POINT:
                painter.setPen(Qt.PenStyle.NoPen)
                painter.setBrush(QBrush(color))
                painter.drawEllipse(QPointF(x0 + 15, y), 5, 5)
            elif entry.swatch is LegendSwatch.MEAN_LINE:
                pen = QPen(color, 2)
                pen.setDashPattern([2, 2])
                painter.setPen(pen)
                painter.drawLine(QPointF(x0 + 10, y), QPointF(x0 + 20, y))
                painter.setPen(Qt.PenStyle.NoPen)
                painter.setBrush(QBrush(color))
                painter.drawEllipse(QPointF(x0 + 20, y), 3, 3)
            elif entry.swatch is LegendSwatch.HIGHLIGHT:
                painter.setPen(Qt.PenStyle.NoPen)
                painter.setBrush(QBrush(color))
                painter.drawRect(QRectF(x0 + 10, y - 5, 10, 10))
            else:
                pen = QPen(color, 1)
                pen.setDashPattern([2, 2])
                painter.setPen(pen)
                painter.drawLine(QPointF(x0 + 10, y), QPointF(x0 + 20, y))

            painter.setPen(QPen(COLOR_LEGEND_TEXT))
            painter.drawText(QPointF(x0 + 25, y + 3), entry.label)
            y += 20

        font.setPixelSize(9)
        painter.setFont(font)
        painter.setPen(QPen(COLOR_LEGEND_MUTED))
        painter.drawText(QPointF(x0 + 10, y0 + self.LEGEND_HEIGHT - 10),
                         overlay.legend.concentration_text)

    # =========================================================================
    # Export
    # =========================================================================

    def export_to_png(self, filepath: str, width: int = 1024, height: int = 1024) -> bool:
        """
        Export the current chart to a PNG image.

        Args:
            filepath: Path to save the PNG file
            width: Image width in pixels
            height: Image height in pixels

        Returns:
            True if export was successful
        """
        if self._frame is None:
            return False

        image = QImage(width, height, QImage.Format.Format_ARGB32)
        image.fill(COLOR_BACKGROUND)

        painter = QPainter(image)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        painter.setTransform(self._scene_transform(width, height))
        self._paint_frame(painter, self._frame)
        painter.end()

        saved = image.save(filepath)
        if saved:
            logger.info(f"Exported chart to {filepath}")
        else:
            logger.error(f"Could not write PNG to {filepath}")
        return saved

    def export_to_svg(self, filepath: str) -> bool:
        """
        Export the current chart to an SVG vector image.

        Args:
            filepath: Path to save the SVG file

        Returns:
            True if export was successful
        """
        if self._frame is None:
            return False

        generator = QSvgGenerator()
        generator.setFileName(filepath)
        generator.setSize(QSize(self._chart.width, self._chart.height))
        generator.setViewBox(QRectF(0, 0, self._chart.width, self._chart.height))
        generator.setTitle(self._frame.overlay.title)
        generator.setDescription("Rose chart export")

        painter = QPainter(generator)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        self._paint_frame(painter, self._frame)
        painter.end()

        logger.info(f"Exported chart to {filepath}")
        return True

    # =========================================================================
    # Event Handlers
    # =========================================================================

    def _on_state_changed(self, state: InteractionState) -> None:
        self.refresh()

    def mouseMoveEvent(self, event) -> None:
        """Track the hovered wedge and show its tooltip."""
        index = self.slot_at(event.position())
        if index != self._controller.state.hovered_index:
            self._controller.hover(index)
            self.slot_hovered.emit(index if index is not None else -1)

        tooltip = self._frame.overlay.tooltip if self._frame is not None else None
        if tooltip is not None:
            QToolTip.showText(
                event.globalPosition().toPoint(),
                f"<b>{tooltip.title}</b><br>{tooltip.body}<br><i>{tooltip.hint}</i>",
                self,
            )
        else:
            QToolTip.hideText()

        super().mouseMoveEvent(event)

    def mousePressEvent(self, event) -> None:
        """Toggle selection of the clicked wedge."""
        if event.button() == Qt.MouseButton.LeftButton:
            index = self.slot_at(event.position())
            if index is not None:
                self._controller.click(index)
                self.slot_clicked.emit(index)
        super().mousePressEvent(event)

    def leaveEvent(self, event) -> None:
        self._controller.hover(None)
        QToolTip.hideText()
        super().leaveEvent(event)
