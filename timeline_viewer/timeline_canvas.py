"""
Timeline Canvas - Draws a TimelineSession and turns input into session operations.

This module provides the TimelineCanvas widget. Layout is recomputed inside
``paintEvent``; Qt merges pending ``update()`` calls into a single repaint,
so a burst of wheel or drag events costs at most one layout pass per frame.
"""

import logging

from PyQt5.QtCore import Qt, QRectF, QPointF, pyqtSignal
from PyQt5.QtGui import QBrush, QColor, QFont, QLinearGradient, QPainter, QPen
from PyQt5.QtWidgets import QWidget

from timeline_viewer.rendering.text_metrics import QtTextMeasurer
from timeline_viewer.styles import Colors, TimelineStyles

logger = logging.getLogger(__name__)


class TimelineCanvas(QWidget):
    """
    Immediate-mode timeline view.

    Interaction:
    - Mouse wheel zooms around the cursor
    - Left-drag pans horizontally and scrolls lanes vertically
    - Click selects the period under the cursor
    - +/- keys zoom around the centre, arrow keys pan

    Signals:
        period_selected: Emitted with the clicked PeriodGeometry, or None
        scale_changed: Emitted with the granularity name after a zoom step
        hover_date_changed: Emitted with the encoded date under the cursor
    """

    period_selected = pyqtSignal(object)
    scale_changed = pyqtSignal(str)
    hover_date_changed = pyqtSignal(str)

    # angleDelta units per wheel notch
    WHEEL_NOTCH = 120
    KEY_PAN_STEP = 40

    def __init__(self, session=None, parent=None):
        """
        Initialize the timeline canvas.

        Args:
            session: TimelineSession to draw (can be set later)
            parent: Parent widget
        """
        super().__init__(parent)
        self.session = None
        self.selected_period = None
        self._is_panning = False
        self._pan_start_pos = None

        self._axis_font = QFont()
        self._axis_font.setPointSize(TimelineStyles.AXIS_FONT_POINT_SIZE)
        self._label_font = QFont()
        self._label_font.setPointSize(TimelineStyles.LABEL_FONT_POINT_SIZE)
        self._label_font.setBold(True)

        self.setFocusPolicy(Qt.StrongFocus)
        self.setMouseTracking(True)
        self.setMinimumSize(400, 200)
        self.setCursor(Qt.OpenHandCursor)

        if session is not None:
            self.set_session(session)

    def set_session(self, session):
        """
        Attach a session and size it to the widget.

        Args:
            session: TimelineSession to draw
        """
        self.session = session
        self.selected_period = None
        # Pack with the same metrics the labels are drawn with
        session.coordinator.text_measurer = QtTextMeasurer(
            self._label_font, session.settings.label_padding
        )
        session.set_viewport(self.width(), self.height())
        self.update()

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.fillRect(self.rect(), QColor(Colors.BG_PRIMARY))

        if self.session is None:
            painter.end()
            return

        grid = self.session.build_grid(self.width())
        lane_geometry = self.session.layout_lanes()

        self._draw_lanes(painter, lane_geometry)
        self._draw_grid(painter, grid)
        self._draw_periods(painter, lane_geometry)
        self._draw_axis(painter, grid)
        painter.end()

    def _draw_lanes(self, painter, lane_geometry):
        for geometry in lane_geometry:
            if geometry.lane.hidden or geometry.height <= 0:
                continue
            color = QColor(geometry.lane.color)
            color.setAlpha(TimelineStyles.LANE_ALPHA)
            rect = QRectF(0, geometry.top_y, self.width(), geometry.height)
            painter.fillRect(rect, color)
            painter.setPen(QPen(QColor(Colors.LANE_BORDER), 1))
            painter.drawLine(QPointF(0, geometry.top_y), QPointF(self.width(), geometry.top_y))
            painter.setPen(QColor(Colors.TEXT_MUTED))
            painter.setFont(self._axis_font)
            painter.drawText(QPointF(6, geometry.top_y + 14), geometry.lane.name)

    def _draw_grid(self, painter, grid):
        painter.setPen(QPen(QColor(Colors.GRID_LINE), 1))
        bottom = self.session.baseline_y
        for line in grid:
            painter.drawLine(QPointF(line.pixel_x, 0), QPointF(line.pixel_x, bottom))

    def _draw_axis(self, painter, grid):
        top = self.session.baseline_y
        painter.fillRect(QRectF(0, top, self.width(), self.height() - top), QColor(Colors.BG_AXIS))
        painter.setFont(self._axis_font)
        painter.setPen(QColor(Colors.TEXT_SECONDARY))
        for line in grid:
            painter.drawLine(QPointF(line.pixel_x, top), QPointF(line.pixel_x, top + 8))
            if line.label:
                painter.drawText(QPointF(line.pixel_x + 3, top + 22), line.label)

    def _draw_periods(self, painter, lane_geometry):
        settings = self.session.settings
        painter.setFont(self._label_font)
        for lane in lane_geometry:
            for geometry in lane.periods:
                period = geometry.period
                bar = QRectF(geometry.x, geometry.y, max(geometry.width, 1.0), geometry.bar_height)
                painter.fillRect(bar, self._bar_brush(bar, period))

                if period is self.selected_period:
                    painter.setPen(QPen(QColor(Colors.ACCENT_CYAN), 2))
                    painter.drawRect(bar)

                painter.setPen(QColor(period.text_color))
                painter.drawText(
                    QPointF(geometry.x, geometry.y + geometry.bar_height + settings.label_height - 2),
                    period.name
                )

    def _bar_brush(self, bar, period):
        color = QColor(period.color)
        if not (period.approximate_start or period.approximate_end):
            return QBrush(color)

        faded = QColor(color)
        faded.setAlpha(TimelineStyles.APPROXIMATE_FADE_ALPHA)
        gradient = QLinearGradient(bar.left(), 0, bar.right(), 0)
        fade = TimelineStyles.APPROXIMATE_FADE_RATIO
        gradient.setColorAt(0.0, faded if period.approximate_start else color)
        gradient.setColorAt(fade, color)
        gradient.setColorAt(1.0 - fade, color)
        gradient.setColorAt(1.0, faded if period.approximate_end else color)
        return QBrush(gradient)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def resizeEvent(self, event):
        if self.session is not None:
            self.session.set_viewport(self.width(), self.height())
        super().resizeEvent(event)

    def wheelEvent(self, event):
        """
        Zoom around the cursor.

        Args:
            event: QWheelEvent
        """
        if self.session is None:
            return
        notches = event.angleDelta().y() / self.WHEEL_NOTCH
        if notches:
            self._rescale(notches * self.session.controller.zoom_step, event.position().x())
        event.accept()

    def mousePressEvent(self, event):
        """
        Select the period under the cursor and start a drag pan.

        Args:
            event: QMouseEvent
        """
        if self.session is None or event.button() != Qt.LeftButton:
            super().mousePressEvent(event)
            return

        hit = self.session.period_at(event.x(), event.y())
        self.selected_period = hit.period if hit is not None else None
        self.period_selected.emit(hit)

        self._is_panning = True
        self._pan_start_pos = event.pos()
        self.setCursor(Qt.ClosedHandCursor)
        self.update()
        event.accept()

    def mouseMoveEvent(self, event):
        if self._is_panning and self._pan_start_pos is not None:
            delta = event.pos() - self._pan_start_pos
            self._pan_start_pos = event.pos()
            self.session.pan_horizontal(delta.x())
            self.session.pan_vertical(delta.y())
            self.update()
            event.accept()
            return
        if self.session is not None:
            date = self.session.pixel_to_date(event.x())
            if date is not None:
                self.hover_date_changed.emit(date.format())
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.LeftButton and self._is_panning:
            self._is_panning = False
            self._pan_start_pos = None
            self.setCursor(Qt.OpenHandCursor)
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def keyPressEvent(self, event):
        if self.session is None:
            super().keyPressEvent(event)
            return

        key = event.key()
        if key in (Qt.Key_Plus, Qt.Key_Equal):
            self.zoom_in()
        elif key == Qt.Key_Minus:
            self.zoom_out()
        elif key == Qt.Key_Left:
            self.session.pan_horizontal(self.KEY_PAN_STEP)
        elif key == Qt.Key_Right:
            self.session.pan_horizontal(-self.KEY_PAN_STEP)
        elif key == Qt.Key_Up:
            self.session.pan_vertical(self.KEY_PAN_STEP)
        elif key == Qt.Key_Down:
            self.session.pan_vertical(-self.KEY_PAN_STEP)
        else:
            super().keyPressEvent(event)
            return
        self.update()
        event.accept()

    def zoom_in(self):
        if self.session is not None:
            self._scale_updated(self.session.zoom_in())

    def zoom_out(self):
        if self.session is not None:
            self._scale_updated(self.session.zoom_out())

    def _rescale(self, delta, pivot_x):
        self._scale_updated(self.session.rescale(delta, pivot_x))

    def _scale_updated(self, changed):
        if changed:
            logger.debug(f"Canvas scale now {self.session.granularity.label}")
        self.scale_changed.emit(self.session.granularity.label)
        self.update()
