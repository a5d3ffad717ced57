"""
Timeline Window - Main window hosting the canvas, info panel and lane toggles.
"""

import logging

from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import (
    QFileDialog, QHBoxLayout, QLabel, QListWidget, QListWidgetItem, QMainWindow,
    QPushButton, QVBoxLayout, QWidget
)

from timeline_viewer.data.timeline_loader import TimelineLoader
from timeline_viewer.styles import Colors, TimelineStyles
from timeline_viewer.timeline_canvas import TimelineCanvas
from timeline_viewer.timeline_session import TimelineSession
from timeline_viewer.utils.error_handler import ErrorHandler
from timeline_viewer.utils.errors import TimelineError

logger = logging.getLogger(__name__)


class TimelineWindow(QMainWindow):
    """
    Main window for one timeline document.
    """

    PLACEHOLDER_TEXT = "Select Time Period"
    HELP_TEXT = (
        "Wheel: zoom around the cursor<br>"
        "Drag: pan the axis and lanes<br>"
        "+ / −: zoom in or out<br>"
        "Arrow keys: pan"
    )

    def __init__(self, config=None, parent=None):
        """
        Args:
            config: ViewerConfig shared by every session this window opens
            parent: Parent widget
        """
        super().__init__(parent)
        self.config = config
        self.session = None
        self.loader = TimelineLoader()
        self.error_handler = ErrorHandler(self)

        self.setWindowTitle("Timeline Viewer")
        self.resize(1200, 700)
        self._build_ui()
        self._show_scale(None)

    def _build_ui(self):
        central = QWidget(self)
        layout = QHBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)

        self.canvas = TimelineCanvas(parent=central)
        self.canvas.period_selected.connect(self._show_period)
        self.canvas.scale_changed.connect(self._show_scale)
        self.canvas.hover_date_changed.connect(self.statusBar().showMessage)
        layout.addWidget(self.canvas, 1)

        panel = QWidget(central)
        panel.setStyleSheet(TimelineStyles.PANEL_STYLE)
        panel.setFixedWidth(260)
        panel_layout = QVBoxLayout(panel)

        self.info_label = QLabel(self.PLACEHOLDER_TEXT, panel)
        self.info_label.setWordWrap(True)
        self.info_label.setAlignment(Qt.AlignTop | Qt.AlignLeft)
        self.info_label.setStyleSheet(TimelineStyles.INFO_PANEL_STYLE)
        self.info_label.setMinimumHeight(160)
        panel_layout.addWidget(self.info_label)

        zoom_row = QHBoxLayout()
        self.zoom_in_button = QPushButton("+", panel)
        self.zoom_in_button.setToolTip("Zoom in (Keyboard: +)")
        self.zoom_in_button.clicked.connect(self.canvas.zoom_in)
        self.zoom_out_button = QPushButton("−", panel)
        self.zoom_out_button.setToolTip("Zoom out (Keyboard: -)")
        self.zoom_out_button.clicked.connect(self.canvas.zoom_out)
        self.scale_label = QLabel("", panel)
        zoom_row.addWidget(self.zoom_in_button)
        zoom_row.addWidget(self.zoom_out_button)
        zoom_row.addWidget(self.scale_label, 1)
        panel_layout.addLayout(zoom_row)

        self.help_label = QLabel(self.HELP_TEXT, panel)
        self.help_label.setStyleSheet(f"color: {Colors.TEXT_MUTED};")
        panel_layout.addWidget(self.help_label)

        panel_layout.addWidget(QLabel("Lanes", panel))
        self.lane_list = QListWidget(panel)
        self.lane_list.itemChanged.connect(self._toggle_lane)
        panel_layout.addWidget(self.lane_list, 1)

        open_button = QPushButton("Open…", panel)
        open_button.clicked.connect(self._choose_document)
        panel_layout.addWidget(open_button)

        layout.addWidget(panel)
        self.setCentralWidget(central)

    def open_document(self, path) -> bool:
        """
        Load a timeline document and show it.

        Args:
            path: Path to the JSON document

        Returns:
            bool: True if the document was loaded
        """
        try:
            document = self.loader.load(path)
        except TimelineError as e:
            self.error_handler.handle_error(e, "loading timeline document")
            return False

        self.set_session(TimelineSession(document, self.config))
        return True

    def set_session(self, session):
        self.session = session
        self.setWindowTitle(f"Timeline Viewer - {session.title}" if session.title else "Timeline Viewer")
        self.canvas.set_session(session)
        self._populate_lanes()
        self._show_scale(session.granularity.label)
        self._show_period(None)

    def _populate_lanes(self):
        self.lane_list.blockSignals(True)
        self.lane_list.clear()
        for lane in self.session.lanes:
            item = QListWidgetItem(lane.name)
            item.setFlags(item.flags() | Qt.ItemIsUserCheckable)
            item.setCheckState(Qt.Unchecked if lane.hidden else Qt.Checked)
            self.lane_list.addItem(item)
        self.lane_list.blockSignals(False)

    def _toggle_lane(self, item):
        if self.session is None:
            return
        self.session.set_lane_hidden(item.text(), item.checkState() != Qt.Checked)
        self.canvas.update()

    def _show_scale(self, granularity_name):
        if self.session is None:
            self.scale_label.setText("")
            self.zoom_in_button.setEnabled(False)
            self.zoom_out_button.setEnabled(False)
            return
        self.zoom_in_button.setEnabled(self.session.can_zoom_in())
        self.zoom_out_button.setEnabled(self.session.can_zoom_out())
        self.scale_label.setText(f"{granularity_name} ({self.session.unit_pixel_width:.0f}px)")

    def _show_period(self, geometry):
        if geometry is None:
            self.info_label.setText(self.PLACEHOLDER_TEXT)
            return
        period = geometry.period
        start = ("c. " if period.approximate_start else "") + period.start_date.format()
        end = ("c. " if period.approximate_end else "") + period.end_date.format()
        text = f"<b>{period.name}</b><br>{start} to {end}"
        if period.description:
            text += f"<br><br>{period.description}"
        self.info_label.setText(text)

    def _choose_document(self):
        path, _ = QFileDialog.getOpenFileName(self, "Open Timeline", "", "Timeline JSON (*.json)")
        if path:
            self.open_document(path)
