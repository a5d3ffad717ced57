"""Centralized style definitions for the timeline viewer."""


class Colors:
    # Base Colors
    BG_PRIMARY = "#0F172A"      # Canvas background
    BG_PANELS = "#1E293B"       # Side panel background
    BG_AXIS = "#0B1220"         # Axis strip

    # Text Colors
    TEXT_PRIMARY = "#E2E8F0"    # Primary text
    TEXT_SECONDARY = "#94A3B8"  # Axis labels
    TEXT_MUTED = "#64748B"      # Hints

    # Accent Colors
    ACCENT_BLUE = "#3B82F6"     # Default period colour
    ACCENT_CYAN = "#00FFFF"     # Selection outline

    # Grid and lane lines
    GRID_LINE = "#334155"
    LANE_BORDER = "#475569"


class TimelineStyles:
    """Widget style sheets and drawing constants."""

    # Lane background alpha (0-255) applied over the lane colour
    LANE_ALPHA = 90

    # Alpha of the faded end of an approximate start/end
    APPROXIMATE_FADE_ALPHA = 0

    # Share of the bar width used for an approximate fade
    APPROXIMATE_FADE_RATIO = 0.25

    AXIS_FONT_POINT_SIZE = 9
    LABEL_FONT_POINT_SIZE = 9

    PANEL_STYLE = f"""
        QWidget {{
            background-color: {Colors.BG_PANELS};
            color: {Colors.TEXT_PRIMARY};
            font-family: 'Segoe UI', sans-serif;
            font-size: 11px;
        }}
        QListWidget {{
            border: 1px solid {Colors.GRID_LINE};
            border-radius: 4px;
        }}
        QPushButton {{
            background-color: {Colors.ACCENT_BLUE};
            color: #FFFFFF;
            border: none;
            border-radius: 6px;
            padding: 6px 12px;
            font-weight: 600;
            min-width: 32px;
        }}
        QPushButton:hover {{
            background-color: #2563EB;
        }}
    """

    INFO_PANEL_STYLE = f"""
        QLabel {{
            background-color: {Colors.BG_PANELS};
            color: {Colors.TEXT_PRIMARY};
            border: 1px solid {Colors.GRID_LINE};
            border-radius: 4px;
            padding: 8px;
        }}
    """
