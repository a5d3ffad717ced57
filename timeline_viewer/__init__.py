"""
Timeline Viewer

Zoomable, pannable calendar timeline. The layout core (calendar arithmetic,
grid generation, scale transitions, date mapping and lane packing) runs
without Qt; the canvas and window modules draw it with PyQt5.
"""

__version__ = "1.0.0"
__author__ = "Timeline Viewer Development Team"

from .timeline_session import TimelineSession

__all__ = ['TimelineSession']
