"""
Text Metrics - Label width measurement for row packing.

Row packing reserves ``max(bar width, label width)`` for each period, so the
packer needs a way to measure label text. The fixed-width measurer estimates
from character count and works without a display; the Qt measurer uses the
real font metrics of the canvas and needs a QGuiApplication.
"""


class FixedWidthTextMeasurer:
    """
    Estimates label widths from an average character width.
    """

    def __init__(self, char_width: float = 8.0, padding: float = 10.0):
        """
        Args:
            char_width: Average character width in pixels
            padding: Extra space reserved after each label
        """
        self.char_width = char_width
        self.padding = padding

    def width(self, text: str) -> float:
        if not text:
            return 0.0
        return len(text) * self.char_width + self.padding


class QtTextMeasurer:
    """
    Measures label widths with QFontMetricsF for the font the canvas draws with.
    """

    def __init__(self, font=None, padding: float = 10.0):
        from PyQt5.QtGui import QFont, QFontMetricsF

        self.font = font if font is not None else QFont()
        self.padding = padding
        self._metrics = QFontMetricsF(self.font)

    def width(self, text: str) -> float:
        if not text:
            return 0.0
        return self._metrics.horizontalAdvance(text) + self.padding
