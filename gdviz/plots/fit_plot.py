"""
Fit view: observed points with the candidate regression line.
"""

from typing import Optional
import numpy as np
import pyqtgraph as pg
from PyQt6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QLabel
from PyQt6.QtGui import QFont

from .base_plot import BasePlot
from ..core.dataset import Dataset, X_MAX, X_MIN, Y_MAX, Y_MIN
from ..core.projection import LineSegment, ParameterPoint


SCATTER_COLOR = (37, 99, 235, 230)
LINE_COLOR = (220, 38, 38)


class FitPlot(BasePlot):
    """
    Scatter of the dataset plus one candidate line.

    The scatter is drawn once; update_line only replaces the two line
    endpoints so the view never re-lays out.
    """

    def __init__(self, data: Dataset, parent: Optional[QWidget] = None):
        super().__init__("Data and candidate line", parent)
        self._data = data
        self._setup_ui()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(2)

        header = QHBoxLayout()
        self._name_label = QLabel(self._title)
        self._name_label.setFont(QFont("JetBrains Mono", 11, QFont.Weight.Bold))
        header.addWidget(self._name_label)
        header.addStretch()
        self._info_label = QLabel("")
        self._info_label.setFont(QFont("JetBrains Mono", 9))
        header.addWidget(self._info_label)
        layout.addLayout(header)

        self._plot_widget = pg.PlotWidget()
        self._configure_plot()
        layout.addWidget(self._plot_widget)

    def _configure_plot(self):
        self._plot_widget.setBackground('w')
        self._plot_widget.showGrid(x=True, y=True, alpha=0.15)
        self._plot_widget.setLabel('bottom', 'x')
        self._plot_widget.setLabel('left', 'y')
        self._plot_widget.setXRange(X_MIN, X_MAX, padding=0)
        self._plot_widget.setYRange(Y_MIN, Y_MAX, padding=0)
        self._plot_widget.setMouseEnabled(x=False, y=False)
        self._plot_widget.hideButtons()

        self._scatter = pg.ScatterPlotItem(
            x=np.asarray(self._data.xs),
            y=np.asarray(self._data.ys),
            pen=None,
            brush=pg.mkBrush(*SCATTER_COLOR),
            size=6,
        )
        self._plot_widget.addItem(self._scatter)

        x0, x1 = self._data.x_range
        self._line = self._plot_widget.plot(
            [x0, x1], [0.0, 0.0],
            pen=pg.mkPen(color=LINE_COLOR, width=2),
        )

    def update_line(self, segment: LineSegment) -> None:
        self._line.setData(list(segment.xs), list(segment.ys))

    def update_point(self, point: ParameterPoint) -> None:
        self._info_label.setText(f"y = {point.w:+.3f}·x {point.b:+.3f}")
