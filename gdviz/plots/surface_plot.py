"""
Surface view: log-MSE heatmap over (slope, intercept) with a movable marker.
"""

from typing import List, Optional
import numpy as np
import pyqtgraph as pg
from PyQt6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QLabel
from PyQt6.QtGui import QFont
from PyQt6.QtCore import QRectF

from gdviz.logging import get_logger
logger = get_logger(__name__)

from .base_plot import BasePlot
from ..core.projection import LineSegment, ParameterPoint
from ..core.surface import LossSurface


CONTOUR_LEVELS = 24
MARKER_COLOR = (220, 38, 38)


class SurfacePlot(BasePlot):
    """
    Static loss-surface image plus a single tracked point.

    The image, levels and contours are built once; update_point only
    moves the marker.
    """

    def __init__(self, surface: LossSurface, parent: Optional[QWidget] = None):
        super().__init__("Loss surface  log10(MSE)", parent)
        self._surface = surface
        self._contours: List[pg.IsocurveItem] = []
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
        s = self._surface
        slope_min, slope_max = float(s.slope_axis[0]), float(s.slope_axis[-1])
        icpt_min, icpt_max = float(s.intercept_axis[0]), float(s.intercept_axis[-1])

        self._plot_widget.setBackground('w')
        self._plot_widget.setLabel('bottom', 'slope (w)')
        self._plot_widget.setLabel('left', 'intercept (b)')
        self._plot_widget.setMouseEnabled(x=False, y=False)
        self._plot_widget.hideButtons()

        # ImageItem indexes [x, y]; the grid is [intercept_row, slope_col]
        image_data = np.ascontiguousarray(s.z_log.T)
        self._image = pg.ImageItem(image_data)
        cmap = pg.colormap.get('viridis')
        self._image.setLookupTable(cmap.getLookupTable(nPts=256))
        self._image.setLevels((s.zmin, s.zmax))
        self._image.setRect(self._pixel_rect(slope_min, slope_max, len(s.slope_axis),
                                             icpt_min, icpt_max, len(s.intercept_axis)))
        self._plot_widget.addItem(self._image)

        for level in np.linspace(s.zmin, s.zmax, CONTOUR_LEVELS):
            iso = pg.IsocurveItem(data=image_data, level=float(level),
                                  pen=pg.mkPen((255, 255, 255, 90), width=1))
            iso.setParentItem(self._image)
            self._contours.append(iso)

        self._marker = pg.ScatterPlotItem(
            x=[s.point.w], y=[s.point.b],
            pen=pg.mkPen('w', width=1),
            brush=pg.mkBrush(*MARKER_COLOR),
            size=10,
        )
        self._marker.setZValue(10)
        self._plot_widget.addItem(self._marker)

        self._plot_widget.setXRange(slope_min, slope_max, padding=0)
        self._plot_widget.setYRange(icpt_min, icpt_max, padding=0)

        logger.debug(f"Surface view built: levels=({s.zmin:.3f}, {s.zmax:.3f})")

    @staticmethod
    def _pixel_rect(x_min, x_max, nx, y_min, y_max, ny) -> QRectF:
        """Rect that centers each image pixel on its grid coordinate."""
        dx = (x_max - x_min) / max(nx - 1, 1)
        dy = (y_max - y_min) / max(ny - 1, 1)
        return QRectF(x_min - dx / 2, y_min - dy / 2, dx * nx, dy * ny)

    @property
    def marker_position(self) -> tuple:
        x, y = self._marker.getData()
        return float(x[0]), float(y[0])

    def update_line(self, segment: LineSegment) -> None:
        pass

    def update_point(self, point: ParameterPoint) -> None:
        self._marker.setData(x=[point.w], y=[point.b])
        self._info_label.setText(f"({point.w:.3f}, {point.b:.3f})")
