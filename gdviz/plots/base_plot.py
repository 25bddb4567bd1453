"""
Abstract base class for projection-driven plot widgets.
"""

from typing import Optional
from abc import ABC, ABCMeta, abstractmethod
from PyQt6.QtWidgets import QWidget

from ..core.projection import LineSegment, ParameterPoint


class _PlotMeta(type(QWidget), ABCMeta):
    """Combined metaclass so QWidget subclasses can declare abstract methods."""


class BasePlot(QWidget, ABC, metaclass=_PlotMeta):
    """
    Abstract base class for plot widgets.

    Both views receive every projection; each acts on the payload it
    renders and ignores the other.
    """

    def __init__(self, title: str, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._title = title

    @property
    def title(self) -> str:
        """Caption shown above the plot."""
        return self._title

    @abstractmethod
    def update_line(self, segment: LineSegment) -> None:
        """Redraw the candidate line."""
        pass

    @abstractmethod
    def update_point(self, point: ParameterPoint) -> None:
        """Move the tracked parameter marker."""
        pass
