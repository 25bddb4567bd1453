"""
Projection of engine state into renderer payloads.

The synchronizer is the only place parameter state crosses into
presentation. Renderers implement ProjectionSink; none are required.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol, Tuple, runtime_checkable

from gdviz.logging import get_logger
logger = get_logger(__name__)

from .dataset import Dataset


@dataclass(frozen=True)
class Parameters:
    """Snapshot of the candidate model."""

    w: float = 0.0
    b: float = 0.0

    def predict(self, x: float) -> float:
        return self.w * x + self.b


@dataclass(frozen=True)
class LineSegment:
    """Two-point candidate line for the fit view."""

    start: Tuple[float, float]
    end: Tuple[float, float]

    @property
    def xs(self) -> Tuple[float, float]:
        return self.start[0], self.end[0]

    @property
    def ys(self) -> Tuple[float, float]:
        return self.start[1], self.end[1]


@dataclass(frozen=True)
class ParameterPoint:
    """Marker coordinate for the surface view (slope, intercept)."""

    w: float = 0.0
    b: float = 0.0


@runtime_checkable
class ProjectionSink(Protocol):
    """Renderer capability consumed by ViewSynchronizer."""

    def update_line(self, segment: LineSegment) -> None: ...

    def update_point(self, point: ParameterPoint) -> None: ...


class ViewSynchronizer:
    """
    Emit the fit-view line and surface-view marker for a parameter snapshot.

    The line spans the dataset's x-range, fixed at construction.
    """

    def __init__(self, data: Dataset, sinks: Iterable[ProjectionSink] = ()):
        self._x_min, self._x_max = data.x_range
        self._sinks: List[ProjectionSink] = list(sinks)
        self._last_segment: Optional[LineSegment] = None
        self._last_point: Optional[ParameterPoint] = None

    @property
    def sinks(self) -> Tuple[ProjectionSink, ...]:
        return tuple(self._sinks)

    @property
    def last_segment(self) -> Optional[LineSegment]:
        return self._last_segment

    @property
    def last_point(self) -> Optional[ParameterPoint]:
        return self._last_point

    def attach(self, sink: ProjectionSink) -> None:
        if sink not in self._sinks:
            self._sinks.append(sink)
            logger.debug(f"Attached projection sink {type(sink).__name__}")

    def detach(self, sink: ProjectionSink) -> None:
        if sink in self._sinks:
            self._sinks.remove(sink)
            logger.debug(f"Detached projection sink {type(sink).__name__}")

    def project(self, params: Parameters) -> Tuple[LineSegment, ParameterPoint]:
        """Compute both payloads without emitting them."""
        segment = LineSegment(
            start=(self._x_min, params.predict(self._x_min)),
            end=(self._x_max, params.predict(self._x_max)),
        )
        return segment, ParameterPoint(params.w, params.b)

    def sync(self, params: Parameters) -> Tuple[LineSegment, ParameterPoint]:
        """Project params and push the payloads to every attached sink."""
        segment, point = self.project(params)
        self._last_segment = segment
        self._last_point = point
        for sink in self._sinks:
            sink.update_line(segment)
            sink.update_point(point)
        return segment, point
