"""
Loss-surface sampling over a (slope, intercept) grid.

The raw MSE grid is log10-compressed and its color range clipped at an
upper percentile so resolution concentrates near the minimum.
"""

import math
from dataclasses import dataclass, field, replace
from typing import Tuple

import numpy as np

from gdviz.logging import get_logger
logger = get_logger(__name__)

from .dataset import Dataset
from .projection import ParameterPoint


DEFAULT_PERCENTILE = 0.9


@dataclass(frozen=True)
class SurfaceConfig:
    """Axis ranges, resolution and color-range tuning for the sampler."""

    slope_min: float = -3.0
    slope_max: float = 3.0
    slope_samples: int = 100
    intercept_min: float = 0.0
    intercept_max: float = 10.0
    intercept_samples: int = 100
    eps: float = 1e-8
    percentile: float = DEFAULT_PERCENTILE


@dataclass(frozen=True, eq=False)
class LossSurface:
    """
    Sampled loss surface, ready for rendering.

    Grids are indexed [intercept_row, slope_col].
    """

    slope_axis: np.ndarray
    intercept_axis: np.ndarray
    z: np.ndarray
    z_log: np.ndarray
    zmin: float
    zmax: float
    point: ParameterPoint = field(default_factory=ParameterPoint)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.z.shape

    def with_point(self, point: ParameterPoint) -> "LossSurface":
        """Copy with the tracked marker moved; grids are shared."""
        return replace(self, point=point)

    def nearest_index(self, w: float, b: float) -> Tuple[int, int]:
        """(row, col) of the grid cell closest to slope w and intercept b."""
        row = int(np.argmin(np.abs(self.intercept_axis - b)))
        col = int(np.argmin(np.abs(self.slope_axis - w)))
        return row, col


def quantile(sorted_values: np.ndarray, p: float) -> float:
    """Value at rank floor(p * (len - 1)) of an ascending array, index clamped."""
    last = len(sorted_values) - 1
    idx = min(last, max(0, int(math.floor(p * last))))
    return float(sorted_values[idx])


def clamp_percentile(value) -> float:
    """
    Coerce a color-range percentile into [0, 1].

    Unparsable input and NaN fall back to DEFAULT_PERCENTILE.
    """
    try:
        p = float(value)
    except (TypeError, ValueError):
        return DEFAULT_PERCENTILE
    if math.isnan(p):
        return DEFAULT_PERCENTILE
    return min(1.0, max(0.0, p))


def _readonly(arr: np.ndarray) -> np.ndarray:
    arr.flags.writeable = False
    return arr


def sample_loss_surface(data: Dataset, config: SurfaceConfig = SurfaceConfig()) -> LossSurface:
    """
    Evaluate MSE on every (intercept, slope) grid cell for a dataset.

    Args:
        data: Observations to fit
        config: Grid ranges, eps floor for the log, and the upper
            color-range percentile

    Returns:
        LossSurface with raw and log grids, color bounds, and the
        tracked point at (0, 0)
    """
    slopes = np.linspace(config.slope_min, config.slope_max, config.slope_samples)
    intercepts = np.linspace(config.intercept_min, config.intercept_max, config.intercept_samples)

    # One intercept row at a time keeps the temporaries at (cols, n)
    z = np.empty((intercepts.size, slopes.size))
    slope_x = slopes[:, None] * data.xs[None, :]
    for row, b in enumerate(intercepts):
        resid = slope_x + (b - data.ys)
        z[row] = np.mean(resid ** 2, axis=1)

    z_log = np.log10(np.maximum(config.eps, z))
    ordered = np.sort(z_log, axis=None)
    zmin = quantile(ordered, 0.0)
    zmax = quantile(ordered, clamp_percentile(config.percentile))

    logger.debug(
        f"Sampled loss surface {z.shape} over n={len(data)}: "
        f"zmin={zmin:.4f}, zmax={zmax:.4f}"
    )

    return LossSurface(
        slope_axis=_readonly(slopes),
        intercept_axis=_readonly(intercepts),
        z=_readonly(z),
        z_log=_readonly(z_log),
        zmin=zmin,
        zmax=zmax,
    )
