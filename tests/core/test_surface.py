"""Loss-surface sampler: grid layout, minimum location, color-range clipping."""

import math
import tracemalloc

import numpy as np
import pytest

from gdviz.core.loss import mse
from gdviz.core.projection import ParameterPoint
from gdviz.core.surface import (
    DEFAULT_PERCENTILE,
    SurfaceConfig,
    clamp_percentile,
    quantile,
    sample_loss_surface,
)


@pytest.fixture
def surface(line_dataset):
    return sample_loss_surface(line_dataset)


def test_axes_and_shape(surface):
    assert surface.shape == (100, 100)
    assert surface.slope_axis[0] == -3.0
    assert surface.slope_axis[-1] == 3.0
    assert surface.intercept_axis[0] == 0.0
    assert surface.intercept_axis[-1] == 10.0


def test_rows_are_intercepts_and_columns_slopes(surface, line_dataset):
    row, col = 17, 63
    w = surface.slope_axis[col]
    b = surface.intercept_axis[row]

    assert surface.z[row, col] == pytest.approx(mse(w, b, line_dataset))


def test_log_transform_with_floor(line_dataset):
    s = sample_loss_surface(line_dataset)

    np.testing.assert_allclose(s.z_log, np.log10(np.maximum(1e-8, s.z)))
    assert s.z_log.min() >= -8.0


def test_minimum_near_true_parameters(surface):
    row, col = surface.nearest_index(-0.8, 10.0)
    window = surface.z[max(0, row - 1):row + 2, max(0, col - 1):col + 2]

    assert window.min() == pytest.approx(surface.z.min())


def test_color_bounds_follow_sorted_ranks(surface):
    ordered = np.sort(surface.z_log, axis=None)
    idx = math.floor(0.9 * (ordered.size - 1))

    assert surface.zmin == ordered[0]
    assert surface.zmin == surface.z_log.min()
    assert surface.zmax == ordered[idx]
    assert surface.zmin <= surface.zmax


def test_percentile_is_configurable(line_dataset):
    s = sample_loss_surface(line_dataset, SurfaceConfig(percentile=0.5))
    ordered = np.sort(s.z_log, axis=None)

    assert s.zmax == ordered[math.floor(0.5 * (ordered.size - 1))]


def test_custom_resolution(line_dataset):
    s = sample_loss_surface(line_dataset, SurfaceConfig(slope_samples=7, intercept_samples=5))

    assert s.shape == (5, 7)


def test_grids_are_immutable(surface):
    with pytest.raises(ValueError):
        surface.z_log[0, 0] = 0.0


def test_point_defaults_to_origin_and_moves(surface):
    assert surface.point == ParameterPoint(0.0, 0.0)

    moved = surface.with_point(ParameterPoint(-1.0, 4.0))

    assert moved.point == ParameterPoint(-1.0, 4.0)
    assert moved.z_log is surface.z_log
    assert surface.point == ParameterPoint(0.0, 0.0)


@pytest.mark.parametrize("p,expected", [(0.0, 1.0), (0.5, 3.0), (0.9, 4.0), (1.0, 5.0), (2.0, 5.0), (-1.0, 1.0)])
def test_quantile_index_clamped(p, expected):
    assert quantile(np.array([1.0, 2.0, 3.0, 4.0, 5.0]), p) == expected


@pytest.mark.parametrize("value,expected", [
    (0.9, 0.9),
    ("0.25", 0.25),
    (-0.5, 0.0),
    (7.0, 1.0),
    (float("inf"), 1.0),
    (float("nan"), DEFAULT_PERCENTILE),
    (None, DEFAULT_PERCENTILE),
    ("abc", DEFAULT_PERCENTILE),
])
def test_clamp_percentile(value, expected):
    assert clamp_percentile(value) == expected


def test_nan_percentile_uses_default_bound(surface, line_dataset):
    s = sample_loss_surface(line_dataset, SurfaceConfig(percentile=float("nan")))

    assert s.zmax == surface.zmax


def test_out_of_range_percentile_clamps_to_extremes(line_dataset):
    high = sample_loss_surface(line_dataset, SurfaceConfig(percentile=3.0))
    low = sample_loss_surface(line_dataset, SurfaceConfig(percentile=-3.0))

    assert high.zmax == high.z_log.max()
    assert low.zmax == low.zmin


def test_large_dataset_memory_stays_bounded(dataset_factory):
    data = dataset_factory(n=2000, seed=9)

    tracemalloc.start()
    try:
        s = sample_loss_surface(data)
        _, peak = tracemalloc.get_traced_memory()
    finally:
        tracemalloc.stop()

    # A full (rows, cols, n) residual cube alone would be 160 MB here
    assert peak < 50e6
    row, col = 42, 17
    assert s.z[row, col] == pytest.approx(mse(s.slope_axis[col], s.intercept_axis[row], data))
