"""Mean-squared-error loss for a line fit and its parameter gradients."""

from typing import Iterable, Tuple, Union

import numpy as np

from .dataset import Dataset, InvalidDataset, Observation


DataLike = Union[Dataset, Iterable[Union[Observation, Tuple[float, float]]]]


def _as_dataset(data: DataLike) -> Dataset:
    if isinstance(data, Dataset):
        return data
    return Dataset(data)


def residuals(w: float, b: float, data: DataLike) -> np.ndarray:
    """Prediction minus observation for every point: w*x + b - y."""
    ds = _as_dataset(data)
    return w * ds.xs + b - ds.ys


def mse(w: float, b: float, data: DataLike) -> float:
    """(1/N) * sum((w*x + b - y)^2)."""
    r = residuals(w, b, data)
    return float(np.mean(r * r))


def grad_w(w: float, b: float, data: DataLike) -> float:
    """(2/N) * sum((w*x + b - y) * x)."""
    ds = _as_dataset(data)
    r = w * ds.xs + b - ds.ys
    return float(2.0 * np.mean(r * ds.xs))


def grad_b(w: float, b: float, data: DataLike) -> float:
    """(2/N) * sum(w*x + b - y)."""
    r = residuals(w, b, data)
    return float(2.0 * np.mean(r))


def gradients(w: float, b: float, data: DataLike) -> Tuple[float, float]:
    """Both gradients from a single residual pass."""
    ds = _as_dataset(data)
    r = w * ds.xs + b - ds.ys
    return float(2.0 * np.mean(r * ds.xs)), float(2.0 * np.mean(r))


__all__ = [
    'InvalidDataset',
    'residuals',
    'mse',
    'grad_w',
    'grad_b',
    'gradients',
]
