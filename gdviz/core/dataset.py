"""Observations and the synthetic data generator."""

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Optional, Sequence, Tuple, Union

import numpy as np

from gdviz.logging import get_logger
logger = get_logger(__name__)

from .random_normal import RandomNormal


X_MIN = 0.0
X_MAX = 10.0
Y_MIN = 0.0
Y_MAX = 10.0

DEFAULT_SAMPLES = 120


class InvalidDataset(ValueError):
    """Raised when a dataset has no observations."""


@dataclass(frozen=True)
class Observation:
    """One observed (x, y) point."""

    x: float
    y: float


@dataclass(frozen=True)
class GroundTruth:
    """Linear model used only to synthesize observations."""

    slope: float = -0.8
    intercept: float = 10.0
    noise_std: float = 1.2


class Dataset:
    """
    Immutable, ordered collection of observations.

    Coordinates are held as read-only float arrays so the loss
    functions can work on them without copying.
    """

    def __init__(self, points: Iterable[Union[Observation, Tuple[float, float]]]):
        xs = []
        ys = []
        for p in points:
            if isinstance(p, Observation):
                xs.append(float(p.x))
                ys.append(float(p.y))
            else:
                x, y = p
                xs.append(float(x))
                ys.append(float(y))

        if not xs:
            raise InvalidDataset("Dataset must contain at least one observation")

        self._xs = np.asarray(xs, dtype=np.float64)
        self._ys = np.asarray(ys, dtype=np.float64)
        self._xs.flags.writeable = False
        self._ys.flags.writeable = False

    @classmethod
    def from_arrays(cls, xs: Sequence[float], ys: Sequence[float]) -> "Dataset":
        """Build a dataset from parallel x and y sequences."""
        if len(xs) != len(ys):
            raise ValueError(f"x/y length mismatch: {len(xs)} != {len(ys)}")
        return cls(zip(xs, ys))

    @property
    def xs(self) -> np.ndarray:
        return self._xs

    @property
    def ys(self) -> np.ndarray:
        return self._ys

    @property
    def x_range(self) -> Tuple[float, float]:
        """(min x, max x) of the observations."""
        return float(self._xs.min()), float(self._xs.max())

    def __len__(self) -> int:
        return len(self._xs)

    def __iter__(self) -> Iterator[Observation]:
        for x, y in zip(self._xs, self._ys):
            yield Observation(float(x), float(y))

    def __getitem__(self, index: int) -> Observation:
        return Observation(float(self._xs[index]), float(self._ys[index]))

    def __repr__(self) -> str:
        return f"Dataset(n={len(self)}, x_range={self.x_range})"


def evenly_spaced_x(n: int) -> np.ndarray:
    """x_i = 10 * i / (n - 1); a single sample sits at x = 0."""
    if n <= 0:
        raise InvalidDataset(f"Sample count must be positive, got {n}")
    if n == 1:
        return np.array([X_MIN])
    return X_MIN + (X_MAX - X_MIN) * np.arange(n) / (n - 1)


def synthesize(
    n: int = DEFAULT_SAMPLES,
    slope: float = -0.8,
    intercept: float = 10.0,
    noise_std: float = 1.2,
    normal: Optional[Callable[[], float]] = None,
    truth: Optional[GroundTruth] = None,
) -> Dataset:
    """
    Generate n noisy observations of a linear trend.

    Each y is slope * x + intercept plus noise_std times one normal
    sample, clamped to the display range [0, 10].

    Args:
        n: Number of observations (> 0)
        slope, intercept, noise_std: Ground-truth model (ignored if truth given)
        normal: Standard-normal source; defaults to an unseeded RandomNormal
        truth: Optional GroundTruth record overriding the scalar arguments

    Returns:
        Dataset with x ascending over [0, 10]
    """
    if truth is None:
        truth = GroundTruth(slope=slope, intercept=intercept, noise_std=noise_std)
    if normal is None:
        normal = RandomNormal()

    xs = evenly_spaced_x(n)
    ys = []
    for x in xs:
        y_true = truth.slope * x + truth.intercept
        y = y_true + truth.noise_std * normal()
        ys.append(min(Y_MAX, max(Y_MIN, y)))

    logger.debug(
        f"Synthesized {n} observations: slope={truth.slope}, "
        f"intercept={truth.intercept}, noise_std={truth.noise_std}"
    )
    return Dataset.from_arrays(xs, ys)
