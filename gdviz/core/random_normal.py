"""Standard-normal sampling via the Box-Muller transform."""

import math
from typing import Callable, Optional

import numpy as np


UniformSource = Callable[[], float]


def randn(uniform: UniformSource) -> float:
    """
    Draw one standard-normal sample from two uniform(0, 1) draws.

    Zero draws are rejected and redrawn so the logarithm stays finite.
    """
    u = 0.0
    v = 0.0
    while u == 0.0:
        u = uniform()
    while v == 0.0:
        v = uniform()
    return math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)


class RandomNormal:
    """
    Callable standard-normal generator.

    The uniform source defaults to a numpy Generator so a seed makes
    datasets reproducible. Any zero-argument callable returning floats
    in [0, 1) can be injected instead.
    """

    def __init__(self, uniform: Optional[UniformSource] = None, seed: Optional[int] = None):
        if uniform is None:
            rng = np.random.default_rng(seed)
            uniform = rng.random
        self._uniform = uniform

    def sample(self) -> float:
        """Return one standard-normal sample."""
        return randn(self._uniform)

    def __call__(self) -> float:
        return self.sample()
