"""
Full-batch gradient descent on a line fit.

The engine is the sole owner and mutator of the candidate (w, b).
Learning rates are supplied per step and never stored.
"""

import math
from enum import Enum, auto
from typing import Any

from gdviz.logging import get_logger
logger = get_logger(__name__)

from .dataset import Dataset
from .loss import gradients, mse
from .projection import Parameters
from .settings import DEFAULT_LEARNING_RATE, MAX_LEARNING_RATE, MIN_LEARNING_RATE


class EngineState(Enum):
    """Lifecycle of the descent animation."""
    IDLE = auto()       # Parameters at reset value, not stepping
    RUNNING = auto()    # Stepping every frame
    PAUSED = auto()     # Parameters retained, not stepping


def clamp_learning_rate(value: Any) -> float:
    """
    Coerce raw control input into [1e-4, 1].

    Numbers outside the range snap to the nearest bound. Anything that
    does not parse as a number (None, garbage text, NaN) falls back to
    the default rate.
    """
    try:
        lr = float(value)
    except (TypeError, ValueError):
        logger.debug(f"Unparsable learning rate {value!r}, using {DEFAULT_LEARNING_RATE}")
        return DEFAULT_LEARNING_RATE
    if math.isnan(lr):
        return DEFAULT_LEARNING_RATE
    return max(MIN_LEARNING_RATE, min(MAX_LEARNING_RATE, lr))


def status_text(state: EngineState) -> str:
    """Status line shown next to the controls."""
    if state is EngineState.RUNNING:
        return "Running…"
    if state is EngineState.PAUSED:
        return "Paused"
    return ""


class GradientDescentEngine:
    """
    Owns (w, b) and advances it one full-batch step at a time.

    Transitions:
        start(): IDLE/PAUSED -> RUNNING
        pause(): RUNNING -> PAUSED
        reset(): any -> IDLE, (w, b) = (0, 0)
    """

    RESET_W = 0.0
    RESET_B = 0.0

    def __init__(self, data: Dataset):
        self._data = data
        self._w = self.RESET_W
        self._b = self.RESET_B
        self._state = EngineState.IDLE
        self._step_count = 0

    @property
    def data(self) -> Dataset:
        return self._data

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is EngineState.RUNNING

    @property
    def params(self) -> Parameters:
        """Read-only snapshot of the current candidate model."""
        return Parameters(self._w, self._b)

    @property
    def step_count(self) -> int:
        """Steps taken since the last reset."""
        return self._step_count

    @property
    def loss(self) -> float:
        """MSE at the current parameters."""
        return mse(self._w, self._b, self._data)

    def start(self) -> EngineState:
        if self._state is not EngineState.RUNNING:
            logger.debug(f"Engine {self._state.name} -> RUNNING")
            self._state = EngineState.RUNNING
        return self._state

    def pause(self) -> EngineState:
        if self._state is EngineState.RUNNING:
            logger.debug(f"Engine paused at step {self._step_count}: w={self._w:.4f}, b={self._b:.4f}")
            self._state = EngineState.PAUSED
        return self._state

    def toggle(self) -> EngineState:
        """Start/pause on a single control."""
        if self._state is EngineState.RUNNING:
            return self.pause()
        return self.start()

    def reset(self) -> Parameters:
        logger.debug(f"Engine reset from {self._state.name} after {self._step_count} steps")
        self._state = EngineState.IDLE
        self._w = self.RESET_W
        self._b = self.RESET_B
        self._step_count = 0
        return self.params

    def step(self, learning_rate: Any) -> bool:
        """
        Take one descent step if running.

        Returns:
            True if the parameters advanced, False if the engine is not RUNNING
        """
        if self._state is not EngineState.RUNNING:
            return False
        self.advance(learning_rate)
        return True

    def advance(self, learning_rate: Any) -> Parameters:
        """Unconditional descent step; both parameters update together."""
        lr = clamp_learning_rate(learning_rate)
        dw, db = gradients(self._w, self._b, self._data)
        self._w, self._b = self._w - lr * dw, self._b - lr * db
        self._step_count += 1
        return self.params
