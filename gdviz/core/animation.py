"""Frame-paced descent loop."""

from typing import Any, Callable, Optional

from gdviz.logging import get_logger
logger = get_logger(__name__)

from .engine import EngineState, GradientDescentEngine
from .projection import ViewSynchronizer


LearningRateSource = Callable[[], Any]


class FrameLoop:
    """
    One engine step and one view sync per frame.

    The running check is the first thing every frame does, so a pause or
    reset issued between frames stops the next step from happening. The
    GUI drives tick() from a timer; run() is the headless equivalent.
    """

    def __init__(
        self,
        engine: GradientDescentEngine,
        synchronizer: ViewSynchronizer,
        learning_rate_source: LearningRateSource,
    ):
        self._engine = engine
        self._synchronizer = synchronizer
        self._learning_rate_source = learning_rate_source
        self._frame_count = 0

    @property
    def frame_count(self) -> int:
        """Frames that advanced the engine."""
        return self._frame_count

    def tick(self) -> bool:
        """Run a single frame. Returns False without side effects when not running."""
        if self._engine.state is not EngineState.RUNNING:
            return False
        # Re-read every frame so the rate can be tuned live
        self._engine.step(self._learning_rate_source())
        self._synchronizer.sync(self._engine.params)
        self._frame_count += 1
        return True

    def run(self, max_frames: Optional[int] = None) -> int:
        """
        Tick until the engine leaves RUNNING or max_frames have run.

        Returns:
            Number of frames executed
        """
        frames = 0
        while max_frames is None or frames < max_frames:
            if not self.tick():
                break
            frames += 1
        logger.debug(f"Frame loop ran {frames} frames, engine {self._engine.state.name}")
        return frames
