"""Per-session wiring of dataset, surface, engine and view sync."""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from gdviz.logging import get_logger
logger = get_logger(__name__)

from .animation import FrameLoop
from .dataset import Dataset, GroundTruth, synthesize
from .engine import GradientDescentEngine
from .projection import Parameters, ProjectionSink, ViewSynchronizer
from .random_normal import RandomNormal
from .settings import AppConfig
from .surface import LossSurface, SurfaceConfig, sample_loss_surface


@dataclass
class Session:
    """Everything one run of the visualizer needs, built fresh each time."""

    config: AppConfig
    data: Dataset
    surface: LossSurface
    engine: GradientDescentEngine
    synchronizer: ViewSynchronizer
    loop: FrameLoop

    @classmethod
    def create(
        cls,
        config: Optional[AppConfig] = None,
        data: Optional[Dataset] = None,
        learning_rate_source: Optional[Callable[[], Any]] = None,
    ) -> "Session":
        """
        Build a session and perform the initial sync at (0, 0).

        Args:
            config: Session configuration (defaults if omitted)
            data: Pre-built dataset; synthesized from config if omitted
            learning_rate_source: Per-frame learning-rate reader;
                defaults to the configured constant rate
        """
        config = config or AppConfig()
        if data is None:
            truth = GroundTruth(slope=config.slope, intercept=config.intercept, noise_std=config.noise)
            data = synthesize(config.samples, truth=truth, normal=RandomNormal(seed=config.seed))

        surface = sample_loss_surface(
            data,
            SurfaceConfig(eps=config.surface_eps, percentile=config.surface_percentile),
        )
        engine = GradientDescentEngine(data)
        synchronizer = ViewSynchronizer(data)
        if learning_rate_source is None:
            learning_rate_source = lambda: config.learning_rate
        loop = FrameLoop(engine, synchronizer, learning_rate_source)

        session = cls(config, data, surface, engine, synchronizer, loop)
        session.synchronizer.sync(engine.params)
        logger.info(f"Session created: {data!r}, seed={config.seed}")
        return session

    def attach(self, sink: ProjectionSink) -> None:
        """Attach a renderer and bring it up to date immediately."""
        self.synchronizer.attach(sink)
        self.synchronizer.sync(self.engine.params)

    def toggle(self):
        return self.engine.toggle()

    def reset(self) -> Parameters:
        """Return to IDLE at (0, 0) and push the reset state to the views."""
        params = self.engine.reset()
        self.synchronizer.sync(params)
        return params
