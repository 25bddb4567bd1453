"""
Main application window: fit view, loss-surface view and controls.
"""

from typing import Optional
from PyQt6.QtWidgets import QMainWindow, QWidget, QSplitter, QStatusBar, QLabel
from PyQt6.QtCore import Qt, QTimer, pyqtSignal
from PyQt6.QtGui import QAction, QKeySequence

from gdviz.logging import get_logger
logger = get_logger(__name__)

from .control_bar import ControlBar
from ..core.engine import EngineState
from ..core.session import Session
from ..core.settings import AppConfig
from ..plots.fit_plot import FitPlot
from ..plots.surface_plot import SurfacePlot


class MainWindow(QMainWindow):
    """
    Main gdviz window.

    Layout:
    ┌──────────────────────────────────────────────────────┐
    │  [Learning rate: 0.0100] [Start] [Reset]  Running…   │
    ├──────────────────────────┬───────────────────────────┤
    │   Fit view               │   Loss surface            │
    │   scatter + red line     │   log10(MSE) + marker     │
    ├──────────────────────────┴───────────────────────────┤
    │  Step 312 | w=-0.7412 b=9.6120 | MSE 1.4021           │
    └──────────────────────────────────────────────────────┘
    """

    state_changed = pyqtSignal(object)  # EngineState

    def __init__(self, config: Optional[AppConfig] = None, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._config = config or AppConfig()

        self._control_bar = ControlBar(learning_rate=self._config.learning_rate)
        self._session = Session.create(
            self._config,
            learning_rate_source=lambda: self._control_bar.learning_rate,
        )

        self._setup_ui()
        self._setup_actions()
        self._setup_frame_timer()
        self._connect_signals()

        self._session.attach(self._fit_plot)
        self._session.attach(self._surface_plot)
        self._update_status_bar()

    def _setup_ui(self):
        self.setWindowTitle("gdviz - gradient descent on a line fit")
        self.resize(1200, 560)

        self.addToolBar(self._control_bar)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        self._fit_plot = FitPlot(self._session.data)
        self._surface_plot = SurfacePlot(self._session.surface)
        splitter.addWidget(self._fit_plot)
        splitter.addWidget(self._surface_plot)
        splitter.setSizes([600, 600])
        self.setCentralWidget(splitter)

        self._status_bar = QStatusBar()
        self._step_label = QLabel("")
        self._status_bar.addWidget(self._step_label)
        self.setStatusBar(self._status_bar)

    def _setup_actions(self):
        toggle_action = QAction("Start/Pause", self)
        toggle_action.setShortcut(QKeySequence(Qt.Key.Key_Space))
        toggle_action.triggered.connect(self.toggle_running)
        self.addAction(toggle_action)

        reset_action = QAction("Reset", self)
        reset_action.setShortcut(QKeySequence(Qt.Key.Key_R))
        reset_action.triggered.connect(self._on_reset)
        self.addAction(reset_action)

    def _setup_frame_timer(self):
        """Timer standing in for the display refresh; one descent step per tick."""
        self._frame_timer = QTimer(self)
        self._frame_timer.setInterval(self._config.frame_interval_ms)
        self._frame_timer.timeout.connect(self._on_frame)

    def _connect_signals(self):
        self._control_bar.action_clicked.connect(self.toggle_running)
        self._control_bar.reset_clicked.connect(self._on_reset)
        self._control_bar.learning_rate_changed.connect(
            lambda lr: logger.debug(f"Learning rate changed to {lr}")
        )

    @property
    def session(self) -> Session:
        return self._session

    @property
    def control_bar(self) -> ControlBar:
        return self._control_bar

    @property
    def is_animating(self) -> bool:
        return self._frame_timer.isActive()

    def toggle_running(self):
        """Start or pause descent, mirroring the Start/Pause button."""
        state = self._session.toggle()
        if state is EngineState.RUNNING:
            self._frame_timer.start()
        else:
            self._frame_timer.stop()
        self._apply_state(state)

    def _on_reset(self):
        self._frame_timer.stop()
        self._session.reset()
        self._apply_state(self._session.engine.state)

    def _on_frame(self):
        if not self._session.loop.tick():
            self._frame_timer.stop()
            return
        self._update_status_bar()

    def _apply_state(self, state: EngineState):
        self._control_bar.set_state(state)
        self._update_status_bar()
        self.state_changed.emit(state)

    def _update_status_bar(self):
        engine = self._session.engine
        p = engine.params
        self._step_label.setText(
            f"Step {engine.step_count} | w={p.w:.4f} b={p.b:.4f} | MSE {engine.loss:.4f}"
        )

    def closeEvent(self, event):
        self._frame_timer.stop()
        super().closeEvent(event)
