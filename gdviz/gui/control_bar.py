"""
Control bar with learning rate, Start/Pause toggle, Reset and status text.
"""

from typing import Optional
from PyQt6.QtWidgets import (
    QToolBar, QToolButton, QWidget, QLabel, QDoubleSpinBox
)
from PyQt6.QtCore import pyqtSignal

from ..core.engine import EngineState, clamp_learning_rate, status_text
from ..core.settings import DEFAULT_LEARNING_RATE, MAX_LEARNING_RATE, MIN_LEARNING_RATE


class ControlBar(QToolBar):
    """
    Toolbar with descent controls.

    The bar only reflects engine state; the window owns the engine and
    calls set_state() after every transition.
    """

    # Signals
    action_clicked = pyqtSignal()
    action_clicked_with_state = pyqtSignal(str)  # "Start" | "Pause"
    reset_clicked = pyqtSignal()
    learning_rate_changed = pyqtSignal(float)

    def __init__(self, learning_rate: float = DEFAULT_LEARNING_RATE, parent: Optional[QWidget] = None):
        super().__init__(parent)

        self._state = EngineState.IDLE
        self._setup_ui(learning_rate)

    def _setup_ui(self, learning_rate: float):
        """Create the toolbar UI."""
        self.setMovable(False)

        self._lr_label = QLabel("Learning rate")
        self.addWidget(self._lr_label)

        self._lr_spin = QDoubleSpinBox()
        self._lr_spin.setObjectName("learningRate")
        self._lr_spin.setDecimals(4)
        self._lr_spin.setRange(MIN_LEARNING_RATE, MAX_LEARNING_RATE)
        self._lr_spin.setSingleStep(0.005)
        self._lr_spin.setValue(clamp_learning_rate(learning_rate))
        self._lr_spin.setToolTip("Step size, re-read every frame")
        self._lr_spin.valueChanged.connect(self.learning_rate_changed.emit)
        self.addWidget(self._lr_spin)

        self.addSeparator()

        # Action button (Start/Pause)
        self._action_btn = QToolButton()
        self._action_btn.setText("Start")
        self._action_btn.setObjectName("startStopButton")
        self._action_btn.setToolTip("Start gradient descent (Space)")
        self._action_btn.clicked.connect(self._on_action_clicked)
        self.addWidget(self._action_btn)

        self._reset_btn = QToolButton()
        self._reset_btn.setText("Reset")
        self._reset_btn.setObjectName("resetButton")
        self._reset_btn.setToolTip("Reset parameters to (0, 0) (R)")
        self._reset_btn.clicked.connect(self.reset_clicked.emit)
        self.addWidget(self._reset_btn)

        self.addSeparator()

        self._status_label = QLabel("")
        self._status_label.setObjectName("statusLabel")
        self._status_label.setStyleSheet("padding: 0 8px;")
        self.addWidget(self._status_label)

    @property
    def learning_rate(self) -> float:
        """Current learning rate, already clamped to the valid range."""
        return clamp_learning_rate(self._lr_spin.value())

    def set_learning_rate(self, value) -> None:
        self._lr_spin.setValue(clamp_learning_rate(value))

    @property
    def status(self) -> str:
        return self._status_label.text()

    def set_state(self, state: EngineState):
        """Update button text and status line for an engine state."""
        self._state = state
        self._status_label.setText(status_text(state))
        self._update_action_button()

    def _update_action_button(self):
        if self._state is EngineState.RUNNING:
            self._action_btn.setText("Pause")
            self._action_btn.setToolTip("Pause gradient descent (Space)")
        else:
            self._action_btn.setText("Start")
            self._action_btn.setToolTip("Start gradient descent (Space)")

    def _on_action_clicked(self):
        """Emit both generic and state-aware action signals."""
        self.action_clicked.emit()
        self.action_clicked_with_state.emit(self._action_btn.text())
