"""Shared test fixtures for the gdviz test suite.

Provides a centralized QApplication, dataset factories, and a
RecordingSink that captures projections without any renderer.
"""

import os
import sys

# Allow the suite to run headless (CI/containers without a display).
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtWidgets import QApplication

from gdviz.core.dataset import Dataset, synthesize
from gdviz.core.random_normal import RandomNormal


@pytest.fixture(scope="session")
def qapp():
    """Session-scoped QApplication, shared by all tests."""
    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    yield app


@pytest.fixture
def line_dataset():
    """Three noiseless points on y = -0.8x + 10."""
    return Dataset([(0.0, 10.0), (5.0, 6.0), (10.0, 2.0)])


@pytest.fixture
def noisy_dataset():
    """Seeded 120-point dataset from the default ground truth."""
    return synthesize(normal=RandomNormal(seed=1234))


@pytest.fixture
def dataset_factory():
    """Factory fixture: synthesize datasets with custom ground truth."""
    def _make(n=120, slope=-0.8, intercept=10.0, noise_std=1.2, seed=0):
        return synthesize(n, slope, intercept, noise_std, normal=RandomNormal(seed=seed))
    return _make


class RecordingSink:
    """Projection sink that keeps every payload it receives."""

    def __init__(self):
        self.lines = []
        self.points = []

    def update_line(self, segment):
        self.lines.append(segment)

    def update_point(self, point):
        self.points.append(point)


@pytest.fixture
def recording_sink():
    return RecordingSink()


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path, monkeypatch):
    """Point the settings file at a temp dir so tests never read ~/.config."""
    import gdviz.core.settings as settings
    monkeypatch.setattr(settings, "SETTINGS_DIR", tmp_path / "gdviz")
    monkeypatch.setattr(settings, "SETTINGS_PATH", tmp_path / "gdviz" / "settings.json")
