"""Common test fixtures and utilities for WaveSpy tests."""

import os

# Run Qt in offscreen mode for CI/headless environments
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from wavespy import WaveformModel
from .test_utils import get_test_input_path, TestFiles


@pytest.fixture
def alu_vcd() -> str:
    """Path to the ALU test VCD file."""
    return str(get_test_input_path(TestFiles.ALU_VCD))


@pytest.fixture
def write_vcd(tmp_path):
    """Factory writing VCD text to a temporary file and returning its path."""
    def _write(text: str, name: str = "trace.vcd") -> str:
        path = tmp_path / name
        path.write_text(text)
        return str(path)
    return _write


@pytest.fixture
def alu_model(alu_vcd):
    """WaveformModel with the ALU trace opened and no signals loaded."""
    model = WaveformModel()
    model.open(alu_vcd)
    return model


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication for tests that paint text."""
    from PySide6.QtWidgets import QApplication
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app
