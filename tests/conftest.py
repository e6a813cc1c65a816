"""
Pytest configuration and shared fixtures for the procviz test suite.
"""

import sys
import tempfile
from pathlib import Path

import pytest
import yaml

# Ensure project root is on PYTHONPATH so 'procviz' can be imported
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from procviz.core.clock import Clock  # noqa: E402
from procviz.core.engine import ExecutionEngine  # noqa: E402

AVAILABLE_REGISTERS = ("A", "B", "R1")


class RecordingSleeper:
    """Stand-in for time.sleep that records requested delays instead of sleeping."""

    def __init__(self):
        self.delays = []

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def sleeper():
    return RecordingSleeper()


@pytest.fixture
def clock(sleeper):
    return Clock(sleep=sleeper)


@pytest.fixture
def engine(clock):
    """Engine with registers A, B and R1 and a clock that never really sleeps."""
    return ExecutionEngine(available_registers=AVAILABLE_REGISTERS, clock=clock)


@pytest.fixture
def temp_yaml_file():
    """
    Fixture that provides a temporary YAML file.

    Yields:
        Path: Path to the temporary YAML file
    """
    with tempfile.NamedTemporaryFile(
        mode="w",
        suffix=".yaml",
        delete=False,
    ) as f:
        temp_path = Path(f.name)

    yield temp_path

    # Cleanup
    if temp_path.exists():
        temp_path.unlink()


@pytest.fixture
def valid_processor_config_dict():
    """
    Fixture providing a complete valid processor configuration dictionary.
    """
    return {
        "processor": {
            "available_registers": ["AX", "BX", "CX"],
            "cycle_time_ms": 250,
            "reset_registers_on_load": True,
        }
    }


@pytest.fixture
def minimal_processor_config_dict():
    """
    Fixture providing a minimal valid processor configuration dictionary.

    Returns:
        dict: A minimal configuration with only required fields
    """
    return {"processor": {"available_registers": ["AX"]}}


@pytest.fixture
def temp_config_yaml_file(temp_yaml_file, valid_processor_config_dict):
    """
    Fixture that creates a temporary YAML file with valid configuration.

    Yields:
        Path: Path to the temporary YAML file with valid configuration
    """
    with open(temp_yaml_file, "w", encoding="utf-8") as f:
        yaml.dump(valid_processor_config_dict, f)

    yield temp_yaml_file


def pytest_configure(config):
    """
    Hook for initial pytest configuration.

    Used to add custom markers and configuration.
    """
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests",
    )
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
