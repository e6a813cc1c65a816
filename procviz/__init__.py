"""Bus-level processor visualizer.

This package models, cycle by cycle, a minimal processor: a register bank,
an instruction memory, a single-function ALU and a shared data bus. The
execution engine turns textual instructions (mov, add, sub, mul, div) into
bus transfers that a front-end can observe through snapshots.

Getting started:
    from procviz import ExecutionEngine, get_config

    engine = ExecutionEngine.from_config(get_config())
    engine.load_program("mov AX 5\\nadd AX 2", cycle_time_ms=100)
    engine.snapshot().register("AX").value  # 7
"""

from procviz.backend import ProcessorBackend, ThreadedBackend
from procviz.core.clock import Clock
from procviz.core.engine import ExecutionEngine
from procviz.core.exceptions import ConfigurationError, ProcessorError
from procviz.interfaces.processor import EnginePhase, ProcessorSnapshot
from procviz.utils.config_loader import ProcessorConfig, get_config, load_config

__all__ = [
    # Core
    "Clock",
    "ExecutionEngine",
    "EnginePhase",
    "ProcessorSnapshot",
    # Backends
    "ProcessorBackend",
    "ThreadedBackend",
    # Configuration
    "ProcessorConfig",
    "get_config",
    "load_config",
    # Errors
    "ProcessorError",
    "ConfigurationError",
]
