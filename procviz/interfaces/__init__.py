"""Interface abstractions for the processor visualizer.

- IClock, ClockSubscriber: cycle timing contract
- IProcessor: execution engine contract
- ProcessorSnapshot and friends: read-only views for front-ends
"""

from procviz.interfaces.clock import ClockSubscriber, IClock
from procviz.interfaces.processor import (
    BusView,
    EnginePhase,
    IProcessor,
    MemoryCellView,
    ProcessorSnapshot,
    RegisterView,
)

__all__ = [
    "IClock",
    "ClockSubscriber",
    "IProcessor",
    "EnginePhase",
    "ProcessorSnapshot",
    "MemoryCellView",
    "RegisterView",
    "BusView",
]
