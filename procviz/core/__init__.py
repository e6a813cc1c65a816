"""Core modules for the processor visualizer.

- register: Register bank with the CP control pointer
- memory: Instruction memory cells
- alu: Stateless arithmetic unit
- bus: Busy flag and transfer message
- clock: Injectable cycle delay
- processor: Aggregate processor state
- engine: Fetch/decode/execute/writeback state machine
"""

from procviz.core.alu import compute
from procviz.core.bus import Bus
from procviz.core.clock import Clock
from procviz.core.engine import ExecutionEngine, decode
from procviz.core.memory import InstructionMemory, MemoryCell
from procviz.core.processor import ProcessorState
from procviz.core.register import Register, RegisterBank

__all__ = [
    "Bus",
    "Clock",
    "ExecutionEngine",
    "InstructionMemory",
    "MemoryCell",
    "ProcessorState",
    "Register",
    "RegisterBank",
    "compute",
    "decode",
]
