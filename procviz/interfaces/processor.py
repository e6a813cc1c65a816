"""Processor interface and read-only snapshot types for visualization."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

Number = Union[int, float]


class EnginePhase(Enum):
    """Micro-operation currently being performed by the execution engine."""

    IDLE = "idle"
    FETCH_TO_IR = "fetch_to_ir"
    DECODE = "decode"
    REGISTER_MOVE = "register_move"
    ALU_DISPATCH = "alu_dispatch"
    SKIP = "skip"
    INCREMENT_CP = "increment_cp"


class IProcessor(ABC):
    """Execution engine abstraction used by backends and front-ends."""

    @abstractmethod
    def load_program(self, program_text: str, cycle_time_ms: float) -> bool:
        """Load program_text and run it to completion.

        Returns False when the load was a no-op reset.
        """
        ...

    @abstractmethod
    def run(self) -> None:
        """Execute every instruction currently in memory."""
        ...

    @abstractmethod
    def reset(self) -> None:
        """Clear memory, registers and bus."""
        ...

    @abstractmethod
    def snapshot(self) -> "ProcessorSnapshot":
        """Return a read-only view of the processor state."""
        ...


@dataclass(frozen=True)
class MemoryCellView:
    address: int
    value: str
    address_type: str


@dataclass(frozen=True)
class RegisterView:
    """Single register value for register bank panels."""

    name: str
    value: Union[Number, str]
    address_type: str


@dataclass(frozen=True)
class BusView:
    busy: bool
    message: str


@dataclass(frozen=True)
class ProcessorSnapshot:
    """Snapshot of processor state for UI/debug panels."""

    memory: Tuple[MemoryCellView, ...]
    registers: Tuple[RegisterView, ...]
    instruction_register: Optional[str]
    control_pointer: Number
    bus: BusView
    phase: EnginePhase
    cycle_count: int

    def register(self, name: str) -> Optional[RegisterView]:
        """Return the view of register name, or None if uninitialized."""
        for reg in self.registers:
            if reg.name == name:
                return reg
        return None
