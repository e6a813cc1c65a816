"""Aggregate processor state owned by the execution engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from procviz.core.bus import Bus
from procviz.core.memory import InstructionMemory
from procviz.core.register import Number, Register, RegisterBank
from procviz.interfaces.processor import EnginePhase


@dataclass
class ProcessorState:
    """Everything the engine mutates while running a program.

    The pending_* fields are a single staging slot shared by every ALU
    dispatch. A new dispatch overwrites them; nothing is queued. `staged`
    tells whether the dispatch in progress actually filled the slot.
    """

    registers: RegisterBank
    memory: InstructionMemory = field(default_factory=InstructionMemory)
    bus: Bus = field(default_factory=Bus)
    instruction_register: Optional[Register] = None
    phase: EnginePhase = EnginePhase.IDLE
    current_target: Optional[str] = None
    pending_opcode: Optional[str] = None
    pending_operand_one: Optional[Number] = None
    pending_operand_two: Optional[Number] = None
    pending_result: Optional[Number] = None
    staged: bool = False

    @classmethod
    def create(cls, available_registers: Iterable[str]) -> "ProcessorState":
        return cls(registers=RegisterBank(available_registers))

    def stage(self, opcode: str, target: str, operand_one: Number, operand_two: Number) -> None:
        self.pending_opcode = opcode
        self.current_target = target
        self.pending_operand_one = operand_one
        self.pending_operand_two = operand_two
        self.staged = True

    def clear_staging(self) -> None:
        self.current_target = None
        self.pending_opcode = None
        self.pending_operand_one = None
        self.pending_operand_two = None
        self.pending_result = None
        self.staged = False
