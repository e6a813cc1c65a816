"""Instruction execution engine.

The engine turns the instructions held in memory into bus-level
micro-operations:

    FETCH_TO_IR -> DECODE -> REGISTER_MOVE | ALU_DISPATCH | SKIP -> INCREMENT_CP

Every bus transfer marks the bus busy, holds for one clock cycle and marks it
idle again. Instructions run strictly in address order and never overlap.

Malformed input never stops a run: the offending step is skipped, a warning
is logged and execution continues with the next micro-operation.
"""

from __future__ import annotations

import logging
import math
from contextlib import contextmanager, nullcontext
from typing import ContextManager, Iterable, Iterator, Optional

from procviz.core import alu
from procviz.core.clock import Clock
from procviz.core.exceptions import SequenceAbandoned
from procviz.core.processor import ProcessorState
from procviz.core.register import Register
from procviz.interfaces.clock import IClock
from procviz.interfaces.processor import (
    BusView,
    EnginePhase,
    IProcessor,
    MemoryCellView,
    ProcessorSnapshot,
    RegisterView,
)
from procviz.utils.config_loader import ProcessorConfig
from procviz.utils.consts import ConstUtils, looks_like_address, parse_int

logger = logging.getLogger(__name__)


def decode(instruction: str) -> tuple[str, str, str]:
    """Split an instruction into (opcode, operand_one, operand_two).

    Missing tokens come back as empty strings; extra tokens are ignored.
    """
    tokens = instruction.split()
    tokens += [""] * (3 - len(tokens))
    return tokens[0], tokens[1], tokens[2]


class ExecutionEngine(IProcessor):
    """Fetch/decode/execute/writeback loop over an explicit ProcessorState.

    Responsibilities:
    - Load program text into instruction memory
    - Stage instructions through the instruction register
    - Route operands to the register bank or the ALU
    - Advance the control pointer once per instruction

    Each load starts a new generation. A sequence whose generation is no
    longer current stops at its next bus transfer without touching state, so
    a reload abandons any run still in flight on another thread.
    """

    def __init__(
        self,
        available_registers: Iterable[str],
        clock: Optional[IClock] = None,
        lock: Optional[ContextManager] = None,
        reset_registers_on_load: bool = False,
    ):
        """Initialize the engine.

        Args:
            available_registers: Legal general-purpose register names
            clock: Cycle timing source. Defaults to a real-time Clock.
            lock: Guards state mutation and snapshots. Defaults to a no-op
                context; pass a threading.RLock when another thread reads
                snapshots or reloads programs.
            reset_registers_on_load: Clear the register bank on every
                successful load. Off by default: registers survive reloads.
        """
        self.state = ProcessorState.create(available_registers)
        self._clock = clock if clock is not None else Clock()
        self._lock = lock if lock is not None else nullcontext()
        self._reset_registers_on_load = reset_registers_on_load
        self._generation = 0

    @classmethod
    def from_config(
        cls,
        config: ProcessorConfig,
        clock: Optional[IClock] = None,
        lock: Optional[ContextManager] = None,
    ) -> "ExecutionEngine":
        if clock is None:
            clock = Clock(cycle_time_ms=config.cycle_time_ms)
        return cls(
            available_registers=config.available_registers,
            clock=clock,
            lock=lock,
            reset_registers_on_load=config.reset_registers_on_load,
        )

    @property
    def clock(self) -> IClock:
        return self._clock

    @property
    def generation(self) -> int:
        return self._generation

    # Program loading -------------------------------------------------------

    def load(self, program_text: str, cycle_time_ms: float) -> bool:
        """Replace memory with program_text without running it.

        Memory is cleared before the input is validated, so an empty program
        or a zero, negative or non-finite cycle time still wipes the previous
        program.

        Returns:
            True if a program was loaded, False for a no-op reset.
        """
        with self._lock:
            self._generation += 1
            self.state.memory.clear()
            self.state.bus.reset()
            self.state.phase = EnginePhase.IDLE

            if not program_text or not cycle_time_ms:
                logger.info("Empty program or cycle time; memory cleared, nothing to run")
                return False
            if not math.isfinite(cycle_time_ms) or cycle_time_ms < 0:
                logger.warning(
                    f"Invalid cycle time {cycle_time_ms!r}; memory cleared, nothing to run"
                )
                return False

            self._clock.cycle_time_ms = cycle_time_ms
            if self._reset_registers_on_load:
                self.state.registers.reset()
            self.state.memory.load(program_text)

        logger.info(
            f"Loaded {len(self.state.memory)} instruction(s), cycle time {cycle_time_ms} ms"
        )
        return True

    def load_program(self, program_text: str, cycle_time_ms: float) -> bool:
        """Load program_text and execute it to completion."""
        loaded = self.load(program_text, cycle_time_ms)
        if loaded:
            self.run()
        return loaded

    def reset(self) -> None:
        """Clear memory, registers, bus and staging; abandon any running sequence."""
        with self._lock:
            self._generation += 1
            self.state.memory.clear()
            self.state.registers.reset()
            self.state.bus.reset()
            self.state.instruction_register = None
            self.state.phase = EnginePhase.IDLE
            self.state.clear_staging()
            self._clock.reset()

    # Execution -------------------------------------------------------------

    def run(self, generation: Optional[int] = None) -> None:
        """Execute every instruction in memory, in address order.

        Args:
            generation: Load generation this run belongs to. Defaults to the
                current one; a stale value makes the run return immediately.
        """
        with self._lock:
            generation = self._resolve_generation(generation)
            cells = self.state.memory.cells

        try:
            for cell in cells:
                logger.debug(f"Executing [{cell.address}] {cell.value}")
                self._execute(cell.value, generation)
            with self._lock:
                self._ensure_current(generation)
                self.state.phase = EnginePhase.IDLE
        except SequenceAbandoned as exc:
            logger.info(str(exc))

    def execute_instruction(self, instruction: str) -> None:
        """Run a single instruction through every phase, CP increment included."""
        generation = self._generation
        try:
            self._execute(instruction, generation)
            self._set_phase(EnginePhase.IDLE, generation)
        except SequenceAbandoned as exc:
            logger.info(str(exc))

    def _execute(self, instruction: str, generation: int) -> None:
        self._fetch_to_ir(instruction, generation)
        self._dispatch(instruction, generation)
        self._increment_cp(generation)

    def _fetch_to_ir(self, instruction: str, generation: int) -> None:
        self._set_phase(EnginePhase.FETCH_TO_IR, generation)
        with self._transfer(f"Moving to IR\n{instruction}", generation):
            self.state.instruction_register = Register(value=instruction)

    def _dispatch(self, instruction: str, generation: int) -> None:
        self._set_phase(EnginePhase.DECODE, generation)
        opcode, operand_one, operand_two = decode(instruction)

        if not (opcode and operand_one and operand_two):
            logger.warning(f"Skipping malformed instruction {instruction!r}")
            self._set_phase(EnginePhase.SKIP, generation)
            return

        if opcode == ConstUtils.OP_MOV:
            self._set_phase(EnginePhase.REGISTER_MOVE, generation)
            self.mov(operand_one, operand_two, generation=generation)
        elif opcode in ConstUtils.ALU_OPCODES:
            self._set_phase(EnginePhase.ALU_DISPATCH, generation)
            self.send_to_alu(opcode, operand_one, operand_two, generation=generation)
        else:
            logger.warning(f"Skipping unknown opcode {opcode!r}")
            self._set_phase(EnginePhase.SKIP, generation)

    def _increment_cp(self, generation: int) -> None:
        self._set_phase(EnginePhase.INCREMENT_CP, generation)
        opcode, operand_one, operand_two = decode(ConstUtils.INCREMENT_CP_INSTRUCTION)
        self.send_to_alu(opcode, operand_one, operand_two, generation=generation)

    # Register move ---------------------------------------------------------

    def mov(self, operand_one: str, operand_two: str, *, generation: Optional[int] = None) -> None:
        """Move the integer operand_two into register operand_one.

        Zero, non-numeric values and unconfigured registers are ignored.
        """
        generation = self._resolve_generation(generation)
        value = parse_int(operand_two)
        if not value:
            logger.warning(f"mov ignored: {operand_two!r} is not a non-zero integer")
            return
        if not self.state.registers.is_available(operand_one):
            logger.warning(f"mov ignored: {operand_one!r} is not an available register")
            return

        with self._transfer(f"Moving to {operand_one} -> {value}", generation):
            self.state.registers.write(operand_one, value)

    # ALU path --------------------------------------------------------------

    def send_to_alu(
        self,
        opcode: str,
        operand_one: str,
        operand_two: str,
        *,
        generation: Optional[int] = None,
    ) -> None:
        """Resolve operands into the staging slot, then compute and write back.

        Register names (and CP) take precedence over the memory-address form,
        so an operand such as "R1" is always resolved as a register.
        """
        generation = self._resolve_generation(generation)
        with self._lock:
            self._ensure_current(generation)
            self.state.staged = False

        if self.state.registers.is_writable(operand_one):
            self._stage_from_register(opcode, operand_one, operand_two, generation)
        elif looks_like_address(operand_one):
            self._stage_from_memory_address(operand_one, operand_two)

        self.execute(generation=generation)

    def _stage_from_register(
        self, opcode: str, operand_one: str, operand_two: str, generation: int
    ) -> None:
        value = parse_int(operand_two)
        if not value:
            logger.warning(f"{opcode} ignored: {operand_two!r} is not a non-zero integer")
            return

        with self._transfer(f"Moving to ALU\n{opcode} {operand_one} {operand_two}", generation):
            current = self.state.registers.value(operand_one)
            if current is None:
                logger.warning(f"{opcode} ignored: register {operand_one!r} is uninitialized")
                return
            self.state.stage(opcode, operand_one, current, value)  # type: ignore[arg-type]

    def _stage_from_memory_address(self, operand_one: str, operand_two: str) -> None:
        # Memory operands are not part of the instruction set; nothing is staged.
        logger.debug(f"Memory operand {operand_one!r} ({operand_two!r}) not supported")

    def execute(self, *, generation: Optional[int] = None) -> None:
        """Compute the staged ALU operation and write the result back.

        The bus cycle always happens. When the current dispatch staged no
        operands, nothing is computed or written.
        """
        generation = self._resolve_generation(generation)
        with self._lock:
            self._ensure_current(generation)
            staged = self.state.staged
            target = self.state.current_target
            if staged:
                self.state.pending_result = alu.compute(
                    self.state.pending_opcode,  # type: ignore[arg-type]
                    self.state.pending_operand_one,  # type: ignore[arg-type]
                    self.state.pending_operand_two,  # type: ignore[arg-type]
                )

        message = f"Moving to {target}" if staged else "ALU idle: no operands staged"
        with self._transfer(message, generation):
            if not staged:
                logger.warning("ALU executed with no staged operands; writeback skipped")
                return
            self.state.registers.write(target, self.state.pending_result)  # type: ignore[arg-type]

    # Snapshot --------------------------------------------------------------

    def snapshot(self) -> ProcessorSnapshot:
        with self._lock:
            state = self.state
            ir = state.instruction_register
            return ProcessorSnapshot(
                memory=tuple(
                    MemoryCellView(cell.address, cell.value, cell.address_type)
                    for cell in state.memory
                ),
                registers=tuple(
                    RegisterView(name, reg.value, reg.address_type)
                    for name, reg in state.registers.items()
                ),
                instruction_register=None if ir is None else str(ir.value),
                control_pointer=state.registers.control_pointer,
                bus=BusView(busy=state.bus.busy, message=state.bus.message),
                phase=state.phase,
                cycle_count=self._clock.cycle_count,
            )

    # Private helpers -------------------------------------------------------

    @contextmanager
    def _transfer(self, message: str, generation: int) -> Iterator[None]:
        """One bus cycle: busy, hold, idle. The body runs after the bus is idle."""
        with self._lock:
            self._ensure_current(generation)
            self.state.bus.begin(message)

        self._clock.hold()

        with self._lock:
            self._ensure_current(generation)
            self._clock.tick()
            self.state.bus.end()
            yield

    def _set_phase(self, phase: EnginePhase, generation: int) -> None:
        with self._lock:
            self._ensure_current(generation)
            self.state.phase = phase

    def _ensure_current(self, generation: int) -> None:
        if generation != self._generation:
            raise SequenceAbandoned(generation, self._generation)

    def _resolve_generation(self, generation: Optional[int]) -> int:
        return self._generation if generation is None else generation
