"""Instruction memory.

Memory is an ordered list of immediate-value cells, one per non-empty program
line. It is always replaced as a whole by a new load and never patched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from procviz.utils.consts import ConstUtils


@dataclass(frozen=True)
class MemoryCell:
    """One instruction in memory."""

    address: int
    value: str
    address_type: str = ConstUtils.ADDRESS_IMMEDIATE


def split_program(program_text: str) -> list[str]:
    """Split program text into instruction lines, dropping empty ones.

    A line holding only whitespace counts as empty. Surrounding whitespace is
    stripped from the kept lines.
    """
    return [line.strip() for line in program_text.splitlines() if line.strip()]


class InstructionMemory:
    """Address-indexed instruction storage."""

    def __init__(self):
        self._cells: tuple[MemoryCell, ...] = ()

    @property
    def cells(self) -> tuple[MemoryCell, ...]:
        return self._cells

    def load(self, program_text: str) -> None:
        """Replace memory contents with the instructions in program_text.

        Addresses are contiguous and 0-based, following source order.
        """
        self._cells = tuple(
            MemoryCell(address=address, value=instruction)
            for address, instruction in enumerate(split_program(program_text))
        )

    def clear(self) -> None:
        self._cells = ()

    def __iter__(self) -> Iterator[MemoryCell]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)
