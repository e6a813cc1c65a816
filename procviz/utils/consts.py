"""Constants and utility values for the processor visualizer."""

import re
from typing import Optional


class ConstUtils:
    """Reserved names, addressing modes and instruction set constants."""

    # Reserved register names
    CONTROL_POINTER = "CP"
    """Control pointer, advanced once per processed instruction."""

    INSTRUCTION_REGISTER = "IR"
    """Holds the raw text of the instruction currently being executed."""

    RESERVED_REGISTERS = frozenset({CONTROL_POINTER, INSTRUCTION_REGISTER})

    # Addressing modes
    ADDRESS_DIRECT = "direct"
    """Every register write uses direct addressing."""

    ADDRESS_IMMEDIATE = "immediate"
    """Every memory cell holds an immediate-value instruction."""

    # Instruction set
    OP_MOV = "mov"
    ALU_OPCODES = frozenset({"add", "sub", "mul", "div"})

    INCREMENT_CP_INSTRUCTION = f"add {CONTROL_POINTER} 1"
    """Bookkeeping instruction executed after every fetched instruction."""


DEFAULT_CYCLE_TIME_MS = 500

_LEADING_INT = re.compile(r"^\s*([+-]?)(?:0[xX]([0-9a-fA-F]+)|([0-9]+))")
_DIGITS = re.compile(r"[0-9]+")


def parse_int(text: str) -> Optional[int]:
    """Parse the leading integer of text, ignoring trailing characters.

    "12abc" parses as 12 and "0x10" as 16; "abc" and "" return None. Only
    ASCII digits count.
    """
    match = _LEADING_INT.match(text)
    if match is None:
        return None
    sign, hex_digits, dec_digits = match.groups()
    value = int(hex_digits, 16) if hex_digits is not None else int(dec_digits)
    return -value if sign == "-" else value


def looks_like_address(operand: str) -> bool:
    """Return True when operand contains at least one digit sequence."""
    return _DIGITS.search(operand) is not None
