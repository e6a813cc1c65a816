"""Arithmetic logic unit."""

from __future__ import annotations

import math
import operator
from typing import Callable, Union

Number = Union[int, float]


def _divide(dividend: Number, divisor: Number) -> float:
    # Real division; a zero divisor yields a non-finite result, never an error.
    if divisor == 0:
        if dividend == 0 or math.isnan(dividend):
            return math.nan
        return math.copysign(math.inf, dividend) * math.copysign(1.0, divisor)
    return dividend / divisor


_OPERATIONS: dict[str, Callable[[Number, Number], Number]] = {
    "add": operator.add,
    "sub": operator.sub,
    "mul": operator.mul,
    "div": _divide,
}


def compute(opcode: str, operand_one: Number, operand_two: Number) -> Number:
    """Apply opcode to the two operands and return the result.

    Raises:
        ValueError: If opcode is not an ALU operation
    """
    try:
        op = _OPERATIONS[opcode]
    except KeyError:
        raise ValueError(f"Unsupported ALU opcode: {opcode!r}") from None
    return op(operand_one, operand_two)

