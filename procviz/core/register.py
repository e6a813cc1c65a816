"""Register bank abstraction.

A register holds a single number together with the addressing mode used to
write it. The bank maps register names to registers and is the only place
that decides whether a name may be written at all.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Union

from procviz.utils.consts import ConstUtils

logger = logging.getLogger(__name__)

Number = Union[int, float]


@dataclass(frozen=True)
class Register:
    """Value held by a register and how it was addressed.

    Registers are replaced on every write, never mutated.
    """

    value: Union[Number, str]
    address_type: str = ConstUtils.ADDRESS_DIRECT


class RegisterBank:
    """Named general-purpose registers plus the control pointer.

    A general register only exists once it has received a value; reading an
    uninitialized register returns None, which is distinct from zero. The
    control pointer always exists and starts at 0.

    Writes to names outside the configured set (other than CP) are silently
    dropped, the same way writes to undefined register offsets are ignored by
    hardware.
    """

    def __init__(self, available: Iterable[str]):
        """Initialize an empty bank.

        Args:
            available: Legal general-purpose register names. Fixed for the
                lifetime of the bank.
        """
        self._available = frozenset(available)
        self._registers: dict[str, Register] = {}
        self.reset()

    def is_available(self, name: str) -> bool:
        """Return True when name is a configured general-purpose register."""
        return name in self._available

    def is_writable(self, name: str) -> bool:
        """Return True when the engine may write name (configured or CP)."""
        return name == ConstUtils.CONTROL_POINTER or self.is_available(name)

    def read(self, name: str) -> Optional[Register]:
        """Return the register stored under name, or None if uninitialized."""
        return self._registers.get(name)

    def value(self, name: str) -> Optional[Union[Number, str]]:
        """Return the current value of name, or None if uninitialized."""
        reg = self.read(name)
        return None if reg is None else reg.value

    def write(self, name: str, value: Number) -> bool:
        """Store value under name with direct addressing.

        Returns:
            True if the write happened, False if it was dropped because the
            name is not writable.
        """
        if not self.is_writable(name):
            logger.warning(f"Dropped write to unconfigured register {name!r}")
            return False
        self._registers[name] = Register(value=value)
        return True

    @property
    def control_pointer(self) -> Number:
        reg = self._registers[ConstUtils.CONTROL_POINTER]
        return reg.value  # type: ignore[return-value]

    def reset(self) -> None:
        """Forget all general registers and return CP to zero."""
        self._registers.clear()
        self._registers[ConstUtils.CONTROL_POINTER] = Register(value=0)

    def items(self) -> Iterator[tuple[str, Register]]:
        """Iterate (name, register) pairs, CP included, in write order."""
        return iter(list(self._registers.items()))

    def __contains__(self, name: object) -> bool:
        return name in self._registers

    def __len__(self) -> int:
        return len(self._registers)
