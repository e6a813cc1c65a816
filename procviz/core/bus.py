"""Shared data bus."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Bus:
    """Busy flag plus a human-readable description of the transfer in flight.

    Only one transfer may be in flight at a time. Ending a transfer clears the
    message so an idle bus always reads as (False, "").
    """

    busy: bool = False
    message: str = ""

    def begin(self, message: str) -> None:
        self.busy = True
        self.message = message

    def end(self) -> None:
        self.busy = False
        self.message = ""

    def reset(self) -> None:
        self.end()
