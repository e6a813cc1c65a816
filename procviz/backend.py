"""Threaded backend that runs the execution engine off the caller's thread."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Optional, Protocol

from procviz.core.engine import ExecutionEngine
from procviz.interfaces.clock import IClock
from procviz.interfaces.processor import ProcessorSnapshot
from procviz.utils.config_loader import ProcessorConfig

logger = logging.getLogger(__name__)


class ProcessorBackend(Protocol):
    """Minimal processor backend required by a visualization front-end."""

    def load_program(self, program_text: str, cycle_time_ms: float) -> bool:
        ...

    def reset(self) -> None:
        ...

    def snapshot(self) -> ProcessorSnapshot:
        ...


@dataclass
class ThreadedBackend(ProcessorBackend):
    """Runs each loaded program on a worker thread.

    The engine must be built with a threading.RLock so snapshots taken from
    the caller's thread never observe a half-applied micro-operation. Loading
    a new program abandons the previous worker: it stops at its next bus
    transfer without touching state, and the new program starts immediately.
    """

    engine: ExecutionEngine
    _load_lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)
    _worker: Optional[threading.Thread] = field(default=None, init=False, repr=False)

    @classmethod
    def from_config(cls, config: ProcessorConfig, clock: Optional[IClock] = None) -> "ThreadedBackend":
        engine = ExecutionEngine.from_config(config, clock=clock, lock=threading.RLock())
        return cls(engine=engine)

    @property
    def is_running(self) -> bool:
        worker = self._worker
        return worker is not None and worker.is_alive()

    def load_program(self, program_text: str, cycle_time_ms: float) -> bool:
        with self._load_lock:
            if not self.engine.load(program_text, cycle_time_ms):
                return False
            generation = self.engine.generation
            self._worker = threading.Thread(
                target=self.engine.run,
                kwargs={"generation": generation},
                name=f"procviz-run-{generation}",
                daemon=True,
            )
            self._worker.start()
        logger.debug(f"Started worker for generation {generation}")
        return True

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the current worker finishes.

        Returns:
            True if no worker is running anymore.
        """
        worker = self._worker
        if worker is not None:
            worker.join(timeout)
        return not self.is_running

    def reset(self) -> None:
        with self._load_lock:
            self.engine.reset()

    def snapshot(self) -> ProcessorSnapshot:
        return self.engine.snapshot()
