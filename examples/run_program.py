import argparse
import logging
import sys
from pathlib import Path

# Ensure local repo package is used even if another "procviz" is on PYTHONPATH.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from procviz import ExecutionEngine, load_config
from procviz.interfaces.processor import ProcessorSnapshot


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Trace a program bus cycle by bus cycle.")
    parser.add_argument(
        "program",
        nargs="?",
        default="examples/programs/arithmetic.txt",
        help="Path to a program text file",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to processor config.yaml (default: bundled config)",
    )
    parser.add_argument(
        "--cycle-ms",
        type=float,
        default=None,
        help="Cycle time in milliseconds (default: from config)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Show engine debug logs")
    return parser.parse_args()


def format_snapshot(snap: ProcessorSnapshot) -> str:
    bus = "BUSY" if snap.bus.busy else "idle"
    message = snap.bus.message.replace("\n", " | ")
    regs = " ".join(f"{reg.name}={reg.value}" for reg in snap.registers)
    return f"[{snap.cycle_count:4d}] {snap.phase.value:<14} bus={bus:<4} {message:<32} {regs}"


class TracePrinter:
    """Clock subscriber printing one line per completed cycle."""

    def __init__(self, engine: ExecutionEngine):
        self._engine = engine

    def tick(self, cycles: int = 1) -> None:
        print(format_snapshot(self._engine.snapshot()))


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    config = load_config(args.config)
    engine = ExecutionEngine.from_config(config)
    engine.clock.subscribe(TracePrinter(engine))

    program = Path(args.program).read_text(encoding="utf-8")
    cycle_ms = args.cycle_ms if args.cycle_ms is not None else config.cycle_time_ms
    if not engine.load_program(program, cycle_ms):
        print("Nothing to run: empty program or zero cycle time")
        return

    final = engine.snapshot()
    print()
    for reg in final.registers:
        print(f"{reg.name:>4} = {reg.value} ({reg.address_type})")


if __name__ == "__main__":
    main()
