"""Console logging utilities for the CHIP-8 interpreter.

A small levelled logger with optional colours and timestamps, plus an
interpreter-specific subclass used by the host driver to report ROM loads,
resets, faults and (at DEBUG level) an instruction trace.
"""

import time
import sys
from typing import Optional

from chip8vm.errors import Chip8Error


class ConsoleLogger:
    """Flexible console logger with level filtering and formatters."""

    LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

    def __init__(
        self,
        name: str = "chip8vm",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream=None,
    ):
        if log_level.upper() not in self.LEVELS:
            raise ValueError(f"Unknown log level '{log_level}'. Available: {list(self.LEVELS)}")
        self.name = name
        self.log_level = log_level.upper()
        self.stream = stream if stream is not None else sys.stdout
        self.use_colors = (
            use_colors and hasattr(self.stream, "isatty") and self.stream.isatty()
        )
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

        self.colors = (
            {
                "DEBUG": "\033[36m",
                "INFO": "\033[32m",
                "WARNING": "\033[33m",
                "ERROR": "\033[31m",
                "CRITICAL": "\033[35m",
                "RESET": "\033[0m"
            }
            if self.use_colors
            else {k: "" for k in (*self.LEVELS, "RESET")}
        )

        self.level_order = {level: order for order, level in enumerate(self.LEVELS)}

    def _should_log(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return self.level_order.get(level.upper(), 1) >= self.level_order[self.log_level]

    def _format_message(self, level: str, message: str) -> str:
        """Format log message with timestamp, level, and colors."""
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        name_str = f"[{self.name}]"

        if self.use_colors:
            color = self.colors.get(level.upper(), "")
            reset = self.colors["RESET"]
            level_str = f"{color}{level_str}{reset}"

        return f"{timestamp}{level_str}{name_str} {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        if self._should_log(level):
            print(self._format_message(level, message), file=self.stream, flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)

    def critical(self, message: str):
        self.log("CRITICAL", message)


class InterpreterLogger(ConsoleLogger):
    """Logger for the host loop, with helpers for interpreter events."""

    def __init__(self, name: str = "chip8vm", **kwargs):
        super().__init__(name, **kwargs)

    def log_rom_loaded(self, size: int, source: Optional[str] = None):
        origin = f" from {source}" if source else ""
        self.info(f"Loaded {size} byte ROM{origin} at 0x200")

    def log_reset(self):
        self.info("Machine reset")

    def log_fault(self, error: Chip8Error, pc: int, opcode: Optional[int] = None):
        """Report a fault with the address (and opcode) it happened at."""
        context = f"PC=0x{pc:03X}"
        if opcode is not None:
            context += f" opcode=0x{opcode:04X}"
        self.error(f"{type(error).__name__} at {context}: {error}")

    def log_instruction(self, pc: int, opcode: int, name: str):
        self.debug(f"0x{pc:03X}: {opcode:04X} {name}")
