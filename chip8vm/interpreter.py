"""Cooperative host driver for the CHIP-8 core.

Runs the instruction loop and the 60 Hz timer on a single thread:
each frame executes `instructions_per_frame` steps, then ticks the
timers once.
"""

from typing import Iterable, Optional

import jax
import numpy as np
from flax.struct import dataclass, field
from tqdm import tqdm

from chip8vm.constants import TIMER_FREQUENCY
from chip8vm.decode import decode
from chip8vm.emulator import step, tick_timers, sound_active
from chip8vm.errors import Chip8Error, DecodeError
from chip8vm.framebuffer import display_snapshot
from chip8vm.keypad import press_key, release_key, set_keypad
from chip8vm.logging import InterpreterLogger
from chip8vm.quirks import Quirks
from chip8vm.ram import load_program, read_bytes
from chip8vm.state import EmulatorState, create_state


@dataclass(frozen=True)
class InterpreterConfig:
    """Settings resolved once when an interpreter is built.

    Attributes:
        instruction_frequency: CHIP-8 CPU frequency in Hz (typically 700)
        timer_frequency: Timer tick rate in Hz; one frame per tick
        quirks: Instruction behaviour switches
        seed: Seed for the CXNN random source
        log_level: Console log level
        trace: Log every executed instruction at DEBUG level
    """
    instruction_frequency: int = field(pytree_node=False, default=700)
    timer_frequency: int = field(pytree_node=False, default=TIMER_FREQUENCY)
    quirks: Quirks = field(pytree_node=False, default=Quirks())
    seed: int = field(pytree_node=False, default=0)
    log_level: str = field(pytree_node=False, default="INFO")
    trace: bool = field(pytree_node=False, default=False)

    def __post_init__(self):
        if self.instruction_frequency <= 0 or self.timer_frequency <= 0:
            raise ValueError("instruction_frequency and timer_frequency must be positive")
        if self.instruction_frequency < self.timer_frequency:
            raise ValueError("instruction_frequency must be at least timer_frequency")

    @property
    def instructions_per_frame(self) -> int:
        """Number of CHIP-8 instructions executed between two timer ticks."""
        return self.instruction_frequency // self.timer_frequency


class Interpreter:
    """Owns one machine state and advances it on behalf of the host.

    Faults are logged, mark the interpreter as halted and are re-raised; the
    state stays at the last completed cycle so the host can inspect it,
    `reset()` or give up.
    """

    def __init__(self, config: InterpreterConfig = None, logger: InterpreterLogger = None):
        self.config = config if config is not None else InterpreterConfig()
        self.logger = logger if logger is not None else InterpreterLogger(log_level=self.config.log_level)
        self.rom: bytes = b""
        self.halted = False
        self.cycles = 0
        self.state = self._fresh_state()

    def _fresh_state(self) -> EmulatorState:
        return create_state(jax.random.PRNGKey(self.config.seed), self.config.quirks)

    def load(self, rom: bytes, source: Optional[str] = None) -> None:
        """Reset the machine and load a ROM image."""
        self.rom = bytes(rom)
        self.reset()
        self.logger.log_rom_loaded(len(self.rom), source)

    def load_file(self, path: str) -> None:
        with open(path, "rb") as f:
            self.load(f.read(), source=path)

    def reset(self) -> None:
        """Reinitialise all state and reload the current ROM."""
        self.state = load_program(self._fresh_state(), self.rom)
        self.halted = False
        self.cycles = 0
        self.logger.log_reset()

    def _current_opcode(self) -> Optional[int]:
        try:
            high, low = (int(byte) for byte in read_bytes(self.state, int(self.state.pc), 2))
        except Chip8Error:
            return None
        return (high << 8) | low

    def step(self) -> EmulatorState:
        """Execute one cycle, or poll the keypad while FX0A is waiting."""
        if self.halted:
            raise RuntimeError("Interpreter is halted; call reset() first")
        fetching = not self.state.awaiting_key
        if self.config.trace and fetching:
            opcode = self._current_opcode()
            if opcode is not None:
                try:
                    name = decode(opcode).op.name
                except DecodeError:
                    name = "???"
                self.logger.log_instruction(int(self.state.pc), opcode, name)
        try:
            self.state = step(self.state)
        except Chip8Error as error:
            self.halted = True
            self.logger.log_fault(error, int(self.state.pc), self._current_opcode())
            raise
        if fetching:
            self.cycles += 1
        return self.state

    def tick_timers(self) -> EmulatorState:
        self.state = tick_timers(self.state)
        return self.state

    def run_frame(self) -> EmulatorState:
        """Run one timer period: k steps followed by one timer tick."""
        for _ in range(self.config.instructions_per_frame):
            self.step()
        return self.tick_timers()

    def run(self, frames: int, progress: bool = False) -> EmulatorState:
        """Run `frames` timer periods, optionally with a progress bar."""
        for _ in tqdm(range(frames), desc="Emulating", unit="frame", disable=not progress):
            self.run_frame()
        return self.state

    def press_key(self, key: int) -> None:
        self.state = press_key(self.state, key)

    def release_key(self, key: int) -> None:
        self.state = release_key(self.state, key)

    def set_keys(self, pressed: Iterable[int]) -> None:
        self.state = set_keypad(self.state, pressed)

    @property
    def display(self) -> np.ndarray:
        """Read-only (32, 64) snapshot of the screen."""
        return display_snapshot(self.state)

    @property
    def sound_active(self) -> bool:
        return sound_active(self.state)
