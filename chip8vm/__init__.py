"""CHIP-8 interpreter core package."""

from chip8vm.state import EmulatorState, StackState, create_state
from chip8vm.emulator import dispatch, execute, fetch, step, tick_timers, sound_active
from chip8vm.decode import Instruction, Op, decode, encode
from chip8vm.errors import (
    Chip8Error, DecodeError, UnknownOpcode, ExecutionError,
    StackOverflow, StackUnderflow, AddressOutOfRange, UnsupportedInstruction,
)
from chip8vm.quirks import Quirks, ShiftSource, IndexIncrement, SpriteEdge, JumpOffset, AddressOverflow, MachineRoutine
from chip8vm.ram import load_program, load_rom
from chip8vm.keypad import press_key, release_key, set_keypad
from chip8vm.framebuffer import display_snapshot, display_to_text
from chip8vm.interpreter import Interpreter, InterpreterConfig
from chip8vm.constants import *

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "fetch",
    "execute",
    "dispatch",
    "step",
    "tick_timers",
    "sound_active",
    "load_program",
    "load_rom",
    "Instruction",
    "Op",
    "decode",
    "encode",
    "Chip8Error",
    "DecodeError",
    "UnknownOpcode",
    "ExecutionError",
    "StackOverflow",
    "StackUnderflow",
    "AddressOutOfRange",
    "UnsupportedInstruction",
    "Quirks",
    "ShiftSource",
    "IndexIncrement",
    "SpriteEdge",
    "JumpOffset",
    "AddressOverflow",
    "MachineRoutine",
    "press_key",
    "release_key",
    "set_keypad",
    "display_snapshot",
    "display_to_text",
    "Interpreter",
    "InterpreterConfig",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "STACK_SIZE",
]
