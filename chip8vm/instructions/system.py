"""CHIP-8 system instructions (0x0xxx)."""

from chip8vm.state import EmulatorState, set_pc
from chip8vm.decode import Instruction
from chip8vm.errors import UnsupportedInstruction
from chip8vm.framebuffer import clear_display
from chip8vm.quirks import MachineRoutine
from chip8vm.stack import pop


def execute_machine_routine(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """0NNN - Call RCA 1802 routine at NNN.

    Machine code is not emulated. The instruction is a fault unless the
    machine-routine quirk says to skip it.
    """
    if state.quirks.machine_routine is MachineRoutine.IGNORE:
        return state
    raise UnsupportedInstruction(instruction.nnn)


def execute_clear_screen(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """00E0 - Clear display."""
    return clear_display(state)


def execute_return(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack)
    return set_pc(state.replace(stack=stack), address)
