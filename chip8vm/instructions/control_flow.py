"""CHIP-8 control flow instructions."""

from chip8vm.state import EmulatorState, set_pc
from chip8vm.decode import Instruction
from chip8vm.quirks import JumpOffset
from chip8vm.ram import resolve_address
from chip8vm.stack import push


def execute_jump(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """1NNN - Jump to address NNN."""
    return set_pc(state, instruction.nnn)


def execute_call(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, int(state.pc)))
    return execute_jump(state, instruction)


def make_skip_instruction(condition_fn):
    """Factory for skip instructions."""
    def skip_instruction(state: EmulatorState, instruction: Instruction) -> EmulatorState:
        if condition_fn(state, instruction):
            return set_pc(state, int(state.pc) + 2)
        return state
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == inst.nn
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != inst.nn
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == int(state.V[inst.y])
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != int(state.V[inst.y])
)

# Keys are addressed by the low nibble of VX
execute_skip_if_key = make_skip_instruction(
    lambda state, inst: bool(state.keypad[int(state.V[inst.x]) & 0xF])
)

execute_skip_if_not_key = make_skip_instruction(
    lambda state, inst: not bool(state.keypad[int(state.V[inst.x]) & 0xF])
)


def execute_jump_with_offset(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """BNNN - Jump to NNN + V0, or XNN + VX under the BXNN quirk."""
    if state.quirks.jump_offset is JumpOffset.VX:
        # X is the high nibble of the jump target
        register_value = int(state.V[(instruction.nnn >> 8) & 0xF])
    else:
        register_value = int(state.V[0])
    return set_pc(state, resolve_address(state, instruction.nnn + register_value))
