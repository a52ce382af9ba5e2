"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp
from chip8vm.state import EmulatorState, set_index, set_pc, set_register
from chip8vm.decode import Instruction
from chip8vm.constants import FONT_GLYPH_SIZE, FONT_START
from chip8vm.quirks import IndexIncrement
from chip8vm.ram import read_bytes, resolve_address, write_bytes


def execute_get_delay_timer(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return set_register(state, instruction.x, int(state.delay_timer))


def execute_set_delay_timer(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.x])


def execute_set_sound_timer(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.x])


def execute_add_to_index(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """FX1E - Add VX to I register."""
    return set_index(state, resolve_address(state, int(state.I) + int(state.V[instruction.x])))


def execute_wait_for_key(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """FX0A - Wait for key press.

    PC is rewound onto this instruction and the machine parks in the
    awaiting-key state; `emulator.step` resolves it once a key goes down.
    Keys already held now only count after being released and pressed again.
    """
    state = set_pc(state, int(state.pc) - 2)
    return state.replace(awaiting_key=True, key_register=instruction.x, key_latch=state.keypad)


def resolve_key_wait(state: EmulatorState) -> EmulatorState:
    """Finish a pending FX0A if a key was pressed since the last poll."""
    newly_pressed = state.keypad & ~state.key_latch
    if not bool(jnp.any(newly_pressed)):
        return state.replace(key_latch=state.keypad)
    pressed_key = int(jnp.argmax(newly_pressed))
    state = set_register(state, state.key_register, pressed_key)
    state = set_pc(state, int(state.pc) + 2)
    return state.replace(awaiting_key=False, key_latch=jnp.zeros_like(state.key_latch))


def execute_font_character(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX (low nibble)."""
    digit = int(state.V[instruction.x]) & 0xF
    return set_index(state, FONT_START + digit * FONT_GLYPH_SIZE)


def execute_bcd_conversion(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = int(state.V[instruction.x])
    digits = [value // 100, (value // 10) % 10, value % 10]
    return write_bytes(state, int(state.I), digits)


def _advance_index(state: EmulatorState, x: int) -> EmulatorState:
    increment = state.quirks.index_increment
    if increment is IndexIncrement.X_PLUS_ONE:
        return set_index(state, resolve_address(state, int(state.I) + x + 1))
    if increment is IndexIncrement.X:
        return set_index(state, resolve_address(state, int(state.I) + x))
    return state


def execute_store_registers(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I."""
    state = write_bytes(state, int(state.I), state.V[:instruction.x + 1])
    return _advance_index(state, instruction.x)


def execute_load_registers(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I."""
    values = read_bytes(state, int(state.I), instruction.x + 1)
    state = state.replace(V=state.V.at[:instruction.x + 1].set(values))
    return _advance_index(state, instruction.x)
