"""CHIP-8 emulator state structures."""

import jax
import jax.numpy as jnp
from flax.struct import dataclass, PyTreeNode, field

from chip8vm.constants import (
    ADDRESS_MASK, PROGRAM_START, FONT_START, FONT_DATA, MEMORY_SIZE, NUM_KEYS, NUM_REGISTERS,
    SCREEN_WIDTH, SCREEN_HEIGHT, STACK_SIZE,
)
from chip8vm.quirks import AddressOverflow, Quirks


@dataclass(frozen=True)
class StackState:
    """Stack state for subroutine calls."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint16))
    pointer: int = 0


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state.

    Every operation returns a new state; a state is never mutated in place.
    """
    rng: jax.Array
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.asarray(PROGRAM_START, dtype=jnp.uint16))
    display: jnp.ndarray = field(default_factory=lambda: jnp.zeros((SCREEN_WIDTH, SCREEN_HEIGHT), dtype=jnp.bool_))
    stack: StackState = field(default_factory=StackState)
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    # FX0A suspension
    awaiting_key: bool = False
    key_register: int = 0
    key_latch: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    quirks: Quirks = field(pytree_node=False, default=Quirks())


def create_state(rng: jax.Array = None, quirks: Quirks = None) -> EmulatorState:
    """Create initial emulator state with font data loaded."""
    if rng is None:
        rng = jax.random.PRNGKey(0)
    state = EmulatorState(rng, quirks=quirks if quirks is not None else Quirks())
    font = jnp.array(FONT_DATA, dtype=jnp.uint8)
    return state.replace(memory=state.memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(font))


def set_register(state: EmulatorState, index: int, value: int) -> EmulatorState:
    """Write an 8-bit value into VX."""
    if not 0 <= index < NUM_REGISTERS:
        raise ValueError(f"Register index {index} outside V0-VF")
    return state.replace(V=state.V.at[index].set(value & 0xFF))


def set_pc(state: EmulatorState, address: int) -> EmulatorState:
    """Move the program counter; it wraps to 12 bits under address wrapping."""
    if state.quirks.address_overflow is AddressOverflow.WRAP:
        address &= ADDRESS_MASK
    return state.replace(pc=jnp.asarray(address, dtype=jnp.uint16))


def set_index(state: EmulatorState, address: int) -> EmulatorState:
    return state.replace(I=jnp.asarray(address, dtype=jnp.uint16))
