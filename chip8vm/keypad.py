"""Keypad updates supplied by the host's input layer."""

from typing import Iterable

import jax.numpy as jnp

from chip8vm.constants import NUM_KEYS
from chip8vm.state import EmulatorState


def _check_key(key: int) -> int:
    if not 0 <= key < NUM_KEYS:
        raise ValueError(f"Key {key!r} outside 0x0-0xF")
    return key


def press_key(state: EmulatorState, key: int) -> EmulatorState:
    return state.replace(keypad=state.keypad.at[_check_key(key)].set(True))


def release_key(state: EmulatorState, key: int) -> EmulatorState:
    return state.replace(keypad=state.keypad.at[_check_key(key)].set(False))


def set_keypad(state: EmulatorState, pressed: Iterable[int]) -> EmulatorState:
    """Replace the whole keypad: keys in `pressed` are down, the rest are up."""
    keypad = jnp.zeros(NUM_KEYS, dtype=jnp.bool_)
    for key in pressed:
        keypad = keypad.at[_check_key(key)].set(True)
    return state.replace(keypad=keypad)
