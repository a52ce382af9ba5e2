"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax.numpy as jnp
from chip8vm import Quirks, create_state, load_program


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture
def modern_state():
    """Provide a fresh state with CHIP-48 era quirks."""
    return create_state(quirks=Quirks.modern())


@pytest.fixture
def legacy_state():
    """Provide a fresh state with COSMAC VIP quirks."""
    return create_state(quirks=Quirks.cosmac_vip())


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def rom(*opcodes):
    """Assemble 16-bit opcodes into big-endian ROM bytes."""
    return b"".join(opcode.to_bytes(2, "big") for opcode in opcodes)


def state_with_rom(state, *opcodes):
    return load_program(state, rom(*opcodes))
