"""CHIP-8 display operations."""

import jax.numpy as jnp
from chip8vm.state import EmulatorState, set_register
from chip8vm.decode import Instruction
from chip8vm.constants import FLAG_REGISTER, MAX_SPRITE_HEIGHT, SCREEN_WIDTH, SCREEN_HEIGHT
from chip8vm.framebuffer import composite_sprite
from chip8vm.quirks import SpriteEdge
from chip8vm.ram import read_bytes


def execute_display(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N."""
    sprite_x = int(state.V[instruction.x]) % SCREEN_WIDTH
    sprite_y = int(state.V[instruction.y]) % SCREEN_HEIGHT

    rows = read_bytes(state, int(state.I), instruction.n)
    sprite = jnp.zeros(MAX_SPRITE_HEIGHT, dtype=jnp.uint8).at[:instruction.n].set(rows)

    display, collision = composite_sprite(
        state.display, sprite, sprite_x, sprite_y, instruction.n,
        wrap=state.quirks.sprite_edge is SpriteEdge.WRAP,
    )
    return set_register(state.replace(display=display), FLAG_REGISTER, int(collision))
