"""CHIP-8 display buffer: XOR sprite compositing and snapshots."""

from functools import partial

import jax
import jax.numpy as jnp
import numpy as np

from chip8vm.constants import MAX_SPRITE_HEIGHT, SCREEN_HEIGHT, SCREEN_WIDTH, SPRITE_WIDTH
from chip8vm.state import EmulatorState

# Pre-computed coordinate grids for display operations
xx, yy = jnp.meshgrid(jnp.arange(SCREEN_WIDTH), jnp.arange(SCREEN_HEIGHT), indexing='ij')


@partial(jax.jit, static_argnames="wrap")
def composite_sprite(
    display: jnp.ndarray,
    sprite: jnp.ndarray,
    x: int,
    y: int,
    height: int,
    wrap: bool = True,
) -> tuple[jnp.ndarray, jnp.ndarray]:
    """XOR a sprite onto the display.

    Args:
        display: Boolean array of shape (64, 32)
        sprite: uint8 rows, padded to MAX_SPRITE_HEIGHT
        x: Left column, already reduced modulo the screen width
        y: Top row, already reduced modulo the screen height
        height: Number of sprite rows to draw
        wrap: Wrap pixels past the right/bottom edge around to the opposite
            edge instead of clipping them

    Returns:
        Tuple of the new display and whether any lit pixel was turned off
    """
    col_offset = xx - x
    row_offset = yy - y
    if wrap:
        col_offset = col_offset % SCREEN_WIDTH
        row_offset = row_offset % SCREEN_HEIGHT

    in_sprite = (col_offset >= 0) & (col_offset < SPRITE_WIDTH) & (row_offset >= 0) & (row_offset < height)

    sprite_bytes = sprite[jnp.clip(row_offset, 0, MAX_SPRITE_HEIGHT - 1)].astype(jnp.int32)
    bits = (sprite_bytes >> (SPRITE_WIDTH - 1 - jnp.clip(col_offset, 0, SPRITE_WIDTH - 1))) & 1
    pixels = (bits == 1) & in_sprite

    return display ^ pixels, jnp.any(display & pixels)


def clear_display(state: EmulatorState) -> EmulatorState:
    return state.replace(display=jnp.zeros_like(state.display))


def display_snapshot(state: EmulatorState) -> np.ndarray:
    """Read-only copy of the display for presentation, shape (32, 64) as [y, x]."""
    pixels = np.array(state.display, dtype=np.bool_).T.copy()
    pixels.setflags(write=False)
    return pixels


def display_to_text(state: EmulatorState, on: str = "#", off: str = ".") -> str:
    """Render the display as lines of text, one per row."""
    return "\n".join("".join(on if pixel else off for pixel in row) for row in display_snapshot(state))
