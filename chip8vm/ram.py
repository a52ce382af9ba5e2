"""Bounds-checked access to CHIP-8 memory."""

import jax.numpy as jnp

from chip8vm.constants import ADDRESS_MASK, MAX_PROGRAM_SIZE, PROGRAM_START
from chip8vm.errors import AddressOutOfRange
from chip8vm.quirks import AddressOverflow
from chip8vm.state import EmulatorState


def resolve_addresses(state: EmulatorState, address: int, count: int, write: bool = False) -> jnp.ndarray:
    """Return the `count` consecutive addresses starting at `address`.

    Addresses past 0xFFF either raise or wrap, depending on the
    address-overflow quirk. Writes into the interpreter region always raise.
    """
    if count < 0:
        raise ValueError(f"Negative byte count {count}")
    last = address + count - 1
    if address < 0:
        raise AddressOutOfRange(address, "negative address")
    if state.quirks.address_overflow is AddressOverflow.WRAP:
        addresses = (address + jnp.arange(count)) & ADDRESS_MASK
    else:
        if count and last > ADDRESS_MASK:
            raise AddressOutOfRange(last)
        addresses = address + jnp.arange(count)
    if write and count and bool(jnp.any(addresses < PROGRAM_START)):
        first_reserved = int(addresses[jnp.argmax(addresses < PROGRAM_START)])
        raise AddressOutOfRange(first_reserved, "write into interpreter region")
    return addresses


def resolve_address(state: EmulatorState, address: int) -> int:
    """Apply the address-overflow policy to a single computed address."""
    return int(resolve_addresses(state, address, 1)[0])


def read_bytes(state: EmulatorState, address: int, count: int) -> jnp.ndarray:
    """Read `count` bytes starting at `address`."""
    return state.memory[resolve_addresses(state, address, count)]


def read_byte(state: EmulatorState, address: int) -> int:
    return int(read_bytes(state, address, 1)[0])


def write_bytes(state: EmulatorState, address: int, values) -> EmulatorState:
    """Write `values` to consecutive addresses starting at `address`."""
    values = jnp.asarray(values, dtype=jnp.uint8)
    addresses = resolve_addresses(state, address, values.shape[0], write=True)
    return state.replace(memory=state.memory.at[addresses].set(values))


def load_program(state: EmulatorState, data: bytes) -> EmulatorState:
    """Copy ROM bytes verbatim into memory starting at 0x200."""
    if len(data) > MAX_PROGRAM_SIZE:
        raise ValueError(
            f"ROM is {len(data)} bytes; at most {MAX_PROGRAM_SIZE} bytes fit above 0x{PROGRAM_START:03X}"
        )
    rom_array = jnp.array(list(data), dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(data)].set(rom_array)
    return state.replace(memory=new_memory)


def load_rom(state: EmulatorState, filename: str) -> EmulatorState:
    """Load ROM file into CHIP-8 memory starting at 0x200."""
    with open(filename, 'rb') as f:
        rom_data = f.read()
    return load_program(state, rom_data)
