"""Tests for control flow instructions."""

import pytest
from chip8vm import AddressOutOfRange, create_state, execute, JumpOffset, Quirks, step
from chip8vm.state import set_pc
from conftest import setup_sprite_in_memory, state_with_rom


class TestJump:
    """Test jump instructions."""

    def test_execute_jump(self, fresh_state):
        """Test 1NNN - Jump to address."""
        state = execute(fresh_state, 0x1ABC)
        assert state.pc == 0xABC

    def test_call_pushes_return_address(self, fresh_state):
        """Test 2NNN - return address is the current PC."""
        state = fresh_state.replace(pc=fresh_state.pc + 6)
        state = execute(state, 0x2400)
        assert state.pc == 0x400
        assert state.stack.data[0] == 0x206


class TestSkipInstructions:
    """Test all skip instruction variants."""

    def test_skip_if_equal_immediate_true(self, fresh_state):
        """3XNN - Should skip when VX == NN."""
        state = fresh_state.replace(V=fresh_state.V.at[5].set(0x42))
        initial_pc = state.pc

        state = execute(state, 0x3542)  # Skip if V5 == 0x42
        assert state.pc == initial_pc + 2

    def test_skip_if_equal_immediate_false(self, fresh_state):
        """3XNN - Should not skip when VX != NN."""
        state = fresh_state.replace(V=fresh_state.V.at[5].set(0x41))
        initial_pc = state.pc

        state = execute(state, 0x3542)  # Skip if V5 == 0x42
        assert state.pc == initial_pc

    def test_skip_if_not_equal_immediate_true(self, fresh_state):
        """4XNN - Should skip when VX != NN."""
        state = fresh_state.replace(V=fresh_state.V.at[3].set(0x10))
        initial_pc = state.pc

        state = execute(state, 0x4320)  # Skip if V3 != 0x20
        assert state.pc == initial_pc + 2

    def test_skip_if_not_equal_immediate_false(self, fresh_state):
        """4XNN - Should not skip when VX == NN."""
        state = fresh_state.replace(V=fresh_state.V.at[3].set(0x20))
        initial_pc = state.pc

        state = execute(state, 0x4320)  # Skip if V3 != 0x20
        assert state.pc == initial_pc

    def test_skip_if_equal_register_true(self, fresh_state):
        """5XY0 - Should skip when VX == VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x55))
        state = state.replace(V=state.V.at[2].set(0x55))
        initial_pc = state.pc

        state = execute(state, 0x5120)  # Skip if V1 == V2
        assert state.pc == initial_pc + 2

    def test_skip_if_equal_register_false(self, fresh_state):
        """5XY0 - Should not skip when VX != VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x55))
        state = state.replace(V=state.V.at[2].set(0x44))
        initial_pc = state.pc

        state = execute(state, 0x5120)  # Skip if V1 == V2
        assert state.pc == initial_pc

    def test_skip_if_not_equal_register_true(self, fresh_state):
        """9XY0 - Should skip when VX != VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[7].set(0xAA))
        state = state.replace(V=state.V.at[8].set(0xBB))
        initial_pc = state.pc

        state = execute(state, 0x9780)  # Skip if V7 != V8
        assert state.pc == initial_pc + 2

    def test_skip_if_not_equal_register_false(self, fresh_state):
        """9XY0 - Should not skip when VX == VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[7].set(0xCC))
        state = state.replace(V=state.V.at[8].set(0xCC))
        initial_pc = state.pc

        state = execute(state, 0x9780)  # Skip if V7 != V8
        assert state.pc == initial_pc

    def test_skip_with_zero_values(self, fresh_state):
        """Test skip instructions with zero values."""
        state = fresh_state
        initial_pc = state.pc

        # V0 == 0, should skip
        state = execute(state, 0x3000)  # Skip if V0 == 0
        assert state.pc == initial_pc + 2

    def test_skip_boundary_values(self, fresh_state):
        """Test skip instructions with boundary values."""
        state = fresh_state.replace(V=fresh_state.V.at[0].set(0xFF))
        initial_pc = state.pc

        state = execute(state, 0x30FF)  # Skip if V0 == 255
        assert state.pc == initial_pc + 2


class TestJumpWithOffset:
    """Test jump with offset under both quirk settings."""

    def test_jump_with_offset_default(self, fresh_state):
        """BNNN - Jump with V0 offset."""
        state = execute(fresh_state, 0x6010)  # V0 = 0x10
        state = execute(state, 0xB250)  # Jump to 0x250 + V0
        assert state.pc == 0x260

    def test_jump_with_offset_modern(self, modern_state):
        """BXNN - Jump with VX offset."""
        state = execute(modern_state, 0x6210)  # V2 = 0x10
        state = execute(state, 0xB250)  # Jump to 0x250 + V2
        assert state.pc == 0x260

    def test_jump_mode_comparison(self):
        """Test that the jump-offset quirk picks the register."""
        results = {}
        for offset in JumpOffset:
            state = create_state(quirks=Quirks(jump_offset=offset))
            state = execute(state, 0x6010)  # V0 = 0x10
            state = execute(state, 0x6230)  # V2 = 0x30
            state = execute(state, 0xB250)
            results[offset] = int(state.pc)

        assert results[JumpOffset.V0] == 0x260  # 0x250 + V0
        assert results[JumpOffset.VX] == 0x280  # 0x250 + V2

    def test_jump_with_offset_past_memory_is_fatal(self, fresh_state):
        """BNNN - Target past 0xFFF raises by default."""
        state = execute(fresh_state, 0x60FF)
        with pytest.raises(AddressOutOfRange):
            execute(state, 0xBFFF)

    def test_jump_with_offset_wraps_on_cosmac(self, legacy_state):
        """BNNN - Target wraps to 12 bits with address wrapping enabled."""
        state = execute(legacy_state, 0x60FF)
        state = execute(state, 0xBFFF)
        assert state.pc == (0xFFF + 0xFF) & 0xFFF

    def test_jump_with_offset_from_rom(self, modern_state):
        """BXNN - X comes from the opcode's second nibble when run from memory."""
        state = state_with_rom(
            modern_state,
            0x6305,  # V3 = 5
            0x6011,  # V0 = 0x11
            0xB310,  # jump to 0x310 + V3
        )
        for _ in range(3):
            state = step(state)
        assert state.pc == 0x315

    def test_jump_with_offset_from_rom_default(self, fresh_state):
        state = state_with_rom(fresh_state, 0x6305, 0x6011, 0xB310)
        for _ in range(3):
            state = step(state)
        assert state.pc == 0x321


class TestProgramCounter:
    """Test the program counter at the top of memory."""

    def test_pc_wraps_after_last_instruction(self, legacy_state):
        state = setup_sprite_in_memory(legacy_state, 0xFFE, [0x60, 0x01])  # V0 = 1
        state = set_pc(state, 0xFFE)

        state = step(state)

        assert state.V[0] == 1
        assert state.pc == 0x000

    def test_skip_wraps(self, legacy_state):
        state = set_pc(legacy_state, 0xFFE)
        state = execute(state, 0x3000)  # V0 == 0, skip
        assert state.pc == 0x000

    def test_set_pc_masks_when_wrapping(self, legacy_state):
        state = set_pc(legacy_state, 0xFFFE)
        assert state.pc == 0xFFE

    def test_pc_past_memory_is_fatal(self, fresh_state):
        state = setup_sprite_in_memory(fresh_state, 0xFFE, [0x60, 0x01])
        state = set_pc(state, 0xFFE)

        state = step(state)
        assert state.pc == 0x1000

        with pytest.raises(AddressOutOfRange):
            step(state)
