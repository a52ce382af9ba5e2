"""Tests for subroutine stack discipline."""

import pytest
from chip8vm import step, STACK_SIZE, StackOverflow, StackUnderflow
from conftest import state_with_rom


def test_sixteen_nested_calls(fresh_state):
    """A subroutine that calls itself fills the stack after 16 calls."""
    state = state_with_rom(fresh_state, 0x2200)  # CALL 0x200

    for depth in range(1, STACK_SIZE + 1):
        state = step(state)
        assert state.stack.pointer == depth
    assert all(int(address) == 0x202 for address in state.stack.data)

    with pytest.raises(StackOverflow):
        step(state)


def test_fault_leaves_state_intact(fresh_state):
    """A faulting cycle does not change the state it was given."""
    state = state_with_rom(fresh_state, 0x2200)
    for _ in range(STACK_SIZE):
        state = step(state)

    with pytest.raises(StackOverflow):
        step(state)

    assert state.stack.pointer == STACK_SIZE
    assert state.pc == 0x200


def test_return_on_empty_stack(fresh_state):
    state = state_with_rom(fresh_state, 0x00EE)
    with pytest.raises(StackUnderflow):
        step(state)


def test_nested_returns_unwind_in_order(fresh_state):
    state = state_with_rom(
        fresh_state,
        0x2206,  # 0x200: CALL 0x206
        0x1202,  # 0x202: JP 0x202
        0x0000,  # 0x204
        0x220A,  # 0x206: CALL 0x20A
        0x00EE,  # 0x208: RET
        0x00EE,  # 0x20A: RET
    )
    state = step(state)
    state = step(state)
    assert state.stack.pointer == 2
    state = step(state)
    assert state.pc == 0x208
    state = step(state)
    assert state.pc == 0x202
    assert state.stack.pointer == 0
