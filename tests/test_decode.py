"""Tests for instruction decoding."""

import dataclasses

import pytest
from chip8decode import (
    decode,
    decode_word,
    NoArgInstruction,
    NoArgOperation,
    AddressInstruction,
    AddressOperation,
    RegisterImmediateInstruction,
    RegisterImmediateOperation,
    SingleRegisterInstruction,
    SingleRegisterOperation,
    TwoRegisterInstruction,
    TwoRegisterOperation,
    DrawInstruction,
)
from chip8decode.decode import split


class TestSystem:
    """Test selector 0x0 (00E0, 00EE, 0NNN)."""

    def test_clear_display(self):
        """00E0 - CLS."""
        assert decode(0x00, 0xE0) == NoArgInstruction(operation=NoArgOperation.CLEAR_DISPLAY)

    def test_return(self):
        """00EE - RET."""
        assert decode(0x00, 0xEE) == NoArgInstruction(operation=NoArgOperation.RETURN)

    def test_sys(self):
        """0NNN - Legacy machine code call."""
        assert decode(0x0A, 0xBC) == AddressInstruction(operation=AddressOperation.SYS, address=0xABC)

    def test_sys_zero(self):
        """0000 is a SYS call to address 0, not an error."""
        assert decode(0x00, 0x00) == AddressInstruction(operation=AddressOperation.SYS, address=0x000)

    def test_no_arg_ignores_second_nibble(self):
        """Only byte1 selects CLS/RET under selector 0."""
        assert decode(0x05, 0xE0) == NoArgInstruction(operation=NoArgOperation.CLEAR_DISPLAY)
        assert decode(0x0F, 0xEE) == NoArgInstruction(operation=NoArgOperation.RETURN)

    def test_selector_zero_never_fails(self):
        """Every 0xxx word decodes."""
        for word in range(0x0000, 0x1000):
            assert decode_word(word) is not None


class TestAddress:
    """Test address instructions (1NNN, 2NNN, ANNN, BNNN)."""

    @pytest.mark.parametrize("selector,operation", [
        (0x1, AddressOperation.JUMP),
        (0x2, AddressOperation.CALL),
        (0xA, AddressOperation.SET_INDEX),
        (0xB, AddressOperation.JUMP_OFFSET),
    ])
    def test_every_address(self, selector, operation):
        """All 4096 addresses come straight from the low 12 bits."""
        for low_bits in range(0x1000):
            byte0 = (selector << 4) | (low_bits >> 8)
            byte1 = low_bits & 0xFF
            instruction = decode(byte0, byte1)
            assert instruction == AddressInstruction(operation=operation, address=low_bits)
            assert instruction.address == ((byte0 & 0x0F) << 8) | byte1

    def test_jump_direct(self):
        assert decode(0x12, 0x34) == AddressInstruction(operation=AddressOperation.JUMP, address=0x234)

    def test_call(self):
        assert decode(0x23, 0x45) == AddressInstruction(operation=AddressOperation.CALL, address=0x345)

    def test_set_index(self):
        assert decode(0xAB, 0xCD) == AddressInstruction(operation=AddressOperation.SET_INDEX, address=0xBCD)

    def test_jump_offset(self):
        assert decode(0xBC, 0xDE) == AddressInstruction(operation=AddressOperation.JUMP_OFFSET, address=0xCDE)


class TestRegisterImmediate:
    """Test register/immediate instructions (3XNN, 4XNN, 6XNN, 7XNN, CXNN)."""

    @pytest.mark.parametrize("raw,operation,register,immediate", [
        ((0x34, 0x56), RegisterImmediateOperation.SKIP_EQUAL, 0x4, 0x56),
        ((0x45, 0x67), RegisterImmediateOperation.SKIP_NOT_EQUAL, 0x5, 0x67),
        ((0x67, 0x89), RegisterImmediateOperation.SET, 0x7, 0x89),
        ((0x78, 0x9A), RegisterImmediateOperation.ADD, 0x8, 0x9A),
        ((0xCD, 0xEF), RegisterImmediateOperation.RANDOM_AND, 0xD, 0xEF),
    ])
    def test_register_immediate(self, raw, operation, register, immediate):
        assert decode(*raw) == RegisterImmediateInstruction(
            operation=operation, register=register, immediate=immediate
        )

    def test_immediate_extremes(self):
        """Immediate covers the full byte."""
        assert decode(0x60, 0x00).immediate == 0x00
        assert decode(0x6F, 0xFF) == RegisterImmediateInstruction(
            operation=RegisterImmediateOperation.SET, register=0xF, immediate=0xFF
        )


class TestTwoRegister:
    """Test register/register instructions (5XY0, 8XYN, 9XY0)."""

    @pytest.mark.parametrize("raw,operation,vx,vy", [
        ((0x56, 0x70), TwoRegisterOperation.SKIP_EQUAL, 0x6, 0x7),
        ((0x89, 0xA0), TwoRegisterOperation.SET, 0x9, 0xA),
        ((0x8A, 0xB1), TwoRegisterOperation.OR, 0xA, 0xB),
        ((0x8B, 0xC2), TwoRegisterOperation.AND, 0xB, 0xC),
        ((0x8C, 0xD3), TwoRegisterOperation.XOR, 0xC, 0xD),
        ((0x8D, 0xE4), TwoRegisterOperation.ADD, 0xD, 0xE),
        ((0x8E, 0xF5), TwoRegisterOperation.SUBTRACT, 0xE, 0xF),
        ((0x8F, 0x06), TwoRegisterOperation.SHIFT_RIGHT, 0xF, 0x0),
        ((0x80, 0x17), TwoRegisterOperation.SUBTRACT_REVERSE, 0x0, 0x1),
        ((0x81, 0x2E), TwoRegisterOperation.SHIFT_LEFT, 0x1, 0x2),
        ((0x92, 0x30), TwoRegisterOperation.SKIP_NOT_EQUAL, 0x2, 0x3),
    ])
    def test_two_register(self, raw, operation, vx, vy):
        assert decode(*raw) == TwoRegisterInstruction(operation=operation, vx=vx, vy=vy)

    def test_operands_keep_their_roles(self):
        """VX comes from byte0, VY from the high nibble of byte1."""
        instruction = decode(0x83, 0x54)
        assert instruction.vx == 3
        assert instruction.vy == 5


class TestSingleRegister:
    """Test single-register instructions (EXNN, FXNN)."""

    @pytest.mark.parametrize("raw,operation,register", [
        ((0xEF, 0x9E), SingleRegisterOperation.SKIP_PRESSED, 0xF),
        ((0xEF, 0xA1), SingleRegisterOperation.SKIP_NOT_PRESSED, 0xF),
        ((0xF0, 0x07), SingleRegisterOperation.READ_DELAY_TIMER, 0x0),
        ((0xF1, 0x0A), SingleRegisterOperation.WAIT_FOR_KEY, 0x1),
        ((0xF2, 0x15), SingleRegisterOperation.SET_DELAY_TIMER, 0x2),
        ((0xF2, 0x18), SingleRegisterOperation.SET_SOUND_TIMER, 0x2),
        ((0xF3, 0x1E), SingleRegisterOperation.ADD_TO_INDEX, 0x3),
        ((0xF4, 0x29), SingleRegisterOperation.LOAD_SPRITE, 0x4),
        ((0xF5, 0x33), SingleRegisterOperation.STORE_BCD, 0x5),
        ((0xF6, 0x55), SingleRegisterOperation.STORE_REGISTERS, 0x6),
        ((0xF7, 0x65), SingleRegisterOperation.READ_TO_REGISTERS, 0x7),
    ])
    def test_single_register(self, raw, operation, register):
        assert decode(*raw) == SingleRegisterInstruction(operation=operation, register=register)

    def test_every_single_register_operation_is_reachable(self):
        """Each of the eleven tags decodes from some word."""
        seen = {
            decode(0xE0, low).operation for low in (0x9E, 0xA1)
        } | {
            decode(0xF0, low).operation for low in (0x07, 0x0A, 0x15, 0x18, 0x1E, 0x29, 0x33, 0x55, 0x65)
        }
        assert seen == set(SingleRegisterOperation)


class TestDraw:
    """Test DXYN."""

    def test_draw(self):
        assert decode(0xD0, 0x12) == DrawInstruction(vx=0, vy=1, height=2)

    def test_every_height(self):
        """Draw never fails; height 0 is legal."""
        for height in range(16):
            assert decode(0xD0, 0x10 | height).height == height

    def test_zero_height(self):
        assert decode(0xDA, 0xB0) == DrawInstruction(vx=0xA, vy=0xB, height=0)


class TestInputs:
    """Test the decoder's input handling."""

    def test_decode_word_matches_bytes(self):
        assert decode_word(0xF765) == decode(0xF7, 0x65)

    def test_split(self):
        fields = split(0xD123)
        assert (fields.selector, fields.x, fields.y, fields.n, fields.nn, fields.nnn) == (0xD, 1, 2, 3, 0x23, 0x123)

    @pytest.mark.parametrize("high,low", [(0x100, 0x00), (0x00, 0x100), (-1, 0x00)])
    def test_byte_out_of_range(self, high, low):
        with pytest.raises(ValueError, match="must be in"):
            decode(high, low)

    def test_word_out_of_range(self):
        with pytest.raises(ValueError, match="must be in"):
            decode_word(0x10000)

    @pytest.mark.parametrize("high,low", [("12", 0x34), (0x12, 52.9), (0x12, "0x34"), (True, 0x34), (0x12, False)])
    def test_byte_must_be_an_integer(self, high, low):
        """Strings, floats and bools are rejected rather than converted."""
        with pytest.raises(TypeError):
            decode(high, low)

    @pytest.mark.parametrize("word", [53248.7, 53248.0, "53248", True])
    def test_word_must_be_an_integer(self, word):
        with pytest.raises(TypeError):
            decode_word(word)

    def test_integer_like_values_are_accepted(self):
        """Anything implementing ``__index__`` decodes like the plain int."""
        class Index:
            def __index__(self):
                return 0x12

        assert decode(Index(), 0x34) == decode(0x12, 0x34)

    def test_instructions_are_values(self):
        """Decoding the same word twice gives equal values."""
        first = decode(0x12, 0x34)
        second = decode(0x12, 0x34)
        assert first == second
        assert first != decode(0x22, 0x34)

    def test_instructions_are_immutable(self):
        instruction = decode(0x12, 0x34)
        with pytest.raises(dataclasses.FrozenInstanceError):
            instruction.address = 0
