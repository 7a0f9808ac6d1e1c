"""CHIP-8 instruction decoding.

Decoding is a two-level lookup: the selector (first nibble) indexes a list of
sixteen handlers, and handlers that need a second key look it up in the
sub-tables of ``chip8decode.opcodes``. Any combination missing from those
tables raises ``InvalidInstruction``.
"""

import operator
from typing import Optional

from chex import dataclass

from chip8decode.constants import (
    BYTE_MASK,
    WORD_MASK,
    SELECTOR_MASK,
    SELECTOR_SHIFT,
    X_MASK,
    X_SHIFT,
    Y_MASK,
    Y_SHIFT,
    N_MASK,
    NN_MASK,
    ADDRESS_MASK,
)
from chip8decode.instruction import (
    Instruction,
    NoArgInstruction,
    AddressInstruction,
    RegisterImmediateInstruction,
    SingleRegisterInstruction,
    TwoRegisterInstruction,
    DrawInstruction,
)
from chip8decode.opcodes import (
    NO_ARG_OPCODES,
    ADDRESS_OPCODES,
    REGISTER_IMMEDIATE_OPCODES,
    SKIP_REGISTER_OPCODES,
    ARITHMETIC_OPCODES,
    KEY_OPCODES,
    MISC_OPCODES,
)


class DecodeError(ValueError):
    """Base class for decoding failures."""


class InvalidInstruction(DecodeError):
    """Raised when a word has no defined meaning."""

    def __init__(self, word: int):
        self.word = word
        super().__init__(f"Invalid instruction 0x{word:04X}")


@dataclass(frozen=True)
class OpcodeFields:
    """16-bit word split into its nibble fields."""
    raw: int
    selector: int  # First nibble
    x: int         # Second nibble (VX register)
    y: int         # Third nibble (VY register)
    n: int         # Fourth nibble (4-bit immediate)
    nn: int        # Last byte (8-bit immediate)
    nnn: int       # Last 12 bits (12-bit address)


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of ``try_decode``: either an instruction or the decode error."""
    instruction: Optional[Instruction] = None
    error: Optional[InvalidInstruction] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def split(word: int) -> OpcodeFields:
    """Split 16-bit word into components."""
    return OpcodeFields(
        raw=word,
        selector=(word & SELECTOR_MASK) >> SELECTOR_SHIFT,
        x=(word & X_MASK) >> X_SHIFT,
        y=(word & Y_MASK) >> Y_SHIFT,
        n=word & N_MASK,
        nn=word & NN_MASK,
        nnn=word & ADDRESS_MASK,
    )


def _lookup(table, key: int, fields: OpcodeFields):
    definition = table.get(key)
    if definition is None:
        raise InvalidInstruction(fields.raw)
    return definition


def _decode_address(fields: OpcodeFields) -> Instruction:
    """0NNN, 1NNN, 2NNN, ANNN, BNNN - Address operand."""
    return AddressInstruction(
        operation=ADDRESS_OPCODES[fields.selector].operation,
        address=fields.nnn,
    )


def _decode_system(fields: OpcodeFields) -> Instruction:
    """00E0/00EE, anything else is a legacy SYS call."""
    definition = NO_ARG_OPCODES.get(fields.nn)
    if definition is None:
        return _decode_address(fields)
    return NoArgInstruction(operation=definition.operation)


def _decode_register_immediate(fields: OpcodeFields) -> Instruction:
    """3XNN, 4XNN, 6XNN, 7XNN, CXNN."""
    return RegisterImmediateInstruction(
        operation=REGISTER_IMMEDIATE_OPCODES[fields.selector].operation,
        register=fields.x,
        immediate=fields.nn,
    )


def _decode_register_skip(fields: OpcodeFields) -> Instruction:
    """5XY0/9XY0 - The low nibble is reserved and must be 0."""
    definition = _lookup(SKIP_REGISTER_OPCODES[fields.selector], fields.n, fields)
    return TwoRegisterInstruction(operation=definition.operation, vx=fields.x, vy=fields.y)


def _decode_arithmetic(fields: OpcodeFields) -> Instruction:
    """8XYN - ALU operations."""
    definition = _lookup(ARITHMETIC_OPCODES, fields.n, fields)
    return TwoRegisterInstruction(operation=definition.operation, vx=fields.x, vy=fields.y)


def _decode_draw(fields: OpcodeFields) -> Instruction:
    """DXYN - Every N is valid, including 0."""
    return DrawInstruction(vx=fields.x, vy=fields.y, height=fields.n)


def _decode_key(fields: OpcodeFields) -> Instruction:
    """EX9E/EXA1 - Key queries."""
    definition = _lookup(KEY_OPCODES, fields.nn, fields)
    return SingleRegisterInstruction(operation=definition.operation, register=fields.x)


def _decode_misc(fields: OpcodeFields) -> Instruction:
    """FXNN - Timers, index, sprites, BCD and register blocks."""
    definition = _lookup(MISC_OPCODES, fields.nn, fields)
    return SingleRegisterInstruction(operation=definition.operation, register=fields.x)


_HANDLERS = [
    _decode_system,
    _decode_address,
    _decode_address,
    _decode_register_immediate,
    _decode_register_immediate,
    _decode_register_skip,
    _decode_register_immediate,
    _decode_register_immediate,
    _decode_arithmetic,
    _decode_register_skip,
    _decode_address,
    _decode_address,
    _decode_register_immediate,
    _decode_draw,
    _decode_key,
    _decode_misc,
]


def _check_range(name: str, value, limit: int) -> int:
    if isinstance(value, bool):
        raise TypeError(f"{name} must be an integer, got {value!r}")
    value = operator.index(value)
    if not 0 <= value <= limit:
        raise ValueError(f"{name} must be in 0..0x{limit:X}, got {value}")
    return value


def decode_word(word: int) -> Instruction:
    """Decode a packed 16-bit word.

    Raises:
        InvalidInstruction: if the word has no defined meaning.
        ValueError: if ``word`` is outside 0..0xFFFF.
        TypeError: if ``word`` is not an integer (floats, strings and bools are rejected).
    """
    fields = split(_check_range("word", word, WORD_MASK))
    return _HANDLERS[fields.selector](fields)


def decode(high: int, low: int) -> Instruction:
    """Decode an instruction from its high and low bytes, as fetched from memory."""
    high = _check_range("high", high, BYTE_MASK)
    low = _check_range("low", low, BYTE_MASK)
    return decode_word((high << 8) | low)


def try_decode_word(word: int) -> DecodeResult:
    """Like ``decode_word`` but returns invalid encodings as a result instead of raising."""
    try:
        return DecodeResult(instruction=decode_word(word))
    except InvalidInstruction as error:
        return DecodeResult(error=error)


def try_decode(high: int, low: int) -> DecodeResult:
    """Like ``decode`` but returns invalid encodings as a result instead of raising."""
    try:
        return DecodeResult(instruction=decode(high, low))
    except InvalidInstruction as error:
        return DecodeResult(error=error)
