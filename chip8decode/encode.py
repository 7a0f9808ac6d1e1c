"""CHIP-8 instruction encoding, the inverse of ``chip8decode.decode``."""

from chip8decode.constants import (
    BYTE_MASK,
    NIBBLE_MASK,
    ADDRESS_MASK,
    X_SHIFT,
    Y_SHIFT,
)
from chip8decode.instruction import (
    Instruction,
    AddressOperation,
    NoArgInstruction,
    AddressInstruction,
    RegisterImmediateInstruction,
    SingleRegisterInstruction,
    TwoRegisterInstruction,
    DrawInstruction,
)
from chip8decode.opcodes import NO_ARG_OPCODES, OpcodeDefinition, definition_for


class EncodingError(ValueError):
    """Raised when an instruction cannot be expressed as a 16-bit word."""


# Largest value each operand field can hold
_FIELD_LIMITS = {
    "address": ADDRESS_MASK,
    "register": NIBBLE_MASK,
    "immediate": BYTE_MASK,
    "vx": NIBBLE_MASK,
    "vy": NIBBLE_MASK,
    "height": NIBBLE_MASK,
}


def _field(instruction: Instruction, name: str) -> int:
    value = getattr(instruction, name)
    limit = _FIELD_LIMITS[name]
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= limit:
        raise EncodingError(f"{name}={value!r} does not fit in 0..0x{limit:X}")
    return value


def _encode_no_arg(definition: OpcodeDefinition, instruction: NoArgInstruction) -> int:
    return definition.pattern


def _encode_address(definition: OpcodeDefinition, instruction: AddressInstruction) -> int:
    address = _field(instruction, "address")
    # SYS shares selector 0 with CLS/RET, which win on byte1
    if instruction.operation is AddressOperation.SYS and (address & BYTE_MASK) in NO_ARG_OPCODES:
        raise EncodingError(f"SYS 0x{address:03X} is indistinguishable from {NO_ARG_OPCODES[address & BYTE_MASK].mnemonic}")
    return definition.pattern | address


def _encode_register_immediate(definition: OpcodeDefinition, instruction: RegisterImmediateInstruction) -> int:
    return definition.pattern | (_field(instruction, "register") << X_SHIFT) | _field(instruction, "immediate")


def _encode_single_register(definition: OpcodeDefinition, instruction: SingleRegisterInstruction) -> int:
    return definition.pattern | (_field(instruction, "register") << X_SHIFT)


def _encode_two_register(definition: OpcodeDefinition, instruction: TwoRegisterInstruction) -> int:
    return definition.pattern | (_field(instruction, "vx") << X_SHIFT) | (_field(instruction, "vy") << Y_SHIFT)


def _encode_draw(definition: OpcodeDefinition, instruction: DrawInstruction) -> int:
    return (
        definition.pattern
        | (_field(instruction, "vx") << X_SHIFT)
        | (_field(instruction, "vy") << Y_SHIFT)
        | _field(instruction, "height")
    )


_ENCODERS = {
    NoArgInstruction: _encode_no_arg,
    AddressInstruction: _encode_address,
    RegisterImmediateInstruction: _encode_register_immediate,
    SingleRegisterInstruction: _encode_single_register,
    TwoRegisterInstruction: _encode_two_register,
    DrawInstruction: _encode_draw,
}


def encode_word(instruction: Instruction) -> int:
    """Encode an instruction as a packed 16-bit word.

    Raises:
        EncodingError: if the value is not a well-formed instruction or a
            field does not fit in its bit width.
    """
    definition = definition_for(instruction)
    if definition is None:
        raise EncodingError(f"Not a CHIP-8 instruction: {instruction!r}")
    return _ENCODERS[type(instruction)](definition, instruction)


def encode(instruction: Instruction) -> tuple[int, int]:
    """Encode an instruction as its (high, low) byte pair."""
    word = encode_word(instruction)
    return word >> 8, word & BYTE_MASK
