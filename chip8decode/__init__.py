"""CHIP-8 instruction decoder package."""

from chip8decode.instruction import (
    Instruction,
    NoArgOperation,
    AddressOperation,
    RegisterImmediateOperation,
    SingleRegisterOperation,
    TwoRegisterOperation,
    NoArgInstruction,
    AddressInstruction,
    RegisterImmediateInstruction,
    SingleRegisterInstruction,
    TwoRegisterInstruction,
    DrawInstruction,
)
from chip8decode.decode import (
    DecodeError,
    InvalidInstruction,
    DecodeResult,
    decode,
    decode_word,
    try_decode,
    try_decode_word,
)
from chip8decode.encode import EncodingError, encode, encode_word
from chip8decode.disassemble import DisassembledLine, disassemble, format_instruction, load_rom
from chip8decode.constants import PROGRAM_START, MEMORY_SIZE

__all__ = [
    "Instruction",
    "NoArgOperation",
    "AddressOperation",
    "RegisterImmediateOperation",
    "SingleRegisterOperation",
    "TwoRegisterOperation",
    "NoArgInstruction",
    "AddressInstruction",
    "RegisterImmediateInstruction",
    "SingleRegisterInstruction",
    "TwoRegisterInstruction",
    "DrawInstruction",
    "DecodeError",
    "InvalidInstruction",
    "DecodeResult",
    "decode",
    "decode_word",
    "try_decode",
    "try_decode_word",
    "EncodingError",
    "encode",
    "encode_word",
    "DisassembledLine",
    "disassemble",
    "format_instruction",
    "load_rom",
    "PROGRAM_START",
    "MEMORY_SIZE",
]
