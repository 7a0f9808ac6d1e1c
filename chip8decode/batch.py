"""Vectorised CHIP-8 field extraction and validity checks.

These work on arrays of words, e.g. a whole ROM image or the entire 16-bit
opcode space, and agree with ``chip8decode.decode`` word for word.
"""

import jax
import jax.numpy as jnp
from flax.struct import dataclass

from chip8decode.constants import (
    NUM_SELECTORS,
    SELECTOR_MASK,
    SELECTOR_SHIFT,
    X_MASK,
    X_SHIFT,
    Y_MASK,
    Y_SHIFT,
    N_MASK,
    NN_MASK,
    ADDRESS_MASK,
    WORD_MASK,
)
from chip8decode.opcodes import (
    ADDRESS_OPCODES,
    REGISTER_IMMEDIATE_OPCODES,
    DRAW_OPCODE,
    SKIP_REGISTER_OPCODES,
    ARITHMETIC_OPCODES,
    KEY_OPCODES,
    MISC_OPCODES,
)


@dataclass
class FieldArrays:
    """Nibble fields of a batch of words."""
    selector: jnp.ndarray
    x: jnp.ndarray
    y: jnp.ndarray
    n: jnp.ndarray
    nn: jnp.ndarray
    nnn: jnp.ndarray


def pack_u16(high: jnp.ndarray, low: jnp.ndarray) -> jnp.ndarray:
    """Pack two bytes into uint16."""
    return (jnp.asarray(high).astype(jnp.uint16) << 8) | jnp.asarray(low).astype(jnp.uint16)


def unpack_u16(value: jnp.ndarray) -> tuple[jnp.ndarray, jnp.ndarray]:
    """Unpack uint16 into two bytes."""
    value = jnp.asarray(value).astype(jnp.uint16)
    return (value >> 8).astype(jnp.uint8), (value & 0xFF).astype(jnp.uint8)


def words_from_bytes(data: bytes) -> jnp.ndarray:
    """Big-endian words from raw program bytes. A trailing odd byte is dropped."""
    even_length = len(data) - len(data) % 2
    raw = jnp.array(list(data[:even_length]), dtype=jnp.uint8)
    return pack_u16(raw[0::2], raw[1::2])


def extract_fields(words: jnp.ndarray) -> FieldArrays:
    """Split every word into its nibble fields.

    Words are taken modulo 2**16, so only the low sixteen bits of each element
    are inspected. ``decode_word`` rejects such values instead; check ranges
    before batching when that matters.
    """
    words = jnp.asarray(words).astype(jnp.int32) & WORD_MASK
    return FieldArrays(
        selector=(words & SELECTOR_MASK) >> SELECTOR_SHIFT,
        x=(words & X_MASK) >> X_SHIFT,
        y=(words & Y_MASK) >> Y_SHIFT,
        n=words & N_MASK,
        nn=words & NN_MASK,
        nnn=words & ADDRESS_MASK,
    )


def _build_validity_tables():
    """Lookup tables derived from the opcode table.

    A word is valid when its selector is always valid, or when the
    (selector, low nibble) or (selector, low byte) pair is defined.
    """
    always = [False] * NUM_SELECTORS
    for selector in list(ADDRESS_OPCODES) + list(REGISTER_IMMEDIATE_OPCODES):
        always[selector] = True
    always[DRAW_OPCODE.pattern >> SELECTOR_SHIFT] = True

    by_nibble = [[False] * 16 for _ in range(NUM_SELECTORS)]
    for selector, table in SKIP_REGISTER_OPCODES.items():
        for n in table:
            by_nibble[selector][n] = True
    for n in ARITHMETIC_OPCODES:
        by_nibble[0x8][n] = True

    by_byte = [[False] * 256 for _ in range(NUM_SELECTORS)]
    for nn in KEY_OPCODES:
        by_byte[0xE][nn] = True
    for nn in MISC_OPCODES:
        by_byte[0xF][nn] = True

    return (
        jnp.array(always, dtype=jnp.bool_),
        jnp.array(by_nibble, dtype=jnp.bool_),
        jnp.array(by_byte, dtype=jnp.bool_),
    )


_ALWAYS_VALID, _VALID_BY_NIBBLE, _VALID_BY_BYTE = _build_validity_tables()


@jax.jit
def valid_mask(words: jnp.ndarray) -> jnp.ndarray:
    """Boolean mask of which words decode without ``InvalidInstruction``."""
    fields = extract_fields(words)
    return (
        _ALWAYS_VALID[fields.selector]
        | _VALID_BY_NIBBLE[fields.selector, fields.n]
        | _VALID_BY_BYTE[fields.selector, fields.nn]
    )


def count_valid(words: jnp.ndarray) -> int:
    """Number of defined words in a batch."""
    return int(jnp.sum(valid_mask(words)))
