"""Tests for vectorised field extraction and validity."""

import jax.numpy as jnp
import pytest
from chip8decode.batch import (
    count_valid,
    extract_fields,
    pack_u16,
    unpack_u16,
    valid_mask,
    words_from_bytes,
)
from chip8decode.constants import NUM_WORDS
from chip8decode.survey import survey_opcodes


class TestPacking:
    """Test byte/word conversion."""

    def test_pack_unpack(self):
        word = pack_u16(jnp.uint8(0xF7), jnp.uint8(0x65))
        assert int(word) == 0xF765
        high, low = unpack_u16(word)
        assert int(high) == 0xF7
        assert int(low) == 0x65

    def test_words_from_bytes(self):
        words = words_from_bytes(bytes([0x00, 0xE0, 0xD0, 0x12, 0x7F]))
        assert words.shape == (2,)
        assert [int(w) for w in words] == [0x00E0, 0xD012]

    def test_words_from_empty(self):
        assert words_from_bytes(b"").shape == (0,)


class TestFields:
    """Test nibble extraction."""

    def test_extract_fields(self):
        fields = extract_fields(jnp.array([0xD123, 0x8AB4]))
        assert [int(v) for v in fields.selector] == [0xD, 0x8]
        assert [int(v) for v in fields.x] == [0x1, 0xA]
        assert [int(v) for v in fields.y] == [0x2, 0xB]
        assert [int(v) for v in fields.n] == [0x3, 0x4]
        assert [int(v) for v in fields.nn] == [0x23, 0xB4]
        assert [int(v) for v in fields.nnn] == [0x123, 0xAB4]


class TestValidity:
    """The vectorised mask agrees with the scalar decoder."""

    def test_known_words(self):
        mask = valid_mask(jnp.array([0x00E0, 0x8008, 0x5671, 0xF007, 0xD010, 0xE0A2]))
        assert [bool(v) for v in mask] == [True, False, False, True, True, False]

    def test_agrees_with_decode_everywhere(self, valid_words):
        mask = valid_mask(jnp.arange(NUM_WORDS))
        valid_from_mask = {int(w) for w in jnp.nonzero(mask)[0]}
        assert valid_from_mask == set(valid_words)

    def test_words_are_taken_modulo_16_bits(self):
        high = jnp.array([0x10000 + 0x8008, 0x30000 + 0x00E0, 0x1F007])
        low = jnp.array([0x8008, 0x00E0, 0xF007])
        assert [bool(v) for v in valid_mask(high)] == [bool(v) for v in valid_mask(low)] == [False, True, True]
        assert [int(v) for v in extract_fields(high).nnn] == [0x008, 0x0E0, 0x007]

    def test_count(self):
        """48048 of the 65536 words are defined."""
        assert count_valid(jnp.arange(NUM_WORDS)) == 48048


@pytest.fixture(scope="module")
def survey():
    return survey_opcodes()


class TestSurvey:
    """Test the opcode survey."""

    def test_totals(self, survey):
        assert survey.valid == 48048
        assert survey.invalid == 65536 - 48048

    def test_per_operation_counts(self, survey):
        counts = survey.counts
        assert counts["00E0"] == 16
        assert counts["00EE"] == 16
        assert counts["0NNN"] == 4096 - 32
        assert counts["1NNN"] == 4096
        assert counts["5XY0"] == 256
        assert counts["8XYE"] == 256
        assert counts["DXYN"] == 4096
        assert counts["FX65"] == 16

    def test_rows_follow_table(self, survey):
        rows = survey.rows()
        assert len(rows) == 35
        assert rows[0] == ("00E0", "CLS", 16)
