"""Test configuration and fixtures for CHIP-8 decoder tests."""

import io

import pytest
from chip8decode import decode_word, InvalidInstruction
from chip8decode.constants import NUM_WORDS
from chip8decode.logging import ConsoleLogger


@pytest.fixture(scope="session")
def all_words():
    """Every 16-bit word."""
    return range(NUM_WORDS)


@pytest.fixture(scope="session")
def valid_words(all_words):
    """Every word that decodes, paired with its instruction."""
    decoded = {}
    for word in all_words:
        try:
            decoded[word] = decode_word(word)
        except InvalidInstruction:
            pass
    return decoded


@pytest.fixture
def log_stream():
    """Captured logger output."""
    return io.StringIO()


@pytest.fixture
def quiet_logger(log_stream):
    """Logger writing plain text to ``log_stream``."""
    return ConsoleLogger(log_level="DEBUG", use_colors=False, show_timestamps=False, stream=log_stream)


def split_word(word):
    """Helper to turn a word into its (high, low) bytes."""
    return word >> 8, word & 0xFF
