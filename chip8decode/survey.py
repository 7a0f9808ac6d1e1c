"""Tally the whole 16-bit opcode space by operation."""

from collections import Counter
from typing import Dict

from chex import dataclass

from chip8decode.constants import NUM_WORDS
from chip8decode.decode import try_decode_word
from chip8decode.logging import progress_bar
from chip8decode.opcodes import ALL_OPCODES, definition_for


@dataclass(frozen=True)
class OpcodeSurvey:
    """Result of decoding every 16-bit word."""
    counts: Dict[str, int]  # Opcode template -> number of words decoding to it
    valid: int
    invalid: int

    def rows(self):
        """(template, mnemonic, count) in opcode table order."""
        return [(d.template, d.mnemonic, self.counts.get(d.template, 0)) for d in ALL_OPCODES]


def survey_opcodes(show_progress: bool = False) -> OpcodeSurvey:
    """Decode all 65536 words and count the outcomes."""
    counts = Counter()
    invalid = 0

    for word in progress_bar(range(NUM_WORDS), desc="Surveying opcodes", enabled=show_progress, unit="word"):
        result = try_decode_word(word)
        if result.ok:
            counts[definition_for(result.instruction).template] += 1
        else:
            invalid += 1

    return OpcodeSurvey(counts=dict(counts), valid=sum(counts.values()), invalid=invalid)
