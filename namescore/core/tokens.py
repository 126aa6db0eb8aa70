"""
Token and edit model for name alignment.

Names are compared as sequences of integer tokens, one per character or
phonetic unit. Token 0 is reserved as EMPTY and marks the side of an edit
that consumes nothing (insertions and deletions).
"""

from typing import List, NamedTuple, Sequence
import logging

import phonetics

logger = logging.getLogger(__name__)

# Never produced by a tokenizer for a real character
EMPTY = 0

Token = int
TokenSequence = Sequence[int]


class Edit(NamedTuple):
    """One step of an alignment: (source token, target token)."""

    source: int
    target: int

    @property
    def is_insertion(self) -> bool:
        return self.source == EMPTY

    @property
    def is_deletion(self) -> bool:
        return self.target == EMPTY

    @property
    def is_substitution(self) -> bool:
        """True for both real tokens, including a token matched with itself."""
        return self.source != EMPTY and self.target != EMPTY

    @property
    def is_match(self) -> bool:
        return self.is_substitution and self.source == self.target


class CharacterTokenizer:
    """
    Maps characters of an already-normalized name to token ids.

    Each alphabet character gets a stable id 1..len(alphabet). Characters
    outside the alphabet are skipped. The only transformation applied is
    lower-casing; diacritic folding, noise-word and prefix handling belong
    to the caller.
    """

    EMPTY_SYMBOL = '-'

    def __init__(self, alphabet: str = 'abcdefghijklmnopqrstuvwxyz'):
        """
        Initialize the tokenizer.

        Args:
            alphabet: Characters that become tokens, in id order
        """
        if not alphabet:
            raise ValueError("Alphabet must contain at least one character")
        if len(set(alphabet)) != len(alphabet):
            raise ValueError(f"Alphabet has duplicate characters: {alphabet!r}")
        if self.EMPTY_SYMBOL in alphabet:
            raise ValueError(f"Alphabet may not contain {self.EMPTY_SYMBOL!r}")

        self.alphabet = alphabet
        self._ids = {ch: i + 1 for i, ch in enumerate(alphabet)}

    @property
    def num_tokens(self) -> int:
        """Size of a cost table over this tokenizer's ids, EMPTY included."""
        return len(self.alphabet) + 1

    def tokenize(self, name: str) -> List[int]:
        tokens = []
        for ch in name.lower():
            token = self._ids.get(ch)
            if token is None:
                logger.debug(f"Skipping character {ch!r} in {name!r}")
                continue
            tokens.append(token)
        return tokens

    def detokenize(self, tokens: TokenSequence) -> str:
        """Render tokens back to characters, EMPTY as '-'."""
        return ''.join(self.symbol(t) for t in tokens)

    def symbol(self, token: int) -> str:
        if token == EMPTY:
            return self.EMPTY_SYMBOL
        if not 0 < token <= len(self.alphabet):
            raise ValueError(f"Unknown token id: {token}")
        return self.alphabet[token - 1]


class PhoneticTokenizer(CharacterTokenizer):
    """
    Tokenizes the Metaphone code of a name instead of its spelling.

    Metaphone writes 'th' as '0', so the alphabet carries that digit.
    """

    METAPHONE_ALPHABET = 'abcdefghijklmnopqrstuvwxyz0'

    def __init__(self, max_length: int = 0):
        """
        Initialize the tokenizer.

        Args:
            max_length: Truncate codes to this many symbols (0 = no limit)
        """
        super().__init__(self.METAPHONE_ALPHABET)
        self.max_length = max_length

    def encode(self, name: str) -> str:
        if not name.strip():
            return ''
        code = phonetics.metaphone(name).lower()
        if self.max_length:
            code = code[:self.max_length]
        return code

    def tokenize(self, name: str) -> List[int]:
        return super().tokenize(self.encode(name))
