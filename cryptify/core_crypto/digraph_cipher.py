"""
Digraph (Playfair) Cipher

A classical substitution cipher that encrypts letters two at a time using a
5x5 matrix derived from a keyword.
This is for EDUCATIONAL/DEMONSTRATION purposes only - not cryptographically secure!

Components:
- Key normalization (uppercase, letters only, J folded into I, deduplicated)
- 5x5 key matrix (key letters first, then the rest of the alphabet)
- Digraph preparation (filler X between doubled letters and after an odd tail)
- Row / column / rectangle substitution rules

Security Note:
    Playfair falls quickly to digraph frequency analysis. Decryption is not
    guaranteed to restore the original text when fillers were inserted.
"""

import logging
import re
from enum import Enum
from typing import Dict, List, Tuple

from ..constants import (
    DIGRAPH_ALPHABET,
    FILLER_LETTER,
    MATRIX_SIZE,
    MERGED_LETTER,
    SHIFT,
)
from .errors import EmptyInputError, InvalidKeyError


logger = logging.getLogger(__name__)

_NON_LETTERS = re.compile(r"[^A-Z]")


class Direction(Enum):
    """Direction of a digraph transform."""
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"


def normalize_letters(text: str) -> str:
    """
    Uppercase, drop everything outside A-Z and fold J into I.

    Example:
        >>> normalize_letters("Hello, Jim!")
        'HELLOIIM'
    """
    folded, replacement = MERGED_LETTER
    return _NON_LETTERS.sub("", text.upper()).replace(folded, replacement)


def _unique(letters: str) -> str:
    """Deduplicate letters, keeping the first occurrence of each."""
    return "".join(dict.fromkeys(letters))


def prepare_digraphs(letters: str) -> str:
    """
    Turn a normalized letter stream into an even-length stream of digraphs.

    Walks left to right taking two letters at a time. When the second
    letter of a pair would repeat the first, a filler is emitted in its
    place and the repeated letter starts the next pair. An unpaired final
    letter is padded with the filler.

    Example:
        >>> prepare_digraphs("BALLOON")
        'BALXLOON'
        >>> prepare_digraphs("ABC")
        'ABCX'
    """
    out: List[str] = []
    i = 0
    while i < len(letters):
        first = letters[i]
        second = letters[i + 1] if i + 1 < len(letters) else None

        if second is None or second == first:
            out.append(first + FILLER_LETTER)
            i += 1
        else:
            out.append(first + second)
            i += 2

    return "".join(out)


class DigraphCipher:
    """
    Playfair cipher over a 5x5 key matrix.

    The matrix is built once from the key and never changes; a new key
    needs a new instance.

    Example:
        >>> cipher = DigraphCipher("MONARCHY")
        >>> cipher.matrix_snapshot()[0]
        ['M', 'O', 'N', 'A', 'R']
        >>> cipher.encrypt("instruments")
        'GATLMZCLRQXA'
    """

    def __init__(self, key: str):
        """
        Build the key matrix.

        Args:
            key: Keyword; anything other than letters is ignored

        Raises:
            InvalidKeyError: If the key contains no letters
        """
        if not isinstance(key, str):
            raise InvalidKeyError("Key must be a string")

        self._key = _unique(normalize_letters(key))
        if not self._key:
            raise InvalidKeyError("Key must contain at least one letter")

        cells = _unique(self._key + DIGRAPH_ALPHABET)
        self._matrix: Tuple[Tuple[str, ...], ...] = tuple(
            tuple(cells[row * MATRIX_SIZE:(row + 1) * MATRIX_SIZE])
            for row in range(MATRIX_SIZE)
        )
        self._positions: Dict[str, Tuple[int, int]] = {
            letter: (row, col)
            for row, letters in enumerate(self._matrix)
            for col, letter in enumerate(letters)
        }

        logger.debug("Built %dx%d digraph matrix from %d key letters",
                     MATRIX_SIZE, MATRIX_SIZE, len(self._key))

    @property
    def key(self) -> str:
        """Normalized, deduplicated key."""
        return self._key

    def matrix_snapshot(self) -> List[List[str]]:
        """Copy of the key matrix as a list of rows."""
        return [list(row) for row in self._matrix]

    def position(self, letter: str) -> Tuple[int, int]:
        """(row, col) of a normalized letter in the matrix."""
        return self._positions[letter]

    def _substitute(self, a: str, b: str, shift: int) -> str:
        """Apply the Playfair rules to one digraph."""
        row_a, col_a = self._positions[a]
        row_b, col_b = self._positions[b]

        if row_a == row_b:
            return (self._matrix[row_a][(col_a + shift) % MATRIX_SIZE] +
                    self._matrix[row_b][(col_b + shift) % MATRIX_SIZE])

        if col_a == col_b:
            return (self._matrix[(row_a + shift) % MATRIX_SIZE][col_a] +
                    self._matrix[(row_b + shift) % MATRIX_SIZE][col_b])

        # Rectangle: swap columns
        return self._matrix[row_a][col_b] + self._matrix[row_b][col_a]

    def transform(self, text: str, direction: Direction) -> str:
        """
        Encrypt or decrypt text.

        The text is normalized like the key, split into digraphs and each
        digraph is substituted according to the matrix.

        Args:
            text: Input text
            direction: Direction.ENCRYPT or Direction.DECRYPT

        Returns:
            Transformed uppercase letters (always an even count)

        Raises:
            EmptyInputError: If the text contains no letters
        """
        if not isinstance(text, str):
            raise EmptyInputError("Input text must be a non-empty string")

        letters = normalize_letters(text)
        if not letters:
            raise EmptyInputError("Input text contains no letters to process")

        direction = Direction(direction)
        shift = SHIFT if direction is Direction.ENCRYPT else -SHIFT

        stream = prepare_digraphs(letters)
        result = "".join(
            self._substitute(stream[i], stream[i + 1], shift)
            for i in range(0, len(stream), 2)
        )

        logger.debug("Digraph %s: %d letters -> %d letters",
                     direction.value, len(letters), len(result))
        return result

    def encrypt(self, plaintext: str) -> str:
        """Encrypt plaintext."""
        return self.transform(plaintext, Direction.ENCRYPT)

    def decrypt(self, ciphertext: str) -> str:
        """Decrypt ciphertext."""
        return self.transform(ciphertext, Direction.DECRYPT)

    def __repr__(self) -> str:
        return f"DigraphCipher(key_length={len(self._key)})"
