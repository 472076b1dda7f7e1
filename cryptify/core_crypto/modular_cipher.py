"""
Modular (Textbook RSA) Cipher

Character-by-character public-key cipher:
- Key derivation from two user-supplied primes
- Public exponent: smallest e >= 2 coprime with phi(n)
- Private exponent: e^(-1) mod phi(n) via Extended Euclidean Algorithm
- Encryption c = m^e mod n, decryption m = c^d mod n, per code point
- JSON array codec for cipher values

Security Note:
    No padding and a tiny modulus; every character encrypts to the same
    value each time. For learning purposes only.
"""

import json
import logging
import re
from typing import Any, Dict, List, Sequence

from ..constants import MIN_PRACTICAL_MODULUS
from .errors import (
    EmptyInputError,
    InvalidCiphertextError,
    InvalidPrimeError,
    KeyDerivationError,
    PlaintextTooLargeError,
)
from .number_theory import gcd, is_prime, mod_exp, mod_inverse


logger = logging.getLogger(__name__)

_DECIMAL = re.compile(r"-?[0-9]+")


def _is_int(value: Any) -> bool:
    """True for real integers (bool excluded)."""
    return isinstance(value, int) and not isinstance(value, bool)


def parse_prime(value: Any) -> int:
    """
    Parse a prime candidate from an int or a decimal string.

    Strings must be canonical decimals (surrounding whitespace allowed):
    "17" and "-5" parse, "+17" and "017" do not. Only the form is checked
    here; primality is checked by ModularCipher.

    Raises:
        InvalidPrimeError: If the value is not an integer
    """
    if _is_int(value):
        return value
    if isinstance(value, str):
        text = value.strip()
        if _DECIMAL.fullmatch(text) and str(int(text)) == text:
            return int(text)
    raise InvalidPrimeError(f"P and Q must be valid integers, got {value!r}")


def find_public_exponent(phi: int) -> int:
    """
    Smallest e in [2, phi) with gcd(e, phi) = 1.

    Raises:
        KeyDerivationError: If no such e exists (phi <= 2)
    """
    for e in range(2, phi):
        if gcd(e, phi) == 1:
            return e
    raise KeyDerivationError(f"Could not find a public exponent for phi={phi}")


class ModularCipher:
    """
    Textbook RSA over individual characters.

    Example:
        >>> cipher = ModularCipher(17, 11)
        >>> cipher.public_key()
        {'e': 3, 'n': 187}
        >>> cipher.decrypt(cipher.encrypt("Hi"))
        'Hi'
    """

    def __init__(self, p: int, q: int):
        """
        Derive the key pair.

        Args:
            p: First prime
            q: Second prime, different from p

        Raises:
            InvalidPrimeError: If p or q is not an integer > 1, not prime,
                or p == q
            KeyDerivationError: If no public exponent exists
        """
        for name, value in (("P", p), ("Q", q)):
            if not _is_int(value):
                raise InvalidPrimeError(f"{name} must be an integer, got {value!r}")
            if value <= 1:
                raise InvalidPrimeError(f"{name} must be greater than 1, got {value}")
            if not is_prime(value):
                raise InvalidPrimeError(f"{name} must be a prime number, got {value}")
        if p == q:
            raise InvalidPrimeError("P and Q must be different values")

        self._p = p
        self._q = q
        self._n = p * q
        self._phi = (p - 1) * (q - 1)
        self._e = find_public_exponent(self._phi)
        self._d = mod_inverse(self._e, self._phi)

        if self._n < MIN_PRACTICAL_MODULUS:
            logger.warning(
                "Modulus n=%d is below %d; characters with code points >= %d "
                "cannot be encrypted", self._n, MIN_PRACTICAL_MODULUS, self._n
            )
        logger.debug("Derived modular key pair with n=%d (%d bits)",
                     self._n, self._n.bit_length())

    @property
    def modulus(self) -> int:
        """Modulus n."""
        return self._n

    def public_key(self) -> Dict[str, int]:
        """Public key {e, n}."""
        return {'e': self._e, 'n': self._n}

    def private_key(self) -> Dict[str, int]:
        """Private key {d, n}."""
        return {'d': self._d, 'n': self._n}

    def key_info(self) -> Dict[str, int]:
        """All key parameters for display."""
        return {
            'p': self._p,
            'q': self._q,
            'n': self._n,
            'phi': self._phi,
            'e': self._e,
            'd': self._d,
        }

    def encrypt(self, plaintext: str) -> List[int]:
        """
        Encrypt each character's code point with the public key.

        Args:
            plaintext: Text whose code points are all below n

        Returns:
            One cipher value per character

        Raises:
            EmptyInputError: If plaintext is empty or whitespace only
            PlaintextTooLargeError: If a code point is >= n
        """
        if not isinstance(plaintext, str) or not plaintext.strip():
            raise EmptyInputError("Input text cannot be empty")

        values = []
        for index, char in enumerate(plaintext):
            m = ord(char)
            if m >= self._n:
                raise PlaintextTooLargeError(
                    f"Character {char!r} at position {index} has code point {m}, "
                    f"which is not below the modulus n={self._n}"
                )
            values.append(mod_exp(m, self._e, self._n))

        logger.debug("Modular encrypt: %d characters", len(values))
        return values

    def decrypt(self, values: Sequence[int]) -> str:
        """
        Decrypt cipher values with the private key.

        Args:
            values: List or tuple of non-negative integers

        Returns:
            Decrypted text, one character per value

        Raises:
            EmptyInputError: If values is empty
            InvalidCiphertextError: If values is malformed
        """
        if not isinstance(values, (list, tuple)):
            raise InvalidCiphertextError("Cipher values must be a list of integers")
        if not values:
            raise EmptyInputError("Cipher values cannot be empty")

        chars = []
        for index, c in enumerate(values):
            if not _is_int(c) or c < 0:
                raise InvalidCiphertextError(
                    f"Cipher value at position {index} must be a non-negative "
                    f"integer, got {c!r}"
                )
            m = mod_exp(c, self._d, self._n)
            try:
                chars.append(chr(m))
            except (ValueError, OverflowError):
                raise InvalidCiphertextError(
                    f"Cipher value at position {index} decrypts to {m}, "
                    f"which is not a valid character"
                ) from None

        logger.debug("Modular decrypt: %d values", len(chars))
        return "".join(chars)

    def __repr__(self) -> str:
        return f"ModularCipher(n={self._n}, e={self._e})"


def encode_cipher_values(values: Sequence[int]) -> str:
    """Render cipher values as a compact JSON array."""
    return json.dumps(list(values), separators=(',', ':'))


def decode_cipher_values(text: str) -> List[int]:
    """
    Parse a JSON array of non-negative integers.

    Raises:
        EmptyInputError: If text is blank
        InvalidCiphertextError: If text is not such an array
    """
    if not isinstance(text, str) or not text.strip():
        raise EmptyInputError("Input text cannot be empty")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidCiphertextError(
            f"RSA decryption requires valid JSON array format: {exc.msg}"
        ) from exc

    if not isinstance(data, list):
        raise InvalidCiphertextError("RSA decryption requires a JSON array")

    for index, value in enumerate(data):
        if not _is_int(value) or value < 0:
            raise InvalidCiphertextError(
                f"Cipher value at position {index} must be a non-negative "
                f"integer, got {value!r}"
            )
    return data


# Self-test when run directly
if __name__ == "__main__":
    print("Modular Cipher Self-Test")
    print("=" * 70)

    cipher = ModularCipher(17, 11)
    info = cipher.key_info()
    print(f"  Key info: {info}")
    print(f"  e*d mod phi = {(info['e'] * info['d']) % info['phi']}")

    message = "Hello"
    encrypted = cipher.encrypt(message)
    decrypted = cipher.decrypt(encrypted)
    print(f"  Original:  {message}")
    print(f"  Encrypted: {encode_cipher_values(encrypted)}")
    print(f"  Decrypted: {decrypted}")
    print(f"  Round trip: {'✓ PASS' if decrypted == message else '✗ FAIL'}")
