# Core Cryptography Module
"""
Core cipher implementations including:
- Playfair digraph cipher
- Textbook RSA per-character cipher
- Number theory helpers (square-and-multiply, Extended Euclid, primality)
"""

from .errors import (
    CipherError,
    InvalidKeyError,
    EmptyInputError,
    InvalidPrimeError,
    KeyDerivationError,
    PlaintextTooLargeError,
    InvalidCiphertextError,
)
from .digraph_cipher import DigraphCipher, Direction
from .modular_cipher import ModularCipher, encode_cipher_values, decode_cipher_values

__all__ = [
    'CipherError',
    'InvalidKeyError',
    'EmptyInputError',
    'InvalidPrimeError',
    'KeyDerivationError',
    'PlaintextTooLargeError',
    'InvalidCiphertextError',
    'DigraphCipher',
    'Direction',
    'ModularCipher',
    'encode_cipher_values',
    'decode_cipher_values',
]
