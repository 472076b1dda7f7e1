"""
Shared constants for Cryptify.

Matrix geometry and alphabet for the digraph cipher, and default / suggested
primes for the modular cipher.
"""

from typing import Tuple


# ============================================================================
# Application
# ============================================================================

APP_NAME = "Cryptify"
APP_VERSION = "1.0.0"
APP_DESCRIPTION = "Encryption toolkit supporting Playfair and RSA algorithms"


# ============================================================================
# Digraph (Playfair) Cipher
# ============================================================================

MATRIX_SIZE = 5
DIGRAPH_ALPHABET = "ABCDEFGHIKLMNOPQRSTUVWXYZ"  # I and J share a cell
MERGED_LETTER: Tuple[str, str] = ("J", "I")     # (folded, replacement)
FILLER_LETTER = "X"
SHIFT = 1


# ============================================================================
# Modular (RSA) Cipher
# ============================================================================

DEFAULT_RSA_PRIMES: Tuple[int, int] = (17, 11)

# Below this modulus some Latin-1 characters cannot be encrypted
MIN_PRACTICAL_MODULUS = 256

COMMON_PRIMES: Tuple[int, ...] = (
    2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47, 53, 59, 61, 67, 71,
    73, 79, 83, 89, 97, 101, 103, 107, 109, 113, 127, 131, 137, 139, 149, 151,
    157, 163, 167, 173, 179, 181, 191, 193, 197, 199, 211, 223, 227, 229, 233,
    239, 241, 251, 257, 263, 269, 271, 277, 281, 283, 293, 307, 311, 313, 317,
)
