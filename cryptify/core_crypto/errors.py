"""
Cipher error hierarchy.

Every error derives from CipherError, which itself is a ValueError so
callers catching ValueError keep working.
"""


class CipherError(ValueError):
    """Base class for all cipher validation failures."""
    pass


class InvalidKeyError(CipherError):
    """Raised when a digraph key contains no usable letters."""
    pass


class EmptyInputError(CipherError):
    """Raised when there is nothing to encrypt or decrypt."""
    pass


class InvalidPrimeError(CipherError):
    """Raised when p or q is not an integer, not prime, <= 1, or p == q."""
    pass


class KeyDerivationError(CipherError):
    """Raised when no public exponent exists for the modulus."""
    pass


class PlaintextTooLargeError(CipherError):
    """Raised when a character code point is >= the modulus."""
    pass


class InvalidCiphertextError(CipherError):
    """Raised when cipher values are not a sequence of non-negative integers."""
    pass
