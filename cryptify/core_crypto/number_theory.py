"""
Number Theory Helpers

Integer routines backing the modular cipher:
- Modular exponentiation (square-and-multiply algorithm)
- Euclidean and Extended Euclidean algorithms
- Modular inverse
- Deterministic trial-division primality test
- Prime suggestions for key entry

Note: Modular exponentiation deliberately avoids Python's built-in
      pow(a, b, mod) and uses square-and-multiply instead.
"""

from typing import Iterable, List, Tuple

from ..constants import COMMON_PRIMES


def mod_exp(base: int, exponent: int, modulus: int) -> int:
    """
    Modular exponentiation using square-and-multiply algorithm.

    Algorithm (right-to-left binary method):
    1. Start with result = 1
    2. For each bit of exponent (from LSB to MSB):
       - If bit is 1, multiply result by base (mod modulus)
       - Square the base (mod modulus)

    Every intermediate product is reduced mod modulus, so operands never
    grow beyond modulus^2.

    Time complexity: O(log exponent) multiplications

    Args:
        base: The base number
        exponent: The exponent (must be non-negative)
        modulus: The modulus (must be positive)

    Returns:
        (base^exponent) mod modulus

    Raises:
        ValueError: If exponent < 0 or modulus <= 0
    """
    if exponent < 0:
        raise ValueError("Exponent must be non-negative")
    if modulus <= 0:
        raise ValueError("Modulus must be positive")
    if modulus == 1:
        return 0

    base = base % modulus
    result = 1

    while exponent > 0:
        if exponent & 1:
            result = (result * base) % modulus
        base = (base * base) % modulus
        exponent >>= 1

    return result


def gcd(a: int, b: int) -> int:
    """Greatest common divisor using the Euclidean algorithm."""
    a, b = abs(a), abs(b)
    while b:
        a, b = b, a % b
    return a


def extended_gcd(a: int, b: int) -> Tuple[int, int, int]:
    """
    Extended Euclidean Algorithm (iterative).

    Finds integers x, y such that: a*x + b*y = gcd(a, b)

    Args:
        a: First integer
        b: Second integer

    Returns:
        Tuple (gcd, x, y) where a*x + b*y = gcd
    """
    old_r, r = a, b
    old_x, x = 1, 0
    old_y, y = 0, 1

    while r != 0:
        quotient = old_r // r
        old_r, r = r, old_r - quotient * r
        old_x, x = x, old_x - quotient * x
        old_y, y = y, old_y - quotient * y

    return old_r, old_x, old_y


def mod_inverse(a: int, m: int) -> int:
    """
    Compute modular multiplicative inverse using Extended Euclidean Algorithm.

    Finds x such that (a * x) mod m = 1

    Raises:
        ValueError: If inverse doesn't exist (gcd(a, m) != 1)
    """
    if m <= 0:
        raise ValueError("Modulus must be positive")
    if m == 1:
        return 0

    g, x, _ = extended_gcd(a % m, m)

    if g != 1:
        raise ValueError(f"Modular inverse doesn't exist (gcd({a}, {m}) = {g})")

    return x % m


def is_prime(n: int) -> bool:
    """
    Deterministic primality test by trial division.

    Checks 2 and then odd divisors up to floor(sqrt(n)). Suitable for the
    small, user-entered primes this toolkit works with.
    """
    if n < 2:
        return False
    if n < 4:
        return True
    if n % 2 == 0:
        return False

    divisor = 3
    while divisor * divisor <= n:
        if n % divisor == 0:
            return False
        divisor += 2
    return True


def suggest_primes(exclude: Iterable[int] = (), limit: int = 10) -> List[int]:
    """Return up to `limit` common primes, skipping any in `exclude`."""
    excluded = set(exclude)
    return [p for p in COMMON_PRIMES if p not in excluded][:max(limit, 0)]
