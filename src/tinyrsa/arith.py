"""Modular arithmetic primitives for textbook RSA.

Holds the extended Euclidean algorithm, the modular inverse derived from it and square-and-multiply modular
exponentiation. Python integers are arbitrary precision, so nothing here bounds the input size, but all of it is meant
for classroom-sized numbers.

Typical usage example:

    g, x, y = extended_gcd(7, 160)
    e = mod_inverse(7, 160)
    c = mod_pow(72, e, 187)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import string

from tinyrsa.errors import InvalidModulusError


def as_integer(value: int | str) -> int:
    """Converts a boundary value to an integer.

    Accepts native integers as-is, and strings consisting solely of decimal digits (surrounding whitespace is
    ignored). Signs, separators and empty strings are rejected.

    Args:
        value: Integer or decimal-digit string.

    Returns:
        The integer value.

    Raises:
        ValueError: If `value` is neither an integer nor a plain decimal-digit string.
    """
    if isinstance(value, bool):
        raise ValueError("Booleans are not accepted as integers.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        if stripped and all(ch in string.digits for ch in stripped):
            return int(stripped)
    raise ValueError(f"{value!r} is not a decimal number.")


def gcd(a: int, b: int) -> int:
    """Greatest common divisor by Euclid's algorithm, always non-negative."""
    while b != 0:
        a, b = b, a % b
    return abs(a)


def extended_gcd(a: int, b: int) -> tuple[int, int, int]:
    """Implements the Extended Euclidean Algorithm.

    Such that a*x + b*y = g = gcd(a, b). Iterative, so no recursion limit applies.

    Args:
        a: The first natural number.
        b: The second natural number.

    Returns:
        Tuple (g, x, y) of the greatest common divisor and the Bezout coefficients.
    """
    r0, r1 = a, b
    s0, s1, t0, t1 = 1, 0, 0, 1
    while r1 != 0:
        q = r0 // r1
        r0, r1 = r1, r0 - q * r1
        s0, s1 = s1, s0 - q * s1
        t0, t1 = t1, t0 - q * t1
    return r0, s0, t0


def mod_inverse(a: int, m: int) -> int | None:
    """Computes the modular inverse of `a` modulo `m`.

    Args:
        a: The number to invert.
        m: The modulus. Must be positive.

    Returns:
        The inverse in range [0, m), or None if `a` and `m` are not coprime.

    Raises:
        InvalidModulusError: If `m` is not positive.
    """
    if m <= 0:
        raise InvalidModulusError(m)
    g, x, _ = extended_gcd(a % m, m)
    if g != 1:
        return None
    return (x % m + m) % m


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """Square-and-multiply modular exponentiation.

    Args:
        base: The base, any integer. Normalized into [0, modulus) first.
        exponent: The exponent. Must be >= 0.
        modulus: The modulus. Must be >= 1.

    Returns:
        base**exponent mod modulus.

    Raises:
        InvalidModulusError: If `modulus` is not positive.
        ValueError: If `exponent` is negative.
    """
    if modulus <= 0:
        raise InvalidModulusError(modulus)
    if exponent < 0:
        raise ValueError("Exponent must be >= 0")
    if modulus == 1:
        return 0
    result = 1
    b = base % modulus
    e = exponent
    while e > 0:
        if e & 1:
            result = (result * b) % modulus
        b = (b * b) % modulus
        e >>= 1
    return result
