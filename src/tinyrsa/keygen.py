"""Key derivation from two caller-supplied primes.

This module turns two small primes into a textbook RSA key pair. Primality is checked by deterministic trial
division, the private exponent is the first value coprime with the totient and the public exponent is its modular
inverse. None of it is suitable for real-world key sizes: trial division is O(sqrt(n)) and the exponent search is
O(phi) in the worst case.

Typical usage example:

    kp = derive_keys(17, 11)
    kp.public   # (107, 187)
    kp.private  # (3, 187)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import typing

from tinyrsa.arith import as_integer
from tinyrsa.arith import gcd
from tinyrsa.arith import mod_inverse
from tinyrsa.errors import DuplicatePrimeError
from tinyrsa.errors import InverseNotFoundError
from tinyrsa.errors import NotPrimeError

logger = logging.getLogger(__name__)

EXAMPLE_PRIMES: tuple[int, int] = (17, 11)


class Keypair(typing.NamedTuple):
    """A derived key quadruple, along with the primes it was built from.

    Attributes:
        n: The modulus, p*q.
        e: The public exponent.
        d: The private exponent.
        phi: The totient, (p-1)*(q-1).
        p: First source prime.
        q: Second source prime.
    """
    n: int
    e: int
    d: int
    phi: int
    p: int
    q: int

    @property
    def public(self) -> tuple[int, int]:
        """Public key as (exponent, modulus)."""
        return self.e, self.n

    @property
    def private(self) -> tuple[int, int]:
        """Private key as (exponent, modulus)."""
        return self.d, self.n


def is_prime(candidate: int) -> bool:
    """Deterministic trial-division primality test.

    After ruling out multiples of 2 and 3, only divisors of the form 6k-1 and 6k+1 are tried, up to and including
    the integer square root of `candidate`.

    Args:
        candidate: The number to test.

    Returns:
        True if `candidate` is prime, False otherwise.
    """
    if candidate <= 1:
        return False
    if candidate <= 3:
        return True
    if candidate % 2 == 0 or candidate % 3 == 0:
        return False
    i = 5
    while i * i <= candidate:
        if candidate % i == 0 or candidate % (i + 2) == 0:
            return False
        i += 6
    return True


def _private_exponent(phi: int) -> int | None:
    """First d in [2, phi) coprime with `phi`, None if there is none."""
    d = 2
    while d < phi:
        if gcd(d, phi) == 1:
            return d
        d += 1
    return None


def derive_keys(p: int | str, q: int | str, distinct: bool = False) -> Keypair:
    """Derives an RSA key pair from two primes.

    The primes are expected to differ. That precondition is the caller's to enforce, unless `distinct` asks this
    function to check it.

    Args:
        p: The first prime, as integer or decimal string.
        q: The second prime, as integer or decimal string.
        distinct: Whether to reject `p == q`. Defaults to False.

    Returns:
        The derived Keypair. Identical inputs always produce the identical key pair.

    Raises:
        ValueError: If either input is not a decimal number.
        NotPrimeError: If `p` or `q` is not prime.
        DuplicatePrimeError: If `distinct` is set and `p == q`.
        InverseNotFoundError: If no private exponent with a modular inverse exists, which happens for phi <= 2.
    """
    p, q = as_integer(p), as_integer(q)
    for candidate in (p, q):
        if not is_prime(candidate):
            raise NotPrimeError(candidate)
    if distinct and p == q:
        raise DuplicatePrimeError(p)
    n = p * q
    phi = (p - 1) * (q - 1)
    d = _private_exponent(phi)
    if d is None:
        raise InverseNotFoundError(2, phi)
    e = mod_inverse(d, phi)
    if e is None:
        raise InverseNotFoundError(d, phi)
    logger.debug("Derived key pair with n=%d, phi=%d, e=%d", n, phi, e)
    return Keypair(n=n, e=e, d=d, phi=phi, p=p, q=q)


def check_key(exponent: int | str, mod: int | str) -> None:
    """Validates a manually entered (exponent, modulus) key.

    Args:
        exponent: The public or private exponent.
        mod: The modulus.

    Raises:
        ValueError: If either is not a positive decimal number, or the exponent is not below the modulus.
    """
    exponent, mod = as_integer(exponent), as_integer(mod)
    if exponent <= 0 or mod <= 0:
        raise ValueError("Exponent and modulus must be positive.")
    if exponent >= mod:
        raise ValueError("Exponent must be smaller than the modulus.")


def example_keys() -> Keypair:
    """The classroom example pair for P=17, Q=11.

    Uses the textbook exponents e=23, d=7 rather than the ones `derive_keys` finds (e=107, d=3). Both pairs are valid
    for n=187, the textbook pair is just the one usually worked through by hand.
    """
    p, q = EXAMPLE_PRIMES
    return Keypair(n=p * q, e=23, d=7, phi=(p - 1) * (q - 1), p=p, q=q)
