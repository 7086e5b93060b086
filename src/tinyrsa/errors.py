"""Exceptions raised by the tinyrsa math, codec and key file layers.

Every exception derives from `RSAError`, and additionally from the builtin the rest of the library would otherwise
raise for the same concern. Catching `ValueError` around a call therefore still works.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class RSAError(Exception):
    """Base class for all tinyrsa failures."""


class NotPrimeError(RSAError, ValueError):
    """A key derivation candidate is not prime.

    Attributes:
        value: The offending candidate.
    """

    def __init__(self, value: int) -> None:
        self.value = value
        super().__init__(f"{value} is not a prime number.")


class DuplicatePrimeError(RSAError, ValueError):
    """Both primes supplied to key derivation are equal."""

    def __init__(self, value: int) -> None:
        self.value = value
        super().__init__(f"P and Q must be different primes, both are {value}.")


class InverseNotFoundError(RSAError, RuntimeError):
    """No modular inverse exists where key derivation required one."""

    def __init__(self, a: int, m: int) -> None:
        self.a = a
        self.m = m
        super().__init__(f"No modular inverse of {a} modulo {m}.")


class MalformedCiphertextError(RSAError, ValueError):
    """The ciphertext cannot be split into valid blocks."""


class InvalidModulusError(RSAError, ValueError):
    """A modulus below one was supplied."""

    def __init__(self, modulus: int) -> None:
        self.modulus = modulus
        super().__init__(f"Modulus must be positive, got {modulus}.")


class MessageRangeError(RSAError, ValueError):
    """A character code does not fit below the modulus and would not survive a round trip."""

    def __init__(self, char: str, mod: int) -> None:
        self.char = char
        self.mod = mod
        super().__init__(f"Character {char!r} (code {ord(char)}) is not below the modulus {mod}.")


class KeyFileError(RSAError, IOError):
    """A key file cannot be read back into a consistent key."""
