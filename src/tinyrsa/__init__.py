"""Textbook RSA over small primes, for the classroom.

Derives a key pair from two primes chosen by hand, encrypts text into a fixed-width decimal block stream and decrypts
it again. Exposes the underlying number theory (primality by trial division, extended Euclid, modular inverse and
modular exponentiation) as reusable primitives, and saves keys as PEM files. Nothing here is secure, and it is not
meant to be.

Typical usage example:

    kp = derive_keys(17, 11)
    c = encrypt("HELLO RSA", kp.e, kp.n)
    r = decrypt(c, kp.d, kp.n)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from tinyrsa.arith import as_integer
from tinyrsa.arith import extended_gcd
from tinyrsa.arith import gcd
from tinyrsa.arith import mod_inverse
from tinyrsa.arith import mod_pow
from tinyrsa.errors import DuplicatePrimeError
from tinyrsa.errors import InverseNotFoundError
from tinyrsa.errors import InvalidModulusError
from tinyrsa.errors import KeyFileError
from tinyrsa.errors import MalformedCiphertextError
from tinyrsa.errors import MessageRangeError
from tinyrsa.errors import NotPrimeError
from tinyrsa.errors import RSAError
from tinyrsa.keygen import check_key
from tinyrsa.keygen import derive_keys
from tinyrsa.keygen import example_keys
from tinyrsa.keygen import is_prime
from tinyrsa.keygen import Keypair
from tinyrsa.keyfile import load_keypair
from tinyrsa.keyfile import load_public_key
from tinyrsa.keyfile import save_keypair
from tinyrsa.keyfile import save_public_key
from tinyrsa.rsa import block_size
from tinyrsa.rsa import decrypt
from tinyrsa.rsa import encrypt
from tinyrsa.rsa import split_blocks

__version__ = "0.1.0"
__all__ = [
    "Keypair",
    "RSAError",
    "NotPrimeError",
    "DuplicatePrimeError",
    "InverseNotFoundError",
    "InvalidModulusError",
    "KeyFileError",
    "MalformedCiphertextError",
    "MessageRangeError",
    "as_integer",
    "gcd",
    "extended_gcd",
    "mod_inverse",
    "mod_pow",
    "is_prime",
    "derive_keys",
    "check_key",
    "example_keys",
    "block_size",
    "split_blocks",
    "encrypt",
    "decrypt",
    "save_public_key",
    "load_public_key",
    "save_keypair",
    "load_keypair",
]
