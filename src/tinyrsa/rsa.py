"""Provides the textbook RSA block codec.

Text is encrypted one character at a time: each character code is raised to the key exponent modulo n and written
as a zero-padded decimal block as wide as n itself. Decryption slices the digit stream back into blocks.

Typical usage example:

    kp = derive_keys(17, 11)
    c = encrypt("HELLO RSA", kp.e, kp.n)
    r = decrypt(c, kp.d, kp.n)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import string
import warnings

from tinyrsa.arith import as_integer
from tinyrsa.arith import mod_pow
from tinyrsa.errors import InvalidModulusError
from tinyrsa.errors import MalformedCiphertextError
from tinyrsa.errors import MessageRangeError

logger = logging.getLogger(__name__)


def block_size(mod: int) -> int:
    """Number of decimal digits in the modulus, which is the width of every ciphertext block.

    Raises:
        InvalidModulusError: If the modulus is not positive.
    """
    if mod <= 0:
        raise InvalidModulusError(mod)
    return len(str(mod))


def split_blocks(ciphertext: str, mod: int) -> list[str]:
    """Splits a ciphertext digit stream into its fixed-width blocks.

    Args:
        ciphertext: The concatenated decimal blocks.
        mod: The modulus the ciphertext was produced with.

    Returns:
        The blocks, in order.

    Raises:
        InvalidModulusError: If the modulus is not positive.
        MalformedCiphertextError: If the stream holds non-digits or its length is not a multiple of the block size.
    """
    size = block_size(mod)
    if any(ch not in string.digits for ch in ciphertext):
        raise MalformedCiphertextError("Ciphertext must contain decimal digits only.")
    if len(ciphertext) % size != 0:
        raise MalformedCiphertextError(
            f"Ciphertext length {len(ciphertext)} is not a multiple of the block size {size}.")
    return [ciphertext[i:i + size] for i in range(0, len(ciphertext), size)]


def encrypt(plaintext: str, e: int | str, n: int | str, strict: bool = False) -> str:
    """Encrypts text into a fixed-width decimal block stream.

    Characters whose code is not below `n` wrap around modulo `n` and will not decrypt to themselves. By default
    this only warns, as textbook RSA does nothing about it; `strict` turns it into an error.

    Args:
        plaintext: The text to encrypt.
        e: The public exponent.
        n: The modulus.
        strict: Whether to reject characters that cannot round-trip. Defaults to False.

    Returns:
        The ciphertext, exactly `block_size(n) * len(plaintext)` digits long.

    Raises:
        InvalidModulusError: If `n` is not positive.
        MessageRangeError: If `strict` is set and a character code is >= `n`.
    """
    e, n = as_integer(e), as_integer(n)
    size = block_size(n)
    blocks = []
    for char in plaintext:
        code = ord(char)
        if code >= n:
            if strict:
                raise MessageRangeError(char, n)
            warnings.warn(f"Character {char!r} exceeds the modulus {n} and will not decrypt correctly.",
                          RuntimeWarning)
        blocks.append(str(mod_pow(code, e, n)).zfill(size))
    logger.debug("Encrypted %d characters into blocks of %d digits", len(blocks), size)
    return "".join(blocks)


def decrypt(ciphertext: str, d: int | str, n: int | str) -> str:
    """Decrypts a fixed-width decimal block stream back into text.

    Args:
        ciphertext: The concatenated decimal blocks.
        d: The private exponent.
        n: The modulus.

    Returns:
        The plaintext, one character per block.

    Raises:
        InvalidModulusError: If `n` is not positive.
        MalformedCiphertextError: If the stream cannot be split into blocks, or a block decrypts to a value that is
            not a character code.
    """
    d, n = as_integer(d), as_integer(n)
    result = []
    for block in split_blocks(ciphertext, n):
        code = mod_pow(int(block), d, n)
        try:
            result.append(chr(code))
        except (ValueError, OverflowError) as err:
            raise MalformedCiphertextError(f"Block {block} decrypts to {code}, which is no character.") from err
    logger.debug("Decrypted %d blocks", len(result))
    return "".join(result)
