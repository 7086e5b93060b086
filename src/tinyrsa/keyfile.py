"""Saves and loads classroom keys as PEM armored DER.

A public key is written as a PKCS1 `RSAPublicKey`, so any RSA tool can read it. A full key pair also carries the
totient and both primes, which no standard private key format holds in this shape, so it is written as a record of
its own under the `TINYRSA KEYPAIR` label. A key pair is checked for consistency when read back.

Typical usage example:

    save_keypair("class.key", derive_keys(17, 11))
    kp = load_keypair("class.key")
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import base64
import binascii
import logging
import pathlib
import textwrap

from pyasn1 import error
from pyasn1.codec.der import decoder
from pyasn1.codec.der import encoder
from pyasn1.type import namedtype
from pyasn1.type import univ
from pyasn1_modules import rfc8017

from tinyrsa.arith import as_integer
from tinyrsa.errors import KeyFileError
from tinyrsa.keygen import check_key
from tinyrsa.keygen import Keypair

logger = logging.getLogger(__name__)

PUBLIC_LABEL = "RSA PUBLIC KEY"
KEYPAIR_LABEL = "TINYRSA KEYPAIR"
KEYPAIR_VERSION = 0


class KeypairRecord(univ.Sequence):
    """DER layout of a saved `Keypair`."""
    componentType = namedtype.NamedTypes(
        namedtype.NamedType("version", univ.Integer()),
        namedtype.NamedType("modulus", univ.Integer()),
        namedtype.NamedType("publicExponent", univ.Integer()),
        namedtype.NamedType("privateExponent", univ.Integer()),
        namedtype.NamedType("totient", univ.Integer()),
        namedtype.NamedType("prime1", univ.Integer()),
        namedtype.NamedType("prime2", univ.Integer()),
    )


def pem_encode(label: str, der: bytes) -> str:
    """Wraps DER bytes in a PEM block with 64 character base64 lines."""
    body = textwrap.wrap(base64.b64encode(der).decode("ascii"), 64)
    return "\n".join([f"-----BEGIN {label}-----", *body, f"-----END {label}-----", ""])


def pem_decode(text: str, label: str) -> bytes:
    """Extracts the DER bytes from a PEM block.

    Args:
        text: The whole PEM text. Blank lines and surrounding whitespace are ignored.
        label: The label the BEGIN and END lines must carry.

    Returns:
        The decoded payload.

    Raises:
        KeyFileError: If the block is missing, carries another label, or its body is not strict base64.
    """
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if len(lines) < 2 or lines[0] != f"-----BEGIN {label}-----" or lines[-1] != f"-----END {label}-----":
        raise KeyFileError(f"Expected a single {label} PEM block.")
    try:
        return base64.b64decode("".join(lines[1:-1]), validate=True)
    except binascii.Error as err:
        raise KeyFileError(f"The {label} block is not valid base64.") from err


def _read(file: str | pathlib.Path, label: str, spec: univ.Sequence) -> dict[str, int]:
    path = pathlib.Path(file)
    try:
        text = path.read_text(encoding="ascii")
    except UnicodeDecodeError as err:
        raise KeyFileError(f"{path} is not a text key file.") from err
    der = pem_decode(text, label)
    try:
        record, rest = decoder.decode(der, asn1Spec=spec)
        fields = {name: int(value) for name, value in record.items()}
    except error.PyAsn1Error as err:
        raise KeyFileError(f"The {label} block in {path} does not hold a valid key.") from err
    if rest:
        raise KeyFileError(f"The {label} block in {path} has {len(rest)} trailing bytes.")
    return fields


def _write(file: str | pathlib.Path, label: str, record: univ.Sequence) -> None:
    path = pathlib.Path(file)
    path.write_text(pem_encode(label, encoder.encode(record)), encoding="ascii")
    logger.debug("Wrote %s block to %s", label, path)


def save_public_key(file: str | pathlib.Path, e: int | str, n: int | str) -> None:
    """Writes the public half of a key as a PKCS1 `RSA PUBLIC KEY` file.

    Args:
        file: Destination, overwritten if it exists.
        e: The public exponent.
        n: The modulus.
    """
    record = rfc8017.RSAPublicKey()
    record["modulus"] = as_integer(n)
    record["publicExponent"] = as_integer(e)
    _write(file, PUBLIC_LABEL, record)


def load_public_key(file: str | pathlib.Path) -> tuple[int, int]:
    """Reads a PKCS1 `RSA PUBLIC KEY` file.

    Args:
        file: The key file.

    Returns:
        The public key as `(e, n)`, the same order as `Keypair.public`.

    Raises:
        KeyFileError: If the file is not a well-formed public key, or the exponent does not fit the modulus.
        OSError: If the file cannot be read.
    """
    fields = _read(file, PUBLIC_LABEL, rfc8017.RSAPublicKey())
    e, n = fields["publicExponent"], fields["modulus"]
    try:
        check_key(e, n)
    except ValueError as err:
        raise KeyFileError(f"{file} holds an unusable public key: {err}") from err
    return e, n


def save_keypair(file: str | pathlib.Path, keys: Keypair) -> None:
    """Writes every component of a key pair as a `TINYRSA KEYPAIR` file.

    Args:
        file: Destination, overwritten if it exists.
        keys: The key pair, as returned by `derive_keys`.
    """
    record = KeypairRecord()
    record["version"] = KEYPAIR_VERSION
    record["modulus"] = keys.n
    record["publicExponent"] = keys.e
    record["privateExponent"] = keys.d
    record["totient"] = keys.phi
    record["prime1"] = keys.p
    record["prime2"] = keys.q
    _write(file, KEYPAIR_LABEL, record)


def load_keypair(file: str | pathlib.Path) -> Keypair:
    """Reads a `TINYRSA KEYPAIR` file and checks that its components agree.

    Args:
        file: The key file.

    Returns:
        The stored key pair.

    Raises:
        KeyFileError: If the file is not a well-formed key pair, has an unknown version, or its components disagree
            with each other.
        OSError: If the file cannot be read.
    """
    fields = _read(file, KEYPAIR_LABEL, KeypairRecord())
    if fields["version"] != KEYPAIR_VERSION:
        raise KeyFileError(f"{file} has unsupported key pair version {fields['version']}.")
    keys = Keypair(n=fields["modulus"],
                   e=fields["publicExponent"],
                   d=fields["privateExponent"],
                   phi=fields["totient"],
                   p=fields["prime1"],
                   q=fields["prime2"])
    if keys.p < 2 or keys.q < 2 or keys.n != keys.p * keys.q:
        raise KeyFileError(f"{file}: modulus {keys.n} is not the product of {keys.p} and {keys.q}.")
    if keys.phi != (keys.p - 1) * (keys.q - 1):
        raise KeyFileError(f"{file}: totient {keys.phi} does not match the primes.")
    try:
        check_key(keys.e, keys.n)
        check_key(keys.d, keys.n)
    except ValueError as err:
        raise KeyFileError(f"{file} holds an unusable key pair: {err}") from err
    if keys.phi < 2 or keys.e * keys.d % keys.phi != 1:
        raise KeyFileError(f"{file}: exponents {keys.e} and {keys.d} are not inverse modulo {keys.phi}.")
    logger.debug("Loaded key pair with n=%d from %s", keys.n, file)
    return keys
