"""The Command Line Interface for the utility, including Interactive elements.

A hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface) that generates the INTERACTIVE part
on-the-fly based on the arguments missing from the CLI call, including the option that none are given.

Typical usage example:

    tinyrsa keygen --p 17 --q 11
    OR
    python -m tinyrsa
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import logging
import pathlib
import sys
import typing

import tinyrsa
from tinyrsa.arith import as_integer

logger = logging.getLogger(__name__)

EXAMPLE_MESSAGE = "HELLO RSA"


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Callable = str
    choices: list[str] | None = None
    default: typing.Any = None
    advanced: bool = False


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands in tinyrsa.",
            choices=["keygen", "encrypt", "decrypt", "example"],
        ),
    "keygen":
        HelpData("Derive a key pair from two primes."),
    "encrypt":
        HelpData("Encrypt text into decimal blocks."),
    "decrypt":
        HelpData("Decrypt decimal blocks into text."),
    "example":
        HelpData("Show the P=17, Q=11 classroom example."),
    "p":
        HelpData(description="First prime.", format=as_integer),
    "q":
        HelpData(description="Second prime, different from the first.", format=as_integer),
    "e":
        HelpData(description="Public exponent (E).", format=as_integer),
    "d":
        HelpData(description="Private exponent (D).", format=as_integer),
    "n":
        HelpData(description="Modulus (N).", format=as_integer),
    "public_key":
        HelpData(
            description="Location of the public key file.",
            format=pathlib.Path,
        ),
    "keypair":
        HelpData(
            description="Location of the key pair file, which holds the private key.",
            format=pathlib.Path,
        ),
    "message":
        HelpData(
            description="Message or path to file containing payload. If Path start with `P:`",
            format=str,
        ),
    "strict":
        HelpData(
            description="Refuse characters whose code is not below the modulus?",
            choices=["Y", "N"],
            advanced=True,
            default="N",
        ),
    "overwrite":
        HelpData(
            description="Overwrite specified destination files if they exist?",
            choices=["Y", "N"],
            default="N",
        )
}

pubkey = argparse.ArgumentParser(add_help=False)
pubkey.add_argument("--public_key", "-p", type=help_dict["public_key"].format, help=help_dict["public_key"].description)
privkey = argparse.ArgumentParser(add_help=False)
privkey.add_argument("--keypair",
                     "-P",
                     type=help_dict["keypair"].format,
                     help=help_dict["keypair"].description)
modulus = argparse.ArgumentParser(add_help=False)
modulus.add_argument("--n", "-N", type=help_dict["n"].format, help=help_dict["n"].description)
payloads = argparse.ArgumentParser(add_help=False)
payloads.add_argument("--message", "-m", type=help_dict["message"].format, help=help_dict["message"].description)
corep = argparse.ArgumentParser(prog="tinyrsa")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {tinyrsa.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
corep.add_argument("--advanced", "-a", action="store_true", help="Enable advanced mode, for interactive mode")
corep.add_argument("--verbose", "-V", action="store_true", help="Enable debug logging")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

keygen = commands.add_parser("keygen", parents=[privkey, pubkey], help=help_dict["keygen"].description)
keygen.add_argument("--p", type=help_dict["p"].format, help=help_dict["p"].description)
keygen.add_argument("--q", type=help_dict["q"].format, help=help_dict["q"].description)
keygen.add_argument("--overwrite", "-o", action="store_const", const="Y", help=help_dict["overwrite"].description)

encrypt = commands.add_parser("encrypt", parents=[pubkey, modulus, payloads], help=help_dict["encrypt"].description)
encrypt.add_argument("--e", "-E", type=help_dict["e"].format, help=help_dict["e"].description)
encrypt.add_argument("--strict", "-s", action="store_const", const="Y", help=help_dict["strict"].description)
decrypt = commands.add_parser("decrypt", parents=[privkey, modulus, payloads], help=help_dict["decrypt"].description)
decrypt.add_argument("--d", "-D", type=help_dict["d"].format, help=help_dict["d"].description)

example = commands.add_parser("example", help=help_dict["example"].description)


def needs(args: argparse.Namespace) -> tuple[str, ...]:
    """Arguments the subcommand still requires. Key files make the raw exponent and modulus unnecessary."""
    match args.subcommand:
        case "keygen":
            return "p", "q"
        case "encrypt":
            keys = () if args.public_key else ("e", "n")
            return keys + ("message", "strict")
        case "decrypt":
            keys = () if args.keypair else ("d", "n")
            return keys + ("message",)
    return ()


def checkmodes(arg: str, mode: tuple[bool, bool]):
    helper_data = help_dict[arg]
    if (mode[0] or (helper_data.advanced and not mode[1])) and helper_data.default is not None:
        return helper_data.default
    if mode[0]:
        raise IOError(f"Argument {arg} is missing and non-interactive mode is active.")
    return helper_data


def choice_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    choices = helper_data.choices
    vald = set(choices)
    for choice in choices:
        defstring = " (Default)" if choice == helper_data.default else ""
        if help_dict.get(choice, None):
            prntr(f"{choice} - {help_dict[choice].description}" + defstring)
        else:
            prntr(f"{choice}" + defstring)
    if helper_data.default is not None:
        prntr("To accept default just click enter. Otherwise specify value.")
    while True:
        ch = input(f"{arg}: ")
        if ch in vald:
            return ch
        if not ch and helper_data.default is not None:
            return helper_data.default
        prntr("Please select an option from the list.")


def input_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    if helper_data.default is not None:
        prntr(f"Default value: {helper_data.default}")
        prntr("To accept default just click enter. Otherwise specify value.")
    cls = helper_data.format
    while True:
        ch = input(f"{arg}: ")
        if not ch and helper_data.default is not None:
            return helper_data.default
        if ch == "":
            prntr("Please provide a value.")
            continue
        try:
            return cls(ch)
        except ValueError as err:
            prntr(f"We could not use that value: {err}")


def check_message(mess: str, enc: str = "utf-8") -> str:
    """Parse message for path-notice."""
    if mess.startswith("P:"):
        mess = mess[2:]
        with open(mess, "r", encoding=enc) as f:
            mess = f.read()
    return mess


def run(args: argparse.Namespace, pspr: typing.Callable, pstatus: tuple[bool, bool]) -> None:
    """Executes a fully populated subcommand."""
    match args.subcommand:
        case "keygen":
            kp = tinyrsa.derive_keys(args.p, args.q, distinct=True)
            pspr("Key pair derived!")
            print(f"n: {kp.n}")
            print(f"e: {kp.e}")
            print(f"d: {kp.d}")
            print(f"phi: {kp.phi}")
            targets = [pt for pt in (args.keypair, args.public_key) if pt is not None]
            if any(pt.exists() for pt in targets):
                rs = getattr(args, "overwrite", None)
                if rs is None:
                    rs = choice_handler("overwrite", pstatus, pspr)
                if rs == "N":
                    print("Destination private or public key already exists!")
                    return
            if args.keypair is not None:
                tinyrsa.save_keypair(args.keypair, kp)
            if args.public_key is not None:
                tinyrsa.save_public_key(args.public_key, kp.e, kp.n)
        case "encrypt":
            if args.public_key:
                e, n = tinyrsa.load_public_key(args.public_key)
            else:
                tinyrsa.check_key(args.e, args.n)
                e, n = args.e, args.n
            ciph = tinyrsa.encrypt(check_message(args.message), e, n, args.strict == "Y")
            pspr("Ciphertext:")
            print(ciph)
            size = tinyrsa.block_size(n)
            pspr(f"Blocks: {len(ciph) // size} of {size} digits")
        case "decrypt":
            ciph = check_message(args.message, "ascii").strip()
            if args.keypair:
                d, n = tinyrsa.load_keypair(args.keypair).private
            else:
                tinyrsa.check_key(args.d, args.n)
                d, n = args.d, args.n
            clear = tinyrsa.decrypt(ciph, d, n)
            pspr("Cleartext:")
            print(clear)
        case "example":
            kp = tinyrsa.example_keys()
            print(f"P={kp.p}, Q={kp.q}")
            print(f"Public key (E, N): {kp.public}")
            print(f"Private key (D, N): {kp.private}")
            ciph = tinyrsa.encrypt(EXAMPLE_MESSAGE, kp.e, kp.n)
            print(f"Encrypt {EXAMPLE_MESSAGE!r}: {ciph}")
            print(f"Decrypt: {tinyrsa.decrypt(ciph, kp.d, kp.n)!r}")


def main():
    """Core Hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface)"""
    args = corep.parse_args()
    pstatus = (args.non_interactive, args.advanced)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    def pspr(text: str):
        """Print only if not in non-interactive mode."""
        if not pstatus[0]:
            print(text)

    pspr("Welcome to tinyrsa!\n")
    try:
        if not args.subcommand:
            args.subcommand = choice_handler("subcommand", pstatus)
            # Interactively chosen subcommands skip their subparser defaults.
            for name in help_dict:
                if not hasattr(args, name):
                    setattr(args, name, None)
        for reqs in needs(args):
            if getattr(args, reqs, None) is None:
                if help_dict[reqs].choices is not None:
                    res = choice_handler(reqs, pstatus)
                else:
                    res = input_handler(reqs, pstatus)
                setattr(args, reqs, res)
            else:
                pspr(f"{reqs}: {getattr(args, reqs)}")
        pspr("\nInput Complete! Executing...")
        run(args, pspr, pstatus)
    except (tinyrsa.RSAError, ValueError, OSError) as err:
        logger.debug("Subcommand %s failed", args.subcommand, exc_info=True)
        print(f"Error: {err}", file=sys.stderr)
        sys.exit(1)
    pspr("Thank you for using tinyrsa!")
    pspr("Goodbye!")


if __name__ == "__main__":
    main()
