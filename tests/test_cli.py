# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import pytest

import tinyrsa
from tinyrsa import __main__ as cli

def run_cli(monkeypatch, *argv, inputs=()):
    feed = iter(inputs)
    monkeypatch.setattr("sys.argv", ["tinyrsa", *argv])
    monkeypatch.setattr("builtins.input", lambda _prompt="": next(feed))
    cli.main()

def test_keygen_prints_keys(monkeypatch, capsys):
    run_cli(monkeypatch, "-n", "keygen", "--p", "17", "--q", "11")
    out = capsys.readouterr().out.splitlines()
    assert out == ["n: 187", "e: 107", "d: 3", "phi: 160"]

def test_keygen_writes_files(monkeypatch, capsys, tmp_path):
    priv, pub = tmp_path / "key", tmp_path / "key.pub"
    run_cli(monkeypatch, "-n", "keygen", "--p", "61", "--q", "53", "-P", str(priv), "-p", str(pub))
    capsys.readouterr()
    assert tinyrsa.load_public_key(pub) == (1783, 3233)
    assert tinyrsa.load_keypair(priv) == tinyrsa.derive_keys(61, 53)

    run_cli(monkeypatch, "-n", "encrypt", "-p", str(pub), "--message", "file keys")
    ciphertext = capsys.readouterr().out.strip()
    assert len(ciphertext) == 4 * len("file keys")

    run_cli(monkeypatch, "-n", "decrypt", "-P", str(priv), "--message", ciphertext)
    assert capsys.readouterr().out.strip() == "file keys"

def test_keygen_refuses_overwrite(monkeypatch, capsys, tmp_path):
    pub = tmp_path / "key.pub"
    pub.write_text("occupied", encoding="ascii")
    run_cli(monkeypatch, "-n", "keygen", "--p", "17", "--q", "11", "-p", str(pub))
    assert "already exists" in capsys.readouterr().out
    assert pub.read_text(encoding="ascii") == "occupied"

    run_cli(monkeypatch, "-n", "keygen", "--p", "17", "--q", "11", "-p", str(pub), "--overwrite")
    assert tinyrsa.load_public_key(pub) == (107, 187)

@pytest.mark.parametrize("p,q,msg", [("15", "11", "15 is not a prime"), ("13", "13", "different"),
                                     ("2", "3", "No modular inverse")])
def test_keygen_errors(monkeypatch, capsys, p, q, msg):
    with pytest.raises(SystemExit) as exc:
        run_cli(monkeypatch, "-n", "keygen", "--p", p, "--q", q)
    assert exc.value.code == 1
    assert msg in capsys.readouterr().err


@pytest.mark.parametrize("body", ["@@@@x", "BAOtYWJj", ""])
def test_decrypt_unreadable_keypair(monkeypatch, capsys, tmp_path, body):
    bad = tmp_path / "badfile"
    bad.write_text(f"-----BEGIN TINYRSA KEYPAIR-----\n{body}\n-----END TINYRSA KEYPAIR-----\n", encoding="ascii")
    with pytest.raises(SystemExit) as exc:
        run_cli(monkeypatch, "-n", "decrypt", "-P", str(bad), "--message", "072")
    assert exc.value.code == 1
    assert capsys.readouterr().err.startswith("Error: ")

def test_encrypt_missing_public_key(monkeypatch, capsys, tmp_path):
    with pytest.raises(SystemExit) as exc:
        run_cli(monkeypatch, "-n", "encrypt", "-p", str(tmp_path / "absent.pub"), "--message", "HI")
    assert exc.value.code == 1
    assert "absent.pub" in capsys.readouterr().err


def test_encrypt_decrypt_raw_keys(monkeypatch, capsys):
    run_cli(monkeypatch, "-n", "encrypt", "--e", "23", "--n", "187", "--message", "HELLO RSA")
    ciphertext = capsys.readouterr().out.strip()
    assert ciphertext == tinyrsa.encrypt("HELLO RSA", 23, 187)

    run_cli(monkeypatch, "-n", "decrypt", "--d", "7", "--n", "187", "--message", ciphertext)
    assert capsys.readouterr().out.strip() == "HELLO RSA"

def test_encrypt_message_from_file(monkeypatch, capsys, tmp_path):
    src = tmp_path / "plain.txt"
    src.write_text("FROM FILE", encoding="utf-8")
    run_cli(monkeypatch, "-n", "encrypt", "--e", "23", "--n", "187", "--message", f"P:{src}")
    assert capsys.readouterr().out.strip() == tinyrsa.encrypt("FROM FILE", 23, 187)

def test_encrypt_strict(monkeypatch, capsys):
    with pytest.raises(SystemExit):
        run_cli(monkeypatch, "-n", "encrypt", "--e", "23", "--n", "187", "--message", "é", "--strict")
    assert "not below the modulus" in capsys.readouterr().err

def test_decrypt_malformed(monkeypatch, capsys):
    with pytest.raises(SystemExit) as exc:
        run_cli(monkeypatch, "-n", "decrypt", "--d", "7", "--n", "187", "--message", "12")
    assert exc.value.code == 1
    assert "block size 3" in capsys.readouterr().err

def test_decrypt_rejects_bad_key(monkeypatch, capsys):
    with pytest.raises(SystemExit):
        run_cli(monkeypatch, "-n", "decrypt", "--d", "187", "--n", "187", "--message", "072")
    assert "smaller than the modulus" in capsys.readouterr().err

def test_non_interactive_missing_argument(monkeypatch, capsys):
    with pytest.raises(SystemExit):
        run_cli(monkeypatch, "-n", "encrypt", "--n", "187", "--message", "HI")
    assert "non-interactive" in capsys.readouterr().err

def test_interactive_prompts(monkeypatch, capsys):
    run_cli(monkeypatch, "keygen", inputs=["abc", "17", "11"])
    out = capsys.readouterr().out
    assert "We could not use that value" in out
    assert "n: 187" in out
    assert "Goodbye!" in out

def test_interactive_subcommand_choice(monkeypatch, capsys):
    run_cli(monkeypatch, inputs=["nope", "example"])
    out = capsys.readouterr().out
    assert "Please select an option from the list." in out
    assert "Decrypt: 'HELLO RSA'" in out

def test_example(monkeypatch, capsys):
    run_cli(monkeypatch, "-n", "example")
    out = capsys.readouterr().out
    assert "Public key (E, N): (23, 187)" in out
    assert "Private key (D, N): (7, 187)" in out
    assert f"Encrypt 'HELLO RSA': {tinyrsa.encrypt('HELLO RSA', 23, 187)}" in out
