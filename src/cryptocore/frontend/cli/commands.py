"""
Command line interface for cryptocore.

Usage:
  cryptocore encrypt <text> [--password PW]
  cryptocore decrypt <envelope> [--password PW]
  cryptocore hash <text> | --file PATH | --hex HEX
  cryptocore hmac <key> <message>
  cryptocore keygen [--store ACCOUNT]
  cryptocore ivgen
  cryptocore aes-encrypt <text> --key HEX [--iv HEX]
  cryptocore aes-decrypt <ciphertext-hex> --key HEX --iv HEX

Add --json before the subcommand for machine-readable output. The password
falls back to $CRYPTOCORE_PASSWORD.

Exit codes: 0 success, 1 cryptographic error, 2 usage error.
"""

from __future__ import annotations

import argparse
import json
import logging
from typing import Any, Dict, List, Optional

from keyring.errors import KeyringError

from cryptocore.core.encoding import bytes_to_base64, bytes_to_hex, bytes_to_string, hex_to_bytes
from cryptocore.core.hashing import sha256_file_hex, sha256_hex
from cryptocore.core.result import Result, capture
from cryptocore.frontend.cli.context import AppContext, build_context
from cryptocore.frontend.cli.logging_config import configure_logging
from cryptocore.security import keystore
from cryptocore.security.aes import aes_decrypt, aes_encrypt
from cryptocore.security.crypto import decrypt_string, encrypt_string
from cryptocore.security.mac import hmac_sha256_hex
from cryptocore.security.rng import generate_aes_key, generate_iv

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CRYPTO_ERROR = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="cryptocore", description="AES-256 / SHA-256 / HMAC utilities")
    p.add_argument("--json", action="store_true", help="Output JSON to stdout")
    sub = p.add_subparsers(dest="command", required=True)

    enc = sub.add_parser("encrypt", help="Encrypt text with a password")
    enc.add_argument("text")
    enc.add_argument("--password", help="Password (default: $CRYPTOCORE_PASSWORD)")

    dec = sub.add_parser("decrypt", help="Decrypt a base64 envelope with a password")
    dec.add_argument("envelope")
    dec.add_argument("--password", help="Password (default: $CRYPTOCORE_PASSWORD)")

    h = sub.add_parser("hash", help="SHA-256 digest")
    src = h.add_mutually_exclusive_group(required=True)
    src.add_argument("text", nargs="?")
    src.add_argument("--file", dest="file_path", help="Hash the contents of a file")
    src.add_argument("--hex", dest="hex_input", help="Hash raw bytes given as hex")

    m = sub.add_parser("hmac", help="HMAC-SHA256 of a message")
    m.add_argument("key")
    m.add_argument("message")

    kg = sub.add_parser("keygen", help="Generate a random 32-byte AES key")
    kg.add_argument("--store", metavar="ACCOUNT", help="Also save the key in the OS keyring")

    sub.add_parser("ivgen", help="Generate a random 16-byte IV")

    ae = sub.add_parser("aes-encrypt", help="Raw AES-256-CBC encrypt")
    ae.add_argument("text")
    ae.add_argument("--key", required=True, help="32-byte key as hex")
    ae.add_argument("--iv", help="16-byte IV as hex (random if omitted)")

    ad = sub.add_parser("aes-decrypt", help="Raw AES-256-CBC decrypt")
    ad.add_argument("ciphertext", help="Ciphertext as hex")
    ad.add_argument("--key", required=True, help="32-byte key as hex")
    ad.add_argument("--iv", required=True, help="16-byte IV as hex")

    return p


def _emit(args: argparse.Namespace, payload: Dict[str, Any]) -> None:
    if args.json:
        print(json.dumps(payload))
    else:
        for k, v in payload.items():
            print(f"{k}={v}")


def _fail(args: argparse.Namespace, result: Result) -> int:
    if args.json:
        print(json.dumps({"error": result.error_name, "message": str(result.error)}))
    else:
        print(f"Error: {result.error_name}: {result.error}")
    return EXIT_CRYPTO_ERROR


def _usage(args: argparse.Namespace, message: str) -> int:
    print(json.dumps({"error": "usage", "message": message}) if args.json else f"Error: {message}")
    return EXIT_USAGE


def _password(args: argparse.Namespace, ctx: AppContext) -> Optional[str]:
    return args.password if args.password is not None else ctx.password


def _aes_encrypt_hex(text: str, key_hex: str, iv_hex: Optional[str], ctx: AppContext) -> Dict[str, str]:
    key = hex_to_bytes(key_hex)
    iv = hex_to_bytes(iv_hex) if iv_hex is not None else None
    res = aes_encrypt(text, key, iv, source=ctx.source)
    return {"ciphertext": bytes_to_hex(res.ciphertext), "iv": bytes_to_hex(res.iv)}


def _aes_decrypt_hex(ct_hex: str, key_hex: str, iv_hex: str) -> str:
    pt = aes_decrypt(hex_to_bytes(ct_hex), hex_to_bytes(key_hex), hex_to_bytes(iv_hex))
    return bytes_to_string(pt)


def _hash(args: argparse.Namespace) -> str:
    if args.file_path is not None:
        return sha256_file_hex(args.file_path)
    if args.hex_input is not None:
        return sha256_hex(hex_to_bytes(args.hex_input))
    return sha256_hex(args.text)


def run(args: argparse.Namespace, ctx: AppContext) -> int:
    cmd = args.command
    logger.debug("running command %s", cmd)

    if cmd in ("encrypt", "decrypt"):
        password = _password(args, ctx)
        if password is None:
            return _usage(args, "a password is required (--password or $CRYPTOCORE_PASSWORD)")
        if cmd == "encrypt":
            res = capture(encrypt_string, args.text, password, source=ctx.source)
            if not res.ok:
                return _fail(args, res)
            _emit(args, {"envelope": res.value})
        else:
            res = capture(decrypt_string, args.envelope, password)
            if not res.ok:
                return _fail(args, res)
            _emit(args, {"plaintext": res.value})
        return EXIT_OK

    if cmd == "hash":
        res = capture(_hash, args)
        if not res.ok:
            return _fail(args, res)
        _emit(args, {"sha256": res.value})
        return EXIT_OK

    if cmd == "hmac":
        _emit(args, {"hmac_sha256": hmac_sha256_hex(args.key, args.message)})
        return EXIT_OK

    if cmd == "keygen":
        key = generate_aes_key(ctx.source)
        payload = {"key": bytes_to_hex(key), "key_b64": bytes_to_base64(key)}
        if args.store:
            secure, msg = keystore.assess_keyring_backend()
            if not secure:
                return _usage(args, f"refusing to store key: {msg}")
            try:
                keystore.save_key(ctx.keyring_service, args.store, key)
            except KeyringError as exc:
                logger.warning("keyring save failed: %s", exc)
                return _usage(args, f"could not store key in keyring: {exc}")
            payload["stored"] = f"{ctx.keyring_service}/{args.store}"
        _emit(args, payload)
        return EXIT_OK

    if cmd == "ivgen":
        _emit(args, {"iv": bytes_to_hex(generate_iv(ctx.source))})
        return EXIT_OK

    if cmd == "aes-encrypt":
        res = capture(_aes_encrypt_hex, args.text, args.key, args.iv, ctx)
        if not res.ok:
            return _fail(args, res)
        _emit(args, res.value)
        return EXIT_OK

    if cmd == "aes-decrypt":
        res = capture(_aes_decrypt_hex, args.ciphertext, args.key, args.iv)
        if not res.ok:
            return _fail(args, res)
        _emit(args, {"plaintext": res.value})
        return EXIT_OK

    return _usage(args, f"unknown command {cmd}")


def main(argv: Optional[List[str]] = None, ctx: Optional[AppContext] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    ctx = ctx or build_context()
    configure_logging(ctx.log_level)
    return run(args, ctx)


if __name__ == "__main__":
    raise SystemExit(main())
