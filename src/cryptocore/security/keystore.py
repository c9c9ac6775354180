"""OS keystore integration using keyring for opt-in storage of AES keys.

Generated 32-byte keys are base64-encoded and stored under a service/account
pair. Do not assume keyring provides hardware-backed security on all
platforms; check :func:`assess_keyring_backend` before trusting it.
"""
from typing import Optional

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

from cryptocore.core.encoding import base64_to_bytes, bytes_to_base64
from cryptocore.core.exceptions import InvalidEncodingError


def save_key(service: str, account: str, key_bytes: bytes) -> None:
    """Persist binary key_bytes in the OS keystore under (service, account)."""
    keyring.set_password(service, account, bytes_to_base64(key_bytes))


def assess_keyring_backend() -> tuple[bool, str]:
    """Return (is_secure, message) describing the current keyring backend.

    Heuristics are used because `keyring` exposes different backends across
    platforms.
    """
    try:
        backend = keyring.get_keyring()
    except KeyringError as e:
        return False, f"failed to get keyring backend: {e}"

    name = backend.__class__.__name__
    priority = getattr(backend, "priority", None)

    insecure_indicators = ("Plaintext", "Uncrypted", "Simple", "File", "Fail", "Null")
    if any(tok in name for tok in insecure_indicators):
        return False, f"insecure backend detected: {name}"

    if priority is not None and priority <= 0:
        return False, f"no suitable secure keyring backend available (priority={priority}, backend={name})"

    if "Win" in name or "Keychain" in name or "SecretService" in name or "KWallet" in name:
        return True, f"backend looks acceptable: {name} (priority={priority})"

    return True, f"unknown backend '{name}', treat with caution (priority={priority})"


def load_key(service: str, account: str) -> Optional[bytes]:
    """Load a persisted key; returns raw bytes, or None if absent.

    Raises:
        InvalidEncodingError: the stored secret is not valid base64.
    """
    secret = keyring.get_password(service, account)
    if secret is None:
        return None
    try:
        return base64_to_bytes(secret)
    except InvalidEncodingError as exc:
        raise InvalidEncodingError(f"stored key for {service}/{account} is not valid base64") from exc


def delete_key(service: str, account: str) -> bool:
    """Remove the key from the OS keystore. Returns False if nothing was stored."""
    try:
        keyring.delete_password(service, account)
    except PasswordDeleteError:
        return False
    return True
