"""
Resolution of legacy secret fields into the current Secret model.

A legacy secret is stored in one of three ways: inline plaintext bytes, a path
to a credential file, or an encoded string written by older releases
("$aes$<hex key>$<hex nonce and ciphertext>"). Resolution checks them in that
order and the first populated source wins.
"""

import logging
import os
from pathlib import Path
from typing import Protocol

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .errors import DecodeError, SecretResolutionError
from .model.secret import Secret

logger = logging.getLogger(__name__)

LEGACY_SECRET_PREFIX = "aes"
NONCE_SIZE = 12


class CredentialFileReader(Protocol):
    def __call__(self, path: str) -> bytes: ...


class SecretDecoder(Protocol):
    def __call__(self, encoded: str) -> Secret: ...


def read_credential_file(path: str) -> bytes:
    return Path(path).read_bytes()


def encode_legacy_secret(plain: str) -> str:
    """Encode `plain` the way older releases stored secrets."""
    key = os.urandom(16).hex()
    nonce = os.urandom(NONCE_SIZE)
    ciphertext = AESGCM(key.encode("ascii")).encrypt(nonce, plain.encode("utf-8"), None)
    return f"${LEGACY_SECRET_PREFIX}${key}${(nonce + ciphertext).hex()}"


def decode_legacy_secret(encoded: str) -> Secret:
    """Decode an old "$aes$..." string into a plain Secret.

    Raises:
        DecodeError: If the string is malformed or fails authentication
    """
    parts = encoded.split("$")
    if len(parts) != 4:
        raise DecodeError("data to decrypt is not in the correct format")

    key = parts[2].encode("ascii", errors="replace")
    try:
        data = bytes.fromhex(parts[3])
    except ValueError as e:
        raise DecodeError(f"invalid hex ciphertext: {e}") from e

    if len(data) < NONCE_SIZE:
        raise DecodeError("malformed ciphertext")

    try:
        aesgcm = AESGCM(key)
    except ValueError as e:
        raise DecodeError(f"invalid key: {e}") from e

    nonce, ciphertext = data[:NONCE_SIZE], data[NONCE_SIZE:]
    try:
        plaintext = aesgcm.decrypt(nonce, ciphertext, None)
    except InvalidTag as e:
        raise DecodeError("unable to decrypt data: authentication failed") from e

    return Secret.plain(plaintext)


def resolve_secret(
    *,
    plain: bytes | None = None,
    credential_file: str | None = None,
    encoded: str | None = None,
    read_file: CredentialFileReader = read_credential_file,
    decode: SecretDecoder = decode_legacy_secret,
    username: str = "",
    field_name: str = "",
) -> Secret:
    """Turn the populated legacy source into a Secret.

    Priority: plain bytes, credential file, encoded string. Nothing populated
    gives an empty Secret, which is valid.

    Raises:
        SecretResolutionError: If the credential file cannot be read or the
            encoded string cannot be decoded
    """
    if plain:
        return Secret.plain(plain)

    if credential_file:
        try:
            contents = read_file(credential_file)
        except OSError as e:
            raise SecretResolutionError(
                f"unable to read credential file {credential_file!r} for user {username!r}: {e}",
                path=credential_file,
                username=username,
                field_name=field_name,
                cause=e,
            ) from e
        logger.debug(f"Loaded {field_name} for user '{username}' from {credential_file}")
        return Secret.plain(contents)

    if encoded:
        try:
            return decode(encoded)
        except DecodeError as e:
            raise SecretResolutionError(
                f"unable to decode {field_name} for user {username!r}: {e}",
                username=username,
                field_name=field_name,
                cause=e,
            ) from e

    return Secret.empty()
