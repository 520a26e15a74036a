"""Password encryption used by the login form."""

from __future__ import annotations

import base64
import secrets

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

AES_CHARS = "ABCDEFGHJKMNPQRSTWXYZabcdefhijkmnprstwxyz2345678"

_IV_LENGTH = 16
_PREFIX_LENGTH = 64
_KEY_LENGTH = 16


def random_string(n: int) -> str:
    """Return ``n`` random characters drawn from :data:`AES_CHARS`."""
    return "".join(secrets.choice(AES_CHARS) for _ in range(n))


def aes_encrypt_password(password: str, salt: str) -> str:
    """Encrypt ``password`` with AES-128-CBC keyed by ``salt``.

    A random 64-character prefix is put in front of the password and a
    random IV is used; the result is base64 text. An empty salt leaves the
    password as it is.
    """
    if not salt:
        return password

    key = salt.encode("utf-8")
    if len(key) != _KEY_LENGTH:
        raise ValueError("Salt length NOT equals 16.")

    iv = random_string(_IV_LENGTH).encode("ascii")
    data = random_string(_PREFIX_LENGTH).encode("ascii") + password.encode("utf-8")

    padder = padding.PKCS7(algorithms.AES.block_size).padder()
    padded = padder.update(data) + padder.finalize()

    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    ciphertext = encryptor.update(padded) + encryptor.finalize()
    return base64.b64encode(ciphertext).decode("ascii")