"""Core enumerations for the spiclient system."""

from __future__ import annotations

import enum
from typing import Literal

OaepHash = Literal["SHA1", "SHA256"]


class Padding(str, enum.Enum):
    """RSA padding scheme applied by the key pair codec."""

    OAEP = "oaep"  # OAEP with MGF1, digest chosen by OaepHash
    PKCS1V15 = "pkcs1v15"  # Legacy PKCS#1 v1.5, as decrypted by the core server


class ResponseMode(str, enum.Enum):
    """How the remote command client treats the response body."""

    PLAINTEXT = "plaintext"  # Decode the body as UTF-8 text, no decryption
    DECRYPT = "decrypt"  # Decrypt the body with the private key first
