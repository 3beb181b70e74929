"""RSA key pair codec for spiclient.

Public API:
    KeyPairCodec -- Encrypt/decrypt over a PEM-loaded RSA key pair
    KeyLoadError -- Key file missing, unreadable or malformed
    CryptoError -- Encryption or decryption failure
"""

from spiclient.crypto.codec import (
    CryptoError,
    KeyLoadError,
    KeyPairCodec,
    load_private_key,
    load_public_key,
    max_message_size,
)

__all__ = [
    "CryptoError",
    "KeyLoadError",
    "KeyPairCodec",
    "load_private_key",
    "load_public_key",
    "max_message_size",
]
