"""RSA key pair codec.

Loads a PEM public key and a PEM private key from disk once, at
construction, and exposes encrypt/decrypt over them. The key material is
never reloaded: if the files change on disk, a running codec keeps the
keys it was built with.
"""

from __future__ import annotations

import logging
from pathlib import Path

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from spiclient.domain.errors import SpiClientError
from spiclient.domain.models import OaepHash, Padding

logger = logging.getLogger(__name__)


class KeyLoadError(SpiClientError):
    """Raised when a key file cannot be read or parsed."""

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class CryptoError(SpiClientError):
    """Raised when encryption or decryption fails."""

    def __init__(self, message: str, operation: str = "") -> None:
        super().__init__(message)
        self.operation = operation


def _hash_alg(name: OaepHash) -> hashes.HashAlgorithm:
    n = name.upper()
    if n == "SHA1":
        return hashes.SHA1()
    if n == "SHA256":
        return hashes.SHA256()
    raise ValueError(f"Unsupported OAEP hash: {name}")


def max_message_size(
    key_size: int,
    scheme: Padding = Padding.OAEP,
    oaep_hash: OaepHash = "SHA1",
) -> int:
    """Return the largest plaintext, in bytes, a single RSA block can carry.

    Args:
        key_size: Modulus size in bits.
        scheme: Padding scheme used for encryption.
        oaep_hash: Digest used by OAEP (ignored for PKCS#1 v1.5).
    """
    k = (key_size + 7) // 8
    if Padding(scheme) is Padding.PKCS1V15:
        return k - 11
    return k - 2 * _hash_alg(oaep_hash).digest_size - 2


def _read_pem(path: Path | str, kind: str) -> bytes:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise KeyLoadError(f"Failed to read {kind} key from {path}: {e}", path=str(path)) from e
    return text.encode("utf-8")


def load_public_key(path: Path | str) -> rsa.RSAPublicKey:
    """Load an RSA public key (SPKI or PKCS#1 PEM) from ``path``."""
    pem = _read_pem(path, "public")
    try:
        key = serialization.load_pem_public_key(pem)
    except (ValueError, UnsupportedAlgorithm) as e:
        raise KeyLoadError(f"Malformed public key PEM in {path}: {e}", path=str(path)) from e
    if not isinstance(key, rsa.RSAPublicKey):
        raise KeyLoadError(f"Public key in {path} is not an RSA key", path=str(path))
    return key


def load_private_key(path: Path | str, passphrase: bytes | None = None) -> rsa.RSAPrivateKey:
    """Load an RSA private key (PKCS#1 or PKCS#8 PEM) from ``path``."""
    pem = _read_pem(path, "private")
    try:
        key = serialization.load_pem_private_key(pem, password=passphrase)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise KeyLoadError(f"Malformed private key PEM in {path}: {e}", path=str(path)) from e
    if not isinstance(key, rsa.RSAPrivateKey):
        raise KeyLoadError(f"Private key in {path} is not an RSA key", path=str(path))
    return key


class KeyPairCodec:
    """Encrypts with a public key and decrypts with a private key.

    Both keys are read synchronously from PEM files when the codec is
    created. A missing file, malformed PEM or non-RSA key raises
    :class:`KeyLoadError` right away.

    The two keys do not need to belong to the same pair: a client usually
    holds the server's public key and its own private key.

    Example usage::

        codec = KeyPairCodec("certs/public_key.pem", "certs/private_key.pem")
        ciphertext = codec.encrypt("ls -la")
        assert codec.decrypt(ciphertext) == "ls -la"  # same pair only
    """

    def __init__(
        self,
        public_key_path: Path | str,
        private_key_path: Path | str,
        padding_scheme: Padding = Padding.OAEP,
        oaep_hash: OaepHash = "SHA1",
        passphrase: bytes | None = None,
    ) -> None:
        try:
            self._padding_scheme = Padding(padding_scheme)
            self._hash = _hash_alg(oaep_hash)
        except ValueError as e:
            raise CryptoError(f"Unsupported codec settings: {e}", operation="configure") from e
        self._oaep_hash = oaep_hash
        self._public_key = load_public_key(public_key_path)
        logger.info("Loaded public key from %s", public_key_path)
        self._private_key = load_private_key(private_key_path, passphrase)
        logger.info("Loaded private key from %s", private_key_path)

    @property
    def padding_scheme(self) -> Padding:
        return self._padding_scheme

    @property
    def key_size(self) -> int:
        """Modulus size of the public key in bits."""
        return self._public_key.key_size

    @property
    def max_message_size(self) -> int:
        """Largest plaintext in bytes that :meth:`encrypt` accepts."""
        return max_message_size(self.key_size, self._padding_scheme, self._oaep_hash)

    def _padding(self) -> padding.AsymmetricPadding:
        if self._padding_scheme is Padding.PKCS1V15:
            return padding.PKCS1v15()
        return padding.OAEP(mgf=padding.MGF1(algorithm=self._hash), algorithm=self._hash, label=None)

    def encrypt(self, message: str) -> bytes:
        """Encrypt ``message`` with the public key.

        Raises:
            CryptoError: If the UTF-8 encoded message is longer than
                :attr:`max_message_size`, or the library rejects it.
        """
        data = message.encode("utf-8")
        limit = self.max_message_size
        if len(data) > limit:
            raise CryptoError(
                f"Message is {len(data)} bytes, exceeds the {limit} byte limit "
                f"for a {self.key_size}-bit key with {self._padding_scheme.value} padding",
                operation="encrypt",
            )
        try:
            return self._public_key.encrypt(data, self._padding())
        except ValueError as e:
            raise CryptoError(f"Encryption failed: {e}", operation="encrypt") from e

    def decrypt(self, ciphertext: bytes) -> str:
        """Decrypt ``ciphertext`` with the private key and decode it as UTF-8.

        Raises:
            CryptoError: If the ciphertext was not produced by the matching
                public key, is corrupted, or does not decode as UTF-8.
        """
        try:
            data = self._private_key.decrypt(ciphertext, self._padding())
        except ValueError as e:
            raise CryptoError(f"Decryption failed: {e}", operation="decrypt") from e
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CryptoError(f"Decrypted data is not valid UTF-8: {e}", operation="decrypt") from e
