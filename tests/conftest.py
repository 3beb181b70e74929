"""Shared test fixtures for the spiclient test suite.

Provides RSA key pairs written to temporary PEM files and resets the
package logger between tests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519, rsa


@dataclass(frozen=True)
class KeyFiles:
    public: Path
    private: Path


def _write_rsa_pair(directory: Path, private_format: serialization.PrivateFormat) -> KeyFiles:
    priv = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    public = directory / "public_key.pem"
    private = directory / "private_key.pem"
    public.write_bytes(
        priv.public_key().public_bytes(
            serialization.Encoding.PEM,
            serialization.PublicFormat.SubjectPublicKeyInfo,
        )
    )
    private.write_bytes(
        priv.private_bytes(
            serialization.Encoding.PEM,
            private_format,
            serialization.NoEncryption(),
        )
    )
    return KeyFiles(public=public, private=private)


# ---------------------------------------------------------------------------
# Key Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def key_files(tmp_path_factory: pytest.TempPathFactory) -> KeyFiles:
    """A 2048-bit RSA pair: SPKI public key, PKCS#8 private key."""
    return _write_rsa_pair(tmp_path_factory.mktemp("keys"), serialization.PrivateFormat.PKCS8)


@pytest.fixture(scope="session")
def other_key_files(tmp_path_factory: pytest.TempPathFactory) -> KeyFiles:
    """An unrelated RSA pair, private key in traditional PKCS#1 form."""
    return _write_rsa_pair(
        tmp_path_factory.mktemp("other-keys"), serialization.PrivateFormat.TraditionalOpenSSL
    )


@pytest.fixture(scope="session")
def ed25519_public_key(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """A PEM public key that is not RSA."""
    path = tmp_path_factory.mktemp("ed25519") / "public_key.pem"
    path.write_bytes(
        ed25519.Ed25519PrivateKey.generate().public_key().public_bytes(
            serialization.Encoding.PEM,
            serialization.PublicFormat.SubjectPublicKeyInfo,
        )
    )
    return path


@pytest.fixture
def garbage_pem(tmp_path: Path) -> Path:
    """A file that looks like PEM but holds no key."""
    path = tmp_path / "broken.pem"
    path.write_text("-----BEGIN PUBLIC KEY-----\nnot base64 at all\n-----END PUBLIC KEY-----\n")
    return path


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers setup_logging() attached, so they never outlive capsys streams."""
    yield
    pkg_logger = logging.getLogger("spiclient")
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
        handler.close()
    pkg_logger.setLevel(logging.NOTSET)
