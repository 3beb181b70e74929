"""Command-line interface for spiclient.

Sends an encrypted command to the core server, or runs the key pair
codec on its own to encrypt and decrypt messages by hand.
"""

from __future__ import annotations

import argparse
import asyncio
import base64
import binascii
import logging
import sys
from pathlib import Path

from spiclient.domain.errors import SpiClientError

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="spiclient",
        description="Encrypted command client for the SPI core server",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/spiclient.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    send_parser = subparsers.add_parser("send", help="Encrypt a command and send it to the server")
    send_parser.add_argument("text", help="Shell command to execute remotely, e.g. 'ls -la'")
    send_parser.add_argument("--host", default=None, help="Override the configured hostname")
    send_parser.add_argument("--port", type=int, default=None, help="Override the configured port")
    send_parser.add_argument(
        "--verify-tls", action="store_true",
        help="Reject self-signed or unverifiable server certificates",
    )
    send_parser.add_argument(
        "--decrypt-response", action="store_true",
        help="Decrypt the response body with the private key",
    )

    encrypt_parser = subparsers.add_parser("encrypt", help="Encrypt a message, print base64 ciphertext")
    encrypt_parser.add_argument("text", help="Plaintext message")

    decrypt_parser = subparsers.add_parser("decrypt", help="Decrypt base64 ciphertext, print plaintext")
    decrypt_parser.add_argument("text", help="Base64-encoded ciphertext")

    return parser.parse_args(argv)


async def _send(settings, args) -> str:
    """Build a client from settings plus CLI overrides and send one command."""
    from spiclient.client.remote import RemoteCommandClient
    from spiclient.domain.models import ResponseMode

    conn = settings.connection
    if args.host:
        conn.hostname = args.host
    if args.port is not None:
        conn.port = args.port
    if args.verify_tls:
        conn.insecure_transport = False
    if args.decrypt_response:
        conn.response_mode = ResponseMode.DECRYPT

    client = RemoteCommandClient.from_settings(settings)
    return await client.send_command(args.text)


def _build_codec(settings):
    from spiclient.crypto.codec import KeyPairCodec

    return KeyPairCodec(
        settings.keys.public_key_path,
        settings.keys.private_key_path,
        padding_scheme=settings.codec.padding,
        oaep_hash=settings.codec.oaep_hash,
        passphrase=settings.keys.passphrase_bytes(),
    )


def _run(settings, args) -> str:
    from spiclient.crypto.codec import CryptoError

    if args.command == "send":
        logger.info("Sending command to %s:%s", settings.connection.hostname, settings.connection.port)
        return asyncio.run(_send(settings, args))

    codec = _build_codec(settings)
    if args.command == "encrypt":
        return base64.b64encode(codec.encrypt(args.text)).decode("ascii")

    try:
        ciphertext = base64.b64decode(args.text, validate=True)
    except binascii.Error as e:
        raise CryptoError(f"Ciphertext is not valid base64: {e}", operation="decrypt") from e
    return codec.decrypt(ciphertext)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the spiclient CLI."""
    args = parse_args(argv)

    if args.command is None:
        parse_args(["--help"])
        return 0

    from spiclient.config.settings import load_settings
    from spiclient.utils.logging import setup_logging

    settings = load_settings(args.config)

    if args.verbose:
        settings.logging.level = "DEBUG"

    setup_logging(settings.logging)

    try:
        output = _run(settings, args)
    except SpiClientError as e:
        logger.error("%s failed: %s", args.command, e)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
