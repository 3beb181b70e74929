"""Remote command client.

Encrypts a command with the key pair codec and POSTs the ciphertext to
the core server's exec endpoint over HTTPS.
"""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

from spiclient.config.settings import CodecConfig, ConnectionConfig, Settings
from spiclient.crypto.codec import KeyPairCodec
from spiclient.domain.errors import SpiClientError
from spiclient.domain.models import ResponseMode

logger = logging.getLogger(__name__)


class TransportError(SpiClientError):
    """Raised when the request cannot be completed at the transport level."""

    def __init__(self, message: str, reason: str = "") -> None:
        super().__init__(message)
        self.reason = reason


MAX_PORT = 65535


def _describe_failure(exc: BaseException) -> str:
    """Join the outermost message with the innermost cause in the chain.

    httpx and anyio wrap socket errors ("All connection attempts failed"),
    sometimes inside an exception group. Groups are followed through their
    first member.
    """
    outer = str(exc) or type(exc).__name__
    inner = exc
    seen = {id(exc)}
    while True:
        nested = getattr(inner, "exceptions", None)
        nxt = nested[0] if nested else (inner.__cause__ or inner.__context__)
        if nxt is None or id(nxt) in seen:
            break
        seen.add(id(nxt))
        inner = nxt
    if inner is exc:
        return outer
    detail = str(inner) or type(inner).__name__
    if detail in outer:
        return outer
    return f"{outer} ({type(inner).__name__}: {detail})"


class RemoteCommandClient:
    """Sends encrypted commands to the core server.

    Each :meth:`send_command` call opens its own connection, issues a
    single POST and closes it again. There is no pooling, retry or
    cancellation; concurrent calls on one instance are independent.

    The key files are read when the client is created, so a bad path
    fails here rather than on the first request.

    Example usage::

        client = RemoteCommandClient("certs/public_key.pem", "certs/private_key.pem")
        output = await client.send_command("ls -la")
    """

    def __init__(
        self,
        public_key_path: Path | str,
        private_key_path: Path | str,
        config: ConnectionConfig | None = None,
        codec_config: CodecConfig | None = None,
        passphrase: bytes | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or ConnectionConfig()
        codec_config = codec_config or CodecConfig()
        self._codec = KeyPairCodec(
            public_key_path,
            private_key_path,
            padding_scheme=codec_config.padding,
            oaep_hash=codec_config.oaep_hash,
            passphrase=passphrase,
        )
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> RemoteCommandClient:
        """Build a client from the root settings object."""
        return cls(
            settings.keys.public_key_path,
            settings.keys.private_key_path,
            config=settings.connection,
            codec_config=settings.codec,
            passphrase=settings.keys.passphrase_bytes(),
            transport=transport,
        )

    @property
    def config(self) -> ConnectionConfig:
        return self._config

    @property
    def codec(self) -> KeyPairCodec:
        return self._codec

    @property
    def url(self) -> str:
        """Full URL of the exec endpoint."""
        path = self._config.exec_path
        if not path.startswith("/"):
            path = "/" + path
        return f"https://{self._config.hostname}:{self._config.port}{path}"

    def _build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            verify=not self._config.insecure_transport,
            timeout=httpx.Timeout(self._config.timeout),
            transport=self._transport,
        )

    async def send_command(self, command: str) -> str:
        """Encrypt ``command``, POST it and return the response body as text.

        The HTTP status is not inspected. In ``ResponseMode.PLAINTEXT`` the
        body is decoded as UTF-8 as-is; in ``ResponseMode.DECRYPT`` it is
        decrypted with the private key first.

        Raises:
            CryptoError: If the command is too long to encrypt, or the
                response cannot be decrypted in ``DECRYPT`` mode.
            TransportError: On connection, TLS, DNS or read failures.
        """
        ciphertext = self._codec.encrypt(command)
        headers = {
            "Content-Type": "application/octet-stream",
            "Content-Length": str(len(ciphertext)),
        }
        logger.debug("Sending command to %s: %s", self.url, command[:50])

        port = self._config.port
        if not 0 <= port <= MAX_PORT:
            # anyio surfaces this as an OverflowError inside a task group
            reason = f"port must be 0-{MAX_PORT}, got {port}"
            logger.error("Request to %s failed: %s", self.url, reason)
            raise TransportError(f"Request error: {reason}", reason=reason)

        chunks: list[bytes] = []
        try:
            async with self._build_client() as client:
                async with client.stream(
                    "POST", self.url, content=ciphertext, headers=headers
                ) as resp:
                    async for chunk in resp.aiter_bytes():
                        chunks.append(chunk)
                    status = resp.status_code
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as e:
            reason = _describe_failure(e)
            logger.error("Request to %s failed: %s", self.url, reason)
            raise TransportError(f"Request error: {reason}", reason=reason) from e

        body = b"".join(chunks)
        logger.debug("Received %d byte response (HTTP %d)", len(body), status)

        if self._config.response_mode is ResponseMode.DECRYPT:
            return self._codec.decrypt(body)
        return body.decode("utf-8", errors="replace")
