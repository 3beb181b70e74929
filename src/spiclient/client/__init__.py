"""Remote command client for spiclient.

Public API:
    RemoteCommandClient -- Encrypts and POSTs commands to the core server
    TransportError -- Connection, TLS or DNS failure
"""

__all__ = ["RemoteCommandClient", "TransportError"]


def __getattr__(name: str) -> type:
    """Lazy import so the codec can be used without pulling in httpx."""
    if name in ("RemoteCommandClient", "TransportError"):
        from spiclient.client import remote
        return getattr(remote, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
