"""Exception base shared by all spiclient components."""

from __future__ import annotations


class SpiClientError(Exception):
    """Base class for errors raised by spiclient."""
