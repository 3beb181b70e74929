"""Domain models for spiclient.

Enumerations and the shared exception base used by the codec and the
remote command client.
"""

from spiclient.domain.errors import SpiClientError
from spiclient.domain.models import OaepHash, Padding, ResponseMode

__all__ = [
    "OaepHash",
    "Padding",
    "ResponseMode",
    "SpiClientError",
]
