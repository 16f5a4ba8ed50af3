"""Small helpers: identifiers, hashing, random numbers and host address lookup."""

from __future__ import annotations

import base64
import hashlib
import ipaddress
import random
import socket
import uuid
from collections.abc import Iterable


def get_uuid() -> str:
    """Return a random version 4 UUID in its canonical 36-character form."""
    return str(uuid.uuid4())


def get_sha256(data: bytes) -> str:
    """Return the SHA-256 digest of ``data`` encoded as standard base64."""
    return base64.b64encode(hashlib.sha256(data).digest()).decode("ascii")


def int_contains(values: Iterable[int], item: int) -> bool:
    """Tell whether ``item`` occurs in ``values``."""
    return item in values


def random_number(low: int, high: int) -> int:
    """Return a random integer in the half-open range ``[low, high)``.

    Raises ValueError when the range is empty.
    """
    if high <= low:
        raise ValueError(f"empty range: [{low}, {high})")
    return random.randrange(low, high)


def get_local_ip() -> str:
    """Return the first non-loopback IPv4 address of this host, or ``""``."""
    try:
        infos = socket.getaddrinfo(socket.gethostname(), None, socket.AF_INET)
    except OSError:
        return ""
    for *_, sockaddr in infos:
        try:
            address = ipaddress.ip_address(sockaddr[0])
        except ValueError:
            continue
        if address.version == 4 and not address.is_loopback:
            return str(address)
    return ""