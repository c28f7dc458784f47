"""Generation and validation of document-style object identifiers.

Identifiers are 24 lowercase hexadecimal characters laid out like document
store object ids: a 4-byte big-endian timestamp, a 5-byte random token fixed
for the process and a 3-byte counter. Ids generated by one process therefore
sort in creation order.
"""

from __future__ import annotations

import itertools
import os
import re
import secrets
import threading
import time

OBJECT_ID_LENGTH = 24
_OBJECT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")
_COUNTER_MODULUS = 0xFFFFFF + 1

_process_token = secrets.token_bytes(5)
_token_pid = os.getpid()
_counter = itertools.count(secrets.randbelow(_COUNTER_MODULUS))
_lock = threading.Lock()


def new_object_id() -> str:
    """Return a fresh identifier."""

    global _process_token, _token_pid

    with _lock:
        # forked workers must not reuse the parent's token
        if os.getpid() != _token_pid:
            _process_token = secrets.token_bytes(5)
            _token_pid = os.getpid()
        count = next(_counter) % _COUNTER_MODULUS
        timestamp = int(time.time()) & 0xFFFFFFFF
        raw = (
            timestamp.to_bytes(4, "big")
            + _process_token
            + count.to_bytes(3, "big")
        )
    return raw.hex()


def is_valid_object_id(value: object) -> bool:
    """Return ``True`` when ``value`` has the shape of an object identifier."""

    return isinstance(value, str) and bool(_OBJECT_ID_PATTERN.match(value))


def normalize_object_id(value: str) -> str:
    """Return the canonical (lowercase) form of a valid identifier."""

    return value.lower()


__all__ = [
    "OBJECT_ID_LENGTH",
    "is_valid_object_id",
    "new_object_id",
    "normalize_object_id",
]
