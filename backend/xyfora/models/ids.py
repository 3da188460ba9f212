"""Opaque 24-hex identifiers shaped like document-store object ids."""

import secrets
import time


def generate_object_id() -> str:
    """
    Return a new 24-character lowercase hex identifier.

    The first 8 characters encode the creation time in seconds; the
    remaining 16 are random.
    """
    return f"{int(time.time()) & 0xFFFFFFFF:08x}{secrets.token_hex(8)}"
