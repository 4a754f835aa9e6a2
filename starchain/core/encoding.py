# starchain/core/encoding.py
import base64
import json
from typing import Any

from starchain.core.canon import canonical_json


def b64url_encode(data: bytes) -> str:
    """Encode bytes to base64url (no padding, URL-safe)."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(s: str) -> bytes:
    """Decode base64url string back to bytes."""
    # Restore padding
    padding = len(s) % 4
    if padding:
        s += "=" * (4 - padding)
    return base64.urlsafe_b64decode(s)


def encode_body(payload: Any) -> str:
    """Payload -> hex of its canonical JSON, the form a block stores."""
    return canonical_json(payload).hex()


def decode_body(body: str) -> Any:
    """Inverse of encode_body."""
    return json.loads(bytes.fromhex(body).decode("utf-8"))
