# starchain/core/canon.py
from typing import Any

try:
    import jcs
except ImportError:
    raise ImportError("Please install jcs: pip install jcs")


def canonical_json(obj: Any) -> bytes:
    """
    Deterministic UTF-8 bytes for `obj` per RFC 8785 (JSON Canonicalization Scheme).
    Block hashes and encoded block bodies are both built on this, so the same
    logical block always hashes the same regardless of dict ordering.
    """
    return jcs.canonicalize(obj)


def canonical_json_str(obj: Any) -> str:
    """Same as above, but returns string (mostly for debugging)."""
    return canonical_json(obj).decode("utf-8")
