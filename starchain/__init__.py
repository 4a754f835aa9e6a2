# starchain/__init__.py
"""
Starchain — a private, tamper-evident star registry.
Hash-chained blocks, with new entries gated by a signed, time-bound
ownership challenge (Ed25519 identities).
"""

from starchain.chain.blockchain import Blockchain, read_jsonl
from starchain.config import ChainSettings
from starchain.core.errors import (
    AppendFailure,
    BlockNotFound,
    ExpiredChallenge,
    InvalidSignature,
    InvalidStar,
    MalformedChallenge,
    RegistrationRejected,
    StarchainError,
)
from starchain.core.types import Block, decode_payload
from starchain.crypto.keys import IdentityKeyPair, verify_signature
from starchain.verify.validator import ChainValidator, ValidationResult, Violation

__version__ = "0.1.0-dev"

__all__ = [
    "Blockchain",
    "read_jsonl",
    "ChainSettings",
    "Block",
    "decode_payload",
    "IdentityKeyPair",
    "verify_signature",
    "ChainValidator",
    "ValidationResult",
    "Violation",
    "StarchainError",
    "RegistrationRejected",
    "ExpiredChallenge",
    "InvalidSignature",
    "MalformedChallenge",
    "InvalidStar",
    "AppendFailure",
    "BlockNotFound",
]
