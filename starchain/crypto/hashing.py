# starchain/crypto/hashing.py
import hashlib

from starchain.core.canon import canonical_json
from starchain.core.types import Block


def compute_content_hash(block: Block) -> str:
    """
    SHA-256 hex digest over the canonical JSON of the block's current fields,
    excluding the stored hash itself. Recomputing this for a sealed block and
    comparing it with `block.hash` is how tampering is detected.
    """
    return hashlib.sha256(canonical_json(block.hashable_dict())).hexdigest()
