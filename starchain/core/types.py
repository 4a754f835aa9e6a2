# starchain/core/types.py
from dataclasses import dataclass, asdict
from typing import Any, Optional

from starchain.core.encoding import encode_body, decode_body

GENESIS_HEIGHT = 0
UNSEALED_HEIGHT = -1


@dataclass(frozen=True)
class Block:
    """Single record in the star chain, immutable once sealed."""
    body: str                                   # hex(canonical JSON payload)
    height: int = UNSEALED_HEIGHT               # position; -1 until sealed
    time: int = 0                               # unix seconds, set at seal time
    previous_block_hash: Optional[str] = None   # None for genesis
    hash: Optional[str] = None                  # sha256 hex, None until sealed

    @classmethod
    def unsealed(cls, payload: Any) -> "Block":
        """New block carrying `payload`, with every chain-linkage field unset."""
        return cls(body=encode_body(payload))

    @property
    def is_sealed(self) -> bool:
        return self.hash is not None

    def decode(self) -> Any:
        """Decoded payload (the original structure passed to unsealed())."""
        return decode_body(self.body)

    def hashable_dict(self) -> dict:
        """Every field except `hash`; this is what the content hash covers."""
        d = asdict(self)
        d.pop("hash")
        return d

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> "Block":
        return cls(
            body=d["body"],
            height=d["height"],
            time=d["time"],
            previous_block_hash=d.get("previous_block_hash"),
            hash=d.get("hash"),
        )


def decode_payload(block: Block) -> Any:
    """Decoded payload of a block, e.g. {"data": {"star": ..., "owner": ...}}."""
    return block.decode()
