# starchain/chain/blockchain.py
import json
import logging
import time
from pathlib import Path
from typing import Any, List, Optional, Union

from starchain.chain.append import AppendEngine, Clock
from starchain.chain.store import ChainStore
from starchain.config import ChainSettings
from starchain.core.errors import BlockNotFound
from starchain.core.types import Block, decode_payload
from starchain.crypto.keys import verify_signature
from starchain.registry.challenge import issue_challenge
from starchain.registry.gate import OwnershipGate, Verifier
from starchain.verify.validator import ChainValidator, ValidationResult

logger = logging.getLogger(__name__)


class Blockchain:
    """
    Private star registry: an in-memory, hash-chained sequence of blocks.

    The genesis block is appended on construction. New blocks only enter
    through submit_star(), after the claimant proves control of their
    identity by signing a challenge from issue_challenge().
    """

    def __init__(
        self,
        verifier: Verifier = verify_signature,
        clock: Clock = time.time,
        settings: Optional[ChainSettings] = None,
    ):
        self.settings = settings or ChainSettings()
        self.clock = clock
        self.store = ChainStore()
        self.engine = AppendEngine(self.store, clock=clock)
        self.gate = OwnershipGate(self.engine, verifier=verifier, clock=clock, settings=self.settings)
        self.validator = ChainValidator()
        self._initialize_chain()

    def _initialize_chain(self) -> None:
        if self.store.height == -1:
            genesis = self.engine.append(Block.unsealed({"data": self.settings.genesis_data}))
            logger.info("Created genesis block %s", genesis.hash)

    def get_chain_height(self) -> int:
        return self.store.height

    def get_chain(self) -> List[Block]:
        """Copy of the full chain at this instant."""
        return list(self.store.snapshot())

    def issue_challenge(self, identity: str) -> str:
        """Message the owner of `identity` must sign before submit_star()."""
        return issue_challenge(identity, now=self.clock(), tag=self.settings.registry_tag)

    def submit_star(self, identity: str, message: str, signature: str, star: Any) -> Block:
        """
        Register `star` for `identity`. Raises ExpiredChallenge,
        InvalidSignature, MalformedChallenge or InvalidStar on rejection.
        """
        return self.gate.submit(identity, message, signature, star)

    def get_block_by_hash(self, block_hash: str) -> Block:
        for block in self.store.snapshot():
            if block.hash == block_hash:
                return block
        raise BlockNotFound(block_hash)

    def get_block_by_height(self, height: int) -> Optional[Block]:
        """Block at `height`, or None past the end of the chain."""
        chain = self.store.snapshot()
        if 0 <= height < len(chain):
            return chain[height]
        return None

    def get_stars_by_owner(self, identity: str) -> List[dict]:
        """Decoded {"star", "owner"} records owned by `identity`, in chain order."""
        stars = []
        for block in self.store.snapshot():
            if block.height <= 0:
                continue
            payload = decode_payload(block)
            data = payload.get("data") if isinstance(payload, dict) else None
            if isinstance(data, dict) and data.get("owner") == identity:
                stars.append(data)
        return stars

    def validate_chain(self) -> ValidationResult:
        result = self.validator.validate(self.store.snapshot())
        if not result.is_valid:
            logger.warning("Chain validation found %d violations", len(result))
        return result

    def export_jsonl(self, path: Union[str, Path]) -> int:
        """Write one block per line; returns the number of blocks written."""
        chain = self.store.snapshot()
        with open(path, "w", encoding="utf-8") as f:
            for block in chain:
                json.dump(block.to_dict(), f, separators=(",", ":"))
                f.write("\n")
        return len(chain)


def read_jsonl(path: Union[str, Path]) -> List[Block]:
    """Load an export_jsonl() file as a chain snapshot (for offline validation)."""
    blocks = []
    with open(path, "r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            record = json.loads(line)
            if not isinstance(record, dict):
                raise ValueError(f"Line {lineno} is not a JSON object")
            blocks.append(Block.from_dict(record))
    return blocks
