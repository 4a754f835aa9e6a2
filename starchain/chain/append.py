# starchain/chain/append.py
import logging
import time
from dataclasses import replace
from typing import Callable

from starchain.chain.store import ChainStore
from starchain.core.errors import AppendFailure
from starchain.core.types import Block, GENESIS_HEIGHT
from starchain.crypto.hashing import compute_content_hash

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
HashFn = Callable[[Block], str]


class AppendEngine:
    """
    Seals blocks and appends them to a ChainStore.

    The whole read-height -> seal -> push sequence runs inside the store's
    exclusive scope, so two appends can never share a height or link to a
    stale predecessor.
    """

    def __init__(
        self,
        store: ChainStore,
        clock: Clock = time.time,
        hash_fn: HashFn = compute_content_hash,
    ):
        self.store = store
        self.clock = clock
        self.hash_fn = hash_fn

    def append(self, block: Block) -> Block:
        """
        Seal `block` (height, previous hash, time, hash) and push it.
        Returns the sealed block. Raises AppendFailure without touching the
        store if the block is already sealed or hashing fails.
        """
        if block.is_sealed:
            raise AppendFailure("Cannot append an already-sealed block")

        with self.store.exclusive() as store:
            last = store.last()
            if last is None:
                block = replace(block, height=GENESIS_HEIGHT, previous_block_hash=None)
            else:
                block = replace(block, height=last.height + 1, previous_block_hash=last.hash)
            block = replace(block, time=int(self.clock()))

            try:
                block_hash = self.hash_fn(block)
            except Exception as e:
                logger.error("Hashing failed for block at height %d: %s", block.height, e)
                raise AppendFailure(f"Could not hash block at height {block.height}") from e
            if not block_hash:
                logger.error("Hashing produced no value for block at height %d", block.height)
                raise AppendFailure(f"Empty hash for block at height {block.height}")

            sealed = replace(block, hash=block_hash)
            store.push(sealed)

        logger.debug("Appended block %d (%s)", sealed.height, sealed.hash)
        return sealed
