# starchain/chain/store.py
from contextlib import contextmanager
from threading import Lock, get_ident
from typing import Iterator, List, Optional, Tuple

from starchain.core.errors import AppendFailure
from starchain.core.types import Block


class ChainStore:
    """
    Ordered sequence of sealed blocks plus the chain height.

    Writers must hold `exclusive()` across read-height -> seal -> push.
    Readers use `snapshot()`, which copies the sequence under the same lock;
    blocks are frozen, so a snapshot never shows a block mid-seal.
    """

    def __init__(self):
        self._blocks: List[Block] = []
        self._height = -1
        self._lock = Lock()
        self._owner: Optional[int] = None

    @contextmanager
    def exclusive(self) -> Iterator["ChainStore"]:
        with self._lock:
            self._owner = get_ident()
            try:
                yield self
            finally:
                self._owner = None

    @property
    def height(self) -> int:
        return self._height

    def last(self) -> Optional[Block]:
        return self._blocks[-1] if self._blocks else None

    def push(self, block: Block) -> None:
        """Caller must hold exclusive()."""
        if self._owner != get_ident():
            raise AppendFailure("push() called outside of exclusive()")
        if block.height != self._height + 1:
            raise AppendFailure(
                f"Block height {block.height} does not follow chain height {self._height}"
            )
        self._blocks.append(block)
        self._height += 1

    def snapshot(self) -> Tuple[Block, ...]:
        """Point-in-time, immutable view of the chain."""
        with self._lock:
            return tuple(self._blocks)

    def __len__(self) -> int:
        return len(self._blocks)
