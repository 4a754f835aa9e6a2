# starchain/verify/validator.py
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Sequence

from starchain.core.types import Block
from starchain.crypto.hashing import compute_content_hash

HASH_MISMATCH = "hash_mismatch"
BROKEN_LINK = "broken_link"


@dataclass(frozen=True)
class Violation:
    index: int
    kind: str              # HASH_MISMATCH or BROKEN_LINK
    message: str
    block_hash: Optional[str] = None


@dataclass
class ValidationResult:
    """Every violation found in one pass. Empty means the chain is sound."""
    violations: List[Violation] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.violations

    @property
    def first_violation(self) -> Optional[Violation]:
        return self.violations[0] if self.violations else None

    def of_kind(self, kind: str) -> List[Violation]:
        return [v for v in self.violations if v.kind == kind]

    def __bool__(self):
        return self.is_valid

    def __iter__(self) -> Iterator[Violation]:
        return iter(self.violations)

    def __len__(self) -> int:
        return len(self.violations)

    def __str__(self):
        if self.is_valid:
            return "Chain is valid ✓"
        lines = [f"Validation FAILED ({len(self.violations)} violations):"]
        for v in self.violations:
            lines.append(f"  • [{v.index}] {v.kind}: {v.message}")
        return "\n".join(lines)


class ChainValidator:
    """
    Read-only integrity check over a chain snapshot.

    Hashes are recomputed from each block's current fields; links are checked
    against the stored hash of the preceding block in sequence order.
    """

    def __init__(self, hash_fn: Callable[[Block], str] = compute_content_hash):
        self.hash_fn = hash_fn

    def validate(self, chain: Sequence[Block]) -> ValidationResult:
        result = ValidationResult()

        for i, block in enumerate(chain):
            try:
                recomputed = self.hash_fn(block)
            except (TypeError, ValueError) as e:
                result.violations.append(Violation(
                    i, HASH_MISMATCH, f"Block fields cannot be hashed: {e}", block.hash,
                ))
            else:
                if recomputed != block.hash:
                    result.violations.append(Violation(
                        i, HASH_MISMATCH,
                        f"Stored hash {block.hash} != recomputed {recomputed}",
                        block.hash,
                    ))

            if block.height != i:
                result.violations.append(Violation(
                    i, BROKEN_LINK, f"Height mismatch: expected {i}, got {block.height}", block.hash,
                ))

            if i == 0:
                if block.previous_block_hash is not None:
                    result.violations.append(Violation(
                        i, BROKEN_LINK, "Genesis block has a previous hash", block.hash,
                    ))
                continue

            expected_prev = chain[i - 1].hash
            if block.previous_block_hash != expected_prev:
                result.violations.append(Violation(
                    i, BROKEN_LINK,
                    f"previous_block_hash {block.previous_block_hash} != hash of block {i - 1}",
                    block.hash,
                ))

        return result
