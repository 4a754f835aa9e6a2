# starchain/registry/challenge.py
import time
from dataclasses import dataclass
from typing import Optional

from starchain.config import DEFAULT_REGISTRY_TAG
from starchain.core.errors import MalformedChallenge


@dataclass(frozen=True)
class Challenge:
    """Parsed form of '<identity>:<unix_seconds>:<tag>'."""
    identity: str
    issued_at: int
    tag: str = DEFAULT_REGISTRY_TAG

    def __str__(self):
        return f"{self.identity}:{self.issued_at}:{self.tag}"


def issue_challenge(
    identity: str,
    now: Optional[float] = None,
    tag: str = DEFAULT_REGISTRY_TAG,
) -> str:
    """
    Challenge string for `identity` to sign. The issuance time travels inside
    the string, so nothing is stored server-side.
    """
    if not identity or ":" in identity:
        raise MalformedChallenge(f"Identity must be non-empty and contain no ':': {identity!r}")
    issued_at = int(time.time() if now is None else now)
    return str(Challenge(identity=identity, issued_at=issued_at, tag=tag))


def parse_challenge(message: str, tag: str = DEFAULT_REGISTRY_TAG) -> Challenge:
    parts = message.split(":")
    if len(parts) != 3:
        raise MalformedChallenge(f"Expected '<identity>:<unix_seconds>:{tag}', got {message!r}")
    identity, raw_time, found_tag = parts
    if not (raw_time.isascii() and raw_time.isdigit()):
        raise MalformedChallenge(f"Challenge timestamp is not unix seconds: {raw_time!r}")
    issued_at = int(raw_time)
    if found_tag != tag:
        raise MalformedChallenge(f"Unexpected challenge tag {found_tag!r} (expected {tag!r})")
    if not identity:
        raise MalformedChallenge("Challenge carries an empty identity")
    return Challenge(identity=identity, issued_at=issued_at, tag=found_tag)
