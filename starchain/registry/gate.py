# starchain/registry/gate.py
import logging
import time
from collections.abc import Mapping
from typing import Any, Callable

from starchain.chain.append import AppendEngine, Clock
from starchain.config import ChainSettings
from starchain.core.errors import ExpiredChallenge, InvalidSignature, InvalidStar
from starchain.core.types import Block
from starchain.crypto.keys import verify_signature
from starchain.registry.challenge import parse_challenge

logger = logging.getLogger(__name__)

Verifier = Callable[[str, str, str], bool]


class OwnershipGate:
    """
    Admits a star into the chain only after the claimant has signed a fresh
    challenge with the key behind `identity`.

    A signed challenge stays usable for its whole window; re-submitting it
    registers another star. There is no one-time-use tracking.
    """

    def __init__(
        self,
        engine: AppendEngine,
        verifier: Verifier = verify_signature,
        clock: Clock = time.time,
        settings: ChainSettings = ChainSettings(),
    ):
        self.engine = engine
        self.verifier = verifier
        self.clock = clock
        self.settings = settings

    def submit(self, identity: str, message: str, signature: str, star: Any) -> Block:
        """
        Check the challenge window, the identity binding and the signature,
        then append {"star": star, "owner": identity}. Returns the sealed block.
        """
        challenge = parse_challenge(message, tag=self.settings.registry_tag)

        elapsed_minutes = (self.clock() - challenge.issued_at) / 60
        if elapsed_minutes >= self.settings.challenge_window_minutes:
            logger.info("Rejected star for %s: challenge expired (%.3f min)", identity, elapsed_minutes)
            raise ExpiredChallenge(elapsed_minutes, self.settings.challenge_window_minutes)

        if challenge.identity != identity:
            logger.info("Rejected star for %s: challenge issued to %s", identity, challenge.identity)
            raise InvalidSignature(f"Challenge was issued to {challenge.identity!r}, not {identity!r}")

        try:
            verified = self.verifier(message, identity, signature)
        except Exception as e:
            logger.warning("Signature verifier raised for %s: %s", identity, e)
            raise InvalidSignature(f"Signature could not be verified for {identity!r}") from e
        if not verified:
            logger.info("Rejected star for %s: bad signature", identity)
            raise InvalidSignature(f"Signature does not match identity {identity!r}")

        if not isinstance(star, Mapping) or not star:
            raise InvalidStar("Star must be a non-empty mapping")

        try:
            block = Block.unsealed({"data": {"star": dict(star), "owner": identity}})
        except (TypeError, ValueError) as e:
            raise InvalidStar(f"Star is not JSON-encodable: {e}") from e
        sealed = self.engine.append(block)
        logger.info("Registered star for %s at height %d", identity, sealed.height)
        return sealed
