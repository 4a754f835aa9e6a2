# starchain/core/errors.py
"""
Exceptions raised by the star registry.

Registration rejections are recoverable by the caller (request a fresh
challenge, re-sign, fix the star). AppendFailure means an internal
invariant broke while sealing a block. Chain validation never raises;
its findings are returned as Violation records (see core.types).
"""


class StarchainError(Exception):
    """Base exception for starchain errors."""
    pass


class RegistrationRejected(StarchainError):
    """A star submission was refused before anything was appended."""
    pass


class ExpiredChallenge(RegistrationRejected):
    """The challenge is older than the allowed window."""

    def __init__(self, elapsed_minutes: float, window_minutes: float):
        self.elapsed_minutes = elapsed_minutes
        self.window_minutes = window_minutes
        super().__init__(
            f"Challenge expired: {elapsed_minutes:.3f} minutes elapsed "
            f"(must be less than {window_minutes:g})"
        )


class InvalidSignature(RegistrationRejected):
    """The signature does not prove control of the claimed identity."""
    pass


class MalformedChallenge(RegistrationRejected):
    """The challenge string is not '<identity>:<unix_seconds>:<tag>'."""
    pass


class InvalidStar(RegistrationRejected):
    """The submitted star payload is empty or not a mapping."""
    pass


class AppendFailure(StarchainError):
    """Sealing or pushing a block failed; the chain was left unchanged."""
    pass


class BlockNotFound(StarchainError, LookupError):
    """No block carries the requested hash."""

    def __init__(self, block_hash: str):
        self.block_hash = block_hash
        super().__init__(f"Block not found: {block_hash}")
