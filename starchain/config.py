# starchain/config.py
import os
from dataclasses import dataclass

DEFAULT_CHALLENGE_WINDOW_MINUTES = 5
DEFAULT_REGISTRY_TAG = "starRegistry"
DEFAULT_GENESIS_DATA = "Genesis Block"


@dataclass(frozen=True)
class ChainSettings:
    """
    Tunables for a Blockchain instance.

    challenge_window_minutes: a challenge is accepted while strictly less
        than this many minutes have elapsed since it was issued.
    registry_tag: trailing field of every challenge string.
    genesis_data: value stored under "data" in the genesis block.
    """
    challenge_window_minutes: float = DEFAULT_CHALLENGE_WINDOW_MINUTES
    registry_tag: str = DEFAULT_REGISTRY_TAG
    genesis_data: str = DEFAULT_GENESIS_DATA

    def __post_init__(self):
        if self.challenge_window_minutes <= 0:
            raise ValueError("challenge_window_minutes must be positive")
        if not self.registry_tag or ":" in self.registry_tag:
            raise ValueError("registry_tag must be non-empty and contain no ':'")

    @classmethod
    def from_env(cls) -> "ChainSettings":
        """
        Settings from environment variables, falling back to defaults:
        STARCHAIN_CHALLENGE_WINDOW_MINUTES, STARCHAIN_REGISTRY_TAG
        """
        raw_window = os.environ.get("STARCHAIN_CHALLENGE_WINDOW_MINUTES")
        window = DEFAULT_CHALLENGE_WINDOW_MINUTES
        if raw_window:
            try:
                window = float(raw_window)
            except ValueError:
                raise ValueError(
                    f"STARCHAIN_CHALLENGE_WINDOW_MINUTES must be a number, got {raw_window!r}"
                )
        tag = os.environ.get("STARCHAIN_REGISTRY_TAG") or DEFAULT_REGISTRY_TAG
        return cls(challenge_window_minutes=window, registry_tag=tag)
