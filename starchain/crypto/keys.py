# starchain/crypto/keys.py
"""
Ed25519 identities.

An identity is the base64url-encoded raw public key. Claimants sign the
ownership challenge with the matching private key; the registry only ever
needs `verify_signature`.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from cryptography.exceptions import InvalidSignature as CryptoInvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from starchain.core.encoding import b64url_encode, b64url_decode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IdentityKeyPair:
    public_key: Ed25519PublicKey
    private_key: Optional[Ed25519PrivateKey] = None

    @classmethod
    def generate(cls) -> "IdentityKeyPair":
        private = Ed25519PrivateKey.generate()
        return cls(public_key=private.public_key(), private_key=private)

    @classmethod
    def from_private_b64url(cls, value: str) -> "IdentityKeyPair":
        private = Ed25519PrivateKey.from_private_bytes(b64url_decode(value.strip()))
        return cls(public_key=private.public_key(), private_key=private)

    @classmethod
    def from_public_b64url(cls, value: str) -> "IdentityKeyPair":
        """Verify-only key pair from an identity string."""
        return cls(public_key=Ed25519PublicKey.from_public_bytes(b64url_decode(value)))

    def public_key_b64url(self) -> str:
        raw = self.public_key.public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )
        return b64url_encode(raw)

    @property
    def identity(self) -> str:
        return self.public_key_b64url()

    def private_key_b64url(self) -> str:
        if self.private_key is None:
            raise ValueError("Key pair has no private key")
        raw = self.private_key.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        )
        return b64url_encode(raw)

    def sign(self, message: str) -> str:
        """Sign a challenge string; returns the base64url signature."""
        if self.private_key is None:
            raise ValueError("Cannot sign with a verify-only key pair")
        return b64url_encode(self.private_key.sign(message.encode("utf-8")))

    def verify_bytes(self, signature: bytes, data: bytes) -> bool:
        try:
            self.public_key.verify(signature, data)
        except CryptoInvalidSignature:
            return False
        return True


def verify_signature(message: str, identity: str, signature: str) -> bool:
    """
    True when `signature` (base64url) is a valid Ed25519 signature of
    `message` by the key whose base64url public key is `identity`.
    Undecodable identities or signatures simply do not verify.
    """
    try:
        key = IdentityKeyPair.from_public_b64url(identity)
        sig_bytes = b64url_decode(signature)
    except ValueError as e:
        logger.debug("Undecodable identity or signature for %r: %s", identity, e)
        return False
    return key.verify_bytes(sig_bytes, message.encode("utf-8"))
