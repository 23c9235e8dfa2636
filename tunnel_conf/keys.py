import base64
import binascii
import hmac
import os

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.x25519 import X25519PrivateKey


KEY_LENGTH = 32


class Key:
    """32 bytes of key material with constant-time comparison.

    The all-zero key stands in for an absent key (e.g. no preshared key).
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: bytes) -> None:
        raw = bytes(raw)
        if len(raw) != KEY_LENGTH:
            raise ValueError(f"key must be {KEY_LENGTH} bytes, got {len(raw)}")
        self._raw = raw

    @classmethod
    def zero(cls) -> "Key":
        return cls(bytes(KEY_LENGTH))

    @classmethod
    def from_base64(cls, text: str) -> "Key":
        try:
            raw = base64.b64decode(text.strip(), validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError("key is not valid base64") from e
        return cls(raw)

    @classmethod
    def from_hex(cls, text: str) -> "Key":
        try:
            raw = bytes.fromhex(text.strip())
        except ValueError as e:
            raise ValueError("key is not valid hex") from e
        return cls(raw)

    def is_zero(self) -> bool:
        return hmac.compare_digest(self._raw, bytes(KEY_LENGTH))

    def to_base64(self) -> str:
        return base64.b64encode(self._raw).decode("ascii")

    def to_hex(self) -> str:
        return self._raw.hex()

    def __bytes__(self) -> bytes:
        return self._raw

    def __str__(self) -> str:
        return self.to_base64()

    def __repr__(self) -> str:
        return "Key(<zero>)" if self.is_zero() else "Key(<redacted>)"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Key):
            return NotImplemented
        return hmac.compare_digest(self._raw, other._raw)

    def __hash__(self) -> int:
        # Not constant time; comparisons of key material go through __eq__.
        return hash(self._raw)

    def public_key(self) -> "Key":
        """Derive the X25519 public key, as `wg pubkey` does."""
        private = X25519PrivateKey.from_private_bytes(self._raw)
        return Key(
            private.public_key().public_bytes(
                encoding=serialization.Encoding.Raw,
                format=serialization.PublicFormat.Raw,
            )
        )


def generate_private_key() -> Key:
    """Generate a fresh X25519 private key (same semantics as `wg genkey`)."""
    private = X25519PrivateKey.generate()
    return Key(
        private.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        )
    )


def generate_preshared_key() -> Key:
    return Key(os.urandom(KEY_LENGTH))
