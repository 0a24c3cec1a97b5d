"""
Cryptographic primitives for nemwallet.

Provides:
  - SHA-256 / double-SHA-256 / RIPEMD-160 / Hash160
  - Base58 and Base58Check encoding (Bitcoin alphabet)
  - secp256k1 key material: PrivateKey, PublicKey, KeyPair
"""

from __future__ import annotations

import hashlib

from Crypto.Hash import RIPEMD160
from ecdsa import SECP256k1, SigningKey

B58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_B58_INDEX = {c: i for i, c in enumerate(B58_ALPHABET)}

CURVE_ORDER = SECP256k1.order


# ===================================================================
#  Hashing
# ===================================================================

def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def sha256d(data: bytes) -> bytes:
    """Double SHA-256."""
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()


def ripemd160(data: bytes) -> bytes:
    return RIPEMD160.new(data).digest()


def hash160(data: bytes) -> bytes:
    """RIPEMD-160 of SHA-256, as used for address payloads."""
    return ripemd160(sha256(data))


# ===================================================================
#  Base58 / Base58Check
# ===================================================================

def base58_encode(data: bytes) -> str:
    n = int.from_bytes(data, "big")
    out = []
    while n > 0:
        n, rem = divmod(n, 58)
        out.append(B58_ALPHABET[rem])
    # each leading zero byte becomes one leading alphabet[0]
    pad = len(data) - len(data.lstrip(b"\x00"))
    return B58_ALPHABET[0] * pad + "".join(reversed(out))


def base58_decode(encoded: str) -> bytes:
    n = 0
    for ch in encoded:
        try:
            n = n * 58 + _B58_INDEX[ch]
        except KeyError:
            raise ValueError(f"Invalid Base58 character: {ch!r}") from None
    body = n.to_bytes((n.bit_length() + 7) // 8, "big") if n else b""
    pad = len(encoded) - len(encoded.lstrip(B58_ALPHABET[0]))
    return b"\x00" * pad + body


def base58check_encode(version: int, payload: bytes) -> str:
    data = bytes([version]) + payload
    return base58_encode(data + sha256d(data)[:4])


def base58check_decode_versioned(encoded: str) -> tuple[int, bytes]:
    """Decode a Base58Check string into ``(version, payload)``.

    Raises ValueError on bad characters, short input or checksum mismatch.
    """
    raw = base58_decode(encoded)
    if len(raw) < 5:
        raise ValueError("Base58Check data too short")
    data, checksum = raw[:-4], raw[-4:]
    if sha256d(data)[:4] != checksum:
        raise ValueError("Base58Check checksum mismatch")
    return data[0], data[1:]


def base58check_decode(encoded: str) -> bytes:
    """Decode a Base58Check string and strip the version byte."""
    return base58check_decode_versioned(encoded)[1]


# ===================================================================
#  Key material
# ===================================================================

class PrivateKey:
    """
    Secret scalar wrapping an arbitrary-precision integer.

    No range check happens here: a PrivateKey may hold any integer.
    Only deriving a public key (see KeyPair) requires ``1 <= raw < n``.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: int):
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise TypeError("private key must wrap an int")
        self._raw = raw

    @classmethod
    def from_hex_string(cls, value: str) -> PrivateKey:
        """Parse a big-endian hex string (an optional ``0x`` prefix is allowed)."""
        text = value.strip()
        if text.lower().startswith("0x"):
            text = text[2:]
        try:
            return cls(int(text, 16))
        except ValueError:
            raise ValueError(f"Invalid hex private key: {value!r}") from None

    @classmethod
    def from_decimal_string(cls, value: str) -> PrivateKey:
        try:
            return cls(int(value.strip(), 10))
        except ValueError:
            raise ValueError(f"Invalid decimal private key: {value!r}") from None

    @property
    def raw(self) -> int:
        return self._raw

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PrivateKey):
            return NotImplemented
        return self._raw == other._raw

    def __hash__(self) -> int:
        return hash(self._raw)

    def __repr__(self) -> str:
        return "PrivateKey(<redacted>)"


class PublicKey:
    """65-byte uncompressed secp256k1 point (``0x04 || X || Y``)."""

    __slots__ = ("_data",)

    def __init__(self, data: bytes):
        self._data = bytes(data)

    @property
    def raw(self) -> bytes:
        return self._data

    def hex(self) -> str:
        return self._data.hex()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PublicKey):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(self._data)

    def __repr__(self) -> str:
        return f"PublicKey({self._data.hex()})"


def _public_key_for(sk: SigningKey) -> PublicKey:
    return PublicKey(b"\x04" + sk.get_verifying_key().to_string())


class KeyPair:
    """
    secp256k1 key pair.

    ``KeyPair()`` generates a fresh random pair; ``KeyPair(private_key)``
    derives the public key matching an existing private key.
    """

    def __init__(self, private_key: PrivateKey | None = None):
        if private_key is None:
            sk = SigningKey.generate(curve=SECP256k1)
            private_key = PrivateKey(sk.privkey.secret_multiplier)
        else:
            if not 1 <= private_key.raw < CURVE_ORDER:
                raise ValueError("private key is outside the secp256k1 scalar range")
            sk = SigningKey.from_secret_exponent(private_key.raw, curve=SECP256k1)
        self.private_key = private_key
        self.public_key = _public_key_for(sk)

    def __repr__(self) -> str:
        return f"KeyPair(public_key={self.public_key.hex()})"


def generate_keypair() -> tuple[PrivateKey, PublicKey]:
    """Generate a fresh random ``(private_key, public_key)`` pair."""
    kp = KeyPair()
    return kp.private_key, kp.public_key
