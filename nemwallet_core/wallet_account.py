"""
An account stored in a wallet.

A WalletAccount holds:
  - the account address (derived once from the primary key)
  - the primary private key
  - an optional remote harvesting private key, used to delegate block
    production to a remote node without exposing the primary key
  - an optional endpoint of that remote node
"""

from __future__ import annotations

import logging

from nemwallet_core.address import MAIN_NET_VERSION, Address
from nemwallet_core.crypto_utils import KeyPair, PrivateKey
from nemwallet_core.endpoint import NodeEndpoint
from nemwallet_core.serialization import Deserializer, SerializationError, Serializer

logger = logging.getLogger("nemwallet.account")

PRIVATE_KEY_FIELD = "privateKey"
REMOTE_KEY_FIELD = "remoteHarvestingPrivateKey"
REMOTE_ENDPOINT_FIELD = "remoteHarvestingEndpoint"


def _wrap_remote_key(value: object) -> PrivateKey | None:
    """Accept a PrivateKey or a raw int; anything else counts as absent."""
    if value is None or isinstance(value, PrivateKey):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return PrivateKey(value)
    logger.debug("Ignoring malformed remote harvesting key of type %s", type(value).__name__)
    return None


class WalletAccount:
    """
    Account inside a wallet.  Identity (equality, hash, str) is the address.

    Not synchronised: ``ensure_remote_key`` writes, so concurrent callers
    sharing one instance must hold their own lock.
    """

    def __init__(
        self,
        private_key: PrivateKey,
        remote_key: PrivateKey | int | None = None,
        remote_endpoint: NodeEndpoint | None = None,
        *,
        version: int = MAIN_NET_VERSION,
    ):
        if private_key is None:
            raise ValueError("wallet account requires private key")

        address = Address.from_public_key(KeyPair(private_key).public_key, version)

        self._address = address
        self._private_key = private_key
        self._remote_key = _wrap_remote_key(remote_key)
        self._remote_endpoint = remote_endpoint

    # ---- factory methods ----

    @classmethod
    def create(cls, version: int = MAIN_NET_VERSION) -> WalletAccount:
        """Create an account around a freshly generated key pair."""
        return cls(KeyPair().private_key, version=version)

    @classmethod
    def from_private_key(
        cls,
        private_key: PrivateKey,
        raw_remote_key: int | None = None,
        version: int = MAIN_NET_VERSION,
    ) -> WalletAccount:
        """
        Create an account from an existing primary key.

        *raw_remote_key* is wrapped as-is when it is an int; no range check
        is applied to it.
        """
        return cls(private_key, raw_remote_key, version=version)

    @classmethod
    def deserialize(cls, deserializer: Deserializer, version: int = MAIN_NET_VERSION) -> WalletAccount:
        """
        Rebuild an account from its serialized form.

        A missing, undecodable or out-of-range primary key raises
        SerializationError.
        A malformed remote key is logged and treated as absent.
        """
        private_key = PrivateKey(deserializer.read_big_integer(PRIVATE_KEY_FIELD))
        try:
            raw_remote_key = deserializer.read_optional_big_integer(REMOTE_KEY_FIELD)
        except SerializationError as exc:
            logger.warning("Discarding unreadable remote harvesting key: %s", exc)
            raw_remote_key = None

        try:
            account = cls(private_key, raw_remote_key, version=version)
        except ValueError as exc:
            raise SerializationError(
                f"property {PRIVATE_KEY_FIELD!r} is not a usable private key: {exc}"
            ) from exc
        account.remote_endpoint = deserializer.read_optional_object(
            REMOTE_ENDPOINT_FIELD, NodeEndpoint.deserialize,
        )
        return account

    # ---- accessors ----

    @property
    def address(self) -> Address:
        return self._address

    @property
    def private_key(self) -> PrivateKey:
        return self._private_key

    @property
    def remote_key(self) -> PrivateKey | None:
        """The remote harvesting key, or None if it was never set or generated."""
        return self._remote_key

    def ensure_remote_key(self) -> PrivateKey:
        """Return the remote harvesting key, generating and storing one if absent."""
        if self._remote_key is None:
            self._remote_key = KeyPair().private_key
            logger.debug("Generated remote harvesting key for %s", self._address)
        return self._remote_key

    @property
    def remote_endpoint(self) -> NodeEndpoint | None:
        return self._remote_endpoint

    @remote_endpoint.setter
    def remote_endpoint(self, endpoint: NodeEndpoint | None):
        self._remote_endpoint = endpoint

    # ---- serialisation ----

    def serialize(self, serializer: Serializer) -> None:
        serializer.write_big_integer(PRIVATE_KEY_FIELD, self._private_key.raw)
        remote_raw = None if self._remote_key is None else self._remote_key.raw
        serializer.write_big_integer(REMOTE_KEY_FIELD, remote_raw)
        serializer.write_object(REMOTE_ENDPOINT_FIELD, self._remote_endpoint)

    # ---- identity ----

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WalletAccount):
            return NotImplemented
        return self._address == other._address

    def __hash__(self) -> int:
        return hash(self._address)

    def __str__(self) -> str:
        return str(self._address)

    def __repr__(self) -> str:
        return f"WalletAccount({self._address})"
