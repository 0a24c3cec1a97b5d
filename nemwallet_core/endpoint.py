"""
Network location of the node that harvests on an account's behalf.
"""

from __future__ import annotations

from dataclasses import dataclass

from nemwallet_core.serialization import Deserializer, Serializer

DEFAULT_PROTOCOL = "http"
DEFAULT_PORT = 7890
SUPPORTED_PROTOCOLS = ("http", "https")


@dataclass(frozen=True)
class NodeEndpoint:
    """Immutable ``(protocol, host, port)`` triple."""
    protocol: str
    host: str
    port: int

    def __post_init__(self):
        if self.protocol not in SUPPORTED_PROTOCOLS:
            raise ValueError(f"Unsupported protocol {self.protocol!r}")
        if not self.host:
            raise ValueError("Endpoint host must not be empty")
        if isinstance(self.port, bool) or not isinstance(self.port, int) or not 0 <= self.port <= 65535:
            raise ValueError(f"Invalid port {self.port!r}")

    @classmethod
    def from_host(cls, host: str) -> NodeEndpoint:
        return cls(DEFAULT_PROTOCOL, host, DEFAULT_PORT)

    @property
    def base_url(self) -> str:
        return f"{self.protocol}://{self.host}:{self.port}/"

    # ---- serialisation ----

    def serialize(self, serializer: Serializer) -> None:
        serializer.write_string("protocol", self.protocol)
        serializer.write_string("host", self.host)
        serializer.write_int("port", self.port)

    @classmethod
    def deserialize(cls, deserializer: Deserializer) -> NodeEndpoint:
        return cls(
            deserializer.read_string("protocol"),
            deserializer.read_string("host"),
            deserializer.read_int("port"),
        )

    def __str__(self) -> str:
        return self.base_url
