"""
Structured serialization for nemwallet entities.

A ``Serializer`` writes named fields into an ordered dict; a
``Deserializer`` reads them back.  Every writer accepts ``None`` and
stores an explicit JSON ``null``, so optional fields keep their
presence/absence across a round trip.

Big integers are stored as the lowercase hex of their minimal big-endian
two's-complement bytes (``0 -> "00"``, ``255 -> "00ff"``, ``-1 -> "ff"``).

Usage:
    s = Serializer()
    entity.serialize(s)
    text = json.dumps(s.object)

    entity = Entity.deserialize(Deserializer(json.loads(text)))
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Protocol, TypeVar

logger = logging.getLogger("nemwallet.serialization")

T = TypeVar("T")


class SerializationError(ValueError):
    """A field could not be decoded."""


class MissingRequiredPropertyError(SerializationError):
    """A required field is missing or null."""

    def __init__(self, label: str):
        super().__init__(f"expected value for property {label!r}, but none was found")
        self.label = label


class SerializableEntity(Protocol):
    def serialize(self, serializer: Serializer) -> None: ...


def encode_big_integer(value: int) -> str:
    length = (value if value >= 0 else ~value).bit_length() // 8 + 1
    return value.to_bytes(length, "big", signed=True).hex()


def decode_big_integer(text: str) -> int:
    if not isinstance(text, str) or not text:
        raise SerializationError(f"big integer must be a non-empty hex string, got {text!r}")
    try:
        data = bytes.fromhex(text)
    except ValueError:
        raise SerializationError(f"big integer is not valid hex: {text!r}") from None
    return int.from_bytes(data, "big", signed=True)


# ===================================================================
#  Serializer
# ===================================================================

class Serializer:
    """Writes labelled fields into an insertion-ordered dict."""

    def __init__(self):
        self._object: dict[str, Any] = {}

    @property
    def object(self) -> dict[str, Any]:
        return self._object

    def write_int(self, label: str, value: int | None) -> None:
        self._object[label] = value

    def write_string(self, label: str, value: str | None) -> None:
        self._object[label] = value

    def write_big_integer(self, label: str, value: int | None) -> None:
        self._object[label] = None if value is None else encode_big_integer(value)

    def write_object(self, label: str, entity: SerializableEntity | None) -> None:
        if entity is None:
            self._object[label] = None
            return
        child = Serializer()
        entity.serialize(child)
        self._object[label] = child.object


# ===================================================================
#  Deserializer
# ===================================================================

class Deserializer:
    """Reads labelled fields from a dict produced by ``Serializer``."""

    def __init__(self, obj: dict[str, Any]):
        if not isinstance(obj, dict):
            raise SerializationError(f"expected an object, got {type(obj).__name__}")
        self._object = obj

    def _optional(self, label: str) -> Any:
        return self._object.get(label)

    def _required(self, label: str) -> Any:
        value = self._object.get(label)
        if value is None:
            raise MissingRequiredPropertyError(label)
        return value

    # ---- ints ----

    @staticmethod
    def _as_int(label: str, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise SerializationError(f"property {label!r} must be an integer, got {value!r}")
        return value

    def read_int(self, label: str) -> int:
        return self._as_int(label, self._required(label))

    def read_optional_int(self, label: str) -> int | None:
        value = self._optional(label)
        return None if value is None else self._as_int(label, value)

    # ---- strings ----

    @staticmethod
    def _as_string(label: str, value: Any) -> str:
        if not isinstance(value, str):
            raise SerializationError(f"property {label!r} must be a string, got {value!r}")
        return value

    def read_string(self, label: str) -> str:
        return self._as_string(label, self._required(label))

    def read_optional_string(self, label: str) -> str | None:
        value = self._optional(label)
        return None if value is None else self._as_string(label, value)

    # ---- big integers ----

    def read_big_integer(self, label: str) -> int:
        return decode_big_integer(self._required(label))

    def read_optional_big_integer(self, label: str) -> int | None:
        value = self._optional(label)
        return None if value is None else decode_big_integer(value)

    # ---- nested objects ----

    def _decode_object(self, label: str, value: Any, decode: Callable[[Deserializer], T]) -> T:
        child = Deserializer(value)
        try:
            return decode(child)
        except SerializationError:
            raise
        except (ValueError, TypeError, KeyError) as exc:
            raise SerializationError(f"property {label!r} could not be decoded: {exc}") from exc

    def read_object(self, label: str, decode: Callable[[Deserializer], T]) -> T:
        return self._decode_object(label, self._required(label), decode)

    def read_optional_object(self, label: str, decode: Callable[[Deserializer], T]) -> T | None:
        """Return the decoded nested object, or ``None`` when absent/null."""
        value = self._optional(label)
        if value is None:
            return None
        return self._decode_object(label, value, decode)


# ===================================================================
#  JSON helpers
# ===================================================================

def to_json(entity: SerializableEntity, **kwargs: Any) -> str:
    s = Serializer()
    entity.serialize(s)
    return json.dumps(s.object, **kwargs)


def from_json(text: str, decode: Callable[[Deserializer], T]) -> T:
    try:
        obj = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.debug("Rejected JSON input: %s", exc)
        raise SerializationError(f"invalid JSON: {exc}") from exc
    return decode(Deserializer(obj))
