"""Serializer and deserializer interfaces for Kafka record keys and values.

These are the capabilities that ``key.serializer``/``value.serializer`` and
their deserializer counterparts must provide. Implementations are named in
property maps by dotted import path, e.g.
``kafkaguard.serialization.StringSerializer``; the JVM class names of the
matching Kafka serializers are accepted as aliases.
"""

from abc import ABC, abstractmethod
from typing import Any


class Serializer(ABC):
    """Converts a record key or value into bytes."""

    @abstractmethod
    def serialize(self, topic: str, data: Any) -> bytes | None:
        pass

    def close(self) -> None:
        pass


class Deserializer(ABC):
    """Converts bytes read from a topic back into a key or value."""

    @abstractmethod
    def deserialize(self, topic: str, data: bytes | None) -> Any:
        pass

    def close(self) -> None:
        pass


class StringSerializer(Serializer):

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def serialize(self, topic: str, data: str | None) -> bytes | None:
        if data is None:
            return None
        return data.encode(self.encoding)


class StringDeserializer(Deserializer):

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def deserialize(self, topic: str, data: bytes | None) -> str | None:
        if data is None:
            return None
        return data.decode(self.encoding)


class ByteArraySerializer(Serializer):

    def serialize(self, topic: str, data: bytes | None) -> bytes | None:
        return None if data is None else bytes(data)


class ByteArrayDeserializer(Deserializer):

    def deserialize(self, topic: str, data: bytes | None) -> bytes | None:
        return data


class IntegerSerializer(Serializer):
    """Four-byte big-endian signed integers."""

    def serialize(self, topic: str, data: int | None) -> bytes | None:
        if data is None:
            return None
        return int(data).to_bytes(4, "big", signed=True)


class IntegerDeserializer(Deserializer):

    def deserialize(self, topic: str, data: bytes | None) -> int | None:
        if data is None:
            return None
        if len(data) != 4:
            raise ValueError(f"Size of data received by IntegerDeserializer is not 4: {len(data)}")
        return int.from_bytes(data, "big", signed=True)


_KAFKA_PACKAGE = "org.apache.kafka.common.serialization"

KNOWN_ALIASES: dict[str, str] = {
    f"{_KAFKA_PACKAGE}.{cls.__name__}": f"{__name__}:{cls.__name__}"
    for cls in (
        StringSerializer,
        StringDeserializer,
        ByteArraySerializer,
        ByteArrayDeserializer,
        IntegerSerializer,
        IntegerDeserializer,
    )
}
