# SPDX-License-Identifier: MIT

import json
import re
from typing import Any, Iterable, Mapping, cast

import pendulum

from waypoint import time
from waypoint.errors import SerializationError

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def snake_to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def camel_to_snake(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def typed_dict_fields(typed_dict: Any) -> frozenset[str]:
    return frozenset(typed_dict.__required_keys__ | typed_dict.__optional_keys__)


class EntityCodec[T]:
    """
    Converts one kind of entity between its in-memory form and its wire form.

    In memory an entity is a dict with snake_case keys whose timestamp fields
    hold pendulum.DateTime values. On the wire (local cache blobs and remote
    record content) the same entity is a JSON object with camelCase keys and
    ISO-8601 timestamp strings. Only the declared ``fields`` change case; any
    other key is carried through exactly as it was stored.
    """

    def __init__(
        self,
        name: str,
        fields: Iterable[str],
        datetime_fields: Iterable[str] = (),
        required_fields: Iterable[str] = ("id",),
    ) -> None:
        self.name = name
        self.fields = frozenset(fields)
        self.datetime_fields = frozenset(datetime_fields)
        self.required_fields = tuple(required_fields)
        self.__wire_fields = {snake_to_camel(field): field for field in self.fields}

    def encode(self, entity: T) -> dict[str, Any]:
        if not isinstance(entity, Mapping):
            raise SerializationError(
                f"{self.name}: expected a mapping, got {type(entity).__name__}"
            )

        raw: dict[str, Any] = {}
        for key, value in cast(Mapping[str, Any], entity).items():
            if key in self.datetime_fields and value is not None:
                value = self.__encode_datetime(key, value)
            raw[snake_to_camel(key) if key in self.fields else key] = value
        return raw

    def decode(self, raw: Any) -> T:
        if not isinstance(raw, dict):
            raise SerializationError(
                f"{self.name}: expected a JSON object, got {type(raw).__name__}"
            )

        entity: dict[str, Any] = {}
        for key, value in raw.items():
            field = self.__wire_fields.get(key, key)
            if field in self.datetime_fields and value is not None:
                value = self.__decode_datetime(field, value)
            entity[field] = value

        for field in self.required_fields:
            if entity.get(field) is None:
                raise SerializationError(f"{self.name}: missing required field '{field}'")

        return cast(T, entity)

    def __encode_datetime(self, field: str, value: Any) -> str:
        # Callers may hand over an ISO string instead of a DateTime
        if isinstance(value, str):
            value = self.__decode_datetime(field, value)
        if not isinstance(value, pendulum.DateTime):
            raise SerializationError(
                f"{self.name}: field '{field}' is not a datetime"
            )
        return time.datetime_to_iso_str(value)

    def __decode_datetime(self, field: str, value: Any) -> pendulum.DateTime:
        if not isinstance(value, str):
            raise SerializationError(
                f"{self.name}: field '{field}' is not a timestamp string"
            )
        try:
            return time.datetime_from_str(value)
        except ValueError as e:
            raise SerializationError(
                f"{self.name}: field '{field}' has an unparseable timestamp {value!r}"
            ) from e

    def dumps(self, entity: T) -> str:
        return json.dumps(self.encode(entity))

    def loads(self, content: str) -> T:
        try:
            raw = json.loads(content)
        except json.JSONDecodeError as e:
            raise SerializationError(f"{self.name}: content is not valid JSON") from e
        return self.decode(raw)
