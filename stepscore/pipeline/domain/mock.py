"""SchemaMockGenerator: schema-shaped placeholder values for sandbox runs."""

import random
import types
from collections.abc import Callable
from enum import Enum, StrEnum
from typing import Any, Literal, Union, get_args, get_origin

from pydantic import BaseModel

_ARRAY_ORIGINS = (list, tuple, set, frozenset)


class FieldKind(StrEnum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    ENUM = "enum"
    OTHER = "other"


def _unwrap_optional(annotation: Any) -> Any:
    if get_origin(annotation) in (Union, types.UnionType):
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return members[0]
    return annotation


def classify(annotation: Any) -> FieldKind:
    """Map a field annotation to the kind of placeholder it needs."""
    annotation = _unwrap_optional(annotation)
    origin = get_origin(annotation)
    if annotation is str:
        return FieldKind.STRING
    # bool is a subclass of int, so it must be checked first.
    if annotation is bool:
        return FieldKind.BOOLEAN
    if annotation in (int, float):
        return FieldKind.NUMBER
    if annotation in _ARRAY_ORIGINS or origin in _ARRAY_ORIGINS:
        return FieldKind.ARRAY
    if origin is Literal:
        return FieldKind.ENUM
    if isinstance(annotation, type) and issubclass(annotation, Enum):
        return FieldKind.ENUM
    return FieldKind.OTHER


def _is_model(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, BaseModel)


class SchemaMockGenerator:
    """Produces values that satisfy a pydantic model schema without calling a judge.

    Object schemas get one entry per declared field; anything else becomes
    ``"Mock response for <stage>"``. Pass a seeded ``random.Random`` for
    reproducible output.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()
        self._builders: dict[FieldKind, Callable[[str, Any], Any]] = {
            FieldKind.STRING: self._string,
            FieldKind.NUMBER: self._number,
            FieldKind.BOOLEAN: self._boolean,
            FieldKind.ARRAY: self._array,
            FieldKind.ENUM: self._enum,
            FieldKind.OTHER: self._other,
        }

    def generate(self, schema: Any, stage: str) -> Any:
        if not _is_model(schema):
            return f"Mock response for {stage}"
        return self._object(schema)

    def _object(self, model: type[BaseModel]) -> dict[str, Any]:
        return {
            name: self._value(name, field.annotation)
            for name, field in model.model_fields.items()
        }

    def _value(self, name: str, annotation: Any) -> Any:
        annotation = _unwrap_optional(annotation)
        return self._builders[classify(annotation)](name, annotation)

    def _string(self, name: str, annotation: Any) -> str:
        return f"Mock {name}"

    def _number(self, name: str, annotation: Any) -> int:
        return self._rng.randrange(100)

    def _boolean(self, name: str, annotation: Any) -> bool:
        return self._rng.random() > 0.5

    def _array(self, name: str, annotation: Any) -> list[Any]:
        args = get_args(annotation)
        item = _unwrap_optional(args[0]) if args else str
        if classify(item) in (FieldKind.STRING, FieldKind.OTHER) and not _is_model(item):
            return ["Item 1", "Item 2"]
        return [self._value(name, item) for _ in range(2)]

    def _enum(self, name: str, annotation: Any) -> Any:
        if get_origin(annotation) is Literal:
            return self._rng.choice(get_args(annotation))
        return self._rng.choice([member.value for member in annotation])

    def _other(self, name: str, annotation: Any) -> Any:
        if _is_model(annotation):
            return self._object(annotation)
        return f"Mock {name}"
