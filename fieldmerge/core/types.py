"""Field descriptors and the primitive/boxed correspondence table."""
from __future__ import annotations

import types
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Optional, Tuple, Union, get_args, get_origin


class Primitive(Enum):
    """Closed set of primitive kinds that have a boxed (nullable) counterpart."""

    BOOLEAN = ("boolean", "Boolean", bool)
    BYTE = ("byte", "Byte", int)
    CHAR = ("char", "Character", str)
    FLOAT = ("float", "Float", float)
    INT = ("int", "Integer", int)
    LONG = ("long", "Long", int)
    SHORT = ("short", "Short", int)
    DOUBLE = ("double", "Double", float)

    def __init__(self, primitive_name: str, boxed_name: str, carrier: type) -> None:
        self.primitive_name = primitive_name
        self.boxed_name = boxed_name
        self.carrier = carrier


# Bare builtin annotations and the kind they declare.
_BUILTIN_KINDS = {
    bool: Primitive.BOOLEAN,
    int: Primitive.INT,
    float: Primitive.DOUBLE,
}


@dataclass(frozen=True)
class FieldType:
    """Declared type of a field, with its primitive kind when it has one."""

    annotation: Any
    primitive: Optional[Primitive] = None
    boxed: bool = False

    @property
    def label(self) -> str:
        if self.primitive is not None:
            return self.primitive.boxed_name if self.boxed else self.primitive.primitive_name
        if isinstance(self.annotation, str):
            return self.annotation
        if isinstance(self.annotation, type):
            return self.annotation.__name__
        return repr(self.annotation).replace("typing.", "")


@dataclass(frozen=True)
class FieldDescriptor:
    """A single declared field: its name, declared type and declaring class."""

    name: str
    field_type: FieldType
    owner: type


@dataclass(frozen=True)
class FieldPair:
    """A source field matched to the destination field of the same name."""

    source: FieldDescriptor
    destination: FieldDescriptor

    @property
    def name(self) -> str:
        return self.source.name


def _unwrap_optional(annotation: Any) -> Tuple[Any, bool]:
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1 and len(get_args(annotation)) == 2:
            return members[0], True
    return annotation, False


def _unwrap_annotated(annotation: Any) -> Tuple[Any, Optional[Primitive]]:
    if get_origin(annotation) is not Annotated:
        return annotation, None
    base, *extras = get_args(annotation)
    tag = next((extra for extra in extras if isinstance(extra, Primitive)), None)
    return base, tag


def classify(annotation: Any) -> FieldType:
    """Build the FieldType for a resolved annotation.

    ``Optional[X]`` marks the boxed form of X. ``Annotated[base, Primitive.X]``
    narrows the kind when ``base`` is the kind's carrier type; a mismatched
    tag is ignored. Either wrapper may enclose the other.
    """
    inner, boxed = _unwrap_optional(annotation)
    inner, tag = _unwrap_annotated(inner)
    if not boxed:
        inner, boxed = _unwrap_optional(inner)
    if tag is not None and inner is tag.carrier:
        return FieldType(annotation=annotation, primitive=tag, boxed=boxed)
    if isinstance(inner, type) and inner in _BUILTIN_KINDS:
        return FieldType(annotation=annotation, primitive=_BUILTIN_KINDS[inner], boxed=boxed)
    return FieldType(annotation=annotation)
