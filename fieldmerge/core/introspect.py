"""Enumerate, read and resolve declared fields on live objects."""
from __future__ import annotations

import inspect
import sys
from typing import Any, ClassVar, Dict, List, Optional, get_origin

from fieldmerge.core.types import FieldDescriptor, FieldType, classify

MOST_DERIVED = "most_derived"
LEAST_DERIVED = "least_derived"

_SLOT_RESERVED = {"__dict__", "__weakref__"}


def _resolve(annotation: Any, globalns: Dict[str, Any], localns: Dict[str, Any]) -> Any:
    if not isinstance(annotation, str):
        return annotation
    try:
        return eval(annotation, globalns, localns)
    except (NameError, SyntaxError, TypeError, AttributeError):
        # Unresolvable forward references keep their string form.
        return annotation


def _own_annotations(cls: type) -> Dict[str, Any]:
    """Annotations declared on ``cls`` itself, each resolved where possible."""
    module = sys.modules.get(cls.__module__)
    globalns = dict(getattr(module, "__dict__", {}))
    localns = dict(vars(cls))
    return {
        name: _resolve(annotation, globalns, localns)
        for name, annotation in inspect.get_annotations(cls).items()
    }


def _own_slots(cls: type) -> List[str]:
    slots = cls.__dict__.get("__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    return [slot for slot in slots if slot not in _SLOT_RESERVED]


def _is_class_var(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def declared_fields(cls: type) -> List[FieldDescriptor]:
    """Return the instance fields ``cls`` declares directly, in declaration order."""
    fields: List[FieldDescriptor] = []
    annotations = _own_annotations(cls)
    for name, annotation in annotations.items():
        if _is_class_var(annotation):
            continue
        fields.append(FieldDescriptor(name=name, field_type=classify(annotation), owner=cls))
    for name in _own_slots(cls):
        if name not in annotations:
            fields.append(FieldDescriptor(name=name, field_type=FieldType(annotation=Any), owner=cls))
    return fields


def is_public(name: str) -> bool:
    return not name.startswith("_")


def accessible_fields(obj: object, *, include_private: bool = False) -> List[FieldDescriptor]:
    """Declared fields of ``type(obj)`` whose value the caller can read.

    Private names and fields whose read raises (never assigned, or guarded
    by a failing descriptor) are left out silently.
    """
    accessible: List[FieldDescriptor] = []
    for descriptor in declared_fields(type(obj)):
        if not include_private and not is_public(descriptor.name):
            continue
        try:
            getattr(obj, descriptor.name)
        except Exception:
            continue
        accessible.append(descriptor)
    return accessible


def accessible_field_names(obj: object, *, include_private: bool = False) -> List[str]:
    return [field.name for field in accessible_fields(obj, include_private=include_private)]


def read_field(obj: object, descriptor: FieldDescriptor) -> Any:
    return getattr(obj, descriptor.name)


def resolve_field(cls: type, name: str, *, resolution: str = MOST_DERIVED) -> Optional[FieldDescriptor]:
    """Look up the declaration of ``name`` across the MRO of ``cls``.

    When several classes in the hierarchy declare the same name, ``resolution``
    selects the most derived or the least derived declaration.
    """
    if resolution not in (MOST_DERIVED, LEAST_DERIVED):
        raise ValueError(f"Unknown field resolution: {resolution}")
    hierarchy = [klass for klass in cls.__mro__ if klass is not object]
    if resolution == LEAST_DERIVED:
        hierarchy.reverse()
    for klass in hierarchy:
        for descriptor in declared_fields(klass):
            if descriptor.name == name:
                return descriptor
    return None


def is_read_only(cls: type, name: str) -> bool:
    """True when the class attribute for ``name`` is a property without a setter."""
    attribute = inspect.getattr_static(cls, name, None)
    return isinstance(attribute, property) and attribute.fset is None
