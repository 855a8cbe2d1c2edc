"""Pair fields across two objects by name and type compatibility."""
from __future__ import annotations

from typing import List, Sequence

from fieldmerge.core.introspect import accessible_fields
from fieldmerge.core.types import FieldDescriptor, FieldPair, FieldType


def types_compatible(a: FieldType, b: FieldType) -> bool:
    """Return True for identical declared types or a primitive/boxed pair of one kind."""
    if a.annotation == b.annotation:
        return True
    if a.primitive is None or b.primitive is None:
        return False
    return a.primitive is b.primitive


def match_fields(
    source_fields: Sequence[FieldDescriptor],
    destination_fields: Sequence[FieldDescriptor],
) -> List[FieldPair]:
    """Pair each source field with the first destination field of the same name.

    Source fields with no same-named destination field, or whose types are not
    compatible, are dropped.
    """
    pairs: List[FieldPair] = []
    seen = set()
    for source_field in source_fields:
        if source_field.name in seen:
            continue
        destination_field = next(
            (field for field in destination_fields if field.name == source_field.name),
            None,
        )
        if destination_field is None:
            continue
        if types_compatible(source_field.field_type, destination_field.field_type):
            pairs.append(FieldPair(source=source_field, destination=destination_field))
            seen.add(source_field.name)
    return pairs


def get_common_fields(a: object, b: object, *, include_private: bool = False) -> List[FieldPair]:
    """Matched pairs between the accessible fields of two live objects."""
    return match_fields(
        accessible_fields(a, include_private=include_private),
        accessible_fields(b, include_private=include_private),
    )


def get_common_field_names(a: object, b: object, *, include_private: bool = False) -> List[str]:
    return [pair.name for pair in get_common_fields(a, b, include_private=include_private)]
