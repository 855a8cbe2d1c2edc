from typing import Annotated, Any, Optional

import pytest

from fieldmerge.core.matching import get_common_field_names, get_common_fields, match_fields, types_compatible
from fieldmerge.core.types import FieldDescriptor, Primitive, classify
from merge_models import Hidden, Pojo, Pojo2, Slotted, Widths


def _field(name, annotation, owner=object):
    return FieldDescriptor(name=name, field_type=classify(annotation), owner=owner)


@pytest.mark.parametrize(
    "a, b",
    [
        (bool, Optional[bool]),
        (int, Optional[int]),
        (float, Optional[float]),
        (Annotated[int, Primitive.BYTE], Optional[Annotated[int, Primitive.BYTE]]),
        (Annotated[int, Primitive.SHORT], Annotated[Optional[int], Primitive.SHORT]),
        (Annotated[int, Primitive.LONG], Annotated[int, Primitive.LONG] | None),
        (Annotated[str, Primitive.CHAR], Optional[Annotated[str, Primitive.CHAR]]),
        (Annotated[float, Primitive.FLOAT], Optional[Annotated[float, Primitive.FLOAT]]),
        (str, str),
        (Optional[str], Optional[str]),
        (list[int], list[int]),
    ],
)
def test_compatible_types(a, b):
    assert types_compatible(classify(a), classify(b))
    assert types_compatible(classify(b), classify(a))


@pytest.mark.parametrize(
    "a, b",
    [
        (int, Annotated[int, Primitive.LONG]),
        (int, float),
        (bool, int),
        (Optional[int], Optional[float]),
        (str, object),
        (str, Optional[str]),
        (str, Any),
        (list[int], list[str]),
    ],
)
def test_incompatible_types(a, b):
    assert not types_compatible(classify(a), classify(b))


def test_classify_labels():
    assert classify(int).label == "int"
    assert classify(Optional[int]).label == "Integer"
    assert classify(Annotated[str, Primitive.CHAR] | None).label == "Character"
    assert classify(str).label == "str"
    assert classify(Optional[str]).primitive is None


def test_mismatched_primitive_tag_is_ignored():
    field_type = classify(Annotated[str, Primitive.LONG])
    assert field_type.primitive is None


def test_match_uses_first_destination_with_same_name():
    source = [_field("x", int)]
    destination = [_field("x", str), _field("x", int)]
    assert match_fields(source, destination) == []


def test_match_keeps_one_pair_per_source_name():
    source = [_field("x", int), _field("x", int)]
    destination = [_field("x", Optional[int])]
    pairs = match_fields(source, destination)
    assert [pair.name for pair in pairs] == ["x"]
    assert pairs[0].destination.field_type.boxed


def test_unmatched_names_are_dropped():
    source = [_field("x", int), _field("y", int)]
    destination = [_field("y", int), _field("z", int)]
    assert [pair.name for pair in match_fields(source, destination)] == ["y"]


def test_names_are_case_sensitive():
    assert match_fields([_field("Value", int)], [_field("value", int)]) == []


def test_common_fields_between_live_objects():
    assert get_common_field_names(Pojo(), Pojo2()) == ["bool_field", "string_field"]
    pairs = get_common_fields(Pojo(), Pojo2())
    assert pairs[0].source.owner is Pojo
    assert pairs[0].destination.owner is Pojo2


def test_common_fields_skip_private_and_unset():
    assert get_common_fields(Hidden(), Hidden()) == []
    assert get_common_field_names(Hidden(), Hidden(), include_private=True) == ["_x", "_y"]
    assert get_common_field_names(Slotted("a"), Slotted("b", weight=3)) == ["label"]


def test_no_common_fields_across_unrelated_types():
    assert get_common_fields(Widths(), Pojo()) == []
