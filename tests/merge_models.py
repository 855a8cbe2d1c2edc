"""Sample types shared by the merge tests."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated, ClassVar, List, Optional

from pydantic import BaseModel, ConfigDict

from fieldmerge.core.types import Primitive


class Pojo:
    bool_field: Optional[bool] = True
    string_field: Optional[str] = "hiMom"

    def __init__(self, bool_field: Optional[bool] = True, string_field: Optional[str] = "hiMom") -> None:
        self.bool_field = bool_field
        self.string_field = string_field


class Pojo2:
    bool_field: bool = False
    string_field: Optional[str] = "pojo2"
    answer_to_life_the_universe_and_everything: int = 42


class Hidden:
    _x: int
    _y: int

    def __init__(self) -> None:
        self._x = 1
        self._y = 2


@dataclass
class Widths:
    small: Annotated[int, Primitive.SHORT] = 1
    wide: Annotated[int, Primitive.LONG] = 2
    letter: Annotated[str, Primitive.CHAR] = "a"
    ratio: Annotated[float, Primitive.FLOAT] = 0.5
    count: int = 3


@dataclass
class BoxedWidths:
    small: Optional[Annotated[int, Primitive.SHORT]] = None
    wide: Annotated[Optional[int], Primitive.LONG] = None
    letter: Optional[Annotated[str, Primitive.CHAR]] = None
    ratio: Optional[Annotated[float, Primitive.FLOAT]] = None
    count: Annotated[int, Primitive.LONG] = 0


@dataclass
class Basket:
    items: List[str] = field(default_factory=list)
    owner: Optional[str] = None
    registry: ClassVar[str] = "shared"


@dataclass(frozen=True)
class FrozenBasket:
    items: List[str] = field(default_factory=list)
    owner: Optional[str] = None


class Account(BaseModel):
    name: str = "anonymous"
    active: Optional[bool] = None
    balance: float = 0.0


class LockedAccount(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = "locked"
    active: bool = False


class Slotted:
    __slots__ = ("label", "weight")

    def __init__(self, label: str, weight: Optional[int] = None) -> None:
        self.label = label
        if weight is not None:
            self.weight = weight


class Sealed:
    label: str = "sealed"

    @property
    def label_view(self) -> str:
        return self.label


class Base:
    code: int = 0


class Derived(Base):
    code: Optional[int] = 1
    note: str = "derived"


class ReadOnlyCode:
    code: int

    @property
    def code(self) -> int:
        return 7


class PartlyResolved:
    other: MissingType  # noqa: F821
    count: int = 3


class NullableCount:
    count: Optional[int] = None


class Flaky:
    stable: int = 1
    reading: float

    @property
    def reading(self) -> float:
        raise RuntimeError("sensor offline")


class LabelBase:
    label: int = 0


class LabelDerived(LabelBase):
    label: Optional[str] = None


class LabelSource:
    label: Optional[str] = "fresh"
