"""Base class for chips.

A chip is a reusable sub-circuit split in two steps:

1. configure (classmethod): declare columns, selectors and gates on a
   ConstraintSystem and return a config dataclass.
2. construct(config): wrap the config in a chip instance whose methods assign
   witness values through a Layouter or Region.

Chips hold nothing but their config. Two chips share a column only when the
caller passes the same Column to both configure calls.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar, Union

from circuit.column import Column
from circuit.layouter import AssignedCell, Region
from primitives.field import FieldLike, to_field

C = TypeVar("C")


class Chip(ABC, Generic[C]):
    """Config holder with assignment helpers."""

    def __init__(self, config: C):
        self.config = config

    @classmethod
    def construct(cls, config: C) -> 'Chip[C]':
        return cls(config)

    @classmethod
    @abstractmethod
    def configure(cls, cs, *args: Any, **kwargs: Any) -> C:
        """Declare the chip's shape on `cs`; return its config."""
        pass


def load_advice(region: Region, column: Column, offset: int,
                value: Union[AssignedCell, FieldLike], annotation: str = "") -> AssignedCell:
    """Assign a fresh value, or copy an already assigned cell (with a copy constraint)."""
    if isinstance(value, AssignedCell):
        return value.copy_advice(region, column, offset, annotation or None)
    return region.assign_advice(column, offset, value, annotation or None)


def value_of(value: Union[AssignedCell, FieldLike], field: type):
    """Field value behind a raw input or an assigned cell."""
    if isinstance(value, AssignedCell):
        return value.value
    return to_field(value, field)
