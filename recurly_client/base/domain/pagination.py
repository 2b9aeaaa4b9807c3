# (c) Nelen & Schuurmans

from collections.abc import Sequence
from typing import Generic
from typing import TypeVar

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import field_validator

from .value_object import ValueObject

__all__ = ["Envelope", "ListCursor", "Page"]

T = TypeVar("T")


class ListCursor(ValueObject):
    next_path: str = ""
    has_more: bool = False

    @property
    def exhausted(self) -> bool:
        return not self.has_more or not self.next_path


class Page(BaseModel, Generic[T]):
    model_config = ConfigDict(frozen=True)

    items: Sequence[T]
    cursor: ListCursor = ListCursor()


class Envelope(BaseModel, Generic[T]):
    """The JSON wrapper of every list response."""

    object: str = "list"
    has_more: bool = False
    next: str = ""
    data: list[T]

    @field_validator("next", mode="before")
    @classmethod
    def next_none_is_empty(cls, v):
        return "" if v is None else v

    @property
    def cursor(self) -> ListCursor:
        return ListCursor(next_path=self.next, has_more=self.has_more)
