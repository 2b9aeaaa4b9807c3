# (c) Nelen & Schuurmans

from collections.abc import Sequence
from datetime import datetime
from datetime import timezone
from enum import Enum
from typing import Any
from typing import ClassVar
from typing import NamedTuple
from typing import Protocol

from pydantic import ConfigDict
from pydantic import field_validator

from .context import Context
from .value_object import ValueObject

__all__ = [
    "KeyValue",
    "ListOrder",
    "ListParams",
    "Params",
    "RequestParams",
    "SortField",
    "encode_option",
    "format_bool",
    "format_time",
]


class KeyValue(NamedTuple):
    key: str
    value: str


class ListOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SortField(str, Enum):
    CREATED_AT = "created_at"
    # only meaningful with ListOrder.ASC
    UPDATED_AT = "updated_at"


def format_bool(value: bool) -> str:
    return "true" if value else "false"


def format_time(value: datetime) -> str:
    """ISO 8601 in UTC with second precision. Naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def encode_option(value: Any) -> str | None:
    """Encode a single query option value; None means: leave the option out"""
    if value is None:
        return None
    if isinstance(value, bool):
        return format_bool(value)
    if isinstance(value, datetime):
        return format_time(value)
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, Sequence) and not isinstance(value, str):
        if len(value) == 0:
            return None
        return ",".join(str(x) for x in value)
    return str(value)


class RequestParams(Protocol):
    """What the providers need from a parameter record."""

    idempotency_key: str | None
    headers: dict[str, str] | None
    context: Context | None

    def options(self) -> list[KeyValue]:
        ...


class Params(ValueObject):
    """Cross-cutting request parameters.

    Subclasses add query options as plain optional fields; ``options()``
    emits them in declaration order, skipping the ones that are not set.
    Fields listed in ``default_emitted`` are always emitted, with an empty
    value when unset.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    cross_cutting: ClassVar[frozenset[str]] = frozenset(
        {"idempotency_key", "headers", "context", "body"}
    )
    default_emitted: ClassVar[frozenset[str]] = frozenset()

    idempotency_key: str | None = None
    headers: dict[str, str] | None = None
    context: Context | None = None

    def options(self) -> list[KeyValue]:
        options = []
        for name in type(self).model_fields:
            if name in self.cross_cutting:
                continue
            value = encode_option(getattr(self, name))
            if value is None and name in self.default_emitted:
                value = ""
            if value is not None:
                options.append(KeyValue(name, value))
        return options


class ListParams(Params):
    default_emitted: ClassVar[frozenset[str]] = frozenset({"order", "sort"})

    ids: list[str] | None = None
    limit: int | None = None
    order: ListOrder | None = None
    sort: SortField | None = None
    begin_time: datetime | None = None
    end_time: datetime | None = None

    @field_validator("limit")
    @classmethod
    def non_positive_limit_is_unset(cls, v: int | None) -> int | None:
        if v is not None and v <= 0:
            return None
        return v
