from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

RESERVED_PARAMS = frozenset({"offset", "limit", "page", "sort"})

Scalar = bool | int | float | str


class Pagination(BaseModel):
    model_config = ConfigDict(frozen=True)

    offset: int | None = Field(default=None, ge=0)
    limit: int | None = Field(default=None, ge=0)
    page: int | None = Field(default=None, ge=0)


class Sort(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str = Field(min_length=1)
    asc: bool = Field(default=True)


class Predicate(BaseModel):
    model_config = ConfigDict(frozen=True)

    tag: ClassVar[str]


class Eq(Predicate):
    tag: ClassVar[str] = "eq"
    value: Scalar


class Neq(Predicate):
    tag: ClassVar[str] = "neq"
    value: Scalar


class Gt(Predicate):
    tag: ClassVar[str] = "gt"
    value: int | float


class Lt(Predicate):
    tag: ClassVar[str] = "lt"
    value: int | float


# The service has no "less than or equal" operator.
class Gte(Predicate):
    tag: ClassVar[str] = "gte"
    value: int | float


class Inc(Predicate):
    tag: ClassVar[str] = "inc"
    values: tuple[Scalar, ...]


class Exc(Predicate):
    tag: ClassVar[str] = "exc"
    values: tuple[Scalar, ...]


class Exist(Predicate):
    tag: ClassVar[str] = "exist"
    value: bool


_PREDICATE_TYPES: dict[str, type[Predicate]] = {
    cls.tag: cls for cls in (Eq, Neq, Gt, Lt, Gte, Inc, Exc, Exist)
}


def predicate_from_mapping(raw: Mapping[str, Any]) -> Predicate | None:
    """Build a predicate from its single-key form, e.g. ``{"gt": 30}``.

    Only the first key is considered. Unknown tags yield ``None``.
    """
    if not raw:
        return None
    tag = next(iter(raw))
    predicate_type = _PREDICATE_TYPES.get(tag)
    if predicate_type is None:
        return None
    value = raw[tag]
    if predicate_type in (Inc, Exc):
        return predicate_type(values=value)
    return predicate_type(value=value)


class ListOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    pagination: Pagination | None = Field(default=None)
    sort: Sort | None = Field(default=None)
    filter: dict[str, Predicate] = Field(default_factory=dict)

    @field_validator("filter", mode="before")
    @classmethod
    def _coerce_predicates(cls, value: Any) -> Any:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            return value

        predicates: dict[str, Predicate] = {}
        for field_name, raw in value.items():
            if isinstance(raw, Predicate):
                predicates[field_name] = raw
            elif isinstance(raw, Mapping):
                predicate = predicate_from_mapping(raw)
                if predicate is not None:
                    predicates[field_name] = predicate
        return predicates
