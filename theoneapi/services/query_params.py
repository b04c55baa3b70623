from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from theoneapi.schemas.models import Document, wire_name
from theoneapi.schemas.query import (
    RESERVED_PARAMS,
    Eq,
    Exc,
    Exist,
    Gt,
    Gte,
    Inc,
    ListOptions,
    Lt,
    Neq,
    Predicate,
)

QueryParams = dict[str, str | int]


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _join(values: tuple[Any, ...]) -> str:
    return ",".join(_stringify(value) for value in values)


def _compile_predicate(field_key: str, predicate: Predicate) -> tuple[str, str] | None:
    if isinstance(predicate, Eq):
        return field_key, _stringify(predicate.value)
    if isinstance(predicate, Neq):
        return f"{field_key}!", _stringify(predicate.value)
    if isinstance(predicate, Gt):
        return f"{field_key}>{_stringify(predicate.value)}", ""
    if isinstance(predicate, Lt):
        return f"{field_key}<{_stringify(predicate.value)}", ""
    if isinstance(predicate, Gte):
        return f"{field_key}>", _stringify(predicate.value)
    if isinstance(predicate, Exist):
        return (field_key if predicate.value else f"!{field_key}"), ""
    if isinstance(predicate, Inc):
        return field_key, _join(predicate.values)
    if isinstance(predicate, Exc):
        return f"{field_key}!", _join(predicate.values)
    return None


def coerce_list_options(options: ListOptions | Mapping[str, Any] | None) -> ListOptions:
    if options is None:
        return ListOptions()
    if isinstance(options, ListOptions):
        return options
    return ListOptions.model_validate(dict(options))


def compile_list_params(
    options: ListOptions | Mapping[str, Any] | None = None,
    document: type[Document] | None = None,
) -> QueryParams:
    """Flatten a query description into The One API's query-string grammar.

    Pagination values pass through as integers, ``sort`` becomes
    ``"<key>:asc|desc"`` and each filter entry becomes a single parameter
    whose key may embed the operator (``"age>30"``, ``"name!"``,
    ``"!name"``). Filters on ``offset``, ``limit``, ``page`` or ``sort`` are
    dropped. When ``document`` is given, attribute names are translated to
    the model's wire names.
    """
    query = coerce_list_options(options)

    def resolve(name: str) -> str:
        return wire_name(document, name) if document is not None else name

    params: QueryParams = {}

    if query.pagination is not None:
        for key, value in query.pagination.model_dump(exclude_none=True).items():
            params[key] = value

    if query.sort is not None:
        direction = "asc" if query.sort.asc else "desc"
        params["sort"] = f"{resolve(query.sort.key)}:{direction}"

    for field_name, predicate in query.filter.items():
        field_key = resolve(field_name)
        if field_name in RESERVED_PARAMS or field_key in RESERVED_PARAMS:
            continue
        compiled = _compile_predicate(field_key, predicate)
        if compiled is None:
            continue
        key, value = compiled
        params[key] = value

    return params
