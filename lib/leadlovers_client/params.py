from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, NamedTuple
from urllib.parse import urlencode

TOKEN_PARAM = "token"

ParamsInput = Mapping[str, Any] | Iterable[Any] | None


class QueryParam(NamedTuple):
    name: str
    value: Any


def normalize_params(params: ParamsInput) -> list[QueryParam]:
    """Accept a ``{name: value}`` mapping, ``(name, value)`` pairs or
    ``{"name": ..., "value": ...}`` items and return them as QueryParam."""
    if not params:
        return []
    if isinstance(params, Mapping):
        return [QueryParam(str(k), v) for k, v in params.items()]

    items: list[QueryParam] = []
    for item in params:
        if isinstance(item, Mapping):
            items.append(QueryParam(str(item.get("name") or ""), item.get("value")))
        else:
            name, value = item
            items.append(QueryParam(str(name), value))
    return items


def render_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def merge_query_params(
        params: ParamsInput,
        reserved: Mapping[str, Any] | None = None,
        *,
        token: str,
) -> list[QueryParam]:
    """Merge caller params with the values an operation injects itself.

    Overwrite order is caller values first, then ``reserved`` in the order
    given, then ``token`` last. A reserved name is removed before it is
    re-added so it lands in the operation's position. Entries with an empty
    name or value are dropped.
    """
    merged: dict[str, str] = {}
    for p in normalize_params(params):
        merged[p.name] = render_value(p.value)

    for name, value in (reserved or {}).items():
        merged.pop(name, None)
        merged[name] = render_value(value)

    merged.pop(TOKEN_PARAM, None)
    merged[TOKEN_PARAM] = render_value(token)

    return [QueryParam(name, value) for name, value in merged.items() if name and value]


def build_query_string(params: Iterable[QueryParam]) -> str:
    pairs = [(p.name, p.value) for p in params]
    if not pairs:
        return ""
    return "?" + urlencode(pairs)
