from __future__ import annotations
from typing import Any, Dict, Iterable, List, Mapping, Type, TypeVar

from pydantic import BaseModel, ValidationError

from jobly.errors import BadRequestError

M = TypeVar("M", bound=BaseModel)


def error_messages(errors: Iterable[Mapping[str, Any]]) -> List[str]:
    """Flatten pydantic error dicts into 'field: message' strings."""
    out = []
    for e in errors:
        loc = ".".join(str(p) for p in e.get("loc", ()) if p != "body")
        out.append(f"{loc}: {e.get('msg', '')}" if loc else str(e.get("msg", "")))
    return out


def _to_int(key: str, value: Any) -> Any:
    if not isinstance(value, str):
        return value
    try:
        return int(value.strip())
    except ValueError:
        raise BadRequestError([f"{key}: must be an integer"]) from None


def _to_bool(key: str, value: Any) -> Any:
    if not isinstance(value, str):
        return value
    v = value.strip().lower()
    if v == "true":
        return True
    if v == "false":
        return False
    raise BadRequestError([f"{key}: must be true or false"])


def validate_shape(shape: Type[M], data: Mapping[str, Any]) -> M:
    try:
        return shape.model_validate(data)
    except ValidationError as exc:
        raise BadRequestError(error_messages(exc.errors())) from None


def parse_filters(
    raw: Mapping[str, Any],
    shape: Type[M],
    ints: Iterable[str] = (),
    bools: Iterable[str] = (),
) -> M:
    """Coerce query-string values, then validate them against `shape`.

    Empty strings and None are treated as absent.
    """
    data: Dict[str, Any] = {k: v for k, v in raw.items() if v is not None and v != ""}
    for key in ints:
        if key in data:
            data[key] = _to_int(key, data[key])
    for key in bools:
        if key in data:
            data[key] = _to_bool(key, data[key])
    return validate_shape(shape, data)
