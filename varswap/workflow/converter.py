"""Custom Temporal DataConverter for varswap frozen-dataclass types.

Handles serialization of aware datetimes, dates, frozensets, Enums and
nested dataclasses (definitions, calendars, series) by adding tags during
encoding. Derived dataclass fields (init=False) are not sent; they are
recomputed by __post_init__ on the receiving side.
"""

from __future__ import annotations

import dataclasses
import importlib
import json
import types
from datetime import date, datetime
from enum import Enum
from typing import Any, Union, get_args, get_origin, get_type_hints

from temporalio.converter import (
    CompositePayloadConverter,
    DataConverter,
    DefaultPayloadConverter,
    JSONPlainPayloadConverter,
    JSONTypeConverter,
)

# ---------------------------------------------------------------------------
# Recursive serializer
# ---------------------------------------------------------------------------


def _to_json(obj: Any) -> Any:  # noqa: PLR0911
    """Recursively convert varswap objects to JSON-compatible values."""
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj
    if isinstance(obj, datetime):
        return {"__datetime__": obj.isoformat()}
    if isinstance(obj, date):
        return {"__date__": obj.isoformat()}
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, frozenset):
        return {"__frozenset__": [_to_json(x) for x in sorted(obj)]}
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        d: dict[str, Any] = {
            "__type__": f"{type(obj).__module__}.{type(obj).__qualname__}",
        }
        for field in dataclasses.fields(obj):
            if field.init:
                d[field.name] = _to_json(getattr(obj, field.name))
        return d
    if isinstance(obj, (tuple, list)):
        return [_to_json(x) for x in obj]
    if isinstance(obj, dict):
        return {str(k): _to_json(v) for k, v in obj.items()}
    msg = f"Cannot encode {type(obj).__name__} for Temporal payloads"
    raise TypeError(msg)


class VarSwapJSONEncoder(json.JSONEncoder):
    """JSON encoder using _to_json for varswap types."""

    def default(self, o: Any) -> Any:
        result = _to_json(o)
        if result is not o:
            return result
        return super().default(o)


# ---------------------------------------------------------------------------
# Recursive deserializer
# ---------------------------------------------------------------------------

# Only classes from these modules are ever instantiated from a payload.
_ALLOWED_MODULES: frozenset[str] = frozenset({
    "varswap.core.calendar",
    "varswap.core.timeseries",
    "varswap.core.types",
    "varswap.instrument.variance_swap",
    "varswap.pricing.types",
    "varswap.workflow.types",
})

_CLASS_CACHE: dict[str, type] = {}


def _resolve_class(fqn: str) -> type | None:
    """Resolve a fully qualified class name from the allow-list."""
    if fqn in _CLASS_CACHE:
        return _CLASS_CACHE[fqn]
    module_name, _, class_name = fqn.rpartition(".")
    if module_name not in _ALLOWED_MODULES:
        return None
    try:
        module = importlib.import_module(module_name)
    except ImportError:
        return None
    cls = getattr(module, class_name, None)
    if isinstance(cls, type):
        _CLASS_CACHE[fqn] = cls
        return cls
    return None


def _from_json(hint: Any, value: Any) -> Any:  # noqa: PLR0911
    """Recursively convert JSON values back to varswap types."""
    if value is None:
        return None
    if get_origin(hint) in (Union, types.UnionType):
        # X | None: decode against X
        members = [a for a in get_args(hint) if a is not type(None)]
        if len(members) == 1:
            hint = members[0]
    if isinstance(value, dict):
        if "__type__" in value:
            cls = _resolve_class(value["__type__"])
            if cls is None or not dataclasses.is_dataclass(cls):
                msg = f"Refusing to decode unknown type {value['__type__']!r}"
                raise TypeError(msg)
            hints = get_type_hints(cls)
            kwargs: dict[str, Any] = {}
            for field in dataclasses.fields(cls):
                if field.init and field.name in value:
                    kwargs[field.name] = _from_json(hints.get(field.name, Any), value[field.name])
            return cls(**kwargs)
        if "__datetime__" in value:
            return datetime.fromisoformat(value["__datetime__"])
        if "__date__" in value:
            return date.fromisoformat(value["__date__"])
        if "__frozenset__" in value:
            return frozenset(_from_json(Any, x) for x in value["__frozenset__"])
        return {k: _from_json(Any, v) for k, v in value.items()}
    if isinstance(hint, type) and issubclass(hint, Enum):
        return hint(value)
    if hint is float and isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, list):
        return tuple(_from_json(Any, x) for x in value)
    return value


class VarSwapJSONTypeConverter(JSONTypeConverter):
    """Turn tagged JSON values back into varswap types."""

    def to_typed_value(self, hint: type, value: Any) -> Any:
        if isinstance(value, dict) and (
            "__type__" in value or "__datetime__" in value or "__date__" in value
        ):
            return _from_json(hint, value)
        return JSONTypeConverter.Unhandled


# ---------------------------------------------------------------------------
# Wire up
# ---------------------------------------------------------------------------


class VarSwapPayloadConverter(CompositePayloadConverter):
    """Payload converter with varswap-aware JSON handling."""

    def __init__(self) -> None:
        json_converter = JSONPlainPayloadConverter(
            encoder=VarSwapJSONEncoder,
            custom_type_converters=[VarSwapJSONTypeConverter()],
        )
        super().__init__(
            *(
                c
                for c in DefaultPayloadConverter.default_encoding_payload_converters
                if not isinstance(c, JSONPlainPayloadConverter)
            ),
            json_converter,
        )


VARSWAP_DATA_CONVERTER = DataConverter(
    payload_converter_class=VarSwapPayloadConverter,
)
