# strapkit/cast.py
from typing import Any

from .exceptions import InvalidCastError

_TRUE_STRINGS = {"true", "1", "yes", "on", "y", "t"}
_FALSE_STRINGS = {"false", "0", "no", "off", "n", "f", ""}


def cast(value: Any, kind: type) -> Any:
    """
    Convert a dynamically set property value to the type a widget stores.

    Property writes can arrive from user code or from client recorded
    modifications (which are always strings), so widgets funnel every write
    through this function.

    :param value: The incoming value.
    :param kind: One of ``bool``, ``int``, ``float``, ``str`` or ``list``.
    :return: The converted value.
    :raises InvalidCastError: If the value cannot be represented as ``kind``.
    """
    if kind is bool:
        return _to_bool(value)
    if kind is int:
        return _to_int(value)
    if kind is float:
        return _to_float(value)
    if kind is str:
        return _to_str(value)
    if kind is list:
        if isinstance(value, (list, tuple)):
            return list(value)
        if value is None:
            return []
        return [value]
    raise InvalidCastError(f"Unsupported cast target {kind!r}")


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise InvalidCastError(f"Cannot cast {value!r} to bool")


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise InvalidCastError(f"Cannot cast non-integral {value!r} to int")
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise InvalidCastError(f"Cannot cast {value!r} to int")


def _to_float(value: Any) -> float:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            pass
    raise InvalidCastError(f"Cannot cast {value!r} to float")


def _to_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    raise InvalidCastError(f"Cannot cast {type(value).__name__} to str")
