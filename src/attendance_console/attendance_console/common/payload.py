from __future__ import annotations

import re
from typing import Any, Mapping, Optional

from ..core.exceptions import ValidationError

_CAMEL_BOUNDARY = re.compile(r"_([a-z])")


def camel(name: str) -> str:
    """``student_number`` -> ``studentNumber``."""
    return _CAMEL_BOUNDARY.sub(lambda m: m.group(1).upper(), name)


def require_mapping(data: Any, entity: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValidationError(f"{entity} payload must be an object")
    return data


def pick(data: Mapping[str, Any], name: str, *aliases: str, default: Any = None) -> Any:
    """First present key among the snake_case name, its camelCase twin and aliases."""
    for key in (name, camel(name), *aliases):
        if key in data and data[key] is not None:
            return data[key]
    return default


def coerce_int(value) -> tuple[Optional[int], Optional[str]]:
    """Coerce form input to int.

    Returns ``(number, None)`` or ``(None, "number")`` when the value is not
    numeric at all, ``(None, "whole")`` when it is numeric but fractional.
    """
    if isinstance(value, bool) or value is None:
        return None, "number"
    if isinstance(value, int):
        return value, None
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return None, "number"
        return (int(value), None) if value.is_integer() else (None, "whole")
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text), None
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None, "number"
        return coerce_int(number)
    return None, "number"


def int_or_raw(value: Any) -> Any:
    """Whole numbers (``"30"``, ``"30.0"``, ``30.0``) become ints; anything else is left for the validators to reject."""
    if isinstance(value, bool):
        return value
    number, _ = coerce_int(value)
    if number is not None:
        return number
    if isinstance(value, str):
        return value.strip() or None
    return value
