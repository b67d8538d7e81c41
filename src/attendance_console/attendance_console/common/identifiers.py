from __future__ import annotations


def canonical_id(value) -> str:
    """String form used whenever two identifiers are compared.

    Identifiers arrive as ints, strings or floats coming out of spreadsheets
    (``7.0``); integral floats collapse to their int spelling.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def same_id(left, right) -> bool:
    if left is None or right is None:
        return False
    return canonical_id(left) == canonical_id(right)
