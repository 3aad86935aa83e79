"""Path parameter helpers."""

SQLITE_MAX_INT = 2**63 - 1


def parse_id(raw: str) -> int:
    """
    Lenient integer parse for ``:id`` path segments.

    Anything that is not a plain base-10 integer becomes 0, which never
    matches a stored record, so lookups report "not found" instead of a
    validation error.
    """
    value = raw.strip()
    if value[:1] in ("+", "-"):
        digits = value[1:]
    else:
        digits = value
    if not digits.isascii() or not digits.isdigit():
        return 0
    parsed = int(value)
    # SQLite INTEGER 범위 초과
    if abs(parsed) > SQLITE_MAX_INT:
        return 0
    return parsed
