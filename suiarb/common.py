"""Small shared helpers."""

_U64_LIMIT = 1 << 64


def add(left: int, right: int) -> int:
    """Add two unsigned 64-bit integers, raising on invalid input or overflow."""
    if left < 0 or right < 0:
        raise ValueError("operands must be non-negative")
    result = left + right
    if result >= _U64_LIMIT:
        raise OverflowError("sum exceeds 64-bit range")
    return result