from pbcurve.common.errors import InvalidConfigError


U128_MAX = (1 << 128) - 1


def is_u128(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= U128_MAX


def checked_add(a: int, b: int, what: str = "addition") -> int:
    """a + b, raising InvalidConfigError if the result leaves the unsigned 128-bit range."""
    result = a + b
    if result > U128_MAX:
        raise InvalidConfigError(f"{what} overflows u128")
    return result


def checked_mul(a: int, b: int, what: str = "multiplication") -> int:
    """a * b, raising InvalidConfigError if the result leaves the unsigned 128-bit range."""
    result = a * b
    if result > U128_MAX:
        raise InvalidConfigError(f"{what} overflows u128")
    return result


def saturating_add(a: int, b: int) -> int:
    return min(a + b, U128_MAX)


def saturating_mul(a: int, b: int) -> int:
    return min(a * b, U128_MAX)


def saturating_sub(a: int, b: int) -> int:
    return max(a - b, 0)
