from pbcurve.common.enums import BoundaryErrorType, CurveErrorKind
from pbcurve.common.math import U128_MAX


class BoundaryError(Exception):
    """
    Failure surfaced across the string boundary.
    'error_type' says which call failed, 'kind' is the curve error kind when the curve itself failed
    (None for malformed decimal input).
    """

    def __init__(self, message: str, error_type: BoundaryErrorType, kind: CurveErrorKind = None):
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.kind = kind

    def to_dict(self) -> dict:
        return {
            "error_type": str(self.error_type),
            "kind": str(self.kind) if self.kind else None,
            "message": self.message,
        }


def parse_u128_dec(text: str, error_type: BoundaryErrorType) -> int:
    """
    Parses a plain base-10 string (ASCII digits only, no sign, whitespace or underscores) into an int
    in the unsigned 128-bit range.
    """
    if not isinstance(text, str) or not text or not text.isascii() or not text.isdigit():
        raise BoundaryError(f"Invalid u128 decimal: {text}", error_type)
    value = int(text)
    if value > U128_MAX:
        raise BoundaryError(f"Invalid u128 decimal: {text}", error_type)
    return value


def u128_to_str(value: int) -> str:
    return str(value)


def kind_message(kind: CurveErrorKind) -> str:
    return f"CurveError::{kind}"
