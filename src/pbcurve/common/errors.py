from typing import Optional

from pbcurve.common.enums import CurveErrorKind


class CurveError(ValueError):
    """Base class for every failure raised by the curve arithmetic."""
    kind: CurveErrorKind = None

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail
        super().__init__(self.message)

    @property
    def message(self) -> str:
        """Names the kind the same way the boundary adapter does, e.g. CurveError::OutOfRange."""
        base = f"CurveError::{self.kind}"
        return f"{base} ({self.detail})" if self.detail else base


class InvalidConfigError(CurveError):
    kind = CurveErrorKind.INVALID_CONFIG


class OutOfRangeError(CurveError):
    kind = CurveErrorKind.OUT_OF_RANGE


class ZeroInputError(CurveError):
    kind = CurveErrorKind.ZERO_INPUT


class ExceedsPoolError(CurveError):
    kind = CurveErrorKind.EXCEEDS_POOL


_ERRORS_BY_KIND = {
    CurveErrorKind.INVALID_CONFIG: InvalidConfigError,
    CurveErrorKind.OUT_OF_RANGE: OutOfRangeError,
    CurveErrorKind.ZERO_INPUT: ZeroInputError,
    CurveErrorKind.EXCEEDS_POOL: ExceedsPoolError,
}


def error_for_kind(kind: CurveErrorKind, detail: Optional[str] = None) -> CurveError:
    """Builds the exception instance matching 'kind'."""
    return _ERRORS_BY_KIND[kind](detail)
