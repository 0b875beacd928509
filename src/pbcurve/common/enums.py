from enum import Enum


class CurveErrorKind(Enum):
    INVALID_CONFIG = "InvalidConfig"
    OUT_OF_RANGE = "OutOfRange"
    ZERO_INPUT = "ZeroInput"
    EXCEEDS_POOL = "ExceedsPool"

    @classmethod
    def from_str(cls, kind_str: str) -> "CurveErrorKind":
        """
        Convert a string to a CurveErrorKind enum.
        Accepts either the enum name (OUT_OF_RANGE) or the kind label (OutOfRange).
        :param kind_str: str
        :return: CurveErrorKind or NotImplementedError
        """
        for kind in cls:
            if kind_str.upper() == kind.name or kind_str == kind.value:
                return kind
        raise NotImplementedError(f"No curve error kind enum for {kind_str}")

    def __str__(self):
        return self.value

    def __repr__(self):
        return self.__str__()


class BoundaryErrorType(Enum):
    CREATE = "CurveCreateError"
    SNAPSHOT = "CurveSnapshotError"
    FINAL_MC = "CurveFinalMcError"
    PROGRESS = "CurveProgressError"
    SIMULATE_MINTS = "CurveSimulateMintsError"
    CUMULATIVE_QUOTE = "CurveCumulativeQuoteError"
    ASSET_OUT = "CurveAssetOutError"
    QUOTE_IN = "CurveQuoteInError"

    @classmethod
    def from_str(cls, type_str: str) -> "BoundaryErrorType":
        for error_type in cls:
            if type_str == error_type.value or type_str.upper() == error_type.name:
                return error_type
        raise NotImplementedError(f"No boundary error type enum for {type_str}")

    def __str__(self):
        return self.value

    def __repr__(self):
        return self.__str__()
