import pytest

from pbcurve.boundary.codec import BoundaryError, kind_message, parse_u128_dec, u128_to_str
from pbcurve.boundary.string_curve import StringCurve
from pbcurve.common.enums import BoundaryErrorType, CurveErrorKind
from pbcurve.common.errors import CurveError
from pbcurve.common.math import U128_MAX


@pytest.fixture
def launch_curve():
    return StringCurve("1000000000", "800000000", "30000000", "3000000000")


@pytest.fixture
def small_curve():
    return StringCurve("1000", "800", "200", "1000000000000")


class TestCodec:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("0", 0),
            ("42", 42),
            ("007", 7),
            (str(U128_MAX), U128_MAX),
        ],
    )
    def test_parse_valid(self, text, expected):
        assert parse_u128_dec(text, BoundaryErrorType.SNAPSHOT) == expected

    @pytest.mark.parametrize(
        "text",
        ["", "-1", "+1", " 1", "1 ", "1_000", "1.0", "abc", "١٢", str(U128_MAX + 1), 5, None],
    )
    def test_parse_invalid(self, text):
        with pytest.raises(BoundaryError) as exc_info:
            parse_u128_dec(text, BoundaryErrorType.SNAPSHOT)
        err = exc_info.value
        assert err.message == f"Invalid u128 decimal: {text}"
        assert err.error_type == BoundaryErrorType.SNAPSHOT
        assert err.kind is None

    def test_u128_to_str(self):
        assert u128_to_str(U128_MAX) == "340282366920938463463374607431768211455"

    def test_kind_message(self):
        assert kind_message(CurveErrorKind.EXCEEDS_POOL) == "CurveError::ExceedsPool"

    def test_to_dict(self):
        err = BoundaryError("CurveError::OutOfRange", BoundaryErrorType.SNAPSHOT, CurveErrorKind.OUT_OF_RANGE)
        assert err.to_dict() == {
            "error_type": "CurveSnapshotError",
            "kind": "OutOfRange",
            "message": "CurveError::OutOfRange",
        }


class TestStringCurve:
    def test_parameters(self, launch_curve):
        assert launch_curve.parameters() == {
            "total_supply": "1000000000",
            "sell_amount": "800000000",
            "vt": "30000000",
            "x0": "3253012",
            "y0": "830000000",
            "k": "2699999960000000",
        }

    def test_create_invalid_config(self):
        with pytest.raises(BoundaryError) as exc_info:
            StringCurve("1000", "0", "200", "1000000000000")
        err = exc_info.value
        assert err.message == "CurveError::InvalidConfig"
        assert err.error_type == BoundaryErrorType.CREATE
        assert err.kind == CurveErrorKind.INVALID_CONFIG
        assert isinstance(err.__cause__, CurveError)

    def test_create_bad_decimal(self):
        with pytest.raises(BoundaryError) as exc_info:
            StringCurve("1e9", "800", "200", "1000000000000")
        assert exc_info.value.message == "Invalid u128 decimal: 1e9"
        assert exc_info.value.error_type == BoundaryErrorType.CREATE

    def test_snapshot(self, small_curve):
        assert small_curve.snapshot("0") == {"step": "0", "x": "40000000000", "y": "1000"}

    def test_snapshot_out_of_range(self, small_curve):
        with pytest.raises(BoundaryError) as exc_info:
            small_curve.snapshot("801")
        assert exc_info.value.message == "CurveError::OutOfRange"
        assert exc_info.value.error_type == BoundaryErrorType.SNAPSHOT

    def test_aggregates(self, launch_curve):
        assert launch_curve.total_raise_sats() == "86746986"
        assert launch_curve.final_mc_sats() == "2000000000"
        assert launch_curve.progress_at_step("800000000") == "80"

    def test_quotes(self, small_curve):
        assert small_curve.asset_out_given_quote_in("0", "40000000000") == "500"
        assert small_curve.quote_in_given_asset_out("0", "500") == "39840319362"
        assert small_curve.cumulative_quote_to_step("500") == "40000000000"

    def test_quote_in_exceeds_pool(self, small_curve):
        with pytest.raises(BoundaryError) as exc_info:
            small_curve.quote_in_given_asset_out("500", "301")
        assert exc_info.value.message == "CurveError::ExceedsPool"
        assert exc_info.value.error_type == BoundaryErrorType.QUOTE_IN

    def test_asset_out_zero_input(self, small_curve):
        with pytest.raises(BoundaryError) as exc_info:
            small_curve.asset_out_given_quote_in("0", "0")
        assert exc_info.value.kind == CurveErrorKind.ZERO_INPUT
        assert exc_info.value.error_type == BoundaryErrorType.ASSET_OUT

    def test_simulate_mints(self, small_curve):
        assert small_curve.simulate_mints(["40000000000", "1000000000000000", "5"]) == [
            {"start_step": "0", "tokens_out": "500"},
            {"start_step": "500", "tokens_out": "300"},
            {"start_step": "800", "tokens_out": "0"},
        ]

    def test_simulate_mints_matches_core(self, launch_curve):
        amounts = [1_000_000, 2_500_000, 7_000_000]
        expected = launch_curve.inner.simulate_mints(amounts)
        results = launch_curve.simulate_mints([str(a) for a in amounts])
        assert [(int(r["start_step"]), int(r["tokens_out"])) for r in results] == [
            (r.start_step, r.tokens_out) for r in expected
        ]

    def test_simulate_mints_all_or_nothing(self, small_curve):
        with pytest.raises(BoundaryError) as exc_info:
            small_curve.simulate_mints(["100", "0", "100"])
        assert exc_info.value.message == "CurveError::ZeroInput"
        assert exc_info.value.error_type == BoundaryErrorType.SIMULATE_MINTS

    def test_simulate_mints_bad_decimal(self, small_curve):
        with pytest.raises(BoundaryError) as exc_info:
            small_curve.simulate_mints(["100", "-5"])
        assert exc_info.value.message == "Invalid u128 decimal: -5"
