import logging
from typing import List, Optional

from pydantic import BaseModel, Field

from flask import jsonify
from flask_openapi3 import Info, Tag
from flask_openapi3 import OpenAPI

from pbcurve.boundary.codec import BoundaryError, parse_u128_dec
from pbcurve.boundary.string_curve import StringCurve
from pbcurve.common.enums import BoundaryErrorType
from pbcurve.common.model import CurveConfig
from pbcurve.validation.cpmm_validator import CpmmCurveValidator


logger = logging.getLogger(__name__)

info = Info(title="Virtual Reserve Curve API", version="1.0.0")
app = OpenAPI(__name__, info=info)


class CurveConfigBody(BaseModel):
    total_supply: str = Field(description="Total token units, decimal string")
    sell_amount: str = Field(description="Token units sold over the curve, decimal string")
    vt: str = Field(description="Virtual token reserve, decimal string")
    mc_target_sats: str = Field(description="Final fully diluted market cap target in sats, decimal string")

    def build(self) -> StringCurve:
        return StringCurve(self.total_supply, self.sell_amount, self.vt, self.mc_target_sats)


class StepRequest(BaseModel):
    curve: CurveConfigBody
    step: str = Field(description="Tokens already sold, decimal string")


class AssetOutRequest(BaseModel):
    curve: CurveConfigBody
    step: str = Field(description="Tokens already sold, decimal string")
    quote_in: str = Field(description="Payment in sats, decimal string")


class QuoteInRequest(BaseModel):
    curve: CurveConfigBody
    step: str = Field(description="Tokens already sold, decimal string")
    asset_out: str = Field(description="Tokens wanted, decimal string")


class SimulateRequest(BaseModel):
    curve: CurveConfigBody
    mints: List[str] = Field(description="Payments in sats applied in order from step 0, decimal strings")


class ValidateRequest(BaseModel):
    curve: CurveConfigBody
    mints: Optional[List[str]] = Field(None, description="Scenario payments, decimal strings")


curve_state_tag = Tag(
    name="Curve State",
    description="Reserve state, progress and aggregate figures of a curve",
)
curve_trade_tag = Tag(
    name="Curve Trade",
    description="Quotes and batch simulation of buys along a curve",
)


@app.errorhandler(BoundaryError)
def handle_boundary_error(e: BoundaryError):
    logger.warning("%s: %s", e.error_type, e.message)
    return jsonify(e.to_dict()), 400


@app.post("/curve/summary", summary="Curve Summary", tags=[curve_state_tag])
def summary(body: CurveConfigBody):
    """
    Return the derived curve parameters, the total raise and the final market cap.
    """
    curve = body.build()
    result = curve.parameters()
    result["total_raise_sats"] = curve.total_raise_sats()
    result["final_mc_sats"] = curve.final_mc_sats()
    return jsonify(result)


@app.post("/curve/snapshot", summary="Curve Snapshot", tags=[curve_state_tag])
def snapshot(body: StepRequest):
    """
    Return x, y at the given step. The price is x / y sats per token base unit.
    """
    return jsonify(body.curve.build().snapshot(body.step))


@app.post("/curve/progress", summary="Curve Progress", tags=[curve_state_tag])
def progress(body: StepRequest):
    return jsonify({"progress": body.curve.build().progress_at_step(body.step)})


@app.post("/curve/cumulative-quote", summary="Cumulative Quote", tags=[curve_state_tag])
def cumulative_quote(body: StepRequest):
    """
    Return the sats needed to move the curve from step 0 to the given step.
    """
    return jsonify({"quote": body.curve.build().cumulative_quote_to_step(body.step)})


@app.post("/curve/quote/asset-out", summary="Asset Out Given Quote In", tags=[curve_trade_tag])
def asset_out(body: AssetOutRequest):
    curve = body.curve.build()
    return jsonify({"asset_out": curve.asset_out_given_quote_in(body.step, body.quote_in)})


@app.post("/curve/quote/quote-in", summary="Quote In Given Asset Out", tags=[curve_trade_tag])
def quote_in(body: QuoteInRequest):
    curve = body.curve.build()
    return jsonify({"quote_in": curve.quote_in_given_asset_out(body.step, body.asset_out)})


@app.post("/curve/simulate", summary="Simulate Mints", tags=[curve_trade_tag])
def simulate(body: SimulateRequest):
    """
    Apply every payment in order from step 0. Fails as a whole if any single buy fails.
    """
    return jsonify({"results": body.curve.build().simulate_mints(body.mints)})


@app.post("/curve/validate", summary="Validate Curve Config", tags=[curve_state_tag])
def validate(body: ValidateRequest):
    """
    Run the parameter, boundary and scenario checks on a config and return the report.
    """
    error_type = BoundaryErrorType.CREATE
    cfg = body.curve
    config = CurveConfig(
        total_supply=parse_u128_dec(cfg.total_supply, error_type),
        sell_amount=parse_u128_dec(cfg.sell_amount, error_type),
        vt=parse_u128_dec(cfg.vt, error_type),
        mc_target_sats=parse_u128_dec(cfg.mc_target_sats, error_type),
    )
    amounts = None
    if body.mints is not None:
        amounts = [parse_u128_dec(m, BoundaryErrorType.SIMULATE_MINTS) for m in body.mints]
    return jsonify(CpmmCurveValidator.run_all_validations(config, amounts))
