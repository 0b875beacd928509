from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

from pbcurve.common.errors import CurveError
from pbcurve.common.math import is_u128
from pbcurve.common.model import CurveConfig
from pbcurve.curves.single.virtual_cpmm import VirtualReserveCurve


DEFAULT_SCENARIO = (1_000_000, 5_000_000, 25_000_000)
MC_DEVIATION_WARN = Decimal("0.01")


class CpmmCurveValidator:
    """
    Specialized validator for the VirtualReserveCurve.
    Performs:
      1) Param checks (positivity, sell_amount vs total_supply, construction)
      2) Boundary tests (snapshot at both ends, invariant, mint at the last step)
      3) Scenario tests (a batch of buys from step 0)

    Each step returns a dict with:
      {
        "errors": [str...],
        "warnings": [str...],
        "info": {...}
      }
    and 'run_all_validations' aggregates them into a single result.
    """

    @staticmethod
    def validate_params(config: CurveConfig) -> Dict[str, Any]:
        """
        Checks that the config's parameters are valid:
          - every field is a positive u128
          - sell_amount relative to total_supply (warnings only, it is not enforced)
          - the curve can actually be built from it
        """
        errors: List[str] = []
        warnings: List[str] = []
        info: Dict[str, Any] = {}

        fields = {
            "total_supply": config.total_supply,
            "sell_amount": config.sell_amount,
            "vt": config.vt,
            "mc_target_sats": config.mc_target_sats,
        }
        all_valid = True
        for name, value in fields.items():
            if not is_u128(value) or value == 0:
                errors.append(f"CpmmCurve: '{name}' must be a positive u128 integer.")
                all_valid = False

        if all_valid:
            if config.sell_amount > config.total_supply:
                warnings.append("CpmmCurve: 'sell_amount' exceeds 'total_supply'.")
            elif config.sell_amount < config.total_supply:
                warnings.append(
                    "CpmmCurve: 'sell_amount' < 'total_supply'; progress_at_step never reaches 100."
                )

            try:
                curve = VirtualReserveCurve(config)
                info["derived"] = {"y0": str(curve.y0), "x0": str(curve.x0), "k": str(curve.k)}
            except CurveError as e:
                errors.append(f"CpmmCurve: construction failed: {e}")

        info["param_summary"] = {name: str(value) for name, value in fields.items()}

        return {
            "errors": errors,
            "warnings": warnings,
            "info": info
        }

    @staticmethod
    def boundary_tests(curve: VirtualReserveCurve) -> Dict[str, Any]:
        """
        Calls a few boundary conditions on the curve:
          - snapshot(0) and snapshot(max_step), with x * y <= k at both
          - mint(max_step, 1) must succeed and yield zero tokens
        """
        errors: List[str] = []
        warnings: List[str] = []
        info: Dict[str, Any] = {}

        for step in (0, curve.max_step()):
            try:
                snap = curve.snapshot(step)
                if snap.x * snap.y > curve.k:
                    errors.append(f"Invariant broken at step={step}: x * y > k.")
            except CurveError as e:
                errors.append(f"Exception calling snapshot({step}): {e}")

        try:
            trade = curve.mint(curve.max_step(), 1)
            if trade.tokens_out != 0:
                errors.append(f"Mint at the last step returned {trade.tokens_out} tokens, expected 0.")
        except CurveError as e:
            errors.append(f"Exception calling mint at the last step: {e}")

        info["boundary_tests_run"] = True
        return {
            "errors": errors,
            "warnings": warnings,
            "info": info
        }

    @staticmethod
    def scenario_tests(
        curve: VirtualReserveCurve,
        mc_target_sats: int,
        amounts: Sequence[int] = DEFAULT_SCENARIO
    ) -> Dict[str, Any]:
        """
        Runs a batch of buys from step 0 and reports the final step and tokens sold.
        Also compares final_mc_sats with the target the curve was built from.
        """
        errors: List[str] = []
        warnings: List[str] = []
        info: Dict[str, Any] = {}

        try:
            results = curve.simulate_mints(amounts)
            final_step = 0
            if results:
                last = results[-1]
                final_step = min(last.start_step + last.tokens_out, curve.max_step())
            info["final_step_after_scenario"] = str(final_step)
            info["tokens_sold_in_scenario"] = str(sum(r.tokens_out for r in results))
        except CurveError as e:
            errors.append(f"Exception in scenario simulate_mints: {e}")

        try:
            final_mc = curve.final_mc_sats()
            deviation = abs(Decimal(final_mc) - Decimal(mc_target_sats)) / Decimal(mc_target_sats)
            info["final_mc_sats"] = str(final_mc)
            info["final_mc_deviation"] = str(deviation)
            if deviation > MC_DEVIATION_WARN:
                warnings.append(
                    f"final_mc_sats deviates from mc_target_sats by {deviation:.4%} due to rounding."
                )
        except CurveError as e:
            errors.append(f"Exception calling final_mc_sats: {e}")

        return {
            "errors": errors,
            "warnings": warnings,
            "info": info
        }

    @staticmethod
    def run_all_validations(config: CurveConfig, amounts: Optional[Sequence[int]] = None) -> Dict[str, Any]:
        """
        Aggregates:
          - param check
          - boundary tests
          - scenario tests
        Boundary and scenario tests only run when the curve can be built.
        Returns a dict with keys: errors, warnings, info
        """
        results = {
            "errors": [],
            "warnings": [],
            "info": {}
        }

        # 1) Param checks
        param_check = CpmmCurveValidator.validate_params(config)
        results["errors"].extend(param_check["errors"])
        results["warnings"].extend(param_check["warnings"])
        results["info"].update(param_check["info"])
        if param_check["errors"]:
            return results

        curve = VirtualReserveCurve(config)

        # 2) Boundary tests
        boundary = CpmmCurveValidator.boundary_tests(curve)
        results["errors"].extend(boundary["errors"])
        results["warnings"].extend(boundary["warnings"])
        results["info"].update(boundary["info"])

        # 3) Scenario tests
        scenario = CpmmCurveValidator.scenario_tests(
            curve,
            config.mc_target_sats,
            amounts if amounts is not None else DEFAULT_SCENARIO
        )
        results["errors"].extend(scenario["errors"])
        results["warnings"].extend(scenario["warnings"])
        results["info"].update(scenario["info"])

        return results
