"""Fixed-rate vs compounded overnight swap."""

from __future__ import annotations

from QuantLib import Settings, as_floating_rate_coupon

from fixedfloat.cashflows.legs import Leg, available_amount, overnight_leg
from fixedfloat.instruments.fixed_vs_floating_swap import (
    FixedVsFloatingSwap,
    FixedVsFloatingSwapArguments,
)


class OvernightIndexedSwap(FixedVsFloatingSwap):
    """
    Fixed coupons against coupons compounding an overnight index daily.

    ``index`` must be an overnight index (e.g. ESTR, SOFR). A compounded
    coupon is only known once its last overnight fixing is in, which happens
    at the end of its accrual period; until then, or while some of its
    fixings are missing from the index history, its amount is left ``None``
    in the engine arguments.
    """

    def _build_floating_leg(self) -> Leg:
        return overnight_leg(
            self.floating_schedule,
            self.nominal,
            self.index,
            self.spread,
            self.floating_day_count,
            self.payment_convention,
        )

    def _setup_floating_arguments(self, args: FixedVsFloatingSwapArguments) -> None:
        today = Settings.instance().evaluationDate
        coupons = [as_floating_rate_coupon(cf) for cf in self.floating_leg]

        args.floating_reset_dates = [c.accrualStartDate() for c in coupons]
        # compounded coupons fix in arrears, over the whole accrual period
        args.floating_fixing_dates = [c.fixingDate() for c in coupons]
        args.floating_pay_dates = [c.date() for c in coupons]
        args.floating_accrual_times = [c.accrualPeriod() for c in coupons]
        args.floating_spreads = [c.spread() for c in coupons]
        args.floating_coupons = [
            available_amount(c) if c.accrualEndDate() <= today else None
            for c in coupons
        ]


__all__ = ["OvernightIndexedSwap"]
