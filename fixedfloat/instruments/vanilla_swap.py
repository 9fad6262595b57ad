"""Fixed-rate vs Ibor swap."""

from __future__ import annotations

from QuantLib import Settings, as_floating_rate_coupon

from fixedfloat.cashflows.legs import Leg, available_amount, ibor_leg
from fixedfloat.instruments.fixed_vs_floating_swap import (
    FixedVsFloatingSwap,
    FixedVsFloatingSwapArguments,
)


class VanillaSwap(FixedVsFloatingSwap):
    """
    Plain-vanilla swap: fixed coupons against Ibor coupons fixed in advance.

    The floating coupon amounts passed to engines are only filled in for
    coupons fixing on or before the evaluation date, and stay ``None`` when
    a past fixing is missing from the index history. Later coupons depend
    on the forecasting curve and are left as ``None``.
    """

    def _build_floating_leg(self) -> Leg:
        return ibor_leg(
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
        args.floating_fixing_dates = [c.fixingDate() for c in coupons]
        args.floating_pay_dates = [c.date() for c in coupons]
        args.floating_accrual_times = [c.accrualPeriod() for c in coupons]
        args.floating_spreads = [c.spread() for c in coupons]
        args.floating_coupons = [
            available_amount(c) if c.fixingDate() <= today else None for c in coupons
        ]


__all__ = ["VanillaSwap"]
