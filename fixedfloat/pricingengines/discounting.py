"""Engines valuing swap legs by discounting their cash flows on one curve."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from QuantLib import Date, YieldTermStructureHandle, as_coupon

from fixedfloat.errors import PricingError
from fixedfloat.instruments.fixed_vs_floating_swap import (
    BASIS_POINT,
    FixedVsFloatingSwapEngine,
    implied_fair_rate,
    implied_fair_spread,
)
from fixedfloat.instruments.swap import SwapArguments, SwapEngine, SwapResults

logger = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class _LegDiscounter:
    """
    Discounts every leg of a swap and writes leg NPV/BPS into the results.

    Cash flows paid before ``settlement_date`` are dropped; flows paid on it
    are kept only if ``include_settlement_date_flows``. Values are expressed
    as of ``npv_date``. Both dates default to the curve reference date.
    """

    discount_curve: YieldTermStructureHandle
    include_settlement_date_flows: bool = False
    settlement_date: Optional[Date] = None
    npv_date: Optional[Date] = None

    def _counts(self, pay_date: Date, settlement: Date) -> bool:
        if pay_date == settlement:
            return self.include_settlement_date_flows
        return pay_date > settlement

    def __call__(self, args: SwapArguments, results: SwapResults) -> None:
        curve = self.discount_curve
        if not curve:
            raise PricingError("discounting term structure handle is empty")

        reference = curve.referenceDate()
        settlement = reference if self.settlement_date is None else self.settlement_date
        npv_date = reference if self.npv_date is None else self.npv_date
        npv_date_discount = curve.discount(npv_date)

        results.leg_npv = []
        results.leg_bps = []
        for leg, sign in zip(args.legs, args.payer):
            npv = bps = 0.0
            for cf in leg:
                pay_date = cf.date()
                if not self._counts(pay_date, settlement):
                    continue
                df = curve.discount(pay_date)
                npv += cf.amount() * df
                coupon = as_coupon(cf)
                if coupon is not None:
                    bps += coupon.nominal() * coupon.accrualPeriod() * df
            results.leg_npv.append(sign * npv / npv_date_discount)
            results.leg_bps.append(sign * bps * BASIS_POINT / npv_date_discount)

        results.value = sum(results.leg_npv)
        results.valuation_date = npv_date
        results.additional_results["npv_date_discount"] = npv_date_discount
        logger.debug(
            "discounted %d legs as of %s: NPV %.6f",
            len(args.legs),
            npv_date.ISO(),
            results.value,
        )


class DiscountingSwapEngine(SwapEngine):
    """Discounting engine for generic swaps; reports NPV and leg NPV/BPS."""

    def __init__(
        self,
        discount_curve: YieldTermStructureHandle,
        *,
        include_settlement_date_flows: bool = False,
        settlement_date: Optional[Date] = None,
        npv_date: Optional[Date] = None,
    ):
        super().__init__()
        self._discount = _LegDiscounter(
            discount_curve=discount_curve,
            include_settlement_date_flows=include_settlement_date_flows,
            settlement_date=settlement_date,
            npv_date=npv_date,
        )

    @property
    def discount_curve(self) -> YieldTermStructureHandle:
        return self._discount.discount_curve

    def observables(self) -> tuple[YieldTermStructureHandle]:
        return (self.discount_curve,)

    def calculate(self) -> None:
        self._discount(self.arguments, self.results)


class DiscountingFixedVsFloatingSwapEngine(FixedVsFloatingSwapEngine):
    """
    Discounting engine for fixed-vs-floating swaps.

    On top of the leg figures it provides the fair rate and fair spread,
    both consistent with the curve used for discounting.
    """

    def __init__(
        self,
        discount_curve: YieldTermStructureHandle,
        *,
        include_settlement_date_flows: bool = False,
        settlement_date: Optional[Date] = None,
        npv_date: Optional[Date] = None,
    ):
        super().__init__()
        self._discount = _LegDiscounter(
            discount_curve=discount_curve,
            include_settlement_date_flows=include_settlement_date_flows,
            settlement_date=settlement_date,
            npv_date=npv_date,
        )

    @property
    def discount_curve(self) -> YieldTermStructureHandle:
        return self._discount.discount_curve

    def observables(self) -> tuple[YieldTermStructureHandle]:
        return (self.discount_curve,)

    def calculate(self) -> None:
        args, results = self.arguments, self.results
        self._discount(args, results)

        fixed_bps, floating_bps = results.leg_bps
        floating_npv = results.leg_npv[1]
        # spreads are uniform across the coupons of these swaps
        spread = args.floating_spreads[0] if args.floating_spreads else 0.0
        results.fair_rate = implied_fair_rate(floating_npv, fixed_bps)
        results.fair_spread = implied_fair_spread(spread, results.value, floating_bps)


__all__ = ["DiscountingSwapEngine", "DiscountingFixedVsFloatingSwapEngine"]
