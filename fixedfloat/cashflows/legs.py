"""Builders for the coupon legs of fixed-vs-floating swaps."""

from __future__ import annotations

import logging
from typing import Optional, cast

from QuantLib import (
    CashFlow,
    DayCounter,
    FixedRateLeg,
    FloatingRateCoupon,
    IborIndex,
    IborLeg,
    OvernightIndex,
    OvernightLeg,
    Schedule,
)

logger = logging.getLogger(__name__)

Leg = tuple[CashFlow, ...]


def _periods(schedule: Schedule) -> int:
    return len(schedule.dates()) - 1


def fixed_rate_leg(
    schedule: Schedule,
    nominal: float,
    rate: float,
    day_count: DayCounter,
    payment_convention: int,
) -> Leg:
    """Fixed coupons paying ``nominal * rate * accrual`` on every period."""
    if _periods(schedule) <= 0:
        return cast(Leg, tuple())
    # first 4 arguments are only exposed positionally
    leg = FixedRateLeg(
        schedule,
        day_count,
        [nominal],
        [rate],
        paymentAdjustment=payment_convention,
    )
    return tuple(leg)


def ibor_leg(
    schedule: Schedule,
    nominal: float,
    index: IborIndex,
    spread: float,
    day_count: DayCounter,
    payment_convention: int,
) -> Leg:
    """
    Ibor coupons fixed in advance.

    Each coupon fixes ``index.fixingDays()`` business days before the start
    of its accrual period. Past fixings are read from the index history,
    future ones are forecast off the index forwarding curve.
    """
    if _periods(schedule) <= 0:
        return cast(Leg, tuple())
    leg = IborLeg(
        [nominal],
        schedule,
        index,
        paymentDayCounter=day_count,
        paymentConvention=payment_convention,
        spreads=[spread],
    )
    return tuple(leg)


def overnight_leg(
    schedule: Schedule,
    nominal: float,
    index: OvernightIndex,
    spread: float,
    day_count: DayCounter,
    payment_convention: int,
) -> Leg:
    """Coupons compounding daily overnight fixings over each accrual period."""
    if _periods(schedule) <= 0:
        return cast(Leg, tuple())
    leg = OvernightLeg(
        [nominal],
        schedule,
        index,
        paymentDayCounter=day_count,
        paymentConvention=payment_convention,
        spreads=[spread],
    )
    return tuple(leg)


def available_amount(coupon: FloatingRateCoupon) -> Optional[float]:
    """
    Amount of ``coupon``, or ``None`` if its fixings cannot be obtained.

    A past fixing missing from the index history makes QuantLib raise
    ``RuntimeError``; that is reported as ``None`` and logged.
    """
    try:
        return coupon.amount()
    except RuntimeError as exc:
        logger.debug(
            "amount of coupon paid %s unavailable: %s", coupon.date().ISO(), exc
        )
        return None


__all__ = [
    "Leg",
    "available_amount",
    "fixed_rate_leg",
    "ibor_leg",
    "overnight_leg",
]
