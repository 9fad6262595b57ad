"""Fixed-rate vs floating-rate swap and its engine interface."""

from __future__ import annotations

import logging
from abc import abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from pandas import DataFrame, option_context
from QuantLib import (
    Date,
    DayCounter,
    IborIndex,
    Schedule,
    as_coupon,
)

from fixedfloat.cashflows.legs import Leg, fixed_rate_leg
from fixedfloat.errors import ArgumentTypeMismatch, InvalidArguments
from fixedfloat.instruments.swap import Swap, SwapArguments, SwapResults, SwapType
from fixedfloat.pricingengines._engine import (
    EngineArguments,
    EngineResults,
    GenericEngine,
)

logger = logging.getLogger(__name__)

BASIS_POINT = 1.0e-4

# sensitivities at or below this are treated as zero
_DEGENERATE_BPS = 1.0e-12


def _degenerate(bps: Optional[float]) -> bool:
    return bps is None or abs(bps) <= _DEGENERATE_BPS


def implied_fair_rate(
    floating_npv: float, fixed_bps: Optional[float]
) -> Optional[float]:
    """
    Fixed rate zeroing the swap NPV with the floating leg held as is.

    Leg figures are signed (paid legs negative), so the fixed leg is worth
    ``rate * fixed_bps / 1bp`` and the swap is flat when that offsets
    ``floating_npv``. This is ``fixed_rate - npv / (fixed_bps / 1bp)``
    rewritten without the contractual rate. Returns ``None`` for a
    degenerate sensitivity.
    """
    if _degenerate(fixed_bps):
        logger.debug("fixed-leg BPS %r is degenerate; fair rate undefined", fixed_bps)
        return None
    return -floating_npv / (fixed_bps / BASIS_POINT)


def implied_fair_spread(
    spread: float, npv: float, floating_bps: Optional[float]
) -> Optional[float]:
    """Floating spread zeroing the swap NPV with the fixed leg held as is."""
    if _degenerate(floating_bps):
        logger.debug(
            "floating-leg BPS %r is degenerate; fair spread undefined", floating_bps
        )
        return None
    return spread - npv / (floating_bps / BASIS_POINT)


@dataclass
class FixedVsFloatingSwapArguments(SwapArguments):
    """
    Flat snapshot of a fixed-vs-floating swap for an engine.

    Sequences belonging to one leg run in parallel, one entry per coupon.
    ``floating_coupons`` holds ``None`` where the amount cannot be known yet.
    """

    type: SwapType = SwapType.RECEIVER
    nominal: Optional[float] = None

    fixed_reset_dates: list[Date] = field(default_factory=list)
    fixed_pay_dates: list[Date] = field(default_factory=list)
    fixed_coupons: list[float] = field(default_factory=list)

    floating_accrual_times: list[float] = field(default_factory=list)
    floating_reset_dates: list[Date] = field(default_factory=list)
    floating_fixing_dates: list[Date] = field(default_factory=list)
    floating_pay_dates: list[Date] = field(default_factory=list)
    floating_spreads: list[float] = field(default_factory=list)
    floating_coupons: list[Optional[float]] = field(default_factory=list)

    def validate(self) -> None:
        super().validate()
        if self.nominal is None:
            raise InvalidArguments("nominal null or not set")
        fixed = {
            "fixed_reset_dates": len(self.fixed_reset_dates),
            "fixed_pay_dates": len(self.fixed_pay_dates),
            "fixed_coupons": len(self.fixed_coupons),
        }
        floating = {
            "floating_accrual_times": len(self.floating_accrual_times),
            "floating_reset_dates": len(self.floating_reset_dates),
            "floating_fixing_dates": len(self.floating_fixing_dates),
            "floating_pay_dates": len(self.floating_pay_dates),
            "floating_spreads": len(self.floating_spreads),
            "floating_coupons": len(self.floating_coupons),
        }
        for leg, sizes in (("fixed", fixed), ("floating", floating)):
            if len(set(sizes.values())) > 1:
                raise InvalidArguments(
                    f"{leg}-leg sequences differ in size: {sizes}"
                )


@dataclass
class FixedVsFloatingSwapResults(SwapResults):
    fair_rate: Optional[float] = None
    fair_spread: Optional[float] = None

    def reset(self) -> None:
        self.fair_rate = None
        self.fair_spread = None
        super().reset()


class FixedVsFloatingSwapEngine(
    GenericEngine[FixedVsFloatingSwapArguments, FixedVsFloatingSwapResults]
):
    """Base for engines pricing :class:`FixedVsFloatingSwap` instruments."""

    arguments_type = FixedVsFloatingSwapArguments
    results_type = FixedVsFloatingSwapResults


class FixedVsFloatingSwap(Swap):
    """
    Swap exchanging fixed coupons against floating-rate coupons.

    Leg 0 is the fixed leg, leg 1 the floating leg. A ``PAYER`` swap pays
    the fixed leg and receives the floating one; a ``RECEIVER`` swap does
    the opposite.

    If no payment convention is given, the one of the floating schedule is
    used for both legs.

    Subclasses choose the floating-rate family: they build the floating leg
    in :meth:`_build_floating_leg` and describe its coupons to engines in
    :meth:`_setup_floating_arguments`.

    Fair rate and fair spread are read from the engine results only; with an
    engine that does not provide them both stay ``None``.
    """

    def __init__(
        self,
        swap_type: SwapType,
        nominal: float,
        fixed_schedule: Schedule,
        fixed_rate: float,
        fixed_day_count: DayCounter,
        floating_schedule: Schedule,
        index: IborIndex,
        spread: float,
        floating_day_count: DayCounter,
        payment_convention: Optional[int] = None,
    ):
        self._type = SwapType(swap_type)
        self._nominal = nominal
        self._fixed_schedule = fixed_schedule
        self._fixed_rate = fixed_rate
        self._fixed_day_count = fixed_day_count
        self._floating_schedule = floating_schedule
        self._index = index
        self._spread = spread
        self._floating_day_count = floating_day_count
        if payment_convention is None:
            payment_convention = floating_schedule.businessDayConvention()
        self._payment_convention = payment_convention

        fixed = fixed_rate_leg(
            fixed_schedule, nominal, fixed_rate, fixed_day_count, payment_convention
        )
        floating = self._build_floating_leg()
        pays_fixed = self._type is SwapType.PAYER
        super().__init__([fixed, floating], [pays_fixed, not pays_fixed])

        self._fair_rate: Optional[float] = None
        self._fair_spread: Optional[float] = None
        self.register_with(index)

    # ---------- floating-family hooks ----------
    @abstractmethod
    def _build_floating_leg(self) -> Leg:
        """Build the floating coupons from the swap terms."""
        raise NotImplementedError

    @abstractmethod
    def _setup_floating_arguments(self, args: FixedVsFloatingSwapArguments) -> None:
        """Fill the floating-leg sequences of ``args``."""
        raise NotImplementedError

    # ---------- inspectors ----------
    @property
    def type(self) -> SwapType:
        return self._type

    @property
    def nominal(self) -> float:
        return self._nominal

    @property
    def fixed_schedule(self) -> Schedule:
        return self._fixed_schedule

    @property
    def fixed_rate(self) -> float:
        return self._fixed_rate

    @property
    def fixed_day_count(self) -> DayCounter:
        return self._fixed_day_count

    @property
    def floating_schedule(self) -> Schedule:
        return self._floating_schedule

    @property
    def index(self) -> IborIndex:
        return self._index

    @property
    def spread(self) -> float:
        return self._spread

    @property
    def floating_day_count(self) -> DayCounter:
        return self._floating_day_count

    @property
    def payment_convention(self) -> int:
        return self._payment_convention

    @property
    def fixed_leg(self) -> Leg:
        return self.leg(0)

    @property
    def floating_leg(self) -> Leg:
        return self.leg(1)

    # ---------- results ----------
    def fixed_leg_bps(self) -> float:
        return self.leg_bps(0)

    def fixed_leg_npv(self) -> float:
        return self.leg_npv(0)

    def fair_rate(self) -> Optional[float]:
        """Fixed rate making the NPV zero, or ``None`` if the engine gave none."""
        self.calculate()
        return self._fair_rate

    def floating_leg_bps(self) -> float:
        return self.leg_bps(1)

    def floating_leg_npv(self) -> float:
        return self.leg_npv(1)

    def fair_spread(self) -> Optional[float]:
        """Floating spread making the NPV zero, or ``None`` if the engine gave none."""
        self.calculate()
        return self._fair_spread

    # ---------- engine interface ----------
    def setup_arguments(self, args: EngineArguments) -> None:
        if not isinstance(args, FixedVsFloatingSwapArguments):
            raise ArgumentTypeMismatch(
                "expected fixed-vs-floating swap arguments, "
                f"got {type(args).__name__}"
            )
        super().setup_arguments(args)
        args.type = self._type
        args.nominal = self._nominal

        coupons = [as_coupon(cf) for cf in self.fixed_leg]
        args.fixed_reset_dates = [c.accrualStartDate() for c in coupons]
        args.fixed_pay_dates = [c.date() for c in coupons]
        args.fixed_coupons = [c.amount() for c in coupons]

        self._setup_floating_arguments(args)

    def fetch_results(self, results: EngineResults) -> None:
        if not isinstance(results, FixedVsFloatingSwapResults):
            raise ArgumentTypeMismatch(
                "expected fixed-vs-floating swap results, "
                f"got {type(results).__name__}"
            )
        super().fetch_results(results)
        self._fair_rate = results.fair_rate
        self._fair_spread = results.fair_spread

    def setup_expired(self) -> None:
        super().setup_expired()
        self._fair_rate = None
        self._fair_spread = None

    # ---------- diagnostics ----------
    def cashflow_table(self) -> DataFrame:
        """Coupon-by-coupon view of the arguments an engine would receive."""
        args = FixedVsFloatingSwapArguments()
        self.setup_arguments(args)
        fixed_sign = float(self._type)
        rows = [
            {
                "Leg": "Fixed",
                "ResetDate": reset.ISO(),
                "FixingDate": None,
                "PayDate": pay.ISO(),
                "AccrualTime": None,
                "Spread": None,
                "Amount": fixed_sign * amount,
            }
            for reset, pay, amount in zip(
                args.fixed_reset_dates, args.fixed_pay_dates, args.fixed_coupons
            )
        ]
        rows += [
            {
                "Leg": "Floating",
                "ResetDate": reset.ISO(),
                "FixingDate": fixing.ISO(),
                "PayDate": pay.ISO(),
                "AccrualTime": accrual,
                "Spread": spread,
                "Amount": None if amount is None else -fixed_sign * amount,
            }
            for accrual, reset, fixing, pay, spread, amount in zip(
                args.floating_accrual_times,
                args.floating_reset_dates,
                args.floating_fixing_dates,
                args.floating_pay_dates,
                args.floating_spreads,
                args.floating_coupons,
            )
        ]
        df = DataFrame(
            data=rows,
            columns=[
                "Leg",
                "ResetDate",
                "FixingDate",
                "PayDate",
                "AccrualTime",
                "Spread",
                "Amount",
            ],
        ).sort_values(["PayDate", "Leg"], kind="stable", ignore_index=True)
        if logger.isEnabledFor(logging.DEBUG):
            with option_context("display.float_format", "{:,.2f}".format):
                logger.debug(
                    "cash flows of %s:\n%s", type(self).__name__, df.to_string()
                )
        return df


__all__ = [
    "BASIS_POINT",
    "implied_fair_rate",
    "implied_fair_spread",
    "FixedVsFloatingSwapArguments",
    "FixedVsFloatingSwapResults",
    "FixedVsFloatingSwapEngine",
    "FixedVsFloatingSwap",
]
