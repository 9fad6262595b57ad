"""Generic multi-leg swap: legs of cash flows, each paid or received."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Sequence

from QuantLib import CashFlow, Date, Settings, as_coupon

from fixedfloat.cashflows.legs import Leg
from fixedfloat.errors import ArgumentTypeMismatch, InvalidArguments, PricingError
from fixedfloat.instruments._instrument import Instrument
from fixedfloat.pricingengines._engine import (
    EngineArguments,
    EngineResults,
    GenericEngine,
)


class SwapType(IntEnum):
    """Direction of the fixed leg: a payer pays fixed and receives floating."""

    PAYER = -1
    RECEIVER = 1


@dataclass
class SwapArguments(EngineArguments):
    legs: list[Leg] = field(default_factory=list)
    payer: list[float] = field(default_factory=list)

    def validate(self) -> None:
        if len(self.legs) != len(self.payer):
            raise InvalidArguments(
                f"number of legs ({len(self.legs)}) and leg multipliers "
                f"({len(self.payer)}) differ"
            )


@dataclass
class SwapResults(EngineResults):
    leg_npv: list[Optional[float]] = field(default_factory=list)
    leg_bps: list[Optional[float]] = field(default_factory=list)

    def reset(self) -> None:
        super().reset()
        self.leg_npv = []
        self.leg_bps = []


class SwapEngine(GenericEngine[SwapArguments, SwapResults]):
    """Base for engines able to price any :class:`Swap`."""

    arguments_type = SwapArguments
    results_type = SwapResults


class Swap(Instrument):
    """
    Swap made of an arbitrary number of cash-flow legs.

    ``payer[i]`` tells whether leg ``i`` is paid (its values enter the NPV
    with a negative sign) or received.
    """

    def __init__(self, legs: Sequence[Sequence[CashFlow]], payer: Sequence[bool]):
        super().__init__()
        if len(legs) != len(payer):
            raise ValueError("'legs' and 'payer' must have the same length")
        self._legs: list[Leg] = [tuple(leg) for leg in legs]
        self._payer: list[float] = [-1.0 if p else 1.0 for p in payer]
        self._leg_npv: list[Optional[float]] = [None] * len(self._legs)
        self._leg_bps: list[Optional[float]] = [None] * len(self._legs)

    # ---------- inspectors ----------
    @property
    def number_of_legs(self) -> int:
        return len(self._legs)

    def leg(self, i: int) -> Leg:
        return self._legs[i]

    def payer(self, i: int) -> bool:
        return self._payer[i] < 0

    @property
    def start_date(self) -> Date:
        starts = [
            c.accrualStartDate()
            for leg in self._legs
            for c in map(as_coupon, leg)
            if c is not None
        ]
        if not starts:
            raise PricingError("swap has no coupons")
        return min(starts)

    @property
    def maturity_date(self) -> Date:
        dates = [cf.date() for leg in self._legs for cf in leg]
        if not dates:
            raise PricingError("swap has no cash flows")
        return max(dates)

    def is_expired(self) -> bool:
        today = Settings.instance().evaluationDate
        return all(cf.date() <= today for leg in self._legs for cf in leg)

    # ---------- engine interface ----------
    def setup_arguments(self, args: EngineArguments) -> None:
        if not isinstance(args, SwapArguments):
            raise ArgumentTypeMismatch(
                f"expected swap arguments, got {type(args).__name__}"
            )
        args.legs = list(self._legs)
        args.payer = list(self._payer)

    def fetch_results(self, results: EngineResults) -> None:
        if not isinstance(results, SwapResults):
            raise ArgumentTypeMismatch(
                f"expected swap results, got {type(results).__name__}"
            )
        super().fetch_results(results)
        n = len(self._legs)
        self._leg_npv = list(results.leg_npv) if results.leg_npv else [None] * n
        self._leg_bps = list(results.leg_bps) if results.leg_bps else [None] * n

    def setup_expired(self) -> None:
        super().setup_expired()
        self._leg_npv = [0.0] * len(self._legs)
        self._leg_bps = [0.0] * len(self._legs)

    # ---------- results ----------
    def leg_npv(self, i: int) -> float:
        self.calculate()
        value = self._leg_npv[i]
        if value is None:
            raise PricingError(f"NPV of leg {i} not provided")
        return value

    def leg_bps(self, i: int) -> float:
        """Signed change in leg value for a 1bp shift in its coupon rates."""
        self.calculate()
        value = self._leg_bps[i]
        if value is None:
            raise PricingError(f"BPS of leg {i} not provided")
        return value


__all__ = ["Leg", "SwapType", "SwapArguments", "SwapResults", "SwapEngine", "Swap"]
