from __future__ import annotations

from dataclasses import dataclass, replace
from functools import cached_property
from math import exp, log
from typing import Literal, Sequence

from QuantLib import (
    Date,
    DayCounter,
    DiscountCurve,
    FlatForward,
    QuoteHandle,
    RelinkableYieldTermStructureHandle,
    SimpleQuote,
    YieldTermStructure,
    YieldTermStructureHandle,
    ZeroCurve,
)

QuoteKind = Literal["zero", "discount", "flat"]
CurveRole = Literal["discounting", "forecasting"]


@dataclass(frozen=True, kw_only=True)
class CurveNodes:
    """
    Immutable set of curve nodes from which a QuantLib curve is built.

    - dates: strictly increasing QuantLib Dates
    - quotes: one number per date, read according to ``quote_kind``
        * "zero"     -> continuously compounded zero yields
        * "discount" -> discount factors in (0, 1]
        * "flat"     -> a single zero yield applied at every maturity
    - day_counter: year-fraction convention inside the term structure
    - as_of: reference date of the curve
    - role: whether the curve discounts cash flows or forecasts an index
    """

    as_of: Date
    dates: Sequence[Date]
    quotes: Sequence[float]
    day_counter: DayCounter
    quote_kind: QuoteKind = "zero"
    role: CurveRole = "discounting"

    def __post_init__(self):
        if len(self.dates) == 0:
            raise ValueError("at least one node is required")
        if len(self.dates) != len(self.quotes):
            raise ValueError("dates and quotes must have the same length")
        for i in range(1, len(self.dates)):
            if not (self.dates[i] > self.dates[i - 1]):
                raise ValueError("dates must be strictly increasing")
        if self.quote_kind == "flat" and len(self.quotes) != 1:
            raise ValueError("quote_kind='flat' expects exactly one zero rate")
        if self.quote_kind == "discount":
            if not all(0.0 < v <= 1.0 for v in self.quotes):
                raise ValueError("discount factors must lie in (0, 1]")

    def _term_structure(self) -> YieldTermStructure:
        if self.quote_kind == "flat" or (
            self.quote_kind == "zero" and len(self.quotes) == 1
        ):
            return FlatForward(
                self.as_of, QuoteHandle(SimpleQuote(self.quotes[0])), self.day_counter
            )
        if self.quote_kind == "zero":
            dates, zeros = list(self.dates), list(self.quotes)
            if dates[0] != self.as_of:
                dates.insert(0, self.as_of)
                zeros.insert(0, zeros[0])
            return ZeroCurve(dates, zeros, self.day_counter)
        if self.quote_kind == "discount":
            dates, discounts = list(self.dates), list(self.quotes)
            if dates[0] != self.as_of:
                dates.insert(0, self.as_of)
                discounts.insert(0, 1.0)
            return DiscountCurve(dates, discounts, self.day_counter)
        raise ValueError(f"Unsupported quote_kind: {self.quote_kind}")

    @cached_property
    def yts_handle(self) -> YieldTermStructureHandle:
        """Handle to the curve, built on first access and reused afterwards."""
        return YieldTermStructureHandle(self._term_structure())

    def link_to(self, handle: RelinkableYieldTermStructureHandle) -> None:
        """
        Point ``handle`` at the curve built from these nodes.

        Instruments priced off ``handle`` are notified and recalculate on
        their next read.
        """
        handle.linkTo(self._term_structure())

    def discount_factor(self, date: Date) -> float:
        return self.yts_handle.discount(date)

    def bump(self, bp: float) -> CurveNodes:
        """Return new nodes shifted in parallel by ``bp`` basis points of zero yield."""
        shift = bp / 10_000.0

        if self.quote_kind in {"zero", "flat"}:
            return replace(self, quotes=tuple(q + shift for q in self.quotes))

        bumped: list[float] = []
        for d, df in zip(self.dates, self.quotes):
            t = self.day_counter.yearFraction(self.as_of, d)
            if t <= 0.0:
                bumped.append(df)
                continue
            bumped.append(exp(log(df) - shift * t))
        return replace(self, quotes=tuple(bumped))

    @classmethod
    def from_flat(
            cls,
            as_of: Date,
            maturity: Date,
            zero: float,
            day_counter: DayCounter,
            role: CurveRole = "discounting",
    ) -> CurveNodes:
        """Flat continuously compounded zero curve out to ``maturity``."""
        return cls(
            as_of=as_of,
            dates=[maturity],
            quotes=[zero],
            day_counter=day_counter,
            quote_kind="flat",
            role=role,
        )


__all__ = ["CurveNodes"]
