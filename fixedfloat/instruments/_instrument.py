"""Lazy, observable instrument base shared by all priced instruments."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from QuantLib import Date, Observer, Settings

from fixedfloat.errors import ArgumentTypeMismatch, PricingError
from fixedfloat.pricingengines._engine import (
    EngineArguments,
    EngineResults,
    PricingEngine,
)

logger = logging.getLogger(__name__)


def _as_observable(obj: Any) -> Any:
    """Return the QuantLib ``Observable`` behind an index, quote or handle."""
    as_observable = getattr(obj, "asObservable", None)
    return as_observable() if as_observable is not None else obj


class Instrument(ABC):
    """
    Abstract base class for instruments priced through a pricing engine.

    Results are computed lazily: accessors call :meth:`calculate`, which runs
    a full pricing pass only when the cached results are invalid. Results are
    invalidated by :meth:`update` (triggered by QuantLib notifications from
    observed indices and curves) and by a change of the global evaluation
    date.
    """

    def __init__(self) -> None:
        self._engine: Optional[PricingEngine] = None
        self._calculated = False
        self._calculated_for: Optional[Date] = None
        self._npv: Optional[float] = None
        self._error_estimate: Optional[float] = None
        self._valuation_date: Optional[Date] = None
        self._additional_results: dict[str, Any] = {}
        # must stay referenced for as long as the instrument lives
        self._observer = Observer(self.update)

    # ---------- observability ----------
    def register_with(self, observable: Any) -> None:
        self._observer.registerWith(_as_observable(observable))

    def update(self) -> None:
        """Invalidate cached results; recomputation waits for the next read."""
        self._calculated = False

    # ---------- engine wiring ----------
    @property
    def pricing_engine(self) -> Optional[PricingEngine]:
        return self._engine

    def set_pricing_engine(self, engine: PricingEngine) -> None:
        self._engine = engine
        for observable in engine.observables():
            self.register_with(observable)
        self.update()

    @abstractmethod
    def is_expired(self) -> bool:
        """Whether the instrument has no cash flows left to value."""
        raise NotImplementedError

    @abstractmethod
    def setup_arguments(self, args: EngineArguments) -> None:
        """Write the instrument state into an engine's arguments."""
        raise NotImplementedError

    def fetch_results(self, results: EngineResults) -> None:
        """Read back what the engine computed."""
        if not isinstance(results, EngineResults):
            raise ArgumentTypeMismatch(
                f"expected engine results, got {type(results).__name__}"
            )
        self._npv = results.value
        self._error_estimate = results.error_estimate
        self._valuation_date = results.valuation_date
        self._additional_results = dict(results.additional_results)

    def setup_expired(self) -> None:
        self._npv = 0.0
        self._error_estimate = 0.0
        self._valuation_date = None
        self._additional_results = {}

    # ---------- lazy calculation ----------
    def calculate(self) -> None:
        today = Settings.instance().evaluationDate
        if self._calculated and self._calculated_for == today:
            return
        # stays un-calculated if anything below raises
        self._calculated = False
        if self.is_expired():
            logger.debug("%s expired as of %s", type(self).__name__, today.ISO())
            self.setup_expired()
        else:
            self._perform_calculations()
        self._calculated = True
        self._calculated_for = today

    def _perform_calculations(self) -> None:
        if self._engine is None:
            raise PricingError("null pricing engine")
        logger.debug(
            "pricing %s with %s", type(self).__name__, type(self._engine).__name__
        )
        self._engine.reset()
        self.setup_arguments(self._engine.arguments)
        self._engine.arguments.validate()
        self._engine.calculate()
        self.fetch_results(self._engine.results)

    # ---------- results ----------
    def npv(self) -> float:
        """Net present value as computed by the pricing engine."""
        self.calculate()
        if self._npv is None:
            raise PricingError("NPV not provided")
        return self._npv

    def error_estimate(self) -> float:
        self.calculate()
        if self._error_estimate is None:
            raise PricingError("error estimate not provided")
        return self._error_estimate

    def valuation_date(self) -> Date:
        self.calculate()
        if self._valuation_date is None:
            raise PricingError("valuation date not provided")
        return self._valuation_date

    def additional_results(self) -> dict[str, Any]:
        self.calculate()
        return dict(self._additional_results)


__all__ = ["Instrument"]
