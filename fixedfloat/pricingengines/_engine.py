"""Pricing-engine framework shared by all instruments."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

from QuantLib import Date


class EngineArguments(ABC):
    """Snapshot of instrument state handed to an engine."""

    @abstractmethod
    def validate(self) -> None:
        """Raise :class:`~fixedfloat.errors.InvalidArguments` if inconsistent."""


@dataclass
class EngineResults:
    """Figures every engine can report back to an instrument."""

    value: Optional[float] = None
    error_estimate: Optional[float] = None
    valuation_date: Optional[Date] = None
    additional_results: dict[str, Any] = field(default_factory=dict)

    def reset(self) -> None:
        self.value = None
        self.error_estimate = None
        self.valuation_date = None
        self.additional_results.clear()


class PricingEngine(ABC):
    """
    Abstract valuation model.

    An instrument writes its state into :attr:`arguments`, the engine runs
    :meth:`calculate` and the instrument reads :attr:`results` back. Engines
    report through :meth:`observables` the market objects (curve handles,
    quotes) whose changes must invalidate the instruments they price.
    """

    @property
    @abstractmethod
    def arguments(self) -> EngineArguments:
        raise NotImplementedError

    @property
    @abstractmethod
    def results(self) -> EngineResults:
        raise NotImplementedError

    @abstractmethod
    def reset(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def calculate(self) -> None:
        raise NotImplementedError

    def observables(self) -> tuple[Any, ...]:
        return ()


ArgumentsT = TypeVar("ArgumentsT", bound=EngineArguments)
ResultsT = TypeVar("ResultsT", bound=EngineResults)


class GenericEngine(PricingEngine, Generic[ArgumentsT, ResultsT]):
    """
    Engine bound to one arguments/results pair.

    Subclasses declare the pair with the ``arguments_type`` and
    ``results_type`` class attributes; this fixes which instrument family an
    engine can price without carrying any valuation logic.
    """

    arguments_type: type[ArgumentsT]
    results_type: type[ResultsT]

    def __init__(self) -> None:
        self._arguments: ArgumentsT = self.arguments_type()
        self._results: ResultsT = self.results_type()

    @property
    def arguments(self) -> ArgumentsT:
        return self._arguments

    @property
    def results(self) -> ResultsT:
        return self._results

    def reset(self) -> None:
        self._results.reset()


__all__ = [
    "EngineArguments",
    "EngineResults",
    "PricingEngine",
    "GenericEngine",
]
