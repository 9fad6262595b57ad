"""Exceptions raised by the pricing framework."""

from __future__ import annotations


class PricingError(RuntimeError):
    """Base class for failures raised while pricing an instrument."""


class ArgumentTypeMismatch(PricingError, TypeError):
    """An engine handed an instrument arguments or results of the wrong family."""


class InvalidArguments(PricingError, ValueError):
    """An arguments snapshot failed validation before reaching the engine."""


__all__ = ["PricingError", "ArgumentTypeMismatch", "InvalidArguments"]
