"""
Pricing-engine framework.

Concrete engines live in :mod:`fixedfloat.pricingengines.discounting`; they
depend on the instruments they price and are not imported here.
"""

from ._engine import EngineArguments, EngineResults, GenericEngine, PricingEngine

__all__ = ["EngineArguments", "EngineResults", "PricingEngine", "GenericEngine"]
