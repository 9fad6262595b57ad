"""fixedfloat public API."""

from .cashflows import fixed_rate_leg, ibor_leg, overnight_leg
from .errors import ArgumentTypeMismatch, InvalidArguments, PricingError
from .indices import make_forecast_index
from .instruments import (
    FixedVsFloatingSwap,
    FixedVsFloatingSwapArguments,
    FixedVsFloatingSwapEngine,
    FixedVsFloatingSwapResults,
    Instrument,
    OvernightIndexedSwap,
    Swap,
    SwapArguments,
    SwapEngine,
    SwapResults,
    SwapType,
    VanillaSwap,
)
from .pricingengines import EngineArguments, EngineResults, GenericEngine, PricingEngine
from .pricingengines.discounting import (
    DiscountingFixedVsFloatingSwapEngine,
    DiscountingSwapEngine,
)
from .termstructures import CurveNodes

__all__ = [
    "CurveNodes",
    "make_forecast_index",
    "fixed_rate_leg",
    "ibor_leg",
    "overnight_leg",
    "PricingError",
    "ArgumentTypeMismatch",
    "InvalidArguments",
    "EngineArguments",
    "EngineResults",
    "PricingEngine",
    "GenericEngine",
    "Instrument",
    "Swap",
    "SwapType",
    "SwapArguments",
    "SwapResults",
    "SwapEngine",
    "FixedVsFloatingSwap",
    "FixedVsFloatingSwapArguments",
    "FixedVsFloatingSwapResults",
    "FixedVsFloatingSwapEngine",
    "VanillaSwap",
    "OvernightIndexedSwap",
    "DiscountingSwapEngine",
    "DiscountingFixedVsFloatingSwapEngine",
]
