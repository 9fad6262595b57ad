"""Instruments priced through pricing engines."""

from ._instrument import Instrument
from .fixed_vs_floating_swap import (
    FixedVsFloatingSwap,
    FixedVsFloatingSwapArguments,
    FixedVsFloatingSwapEngine,
    FixedVsFloatingSwapResults,
)
from .overnight_indexed_swap import OvernightIndexedSwap
from .swap import Swap, SwapArguments, SwapEngine, SwapResults, SwapType
from .vanilla_swap import VanillaSwap

__all__ = [
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
]
