"""Yield term structure helpers."""

from .curve_nodes import CurveNodes

__all__ = ["CurveNodes"]
