"""Cashflow leg helpers."""

from .legs import Leg, available_amount, fixed_rate_leg, ibor_leg, overnight_leg

__all__ = ["Leg", "available_amount", "fixed_rate_leg", "ibor_leg", "overnight_leg"]
