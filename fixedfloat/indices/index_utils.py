"""Helpers for working with rate indices."""

from __future__ import annotations

import logging

from QuantLib import Estr, Euribor, IborIndex, Period, Simple, Sofr

from fixedfloat.termstructures.curve_nodes import CurveNodes

logger = logging.getLogger(__name__)

_OVERNIGHT = {"estr": Estr, "sofr": Sofr}


def make_forecast_index(name: str, forecast_nodes: CurveNodes) -> IborIndex:
    """
    Create an index forecasting off the supplied curve.

    ``name`` is ``"estr"``, ``"sofr"`` or ``"euribor"`` followed by a tenor
    (``"euribor6m"``, ``"euribor3m"``; plain ``"euribor"`` means 6M).

    The fixing for ``forecast_nodes.as_of`` is seeded with the curve's own
    forward so that coupons fixed on that date can be valued without a
    fixing history.
    """
    handle = forecast_nodes.yts_handle
    key = name.lower()
    if key in _OVERNIGHT:
        index: IborIndex = _OVERNIGHT[key](handle)
    elif key.startswith("euribor"):
        tenor = key[len("euribor"):] or "6m"
        index = Euribor(Period(tenor.upper()), handle)
    else:
        raise ValueError(f"Unsupported index: {name}")

    as_of = forecast_nodes.as_of
    fixing_date = index.fixingDate(as_of)
    rate = handle.forwardRate(
        as_of,
        as_of + index.tenor(),
        index.dayCounter(),
        Simple,
    ).rate()
    index.addFixing(fixing_date, rate, True)
    logger.debug("seeded %s fixing %s = %.6f", index.name(), fixing_date.ISO(), rate)
    return index


__all__ = ["make_forecast_index"]
