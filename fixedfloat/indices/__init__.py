"""Rate index helpers."""

from .index_utils import make_forecast_index

__all__ = ["make_forecast_index"]
