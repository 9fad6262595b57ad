import pytest
import QuantLib as ql

from fixedfloat.cashflows.legs import fixed_rate_leg, ibor_leg
from fixedfloat.errors import ArgumentTypeMismatch, InvalidArguments, PricingError
from fixedfloat.indices.index_utils import make_forecast_index
from fixedfloat.instruments import Swap, SwapResults, SwapType, VanillaSwap
from fixedfloat.pricingengines.discounting import (
    DiscountingFixedVsFloatingSwapEngine,
    DiscountingSwapEngine,
)
from fixedfloat.termstructures.curve_nodes import CurveNodes


def _build_curves():
    as_of = ql.Date(15, ql.January, 2024)
    ql.Settings.instance().evaluationDate = as_of
    dc = ql.Actual365Fixed()
    far = as_of + ql.Period(50, ql.Years)
    disc = CurveNodes.from_flat(as_of, far, 0.025, dc)
    fwd = CurveNodes.from_flat(as_of, far, 0.03, dc, role="forecasting")
    return as_of, disc, make_forecast_index("euribor6m", fwd)


def _schedules(as_of: ql.Date):
    calendar = ql.TARGET()
    start = calendar.advance(as_of, 2, ql.Days)
    maturity = calendar.advance(start, ql.Period(3, ql.Years))

    def schedule(tenor):
        return ql.Schedule(
            start,
            maturity,
            ql.Period(tenor),
            calendar,
            ql.ModifiedFollowing,
            ql.ModifiedFollowing,
            ql.DateGeneration.Forward,
            False,
        )

    return schedule(ql.Annual), schedule(ql.Semiannual)


def _vanilla(index, fixed_schedule, floating_schedule, engine) -> VanillaSwap:
    swap = VanillaSwap(
        SwapType.PAYER,
        1_000_000,
        fixed_schedule,
        0.028,
        ql.Thirty360(ql.Thirty360.BondBasis),
        floating_schedule,
        index,
        0.0005,
        ql.Actual360(),
    )
    swap.set_pricing_engine(engine)
    return swap


def _reference(index, fixed_schedule, floating_schedule, handle) -> ql.VanillaSwap:
    swap = ql.VanillaSwap(
        ql.VanillaSwap.Payer,
        1_000_000,
        fixed_schedule,
        0.028,
        ql.Thirty360(ql.Thirty360.BondBasis),
        floating_schedule,
        index,
        0.0005,
        ql.Actual360(),
    )
    swap.setPricingEngine(ql.DiscountingSwapEngine(handle))
    return swap


def test_matches_quantlib_discounting() -> None:
    as_of, disc, index = _build_curves()
    fixed_schedule, floating_schedule = _schedules(as_of)
    engine = DiscountingFixedVsFloatingSwapEngine(disc.yts_handle)
    swap = _vanilla(index, fixed_schedule, floating_schedule, engine)
    reference = _reference(index, fixed_schedule, floating_schedule, disc.yts_handle)

    assert swap.npv() == pytest.approx(reference.NPV(), abs=1e-6)
    assert swap.fixed_leg_npv() == pytest.approx(reference.legNPV(0), abs=1e-6)
    assert swap.floating_leg_npv() == pytest.approx(reference.legNPV(1), abs=1e-6)
    assert swap.fixed_leg_bps() == pytest.approx(reference.legBPS(0), abs=1e-8)
    assert swap.floating_leg_bps() == pytest.approx(reference.legBPS(1), abs=1e-8)
    assert swap.fair_rate() == pytest.approx(reference.fairRate(), abs=1e-10)
    assert swap.fair_spread() == pytest.approx(reference.fairSpread(), abs=1e-10)
    assert swap.valuation_date() == as_of
    assert swap.additional_results()["npv_date_discount"] == pytest.approx(1.0)


def test_plain_swap_with_generic_engine() -> None:
    as_of, disc, index = _build_curves()
    fixed_schedule, floating_schedule = _schedules(as_of)
    fixed = fixed_rate_leg(
        fixed_schedule,
        1_000_000,
        0.028,
        ql.Thirty360(ql.Thirty360.BondBasis),
        ql.ModifiedFollowing,
    )
    floating = ibor_leg(
        floating_schedule,
        1_000_000,
        index,
        0.0005,
        ql.Actual360(),
        ql.ModifiedFollowing,
    )
    swap = Swap([fixed, floating], [True, False])
    swap.set_pricing_engine(DiscountingSwapEngine(disc.yts_handle))
    reference = _reference(index, fixed_schedule, floating_schedule, disc.yts_handle)

    assert swap.number_of_legs == 2
    assert swap.npv() == pytest.approx(reference.NPV(), abs=1e-6)
    assert swap.leg_bps(0) == pytest.approx(reference.legBPS(0), abs=1e-8)
    assert swap.leg_npv(1) == pytest.approx(reference.legNPV(1), abs=1e-6)


def test_plain_swap_cannot_fill_fixed_vs_floating_arguments() -> None:
    as_of, disc, index = _build_curves()
    fixed_schedule, _ = _schedules(as_of)
    fixed = fixed_rate_leg(
        fixed_schedule, 1_000_000, 0.028, ql.Actual360(), ql.ModifiedFollowing
    )
    swap = Swap([fixed], [False])
    swap.set_pricing_engine(DiscountingFixedVsFloatingSwapEngine(disc.yts_handle))

    with pytest.raises(InvalidArguments, match="nominal"):
        swap.npv()


def test_wrong_results_type_is_rejected() -> None:
    as_of, disc, index = _build_curves()
    fixed_schedule, floating_schedule = _schedules(as_of)
    engine = DiscountingFixedVsFloatingSwapEngine(disc.yts_handle)
    swap = _vanilla(index, fixed_schedule, floating_schedule, engine)

    with pytest.raises(ArgumentTypeMismatch):
        swap.fetch_results(SwapResults())


def test_empty_curve_handle() -> None:
    as_of, disc, index = _build_curves()
    fixed_schedule, floating_schedule = _schedules(as_of)
    handle = ql.RelinkableYieldTermStructureHandle()
    engine = DiscountingFixedVsFloatingSwapEngine(handle)
    swap = _vanilla(index, fixed_schedule, floating_schedule, engine)

    with pytest.raises(PricingError, match="empty"):
        swap.fair_rate()

    disc.link_to(handle)
    assert swap.fair_rate() is not None


def test_relinking_curve_invalidates_results() -> None:
    as_of, disc, index = _build_curves()
    fixed_schedule, floating_schedule = _schedules(as_of)
    handle = ql.RelinkableYieldTermStructureHandle()
    disc.link_to(handle)
    engine = DiscountingFixedVsFloatingSwapEngine(handle)
    swap = _vanilla(index, fixed_schedule, floating_schedule, engine)
    before = swap.fixed_leg_npv()

    disc.bump(50.0).link_to(handle)
    after = swap.fixed_leg_npv()
    # higher discount rates shrink the paid fixed leg
    assert after > before


def test_settlement_date_drops_earlier_flows() -> None:
    as_of, disc, index = _build_curves()
    fixed_schedule, floating_schedule = _schedules(as_of)
    full = _vanilla(
        index,
        fixed_schedule,
        floating_schedule,
        DiscountingFixedVsFloatingSwapEngine(disc.yts_handle),
    )
    first_payment = full.fixed_leg[0].date()
    later = _vanilla(
        index,
        fixed_schedule,
        floating_schedule,
        DiscountingFixedVsFloatingSwapEngine(
            disc.yts_handle, settlement_date=first_payment
        ),
    )
    inclusive = _vanilla(
        index,
        fixed_schedule,
        floating_schedule,
        DiscountingFixedVsFloatingSwapEngine(
            disc.yts_handle,
            settlement_date=first_payment,
            include_settlement_date_flows=True,
        ),
    )

    first_coupon = full.fixed_leg[0].amount() * disc.discount_factor(first_payment)
    assert later.fixed_leg_npv() == pytest.approx(
        full.fixed_leg_npv() + first_coupon, abs=1e-6
    )
    assert inclusive.fixed_leg_npv() == pytest.approx(full.fixed_leg_npv(), abs=1e-6)


def test_npv_date_rebases_values() -> None:
    as_of, disc, index = _build_curves()
    fixed_schedule, floating_schedule = _schedules(as_of)
    spot = fixed_schedule.startDate()
    today = _vanilla(
        index,
        fixed_schedule,
        floating_schedule,
        DiscountingFixedVsFloatingSwapEngine(disc.yts_handle),
    )
    at_spot = _vanilla(
        index,
        fixed_schedule,
        floating_schedule,
        DiscountingFixedVsFloatingSwapEngine(disc.yts_handle, npv_date=spot),
    )

    assert at_spot.valuation_date() == spot
    assert at_spot.npv() == pytest.approx(
        today.npv() / disc.discount_factor(spot), abs=1e-6
    )
    assert at_spot.fair_rate() == pytest.approx(today.fair_rate(), abs=1e-12)
