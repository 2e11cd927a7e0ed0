import pandas as pd
import pytest

from multicurve_sensitivities import (
    DepositHelper,
    Handle,
    ParBondHelper,
    PiecewiseZeroCurve,
    SimpleQuote,
    SwapHelper,
)
from multicurve_sensitivities.utils import add_tenor


REF_DATE = pd.Timestamp("2026-02-13")


def build_single_curve(ref_date=REF_DATE):
    """6M deposit, 1Y and 2Y par notes: three sequentially bootstrapped pillars."""
    quotes = [SimpleQuote(0.0450), SimpleQuote(0.0440), SimpleQuote(0.0425)]
    helpers = [
        DepositHelper(quotes[0], add_tenor(ref_date, "6M")),
        ParBondHelper(quotes[1], add_tenor(ref_date, "1Y"), freq=2),
        ParBondHelper(quotes[2], add_tenor(ref_date, "2Y"), freq=2),
    ]
    return PiecewiseZeroCurve(ref_date, helpers), quotes


def build_ois_libor(ref_date=REF_DATE):
    """
    Discounting curve from deposits/par notes, plus a projection curve from a
    deposit and swaps discounted on the first curve.
    """
    ois_quotes = [SimpleQuote(q) for q in (0.0450, 0.0440, 0.0425, 0.0415, 0.0405)]
    ois_helpers = [DepositHelper(ois_quotes[0], add_tenor(ref_date, "6M"))] + [
        ParBondHelper(q, add_tenor(ref_date, t), freq=2)
        for q, t in zip(ois_quotes[1:], ("1Y", "2Y", "3Y", "5Y"))
    ]
    ois = PiecewiseZeroCurve(ref_date, ois_helpers)
    ois_handle = Handle(ois)

    libor_quotes = [SimpleQuote(q) for q in (0.0480, 0.0470, 0.0460, 0.0455, 0.0450)]
    libor_helpers = [DepositHelper(libor_quotes[0], add_tenor(ref_date, "3M"))] + [
        SwapHelper(q, add_tenor(ref_date, t), fixed_freq=2, float_freq=4, discount_curve=ois_handle)
        for q, t in zip(libor_quotes[1:], ("1Y", "2Y", "3Y", "5Y"))
    ]
    libor = PiecewiseZeroCurve(ref_date, libor_helpers)

    return ois_handle, Handle(libor), ois_quotes, libor_quotes


@pytest.fixture
def ref_date():
    return REF_DATE


@pytest.fixture
def single_curve():
    return build_single_curve()


@pytest.fixture
def ois_libor():
    return build_ois_libor()
