"""
Calibrating instruments ("rate helpers").

Each helper owns a shared SimpleQuote and knows how to compute the quote a
given discount curve implies. The bootstrap drives ``residual(curve)`` to
zero, one pillar at a time, in pillar order.

Curves passed to ``implied_quote`` only need ``reference_date`` and
``df(dates)``.
"""
from __future__ import annotations

import numpy as np
import pandas as pd
from typing import List, Optional

from .observer import Handle, Observable
from .quotes import SimpleQuote
from .utils import yearfrac, cached_coupon_dates


class RateHelper:
    def __init__(self, quote: SimpleQuote, maturity: pd.Timestamp):
        if not isinstance(quote, SimpleQuote):
            raise TypeError(f"quote must be a SimpleQuote, got {type(quote).__name__}")
        self._quote = quote
        self.maturity = pd.Timestamp(maturity)

    def quote(self) -> SimpleQuote:
        return self._quote

    def pillar_date(self) -> pd.Timestamp:
        return self.maturity

    def dependencies(self) -> List[Observable]:
        """Observables other than the quote that the implied quote depends on."""
        return []

    def implied_quote(self, curve) -> float:
        raise NotImplementedError

    def residual(self, curve) -> float:
        return self.implied_quote(curve) - self._quote.value()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(maturity={self.maturity.date()}, quote={self._quote!r})"


class DepositHelper(RateHelper):
    """Money-market deposit quoted as a simple rate: D(T) = 1 / (1 + q * tau)."""

    def __init__(self, quote: SimpleQuote, maturity: pd.Timestamp, day_count: str = "ACT/360"):
        super().__init__(quote, maturity)
        self.day_count = day_count

    def implied_quote(self, curve) -> float:
        tau = yearfrac(curve.reference_date, self.maturity, self.day_count)
        if tau <= 0:
            raise ValueError("Deposit maturity must be after the curve reference date.")
        df_T = float(curve.df([self.maturity])[0])
        return (1.0 / df_T - 1.0) / tau


class ParBondHelper(RateHelper):
    """
    Bullet note quoted as a par coupon rate:
        q = freq * (1 - D(T)) / sum_i D(t_i)
    """

    def __init__(self, quote: SimpleQuote, maturity: pd.Timestamp, freq: int = 2):
        super().__init__(quote, maturity)
        self.freq = int(freq)

    def implied_quote(self, curve) -> float:
        pay_dates = list(cached_coupon_dates(curve.reference_date, self.maturity, self.freq))
        dfs = curve.df(pay_dates)
        annuity = float(np.sum(dfs))
        return self.freq * (1.0 - float(dfs[-1])) / annuity


class SwapHelper(RateHelper):
    """
    Vanilla fixed-for-floating swap quoted as a par rate.

    The float leg is projected off the curve being bootstrapped. Both legs are
    discounted on ``discount_curve`` when given (a Handle to another curve),
    which makes the bootstrapped curve depend on that curve.
    """

    def __init__(
        self,
        quote: SimpleQuote,
        maturity: pd.Timestamp,
        fixed_freq: int = 2,
        float_freq: int = 4,
        fixed_day_count: str = "30/360",
        discount_curve: Optional[Handle] = None,
    ):
        super().__init__(quote, maturity)
        self.fixed_freq = int(fixed_freq)
        self.float_freq = int(float_freq)
        self.fixed_day_count = fixed_day_count
        self.discount_curve = discount_curve

    def dependencies(self) -> List[Observable]:
        return [self.discount_curve] if self.discount_curve is not None else []

    def implied_quote(self, curve) -> float:
        ref = curve.reference_date
        disc = curve if self.discount_curve is None else self.discount_curve.current_link()

        fixed_dates = [ref] + list(cached_coupon_dates(ref, self.maturity, self.fixed_freq))
        accruals = np.array(
            [yearfrac(a, b, self.fixed_day_count) for a, b in zip(fixed_dates[:-1], fixed_dates[1:])],
            dtype=float,
        )
        annuity = float(np.sum(accruals * disc.df(fixed_dates[1:])))

        float_dates = [ref] + list(cached_coupon_dates(ref, self.maturity, self.float_freq))
        proj = curve.df(float_dates)
        # P(t_{i-1}) / P(t_i) - 1 = forward * accrual
        fwd_accrued = proj[:-1] / proj[1:] - 1.0
        float_pv = float(np.sum(fwd_accrued * disc.df(float_dates[1:])))

        return float_pv / annuity
