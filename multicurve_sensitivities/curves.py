from __future__ import annotations

import logging

import numpy as np
import pandas as pd
from dataclasses import dataclass
from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple

from scipy.optimize import brentq

from .config import Settings, get_settings
from .exceptions import BootstrapError
from .instruments import RateHelper
from .observer import LazyObject
from .utils import yearfrac

logger = logging.getLogger("MultiCurve.Curves")


class CurveFamily(NamedTuple):
    trait: str
    interpolation: str


ZERO_YIELD_LINEAR = CurveFamily("zero_yield", "linear")


def _times(reference_date: pd.Timestamp, dates: Iterable, day_count: str) -> np.ndarray:
    idx = pd.DatetimeIndex([pd.Timestamp(d) for d in dates])
    ref = pd.Timestamp(reference_date)
    dc = day_count.upper().replace(" ", "")
    if dc in ("ACT/365", "ACT/365F"):
        return np.asarray((idx - ref).days, dtype=float) / 365.0
    if dc == "ACT/360":
        return np.asarray((idx - ref).days, dtype=float) / 360.0
    return np.array([yearfrac(ref, d, dc) for d in idx], dtype=float)


@dataclass(frozen=True)
class ZeroCurve:
    """
    Curve snapshot represented by continuously-compounded zero rates at node
    dates, interpolated linearly in zero rate against time.

    - Node 0 is the reference date.
    - Long-end extrapolation: NOT allowed (raises).
    """
    reference_date: pd.Timestamp
    node_dates: np.ndarray          # dtype datetime64[ns]
    zero_rates: np.ndarray          # cc zero rates
    day_count: str = "ACT/365"

    def __post_init__(self):
        if len(self.node_dates) != len(self.zero_rates):
            raise ValueError("node_dates and zero_rates must have equal length.")
        if len(self.node_dates) < 2:
            raise ValueError("Need at least two nodes.")

    @property
    def node_times(self) -> np.ndarray:
        return _times(self.reference_date, pd.to_datetime(self.node_dates), self.day_count)

    def zero_rate(self, dates: Iterable[pd.Timestamp]) -> np.ndarray:
        t = _times(self.reference_date, dates, self.day_count)
        kt = self.node_times

        if np.any(t < 0):
            raise ValueError("Requested date before reference date.")
        if np.any(t > kt[-1]):
            raise ValueError("Requested date beyond curve node range (no long-end extrapolation).")

        return np.interp(t, kt, self.zero_rates)

    def df(self, dates: Iterable[pd.Timestamp]) -> np.ndarray:
        dates_list = [pd.Timestamp(d) for d in dates]
        t = _times(self.reference_date, dates_list, self.day_count)
        return np.exp(-self.zero_rate(dates_list) * t)

    def nodes(self) -> List[Tuple[pd.Timestamp, float]]:
        return [(pd.Timestamp(d), float(z)) for d, z in zip(pd.to_datetime(self.node_dates), self.zero_rates)]


class PiecewiseZeroCurve(LazyObject):
    """
    Zero-yield curve with linear interpolation, bootstrapped lazily from
    calibrating instruments.

    One node per instrument at its pillar date, solved in pillar order by a
    1D root search on the node's zero rate with all earlier nodes fixed.
    The reference-date node carries the first pillar's zero rate.

    The curve observes every instrument quote and dependency: any change
    marks it stale and is forwarded to its own observers. The bootstrap
    reruns on the next read.
    """

    family = ZERO_YIELD_LINEAR

    # zero-rate search interval for each pillar
    _lower_bound = -0.5
    _upper_bound = 1.0

    def __init__(
        self,
        reference_date: pd.Timestamp,
        instruments: Sequence[RateHelper],
        day_count: str = "ACT/365",
        settings: Optional[Settings] = None,
    ):
        super().__init__()
        self.reference_date = pd.Timestamp(reference_date)
        self.day_count = day_count
        self._settings = settings or get_settings()

        if len(instruments) == 0:
            raise ValueError("Need at least one calibrating instrument.")

        self._instruments: List[RateHelper] = sorted(instruments, key=lambda h: h.pillar_date())
        pillars = [h.pillar_date() for h in self._instruments]
        if pillars[0] <= self.reference_date:
            raise ValueError("Pillar dates must be after the reference date.")
        if len(set(pillars)) != len(pillars):
            raise ValueError("Two instruments share the same pillar date.")

        for helper in self._instruments:
            helper.quote().register_observer(self)
            for dep in helper.dependencies():
                dep.register_observer(self)

        self._snapshot: Optional[ZeroCurve] = None
        self.bootstrap_count = 0

    # ---- structure (no bootstrap needed) ----

    def calibrating_instruments(self) -> List[RateHelper]:
        return list(self._instruments)

    def pillar_dates(self) -> List[pd.Timestamp]:
        return [h.pillar_date() for h in self._instruments]

    def node_dates(self) -> List[pd.Timestamp]:
        return [self.reference_date] + self.pillar_dates()

    # ---- results (trigger bootstrap) ----

    def snapshot(self) -> ZeroCurve:
        self.calculate()
        return self._snapshot

    def nodes(self) -> List[Tuple[pd.Timestamp, float]]:
        return self.snapshot().nodes()

    def zero_rate(self, dates: Iterable[pd.Timestamp]) -> np.ndarray:
        return self.snapshot().zero_rate(dates)

    def df(self, dates: Iterable[pd.Timestamp]) -> np.ndarray:
        return self.snapshot().df(dates)

    # ---- bootstrap ----

    def perform_calculations(self) -> None:
        dates = np.array([d.to_datetime64() for d in self.node_dates()], dtype="datetime64[ns]")
        zeros = np.zeros(len(dates), dtype=float)

        for k, helper in enumerate(self._instruments, start=1):
            if not helper.quote().is_valid():
                raise BootstrapError(f"Invalid quote for {helper!r}.", pillar_index=k - 1)

            def residual(z: float) -> float:
                trial = zeros[: k + 1].copy()
                trial[k] = z
                if k == 1:
                    trial[0] = z
                curve = ZeroCurve(self.reference_date, dates[: k + 1], trial, self.day_count)
                return helper.residual(curve)

            a, b = self._lower_bound, self._upper_bound
            try:
                fa, fb = residual(a), residual(b)
            except ValueError as exc:
                raise BootstrapError(f"Cannot evaluate {helper!r}: {exc}", pillar_index=k - 1) from exc

            if not (np.isfinite(fa) and np.isfinite(fb)) or fa * fb > 0:
                raise BootstrapError(
                    f"Root not bracketed for {helper!r}: inconsistent market data.",
                    pillar_index=k - 1,
                )

            try:
                z_k = brentq(
                    residual,
                    a,
                    b,
                    xtol=self._settings.bootstrap_accuracy,
                    maxiter=self._settings.bootstrap_max_iter,
                )
            except (RuntimeError, ValueError) as exc:
                raise BootstrapError(f"Bootstrap failed for {helper!r}: {exc}", pillar_index=k - 1) from exc

            zeros[k] = z_k
            if k == 1:
                zeros[0] = z_k

        self._snapshot = ZeroCurve(self.reference_date, dates, zeros, self.day_count)
        self.bootstrap_count += 1
        logger.debug("Bootstrapped %d pillars (pass %d)", len(self._instruments), self.bootstrap_count)

    def __repr__(self) -> str:
        return (
            f"PiecewiseZeroCurve(reference_date={self.reference_date.date()}, "
            f"pillars={len(self._instruments)})"
        )


def node_report(curve) -> pd.DataFrame:
    """QC table of a curve's nodes: date, tau, zero, df and sanity flags."""
    snap = curve.snapshot() if isinstance(curve, PiecewiseZeroCurve) else curve
    dates = pd.to_datetime(snap.node_dates)
    taus = snap.node_times
    zeros = np.asarray(snap.zero_rates, dtype=float)
    dfs = np.exp(-zeros * taus)

    return pd.DataFrame(
        {
            "date": dates,
            "tau": taus,
            "zero_cc": zeros,
            "df": dfs,
            "df_positive": dfs > 0,
            "df_monotone": np.r_[True, np.diff(dfs) <= 1e-10],
        }
    )
