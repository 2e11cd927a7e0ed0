from __future__ import annotations

import pandas as pd
from typing import List
from functools import lru_cache


def yearfrac(start: pd.Timestamp, end: pd.Timestamp, convention: str) -> float:
    """
    Year fraction between two dates under a day count convention.

    Supported:
    - ACT/365, ACT/365F
    - ACT/360
    - 30/360, 30/360US (US bond basis)
    """
    start = pd.Timestamp(start)
    end = pd.Timestamp(end)

    convention = convention.upper().replace(" ", "")
    if end < start:
        raise ValueError(f"end < start: {start=} {end=}")

    if convention in ("ACT/365", "ACT/365F"):
        return (end - start).days / 365.0

    if convention == "ACT/360":
        return (end - start).days / 360.0

    if convention in ("30/360", "30/360US"):
        y1, m1, d1 = start.year, start.month, start.day
        y2, m2, d2 = end.year, end.month, end.day

        # 30/360 US convention
        if d1 == 31:
            d1 = 30
        if d2 == 31 and d1 == 30:
            d2 = 30

        return ((y2 - y1) * 360 + (m2 - m1) * 30 + (d2 - d1)) / 360.0

    raise ValueError(f"Unsupported day count convention: {convention}")


def coupon_dates(start: pd.Timestamp, maturity: pd.Timestamp, freq: int = 2) -> List[pd.Timestamp]:
    """
    Payment dates strictly AFTER start, ending at maturity, rolled back from maturity.

    The first period may be short (stub) when the tenor is not a whole number of periods.
    """
    if freq not in (1, 2, 4, 12):
        raise ValueError(f"Unsupported frequency: {freq}")

    start = pd.Timestamp(start)
    maturity = pd.Timestamp(maturity)

    if maturity <= start:
        raise ValueError("Maturity must be after start date.")

    months = 12 // freq
    dates: List[pd.Timestamp] = []
    d = maturity
    k = 0
    while d > start:
        dates.append(d)
        k += 1
        # step from maturity each time so month-end rolls do not drift
        d = maturity - pd.DateOffset(months=months * k)

    return sorted(dates)


@lru_cache(maxsize=10_000)
def cached_coupon_dates(start: pd.Timestamp, maturity: pd.Timestamp, freq: int) -> tuple:
    """Cache schedules by (start, maturity, freq); bootstrap evaluates them repeatedly."""
    return tuple(coupon_dates(pd.Timestamp(start), pd.Timestamp(maturity), int(freq)))


def add_tenor(date: pd.Timestamp, tenor: str) -> pd.Timestamp:
    """
    Calendar-day tenor arithmetic: "1W", "3M", "2Y", "10D".

    No business-day adjustment.
    """
    date = pd.Timestamp(date)
    tenor = tenor.strip().upper()
    if len(tenor) < 2 or not tenor[:-1].isdigit():
        raise ValueError(f"Invalid tenor: {tenor!r}")

    n, unit = int(tenor[:-1]), tenor[-1]
    if unit == "D":
        return date + pd.Timedelta(days=n)
    if unit == "W":
        return date + pd.Timedelta(weeks=n)
    if unit == "M":
        return date + pd.DateOffset(months=n)
    if unit == "Y":
        return date + pd.DateOffset(years=n)
    raise ValueError(f"Invalid tenor unit: {tenor!r}")
