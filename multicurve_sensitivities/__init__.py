"""
Multi-curve node sensitivities

Modules:
- observer: change notification, lazy objects, relinkable handles
- quotes: mutable market quotes
- instruments: calibrating instruments (deposits, par bonds, swaps)
- curves: zero curve snapshot + piecewise zero-yield/linear bootstrap
- registry: named curve set with family checks
- nodes: node extraction and quote aggregation
- linalg: matrix assembly and inversion
- sensitivities: bump-and-reprice Jacobian of nodes vs quotes
- config: environment settings and logging setup
- utils: day count + schedule helpers
"""
from .config import Settings, get_settings
from .curves import ZERO_YIELD_LINEAR, CurveFamily, PiecewiseZeroCurve, ZeroCurve, node_report
from .exceptions import (
    BootstrapError,
    ConfigurationError,
    NumericalError,
    RecomputationError,
    SensitivityError,
)
from .instruments import DepositHelper, ParBondHelper, RateHelper, SwapHelper
from .observer import Handle, LazyObject, Observable
from .quotes import SimpleQuote
from .registry import CurveRegistry
from .sensitivities import BUMP_SIZE, MultiCurveSensitivities

__all__ = [
    "BUMP_SIZE",
    "BootstrapError",
    "ConfigurationError",
    "CurveFamily",
    "CurveRegistry",
    "DepositHelper",
    "Handle",
    "LazyObject",
    "MultiCurveSensitivities",
    "NumericalError",
    "Observable",
    "ParBondHelper",
    "PiecewiseZeroCurve",
    "RateHelper",
    "RecomputationError",
    "SensitivityError",
    "Settings",
    "SimpleQuote",
    "SwapHelper",
    "ZERO_YIELD_LINEAR",
    "ZeroCurve",
    "get_settings",
    "node_report",
]
