from __future__ import annotations

from typing import Optional


class SensitivityError(Exception):
    """
    Base exception for the package.

    All package-specific exceptions inherit from this class,
    allowing callers to catch every failure with a single handler.
    """

    pass


class ConfigurationError(SensitivityError):
    """
    Raised when the curve set handed to the engine is structurally unusable:
    a curve of the wrong family, an empty handle, or a mismatch between
    node and quote counts.
    """

    def __init__(self, message: str, curve_name: Optional[str] = None):
        super().__init__(message)
        self.curve_name = curve_name


class BootstrapError(SensitivityError):
    """Raised when a piecewise curve cannot solve for one of its pillars."""

    def __init__(self, message: str, pillar_index: Optional[int] = None):
        super().__init__(message)
        self.pillar_index = pillar_index


class RecomputationError(SensitivityError):
    """
    Raised when the curves fail to recompute during a sensitivity pass.

    Attributes
    ----------
    quote_index : int or None
        Position of the bumped quote in aggregator order, or None when the
        baseline evaluation itself failed.
    """

    def __init__(self, message: str, quote_index: Optional[int] = None):
        super().__init__(message)
        self.quote_index = quote_index


class NumericalError(SensitivityError):
    """Raised when the sensitivity matrix cannot be inverted reliably."""

    pass
