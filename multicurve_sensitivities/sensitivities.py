"""
Bump-and-reprice sensitivities of curve nodes to calibrating quotes.

S[i, j] = d(zero rate at node i) / d(quote j), estimated by a forward
difference with a fixed 1bp bump. Rows follow the node order and columns the
quote order produced by the registry (curve by curve, pillar by pillar), so
S is square and ``inverse_sensitivity()`` maps node risk back to quote risk.
"""
from __future__ import annotations

import logging
import time
from typing import List, Mapping, Optional, Tuple

import numpy as np
import pandas as pd

from .config import Settings, get_settings
from .exceptions import ConfigurationError, RecomputationError, SensitivityError
from .linalg import assemble_matrix, invert_matrix
from .nodes import all_nodes, all_quotes, all_zeros, check_dimensions, node_labels, quote_labels
from .observer import Handle, LazyObject
from .quotes import SimpleQuote
from .registry import CurveRegistry

logger = logging.getLogger("MultiCurve.Engine")

BUMP_SIZE = 1e-4


class MultiCurveSensitivities(LazyObject):
    """
    Lazily computed Jacobian of zero-rate nodes against market quotes for a
    set of interdependent piecewise zero curves.

    The engine observes every curve handle. A change anywhere only marks the
    cached matrices stale; they are recomputed on the next read, and one
    recomputation serves both ``sensitivity()`` and ``inverse_sensitivity()``.

    Each quote is bumped by 1bp, every curve is re-read, and the quote is
    restored before the next one is touched, including when a curve fails.

    >>> engine = MultiCurveSensitivities({"ois": Handle(ois_curve)})
    >>> S = engine.sensitivity()
    >>> S_inv = engine.inverse_sensitivity()
    """

    def __init__(self, curves: Mapping[str, Handle], settings: Optional[Settings] = None):
        super().__init__()
        self._settings = settings or get_settings()
        self._registry = CurveRegistry(curves)
        self._registry.subscribe(self)

        self._sensi: Optional[np.ndarray] = None
        self._inv_sensi: Optional[np.ndarray] = None
        self._orig_zeros: Optional[np.ndarray] = None
        self.recompute_count = 0

    @property
    def registry(self) -> CurveRegistry:
        return self._registry

    # ---- lazy calculation ----

    def recompute(self) -> None:
        """Force a pass now, even if the cached matrices are fresh."""
        self._calculated = False
        self.calculate()

    def perform_calculations(self) -> None:
        """
        One full bump-and-reprice pass. Stores S and its inverse only when
        every step succeeds; otherwise the previous results are kept and the
        engine stays stale.
        """
        start = time.perf_counter()
        # handles may have been relinked since construction
        self._registry.validate()
        quotes = all_quotes(self._registry)

        try:
            nodes = all_nodes(self._registry)
        except ConfigurationError:
            raise
        except Exception as exc:
            logger.error("Baseline curve evaluation failed: %s", exc)
            raise RecomputationError(f"Baseline curve evaluation failed: {exc}") from exc

        n = check_dimensions(nodes, quotes)
        orig_zeros = np.array([rate for _, rate in nodes], dtype=float)
        logger.info("Computing %dx%d sensitivity matrix over %d curve(s)", n, n, len(self._registry))

        columns: List[float] = []
        for j, quote in enumerate(quotes):
            columns.extend(self._bumped_column(j, quote, orig_zeros))

        sensi = assemble_matrix(columns, n)
        try:
            inv_sensi = invert_matrix(sensi, self._settings.max_condition_number)
        except SensitivityError as exc:
            logger.error("Inversion failed: %s", exc)
            raise

        self._orig_zeros = orig_zeros
        self._sensi = sensi
        self._inv_sensi = inv_sensi
        self.recompute_count += 1
        logger.info("Sensitivity pass %d done in %.3fs", self.recompute_count, time.perf_counter() - start)

    def _bumped_column(self, j: int, quote: SimpleQuote, orig_zeros: np.ndarray) -> np.ndarray:
        orig_value = quote.value()
        quote.set_value(orig_value + BUMP_SIZE)
        try:
            bumped = all_zeros(self._registry)
        except ConfigurationError:
            raise
        except Exception as exc:
            logger.error("Curve recomputation failed bumping quote %d: %s", j, exc)
            raise RecomputationError(
                f"Curve recomputation failed after bumping quote {j}: {exc}", quote_index=j
            ) from exc
        finally:
            quote.set_value(orig_value)

        logger.debug("Bumped quote %d (%.6f)", j, orig_value)
        return (bumped - orig_zeros) / BUMP_SIZE

    # ---- observer ----

    def update(self) -> None:
        logger.debug("Curve change received; sensitivities marked stale")
        super().update()

    def notify_changed(self) -> None:
        self.update()

    def close(self) -> None:
        """Stop observing the curves."""
        self._registry.unsubscribe(self)

    def __enter__(self) -> "MultiCurveSensitivities":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ---- results ----

    def sensitivity(self) -> np.ndarray:
        self.calculate()
        return self._sensi.copy()

    def inverse_sensitivity(self) -> np.ndarray:
        self.calculate()
        return self._inv_sensi.copy()

    def base_zeros(self) -> np.ndarray:
        """Unbumped node zero rates of the pass that produced the cached matrices."""
        self.calculate()
        return self._orig_zeros.copy()

    def nodes(self) -> List[Tuple[pd.Timestamp, float]]:
        return all_nodes(self._registry)

    def quotes(self) -> List[SimpleQuote]:
        return all_quotes(self._registry)

    def sensitivity_frame(self) -> pd.DataFrame:
        """S labelled by node (rows) and quote (columns), each as (curve, date)."""
        return pd.DataFrame(
            self.sensitivity(),
            index=pd.MultiIndex.from_tuples(node_labels(self._registry), names=["curve", "node"]),
            columns=pd.MultiIndex.from_tuples(quote_labels(self._registry), names=["curve", "pillar"]),
        )

    def inverse_sensitivity_frame(self) -> pd.DataFrame:
        """S^-1 labelled by quote (rows) and node (columns)."""
        return pd.DataFrame(
            self.inverse_sensitivity(),
            index=pd.MultiIndex.from_tuples(quote_labels(self._registry), names=["curve", "pillar"]),
            columns=pd.MultiIndex.from_tuples(node_labels(self._registry), names=["curve", "node"]),
        )

    def __repr__(self) -> str:
        return f"MultiCurveSensitivities(curves={self._registry.names()!r}, fresh={self.is_calculated})"
