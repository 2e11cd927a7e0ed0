"""
Node extraction and quote aggregation across the registry.

Both walk the curves in registry order, so position i in the node list and
position i in the quote list refer to the same pillar. That order indexes the
rows and columns of the sensitivity matrix.
"""
from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np
import pandas as pd

from .exceptions import ConfigurationError
from .quotes import SimpleQuote
from .registry import CurveRegistry


def all_nodes(registry: CurveRegistry) -> List[Tuple[pd.Timestamp, float]]:
    """Every curve's nodes except the reference-date anchor, concatenated."""
    result: List[Tuple[pd.Timestamp, float]] = []
    for name in registry:
        result.extend(registry.nodes(name)[1:])
    return result


def all_zeros(registry: CurveRegistry) -> np.ndarray:
    return np.array([rate for _, rate in all_nodes(registry)], dtype=float)


def all_quotes(registry: CurveRegistry) -> List[SimpleQuote]:
    result: List[SimpleQuote] = []
    for name in registry:
        result.extend(registry.quotes(name))
    return result


def node_labels(registry: CurveRegistry) -> List[Tuple[str, pd.Timestamp]]:
    """(curve name, node date) per node; no bootstrap required."""
    return [(name, d) for name in registry for d in registry.curve(name).pillar_dates()]


def quote_labels(registry: CurveRegistry) -> List[Tuple[str, pd.Timestamp]]:
    """(curve name, instrument pillar) per quote."""
    return [
        (name, helper.pillar_date())
        for name in registry
        for helper in registry.curve(name).calibrating_instruments()
    ]


def check_dimensions(nodes: Sequence, quotes: Sequence) -> int:
    if len(nodes) != len(quotes):
        raise ConfigurationError(
            f"Node count ({len(nodes)}) does not match quote count ({len(quotes)})."
        )
    if len(nodes) == 0:
        raise ConfigurationError("No curve nodes to compute sensitivities for.")
    return len(nodes)
