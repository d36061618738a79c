"""Transaction reconciliation: store-first resolution plus principal links."""

from __future__ import annotations

from .engine import DEFAULT_MAX_CONCURRENCY, ReconciliationEngine, ReconciliationResult
from .tracker import AssociationTracker

__all__ = [
    "DEFAULT_MAX_CONCURRENCY",
    "AssociationTracker",
    "ReconciliationEngine",
    "ReconciliationResult",
]
