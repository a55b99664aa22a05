"""Engine Layer - cache-aware fragment rendering pipeline

This module provides the core engine layer for the catalog widget:
- CacheGate: get-or-compose-and-store around a fragment render
- ResultComposer: ordered product composition with selection expansion
- TagInvalidationAnnotator: cache tags and expiry from composed entities
- ErrorAccumulator: fault boundary that fills the view error list
- ComposeResult: tagged Ok / Fault composition outcome
- ViewState: explicit per-request view accumulator
"""

from .cache_gate import CacheGate, RenderRequest
from .composer import Composition, ResultComposer, compose_codes, order_by_codes
from .errors import GENERIC_ERROR_MESSAGE, ErrorAccumulator
from .result import ComposeResult, ComposeStatus, FaultKind
from .tags import TagInvalidationAnnotator, entity_tag
from .view import ViewState

__all__ = [
    "CacheGate",
    "RenderRequest",
    "ResultComposer",
    "Composition",
    "compose_codes",
    "order_by_codes",
    "ErrorAccumulator",
    "GENERIC_ERROR_MESSAGE",
    "ComposeResult",
    "ComposeStatus",
    "FaultKind",
    "TagInvalidationAnnotator",
    "entity_tag",
    "ViewState",
]
