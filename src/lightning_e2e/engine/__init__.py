"""
Engine module - Resilient interaction and synchronization layer.

Components:
- SelectorResolver: first-visible-wins resolution over ordered candidates
- WaitEngine: spinner and page readiness waits
- ToastObserver: capture transient toast notifications
- RecordIdExtractor: record id from post-save navigation
- InterstitialHandler: post-login interstitial state machine
- LightningToolkit: the above composed for page objects
"""

from lightning_e2e.engine.selectors import (
    InteractionTarget,
    RoleQuery,
    ProbeResult,
    ProbeOutcome,
)
from lightning_e2e.engine.target_resolver import (
    SelectorResolver,
    ResolvedTarget,
    ResolutionStrategy,
)
from lightning_e2e.engine.wait_engine import (
    WaitEngine,
    WaitCondition,
    SPINNER_SELECTORS,
)
from lightning_e2e.engine.toast_observer import (
    ToastObserver,
    ToastMessage,
    ToastKind,
)
from lightning_e2e.engine.record_id import (
    RecordIdExtractor,
    NavigationOutcome,
    RECORD_VIEW_PATTERN,
    parse_record_id,
)
from lightning_e2e.engine.interstitials import (
    InterstitialHandler,
    InterstitialPrompt,
    HandlerState,
    SessionState,
)
from lightning_e2e.engine.toolkit import (
    LightningToolkit,
    SaveConfirmation,
)

__all__ = [
    "InteractionTarget",
    "RoleQuery",
    "ProbeResult",
    "ProbeOutcome",
    "SelectorResolver",
    "ResolvedTarget",
    "ResolutionStrategy",
    "WaitEngine",
    "WaitCondition",
    "SPINNER_SELECTORS",
    "ToastObserver",
    "ToastMessage",
    "ToastKind",
    "RecordIdExtractor",
    "NavigationOutcome",
    "RECORD_VIEW_PATTERN",
    "parse_record_id",
    "InterstitialHandler",
    "InterstitialPrompt",
    "HandlerState",
    "SessionState",
    "LightningToolkit",
    "SaveConfirmation",
]
