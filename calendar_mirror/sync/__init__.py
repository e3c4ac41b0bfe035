"""Sync engine for Calendar Mirror."""

from .engine import SyncEngine, SyncDirection, SyncResult, SyncChange
from .changes import ChangeDetector, ChangeKind, compute_fingerprint
from .guard import LoopGuard
from .recurrence import RecurrenceResolver
from .redaction import Redactor, PLACEHOLDER
from .state import StateStore

__all__ = [
    'SyncEngine', 'SyncDirection', 'SyncResult', 'SyncChange',
    'ChangeDetector', 'ChangeKind', 'compute_fingerprint',
    'LoopGuard', 'RecurrenceResolver',
    'Redactor', 'PLACEHOLDER',
    'StateStore',
]
