"""Snapshot layer — immutable symbol databases and the providers that load them."""

from .internal import InternalNameClassifier, is_internal_name
from .loader import JsonSnapshotProvider, freeze_expr, load_snapshot
from .models import DeclKind, Declaration, Module, Snapshot

__all__ = [
    "DeclKind",
    "Declaration",
    "InternalNameClassifier",
    "JsonSnapshotProvider",
    "Module",
    "Snapshot",
    "freeze_expr",
    "is_internal_name",
    "load_snapshot",
]
