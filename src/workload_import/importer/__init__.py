"""
Import orchestration.

The ImportSession drives one upload from file selection to a single
bulk write; collaborators describe the store, notification and identity
surfaces it talks to.
"""

from workload_import.importer.collaborators import (
    BulkWriter,
    ConsoleNotifier,
    IdentityProvider,
    LogNotifier,
    MutationWriter,
    Notifier,
    NullNotifier,
    StaticIdentity,
)
from workload_import.importer.session import ImportOutcome, ImportSession, ImportState

__all__ = [
    "BulkWriter",
    "ConsoleNotifier",
    "IdentityProvider",
    "ImportOutcome",
    "ImportSession",
    "ImportState",
    "LogNotifier",
    "MutationWriter",
    "Notifier",
    "NullNotifier",
    "StaticIdentity",
]
