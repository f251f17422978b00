"""
Interfaces to the pipeline's external collaborators.

The bulk-write store, the notification surface and the identity provider
live outside this package. They are described here as protocols, with
small implementations for logging, console use and wiring to an existing
per-entity mutation API.
"""

from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any, Protocol

from rich.console import Console

from workload_import.errors import NotAuthenticatedError
from workload_import.schemas.entities import EntityKind, EntitySchema
from workload_import.transform.records import TypedRecord
from workload_import.utils.logging import get_logger

log = get_logger(__name__)


class BulkWriter(Protocol):
    """Commits an entire validated batch in one call, or raises."""

    async def bulk_import(
        self, schema: EntitySchema, records: Sequence[TypedRecord]
    ) -> Any: ...


class Notifier(Protocol):
    """Fire-and-forget user messages."""

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class IdentityProvider(Protocol):
    """Supplies the caller identity, or raises NotAuthenticatedError."""

    def current_identity(self) -> str: ...


class MutationWriter:
    """
    Bulk writer backed by one async mutation per entity.

    Each mutation is called with the batch under the entity's payload key,
    e.g. ``await mutations[EntityKind.MODULES](modules=[...])``.
    """

    def __init__(self, mutations: Mapping[EntityKind, Callable[..., Awaitable[Any]]]) -> None:
        self.mutations = dict(mutations)

    async def bulk_import(self, schema: EntitySchema, records: Sequence[TypedRecord]) -> Any:
        if schema.kind not in self.mutations:
            msg = f"No bulk import mutation registered for {schema.kind.value}"
            raise KeyError(msg)
        mutation = self.mutations[schema.kind]
        return await mutation(**{schema.payload_key: list(records)})


class LogNotifier:
    """Notifier that writes user messages to the structured log."""

    def success(self, message: str) -> None:
        log.info("User notification", level="success", message=message)

    def error(self, message: str) -> None:
        log.warning("User notification", level="error", message=message)


class NullNotifier:
    """Notifier that discards all messages."""

    def success(self, message: str) -> None:
        pass

    def error(self, message: str) -> None:
        pass


class ConsoleNotifier:
    """Notifier that prints user messages to a Rich console."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def success(self, message: str) -> None:
        self.console.print(f"[green]{message}[/green]")

    def error(self, message: str) -> None:
        self.console.print(f"[red]{message}[/red]")


class StaticIdentity:
    """Identity provider with a fixed caller, e.g. from configuration."""

    def __init__(self, identity: str | None) -> None:
        self.identity = identity

    def current_identity(self) -> str:
        if not self.identity:
            msg = "Not authenticated"
            raise NotAuthenticatedError(msg)
        return self.identity
