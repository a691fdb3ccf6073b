from abc import ABC, abstractmethod

from errorkit.errors.models import AuditEntry


class BaseAuditSink(ABC):
    """Contract for all durable audit sinks."""

    @abstractmethod
    async def write(self, entry: AuditEntry) -> None:
        """Persist one audit entry.

        Args:
            entry: The audit payload built from a NormalizedError.

        Raises:
            AuditWriteError: when the entry cannot be persisted.
        """
