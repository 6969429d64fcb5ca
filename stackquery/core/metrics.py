"""Per-scan counters reported at the end of a request."""

import time
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class ScanMetrics:
    """Counters for one scan: pages, entities, rows, and how it ended."""

    table: str
    started_at: float = field(default_factory=time.monotonic)
    finished_at: Optional[float] = None

    pages_fetched: int = 0
    entities_listed: int = 0
    rows_emitted: int = 0
    cancelled: bool = False
    failures: list[dict[str, Any]] = field(default_factory=list)

    def record_page(self, entity_count: int) -> None:
        """Count one decoded page and the entities it carried."""
        self.pages_fetched += 1
        self.entities_listed += entity_count

    def record_row(self) -> None:
        self.rows_emitted += 1

    def record_cancel(self) -> None:
        self.cancelled = True

    def record_error(self, error: Exception, context: Optional[dict[str, Any]] = None) -> None:
        """Keep the type, text and context of a failure that ended the scan."""
        self.failures.append(
            {
                "error_type": type(error).__name__,
                "error_message": str(error),
                "context": dict(context or {}),
            }
        )

    def finish(self) -> None:
        if self.finished_at is None:
            self.finished_at = time.monotonic()

    @property
    def errors(self) -> int:
        return len(self.failures)

    @property
    def execution_time(self) -> float:
        end = self.finished_at if self.finished_at is not None else time.monotonic()
        return end - self.started_at

    @property
    def outcome(self) -> str:
        if self.failures:
            return "failed"
        if self.cancelled:
            return "cancelled"
        return "completed"

    def to_dict(self) -> dict[str, Any]:
        elapsed = self.execution_time
        return {
            "table": self.table,
            "outcome": self.outcome,
            "execution_time": elapsed,
            "pages_fetched": self.pages_fetched,
            "entities_listed": self.entities_listed,
            "rows_emitted": self.rows_emitted,
            "rows_per_second": self.rows_emitted / elapsed if elapsed > 0 else 0.0,
            "cancelled": self.cancelled,
            "errors": self.errors,
            "error_details": self.failures,
        }

    def get_summary(self) -> str:
        """One-line summary, e.g. ``Table: openstack_port | Pages: 3 | Rows: 250 | 0.84s``."""
        self.finish()
        parts = [
            f"Table: {self.table}",
            f"Pages: {self.pages_fetched}",
            f"Rows: {self.rows_emitted}",
            f"{self.execution_time:.2f}s",
        ]
        if self.cancelled:
            parts.append("Cancelled")
        if self.failures:
            parts.append(f"Errors: {self.errors}")
        return " | ".join(parts)
