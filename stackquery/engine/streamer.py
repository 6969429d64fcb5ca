"""Streaming of entities to a row sink with cooperative cancellation."""

import logging
from typing import Any, Callable, Iterable, Optional, Protocol, runtime_checkable

from stackquery.tables.projection import Projector, Row

logger = logging.getLogger(__name__)

RowSink = Callable[[Row], None]


@runtime_checkable
class CancelSignal(Protocol):
    """Anything that can report cancellation; threading.Event qualifies."""

    def is_set(self) -> bool: ...


def stream(
    entities: Iterable[dict[str, Any]],
    projector: Projector,
    sink: RowSink,
    cancel: Optional[CancelSignal] = None,
    on_row: Optional[Callable[[], None]] = None,
    on_cancel: Optional[Callable[[], None]] = None,
) -> int:
    """Project entities to rows and hand them to the sink, in order.

    Cancellation is checked before each entity is requested from the
    sequence and again before it is emitted, so once cancelled no further
    page is fetched. A sink call is never interrupted. Cancellation is not
    an error: the function simply returns.

    Args:
        entities: Lazy entity sequence, usually from list_entities().
        projector: Turns an entity into a row.
        sink: Receives each row synchronously.
        cancel: Optional cancellation signal.
        on_row: Called after each row is delivered.
        on_cancel: Called once if the stream stops on cancellation before
            the sequence is exhausted.

    Returns:
        Number of rows delivered to the sink.

    Raises:
        ListError: Propagated from the sequence, after earlier rows were delivered.
    """
    emitted = 0
    iterator = iter(entities)
    try:
        while True:
            if _cancelled(cancel):
                _stop(emitted, on_cancel)
                break
            try:
                entity = next(iterator)
            except StopIteration:
                break
            if _cancelled(cancel):
                _stop(emitted, on_cancel)
                break

            sink(projector.project(entity))
            emitted += 1
            if on_row is not None:
                on_row()
    finally:
        close = getattr(iterator, "close", None)
        if close is not None:
            close()

    return emitted


def _stop(emitted: int, on_cancel: Optional[Callable[[], None]]) -> None:
    logger.debug("Cancelled, stopping stream", extra={"context": {"rows": emitted}})
    if on_cancel is not None:
        on_cancel()


def _cancelled(cancel: Optional[CancelSignal]) -> bool:
    return cancel is not None and cancel.is_set()
