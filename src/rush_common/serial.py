"""Single serialization point for every state-changing operation.

place / resolve / fund / withdraw all run inside OperationGuard.run(), so
within one process no two of them interleave. Cross-process ordering comes
from the SELECT ... FOR UPDATE on the house_pool row taken by each operation.

A callback that tries to start another guarded operation from inside a running
one (same task context, e.g. a swap venue hook) is rejected instead of
deadlocking on the lock.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from contextvars import ContextVar

from src.rush_common.errors import ReentrantCallError

logger = logging.getLogger(__name__)

_active_operation: ContextVar[str | None] = ContextVar("rush_active_operation", default=None)


class OperationGuard:
    def __init__(self) -> None:
        self._lock = asyncio.Lock()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    @asynccontextmanager
    async def run(self, operation: str) -> AsyncIterator[None]:
        current = _active_operation.get()
        if current is not None:
            logger.warning("Rejected re-entrant %s while %s in progress", operation, current)
            raise ReentrantCallError(operation)
        async with self._lock:
            token = _active_operation.set(operation)
            try:
                yield
            finally:
                _active_operation.reset(token)


operation_guard = OperationGuard()
