from __future__ import annotations

import asyncio
from collections import deque
from enum import Enum
from typing import Callable, Deque, Optional

from loguru import logger

from enlighten.exceptions import GlossaryUnavailableError

DeferredTask = Callable[[], object]


class GateState(str, Enum):
    not_ready = "not_ready"
    ready = "ready"
    failed = "failed"


class ReadinessGate:
    """Holds glossary-dependent calls back until the glossary is usable.

    Calls admitted before the gate opens are queued and replayed once, in
    call order, when it opens. A failed gate drops its queue and rejects
    every later call.
    """

    def __init__(self) -> None:
        self.state = GateState.not_ready
        self.error: Optional[BaseException] = None
        self._queue: Deque[DeferredTask] = deque()
        self._settled = asyncio.Event()

    @property
    def is_open(self) -> bool:
        return self.state is GateState.ready

    @property
    def pending(self) -> int:
        return len(self._queue)

    def admit(self, task: DeferredTask) -> bool:
        if self.state is GateState.ready:
            return True
        if self.state is GateState.failed:
            raise GlossaryUnavailableError("Glossary could not be loaded", detail=str(self.error))
        self._queue.append(task)
        logger.debug("Glossary not ready; deferred call #{}", len(self._queue))
        return False

    def open(self) -> None:
        if self.state is not GateState.not_ready:
            return
        self.state = GateState.ready
        self._settled.set()
        logger.debug("Readiness gate open; replaying {} deferred call(s)", len(self._queue))
        while self._queue:
            task = self._queue.popleft()
            try:
                task()
            except Exception:
                logger.exception("Deferred call {} failed", task)

    def fail(self, error: BaseException) -> None:
        if self.state is not GateState.not_ready:
            return
        self.state = GateState.failed
        self.error = error
        if self._queue:
            logger.error("Dropping {} deferred call(s): {}", len(self._queue), error)
        self._queue.clear()
        self._settled.set()

    async def wait(self, timeout: Optional[float] = None) -> None:
        await asyncio.wait_for(self._settled.wait(), timeout)
        if self.state is GateState.failed:
            raise GlossaryUnavailableError("Glossary could not be loaded", detail=str(self.error))
