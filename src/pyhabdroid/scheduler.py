"""Caller-owned retry loop around item update attempts."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
import inspect
import logging

from .config import RetryPolicy
from .models import UpdateOutcome, UpdateRequest
from .updater import ItemUpdater

_LOGGER = logging.getLogger(__name__)

OutcomeCallback = Callable[[UpdateOutcome], Awaitable[None]]


@dataclass
class _PendingRun:
    task: asyncio.Task
    superseded: asyncio.Event


class ItemUpdateScheduler:
    """Runs item updates to a terminal outcome, retrying with backoff.

    Updates for different items run concurrently. Scheduling an update for
    an item that still has a pending run replaces that run: the old run stops
    at its next backoff wait, an attempt already in flight completes first.

    Attributes:
        _updater (ItemUpdater): Executes single attempts.
        _policy (RetryPolicy): Backoff between attempts.
        _on_outcome (OutcomeCallback | None): Async function called with each
                                              terminal outcome.
        _pending (dict[str, _PendingRun]): Runs not yet finished, by item name.

    """

    def __init__(
        self,
        updater: ItemUpdater,
        policy: RetryPolicy | None = None,
        on_outcome: OutcomeCallback | None = None,
    ) -> None:
        """Initialize the scheduler.

        Raises:
            TypeError: If `on_outcome` is given but is not an async function.

        """
        if on_outcome is not None and not inspect.iscoroutinefunction(on_outcome):
            err_msg = "on_outcome must be an async function"
            raise TypeError(err_msg)
        self._updater = updater
        self._policy = policy or RetryPolicy()
        self._on_outcome = on_outcome
        self._pending: dict[str, _PendingRun] = {}

    async def run(
        self,
        request: UpdateRequest,
        superseded: asyncio.Event | None = None,
    ) -> UpdateOutcome | None:
        """Attempt the update until it reaches a terminal outcome.

        Returns None if the run was superseded while waiting for a retry.
        """
        attempt_number = 0
        while True:
            result = await self._updater.execute(request, attempt_number)
            if isinstance(result, UpdateOutcome):
                _LOGGER.info(
                    "Update of item '%s' finished after %d attempt(s): %s",
                    request.item,
                    attempt_number + 1,
                    "success" if result.success else f"HTTP {result.http_status}",
                )
                await self._report(result)
                return result

            delay = self._policy.delay_for(attempt_number)
            _LOGGER.info(
                "Retrying update of item '%s' in %.1f s (attempt %d failed: %s)",
                request.item,
                delay,
                attempt_number,
                result.reason,
            )
            if superseded is None:
                await asyncio.sleep(delay)
            else:
                try:
                    await asyncio.wait_for(superseded.wait(), timeout=delay)
                except TimeoutError:
                    pass
                else:
                    _LOGGER.info(
                        "Pending update of item '%s' superseded by a newer one",
                        request.item,
                    )
                    return None
            attempt_number += 1

    def schedule(self, request: UpdateRequest) -> asyncio.Task:
        """Run the update in the background, replacing a pending one."""
        previous = self._pending.get(request.item)
        superseded = asyncio.Event()
        task = asyncio.create_task(self._run_after(previous, request, superseded))
        self._pending[request.item] = _PendingRun(task, superseded)
        task.add_done_callback(lambda done: self._forget(request.item, done))
        _LOGGER.debug("Scheduled update of item '%s' to %s", request.item, request.value)
        return task

    @property
    def pending_items(self) -> list[str]:
        """Return the names of items with an unfinished update."""
        return list(self._pending)

    async def wait_all(self) -> list[UpdateOutcome]:
        """Wait for all scheduled updates and return their terminal outcomes."""
        outcomes: list[UpdateOutcome] = []
        while self._pending:
            tasks = [pending.task for pending in self._pending.values()]
            results = await asyncio.gather(*tasks)
            outcomes.extend(result for result in results if result is not None)
        return outcomes

    async def _run_after(
        self,
        previous: _PendingRun | None,
        request: UpdateRequest,
        superseded: asyncio.Event,
    ) -> UpdateOutcome | None:
        if previous is not None and not previous.task.done():
            previous.superseded.set()
            await asyncio.wait([previous.task])
        return await self.run(request, superseded)

    def _forget(self, item_name: str, task: asyncio.Task) -> None:
        pending = self._pending.get(item_name)
        if pending is not None and pending.task is task:
            del self._pending[item_name]

    async def _report(self, outcome: UpdateOutcome) -> None:
        if self._on_outcome is None:
            return
        try:
            await self._on_outcome(outcome)
        except Exception:  # Catches errors in the callback
            _LOGGER.exception("Error processing outcome of item '%s'", outcome.item)
