"""Concurrent batch runner with per-item failure isolation.

Each identifier moves through a small state machine::

    PENDING -> RESOLVING -> RESOLVED -> ACTING -> DONE
                        |                    \\-> ACTION_FAILED
                        \\-> RESOLUTION_FAILED

All identifiers are resolved concurrently, then every resolved identifier is
acted on concurrently, with at most ``concurrency`` directory calls in flight
when a limit is given. A failure ends the road for that identifier only: it
is recorded and reported, and its siblings carry on. Nothing is retried.
Exceptions raised by the runner itself, as opposed to by ``resolve`` or
``act``, propagate to the caller.
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from functools import partial
from typing import Any, Generic, Protocol, TypeVar

from ..utils.logging_utils import get_logger

R = TypeVar("R")
T = TypeVar("T")
W = TypeVar("W")

# Module logger
logger = get_logger(__name__)


class ItemState(str, Enum):
    """Lifecycle state of one identifier in a batch."""

    PENDING = "pending"
    RESOLVING = "resolving"
    RESOLVED = "resolved"
    ACTING = "acting"
    DONE = "done"
    ACTION_FAILED = "action_failed"
    RESOLUTION_FAILED = "resolution_failed"

    @property
    def is_terminal(self) -> bool:
        return self in (
            ItemState.DONE,
            ItemState.ACTION_FAILED,
            ItemState.RESOLUTION_FAILED,
        )


@dataclass
class ItemOutcome(Generic[R]):
    """Result cell for one identifier.

    Attributes:
        identifier: Operator-supplied identifier
        state: Current lifecycle state
        user_id: Resolved directory user ID, once resolution succeeded
        value: Value returned by the action on success
        error: Exception that ended the item, on failure
    """

    identifier: str
    state: ItemState = ItemState.PENDING
    user_id: str | None = None
    value: R | None = None
    error: BaseException | None = None

    @property
    def success(self) -> bool:
        return self.state is ItemState.DONE


@dataclass
class BatchResult(Generic[R]):
    """Outcomes of a batch, one per input identifier, in input order."""

    outcomes: list[ItemOutcome[R]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.outcomes)

    def __iter__(self):
        return iter(self.outcomes)

    @property
    def states(self) -> list[ItemState]:
        return [outcome.state for outcome in self.outcomes]

    @property
    def succeeded(self) -> list[ItemOutcome[R]]:
        return [outcome for outcome in self.outcomes if outcome.success]

    @property
    def failed(self) -> list[ItemOutcome[R]]:
        return [outcome for outcome in self.outcomes if not outcome.success]

    @property
    def values(self) -> list[R]:
        """Action values of the successful items, in input order."""
        return [outcome.value for outcome in self.succeeded]  # type: ignore[misc]

    def get_summary(self) -> dict[str, int]:
        """Count outcomes by terminal state.

        Returns:
            Dict[str, int]: Totals for the batch
        """
        return {
            "total": len(self.outcomes),
            "done": self.states.count(ItemState.DONE),
            "action_failed": self.states.count(ItemState.ACTION_FAILED),
            "resolution_failed": self.states.count(ItemState.RESOLUTION_FAILED),
        }


class BatchReporter(Protocol):
    """Receives item results as they settle.

    Calls arrive in completion order, which is not input order.
    """

    def resolution_failed(self, outcome: ItemOutcome) -> None:
        ...

    def action_succeeded(self, outcome: ItemOutcome) -> None:
        ...

    def action_failed(self, outcome: ItemOutcome) -> None:
        ...


class BatchRunner(Generic[R]):
    """Applies one operation to many identifiers without letting one failure
    stop the others."""

    def __init__(
        self,
        operation: str,
        reporter: BatchReporter | None = None,
        concurrency: int | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            operation: Operation name used in log records
            reporter: Optional receiver of per-item results
            concurrency: Maximum number of resolve or act calls in flight;
                unbounded when None

        Raises:
            ValueError: If concurrency is less than 1
        """
        if concurrency is not None and concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {concurrency}")
        self.operation = operation
        self.reporter = reporter
        self.concurrency = concurrency

    def _new_limiter(self) -> asyncio.Semaphore | None:
        # Created per run so the semaphore belongs to the running loop
        if self.concurrency is None:
            return None
        return asyncio.Semaphore(self.concurrency)

    async def _bounded(
        self,
        limiter: asyncio.Semaphore | None,
        func: Callable[..., Awaitable[T]],
        *args: Any,
    ) -> T:
        if limiter is None:
            return await func(*args)
        async with limiter:
            return await func(*args)

    def _log_context(self, outcome: ItemOutcome[R]) -> dict[str, str | None]:
        return {
            "identifier": outcome.identifier,
            "user_id": outcome.user_id,
            "operation": self.operation,
            "status": outcome.state.value,
        }

    async def _resolve_one(
        self,
        outcome: ItemOutcome[R],
        resolve: Callable[[str], Awaitable[str]],
        limiter: asyncio.Semaphore | None = None,
    ) -> None:
        outcome.state = ItemState.RESOLVING
        try:
            outcome.user_id = await self._bounded(
                limiter, resolve, outcome.identifier
            )
        except Exception as e:
            outcome.state = ItemState.RESOLUTION_FAILED
            outcome.error = e
            logger.warning(
                f"Couldn't resolve {outcome.identifier}: {e}",
                extra=self._log_context(outcome),
            )
            if self.reporter:
                self.reporter.resolution_failed(outcome)
            return
        outcome.state = ItemState.RESOLVED

    async def _act_one(
        self,
        outcome: ItemOutcome[R],
        action: Callable[[], Awaitable[R]],
        limiter: asyncio.Semaphore | None = None,
    ) -> None:
        outcome.state = ItemState.ACTING
        try:
            outcome.value = await self._bounded(limiter, action)
        except Exception as e:
            outcome.state = ItemState.ACTION_FAILED
            outcome.error = e
            logger.warning(
                f"{self.operation} failed for {outcome.user_id or outcome.identifier}: {e}",
                extra=self._log_context(outcome),
            )
            if self.reporter:
                self.reporter.action_failed(outcome)
            return
        outcome.state = ItemState.DONE
        logger.info(
            f"{self.operation} succeeded for {outcome.user_id or outcome.identifier}",
            extra=self._log_context(outcome),
        )
        if self.reporter:
            self.reporter.action_succeeded(outcome)

    def _finish(self, outcomes: list[ItemOutcome[R]]) -> BatchResult[R]:
        result = BatchResult(outcomes=outcomes)
        logger.info(
            f"{self.operation} finished: {result.get_summary()}",
            extra={"operation": self.operation, "status": "completed"},
        )
        return result

    async def run(
        self,
        identifiers: Sequence[str],
        resolve: Callable[[str], Awaitable[str]],
        act: Callable[[str], Awaitable[R]],
    ) -> BatchResult[R]:
        """Resolve and act on every identifier.

        Args:
            identifiers: Operator-supplied identifiers, duplicates allowed
            resolve: Turns an identifier into a user ID
            act: Performs the operation on a user ID

        Returns:
            BatchResult: One outcome per identifier, in input order
        """
        outcomes: list[ItemOutcome[R]] = [
            ItemOutcome(identifier=identifier) for identifier in identifiers
        ]

        limiter = self._new_limiter()
        await asyncio.gather(
            *(self._resolve_one(o, resolve, limiter) for o in outcomes)
        )

        resolved = [o for o in outcomes if o.state is ItemState.RESOLVED]
        await asyncio.gather(
            *(self._act_one(o, partial(act, o.user_id), limiter) for o in resolved)
        )

        return self._finish(outcomes)

    async def run_each(
        self,
        items: Sequence[W],
        act: Callable[[W], Awaitable[R]],
        describe: Callable[[W], str] = str,
    ) -> BatchResult[R]:
        """Act on work items that need no resolution, such as new users.

        Args:
            items: Work items
            act: Performs the operation on one item
            describe: Names an item in outcomes, logs and reports

        Returns:
            BatchResult: One outcome per item, in input order
        """
        outcomes: list[ItemOutcome[R]] = [
            ItemOutcome(identifier=describe(item), state=ItemState.RESOLVED)
            for item in items
        ]

        limiter = self._new_limiter()
        await asyncio.gather(
            *(
                self._act_one(outcome, partial(act, item), limiter)
                for outcome, item in zip(outcomes, items, strict=True)
            )
        )

        return self._finish(outcomes)


async def run_batch(
    identifiers: Sequence[str],
    resolve: Callable[[str], Awaitable[str]],
    act: Callable[[str], Awaitable[R]],
    operation: str = "batch",
    reporter: BatchReporter | None = None,
    concurrency: int | None = None,
) -> BatchResult[R]:
    """Resolve and act on every identifier with a one-off runner.

    See :meth:`BatchRunner.run`.
    """
    runner: BatchRunner[R] = BatchRunner(operation, reporter, concurrency)
    return await runner.run(identifiers, resolve, act)
