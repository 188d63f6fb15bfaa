"""Tests for the concurrent batch runner."""

import asyncio

import pytest

from brandpy.core.exceptions import UserNotFoundError
from brandpy.operations.batch_runner import (
    BatchResult,
    BatchRunner,
    ItemOutcome,
    ItemState,
    run_batch,
)


class RecordingReporter:
    """Collects reporter callbacks in call order."""

    def __init__(self):
        self.events = []

    def resolution_failed(self, outcome):
        self.events.append(("resolution_failed", outcome.identifier))

    def action_succeeded(self, outcome):
        self.events.append(("action_succeeded", outcome.identifier))

    def action_failed(self, outcome):
        self.events.append(("action_failed", outcome.identifier))


async def resolve_by_prefix(identifier):
    """Resolve identifiers starting with 'ok' or 'fail'; anything else is unknown."""
    await asyncio.sleep(0)
    if identifier.startswith(("ok", "fail")):
        return f"id-{identifier}"
    raise UserNotFoundError(f"No user found for {identifier}")


async def act_unless_fail(user_id):
    await asyncio.sleep(0)
    if "fail" in user_id:
        raise RuntimeError("boom")
    return user_id.upper()


class TestItemState:
    """Test lifecycle states."""

    def test_terminal_states(self):
        assert ItemState.DONE.is_terminal
        assert ItemState.ACTION_FAILED.is_terminal
        assert ItemState.RESOLUTION_FAILED.is_terminal

    def test_intermediate_states(self):
        for state in (
            ItemState.PENDING,
            ItemState.RESOLVING,
            ItemState.RESOLVED,
            ItemState.ACTING,
        ):
            assert not state.is_terminal


class TestBatchRunnerRun:
    """Test resolve-then-act batches."""

    def test_one_outcome_per_identifier_in_input_order(self):
        identifiers = ["ok1", "missing", "fail1", "ok2", "missing2"]
        result = asyncio.run(
            run_batch(identifiers, resolve_by_prefix, act_unless_fail)
        )

        assert len(result) == len(identifiers)
        assert [o.identifier for o in result] == identifiers
        assert result.states == [
            ItemState.DONE,
            ItemState.RESOLUTION_FAILED,
            ItemState.ACTION_FAILED,
            ItemState.DONE,
            ItemState.RESOLUTION_FAILED,
        ]

    def test_every_outcome_is_terminal(self):
        result = asyncio.run(
            run_batch(["ok", "nope", "fail"], resolve_by_prefix, act_unless_fail)
        )
        assert all(state.is_terminal for state in result.states)

    def test_resolution_failures_are_not_acted_on(self):
        acted = []

        async def act(user_id):
            acted.append(user_id)
            return user_id

        asyncio.run(run_batch(["ok1", "nope", "ok2"], resolve_by_prefix, act))

        assert sorted(acted) == ["id-ok1", "id-ok2"]

    def test_outcome_fields(self):
        result = asyncio.run(
            run_batch(["ok", "nope", "fail"], resolve_by_prefix, act_unless_fail)
        )
        done, unresolved, failed = result.outcomes

        assert done.user_id == "id-ok"
        assert done.value == "ID-OK"
        assert done.error is None
        assert done.success

        assert unresolved.user_id is None
        assert isinstance(unresolved.error, UserNotFoundError)

        assert failed.user_id == "id-fail"
        assert isinstance(failed.error, RuntimeError)
        assert failed.value is None

    def test_duplicates_produce_separate_outcomes(self):
        result = asyncio.run(
            run_batch(["ok", "ok"], resolve_by_prefix, act_unless_fail)
        )
        assert result.states == [ItemState.DONE, ItemState.DONE]

    def test_empty_batch(self):
        result = asyncio.run(run_batch([], resolve_by_prefix, act_unless_fail))
        assert len(result) == 0
        assert result.get_summary()["total"] == 0

    def test_reporter_receives_each_settled_item(self):
        reporter = RecordingReporter()
        asyncio.run(
            run_batch(
                ["ok", "nope", "fail"],
                resolve_by_prefix,
                act_unless_fail,
                reporter=reporter,
            )
        )
        assert sorted(reporter.events) == [
            ("action_failed", "fail"),
            ("action_succeeded", "ok"),
            ("resolution_failed", "nope"),
        ]

    def test_actions_run_concurrently(self):
        """All actions start before any of them completes."""
        started = []
        release = asyncio.Event()

        async def resolve(identifier):
            return identifier

        async def act(user_id):
            started.append(user_id)
            if len(started) == 3:
                release.set()
            await asyncio.wait_for(release.wait(), timeout=1)
            return user_id

        result = asyncio.run(run_batch(["a", "b", "c"], resolve, act))
        assert result.states == [ItemState.DONE] * 3

    def test_runner_errors_propagate(self):
        """A reporter bug is not an item failure."""

        class BrokenReporter(RecordingReporter):
            def action_succeeded(self, outcome):
                raise KeyError("reporter bug")

        with pytest.raises(KeyError):
            asyncio.run(
                run_batch(
                    ["ok"],
                    resolve_by_prefix,
                    act_unless_fail,
                    reporter=BrokenReporter(),
                )
            )

    def test_concurrency_limit_is_respected(self):
        """No more than ``concurrency`` calls are in flight at once."""
        in_flight = 0
        peak = 0

        async def tracked(value):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return value

        runner = BatchRunner("limited", concurrency=2)
        result = asyncio.run(runner.run(list("abcdef"), tracked, tracked))

        assert result.states == [ItemState.DONE] * 6
        assert peak == 2

    def test_concurrency_limit_applies_to_run_each(self):
        in_flight = 0
        peak = 0

        async def act(item):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return item

        result = asyncio.run(
            BatchRunner("limited", concurrency=3).run_each(range(9), act)
        )

        assert len(result.values) == 9
        assert peak == 3

    def test_run_batch_passes_concurrency(self):
        in_flight = 0
        peak = 0

        async def act(user_id):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return user_id

        async def resolve(identifier):
            return identifier

        asyncio.run(run_batch(list("abcd"), resolve, act, concurrency=1))
        assert peak == 1

    @pytest.mark.parametrize("concurrency", [0, -1])
    def test_invalid_concurrency(self, concurrency):
        with pytest.raises(ValueError, match="concurrency"):
            BatchRunner("x", concurrency=concurrency)


class TestBatchRunnerRunEach:
    """Test batches of work items that need no resolution."""

    def test_run_each_preserves_order(self):
        async def act(item):
            if item == 2:
                raise ValueError("two")
            return item * 10

        runner = BatchRunner("multiply")
        result = asyncio.run(runner.run_each([1, 2, 3], act))

        assert [o.identifier for o in result] == ["1", "2", "3"]
        assert result.states == [
            ItemState.DONE,
            ItemState.ACTION_FAILED,
            ItemState.DONE,
        ]
        assert result.values == [10, 30]

    def test_describe_names_items(self):
        async def act(item):
            return item

        runner = BatchRunner("echo")
        result = asyncio.run(
            runner.run_each([{"name": "x"}], act, describe=lambda i: i["name"])
        )
        assert result.outcomes[0].identifier == "x"


class TestBatchResult:
    """Test result helpers."""

    def test_summary_counts(self):
        result = BatchResult(
            outcomes=[
                ItemOutcome("a", ItemState.DONE, "id-a", "A"),
                ItemOutcome("b", ItemState.ACTION_FAILED, "id-b"),
                ItemOutcome("c", ItemState.RESOLUTION_FAILED),
                ItemOutcome("d", ItemState.DONE, "id-d", "D"),
            ]
        )

        assert result.get_summary() == {
            "total": 4,
            "done": 2,
            "action_failed": 1,
            "resolution_failed": 1,
        }
        assert [o.identifier for o in result.succeeded] == ["a", "d"]
        assert [o.identifier for o in result.failed] == ["b", "c"]
        assert result.values == ["A", "D"]
