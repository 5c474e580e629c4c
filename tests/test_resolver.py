import asyncio

import pytest

from nexuslookup.lookup.errors import LookupCancelledError, SourceError
from nexuslookup.lookup.resolver import SYNTHETIC_TIER, CancelToken, FallbackResolver, Tier


def _recording_tier(name: str, calls: list, result=None, error: Exception | None = None, delay: float = 0.0):
    async def run(**kwargs):
        calls.append((name, kwargs))
        if delay:
            await asyncio.sleep(delay)
        if error:
            raise error
        return result

    return Tier(name=name, run=run, timeout=1.0)


@pytest.mark.asyncio
async def test_first_successful_tier_wins() -> None:
    calls: list = []
    tiers = [
        _recording_tier("primary", calls, result=["p"]),
        _recording_tier("secondary", calls, result=["s"]),
    ]

    resolution = await FallbackResolver().resolve("search", tiers, lambda: ["synthetic"], query="q")

    assert resolution.value == ["p"]
    assert resolution.source == "primary"
    assert resolution.simulated is False
    assert calls == [("primary", {"query": "q"})]


@pytest.mark.asyncio
async def test_failure_falls_through_without_retry() -> None:
    calls: list = []
    tiers = [
        _recording_tier("primary", calls, error=SourceError("bad payload")),
        _recording_tier("secondary", calls, result=["s"]),
    ]

    resolution = await FallbackResolver().resolve("search", tiers, lambda: ["synthetic"])

    assert resolution.value == ["s"]
    assert resolution.source == "secondary"
    assert resolution.failures == [("primary", "bad payload")]
    assert [name for name, _ in calls] == ["primary", "secondary"]


@pytest.mark.asyncio
async def test_rejected_result_falls_through() -> None:
    calls: list = []
    tiers = [
        _recording_tier("primary", calls, result=[]),
        _recording_tier("secondary", calls, result=["s"]),
    ]

    resolution = await FallbackResolver().resolve("search", tiers, lambda: ["synthetic"], accept=bool)

    assert resolution.source == "secondary"
    assert resolution.failures == [("primary", "empty result")]


@pytest.mark.asyncio
async def test_all_tiers_failing_ends_in_synthesis() -> None:
    calls: list = []
    tiers = [
        _recording_tier("primary", calls, error=RuntimeError("down")),
        _recording_tier("secondary", calls, error=ValueError()),
    ]

    resolution = await FallbackResolver().resolve("weather", tiers, lambda: "simulated")

    assert resolution.value == "simulated"
    assert resolution.source == SYNTHETIC_TIER
    assert resolution.simulated is True
    assert resolution.failures == [("primary", "down"), ("secondary", "ValueError")]


@pytest.mark.asyncio
async def test_slow_tier_times_out_and_falls_through() -> None:
    calls: list = []

    async def slow(**kwargs):
        await asyncio.sleep(5)
        return ["late"]

    tiers = [Tier(name="slow", run=slow, timeout=0.05), _recording_tier("fast", calls, result=["f"])]

    resolution = await FallbackResolver().resolve("search", tiers, lambda: ["synthetic"])

    assert resolution.value == ["f"]
    assert resolution.failures[0][0] == "slow"
    assert "timed out" in resolution.failures[0][1]


@pytest.mark.asyncio
async def test_pre_cancelled_token_stops_before_any_tier() -> None:
    calls: list = []
    token = CancelToken()
    token.cancel()

    with pytest.raises(LookupCancelledError):
        await FallbackResolver().resolve(
            "search", [_recording_tier("primary", calls, result=["p"])], lambda: ["synthetic"], cancel=token
        )
    assert calls == []


@pytest.mark.asyncio
async def test_cancel_during_tier_aborts_without_synthesis() -> None:
    calls: list = []
    synthesized: list = []
    token = CancelToken()
    tiers = [
        _recording_tier("primary", calls, result=["p"], delay=5.0),
        _recording_tier("secondary", calls, result=["s"]),
    ]

    async def cancel_soon() -> None:
        await asyncio.sleep(0.05)
        token.cancel()

    canceller = asyncio.create_task(cancel_soon())
    loop = asyncio.get_running_loop()
    started = loop.time()
    with pytest.raises(LookupCancelledError) as exc_info:
        await FallbackResolver().resolve(
            "search", tiers, lambda: synthesized.append(1) or ["synthetic"], cancel=token
        )
    await canceller

    assert loop.time() - started < 1.0
    assert exc_info.value.tier == "primary"
    assert [name for name, _ in calls] == ["primary"]
    assert synthesized == []


@pytest.mark.asyncio
async def test_task_cancellation_propagates() -> None:
    calls: list = []
    tiers = [_recording_tier("primary", calls, result=["p"], delay=5.0)]

    task = asyncio.create_task(
        FallbackResolver().resolve("search", tiers, lambda: ["synthetic"], cancel=CancelToken())
    )
    await asyncio.sleep(0.05)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
