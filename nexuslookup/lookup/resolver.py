"""Ordered fallback chains: network tiers first, synthesis last."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from loguru import logger

from nexuslookup.lookup.errors import LookupCancelledError
from nexuslookup.lookup.models import Resolution

T = TypeVar("T")

SYNTHETIC_TIER = "synthetic"


@dataclass(frozen=True, slots=True)
class Tier(Generic[T]):
    """One source in a fallback chain."""

    name: str
    run: Callable[..., Awaitable[T]]
    timeout: float = 8.0


class CancelToken:
    """Caller-side abort signal shared with an in-flight lookup."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    async def wait(self) -> None:
        await self._event.wait()


def _always(_value: Any) -> bool:
    return True


class FallbackResolver:
    """Try tiers in declared order until one yields an acceptable value."""

    async def resolve(
        self,
        capability: str,
        tiers: Sequence[Tier[T]],
        synthesize: Callable[[], T],
        *,
        accept: Callable[[T], bool] = _always,
        cancel: CancelToken | None = None,
        **kwargs: Any,
    ) -> Resolution[T]:
        failures: list[tuple[str, str]] = []

        for tier in tiers:
            if cancel is not None and cancel.cancelled:
                raise LookupCancelledError(capability, tier.name)

            logger.debug("{}: trying {}", capability, tier.name)
            try:
                value = await self._attempt(capability, tier, cancel, kwargs)
            except LookupCancelledError:
                raise
            except asyncio.TimeoutError:
                logger.warning("{}: {} timed out after {}s", capability, tier.name, tier.timeout)
                failures.append((tier.name, f"timed out after {tier.timeout}s"))
                continue
            except Exception as e:
                logger.warning("{}: {} failed: {}", capability, tier.name, e)
                failures.append((tier.name, str(e) or type(e).__name__))
                continue

            if accept(value):
                return Resolution(value=value, source=tier.name, failures=failures)
            logger.info("{}: {} returned nothing usable", capability, tier.name)
            failures.append((tier.name, "empty result"))

        if cancel is not None and cancel.cancelled:
            raise LookupCancelledError(capability)

        logger.info("{}: falling back to synthetic data", capability)
        return Resolution(value=synthesize(), source=SYNTHETIC_TIER, simulated=True, failures=failures)

    async def _attempt(
        self,
        capability: str,
        tier: Tier[T],
        cancel: CancelToken | None,
        kwargs: dict[str, Any],
    ) -> T:
        call = asyncio.wait_for(tier.run(**kwargs), timeout=tier.timeout)
        if cancel is None:
            return await call

        work = asyncio.ensure_future(call)
        stop = asyncio.ensure_future(cancel.wait())
        try:
            await asyncio.wait({work, stop}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (work, stop):
                if not task.done():
                    task.cancel()

        if not work.done() or work.cancelled():
            # The token fired first; make sure the attempt has unwound.
            await asyncio.gather(work, return_exceptions=True)
            raise LookupCancelledError(capability, tier.name)
        return work.result()
