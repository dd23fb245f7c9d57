"""Per-call context handed by the transport to the service layer."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, resolved by the gateway before the call."""

    user_id: int


@dataclass(frozen=True)
class CallContext:
    """Identity, deadline and disconnect probe of one inbound call.

    `deadline` is an absolute value on the running loop's clock
    (`loop.time()`); `None` means the call has no deadline.
    """

    identity: Optional[Identity] = None
    deadline: Optional[float] = None
    is_disconnected: Optional[Callable[[], Awaitable[bool]]] = None

    @classmethod
    def with_timeout(
        cls,
        timeout_seconds: Optional[float],
        identity: Optional[Identity] = None,
        is_disconnected: Optional[Callable[[], Awaitable[bool]]] = None,
    ) -> 'CallContext':
        """Build a context whose deadline is `timeout_seconds` from now."""
        deadline = None
        if timeout_seconds is not None:
            deadline = asyncio.get_running_loop().time() + timeout_seconds
        return cls(
            identity=identity,
            deadline=deadline,
            is_disconnected=is_disconnected,
        )

    def remaining(self) -> Optional[float]:
        """Seconds left until the deadline (never negative)."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - asyncio.get_running_loop().time())

    def deadline_exceeded(self) -> bool:
        return self.deadline is not None and self.remaining() == 0.0

    async def cancelled(self) -> bool:
        if self.is_disconnected is None:
            return False
        return await self.is_disconnected()
