"""Bounded-retry waiters for Vercel preview deployments."""

from ._core import DEFAULT_ACTOR, AsyncWaiter, SyncWaiter

__all__ = ["DEFAULT_ACTOR", "SyncWaiter", "AsyncWaiter"]
