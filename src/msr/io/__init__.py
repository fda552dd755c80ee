"""Default in-memory implementation of the synchronous I/O contract."""

from __future__ import annotations

from ._state import IoState

__all__ = ["IoState"]
