"""Rate limiting state."""

from __future__ import annotations

from pydantic import BaseModel


class RateLimitRecord(BaseModel):
    """Request counter for one client address within one fixed window."""

    key: str
    count: int = 1
    window_reset_at: float  # epoch seconds
