from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel


class TransientEntry(BaseModel):
    """A TTL-bearing value read from the option store."""

    key: str
    value: Any  # Decoded JSON payload
    stored_at: datetime
    expires_at: datetime
