"""Shared fixtures: settings and sample directory payloads."""

from __future__ import annotations

from typing import Any

import pytest

from meteoprog_informers.config import Settings

API_URL = "https://billing.meteoprog.com/api/informers"


@pytest.fixture()
def settings() -> Settings:
    return Settings(site={"home_url": "https://a.test/blog"})


@pytest.fixture()
def sample_payload() -> list[dict[str, Any]]:
    return [
        {
            "informer_id": "z1",
            "domain": "https://a.test",
            "active": 1,
            "created_at": "2025-09-30T19:07:37.000000Z",
        },
        {
            "informer_id": "z2",
            "domain": "https://other.test",
            "active": 0,
            "created_at": "2025-09-30T19:07:37.000000Z",
        },
    ]
