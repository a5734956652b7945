"""CLI tests: in-process command handling plus one real subprocess run."""

from __future__ import annotations

import subprocess
import sys
from typing import TYPE_CHECKING

import httpx
import pytest
import respx

from meteoprog_informers.cli import build_parser, run_command
from meteoprog_informers.informers import OPT_API_KEY, OPT_DEFAULT_ID, cache_key_for

if TYPE_CHECKING:
    from pathlib import Path

    from meteoprog_informers.state import AppState

API_URL = "https://billing.meteoprog.com/api/informers"


async def _run(state: AppState, *argv: str) -> int:
    return await run_command(build_parser().parse_args(argv), state)


class TestKeyCommands:
    async def test_set_key_masks_output(
        self, app_state: AppState, capsys: pytest.CaptureFixture[str]
    ) -> None:
        key = "550e8400-e29b-41d4-a716-446655440000"
        assert await _run(app_state, "set-key", key) == 0
        assert await app_state.store.get_option(OPT_API_KEY) == key
        out = capsys.readouterr().out
        assert "550e********440000" in out
        assert key not in out

    async def test_set_key_requires_value(self, app_state: AppState) -> None:
        assert await _run(app_state, "set-key", "  ") == 1

    async def test_get_key_unset(
        self, app_state: AppState, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert await _run(app_state, "get-key") == 0
        assert "not set" in capsys.readouterr().err


class TestDefaultCommands:
    async def test_set_and_get_default(
        self, app_state: AppState, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert await _run(app_state, "set-default", "abc") == 0
        assert await app_state.store.get_option(OPT_DEFAULT_ID) == "abc"
        assert await _run(app_state, "get-default") == 0
        assert "Default informer ID: abc" in capsys.readouterr().out


class TestCacheCommands:
    async def test_refresh_and_clear(self, app_state: AppState) -> None:
        await app_state.store.update_option(OPT_API_KEY, "abc123")
        key = cache_key_for("abc123")
        with respx.mock:
            route = respx.get(API_URL).mock(
                return_value=httpx.Response(200, json=[{"informer_id": "x"}])
            )
            assert await _run(app_state, "refresh") == 0
            assert route.call_count == 1
        assert await app_state.store.get_transient(key) == [{"informer_id": "x"}]

        assert await _run(app_state, "clear-cache") == 0
        assert await app_state.store.get_transient(key) is None


def test_subprocess_round_trip(tmp_path: Path, subprocess_env: dict[str, str]) -> None:
    env = {**subprocess_env, "METEOPROG__CACHE__DB_PATH": str(tmp_path / "a" / "store.db")}

    def run(*argv: str) -> subprocess.CompletedProcess[str]:
        return subprocess.run(
            [sys.executable, "-m", "meteoprog_informers.cli", *argv],
            capture_output=True,
            text=True,
            timeout=30,
            env=env,
        )

    assert run("set-default", "abc").returncode == 0
    result = run("get-default")
    assert result.returncode == 0
    assert "Default informer ID: abc" in result.stdout
    assert (tmp_path / "a" / "store.db").exists()
