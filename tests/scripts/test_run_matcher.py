"""Tests for the matcher entry point script."""

import asyncio
import json

import pytest

from twinarb.exceptions import ConfigError


def test_script_imports():
    from scripts import run_matcher

    assert hasattr(run_matcher, "main")
    assert hasattr(run_matcher, "build_parser")


def test_parser_defaults_come_from_settings():
    from config.settings import settings
    from scripts.run_matcher import build_parser

    args = build_parser().parse_args([])
    assert args.refresh == settings.MATCHER_REFRESH_SECONDS
    assert args.threshold == settings.MATCHER_THRESHOLD
    assert args.market == settings.MARKET_ADDRESS
    assert args.once is False


def test_parser_rejects_unknown_sizing():
    from scripts.run_matcher import build_parser

    with pytest.raises(SystemExit):
        build_parser().parse_args(["--sizing", "median"])


@pytest.fixture
def snapshot(tmp_path):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps({
        "balances": {"A": 1000, "B": 1000},
        "orders": [
            {"id": "1", "buyToken": "A", "sellToken": "B", "buyAmount": 100, "sellAmount": 50},
            {"id": "2", "buyToken": "B", "sellToken": "A", "buyAmount": 30, "sellAmount": 80},
        ],
    }))
    return path


@pytest.mark.asyncio
async def test_run_once(snapshot):
    from scripts.run_matcher import build_parser, run

    args = build_parser().parse_args([
        "--snapshot", str(snapshot), "--once", "--sizing", "min", "--threshold", "0"])
    assert await run(args) == 0


@pytest.mark.asyncio
async def test_run_until_stopped(snapshot):
    from scripts.run_matcher import build_parser, run

    args = build_parser().parse_args(["--snapshot", str(snapshot), "--refresh", "0.01"])
    stop_event = asyncio.Event()
    task = asyncio.create_task(run(args, stop_event))
    await asyncio.sleep(0.05)
    stop_event.set()
    assert await asyncio.wait_for(task, timeout=2.0) == 0


@pytest.mark.asyncio
async def test_run_rejects_bad_market(snapshot):
    from scripts.run_matcher import build_parser, run

    args = build_parser().parse_args(["--snapshot", str(snapshot), "--market", "0x12"])
    with pytest.raises(ConfigError):
        await run(args)
