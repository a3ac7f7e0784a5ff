"""Shared test data and helpers."""

import re
from pathlib import Path

FIXTURES_DIR = Path(__file__).parent / "fixtures"

GATEWAY = "http://fritz.box"
SID = "9a0e3b1c0d5f7e21"

LOGIN_URL = re.compile(r"^http://fritz\.box/login_sid\.lua")
COMMAND_URL = re.compile(r"^http://fritz\.box/webservices/homeautoswitch\.lua\?")

SESSION_INFO = (
    "<?xml version=\"1.0\" encoding=\"utf-8\"?>"
    "<SessionInfo><SID>{sid}</SID><Challenge>{challenge}</Challenge>"
    "<BlockTime>{block_time}</BlockTime><Rights></Rights></SessionInfo>"
)


def session_info(sid: str, challenge: str = "1234567z", block_time: int = 0) -> str:
    return SESSION_INFO.format(sid=sid, challenge=challenge, block_time=block_time)


def load_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


def requested(mock_api, command: str | None = None) -> list:
    """Return the URLs requested so far, optionally only for one switchcmd."""
    urls = []
    for (method, url), calls in mock_api.requests.items():
        if url.path != "/webservices/homeautoswitch.lua":
            continue
        if command is None or url.query.get("switchcmd") == command:
            urls.extend([url] * len(calls))
    return urls
