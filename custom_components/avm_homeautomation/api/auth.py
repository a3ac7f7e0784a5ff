"""Session handling for the AHA interface."""
from __future__ import annotations

import asyncio
import hashlib
import logging
from typing import Any

import aiohttp
from yarl import URL

from .base_api import (
    HomeAutomationAuthError,
    HomeAutomationInvalidCredentialsError,
    HomeAutomationNotConnectedError,
    UnrecognizedValueError,
)
from .codec import parse_xml

_LOGGER = logging.getLogger(__name__)

DEFAULT_HOST = "http://fritz.box"
DEFAULT_TIMEOUT = 10

LOGIN_PATH = "login_sid.lua"
INVALID_SID = "0000000000000000"


def compute_response(challenge: str, password: str) -> str:
    """
    Answer a login challenge.

    The gateway expects "<challenge>-<md5>" where the MD5 is taken over the
    UTF-16LE encoding of "<challenge>-<password>".
    """
    digest = hashlib.md5(f"{challenge}-{password}".encode("utf-16-le")).hexdigest()
    return f"{challenge}-{digest}"


def normalize_host(host: str | None) -> URL:
    """Return the base URL of the gateway, always ending with a slash."""
    url = URL(host or DEFAULT_HOST)
    if not url.is_absolute():
        url = URL(f"http://{host}")
    if not url.path.endswith("/"):
        url = url.with_path(url.path + "/")
    return url


# --- HOME AUTOMATION AUTH ----------------------------------------------------

class HomeAutomationAuth:
    """Owns the session id and performs the challenge/response login."""

    def __init__(
        self,
        session: aiohttp.ClientSession | None,
        host: str | None,
        username: str,
        password: str,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._session = session
        self._own_session = False
        self._closed = False
        self.base_url = normalize_host(host)
        self.username = username
        self._password = password
        self.timeout = timeout
        self._sid: str | None = None
        self._lock = asyncio.Lock()

    @property
    def session(self) -> aiohttp.ClientSession:
        """Return the HTTP session, creating one on first use."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._own_session = True
        return self._session

    @property
    def sid(self) -> str | None:
        return self._sid

    @property
    def connected(self) -> bool:
        return self._sid is not None and not self._closed

    def get_sid(self) -> str:
        """Return the session id or fail when there is no usable session."""
        if self._closed:
            raise HomeAutomationNotConnectedError("Client has been closed")
        if self._sid is None:
            raise HomeAutomationNotConnectedError("Not logged in to the gateway")
        return self._sid


    # --- LOGIN -----------------------------------------------------------------

    async def async_login(self) -> str:
        """Run the login handshake and adopt the resulting session id."""
        if self._closed:
            raise HomeAutomationNotConnectedError("Client has been closed")

        async with self._lock:
            self._sid = await self._async_handshake()
            _LOGGER.debug("Logged in to %s as %s", self.base_url, self.username)
            return self._sid

    async def async_ensure_login(self) -> str:
        """Log in unless a session is already held."""
        if self._sid is not None:
            return self.get_sid()

        async with self._lock:
            if self._sid is None:
                self._sid = await self._async_handshake()
        return self.get_sid()

    async def _async_handshake(self) -> str:
        info = await self._async_session_info()
        sid = info.get("SID") or INVALID_SID
        if sid != INVALID_SID:
            return sid

        challenge = info.get("Challenge")
        if not challenge:
            raise HomeAutomationAuthError("Login answer carries no challenge")

        info = await self._async_session_info(
            username=self.username,
            response=compute_response(challenge, self._password),
        )
        sid = info.get("SID") or INVALID_SID
        if sid == INVALID_SID:
            raise HomeAutomationInvalidCredentialsError(
                f"Login rejected for user {self.username!r} "
                f"(block time {info.get('BlockTime') or 0}s)"
            )
        return sid

    async def _async_session_info(self, **params: str) -> dict[str, Any]:
        """Fetch and parse the SessionInfo document of the login resource."""
        url = self.base_url.join(URL(LOGIN_PATH))
        if params:
            url = url.with_query(params)

        try:
            async with self.session.get(
                url, timeout=aiohttp.ClientTimeout(total=self.timeout)
            ) as response:
                if response.status >= 400:
                    raise HomeAutomationAuthError(
                        f"Login request failed with HTTP {response.status}"
                    )
                text = await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as err:
            _LOGGER.error("Cannot reach gateway at %s: %s", self.base_url, err)
            raise HomeAutomationAuthError(f"Cannot connect to gateway: {err!s}") from err

        try:
            document = parse_xml(text)
        except UnrecognizedValueError as err:
            raise HomeAutomationAuthError("Malformed login answer") from err

        info = document.get("SessionInfo") if isinstance(document, dict) else None
        if not isinstance(info, dict):
            raise HomeAutomationAuthError("Login answer carries no SessionInfo")
        return info


    # --- LOGOUT / CLOSE --------------------------------------------------------

    async def async_logout(self) -> None:
        """End the session on the gateway and forget the session id."""
        sid = self.get_sid()
        async with self._lock:
            await self._async_session_info(logout="1", sid=sid)
            self._sid = None

    def invalidate(self) -> None:
        """Forget the session id so the next login starts from scratch."""
        self._sid = None

    async def async_close(self) -> None:
        """Forget the session and release the HTTP session if owned."""
        self._sid = None
        self._closed = True
        if self._own_session and self._session is not None:
            await self._session.close()
            self._session = None
