"""Base class for AVM Home Automation sub-clients."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

import aiohttp
from yarl import URL

if TYPE_CHECKING:
    from .auth import HomeAutomationAuth

_LOGGER = logging.getLogger(__name__)

COMMAND_PATH = "webservices/homeautoswitch.lua"

# Fritz!OS sometimes answers 200 with an embedded protocol failure as body
SERVER_ERROR_MARKER = "HTTP/1.0 500"


# --- HOME AUTOMATION ERRORS --------------------------------------------------

class HomeAutomationError(Exception):
    """Base class for all errors raised by the client."""


class HomeAutomationAuthError(HomeAutomationError):
    """The login handshake could not produce a usable session."""


class HomeAutomationInvalidCredentialsError(HomeAutomationAuthError):
    """The gateway rejected the username/password pair."""


class HomeAutomationNotConnectedError(HomeAutomationError):
    """A command was issued without an established session."""


class HomeAutomationValidationError(HomeAutomationError, ValueError):
    """A caller supplied argument is outside its documented range."""


class UnrecognizedValueError(HomeAutomationError, ValueError):
    """The gateway answered with a value outside the documented wire domain."""

    def __init__(self, value: Any, kind: str = "value") -> None:
        self.value = value
        self.kind = kind
        super().__init__(f"Unrecognized {kind}: {value!r}")


class HomeAutomationApiError(HomeAutomationError):
    """
    Exception raised for transport level errors.
    Carries the HTTP status and a short description of the failure.
    """
    def __init__(
        self,
        status: int,
        title: str,
        detail: str,
        code: Optional[str] = None,
    ):
        self.status = status
        self.title = title
        self.detail = detail
        self.code = code

        msg = f"[{status}] {title}: {detail}"
        if code:
            msg += f" (Code: {code})"

        super().__init__(msg)


class HomeAutomationServerError(HomeAutomationApiError):
    """The gateway reported an internal server error inside the body."""

    def __init__(self, detail: str) -> None:
        super().__init__(500, "Internal Server Error", detail, code="SERVER_ERROR")


class HomeAutomationConnectionError(HomeAutomationApiError):
    """The gateway could not be reached."""

    def __init__(self, detail: str) -> None:
        super().__init__(0, "Connection Error", detail, code="CONNECTION_ERROR")


# --- COMMAND -----------------------------------------------------------------

@dataclass(frozen=True)
class Command:
    """A single gateway command: name, optional AIN and ordered parameters."""

    name: str
    ain: str | None = None
    params: tuple[tuple[str, str], ...] = ()

    def query(self, sid: str) -> list[tuple[str, str]]:
        """Return the query pairs in wire order."""
        pairs = [("switchcmd", self.name), ("sid", sid)]
        if self.ain is not None:
            pairs.append(("ain", self.ain))
        pairs.extend(self.params)
        return pairs


def validate_range(name: str, value: int | float, low: int | float, high: int | float) -> None:
    """Reject values outside [low, high] before anything is sent."""
    if isinstance(value, bool) or not low <= value <= high:
        raise HomeAutomationValidationError(f"{name} must be between {low} and {high}, got {value!r}")


def validate_name(name: str, max_length: int = 40) -> None:
    if len(name) > max_length:
        raise HomeAutomationValidationError(
            f"name must be at most {max_length} characters, got {len(name)}"
        )


def build_command_url(base_url: URL, command: Command, sid: str) -> URL:
    """Build the full request URL for a command."""
    return base_url.join(URL(COMMAND_PATH)).with_query(command.query(sid))


# --- HOME AUTOMATION BASE API ------------------------------------------------

class HomeAutomationBaseApi:
    """Base class dispatching commands with the shared session."""

    def __init__(self, auth: HomeAutomationAuth) -> None:
        """Initialize the base API."""
        self._auth = auth


    # --- REQUEST ---------------------------------------------------------------

    async def _request(self, command: Command) -> str:
        """Execute a command and return the body without trailing whitespace."""
        sid = self._auth.get_sid()
        url = build_command_url(self._auth.base_url, command, sid)
        _LOGGER.debug("Dispatching %s (ain=%s, params=%s)", command.name, command.ain, command.params)

        try:
            async with self._auth.session.get(
                url, timeout=aiohttp.ClientTimeout(total=self._auth.timeout)
            ) as response:
                text = await response.text()

                # The marker wins over the outer HTTP status
                if text.startswith(SERVER_ERROR_MARKER):
                    _LOGGER.warning("Gateway returned an embedded server error for %s", command.name)
                    raise HomeAutomationServerError(
                        f"Command {command.name} failed: {text.splitlines()[0]}"
                    )

                # --- ERROR HANDLING (4xx, 5xx) ---
                if response.status >= 400:
                    preview = text[:200] + "..." if len(text) > 200 else text
                    raise HomeAutomationApiError(
                        status=response.status,
                        title=f"HTTP Error {response.status}",
                        detail=f"Command {command.name} failed: {preview}",
                        code="HTTP_ERROR",
                    )

        except (aiohttp.ClientError, asyncio.TimeoutError) as err:
            _LOGGER.error("Gateway connection error on %s: %s", command.name, err)
            raise HomeAutomationConnectionError(
                f"Cannot connect to gateway: {err!s}"
            ) from err

        return text.rstrip()
