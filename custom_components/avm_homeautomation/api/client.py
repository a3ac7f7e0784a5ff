"""Main API Client for AVM Home Automation."""
import aiohttp

from .auth import DEFAULT_TIMEOUT, HomeAutomationAuth
from .blind_api import BlindApi
from .device_api import DeviceApi
from .light_api import LightApi
from .subscription_api import SubscriptionApi
from .switch_api import SwitchApi
from .template_api import TemplateApi
from .thermostat_api import ThermostatApi
from .trigger_api import TriggerApi


class HomeAutomationClient:
    """
    Main container for the AHA sub-clients.
    All sub-clients share one HomeAutomationAuth and therefore one session id.

    Example:
        client = HomeAutomationClient(session, "http://fritz.box", "user", "secret")
        await client.async_login()
        ains = await client.switches.get_switch_list()
        await client.lights.set_level(ains[0], 128)
    """

    def __init__(
        self,
        session: aiohttp.ClientSession | None,
        host: str | None,
        username: str,
        password: str,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the client and its sub-components."""
        self.auth = HomeAutomationAuth(session, host, username, password, timeout)

        # Instantiate sub-clients
        self.switches = SwitchApi(self.auth)
        self.devices = DeviceApi(self.auth)
        self.thermostats = ThermostatApi(self.auth)
        self.lights = LightApi(self.auth)
        self.blinds = BlindApi(self.auth)
        self.templates = TemplateApi(self.auth)
        self.triggers = TriggerApi(self.auth)
        self.subscriptions = SubscriptionApi(self.auth)

    @property
    def connected(self) -> bool:
        return self.auth.connected


    # --- SESSION ---------------------------------------------------------------

    async def async_login(self) -> str:
        """Log in, replacing any previous session. Returns the session id."""
        return await self.auth.async_login()

    async def async_logout(self) -> None:
        await self.auth.async_logout()

    async def async_close(self) -> None:
        """Dispose of the client; further commands raise a not-connected error."""
        await self.auth.async_close()

    async def __aenter__(self) -> "HomeAutomationClient":
        await self.auth.async_ensure_login()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.async_close()
