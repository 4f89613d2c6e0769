import aiohttp
from .config_fetcher import ConfigFetcher
from .logger import setup_logger
from .navigation import NavigationState
from .resolver import NavigationResolver
from .settings import DEFAULT_RESOLVER_CONFIG, ResolverConfig


class RemoteLaunch:
    """
    Wires the launch flow for an application start.

    - Owns a single aiohttp session per context manager (__aenter__/__aexit__)
    - Builds the ConfigFetcher and NavigationResolver on that session
    - Sets up console logging at the configured level
    """

    def __init__(self, config: ResolverConfig | None = None):
        self.config = config or DEFAULT_RESOLVER_CONFIG

        self._session: aiohttp.ClientSession | None = None
        self.fetcher: ConfigFetcher | None = None
        self.resolver: NavigationResolver | None = None

    async def __aenter__(self):
        setup_logger("launch_router", level=self.config.level)

        self._session = aiohttp.ClientSession()
        self.fetcher = ConfigFetcher(self._session, self.config)
        self.resolver = NavigationResolver(self.fetcher, self._session, self.config)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if self._session:
            await self._session.close()
        self._session = None

    async def start(self) -> NavigationState:
        if self.resolver is None:
            raise RuntimeError("RemoteLaunch must be entered with 'async with' before start()")
        return await self.resolver.begin_load()
