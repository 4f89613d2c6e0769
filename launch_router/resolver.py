import logging
from typing import Callable, Protocol
import aiohttp
from .config_fetcher import TRANSPORT_EXCEPTIONS
from .navigation import InitialScreen, NavigationState, PrimaryInterface
from .outcomes import FetchOutcome, Pending
from .settings import DEFAULT_RESOLVER_CONFIG, ResolverConfig
from . import policy, utils

log = logging.getLogger(__name__)

StateListener = Callable[[NavigationState], None]


class OutcomeSource(Protocol):
    async def fetch(self) -> FetchOutcome:
        """Fetch the remote configuration once."""


class NavigationResolver:
    """
    Owns the current NavigationState and drives one load cycle at a time.

    A cycle: InitialScreen -> configuration fetch -> (optional destination
    HEAD check) -> PrimaryInterface | BrowserContent | FailureMessage.

    Each cycle gets an increasing id. Results are applied only while their
    cycle is still the newest, so a slow superseded cycle can never
    overwrite the state of a later one.
    """

    def __init__(
        self,
        fetcher: OutcomeSource,
        session: aiohttp.ClientSession,
        config: ResolverConfig | None = None,
    ):
        self.fetcher = fetcher
        self.session = session
        self.config = config or DEFAULT_RESOLVER_CONFIG

        self._state: NavigationState = InitialScreen()
        self._last_outcome: FetchOutcome = Pending()
        self._cycle = 0
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def last_outcome(self) -> FetchOutcome:
        return self._last_outcome

    @property
    def cycle(self) -> int:
        return self._cycle

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Call listener with every new state. Returns a function that
        removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def begin_load(self) -> NavigationState:
        """
        Start a new cycle: reset to InitialScreen, fetch, apply the outcome.

        Returns the state once this cycle is done (or the newer cycle's
        state, if this one got superseded while waiting).
        """
        self._cycle += 1
        cycle = self._cycle
        self._last_outcome = Pending()
        self._set_state(InitialScreen(), cycle)

        outcome = await self.fetcher.fetch()
        await self.on_outcome(outcome, cycle)
        return self._state

    async def retry(self) -> NavigationState:
        """User-triggered retry. No backoff and no attempt limit."""
        log.info("Retry requested after cycle %s", self._cycle)
        return await self.begin_load()

    async def on_outcome(self, outcome: FetchOutcome, cycle: int | None = None) -> None:
        """
        Apply a fetch outcome for `cycle` (the current cycle when omitted).

        A cycle settles once: outcomes arriving after it reached a terminal
        state are dropped, as are outcomes of superseded cycles.
        """
        if cycle is None:
            cycle = self._cycle
        if self._is_stale(cycle):
            log.debug("Dropping outcome of superseded cycle %s: %s", cycle, outcome)
            return
        if self._state.terminal:
            log.debug("Cycle %s already settled on %s, dropping %s", cycle, self._state.tag, outcome)
            return

        self._last_outcome = outcome

        destination = policy.destination_to_validate(outcome)
        if destination is not None:
            await self._validate_destination(destination, cycle)
            return

        state = policy.state_for_outcome(outcome, self.config)
        if state is not None:
            self._set_state(state, cycle)

    async def _validate_destination(self, destination: str, cycle: int) -> None:
        """
        HEAD the destination. Anything but a 2xx means the local interface;
        errors here are logged and never shown to the user.
        """
        if not utils.looks_like_url(destination):
            log.info("Destination is not a URL, staying local: %r", destination)
            self._set_state(PrimaryInterface(), cycle)
            return

        timeout = aiohttp.ClientTimeout(total=self.config.validation_timeout_s)
        status = None
        try:
            async with self.session.head(destination, timeout=timeout) as resp:
                status = resp.status
        except (*TRANSPORT_EXCEPTIONS, ValueError) as e:
            log.info("Destination unreachable (%s), staying local", type(e).__name__)

        if status is not None and not utils.is_success_status(status):
            log.info("Destination answered HTTP %s, staying local", status)

        self._set_state(policy.state_for_validation(destination, status), cycle)

    def _is_stale(self, cycle: int) -> bool:
        return cycle != self._cycle

    def _set_state(self, state: NavigationState, cycle: int) -> None:
        if self._is_stale(cycle):
            log.debug("Cycle %s superseded by %s, not applying %s", cycle, self._cycle, state.tag)
            return
        if state.terminal and self._state.terminal:
            log.debug("Cycle %s already settled on %s, not applying %s", cycle, self._state.tag, state.tag)
            return

        self._state = state
        log.info("Cycle %s -> %s", cycle, state.tag)
        for listener in list(self._listeners):
            listener(state)
