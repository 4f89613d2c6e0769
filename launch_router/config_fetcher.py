import asyncio, json, logging
import aiohttp
from pydantic import ValidationError
from .outcomes import Completed, Failed, FetchOutcome, RateLimited, RemoteUrlPayload
from .settings import DEFAULT_RESOLVER_CONFIG, ResolverConfig
from . import utils

log = logging.getLogger(__name__)

# Exceptions aiohttp may raise for DNS failures, refused connections and timeouts.
TRANSPORT_EXCEPTIONS = (aiohttp.ClientError, asyncio.TimeoutError, OSError)


class ConfigFetcher:
    """
    Single-shot client for the remote configuration endpoint.

    - One GET per call, no retries (retries are user-initiated, see NavigationResolver)
    - Never raises for network or payload problems: every failure becomes a Failed outcome
    - 429 is reported as RateLimited so the caller can word it differently
    """

    def __init__(self, session: aiohttp.ClientSession, config: ResolverConfig | None = None):
        self.session = session
        self.config = config or DEFAULT_RESOLVER_CONFIG

    async def fetch(self) -> FetchOutcome:
        """
        Ask the configuration endpoint for a redirect destination.

        Returns:
            Completed(destination) on 2xx (destination None when absent or empty),
            RateLimited on 429, Failed(ErrorDetail) otherwise.
        """
        endpoint = self.config.endpoint_url
        if not utils.looks_like_url(endpoint):
            log.error("Configured endpoint is not a URL: %r", endpoint)
            return Failed(utils.invalid_configuration_error())

        headers = {"Accept": self.config.accept_header}
        timeout = aiohttp.ClientTimeout(total=self.config.fetch_timeout_s)

        try:
            async with self.session.get(endpoint, headers=headers, timeout=timeout) as resp:
                status = getattr(resp, "status", None)
                if not isinstance(status, int):
                    return Failed(utils.invalid_response_error())

                if status == utils.RATE_LIMIT_STATUS:
                    log.warning("Configuration endpoint is rate limiting (%s)", utils.RATE_LIMIT_ERROR)
                    return RateLimited()

                if not utils.is_success_status(status):
                    log.warning("Configuration endpoint answered HTTP %s", status)
                    return Failed(utils.http_status_error(status))

                body = await resp.read()
        except TRANSPORT_EXCEPTIONS as e:
            log.warning("Configuration fetch failed: %s", type(e).__name__)
            return Failed(utils.transport_error(e))

        outcome = self._parse(body)
        log.info("Configuration fetched: %s", outcome)
        return outcome

    def _parse(self, body: bytes) -> FetchOutcome:
        """
        Decode {"url": ...}. Only a body that is not a JSON object is a failure;
        a missing, null, empty or non-string url means no redirect.
        """
        try:
            data = json.loads(body)
        except (ValueError, RecursionError) as e:
            # JSONDecodeError and UnicodeDecodeError are ValueErrors, deep nesting raises RecursionError
            return Failed(utils.parse_error(e))

        if not isinstance(data, dict):
            return Failed(utils.parse_error(f"expected a JSON object, got {type(data).__name__}"))

        try:
            payload = RemoteUrlPayload.model_validate(data)
        except ValidationError as e:
            return Failed(utils.parse_error(e))

        return Completed(destination=payload.url or None)
