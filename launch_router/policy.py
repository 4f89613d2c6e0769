"""
Policy module: decides where a finished configuration fetch sends the user.

The logic is:
- explicit
- side-effect free
- easily auditable

Network work (the destination HEAD check) stays in the resolver; these
functions only map results to navigation states.
"""

from launch_router.navigation import BrowserContent, FailureMessage, NavigationState, PrimaryInterface
from launch_router.outcomes import Completed, Failed, FetchOutcome, Pending, RateLimited
from launch_router.settings import DEFAULT_RESOLVER_CONFIG, ResolverConfig
from launch_router import utils


def destination_to_validate(outcome: FetchOutcome) -> str | None:
    """The destination that needs a reachability check, if this outcome carries one."""
    if isinstance(outcome, Completed) and outcome.has_destination:
        return outcome.destination
    return None


def state_for_outcome(outcome: FetchOutcome, config: ResolverConfig | None = None) -> NavigationState | None:
    """
    Navigation state an outcome leads to without further network work.

    Returns None when there is no immediate transition: Pending, or a
    Completed outcome whose destination still has to be checked.
    """
    cfg = config or DEFAULT_RESOLVER_CONFIG

    if isinstance(outcome, Pending):
        return None

    if isinstance(outcome, Completed):
        if outcome.has_destination:
            return None
        return PrimaryInterface()

    # Throttling gets its own wording instead of the generic HTTP error
    if isinstance(outcome, RateLimited):
        return FailureMessage(cfg.rate_limited_message)

    if isinstance(outcome, Failed):
        return FailureMessage(outcome.cause.message)

    raise TypeError(f"Unknown fetch outcome: {outcome!r}")


def state_for_validation(destination: str, status: int | None) -> NavigationState:
    """
    Result of the destination HEAD check. status is None when the request
    never produced a response (bad URL, transport error, timeout).

    A broken destination falls back to the local interface, never to an error.
    """
    if status is not None and utils.is_success_status(status):
        return BrowserContent(destination)
    return PrimaryInterface()
